"""Utility modules for the appointment request parser."""

from .config import settings
from .logger import logger, setup_logger

__all__ = ["settings", "logger", "setup_logger"]
