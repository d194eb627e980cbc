"""LangGraph appointment parsing pipeline."""

from .graph import parse_pipeline, parse_text, create_parse_graph, ParsePipeline
from .state import PipelineState, create_initial_state

__all__ = [
    "parse_pipeline",
    "parse_text",
    "create_parse_graph",
    "ParsePipeline",
    "PipelineState",
    "create_initial_state"
]
