import pytz
from datetime import datetime, tzinfo

from ..utils.logger import logger


class TimezoneManager:
    @staticmethod
    def get_zone(name: str) -> tzinfo:
        try:
            return pytz.timezone(name)
        except pytz.UnknownTimeZoneError:
            logger.error(f"Unknown timezone configured: {name}")
            raise ValueError(f"Unknown timezone: {name}")

    @staticmethod
    def convert_time(dt: datetime, to_tz: str) -> datetime:
        to_zone = TimezoneManager.get_zone(to_tz)

        if dt.tzinfo is None:
            dt = to_zone.localize(dt)

        return dt.astimezone(to_zone)
