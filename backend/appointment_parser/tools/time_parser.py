from abc import ABC, abstractmethod
from datetime import datetime, date, timedelta
from typing import Optional, Callable, List, Iterable
from dateutil import relativedelta
import dateparser
from dateparser.search import search_dates
import re

from .timezone import TimezoneManager
from ..schemas import ExtractedEntities, NormalizedEntity
from ..utils.config import settings
from ..utils.logger import logger
from ..utils.time_utils import TimeFormat


WEEKDAYS = {
    'monday': relativedelta.MO,
    'tuesday': relativedelta.TU,
    'wednesday': relativedelta.WE,
    'thursday': relativedelta.TH,
    'friday': relativedelta.FR,
    'saturday': relativedelta.SA,
    'sunday': relativedelta.SU
}

WEEKDAY_ALTERNATION = "|".join(WEEKDAYS)
NEXT_WEEKDAY_PATTERN = re.compile(rf'\bnext\s+({WEEKDAY_ALTERNATION})\b')
WEEKDAY_PATTERN = re.compile(rf'\b({WEEKDAY_ALTERNATION})\b')
IN_DAYS_PATTERN = re.compile(r'\bin\s+(\d{1,3})\s+days?\b')

DATE_FORMAT = '%Y-%m-%d'
TIME_FORMAT = '%H:%M'


def resolve_date_cue(text: str, today: date) -> Optional[date]:
    """
    Resolve a relative date cue against today's date.

    "next <weekday>" always lands in 1..7 days and never on today, while a bare
    "<weekday>" allows today. The asymmetry is intentional.

    Args:
        text: Date phrase or whole request text
        today: Current date in the target timezone

    Returns:
        Resolved date, or None if the text carries no recognised cue
    """
    text_lower = (text or "").lower()

    if re.search(r'\bday after tomorrow\b', text_lower):
        return today + timedelta(days=2)

    next_match = NEXT_WEEKDAY_PATTERN.search(text_lower)
    if next_match:
        target = WEEKDAYS[next_match.group(1)]
        return today + relativedelta.relativedelta(days=+1, weekday=target)

    if re.search(r'\btomorrow\b', text_lower):
        return today + timedelta(days=1)

    if re.search(r'\btoday\b', text_lower):
        return today

    weekday_match = WEEKDAY_PATTERN.search(text_lower)
    if weekday_match:
        target = WEEKDAYS[weekday_match.group(1)]
        return today + relativedelta.relativedelta(weekday=target)

    days_match = IN_DAYS_PATTERN.search(text_lower)
    if days_match:
        return today + timedelta(days=int(days_match.group(1)))

    return None


class DateTimeBackend(ABC):
    name = "backend"

    def __init__(self, timezone: str):
        self.timezone = timezone

    @abstractmethod
    def resolve(self, reference_text: str, entities: ExtractedEntities, now: datetime) -> NormalizedEntity:
        ...

    def _build(self, resolved_date: Optional[date], resolved_time: Optional[str]) -> NormalizedEntity:
        date_str = resolved_date.strftime(DATE_FORMAT) if resolved_date else None
        has_value = date_str is not None or resolved_time is not None

        return NormalizedEntity(
            date=date_str,
            time=resolved_time,
            timezone=self.timezone if has_value else None
        )


class NaturalLanguageBackend(DateTimeBackend):
    """
    Primary backend: dateparser in the target timezone.

    A composed "<date phrase> <time phrase>" query is parsed as one date-time
    with dateparser.parse; without a date phrase the full text is searched with
    search_dates. dateparser fills a missing time from the relative base, so a
    time is only reported when the request actually carries one, and a hit
    whose time disagrees with that phrase is discarded.
    """

    name = "dateparser"

    @staticmethod
    def build_query(reference_text: str, entities: ExtractedEntities) -> str:
        if entities.date_phrase:
            if entities.time_phrase:
                return f"{entities.date_phrase} {entities.time_phrase}"
            return entities.date_phrase
        return reference_text or ""

    def parser_settings(self, now: datetime) -> dict:
        return {
            'TIMEZONE': self.timezone,
            'TO_TIMEZONE': self.timezone,
            'RETURN_AS_TIMEZONE_AWARE': True,
            'RELATIVE_BASE': now.replace(tzinfo=None),
            'PREFER_DATES_FROM': 'future'
        }

    def _parse(self, query: str, entities: ExtractedEntities, now: datetime) -> Optional[datetime]:
        if entities.date_phrase:
            return dateparser.parse(query, languages=['en'], settings=self.parser_settings(now))

        results = search_dates(query, languages=['en'], settings=self.parser_settings(now))
        if not results:
            return None

        matched_text, parsed = results[0]
        logger.info(f"dateparser matched '{matched_text}' in the full text")
        return parsed

    def resolve(self, reference_text: str, entities: ExtractedEntities, now: datetime) -> NormalizedEntity:
        query = self.build_query(reference_text, entities).strip()
        if not query:
            return NormalizedEntity()

        parsed = self._parse(query, entities, now)
        if parsed is None:
            logger.info(f"dateparser found nothing in '{query}'")
            return NormalizedEntity()

        localized = TimezoneManager.convert_time(parsed, self.timezone)
        localized = localized.replace(second=0, microsecond=0)
        resolved_time = localized.strftime(TIME_FORMAT)

        if entities.time_phrase:
            stated_time = TimeFormat.parse_to_24hr(entities.time_phrase)
        else:
            stated_time = TimeFormat.extract_from_message(query)

        if stated_time is None:
            resolved_time = None
        elif stated_time != resolved_time:
            logger.warning(f"dateparser read '{query}' as {localized.isoformat()}, expected time {stated_time}")
            return NormalizedEntity()

        logger.info(f"dateparser resolved '{query}' -> {localized.isoformat()}")
        return self._build(localized.date(), resolved_time)


class HeuristicBackend(DateTimeBackend):
    """Fallback backend: deterministic rules over the extracted phrases."""

    name = "heuristic"

    def resolve(self, reference_text: str, entities: ExtractedEntities, now: datetime) -> NormalizedEntity:
        today = now.date()

        resolved_date = None
        if entities.date_phrase:
            resolved_date = resolve_date_cue(entities.date_phrase, today)

        if resolved_date is None and reference_text:
            resolved_date = resolve_date_cue(reference_text, today)

        resolved_time = None
        if entities.time_phrase:
            resolved_time = TimeFormat.parse_to_24hr(entities.time_phrase)
        elif reference_text:
            resolved_time = TimeFormat.extract_from_message(reference_text)

        return self._build(resolved_date, resolved_time)


class TemporalResolver:
    """
    Turns extracted date/time phrases into an ISO date, 24-hour time and timezone.

    Backends are tried in priority order. A backend that raises is logged and
    skipped; the first non-empty result wins.
    """

    def __init__(
        self,
        timezone: str = settings.default_timezone,
        backends: Optional[Iterable[DateTimeBackend]] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.timezone = timezone
        self.zone = TimezoneManager.get_zone(timezone)

        if backends is None:
            backends = default_backends(timezone)
        self.backends: List[DateTimeBackend] = list(backends)
        self.clock = clock

    def now(self) -> datetime:
        current = self.clock() if self.clock else datetime.now(self.zone)
        return TimezoneManager.convert_time(current, self.timezone)

    def resolve(self, reference_text: str, entities: Optional[ExtractedEntities]) -> NormalizedEntity:
        if entities is None:
            entities = ExtractedEntities()

        if not (reference_text or "").strip() and not entities.date_phrase and not entities.time_phrase:
            return NormalizedEntity()

        now = self.now()

        for backend in self.backends:
            try:
                normalized = backend.resolve(reference_text, entities, now)
            except Exception as e:
                logger.warning(f"{backend.name} backend failed, falling back: {e}")
                continue

            if not normalized.is_empty():
                logger.info(f"Resolved by {backend.name}: date={normalized.date} time={normalized.time}")
                return normalized

        logger.info("No date or time could be resolved")
        return NormalizedEntity()


def default_backends(timezone: str) -> List[DateTimeBackend]:
    backends: List[DateTimeBackend] = []
    if settings.use_natural_language_parser:
        backends.append(NaturalLanguageBackend(timezone))
    backends.append(HeuristicBackend(timezone))
    return backends


temporal_resolver = TemporalResolver()
