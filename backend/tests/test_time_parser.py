from datetime import date, datetime

import pytest
import pytz

from appointment_parser.schemas import ExtractedEntities, NormalizedEntity
from appointment_parser.tools import time_parser
from appointment_parser.tools.time_parser import (
    TemporalResolver,
    HeuristicBackend,
    NaturalLanguageBackend,
    DateTimeBackend,
    resolve_date_cue,
)
from appointment_parser.utils.time_utils import TimeFormat

from conftest import TIMEZONE, MONDAY_MORNING


MONDAY = date(2026, 10, 19)


def test_next_weekday_on_that_weekday_skips_a_week():
    assert resolve_date_cue("next monday", MONDAY) == date(2026, 10, 26)


def test_bare_weekday_on_that_weekday_is_today():
    assert resolve_date_cue("monday", MONDAY) == MONDAY


@pytest.mark.parametrize("phrase, expected", [
    ("today", date(2026, 10, 19)),
    ("tomorrow", date(2026, 10, 20)),
    ("day after tomorrow", date(2026, 10, 21)),
    ("next friday", date(2026, 10, 23)),
    ("friday", date(2026, 10, 23)),
    ("next sunday", date(2026, 10, 25)),
    ("sunday", date(2026, 10, 25)),
    ("in 10 days", date(2026, 10, 29)),
    ("in 1 day", date(2026, 10, 20)),
])
def test_resolve_date_cue(phrase, expected):
    assert resolve_date_cue(phrase, MONDAY) == expected


def test_resolve_date_cue_without_cue():
    assert resolve_date_cue("whenever suits", MONDAY) is None


@pytest.mark.parametrize("phrase, expected", [
    ("3pm", "15:00"),
    ("12am", "00:00"),
    ("12pm", "12:00"),
    ("3:30pm", "15:30"),
    ("3:30 pm", "15:30"),
    ("9.45", "09:45"),
    ("15:00", "15:00"),
    ("5", "05:00"),
    ("25", "23:00"),
    ("7:75", "07:59"),
])
def test_parse_to_24hr(phrase, expected):
    assert TimeFormat.parse_to_24hr(phrase) == expected


@pytest.mark.parametrize("phrase", ["", "noon", "3 oclock"])
def test_parse_to_24hr_rejects_non_times(phrase):
    assert TimeFormat.parse_to_24hr(phrase) is None


def test_heuristic_resolution_of_phrases(resolver):
    entities = ExtractedEntities(date_phrase="next monday", time_phrase="3pm")
    normalized = resolver.resolve("dentist next monday 3pm", entities)
    assert normalized == NormalizedEntity(date="2026-10-26", time="15:00", timezone=TIMEZONE)


def test_heuristic_rescans_full_text(resolver):
    normalized = resolver.resolve("see you tomorrow at 4pm", ExtractedEntities())
    assert normalized.date == "2026-10-20"
    assert normalized.time == "16:00"
    assert normalized.timezone == TIMEZONE


def test_time_only_still_sets_timezone(resolver):
    normalized = resolver.resolve("dentist at 5", ExtractedEntities(time_phrase="5"))
    assert normalized.date is None
    assert normalized.time == "05:00"
    assert normalized.timezone == TIMEZONE


def test_nothing_resolved_leaves_timezone_unset(resolver):
    normalized = resolver.resolve("", ExtractedEntities())
    assert normalized == NormalizedEntity()

    normalized = resolver.resolve("book a dentist", ExtractedEntities(department="dentist"))
    assert normalized.timezone is None


class FailingBackend(DateTimeBackend):
    name = "failing"

    def resolve(self, reference_text, entities, now):
        raise RuntimeError("parser exploded")


class FixedBackend(DateTimeBackend):
    name = "fixed"

    def resolve(self, reference_text, entities, now):
        return NormalizedEntity(date="2030-01-01", time="08:00", timezone=self.timezone)


class EmptyBackend(DateTimeBackend):
    name = "empty"

    def resolve(self, reference_text, entities, now):
        return NormalizedEntity()


def make_resolver(*backends):
    return TemporalResolver(timezone=TIMEZONE, backends=backends, clock=lambda: MONDAY_MORNING)


def test_failing_primary_falls_back_to_heuristics():
    resolver = make_resolver(FailingBackend(TIMEZONE), HeuristicBackend(TIMEZONE))
    normalized = resolver.resolve("tomorrow 3pm", ExtractedEntities(date_phrase="tomorrow", time_phrase="3pm"))
    assert normalized.date == "2026-10-20"
    assert normalized.time == "15:00"


def test_non_empty_primary_always_wins():
    resolver = make_resolver(FixedBackend(TIMEZONE), HeuristicBackend(TIMEZONE))
    normalized = resolver.resolve("tomorrow 3pm", ExtractedEntities(date_phrase="tomorrow", time_phrase="3pm"))
    assert normalized.date == "2030-01-01"
    assert normalized.time == "08:00"


def test_empty_primary_falls_through():
    resolver = make_resolver(EmptyBackend(TIMEZONE), HeuristicBackend(TIMEZONE))
    normalized = resolver.resolve("today", ExtractedEntities(date_phrase="today"))
    assert normalized.date == "2026-10-19"


def test_invalid_timezone_fails_fast():
    with pytest.raises(ValueError):
        TemporalResolver(timezone="Mars/Olympus_Mons", backends=[])


@pytest.mark.parametrize("entities, reference, expected", [
    (ExtractedEntities(date_phrase="next friday", time_phrase="3pm"), "x", "next friday 3pm"),
    (ExtractedEntities(date_phrase="tomorrow"), "x", "tomorrow"),
    (ExtractedEntities(time_phrase="3pm"), "dentist at 3pm", "dentist at 3pm"),
])
def test_natural_language_query(entities, reference, expected):
    assert NaturalLanguageBackend.build_query(reference, entities) == expected


def test_composed_query_is_parsed_as_one_datetime(monkeypatch):
    utc_result = pytz.utc.localize(datetime(2026, 10, 23, 9, 30, 42, 1234))
    queries = []

    def fake_parse(query, **kwargs):
        queries.append(query)
        return utc_result

    monkeypatch.setattr(time_parser.dateparser, "parse", fake_parse)

    backend = NaturalLanguageBackend(TIMEZONE)
    normalized = backend.resolve("", ExtractedEntities(date_phrase="friday", time_phrase="3pm"), MONDAY_MORNING)

    assert queries == ["friday 3pm"]
    assert normalized == NormalizedEntity(date="2026-10-23", time="15:00", timezone=TIMEZONE)


def test_hit_contradicting_time_phrase_is_discarded(monkeypatch):
    # dateparser substituting the current clock time for the stated one
    monkeypatch.setattr(time_parser.dateparser, "parse", lambda *args, **kwargs: MONDAY_MORNING)

    backend = NaturalLanguageBackend(TIMEZONE)
    normalized = backend.resolve("", ExtractedEntities(date_phrase="today", time_phrase="12am"), MONDAY_MORNING)

    assert normalized.is_empty()


def test_clock_filled_time_is_not_reported(monkeypatch):
    tomorrow = pytz.timezone(TIMEZONE).localize(datetime(2026, 10, 20, 9, 30))
    monkeypatch.setattr(time_parser.dateparser, "parse", lambda *args, **kwargs: tomorrow)

    backend = NaturalLanguageBackend(TIMEZONE)
    normalized = backend.resolve("dentist tomorrow", ExtractedEntities(date_phrase="tomorrow"), MONDAY_MORNING)

    assert normalized == NormalizedEntity(date="2026-10-20", time=None, timezone=TIMEZONE)


def test_full_text_is_searched_without_date_phrase(monkeypatch):
    found = pytz.timezone(TIMEZONE).localize(datetime(2026, 11, 2, 16, 0))
    monkeypatch.setattr(time_parser, "search_dates", lambda *args, **kwargs: [("2 nov 4pm", found)])

    backend = NaturalLanguageBackend(TIMEZONE)
    normalized = backend.resolve("dentist 2 nov 4pm", ExtractedEntities(time_phrase="4pm"), MONDAY_MORNING)

    assert normalized == NormalizedEntity(date="2026-11-02", time="16:00", timezone=TIMEZONE)


def test_natural_language_backend_without_candidates(monkeypatch):
    monkeypatch.setattr(time_parser, "search_dates", lambda *args, **kwargs: None)

    backend = NaturalLanguageBackend(TIMEZONE)
    normalized = backend.resolve("dentist please", ExtractedEntities(), MONDAY_MORNING)

    assert normalized.is_empty()


# dateparser itself, relative to the pinned Monday 09:30

@pytest.mark.parametrize("date_phrase, time_phrase, expected", [
    ("monday", "10am", NormalizedEntity(date="2026-10-26", time="10:00", timezone=TIMEZONE)),
    ("tomorrow", "11am", NormalizedEntity(date="2026-10-20", time="11:00", timezone=TIMEZONE)),
    ("today", "12am", NormalizedEntity(date="2026-10-19", time="00:00", timezone=TIMEZONE)),
])
def test_dateparser_resolves_composed_phrase(date_phrase, time_phrase, expected):
    backend = NaturalLanguageBackend(TIMEZONE)
    entities = ExtractedEntities(date_phrase=date_phrase, time_phrase=time_phrase)

    assert backend.resolve("", entities, MONDAY_MORNING) == expected


@pytest.mark.parametrize("date_phrase, time_phrase, expected_date, expected_time", [
    ("next friday", "3pm", "2026-10-23", "15:00"),
    ("next monday", "10am", "2026-10-26", "10:00"),
    ("tomorrow", "11am", "2026-10-20", "11:00"),
    ("today", "12am", "2026-10-19", "00:00"),
])
def test_default_backend_order(natural_resolver, date_phrase, time_phrase, expected_date, expected_time):
    entities = ExtractedEntities(date_phrase=date_phrase, time_phrase=time_phrase)
    normalized = natural_resolver.resolve(f"dentist {date_phrase} {time_phrase}", entities)

    assert normalized.date == expected_date
    assert normalized.time == expected_time
    assert normalized.timezone == TIMEZONE
