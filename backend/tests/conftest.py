from datetime import datetime

import pytest
import pytz

from appointment_parser.pipeline.graph import ParsePipeline
from appointment_parser.tools.departments import DepartmentVocabulary
from appointment_parser.tools.entity_extractor import EntityExtractor
from appointment_parser.tools.time_parser import TemporalResolver, HeuristicBackend, NaturalLanguageBackend


TIMEZONE = "Asia/Kolkata"
DEPARTMENTS = ["dentist", "cardiologist", "neurologist", "orthopedic", "dermatologist", "ent"]

# 2026-10-19 is a Monday
MONDAY_MORNING = pytz.timezone(TIMEZONE).localize(datetime(2026, 10, 19, 9, 30))


@pytest.fixture
def vocabulary():
    return DepartmentVocabulary(DEPARTMENTS)


@pytest.fixture
def extractor(vocabulary):
    return EntityExtractor(vocabulary=vocabulary, department_threshold=0.75, date_threshold=0.70)


@pytest.fixture
def resolver():
    """Heuristic-only resolver pinned to Monday 2026-10-19."""
    return TemporalResolver(
        timezone=TIMEZONE,
        backends=[HeuristicBackend(TIMEZONE)],
        clock=lambda: MONDAY_MORNING
    )


@pytest.fixture
def pipeline(extractor, resolver):
    return ParsePipeline(extractor=extractor, resolver=resolver)


@pytest.fixture
def natural_resolver():
    """Default backend order (dateparser, then heuristics) pinned to Monday 2026-10-19."""
    return TemporalResolver(
        timezone=TIMEZONE,
        backends=[NaturalLanguageBackend(TIMEZONE), HeuristicBackend(TIMEZONE)],
        clock=lambda: MONDAY_MORNING
    )


@pytest.fixture
def natural_pipeline(extractor, natural_resolver):
    return ParsePipeline(extractor=extractor, resolver=natural_resolver)
