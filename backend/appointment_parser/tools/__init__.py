"""Parsing stages: normalization, extraction, temporal resolution, scoring and the guardrail."""

from .text_normalizer import TextNormalizer, text_normalizer
from .departments import DepartmentVocabulary, department_vocabulary
from .fuzzy_matcher import levenshtein, similarity, is_plausible_word
from .entity_extractor import EntityExtractor, entity_extractor
from .time_parser import TemporalResolver, NaturalLanguageBackend, HeuristicBackend, temporal_resolver
from .timezone import TimezoneManager
from .confidence import ConfidenceScorer, confidence_scorer
from .guardrail import GuardrailDecision, guardrail

__all__ = [
    "TextNormalizer",
    "text_normalizer",
    "DepartmentVocabulary",
    "department_vocabulary",
    "levenshtein",
    "similarity",
    "is_plausible_word",
    "EntityExtractor",
    "entity_extractor",
    "TemporalResolver",
    "NaturalLanguageBackend",
    "HeuristicBackend",
    "temporal_resolver",
    "TimezoneManager",
    "ConfidenceScorer",
    "confidence_scorer",
    "GuardrailDecision",
    "guardrail"
]
