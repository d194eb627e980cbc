import re
from typing import Optional

from ..schemas import ExtractedEntities, NormalizedEntity


ALNUM = re.compile(r'[A-Za-z0-9]')


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def text_quality(raw_text: Optional[str]) -> float:
    """Share of ASCII letters and digits in the raw text: ~1.0 clean, ~0.0 noise."""
    if not raw_text or not raw_text.strip():
        return 0.0
    return len(ALNUM.findall(raw_text)) / len(raw_text)


class ConfidenceScorer:
    """Scores extraction and normalization independently; holds no state."""

    @staticmethod
    def score_entities(entities: Optional[ExtractedEntities], raw_text: Optional[str]) -> float:
        if entities is None:
            return 0.0

        score = 0.0
        if entities.department is not None:
            score += 0.4
        if entities.date_phrase is not None:
            score += 0.3
        if entities.time_phrase is not None:
            score += 0.3

        score *= 0.5 + 0.5 * text_quality(raw_text)
        return clamp01(score)

    @staticmethod
    def score_normalization(normalized: Optional[NormalizedEntity], raw_text: Optional[str]) -> float:
        if normalized is None:
            return 0.0

        score = 0.0
        if normalized.date is not None:
            score += 0.5
        if normalized.time is not None:
            score += 0.4
        if normalized.timezone is not None:
            score += 0.1

        # Midnight without a "12" in the text is most likely a parser default
        if normalized.time == "00:00" and "12" not in (raw_text or ""):
            score *= 0.5

        return clamp01(score)


confidence_scorer = ConfidenceScorer()
