from typing import TypedDict, Optional

from ..schemas import ExtractedEntities, NormalizedEntity, ParseResult


class PipelineState(TypedDict):
    raw_text: str
    clean_text: str
    entities: Optional[ExtractedEntities]
    normalized: Optional[NormalizedEntity]
    entities_confidence: float
    normalization_confidence: float
    result: Optional[ParseResult]


def create_initial_state(raw_text: Optional[str]) -> PipelineState:
    return PipelineState(
        raw_text=raw_text or "",
        clean_text="",
        entities=None,
        normalized=None,
        entities_confidence=0.0,
        normalization_confidence=0.0,
        result=None
    )
