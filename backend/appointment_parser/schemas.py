from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, Field


ParseStatus = Literal["ok", "needs_clarification"]


class ExtractedEntities(BaseModel):
    model_config = ConfigDict(frozen=True)

    department: Optional[str] = None
    department_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    date_phrase: Optional[str] = None
    time_phrase: Optional[str] = None


class NormalizedEntity(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: Optional[str] = None  # YYYY-MM-DD
    time: Optional[str] = None  # HH:MM, 24-hour
    timezone: Optional[str] = None

    def is_empty(self) -> bool:
        return self.date is None and self.time is None


class AppointmentIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    department: str
    date: Optional[str]
    time: str
    timezone: Optional[str]


class ParseResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_text: str
    overall_confidence: float = Field(ge=0.0, le=1.0)
    entities: ExtractedEntities
    entities_confidence: float = Field(ge=0.0, le=1.0)
    normalized: NormalizedEntity
    normalization_confidence: float = Field(ge=0.0, le=1.0)
    appointment: Optional[AppointmentIntent] = None
    status: ParseStatus
    message: str
