from typing import Optional, List

from .confidence import clamp01
from ..schemas import ExtractedEntities, NormalizedEntity, AppointmentIntent, ParseResult
from ..utils.config import settings
from ..utils.logger import logger

class ValidationResult:
    def __init__(self, is_valid: bool, error_type: Optional[str] = None):
        self.is_valid = is_valid
        self.error_type = error_type

class GuardrailDecision:
    MISSING_DEPARTMENT_PENALTY = 0.2
    MISSING_DATE_PENALTY = 0.4
    SUCCESS_MESSAGE = "Appointment parsed successfully."

    def __init__(self, department_threshold: float = settings.department_accept_threshold):
        self.department_threshold = department_threshold

    def validate_department(self, entities: ExtractedEntities) -> ValidationResult:
        if entities.department is None:
            return ValidationResult(is_valid=False, error_type="department")

        if entities.department_confidence < self.department_threshold:
            logger.warning(
                f"Department '{entities.department}' below acceptance threshold: "
                f"{entities.department_confidence:.3f} < {self.department_threshold}"
            )
            return ValidationResult(is_valid=False, error_type="department")

        return ValidationResult(is_valid=True)

    def validate_date(self, entities: ExtractedEntities) -> ValidationResult:
        if not entities.date_phrase:
            return ValidationResult(is_valid=False, error_type="date")
        return ValidationResult(is_valid=True)

    def validate_time(self, normalized: NormalizedEntity) -> ValidationResult:
        if not normalized.time:
            return ValidationResult(is_valid=False, error_type="time")
        return ValidationResult(is_valid=True)

    def overall_confidence(self, entities_confidence: float, normalization_confidence: float, department_ok: bool, date_ok: bool) -> float:
        confidence = clamp01(0.7 * entities_confidence + 0.3 * normalization_confidence)

        if not department_ok:
            confidence *= self.MISSING_DEPARTMENT_PENALTY
        if not date_ok:
            confidence *= self.MISSING_DATE_PENALTY

        return confidence

    def decide(
        self,
        raw_text: Optional[str],
        entities: ExtractedEntities,
        normalized: NormalizedEntity,
        entities_confidence: float,
        normalization_confidence: float
    ) -> ParseResult:
        checks = [
            self.validate_department(entities),
            self.validate_date(entities),
            self.validate_time(normalized),
        ]
        department_ok, date_ok, time_ok = (check.is_valid for check in checks)

        confidence = self.overall_confidence(entities_confidence, normalization_confidence, department_ok, date_ok)

        appointment = None
        if department_ok and date_ok and time_ok:
            status = "ok"
            message = self.SUCCESS_MESSAGE
            appointment = AppointmentIntent(
                department=entities.department.capitalize(),
                date=normalized.date,
                time=normalized.time,
                timezone=normalized.timezone
            )
            logger.info(f"Accepted: {appointment.department} on {appointment.date} at {appointment.time}")
        else:
            status = "needs_clarification"
            issues: List[str] = [check.error_type for check in checks if not check.is_valid]
            message = f"Ambiguous {', '.join(issues)}."
            logger.info(f"Needs clarification: {', '.join(issues)}")

        return ParseResult(
            raw_text=raw_text or "",
            overall_confidence=confidence,
            entities=entities,
            entities_confidence=entities_confidence,
            normalized=normalized,
            normalization_confidence=normalization_confidence,
            appointment=appointment,
            status=status,
            message=message
        )


guardrail = GuardrailDecision()
