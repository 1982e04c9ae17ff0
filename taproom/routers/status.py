from fastapi import APIRouter, Depends

from taproom.deps import get_classifier, get_company_timezone
from taproom.errors import AppError
from taproom.schemas import ErrorCode, StatusOut, TemporalEntityIn
from taproom.services.civil_time import InvalidCivilInput, utc_now
from taproom.services.status_classifier import (
    InvalidTimeWindow,
    LifecycleStatusClassifier,
    TemporalEntity,
    coerce_day_value,
    validate_window,
)

router = APIRouter(prefix="/status", tags=["status"])


def to_entity(payload: TemporalEntityIn) -> TemporalEntity:
    """Carry over only the keys the client actually sent."""
    fields = {}
    for name in payload.model_fields_set:
        value = getattr(payload, name)
        if name in ("start_date", "end_date"):
            value = coerce_day_value(value)
        fields[name] = value
    return TemporalEntity(**fields)


@router.post("/classify", response_model=StatusOut)
async def classify_entity(
    payload: TemporalEntityIn,
    tz: str = Depends(get_company_timezone),
    classifier: LifecycleStatusClassifier = Depends(get_classifier),
) -> StatusOut:
    try:
        entity = to_entity(payload)
    except InvalidCivilInput as exc:
        raise AppError(
            ErrorCode.invalid_input,
            f"Please enter dates in the format {exc.expected}.",
            str(exc),
            422,
        ) from exc

    try:
        validate_window(entity.start_date_time or None, entity.end_date_time or None)
        validate_window(entity.start_date or None, entity.end_date or None, tz, classifier.codec)
    except InvalidTimeWindow as exc:
        raise AppError(
            ErrorCode.invalid_time_window,
            "End must be after start.",
            str(exc),
            422,
        ) from exc

    now = utc_now()
    return StatusOut(
        timezone=tz,
        today=str(classifier.codec.today(tz, now)),
        statuses=classifier.classify(entity, tz, now),
    )
