from fastapi import APIRouter, Depends

from taproom.deps import get_company_timezone, get_date_codec, get_datetime_codec
from taproom.errors import AppError
from taproom.schemas import (
    ClockOut,
    DateConvertIn,
    DateConvertOut,
    DateTimeConvertIn,
    DateTimeConvertOut,
    ErrorCode,
)
from taproom.services.civil_time import CivilDate, CivilDateTime, InvalidCivilInput, as_instant
from taproom.services.date_codecs import CivilDateCodec, CivilDateTimeCodec
from taproom.services.instant_solver import ResolutionKind
from taproom.time_utils import company_now

router = APIRouter(prefix="/time", tags=["time"])


def _exactly_one(first, second, names: str) -> None:
    if (first is None) == (second is None):
        raise AppError(
            ErrorCode.invalid_input,
            "Provide exactly one value to convert.",
            f"Exactly one of {names} is required.",
            422,
        )


def _invalid_input(exc: InvalidCivilInput) -> AppError:
    return AppError(
        ErrorCode.invalid_input,
        f"Please enter a value in the format {exc.expected}.",
        str(exc),
        422,
    )


@router.get("/now", response_model=ClockOut)
async def company_clock(
    tz: str = Depends(get_company_timezone),
    date_codec: CivilDateCodec = Depends(get_date_codec),
    datetime_codec: CivilDateTimeCodec = Depends(get_datetime_codec),
) -> ClockOut:
    now = company_now(tz)
    return ClockOut(
        timezone=tz,
        now=now,
        local_now=datetime_codec.decode_string(now, tz),
        today=str(date_codec.today(tz, now)),
        tomorrow=str(date_codec.tomorrow(tz, now)),
        weekday=date_codec.weekday(tz, now),
    )


@router.post("/convert", response_model=DateTimeConvertOut)
async def convert_datetime(
    payload: DateTimeConvertIn,
    tz: str = Depends(get_company_timezone),
    codec: CivilDateTimeCodec = Depends(get_datetime_codec),
) -> DateTimeConvertOut:
    _exactly_one(payload.local, payload.instant, "local, instant")
    if payload.local is not None:
        try:
            target = CivilDateTime.parse(payload.local)
        except InvalidCivilInput as exc:
            raise _invalid_input(exc) from exc
        resolution = codec.solver.resolve(target, tz)
        return DateTimeConvertOut(
            timezone=tz,
            local=str(target),
            instant=resolution.instant,
            resolution=resolution.kind.value,
        )
    instant = as_instant(payload.instant)
    return DateTimeConvertOut(
        timezone=tz,
        local=codec.decode_string(instant, tz),
        instant=instant,
        resolution=ResolutionKind.exact.value,
    )


@router.post("/date", response_model=DateConvertOut)
async def convert_date(
    payload: DateConvertIn,
    tz: str = Depends(get_company_timezone),
    codec: CivilDateCodec = Depends(get_date_codec),
) -> DateConvertOut:
    _exactly_one(payload.date, payload.instant, "date, instant")
    if payload.date is not None:
        try:
            civil_date = CivilDate.parse(payload.date)
        except InvalidCivilInput as exc:
            raise _invalid_input(exc) from exc
        return DateConvertOut(timezone=tz, date=str(civil_date), instant=codec.encode(civil_date, tz))
    civil_date = codec.decode(payload.instant, tz)
    return DateConvertOut(timezone=tz, date=str(civil_date), instant=codec.encode(civil_date, tz))
