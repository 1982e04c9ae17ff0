"""Codecs between civil values and instants in the company timezone.

Day-granularity records (specials) store the instant of civil midnight in the
zone; reading them back always goes through the zone as well, which keeps a
"today" special from showing up as yesterday or tomorrow when the server runs
in UTC.
"""
import re
from datetime import date, datetime

from taproom.services.civil_time import (
    CivilDate,
    CivilDateTime,
    InvalidCivilInput,
    as_instant,
    utc_now,
)
from taproom.services.clock_projector import CivilClockProjector, projector as default_projector
from taproom.services.instant_solver import (
    DATE_OFFSET_HOURS,
    DATETIME_OFFSET_HOURS,
    DEFAULT_STEP_MINUTES,
    InstantSolver,
)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_EMBEDDED_DATE_RE = re.compile(r"([0-9]{4}-[0-9]{2}-[0-9]{2})")


class CivilDateCodec:
    def __init__(
        self,
        projector: CivilClockProjector | None = None,
        step_minutes: int = DEFAULT_STEP_MINUTES,
    ) -> None:
        self.projector = projector or default_projector
        self.solver = InstantSolver(self.projector, offset_hours=DATE_OFFSET_HOURS, step_minutes=step_minutes)

    def encode(self, civil_date: CivilDate, tz: str) -> datetime:
        """Instant of civil midnight starting ``civil_date`` in ``tz``."""
        return self.solver.solve(CivilDateTime.at_midnight(civil_date), tz)

    def decode(self, instant: datetime, tz: str) -> CivilDate:
        return self.projector.project(instant, tz).date

    def encode_string(self, value: str, tz: str) -> datetime:
        return self.encode(CivilDate.parse(value), tz)

    def decode_string(self, instant: datetime, tz: str) -> str:
        return str(self.decode(instant, tz))

    def today(self, tz: str, now: datetime | None = None) -> CivilDate:
        return self.decode(now or utc_now(), tz)

    def tomorrow(self, tz: str, now: datetime | None = None) -> CivilDate:
        return self.today(tz, now).shift(1)

    def weekday(self, tz: str, now: datetime | None = None) -> str:
        return WEEKDAYS[self.today(tz, now).to_date().weekday()]

    def same_day(self, first: datetime, second: datetime, tz: str) -> bool:
        return self.decode(first, tz) == self.decode(second, tz)


class CivilDateTimeCodec:
    def __init__(
        self,
        projector: CivilClockProjector | None = None,
        step_minutes: int = DEFAULT_STEP_MINUTES,
    ) -> None:
        self.projector = projector or default_projector
        self.solver = InstantSolver(self.projector, offset_hours=DATETIME_OFFSET_HOURS, step_minutes=step_minutes)

    def encode(self, value: CivilDateTime, tz: str) -> datetime:
        return self.solver.solve(value, tz)

    def decode(self, instant: datetime, tz: str) -> CivilDateTime:
        return self.projector.project(instant, tz).civil

    def encode_string(self, value: str, tz: str) -> datetime:
        """``"2025-06-01T18:30"`` typed in ``tz`` -> UTC instant."""
        return self.encode(CivilDateTime.parse(value), tz)

    def decode_string(self, instant: datetime, tz: str) -> str:
        """UTC instant -> ``"YYYY-MM-DDTHH:mm"`` as read in ``tz``."""
        return str(self.decode(instant, tz))


civil_date_codec = CivilDateCodec()
civil_datetime_codec = CivilDateTimeCodec()


def parse_any_date(
    value: str | date | datetime | None,
    tz: str,
    codec: CivilDateCodec | None = None,
) -> datetime | None:
    """Interpret a loosely typed date value as civil midnight in ``tz``.

    Accepts ``YYYY-MM-DD`` strings, ISO-8601 instants (naive ones are UTC),
    ``datetime`` and ``date`` objects. Instants are first reduced to the civil
    date they fall on in ``tz``. Returns None for empty or unparsable input.
    """
    codec = codec or civil_date_codec
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return codec.encode(codec.decode(value, tz), tz)
    if isinstance(value, date):
        return codec.encode(CivilDate.from_date(value), tz)
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return codec.encode(CivilDate.parse(text), tz)
    except InvalidCivilInput:
        pass
    try:
        instant = as_instant(datetime.fromisoformat(text))
    except ValueError:
        embedded = _EMBEDDED_DATE_RE.search(text)
        if embedded is None:
            return None
        try:
            return codec.encode(CivilDate.parse(embedded.group(1)), tz)
        except InvalidCivilInput:
            return None
    return codec.encode(codec.decode(instant, tz), tz)
