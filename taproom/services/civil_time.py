"""Zone-less civil date/time values and their form wire formats.

A civil value is what a person reads off a wall clock or types into a form. It
never carries a UTC offset; turning one into an absolute instant always needs
an explicit IANA timezone (see instant_solver / date_codecs).

Instants are timezone-aware ``datetime`` objects normalized to UTC.
"""
import re
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Self

_DATE_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})\Z")
_DATETIME_LOCAL_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2})\Z")


class InvalidCivilInput(ValueError):
    """Raised when a civil date / datetime-local wire string is empty or malformed."""

    def __init__(self, value: object, expected: str) -> None:
        super().__init__(f"Invalid civil value {value!r}; expected {expected}")
        self.value = value
        self.expected = expected


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_instant(value: datetime) -> datetime:
    """Normalize to an aware UTC datetime; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(frozen=True, order=True)
class CivilDate:
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        try:
            date(self.year, self.month, self.day)
        except (TypeError, ValueError) as exc:
            raise InvalidCivilInput(f"{self.year}-{self.month}-{self.day}", "a real calendar date") from exc

    @classmethod
    def parse(cls, value: str) -> Self:
        """Parse the ``YYYY-MM-DD`` wire format."""
        match = _DATE_RE.match(value or "")
        if not match:
            raise InvalidCivilInput(value, "YYYY-MM-DD")
        year, month, day = (int(part) for part in match.groups())
        return cls(year, month, day)

    @classmethod
    def from_date(cls, value: date) -> Self:
        return cls(value.year, value.month, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def shift(self, days: int) -> "CivilDate":
        return CivilDate.from_date(self.to_date() + timedelta(days=days))

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True, order=True)
class CivilDateTime:
    """What a ``datetime-local`` form field carries: a civil date plus hour and minute."""

    date: CivilDate
    hour: int = 0
    minute: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise InvalidCivilInput(f"{self.hour:02d}:{self.minute:02d}", "HH:mm within 00:00-23:59")

    @classmethod
    def parse(cls, value: str) -> Self:
        """Parse the ``YYYY-MM-DDTHH:mm`` wire format (no seconds, no offset)."""
        match = _DATETIME_LOCAL_RE.match(value or "")
        if not match:
            raise InvalidCivilInput(value, "YYYY-MM-DDTHH:mm")
        year, month, day, hour, minute = (int(part) for part in match.groups())
        return cls(CivilDate(year, month, day), hour, minute)

    @classmethod
    def at_midnight(cls, civil_date: CivilDate) -> Self:
        return cls(civil_date, 0, 0)

    def as_naive_utc(self) -> datetime:
        """The same wall-clock fields read as if they were already UTC."""
        return datetime(self.date.year, self.date.month, self.date.day, self.hour, self.minute, tzinfo=UTC)

    def __str__(self) -> str:
        return f"{self.date}T{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class CivilProjection:
    """Wall-clock fields an observer in some zone reads for an instant. Never stored."""

    date: CivilDate
    hour: int
    minute: int
    second: int

    @property
    def civil(self) -> CivilDateTime:
        return CivilDateTime(self.date, self.hour, self.minute)

    def matches(self, target: CivilDateTime) -> bool:
        # Targets carry no seconds, so only the minute-level fields take part.
        return self.civil == target
