"""Lifecycle status tags for events, specials, announcements and menu items.

Rules are applied independently and their tags unioned, so a record can be e.g.
both ``published`` and ``scheduled``:

1. publishAt/expiresAt present: future publishAt -> scheduled, otherwise a past
   expiresAt -> expired. isPublished present -> published / draft.
2. startDateTime set: ended -> past, otherwise not yet started -> scheduled.
   Plain instant ordering, so events running past midnight need no special case.
3. startDate/endDate set: compared as civil YYYY-MM-DD strings in the company
   zone against today's civil date, never as instants.
4. isActive present: a record with a startDate is active only on that civil day;
   anything else follows the flag.
5. isAvailable present -> available / unavailable.
6. Nothing fired -> inactive.
"""
from dataclasses import dataclass
from datetime import date, datetime

from taproom.schemas import StatusTag
from taproom.services.civil_time import CivilDate, InvalidCivilInput, as_instant, utc_now
from taproom.services.date_codecs import CivilDateCodec, civil_date_codec


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()

DayValue = CivilDate | date | datetime


class InvalidTimeWindow(ValueError):
    def __init__(self, start: object, end: object) -> None:
        super().__init__(f"End {end} must be after start {start}")
        self.start = start
        self.end = end


@dataclass(frozen=True)
class TemporalEntity:
    """View over a domain record. UNSET means the record has no such field at all."""

    is_active: bool | None | _Unset = UNSET
    is_available: bool | None | _Unset = UNSET
    is_published: bool | None | _Unset = UNSET
    publish_at: datetime | None | _Unset = UNSET
    expires_at: datetime | None | _Unset = UNSET
    start_date_time: datetime | None | _Unset = UNSET
    end_date_time: datetime | None | _Unset = UNSET
    start_date: DayValue | None | _Unset = UNSET
    end_date: DayValue | None | _Unset = UNSET

    def has(self, name: str) -> bool:
        return getattr(self, name) is not UNSET


def coerce_day_value(value: str | DayValue | None) -> DayValue | None:
    """``YYYY-MM-DD`` -> CivilDate, ISO-8601 instant string -> UTC datetime."""
    if value is None or isinstance(value, (CivilDate, date)):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return CivilDate.parse(text)
    except InvalidCivilInput:
        pass
    try:
        return as_instant(datetime.fromisoformat(text))
    except ValueError as exc:
        raise InvalidCivilInput(value, "YYYY-MM-DD or an ISO-8601 instant") from exc


def validate_window(
    start: DayValue | None,
    end: DayValue | None,
    tz: str | None = None,
    codec: CivilDateCodec | None = None,
) -> None:
    """Reject end-before-start before a record is stored or classified.

    Instants must be strictly ordered; an event from 22:00 to 02:00 the next
    day is fine. Civil dates may be equal (a one-day special).

    Passing ``tz`` treats both sides as day-granularity values: stored instants
    are read as civil dates in that zone, so a special saved as two identical
    midnight instants is a valid one-day window.
    """
    if start is None or end is None:
        return
    if tz is not None:
        codec = codec or civil_date_codec
        if _civil_day(start, tz, codec) > _civil_day(end, tz, codec):
            raise InvalidTimeWindow(start, end)
        return
    if isinstance(start, datetime) and isinstance(end, datetime):
        if as_instant(end) <= as_instant(start):
            raise InvalidTimeWindow(start, end)
        return
    if isinstance(start, datetime) or isinstance(end, datetime):
        raise TypeError("Cannot compare an instant with a civil date")
    if _civil(start) > _civil(end):
        raise InvalidTimeWindow(start, end)


def _civil(value: CivilDate | date) -> CivilDate:
    return value if isinstance(value, CivilDate) else CivilDate.from_date(value)


def _civil_day(value: DayValue, tz: str, codec: CivilDateCodec) -> CivilDate:
    # datetime subclasses date, so instants must be caught first.
    if isinstance(value, datetime):
        return codec.decode(value, tz)
    return _civil(value)


class LifecycleStatusClassifier:
    def __init__(self, codec: CivilDateCodec | None = None) -> None:
        self.codec = codec or civil_date_codec

    def civil_date_string(self, value: DayValue, tz: str) -> str:
        if isinstance(value, datetime):
            return self.codec.decode_string(value, tz)
        return str(_civil(value))

    def classify(self, entity: TemporalEntity, tz: str, now: datetime | None = None) -> list[StatusTag]:
        now = as_instant(now or utc_now())
        today_str = str(self.codec.today(tz, now))
        tags: list[StatusTag] = []

        def emit(tag: StatusTag) -> None:
            if tag not in tags:
                tags.append(tag)

        if entity.has("publish_at") or entity.has("expires_at"):
            if entity.publish_at and as_instant(entity.publish_at) > now:
                emit(StatusTag.scheduled)
            elif entity.expires_at and as_instant(entity.expires_at) < now:
                emit(StatusTag.expired)
        if entity.has("is_published"):
            emit(StatusTag.published if entity.is_published else StatusTag.draft)

        if entity.start_date_time:
            if entity.end_date_time and as_instant(entity.end_date_time) < now:
                emit(StatusTag.past)
            elif as_instant(entity.start_date_time) > now:
                emit(StatusTag.scheduled)

        start_str = self.civil_date_string(entity.start_date, tz) if entity.start_date else None
        end_str = self.civil_date_string(entity.end_date, tz) if entity.end_date else None
        if end_str and end_str < today_str:
            emit(StatusTag.past)
        elif start_str and start_str > today_str:
            emit(StatusTag.scheduled)

        if entity.has("is_active"):
            if start_str:
                on_its_day = bool(entity.is_active) and start_str == today_str
                emit(StatusTag.active if on_its_day else StatusTag.inactive)
            else:
                emit(StatusTag.active if entity.is_active else StatusTag.inactive)

        if entity.has("is_available"):
            emit(StatusTag.available if entity.is_available else StatusTag.unavailable)

        return tags or [StatusTag.inactive]


classifier = LifecycleStatusClassifier()


def classify(entity: TemporalEntity, tz: str, now: datetime | None = None) -> list[StatusTag]:
    return classifier.classify(entity, tz, now)
