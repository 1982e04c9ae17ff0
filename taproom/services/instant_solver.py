"""Find the UTC instant a civil date/time denotes in a given IANA zone.

There is no closed-form inverse of "format this instant in zone X", so the
solver runs a bounded offset search: read the civil fields as if they were UTC,
shift by each candidate UTC offset and keep the candidates that project back
onto exactly the requested wall-clock fields.

Outcomes:

* exact: one candidate matches.
* ambiguous: the civil time happens twice (fall-back overlap). The standard-time
  reading wins, i.e. the most negative offset / the later instant. Candidates
  are scanned from the most negative offset upwards, so this is also the first
  match found.
* nonexistent: the civil time is skipped (spring-forward gap). The offset in
  effect just before the transition is applied (PEP 495 ``fold=0``); for
  America/Denver that is UTC-7. The result is plausible, not unique.
"""
import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from taproom.services.civil_time import CivilDateTime
from taproom.services.clock_projector import CivilClockProjector, projector as default_projector

logger = logging.getLogger(__name__)

# Whole-hour bounds of the primary search window.
DATETIME_OFFSET_HOURS = (-8, 8)
DATE_OFFSET_HOURS = (-12, 14)
DEFAULT_STEP_MINUTES = 15

# Eastern, Central, Mountain, Pacific, Alaska, Hawaii standard offsets.
COMMON_NORTH_AMERICAN_OFFSETS = (-5, -6, -7, -8, -9, -10)


class ResolutionKind(str, enum.Enum):
    exact = "exact"
    ambiguous = "ambiguous"
    nonexistent = "nonexistent"


@dataclass(frozen=True)
class Resolution:
    instant: datetime
    kind: ResolutionKind
    utc_offset: timedelta
    candidates: tuple[datetime, ...] = ()


class InstantSolver:
    def __init__(
        self,
        projector: CivilClockProjector | None = None,
        offset_hours: tuple[int, int] = DATETIME_OFFSET_HOURS,
        step_minutes: int = DEFAULT_STEP_MINUTES,
        secondary_offsets: tuple[int, ...] = COMMON_NORTH_AMERICAN_OFFSETS,
    ) -> None:
        if step_minutes <= 0:
            raise ValueError("step_minutes must be positive")
        low, high = offset_hours
        if low > high:
            raise ValueError(f"Invalid offset window {offset_hours}")
        self.projector = projector or default_projector
        self.offset_hours = offset_hours
        self.step_minutes = step_minutes
        self.secondary_offsets = secondary_offsets

    def primary_offsets(self) -> list[timedelta]:
        low, high = self.offset_hours
        return [timedelta(minutes=m) for m in range(low * 60, high * 60 + 1, self.step_minutes)]

    def _matching(self, target: CivilDateTime, tz: str, offsets: list[timedelta]) -> list[tuple[timedelta, datetime]]:
        as_utc = target.as_naive_utc()
        found = []
        for offset in offsets:
            candidate = as_utc - offset
            if self.projector.project(candidate, tz).matches(target):
                found.append((offset, candidate))
        return found

    def resolve(self, target: CivilDateTime, tz: str) -> Resolution:
        primary = self.primary_offsets()
        matches = self._matching(target, tz, primary)
        if not matches:
            secondary = [timedelta(hours=h) for h in self.secondary_offsets]
            matches = self._matching(target, tz, [o for o in secondary if o not in primary])

        if matches:
            offset, instant = matches[0]
            candidates = tuple(candidate for _, candidate in matches)
            if len(matches) == 1:
                return Resolution(instant, ResolutionKind.exact, offset, candidates)
            logger.info(
                "ambiguous_civil_time",
                extra={"target": str(target), "timezone": tz, "chosen": instant.isoformat(), "candidates": len(matches)},
            )
            return Resolution(instant, ResolutionKind.ambiguous, offset, candidates)

        return self._fallback(target, tz)

    def _fallback(self, target: CivilDateTime, tz: str) -> Resolution:
        naive_local = target.as_naive_utc().replace(tzinfo=None)
        offset = naive_local.replace(tzinfo=self.projector.zone(tz), fold=0).utcoffset()
        instant = target.as_naive_utc() - offset
        if self.projector.project(instant, tz).matches(target):
            # Zone offset lies outside the search window (e.g. UTC+14).
            return Resolution(instant, ResolutionKind.exact, offset, (instant,))
        logger.warning(
            "nonexistent_civil_time",
            extra={"target": str(target), "timezone": tz, "fallback_offset": str(offset), "instant": instant.isoformat()},
        )
        return Resolution(instant, ResolutionKind.nonexistent, offset, ())

    def solve(self, target: CivilDateTime, tz: str) -> datetime:
        return self.resolve(target, tz).instant
