"""Project absolute instants onto a named zone's wall clock.

This is the only place that touches real timezone/DST rules; they come from the
IANA database through ``zoneinfo`` (system tzdata, or the ``tzdata`` package).
"""
from datetime import datetime
from zoneinfo import ZoneInfo

from taproom.services.civil_time import CivilDate, CivilProjection, as_instant


class CivilClockProjector:
    def zone(self, tz: str) -> ZoneInfo:
        return ZoneInfo(tz)

    def project(self, instant: datetime, tz: str) -> CivilProjection:
        local = as_instant(instant).astimezone(self.zone(tz))
        return CivilProjection(
            date=CivilDate(local.year, local.month, local.day),
            hour=local.hour,
            minute=local.minute,
            second=local.second,
        )


projector = CivilClockProjector()
