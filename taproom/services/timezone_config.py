"""Resolve the company timezone from the settings store.

Resolution never fails: a missing, unreadable or implausible "timezone" setting
degrades to the configured default, and the only trace of that is a warning in
the logs.
"""
import logging
import re
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from taproom.config import FALLBACK_TIMEZONE, get_settings

logger = logging.getLogger(__name__)

TIMEZONE_SETTING_KEY = "timezone"
_IANA_NAME_RE = re.compile(r"^(UTC|[A-Za-z][A-Za-z0-9_+\-]*(/[A-Za-z0-9_+\-]+)+)\Z")


class SettingsStore(Protocol):
    async def get(self, key: str) -> str | None: ...


def is_valid_timezone(name: str | None) -> bool:
    """True if ``name`` looks like an IANA zone id and tzdata knows it."""
    if not name or not _IANA_NAME_RE.match(name):
        return False
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        # OSError: tzdata directories such as "America/Indiana" pass the pattern.
        return False
    return True


class TimezoneConfig:
    def __init__(self, store: SettingsStore | None = None, default: str | None = None) -> None:
        default = default or get_settings().default_timezone
        if not is_valid_timezone(default):
            logger.warning("invalid_default_timezone", extra={"timezone": default, "fallback": FALLBACK_TIMEZONE})
            default = FALLBACK_TIMEZONE
        self.store = store
        self.default = default

    def resolve_default(self) -> str:
        """Zone to use where the settings store cannot be reached at all."""
        return self.default

    async def resolve(self) -> str:
        if self.store is None:
            return self.default
        try:
            value = await self.store.get(TIMEZONE_SETTING_KEY)
        except Exception as exc:  # noqa: BLE001
            logger.warning("timezone_setting_unreadable", extra={"error": str(exc), "fallback": self.default})
            return self.default
        if not value:
            logger.warning("timezone_setting_missing", extra={"fallback": self.default})
            return self.default
        # Values written by the settings form may arrive JSON-quoted.
        candidate = value.strip().strip('"')
        if not is_valid_timezone(candidate):
            logger.warning("timezone_setting_invalid", extra={"timezone": value, "fallback": self.default})
            return self.default
        return candidate
