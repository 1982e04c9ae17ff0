"""Company clock helpers: all 'today/tomorrow' logic uses company time (e.g. America/Denver)."""
from datetime import datetime
from zoneinfo import ZoneInfo

from taproom.services.civil_time import CivilDate, utc_now
from taproom.services.date_codecs import civil_date_codec
from taproom.services.timezone_config import TimezoneConfig


def company_timezone_default() -> str:
    """Configured default zone, for code paths without database access."""
    return TimezoneConfig().resolve_default()


def company_tz(tz: str | None = None) -> ZoneInfo:
    return ZoneInfo(tz or company_timezone_default())


def company_now(tz: str | None = None) -> datetime:
    """Current datetime in company timezone (timezone-aware)."""
    return utc_now().astimezone(company_tz(tz))


def company_today(tz: str | None = None) -> CivilDate:
    """Current civil date in company timezone, correct even when the server runs in UTC."""
    return civil_date_codec.today(tz or company_timezone_default(), company_now(tz))


def company_tomorrow(tz: str | None = None) -> CivilDate:
    return company_today(tz).shift(1)


def company_weekday(tz: str | None = None) -> str:
    return civil_date_codec.weekday(tz or company_timezone_default(), company_now(tz))
