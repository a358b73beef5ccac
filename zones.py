# zones.py
import re
from datetime import timedelta, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from errors import ConfigurationError

# UTC-5, UTC+05:30, UTC+5.5, GMT-3, +0530, -05:00
_OFFSET_RE = re.compile(
    r"^(?:UTC|GMT)?\s*(?P<sign>[+-])\s*(?P<hours>\d{1,2})"
    r"(?:(?::?(?P<minutes>\d{2}))|(?:\.(?P<fraction>\d+)))?$",
    re.IGNORECASE,
)
_UTC_NAMES = {"utc", "z", "gmt", "etc/utc", "etc/gmt"}
_MAX_OFFSET = timedelta(hours=14)
_PROBE_ZONE = "America/New_York"


def _fixed_offset(match: re.Match) -> timezone:
    hours = int(match.group("hours"))
    minutes = 0
    if match.group("minutes"):
        minutes = int(match.group("minutes"))
        if minutes >= 60:
            raise ConfigurationError(f"Invalid offset minutes: {match.string!r}")
    elif match.group("fraction"):
        minutes = round(float("0." + match.group("fraction")) * 60)

    delta = timedelta(hours=hours, minutes=minutes)
    if delta > _MAX_OFFSET:
        raise ConfigurationError(f"Offset out of range: {match.string!r}")
    if match.group("sign") == "-":
        delta = -delta
    if not delta:
        return timezone.utc
    return timezone(delta)


@lru_cache(maxsize=256)
def _resolve_name(name: str) -> tzinfo:
    stripped = name.strip()
    if not stripped:
        raise ConfigurationError("Timezone identifier is empty")
    if stripped.lower() in _UTC_NAMES:
        return timezone.utc

    match = _OFFSET_RE.match(stripped)
    if match:
        return _fixed_offset(match)

    try:
        return ZoneInfo(stripped)
    except (ZoneInfoNotFoundError, ValueError, OSError) as err:
        raise ConfigurationError(f"Unknown timezone: {name!r}") from err


def resolve_zone(zone) -> tzinfo:
    """
    Turn a zone identifier into a tzinfo.

    Accepts IANA names, "UTC", fixed offsets such as "UTC-5", "UTC+05:30",
    "UTC+5.5" or "-0500", and tzinfo objects (returned unchanged).
    """
    if isinstance(zone, tzinfo):
        return zone
    if not isinstance(zone, str):
        raise ConfigurationError(f"Timezone must be a string or tzinfo, got {type(zone).__name__}")
    return _resolve_name(zone)


def zone_name(zone) -> str:
    tz = resolve_zone(zone)
    key = getattr(tz, "key", None)
    if key:
        return key
    return str(tz)


def check_tz_database() -> None:
    """Fail fast when neither the system zoneinfo files nor tzdata are installed."""
    try:
        ZoneInfo(_PROBE_ZONE)
    except ZoneInfoNotFoundError as err:
        raise ConfigurationError(
            "IANA timezone database is unavailable; install the 'tzdata' package"
        ) from err
