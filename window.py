# window.py
import re
import time as _time
from datetime import date, datetime, time, timedelta, timezone

from config import MAX_YEARS_AHEAD, MIN_EPOCH
from errors import ValidationError
from instants import DayRange, ShiftedInstant, TrueInstant, UtcRange
from zones import resolve_zone

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_LOCAL_DT_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}(:\d{2})?$")


def _seconds(value) -> int:
    if isinstance(value, (TrueInstant, ShiftedInstant)):
        return value.seconds
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Expected an epoch second count, got {value!r}")
    return value


def _as_true(value) -> TrueInstant:
    if isinstance(value, ShiftedInstant):
        raise ValidationError(f"{value!r} is a shifted value; unshift it first")
    return TrueInstant(_seconds(value))


def _aware(seconds: int, tz) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=tz)
    except (OverflowError, OSError, ValueError) as err:
        raise ValidationError(f"Instant out of range: {seconds}") from err


def now_true(clock=None) -> TrueInstant:
    """Current UTC second. `clock` returns float epoch seconds (time.time by default)."""
    clock = clock or _time.time
    return TrueInstant(int(clock()))


def offset_at(instant, zone) -> int:
    """UTC offset of `zone` in seconds at `instant`, DST included."""
    tz = resolve_zone(zone)
    return int(_aware(_seconds(instant), tz).utcoffset().total_seconds())


def shift(instant, zone) -> ShiftedInstant:
    true = _as_true(instant)
    return ShiftedInstant(true.seconds + offset_at(true, zone))


def now_shifted(zone, now=None) -> ShiftedInstant:
    """
    The "local time as epoch seconds" number some platforms hand out.

    Only for comparing against such values; never format it as UTC.
    """
    now = _as_true(now) if now is not None else now_true()
    return shift(now, zone)


def unshift(shifted, zone) -> TrueInstant:
    """
    Recover the true instant behind a shifted value.

    The offset is looked up at the shifted number itself, mirroring how the
    platform produced it. Within one offset-delta of a DST transition the
    result can be off by that delta; use day_range/local_to_true for boundaries.
    """
    if isinstance(shifted, TrueInstant):
        raise ValidationError(f"{shifted!r} is already a true instant")
    seconds = _seconds(shifted)
    return TrueInstant(seconds - offset_at(seconds, zone))


def _years_after(instant: TrueInstant, years: int) -> int:
    dt = instant.to_datetime()
    target_year = min(dt.year + years, 9999)
    try:
        later = dt.replace(year=target_year)
    except ValueError:
        # Feb 29 into a non-leap year
        later = dt.replace(year=target_year, day=28)
    return int(later.timestamp())


def _checked(instant, now) -> datetime:
    true = _as_true(instant)
    now = _as_true(now) if now is not None else now_true()
    upper = _years_after(now, MAX_YEARS_AHEAD)
    if true.seconds < MIN_EPOCH:
        raise ValidationError(f"Instant {true.seconds} is before the minimum {MIN_EPOCH}")
    if true.seconds > upper:
        raise ValidationError(
            f"Instant {true.seconds} is more than {MAX_YEARS_AHEAD} years in the future"
        )
    return _aware(true.seconds, timezone.utc)


def format_utc(instant, now=None) -> str:
    """Render a true instant as 'YYYY-MM-DD HH:MM:SS' in UTC."""
    return _checked(instant, now).strftime("%Y-%m-%d %H:%M:%S")


def format_iso_utc(instant, now=None) -> str:
    return _checked(instant, now).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_date(value) -> date:
    """Strict YYYY-MM-DD calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value.strip()):
        raise ValidationError(f"Expected a YYYY-MM-DD date, got {value!r}")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as err:
        raise ValidationError(f"Invalid calendar date: {value!r}") from err


def parse_local_datetime(value) -> datetime:
    """Strict 'YYYY-MM-DD HH:MM[:SS]' wall time, returned naive."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _LOCAL_DT_RE.match(value.strip()):
        raise ValidationError(f"Expected 'YYYY-MM-DD HH:MM:SS', got {value!r}")
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as err:
        raise ValidationError(f"Invalid local time: {value!r}") from err


def local_date(instant, zone) -> date:
    tz = resolve_zone(zone)
    return _aware(_as_true(instant).seconds, tz).date()


def local_to_true(value, zone) -> TrueInstant:
    """
    Wall time in `zone` to a true instant.

    Repeated wall times (fall back) resolve to the earlier reading; times
    skipped by a spring-forward gap land just after the gap.
    """
    local = parse_local_datetime(value)
    if local.tzinfo is not None:
        return TrueInstant.from_datetime(local)
    tz = resolve_zone(zone)
    try:
        return TrueInstant.from_datetime(local.replace(tzinfo=tz, fold=0))
    except (OverflowError, ValueError) as err:
        raise ValidationError(f"Local time out of range: {value!r}") from err


def _shift_day(day: date, days: int) -> date:
    try:
        return day + timedelta(days=days)
    except OverflowError as err:
        raise ValidationError(f"{day.isoformat()} shifted by {days} days is out of range") from err


def _wall_time(day: date, at: time, tz) -> TrueInstant:
    try:
        return TrueInstant.from_datetime(datetime.combine(day, at, tzinfo=tz))
    except (OverflowError, ValueError) as err:
        raise ValidationError(f"{day.isoformat()} {at} is out of range in {tz}") from err


def _day_start(day: date, tz) -> TrueInstant:
    return _wall_time(day, time.min, tz)


def _today(tz, now) -> date:
    now = _as_true(now) if now is not None else now_true()
    return local_date(now, tz)


def day_range(zone, date=None, now=None) -> DayRange:
    """
    Local 00:00:00 to 23:59:59 of `date` (default: today in `zone`) as true instants.

    The end is the next local midnight minus one second, so the span is
    86399 on ordinary days and shorter/longer by the DST delta on transition days.
    """
    tz = resolve_zone(zone)
    day = parse_date(date) if date is not None else _today(tz, now)
    return DayRange(_day_start(day, tz), _day_start(_shift_day(day, 1), tz) - 1)


def format_range(rng: DayRange, now=None) -> UtcRange:
    """Attach UTC strings to a true-instant range."""
    return UtcRange(
        start=rng.start,
        end=rng.end,
        start_iso=format_utc(rng.start, now=now),
        end_iso=format_utc(rng.end, now=now),
    )


def day_range_utc(zone, date=None, now=None) -> UtcRange:
    """Day boundaries ready for a UTC range query."""
    return format_range(day_range(zone, date, now=now), now)


def days_range(zone, days: int, date=None, now=None) -> DayRange:
    """`days` local calendar days ending on `date` (inclusive)."""
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise ValidationError(f"days must be a positive integer, got {days!r}")
    tz = resolve_zone(zone)
    last = parse_date(date) if date is not None else _today(tz, now)
    first = _shift_day(last, -(days - 1))
    return DayRange(_day_start(first, tz), _day_start(_shift_day(last, 1), tz) - 1)


def window_range(zone, start, end) -> DayRange:
    start_true = local_to_true(start, zone)
    end_true = local_to_true(end, zone)
    if end_true < start_true:
        raise ValidationError(f"Window end {end!r} is before start {start!r}")
    return DayRange(start_true, end_true)


def window_utc(zone, start, end, now=None) -> UtcRange:
    return format_range(window_range(zone, start, end), now)


def anchored_window(zone, hour: int = 11, now=None) -> DayRange:
    """
    Most recent complete window running from `hour`:00 to `hour`:00 local time.

    Before today's anchor the window ends at yesterday's anchor. `end` is
    exclusive: it equals the start of the next window.
    """
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 23:
        raise ValidationError(f"hour must be within 0..23, got {hour!r}")
    tz = resolve_zone(zone)
    now = _as_true(now) if now is not None else now_true()

    def anchor(day: date) -> TrueInstant:
        return _wall_time(day, time(hour), tz)

    end_day = local_date(now, tz)
    if now < anchor(end_day):
        end_day = _shift_day(end_day, -1)
    return DayRange(anchor(_shift_day(end_day, -1)), anchor(end_day))
