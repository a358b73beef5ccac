# frames.py
import pandas as pd

from errors import ValidationError
from zones import resolve_zone


def to_utc_series(values, unit: str = "s") -> pd.Series:
    """Epoch numbers, ISO strings or datetimes -> tz-aware UTC series."""
    series = pd.Series(values)
    if series.empty:
        return pd.Series([], dtype="datetime64[ns, UTC]")
    if pd.api.types.is_numeric_dtype(series):
        return pd.to_datetime(series, unit=unit, utc=True)
    return pd.to_datetime(series, utc=True)


def _ts_column(df: pd.DataFrame, column: str) -> pd.Series:
    if column not in df.columns:
        raise ValidationError(f"Frame has no '{column}' column")
    return to_utc_series(df[column]).set_axis(df.index)


def filter_range(df: pd.DataFrame, rng, column: str = "ts") -> pd.DataFrame:
    """Rows whose timestamp lies within rng.start..rng.end, both inclusive."""
    if df.empty:
        return df.copy()
    ts = _ts_column(df, column)
    start = pd.Timestamp(rng.start.seconds, unit="s", tz="UTC")
    end = pd.Timestamp(rng.end.seconds, unit="s", tz="UTC")
    return df[(ts >= start) & (ts <= end)].copy()


def local_day_counts(df: pd.DataFrame, zone, column: str = "ts") -> dict:
    """Row counts per local calendar day in `zone`, keyed 'YYYY-MM-DD'."""
    if df.empty:
        return {}
    tz = resolve_zone(zone)
    days = _ts_column(df, column).dt.tz_convert(tz).dt.strftime("%Y-%m-%d")
    counts = days.value_counts().sort_index()
    return {day: int(n) for day, n in counts.items()}
