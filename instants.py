"""Value types for instants and ranges.

TrueInstant and ShiftedInstant do not interoperate: a shifted
number can only become a real instant through ``window.unshift``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True, order=True)
class TrueInstant:
    seconds: int

    def __post_init__(self):
        if isinstance(self.seconds, bool) or not isinstance(self.seconds, int):
            raise TypeError(f"TrueInstant needs int seconds, got {type(self.seconds).__name__}")

    def __int__(self) -> int:
        return self.seconds

    def __add__(self, delta):
        if isinstance(delta, bool) or not isinstance(delta, int):
            return NotImplemented
        return TrueInstant(self.seconds + delta)

    def __sub__(self, other):
        if isinstance(other, TrueInstant):
            return self.seconds - other.seconds
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return TrueInstant(self.seconds - other)

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.seconds, tz=timezone.utc)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "TrueInstant":
        """Naive datetimes are read as UTC; fractional seconds are floored."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls(math.floor(dt.timestamp()))


@dataclass(frozen=True)
class ShiftedInstant:
    """True seconds plus a zone offset. Not a point in time."""

    seconds: int

    def __post_init__(self):
        if isinstance(self.seconds, bool) or not isinstance(self.seconds, int):
            raise TypeError(f"ShiftedInstant needs int seconds, got {type(self.seconds).__name__}")

    def __int__(self) -> int:
        return self.seconds


@dataclass(frozen=True)
class DayRange:
    start: TrueInstant
    end: TrueInstant

    @property
    def span(self) -> int:
        return self.end - self.start

    def contains(self, instant: TrueInstant) -> bool:
        return self.start <= instant <= self.end


@dataclass(frozen=True)
class UtcRange:
    start: TrueInstant
    end: TrueInstant
    start_iso: str
    end_iso: str

    @property
    def span(self) -> int:
        return self.end - self.start

    def contains(self, instant: TrueInstant) -> bool:
        return self.start <= instant <= self.end

    def to_dict(self) -> dict:
        return {
            "start": self.start.seconds,
            "end": self.end.seconds,
            "start_iso": self.start_iso,
            "end_iso": self.end_iso,
        }
