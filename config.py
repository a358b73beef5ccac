# config.py
import os

from errors import ConfigurationError


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be an integer, got {value!r}") from None


DEFAULT_ZONE = os.getenv("TIME_WINDOW_ZONE", "UTC")

# format_utc rejects anything earlier than this epoch second...
MIN_EPOCH = _int_env("TIME_WINDOW_MIN_EPOCH", 0)
# ...or more than this many years past the current instant.
MAX_YEARS_AHEAD = _int_env("TIME_WINDOW_MAX_YEARS_AHEAD", 100)

ANCHOR_HOUR = _int_env("TIME_WINDOW_ANCHOR_HOUR", 11)
