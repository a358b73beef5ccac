class TimeWindowError(Exception):
    """Base class for errors raised by the time window helpers."""


class ConfigurationError(TimeWindowError, RuntimeError):
    """Unknown zone, unavailable timezone database or bad environment setting."""


class ValidationError(TimeWindowError, ValueError):
    """Malformed date/time input or an instant that cannot be formatted."""
