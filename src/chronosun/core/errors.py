class ChronosunError(Exception):
    """Base error."""

class InvalidViewError(ChronosunError, ValueError):
    """Raised when the solar view is combined with the local or DST views."""

class PolarSearchError(ChronosunError, RuntimeError):
    """Raised when no day with a sunrise/sunset is found within the search bound."""

class ZoneTableError(ChronosunError):
    """Raised when a timezone catalog file cannot be parsed."""
