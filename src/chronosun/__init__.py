"""chronosun public API.

Instants and spans with microsecond resolution, locale-aware clock views
(UTC, local, apparent solar, DST) and NOAA sunrise/sunset.
"""

from .core.errors import ChronosunError, InvalidViewError, PolarSearchError, ZoneTableError
from .core.instant import CivilFields, Instant
from .core.span import DAY, HOUR, MICROSECOND, MINUTE, SECOND, ZERO, TimeSpan
from .locale import Locale, View, ZonedTime
from .solar.ephemeris import SolarStatus
from .solar.events import SolarDay, solar_events_for
from .zones import ZoneCatalog, ZoneInfo, ZoneKind, load_zone_catalog

__all__ = [
    "ChronosunError",
    "InvalidViewError",
    "PolarSearchError",
    "ZoneTableError",
    "Instant",
    "CivilFields",
    "TimeSpan",
    "DAY",
    "HOUR",
    "MINUTE",
    "SECOND",
    "MICROSECOND",
    "ZERO",
    "Locale",
    "View",
    "ZonedTime",
    "SolarStatus",
    "SolarDay",
    "solar_events_for",
    "ZoneCatalog",
    "ZoneInfo",
    "ZoneKind",
    "load_zone_catalog",
]
