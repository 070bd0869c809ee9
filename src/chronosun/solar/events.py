from __future__ import annotations

import datetime as _dt
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Union

from ..core.instant import Instant
from ..core.span import US_PER_MINUTE, TimeSpan
from .ephemeris import SolarStatus, SunCalculation, UtcEvent, calc_sun

if TYPE_CHECKING:
    from ..locale import Locale

DateLike = Union[_dt.date, Tuple[int, int, int]]


@dataclass(frozen=True)
class SolarDay:
    """Sunrise, sunset and solar noon for one date at one place, as UTC instants."""
    date: Tuple[int, int, int]
    sunrise: Optional[Instant]
    sunset: Optional[Instant]
    solar_noon: Instant
    status: SolarStatus
    equation_of_time: float    # minutes
    declination: float         # degrees

    @property
    def has_sunrise(self) -> bool:
        return self.sunrise is not None

    @property
    def has_sunset(self) -> bool:
        return self.sunset is not None

    @property
    def day_length(self) -> Optional[TimeSpan]:
        """Sunset minus sunrise; None when either is missing or sunset precedes sunrise."""
        if self.sunrise is None or self.sunset is None:
            return None
        if self.sunset < self.sunrise:
            return None
        return self.sunset - self.sunrise


def event_instant(event: UtcEvent) -> Instant:
    """(day JD, minutes past 0h UTC) -> Instant truncated to whole seconds."""
    day = Instant.from_julian_day(event.jd)
    return (day + TimeSpan(int(math.floor(event.minutes * US_PER_MINUTE)))).truncate_to_second()


def _ymd(date: DateLike) -> Tuple[int, int, int]:
    if isinstance(date, _dt.date):
        return date.year, date.month, date.day
    y, m, d = date
    return int(y), int(m), int(d)


def solar_day_from_calculation(date: Tuple[int, int, int], calc: SunCalculation) -> SolarDay:
    return SolarDay(
        date=date,
        sunrise=None if calc.sunrise is None else event_instant(calc.sunrise),
        sunset=None if calc.sunset is None else event_instant(calc.sunset),
        solar_noon=event_instant(calc.solar_noon),
        status=calc.status,
        equation_of_time=calc.equation_of_time,
        declination=calc.declination,
    )


def solar_events_for(date: DateLike, locale: "Locale") -> SolarDay:
    """
    Sunrise, sunset and solar noon on `date` (a `datetime.date` or a
    (year, month, day) tuple) at the locale's position.
    """
    ymd = _ymd(date)
    calc = calc_sun(ymd[0], ymd[1], ymd[2], locale.latitude_degrees, -locale.longitude_degrees)
    return solar_day_from_calculation(ymd, calc)
