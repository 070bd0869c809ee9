"""
chronosun.solar.ephemeris
-------------------------
NOAA solar-calculator formulas for sunrise, sunset and solar noon.

All angles are in degrees unless a name says otherwise. Longitudes follow the
NOAA convention used throughout this module: **west is positive**. Times are
returned as minutes past 0h UTC of the requested day and may fall outside
[0, 1440) when the event belongs to the neighbouring UTC day.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple

from ..core.calendar import (
    civil_to_julian_day,
    day_of_year,
    is_leap_year,
    jd_from_julian_centuries,
    julian_centuries,
)
from ..core.errors import PolarSearchError

LOGGER = logging.getLogger(__name__)

ZENITH_DEG = 90.833          # refraction + solar semi-diameter
MAX_LATITUDE_DEG = 89.8      # formulas are singular at the poles
POLAR_CIRCLE_DEG = 66.4
SEARCH_LIMIT_DAYS = 366

_DIVISOR_EPS = 1e-7


# ------------------------------------------------------------
# Solar coordinates (Julian centuries t since J2000.0)
# ------------------------------------------------------------

def geom_mean_long_sun(t: float) -> float:
    """Geometric mean longitude of the sun, wrapped to [0, 360]."""
    L0 = 280.46646 + t * (36000.76983 + 0.0003032 * t)
    while L0 > 360.0:
        L0 -= 360.0
    while L0 < 0.0:
        L0 += 360.0
    return L0


def geom_mean_anomaly_sun(t: float) -> float:
    return 357.52911 + t * (35999.05029 - 0.0001537 * t)


def eccentricity_earth_orbit(t: float) -> float:
    """Unitless eccentricity of earth's orbit."""
    return 0.016708634 - t * (0.000042037 + 0.0000001267 * t)


def sun_eq_of_center(t: float) -> float:
    mrad = math.radians(geom_mean_anomaly_sun(t))
    sinm = math.sin(mrad)
    sin2m = math.sin(mrad + mrad)
    sin3m = math.sin(mrad + mrad + mrad)
    return (
        sinm * (1.914602 - t * (0.004817 + 0.000014 * t))
        + sin2m * (0.019993 - 0.000101 * t)
        + sin3m * 0.000289
    )


def sun_true_long(t: float) -> float:
    return geom_mean_long_sun(t) + sun_eq_of_center(t)


def sun_true_anomaly(t: float) -> float:
    return geom_mean_anomaly_sun(t) + sun_eq_of_center(t)


def sun_rad_vector(t: float) -> float:
    """Earth-sun distance in AU."""
    v = sun_true_anomaly(t)
    e = eccentricity_earth_orbit(t)
    return (1.000001018 * (1 - e * e)) / (1 + e * math.cos(math.radians(v)))


def _omega(t: float) -> float:
    return 125.04 - 1934.136 * t


def sun_apparent_long(t: float) -> float:
    """Apparent longitude, corrected for nutation and aberration."""
    return sun_true_long(t) - 0.00569 - 0.00478 * math.sin(math.radians(_omega(t)))


def mean_obliquity_of_ecliptic(t: float) -> float:
    seconds = 21.448 - t * (46.8150 + t * (0.00059 - t * 0.001813))
    return 23.0 + (26.0 + (seconds / 60.0)) / 60.0


def obliquity_correction(t: float) -> float:
    return mean_obliquity_of_ecliptic(t) + 0.00256 * math.cos(math.radians(_omega(t)))


def sun_right_ascension(t: float) -> float:
    e = obliquity_correction(t)
    lam = math.radians(sun_apparent_long(t))
    return math.degrees(math.atan2(math.cos(math.radians(e)) * math.sin(lam), math.cos(lam)))


def sun_declination(t: float) -> float:
    e = obliquity_correction(t)
    lam = sun_apparent_long(t)
    return math.degrees(math.asin(math.sin(math.radians(e)) * math.sin(math.radians(lam))))


def equation_of_time(t: float) -> float:
    """Apparent minus mean solar time, in minutes."""
    epsilon = obliquity_correction(t)
    l0 = math.radians(geom_mean_long_sun(t))
    e = eccentricity_earth_orbit(t)
    m = math.radians(geom_mean_anomaly_sun(t))

    y = math.tan(math.radians(epsilon) / 2.0)
    y *= y

    sin2l0 = math.sin(2.0 * l0)
    cos2l0 = math.cos(2.0 * l0)
    sin4l0 = math.sin(4.0 * l0)
    sinm = math.sin(m)
    sin2m = math.sin(2.0 * m)

    etime = (
        y * sin2l0
        - 2.0 * e * sinm
        + 4.0 * e * y * sinm * cos2l0
        - 0.5 * y * y * sin4l0
        - 1.25 * e * e * sin2m
    )
    return math.degrees(etime) * 4.0


# ------------------------------------------------------------
# Hour angle
# ------------------------------------------------------------

def _hour_angle(lat: float, solar_dec: float) -> Optional[float]:
    lat_rad = math.radians(lat)
    sd_rad = math.radians(solar_dec)

    divisor = math.cos(lat_rad) * math.cos(sd_rad)
    if abs(divisor) < _DIVISOR_EPS:
        return None
    arg = math.cos(math.radians(ZENITH_DEG)) / divisor - math.tan(lat_rad) * math.tan(sd_rad)
    if abs(arg) > 1.0:
        return None
    return math.acos(arg)


def hour_angle_sunrise(lat: float, solar_dec: float) -> Optional[float]:
    """Hour angle of sunrise in radians, or None when the sun does not cross the horizon."""
    return _hour_angle(lat, solar_dec)


def hour_angle_sunset(lat: float, solar_dec: float) -> Optional[float]:
    """Hour angle of sunset in radians (negative), or None."""
    ha = _hour_angle(lat, solar_dec)
    return None if ha is None else -ha


# ------------------------------------------------------------
# Event times (minutes past 0h UTC)
# ------------------------------------------------------------

HourAngleFn = Callable[[float, float], Optional[float]]


def _event_utc(jd: float, latitude: float, longitude: float, hour_angle: HourAngleFn) -> Optional[float]:
    t = julian_centuries(jd)

    # first pass at 0h of the day
    ha = hour_angle(latitude, sun_declination(t))
    if ha is None:
        return None
    time_utc = 720 + 4 * (longitude - math.degrees(ha)) - equation_of_time(t)

    # second pass at the estimated event time
    newt = julian_centuries(jd_from_julian_centuries(t) + time_utc / 1440.0)
    ha = hour_angle(latitude, sun_declination(newt))
    if ha is None:
        return None
    return 720 + 4 * (longitude - math.degrees(ha)) - equation_of_time(newt)


def sunrise_utc(jd: float, latitude: float, longitude: float) -> Optional[float]:
    """Sunrise in minutes past 0h UTC for the day starting at `jd` (longitude west-positive)."""
    return _event_utc(jd, latitude, longitude, hour_angle_sunrise)


def sunset_utc(jd: float, latitude: float, longitude: float) -> Optional[float]:
    """Sunset in minutes past 0h UTC for the day starting at `jd` (longitude west-positive)."""
    return _event_utc(jd, latitude, longitude, hour_angle_sunset)


def solar_noon_utc(t: float, longitude: float) -> float:
    """Solar noon in minutes past 0h UTC; single pass at `t`."""
    return 720 + (longitude * 4) - equation_of_time(t)


# ------------------------------------------------------------
# Polar fallback search
# ------------------------------------------------------------

@dataclass(frozen=True)
class CandidateDays:
    """
    Finite, restartable sequence of Julian Days stepping away from `start`.

    Iterating yields `start`, `start + step`, ... for at most `limit` days.
    """
    start: float
    step: float
    limit: int = SEARCH_LIMIT_DAYS

    def __iter__(self) -> Iterator[float]:
        jd = self.start
        for _ in range(self.limit):
            yield jd
            jd += self.step


def candidate_days(jd: float, step: float, limit: int = SEARCH_LIMIT_DAYS) -> CandidateDays:
    return CandidateDays(jd, step, limit)


EventFn = Callable[[float, float, float], Optional[float]]


def _search(days: CandidateDays, latitude: float, longitude: float, event: EventFn, what: str) -> float:
    for jd in days:
        if event(jd, latitude, longitude) is not None:
            return jd
    raise PolarSearchError(
        f"no {what} within {days.limit} days of JD {days.start} at latitude {latitude}"
    )


def find_recent_sunrise(jd: float, latitude: float, longitude: float) -> float:
    """JD of the most recent day, at or before `jd`, that has a sunrise."""
    return _search(candidate_days(jd, -1.0), latitude, longitude, sunrise_utc, "sunrise")


def find_next_sunrise(jd: float, latitude: float, longitude: float) -> float:
    """JD of the next day, at or after `jd`, that has a sunrise."""
    return _search(candidate_days(jd, 1.0), latitude, longitude, sunrise_utc, "sunrise")


def find_recent_sunset(jd: float, latitude: float, longitude: float) -> float:
    return _search(candidate_days(jd, -1.0), latitude, longitude, sunset_utc, "sunset")


def find_next_sunset(jd: float, latitude: float, longitude: float) -> float:
    return _search(candidate_days(jd, 1.0), latitude, longitude, sunset_utc, "sunset")


# ------------------------------------------------------------
# Full day computation
# ------------------------------------------------------------

class SolarStatus(enum.Flag):
    NONE = 0
    NO_SUNRISE = 1
    NO_SUNSET = 2


@dataclass(frozen=True)
class UtcEvent:
    """An event at `minutes` past 0h UTC of the day starting at `jd`."""
    jd: float
    minutes: float


@dataclass(frozen=True)
class SunCalculation:
    jd: float
    day_of_year: int
    latitude: float
    longitude: float
    sunrise: Optional[UtcEvent]
    sunset: Optional[UtcEvent]
    solar_noon: UtcEvent
    equation_of_time: float
    declination: float
    status: SolarStatus = SolarStatus.NONE


def clamp_latitude(latitude: float) -> float:
    return max(-MAX_LATITUDE_DEG, min(MAX_LATITUDE_DEG, latitude))


def _spring_summer_north(latitude: float, doy: int) -> bool:
    # north in spring/summer or south in autumn/winter: the sun stays up
    return (latitude > POLAR_CIRCLE_DEG and 79 < doy < 267) or (
        latitude < -POLAR_CIRCLE_DEG and (doy < 83 or doy > 263)
    )


def _autumn_winter_north(latitude: float, doy: int) -> bool:
    # north in autumn/winter or south in spring/summer: the sun stays down
    return (latitude > POLAR_CIRCLE_DEG and (doy < 83 or doy > 263)) or (
        latitude < -POLAR_CIRCLE_DEG and 79 < doy < 267
    )


def calc_sun(year: int, month: int, day: int, latitude: float, longitude: float) -> SunCalculation:
    """
    Sunrise, sunset and solar noon for a civil date.

    `longitude` is west-positive. Latitude is clamped to [-89.8, 89.8].

    When the day has no sunrise (or sunset) inside the polar circles, the
    event is substituted from the nearest day that has one: the previous
    sunrise / next sunset while the sun stays up, the next sunrise / previous
    sunset while it stays down. Outside those seasons the missing event is
    reported through `status`.

    Raises PolarSearchError when the substitution search finds no crossing
    within its bound. This happens on most days at the clamp ceiling, so an
    input of 89.8 or more (the poles included) fails for much of the year.
    """
    latitude = clamp_latitude(latitude)

    jd = civil_to_julian_day(year, month, day)
    doy = day_of_year(month, day, is_leap_year(year))
    t = julian_centuries(jd)

    status = SolarStatus.NONE
    sunrise: Optional[UtcEvent] = None
    sunset: Optional[UtcEvent] = None

    rise = sunrise_utc(jd, latitude, longitude)
    if rise is not None:
        sunrise = UtcEvent(jd, rise)
    elif _spring_summer_north(latitude, doy):
        rjd = find_recent_sunrise(jd, latitude, longitude)
        LOGGER.debug("no sunrise on JD %s; using previous sunrise on JD %s", jd, rjd)
        sunrise = UtcEvent(rjd, sunrise_utc(rjd, latitude, longitude))
    elif _autumn_winter_north(latitude, doy):
        rjd = find_next_sunrise(jd, latitude, longitude)
        LOGGER.debug("no sunrise on JD %s; using next sunrise on JD %s", jd, rjd)
        sunrise = UtcEvent(rjd, sunrise_utc(rjd, latitude, longitude))
    else:
        status |= SolarStatus.NO_SUNRISE

    sset = sunset_utc(jd, latitude, longitude)
    if sset is not None:
        sunset = UtcEvent(jd, sset)
    elif _spring_summer_north(latitude, doy):
        sjd = find_next_sunset(jd, latitude, longitude)
        LOGGER.debug("no sunset on JD %s; using next sunset on JD %s", jd, sjd)
        sunset = UtcEvent(sjd, sunset_utc(sjd, latitude, longitude))
    elif _autumn_winter_north(latitude, doy):
        sjd = find_recent_sunset(jd, latitude, longitude)
        LOGGER.debug("no sunset on JD %s; using previous sunset on JD %s", jd, sjd)
        sunset = UtcEvent(sjd, sunset_utc(sjd, latitude, longitude))
    else:
        status |= SolarStatus.NO_SUNSET

    return SunCalculation(
        jd=jd,
        day_of_year=doy,
        latitude=latitude,
        longitude=longitude,
        sunrise=sunrise,
        sunset=sunset,
        solar_noon=UtcEvent(jd, solar_noon_utc(t, longitude)),
        equation_of_time=equation_of_time(t),
        declination=sun_declination(t),
        status=status,
    )


def minutes_to_hms(minutes: float) -> Tuple[int, int, int]:
    """Split minutes-of-day into whole (hour, minute, second), flooring each part."""
    float_hour = minutes / 60.0
    hour = math.floor(float_hour)
    float_minute = 60.0 * (float_hour - hour)
    minute = math.floor(float_minute)
    second = math.floor(60.0 * (float_minute - minute))
    return int(hour), int(minute), int(second)
