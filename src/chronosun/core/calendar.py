from __future__ import annotations

import math
from typing import Tuple

# ============================================================
# Constants
# ============================================================

J2000_JD = 2451545.0          # JD at 2000-01-01 12:00 UT
GREGORIAN_CUTOVER_JDN = 2299161  # first day of the Gregorian calendar (1582-10-15)

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


# ============================================================
# Leap years and month lengths
# ============================================================

def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(month: int, year: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def day_of_year(month: int, day: int, is_leap: bool) -> int:
    """
    Day-of-year (1-based) from month and day.

      doy = floor(275 m / 9) - k floor((m + 9) / 12) + d - 30,  k = 1 if leap else 2
    """
    k = 1.0 if is_leap else 2.0
    doy = math.floor((275.0 * month) / 9.0) - k * math.floor((month + 9.0) / 12.0) + day - 30.0
    return int(doy)


def check_civil(year: int, month: int, day: int) -> None:
    """Raise ValueError unless (year, month, day) is a valid Gregorian date."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    dim = days_in_month(month, year)
    if not 1 <= day <= dim:
        raise ValueError(f"day must be in 1..{dim} for {year:04d}-{month:02d}, got {day}")


# ============================================================
# Civil date <-> Julian Day (floating, Meeus)
# ============================================================

def civil_to_julian_day(year: int, month: int, day: int) -> float:
    """
    Proleptic Gregorian civil date -> Julian Day at 0h UT.

    January and February are counted as months 13 and 14 of the previous year.
    """
    if month <= 2:
        year -= 1
        month += 12
    A = math.floor(year / 100.0)
    B = 2 - A + math.floor(A / 4.0)
    return math.floor(365.25 * (year + 4716)) + math.floor(30.6001 * (month + 1)) + day + B - 1524.5


def julian_day_to_civil(jd: float) -> Tuple[int, int, int]:
    """
    Julian Day -> (year, month, day).

    Days before JD 2299161 use the Julian calendar branch.
    """
    z = math.floor(jd + 0.5)
    f = (jd + 0.5) - z

    if z < GREGORIAN_CUTOVER_JDN:
        A = z
    else:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        A = z + 1 + alpha - math.floor(alpha / 4.0)

    B = A + 1524
    C = math.floor((B - 122.1) / 365.25)
    D = math.floor(365.25 * C)
    E = math.floor((B - D) / 30.6001)

    day = int(B - D - math.floor(30.6001 * E) + f)
    month = int(E - 1 if E < 14 else E - 13)
    year = int(C - 4716 if month > 2 else C - 4715)
    return year, month, day


# ============================================================
# Integer day numbers (used by Instant)
# ============================================================

def julian_day_number(year: int, month: int, day: int) -> int:
    """JDN of a civil date: the integer day starting at midnight, JDN = JD + 0.5."""
    return int(math.floor(civil_to_julian_day(year, month, day) + 0.5))


def civil_from_day_number(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of julian_day_number (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def day_of_week(jdn: int) -> int:
    """Day of week for a JDN: 1 = Sunday ... 7 = Saturday."""
    return (jdn + 1) % 7 + 1


# ============================================================
# Julian centuries
# ============================================================

def julian_centuries(jd: float) -> float:
    """Julian centuries since J2000.0."""
    return (jd - J2000_JD) / 36525.0


def jd_from_julian_centuries(t: float) -> float:
    return t * 36525.0 + J2000_JD
