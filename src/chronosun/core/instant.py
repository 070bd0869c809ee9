from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union

from .calendar import (
    check_civil,
    civil_from_day_number,
    day_of_week,
    day_of_year,
    is_leap_year,
    julian_day_number,
)
from .span import US_PER_DAY, US_PER_HOUR, US_PER_MINUTE, US_PER_SECOND, TimeSpan, trunc_div

# Instants count microseconds from 1600-01-01T00:00:00 UTC.
EPOCH_JDN = 2305448
EPOCH_JD = EPOCH_JDN - 0.5
EPOCH_DATETIME = datetime(1600, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class CivilFields:
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    microsecond: int
    day_of_week: int    # 1 = Sunday ... 7 = Saturday
    day_of_year: int


def civil_fields(raw: int) -> CivilFields:
    """Split a (possibly view-adjusted) microsecond count into civil fields."""
    days, rem = divmod(raw, US_PER_DAY)
    jdn = days + EPOCH_JDN
    year, month, day = civil_from_day_number(jdn)

    hour, rem = divmod(rem, US_PER_HOUR)
    minute, rem = divmod(rem, US_PER_MINUTE)
    second, micro = divmod(rem, US_PER_SECOND)

    return CivilFields(
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
        microsecond=micro,
        day_of_week=day_of_week(jdn),
        day_of_year=day_of_year(month, day, is_leap_year(year)),
    )


def civil_to_raw(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0, microsecond: int = 0) -> int:
    days = julian_day_number(year, month, day) - EPOCH_JDN
    seconds = ((days * 24 + hour) * 60 + minute) * 60 + second
    return seconds * US_PER_SECOND + microsecond


def year_start_raw(year: int) -> int:
    return civil_to_raw(year, 1, 1)


@dataclass(frozen=True, order=True)
class Instant:
    """
    Absolute point in time: signed microseconds since 1600-01-01T00:00Z.

    `Instant(0)` is a valid instant; an unset value is `None`.
    """
    raw: int

    @classmethod
    def from_civil(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        microsecond: int = 0,
    ) -> "Instant":
        """UTC civil fields -> Instant. Raises ValueError for an invalid month or day."""
        check_civil(year, month, day)
        return cls(civil_to_raw(year, month, day, hour, minute, second, microsecond))

    @classmethod
    def from_seconds(cls, seconds: float) -> "Instant":
        """Seconds since the 1600 epoch."""
        return cls(int(round(seconds * US_PER_SECOND)))

    @classmethod
    def from_julian_day(cls, jd: float) -> "Instant":
        return cls(int(round((jd - EPOCH_JD) * US_PER_DAY)))

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        """Naive datetimes are taken as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls(TimeSpan.from_timedelta(dt - EPOCH_DATETIME).micros)

    def to_datetime(self) -> datetime:
        return EPOCH_DATETIME + TimeSpan(self.raw).to_timedelta()

    @property
    def total_seconds(self) -> int:
        return trunc_div(self.raw, US_PER_SECOND)

    @property
    def total_microseconds(self) -> int:
        return self.raw

    @property
    def julian_day(self) -> float:
        return EPOCH_JD + self.raw / US_PER_DAY

    def fields(self) -> CivilFields:
        """UTC civil fields."""
        return civil_fields(self.raw)

    def truncate_to_second(self) -> "Instant":
        return Instant(self.raw - self.raw % US_PER_SECOND)

    def __add__(self, span: TimeSpan) -> "Instant":
        if not isinstance(span, TimeSpan):
            return NotImplemented
        return Instant(self.raw + span.micros)

    def __sub__(self, other: Union["Instant", TimeSpan]):
        if isinstance(other, Instant):
            return TimeSpan(self.raw - other.raw)
        if isinstance(other, TimeSpan):
            return Instant(self.raw - other.micros)
        return NotImplemented

    def isoformat(self) -> str:
        f = self.fields()
        out = f"{f.year:04d}-{f.month:02d}-{f.day:02d}T{f.hour:02d}:{f.minute:02d}:{f.second:02d}"
        if f.microsecond:
            out += f".{f.microsecond:06d}"
        return out + "Z"

    def __str__(self) -> str:
        return self.isoformat()
