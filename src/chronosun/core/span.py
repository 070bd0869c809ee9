from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Union

US_PER_SECOND = 1_000_000
US_PER_MINUTE = 60 * US_PER_SECOND
US_PER_HOUR = 60 * US_PER_MINUTE
US_PER_DAY = 24 * US_PER_HOUR


def trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // b
    return q if a >= 0 else -q


@dataclass(frozen=True, order=True)
class TimeSpan:
    """
    Signed duration with microsecond resolution.

    Whole-unit totals (`days`, `total_hours`, ...) truncate toward zero; the
    component properties (`hours`, `minutes`, ...) give what is left after
    removing the next larger unit and carry the span's sign.
    """
    micros: int = 0

    @classmethod
    def of(cls, days: int = 0, hours: int = 0, minutes: int = 0, seconds: int = 0, microseconds: int = 0) -> "TimeSpan":
        total = (((days * 24 + hours) * 60 + minutes) * 60 + seconds) * US_PER_SECOND + microseconds
        return cls(int(total))

    @classmethod
    def from_seconds(cls, seconds: float) -> "TimeSpan":
        return cls(int(round(seconds * US_PER_SECOND)))

    @classmethod
    def from_timedelta(cls, td: timedelta) -> "TimeSpan":
        return cls((td.days * 86400 + td.seconds) * US_PER_SECOND + td.microseconds)

    def to_timedelta(self) -> timedelta:
        return timedelta(microseconds=self.micros)

    # ---- totals ----

    @property
    def total_microseconds(self) -> int:
        return self.micros

    @property
    def total_seconds(self) -> int:
        return trunc_div(self.micros, US_PER_SECOND)

    @property
    def total_minutes(self) -> int:
        return trunc_div(self.micros, US_PER_MINUTE)

    @property
    def total_hours(self) -> int:
        return trunc_div(self.micros, US_PER_HOUR)

    @property
    def days(self) -> int:
        return trunc_div(self.micros, US_PER_DAY)

    @property
    def years(self) -> int:
        return int(self.micros / 1e6 / 86400 / 365.25 + 0.75)

    # ---- components ----

    @property
    def hours(self) -> int:
        return self.total_hours - self.days * 24

    @property
    def minutes(self) -> int:
        return self.total_minutes - self.total_hours * 60

    @property
    def seconds(self) -> int:
        return self.total_seconds - self.total_minutes * 60

    @property
    def microseconds(self) -> int:
        return self.micros - self.total_seconds * US_PER_SECOND

    @property
    def milliseconds(self) -> int:
        return trunc_div(self.microseconds, 1000)

    # ---- truncation ----

    def purge_to_second(self) -> "TimeSpan":
        return TimeSpan(self.total_seconds * US_PER_SECOND)

    def purge_to_minute(self) -> "TimeSpan":
        return TimeSpan(self.total_minutes * US_PER_MINUTE)

    def purge_to_hour(self) -> "TimeSpan":
        return TimeSpan(self.total_hours * US_PER_HOUR)

    def purge_to_day(self) -> "TimeSpan":
        return TimeSpan(self.days * US_PER_DAY)

    # ---- arithmetic ----

    def __add__(self, other: "TimeSpan") -> "TimeSpan":
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan(self.micros + other.micros)

    def __sub__(self, other: "TimeSpan") -> "TimeSpan":
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan(self.micros - other.micros)

    def __neg__(self) -> "TimeSpan":
        return TimeSpan(-self.micros)

    def __abs__(self) -> "TimeSpan":
        return TimeSpan(abs(self.micros))

    def __mul__(self, n: int) -> "TimeSpan":
        if not isinstance(n, int):
            return NotImplemented
        return TimeSpan(self.micros * n)

    __rmul__ = __mul__

    def __floordiv__(self, other: Union[int, "TimeSpan"]):
        if isinstance(other, TimeSpan):
            return self.micros // other.micros
        if isinstance(other, int):
            return TimeSpan(self.micros // other)
        return NotImplemented

    def __bool__(self) -> bool:
        return self.micros != 0

    # ---- text ----

    def format(self) -> str:
        """`[-][N day(s) ]HH:MM:SS[.ffffff]`"""
        sign = "-" if self.micros < 0 else ""
        a = abs(self)
        out = sign
        if a.days:
            out += f"{a.days} day{'s' if a.days != 1 else ''} "
        out += f"{a.hours:02d}:{a.minutes:02d}:{a.seconds:02d}"
        if a.microseconds:
            out += f".{a.microseconds:06d}"
        return out

    def __str__(self) -> str:
        return self.format()

    @classmethod
    def parse(cls, text: str) -> "TimeSpan":
        """
        Parse a duration.

        Accepted forms:
          "[-]H:M[:S[.f]]"           e.g. "120:00:00", "0:0:10.5"
          "[-]N day(s)[,] H:M[:S]"   e.g. "3 days 2:45:0"
          "[-]P[nD][T[nH][nM][nS]]"  ISO 8601, e.g. "P3DT1H5M10.5S"
        """
        s = text.strip()

        m = _ISO_RE.match(s)
        if m and any(m.group(i) is not None for i in range(2, 6)):
            neg, d, h, mi, sec = m.groups()
            span = cls.of(int(d or 0), int(h or 0), int(mi or 0)) + _seconds_span(sec or "0")
            return -span if neg else span

        m = _DAYS_RE.match(s) or _CLOCK_RE.match(s)
        if m:
            g = m.groupdict()
            span = cls.of(int(g.get("d") or 0), int(g["h"]), int(g["m"])) + _seconds_span(g["s"] or "0")
            return -span if g["neg"] else span

        raise ValueError(f"unrecognised duration: {text!r}")


_SECONDS = r"\d+(?:\.\d+)?"
_ISO_RE = re.compile(rf"^(-)?P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:({_SECONDS})S)?)?$", re.IGNORECASE)
_DAYS_RE = re.compile(rf"^(?P<neg>-)?(?P<d>\d+)\s*days?,?\s+(?P<h>\d+):(?P<m>\d+)(?::(?P<s>{_SECONDS}))?$")
_CLOCK_RE = re.compile(rf"^(?P<neg>-)?(?P<h>\d+):(?P<m>\d+)(?::(?P<s>{_SECONDS}))?$")


def _seconds_span(text: str) -> TimeSpan:
    whole, _, frac = text.partition(".")
    micros = int((frac + "000000")[:6]) if frac else 0
    return TimeSpan(int(whole) * US_PER_SECOND + micros)


ZERO = TimeSpan(0)
MICROSECOND = TimeSpan(1)
SECOND = TimeSpan(US_PER_SECOND)
MINUTE = TimeSpan(US_PER_MINUTE)
HOUR = TimeSpan(US_PER_HOUR)
DAY = TimeSpan(US_PER_DAY)
