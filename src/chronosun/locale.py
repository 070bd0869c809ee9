"""
chronosun.locale

A `Locale` is a place on earth plus its clock rules: latitude/longitude,
fixed UTC offset and an annual daylight-saving window. It reinterprets an
absolute `Instant` through a `View`:

  UTC       the raw instant
  LOCAL     raw + utc_offset
  SOLAR     raw + offset of apparent solar time (solar noon reads 12:00)
  WITH_DST  add the DST amount when the adjusted time is inside the window

`ZonedTime` pairs an optional instant with a locale and exposes the civil
field accessors. Neither type is ever mutated.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, replace
from typing import Optional

from .core.calendar import civil_to_julian_day, is_leap_year, julian_centuries
from .core.errors import InvalidViewError
from .core.instant import CivilFields, Instant, civil_fields, year_start_raw
from .core.span import DAY, HOUR, US_PER_DAY, US_PER_HOUR, US_PER_MINUTE, US_PER_SECOND, ZERO, TimeSpan
from .solar.ephemeris import minutes_to_hms, solar_noon_utc
from .solar.events import SolarDay, solar_events_for
from .zones import ZoneCatalog, ZoneInfo, ZoneKind, load_zone_catalog


class View(enum.Flag):
    UTC = 0
    LOCAL = 1
    SOLAR = 2
    WITH_DST = 4


LOCAL_DST = View.LOCAL | View.WITH_DST


_rad = math.radians


@dataclass(frozen=True)
class Locale:
    """
    Location and clock rules.

    latitude, longitude : radians; longitude is east-positive
    utc_offset          : local standard time minus UTC
    dst_start, dst_end  : DST window, measured from the start of the calendar year
    dst_amount          : added while inside the window (ignored if start == end)
    zone                : catalog entry the offsets came from, if any
    """
    latitude: float = 0.0
    longitude: float = 0.0
    utc_offset: TimeSpan = ZERO
    dst_start: TimeSpan = ZERO
    dst_end: TimeSpan = ZERO
    dst_amount: TimeSpan = HOUR
    zone: Optional[ZoneInfo] = None

    @classmethod
    def from_degrees(cls, latitude: float, longitude: float, **kwargs) -> "Locale":
        return cls(latitude=math.radians(latitude), longitude=math.radians(longitude), **kwargs)

    @property
    def latitude_degrees(self) -> float:
        return math.degrees(self.latitude)

    @property
    def longitude_degrees(self) -> float:
        return math.degrees(self.longitude)

    @property
    def dst_enabled(self) -> bool:
        return self.dst_start != self.dst_end

    # ---- modification (returns a new Locale) ----

    def with_location(self, latitude: float, longitude: float) -> "Locale":
        return replace(self, latitude=latitude, longitude=longitude)

    def with_utc_offset(self, offset: TimeSpan) -> "Locale":
        return replace(self, utc_offset=offset, zone=None)

    def with_dst_window(self, start: TimeSpan, end: TimeSpan) -> "Locale":
        return replace(self, dst_start=start, dst_end=end, zone=None)

    def with_dst_amount(self, amount: TimeSpan) -> "Locale":
        return replace(self, dst_amount=amount, zone=None)

    def with_timezone(
        self,
        offset: TimeSpan,
        dst_start: TimeSpan = ZERO,
        dst_end: TimeSpan = ZERO,
        dst_amount: TimeSpan = HOUR,
    ) -> "Locale":
        return replace(
            self,
            utc_offset=offset,
            dst_start=dst_start,
            dst_end=dst_end,
            dst_amount=dst_amount,
            zone=None,
        )

    def with_zone(self, zone: ZoneInfo) -> "Locale":
        """Apply a catalog entry; a zone with DST observes it all year."""
        return replace(
            self,
            utc_offset=zone.offset,
            dst_amount=zone.dst,
            dst_start=ZERO,
            dst_end=DAY * 366 if zone.has_dst else ZERO,
            zone=zone,
        )

    # ---- view adjustment ----

    def _in_dst_window(self, raw: int) -> bool:
        if not self.dst_enabled:
            return False
        year = civil_fields(raw).year
        s = TimeSpan(raw - year_start_raw(year)).purge_to_second()
        if self.dst_start < self.dst_end:
            return self.dst_start <= s < self.dst_end
        return s > self.dst_start or s <= self.dst_end

    def solar_offset(self, instant: Instant) -> TimeSpan:
        """Apparent solar time minus UTC for the instant's UTC date."""
        f = instant.fields()
        t = julian_centuries(civil_to_julian_day(f.year, f.month, f.day))
        h, m, s = minutes_to_hms(solar_noon_utc(t, -self.longitude_degrees))
        return -TimeSpan.of(0, h - 12, m, s)

    def adjust(self, instant: Instant, view: View = View.UTC) -> int:
        """Raw microsecond count of `instant` read through `view`."""
        if View.SOLAR in view and (View.LOCAL in view or View.WITH_DST in view):
            raise InvalidViewError(f"SOLAR cannot be combined with LOCAL or WITH_DST: {view!r}")

        raw = instant.raw
        if View.LOCAL in view:
            raw += self.utc_offset.micros
        elif View.SOLAR in view:
            raw += self.solar_offset(instant).micros

        if View.WITH_DST in view and self._in_dst_window(raw):
            raw += self.dst_amount.micros
        return raw

    def dst_active(self, instant: Instant) -> bool:
        """True when `instant` falls inside the DST window on the local standard clock."""
        return self._in_dst_window(instant.raw + self.utc_offset.micros)

    def total_offset(self, instant: Instant) -> TimeSpan:
        if self.dst_active(instant):
            return self.utc_offset + self.dst_amount
        return self.utc_offset

    def from_local_civil(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        microsecond: int = 0,
        *,
        with_dst: bool = True,
    ) -> Instant:
        """Instant whose local clock (optionally with DST) reads the given fields."""
        local = Instant.from_civil(year, month, day, hour, minute, second, microsecond).raw
        raw = local - self.utc_offset.micros
        if with_dst and self._in_dst_window(local):
            raw -= self.dst_amount.micros
        return Instant(raw)

    # ---- regions ----

    def inside_canada(self) -> bool:
        lat, lon = self.latitude, self.longitude
        if lat < _rad(41.0) or lat > _rad(83.0):
            return False
        if lon < _rad(-141.0) or lon > _rad(-52.0):
            return False
        # rough southern border, west to east
        for east_limit, min_lat in _CANADA_BORDER:
            if lon < _rad(east_limit):
                return lat >= _rad(min_lat)
        return lat >= _rad(43.25)

    def inside_new_zealand(self) -> bool:
        lat, lon = self.latitude, self.longitude
        if _rad(172.5) < lon < _rad(178.6) and _rad(-41.75) < lat < _rad(-34.3):
            return True     # north island
        # south island; the northern latitude limit is kept as published (40.4)
        return _rad(166.3) < lon < _rad(174.5) and _rad(-47.35) < lat < _rad(40.4)

    def inside_tasmania(self) -> bool:
        lat, lon = self.latitude, self.longitude
        return _rad(143.5) < lon < _rad(149.0) and _rad(-44.0) < lat < _rad(-39.5)

    def inside_australia_mainland(self) -> bool:
        lat, lon = self.latitude, self.longitude
        return _rad(113.15) < lon < _rad(153.6333333) and _rad(-39.133333) < lat < _rad(-10.683333333)

    # ---- zones ----

    def guess_zone(self, kind: ZoneKind = ZoneKind.STANDARD, catalog: Optional[ZoneCatalog] = None) -> Optional[ZoneInfo]:
        """
        Best catalog zone of `kind` for this location.

        New Zealand and Tasmania are recognised by bounding box; elsewhere the
        zone whose central meridian is nearest the longitude wins.
        """
        if catalog is None:
            catalog = load_zone_catalog()

        special = None
        if self.inside_new_zealand():
            special = {ZoneKind.STANDARD: "NZST", ZoneKind.DAYLIGHT: "NZDT"}.get(kind)
        elif self.inside_tasmania():
            special = {ZoneKind.STANDARD: "AEST", ZoneKind.DAYLIGHT: "AEDT"}.get(kind)
        if special is not None:
            zone = catalog.by_code(special, kind)
            if zone is not None:
                return zone

        return catalog.nearest(self.longitude, kind)

    def current_zone(self, kind: Optional[ZoneKind] = None, catalog: Optional[ZoneCatalog] = None) -> Optional[ZoneInfo]:
        """The applied zone, or the first catalog zone matching the current offset."""
        if self.zone is not None:
            return self.zone
        if catalog is None:
            catalog = load_zone_catalog()
        if kind is None:
            kind = ZoneKind.DAYLIGHT if self.dst_enabled else ZoneKind.STANDARD
        for z in catalog.of_kind(kind):
            if z.offset == self.utc_offset:
                return z
        return None

    # ---- sun ----

    def solar_events(self, instant: Instant) -> SolarDay:
        """Sunrise/sunset/noon for the day containing `instant` in apparent solar time."""
        f = civil_fields(self.adjust(instant, View.SOLAR))
        return solar_events_for((f.year, f.month, f.day), self)


_CANADA_BORDER = (
    (-122.8, 48.3),
    (-95.153, 49.0),
    (-88.0, 48.0),
    (-83.5, 45.5),
    (-78.7, 41.66),
    (-74.75, 43.65),
    (-67.31, 45.0),
)


UTC_LOCALE = Locale()


@dataclass(frozen=True)
class ZonedTime:
    """An optional instant read on a locale's clocks. Getters return None when unset."""
    instant: Optional[Instant]
    locale: Locale = UTC_LOCALE

    @classmethod
    def from_civil(cls, year, month, day, hour=0, minute=0, second=0, microsecond=0, locale: Locale = UTC_LOCALE) -> "ZonedTime":
        """Construct from UTC fields."""
        return cls(Instant.from_civil(year, month, day, hour, minute, second, microsecond), locale)

    @classmethod
    def from_local(cls, year, month, day, hour=0, minute=0, second=0, microsecond=0, locale: Locale = UTC_LOCALE,
                   *, with_dst: bool = True) -> "ZonedTime":
        """Construct from fields read on the locale's local clock."""
        return cls(locale.from_local_civil(year, month, day, hour, minute, second, microsecond, with_dst=with_dst), locale)

    @property
    def is_set(self) -> bool:
        return self.instant is not None

    def with_instant(self, instant: Optional[Instant]) -> "ZonedTime":
        return replace(self, instant=instant)

    def with_locale(self, locale: Locale) -> "ZonedTime":
        return replace(self, locale=locale)

    def __add__(self, span: TimeSpan) -> "ZonedTime":
        if not isinstance(span, TimeSpan):
            return NotImplemented
        if self.instant is None:
            return self
        return self.with_instant(self.instant + span)

    # ---- view-aware conversion (unset values pass through unchanged) ----

    def from_utc(self, view: View = LOCAL_DST) -> "ZonedTime":
        """The instant whose UTC reading equals this time read through `view`."""
        if self.instant is None:
            return self
        return self.with_instant(Instant(self.locale.adjust(self.instant, view)))

    def to_utc(self, view: View = LOCAL_DST) -> "ZonedTime":
        """Inverse of `from_utc`: shift back by the view's offset at this instant."""
        if self.instant is None:
            return self
        raw = self.instant.raw
        return self.with_instant(Instant(raw - (self.locale.adjust(self.instant, view) - raw)))

    def _purge(self, unit: int, view: View) -> "ZonedTime":
        if self.instant is None:
            return self
        return self.with_instant(Instant(self.instant.raw - self.locale.adjust(self.instant, view) % unit))

    def purge_to_second(self, view: View = View.UTC) -> "ZonedTime":
        return self._purge(US_PER_SECOND, view)

    def purge_to_minute(self, view: View = View.UTC) -> "ZonedTime":
        return self._purge(US_PER_MINUTE, view)

    def purge_to_hour(self, view: View = View.UTC) -> "ZonedTime":
        return self._purge(US_PER_HOUR, view)

    def purge_to_day(self, view: View = View.UTC) -> "ZonedTime":
        """Back to midnight on the view's clock, e.g. local midnight with `LOCAL_DST`."""
        return self._purge(US_PER_DAY, view)

    # ---- fields ----

    def fields(self, view: View = View.UTC) -> Optional[CivilFields]:
        if self.instant is None:
            return None
        return civil_fields(self.locale.adjust(self.instant, view))

    def _field(self, name: str, view: View) -> Optional[int]:
        f = self.fields(view)
        return None if f is None else getattr(f, name)

    def year(self, view: View = View.UTC) -> Optional[int]:
        return self._field("year", view)

    def month(self, view: View = View.UTC) -> Optional[int]:
        return self._field("month", view)

    def day(self, view: View = View.UTC) -> Optional[int]:
        return self._field("day", view)

    def hour(self, view: View = View.UTC) -> Optional[int]:
        return self._field("hour", view)

    def minute(self, view: View = View.UTC) -> Optional[int]:
        return self._field("minute", view)

    def second(self, view: View = View.UTC) -> Optional[int]:
        return self._field("second", view)

    def microsecond(self, view: View = View.UTC) -> Optional[int]:
        return self._field("microsecond", view)

    def day_of_week(self, view: View = View.UTC) -> Optional[int]:
        """1 = Sunday ... 7 = Saturday."""
        return self._field("day_of_week", view)

    def day_of_year(self, view: View = View.UTC) -> Optional[int]:
        return self._field("day_of_year", view)

    def seconds_into_year(self, view: View = View.UTC) -> Optional[int]:
        if self.instant is None:
            return None
        raw = self.locale.adjust(self.instant, view)
        return TimeSpan(raw - year_start_raw(civil_fields(raw).year)).total_seconds

    def time_of_day(self, view: View = View.UTC) -> Optional[TimeSpan]:
        f = self.fields(view)
        if f is None:
            return None
        return TimeSpan.of(0, f.hour, f.minute, f.second, f.microsecond)

    def day_fraction_of_year(self, view: View = View.UTC) -> Optional[float]:
        """1.0 at the first midnight of the year, whole seconds only."""
        s = self.seconds_into_year(view)
        return None if s is None else s / 86400.0 + 1.0

    def is_leap_year(self, view: View = View.UTC) -> Optional[bool]:
        y = self.year(view)
        return None if y is None else is_leap_year(y)

    # ---- text ----

    def isoformat(self) -> Optional[str]:
        """ISO 8601 on the local clock with DST, e.g. 2018-01-20T12:31:00-06:00."""
        f = self.fields(LOCAL_DST)
        if f is None:
            return None
        out = f"{f.year:04d}-{f.month:02d}-{f.day:02d}T{f.hour:02d}:{f.minute:02d}:{f.second:02d}"
        if f.microsecond:
            out += f".{f.microsecond:06d}"
        offset = self.locale.total_offset(self.instant)
        if not offset:
            return out + "Z"
        sign = "-" if offset.micros < 0 else "+"
        a = abs(offset)
        return out + f"{sign}{a.total_hours:02d}:{a.minutes:02d}"

    def __str__(self) -> str:
        return self.isoformat() or "unset"

    def solar_events(self) -> Optional[SolarDay]:
        if self.instant is None:
            return None
        return self.locale.solar_events(self.instant)
