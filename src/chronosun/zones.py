"""
chronosun.zones

Named time-zone catalog: fixed UTC offsets with an optional daylight amount,
grouped into standard, daylight and military sets.

The catalog is data, not code. A snapshot ships with the package:
  chronosun/data/timezones.csv
and can be replaced without touching the library (see `load_zone_catalog`).

CSV columns:
  id, kind, code, name, offset, dst
where `offset` and `dst` are "[-]H:MM" durations.
"""

from __future__ import annotations

import csv
import enum
import importlib
import importlib.resources
import logging
import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple

from .core.errors import ZoneTableError
from .core.span import HOUR, TimeSpan

LOGGER = logging.getLogger(__name__)

ENV_ZONE_TABLE = "CHRONOSUN_ZONE_TABLE"
ZONE_TABLE_NAME = "timezones.csv"


class ZoneKind(enum.Enum):
    STANDARD = "standard"
    DAYLIGHT = "daylight"
    MILITARY = "military"


@dataclass(frozen=True)
class ZoneInfo:
    id: int
    kind: ZoneKind
    code: str
    name: str
    offset: TimeSpan
    dst: TimeSpan

    @property
    def has_dst(self) -> bool:
        return bool(self.dst)

    @property
    def ideal_longitude(self) -> float:
        """Central meridian of the zone in radians, east-positive."""
        return self.offset.total_seconds / (12.0 * 3600.0) * math.pi


@dataclass(frozen=True)
class ZoneCatalog:
    """Immutable, ordered collection of zones. Order matters for tie-breaking."""
    zones: Tuple[ZoneInfo, ...]

    def __len__(self) -> int:
        return len(self.zones)

    def __iter__(self) -> Iterator[ZoneInfo]:
        return iter(self.zones)

    def of_kind(self, kind: ZoneKind) -> Tuple[ZoneInfo, ...]:
        return tuple(z for z in self.zones if z.kind is kind)

    def _select(self, kind: Optional[ZoneKind]) -> Iterable[ZoneInfo]:
        return self.zones if kind is None else self.of_kind(kind)

    def by_id(self, zone_id: int) -> Optional[ZoneInfo]:
        for z in self.zones:
            if z.id == zone_id:
                return z
        return None

    def by_code(self, code: str, kind: Optional[ZoneKind] = None) -> Optional[ZoneInfo]:
        """Case-insensitive lookup; the first match in catalog order wins."""
        c = code.casefold()
        for z in self._select(kind):
            if z.code.casefold() == c:
                return z
        return None

    def by_name(self, name: str, kind: Optional[ZoneKind] = None) -> Optional[ZoneInfo]:
        """Match the long name or, failing that, the code (case-insensitive)."""
        n = name.casefold()
        for z in self._select(kind):
            if z.name.casefold() == n or z.code.casefold() == n:
                return z
        return None

    def by_offset_hours(self, hours: float, kind: Optional[ZoneKind] = None) -> Tuple[ZoneInfo, ...]:
        target = TimeSpan.from_seconds(hours * 3600.0)
        return tuple(z for z in self._select(kind) if z.offset == target)

    def nearest(self, longitude: float, kind: ZoneKind) -> Optional[ZoneInfo]:
        """
        Zone of `kind` whose central meridian is closest to `longitude`
        (radians, east-positive). Ties keep the earlier entry.
        """
        while longitude < -math.pi:
            longitude += 2.0 * math.pi
        while longitude > math.pi:
            longitude -= 2.0 * math.pi

        best: Optional[ZoneInfo] = None
        variation = 2.0 * math.pi
        for z in self.of_kind(kind):
            d = abs(longitude - z.ideal_longitude)
            if variation > d:
                variation = d
                best = z
        return best


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def read_zone_rows(rows: Iterable[dict]) -> ZoneCatalog:
    zones = []
    seen = set()
    for i, r in enumerate(rows, start=2):
        try:
            zone = ZoneInfo(
                id=int(r["id"]),
                kind=ZoneKind(r["kind"].strip().lower()),
                code=r["code"].strip(),
                name=r["name"].strip(),
                offset=TimeSpan.parse(r["offset"]),
                dst=TimeSpan.parse(r["dst"]),
            )
        except (KeyError, ValueError, AttributeError) as e:
            raise ZoneTableError(f"bad zone row at line {i}: {e}") from e
        if zone.id in seen:
            raise ZoneTableError(f"duplicate zone id {zone.id} at line {i}")
        if zone.dst > HOUR * 2 or zone.dst < TimeSpan(0):
            raise ZoneTableError(f"implausible daylight amount {zone.dst} at line {i}")
        seen.add(zone.id)
        zones.append(zone)
    if not zones:
        raise ZoneTableError("zone table is empty")
    return ZoneCatalog(tuple(zones))


def _read_path(path: Path) -> ZoneCatalog:
    with path.open("r", encoding="utf-8", newline="") as f:
        return read_zone_rows(csv.DictReader(f))


def user_cache_path() -> Path:
    xdg = os.environ.get("XDG_CACHE_HOME", "").strip()
    cache_dir = (Path(xdg).expanduser() / "chronosun") if xdg else (Path.home() / ".cache" / "chronosun")
    return cache_dir / ZONE_TABLE_NAME


@lru_cache(maxsize=1)
def load_zone_catalog() -> ZoneCatalog:
    """
    Load the zone catalog.

    Search order:
      1) CHRONOSUN_ZONE_TABLE environment variable (path to CSV)
      2) user cache ($XDG_CACHE_HOME/chronosun/timezones.csv or ~/.cache/chronosun/...)
      3) packaged data (chronosun.data/timezones.csv)

    Unreadable overrides are logged and skipped. Call
    `load_zone_catalog.cache_clear()` after changing the environment.
    """
    p = os.environ.get(ENV_ZONE_TABLE, "").strip()
    candidates = []
    if p:
        candidates.append((ENV_ZONE_TABLE, Path(p).expanduser()))
    candidates.append(("user cache", user_cache_path()))

    for source, path in candidates:
        if not path.is_file():
            if source == ENV_ZONE_TABLE:
                LOGGER.warning("%s=%s is not a file; ignoring", ENV_ZONE_TABLE, path)
            continue
        try:
            catalog = _read_path(path)
        except (OSError, ZoneTableError) as e:
            LOGGER.warning("could not read zone table %s (%s); ignoring", path, e)
            continue
        LOGGER.debug("zone catalog loaded from %s (%s, %d zones)", path, source, len(catalog))
        return catalog

    pkg = importlib.import_module("chronosun.data")
    res = importlib.resources.files(pkg).joinpath(ZONE_TABLE_NAME)
    with res.open("r", encoding="utf-8", newline="") as f:
        catalog = read_zone_rows(csv.DictReader(f))
    LOGGER.debug("zone catalog loaded from packaged data (%d zones)", len(catalog))
    return catalog
