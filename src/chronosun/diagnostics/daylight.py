#!/usr/bin/env python3
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, List, Optional

from chronosun.core.calendar import days_in_year
from chronosun.core.instant import Instant
from chronosun.core.span import DAY, TimeSpan
from chronosun.locale import Locale, View, ZonedTime
from chronosun.solar.events import solar_events_for


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "chronosun[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "chronosun[diagnostics]"') from e


@dataclass(frozen=True)
class DaylightTable:
    """One row per day of `year`; hours are on the locale's local clock, NaN when missing."""
    year: int
    day_of_year: Any     # numpy arrays
    sunrise_hours: Any
    sunset_hours: Any
    noon_hours: Any
    day_length_hours: Any

    def summary(self) -> dict:
        np = _need_numpy()
        dl = self.day_length_hours
        return {
            "year": self.year,
            "days": int(len(self.day_of_year)),
            "min_day_length_h": float(np.nanmin(dl)) if np.isfinite(dl).any() else float("nan"),
            "max_day_length_h": float(np.nanmax(dl)) if np.isfinite(dl).any() else float("nan"),
            "days_without_sunrise": int(np.isnan(self.sunrise_hours).sum()),
            "days_without_sunset": int(np.isnan(self.sunset_hours).sum()),
        }


def _local_hours(instant: Optional[Instant], locale: Locale) -> float:
    if instant is None:
        return float("nan")
    tod = ZonedTime(instant, locale).time_of_day(View.LOCAL | View.WITH_DST)
    return tod.total_microseconds / 3.6e9


def daylight_table(year: int, locale: Locale) -> DaylightTable:
    np = _need_numpy()

    n = days_in_year(year)
    doy = np.arange(1, n + 1)
    rise = np.full(n, np.nan)
    sset = np.full(n, np.nan)
    noon = np.full(n, np.nan)
    length = np.full(n, np.nan)

    day = Instant.from_civil(year, 1, 1)
    for i in range(n):
        f = day.fields()
        sd = solar_events_for((f.year, f.month, f.day), locale)
        rise[i] = _local_hours(sd.sunrise, locale)
        sset[i] = _local_hours(sd.sunset, locale)
        noon[i] = _local_hours(sd.solar_noon, locale)
        if sd.day_length is not None:
            length[i] = sd.day_length.total_microseconds / 3.6e9
        day = day + DAY

    return DaylightTable(year, doy, rise, sset, noon, length)


def plot_daylight(table: DaylightTable, title: str = "", out: Optional[str] = None) -> None:
    plt = _need_matplotlib()

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(11, 7), sharex=True)
    ax1.plot(table.day_of_year, table.sunrise_hours, label="sunrise")
    ax1.plot(table.day_of_year, table.noon_hours, label="solar noon")
    ax1.plot(table.day_of_year, table.sunset_hours, label="sunset")
    ax1.set_ylabel("local clock (h)")
    ax1.set_ylim(0, 24)
    ax1.legend(loc="upper right")
    ax1.grid(True, alpha=0.3)

    ax2.plot(table.day_of_year, table.day_length_hours, color="k")
    ax2.set_ylabel("day length (h)")
    ax2.set_xlabel(f"day of year {table.year}")
    ax2.grid(True, alpha=0.3)

    if title:
        fig.suptitle(title)
    fig.tight_layout()
    if out:
        fig.savefig(out, dpi=150)
    else:
        plt.show()


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="chronosun daylight", description="Sunrise/sunset/day length across a year.")
    p.add_argument("year", type=int)
    p.add_argument("--lat", type=float, required=True, help="latitude in degrees (north positive)")
    p.add_argument("--lon", type=float, required=True, help="longitude in degrees (east positive)")
    p.add_argument("--offset", default="0:00", help="UTC offset, e.g. --offset=-6:00")
    p.add_argument("--plot", action="store_true", help="draw with matplotlib")
    p.add_argument("--out", default=None, help="save the plot instead of showing it")
    args = p.parse_args(argv)

    locale = Locale.from_degrees(args.lat, args.lon, utc_offset=TimeSpan.parse(args.offset))
    table = daylight_table(args.year, locale)

    for k, v in table.summary().items():
        print(f"{k:>22s} : {v}")

    if args.plot:
        plot_daylight(table, title=f"{args.lat:.3f}, {args.lon:.3f}", out=args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
