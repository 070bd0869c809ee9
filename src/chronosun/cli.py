from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

from .core.errors import ChronosunError

_DATETIME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:[T ](\d{1,2}):(\d{2})(?::(\d{2})(?:\.(\d{1,6}))?)?)?$")


def _parse_datetime(s: str) -> tuple:
    m = _DATETIME_RE.match(s.strip())
    if not m:
        raise SystemExit(f"expected YYYY-MM-DD[THH:MM[:SS[.ffffff]]], got {s!r}")
    y, mo, d, h, mi, sec, frac = m.groups()
    us = int((frac + "000000")[:6]) if frac else 0
    return int(y), int(mo), int(d), int(h or 0), int(mi or 0), int(sec or 0), us


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _location_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", type=float, required=True, help="latitude in degrees (north positive)")
    p.add_argument("--lon", type=float, required=True, help="longitude in degrees (east positive)")
    p.add_argument("--offset", default="0:00", help="UTC offset as [-]H:MM, e.g. --offset=-6:00")
    p.add_argument("--dst", action="store_true", help="observe one hour of daylight saving all year")


def _locale_from_args(args):
    from .core.span import DAY, TimeSpan
    from .locale import Locale

    locale = Locale.from_degrees(args.lat, args.lon, utc_offset=TimeSpan.parse(args.offset))
    if args.dst:
        locale = locale.with_dst_window(TimeSpan(0), DAY * 366)
    return locale


def cmd_sun(argv: list[str]) -> int:
    from .locale import ZonedTime
    from .solar.events import solar_events_for

    p = argparse.ArgumentParser(prog="chronosun sun", description="Sunrise, solar noon and sunset for a date.")
    p.add_argument("date", help="YYYY-MM-DD")
    _location_args(p)
    args = p.parse_args(argv)

    y, m, d = _parse_datetime(args.date)[:3]
    locale = _locale_from_args(args)
    sd = solar_events_for((y, m, d), locale)

    def show(label, instant):
        text = ZonedTime(instant, locale).isoformat() if instant is not None else "none"
        print(f"  {label:<10s}: {text}")

    print(f"{y:04d}-{m:02d}-{d:02d} at {args.lat:.4f}, {args.lon:.4f}")
    show("sunrise", sd.sunrise)
    show("solar noon", sd.solar_noon)
    show("sunset", sd.sunset)
    if sd.day_length is not None:
        print(f"  {'day length':<10s}: {sd.day_length}")
    if sd.status:
        print(f"  {'status':<10s}: {sd.status.name or sd.status!r}")
    print(f"  {'EoT':<10s}: {sd.equation_of_time:+.2f} min")
    print(f"  {'decl':<10s}: {sd.declination:+.4f} deg")
    return 0


def cmd_time(argv: list[str]) -> int:
    from .core.instant import Instant
    from .locale import View, ZonedTime

    p = argparse.ArgumentParser(prog="chronosun time", description="Show an instant through each clock view.")
    p.add_argument("when", help="YYYY-MM-DDTHH:MM[:SS[.ffffff]]")
    _location_args(p)
    p.add_argument("--local", action="store_true", help="read WHEN on the local clock instead of UTC")
    args = p.parse_args(argv)

    fields = _parse_datetime(args.when)
    locale = _locale_from_args(args)
    if args.local:
        zt = ZonedTime.from_local(*fields, locale=locale)
    else:
        zt = ZonedTime(Instant.from_civil(*fields), locale)

    views = [
        ("UTC", View.UTC),
        ("LOCAL", View.LOCAL),
        ("LOCAL+DST", View.LOCAL | View.WITH_DST),
        ("SOLAR", View.SOLAR),
    ]
    print(f"  {'ISO':<10s}: {zt.isoformat()}")
    print(f"  {'raw':<10s}: {zt.instant.raw}")
    for label, view in views:
        f = zt.fields(view)
        print(
            f"  {label:<10s}: {f.year:04d}-{f.month:02d}-{f.day:02d} "
            f"{f.hour:02d}:{f.minute:02d}:{f.second:02d}  dow={f.day_of_week} doy={f.day_of_year}"
        )
    return 0


def cmd_zone(argv: list[str]) -> int:
    from .locale import Locale
    from .zones import ZoneKind

    p = argparse.ArgumentParser(prog="chronosun zone", description="Guess the catalog time zone for a location.")
    p.add_argument("--lat", type=float, required=True)
    p.add_argument("--lon", type=float, required=True)
    p.add_argument("--kind", choices=[k.value for k in ZoneKind], default=ZoneKind.STANDARD.value)
    args = p.parse_args(argv)

    locale = Locale.from_degrees(args.lat, args.lon)
    zone = locale.guess_zone(ZoneKind(args.kind))
    if zone is None:
        print("no zone")
        return 1
    print(f"{zone.code}\t{zone.name}\tUTC{'+' if zone.offset.micros >= 0 else '-'}{abs(zone.offset)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="chronosun", description="Instants, clock views and sunrise/sunset.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("sun", help="Sunrise, solar noon and sunset for a date")
    sub.add_parser("time", help="Show an instant through UTC/local/solar views")
    sub.add_parser("zone", help="Guess the catalog time zone for a location")
    sub.add_parser("daylight", help="Year of sunrise/sunset/day length (diagnostics)")

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.cmd == "sun":
            return cmd_sun(rest)
        if args.cmd == "time":
            return cmd_time(rest)
        if args.cmd == "zone":
            return cmd_zone(rest)
        if args.cmd == "daylight":
            return _run_module_main("chronosun.diagnostics.daylight", rest)
    except ChronosunError as e:
        print(f"chronosun: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
