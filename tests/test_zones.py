# tests/test_zones.py

import logging

import pytest

from chronosun.core.errors import ZoneTableError
from chronosun.core.span import HOUR, TimeSpan
from chronosun.locale import Locale
from chronosun.zones import ZoneCatalog, ZoneKind, load_zone_catalog, read_zone_rows


def _row(**kw):
    row = {"id": "1", "kind": "standard", "code": "TST", "name": "Test Time", "offset": "1:00", "dst": "0:00"}
    row.update(kw)
    return row


def test_packaged_catalog(isolated_catalog):
    cat = load_zone_catalog()
    assert len(cat.of_kind(ZoneKind.STANDARD)) == 28
    assert len(cat.of_kind(ZoneKind.DAYLIGHT)) == 18
    assert len(cat.of_kind(ZoneKind.MILITARY)) == 25
    assert load_zone_catalog() is cat


def test_lookups(isolated_catalog):
    cat = load_zone_catalog()
    assert cat.by_code("nzst").name == "New Zealand Standard Time"
    assert cat.by_name("Central Standard Time").code == "CST"
    assert cat.by_name("pdt").offset == TimeSpan.of(0, -8)
    # codes are not unique across kinds; catalog order decides
    assert cat.by_code("IST").name == "Indian Standard Time"
    assert cat.by_code("IST", ZoneKind.DAYLIGHT).name == "Irish Summer Time"
    assert cat.by_id(115).code == "NZDT"
    assert cat.by_id(9999) is None
    assert cat.by_code("XYZ") is None
    assert [z.code for z in cat.by_offset_hours(5.5)] == ["IST"]
    assert [z.code for z in cat.by_offset_hours(-3.5)] == ["NST", "NDT"]
    assert cat.by_code("NDT").has_dst


def test_guess_zone_nearest_meridian(isolated_catalog, winnipeg, india):
    assert winnipeg.guess_zone().code == "CST"
    assert winnipeg.guess_zone(ZoneKind.DAYLIGHT).code == "CDT"
    assert winnipeg.guess_zone(ZoneKind.MILITARY).code == "S"
    assert india.guess_zone().code == "IST"


def test_guess_zone_wraps_longitude(isolated_catalog, winnipeg):
    wrapped = winnipeg.with_location(winnipeg.latitude, winnipeg.longitude + 2 * 3.141592653589793)
    assert wrapped.guess_zone().code == "CST"


def test_guess_zone_ties_keep_first(isolated_catalog):
    # AEST and GST are both UTC+10
    assert Locale.from_degrees(0.0, 150.0).guess_zone().code == "AEST"


def test_guess_zone_special_regions(isolated_catalog):
    wellington = Locale.from_degrees(-41.29, 174.78)
    assert wellington.guess_zone().code == "NZST"
    assert wellington.guess_zone(ZoneKind.DAYLIGHT).code == "NZDT"
    hobart = Locale.from_degrees(-42.88, 147.33)
    assert hobart.guess_zone().code == "AEST"
    assert hobart.guess_zone(ZoneKind.DAYLIGHT).code == "AEDT"


def test_guess_zone_with_injected_catalog(winnipeg):
    cat = read_zone_rows([_row(), _row(id="2", code="TS2", offset="-7:00")])
    assert winnipeg.guess_zone(catalog=cat).code == "TS2"
    assert winnipeg.guess_zone(ZoneKind.DAYLIGHT, catalog=cat) is None
    assert winnipeg.guess_zone(catalog=ZoneCatalog(())) is None


def test_env_override(isolated_catalog, monkeypatch):
    path = isolated_catalog / "zones.csv"
    path.write_text("id,kind,code,name,offset,dst\n7,standard,ONE,Only Zone,3:00,0:00\n", encoding="utf-8")
    monkeypatch.setenv("CHRONOSUN_ZONE_TABLE", str(path))
    load_zone_catalog.cache_clear()

    cat = load_zone_catalog()
    assert len(cat) == 1
    assert cat.by_code("ONE").offset == TimeSpan.of(0, 3)


def test_user_cache_is_searched(isolated_catalog):
    cache = isolated_catalog / "cache" / "chronosun"
    cache.mkdir(parents=True)
    (cache / "timezones.csv").write_text(
        "id,kind,code,name,offset,dst\n1,daylight,CCH,Cached,2:00,1:00\n", encoding="utf-8"
    )
    load_zone_catalog.cache_clear()
    assert [z.code for z in load_zone_catalog()] == ["CCH"]


def test_bad_override_falls_back(isolated_catalog, monkeypatch, caplog):
    path = isolated_catalog / "broken.csv"
    path.write_text("id,kind,code\n1,nonsense,X\n", encoding="utf-8")
    monkeypatch.setenv("CHRONOSUN_ZONE_TABLE", str(path))
    load_zone_catalog.cache_clear()

    with caplog.at_level(logging.WARNING, logger="chronosun.zones"):
        cat = load_zone_catalog()
    assert cat.by_code("CST") is not None
    assert "could not read zone table" in caplog.text


def test_missing_override_falls_back(isolated_catalog, monkeypatch, caplog):
    monkeypatch.setenv("CHRONOSUN_ZONE_TABLE", str(isolated_catalog / "nope.csv"))
    load_zone_catalog.cache_clear()
    with caplog.at_level(logging.WARNING, logger="chronosun.zones"):
        assert load_zone_catalog().by_code("CST") is not None
    assert "is not a file" in caplog.text


@pytest.mark.parametrize(
    "rows",
    [
        [],
        [_row(kind="galactic")],
        [_row(offset="noon")],
        [_row(), _row()],
        [_row(dst="5:00")],
        [{"id": "1", "kind": "standard"}],
    ],
)
def test_malformed_tables(rows):
    with pytest.raises(ZoneTableError):
        read_zone_rows(rows)


def test_zone_fields():
    z = read_zone_rows([_row(offset="-3:30", dst="1:00")]).by_id(1)
    assert z.offset == -TimeSpan.of(0, 3, 30)
    assert z.dst == HOUR
    assert z.has_dst
    assert z.kind is ZoneKind.STANDARD


def test_module_docstring():
    import chronosun.zones
    assert chronosun.zones.__doc__.strip().startswith("chronosun.zones")
