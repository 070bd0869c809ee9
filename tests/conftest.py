# tests/conftest.py

import pytest

from chronosun.core.span import TimeSpan
from chronosun.locale import Locale
from chronosun.zones import load_zone_catalog


@pytest.fixture
def winnipeg():
    return Locale(latitude=0.8708337756, longitude=-1.69538491, utc_offset=TimeSpan.of(0, -6))


@pytest.fixture
def india():
    return Locale(latitude=0.3594278702, longitude=1.378162592, utc_offset=TimeSpan.of(0, 5, 30))


@pytest.fixture
def calgary():
    return Locale(latitude=0.8909661485, longitude=-1.9909110404, utc_offset=TimeSpan.of(0, -7))


@pytest.fixture
def utc():
    return Locale()


@pytest.fixture
def isolated_catalog(monkeypatch, tmp_path):
    """Point the catalog search away from the real user cache and reset the loader cache."""
    monkeypatch.delenv("CHRONOSUN_ZONE_TABLE", raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    load_zone_catalog.cache_clear()
    yield tmp_path
    load_zone_catalog.cache_clear()
