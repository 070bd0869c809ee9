# tests/test_cli.py

from unittest.mock import patch

from chronosun import cli
from chronosun.core.errors import ZoneTableError


def test_zone(isolated_catalog, capsys):
    assert cli.main(["zone", "--lat", "49.89", "--lon", "-97.14"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("CST\tCentral Standard Time")


def test_zone_daylight_kind(isolated_catalog, capsys):
    assert cli.main(["zone", "--lat", "-41.29", "--lon", "174.78", "--kind", "daylight"]) == 0
    assert capsys.readouterr().out.startswith("NZDT")


def test_time_views(capsys):
    rc = cli.main(["time", "2018-01-20T18:31:00", "--lat", "49.89", "--lon", "-97.14", "--offset=-6:00"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "2018-01-20T12:31:00-06:00" in out
    assert "UTC       : 2018-01-20 18:31:00" in out
    assert "LOCAL     : 2018-01-20 12:31:00" in out


def test_time_local_input_with_dst(capsys):
    rc = cli.main(["time", "2018-10-04T00:12:15", "--lat", "40", "--lon", "-75", "--offset=-5:00", "--dst", "--local"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "13214722335000000" in out
    assert "2018-10-04T00:12:15-04:00" in out


def test_sun(capsys):
    rc = cli.main(["sun", "2018-01-20", "--lat", "49.89", "--lon", "-97.14", "--offset=-6:00"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "sunrise" in out
    assert "2018-01-20T08:" in out
    assert "day length" in out


def test_sun_flags_missing_events(capsys):
    assert cli.main(["sun", "2018-06-21", "--lat", "66", "--lon", "0"]) == 0
    out = capsys.readouterr().out
    assert "none" in out
    assert "status" in out


def test_library_errors_exit_2(capsys):
    with patch("chronosun.cli.cmd_zone", side_effect=ZoneTableError("bad table")):
        assert cli.main(["zone", "--lat", "0", "--lon", "0"]) == 2
    assert "chronosun: bad table" in capsys.readouterr().err
