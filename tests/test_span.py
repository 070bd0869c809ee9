# tests/test_span.py

import pytest
from datetime import timedelta

from chronosun.core.span import DAY, HOUR, MICROSECOND, MINUTE, SECOND, ZERO, TimeSpan


def test_decomposition_positive():
    s = TimeSpan.of(3, 2, 45, 10, 123456)
    assert s.days == 3
    assert s.hours == 2
    assert s.minutes == 45
    assert s.seconds == 10
    assert s.microseconds == 123456
    assert s.milliseconds == 123
    assert s.total_hours == 3 * 24 + 2
    assert s.total_minutes == (3 * 24 + 2) * 60 + 45
    assert s.total_seconds == ((3 * 24 + 2) * 60 + 45) * 60 + 10


def test_decomposition_truncates_toward_zero():
    s = -TimeSpan.of(0, 1, 30)
    assert s.total_hours == -1
    assert s.hours == -1
    assert s.minutes == -30
    assert s.days == 0
    assert (-TimeSpan.of(1, 12)).days == -1


def test_years_rounding_rule():
    assert ZERO.years == 0
    assert TimeSpan.of(91).years == 0
    assert TimeSpan.of(92).years == 1
    assert TimeSpan.of(365).years == 1


def test_constants():
    assert MICROSECOND.micros == 1
    assert SECOND == MICROSECOND * 1_000_000
    assert MINUTE == SECOND * 60
    assert HOUR == MINUTE * 60
    assert DAY == HOUR * 24
    assert not ZERO


def test_arithmetic_and_ordering():
    assert HOUR + MINUTE == TimeSpan.of(0, 1, 1)
    assert HOUR - DAY == -TimeSpan.of(0, 23)
    assert 2 * HOUR == HOUR * 2
    assert DAY // 24 == HOUR
    assert DAY // HOUR == 24
    assert abs(-HOUR) == HOUR
    assert -HOUR < ZERO < MICROSECOND < SECOND < HOUR < DAY
    assert sorted([DAY, -HOUR, ZERO]) == [-HOUR, ZERO, DAY]
    assert len({TimeSpan.of(0, 1), HOUR}) == 1


def test_purge():
    s = TimeSpan.of(1, 2, 3, 4, 5)
    assert s.purge_to_second() == TimeSpan.of(1, 2, 3, 4)
    assert s.purge_to_minute() == TimeSpan.of(1, 2, 3)
    assert s.purge_to_hour() == TimeSpan.of(1, 2)
    assert s.purge_to_day() == DAY
    assert (-s).purge_to_hour() == -TimeSpan.of(1, 2)


def test_parse_clock_forms():
    s = TimeSpan.parse("0:0:10.5")
    assert s.seconds == 10
    assert s.microseconds == 500000
    assert TimeSpan.parse("120:00:00").days == 5
    assert TimeSpan.parse("-3:30") == -TimeSpan.of(0, 3, 30)
    assert TimeSpan.parse("1:02:03.000004") == TimeSpan.of(0, 1, 2, 3, 4)


def test_parse_days_form():
    assert TimeSpan.parse("3 days 2:45:0") == TimeSpan.of(3, 2, 45)
    assert TimeSpan.parse("1 day, 0:00") == DAY


def test_parse_iso_duration():
    s = TimeSpan.parse("P3DT1H5M10.5S")
    assert s.days == 3
    assert s.hours == 1
    assert s.minutes == 5
    assert s.seconds == 10
    assert s.milliseconds == 500
    assert TimeSpan.parse("PT90M") == TimeSpan.of(0, 1, 30)
    assert TimeSpan.parse("-P1D") == -DAY


@pytest.mark.parametrize("bad", ["", "bogus", "PT", "P", "1:2:3:4", "3 weeks 1:00"])
def test_parse_rejects(bad):
    with pytest.raises(ValueError):
        TimeSpan.parse(bad)


def test_format():
    assert TimeSpan.of(3, 2, 45).format() == "3 days 02:45:00"
    assert TimeSpan.of(1, 0, 0, 0, 5).format() == "1 day 00:00:00.000005"
    assert str(-TimeSpan.of(0, 1, 30)) == "-01:30:00"
    assert str(ZERO) == "00:00:00"


def test_timedelta_interop():
    td = timedelta(days=-1, seconds=5, microseconds=7)
    assert TimeSpan.from_timedelta(td).to_timedelta() == td
    assert TimeSpan.from_seconds(1.5) == SECOND + TimeSpan(500000)
