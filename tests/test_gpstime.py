import pytest

from gvins.gpstime import GPS_LEAP_SECOND, gps2unix, unix2gps


def test_gps_epoch():
    assert gps2unix(0, 0.0) == 315964800 - GPS_LEAP_SECOND
    assert unix2gps(315964800 - GPS_LEAP_SECOND) == (0, 0.0)


@pytest.mark.parametrize("week,sow", [(2200, 345600.5), (1, 0.0), (2048, 604799.0)])
def test_round_trip(week, sow):
    result_week, result_sow = unix2gps(gps2unix(week, sow))
    assert result_week == week
    assert result_sow == pytest.approx(sow)


def test_before_gps_epoch_floors_week():
    week, sow = unix2gps(0.0)
    assert week < 0
    assert 0.0 <= sow < 604800