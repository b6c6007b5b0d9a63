"""Conversion between GPS week/seconds-of-week and Unix time."""

from __future__ import annotations

import math

GPS_LEAP_SECOND = 18
SECONDS_PER_WEEK = 604800
GPS_EPOCH_UNIX = 315964800


def gps2unix(week: int, sow: float) -> float:
    """Unix seconds for a GPS week and second of week."""
    return sow + week * SECONDS_PER_WEEK + GPS_EPOCH_UNIX - GPS_LEAP_SECOND


def unix2gps(unixs: float) -> tuple[int, float]:
    """GPS week and second of week for Unix seconds."""
    seconds = unixs + GPS_LEAP_SECOND - GPS_EPOCH_UNIX
    week = math.floor(seconds / SECONDS_PER_WEEK)
    return week, seconds - week * SECONDS_PER_WEEK