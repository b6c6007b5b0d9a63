"""Conversion between radians and degrees for scalars and arrays."""

from __future__ import annotations

import math

import numpy as np

D2R = math.pi / 180.0
R2D = 180.0 / math.pi


def _prepare(value):
    if isinstance(value, (list, tuple)):
        return np.asarray(value, dtype=float)
    return value


def rad2deg(value):
    """Convert radians to degrees; works element-wise on arrays."""
    return _prepare(value) * R2D


def deg2rad(value):
    """Convert degrees to radians; works element-wise on arrays."""
    return _prepare(value) * D2R