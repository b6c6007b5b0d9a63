"""Plain navigation records: GNSS fixes, PVA states, IMU increments and poses."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _zeros3() -> np.ndarray:
    return np.zeros(3)


def _identity3() -> np.ndarray:
    return np.eye(3)


@dataclass
class GNSS:
    """A GNSS position fix with its standard deviation and optional yaw."""

    time: float = 0.0
    blh: np.ndarray = field(default_factory=_zeros3)
    std: np.ndarray = field(default_factory=_zeros3)
    isyawvalid: bool = False
    yaw: float = 0.0


@dataclass
class PVA:
    """Position, velocity and attitude at a given time."""

    time: float = 0.0
    blh: np.ndarray = field(default_factory=_zeros3)
    vel: np.ndarray = field(default_factory=_zeros3)
    att: np.ndarray = field(default_factory=_zeros3)


@dataclass
class IMU:
    """Incremental IMU measurement over an interval ``dt``."""

    time: float = 0.0
    dt: float = 0.0
    dtheta: np.ndarray = field(default_factory=_zeros3)
    dvel: np.ndarray = field(default_factory=_zeros3)
    odovel: float = 0.0


@dataclass
class Pose:
    """Rigid transform given by a rotation matrix ``R`` and translation ``t``."""

    R: np.ndarray = field(default_factory=_identity3)
    t: np.ndarray = field(default_factory=_zeros3)