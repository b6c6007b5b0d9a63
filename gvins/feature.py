"""Image feature: a key point in one frame, optionally linked to a map point."""

from __future__ import annotations

import weakref
from enum import IntEnum

import numpy as np


class FeatureType(IntEnum):
    NONE = -1
    MATCHED = 0
    TRIANGULATED = 1
    DEPTH_ASSOCIATED = 2


class Feature:
    """A key point observation; frame and map point are held weakly."""

    def __init__(self, frame, velocity, keypoint, distorted, feature_type: FeatureType) -> None:
        self._frame = weakref.ref(frame) if frame is not None else None
        self._mappoint = None
        self.keypoint = np.asarray(keypoint, dtype=float).copy()
        self.distorted_keypoint = np.asarray(distorted, dtype=float).copy()
        self.is_outlier = False
        self.feature_type = FeatureType(feature_type)
        vel = np.asarray(velocity, dtype=float)
        self.velocity_in_pixel = np.array([vel[0], vel[1], 0.0])

    def frame(self):
        """The owning frame, or None once it is gone."""
        return self._frame() if self._frame is not None else None

    def mappoint(self):
        """The linked map point, or None if unset or gone."""
        return self._mappoint() if self._mappoint is not None else None

    def add_map_point(self, mappoint) -> None:
        self._mappoint = weakref.ref(mappoint) if mappoint is not None else None

    def set_velocity_in_pixel(self, velocity) -> None:
        vel = np.asarray(velocity, dtype=float)
        self.velocity_in_pixel = np.array([vel[0], vel[1], 0.0])