"""Landmark seen from a reference frame and observed by features in other frames."""

from __future__ import annotations

import itertools
import threading
import weakref
from enum import IntEnum

import numpy as np

_mappoint_ids = itertools.count()
_id_lock = threading.Lock()


class MapPointType(IntEnum):
    NONE = -1
    TRIANGULATED = 0
    DEPTH_ASSOCIATED = 1
    DEPTH_INITIALIZED = 2
    FIXED = 3


def _weak(obj):
    return weakref.ref(obj) if obj is not None else None


def _deref(ref):
    return ref() if ref is not None else None


class MapPoint:
    """A 3D landmark; the reference frame and observing features are held weakly."""

    DEFAULT_DEPTH = 10.0
    NEAREST_DEPTH = 1.0
    FARTHEST_DEPTH = 200.0

    def __init__(self, mappoint_id: int, ref_frame, pos, keypoint, depth: float, mappoint_type) -> None:
        self._lock = threading.Lock()
        self._id = mappoint_id
        self._observations: list[weakref.ref] = []
        self._need_update = False

        self._pos = np.asarray(pos, dtype=float).copy()
        self._pos_tmp = np.zeros(3)

        if depth < self.NEAREST_DEPTH or depth > self.FARTHEST_DEPTH:
            depth = self.DEFAULT_DEPTH
        self._depth = float(depth)
        self._depth_tmp = self.DEFAULT_DEPTH

        self._ref_keypoint = np.asarray(keypoint, dtype=float).copy()
        self._ref_keypoint_tmp = np.zeros(2)
        self._ref_frame = _weak(ref_frame)
        self._ref_frame_tmp = None

        self._optimized_times = 0
        self._used_times = 0
        self._observed_times = 0
        self._is_outlier = False

        self._type = MapPointType(mappoint_type)
        self._type_tmp = MapPointType.NONE

    @property
    def id(self) -> int:
        return self._id

    @property
    def pos(self) -> np.ndarray:
        with self._lock:
            return self._pos

    @pos.setter
    def pos(self, value) -> None:
        with self._lock:
            self._pos = np.asarray(value, dtype=float).copy()

    @property
    def observed_times(self) -> int:
        return self._observed_times

    @property
    def used_times(self) -> int:
        with self._lock:
            return self._used_times

    @property
    def optimized_times(self) -> int:
        with self._lock:
            return self._optimized_times

    @property
    def is_outlier(self) -> bool:
        with self._lock:
            return self._is_outlier

    @is_outlier.setter
    def is_outlier(self, value: bool) -> None:
        with self._lock:
            self._is_outlier = bool(value)

    @property
    def depth(self) -> float:
        with self._lock:
            return self._depth

    @property
    def mappoint_type(self) -> MapPointType:
        with self._lock:
            return self._type

    @mappoint_type.setter
    def mappoint_type(self, value) -> None:
        with self._lock:
            self._type = MapPointType(value)

    @property
    def reference_keypoint(self) -> np.ndarray:
        with self._lock:
            return self._ref_keypoint

    @property
    def is_need_update(self) -> bool:
        with self._lock:
            return self._need_update

    def add_observation(self, feature) -> None:
        with self._lock:
            self._observations.append(weakref.ref(feature))
            self._observed_times += 1

    def increase_used_times(self) -> None:
        with self._lock:
            self._used_times += 1

    def decrease_used_times(self) -> None:
        """Decrement the use count, never below zero."""
        with self._lock:
            if self._used_times:
                self._used_times -= 1

    def add_optimized_times(self) -> None:
        with self._lock:
            self._optimized_times += 1

    def remove_all_observations(self) -> None:
        with self._lock:
            self._observations.clear()

    def observations(self) -> list:
        """Observing features in order of addition; None where a feature is gone."""
        with self._lock:
            return [ref() for ref in self._observations]

    def set_reference_frame(self, frame, pos, keypoint, depth: float, mappoint_type) -> None:
        """Stage a new reference frame; the change is marked as pending."""
        with self._lock:
            self._depth_tmp = float(depth) if depth >= 1.0 else self.DEFAULT_DEPTH
            self._pos_tmp = np.asarray(pos, dtype=float).copy()
            self._ref_frame_tmp = _weak(frame)
            self._ref_keypoint_tmp = np.asarray(keypoint, dtype=float).copy()
            self._type_tmp = MapPointType(mappoint_type)
            self._need_update = True

    def update_depth(self, depth: float) -> None:
        with self._lock:
            self._depth = float(depth)

    def reference_frame_id(self) -> int:
        """Id of the reference frame, or 0 once it is gone."""
        with self._lock:
            frame = _deref(self._ref_frame)
            return frame.id if frame is not None else 0

    def reference_frame(self):
        """The reference frame, or None once it is gone."""
        with self._lock:
            return _deref(self._ref_frame)


def create_map_point(ref_frame, pos, keypoint, depth: float, mappoint_type) -> MapPoint:
    """New map point with the next map-point id."""
    with _id_lock:
        mappoint_id = next(_mappoint_ids)
    return MapPoint(mappoint_id, ref_frame, pos, keypoint, depth, mappoint_type)