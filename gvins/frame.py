"""Image frame with pose, features and key-frame bookkeeping."""

from __future__ import annotations

import itertools
import threading
from enum import IntEnum

import numpy as np

from gvins.types import Pose

_frame_ids = itertools.count()
_keyframe_ids = itertools.count()
_id_lock = threading.Lock()


class KeyFrameState(IntEnum):
    NONE = 0
    REMOVE_SECOND_NEW = 1
    NORMAL = 2
    REMOVE_OLDEST = 3


class Frame:
    """A camera frame; mutable state is guarded by a lock."""

    def __init__(self, frame_id: int, stamp: float, image) -> None:
        self._lock = threading.RLock()
        self._id = frame_id
        self._keyframe_id = 0
        self._keyframe_state = KeyFrameState.NORMAL
        self._is_keyframe = False
        self._pose = Pose()
        self._features: dict = {}
        self._unupdated_mappoints: list = []

        self.stamp = stamp
        self.time_delay = 0.0
        self.image = image
        self.raw_image = None if image is None else np.array(image, copy=True)

    @property
    def id(self) -> int:
        return self._id

    @property
    def keyframe_id(self) -> int:
        return self._keyframe_id

    @property
    def is_keyframe(self) -> bool:
        return self._is_keyframe

    @property
    def keyframe_state(self) -> int:
        with self._lock:
            return self._keyframe_state

    @keyframe_state.setter
    def keyframe_state(self, state) -> None:
        with self._lock:
            self._keyframe_state = state

    @property
    def pose(self) -> Pose:
        with self._lock:
            return self._pose

    @pose.setter
    def pose(self, pose: Pose) -> None:
        with self._lock:
            self._pose = pose

    def set_key_frame(self, state) -> None:
        """Mark as key frame, assigning the next key-frame id; no-op if already one."""
        with self._lock:
            if not self._is_keyframe:
                self._is_keyframe = True
                with _id_lock:
                    self._keyframe_id = next(_keyframe_ids)
                self._keyframe_state = state

    def reset_key_frame(self) -> None:
        with self._lock:
            self._is_keyframe = False
            self._keyframe_state = KeyFrameState.NONE

    def features(self) -> dict:
        """Copy of the features keyed by map-point id."""
        with self._lock:
            return dict(self._features)

    def clear_features(self) -> None:
        with self._lock:
            self._features.clear()
            self._unupdated_mappoints.clear()

    def num_features(self) -> int:
        with self._lock:
            return len(self._features)

    def unupdated_mappoints(self) -> list:
        with self._lock:
            return list(self._unupdated_mappoints)

    def add_new_unupdated_mappoint(self, mappoint) -> None:
        with self._lock:
            self._unupdated_mappoints.append(mappoint)

    def add_feature(self, mappoint_id: int, feature) -> None:
        """Attach a feature; an existing entry for the same id is kept."""
        with self._lock:
            self._features.setdefault(mappoint_id, feature)


def create_frame(stamp: float, image) -> Frame:
    """New frame with the next frame id."""
    with _id_lock:
        frame_id = next(_frame_ids)
    return Frame(frame_id, stamp, image)