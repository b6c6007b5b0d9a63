"""Sliding-window map of key frames and landmarks."""

from __future__ import annotations

import threading


class Map:
    """Key frames keyed by key-frame id and landmarks keyed by map-point id."""

    def __init__(self, size: int = 20) -> None:
        self._lock = threading.RLock()
        self._keyframes: dict = {}
        self._landmarks: dict = {}
        self._latest_keyframe = None
        self._window_size = int(size)
        self._is_window_full = False

    @property
    def window_size(self) -> int:
        return self._window_size

    @window_size.setter
    def window_size(self, size: int) -> None:
        self._window_size = int(size)

    @property
    def keyframes(self) -> dict:
        with self._lock:
            return dict(self._keyframes)

    @property
    def landmarks(self) -> dict:
        with self._lock:
            return dict(self._landmarks)

    def insert_key_frame(self, frame) -> None:
        """Add a key frame and move its pending map points into the landmarks."""
        with self._lock:
            self._latest_keyframe = frame
            self._keyframes[frame.keyframe_id] = frame
            for mappoint in frame.unupdated_mappoints():
                self._landmarks[mappoint.id] = mappoint
            if len(self._keyframes) > self._window_size:
                self._is_window_full = True

    def ordered_key_frames(self) -> list:
        """Key-frame ids in ascending order."""
        with self._lock:
            return sorted(self._keyframes)

    def oldest_key_frame(self):
        with self._lock:
            ordered = self.ordered_key_frames()
            if not ordered:
                raise LookupError("map holds no key frames")
            return self._keyframes[ordered[0]]

    def latest_key_frame(self):
        with self._lock:
            return self._latest_keyframe

    def remove_mappoint(self, mappoint) -> None:
        """Mark a map point as outlier, drop its observations and remove it."""
        with self._lock:
            mappoint.is_outlier = True
            mappoint.remove_all_observations()
            self._landmarks.pop(mappoint.id, None)

    def remove_key_frame(self, frame, isremovemappoint: bool) -> None:
        """Remove a key frame, and optionally the landmarks it is the reference of."""
        with self._lock:
            if isremovemappoint:
                ids = []
                for feature in frame.features().values():
                    mappoint = feature.mappoint()
                    if mappoint is None:
                        continue
                    if mappoint.reference_frame() is not frame:
                        continue
                    ids.append(mappoint.id)
                for mappoint_id in ids:
                    mappoint = self._landmarks.get(mappoint_id)
                    if mappoint is not None:
                        mappoint.remove_all_observations()
                        mappoint.is_outlier = True
                        del self._landmarks[mappoint_id]
                frame.clear_features()

            self._keyframes.pop(frame.keyframe_id, None)

    def mappoint_observed_rate(self, mappoint) -> float:
        """Share of the map's key frames in which the map point is observed."""
        with self._lock:
            num_keyframes = len(self._keyframes)
            num_observed = 0
            for feature in mappoint.observations():
                if feature is None:
                    continue
                frame = feature.frame()
                if frame is None:
                    continue
                if frame.keyframe_id in self._keyframes:
                    num_observed += 1
            return num_observed / num_keyframes

    def is_maximum_keyframes(self) -> bool:
        with self._lock:
            return len(self._keyframes) > self._window_size

    def is_key_frame_in_map(self, frame) -> bool:
        with self._lock:
            return frame.keyframe_id in self._keyframes

    def is_window_full(self) -> bool:
        with self._lock:
            return self._is_window_full

    def is_window_normal(self) -> bool:
        with self._lock:
            return len(self._keyframes) == self._window_size