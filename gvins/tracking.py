"""Decision and bookkeeping steps of visual feature tracking.

Covers block layout for feature detection, list reduction by status masks,
image brightness statistics, key-frame selection and pixel parallax between
a reference frame and the current frame.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np

from gvins.camera import Camera
from gvins.frame import KeyFrameState
from gvins.trackgeom import key_point_parallax

# A histogram change above this ratio marks a frame with a drastic illumination change.
HISTOGRAM_CHANGE_LIMIT = 0.1


class TrackState(IntEnum):
    FIRST_FRAME = 0
    INITIALIZING = 1
    TRACKING = 2
    PASSED = 3
    LOST = 4


@dataclass(frozen=True)
class BlockLayout:
    """Partition of an image into detection blocks, laid out row by row."""

    cols: int
    rows: int
    block_width: int
    block_height: int
    max_block_features: int
    min_pixel_distance: int
    starts: list[tuple[int, int]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return self.cols * self.rows

    def block_of(self, point) -> int:
        """Index of the block holding a pixel point."""
        col = int(float(point[0]) / self.block_width)
        row = int(float(point[1]) / self.block_height)
        return row * self.cols + col


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def block_layout(width: int, height: int, block_size: float, max_features: int) -> BlockLayout:
    """Split a ``width`` x ``height`` image into blocks of about ``block_size`` pixels."""
    cols = _round_half_away(width / block_size)
    rows = _round_half_away(height / block_size)
    if cols <= 0 or rows <= 0:
        raise ValueError("image is too small for the block size")

    block_height = int(height) // rows
    block_width = int(width) // cols
    starts = [(block_width * j, block_height * i) for i in range(rows) for j in range(cols)]

    max_block_features = _round_half_away(float(max_features) / float(cols * rows))
    if max_block_features <= 0:
        raise ValueError("too few features for the number of blocks")

    # The squared spacing of a block's features covers two thirds of the block.
    min_pixel_distance = _round_half_away(block_size / math.sqrt(max_block_features * 1.5))

    return BlockLayout(
        cols=cols,
        rows=rows,
        block_width=block_width,
        block_height=block_height,
        max_block_features=max_block_features,
        min_pixel_distance=min_pixel_distance,
        starts=starts,
    )


def reduce_vector(values, status) -> list:
    """Keep the items whose status flag is set, in order."""
    values = list(values)
    status = list(status)
    if len(status) < len(values):
        raise ValueError("status is shorter than the values")
    return [value for value, keep in zip(values, status) if keep]


def calculate_histogram(image) -> float:
    """Mean intensity of the first channel as a fraction of 256."""
    img = np.asarray(image)
    if img.ndim == 3:
        img = img[..., 0]
    if img.size == 0:
        raise ValueError("image is empty")
    counts, _ = np.histogram(img, bins=256, range=(0, 256))
    levels = np.arange(256, dtype=float) / 256.0
    return float(np.sum(counts * levels)) / img.size


def histogram_change_rate(hist: float, previous: float) -> float:
    """Relative change of a histogram statistic against the previous one."""
    if previous == 0:
        raise ValueError("previous histogram value is zero")
    return abs((hist - previous) / previous)


def check_key_frame_state(
    dt: float,
    parallax: float,
    min_parallax: float,
    max_interval: float,
    min_interval: float,
    window_full: bool,
) -> KeyFrameState:
    """Key-frame type of the current frame from its interval and parallax."""
    if dt < min_interval:
        return KeyFrameState.NONE
    if parallax > min_parallax:
        return KeyFrameState.REMOVE_OLDEST if window_full else KeyFrameState.NORMAL
    if dt > max_interval:
        return KeyFrameState.REMOVE_SECOND_NEW
    return KeyFrameState.NONE


def combined_parallax(parallax_map: float, map_counts: int, parallax_ref: float, ref_counts: int) -> float:
    """Count-weighted mean of map-point and reference-point parallax; NaN with no counts."""
    total = map_counts + ref_counts
    if total == 0:
        return math.nan
    return (parallax_map * map_counts + parallax_ref * ref_counts) / total


def parallax_from_reference_key_points(
    camera: Camera, ref_frames, frame_ref, frame_cur, ref, cur
) -> tuple[float, int]:
    """Mean parallax and count of the points whose reference frame is ``frame_ref``."""
    parallax = 0.0
    counts = 0
    for ref_frame, pp_ref, pp_cur in zip(ref_frames, ref, cur):
        if ref_frame is frame_ref:
            parallax += key_point_parallax(camera, pp_ref, pp_cur, frame_ref.pose, frame_cur.pose)
            counts += 1
    if counts:
        parallax /= counts
    return parallax, counts


def parallax_from_reference_map_points(camera: Camera, frame_ref, frame_cur) -> tuple[float, int]:
    """Mean parallax and count of ``frame_ref``'s map points last observed in ``frame_cur``."""
    parallax = 0.0
    counts = 0
    for feature in frame_ref.features().values():
        mappoint = feature.mappoint()
        if mappoint is None or mappoint.is_outlier:
            continue
        observations = mappoint.observations()
        if not observations:
            continue
        latest = observations[-1]
        if latest is None or latest.is_outlier:
            continue
        if latest.frame() is frame_cur:
            parallax += key_point_parallax(
                camera, feature.keypoint, latest.keypoint, frame_ref.pose, frame_cur.pose
            )
            counts += 1
    if counts:
        parallax /= counts
    return parallax, counts