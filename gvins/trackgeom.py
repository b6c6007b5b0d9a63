"""Geometry used by feature tracking: poses, triangulation, parallax and track checks."""

from __future__ import annotations

import math

import numpy as np

from gvins.angle import R2D
from gvins.camera import Camera, world2cam
from gvins.mappoint import MapPoint
from gvins.rotation import matrix2euler
from gvins.types import Pose

# Feature-detection block size in pixels.
TRACK_BLOCK_SIZE = 200.0
# Pyramid levels for optical-flow tracking.
TRACK_PYRAMID_LEVEL = 3
# Minimum pixel parallax before a point is triangulated.
TRACK_MIN_PARALLAX = 10.0
# Minimum time between observation frames, in seconds.
TRACK_MIN_INTERVAL = 0.08

# Maximum depth difference for a three-point plane fit.
ASSOCIATE_MAXIUM_DISTANCE = 1.0
ASSOCIATE_MAXIUM_DISTANCE_RATE = 0.05
ASSOCIATE_DEPTH_STD = 0.1

_BORDER = 5.0


def pose2tcw(pose: Pose) -> np.ndarray:
    """Homogeneous world-to-camera transform of a camera-to-world pose."""
    rotation = np.asarray(pose.R, dtype=float)
    tcw = np.zeros((4, 4))
    tcw[3, 3] = 1.0
    tcw[:3, :3] = rotation.T
    tcw[:3, 3] = -rotation.T @ np.asarray(pose.t, dtype=float)
    return tcw


def triangulate_point(pose0, pose1, pc0, pc1) -> np.ndarray:
    """Linear triangulation of a world point from two 3x4 world-to-camera matrices.

    ``pc0`` and ``pc1`` are normalised camera coordinates of the point in each view.
    """
    p0 = np.asarray(pose0, dtype=float)[:3]
    p1 = np.asarray(pose1, dtype=float)[:3]
    c0 = np.asarray(pc0, dtype=float)
    c1 = np.asarray(pc1, dtype=float)

    design = np.array(
        [
            c0[0] * p0[2] - p0[0],
            c0[1] * p0[2] - p0[1],
            c1[0] * p1[2] - p1[0],
            c1[1] * p1[2] - p1[1],
        ]
    )
    _, _, vh = np.linalg.svd(design)
    point = vh[-1]
    return point[:3] / point[3]


def pts_distance(pt1, pt2) -> float:
    """Euclidean distance between two pixel points."""
    dx = float(pt1[0]) - float(pt2[0])
    dy = float(pt1[1]) - float(pt2[1])
    return math.sqrt(dx * dx + dy * dy)


def is_good_depth(depth: float, scale: float = 1.0) -> bool:
    """Whether a depth lies strictly between the nearest and the scaled farthest depth."""
    return MapPoint.NEAREST_DEPTH < depth < MapPoint.FARTHEST_DEPTH * scale


def is_on_border(camera: Camera, pts) -> bool:
    """Whether a pixel lies within five pixels of the image border."""
    x, y = float(pts[0]), float(pts[1])
    return (
        x < _BORDER
        or y < _BORDER
        or x > camera.width - _BORDER
        or y > camera.height - _BORDER
    )


def key_point_parallax(camera: Camera, pp0, pp1, pose0: Pose, pose1: Pose) -> float:
    """Pixel parallax between two observations after compensating the rotation."""
    pc0 = camera.pixel2cam(pp0)
    pc1 = camera.pixel2cam(pp1)
    pc01 = pose1.R.T @ pose0.R @ pc0
    return float(np.linalg.norm(pc01[:2] - pc1[:2])) * camera.focal_length()


def is_good_to_track(
    camera: Camera,
    pp,
    pose: Pose,
    pw,
    scale: float,
    reprojection_error_std: float,
    depth_scale: float = 1.0,
) -> bool:
    """Depth and reprojection-error check of a world point against an observation."""
    pc = world2cam(pw, pose)
    if not is_good_depth(pc[2], depth_scale):
        return False
    error = camera.reprojection_error(pose, pw, pp)
    return float(np.linalg.norm(error)) <= reprojection_error_std * scale


def relative_translation(pose_cur: Pose, pose_ref: Pose) -> float:
    """Distance between the positions of two poses."""
    return float(np.linalg.norm(np.asarray(pose_cur.t) - np.asarray(pose_ref.t)))


def relative_rotation(pose_cur: Pose, pose_ref: Pose) -> float:
    """Absolute pitch, in degrees, of the relative rotation between two poses."""
    rotation = pose_cur.R.T @ pose_ref.R
    euler = matrix2euler(rotation)
    return abs(euler[1] * R2D)