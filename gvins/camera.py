"""Pinhole camera with radial-tangential distortion."""

from __future__ import annotations

from functools import cached_property

import numpy as np

from gvins.types import Pose

_UNDISTORT_ITERATIONS = 5


def _as_points(pts) -> np.ndarray:
    arr = np.asarray(pts, dtype=float)
    if arr.size == 0:
        return np.zeros((0, 2))
    return arr.reshape(-1, 2)


def world2cam(world, pose: Pose) -> np.ndarray:
    """Express a world point in the camera frame of ``pose``."""
    return pose.R.T @ (np.asarray(world, dtype=float) - pose.t)


def cam2world(cam, pose: Pose) -> np.ndarray:
    """Express a camera-frame point in the world frame."""
    return pose.R @ np.asarray(cam, dtype=float) + pose.t


class Camera:
    """Intrinsics ``[[fx, skew, cx], [0, fy, cy], [0, 0, 1]]`` and distortion ``k1, k2, p1, p2, k3``."""

    def __init__(self, intrinsic, distortion, size) -> None:
        matrix = np.asarray(intrinsic, dtype=float).reshape(3, 3)
        coeffs = np.asarray(distortion, dtype=float).ravel()
        if coeffs.size != 5:
            raise ValueError("distortion must hold five coefficients")
        self._intrinsic = matrix.copy()
        self._distortion = coeffs.copy()

        self.fx = float(matrix[0, 0])
        self.skew = float(matrix[0, 1])
        self.cx = float(matrix[0, 2])
        self.fy = float(matrix[1, 1])
        self.cy = float(matrix[1, 2])

        self.k1, self.k2, self.p1, self.p2, self.k3 = (float(c) for c in coeffs)

        self.width = int(size[0])
        self.height = int(size[1])

    @property
    def camera_matrix(self) -> np.ndarray:
        return self._intrinsic.copy()

    @property
    def distortion(self) -> np.ndarray:
        return self._distortion.copy()

    @property
    def size(self) -> tuple[int, int]:
        """Image size as ``(width, height)``."""
        return self.width, self.height

    def focal_length(self) -> float:
        return (self.fx + self.fy) * 0.5

    def _to_normalized(self, pts: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        y = (pts[..., 1] - self.cy) / self.fy
        x = (pts[..., 0] - self.cx - self.skew * y) / self.fx
        return x, y

    def _to_pixels(self, x, y) -> np.ndarray:
        u = self.fx * x + self.skew * y + self.cx
        v = self.fy * y + self.cy
        return np.stack([u, v], axis=-1)

    def _distort_normalized(self, x, y):
        r2 = x * x + y * y
        rr = 1 + self.k1 * r2 + self.k2 * r2 * r2 + self.k3 * r2 * r2 * r2
        xd = x * rr + 2 * self.p1 * x * y + self.p2 * (r2 + 2 * x * x)
        yd = y * rr + self.p1 * (r2 + 2 * y * y) + 2 * self.p2 * x * y
        return xd, yd

    def undistort_points(self, pts) -> np.ndarray:
        """Remove distortion from pixel points by fixed-point iteration."""
        points = _as_points(pts)
        if len(points) == 0:
            return points
        x0, y0 = self._to_normalized(points)
        x, y = x0.copy(), y0.copy()
        for _ in range(_UNDISTORT_ITERATIONS):
            r2 = x * x + y * y
            icdist = 1.0 / (1 + self.k1 * r2 + self.k2 * r2 * r2 + self.k3 * r2 * r2 * r2)
            dx = 2 * self.p1 * x * y + self.p2 * (r2 + 2 * x * x)
            dy = self.p1 * (r2 + 2 * y * y) + 2 * self.p2 * x * y
            x = (x0 - dx) * icdist
            y = (y0 - dy) * icdist
        return self._to_pixels(x, y)

    def distort_points(self, pts) -> np.ndarray:
        """Apply distortion to undistorted pixel points."""
        points = _as_points(pts)
        if len(points) == 0:
            return points
        x, y = self._to_normalized(points)
        return self._to_pixels(*self._distort_normalized(x, y))

    def distort_point(self, pp) -> np.ndarray:
        return self.distort_points([pp])[0]

    def distort_camera_point(self, pc) -> np.ndarray:
        """Project a camera-frame point to a distorted pixel."""
        pc = np.asarray(pc, dtype=float)
        x, y = self._distort_normalized(pc[0] / pc[2], pc[1] / pc[2])
        return self.cam2pixel(np.array([x, y, 1.0]))

    @cached_property
    def _undistort_maps(self) -> tuple[np.ndarray, np.ndarray]:
        v, u = np.mgrid[0 : self.height, 0 : self.width].astype(float)
        x, y = self._to_normalized(np.stack([u, v], axis=-1))
        src = self._to_pixels(*self._distort_normalized(x, y))
        return src[..., 0], src[..., 1]

    def undistort_image(self, image) -> np.ndarray:
        """Undistorted copy of an image, sampled bilinearly with a black border."""
        img = np.asarray(image)
        mapx, mapy = self._undistort_maps
        h, w = img.shape[:2]

        x0 = np.floor(mapx).astype(int)
        y0 = np.floor(mapy).astype(int)
        ax = mapx - x0
        ay = mapy - y0

        out = np.zeros(mapx.shape + img.shape[2:], dtype=float)
        for dy, dx, weight in (
            (0, 0, (1 - ax) * (1 - ay)),
            (0, 1, ax * (1 - ay)),
            (1, 0, (1 - ax) * ay),
            (1, 1, ax * ay),
        ):
            xs = x0 + dx
            ys = y0 + dy
            valid = (xs >= 0) & (xs < w) & (ys >= 0) & (ys < h)
            values = np.zeros(out.shape)
            values[valid] = img[ys[valid], xs[valid]]
            if img.ndim == 3:
                weight = weight[..., None]
            out += weight * values

        if np.issubdtype(img.dtype, np.integer):
            info = np.iinfo(img.dtype)
            return np.clip(np.rint(out), info.min, info.max).astype(img.dtype)
        return out.astype(img.dtype)

    def pixel2cam(self, pixel) -> np.ndarray:
        """Normalised camera coordinates ``[x, y, 1]`` of a pixel."""
        x, y = self._to_normalized(np.asarray(pixel, dtype=float))
        return np.array([float(x), float(y), 1.0])

    def pixel2unitcam(self, pixel) -> np.ndarray:
        pc = self.pixel2cam(pixel)
        return pc / np.linalg.norm(pc)

    def cam2pixel(self, cam) -> np.ndarray:
        cam = np.asarray(cam, dtype=float)
        return np.array(
            [
                (self.fx * cam[0] + self.skew * cam[1]) / cam[2] + self.cx,
                self.fy * cam[1] / cam[2] + self.cy,
            ]
        )

    def pixel2world(self, pixel, pose: Pose) -> np.ndarray:
        return cam2world(self.pixel2cam(pixel), pose)

    def world2pixel(self, world, pose: Pose) -> np.ndarray:
        return self.cam2pixel(world2cam(world, pose))

    def reprojection_error(self, pose: Pose, pw, pp) -> np.ndarray:
        """Projected world point minus the observed pixel."""
        return self.world2pixel(pw, pose) - np.asarray(pp, dtype=float)


def create_camera(intrinsic, distortion, size) -> Camera:
    """Build a camera from ``[fx, fy, cx, cy(, skew)]``, ``[k1, k2, p1, p2(, k3)]`` and ``[width, height]``."""
    intrinsic = [float(v) for v in intrinsic]
    distortion = [float(v) for v in distortion]

    if len(intrinsic) == 4:
        fx, fy, cx, cy = intrinsic
        skew = 0.0
    elif len(intrinsic) == 5:
        fx, fy, cx, cy, skew = intrinsic
    else:
        raise ValueError("intrinsic must hold four or five values")
    matrix = [[fx, skew, cx], [0.0, fy, cy], [0.0, 0.0, 1.0]]

    if len(distortion) == 4:
        coeffs = distortion + [0.0]
    elif len(distortion) == 5:
        coeffs = distortion
    else:
        raise ValueError("distortion must hold four or five values")

    return Camera(matrix, coeffs, (size[0], size[1]))