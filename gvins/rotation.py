"""Rotation representations: quaternions, matrices, Euler angles and rotation vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Quaternion:
    """Hamilton quaternion ``w + xi + yj + zk``."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def vec(self) -> np.ndarray:
        """The vector (imaginary) part."""
        return np.array([self.x, self.y, self.z], dtype=float)

    def to_array(self) -> np.ndarray:
        """Coefficients ordered ``[w, x, y, z]``."""
        return np.array([self.w, self.x, self.y, self.z], dtype=float)

    def norm(self) -> float:
        return math.sqrt(self.w**2 + self.x**2 + self.y**2 + self.z**2)

    def conjugate(self) -> "Quaternion":
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def normalized(self) -> "Quaternion":
        n = self.norm()
        if n == 0:
            return self
        return Quaternion(self.w / n, self.x / n, self.y / n, self.z / n)

    def __mul__(self, other):
        if not isinstance(other, Quaternion):
            return NotImplemented
        w1, x1, y1, z1 = self.w, self.x, self.y, self.z
        w2, x2, y2, z2 = other.w, other.x, other.y, other.z
        return Quaternion(
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 + y1 * w2 + z1 * x2 - x1 * z2,
            w1 * z2 + z1 * w2 + x1 * y2 - y1 * x2,
        )


def _axis_angle(angle: float, axis) -> Quaternion:
    half = 0.5 * angle
    s = math.sin(half)
    ax = np.asarray(axis, dtype=float)
    return Quaternion(math.cos(half), s * ax[0], s * ax[1], s * ax[2])


def matrix2quaternion(matrix) -> Quaternion:
    """Quaternion of a rotation matrix."""
    m = np.asarray(matrix, dtype=float)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0:
        t = math.sqrt(trace + 1.0)
        w = 0.5 * t
        t = 0.5 / t
        return Quaternion(
            w,
            (m[2, 1] - m[1, 2]) * t,
            (m[0, 2] - m[2, 0]) * t,
            (m[1, 0] - m[0, 1]) * t,
        )

    i = 0
    if m[1, 1] > m[0, 0]:
        i = 1
    if m[2, 2] > m[i, i]:
        i = 2
    j = (i + 1) % 3
    k = (j + 1) % 3

    t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
    q = [0.0, 0.0, 0.0]
    q[i] = 0.5 * t
    t = 0.5 / t
    w = (m[k, j] - m[j, k]) * t
    q[j] = (m[j, i] + m[i, j]) * t
    q[k] = (m[k, i] + m[i, k]) * t
    return Quaternion(w, q[0], q[1], q[2])


def quaternion2matrix(quaternion: Quaternion) -> np.ndarray:
    """Rotation matrix of a unit quaternion."""
    q = quaternion
    tx, ty, tz = 2.0 * q.x, 2.0 * q.y, 2.0 * q.z
    twx, twy, twz = tx * q.w, ty * q.w, tz * q.w
    txx, txy, txz = tx * q.x, ty * q.x, tz * q.x
    tyy, tyz, tzz = ty * q.y, tz * q.y, tz * q.z
    return np.array(
        [
            [1.0 - (tyy + tzz), txy - twz, txz + twy],
            [txy + twz, 1.0 - (txx + tzz), tyz - twx],
            [txz - twy, tyz + twx, 1.0 - (txx + tyy)],
        ]
    )


def matrix2euler(dcm) -> np.ndarray:
    """Roll, pitch, heading (ZYX order) of a body-to-navigation matrix; heading in [0, 2*pi)."""
    d = np.asarray(dcm, dtype=float)
    pitch = math.atan(-d[2, 0] / math.sqrt(d[2, 1] ** 2 + d[2, 2] ** 2))
    roll = math.atan2(d[2, 1], d[2, 2])

    if d[2, 0] <= -0.999:
        heading = math.atan2(d[1, 2] - d[0, 1], d[0, 2] + d[1, 1])
    elif d[2, 0] >= 0.999:
        heading = math.pi + math.atan2(d[1, 2] + d[0, 1], d[0, 2] - d[1, 1])
    else:
        heading = math.atan2(d[1, 0], d[0, 0])

    if heading < 0:
        heading += 2.0 * math.pi

    return np.array([roll, pitch, heading])


def quaternion2euler(quaternion: Quaternion) -> np.ndarray:
    return matrix2euler(quaternion2matrix(quaternion))


def rotvec2quaternion(rotvec) -> Quaternion:
    """Quaternion of a rotation vector (axis times angle)."""
    v = np.asarray(rotvec, dtype=float)
    angle = float(np.linalg.norm(v))
    axis = v / angle if angle > 0 else v
    return _axis_angle(angle, axis)


def quaternion2vector(quaternion: Quaternion) -> np.ndarray:
    """Rotation vector (axis times angle) of a quaternion."""
    vec = quaternion.vec()
    n = float(np.linalg.norm(vec))
    if n == 0:
        return np.zeros(3)
    angle = 2.0 * math.atan2(n, abs(quaternion.w))
    axis = -vec / n if quaternion.w < 0 else vec / n
    return angle * axis


def _zyx_quaternion(euler) -> Quaternion:
    e = np.asarray(euler, dtype=float)
    return (
        _axis_angle(e[2], (0.0, 0.0, 1.0))
        * _axis_angle(e[1], (0.0, 1.0, 0.0))
        * _axis_angle(e[0], (1.0, 0.0, 0.0))
    )


def euler2matrix(euler) -> np.ndarray:
    """Body-to-navigation matrix from roll, pitch, heading (ZYX order)."""
    return quaternion2matrix(_zyx_quaternion(euler))


def euler2quaternion(euler) -> Quaternion:
    """Body-to-navigation quaternion from roll, pitch, heading (ZYX order)."""
    return _zyx_quaternion(euler)


def skew_symmetric(vector) -> np.ndarray:
    """Cross-product matrix, so that ``skew_symmetric(a) @ b == cross(a, b)``."""
    v = np.asarray(vector, dtype=float)
    return np.array(
        [
            [0.0, -v[2], v[1]],
            [v[2], 0.0, -v[0]],
            [-v[1], v[0], 0.0],
        ]
    )


def _quaternion_matrix(q: Quaternion, sign: float) -> np.ndarray:
    vec = q.vec()
    ans = np.empty((4, 4))
    ans[0, 0] = q.w
    ans[0, 1:] = -vec
    ans[1:, 0] = vec
    ans[1:, 1:] = q.w * np.eye(3) + sign * skew_symmetric(vec)
    return ans


def quaternion_left(q: Quaternion) -> np.ndarray:
    """Matrix ``L(q)`` with ``L(q) @ p == q * p`` on ``[w, x, y, z]`` arrays."""
    return _quaternion_matrix(q, 1.0)


def quaternion_right(p: Quaternion) -> np.ndarray:
    """Matrix ``R(p)`` with ``R(p) @ q == q * p`` on ``[w, x, y, z]`` arrays."""
    return _quaternion_matrix(p, -1.0)