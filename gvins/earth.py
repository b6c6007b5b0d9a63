"""WGS84 Earth model: gravity, radii, frame transforms and rotation rates."""

from __future__ import annotations

import math

import numpy as np

from gvins.rotation import Quaternion
from gvins.types import Pose

WGS84_WIE = 7.2921151467e-5
WGS84_F = 0.0033528106647474805
WGS84_RA = 6378137.0000000000
WGS84_RB = 6356752.3142451793
WGS84_GM0 = 398600441800000.00
WGS84_E1 = 0.0066943799901413156
WGS84_E2 = 0.0067394967422764341


def gravity(blh) -> float:
    """Normal gravity at latitude and height."""
    sin2 = math.sin(blh[0]) ** 2
    h = blh[2]
    return (
        9.7803267715 * (1 + 0.0052790414 * sin2 + 0.0000232718 * sin2 * sin2)
        + h * (0.0000000043977311 * sin2 - 0.0000030876910891)
        + 0.0000000000007211 * h * h
    )


def meridian_prime_vertical_radius(lat: float) -> np.ndarray:
    """Meridian radius RM and prime-vertical radius RN at a latitude."""
    tmp = 1 - WGS84_E1 * math.sin(lat) ** 2
    sqrttmp = math.sqrt(tmp)
    return np.array([WGS84_RA * (1 - WGS84_E1) / (sqrttmp * tmp), WGS84_RA / sqrttmp])


def rn(lat: float) -> float:
    """Prime-vertical radius of curvature."""
    sinlat = math.sin(lat)
    return WGS84_RA / math.sqrt(1.0 - WGS84_E1 * sinlat * sinlat)


def cne(blh) -> np.ndarray:
    """Rotation from the local NED frame to ECEF."""
    sinlat, coslat = math.sin(blh[0]), math.cos(blh[0])
    sinlon, coslon = math.sin(blh[1]), math.cos(blh[1])
    return np.array(
        [
            [-sinlat * coslon, -sinlon, -coslat * coslon],
            [-sinlat * sinlon, coslon, -coslat * sinlon],
            [coslat, 0.0, -sinlat],
        ]
    )


def qne(blh) -> Quaternion:
    """Quaternion form of :func:`cne`."""
    coslon = math.cos(blh[1] * 0.5)
    sinlon = math.sin(blh[1] * 0.5)
    coslat = math.cos(-math.pi * 0.25 - blh[0] * 0.5)
    sinlat = math.sin(-math.pi * 0.25 - blh[0] * 0.5)
    return Quaternion(
        coslat * coslon,
        -sinlat * sinlon,
        sinlat * coslon,
        coslat * sinlon,
    )


def blh_from_qne(qne: Quaternion, height: float) -> np.ndarray:
    """Latitude, longitude and the given height from an NED-to-ECEF quaternion."""
    return np.array(
        [
            -2 * math.atan(qne.y / qne.w) - math.pi * 0.5,
            2 * math.atan2(qne.z, qne.w),
            height,
        ]
    )


def blh2ecef(blh) -> np.ndarray:
    coslat, sinlat = math.cos(blh[0]), math.sin(blh[0])
    coslon, sinlon = math.cos(blh[1]), math.sin(blh[1])
    r = rn(blh[0])
    rnh = r + blh[2]
    return np.array([rnh * coslat * coslon, rnh * coslat * sinlon, (rnh - r * WGS84_E1) * sinlat])


def ecef2blh(ecef) -> np.ndarray:
    x, y, z = float(ecef[0]), float(ecef[1]), float(ecef[2])
    p = math.sqrt(x * x + y * y)
    lat = math.atan(z / (p * (1.0 - WGS84_E1)))
    lon = 2.0 * math.atan2(y, x + p)
    h = 0.0
    while True:
        previous = h
        r = rn(lat)
        h = p / math.cos(lat) - r
        lat = math.atan(z / (p * (1.0 - WGS84_E1 * r / (r + h))))
        if abs(h - previous) <= 1.0e-4:
            break
    return np.array([lat, lon, h])


def dri(blh) -> np.ndarray:
    """Matrix turning NED displacement into latitude/longitude/height increments."""
    rmn = meridian_prime_vertical_radius(blh[0])
    out = np.zeros((3, 3))
    out[0, 0] = 1.0 / (rmn[0] + blh[2])
    out[1, 1] = 1.0 / ((rmn[1] + blh[2]) * math.cos(blh[0]))
    out[2, 2] = -1.0
    return out


def dr(blh) -> np.ndarray:
    """Inverse of :func:`dri`."""
    rmn = meridian_prime_vertical_radius(blh[0])
    out = np.zeros((3, 3))
    out[0, 0] = rmn[0] + blh[2]
    out[1, 1] = (rmn[1] + blh[2]) * math.cos(blh[0])
    out[2, 2] = -1.0
    return out


def local2global(origin, local):
    """Map a local NED position (or Pose) at ``origin`` to geodetic coordinates."""
    ecef0 = blh2ecef(origin)
    cn0e = cne(origin)
    if isinstance(local, Pose):
        blh1 = ecef2blh(ecef0 + cn0e @ local.t)
        cn1e = cne(blh1)
        return Pose(R=cn1e.T @ cn0e @ local.R, t=blh1)
    return ecef2blh(ecef0 + cn0e @ np.asarray(local, dtype=float))


def global2local(origin, point):
    """Map a geodetic position (or Pose) to the local NED frame at ``origin``."""
    ecef0 = blh2ecef(origin)
    cn0e = cne(origin)
    if isinstance(point, Pose):
        ecef1 = blh2ecef(point.t)
        cn1e = cne(point.t)
        return Pose(R=cn0e.T @ cn1e @ point.R, t=cn0e.T @ (ecef1 - ecef0))
    return cn0e.T @ (blh2ecef(point) - ecef0)


def iewe() -> np.ndarray:
    """Earth rotation rate in ECEF."""
    return np.array([0.0, 0.0, WGS84_WIE])


def iewn(lat: float) -> np.ndarray:
    """Earth rotation rate in the NED frame at a latitude."""
    return np.array([WGS84_WIE * math.cos(lat), 0.0, -WGS84_WIE * math.sin(lat)])


def iewn_local(origin, local) -> np.ndarray:
    return iewn(local2global(origin, local)[0])


def enwn(rmn, blh, vel) -> np.ndarray:
    """Transport rate of the NED frame."""
    return np.array(
        [
            vel[1] / (rmn[1] + blh[2]),
            -vel[0] / (rmn[0] + blh[2]),
            -vel[1] * math.tan(blh[0]) / (rmn[1] + blh[2]),
        ]
    )


def enwn_local(origin, local, vel) -> np.ndarray:
    point = local2global(origin, local)
    return enwn(meridian_prime_vertical_radius(point[0]), point, vel)