import math

import numpy as np
import pytest

from gvins import earth
from gvins.rotation import euler2matrix, quaternion2matrix
from gvins.types import Pose

ORIGIN = np.array([math.radians(30.5), math.radians(114.3), 20.0])


def test_gravity_at_equator_sea_level():
    assert earth.gravity([0.0, 0.0, 0.0]) == pytest.approx(9.7803267715)


def test_gravity_decreases_with_height():
    assert earth.gravity([0.5, 0.0, 1000.0]) < earth.gravity([0.5, 0.0, 0.0])


def test_radii_at_equator():
    rmn = earth.meridian_prime_vertical_radius(0.0)
    assert rmn[1] == pytest.approx(earth.WGS84_RA)
    assert rmn[0] == pytest.approx(earth.WGS84_RA * (1 - earth.WGS84_E1))
    assert earth.rn(0.0) == pytest.approx(earth.WGS84_RA)


def test_rn_matches_radius_pair():
    assert earth.rn(0.7) == pytest.approx(earth.meridian_prime_vertical_radius(0.7)[1])


def test_ecef_round_trip():
    result = earth.ecef2blh(earth.blh2ecef(ORIGIN))
    assert result[0] == pytest.approx(ORIGIN[0], abs=1e-9)
    assert result[1] == pytest.approx(ORIGIN[1], abs=1e-9)
    assert result[2] == pytest.approx(ORIGIN[2], abs=1e-3)


def test_cne_is_rotation_and_matches_qne():
    c = earth.cne(ORIGIN)
    assert np.allclose(c @ c.T, np.eye(3))
    assert np.allclose(quaternion2matrix(earth.qne(ORIGIN)), c)


def test_blh_from_qne_round_trip():
    result = earth.blh_from_qne(earth.qne(ORIGIN), ORIGIN[2])
    assert np.allclose(result, ORIGIN)


def test_dr_and_dri_are_inverse():
    assert np.allclose(earth.dr(ORIGIN) @ earth.dri(ORIGIN), np.eye(3))


def test_position_local_global_round_trip():
    local = np.array([100.0, -50.0, 10.0])
    glob = earth.local2global(ORIGIN, local)
    assert np.allclose(earth.global2local(ORIGIN, glob), local, atol=1e-3)


def test_origin_maps_to_zero():
    assert np.allclose(earth.global2local(ORIGIN, ORIGIN), np.zeros(3), atol=1e-6)


def test_pose_local_global_round_trip():
    pose = Pose(R=euler2matrix([0.1, 0.2, 0.3]), t=np.array([100.0, -50.0, 10.0]))
    back = earth.global2local(ORIGIN, earth.local2global(ORIGIN, pose))
    assert np.allclose(back.t, pose.t, atol=1e-3)
    assert np.allclose(back.R, pose.R, atol=1e-9)


def test_rotation_rates():
    assert np.allclose(earth.iewe(), [0.0, 0.0, earth.WGS84_WIE])
    assert np.allclose(earth.iewn(0.0), [earth.WGS84_WIE, 0.0, 0.0])
    assert np.linalg.norm(earth.iewn(0.8)) == pytest.approx(earth.WGS84_WIE)


def test_iewn_local_at_origin():
    assert np.allclose(earth.iewn_local(ORIGIN, np.zeros(3)), earth.iewn(ORIGIN[0]))


def test_enwn_zero_velocity():
    rmn = earth.meridian_prime_vertical_radius(ORIGIN[0])
    assert np.allclose(earth.enwn(rmn, ORIGIN, np.zeros(3)), np.zeros(3))


def test_enwn_local_at_origin():
    vel = np.array([10.0, 5.0, 0.0])
    rmn = earth.meridian_prime_vertical_radius(ORIGIN[0])
    expected = earth.enwn(rmn, ORIGIN, vel)
    assert np.allclose(earth.enwn_local(ORIGIN, np.zeros(3), vel), expected, rtol=1e-6)