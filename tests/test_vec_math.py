"""Tests for vectors, homogeneous transforms and spherical geometry helpers."""

from __future__ import annotations

import math

import numpy as np
import pytest

from ephemeris_engine import geometry
from ephemeris_engine.constants import EARTH_FLATTENING, EARTH_RADIUS_KM, EPS_0
from ephemeris_engine.vec_math import IDENTITY, Matrix4, Vector3


def test_vector_basics() -> None:
    """Arithmetic, products and norms."""

    a = Vector3(1.0, 2.0, 2.0)
    b = Vector3(0.0, 1.0, 0.0)

    assert a.length() == pytest.approx(3.0)
    assert a.length_squared() == pytest.approx(9.0)
    assert a + b == Vector3(1.0, 3.0, 2.0)
    assert a - b == Vector3(1.0, 1.0, 2.0)
    assert -b == Vector3(0.0, -1.0, 0.0)
    assert a.dot(b) == pytest.approx(2.0)
    assert Vector3(1.0, 0.0, 0.0).cross(b) == Vector3(0.0, 0.0, 1.0)
    assert list(a / 2.0) == [0.5, 1.0, 1.0]
    assert a.normalized().length() == pytest.approx(1.0)
    assert Vector3().normalized() == Vector3()


def test_vector_is_immutable() -> None:
    """The backing array is read-only."""

    v = Vector3(1.0, 2.0, 3.0)

    with pytest.raises(ValueError):
        v.array[0] = 5.0


def test_vector_spherical_coordinates() -> None:
    """Longitude in (-π, π], latitude in [-π/2, π/2]."""

    v = Vector3(-1.0, -1.0, math.sqrt(2.0))

    assert v.longitude() == pytest.approx(-3.0 * math.pi / 4.0)
    assert v.latitude() == pytest.approx(math.pi / 4.0)
    assert Vector3(-1.0, 0.0, 0.0).longitude() == pytest.approx(math.pi)
    assert Vector3().latitude() == 0.0
    assert v.angle(Vector3(0.0, 0.0, 1.0)) == pytest.approx(math.pi / 4.0)
    assert Vector3().angle(v) == 0.0


def test_matrix_composition_order() -> None:
    """(A @ B) @ v applies B first."""

    rotate = Matrix4.zrotation(math.pi / 2.0)
    shift = Matrix4.translation(Vector3(1.0, 0.0, 0.0))
    v = Vector3(1.0, 0.0, 0.0)

    assert ((rotate @ shift) @ v).is_close(Vector3(0.0, 2.0, 0.0))
    assert ((shift @ rotate) @ v).is_close(Vector3(1.0, 1.0, 0.0))
    assert (rotate @ shift).is_close(rotate @ shift @ IDENTITY)


def test_matrix_helpers() -> None:
    """Transpose inverts rotations; translation is kept apart from the block."""

    m = Matrix4.from_rotation(Matrix4.xrotation(0.3).rotation_block, Vector3(1.0, 2.0, 3.0))

    assert m.translation_vector() == Vector3(1.0, 2.0, 3.0)
    assert m.multiply_without_translation(Vector3(1.0, 0.0, 0.0)).is_close(Vector3(1.0, 0.0, 0.0))
    assert (Matrix4.yrotation(0.7) @ Matrix4.yrotation(0.7).transpose()).is_close(IDENTITY)
    assert (m @ m.inverse()).is_close(IDENTITY)
    assert Matrix4.scaling(2.0).determinant() == pytest.approx(8.0)
    assert Matrix4.EMPTY.inverse() == Matrix4.EMPTY


def test_transpose_identities() -> None:
    """(A @ B)ᵀ = Bᵀ @ Aᵀ and transposing twice is a no-op."""

    a = Matrix4.translation(Vector3(1.0, -2.0, 0.5)) @ Matrix4.xrotation(0.3)
    b = Matrix4.rotation(Vector3(1.0, 1.0, 0.0), 1.1) @ Matrix4.scaling(2.0)

    assert (a @ b).transpose().is_close(b.transpose() @ a.transpose())
    assert a.transpose().transpose() == a
    assert not (a @ b).is_close(b @ a)


def test_axis_rotation_matches_zrotation() -> None:
    """Rodrigues about +z equals the elementary rotation."""

    assert Matrix4.rotation(Vector3(0.0, 0.0, 2.0), 0.4).is_close(Matrix4.zrotation(0.4))
    np.testing.assert_allclose(Matrix4.xrotation(math.pi).array[1:3, 1:3], -np.eye(2), atol=1e-15)


def test_spherical_round_trip() -> None:
    """Rectangular and spherical forms agree."""

    v = geometry.spherical_to_rectangular(2.5, -0.4)
    lon, lat = geometry.rectangular_to_spherical(v)

    assert v.length() == pytest.approx(1.0)
    assert lon == pytest.approx(2.5)
    assert lat == pytest.approx(-0.4)


@pytest.mark.parametrize(
    ('angle', 'expected'),
    [(-0.5, 2.0 * math.pi - 0.5), (7.0, 7.0 - 2.0 * math.pi), (0.0, 0.0), (-2.0 * math.pi, 0.0)],
)
def test_normalize_radians(angle: float, expected: float) -> None:
    """Wrap to [0, 2π)."""

    assert geometry.normalize_radians(angle) == pytest.approx(expected, abs=1e-15)


def test_equatorial_to_ecliptic() -> None:
    """Pollux, Meeus example 13.a."""

    lam, beta = geometry.equatorial_to_ecliptic(
        math.radians(116.328942), math.radians(28.026183), math.radians(23.4392911)
    )

    assert math.degrees(lam) == pytest.approx(113.215630, abs=1e-5)
    assert math.degrees(beta) == pytest.approx(6.684170, abs=1e-5)
    assert geometry.equatorial_to_ecliptic(-0.1, 0.0, EPS_0).x > math.pi


def test_andoyer_distance() -> None:
    """Paris to Washington, Meeus example 11.c."""

    d = geometry.distance_km(
        6378.14,
        1.0 / 298.257,
        math.radians(-2.337222),
        math.radians(48.836389),
        math.radians(77.065556),
        math.radians(38.921389),
    )

    assert d == pytest.approx(6181.63, abs=0.05)
    assert geometry.distance_km(EARTH_RADIUS_KM, EARTH_FLATTENING, 0.3, 0.2, 0.3, 0.2) == 0.0


def test_azimuth() -> None:
    """Bearings measured from north or from south."""

    assert math.degrees(geometry.azimuth(0.0, 0.0, 0.1, 0.0)) == pytest.approx(90.0)
    assert math.degrees(geometry.azimuth(0.0, 0.0, 0.0, 0.1)) == pytest.approx(0.0, abs=1e-12)
    assert math.degrees(geometry.azimuth(0.0, 0.0, 0.1, 0.0, south_azimuth=True)) == pytest.approx(
        270.0
    )
