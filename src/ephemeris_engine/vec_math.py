"""3-vectors, 4x4 homogeneous transforms and scalar pairs (numpy-backed value types).

Matrices are row-major and act on column vectors: ``(A @ B) @ v == A @ (B @ v)``.
Every frame matrix elsewhere in the package is named ``<from>_to_<to>``.
"""

from __future__ import annotations

import math
from typing import Iterator, NamedTuple

import numpy as np


class Pair(NamedTuple):
    """Two scalars, e.g. (longitude, latitude) in radians."""

    x: float
    y: float


class Vector3:
    """Immutable 3-vector of floats."""

    __slots__ = ('_v',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        v = np.array([x, y, z], dtype=float)
        v.flags.writeable = False
        self._v = v

    @classmethod
    def from_array(cls, arr: np.ndarray | list[float] | tuple[float, ...]) -> Vector3:
        """Build from any 3-element sequence."""
        a = np.asarray(arr, dtype=float).reshape(3)
        return cls(a[0], a[1], a[2])

    @property
    def x(self) -> float:
        return float(self._v[0])

    @property
    def y(self) -> float:
        return float(self._v[1])

    @property
    def z(self) -> float:
        return float(self._v[2])

    @property
    def array(self) -> np.ndarray:
        """Read-only numpy view of the components."""
        return self._v

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __getitem__(self, index: int) -> float:
        return float(self._v[index])

    def __len__(self) -> int:
        return 3

    def __repr__(self) -> str:
        return f'Vector3({self.x!r}, {self.y!r}, {self.z!r})'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return bool(np.array_equal(self._v, other._v))

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3.from_array(self._v + other._v)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3.from_array(self._v - other._v)

    def __neg__(self) -> Vector3:
        return Vector3.from_array(-self._v)

    def __mul__(self, scale: float) -> Vector3:
        return Vector3.from_array(self._v * scale)

    __rmul__ = __mul__

    def __truediv__(self, scale: float) -> Vector3:
        return Vector3.from_array(self._v / scale)

    def dot(self, other: Vector3) -> float:
        return float(np.dot(self._v, other._v))

    def cross(self, other: Vector3) -> Vector3:
        return Vector3.from_array(np.cross(self._v, other._v))

    def length_squared(self) -> float:
        return float(np.dot(self._v, self._v))

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalized(self) -> Vector3:
        """Unit vector in the same direction; the zero vector stays zero."""
        n = self.length()
        if n == 0.0:
            return Vector3()
        return Vector3.from_array(self._v / n)

    def angle(self, other: Vector3) -> float:
        """Angle between the two vectors in radians, in [0, π]."""
        denom = math.sqrt(self.length_squared() * other.length_squared())
        if denom == 0.0:
            return 0.0
        cos_angle = max(-1.0, min(1.0, self.dot(other) / denom))
        return math.acos(cos_angle)

    def latitude(self) -> float:
        """Spherical latitude in radians, in [-π/2, π/2]."""
        n = self.length()
        if n == 0.0:
            return 0.0
        return math.asin(max(-1.0, min(1.0, self.z / n)))

    def longitude(self) -> float:
        """Spherical longitude in radians, in (-π, π]."""
        return math.atan2(self.y, self.x)

    def is_close(self, other: Vector3, tol: float = 1e-12) -> bool:
        """True if every component differs by at most ``tol``."""
        return bool(np.allclose(self._v, other._v, rtol=0.0, atol=tol))


class Matrix4:
    """Immutable 4x4 homogeneous transform.

    ``M @ N`` composes (apply N first), ``M @ v`` transforms a Vector3
    including the translation column.
    """

    __slots__ = ('_m',)

    IDENTITY: Matrix4
    EMPTY: Matrix4

    def __init__(self, values: np.ndarray | list[list[float]]) -> None:
        m = np.array(values, dtype=float).reshape(4, 4)
        m.flags.writeable = False
        self._m = m

    @classmethod
    def from_rotation(cls, rot: np.ndarray, offset: Vector3 | None = None) -> Matrix4:
        """Build from a 3x3 rotation block and an optional translation."""
        m = np.eye(4)
        m[:3, :3] = rot
        if offset is not None:
            m[:3, 3] = offset.array
        return cls(m)

    @classmethod
    def xrotation(cls, angle: float) -> Matrix4:
        c = math.cos(angle)
        s = math.sin(angle)
        return cls([[1, 0, 0, 0], [0, c, -s, 0], [0, s, c, 0], [0, 0, 0, 1]])

    @classmethod
    def yrotation(cls, angle: float) -> Matrix4:
        c = math.cos(angle)
        s = math.sin(angle)
        return cls([[c, 0, s, 0], [0, 1, 0, 0], [-s, 0, c, 0], [0, 0, 0, 1]])

    @classmethod
    def zrotation(cls, angle: float) -> Matrix4:
        c = math.cos(angle)
        s = math.sin(angle)
        return cls([[c, -s, 0, 0], [s, c, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]])

    @classmethod
    def rotation(cls, axis: Vector3, angle: float) -> Matrix4:
        """Right-handed rotation by ``angle`` about ``axis`` (Rodrigues)."""
        u = axis.normalized().array
        c = math.cos(angle)
        s = math.sin(angle)
        k = np.array([[0.0, -u[2], u[1]], [u[2], 0.0, -u[0]], [-u[1], u[0], 0.0]])
        rot = c * np.eye(3) + s * k + (1.0 - c) * np.outer(u, u)
        return cls.from_rotation(rot)

    @classmethod
    def translation(cls, offset: Vector3) -> Matrix4:
        return cls.from_rotation(np.eye(3), offset)

    @classmethod
    def scaling(cls, scale: float | Vector3) -> Matrix4:
        if isinstance(scale, Vector3):
            diag = [scale.x, scale.y, scale.z, 1.0]
        else:
            diag = [scale, scale, scale, 1.0]
        return cls(np.diag(diag))

    @property
    def array(self) -> np.ndarray:
        """Read-only 4x4 numpy view."""
        return self._m

    @property
    def rotation_block(self) -> np.ndarray:
        """Upper-left 3x3 block."""
        return self._m[:3, :3]

    def translation_vector(self) -> Vector3:
        """The translation column."""
        return Vector3.from_array(self._m[:3, 3])

    def __repr__(self) -> str:
        return f'Matrix4({self._m.tolist()!r})'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    __hash__ = None  # type: ignore[assignment]

    def __matmul__(self, other: Matrix4 | Vector3) -> Matrix4 | Vector3:  # type: ignore[override]
        if isinstance(other, Vector3):
            return self.transform(other)
        if isinstance(other, Matrix4):
            return Matrix4(self._m @ other._m)
        return NotImplemented

    def transform(self, v: Vector3) -> Vector3:
        """Rotate and translate ``v``."""
        return Vector3.from_array(self._m[:3, :3] @ v.array + self._m[:3, 3])

    def multiply_without_translation(self, v: Vector3) -> Vector3:
        """Apply only the 3x3 block to ``v``."""
        return Vector3.from_array(self._m[:3, :3] @ v.array)

    def transpose(self) -> Matrix4:
        return Matrix4(self._m.T)

    def determinant(self) -> float:
        return float(np.linalg.det(self._m))

    def inverse(self) -> Matrix4:
        """Inverse transform; ``Matrix4.EMPTY`` if the matrix is singular."""
        if self.determinant() == 0.0:
            return Matrix4.EMPTY
        return Matrix4(np.linalg.inv(self._m))

    def is_close(self, other: Matrix4, tol: float = 1e-12) -> bool:
        return bool(np.allclose(self._m, other._m, rtol=0.0, atol=tol))


Matrix4.IDENTITY = Matrix4(np.eye(4))
Matrix4.EMPTY = Matrix4(np.zeros((4, 4)))

IDENTITY = Matrix4.IDENTITY
EMPTY = Matrix4.EMPTY
