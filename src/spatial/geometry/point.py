"""
Point3D: a position in space.

Stored like a vector but never equal to one. Point - Point gives a Vector3D,
Point +/- vector gives a Point3D; Point + Point is not defined.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import TYPE_CHECKING, ClassVar, Iterable
import numpy as np

from ..errors import InvalidArgumentError
from .base import Coordinates3D
from .vector import BaseVector3D, Vector3D

if TYPE_CHECKING:
    from .coordinate_system import CoordinateSystem
    from .plane import Plane


@dataclass(frozen=True, eq=False)
class Point3D(Coordinates3D):
    """3D point."""

    x: float
    y: float
    z: float

    ORIGIN: ClassVar[Point3D]
    _family: ClassVar[str] = "point"

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @staticmethod
    def centroid(points: Iterable[Point3D]) -> Point3D:
        """Arithmetic mean of the points."""
        arr = np.array([p.to_array() for p in points], dtype=np.float64)
        if arr.size == 0:
            raise InvalidArgumentError("centroid of an empty point set is undefined")
        return Point3D.from_array(arr.mean(axis=0))

    @staticmethod
    def midpoint(a: Point3D, b: Point3D) -> Point3D:
        return Point3D((a.x + b.x) / 2, (a.y + b.y) / 2, (a.z + b.z) / 2)

    def distance_to(self, other: Point3D) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y, self.z - other.z)

    def vector_to(self, other: Point3D) -> Vector3D:
        return other - self

    def to_vector3d(self) -> Vector3D:
        return Vector3D(self.x, self.y, self.z)

    def transform_by(self, cs: CoordinateSystem) -> Point3D:
        """Rotate by the basis of `cs`, then translate by its origin."""
        return cs.transform(self)

    def project_on(self, plane: Plane) -> Point3D:
        return plane.project_point(self)

    def mirror_about(self, plane: Plane) -> Point3D:
        return plane.mirror_about(self)

    def __add__(self, vector: BaseVector3D) -> Point3D:
        """Point + Vector = Point."""
        if not isinstance(vector, BaseVector3D):
            return NotImplemented
        return Point3D(self.x + vector.x, self.y + vector.y, self.z + vector.z)

    def __sub__(self, other):
        """Point - Point = Vector, Point - Vector = Point."""
        if isinstance(other, Point3D):
            return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, BaseVector3D):
            return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented


Point3D.ORIGIN = Point3D(0.0, 0.0, 0.0)
