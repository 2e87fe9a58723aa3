"""
Plane and Ray3D.

A Plane is a root point plus a unit normal; a Ray3D is a through point plus a
unit direction. Projecting a vector onto a plane gives a Ray3D whose direction
is the in-plane component of the vector, which is what signed angles use.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from ..config.schemas import DEFAULT_TOLERANCE, ToleranceConfig
from ..errors import InvalidArgumentError
from ..io import xml_io
from .base import check_tolerance
from .point import Point3D
from .vector import BaseVector3D, UnitVector3D


@dataclass(frozen=True, init=False)
class Plane:
    """
    Plane through `root_point` with unit `normal`.

    Attributes:
        root_point: Any point on the plane
        normal: Unit normal
    """

    root_point: Point3D
    normal: UnitVector3D

    _XML_PARTS: ClassVar[tuple] = (
        ("RootPoint", "root_point", Point3D),
        ("Normal", "normal", UnitVector3D),
    )

    def __init__(self, root_point: Point3D, normal: Union[BaseVector3D, tuple]):
        object.__setattr__(self, "root_point", root_point)
        object.__setattr__(self, "normal", UnitVector3D.coerce(normal))

    @classmethod
    def from_points(cls, p1: Point3D, p2: Point3D, p3: Point3D,
                    tolerances: Optional[ToleranceConfig] = None) -> Plane:
        """
        Plane through three points, normal by the right-hand rule p1 -> p2 -> p3.

        The points count as collinear when the sine of the angle between
        p1->p2 and p1->p3 is below `tolerances.orthonormal`, so the check does
        not depend on how far apart the points are.
        """
        if tolerances is None:
            tolerances = DEFAULT_TOLERANCE
        a = p2 - p1
        b = p3 - p1
        normal = a.cross_product(b)
        if normal.length <= tolerances.orthonormal * a.length * b.length:
            raise InvalidArgumentError("The three points are collinear")
        return cls(p1, normal)

    @classmethod
    def from_xml(cls, source):
        return xml_io.read_xml(cls, source)

    def to_xml(self, style: str = "attribute", tag=None) -> str:
        return xml_io.to_xml_string(self, tag=tag, style=style)

    @property
    def d(self) -> float:
        """Offset in the plane equation n . p + d = 0."""
        return -self.normal.dot_product(self.root_point.to_vector3d())

    def signed_distance_to(self, point: Point3D) -> float:
        """Positive on the side the normal points to."""
        return self.normal.dot_product(point - self.root_point)

    def project_point(self, point: Point3D) -> Point3D:
        """Orthogonal projection of a point onto the plane."""
        return point - self.signed_distance_to(point) * self.normal

    def project_vector(self, vector: BaseVector3D) -> Ray3D:
        """
        Project a vector onto the plane.

        Returns:
            Ray3D from the projected origin along the in-plane component

        Raises:
            InvalidDirectionError: if the vector is parallel to the normal
        """
        projected_zero = self.project_point(Point3D.ORIGIN)
        projected_end = self.project_point(vector.to_point3d())
        return Ray3D(projected_zero, projected_zero.vector_to(projected_end))

    def project(self, value: Union[Point3D, BaseVector3D]) -> Union[Point3D, Ray3D]:
        if isinstance(value, Point3D):
            return self.project_point(value)
        if isinstance(value, BaseVector3D):
            return self.project_vector(value)
        raise TypeError(f"Cannot project {type(value).__name__} onto a plane")

    def mirror_about(self, point: Point3D) -> Point3D:
        """Reflection of a point through the plane."""
        return point - (2 * self.signed_distance_to(point)) * self.normal

    def intersection_with(self, ray: Ray3D,
                          tolerance: Optional[float] = None) -> Point3D:
        """
        Point where `ray` (as an infinite line) meets the plane.

        Raises:
            InvalidArgumentError: if the ray is parallel to the plane
        """
        if tolerance is None:
            tolerance = DEFAULT_TOLERANCE.parallel
        denom = self.normal.dot_product(ray.direction)
        if abs(denom) < tolerance:
            raise InvalidArgumentError("Ray is parallel to the plane")
        t = -self.signed_distance_to(ray.through_point) / denom
        return ray.point_at(t)

    def equals(self, other: Plane, tolerance: float) -> bool:
        check_tolerance(tolerance)
        return (self.root_point.equals(other.root_point, tolerance) and
                self.normal.equals(other.normal, tolerance))

    def __str__(self) -> str:
        return f"Plane(root={self.root_point}, normal={self.normal})"


@dataclass(frozen=True, init=False)
class Ray3D:
    """
    Half-infinite line from `through_point` along unit `direction`.

    Attributes:
        through_point: Start point
        direction: Unit direction
    """

    through_point: Point3D
    direction: UnitVector3D

    _XML_PARTS: ClassVar[tuple] = (
        ("ThroughPoint", "through_point", Point3D),
        ("Direction", "direction", UnitVector3D),
    )

    def __init__(self, through_point: Point3D, direction: Union[BaseVector3D, tuple]):
        object.__setattr__(self, "through_point", through_point)
        object.__setattr__(self, "direction", UnitVector3D.coerce(direction))

    @classmethod
    def from_xml(cls, source):
        return xml_io.read_xml(cls, source)

    def to_xml(self, style: str = "attribute", tag=None) -> str:
        return xml_io.to_xml_string(self, tag=tag, style=style)

    def point_at(self, t: float) -> Point3D:
        return self.through_point + t * self.direction

    def closest_point_to(self, point: Point3D) -> Point3D:
        """Closest point on the supporting line."""
        t = self.direction.dot_product(point - self.through_point)
        return self.point_at(t)

    def distance_to(self, point: Point3D) -> float:
        """Distance from a point to the supporting line."""
        return self.closest_point_to(point).distance_to(point)

    def intersection_with(self, plane: Plane) -> Point3D:
        return plane.intersection_with(self)

    def equals(self, other: Ray3D, tolerance: float) -> bool:
        check_tolerance(tolerance)
        return (self.through_point.equals(other.through_point, tolerance) and
                self.direction.equals(other.direction, tolerance))

    def __str__(self) -> str:
        return f"Ray3D(through={self.through_point}, direction={self.direction})"

