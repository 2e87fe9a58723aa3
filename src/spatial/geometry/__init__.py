"""Geometry value types: vectors, unit vectors, points, planes, rays, coordinate systems."""

from .vector import BaseVector3D, Vector3D, UnitVector3D
from .point import Point3D
from .plane import Plane, Ray3D
from .coordinate_system import CoordinateSystem, rotation_matrix, rotation_matrix_xyz

__all__ = [
    "BaseVector3D",
    "Vector3D",
    "UnitVector3D",
    "Point3D",
    "Plane",
    "Ray3D",
    "CoordinateSystem",
    "rotation_matrix",
    "rotation_matrix_xyz",
]
