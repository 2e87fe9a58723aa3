"""Immutable 3D Euclidean geometry value types."""

from .errors import (
    SpatialError,
    InvalidDirectionError,
    InvalidArgumentError,
    ParseError,
    UndefinedRotationAxisError,
)
from .units import Angle, AngleUnit
from .geometry import (
    Vector3D,
    UnitVector3D,
    Point3D,
    Plane,
    Ray3D,
    CoordinateSystem,
)
from .config import FormatConfig, ToleranceConfig, SpatialConfig

__all__ = [
    "SpatialError",
    "InvalidDirectionError",
    "InvalidArgumentError",
    "ParseError",
    "UndefinedRotationAxisError",
    "Angle",
    "AngleUnit",
    "Vector3D",
    "UnitVector3D",
    "Point3D",
    "Plane",
    "Ray3D",
    "CoordinateSystem",
    "FormatConfig",
    "ToleranceConfig",
    "SpatialConfig",
]
