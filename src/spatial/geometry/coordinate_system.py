"""
CoordinateSystem: an origin plus an orthonormal basis.

The basis vectors are the columns of the rotation matrix R. Vectors are
transformed by R only; points by R and then translated by the origin.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import ClassVar, Optional, Union
import numpy as np
from numpy.typing import NDArray

from ..config.schemas import DEFAULT_TOLERANCE, ToleranceConfig
from ..errors import InvalidArgumentError
from ..io import xml_io
from ..units import Angle, AngleUnit
from .base import check_tolerance
from .point import Point3D
from .vector import BaseVector3D, UnitVector3D, Vector3D

logger = logging.getLogger(__name__)


def rotation_matrix(axis: BaseVector3D, angle_rad: float) -> NDArray[np.float64]:
    """
    3x3 rotation matrix about an arbitrary axis (Rodrigues' formula).

    R = cos(a) I + sin(a) [u]x + (1 - cos(a)) u u^T

    Args:
        axis: Rotation axis (normalized here)
        angle_rad: Rotation angle in radians (positive = CCW looking down the axis)

    Returns:
        3x3 rotation matrix
    """
    u = UnitVector3D.coerce(axis)
    c = np.cos(angle_rad)
    s = np.sin(angle_rad)
    return (c * np.eye(3, dtype=np.float64)
            + s * u.cross_product_matrix
            + (1.0 - c) * u.get_unit_tensor_product())


def rotation_matrix_xyz(rx: float, ry: float, rz: float) -> NDArray[np.float64]:
    """
    3D rotation matrix from Euler angles (XYZ convention).

    Args:
        rx, ry, rz: Rotation angles about x, y, z axes (radians)

    Returns:
        3x3 rotation matrix (R = Rz * Ry * Rx)
    """
    Rx = rotation_matrix(UnitVector3D.X_AXIS, rx)
    Ry = rotation_matrix(UnitVector3D.Y_AXIS, ry)
    Rz = rotation_matrix(UnitVector3D.Z_AXIS, rz)
    return Rz @ Ry @ Rx


@dataclass(frozen=True, init=False)
class CoordinateSystem:
    """
    Origin plus three pairwise orthogonal unit axes.

    Attributes:
        origin: Origin point
        x_axis, y_axis, z_axis: Basis directions
    """

    origin: Point3D
    x_axis: UnitVector3D
    y_axis: UnitVector3D
    z_axis: UnitVector3D

    _XML_PARTS: ClassVar[tuple] = (
        ("Origin", "origin", Point3D),
        ("XAxis", "x_axis", UnitVector3D),
        ("YAxis", "y_axis", UnitVector3D),
        ("ZAxis", "z_axis", UnitVector3D),
    )

    def __init__(self,
                 origin: Optional[Point3D] = None,
                 x_axis: Optional[BaseVector3D] = None,
                 y_axis: Optional[BaseVector3D] = None,
                 z_axis: Optional[BaseVector3D] = None,
                 tolerances: Optional[ToleranceConfig] = None):
        object.__setattr__(self, "origin", origin if origin is not None else Point3D.ORIGIN)
        object.__setattr__(self, "x_axis", UnitVector3D.coerce(x_axis if x_axis is not None else UnitVector3D.X_AXIS))
        object.__setattr__(self, "y_axis", UnitVector3D.coerce(y_axis if y_axis is not None else UnitVector3D.Y_AXIS))
        object.__setattr__(self, "z_axis", UnitVector3D.coerce(z_axis if z_axis is not None else UnitVector3D.Z_AXIS))

        tolerances = tolerances if tolerances is not None else DEFAULT_TOLERANCE
        if not self.is_orthonormal(tolerances.orthonormal):
            raise InvalidArgumentError(
                f"Basis is not orthogonal: {self.x_axis}, {self.y_axis}, {self.z_axis}"
            )

    @classmethod
    def identity(cls) -> CoordinateSystem:
        """World coordinate system (no translation/rotation)."""
        return cls()

    @classmethod
    def from_matrix(cls, matrix: NDArray[np.float64],
                    origin: Optional[Point3D] = None,
                    tolerances: Optional[ToleranceConfig] = None) -> CoordinateSystem:
        """
        Build from a 3x3 rotation matrix (basis vectors as columns) or a
        4x4 homogeneous matrix (translation in the last column).
        """
        m = np.asarray(matrix, dtype=np.float64)
        if m.shape == (4, 4):
            if origin is None:
                origin = Point3D.from_array(m[:3, 3])
            m = m[:3, :3]
        if m.shape != (3, 3):
            raise InvalidArgumentError(f"Expected a (3, 3) or (4, 4) matrix, got shape {m.shape}")
        return cls(origin,
                   UnitVector3D.from_array(m[:, 0]),
                   UnitVector3D.from_array(m[:, 1]),
                   UnitVector3D.from_array(m[:, 2]),
                   tolerances)

    @classmethod
    def rotation(cls, angle: Union[Angle, float], axis: BaseVector3D,
                 unit: AngleUnit | str = AngleUnit.RADIANS) -> CoordinateSystem:
        """
        Pure rotation about `axis` through the origin.

        Args:
            angle: Angle, or a number expressed in `unit`
            axis: Rotation axis
            unit: Unit of a numeric angle

        Returns:
            CoordinateSystem whose basis is the rotated world basis
        """
        angle = Angle.coerce(angle, unit)
        logger.debug("Rotation of %r rad about %s", angle.radians, axis)
        return cls.from_matrix(rotation_matrix(axis, angle.radians))

    @classmethod
    def from_euler(cls, rx: float, ry: float, rz: float,
                   unit: AngleUnit | str = AngleUnit.RADIANS,
                   origin: Optional[Point3D] = None) -> CoordinateSystem:
        """
        Create from Euler angles (XYZ convention, R = Rz * Ry * Rx).

        Args:
            rx, ry, rz: Rotation angles about x, y, z axes
            unit: Unit of the angles
            origin: Optional origin (default: world origin)
        """
        rx, ry, rz = (Angle(a, unit).radians for a in (rx, ry, rz))
        return cls.from_matrix(rotation_matrix_xyz(rx, ry, rz), origin)

    @classmethod
    def translation(cls, offset: BaseVector3D) -> CoordinateSystem:
        """World-aligned system moved by `offset`."""
        return cls(offset.to_point3d())

    @classmethod
    def from_xml(cls, source):
        return xml_io.read_xml(cls, source)

    def to_xml(self, style: str = "attribute", tag=None) -> str:
        return xml_io.to_xml_string(self, tag=tag, style=style)

    @property
    def rotation_matrix(self) -> NDArray[np.float64]:
        """3x3 matrix with the basis vectors as columns."""
        return np.column_stack([self.x_axis.to_array(),
                                self.y_axis.to_array(),
                                self.z_axis.to_array()])

    def is_orthonormal(self, tolerance: Optional[float] = None) -> bool:
        """True if the axes are pairwise perpendicular within `tolerance`."""
        if tolerance is None:
            tolerance = DEFAULT_TOLERANCE.orthonormal
        check_tolerance(tolerance)
        return (abs(self.x_axis.dot_product(self.y_axis)) < tolerance and
                abs(self.y_axis.dot_product(self.z_axis)) < tolerance and
                abs(self.z_axis.dot_product(self.x_axis)) < tolerance)

    def transform(self, value: Union[Point3D, BaseVector3D]) -> Union[Point3D, Vector3D]:
        """
        Apply the system to a point (rotate + translate) or vector (rotate only).

        Vectors always come back as Vector3D.
        """
        if isinstance(value, Point3D):
            return Point3D.from_array(self.rotation_matrix @ value.to_array() + self.origin.to_array())
        if isinstance(value, BaseVector3D):
            return Vector3D.from_array(self.rotation_matrix @ value.to_array())
        raise TypeError(f"Cannot transform {type(value).__name__}")

    def invert(self) -> CoordinateSystem:
        """Inverse transform (R^T, -R^T o)."""
        rt = self.rotation_matrix.T
        origin = Point3D.from_array(-(rt @ self.origin.to_array()))
        return CoordinateSystem.from_matrix(rt, origin)

    def compose(self, other: CoordinateSystem) -> CoordinateSystem:
        """System equivalent to applying `other` first, then self."""
        r = self.rotation_matrix @ other.rotation_matrix
        origin = self.transform(other.origin)
        return CoordinateSystem.from_matrix(r, origin)

    def __matmul__(self, other: CoordinateSystem) -> CoordinateSystem:
        if not isinstance(other, CoordinateSystem):
            return NotImplemented
        return self.compose(other)

    def to_matrix_4x4(self) -> NDArray[np.float64]:
        """
        Convert to 4x4 homogeneous transformation matrix.

        Returns:
            4x4 matrix
        """
        mat = np.eye(4, dtype=np.float64)
        mat[:3, :3] = self.rotation_matrix
        mat[:3, 3] = self.origin.to_array()
        return mat

    def equals(self, other: CoordinateSystem, tolerance: float) -> bool:
        check_tolerance(tolerance)
        return (self.origin.equals(other.origin, tolerance) and
                self.x_axis.equals(other.x_axis, tolerance) and
                self.y_axis.equals(other.y_axis, tolerance) and
                self.z_axis.equals(other.z_axis, tolerance))

    def __str__(self) -> str:
        return (
            f"CoordinateSystem(origin={self.origin}, "
            f"x={self.x_axis}, y={self.y_axis}, z={self.z_axis})"
        )
