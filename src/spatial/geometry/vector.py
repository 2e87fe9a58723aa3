"""
Free vectors and unit vectors: Vector3D and UnitVector3D.

Both share BaseVector3D, which implements the arithmetic once against the
general (free vector) type. Adding, subtracting, negating or scaling never
preserves unit length, so those always return Vector3D. The operations that
differ for unit vectors are the dot product (clamped to [-1, 1]) and the cross
product (renormalized).

Floating-point exceptional values are propagated, not trapped: dividing by
zero yields inf/nan components.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
import math
import numbers
import sys
from typing import TYPE_CHECKING, ClassVar, Optional, Sequence, Union
import numpy as np
from numpy.typing import NDArray

from ..config.schemas import DEFAULT_TOLERANCE, ToleranceConfig
from ..errors import InvalidArgumentError, InvalidDirectionError, UndefinedRotationAxisError
from ..units import Angle, AngleUnit
from .base import Coordinates3D

if TYPE_CHECKING:
    from .coordinate_system import CoordinateSystem
    from .plane import Plane, Ray3D
    from .point import Point3D

logger = logging.getLogger(__name__)

EPSILON = sys.float_info.epsilon

# A norm this close to 1 is left alone so that normalization is idempotent
_UNIT_NORM_SLACK = 4 * EPSILON


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class BaseVector3D(Coordinates3D, ABC):
    """Arithmetic shared by Vector3D and UnitVector3D."""

    _family: ClassVar[str] = "vector"

    @property
    @abstractmethod
    def length(self) -> float:
        ...

    def to_vector3d(self) -> Vector3D:
        return Vector3D(self.x, self.y, self.z)

    def to_point3d(self) -> Point3D:
        from .point import Point3D
        return Point3D(self.x, self.y, self.z)

    @abstractmethod
    def direction(self) -> UnitVector3D:
        """Unit vector pointing the same way (raises InvalidDirectionError for zero length)."""

    # -- arithmetic ----------------------------------------------------------

    def __add__(self, other) -> Vector3D:
        if not isinstance(other, BaseVector3D):
            return NotImplemented
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other) -> Vector3D:
        if not isinstance(other, BaseVector3D):
            return NotImplemented
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3D:
        return Vector3D(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        """Vector * vector is the dot product, vector * scalar scales."""
        if isinstance(other, BaseVector3D):
            return self.dot_product(other)
        if _is_scalar(other):
            return self.scale_by(other)
        return NotImplemented

    def __rmul__(self, other) -> Vector3D:
        if _is_scalar(other):
            return self.scale_by(other)
        return NotImplemented

    def __truediv__(self, scalar: float) -> Vector3D:
        if not _is_scalar(scalar):
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vector3D.from_array(self.to_array() / np.float64(scalar))

    def __rmatmul__(self, matrix) -> Vector3D:
        return self.transform_by(matrix)

    def scale_by(self, factor: float) -> Vector3D:
        return Vector3D(factor * self.x, factor * self.y, factor * self.z)

    def dot_product(self, other: BaseVector3D) -> float:
        """Raw (unclamped) dot product."""
        return (self.x * other.x) + (self.y * other.y) + (self.z * other.z)

    def cross_product(self, other: BaseVector3D) -> Vector3D:
        """Raw cross product."""
        return Vector3D(
            (self.y * other.z) - (self.z * other.y),
            (self.z * other.x) - (self.x * other.z),
            (self.x * other.y) - (self.y * other.x),
        )

    # -- angles ----------------------------------------------------------------

    def is_parallel_to(self, other: BaseVector3D,
                       tolerance: Optional[float] = None) -> bool:
        """True if the directions are parallel or antiparallel (default tolerance: DEFAULT_TOLERANCE.parallel)."""
        if tolerance is None:
            tolerance = DEFAULT_TOLERANCE.parallel
        dp = abs(self.direction().dot_product(other.direction()))
        return abs(1 - dp) < tolerance

    def is_perpendicular_to(self, other: BaseVector3D,
                            tolerance: Optional[float] = None) -> bool:
        if tolerance is None:
            tolerance = DEFAULT_TOLERANCE.perpendicular
        return abs(self.direction().dot_product(other.direction())) < tolerance

    def angle_to(self, other: BaseVector3D) -> Angle:
        """Unsigned angle in [0, pi]."""
        dp = self.direction().dot_product(other.direction())
        return Angle(math.acos(dp))

    def signed_angle_to(self, other: BaseVector3D, about: BaseVector3D,
                        tolerances: Optional[ToleranceConfig] = None) -> Angle:
        """
        Signed angle in [-pi, pi] from this vector to `other`.

        Both vectors are projected onto the plane through the origin with
        normal `about`; the sign follows the right-hand rule around `about`.

        Args:
            other: Target vector
            about: Rotation axis
            tolerances: Parallel and snap tolerances (default: DEFAULT_TOLERANCE)

        Raises:
            UndefinedRotationAxisError: if either vector is parallel to `about`
        """
        from .plane import Plane
        from .point import Point3D

        if tolerances is None:
            tolerances = DEFAULT_TOLERANCE
        about = about.direction()
        from_dir = self.direction()
        to_dir = other.direction()
        if from_dir.is_parallel_to(about, tolerances.parallel):
            raise UndefinedRotationAxisError("From-vector is parallel to the rotation axis")
        if to_dir.is_parallel_to(about, tolerances.parallel):
            raise UndefinedRotationAxisError("To-vector is parallel to the rotation axis")

        plane = Plane(Point3D.ORIGIN, about)
        pfv = from_dir.project_on(plane).direction
        ptv = to_dir.project_on(plane).direction
        dp = pfv.dot_product(ptv)

        snap = tolerances.angle_snap
        if abs(dp - 1) < snap:
            logger.debug("Projected directions coincide, snapping angle to 0")
            return Angle(0.0)
        if abs(dp + 1) < snap:
            logger.debug("Projected directions opposite, snapping angle to pi")
            return Angle(math.pi)

        angle = math.acos(dp)
        sign = pfv.cross_product(ptv).dot_product(plane.normal)
        return Angle(math.copysign(angle, sign))

    # -- projection & transforms -----------------------------------------------

    def project_on(self, target: Union[Plane, BaseVector3D]) -> Union[Ray3D, Vector3D]:
        """
        Project onto a plane (returns Ray3D) or onto a direction (returns Vector3D).

        Projection onto a direction u is (self . u) * u.
        """
        from .plane import Plane

        if isinstance(target, Plane):
            return target.project_vector(self)
        if isinstance(target, BaseVector3D):
            uv = target.direction()
            return self.dot_product(uv) * uv
        raise TypeError(f"Cannot project onto {type(target).__name__}")

    def transform_by(self, transform: Union[CoordinateSystem, NDArray[np.float64]]) -> Vector3D:
        """
        Transform by a coordinate system (rotation only) or a 3x3 matrix.

        The result is a free vector: a general matrix does not preserve length.
        """
        from .coordinate_system import CoordinateSystem

        if isinstance(transform, CoordinateSystem):
            return transform.transform(self.to_vector3d())

        m = np.asarray(transform, dtype=np.float64)
        if m.shape != (3, 3):
            raise InvalidArgumentError(f"Expected a (3, 3) matrix, got shape {m.shape}")
        with np.errstate(invalid="ignore", over="ignore"):
            return Vector3D.from_array(m @ self.to_array())


@dataclass(frozen=True, eq=False)
class Vector3D(BaseVector3D):
    """
    Free 3D vector: magnitude and direction, no normalization invariant.

    Attributes:
        x, y, z: Components
    """

    x: float
    y: float
    z: float

    ZERO: ClassVar[Vector3D]

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y, self.z)

    def normalize(self) -> UnitVector3D:
        """Unit vector in the same direction (InvalidDirectionError for zero length)."""
        return UnitVector3D(self.x, self.y, self.z)

    def direction(self) -> UnitVector3D:
        return self.normalize()

    @property
    def orthogonal(self) -> UnitVector3D:
        """Some unit vector perpendicular to this one."""
        return self.normalize().orthogonal

    def negate(self) -> Vector3D:
        return -self

    def rotate(self, about: BaseVector3D, angle: Union[Angle, float],
               unit: AngleUnit | str = AngleUnit.RADIANS) -> Vector3D:
        """This vector rotated by `angle` around `about` (right-hand rule)."""
        from .coordinate_system import CoordinateSystem
        cs = CoordinateSystem.rotation(angle, about, unit)
        return cs.transform(self)


@dataclass(frozen=True, eq=False, init=False)
class UnitVector3D(BaseVector3D):
    """
    Normalized 3D direction.

    The constructor divides (x, y, z) by its Euclidean norm and raises
    InvalidDirectionError when the norm is below machine epsilon. There is no
    other way to build one, so x**2 + y**2 + z**2 == 1 up to rounding.

    Input whose norm is already within 4 * epsilon of 1 is kept as given
    instead of being divided. Normalizing a unit vector again (or reading one
    back from XML) therefore returns the exact same components.

    Attributes:
        x, y, z: Components of the direction
    """

    x: float
    y: float
    z: float

    X_AXIS: ClassVar[UnitVector3D]
    Y_AXIS: ClassVar[UnitVector3D]
    Z_AXIS: ClassVar[UnitVector3D]

    def __init__(self, x: float, y: float, z: float):
        x, y, z = float(x), float(y), float(z)
        norm = math.hypot(x, y, z)
        if norm < EPSILON:
            raise InvalidDirectionError(
                f"Cannot derive a direction from ({x!r}, {y!r}, {z!r}): length {norm!r} < epsilon"
            )
        if abs(norm - 1.0) > _UNIT_NORM_SLACK:
            x, y, z = x / norm, y / norm, z / norm
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "z", z)

    @classmethod
    def coerce(cls, value: Union[BaseVector3D, Sequence[float]]) -> UnitVector3D:
        """Return a UnitVector3D unchanged, normalize anything else vector-like."""
        if isinstance(value, UnitVector3D):
            return value
        if isinstance(value, BaseVector3D):
            return value.direction()
        return cls.from_sequence(value)

    @property
    def length(self) -> float:
        return 1.0

    def direction(self) -> UnitVector3D:
        return self

    @property
    def orthogonal(self) -> UnitVector3D:
        """
        A unit vector perpendicular to this one.

        Three paths:
            -x - y > 0.1: normalize (z, z, -x-y)
            otherwise: normalize (-y-z, x, x)
            unless that candidate is shorter than 0.1, which happens near
            (0, s, -s) where it vanishes; then (z, z, -x-y) is used as well

        Deterministic but not continuous: nearby inputs on either side of a
        threshold get unrelated results.
        """
        x, y, z = self.x, self.y, self.z
        if -x - y <= 0.1:
            # (-y-z, x, x) vanishes near (0, s, -s); use the other formula there
            candidate = (-y - z, x, x)
            if math.hypot(*candidate) >= 0.1:
                return UnitVector3D(*candidate)
        return UnitVector3D(z, z, -x - y)

    @property
    def cross_product_matrix(self) -> NDArray[np.float64]:
        """Skew-symmetric matrix K with K @ v == self x v."""
        x, y, z = self.x, self.y, self.z
        return np.array([
            [0.0, -z, y],
            [z, 0.0, -x],
            [-y, x, 0.0]
        ], dtype=np.float64)

    def get_unit_tensor_product(self) -> NDArray[np.float64]:
        """Outer product u u^T (projector onto this direction)."""
        u = self.to_array()
        return np.outer(u, u)

    def dot_product(self, other: BaseVector3D) -> float:
        """Dot product; clamped to [-1, 1] when both operands are unit vectors."""
        dp = (self.x * other.x) + (self.y * other.y) + (self.z * other.z)
        if isinstance(other, UnitVector3D):
            return max(-1.0, min(dp, 1.0))
        return dp

    def cross_product(self, other: BaseVector3D) -> Union[UnitVector3D, Vector3D]:
        """Cross product; renormalized to a UnitVector3D when `other` is one."""
        raw = super().cross_product(other)
        if isinstance(other, UnitVector3D):
            return UnitVector3D(raw.x, raw.y, raw.z)
        return raw

    def negate(self) -> UnitVector3D:
        return UnitVector3D(-self.x, -self.y, -self.z)

    def rotate(self, about: BaseVector3D, angle: Union[Angle, float],
               unit: AngleUnit | str = AngleUnit.RADIANS) -> UnitVector3D:
        """This direction rotated by `angle` around `about`, renormalized."""
        from .coordinate_system import CoordinateSystem
        cs = CoordinateSystem.rotation(angle, about, unit)
        return cs.transform(self.to_vector3d()).normalize()


Vector3D.ZERO = Vector3D(0.0, 0.0, 0.0)
UnitVector3D.X_AXIS = UnitVector3D(1.0, 0.0, 0.0)
UnitVector3D.Y_AXIS = UnitVector3D(0.0, 1.0, 0.0)
UnitVector3D.Z_AXIS = UnitVector3D(0.0, 0.0, 1.0)
