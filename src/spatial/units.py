"""
Angles with an explicit unit.

Angles are stored in radians; degrees are converted on construction.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import math

from .errors import InvalidArgumentError


class AngleUnit(str, Enum):
    """Supported angle units."""
    RADIANS = "radians"
    DEGREES = "degrees"


@dataclass(frozen=True, init=False)
class Angle:
    """
    Signed angle, stored in radians.

    Attributes:
        radians: Angle value in radians
    """

    radians: float

    def __init__(self, value: float, unit: AngleUnit | str = AngleUnit.RADIANS):
        unit = AngleUnit(unit)
        if unit is AngleUnit.DEGREES:
            value = math.radians(value)
        object.__setattr__(self, "radians", float(value))

    @classmethod
    def from_radians(cls, value: float) -> Angle:
        return cls(value, AngleUnit.RADIANS)

    @classmethod
    def from_degrees(cls, value: float) -> Angle:
        return cls(value, AngleUnit.DEGREES)

    @classmethod
    def coerce(cls, angle: Angle | float, unit: AngleUnit | str = AngleUnit.RADIANS) -> Angle:
        """Return `angle` unchanged if it is an Angle, else interpret the number in `unit`."""
        if isinstance(angle, Angle):
            return angle
        return cls(angle, unit)

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    def value_in(self, unit: AngleUnit | str) -> float:
        """Angle value expressed in `unit`."""
        if AngleUnit(unit) is AngleUnit.DEGREES:
            return self.degrees
        return self.radians

    def equals(self, other: Angle, tolerance: float) -> bool:
        """Compare radians within an absolute tolerance."""
        if tolerance < 0:
            raise InvalidArgumentError(f"tolerance must be non-negative, got {tolerance}")
        return abs(self.radians - other.radians) < tolerance

    def __add__(self, other: Angle) -> Angle:
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.radians + other.radians)

    def __sub__(self, other: Angle) -> Angle:
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.radians - other.radians)

    def __neg__(self) -> Angle:
        return Angle(-self.radians)

    def __abs__(self) -> Angle:
        return Angle(abs(self.radians))

    def __mul__(self, scalar: float) -> Angle:
        if isinstance(scalar, Angle):
            return NotImplemented
        return Angle(self.radians * scalar)

    def __rmul__(self, scalar: float) -> Angle:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Angle:
        if isinstance(scalar, Angle):
            return NotImplemented
        return Angle(self.radians / scalar)

    def __lt__(self, other: Angle) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return self.radians < other.radians

    def __le__(self, other: Angle) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return self.radians <= other.radians

    def __gt__(self, other: Angle) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return self.radians > other.radians

    def __ge__(self, other: Angle) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return self.radians >= other.radians

    def __float__(self) -> float:
        return self.radians

    def __format__(self, format_spec: str) -> str:
        return f"{format(self.radians, format_spec)}rad"

    def __str__(self) -> str:
        return f"{self.radians!r}rad"

    def __repr__(self) -> str:
        return f"Angle({self.radians!r})"
