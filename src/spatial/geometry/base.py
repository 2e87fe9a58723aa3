"""
Shared behaviour of three-component value types.

Point3D, Vector3D and UnitVector3D all store (x, y, z) as floats. This module
holds everything that does not depend on what the triple means: array
conversion, exact and tolerant equality, hashing, text and XML round trips.
"""

from __future__ import annotations
from typing import ClassVar, Iterator, Optional, Sequence
import numpy as np
from numpy.typing import NDArray

from ..config.schemas import FormatConfig, DEFAULT_FORMAT
from ..errors import InvalidArgumentError
from ..io import xml_io
from ..io.parser import parse_item3d


def check_tolerance(tolerance: float) -> None:
    """Raise InvalidArgumentError for a negative tolerance."""
    if tolerance < 0:
        raise InvalidArgumentError(f"tolerance must be non-negative, got {tolerance}")


class Coordinates3D:
    """
    Mixin for frozen dataclasses with float fields x, y, z.

    Subclasses set `_family`; values only compare equal within one family
    (vectors and unit vectors share a family, points have their own).
    """

    x: float
    y: float
    z: float

    _family: ClassVar[str] = ""

    # Make numpy defer to our reflected operators (np.float64(2) * v, R @ v)
    __array_ufunc__ = None

    @classmethod
    def from_sequence(cls, data: Sequence[float]):
        """Create from any sequence of exactly three numbers."""
        data = list(data)
        if len(data) != 3:
            raise InvalidArgumentError(f"Expected 3 components, got {len(data)}")
        return cls(data[0], data[1], data[2])

    @classmethod
    def from_array(cls, arr: NDArray[np.float64]):
        """Create from NumPy array of shape (3,)."""
        arr = np.asarray(arr, dtype=np.float64)
        if arr.shape != (3,):
            raise InvalidArgumentError(f"Expected array of shape (3,), got {arr.shape}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    @classmethod
    def parse(cls, text: str, config: Optional[FormatConfig] = None):
        """Create from a coordinate literal such as '(1, 2, 3)'."""
        return cls.from_sequence(parse_item3d(text, config))

    @classmethod
    def from_xml(cls, source):
        """Read from an XML element or string (X, Y, Z as attributes or child elements)."""
        return xml_io.read_xml(cls, source)

    def to_xml(self, style: str = "attribute", tag: Optional[str] = None) -> str:
        """Serialize to an XML string."""
        return xml_io.to_xml_string(self, tag=tag, style=style)

    def to_array(self) -> NDArray[np.float64]:
        """Convert to NumPy array (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def _same_family(self, other) -> bool:
        return isinstance(other, Coordinates3D) and other._family == self._family

    def __eq__(self, other) -> bool:
        if not isinstance(other, Coordinates3D):
            return NotImplemented
        if not self._same_family(other):
            return False
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        h = hash(self.x)
        h = (h * 397) ^ hash(self.y)
        h = (h * 397) ^ hash(self.z)
        return h

    def equals(self, other, tolerance: float) -> bool:
        """Per-component comparison |a - b| < tolerance."""
        check_tolerance(tolerance)
        if not self._same_family(other):
            return False
        return (abs(other.x - self.x) < tolerance and
                abs(other.y - self.y) < tolerance and
                abs(other.z - self.z) < tolerance)

    def to_string(self, config: Optional[FormatConfig] = None) -> str:
        """Render as '(x, y, z)'; ';' separates components when ',' is the decimal separator."""
        config = config or DEFAULT_FORMAT
        sep = config.separator()
        parts = [config.format_number(c) for c in self]
        return f"({parts[0]}{sep} {parts[1]}{sep} {parts[2]})"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return self.to_string()
        return self.to_string(FormatConfig(number_format=format_spec))

    def __str__(self) -> str:
        return self.to_string()
