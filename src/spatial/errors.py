"""
Exceptions raised by geometry construction and parsing.

Floating-point exceptional values (inf/nan from division by zero or an
ill-conditioned transform) are not errors here; they propagate as values.
"""


class SpatialError(ValueError):
    """Base class for all geometry errors."""


class InvalidDirectionError(SpatialError):
    """A unit vector was requested from a vector with (near) zero length."""


class InvalidArgumentError(SpatialError):
    """Malformed input: wrong component count, negative tolerance, bad matrix shape."""


class ParseError(InvalidArgumentError):
    """Text could not be parsed into exactly three finite components."""


class UndefinedRotationAxisError(InvalidArgumentError):
    """The rotation axis is parallel to one of the operands."""
