"""Configuration schemas for formatting and tolerances."""

from .schemas import (
    FormatConfig,
    ToleranceConfig,
    SpatialConfig,
    DEFAULT_FORMAT,
    DEFAULT_TOLERANCE,
)

__all__ = [
    "FormatConfig",
    "ToleranceConfig",
    "SpatialConfig",
    "DEFAULT_FORMAT",
    "DEFAULT_TOLERANCE",
]
