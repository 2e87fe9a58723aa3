"""
Pydantic schemas for formatting and tolerance configuration.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional


class FormatConfig(BaseModel):
    """How vector-like values are rendered as and parsed from text."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    decimal_separator: Literal[".", ","] = Field(
        default=".",
        description="Decimal separator used for each component"
    )
    number_format: str = Field(
        default="",
        description="Python format spec applied to each component ('' = shortest round-trip repr)"
    )
    component_separator: Optional[str] = Field(
        default=None,
        description="Separator between components (None = ';' for comma decimals, else ',')"
    )

    @field_validator('component_separator')
    @classmethod
    def check_separator(cls, v):
        """Separator must be a single non-digit character."""
        if v is None:
            return v
        if len(v) != 1 or v.isdigit() or v in "+-.eE":
            raise ValueError(f"Invalid component separator: {v!r}")
        return v

    def separator(self) -> str:
        """Effective component separator."""
        if self.component_separator is not None:
            return self.component_separator
        return ";" if self.decimal_separator == "," else ","

    def format_number(self, value: float) -> str:
        """Format one component honouring the number format and decimal separator."""
        text = format(value, self.number_format) if self.number_format else repr(float(value))
        if self.decimal_separator == ",":
            text = text.replace(".", ",")
        return text


class ToleranceConfig(BaseModel):
    """Default tolerances for geometric predicates."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    parallel: float = Field(
        default=1e-6,
        ge=0,
        description="Max |1 - |u.v|| for two directions to count as parallel"
    )
    perpendicular: float = Field(
        default=1e-6,
        ge=0,
        description="Max |u.v| for two directions to count as perpendicular"
    )
    angle_snap: float = Field(
        default=1e-15,
        ge=0,
        description="Distance of a cosine from +/-1 at which the angle snaps to 0 or pi"
    )
    orthonormal: float = Field(
        default=1e-9,
        ge=0,
        description="Tolerance for coordinate system basis validation"
    )


class SpatialConfig(BaseModel):
    """Top-level configuration."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    format: FormatConfig = Field(
        default_factory=FormatConfig,
        description="Text formatting settings"
    )
    tolerance: ToleranceConfig = Field(
        default_factory=ToleranceConfig,
        description="Geometric tolerances"
    )


DEFAULT_FORMAT = FormatConfig()
DEFAULT_TOLERANCE = ToleranceConfig()
