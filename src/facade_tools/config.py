"""Pydantic parameter bags for the facade components."""

from __future__ import annotations

from pydantic import BaseModel, field_validator, model_validator

# Below this magnitude a louver height counts as zero
MIN_HEIGHT = 1e-9


class WindowParams(BaseModel):
    """Size, relative position and edge margin of a single window."""

    width: float = 500.0
    height: float = 500.0
    u: float = 0.5
    v: float = 0.5
    margin: float = 200.0

    @field_validator("width", "height")
    @classmethod
    def check_nonzero(cls, value: float, info) -> float:
        if value == 0:
            from facade_tools.errors import ValidationError
            raise ValidationError(f"{info.field_name} must not be zero")
        return value

    @model_validator(mode="after")
    def check_position(self):
        """Reject relative positions outside the unit domain."""
        if not (0.0 <= self.u <= 1.0 and 0.0 <= self.v <= 1.0):
            from facade_tools.errors import RangeError
            raise RangeError(
                f"u/v parameter is out of the 0 to 1.0 range (u={self.u}, v={self.v})"
            )
        return self

    @property
    def half_width(self) -> float:
        return abs(self.width) / 2

    @property
    def half_height(self) -> float:
        return abs(self.height) / 2


class ViewAreaParams(BaseModel):
    """Per-surface factors for the factored intersection area."""

    factors: list[float] = []


class LouverParams(BaseModel):
    """Count, orientation and dimensions of a louver array."""

    count: int = 10
    angle: float = 0.0
    length: float = 200.0
    width: float = 100.0
    height: float = 1000.0
    remove_ends: bool = False

    @field_validator("length", "width")
    @classmethod
    def check_positive(cls, value: float, info) -> float:
        if value <= 0:
            from facade_tools.errors import ValidationError
            raise ValidationError(f"{info.field_name} must be a positive number, got {value}")
        return value

    @field_validator("height")
    @classmethod
    def check_height(cls, value: float) -> float:
        if abs(value) < MIN_HEIGHT:
            from facade_tools.errors import ValidationError
            raise ValidationError("height cannot be zero")
        return value

    @model_validator(mode="after")
    def check_count(self):
        """Removing both ends needs at least one louver in between."""
        if self.count < self.min_count:
            from facade_tools.errors import WarningReport
            raise WarningReport(f"count must be at least {self.min_count}, got {self.count}")
        return self

    @property
    def min_count(self) -> int:
        return 3 if self.remove_ends else 1
