"""
Core package: geometry models, error types and plan document schemas.
"""

from .errors import (
    EmptyInput,
    InvalidAngle,
    InvalidGeometry,
    InvalidGrid,
    InvalidOverlap,
    LayoutError,
    OverlapTooLarge,
    PlanValidationError,
    RenderError,
)

__all__ = [
    "LayoutError",
    "InvalidGeometry",
    "InvalidAngle",
    "InvalidGrid",
    "InvalidOverlap",
    "OverlapTooLarge",
    "EmptyInput",
    "RenderError",
    "PlanValidationError",
]
