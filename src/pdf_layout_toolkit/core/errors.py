"""
Module: core.errors

Purpose:
    Exception types raised by the layout engine and its collaborators.
    Every layout error is raised synchronously from the pure function
    that detected it; nothing is retried.

Key Classes:
    - LayoutError: Base class for invalid composition requests
    - InvalidGeometry, InvalidAngle, InvalidGrid: Bad inputs
    - InvalidOverlap, OverlapTooLarge: Bad posterize bleed
    - EmptyInput: No pages to compose
    - RenderError: A page source could not produce pixels
    - PlanValidationError: Plan document failed schema validation

Dependencies:
    - None

Used By:
    - pdf_layout_toolkit.layout: All layout components
    - pdf_layout_toolkit.output: Page sources and plan execution
    - pdf_layout_toolkit.cli: Exit code mapping
"""

from __future__ import annotations


class LayoutError(ValueError):
    """Base class for composition requests the engine cannot lay out."""
    pass


class InvalidGeometry(LayoutError):
    """Non-positive, non-finite or otherwise unusable dimensions."""
    pass


class InvalidAngle(LayoutError):
    """Rotation angle is missing, NaN or infinite."""
    pass


class InvalidGrid(LayoutError):
    """Grid has no cells or its cells have no usable area."""
    pass


class InvalidOverlap(LayoutError):
    """Posterize overlap is negative."""
    pass


class OverlapTooLarge(InvalidOverlap):
    """Posterize overlap would leave a tile without net content."""
    pass


class EmptyInput(LayoutError):
    """No source pages were supplied."""
    pass


class RenderError(Exception):
    """
    A page source failed to produce pixel content.

    Attributes:
        page_id: Identifier of the page that failed (if known)
    """

    def __init__(self, message: str, page_id: str | None = None):
        super().__init__(message)
        self.page_id = page_id


class PlanValidationError(Exception):
    """Raised when a plan document fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []
