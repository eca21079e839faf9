"""
Module: output.interfaces

Purpose:
    The two collaborator capability sets the layout engine is used with.
    The engine never calls these itself; the plan executor does, on the
    caller's behalf.

Key Classes:
    - PageSource: Page metadata and rasterization
    - CanvasBuilder: Output page construction and drawing

Dependencies:
    - PIL: Pixel buffers

Used By:
    - output.fitz_source: PyMuPDF PageSource
    - output.reportlab_builder: ReportLab CanvasBuilder
    - output.executor: Plan execution
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from PIL import Image

from pdf_layout_toolkit.core.models import Point, Rect, Size
from pdf_layout_toolkit.layout.models import Color, StrokeStyle


class PageSource(ABC):
    """
    Read access to one page of an external document.

    Implementations own the document; callers must keep it open for as
    long as the source is used.
    """

    @abstractmethod
    def get_size(self) -> Size:
        """
        Unrotated page size in points.

        Returns:
            Size of the page box
        """

    @abstractmethod
    def get_rotation(self) -> float:
        """
        Current page rotation in degrees.

        Returns:
            Rotation (0, 90, 180 or 270 for PDF pages)
        """

    @abstractmethod
    def render_to_pixels(self, scale: float) -> Image.Image:
        """
        Rasterize the page as displayed (own rotation applied).

        Args:
            scale: Pixels per point

        Returns:
            RGB image of the page

        Raises:
            RenderError: If the page cannot be rasterized
        """


class CanvasBuilder(ABC):
    """
    Output document under construction.

    Handles returned by add_page() identify pages for the draw calls.
    All coordinates are canvas space (points, origin bottom-left).
    """

    @abstractmethod
    def add_page(self, size: Size, rotation: int = 0) -> Any:
        """
        Start a new output page.

        Args:
            size: Page size in points, before rotation
            rotation: Clockwise page rotation flag in degrees (quarter turns)

        Returns:
            Opaque page handle
        """

    @abstractmethod
    def draw_image(
        self,
        page: Any,
        image: Image.Image,
        rect: Rect,
        rotation_degrees: float = 0.0,
    ) -> None:
        """
        Draw an image stretched over ``rect``.

        Args:
            page: Handle from add_page()
            image: Pixels to draw
            rect: Canvas rect before rotation
            rotation_degrees: Counter-clockwise rotation about the rect's
                lower-left corner
        """

    @abstractmethod
    def draw_rect(
        self,
        page: Any,
        rect: Rect,
        stroke: Optional[StrokeStyle] = None,
        fill: Optional[Color] = None,
    ) -> None:
        """Draw a rectangle outline and/or fill."""

    @abstractmethod
    def draw_line(self, page: Any, start: Point, end: Point, style: StrokeStyle) -> None:
        """Draw a straight line."""

    @abstractmethod
    def draw_text(
        self,
        page: Any,
        text: str,
        origin: Point,
        size: float = 12.0,
        color: Optional[Color] = None,
    ) -> None:
        """Draw a single line of text with its baseline starting at ``origin``."""
