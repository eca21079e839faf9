"""
Module: output.reportlab_builder

Purpose:
    CanvasBuilder implementation writing a PDF with ReportLab.
    Pages are built strictly in order; a handle is only valid until the
    next add_page() call.

Key Classes:
    - ReportLabCanvasBuilder: PDF output

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling

Used By:
    - cli: Writes every tool's output
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from pdf_layout_toolkit.core.models import Point, Rect, Size
from pdf_layout_toolkit.layout.models import BLACK, Color, StrokeStyle

from .interfaces import CanvasBuilder

logger = logging.getLogger(__name__)

LABEL_FONT = "Helvetica"


class ReportLabCanvasBuilder(CanvasBuilder):
    """
    Build a PDF file page by page.

    Args:
        output_path: File to write on save()

    Example:
        >>> with ReportLabCanvasBuilder(Path("out.pdf")) as builder:
        ...     execute_plan(plan, sources, builder)
    """

    def __init__(self, output_path: Path | str) -> None:
        self.output_path = Path(output_path)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._canvas = canvas.Canvas(str(self.output_path))
        self._current: Optional[int] = None
        self.page_count = 0

    # ─────────────────────────────────────────────────────────────────────────
    # Pages
    # ─────────────────────────────────────────────────────────────────────────

    def add_page(self, size: Size, rotation: int = 0) -> int:
        if self._current is not None:
            self._canvas.showPage()
        rotation = rotation % 360
        # ReportLab swaps the MediaBox of quarter-turned pages on write
        page_size = size.swapped() if rotation % 180 == 90 else size
        self._canvas.setPageSize(page_size.as_tuple())
        self._canvas.setPageRotation(rotation)
        self._current = self.page_count
        self.page_count += 1
        return self._current

    def _check(self, page: int) -> canvas.Canvas:
        if page != self._current:
            raise ValueError(f"Page {page} is no longer open (current: {self._current})")
        return self._canvas

    # ─────────────────────────────────────────────────────────────────────────
    # Drawing
    # ─────────────────────────────────────────────────────────────────────────

    def draw_image(
        self,
        page: int,
        image: Image.Image,
        rect: Rect,
        rotation_degrees: float = 0.0,
    ) -> None:
        c = self._check(page)
        reader = _pil_to_reader(image)
        c.saveState()
        c.translate(rect.x, rect.y)
        if rotation_degrees:
            c.rotate(rotation_degrees)
        c.drawImage(reader, 0, 0, width=rect.width, height=rect.height)
        c.restoreState()

    def draw_rect(
        self,
        page: int,
        rect: Rect,
        stroke: Optional[StrokeStyle] = None,
        fill: Optional[Color] = None,
    ) -> None:
        c = self._check(page)
        do_stroke = stroke is not None and stroke.width > 0
        if not do_stroke and fill is None:
            return
        c.saveState()
        if do_stroke:
            _apply_stroke(c, stroke)
        if fill is not None:
            c.setFillColorRGB(*fill.as_tuple())
        c.rect(
            rect.x, rect.y, rect.width, rect.height,
            stroke=1 if do_stroke else 0,
            fill=1 if fill is not None else 0,
        )
        c.restoreState()

    def draw_line(self, page: int, start: Point, end: Point, style: StrokeStyle) -> None:
        c = self._check(page)
        if style.width <= 0:
            return
        c.saveState()
        _apply_stroke(c, style)
        c.line(start.x, start.y, end.x, end.y)
        c.restoreState()

    def draw_text(
        self,
        page: int,
        text: str,
        origin: Point,
        size: float = 12.0,
        color: Optional[Color] = None,
    ) -> None:
        c = self._check(page)
        c.saveState()
        c.setFont(LABEL_FONT, size)
        c.setFillColorRGB(*(color or BLACK).as_tuple())
        c.drawString(origin.x, origin.y, text)
        c.restoreState()

    # ─────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────

    def save(self) -> Path:
        """
        Finish the last page and write the file.

        Returns:
            Path written
        """
        if self._current is not None:
            # Canvas.save() drops a trailing page with no drawing on it
            self._canvas.showPage()
            self._current = None
        self._canvas.save()
        logger.info(f"Wrote {self.page_count} pages to {self.output_path}")
        return self.output_path

    def __enter__(self) -> ReportLabCanvasBuilder:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Only write the file when the block succeeded
        if exc_type is None:
            self.save()


def _apply_stroke(c: canvas.Canvas, style: StrokeStyle) -> None:
    c.setStrokeColorRGB(*style.color.as_tuple())
    c.setLineWidth(style.width)
    if style.dash:
        c.setDash(list(style.dash), 0)


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """Convert a PIL image to a ReportLab ImageReader via PNG."""
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)
