"""
Module: layout.stacker

Purpose:
    Combine a page sequence into one long canvas, side by side or top to
    bottom, with optional spacing, separator lines and background.

Key Functions:
    - stack(): Single-canvas plan
    - placeholder_for(): Stand-in for a page that failed to render

Partial Failure:
    A page that cannot be rendered does not abort the stack. Callers
    that already know a page is unrenderable pass it in ``unrenderable``;
    failures discovered while executing are handled by the executor via
    placeholder_for(). Either way the page's rect is kept, so the canvas
    dimensions are unchanged and the rest of the batch survives.

Dependencies:
    - layout.models: Plan models
    - layout.config: SeparatorSpec

Used By:
    - output.executor: Placeholder substitution
    - cli: combine command
"""

from __future__ import annotations

import logging
from typing import Collection, List, Optional, Sequence

from pdf_layout_toolkit.core.errors import EmptyInput, InvalidGeometry
from pdf_layout_toolkit.core.models import Point, Rect, Size, SourcePage

from .config import SeparatorSpec
from .models import (
    Color,
    CompositionPlan,
    LinePrimitive,
    PlaceholderPrimitive,
    Placement,
    RectPrimitive,
    SheetPlan,
    StackDirection,
    StrokeStyle,
)

logger = logging.getLogger(__name__)


def placeholder_for(
    placement: Placement,
    page_number: int,
    label: Optional[str] = None,
) -> PlaceholderPrimitive:
    """
    Placeholder occupying a placement's rect.

    Args:
        placement: Placement whose page could not be rendered
        page_number: 1-based page number used in the default label
        label: Custom label text

    Returns:
        PlaceholderPrimitive with the placement's target rect
    """
    return PlaceholderPrimitive(
        rect=placement.target_rect,
        label=label or f"Page {page_number} could not be rendered",
        source_page_id=placement.source_page_id,
    )


def stack(
    pages: Sequence[SourcePage],
    direction: StackDirection | str = StackDirection.VERTICAL,
    spacing: float = 0.0,
    separator: Optional[SeparatorSpec] = None,
    *,
    background: Optional[Color] = None,
    unrenderable: Collection[str] = (),
    render_scale: float = 1.0,
) -> CompositionPlan:
    """
    Concatenate pages onto a single canvas.

    Horizontal: width is the sum of page widths plus spacing, height is
    the tallest page; pages run left to right, vertically centred.
    Vertical: height is the sum of page heights plus spacing, width is
    the widest page; pages run top to bottom, horizontally centred.

    Args:
        pages: Pages in order
        direction: HORIZONTAL or VERTICAL
        spacing: Gap between neighbouring pages in points
        separator: Draw a line through the middle of every gap
        background: Canvas fill; white (or None) draws nothing
        unrenderable: Page ids to replace with placeholders up front
        render_scale: Pixels per point used when a page is rasterized

    Returns:
        CompositionPlan with exactly one sheet

    Raises:
        EmptyInput: If ``pages`` is empty
        InvalidGeometry: If ``spacing`` is negative

    Example:
        >>> plan = stack([a_100x50, b_200x50], "horizontal", spacing=10)
        >>> plan.output_size
        Size(310, 50)
    """
    if not pages:
        raise EmptyInput("No pages to combine")
    if spacing < 0:
        raise InvalidGeometry(f"spacing must be >= 0: {spacing}")

    direction = StackDirection(direction)
    sizes = [page.display_size for page in pages]
    gaps = spacing * (len(pages) - 1)

    if direction is StackDirection.HORIZONTAL:
        canvas = Size(sum(s.width for s in sizes) + gaps, max(s.height for s in sizes))
    else:
        canvas = Size(max(s.width for s in sizes), sum(s.height for s in sizes) + gaps)

    placements: List[Placement] = []
    decorations: list = []
    separator_style = (
        StrokeStyle(color=separator.color, width=separator.thickness) if separator else None
    )
    current_x = 0.0
    current_y = canvas.height

    for i, (page, size) in enumerate(zip(pages, sizes)):
        is_last = i == len(pages) - 1

        if direction is StackDirection.HORIZONTAL:
            rect = Rect(current_x, (canvas.height - size.height) / 2, size.width, size.height)
        else:
            current_y -= size.height
            rect = Rect((canvas.width - size.width) / 2, current_y, size.width, size.height)

        placement = Placement(
            source_page_id=page.page_id,
            target_rect=rect,
            origin_offset=rect.origin,
            render_scale=render_scale,
            page_number=i + 1,
        )
        if page.page_id in unrenderable:
            logger.warning(f"Page {i + 1} ({page.page_id}) replaced by placeholder")
            decorations.append(placeholder_for(placement, i + 1))
        else:
            placements.append(placement)

        if direction is StackDirection.HORIZONTAL:
            if separator_style and not is_last:
                line_x = current_x + size.width + spacing / 2
                decorations.append(LinePrimitive(
                    Point(line_x, 0.0), Point(line_x, canvas.height), separator_style
                ))
            current_x += size.width + spacing
        else:
            if separator_style and not is_last:
                line_y = current_y - spacing / 2
                decorations.append(LinePrimitive(
                    Point(0.0, line_y), Point(canvas.width, line_y), separator_style
                ))
            current_y -= spacing

    fill = None
    if background is not None and not background.is_white:
        fill = RectPrimitive(rect=Rect.from_size(canvas), fill=background)

    logger.info(
        f"Combined {len(pages)} pages {direction.value}ly onto "
        f"{canvas.width:g}x{canvas.height:g}pt"
    )
    return CompositionPlan(
        kind="combine",
        sheets=(SheetPlan(
            index=0,
            size=canvas,
            placements=tuple(placements),
            background=fill,
            decorations=tuple(decorations),
        ),),
        allows_placeholders=True,
    )
