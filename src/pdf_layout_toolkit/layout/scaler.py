"""
Module: layout.scaler

Purpose:
    Fit/fill scaling: map a source size into a target size under a
    "contain" (FIT) or "cover" (FILL) policy and centre the result.
    Also hosts the dimension standardization flow, which is a direct
    application of the scaler to every page.

Key Functions:
    - scale_to_fit(): Scale factor and centring offset
    - placed_rect(): Scaled content rect inside a target rect
    - standardize_pages(): One uniformly sized sheet per source page

Dependencies:
    - layout.models: ScaleMode, ScaleResult, plan models

Used By:
    - layout.grid: Fitting pages into cells
    - layout.tiles: Fitting tiles onto output pages
    - cli: standardize command
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from pdf_layout_toolkit.core.errors import EmptyInput, InvalidGeometry
from pdf_layout_toolkit.core.models import Point, Rect, Size, SourcePage

from .models import (
    Color,
    CompositionPlan,
    Orientation,
    Placement,
    RectPrimitive,
    ScaleMode,
    ScaleResult,
    SheetPlan,
)

logger = logging.getLogger(__name__)


def scale_to_fit(source: Size, target: Size, mode: ScaleMode = ScaleMode.FIT) -> ScaleResult:
    """
    Compute the uniform scale and centring offset for ``source`` in ``target``.

    FIT uses the smaller of the two axis ratios so the content is fully
    contained; FILL uses the larger so the content fully covers the
    target. The offset centres the scaled content; under FILL it is
    negative along the overflowing axis.

    Args:
        source: Content size
        target: Area to scale into
        mode: ScaleMode.FIT or ScaleMode.FILL

    Returns:
        ScaleResult(scale, offset)

    Raises:
        InvalidGeometry: If either size has a non-positive dimension

    Example:
        >>> scale_to_fit(Size(100, 50), Size(200, 200), ScaleMode.FIT)
        ScaleResult(scale=2.0, offset=Point(x=0.0, y=50.0))
    """
    for label, size in (("source", source), ("target", target)):
        if not isinstance(size, Size):
            raise InvalidGeometry(f"{label} must be a Size: {size!r}")
        if size.width <= 0 or size.height <= 0:
            raise InvalidGeometry(f"{label} has non-positive dimensions: {size!r}")

    ratio_x = target.width / source.width
    ratio_y = target.height / source.height
    if mode is ScaleMode.FILL:
        scale = max(ratio_x, ratio_y)
    else:
        scale = min(ratio_x, ratio_y)

    offset = Point(
        (target.width - source.width * scale) / 2,
        (target.height - source.height * scale) / 2,
    )
    return ScaleResult(scale=scale, offset=offset)


def placed_rect(
    source: Size,
    target_rect: Rect,
    mode: ScaleMode = ScaleMode.FIT,
) -> Tuple[Rect, ScaleResult]:
    """
    Scale ``source`` into ``target_rect`` and centre it there.

    Args:
        source: Content size
        target_rect: Canvas rect to scale into (must be non-empty)
        mode: Scale policy

    Returns:
        (content rect in canvas space, ScaleResult relative to target_rect)
    """
    result = scale_to_fit(source, target_rect.size, mode)
    scaled = result.scaled_size(source)
    rect = Rect(
        target_rect.x + result.offset.x,
        target_rect.y + result.offset.y,
        scaled.width,
        scaled.height,
    )
    return rect, result


def resolve_target_size(target: Size, orientation: Orientation | str | None) -> Size:
    """
    Orient a target size.

    PORTRAIT and LANDSCAPE force the orientation; AUTO (or None) keeps
    the size as given.
    """
    if orientation is None:
        return target
    orientation = Orientation(orientation)
    if orientation is Orientation.PORTRAIT:
        return target.as_portrait()
    if orientation is Orientation.LANDSCAPE:
        return target.as_landscape()
    return target


def standardize_pages(
    pages: Sequence[SourcePage],
    target_size: Size,
    mode: ScaleMode = ScaleMode.FIT,
    *,
    orientation: Orientation | str | None = None,
    background: Optional[Color] = None,
    render_scale: float = 1.0,
) -> CompositionPlan:
    """
    Give every page the same dimensions.

    Each source page becomes one sheet of ``target_size`` with the page
    scaled by ``scale_to_fit`` and centred. A background colour, when
    given, fills the whole sheet beneath the page.

    Args:
        pages: Pages to standardize, in output order
        target_size: Uniform output size
        mode: FIT leaves bands of background, FILL crops overflow
        orientation: Force portrait/landscape, or keep as given
        background: Optional sheet fill colour
        render_scale: Pixels per point used when the page is rasterized

    Returns:
        CompositionPlan with one sheet per page

    Raises:
        EmptyInput: If ``pages`` is empty
    """
    if not pages:
        raise EmptyInput("No pages to standardize")

    sheet_size = resolve_target_size(target_size, orientation)
    sheet_rect = Rect.from_size(sheet_size)
    sheets = []

    for index, page in enumerate(pages):
        content_rect, result = placed_rect(page.display_size, sheet_rect, mode)
        fill = RectPrimitive(rect=sheet_rect, fill=background) if background is not None else None
        sheets.append(SheetPlan(
            index=index,
            size=sheet_size,
            placements=(Placement(
                source_page_id=page.page_id,
                target_rect=content_rect,
                scale=result.scale,
                origin_offset=result.offset,
                render_scale=render_scale,
            ),),
            background=fill,
        ))
        logger.debug(f"Standardized {page.page_id} at scale {result.scale:.4f}")

    logger.info(
        f"Standardized {len(pages)} pages to {sheet_size.width:g}x{sheet_size.height:g}pt "
        f"({mode.value})"
    )
    return CompositionPlan(kind="standardize", sheets=tuple(sheets))
