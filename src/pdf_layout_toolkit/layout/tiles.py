"""
Module: layout.tiles

Purpose:
    Posterize layout: slice one rendered page into a row/column grid of
    tiles, each printed on its own output page. Interior tile edges get
    extra overlap (bleed) so printed tiles can be trimmed and rejoined
    without a gap; the outer border of the page gets none.

Key Functions:
    - layout_tiles(): Tile plan for one page
    - posterize(): Tile plans for a page selection
    - grid_overlay_lines(): Preview cut lines over a rendered page
    - split_in_half(): Two half-page sheets per page

Algorithm:
    tile = rendered / (cols, rows)
    sx = c*tile_w - (overlap if c > 0)
    sw = tile_w + (overlap if c > 0) + (overlap if c < cols-1)
    (sy, sh analogous, rows counted from the top)

Dependencies:
    - layout.models: GridSpec, plan models
    - layout.scaler: scale_to_fit()
    - common.page_ranges: parse_page_ranges()

Used By:
    - cli: posterize and split-half commands
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import List, Sequence, Tuple

from pdf_layout_toolkit.common.page_ranges import parse_page_ranges
from pdf_layout_toolkit.core.errors import EmptyInput, InvalidOverlap, OverlapTooLarge
from pdf_layout_toolkit.core.models import Point, Rect, Size, SourcePage

from .config import PosterizeConfig
from .models import (
    PREVIEW_RED,
    CompositionPlan,
    GridSpec,
    LinePrimitive,
    Orientation,
    Placement,
    ScaleMode,
    SheetPlan,
    SplitDirection,
    StrokeStyle,
)
from .scaler import scale_to_fit

logger = logging.getLogger(__name__)

PREVIEW_STYLE = StrokeStyle(color=PREVIEW_RED, width=2.0, dash=(10.0, 5.0))


def _tile_page_size(output_page_size: Size, orientation: Orientation, rendered: Size) -> Size:
    """AUTO follows the rendered page; square pages count as portrait."""
    if orientation is Orientation.AUTO:
        orientation = Orientation.LANDSCAPE if rendered.is_landscape else Orientation.PORTRAIT
    if orientation is Orientation.LANDSCAPE:
        return output_page_size.as_landscape()
    return output_page_size.as_portrait()


def tile_regions(
    rendered: Size,
    grid: GridSpec,
    overlap_px: float,
) -> List[Tuple[Tuple[int, int], Rect]]:
    """
    Source regions for every tile, row-major from the top-left.

    Args:
        rendered: Rendered page size in pixels
        grid: Tile rows and columns (gutter and margin are ignored)
        overlap_px: Bleed per interior edge, in pixels

    Returns:
        List of ((row, col), region) with regions in pixel space
        (origin top-left)

    Raises:
        InvalidOverlap: If the overlap is negative or not finite
        OverlapTooLarge: If the overlap reaches the tile width or height
    """
    if not math.isfinite(overlap_px) or overlap_px < 0:
        raise InvalidOverlap(f"overlap must be a non-negative number: {overlap_px}")

    tile_width = rendered.width / grid.cols
    tile_height = rendered.height / grid.rows
    if overlap_px >= tile_width or overlap_px >= tile_height:
        raise OverlapTooLarge(
            f"overlap {overlap_px:g}px leaves no content in "
            f"{tile_width:g}x{tile_height:g}px tiles"
        )

    regions = []
    for r in range(grid.rows):
        lead_y = overlap_px if r > 0 else 0.0
        trail_y = overlap_px if r < grid.rows - 1 else 0.0
        for c in range(grid.cols):
            lead_x = overlap_px if c > 0 else 0.0
            trail_x = overlap_px if c < grid.cols - 1 else 0.0
            regions.append(((r, c), Rect(
                c * tile_width - lead_x,
                r * tile_height - lead_y,
                tile_width + lead_x + trail_x,
                tile_height + lead_y + trail_y,
            )))
    return regions


def layout_tiles(
    page: SourcePage,
    grid: GridSpec,
    overlap: float,
    output_page_size: Size,
    scale_mode: ScaleMode = ScaleMode.FIT,
    *,
    render_scale: float = 1.0,
    orientation: Orientation | str = Orientation.PORTRAIT,
) -> CompositionPlan:
    """
    Split one page into printable tiles.

    Args:
        page: Page to posterize
        grid: Tile rows and columns
        overlap: Bleed per interior edge in points; converted to rendered
            pixels with ``render_scale``
        output_page_size: Size of each tile's output page
        scale_mode: How each tile is scaled onto its output page
        render_scale: Pixels per point the page is rendered at
        orientation: Output page orientation; AUTO follows the page

    Returns:
        CompositionPlan with rows*cols sheets, top row first, left to right

    Raises:
        InvalidOverlap: If ``overlap`` < 0
        OverlapTooLarge: If ``overlap`` >= tile width or height

    Example:
        >>> plan = layout_tiles(page, GridSpec(1, 2), 0, Size(1000, 1000))
        >>> [p.source_region.width for p in plan.placements]
        [500.0, 500.0]
    """
    if overlap < 0:
        raise InvalidOverlap(f"overlap must be >= 0: {overlap}")

    rendered = page.display_size.scaled(render_scale)
    sheet_size = _tile_page_size(output_page_size, Orientation(orientation), rendered)
    regions = tile_regions(rendered, grid, overlap * render_scale)

    sheets = []
    for index, (cell, region) in enumerate(regions):
        result = scale_to_fit(region.size, sheet_size, scale_mode)
        scaled = result.scaled_size(region.size)
        sheets.append(SheetPlan(
            index=index,
            size=sheet_size,
            placements=(Placement(
                source_page_id=page.page_id,
                target_rect=Rect(result.offset.x, result.offset.y, scaled.width, scaled.height),
                scale=result.scale,
                origin_offset=result.offset,
                source_region=region,
                render_scale=render_scale,
                grid_cell=cell,
            ),),
        ))

    logger.debug(
        f"Tiled {page.page_id} into {grid.rows}x{grid.cols} "
        f"({rendered.width:g}x{rendered.height:g}px rendered)"
    )
    return CompositionPlan(kind="posterize", sheets=tuple(sheets))


def _concatenate(kind: str, plans: Sequence[CompositionPlan]) -> CompositionPlan:
    """Join plans into one, renumbering sheets in order."""
    sheets = []
    warnings: List[str] = []
    for plan in plans:
        for sheet in plan.sheets:
            sheets.append(replace(sheet, index=len(sheets)))
        warnings.extend(plan.warnings)
    return CompositionPlan(kind=kind, sheets=tuple(sheets), warnings=tuple(warnings))


def posterize(pages: Sequence[SourcePage], config: PosterizeConfig) -> CompositionPlan:
    """
    Posterize the selected pages of a document.

    Args:
        pages: Every page of the document, in order
        config: Posterize options (grid, overlap, output page, page range)

    Returns:
        CompositionPlan with rows*cols sheets per selected page

    Raises:
        EmptyInput: If no page is selected
        ValueError: If the page range is malformed
    """
    selected = parse_page_ranges(config.page_range, len(pages))
    if not selected:
        raise EmptyInput("Invalid page range specified: no pages selected")

    grid = GridSpec(rows=config.rows, cols=config.cols)
    plans = [
        layout_tiles(
            pages[i],
            grid,
            config.overlap_points,
            config.output_page_size,
            config.scale_mode,
            render_scale=config.render_scale,
            orientation=config.orientation,
        )
        for i in selected
    ]
    plan = _concatenate("posterize", plans)
    logger.info(
        f"Posterized {len(selected)} pages into {plan.page_count} tiles "
        f"({config.rows}x{config.cols}, overlap {config.overlap:g}{config.overlap_units})"
    )
    return plan


def grid_overlay_lines(
    rendered: Size,
    grid: GridSpec,
    style: StrokeStyle = PREVIEW_STYLE,
) -> Tuple[LinePrimitive, ...]:
    """
    Interior cut lines for previewing a tile grid over a rendered page.

    Lines are in pixel space (origin top-left) and span the full page.
    """
    cell_width = rendered.width / grid.cols
    cell_height = rendered.height / grid.rows
    lines = [
        LinePrimitive(Point(i * cell_width, 0.0), Point(i * cell_width, rendered.height), style)
        for i in range(1, grid.cols)
    ]
    lines.extend(
        LinePrimitive(Point(0.0, i * cell_height), Point(rendered.width, i * cell_height), style)
        for i in range(1, grid.rows)
    )
    return tuple(lines)


def split_in_half(
    pages: Sequence[SourcePage],
    direction: SplitDirection | str = SplitDirection.VERTICAL,
    *,
    render_scale: float = 1.0,
) -> CompositionPlan:
    """
    Split every page into two half-size pages.

    VERTICAL yields the left then the right half; HORIZONTAL yields the
    top then the bottom half. Halves keep their original scale.

    Raises:
        EmptyInput: If ``pages`` is empty
    """
    if not pages:
        raise EmptyInput("No pages to split")

    direction = SplitDirection(direction)
    grid = GridSpec(rows=1, cols=2) if direction is SplitDirection.VERTICAL else GridSpec(rows=2, cols=1)
    sheets = []

    for page in pages:
        displayed = page.display_size
        for cell, region in tile_regions(displayed.scaled(render_scale), grid, 0.0):
            half = Size(region.width / render_scale, region.height / render_scale)
            sheets.append(SheetPlan(
                index=len(sheets),
                size=half,
                placements=(Placement(
                    source_page_id=page.page_id,
                    target_rect=Rect.from_size(half),
                    scale=1.0 / render_scale,
                    source_region=region,
                    render_scale=render_scale,
                    grid_cell=cell,
                ),),
            ))

    logger.info(f"Split {len(pages)} pages {direction.value}ly into {len(sheets)} halves")
    return CompositionPlan(kind="split-half", sheets=tuple(sheets))
