"""
Module: layout.grid

Purpose:
    N-up layout: place several source pages on each output sheet in a
    uniform row/column grid.

Key Functions:
    - resolve_sheet_size(): Apply the orientation request to a sheet size
    - layout_grid(): Main grid layout function
    - n_up(): Pages-per-sheet presets on top of layout_grid()

Algorithm:
    1. Consume pages rows*cols at a time; each chunk is one sheet
    2. Cell j of a sheet sits at row j // cols, col j % cols (row 0 on top)
    3. Fit each page into its cell and centre it
    4. Optionally outline the fitted rect

Dependencies:
    - layout.models: GridSpec, plan models
    - layout.scaler: placed_rect()

Used By:
    - cli: nup command
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from pdf_layout_toolkit.core.errors import EmptyInput
from pdf_layout_toolkit.core.models import Size, SourcePage

from .models import (
    BLACK,
    Color,
    CompositionPlan,
    GridSpec,
    Orientation,
    Placement,
    RectPrimitive,
    ScaleMode,
    SheetPlan,
    StrokeStyle,
)
from .scaler import placed_rect

logger = logging.getLogger(__name__)


def resolve_sheet_size(
    base: Size,
    orientation: Orientation | str,
    first_page: Optional[SourcePage],
    grid: GridSpec,
) -> Size:
    """
    Orient the output sheet.

    AUTO picks landscape only when the first source page is landscape
    and the grid is wider than it is tall (e.g. 1x2); every other
    combination, square grids included, stays portrait.

    Args:
        base: Named sheet size in either orientation
        orientation: PORTRAIT, LANDSCAPE or AUTO
        first_page: First source page (consulted for AUTO only)
        grid: Grid that will be laid over the sheet

    Returns:
        Oriented sheet size

    Example:
        >>> resolve_sheet_size(A4, Orientation.AUTO, landscape_page, GridSpec(1, 2))
        Size(841.89, 595.276)
    """
    orientation = Orientation(orientation)
    if orientation is Orientation.AUTO:
        source_is_landscape = first_page is not None and first_page.display_size.is_landscape
        if source_is_landscape and grid.is_wide:
            orientation = Orientation.LANDSCAPE
        else:
            orientation = Orientation.PORTRAIT

    if orientation is Orientation.LANDSCAPE:
        return base.as_landscape()
    return base.as_portrait()


def layout_grid(
    pages: Sequence[SourcePage],
    sheet_size: Size,
    grid: GridSpec,
    scale_mode: ScaleMode = ScaleMode.FIT,
    *,
    draw_borders: bool = False,
    border_style: Optional[StrokeStyle] = None,
    render_scale: float = 1.0,
) -> CompositionPlan:
    """
    Arrange pages onto sheets in a grid.

    Pages are fitted into their cells so nothing is clipped; a FILL
    request is noted as a plan warning and fitted anyway. The last sheet
    may be partially filled; empty cells get no placement.

    Args:
        pages: Source pages in reading order
        sheet_size: Output sheet size (already oriented)
        grid: Rows, columns, gutter and margin
        scale_mode: Requested scale policy (cells always use FIT)
        draw_borders: Outline each fitted page
        border_style: Outline style (default 1pt black)
        render_scale: Pixels per point used when a page is rasterized

    Returns:
        CompositionPlan with ceil(len(pages) / cells) sheets

    Raises:
        EmptyInput: If ``pages`` is empty
        InvalidGrid: If the grid leaves no room for a cell
    """
    if not pages:
        raise EmptyInput("No pages to lay out")

    warnings: List[str] = []
    if scale_mode is not ScaleMode.FIT:
        message = f"Grid cells always fit their page; {scale_mode.value} request ignored"
        logger.warning(message)
        warnings.append(message)

    # Fail before producing anything if the cells have no area
    grid.cell_size(sheet_size)

    style = border_style or StrokeStyle(color=BLACK, width=1.0)
    per_sheet = grid.cells
    sheets: List[SheetPlan] = []

    for sheet_index, start in enumerate(range(0, len(pages), per_sheet)):
        chunk = pages[start:start + per_sheet]
        placements = []
        borders = []

        for j, page in enumerate(chunk):
            cell = grid.cell_rect(j, sheet_size)
            content_rect, result = placed_rect(page.display_size, cell, ScaleMode.FIT)
            placements.append(Placement(
                source_page_id=page.page_id,
                target_rect=content_rect,
                scale=result.scale,
                origin_offset=result.offset,
                render_scale=render_scale,
                grid_cell=(j // grid.cols, j % grid.cols),
            ))
            if draw_borders:
                borders.append(RectPrimitive(rect=content_rect, stroke=style))

        sheets.append(SheetPlan(
            index=sheet_index,
            size=sheet_size,
            placements=tuple(placements),
            decorations=tuple(borders),
        ))
        logger.debug(f"Sheet {sheet_index}: {len(chunk)} of {per_sheet} cells used")

    logger.info(
        f"Laid out {len(pages)} pages onto {len(sheets)} sheets "
        f"({grid.rows}x{grid.cols})"
    )
    return CompositionPlan(kind="n-up", sheets=tuple(sheets), warnings=tuple(warnings))


def n_up(
    pages: Sequence[SourcePage],
    pages_per_sheet: int,
    sheet_size: Size,
    *,
    orientation: Orientation | str = Orientation.AUTO,
    use_margins: bool = False,
    margin: float = 36.0,
    gutter: float = 10.0,
    draw_borders: bool = False,
    border_color: Color = BLACK,
    border_width: float = 1.0,
    render_scale: float = 1.0,
) -> CompositionPlan:
    """
    N-up with the standard presets (2, 4, 9 or 16 pages per sheet).

    Example:
        >>> plan = n_up(pages, 4, page_size("A4"), use_margins=True)
    """
    if not pages:
        raise EmptyInput("No pages to lay out")
    grid = GridSpec.for_pages_per_sheet(
        pages_per_sheet, use_margins=use_margins, margin=margin, gutter=gutter
    )
    oriented = resolve_sheet_size(sheet_size, orientation, pages[0], grid)
    return layout_grid(
        pages,
        oriented,
        grid,
        ScaleMode.FIT,
        draw_borders=draw_borders,
        border_style=StrokeStyle(color=border_color, width=border_width),
        render_scale=render_scale,
    )
