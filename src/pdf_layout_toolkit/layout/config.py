"""
Module: layout.config

Purpose:
    Configuration records for the page tools built on the layout engine.
    Plain immutable records holding exactly the options each tool
    accepts; there is no hidden global configuration.

Key Classes:
    - NUpConfig: Pages per sheet, sheet size, margins, borders
    - PosterizeConfig: Tile grid, overlap, output page, page range
    - CombineConfig: Stack direction, spacing, separator, background
    - StandardizeConfig: Target size, scale mode, background

Dependencies:
    - dataclasses (std)
    - common.defaults: Default values
    - common.page_sizes: Unit conversion

Used By:
    - layout.tiles: posterize()
    - cli: Builds configs from command-line options
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pdf_layout_toolkit.common import defaults
from pdf_layout_toolkit.common.page_sizes import page_size, to_points
from pdf_layout_toolkit.core.errors import InvalidGeometry, InvalidGrid, InvalidOverlap
from pdf_layout_toolkit.core.models import Size

from .models import (
    BLACK,
    Color,
    PAGES_PER_SHEET_GRIDS,
    Orientation,
    ScaleMode,
    StackDirection,
)


@dataclass(frozen=True)
class NUpConfig:
    """
    Configuration for the N-up tool (immutable).

    Attributes:
        pages_per_sheet: 2, 4, 9 or 16
        sheet_size: Output sheet size (either orientation)
        orientation: PORTRAIT, LANDSCAPE or AUTO
        use_margins: Apply margin/gutter around and between cells
        margin: Sheet margin in points when margins are used
        gutter: Gap between cells in points when margins are used
        draw_borders: Outline each placed page
        border_color: Outline colour
        border_width: Outline width in points

    Example:
        >>> config = NUpConfig(pages_per_sheet=4, use_margins=True)
    """

    pages_per_sheet: int = defaults.NUP.pages_per_sheet
    sheet_size: Size = field(default_factory=lambda: page_size(defaults.NUP.page_size))
    orientation: Orientation = Orientation.AUTO
    use_margins: bool = False
    margin: float = defaults.NUP.margin_pt
    gutter: float = defaults.NUP.gutter_pt
    draw_borders: bool = False
    border_color: Color = BLACK
    border_width: float = defaults.NUP.border_width_pt
    render_scale: float = defaults.DEFAULT_RENDER_SCALE

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.pages_per_sheet not in PAGES_PER_SHEET_GRIDS:
            raise InvalidGrid(
                f"pages_per_sheet must be one of {sorted(PAGES_PER_SHEET_GRIDS)}: "
                f"{self.pages_per_sheet}"
            )
        if self.margin < 0 or self.gutter < 0:
            raise InvalidGrid(f"margin and gutter must be >= 0: {self.margin}, {self.gutter}")
        if self.border_width < 0:
            raise InvalidGeometry(f"border_width must be >= 0: {self.border_width}")
        if self.render_scale <= 0:
            raise InvalidGeometry(f"render_scale must be positive: {self.render_scale}")


@dataclass(frozen=True)
class PosterizeConfig:
    """
    Configuration for the posterize tool (immutable).

    Attributes:
        rows: Tile rows per source page
        cols: Tile columns per source page
        overlap: Bleed added to each interior tile edge, in ``overlap_units``
        overlap_units: "pt", "in", "mm" or "cm"
        output_page_size: Size of each printed tile page
        orientation: PORTRAIT, LANDSCAPE or AUTO (follow the source page)
        scale_mode: How a tile is scaled onto its output page
        render_scale: Rendered pixels per point
        page_range: Pages to posterize ("1-3,5"); blank means all

    Example:
        >>> config = PosterizeConfig(rows=2, cols=2, overlap=5, overlap_units="mm")
        >>> round(config.overlap_points, 2)
        14.17
    """

    rows: int = defaults.POSTERIZE.rows
    cols: int = defaults.POSTERIZE.cols
    overlap: float = defaults.POSTERIZE.overlap
    overlap_units: str = defaults.POSTERIZE.overlap_units
    output_page_size: Size = field(default_factory=lambda: page_size(defaults.POSTERIZE.page_size))
    orientation: Orientation = Orientation.AUTO
    scale_mode: ScaleMode = ScaleMode.FIT
    render_scale: float = defaults.POSTERIZE.render_scale
    page_range: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidGrid(f"rows and cols must be >= 1: {self.rows}x{self.cols}")
        if self.overlap < 0:
            raise InvalidOverlap(f"overlap must be >= 0: {self.overlap}")
        # Raises KeyError for unknown units
        to_points(self.overlap, self.overlap_units)
        if self.render_scale <= 0:
            raise InvalidGeometry(f"render_scale must be positive: {self.render_scale}")

    @property
    def overlap_points(self) -> float:
        """Overlap converted to points."""
        return to_points(self.overlap, self.overlap_units)


@dataclass(frozen=True)
class SeparatorSpec:
    """
    Separator line drawn in every gap of a combined canvas.

    Attributes:
        thickness: Line width in points
        color: Line colour
    """

    thickness: float = defaults.COMBINE.separator_thickness_pt
    color: Color = BLACK

    def __post_init__(self) -> None:
        if self.thickness < 0:
            raise InvalidGeometry(f"Separator thickness must be >= 0: {self.thickness}")


@dataclass(frozen=True)
class CombineConfig:
    """
    Configuration for the combine-to-single-page tool (immutable).

    Attributes:
        direction: HORIZONTAL or VERTICAL
        spacing: Gap between pages in points
        separator: Separator line, or None
        background: Canvas colour (white draws nothing)
        render_scale: Rendered pixels per point
    """

    direction: StackDirection = StackDirection.VERTICAL
    spacing: float = defaults.COMBINE.spacing_pt
    separator: Optional[SeparatorSpec] = None
    background: Optional[Color] = None
    render_scale: float = defaults.COMBINE.render_scale

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.spacing < 0:
            raise InvalidGeometry(f"spacing must be >= 0: {self.spacing}")
        if self.render_scale <= 0:
            raise InvalidGeometry(f"render_scale must be positive: {self.render_scale}")


@dataclass(frozen=True)
class StandardizeConfig:
    """
    Configuration for the dimension standardization tool (immutable).

    Attributes:
        target_size: Uniform output page size
        orientation: PORTRAIT, LANDSCAPE or AUTO (keep target as given)
        scale_mode: FIT keeps whole pages, FILL covers the sheet
        background: Sheet colour behind each page
        render_scale: Rendered pixels per point
    """

    target_size: Size = field(default_factory=lambda: page_size(defaults.STANDARDIZE.page_size))
    orientation: Orientation = Orientation.AUTO
    scale_mode: ScaleMode = ScaleMode.FIT
    background: Optional[Color] = None
    render_scale: float = defaults.STANDARDIZE.render_scale

    def __post_init__(self) -> None:
        if self.render_scale <= 0:
            raise InvalidGeometry(f"render_scale must be positive: {self.render_scale}")
