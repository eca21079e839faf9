"""
Module: layout.models

Purpose:
    Data models for composition plans.
    Immutable dataclasses describing where each source page is drawn,
    plus the decorative primitives drawn around them.

Key Classes:
    - ScaleMode, Orientation, StackDirection, SplitDirection: Option enums
    - GridSpec: Uniform row/column grid over a target area
    - ScaleResult, RotationResult: Scaler and rotation outputs
    - Color, StrokeStyle: Drawing styles
    - LinePrimitive, RectPrimitive, PlaceholderPrimitive: Decorations
    - Placement: One source page (or page region) drawn once
    - SheetPlan: Complete layout of one output page
    - CompositionPlan: Ordered sheets produced by one composition call

Dependencies:
    - dataclasses (std)
    - enum (std)
    - json (std)
    - core.models.geometry: Point, Size, Rect

Used By:
    - layout.scaler, layout.rotation, layout.grid, layout.tiles,
      layout.stacker: Produce plans
    - output.executor: Consumes plans
    - core.schemas.validator: Validates serialized plans
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, Union

from pdf_layout_toolkit.common import defaults
from pdf_layout_toolkit.core.errors import InvalidGeometry, InvalidGrid
from pdf_layout_toolkit.core.models import Point, Rect, Size


# ─────────────────────────────────────────────────────────────────────────────
# Option enums
# ─────────────────────────────────────────────────────────────────────────────

class ScaleMode(Enum):
    """
    How content is scaled into a target area.

    Attributes:
        FIT: Content fully contained, may leave empty space
        FILL: Content fully covers the target, may overflow/clip
    """

    FIT = "fit"
    FILL = "fill"


class Orientation(Enum):
    """Output sheet orientation request."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"
    AUTO = "auto"


class StackDirection(Enum):
    """Axis along which pages are concatenated onto one canvas."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class SplitDirection(Enum):
    """
    Cut direction for splitting a page in half.

    VERTICAL cuts with a vertical line (left and right halves),
    HORIZONTAL cuts with a horizontal line (top and bottom halves).
    """

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


# ─────────────────────────────────────────────────────────────────────────────
# Grid
# ─────────────────────────────────────────────────────────────────────────────

# pages per sheet -> (rows, cols)
PAGES_PER_SHEET_GRIDS: dict[int, Tuple[int, int]] = {
    2: (1, 2),
    4: (2, 2),
    9: (3, 3),
    16: (4, 4),
}


@dataclass(frozen=True)
class GridSpec:
    """
    Uniform grid over a target area.

    Attributes:
        rows: Number of rows (>= 1)
        cols: Number of columns (>= 1)
        gutter: Gap between adjacent cells in points (>= 0)
        margin: Gap between the grid and the area edge in points (>= 0)

    Example:
        >>> grid = GridSpec(rows=2, cols=2, gutter=10, margin=36)
        >>> grid.cells
        4
    """

    rows: int
    cols: int
    gutter: float = 0.0
    margin: float = 0.0

    def __post_init__(self) -> None:
        """Validate grid on construction."""
        if self.rows * self.cols <= 0 or self.rows < 0 or self.cols < 0:
            raise InvalidGrid(f"Grid needs at least one cell: {self.rows}x{self.cols}")
        if self.gutter < 0:
            raise InvalidGrid(f"gutter must be >= 0: {self.gutter}")
        if self.margin < 0:
            raise InvalidGrid(f"margin must be >= 0: {self.margin}")

    @property
    def cells(self) -> int:
        """Cells per sheet (rows * cols)."""
        return self.rows * self.cols

    @property
    def is_wide(self) -> bool:
        """More columns than rows."""
        return self.cols > self.rows

    def cell_size(self, area: Size) -> Tuple[float, float]:
        """
        Width and height of one cell inside ``area``.

        Raises:
            InvalidGrid: If margins and gutters leave no room for a cell
        """
        width = (area.width - 2 * self.margin - self.gutter * (self.cols - 1)) / self.cols
        height = (area.height - 2 * self.margin - self.gutter * (self.rows - 1)) / self.rows
        if width <= 0 or height <= 0:
            raise InvalidGrid(
                f"Margins and gutters leave no room for {self.rows}x{self.cols} cells "
                f"on {area!r}"
            )
        return width, height

    def cell_rect(self, index: int, area: Size) -> Rect:
        """
        Canvas rect of the cell at row-major ``index`` (row 0 is the top row).

        Args:
            index: 0-based cell index, must be < cells
            area: Sheet size the grid is laid over

        Returns:
            Rect in canvas space (origin bottom-left)
        """
        if not 0 <= index < self.cells:
            raise InvalidGrid(f"Cell index {index} outside {self.rows}x{self.cols} grid")
        cell_width, cell_height = self.cell_size(area)
        row = index // self.cols
        col = index % self.cols
        cell_x = self.margin + col * (cell_width + self.gutter)
        cell_y = area.height - self.margin - (row + 1) * cell_height - row * self.gutter
        return Rect(cell_x, cell_y, cell_width, cell_height)

    @classmethod
    def for_pages_per_sheet(
        cls,
        pages_per_sheet: int,
        *,
        use_margins: bool = False,
        margin: float = 36.0,
        gutter: float = 10.0,
    ) -> GridSpec:
        """
        Preset grid for the N-up tool.

        Args:
            pages_per_sheet: 2, 4, 9 or 16
            use_margins: Whether to apply ``margin`` and ``gutter``

        Raises:
            InvalidGrid: If no preset exists for ``pages_per_sheet``
        """
        try:
            rows, cols = PAGES_PER_SHEET_GRIDS[pages_per_sheet]
        except KeyError:
            raise InvalidGrid(
                f"Unsupported pages per sheet: {pages_per_sheet} "
                f"(supported: {sorted(PAGES_PER_SHEET_GRIDS)})"
            ) from None
        if not use_margins:
            return cls(rows=rows, cols=cols)
        return cls(rows=rows, cols=cols, gutter=gutter, margin=margin)

    def to_dict(self) -> dict:
        return {"rows": self.rows, "cols": self.cols, "gutter": self.gutter, "margin": self.margin}


# ─────────────────────────────────────────────────────────────────────────────
# Component results
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ScaleResult:
    """
    Scale factor and centring offset from the fit/fill scaler.

    Attributes:
        scale: Uniform scale applied to the source
        offset: Lower-left position of the scaled content inside the target
    """

    scale: float
    offset: Point

    def scaled_size(self, source: Size) -> Size:
        return source.scaled(self.scale)


@dataclass(frozen=True)
class RotationResult:
    """
    Bounding box and placement of rotated content.

    Attributes:
        bounding_size: Axis-aligned box containing the rotated content
        content_offset: Where the source's lower-left corner lands inside
            the bounding box once rotated about that corner
        angle: Normalised angle in degrees, [0, 360)
        is_quarter_turn: True for multiples of 90 degrees; callers may set
            a page rotation flag instead of re-embedding the content
    """

    bounding_size: Size
    content_offset: Point
    angle: float
    is_quarter_turn: bool


# ─────────────────────────────────────────────────────────────────────────────
# Styles and primitives
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Color:
    """RGB colour with channels in [0, 1]."""

    r: float
    g: float
    b: float

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Colour channel {name} must be in [0, 1]: {value}")

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """
        Parse "#rrggbb" (or "rrggbb", or "#rgb").

        Example:
            >>> Color.from_hex("#ff0000")
            Color(r=1.0, g=0.0, b=0.0)
        """
        text = value.strip().lstrip("#")
        if len(text) == 3:
            text = "".join(ch * 2 for ch in text)
        if len(text) != 6:
            raise ValueError(f"Invalid hex colour: {value!r}")
        try:
            channels = [int(text[i:i + 2], 16) / 255 for i in (0, 2, 4)]
        except ValueError:
            raise ValueError(f"Invalid hex colour: {value!r}") from None
        return cls(*channels)

    @property
    def is_white(self) -> bool:
        return self.r == 1.0 and self.g == 1.0 and self.b == 1.0

    def to_hex(self) -> str:
        return "#" + "".join(f"{round(c * 255):02x}" for c in (self.r, self.g, self.b))

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.r, self.g, self.b)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
PLACEHOLDER_RED = Color(0.8, 0.0, 0.0)
PREVIEW_RED = Color(239 / 255, 68 / 255, 68 / 255)


@dataclass(frozen=True)
class StrokeStyle:
    """
    Line style.

    Attributes:
        color: Stroke colour
        width: Line width in points (>= 0)
        dash: Optional on/off dash pattern
    """

    color: Color = BLACK
    width: float = 1.0
    dash: Optional[Tuple[float, ...]] = None

    def __post_init__(self) -> None:
        if self.width < 0:
            raise InvalidGeometry(f"Stroke width must be >= 0: {self.width}")

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"color": self.color.to_hex(), "width": self.width}
        if self.dash:
            d["dash"] = list(self.dash)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> StrokeStyle:
        dash = data.get("dash")
        return cls(
            color=Color.from_hex(data["color"]),
            width=data["width"],
            dash=tuple(dash) if dash else None,
        )


@dataclass(frozen=True)
class LinePrimitive:
    """Straight line between two canvas points."""

    start: Point
    end: Point
    style: StrokeStyle = field(default_factory=StrokeStyle)

    def to_dict(self) -> dict:
        return {
            "type": "line",
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "style": self.style.to_dict(),
        }


@dataclass(frozen=True)
class RectPrimitive:
    """
    Rectangle outline and/or fill.

    Attributes:
        rect: Canvas rect
        stroke: Outline style (None for no outline)
        fill: Fill colour (None for no fill)
    """

    rect: Rect
    stroke: Optional[StrokeStyle] = None
    fill: Optional[Color] = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"type": "rect", "rect": self.rect.to_dict()}
        if self.stroke is not None:
            d["stroke"] = self.stroke.to_dict()
        if self.fill is not None:
            d["fill"] = self.fill.to_hex()
        return d


@dataclass(frozen=True)
class PlaceholderPrimitive:
    """
    Stand-in for a page whose pixels could not be produced.

    Keeps the canvas dimensions intact: an outlined rect of the page's
    size with a label drawn inside it.
    """

    rect: Rect
    label: str
    style: StrokeStyle = field(
        default_factory=lambda: StrokeStyle(PLACEHOLDER_RED, defaults.COMBINE.placeholder_border_pt)
    )
    source_page_id: Optional[str] = None

    @property
    def label_origin(self) -> Point:
        """Baseline start for the label: inset from the left, vertically centred."""
        inset = defaults.COMBINE.placeholder_inset_pt
        return Point(self.rect.x + inset, self.rect.y + self.rect.height / 2)

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "type": "placeholder",
            "rect": self.rect.to_dict(),
            "label": self.label,
            "style": self.style.to_dict(),
        }
        if self.source_page_id is not None:
            d["source_page_id"] = self.source_page_id
        return d


Primitive = Union[LinePrimitive, RectPrimitive, PlaceholderPrimitive]


def primitive_from_dict(data: dict) -> Primitive:
    """Rebuild a primitive from its ``to_dict`` form."""
    kind = data.get("type")
    if kind == "line":
        return LinePrimitive(
            start=Point.from_dict(data["start"]),
            end=Point.from_dict(data["end"]),
            style=StrokeStyle.from_dict(data["style"]),
        )
    if kind == "rect":
        return RectPrimitive(
            rect=Rect.from_dict(data["rect"]),
            stroke=StrokeStyle.from_dict(data["stroke"]) if "stroke" in data else None,
            fill=Color.from_hex(data["fill"]) if "fill" in data else None,
        )
    if kind == "placeholder":
        return PlaceholderPrimitive(
            rect=Rect.from_dict(data["rect"]),
            label=data["label"],
            style=StrokeStyle.from_dict(data["style"]),
            source_page_id=data.get("source_page_id"),
        )
    raise ValueError(f"Unknown primitive type: {kind!r}")


# ─────────────────────────────────────────────────────────────────────────────
# Placements and plans
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Placement:
    """
    One source page (or a region of it) drawn once.

    Attributes:
        source_page_id: Page to draw
        target_rect: Canvas rect the content occupies before rotation
        scale: Scale from source units to canvas units
        rotation_degrees: Counter-clockwise rotation about the target
            rect's lower-left corner (0 for upright content)
        origin_offset: Centring offset that positioned the content inside
            the area it was fitted into (cell, sheet or bounding box)
        source_region: Region of the rendered page to draw, in rendered
            pixel space (origin top-left). None draws the whole page.
        render_scale: Pixels per point the page is rendered at
        grid_cell: (row, col) of the grid cell or tile, if any
        page_number: 1-based position of the page in the input, used to
            label a placeholder if the page fails to render

    Example:
        >>> p = Placement("p1", Rect(0, 0, 100, 50), scale=0.5)
        >>> p.target_rect.right
        100
    """

    source_page_id: str
    target_rect: Rect
    scale: float = 1.0
    rotation_degrees: float = 0.0
    origin_offset: Point = Point(0.0, 0.0)
    source_region: Optional[Rect] = None
    render_scale: float = 1.0
    grid_cell: Optional[Tuple[int, int]] = None
    page_number: Optional[int] = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "source_page_id": self.source_page_id,
            "target_rect": self.target_rect.to_dict(),
            "scale": self.scale,
            "rotation_degrees": self.rotation_degrees,
            "origin_offset": self.origin_offset.to_dict(),
            "render_scale": self.render_scale,
        }
        if self.source_region is not None:
            d["source_region"] = self.source_region.to_dict()
        if self.grid_cell is not None:
            d["grid_cell"] = list(self.grid_cell)
        if self.page_number is not None:
            d["page_number"] = self.page_number
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Placement:
        region = data.get("source_region")
        cell = data.get("grid_cell")
        return cls(
            source_page_id=data["source_page_id"],
            target_rect=Rect.from_dict(data["target_rect"]),
            scale=data["scale"],
            rotation_degrees=data["rotation_degrees"],
            origin_offset=Point.from_dict(data["origin_offset"]),
            source_region=Rect.from_dict(region) if region else None,
            render_scale=data.get("render_scale", 1.0),
            grid_cell=(cell[0], cell[1]) if cell else None,
            page_number=data.get("page_number"),
        )


@dataclass(frozen=True)
class SheetPlan:
    """
    Complete layout plan for one output page.

    Drawing order: background, placements, decorations.

    Attributes:
        index: Sheet number (0-indexed)
        size: Output page size
        placements: Ordered placements on this sheet
        background: Optional full-sheet fill
        decorations: Borders, separators and placeholders
        page_rotation: Clockwise page rotation flag for quarter turns (degrees)
    """

    index: int
    size: Size
    placements: Tuple[Placement, ...] = ()
    background: Optional[RectPrimitive] = None
    decorations: Tuple[Primitive, ...] = ()
    page_rotation: int = 0

    @property
    def placement_count(self) -> int:
        """Number of placements on this sheet."""
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        """True when nothing is drawn on this sheet."""
        return not self.placements and not self.decorations and self.background is None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "index": self.index,
            "size": self.size.to_dict(),
            "placements": [p.to_dict() for p in self.placements],
            "decorations": [p.to_dict() for p in self.decorations],
            "page_rotation": self.page_rotation,
        }
        if self.background is not None:
            d["background"] = self.background.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: dict) -> SheetPlan:
        background = data.get("background")
        return cls(
            index=data["index"],
            size=Size.from_dict(data["size"]),
            placements=tuple(Placement.from_dict(p) for p in data.get("placements", [])),
            background=primitive_from_dict(background) if background else None,
            decorations=tuple(primitive_from_dict(p) for p in data.get("decorations", [])),
            page_rotation=data.get("page_rotation", 0),
        )


@dataclass(frozen=True)
class CompositionPlan:
    """
    Ordered output of one composition call.

    A plan has no lifecycle: it is computed fresh, executed once by the
    caller against a CanvasBuilder, and discarded.

    Attributes:
        kind: Name of the layout that produced the plan
        sheets: Output pages in order
        warnings: Non-fatal notes raised while planning
        allows_placeholders: Whether a page that fails to render may be
            replaced by a placeholder instead of aborting execution

    Example:
        >>> plan = layout_grid(pages, Size(595, 842), GridSpec(2, 2))
        >>> plan.page_count, plan.total_placements
        (2, 5)
    """

    kind: str
    sheets: Tuple[SheetPlan, ...]
    warnings: Tuple[str, ...] = ()
    allows_placeholders: bool = False

    @property
    def page_count(self) -> int:
        """Number of output pages."""
        return len(self.sheets)

    @property
    def output_size(self) -> Optional[Size]:
        """Size of the first output page (the canvas, for single-sheet plans)."""
        return self.sheets[0].size if self.sheets else None

    @property
    def placements(self) -> Tuple[Placement, ...]:
        """Every placement across all sheets, in drawing order."""
        return tuple(p for sheet in self.sheets for p in sheet.placements)

    @property
    def total_placements(self) -> int:
        return sum(sheet.placement_count for sheet in self.sheets)

    @property
    def source_page_ids(self) -> Tuple[str, ...]:
        """Distinct source pages referenced, in first-use order."""
        seen: dict[str, None] = {}
        for placement in self.placements:
            seen.setdefault(placement.source_page_id, None)
        return tuple(seen)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "sheets": [s.to_dict() for s in self.sheets],
            "warnings": list(self.warnings),
            "allows_placeholders": self.allows_placeholders,
        }

    def to_json(self, *, indent: Optional[int] = None) -> str:
        """Deterministic JSON form (sorted keys)."""
        return json.dumps(self.to_dict(), sort_keys=True, indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> CompositionPlan:
        return cls(
            kind=data["kind"],
            sheets=tuple(SheetPlan.from_dict(s) for s in data["sheets"]),
            warnings=tuple(data.get("warnings", [])),
            allows_placeholders=data.get("allows_placeholders", False),
        )
