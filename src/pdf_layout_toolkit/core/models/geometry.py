"""
Module: geometry

Purpose:
    Geometry primitives shared by every layout component: points, sizes,
    axis-aligned rectangles and the read-only view of a source page.

Key Classes:
    - Point: 2D coordinate
    - Size: Positive width/height pair in page units (points)
    - Rect: Axis-aligned box, origin bottom-left, y increasing upward
    - SourcePage: Page id + size + current rotation

Dependencies:
    - dataclasses (std)
    - math (std)

Used By:
    - pdf_layout_toolkit.layout: All layout components
    - pdf_layout_toolkit.output: Plan execution

Coordinate Conventions:
    Canvas rectangles follow the PDF convention (origin bottom-left,
    y up). Source regions cut from a rendered pixel buffer use the
    image convention instead (origin top-left, y down), the same way
    PIL crop boxes do. Each field documents which space it lives in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pdf_layout_toolkit.core.errors import InvalidGeometry

if TYPE_CHECKING:
    from pdf_layout_toolkit.output.interfaces import PageSource


def _require_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidGeometry(f"{name} must be a number: {value!r}")
    if not math.isfinite(value):
        raise InvalidGeometry(f"{name} must be finite: {value}")


@dataclass(frozen=True, slots=True)
class Point:
    """A coordinate pair in whichever space the owning field documents."""

    x: float
    y: float

    def __post_init__(self) -> None:
        _require_finite("x", self.x)
        _require_finite("y", self.y)

    def translated(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> Point:
        return cls(x=data["x"], y=data["y"])


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Size:
    """
    Page or content dimensions in page units (points).

    Invariants:
        - width > 0
        - height > 0
        - both finite

    Example:
        >>> Size(595, 842).is_portrait
        True
        >>> Size(595, 842).swapped()
        Size(842, 595)
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        _require_finite("width", self.width)
        _require_finite("height", self.height)
        if self.width <= 0:
            raise InvalidGeometry(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise InvalidGeometry(f"height must be positive: {self.height}")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def is_landscape(self) -> bool:
        return self.width > self.height

    @property
    def is_portrait(self) -> bool:
        return self.width < self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def swapped(self) -> Size:
        """Same size with width and height exchanged."""
        return Size(self.height, self.width)

    def scaled(self, factor: float) -> Size:
        return Size(self.width * factor, self.height * factor)

    def as_portrait(self) -> Size:
        """This size with the short edge horizontal."""
        return self.swapped() if self.width > self.height else self

    def as_landscape(self) -> Size:
        """This size with the long edge horizontal."""
        return self.swapped() if self.width < self.height else self

    def as_tuple(self) -> tuple[float, float]:
        return (self.width, self.height)

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict) -> Size:
        return cls(width=data["width"], height=data["height"])

    def __repr__(self) -> str:
        return f"Size({self.width:g}, {self.height:g})"


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Axis-aligned box.

    Attributes:
        x: Left edge
        y: Bottom edge in canvas space, top edge in pixel space
        width: Horizontal extent (>= 0)
        height: Vertical extent (>= 0)

    Example:
        >>> r = Rect(10, 20, 100, 50)
        >>> r.right, r.top
        (110, 70)
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate rectangle on construction."""
        for name in ("x", "y", "width", "height"):
            _require_finite(name, getattr(self, name))
        if self.width < 0:
            raise InvalidGeometry(f"width must be >= 0: {self.width}")
        if self.height < 0:
            raise InvalidGeometry(f"height must be >= 0: {self.height}")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        """Edge opposite ``y`` (the top in canvas space)."""
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        """
        Rect dimensions as a Size.

        Raises:
            InvalidGeometry: If the rect is empty along either axis
        """
        return Size(self.width, self.height)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def contains_point(self, point: Point, tolerance: float = 1e-9) -> bool:
        return (
            self.x - tolerance <= point.x <= self.right + tolerance
            and self.y - tolerance <= point.y <= self.top + tolerance
        )

    def contains_rect(self, other: Rect, tolerance: float = 1e-9) -> bool:
        """True if ``other`` lies entirely inside this rect."""
        return (
            other.x >= self.x - tolerance
            and other.y >= self.y - tolerance
            and other.right <= self.right + tolerance
            and other.top <= self.top + tolerance
        )

    def union(self, other: Rect) -> Rect:
        """Smallest rect covering both rects."""
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        return Rect(x, y, max(self.right, other.right) - x, max(self.top, other.top) - y)

    def translated(self, dx: float, dy: float) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    # ─────────────────────────────────────────────────────────────────────────
    # Conversion
    # ─────────────────────────────────────────────────────────────────────────

    def as_tuple(self) -> tuple[float, float, float, float]:
        """(x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)

    def crop_box(self) -> tuple[int, int, int, int]:
        """
        Integer (left, top, right, bottom) box for PIL ``Image.crop``.

        Only meaningful for rects in pixel space (top-left origin).
        Edges are rounded to the nearest pixel so adjacent tiles share
        their boundary pixels exactly.
        """
        return (
            round(self.x),
            round(self.y),
            round(self.right),
            round(self.top),
        )

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict) -> Rect:
        return cls(x=data["x"], y=data["y"], width=data["width"], height=data["height"])

    @classmethod
    def from_size(cls, size: Size, origin: Point = ORIGIN) -> Rect:
        return cls(origin.x, origin.y, size.width, size.height)

    def __repr__(self) -> str:
        return f"Rect({self.x:g}, {self.y:g}, {self.width:g}, {self.height:g})"


@dataclass(frozen=True, slots=True)
class SourcePage:
    """
    Read-only view of a page owned by an external document.

    The engine only reads ``size`` and ``rotation``; it never touches the
    document itself.

    Attributes:
        page_id: Caller-chosen reference (e.g. "doc0:3")
        size: Unrotated page size in points
        rotation: Current rotation in degrees, normalised to [0, 360)

    Example:
        >>> page = SourcePage("p1", Size(595, 842), rotation=90)
        >>> page.display_size
        Size(842, 595)
    """

    page_id: str
    size: Size
    rotation: float = 0

    def __post_init__(self) -> None:
        from pdf_layout_toolkit.layout.rotation import normalize_angle

        object.__setattr__(self, "rotation", normalize_angle(self.rotation))

    @property
    def display_size(self) -> Size:
        """Size of the page as displayed, i.e. with its own rotation applied."""
        from pdf_layout_toolkit.layout.rotation import rotate

        return rotate(self.size, self.rotation).bounding_size

    @classmethod
    def from_source(cls, page_id: str, source: PageSource) -> SourcePage:
        """Build a SourcePage by reading a PageSource collaborator."""
        return cls(page_id=page_id, size=source.get_size(), rotation=source.get_rotation())

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"page_id": self.page_id, "size": self.size.to_dict()}
        if self.rotation:
            d["rotation"] = self.rotation
        return d

    @classmethod
    def from_dict(cls, data: dict) -> SourcePage:
        return cls(
            page_id=data["page_id"],
            size=Size.from_dict(data["size"]),
            rotation=data.get("rotation", 0),
        )
