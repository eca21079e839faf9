"""
Module: layout.rotation

Purpose:
    Rotation transform for page content.
    Quarter turns are a pure width/height swap that callers can apply
    with a page rotation flag; any other angle needs the axis-aligned
    bounding box of the rotated page and the translation that keeps the
    rotated content fully inside it.

Key Functions:
    - normalize_angle(): Bring an angle into [0, 360)
    - rotate(): Bounding size and content offset for an angle
    - rotated_corners(): Corners of the rotated content
    - rotate_pages(): Plan for the rotate tool

Algorithm:
    For an angle θ the rotated box measures
        w·|cos θ| + h·|sin θ|  by  w·|sin θ| + h·|cos θ|
    Rotating about the source's lower-left corner moves the source
    centre to (w/2·cos θ − h/2·sin θ, w/2·sin θ + h/2·cos θ); the
    content offset is whatever translation puts that centre on the
    centre of the bounding box.

Dependencies:
    - math (std)
    - layout.models: RotationResult, plan models

Used By:
    - core.models.geometry: SourcePage.display_size
    - cli: rotate command
"""

from __future__ import annotations

import logging
import math
from typing import Mapping, Optional, Sequence, Tuple

from pdf_layout_toolkit.core.errors import EmptyInput, InvalidAngle
from pdf_layout_toolkit.core.models import Point, Rect, Size, SourcePage

from .models import CompositionPlan, Placement, RotationResult, SheetPlan

logger = logging.getLogger(__name__)


def normalize_angle(angle: float) -> float:
    """
    Normalise an angle in degrees into [0, 360).

    Raises:
        InvalidAngle: If the angle is None, not a number, NaN or infinite

    Example:
        >>> normalize_angle(-90)
        270
        >>> normalize_angle(720.5)
        0.5
    """
    if angle is None or isinstance(angle, bool) or not isinstance(angle, (int, float)):
        raise InvalidAngle(f"Angle must be a number: {angle!r}")
    if not math.isfinite(angle):
        raise InvalidAngle(f"Angle must be finite: {angle}")
    normalized = angle % 360
    # Tiny negative floats wrap to exactly 360.0
    if normalized >= 360:
        normalized = 0
    return normalized


def is_quarter_turn(angle: float) -> bool:
    """True if ``angle`` is an exact multiple of 90 degrees."""
    return normalize_angle(angle) % 90 == 0


def rotate(source: Size, angle_degrees: float) -> RotationResult:
    """
    Bounding box and placement offset for ``source`` rotated by an angle.

    Args:
        source: Unrotated content size
        angle_degrees: Counter-clockwise rotation in degrees

    Returns:
        RotationResult. For quarter turns the bounding size is the source
        (swapped at 90/270) and the offset is zero.

    Raises:
        InvalidAngle: If the angle is NaN/infinite/missing

    Example:
        >>> rotate(Size(100, 50), 90).bounding_size
        Size(50, 100)
    """
    angle = normalize_angle(angle_degrees)

    if angle % 90 == 0:
        bounding = source.swapped() if angle in (90, 270) else source
        return RotationResult(
            bounding_size=bounding,
            content_offset=Point(0.0, 0.0),
            angle=angle,
            is_quarter_turn=True,
        )

    theta = math.radians(angle)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    abs_cos = abs(cos_t)
    abs_sin = abs(sin_t)

    bounding_width = source.width * abs_cos + source.height * abs_sin
    bounding_height = source.width * abs_sin + source.height * abs_cos

    offset = Point(
        bounding_width / 2 - (source.width / 2 * cos_t - source.height / 2 * sin_t),
        bounding_height / 2 - (source.width / 2 * sin_t + source.height / 2 * cos_t),
    )
    return RotationResult(
        bounding_size=Size(bounding_width, bounding_height),
        content_offset=offset,
        angle=angle,
        is_quarter_turn=False,
    )


def rotated_corners(
    source: Size,
    angle_degrees: float,
    offset: Point = Point(0.0, 0.0),
) -> Tuple[Point, Point, Point, Point]:
    """
    Corners of ``source`` after rotating about its lower-left corner and
    translating by ``offset``.

    Returned in the order lower-left, lower-right, upper-right, upper-left
    of the unrotated page.
    """
    theta = math.radians(normalize_angle(angle_degrees))
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)

    def _map(x: float, y: float) -> Point:
        return Point(offset.x + x * cos_t - y * sin_t, offset.y + x * sin_t + y * cos_t)

    return (
        _map(0.0, 0.0),
        _map(source.width, 0.0),
        _map(source.width, source.height),
        _map(0.0, source.height),
    )


def rotate_pages(
    pages: Sequence[SourcePage],
    extra_rotations: Optional[Mapping[str, float]] = None,
    *,
    render_scale: float = 1.0,
) -> CompositionPlan:
    """
    Plan for applying rotations to a sequence of pages.

    The total rotation of each page is its current rotation plus any
    extra rotation requested for its id. Quarter-turn totals keep the
    page as-is and set the sheet's page rotation flag; other totals
    re-embed the page on a sheet sized to the rotated bounding box.

    Geometry is expressed relative to the page as displayed (page
    sources render pages with their own rotation already applied), so
    the flag and the drawn rotation carry only the extra rotation.

    Args:
        pages: SourcePages in output order
        extra_rotations: page_id -> extra counter-clockwise degrees
            (missing means 0)
        render_scale: Pixels per point for re-embedded pages

    Returns:
        CompositionPlan with one sheet per page

    Raises:
        EmptyInput: If ``pages`` is empty
        InvalidAngle: If any requested rotation is not a finite number
    """
    if not pages:
        raise EmptyInput("No pages to rotate")

    extra_rotations = extra_rotations or {}
    sheets = []
    reembedded = 0

    for index, page in enumerate(pages):
        extra = normalize_angle(extra_rotations.get(page.page_id, 0))
        total = normalize_angle(page.rotation + extra)
        displayed = page.display_size

        # PDF page rotations are quarter turns, so both checks agree in practice
        if is_quarter_turn(total) and is_quarter_turn(extra):
            # Keep the content upright and let the page flag do the work
            sheet = SheetPlan(
                index=index,
                size=displayed,
                placements=(Placement(
                    source_page_id=page.page_id,
                    target_rect=Rect.from_size(displayed),
                    render_scale=render_scale,
                ),),
                # Page flags turn clockwise, extra rotations counter-clockwise
                page_rotation=int(-extra) % 360,
            )
        else:
            reembedded += 1
            result = rotate(displayed, extra)
            sheet = SheetPlan(
                index=index,
                size=result.bounding_size,
                placements=(Placement(
                    source_page_id=page.page_id,
                    target_rect=Rect(
                        result.content_offset.x,
                        result.content_offset.y,
                        displayed.width,
                        displayed.height,
                    ),
                    rotation_degrees=extra,
                    origin_offset=result.content_offset,
                    render_scale=render_scale,
                ),),
            )
            logger.debug(
                f"Page {page.page_id} rotated {total:g} degrees onto "
                f"{result.bounding_size.width:.1f}x{result.bounding_size.height:.1f}pt"
            )
        sheets.append(sheet)

    logger.info(f"Planned rotation of {len(pages)} pages ({reembedded} re-embedded)")
    return CompositionPlan(kind="rotate", sheets=tuple(sheets))
