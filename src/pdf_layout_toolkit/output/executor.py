"""
Module: output.executor

Purpose:
    Execute a CompositionPlan against PageSource and CanvasBuilder
    collaborators. This is the only place pages are rasterized; the
    layout engine itself never renders.

Key Functions:
    - execute_plan(): Draw every sheet of a plan

Execution Order:
    For each sheet: add the page, draw the background, then every
    placement in order, then decorations. Each page is rendered at most
    once per render scale for the whole call, however many placements
    or tiles use it.

Partial Failure:
    Plans with ``allows_placeholders`` (combine) replace a page that
    fails to render with a labelled placeholder and carry on. Any other
    plan stops at the first RenderError.

Dependencies:
    - PIL: Region cropping
    - output.interfaces: Collaborator interfaces
    - layout.stacker: placeholder_for()

Used By:
    - cli: Runs every tool
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Tuple, Union

from PIL import Image

from pdf_layout_toolkit.common import defaults
from pdf_layout_toolkit.core.errors import RenderError
from pdf_layout_toolkit.layout.models import (
    CompositionPlan,
    LinePrimitive,
    PlaceholderPrimitive,
    Placement,
    Primitive,
    RectPrimitive,
)
from pdf_layout_toolkit.layout.stacker import placeholder_for

from .interfaces import CanvasBuilder, PageSource

logger = logging.getLogger(__name__)

_CacheEntry = Union[Image.Image, RenderError]


class _RenderCache:
    """Renders pages on first use; failures are remembered too."""

    def __init__(self, sources: Mapping[str, PageSource]) -> None:
        self._sources = sources
        self._entries: Dict[Tuple[str, float], _CacheEntry] = {}
        self.renders = 0

    def get(self, page_id: str, scale: float) -> Image.Image:
        key = (page_id, scale)
        if key not in self._entries:
            self._entries[key] = self._render(page_id, scale)
        entry = self._entries[key]
        if isinstance(entry, RenderError):
            raise entry
        return entry

    def _render(self, page_id: str, scale: float) -> _CacheEntry:
        source = self._sources.get(page_id)
        if source is None:
            return RenderError(f"No page source for {page_id!r}", page_id=page_id)
        self.renders += 1
        try:
            return source.render_to_pixels(scale)
        except RenderError as e:
            if e.page_id is None:
                e.page_id = page_id
            return e


def _placement_image(cache: _RenderCache, placement: Placement) -> Image.Image:
    image = cache.get(placement.source_page_id, placement.render_scale)
    region = placement.source_region
    if region is None:
        return image
    left, top, right, bottom = region.crop_box()
    box = (max(0, left), max(0, top), min(image.width, right), min(image.height, bottom))
    return image.crop(box)


def _draw_primitive(builder: CanvasBuilder, handle: Any, primitive: Primitive) -> None:
    if isinstance(primitive, LinePrimitive):
        builder.draw_line(handle, primitive.start, primitive.end, primitive.style)
    elif isinstance(primitive, PlaceholderPrimitive):
        builder.draw_rect(handle, primitive.rect, stroke=primitive.style)
        builder.draw_text(
            handle,
            primitive.label,
            primitive.label_origin,
            size=defaults.COMBINE.placeholder_font_size,
            color=primitive.style.color,
        )
    elif isinstance(primitive, RectPrimitive):
        builder.draw_rect(handle, primitive.rect, stroke=primitive.stroke, fill=primitive.fill)
    else:
        raise TypeError(f"Unknown primitive: {primitive!r}")


def execute_plan(
    plan: CompositionPlan,
    sources: Mapping[str, PageSource],
    builder: CanvasBuilder,
) -> int:
    """
    Draw a plan onto a canvas builder.

    Args:
        plan: Plan from any layout function
        sources: page_id -> PageSource for every page the plan uses
        builder: Output canvas

    Returns:
        Number of placeholders drawn in place of unrenderable pages

    Raises:
        RenderError: If a page fails to render and the plan does not
            allow placeholders

    Example:
        >>> with ReportLabCanvasBuilder(out) as builder:
        ...     execute_plan(plan, doc.sources, builder)
        0
    """
    cache = _RenderCache(sources)
    placeholders = 0
    ordinal = 0

    for sheet in plan.sheets:
        handle = builder.add_page(sheet.size, sheet.page_rotation)
        if sheet.background is not None:
            _draw_primitive(builder, handle, sheet.background)

        substituted = []
        for placement in sheet.placements:
            ordinal += 1
            page_number = placement.page_number or ordinal
            try:
                image = _placement_image(cache, placement)
            except RenderError as e:
                if not plan.allows_placeholders:
                    raise
                logger.warning(f"Page {page_number} could not be rendered: {e}")
                substituted.append(placeholder_for(placement, page_number))
                continue
            builder.draw_image(handle, image, placement.target_rect, placement.rotation_degrees)

        for primitive in (*sheet.decorations, *substituted):
            _draw_primitive(builder, handle, primitive)
        placeholders += len(substituted)

    logger.info(
        f"Executed {plan.kind} plan: {plan.page_count} pages, "
        f"{cache.renders} renders, {placeholders} placeholders"
    )
    return placeholders
