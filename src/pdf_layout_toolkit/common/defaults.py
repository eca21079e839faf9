"""Centralized layout defaults.

Every number the tools fall back to when the caller does not supply one
lives here, so tuning happens in one place. None of these values is read
implicitly by the layout functions: configs copy them in as field
defaults and callers can always override them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NUpDefaults:
    """Defaults for the N-up (pages per sheet) tool."""

    pages_per_sheet: int = 4
    margin_pt: float = 36.0  # Applied when margins are enabled
    gutter_pt: float = 10.0  # Gap between cells when margins are enabled
    border_width_pt: float = 1.0
    page_size: str = "A4"


@dataclass(frozen=True)
class PosterizeDefaults:
    """Defaults for the posterize (tile splitting) tool."""

    rows: int = 2
    cols: int = 2
    render_scale: float = 2.0  # Rendered pixels per point
    overlap: float = 0.0
    overlap_units: str = "pt"
    page_size: str = "A4"


@dataclass(frozen=True)
class CombineDefaults:
    """Defaults for the combine-to-single-page tool."""

    spacing_pt: float = 0.0
    separator_thickness_pt: float = 0.5
    render_scale: float = 2.0
    placeholder_border_pt: float = 2.0
    placeholder_font_size: float = 12.0
    placeholder_inset_pt: float = 10.0


@dataclass(frozen=True)
class StandardizeDefaults:
    """Defaults for the dimension standardization tool."""

    page_size: str = "A4"
    render_scale: float = 2.0


NUP = NUpDefaults()
POSTERIZE = PosterizeDefaults()
COMBINE = CombineDefaults()
STANDARDIZE = StandardizeDefaults()

# Pixels per point used when a page is rasterized for drawing
DEFAULT_RENDER_SCALE = 2.0
