"""
Module: layout

Purpose:
    Page layout and geometric transform computation.
    Every function here is pure: it reads page metadata and
    configuration and returns a CompositionPlan. Nothing here renders,
    performs I/O or touches a document.

Key Functions:
    - scale_to_fit(): Fit/fill scale factor and centring offset
    - rotate(): Bounding box and offset for rotated content
    - layout_grid() / n_up(): N-up sheets
    - layout_tiles() / posterize(): Tile splitting with bleed
    - stack(): Combine pages onto one canvas
    - standardize_pages(): Uniform page dimensions
    - rotate_pages(): Rotate tool plan
    - split_in_half(): Half-page split

Key Classes:
    - CompositionPlan, SheetPlan, Placement: Plan output
    - GridSpec, ScaleMode, Orientation, StackDirection: Inputs

Used By:
    - output.executor: Executes plans
    - cli: Command-line tools
"""

from .models import (
    BLACK,
    WHITE,
    Color,
    CompositionPlan,
    GridSpec,
    LinePrimitive,
    Orientation,
    PlaceholderPrimitive,
    Placement,
    RectPrimitive,
    RotationResult,
    ScaleMode,
    ScaleResult,
    SheetPlan,
    SplitDirection,
    StackDirection,
    StrokeStyle,
)
from .config import CombineConfig, NUpConfig, PosterizeConfig, SeparatorSpec, StandardizeConfig
from .scaler import placed_rect, scale_to_fit, standardize_pages
from .rotation import normalize_angle, rotate, rotate_pages, rotated_corners
from .grid import layout_grid, n_up, resolve_sheet_size
from .tiles import grid_overlay_lines, layout_tiles, posterize, split_in_half
from .stacker import placeholder_for, stack

__all__ = [
    # Models
    "BLACK",
    "WHITE",
    "Color",
    "CompositionPlan",
    "GridSpec",
    "LinePrimitive",
    "Orientation",
    "PlaceholderPrimitive",
    "Placement",
    "RectPrimitive",
    "RotationResult",
    "ScaleMode",
    "ScaleResult",
    "SheetPlan",
    "SplitDirection",
    "StackDirection",
    "StrokeStyle",
    # Config
    "CombineConfig",
    "NUpConfig",
    "PosterizeConfig",
    "SeparatorSpec",
    "StandardizeConfig",
    # Functions
    "scale_to_fit",
    "placed_rect",
    "standardize_pages",
    "normalize_angle",
    "rotate",
    "rotate_pages",
    "rotated_corners",
    "layout_grid",
    "n_up",
    "resolve_sheet_size",
    "layout_tiles",
    "posterize",
    "grid_overlay_lines",
    "split_in_half",
    "stack",
    "placeholder_for",
]
