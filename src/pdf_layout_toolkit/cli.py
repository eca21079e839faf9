"""
Module: cli

Purpose:
    ``pdf-layout`` command line. Each subcommand loads its input PDF(s)
    with PyMuPDF, builds a CompositionPlan, optionally writes the plan as
    JSON and executes it into a new PDF with ReportLab.

Key Functions:
    - main(): Entry point, returns the process exit status
    - build_parser(): argparse definition

Exit Status:
    0 on success, 2 for invalid requests (LayoutError, bad options),
    1 for rendering and I/O failures.

Dependencies:
    - argparse (std)
    - layout: Plan construction
    - output: PyMuPDF sources, ReportLab builder, executor
    - core.schemas: Plan validation for --plan-json

Used By:
    - pdf_layout_toolkit.__main__
    - ``pdf-layout`` console script
"""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Tuple

from pdf_layout_toolkit import __version__
from pdf_layout_toolkit.common import defaults
from pdf_layout_toolkit.common.page_ranges import parse_page_ranges
from pdf_layout_toolkit.common.page_sizes import PAGE_SIZES, UNIT_FACTORS, custom_size, page_size
from pdf_layout_toolkit.core.errors import InvalidGeometry, LayoutError, PlanValidationError, RenderError
from pdf_layout_toolkit.core.models import Size
from pdf_layout_toolkit.core.schemas import validate_plan
from pdf_layout_toolkit.layout import (
    Color,
    CombineConfig,
    CompositionPlan,
    NUpConfig,
    Orientation,
    PosterizeConfig,
    ScaleMode,
    SeparatorSpec,
    SplitDirection,
    StackDirection,
    StandardizeConfig,
    n_up,
    posterize,
    rotate_pages,
    split_in_half,
    stack,
    standardize_pages,
)
from pdf_layout_toolkit.output import (
    LoadedDocument,
    PageSource,
    ReportLabCanvasBuilder,
    execute_plan,
    open_document,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

EXIT_OK = 0
EXIT_RENDER_ERROR = 1
EXIT_INVALID_REQUEST = 2

Sources = Dict[str, PageSource]
PlanBuilder = Callable[[argparse.Namespace, ExitStack], Tuple[CompositionPlan, Sources]]


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _open(path: Path, exit_stack: ExitStack, id_prefix: str = "p") -> LoadedDocument:
    return exit_stack.enter_context(open_document(path, id_prefix=id_prefix))


def _color(value: Optional[str]) -> Optional[Color]:
    return Color.from_hex(value) if value else None


def _render_scale(args: argparse.Namespace, default: float) -> float:
    if args.render_scale is None:
        return default
    if args.render_scale <= 0:
        raise InvalidGeometry(f"render_scale must be positive: {args.render_scale}")
    return args.render_scale


def _target_size(args: argparse.Namespace) -> Size:
    if args.width is not None or args.height is not None:
        if args.width is None or args.height is None:
            raise ValueError("--width and --height must be given together")
        return custom_size(args.width, args.height, args.units)
    return page_size(args.page_size)


# ─────────────────────────────────────────────────────────────────────────────
# Subcommands
# ─────────────────────────────────────────────────────────────────────────────

def _build_nup(args: argparse.Namespace, exit_stack: ExitStack) -> Tuple[CompositionPlan, Sources]:
    doc = _open(args.input, exit_stack)
    config = NUpConfig(
        pages_per_sheet=args.pages_per_sheet,
        sheet_size=page_size(args.page_size),
        orientation=Orientation(args.orientation),
        use_margins=args.margins,
        margin=args.margin,
        gutter=args.gutter,
        draw_borders=args.borders,
        border_color=Color.from_hex(args.border_color),
        border_width=args.border_width,
        render_scale=_render_scale(args, defaults.DEFAULT_RENDER_SCALE),
    )
    plan = n_up(
        doc.pages,
        config.pages_per_sheet,
        config.sheet_size,
        orientation=config.orientation,
        use_margins=config.use_margins,
        margin=config.margin,
        gutter=config.gutter,
        draw_borders=config.draw_borders,
        border_color=config.border_color,
        border_width=config.border_width,
        render_scale=config.render_scale,
    )
    return plan, doc.sources


def _build_posterize(args: argparse.Namespace, exit_stack: ExitStack) -> Tuple[CompositionPlan, Sources]:
    doc = _open(args.input, exit_stack)
    config = PosterizeConfig(
        rows=args.rows,
        cols=args.cols,
        overlap=args.overlap,
        overlap_units=args.units,
        output_page_size=page_size(args.page_size),
        orientation=Orientation(args.orientation),
        scale_mode=ScaleMode(args.scale_mode),
        render_scale=_render_scale(args, defaults.POSTERIZE.render_scale),
        page_range=args.pages,
    )
    return posterize(doc.pages, config), doc.sources


def _build_combine(args: argparse.Namespace, exit_stack: ExitStack) -> Tuple[CompositionPlan, Sources]:
    config = CombineConfig(
        direction=StackDirection(args.direction),
        spacing=args.spacing,
        separator=(
            SeparatorSpec(thickness=args.separator_thickness, color=Color.from_hex(args.separator_color))
            if args.separator else None
        ),
        background=_color(args.background),
        render_scale=_render_scale(args, defaults.COMBINE.render_scale),
    )
    pages = []
    sources: Sources = {}
    for n, path in enumerate(args.inputs):
        doc = _open(path, exit_stack, id_prefix=f"d{n}p")
        pages.extend(doc.pages)
        sources.update(doc.sources)

    plan = stack(
        pages,
        config.direction,
        config.spacing,
        config.separator,
        background=config.background,
        render_scale=config.render_scale,
    )
    return plan, sources


def _build_standardize(args: argparse.Namespace, exit_stack: ExitStack) -> Tuple[CompositionPlan, Sources]:
    doc = _open(args.input, exit_stack)
    config = StandardizeConfig(
        target_size=_target_size(args),
        orientation=Orientation(args.orientation),
        scale_mode=ScaleMode(args.scale_mode),
        background=_color(args.background),
        render_scale=_render_scale(args, defaults.STANDARDIZE.render_scale),
    )
    plan = standardize_pages(
        doc.pages,
        config.target_size,
        config.scale_mode,
        orientation=config.orientation,
        background=config.background,
        render_scale=config.render_scale,
    )
    return plan, doc.sources


def _build_rotate(args: argparse.Namespace, exit_stack: ExitStack) -> Tuple[CompositionPlan, Sources]:
    doc = _open(args.input, exit_stack)
    selected = parse_page_ranges(args.pages, doc.page_count)
    extra = {doc.pages[i].page_id: args.angle for i in selected}
    plan = rotate_pages(
        doc.pages,
        extra,
        render_scale=_render_scale(args, defaults.DEFAULT_RENDER_SCALE),
    )
    return plan, doc.sources


def _build_split_half(args: argparse.Namespace, exit_stack: ExitStack) -> Tuple[CompositionPlan, Sources]:
    doc = _open(args.input, exit_stack)
    plan = split_in_half(
        doc.pages,
        SplitDirection(args.direction),
        render_scale=_render_scale(args, defaults.DEFAULT_RENDER_SCALE),
    )
    return plan, doc.sources


# ─────────────────────────────────────────────────────────────────────────────
# Parser
# ─────────────────────────────────────────────────────────────────────────────

def _add_common(parser: argparse.ArgumentParser, *, multiple_inputs: bool = False) -> None:
    if multiple_inputs:
        parser.add_argument("inputs", nargs="+", type=Path, help="Input PDFs, in order")
    else:
        parser.add_argument("input", type=Path, help="Input PDF")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output PDF")
    parser.add_argument("--plan-json", type=Path, help="Also write the composition plan as JSON")
    parser.add_argument(
        "--render-scale",
        type=float,
        help=f"Rendered pixels per point (default: {defaults.DEFAULT_RENDER_SCALE:g})",
    )


def _add_page_size(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--page-size",
        default="A4",
        help=f"Output page size: {', '.join(PAGE_SIZES)} (default: A4)",
    )


def _add_orientation(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--orientation",
        default=Orientation.AUTO.value,
        choices=[o.value for o in Orientation],
    )


def _add_scale_mode(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--scale-mode",
        default=ScaleMode.FIT.value,
        choices=[m.value for m in ScaleMode],
        help="fit keeps the whole page, fill covers the target",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-layout",
        description="Page layout tools: n-up, posterize, combine, standardize, rotate, split",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s nup in.pdf -o out.pdf --pages-per-sheet 4 --margins
  %(prog)s posterize in.pdf -o out.pdf --rows 2 --cols 2 --overlap 5 --units mm
  %(prog)s combine a.pdf b.pdf -o out.pdf --direction horizontal --spacing 10
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("nup", help="Several pages per sheet")
    _add_common(p)
    _add_page_size(p)
    _add_orientation(p)
    p.add_argument("--pages-per-sheet", type=int, default=defaults.NUP.pages_per_sheet, choices=[2, 4, 9, 16])
    p.add_argument("--margins", action="store_true", help="Apply sheet margin and gutter")
    p.add_argument("--margin", type=float, default=defaults.NUP.margin_pt, help="Margin in points")
    p.add_argument("--gutter", type=float, default=defaults.NUP.gutter_pt, help="Gutter in points")
    p.add_argument("--borders", action="store_true", help="Outline each page")
    p.add_argument("--border-color", default="#000000")
    p.add_argument("--border-width", type=float, default=defaults.NUP.border_width_pt)
    p.set_defaults(builder=_build_nup)

    p = sub.add_parser("posterize", help="Split pages into printable tiles")
    _add_common(p)
    _add_page_size(p)
    _add_orientation(p)
    _add_scale_mode(p)
    p.add_argument("--rows", type=int, default=defaults.POSTERIZE.rows)
    p.add_argument("--cols", type=int, default=defaults.POSTERIZE.cols)
    p.add_argument("--overlap", type=float, default=defaults.POSTERIZE.overlap)
    p.add_argument("--units", default=defaults.POSTERIZE.overlap_units, choices=sorted(UNIT_FACTORS))
    p.add_argument("--pages", help="Page range, e.g. 1-3,5 (default: all)")
    p.set_defaults(builder=_build_posterize)

    p = sub.add_parser("combine", help="Stack pages onto one long page")
    _add_common(p, multiple_inputs=True)
    p.add_argument("--direction", default=StackDirection.VERTICAL.value, choices=[d.value for d in StackDirection])
    p.add_argument("--spacing", type=float, default=defaults.COMBINE.spacing_pt)
    p.add_argument("--separator", action="store_true", help="Draw a line in every gap")
    p.add_argument("--separator-thickness", type=float, default=defaults.COMBINE.separator_thickness_pt)
    p.add_argument("--separator-color", default="#000000")
    p.add_argument("--background", help="Canvas colour, e.g. #f0f0f0")
    p.set_defaults(builder=_build_combine)

    p = sub.add_parser("standardize", help="Give every page the same size")
    _add_common(p)
    _add_page_size(p)
    _add_orientation(p)
    _add_scale_mode(p)
    p.add_argument("--width", type=float, help="Custom width (with --height)")
    p.add_argument("--height", type=float, help="Custom height (with --width)")
    p.add_argument("--units", default="pt", choices=sorted(UNIT_FACTORS))
    p.add_argument("--background", help="Sheet colour behind each page")
    p.set_defaults(builder=_build_standardize)

    p = sub.add_parser("rotate", help="Rotate pages")
    _add_common(p)
    p.add_argument("--angle", type=float, required=True, help="Extra rotation in degrees (counter-clockwise)")
    p.add_argument("--pages", help="Page range to rotate (default: all)")
    p.set_defaults(builder=_build_rotate)

    p = sub.add_parser("split-half", help="Cut every page in two")
    _add_common(p)
    p.add_argument("--direction", default=SplitDirection.VERTICAL.value, choices=[d.value for d in SplitDirection])
    p.set_defaults(builder=_build_split_half)

    return parser


# ─────────────────────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────────────────────

def _write_plan_json(plan: CompositionPlan, path: Path) -> None:
    validate_plan(plan.to_dict())
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(plan.to_json(indent=2), encoding="utf-8")
    logger.info(f"Wrote plan to {path}")


def run(args: argparse.Namespace) -> int:
    """Build, optionally dump and execute the plan for parsed arguments."""
    builder: PlanBuilder = args.builder
    with ExitStack() as exit_stack:
        plan, sources = builder(args, exit_stack)
        for warning in plan.warnings:
            logger.warning(warning)
        if args.plan_json:
            _write_plan_json(plan, args.plan_json)
        with ReportLabCanvasBuilder(args.output) as canvas_builder:
            placeholders = execute_plan(plan, sources, canvas_builder)

    logger.info(
        f"{args.command}: wrote {plan.page_count} pages to {args.output}"
        + (f" ({placeholders} placeholders)" if placeholders else "")
    )
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        return run(args)
    except (LayoutError, ValueError, KeyError) as e:
        logger.error(f"Invalid request: {e}")
        return EXIT_INVALID_REQUEST
    except (RenderError, PlanValidationError, OSError) as e:
        logger.error(f"Failed: {e}")
        return EXIT_RENDER_ERROR


if __name__ == "__main__":
    sys.exit(main())
