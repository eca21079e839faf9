"""
Unit Tests for N-up Grid Layout
"""

import pytest

from pdf_layout_toolkit.core.errors import EmptyInput, InvalidGrid
from pdf_layout_toolkit.core.models import Rect, Size, SourcePage
from pdf_layout_toolkit.layout import (
    Color,
    GridSpec,
    Orientation,
    RectPrimitive,
    ScaleMode,
    layout_grid,
    n_up,
    resolve_sheet_size,
)


class TestLayoutGrid:
    """Tests for layout_grid()."""

    def test_layout_when_five_pages_on_2x2_then_two_sheets_four_and_one(self, make_pages, a4):
        # Arrange
        pages = make_pages(5)

        # Act
        plan = layout_grid(pages, a4, GridSpec(rows=2, cols=2))

        # Assert
        assert plan.kind == "n-up"
        assert plan.page_count == 2
        assert [s.placement_count for s in plan.sheets] == [4, 1]

    def test_layout_when_full_sheet_then_reading_order_top_left_first(self, make_pages, a4):
        plan = layout_grid(make_pages(4), a4, GridSpec(rows=2, cols=2))

        placements = plan.sheets[0].placements
        assert [p.source_page_id for p in placements] == ["p0", "p1", "p2", "p3"]
        assert [p.grid_cell for p in placements] == [(0, 0), (0, 1), (1, 0), (1, 1)]
        # Row 0 sits above row 1 in canvas space (origin bottom-left)
        assert placements[0].target_rect.y > placements[2].target_rect.y
        assert placements[0].target_rect.x < placements[1].target_rect.x

    def test_layout_when_any_grid_then_placements_inside_cells(self, make_pages, a4):
        grid = GridSpec(rows=3, cols=3, gutter=10, margin=36)
        pages = make_pages(4, Size(612, 792)) + make_pages(5, Size(842, 595))

        plan = layout_grid(pages, a4, grid)

        for index, placement in enumerate(plan.sheets[0].placements):
            cell = grid.cell_rect(index, a4)
            assert cell.contains_rect(placement.target_rect, 1e-6)

    def test_layout_when_margins_then_content_clear_of_sheet_edge(self, make_pages, a4):
        plan = layout_grid(make_pages(4), a4, GridSpec(2, 2, gutter=10, margin=36))

        for placement in plan.placements:
            rect = placement.target_rect
            assert rect.x >= 36 - 1e-9
            assert rect.y >= 36 - 1e-9
            assert rect.right <= a4.width - 36 + 1e-9
            assert rect.top <= a4.height - 36 + 1e-9

    def test_layout_when_borders_then_one_outline_per_page(self, make_pages, a4):
        plan = layout_grid(make_pages(3), a4, GridSpec(2, 2), draw_borders=True)

        decorations = plan.sheets[0].decorations
        assert len(decorations) == 3
        assert all(isinstance(d, RectPrimitive) for d in decorations)
        assert [d.rect for d in decorations] == [p.target_rect for p in plan.placements]

    def test_layout_when_fill_requested_then_fitted_with_warning(self, make_pages, a4):
        plan = layout_grid(make_pages(2), a4, GridSpec(1, 2), ScaleMode.FILL)

        assert len(plan.warnings) == 1
        assert "fill" in plan.warnings[0]
        cell = GridSpec(1, 2).cell_rect(0, a4)
        assert cell.contains_rect(plan.placements[0].target_rect, 1e-6)

    def test_layout_when_margins_exceed_sheet_then_raises_invalid_grid(self, make_pages):
        with pytest.raises(InvalidGrid, match="no room"):
            layout_grid(make_pages(1), Size(100, 100), GridSpec(2, 2, margin=60))

    def test_layout_when_no_pages_then_raises_empty_input(self, a4):
        with pytest.raises(EmptyInput):
            layout_grid([], a4, GridSpec(2, 2))


class TestGridSpec:

    @pytest.mark.parametrize("rows,cols", [(0, 2), (2, 0), (-1, -1), (0, 0)])
    def test_init_when_no_cells_then_raises_invalid_grid(self, rows, cols):
        with pytest.raises(InvalidGrid):
            GridSpec(rows, cols)

    def test_init_when_negative_gutter_then_raises_invalid_grid(self):
        with pytest.raises(InvalidGrid, match="gutter"):
            GridSpec(2, 2, gutter=-1)

    def test_cell_rect_when_margin_and_gutter_then_matches_formula(self):
        grid = GridSpec(rows=2, cols=2, gutter=10, margin=20)
        area = Size(230, 230)

        # cells are (230 - 40 - 10) / 2 = 90 wide and tall
        assert grid.cell_rect(0, area) == Rect(20, 120, 90, 90)
        assert grid.cell_rect(3, area) == Rect(120, 20, 90, 90)

    @pytest.mark.parametrize("n,shape", [(2, (1, 2)), (4, (2, 2)), (9, (3, 3)), (16, (4, 4))])
    def test_for_pages_per_sheet_when_preset_then_grid_shape(self, n, shape):
        grid = GridSpec.for_pages_per_sheet(n)
        assert (grid.rows, grid.cols) == shape
        assert grid.margin == 0

    def test_for_pages_per_sheet_when_margins_then_36_and_10(self):
        grid = GridSpec.for_pages_per_sheet(4, use_margins=True)
        assert (grid.margin, grid.gutter) == (36, 10)

    def test_for_pages_per_sheet_when_unsupported_then_raises_invalid_grid(self):
        with pytest.raises(InvalidGrid, match="Unsupported"):
            GridSpec.for_pages_per_sheet(6)


class TestResolveSheetSize:

    def test_auto_when_landscape_source_and_wide_grid_then_landscape(self, a4):
        page = SourcePage("p0", Size(842, 595))
        assert resolve_sheet_size(a4, Orientation.AUTO, page, GridSpec(1, 2)) == Size(842, 595)

    def test_auto_when_portrait_source_then_portrait(self, a4):
        page = SourcePage("p0", Size(595, 842))
        assert resolve_sheet_size(a4, "auto", page, GridSpec(1, 2)) == a4

    def test_auto_when_square_grid_then_portrait(self, a4):
        page = SourcePage("p0", Size(842, 595))
        assert resolve_sheet_size(a4, "auto", page, GridSpec(2, 2)) == a4

    def test_explicit_when_landscape_then_landscape(self, a4):
        assert resolve_sheet_size(a4, "landscape", None, GridSpec(2, 2)) == Size(842, 595)


class TestNUp:

    def test_n_up_when_two_landscape_pages_then_landscape_sheet(self, a4):
        pages = [SourcePage(f"p{i}", Size(842, 595)) for i in range(2)]

        plan = n_up(pages, 2, a4)

        assert plan.page_count == 1
        assert plan.output_size == Size(842, 595)

    def test_n_up_when_borders_then_style_applied(self, make_pages, a4):
        red = Color(1, 0, 0)

        plan = n_up(make_pages(4), 4, a4, draw_borders=True, border_color=red, border_width=2)

        stroke = plan.sheets[0].decorations[0].stroke
        assert (stroke.color, stroke.width) == (red, 2)

    def test_n_up_when_sixteen_up_with_seventeen_pages_then_two_sheets(self, make_pages, a4):
        plan = n_up(make_pages(17), 16, a4, use_margins=True)
        assert [s.placement_count for s in plan.sheets] == [16, 1]

    def test_n_up_when_identical_inputs_then_identical_json(self, make_pages, a4):
        """Plans are deterministic."""
        first = n_up(make_pages(7), 4, a4, use_margins=True, draw_borders=True)
        second = n_up(make_pages(7), 4, a4, use_margins=True, draw_borders=True)

        assert first == second
        assert first.to_json() == second.to_json()
