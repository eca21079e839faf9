"""
Unit Tests for the Fit/Fill Scaler and Page Standardization
"""

import pytest

from pdf_layout_toolkit.core.errors import EmptyInput, InvalidGeometry
from pdf_layout_toolkit.core.models import Point, Rect, Size
from pdf_layout_toolkit.layout import ScaleMode, WHITE, Color, scale_to_fit, standardize_pages
from pdf_layout_toolkit.layout.scaler import placed_rect, resolve_target_size


class TestScaleToFit:
    """Tests for scale_to_fit()."""

    def test_fit_when_wide_source_then_width_limits_scale(self):
        # Arrange
        source = Size(100, 50)
        target = Size(200, 200)

        # Act
        result = scale_to_fit(source, target, ScaleMode.FIT)

        # Assert
        assert result.scale == 2.0
        assert result.offset == Point(0, 50)

    def test_fill_when_wide_source_then_height_limits_scale(self):
        result = scale_to_fit(Size(100, 50), Size(200, 200), ScaleMode.FILL)

        assert result.scale == 4.0
        # Overflow is centred, so the horizontal offset is negative
        assert result.offset == Point(-100, 0)

    def test_fit_when_identical_sizes_then_identity(self):
        result = scale_to_fit(Size(595, 842), Size(595, 842))
        assert result.scale == 1.0
        assert result.offset == Point(0, 0)

    @pytest.mark.parametrize("source,target", [
        (Size(100, 50), Size(200, 200)),
        (Size(612, 792), Size(595, 842)),
        (Size(842, 595), Size(100, 300)),
        (Size(1, 1000), Size(1000, 1)),
    ])
    def test_fit_when_any_sizes_then_contained_and_touching(self, source, target):
        """FIT: scaled content fits and touches at least one pair of edges."""
        result = scale_to_fit(source, target, ScaleMode.FIT)
        scaled = result.scaled_size(source)

        assert scaled.width <= target.width + 1e-9
        assert scaled.height <= target.height + 1e-9
        assert (
            scaled.width == pytest.approx(target.width)
            or scaled.height == pytest.approx(target.height)
        )

    @pytest.mark.parametrize("source,target", [
        (Size(100, 50), Size(200, 200)),
        (Size(612, 792), Size(595, 842)),
        (Size(1, 1000), Size(1000, 1)),
    ])
    def test_fill_when_any_sizes_then_covers_target(self, source, target):
        result = scale_to_fit(source, target, ScaleMode.FILL)
        scaled = result.scaled_size(source)

        assert scaled.width >= target.width - 1e-9
        assert scaled.height >= target.height - 1e-9

    @pytest.mark.parametrize("source,target", [
        (Size(3, 7), Size(9.3, 21.7)),
        (Size(100, 50), Size(300, 150)),
        (Size(595, 842), Size(297.5, 421)),
        (Size(612, 792), Size(612, 792)),
    ])
    def test_scale_when_same_aspect_ratio_then_fit_and_fill_agree(self, source, target):
        # Act
        fit = scale_to_fit(source, target, ScaleMode.FIT)
        fill = scale_to_fit(source, target, ScaleMode.FILL)

        # Assert
        assert fit.scale == pytest.approx(fill.scale)
        assert fit.offset.x == pytest.approx(fill.offset.x, abs=1e-9)
        assert fit.offset.y == pytest.approx(fill.offset.y, abs=1e-9)
        assert fit.offset.x == pytest.approx(0, abs=1e-9)
        assert fit.offset.y == pytest.approx(0, abs=1e-9)

    def test_scale_when_not_a_size_then_raises_invalid_geometry(self):
        with pytest.raises(InvalidGeometry, match="must be a Size"):
            scale_to_fit((100, 50), Size(10, 10))


class TestPlacedRect:

    def test_placed_rect_when_target_offset_then_content_moves_with_it(self):
        rect, result = placed_rect(Size(100, 50), Rect(10, 20, 200, 200))

        assert rect == Rect(10, 70, 200, 100)
        assert result.offset == Point(0, 50)

    def test_placed_rect_when_empty_target_then_raises_invalid_geometry(self):
        with pytest.raises(InvalidGeometry):
            placed_rect(Size(100, 50), Rect(0, 0, 0, 10))


class TestResolveTargetSize:

    def test_resolve_when_auto_then_kept_as_given(self):
        assert resolve_target_size(Size(842, 595), "auto") == Size(842, 595)

    def test_resolve_when_portrait_then_forced(self):
        assert resolve_target_size(Size(842, 595), "portrait") == Size(595, 842)


class TestStandardizePages:
    """Tests for standardize_pages()."""

    def test_standardize_when_mixed_sizes_then_every_sheet_same_size(self, make_pages, a4):
        # Arrange
        pages = make_pages(2, Size(612, 792)) + make_pages(1, Size(842, 595))

        # Act
        plan = standardize_pages(pages, a4)

        # Assert
        assert plan.kind == "standardize"
        assert plan.page_count == 3
        assert {sheet.size for sheet in plan.sheets} == {a4}
        for sheet in plan.sheets:
            assert Rect.from_size(a4).contains_rect(sheet.placements[0].target_rect, 1e-6)

    def test_standardize_when_background_then_full_sheet_fill(self, make_pages, a4):
        grey = Color(0.5, 0.5, 0.5)

        plan = standardize_pages(make_pages(1), a4, background=grey)

        background = plan.sheets[0].background
        assert background.rect == Rect.from_size(a4)
        assert background.fill == grey

    def test_standardize_when_white_background_then_still_drawn(self, make_pages, a4):
        """Standardize paints any requested colour, white included."""
        plan = standardize_pages(make_pages(1), a4, background=WHITE)
        assert plan.sheets[0].background is not None

    def test_standardize_when_fill_mode_then_content_covers_sheet(self, make_pages, a4):
        plan = standardize_pages(make_pages(1, Size(100, 50)), a4, ScaleMode.FILL)

        rect = plan.sheets[0].placements[0].target_rect
        assert rect.contains_rect(Rect.from_size(a4), 1e-6)

    def test_standardize_when_rotated_page_then_displayed_size_used(self, a4):
        from pdf_layout_toolkit.core.models import SourcePage

        page = SourcePage("p0", Size(595, 842), rotation=90)

        plan = standardize_pages([page], a4)

        rect = plan.sheets[0].placements[0].target_rect
        assert rect.width > rect.height

    def test_standardize_when_no_pages_then_raises_empty_input(self, a4):
        with pytest.raises(EmptyInput):
            standardize_pages([], a4)
