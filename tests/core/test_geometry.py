"""
Unit Tests for Geometry Models

Tests for Point, Size, Rect and SourcePage.
"""

import math

import pytest

from pdf_layout_toolkit.core.errors import InvalidAngle, InvalidGeometry, LayoutError
from pdf_layout_toolkit.core.models import Point, Rect, Size, SourcePage


class TestSize:
    """Tests for Size dataclass."""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructor Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_positive_then_creates_size(self):
        s = Size(595, 842)
        assert s.width == 595
        assert s.height == 842

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 10), (10, -5)])
    def test_init_when_non_positive_then_raises_invalid_geometry(self, width, height):
        """Zero or negative dimensions are rejected."""
        with pytest.raises(InvalidGeometry, match="must be positive"):
            Size(width, height)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_init_when_not_finite_then_raises_invalid_geometry(self, value):
        with pytest.raises(InvalidGeometry, match="finite"):
            Size(value, 10)

    def test_init_when_not_a_number_then_raises_invalid_geometry(self):
        with pytest.raises(InvalidGeometry, match="must be a number"):
            Size("100", 10)

    def test_invalid_geometry_is_a_layout_error_and_value_error(self):
        with pytest.raises(LayoutError):
            Size(0, 1)
        with pytest.raises(ValueError):
            Size(0, 1)

    # ─────────────────────────────────────────────────────────────────────────
    # Property Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_orientation_when_landscape_then_flags_landscape(self):
        s = Size(842, 595)
        assert s.is_landscape is True
        assert s.is_portrait is False

    def test_orientation_when_square_then_neither(self):
        s = Size(100, 100)
        assert s.is_landscape is False
        assert s.is_portrait is False

    def test_as_portrait_when_landscape_then_swaps(self):
        assert Size(842, 595).as_portrait() == Size(595, 842)
        assert Size(595, 842).as_portrait() == Size(595, 842)

    def test_as_landscape_when_portrait_then_swaps(self):
        assert Size(595, 842).as_landscape() == Size(842, 595)

    def test_scaled_when_factor_then_multiplies_both_axes(self):
        assert Size(100, 50).scaled(2) == Size(200, 100)

    def test_repr_when_called_then_uses_compact_numbers(self):
        assert repr(Size(310.0, 50.0)) == "Size(310, 50)"

    def test_round_trip_when_dict_then_equal(self):
        s = Size(612, 792)
        assert Size.from_dict(s.to_dict()) == s


class TestRect:
    """Tests for Rect dataclass."""

    def test_init_when_negative_width_then_raises_invalid_geometry(self):
        with pytest.raises(InvalidGeometry, match="width must be >= 0"):
            Rect(0, 0, -1, 10)

    def test_init_when_zero_area_then_allowed_and_empty(self):
        r = Rect(5, 5, 0, 10)
        assert r.is_empty is True

    def test_edges_when_valid_then_computed(self):
        r = Rect(10, 20, 100, 50)
        assert r.right == 110
        assert r.top == 70
        assert r.center == Point(60, 45)
        assert r.size == Size(100, 50)

    def test_contains_rect_when_inside_then_true(self):
        outer = Rect(0, 0, 100, 100)
        assert outer.contains_rect(Rect(10, 10, 50, 50)) is True
        assert outer.contains_rect(outer) is True

    def test_contains_rect_when_overflowing_then_false(self):
        outer = Rect(0, 0, 100, 100)
        assert outer.contains_rect(Rect(60, 10, 50, 50)) is False

    def test_union_when_disjoint_then_covers_both(self):
        u = Rect(0, 0, 10, 10).union(Rect(20, 30, 5, 5))
        assert u == Rect(0, 0, 25, 35)

    def test_crop_box_when_fractional_then_rounds_edges(self):
        """Adjacent regions must share their boundary pixel."""
        left = Rect(0, 0, 333.4, 100)
        right = Rect(333.4, 0, 333.3, 100)
        assert left.crop_box() == (0, 0, 333, 100)
        assert right.crop_box()[0] == left.crop_box()[2]

    def test_from_size_when_origin_given_then_positions_rect(self):
        assert Rect.from_size(Size(10, 20), Point(1, 2)) == Rect(1, 2, 10, 20)


class TestSourcePage:
    """Tests for SourcePage dataclass."""

    def test_init_when_negative_rotation_then_normalised(self):
        page = SourcePage("p0", Size(595, 842), rotation=-90)
        assert page.rotation == 270

    def test_init_when_full_turn_then_zero(self):
        assert SourcePage("p0", Size(595, 842), rotation=360).rotation == 0

    def test_init_when_rotation_nan_then_raises_invalid_angle(self):
        with pytest.raises(InvalidAngle):
            SourcePage("p0", Size(595, 842), rotation=math.nan)

    def test_display_size_when_quarter_turn_then_swapped(self):
        page = SourcePage("p0", Size(595, 842), rotation=90)
        assert page.display_size == Size(842, 595)

    def test_display_size_when_half_turn_then_unchanged(self):
        page = SourcePage("p0", Size(595, 842), rotation=180)
        assert page.display_size == Size(595, 842)

    def test_from_source_when_collaborator_then_reads_size_and_rotation(self, fake_sources):
        # Arrange
        template = SourcePage("p7", Size(612, 792), rotation=270)
        source = fake_sources([template])["p7"]

        # Act
        page = SourcePage.from_source("p7", source)

        # Assert
        assert page == template

    def test_round_trip_when_dict_then_equal(self):
        page = SourcePage("doc0:3", Size(612, 792), rotation=90)
        assert SourcePage.from_dict(page.to_dict()) == page
