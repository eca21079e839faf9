"""
Unit Tests for Page Sizes and Units
"""

import pytest
from reportlab.lib.pagesizes import A4, LETTER

from pdf_layout_toolkit.common.page_sizes import custom_size, page_size, to_points
from pdf_layout_toolkit.core.models import Size


class TestPageSize:

    def test_page_size_when_known_name_then_matches_reportlab(self):
        assert page_size("A4") == Size(*A4)
        assert page_size("Letter") == Size(*LETTER)

    def test_page_size_when_different_case_then_found(self):
        assert page_size(" letter ") == Size(*LETTER)

    def test_page_size_when_unknown_then_raises_key_error(self):
        with pytest.raises(KeyError, match="Unknown page size"):
            page_size("A11")


class TestUnits:

    def test_to_points_when_inches_then_72_per_inch(self):
        assert to_points(1, "in") == pytest.approx(72.0)

    def test_to_points_when_millimetres_then_converted(self):
        assert to_points(25.4, "mm") == pytest.approx(72.0)

    def test_to_points_when_unknown_unit_then_raises_key_error(self):
        with pytest.raises(KeyError, match="Unknown unit"):
            to_points(1, "furlong")

    def test_custom_size_when_inches_then_points(self):
        assert custom_size(8.5, 11, "in") == Size(612, 792)

