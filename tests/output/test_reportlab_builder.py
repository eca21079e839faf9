"""
Tests for the ReportLab canvas builder.

Output PDFs are read back with pypdf.
"""

import pytest
from PIL import Image
from pypdf import PdfReader

from pdf_layout_toolkit.core.models import Point, Rect, Size
from pdf_layout_toolkit.layout import Color, StrokeStyle
from pdf_layout_toolkit.output import ReportLabCanvasBuilder


class TestReportLabCanvasBuilder:

    def test_save_when_pages_added_then_sizes_and_rotation_written(self, tmp_path):
        # Arrange
        out = tmp_path / "out.pdf"
        builder = ReportLabCanvasBuilder(out)

        # Act
        builder.add_page(Size(300, 200))
        builder.add_page(Size(595, 842), rotation=90)
        builder.save()

        # Assert
        reader = PdfReader(out)
        assert len(reader.pages) == 2
        first, second = reader.pages
        assert (float(first.mediabox.width), float(first.mediabox.height)) == (300, 200)
        assert (float(second.mediabox.width), float(second.mediabox.height)) == (595, 842)
        assert second.rotation == 90

    def test_save_when_last_page_blank_then_still_written(self, tmp_path):
        out = tmp_path / "out.pdf"
        builder = ReportLabCanvasBuilder(out)
        page = builder.add_page(Size(100, 100))
        builder.draw_line(page, Point(0, 0), Point(100, 100), StrokeStyle())
        builder.add_page(Size(100, 100))

        builder.save()

        assert len(PdfReader(out).pages) == 2

    def test_draw_when_image_rect_and_text_then_content_written(self, tmp_path):
        out = tmp_path / "out.pdf"

        with ReportLabCanvasBuilder(out) as builder:
            page = builder.add_page(Size(200, 200))
            builder.draw_rect(page, Rect(0, 0, 200, 200), fill=Color(0.9, 0.9, 0.9))
            builder.draw_image(page, Image.new("RGB", (50, 50), "blue"), Rect(10, 10, 100, 100), 30)
            builder.draw_rect(page, Rect(5, 5, 50, 50), stroke=StrokeStyle(width=2, dash=(10, 5)))
            builder.draw_text(page, "Page 3 could not be rendered", Point(10, 100))

        reader = PdfReader(out)
        assert "Page 3 could not be rendered" in reader.pages[0].extract_text()
        assert len(reader.pages[0].images) == 1

    def test_draw_when_stale_handle_then_raises_value_error(self, tmp_path):
        builder = ReportLabCanvasBuilder(tmp_path / "out.pdf")
        first = builder.add_page(Size(100, 100))
        builder.add_page(Size(100, 100))

        with pytest.raises(ValueError, match="no longer open"):
            builder.draw_line(first, Point(0, 0), Point(1, 1), StrokeStyle())

    def test_context_when_block_raises_then_file_not_written(self, tmp_path):
        out = tmp_path / "out.pdf"

        with pytest.raises(RuntimeError):
            with ReportLabCanvasBuilder(out) as builder:
                builder.add_page(Size(100, 100))
                raise RuntimeError("boom")

        assert not out.exists()

    def test_init_when_parent_missing_then_created(self, tmp_path):
        out = tmp_path / "nested" / "dir" / "out.pdf"

        with ReportLabCanvasBuilder(out) as builder:
            builder.add_page(Size(100, 100))

        assert out.exists()
