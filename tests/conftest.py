import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import pdf_layout_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from pdf_layout_toolkit.core.errors import RenderError  # noqa: E402
from pdf_layout_toolkit.core.models import Size, SourcePage  # noqa: E402
from pdf_layout_toolkit.output.interfaces import CanvasBuilder, PageSource  # noqa: E402


class FakePageSource(PageSource):
    """In-memory page; renders a solid image of the displayed size."""

    def __init__(self, size: Size, rotation: float = 0, *, fail: bool = False, color="white"):
        self.size = size
        self.rotation = rotation
        self.fail = fail
        self.color = color
        self.render_calls = []

    def get_size(self):
        return self.size

    def get_rotation(self):
        return self.rotation

    def render_to_pixels(self, scale):
        self.render_calls.append(scale)
        if self.fail:
            raise RenderError("corrupt page")
        displayed = SourcePage("x", self.size, self.rotation).display_size
        return Image.new(
            "RGB",
            (round(displayed.width * scale), round(displayed.height * scale)),
            color=self.color,
        )


class RecordingCanvasBuilder(CanvasBuilder):
    """Records every call as (name, page, args...) tuples."""

    def __init__(self):
        self.calls = []
        self.pages = []

    def add_page(self, size, rotation=0):
        self.pages.append((size, rotation))
        handle = len(self.pages) - 1
        self.calls.append(("add_page", handle, size, rotation))
        return handle

    def draw_image(self, page, image, rect, rotation_degrees=0.0):
        self.calls.append(("draw_image", page, image.size, rect, rotation_degrees))

    def draw_rect(self, page, rect, stroke=None, fill=None):
        self.calls.append(("draw_rect", page, rect, stroke, fill))

    def draw_line(self, page, start, end, style):
        self.calls.append(("draw_line", page, start, end, style))

    def draw_text(self, page, text, origin, size=12.0, color=None):
        self.calls.append(("draw_text", page, text, origin, size, color))

    def names(self):
        return [call[0] for call in self.calls]


# Common test fixtures
@pytest.fixture
def a4():
    """A4 portrait in points."""
    return Size(595, 842)


@pytest.fixture
def make_pages():
    """Factory: make_pages(n, size) -> list of SourcePages p0..p{n-1}."""
    def _make(count, size=Size(595, 842), rotation=0):
        return [SourcePage(f"p{i}", size, rotation) for i in range(count)]
    return _make


@pytest.fixture
def recording_builder():
    return RecordingCanvasBuilder()


@pytest.fixture
def fake_sources():
    """Factory: fake_sources(pages, failing=()) -> {page_id: FakePageSource}."""
    def _make(pages, failing=()):
        return {
            page.page_id: FakePageSource(page.size, page.rotation, fail=page.page_id in failing)
            for page in pages
        }
    return _make


@pytest.fixture
def sample_pdf(tmp_path: Path):
    """Three-page PDF: A4 portrait, A4 landscape, Letter portrait."""
    import fitz

    path = tmp_path / "sample.pdf"
    doc = fitz.open()
    for width, height in [(595, 842), (842, 595), (612, 792)]:
        page = doc.new_page(width=width, height=height)
        page.insert_text((72, 72), f"{width}x{height}", fontsize=24)
    doc.save(path)
    doc.close()
    return path


