"""
Module: output.fitz_source

Purpose:
    PageSource implementation backed by PyMuPDF. Opens a PDF, exposes
    every page as a SourcePage for the layout engine and rasterizes pages
    on demand for plan execution.

Key Functions:
    - open_document(): Load a PDF into SourcePages + PageSources

Key Classes:
    - FitzPageSource: One PyMuPDF page
    - LoadedDocument: An open document and its pages

Dependencies:
    - fitz (PyMuPDF): PDF parsing and rendering
    - PIL.Image: Pixel buffers

Used By:
    - cli: Loads input documents
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple

import fitz
from PIL import Image

from pdf_layout_toolkit.core.errors import EmptyInput, RenderError
from pdf_layout_toolkit.core.models import Size, SourcePage

from .interfaces import PageSource

logger = logging.getLogger(__name__)


class FitzPageSource(PageSource):
    """
    A single page of an open PyMuPDF document.

    Args:
        page: PyMuPDF page object (its document must stay open)
        page_id: Id used in plans, for error reporting
    """

    def __init__(self, page: fitz.Page, page_id: str = "") -> None:
        self._page = page
        self.page_id = page_id

    def get_size(self) -> Size:
        # cropbox is unrotated; page.rect already has the rotation applied
        box = self._page.cropbox
        return Size(box.width, box.height)

    def get_rotation(self) -> float:
        return self._page.rotation

    def render_to_pixels(self, scale: float) -> Image.Image:
        """
        Render the page as displayed at ``scale`` pixels per point.

        Raises:
            RenderError: If PyMuPDF cannot render the page
        """
        matrix = fitz.Matrix(scale, scale)
        try:
            pix = self._page.get_pixmap(matrix=matrix, alpha=False)
        except (RuntimeError, ValueError) as e:
            raise RenderError(f"Failed to render page: {e}", page_id=self.page_id) from e
        return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)


@dataclass
class LoadedDocument:
    """
    An open PDF with its pages ready for layout.

    Attributes:
        path: File the document was read from
        pages: SourcePages in document order
        sources: page_id -> FitzPageSource

    Example:
        >>> with open_document(Path("in.pdf")) as doc:
        ...     plan = n_up(doc.pages, 4, page_size("A4"))
    """

    path: Path
    document: fitz.Document
    pages: Tuple[SourcePage, ...] = ()
    sources: Dict[str, FitzPageSource] = field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def close(self) -> None:
        self.document.close()

    def __enter__(self) -> LoadedDocument:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def open_document(path: Path | str, *, id_prefix: str = "p") -> LoadedDocument:
    """
    Open a PDF and describe its pages.

    Page ids are ``id_prefix`` followed by the 0-based page index, so
    pages from several documents can share one plan when each document
    gets its own prefix.

    Args:
        path: PDF file
        id_prefix: Prefix for page ids

    Returns:
        LoadedDocument (close it, or use it as a context manager)

    Raises:
        FileNotFoundError: If ``path`` does not exist
        EmptyInput: If the document has no pages
        RenderError: If PyMuPDF cannot open the file
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"PDF not found: {path}")

    try:
        document = fitz.open(path)
    except (RuntimeError, ValueError) as e:
        raise RenderError(f"Cannot open {path}: {e}") from e

    if document.page_count == 0:
        document.close()
        raise EmptyInput(f"{path} has no pages")

    pages = []
    sources: Dict[str, FitzPageSource] = {}
    for index, page in enumerate(document):
        page_id = f"{id_prefix}{index}"
        source = FitzPageSource(page, page_id)
        sources[page_id] = source
        pages.append(SourcePage.from_source(page_id, source))

    logger.debug(f"Opened {path} ({len(pages)} pages)")
    return LoadedDocument(path=path, document=document, pages=tuple(pages), sources=sources)
