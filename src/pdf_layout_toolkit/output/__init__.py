"""
Output Package

Collaborator interfaces and their PyMuPDF/ReportLab implementations,
plus the executor that draws a CompositionPlan.
"""

from .interfaces import CanvasBuilder, PageSource
from .executor import execute_plan
from .fitz_source import FitzPageSource, LoadedDocument, open_document
from .reportlab_builder import ReportLabCanvasBuilder

__all__ = [
    "CanvasBuilder",
    "PageSource",
    "execute_plan",
    "FitzPageSource",
    "LoadedDocument",
    "open_document",
    "ReportLabCanvasBuilder",
]
