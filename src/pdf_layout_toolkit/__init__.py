"""Top-level package for the PDF layout toolkit.

Provides subpackages:
- pdf_layout_toolkit.core – geometry models, errors and plan schema
- pdf_layout_toolkit.layout – pure layout engine (scale, rotate, n-up, posterize, combine)
- pdf_layout_toolkit.output – PyMuPDF page sources, ReportLab output and plan execution
- pdf_layout_toolkit.common – page sizes, units, page ranges and defaults
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("pdf-layout-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
