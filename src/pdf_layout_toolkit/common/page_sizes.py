"""
Module: common.page_sizes

Purpose:
    Named output page sizes and unit conversion to PDF points.

Key Functions:
    - page_size(): Look up a named size ("A4", "Letter", ...)
    - to_points(): Convert a length in pt/in/mm/cm to points

Dependencies:
    - reportlab.lib.pagesizes: Standard paper sizes in points
    - reportlab.lib.units: inch/mm/cm factors

Used By:
    - layout.config: Tool configuration
    - cli: Output page size options
"""

from __future__ import annotations

from reportlab.lib import pagesizes
from reportlab.lib.units import cm, inch, mm

from pdf_layout_toolkit.core.models import Size


PAGE_SIZES: dict[str, tuple[float, float]] = {
    "A0": pagesizes.A0,
    "A1": pagesizes.A1,
    "A2": pagesizes.A2,
    "A3": pagesizes.A3,
    "A4": pagesizes.A4,
    "A5": pagesizes.A5,
    "A6": pagesizes.A6,
    "B4": pagesizes.B4,
    "B5": pagesizes.B5,
    "Letter": pagesizes.LETTER,
    "Legal": pagesizes.LEGAL,
    "Tabloid": pagesizes.TABLOID,
    "Ledger": pagesizes.LEDGER,
}

UNIT_FACTORS: dict[str, float] = {
    "pt": 1.0,
    "in": inch,
    "mm": mm,
    "cm": cm,
}


def page_size(name: str) -> Size:
    """
    Look up a named page size.

    Lookup is case-insensitive. Sizes keep the orientation of the
    underlying standard (Ledger is landscape, the rest are portrait).

    Args:
        name: Size name such as "A4" or "letter"

    Returns:
        Size in points

    Raises:
        KeyError: If the name is unknown

    Example:
        >>> page_size("a4")
        Size(595.276, 841.89)
    """
    for key, (width, height) in PAGE_SIZES.items():
        if key.lower() == name.strip().lower():
            return Size(width, height)
    raise KeyError(f"Unknown page size: {name!r} (known: {', '.join(PAGE_SIZES)})")


def to_points(value: float, units: str = "pt") -> float:
    """
    Convert a length to PDF points (1/72 inch).

    Args:
        value: Length in ``units``
        units: One of "pt", "in", "mm", "cm"

    Returns:
        Length in points

    Raises:
        KeyError: If the unit is unknown
    """
    try:
        factor = UNIT_FACTORS[units.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown unit: {units!r} (known: {', '.join(UNIT_FACTORS)})") from None
    return value * factor


def custom_size(width: float, height: float, units: str = "pt") -> Size:
    """Build a Size from a width/height pair in the given units."""
    return Size(to_points(width, units), to_points(height, units))

