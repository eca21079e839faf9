"""
Core Models Package

Immutable, validated geometry values shared by every layout component.

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation while a plan is being computed
2. Safe to pass between threads/processes
3. Can be used as dict keys or in sets
4. Equal inputs compare equal, which keeps plans reproducible
"""

from .geometry import ORIGIN, Point, Rect, Size, SourcePage

__all__ = [
    "ORIGIN",
    "Point",
    "Rect",
    "Size",
    "SourcePage",
]
