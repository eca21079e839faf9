"""
Schemas Package

JSON schema for serialized composition plans and its validator.
"""

from .validator import load_plan, validate_plan

__all__ = [
    "load_plan",
    "validate_plan",
]
