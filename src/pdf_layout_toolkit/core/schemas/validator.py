"""
Plan Document Validation

Validates serialized CompositionPlans (``plan.to_dict()`` / ``--plan-json``
output) against the JSON schema shipped next to this module, plus the
ordering rules a schema cannot express.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import jsonschema

from pdf_layout_toolkit.core.errors import PlanValidationError

if TYPE_CHECKING:
    from pdf_layout_toolkit.layout.models import CompositionPlan


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def validate_plan(data: dict[str, Any]) -> None:
    """
    Validate a plan document.

    Args:
        data: Plan dictionary (as produced by CompositionPlan.to_dict())

    Raises:
        PlanValidationError: If the document is invalid
    """
    schema = _load_schema("plan")
    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        first = errors[0]
        raise PlanValidationError(
            f"Schema validation failed: {first.message}",
            path=".".join(str(p) for p in first.absolute_path),
            errors=[e.message for e in errors],
        )

    # Sheets must be numbered 0..n-1 in order
    for position, sheet in enumerate(data["sheets"]):
        if sheet["index"] != position:
            raise PlanValidationError(
                f"Sheet {position} has index {sheet['index']}",
                path=f"sheets.{position}.index",
            )


def load_plan(path: Path | str) -> CompositionPlan:
    """
    Read, validate and rebuild a plan written with ``--plan-json``.

    Raises:
        PlanValidationError: If the file is not valid JSON or not a valid plan
    """
    from pdf_layout_toolkit.layout.models import CompositionPlan

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PlanValidationError(f"Invalid JSON in {path}: {e}") from e
    validate_plan(data)
    return CompositionPlan.from_dict(data)
