"""
Tests for plan document validation.
"""

import copy
import json

import pytest

from pdf_layout_toolkit.core.errors import PlanValidationError
from pdf_layout_toolkit.core.models import Size, SourcePage
from pdf_layout_toolkit.core.schemas import load_plan, validate_plan
from pdf_layout_toolkit.layout import (
    Color,
    GridSpec,
    PosterizeConfig,
    SeparatorSpec,
    layout_grid,
    posterize,
    rotate_pages,
    split_in_half,
    stack,
    standardize_pages,
)


@pytest.fixture
def grid_plan(make_pages, a4):
    return layout_grid(make_pages(5), a4, GridSpec(2, 2, gutter=10, margin=36), draw_borders=True)


class TestValidatePlan:

    def test_validate_when_every_layout_kind_then_accepted(self, make_pages, a4, grid_plan):
        """Every plan the engine produces satisfies the schema."""
        pages = make_pages(3)
        plans = [
            grid_plan,
            posterize(pages, PosterizeConfig(rows=2, cols=2, overlap=3)),
            stack(pages, "horizontal", 5, SeparatorSpec(), background=Color(0, 0, 1), unrenderable={"p1"}),
            standardize_pages(pages, a4, background=Color(1, 1, 1)),
            rotate_pages(pages, {"p0": 90, "p1": 33.5}),
            split_in_half(pages),
        ]

        for plan in plans:
            validate_plan(plan.to_dict())

    def test_validate_when_json_round_tripped_then_accepted(self, grid_plan):
        validate_plan(json.loads(grid_plan.to_json()))

    def test_validate_when_unknown_kind_then_raises_with_path(self, grid_plan):
        data = grid_plan.to_dict()
        data["kind"] = "collage"

        with pytest.raises(PlanValidationError) as exc_info:
            validate_plan(data)

        assert exc_info.value.path == "kind"

    def test_validate_when_negative_width_then_raises_with_nested_path(self, grid_plan):
        data = copy.deepcopy(grid_plan.to_dict())
        data["sheets"][1]["placements"][0]["target_rect"]["width"] = -1

        with pytest.raises(PlanValidationError) as exc_info:
            validate_plan(data)

        assert exc_info.value.path == "sheets.1.placements.0.target_rect.width"
        assert exc_info.value.errors

    def test_validate_when_missing_field_then_raises(self, grid_plan):
        data = grid_plan.to_dict()
        del data["sheets"][0]["size"]

        with pytest.raises(PlanValidationError, match="size"):
            validate_plan(data)

    def test_validate_when_sheets_out_of_order_then_raises(self, grid_plan):
        data = grid_plan.to_dict()
        data["sheets"].reverse()

        with pytest.raises(PlanValidationError, match="index"):
            validate_plan(data)


class TestLoadPlan:

    def test_load_when_written_plan_then_rebuilt(self, tmp_path, grid_plan):
        path = tmp_path / "plan.json"
        path.write_text(grid_plan.to_json(indent=2))

        assert load_plan(path) == grid_plan

    def test_load_when_not_json_then_raises(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text("{not json")

        with pytest.raises(PlanValidationError, match="Invalid JSON"):
            load_plan(path)

    def test_load_when_single_sheet_rotation_plan_then_rebuilt(self, tmp_path):
        plan = rotate_pages([SourcePage("p0", Size(100, 50))], {"p0": 45})
        path = tmp_path / "plan.json"
        path.write_text(plan.to_json())

        assert load_plan(path) == plan
