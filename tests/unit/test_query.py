"""Unit tests for the ad hoc query runner."""

import json
from pathlib import Path

import pytest
from rich.table import Table

from query import load_pantry, parse_args, render_results, run_query
from wasteless.models.models import RecipeScoreResult


SAMPLE_PANTRY = Path(__file__).resolve().parents[2] / "data" / "sample_pantry.json"


@pytest.fixture
def pantry_file(tmp_path):
    path = tmp_path / "pantry.json"
    path.write_text(
        json.dumps(
            {
                "inventory": [{"id": "a", "name": "egg", "days_until_expiry": 2}],
                "recipes": [
                    {"id": 1, "title": "Omelette", "ingredients": ["egg", "cheese"], "meal_type": "breakfast"},
                    {"id": 2, "title": "Steak", "ingredients": ["beef"], "meal_type": "dinner"},
                ],
            }
        )
    )
    return path


class TestLoadPantry:
    """Test pantry file loading."""

    def test_loads_valid_file(self, pantry_file):
        data = load_pantry(str(pantry_file))

        assert len(data["inventory"]) == 1
        assert len(data["recipes"]) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_pantry(str(tmp_path / "nope.json"))

    def test_missing_key(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"inventory": []}))

        with pytest.raises(ValueError, match="recipes"):
            load_pantry(str(path))

    def test_sample_pantry_is_valid(self):
        data = load_pantry(str(SAMPLE_PANTRY))

        assert data["inventory"]
        assert data["recipes"]


class TestParseArgs:
    """Test command-line flag parsing."""

    def test_path_only(self):
        args = parse_args(["pantry.json"])

        assert args["path"] == "pantry.json"
        assert args["debug"] is False
        assert args["meal_type"] == "any"
        assert args["count"] is None
        assert args["prioritize_expiring"] is True

    def test_all_flags(self):
        args = parse_args(
            ["--debug", "--meal-type", "Dinner", "--count", "3", "--no-expiry-priority", "--select", "milk,egg", "p.json"]
        )

        assert args == {
            "debug": True,
            "meal_type": "dinner",
            "count": 3,
            "prioritize_expiring": False,
            "selected": "milk,egg",
            "path": "p.json",
        }

    def test_unknown_flag(self):
        with pytest.raises(ValueError, match="Unknown flag"):
            parse_args(["--verbose", "p.json"])

    def test_invalid_meal_type(self):
        with pytest.raises(ValueError, match="--meal-type"):
            parse_args(["--meal-type", "brunch", "p.json"])

    def test_flag_without_value(self):
        with pytest.raises(ValueError, match="requires a value"):
            parse_args(["--count"])

    def test_missing_path(self):
        with pytest.raises(ValueError, match="No pantry file"):
            parse_args(["--debug"])


class TestRunQuery:
    """Test running a query end to end."""

    def test_run_query_returns_ranked_results(self, pantry_file):
        results = run_query(str(pantry_file), meal_type="breakfast", count=5)

        assert [r.id for r in results] == ["1"]
        assert results[0].missed_ingredients == ["cheese"]

    def test_run_query_debug_mode(self, pantry_file):
        results = run_query(str(pantry_file), debug=True)

        assert len(results) == 2

    def test_run_query_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            run_query(str(tmp_path / "missing.json"))
        assert exc.value.code == 1

    def test_render_results_table(self):
        table = render_results(
            [RecipeScoreResult(id="1", title="Omelette", score=88, used_ingredients=["egg"], missed_ingredients=[])]
        )

        assert isinstance(table, Table)
        assert table.row_count == 1
