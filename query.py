#!/usr/bin/env python3
"""Ad hoc recommendation runner.

Rank recipes for a pantry file without wiring the engine into an app.

Usage:
    python query.py data/sample_pantry.json
    python query.py --debug data/sample_pantry.json  # Also print full JSON results
    python query.py --meal-type dinner --count 3 data/sample_pantry.json
    python query.py --select "milk,spinach" data/sample_pantry.json
    python query.py --no-expiry-priority data/sample_pantry.json

The pantry file holds ``{"inventory": [...], "recipes": [...]}`` with records in
the shape of InventoryIngredient and Recipe.
"""

import json
import sys
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from wasteless.models.models import MEAL_TYPES, RecipeScoreResult
from wasteless.services.recommendation import recommend
from wasteless.utils.logger import logger

console = Console()

USAGE = "Usage: python query.py [--debug] [--meal-type TYPE] [--count N] [--no-expiry-priority] [--select a,b] <pantry.json>"


def load_pantry(path: str) -> dict[str, Any]:
    """Read a pantry file.

    Args:
        path: Path to a JSON file with "inventory" and "recipes" lists.

    Returns:
        Parsed file contents.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JSON object with both lists.
    """
    pantry_file = Path(path)
    if not pantry_file.exists():
        raise FileNotFoundError(f"Pantry file not found: {path}")

    with open(pantry_file, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("Pantry file must contain a JSON object")
    for key in ("inventory", "recipes"):
        if not isinstance(data.get(key), list):
            raise ValueError(f"Pantry file must contain a '{key}' list")
    return data


def render_results(results: list[RecipeScoreResult]) -> Table:
    """Build a rich table of ranked recipes."""
    table = Table(title="Recommended recipes", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Recipe", style="bold")
    table.add_column("Meal")
    table.add_column("Score", justify="right", style="green")
    table.add_column("Uses")
    table.add_column("To buy", style="yellow")

    for position, result in enumerate(results, start=1):
        table.add_row(
            str(position),
            result.title,
            result.meal_type,
            str(result.score),
            ", ".join(result.used_ingredients) or "-",
            ", ".join(result.missed_ingredients) or "-",
        )
    return table


def run_query(
    path: str,
    debug: bool = False,
    meal_type: str = "any",
    count: Optional[int] = None,
    prioritize_expiring: bool = True,
    selected: Optional[str] = None,
) -> list[RecipeScoreResult]:
    """Recommend recipes for a pantry file and print them.

    Args:
        path: Pantry JSON file.
        debug: If True, also print the full results as JSON.
        meal_type: Preferred meal type.
        count: Number of recipes to show; defaults to the configured count.
        prioritize_expiring: Weight soon-to-expire items more heavily.
        selected: Comma-separated ingredient names to cook with.

    Returns:
        The ranked results that were printed.
    """
    try:
        pantry = load_pantry(path)
        logger.info(f"Loaded {len(pantry['inventory'])} inventory items and {len(pantry['recipes'])} recipes")

        results = recommend(
            pantry["inventory"],
            pantry["recipes"],
            options={
                "meal_type": meal_type,
                "prioritize_expiring": prioritize_expiring,
                "selected_ingredient_names": selected,
            },
            count=count,
        )
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        sys.exit(1)

    console.print()

    if debug:
        console.print("[bold cyan]Debug Mode: Full Results[/bold cyan]")
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print_json(data=[result.model_dump() for result in results])
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print()

    if results:
        console.print(render_results(results))
    else:
        console.print("[yellow]No recipes to recommend[/yellow]")
    return results


def parse_args(argv: list[str]) -> dict[str, Any]:
    """Parse command-line flags in the order they appear.

    Raises:
        ValueError: On an unknown flag, a missing flag value or a missing path.
    """
    args: dict[str, Any] = {
        "debug": False,
        "meal_type": "any",
        "count": None,
        "prioritize_expiring": True,
        "selected": None,
    }
    position = 0

    def flag_value(flag: str) -> str:
        if position + 1 >= len(argv):
            raise ValueError(f"{flag} flag requires a value")
        return argv[position + 1]

    while position < len(argv) and argv[position].startswith("--"):
        flag = argv[position]
        if flag == "--debug":
            args["debug"] = True
            position += 1
        elif flag == "--no-expiry-priority":
            args["prioritize_expiring"] = False
            position += 1
        elif flag == "--meal-type":
            meal_type = flag_value(flag).lower()
            if meal_type not in MEAL_TYPES:
                raise ValueError(f"--meal-type must be one of {', '.join(MEAL_TYPES)}")
            args["meal_type"] = meal_type
            position += 2
        elif flag == "--count":
            value = flag_value(flag)
            if not value.lstrip("-").isdigit():
                raise ValueError(f"--count must be an integer, got: {value}")
            args["count"] = int(value)
            position += 2
        elif flag == "--select":
            args["selected"] = flag_value(flag)
            position += 2
        else:
            raise ValueError(f"Unknown flag: {flag}")

    if position >= len(argv):
        raise ValueError("No pantry file provided")
    args["path"] = argv[position]
    return args


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        print("")
        print("Examples:")
        print("  python query.py data/sample_pantry.json")
        print("  python query.py --meal-type breakfast --count 2 data/sample_pantry.json")
        print("  python query.py --select \"spinach,eggs\" --debug data/sample_pantry.json")
        sys.exit(1)

    try:
        parsed = parse_args(sys.argv[1:])
    except ValueError as e:
        print(f"Error: {e}")
        print(USAGE)
        sys.exit(1)

    path = parsed.pop("path")
    run_query(path, **parsed)
