"""Lookups of a single recipe ingredient against the user's inventory.

Used when rendering a recipe: which lines the user already owns, and which
inventory item stands for each of them. Only ``available`` items count.
"""

from typing import Any, Iterable, Optional

from wasteless.matching.matcher import (
    EDGE_QUALITY_THRESHOLD,
    IngredientMatcher,
    default_matcher,
    is_common_ingredient,
)
from wasteless.models.models import IngredientMatch, InventoryIngredient, InventoryLookup


def available_items(inventory: Optional[Iterable[InventoryIngredient | dict[str, Any]]]) -> list[InventoryIngredient]:
    """Validate inventory records and keep the available ones."""
    if not inventory:
        return []
    items = [InventoryIngredient.model_validate(item) for item in inventory]
    return [item for item in items if item.status == "available"]


def _best_inventory_match(
    recipe_ingredient: str,
    items: list[InventoryIngredient],
    matcher: IngredientMatcher,
) -> IngredientMatch:
    return matcher.find_best_match(recipe_ingredient, [item.name for item in items], allow_common=False)


def get_match_quality(
    recipe_ingredient: str,
    inventory: Optional[Iterable[InventoryIngredient | dict[str, Any]]],
    matcher: Optional[IngredientMatcher] = None,
) -> float:
    """Quality of the best available inventory match for a recipe line.

    Staples (water, ice) always score 1.0.
    """
    if is_common_ingredient(recipe_ingredient):
        return 1.0
    items = available_items(inventory)
    if not items:
        return 0.0
    return _best_inventory_match(recipe_ingredient, items, matcher or default_matcher).quality


def is_ingredient_in_inventory(
    recipe_ingredient: str,
    inventory: Optional[Iterable[InventoryIngredient | dict[str, Any]]],
    matcher: Optional[IngredientMatcher] = None,
) -> bool:
    """Whether the user owns something that counts as this recipe line."""
    return get_match_quality(recipe_ingredient, inventory, matcher) >= EDGE_QUALITY_THRESHOLD


def get_ingredient_details(
    recipe_ingredient: str,
    inventory: Optional[Iterable[InventoryIngredient | dict[str, Any]]],
    matcher: Optional[IngredientMatcher] = None,
) -> Optional[InventoryLookup]:
    """Return the available inventory item that stands for a recipe line.

    Args:
        recipe_ingredient: Ingredient line from a recipe.
        inventory: Inventory items as models or plain dicts.
        matcher: Matcher to use; defaults to the shared one.

    Returns:
        InventoryLookup with the item and match grade, or None when nothing in
        the inventory matches well enough. Staples have no backing item and
        also return None.
    """
    items = available_items(inventory)
    if not items:
        return None

    match = _best_inventory_match(recipe_ingredient, items, matcher or default_matcher)
    if match.matched_name is None or match.quality < EDGE_QUALITY_THRESHOLD:
        return None

    for item in items:
        if item.name == match.matched_name:
            return InventoryLookup(ingredient=item, match=match)
    return None
