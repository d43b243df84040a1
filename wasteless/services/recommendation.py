"""Recipe recommendation entry point.

Pipeline for one request:
1. Validate inventory, recipes and options (models or plain dicts)
2. Weight the available inventory by expiry and selection
3. Build the flow network (ingredient matching happens here)
4. Solve max flow
5. Score and rank the recipes

Malformed input raises before any work starts. Failures inside steps 3-5 are
logged and answered with a fallback ranking, so a request with valid input
always gets a list back.
"""

import logging
from datetime import date
from typing import Any, Iterable, Optional

from wasteless.matching.matcher import IngredientMatcher
from wasteless.models.models import (
    InventoryIngredient,
    Recipe,
    RecipeScoreResult,
    RecommendationOptions,
    WeightedIngredient,
)
from wasteless.network.builder import FlowNetworkBuilder, filter_recipes_by_meal_type
from wasteless.network.max_flow import EdmondsKarpSolver
from wasteless.scoring.scorer import RecipeScorer, fallback_results
from wasteless.utils.config import config
from wasteless.utils.logger import logger as default_logger


# Expiry multipliers with and without expiry prioritization
PRIORITIZED_EXPIRY_MULTIPLIER = 3.0
DEFAULT_EXPIRY_MULTIPLIER = 1.5
SELECTED_INGREDIENT_BOOST = 2.0


def is_selected(name: str, selected_names: Optional[list[str]]) -> bool:
    """Case-insensitive substring match in either direction."""
    if not selected_names:
        return False
    lowered = name.lower()
    return any(
        selected.lower() in lowered or lowered in selected.lower()
        for selected in selected_names
    )


def ingredient_weight(days: int, about_to_expire: bool, prioritize_expiring: bool) -> float:
    """Selection weight of an inventory item from its expiry."""
    multiplier = PRIORITIZED_EXPIRY_MULTIPLIER if prioritize_expiring else DEFAULT_EXPIRY_MULTIPLIER
    if about_to_expire:
        return 3.0 * multiplier
    if days <= 0:
        return 5.0 * multiplier
    if days <= 3:
        return 4.0 * multiplier
    if days <= 7:
        return 2.0 * multiplier
    return 1.0


def to_weighted_ingredients(
    inventory: list[InventoryIngredient],
    options: RecommendationOptions,
    as_of: Optional[date] = None,
    logger: Optional[logging.Logger] = None,
) -> list[WeightedIngredient]:
    """Weight available inventory items for one request.

    With a selection, only selected items are kept and their weight doubles.
    Items without a tracked expiry get ``config.NO_EXPIRY_DAYS``.
    """
    logger = logger or default_logger
    weighted: list[WeightedIngredient] = []
    seen: set[str] = set()

    for item in inventory:
        if item.status != "available":
            continue
        if item.id in seen:
            logger.warning(f"Skipping duplicate inventory id {item.id} ('{item.name}')")
            continue
        selected = is_selected(item.name, options.selected_ingredient_names)
        if options.selected_ingredient_names and not selected:
            continue
        seen.add(item.id)

        days = item.days_remaining(as_of)
        days = config.NO_EXPIRY_DAYS if days is None else max(days, -1)

        weight = ingredient_weight(days, item.about_to_expire, options.prioritize_expiring)
        if selected:
            weight *= SELECTED_INGREDIENT_BOOST

        weighted.append(
            WeightedIngredient(
                id=item.id,
                name=item.name,
                weight=weight,
                days_until_expiry=days,
                quantity=item.quantity,
                unit=item.unit,
            )
        )
    return weighted


def recommend(
    inventory: Optional[Iterable[InventoryIngredient | dict[str, Any]]],
    recipes: Optional[Iterable[Recipe | dict[str, Any]]],
    options: Optional[RecommendationOptions | dict[str, Any]] = None,
    count: Optional[int] = None,
    as_of: Optional[date] = None,
    logger: Optional[logging.Logger] = None,
    matcher: Optional[IngredientMatcher] = None,
) -> list[RecipeScoreResult]:
    """Recommend recipes that use the user's inventory, soonest-expiring first.

    Args:
        inventory: Inventory items as models or dicts; only available ones count.
        recipes: Recipe corpus as models or dicts.
        options: Meal type, expiry prioritization and ingredient selection.
        count: Number of results; defaults to ``config.DEFAULT_RECIPE_COUNT``,
            values below 1 are treated as 1.
        as_of: Reference date for ``expiry_date`` fields; defaults to today.
        logger: Logger for this request; defaults to the package logger.
        matcher: Ingredient matcher; defaults to the shared memoized one.

    Returns:
        Up to ``count`` recipes, best first. Empty when inventory or recipes are
        empty or None.

    Raises:
        pydantic.ValidationError: If a record or the options are malformed.
    """
    logger = logger or default_logger
    count = config.DEFAULT_RECIPE_COUNT if count is None else max(count, 1)

    items = [InventoryIngredient.model_validate(item) for item in inventory or ()]
    corpus = [Recipe.model_validate(recipe) for recipe in recipes or ()]
    options = RecommendationOptions.model_validate(options or {})

    context = {"meal_type": options.meal_type}
    available = [item for item in items if item.status == "available"]
    if not available or not corpus:
        logger.info("Nothing to recommend: inventory or recipe corpus is empty", extra=context)
        return []

    if len(corpus) > config.MAX_RECIPE_CORPUS:
        logger.warning(
            f"Recipe corpus truncated from {len(corpus)} to {config.MAX_RECIPE_CORPUS} recipes",
            extra=context,
        )
        corpus = corpus[:config.MAX_RECIPE_CORPUS]

    logger.info(
        f"Recommending {count} recipes from {len(corpus)} for {len(available)} ingredients "
        f"(meal type '{options.meal_type}', prioritize expiring: {options.prioritize_expiring})",
        extra=context,
    )

    try:
        weighted = to_weighted_ingredients(available, options, as_of, logger)
        network = FlowNetworkBuilder(matcher=matcher, logger=logger).build(weighted, corpus, options.meal_type)
        flow = EdmondsKarpSolver(logger=logger).solve(network, network.source, network.sink)
        results = RecipeScorer(logger=logger).rank(network, weighted, corpus, count)
    except Exception as e:
        logger.error(f"Recommendation failed, using fallback ranking: {e}", exc_info=True, extra=context)
        return fallback_results(filter_recipes_by_meal_type(corpus, options.meal_type), options.meal_type, count)

    logger.info(
        f"Returning {len(results)} recipes (max flow {flow.total_flow:.1f}, "
        f"{flow.augmenting_paths} augmenting paths)",
        extra=context,
    )
    return results
