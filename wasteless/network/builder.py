"""Builds the recommendation flow network.

Layout::

    source -> ingredient -> recipe -> sink
    nutrition(category) -> recipe        (advisory)
    balanced_meal -> recipe              (advisory)

Source edges carry how much of each inventory item there is, ingredient-recipe
edges exist only for accepted matches, and each recipe-sink edge records the
recipe's coverage and importance for the scorer.
"""

import logging
import math
from typing import Optional

from wasteless.matching.matcher import (
    EDGE_QUALITY_THRESHOLD,
    IngredientMatcher,
    default_matcher,
    is_common_ingredient,
)
from wasteless.matching.vocabulary import NUTRITION_KEYWORDS
from wasteless.models.models import Recipe, WeightedIngredient
from wasteless.network.graph import (
    BalancedMealLinkEdge,
    FlowNetwork,
    IngredientToRecipeEdge,
    NutritionLinkEdge,
    RecipeToSinkEdge,
    SourceToIngredientEdge,
)
from wasteless.utils.config import config
from wasteless.utils.logger import logger as default_logger


PREFERRED_MEAL_BOOST = 2.5
ANY_MEAL_BOOST = 1.2
MISMATCHED_MEAL_BOOST = 0.8

EXPIRING_FACTOR = 5.0

# unit -> multiplier into grams/millilitres
_UNIT_FACTORS = {
    "kg": 1000.0,
    "kilo": 1000.0,
    "l": 1000.0,
    "liter": 1000.0,
    "tbsp": 15.0,
    "tsp": 5.0,
    "cup": 240.0,
}


def normalize_quantity(quantity: float, unit: str) -> float:
    """Convert a quantity into grams or millilitres where the unit allows it."""
    return quantity * _UNIT_FACTORS.get((unit or "").strip().lower(), 1.0)


def expiry_factor(days_until_expiry: int) -> float:
    """Flat boost for items inside the expiry window."""
    return EXPIRING_FACTOR if days_until_expiry <= config.EXPIRY_WINDOW_DAYS else 1.0


def quantity_factor(normalized_quantity: float) -> float:
    return min(3.0, math.log10(normalized_quantity + 1) + 1)


def meal_type_boost(recipe_meal_type: str, preferred_meal_type: str) -> float:
    """Boost of a recipe given the requested meal type.

    With no preference every recipe gets the weak "any" boost.
    """
    if preferred_meal_type == "any":
        return ANY_MEAL_BOOST
    if recipe_meal_type == preferred_meal_type:
        return PREFERRED_MEAL_BOOST
    if recipe_meal_type == "any":
        return ANY_MEAL_BOOST
    return MISMATCHED_MEAL_BOOST


def ingredient_weight(
    base_weight: float,
    expiry: float,
    match_quality: float,
    meal_boost: float,
    quantity: float,
) -> float:
    """Weight of an ingredient-recipe edge."""
    weight = base_weight * 0.2 + expiry * 0.45 + match_quality * 0.15 + meal_boost * 0.2 * quantity
    if match_quality >= 0.9:
        weight *= 1.2
    return weight


def filter_recipes_by_meal_type(recipes: list[Recipe], preferred_meal_type: str) -> list[Recipe]:
    """Keep recipes for the preferred meal plus those suitable for any meal."""
    if preferred_meal_type == "any":
        return list(recipes)
    return [recipe for recipe in recipes if recipe.meal_type in (preferred_meal_type, "any")]


class FlowNetworkBuilder:
    """Turns weighted inventory and a recipe corpus into a FlowNetwork.

    Args:
        matcher: Ingredient matcher; defaults to the shared memoized one.
        logger: Logger for build decisions.
    """

    def __init__(self, matcher: Optional[IngredientMatcher] = None, logger: Optional[logging.Logger] = None) -> None:
        self.matcher = matcher or default_matcher
        self.logger = logger or default_logger

    def build(
        self,
        weighted_ingredients: list[WeightedIngredient],
        recipes: list[Recipe],
        preferred_meal_type: str = "any",
    ) -> FlowNetwork:
        """Build the network for one request.

        Args:
            weighted_ingredients: Available inventory with request weights.
            recipes: Recipe corpus.
            preferred_meal_type: Requested meal type, or "any".

        Returns:
            FlowNetwork; valid (source and sink only) for empty inputs.

        Raises:
            ValueError: If two weighted ingredients share an id.
        """
        network = FlowNetwork(preferred_meal_type)

        for recipe in filter_recipes_by_meal_type(recipes, preferred_meal_type):
            if network.recipe_vertex(recipe.id) is not None:
                self.logger.warning(f"Skipping duplicate recipe id {recipe.id} ('{recipe.title}')")
                continue
            network.add_vertex("recipe", recipe.id, recipe.title)
            network.recipes.append(recipe)

        for ingredient in weighted_ingredients:
            self._add_ingredient(network, ingredient)

        for recipe in network.recipes:
            self._connect_recipe(network, recipe, weighted_ingredients)

        self._add_nutrition_vertices(network)

        self.logger.debug(
            f"Built {network!r} for {len(weighted_ingredients)} ingredients, "
            f"{len(network.recipes)}/{len(recipes)} recipes (meal type '{preferred_meal_type}')"
        )
        return network

    def _add_ingredient(self, network: FlowNetwork, ingredient: WeightedIngredient) -> None:
        vertex = network.add_vertex("ingredient", ingredient.id, ingredient.name)
        normalized = normalize_quantity(ingredient.quantity, ingredient.unit)
        network.add_edge(
            SourceToIngredientEdge(
                tail=network.source,
                head=vertex,
                capacity=normalized,
                expiry_weight=ingredient.weight * expiry_factor(ingredient.days_until_expiry),
                normalized_quantity=normalized,
                days_until_expiry=ingredient.days_until_expiry,
            )
        )

    def _connect_recipe(self, network: FlowNetwork, recipe: Recipe, weighted_ingredients: list[WeightedIngredient]) -> None:
        recipe_vertex = network.recipe_vertex(recipe.id)
        boost = meal_type_boost(recipe.meal_type, network.preferred_meal_type)
        staples = [line for line in dict.fromkeys(recipe.ingredients) if is_common_ingredient(line)]

        matched: list[tuple[WeightedIngredient, IngredientToRecipeEdge]] = []
        for ingredient in weighted_ingredients:
            match = self.matcher.find_best_match(ingredient.name, recipe.ingredients, allow_common=False)
            if match.matched_name is None or match.quality < EDGE_QUALITY_THRESHOLD:
                continue

            normalized = normalize_quantity(ingredient.quantity, ingredient.unit)
            factor = quantity_factor(normalized)
            edge = network.add_edge(
                IngredientToRecipeEdge(
                    tail=network.ingredient_vertex(ingredient.id),
                    head=recipe_vertex,
                    capacity=normalized,
                    adjusted_weight=ingredient_weight(
                        ingredient.weight,
                        expiry_factor(ingredient.days_until_expiry),
                        match.quality,
                        boost,
                        factor,
                    ),
                    match_quality=match.quality,
                    matched_name=match.matched_name,
                    match_type=match.match_type,
                    quantity=ingredient.quantity,
                    unit=ingredient.unit,
                    quantity_factor=factor,
                )
            )
            matched.append((ingredient, edge))

        total = len(recipe.ingredients) or 1
        coverage = min(1.0, len(matched) / total)
        network.add_edge(
            RecipeToSinkEdge(
                tail=recipe_vertex,
                head=network.sink,
                capacity=coverage * 100,
                matched_count=len(matched),
                total_ingredients=total,
                coverage_ratio=coverage,
                meal_type_boost=boost,
                importance=self._importance(matched, boost, total),
                matched_ingredients=[ingredient.name for ingredient, _ in matched],
                staple_ingredients=staples,
            )
        )

        if matched:
            self.logger.debug(f"Recipe '{recipe.title}': {len(matched)}/{total} ingredients matched")

    @staticmethod
    def _importance(
        matched: list[tuple[WeightedIngredient, IngredientToRecipeEdge]],
        boost: float,
        total: int,
    ) -> float:
        if not matched:
            return 0.1 * boost

        urgency = sum(
            edge.adjusted_weight * max(1, 10 - ingredient.days_until_expiry) / 10
            for ingredient, edge in matched
        ) / len(matched)
        average_quality = sum(edge.match_quality for _, edge in matched) / len(matched)
        return (urgency * 0.6 + len(matched) / total * 0.4) * boost * (0.8 + average_quality * 0.2)

    def _add_nutrition_vertices(self, network: FlowNetwork) -> None:
        categories_by_recipe: dict[str, list[str]] = {recipe.id: [] for recipe in network.recipes}

        for category, keywords in NUTRITION_KEYWORDS.items():
            category_vertex = network.add_vertex("nutrition", category)
            for recipe in network.recipes:
                count = sum(
                    1 for line in recipe.ingredients
                    if any(keyword in line.lower() for keyword in keywords)
                )
                if not count:
                    continue
                network.add_edge(
                    NutritionLinkEdge(
                        tail=category_vertex,
                        head=network.recipe_vertex(recipe.id),
                        capacity=count,
                        category=category,
                        keyword_matches=count,
                        nutrition_boost=min(1.5, 0.8 + count * 0.2),
                    )
                )
                categories_by_recipe[recipe.id].append(category)

        balanced_vertex = network.add_vertex("balanced_meal", "balanced_meal", "Balanced meal")
        for recipe in network.recipes:
            present = categories_by_recipe[recipe.id]
            if len(present) < 2:
                continue
            boost = 1.0 + len(present) * 0.2
            recipe_vertex = network.recipe_vertex(recipe.id)
            network.add_edge(
                BalancedMealLinkEdge(
                    tail=balanced_vertex,
                    head=recipe_vertex,
                    capacity=len(present),
                    categories_present=list(present),
                    balanced_meal_boost=boost,
                )
            )
            sink_edge = network.edge_between(recipe_vertex, network.sink)
            if isinstance(sink_edge, RecipeToSinkEdge):
                sink_edge.balanced_meal_boost = boost
                sink_edge.importance *= boost
            self.logger.debug(f"Recipe '{recipe.title}' covers {len(present)} nutrition categories")
