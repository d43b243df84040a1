"""Recipe scoring and ranking.

Scores are integers in [0, 100]. The number of ingredients the user would have
to buy sets a base tier; coverage, match quality, expiring items, meal type and
recipe size then adjust it by a few points.
"""

import logging
from typing import Optional

from wasteless.matching.matcher import EDGE_QUALITY_THRESHOLD, is_common_ingredient
from wasteless.matching.normalizer import normalize
from wasteless.models.models import Recipe, RecipeScoreResult, WeightedIngredient
from wasteless.network.graph import FlowNetwork, IngredientToRecipeEdge, RecipeToSinkEdge
from wasteless.utils.config import config
from wasteless.utils.logger import logger as default_logger


NO_MATCH_PREFERRED_SCORE = 3
NO_MATCH_SCORE = 1
FALLBACK_PREFERRED_SCORE = 2
FALLBACK_SCORE = 1


def missing_tier_base(missing: int, coverage: float) -> float:
    """Base score for a recipe missing ``missing`` ingredients.

    Never increases with ``missing`` for a given coverage.
    """
    if missing <= 0:
        return 90.0
    if missing == 1:
        return 80.0 + coverage * 7
    if missing == 2:
        return 65.0 + coverage * 10
    if missing == 3:
        return 45.0 + coverage * 10
    if missing <= 5:
        return 25.0 + coverage * 15
    return 5.0 + coverage * 20


def coverage_bonus(coverage: float) -> float:
    if coverage >= 0.9:
        return 8.0
    if coverage >= 0.8:
        return 5.0
    if coverage >= 0.7:
        return 3.0
    return 0.0


def shopping_bonus(missing: int) -> float:
    return {0: 10.0, 1: 8.0, 2: 5.0, 3: 2.0}.get(missing, 0.0)


def quality_adjustment(average_quality: float) -> float:
    return max(-3.0, min(3.0, (average_quality - 0.7) * 10))


def meal_type_bonus(recipe_meal_type: str, preferred_meal_type: str) -> float:
    if preferred_meal_type != "any" and recipe_meal_type == preferred_meal_type:
        return 4.0
    if preferred_meal_type == "any" or recipe_meal_type == "any":
        return 2.0
    return 0.0


def size_bonus(total_ingredients: int) -> float:
    if total_ingredients <= 4:
        return 2.0
    if total_ingredients <= 6:
        return 1.0
    return 0.0


def _distinct_lines(recipe: Recipe) -> dict[str, str]:
    """normalized line -> first original spelling, in recipe order."""
    lines: dict[str, str] = {}
    for line in recipe.ingredients:
        normalized = normalize(line)
        if normalized and normalized not in lines:
            lines[normalized] = line
    return lines


def fallback_results(recipes: list[Recipe], preferred_meal_type: str, count: int) -> list[RecipeScoreResult]:
    """Minimal ranking used when scoring fails: matching meal type first, corpus order otherwise.

    Recipes of the preferred meal type move ahead before truncation to ``count``,
    so a preferred recipe late in the corpus can displace earlier ones.
    """
    results = []
    for recipe in recipes:
        preferred = preferred_meal_type != "any" and recipe.meal_type == preferred_meal_type
        results.append(
            RecipeScoreResult(
                id=recipe.id,
                title=recipe.title,
                score=FALLBACK_PREFERRED_SCORE if preferred else FALLBACK_SCORE,
                meal_type=recipe.meal_type,
                missed_ingredients=list(_distinct_lines(recipe).values()),
                total_ingredients=len(recipe.ingredients),
                instructions=recipe.instructions,
                image=recipe.image,
            )
        )
    results.sort(key=lambda result: -result.score)
    return results[:max(count, 1)]


class RecipeScorer:
    """Ranks the recipes of a solved flow network.

    Args:
        logger: Logger for per-recipe score details.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or default_logger

    def rank(
        self,
        network: FlowNetwork,
        weighted_ingredients: list[WeightedIngredient],
        recipes: list[Recipe],
        count: int,
    ) -> list[RecipeScoreResult]:
        """Score every recipe present in the network and return the best ``count``.

        Recipes filtered out of the network (other meal types) are not scored.
        Any error while scoring is logged and answered with fallback_results().
        """
        count = max(count, 1)
        try:
            return self._rank(network, weighted_ingredients, recipes, count)
        except Exception as e:
            self.logger.error(f"Recipe scoring failed, using fallback ranking: {e}", exc_info=True)
            candidates = [recipe for recipe in recipes if network.recipe_vertex(recipe.id) is not None]
            return fallback_results(candidates, network.preferred_meal_type, count)

    def _rank(
        self,
        network: FlowNetwork,
        weighted_ingredients: list[WeightedIngredient],
        recipes: list[Recipe],
        count: int,
    ) -> list[RecipeScoreResult]:
        ingredients_by_id = {ingredient.id: ingredient for ingredient in weighted_ingredients}
        edges_by_recipe: dict[int, list[IngredientToRecipeEdge]] = {}
        for edge in network.edges_of_role(IngredientToRecipeEdge):
            edges_by_recipe.setdefault(edge.head, []).append(edge)

        scored: list[tuple[RecipeScoreResult, float]] = []
        seen: set[str] = set()
        for recipe in recipes:
            vertex = network.recipe_vertex(recipe.id)
            if vertex is None or recipe.id in seen:
                continue
            seen.add(recipe.id)

            sink_edge = network.edge_between(vertex, network.sink)
            importance = sink_edge.importance if isinstance(sink_edge, RecipeToSinkEdge) else 0.0
            result = self.score_recipe(
                recipe,
                edges_by_recipe.get(vertex, []),
                network,
                ingredients_by_id,
            )
            scored.append((result, importance))

        scored.sort(key=lambda item: (-item[0].score, -item[0].coverage, -item[1], item[0].id))
        ranked = [result for result, _ in scored[:count]]

        self.logger.debug(
            f"Ranked {len(scored)} recipes: "
            + ", ".join(f"{result.title}={result.score}" for result in ranked)
        )
        return ranked

    def score_recipe(
        self,
        recipe: Recipe,
        edges: list[IngredientToRecipeEdge],
        network: FlowNetwork,
        ingredients_by_id: dict[str, WeightedIngredient],
    ) -> RecipeScoreResult:
        """Score one recipe from its incoming ingredient edges."""
        preferred = network.preferred_meal_type

        used: dict[str, WeightedIngredient] = {}
        matched_lines: set[str] = set()
        qualities: list[float] = []
        for edge in edges:
            if edge.flow <= 0 and edge.match_quality < EDGE_QUALITY_THRESHOLD:
                continue
            ingredient = ingredients_by_id.get(network.vertices[edge.tail].key)
            if ingredient is None or ingredient.id in used:
                continue
            used[ingredient.id] = ingredient
            matched_lines.add(normalize(edge.matched_name))
            qualities.append(edge.match_quality)

        lines = _distinct_lines(recipe)
        missed = [
            line for normalized, line in lines.items()
            if normalized not in matched_lines and not is_common_ingredient(line)
        ]
        coverage = (len(lines) - len(missed)) / len(lines) if lines else 0.0
        expiring = sum(
            1 for ingredient in used.values()
            if ingredient.days_until_expiry <= config.EXPIRY_WINDOW_DAYS
        )

        if not used:
            score = NO_MATCH_PREFERRED_SCORE if preferred != "any" and recipe.meal_type == preferred else NO_MATCH_SCORE
        else:
            average_quality = sum(qualities) / len(qualities)
            raw = (
                missing_tier_base(len(missed), coverage)
                + coverage_bonus(coverage)
                + shopping_bonus(len(missed))
                + quality_adjustment(average_quality)
                + 10.0 * expiring / len(used)
                + meal_type_bonus(recipe.meal_type, preferred)
                + size_bonus(len(recipe.ingredients))
            )
            score = round(max(0.0, min(100.0, raw)))

        self.logger.debug(
            f"Scored '{recipe.title}': {score} "
            f"(used {len(used)}, missing {len(missed)}, coverage {coverage:.0%})",
            extra={"recipe_id": recipe.id},
        )
        return RecipeScoreResult(
            id=recipe.id,
            title=recipe.title,
            score=score,
            meal_type=recipe.meal_type,
            used_ingredients=[ingredient.name for ingredient in used.values()],
            used_ingredient_ids=list(used),
            missed_ingredients=missed,
            match_count=len(used),
            total_ingredients=len(recipe.ingredients),
            expiring_ingredient_count=expiring,
            coverage=round(coverage, 4),
            instructions=recipe.instructions,
            image=recipe.image,
        )
