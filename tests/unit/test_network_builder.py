"""Unit tests for flow network construction."""

from unittest.mock import MagicMock

import pytest

from wasteless.matching.matcher import IngredientMatcher
from wasteless.models.models import Recipe, WeightedIngredient
from wasteless.network.builder import (
    FlowNetworkBuilder,
    expiry_factor,
    filter_recipes_by_meal_type,
    ingredient_weight,
    meal_type_boost,
    normalize_quantity,
    quantity_factor,
)
from wasteless.network.graph import (
    BalancedMealLinkEdge,
    IngredientToRecipeEdge,
    NutritionLinkEdge,
    RecipeToSinkEdge,
    SourceToIngredientEdge,
)


@pytest.fixture
def weighted():
    return [
        WeightedIngredient(id="m", name="milk", weight=3.0, days_until_expiry=2, quantity=1, unit="l"),
        WeightedIngredient(id="e", name="egg", weight=1.0, days_until_expiry=999, quantity=6),
    ]


@pytest.fixture
def recipes():
    return [
        Recipe(id="r1", title="Pancakes", ingredients=["milk", "egg", "flour", "water"], meal_type="breakfast"),
        Recipe(id="r2", title="Beef Rice", ingredients=["beef", "rice"], meal_type="dinner"),
        Recipe(id="r3", title="Boiled Egg", ingredients=["egg"], meal_type="any"),
        Recipe(id="r4", title="Tofu Bowl", ingredients=["tofu"], meal_type="any"),
    ]


@pytest.fixture
def builder():
    return FlowNetworkBuilder(matcher=IngredientMatcher(cache_size=0), logger=MagicMock())


def sink_edge(network, recipe_id):
    return network.edge_between(network.recipe_vertex(recipe_id), network.sink)


class TestHelpers:
    """Test the numeric helpers."""

    def test_normalize_quantity(self):
        assert normalize_quantity(2, "kg") == 2000
        assert normalize_quantity(1.5, "L") == 1500
        assert normalize_quantity(2, "tbsp") == 30
        assert normalize_quantity(3, "tsp") == 15
        assert normalize_quantity(1, "cup") == 240
        assert normalize_quantity(4, "piece") == 4

    def test_expiry_factor(self):
        assert expiry_factor(-1) == 5.0
        assert expiry_factor(7) == 5.0
        assert expiry_factor(8) == 1.0

    def test_quantity_factor_capped(self):
        assert quantity_factor(0) == pytest.approx(1.0)
        assert quantity_factor(9) == pytest.approx(2.0)
        assert quantity_factor(1_000_000) == 3.0

    def test_meal_type_boost(self):
        assert meal_type_boost("breakfast", "breakfast") == 2.5
        assert meal_type_boost("any", "breakfast") == 1.2
        assert meal_type_boost("dinner", "breakfast") == 0.8
        assert meal_type_boost("dinner", "any") == 1.2

    def test_ingredient_weight_high_quality_bonus(self):
        assert ingredient_weight(1, 1, 1.0, 1, 1) == pytest.approx(1.2)
        assert ingredient_weight(1, 1, 0.8, 1, 1) == pytest.approx(0.97)

    def test_filter_recipes_by_meal_type(self, recipes):
        assert [r.id for r in filter_recipes_by_meal_type(recipes, "breakfast")] == ["r1", "r3", "r4"]
        assert len(filter_recipes_by_meal_type(recipes, "any")) == 4


class TestBuild:
    """Test FlowNetworkBuilder.build()."""

    def test_meal_type_filter(self, builder, weighted, recipes):
        network = builder.build(weighted, recipes, "breakfast")

        assert [r.id for r in network.recipes] == ["r1", "r3", "r4"]
        assert network.recipe_vertex("r2") is None

    def test_source_edges_use_normalized_quantity(self, builder, weighted, recipes):
        network = builder.build(weighted, recipes, "breakfast")
        milk = network.edge_between(network.source, network.ingredient_vertex("m"))

        assert isinstance(milk, SourceToIngredientEdge)
        assert milk.capacity == 1000
        assert milk.expiry_weight == pytest.approx(15.0)
        assert milk.days_until_expiry == 2

    def test_ingredient_edges_only_for_matches(self, builder, weighted, recipes):
        network = builder.build(weighted, recipes, "breakfast")
        edges = network.edges_of_role(IngredientToRecipeEdge)
        pairs = {(network.vertices[e.tail].key, network.vertices[e.head].key) for e in edges}

        assert pairs == {("m", "r1"), ("e", "r1"), ("e", "r3")}
        assert all(e.match_quality >= 0.70 for e in edges)

    def test_ingredient_edge_weight(self, builder, weighted, recipes):
        network = builder.build(weighted, recipes, "breakfast")
        edge = network.edge_between(network.ingredient_vertex("m"), network.recipe_vertex("r1"))

        assert edge.matched_name == "milk"
        assert edge.match_type == "exact"
        assert edge.quantity_factor == 3.0
        assert edge.adjusted_weight == pytest.approx(5.4)

    def test_staples_recorded_without_edges(self, builder, weighted, recipes):
        network = builder.build(weighted, recipes, "breakfast")

        assert sink_edge(network, "r1").staple_ingredients == ["water"]
        assert all(e.matched_name != "water" for e in network.edges_of_role(IngredientToRecipeEdge))

    def test_sink_edge_coverage(self, builder, weighted, recipes):
        network = builder.build(weighted, recipes, "breakfast")
        edge = sink_edge(network, "r1")

        assert isinstance(edge, RecipeToSinkEdge)
        assert edge.matched_count == 2
        assert edge.total_ingredients == 4
        assert edge.coverage_ratio == pytest.approx(0.5)
        assert edge.capacity == pytest.approx(50)
        assert edge.meal_type_boost == 2.5
        assert edge.matched_ingredients == ["milk", "egg"]

    def test_unmatched_recipe_importance(self, builder, weighted, recipes):
        network = builder.build(weighted, recipes, "breakfast")
        edge = sink_edge(network, "r4")

        assert edge.matched_count == 0
        assert edge.capacity == 0
        assert edge.importance == pytest.approx(0.12)

    def test_nutrition_links(self, builder, weighted, recipes):
        network = builder.build(weighted, recipes, "breakfast")
        r1 = network.recipe_vertex("r1")
        categories = {
            e.category for e in network.edges_of_role(NutritionLinkEdge) if e.head == r1
        }

        assert categories == {"protein", "grains", "dairy"}

    def test_balanced_meal_boost(self, builder, weighted, recipes):
        network = builder.build(weighted, recipes, "breakfast")
        balanced = network.edges_of_role(BalancedMealLinkEdge)

        assert [network.vertices[e.head].key for e in balanced] == ["r1"]
        assert balanced[0].balanced_meal_boost == pytest.approx(1.6)
        assert sink_edge(network, "r1").balanced_meal_boost == pytest.approx(1.6)
        assert sink_edge(network, "r3").balanced_meal_boost == 1.0

    def test_empty_inputs_give_valid_network(self, builder):
        network = builder.build([], [], "any")

        assert network.recipes == []
        assert network.edges == []
        assert network.vertices[network.source].kind == "source"

    def test_duplicate_recipe_ids_skipped(self, weighted):
        logger = MagicMock()
        builder = FlowNetworkBuilder(matcher=IngredientMatcher(cache_size=0), logger=logger)
        recipes = [
            Recipe(id="r1", title="Pancakes", ingredients=["milk"]),
            Recipe(id="r1", title="Pancakes again", ingredients=["egg"]),
        ]

        network = builder.build(weighted, recipes, "any")

        assert [r.title for r in network.recipes] == ["Pancakes"]
        logger.warning.assert_called_once()

    def test_compound_line_gets_no_edge(self, builder):
        weighted = [WeightedIngredient(id="b", name="butter", weight=1.0, days_until_expiry=3)]
        recipes = [Recipe(id="c", title="Cookies", ingredients=["flavored butter cookies"])]

        network = builder.build(weighted, recipes, "any")

        assert network.edges_of_role(IngredientToRecipeEdge) == []
