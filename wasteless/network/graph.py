"""Flow network types.

Vertices live in an arena (a list indexed by int) and each vertex keeps the
indices of its outgoing edges. Edges form a small class hierarchy, one subclass
per role, so the scorer can pick out the fields of the edges it cares about.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Literal, Optional, Type, TypeVar

from wasteless.models.models import Recipe


VertexKind = Literal["source", "sink", "ingredient", "recipe", "nutrition", "balanced_meal"]

SOURCE_KEY = "source"
SINK_KEY = "sink"


@dataclass
class Vertex:
    index: int
    kind: VertexKind
    key: str
    label: str = ""


@dataclass
class Edge:
    tail: int
    head: int
    capacity: float
    flow: float = 0.0

    role: ClassVar[str] = "edge"


@dataclass
class SourceToIngredientEdge(Edge):
    """Supply of one inventory ingredient."""

    expiry_weight: float = 1.0
    normalized_quantity: float = 0.0
    days_until_expiry: int = 999

    role: ClassVar[str] = "source_ingredient"


@dataclass
class IngredientToRecipeEdge(Edge):
    """An inventory ingredient accepted as one of a recipe's ingredients."""

    adjusted_weight: float = 0.0
    match_quality: float = 0.0
    matched_name: str = ""
    match_type: str = "none"
    quantity: float = 0.0
    unit: str = "unit"
    quantity_factor: float = 1.0

    role: ClassVar[str] = "ingredient_recipe"


@dataclass
class RecipeToSinkEdge(Edge):
    """Demand of one recipe, carrying its coverage and importance."""

    matched_count: int = 0
    total_ingredients: int = 0
    coverage_ratio: float = 0.0
    meal_type_boost: float = 1.0
    importance: float = 0.0
    matched_ingredients: list[str] = field(default_factory=list)
    staple_ingredients: list[str] = field(default_factory=list)
    balanced_meal_boost: float = 1.0

    role: ClassVar[str] = "recipe_sink"


@dataclass
class NutritionLinkEdge(Edge):
    """Advisory link between a nutrition category and a recipe."""

    category: str = ""
    keyword_matches: int = 0
    nutrition_boost: float = 1.0

    role: ClassVar[str] = "nutrition_link"


@dataclass
class BalancedMealLinkEdge(Edge):
    """Advisory link from the balanced-meal vertex to a recipe covering several categories."""

    categories_present: list[str] = field(default_factory=list)
    balanced_meal_boost: float = 1.0

    role: ClassVar[str] = "balanced_meal_link"


EdgeT = TypeVar("EdgeT", bound=Edge)


class FlowNetwork:
    """Directed flow network with a fixed source and sink.

    Args:
        preferred_meal_type: Meal type the network was built for.
    """

    def __init__(self, preferred_meal_type: str = "any") -> None:
        self.preferred_meal_type = preferred_meal_type
        self.vertices: list[Vertex] = []
        self.edges: list[Edge] = []
        self.adjacency: list[list[int]] = []
        self.recipes: list[Recipe] = []
        self._vertex_index: dict[tuple[str, str], int] = {}
        self._edge_index: dict[tuple[int, int], int] = {}

        self.source = self.add_vertex("source", SOURCE_KEY, "Source")
        self.sink = self.add_vertex("sink", SINK_KEY, "Sink")

    def add_vertex(self, kind: VertexKind, key: str, label: str = "") -> int:
        """Add a vertex and return its index.

        Raises:
            ValueError: If a vertex of the same kind and key exists.
        """
        if (kind, key) in self._vertex_index:
            raise ValueError(f"Duplicate {kind} vertex: {key}")
        index = len(self.vertices)
        self.vertices.append(Vertex(index=index, kind=kind, key=key, label=label or key))
        self.adjacency.append([])
        self._vertex_index[(kind, key)] = index
        return index

    def vertex(self, kind: VertexKind, key: str) -> Optional[int]:
        """Index of the vertex with this kind and key, or None."""
        return self._vertex_index.get((kind, key))

    def add_edge(self, edge: Edge) -> Edge:
        """Add an edge between two existing vertices.

        Raises:
            ValueError: On an unknown endpoint, a negative capacity or a second
                edge between the same two vertices.
        """
        for endpoint in (edge.tail, edge.head):
            if not 0 <= endpoint < len(self.vertices):
                raise ValueError(f"Edge endpoint {endpoint} is not a vertex")
        if edge.capacity < 0:
            raise ValueError(f"Negative capacity on edge {edge.tail}->{edge.head}")
        if (edge.tail, edge.head) in self._edge_index:
            raise ValueError(f"Duplicate edge {edge.tail}->{edge.head}")

        self._edge_index[(edge.tail, edge.head)] = len(self.edges)
        self.adjacency[edge.tail].append(len(self.edges))
        self.edges.append(edge)
        return edge

    def edge_between(self, tail: int, head: int) -> Optional[Edge]:
        index = self._edge_index.get((tail, head))
        return None if index is None else self.edges[index]

    def out_edges(self, vertex: int) -> Iterator[Edge]:
        for index in self.adjacency[vertex]:
            yield self.edges[index]

    def edges_of_role(self, edge_type: Type[EdgeT]) -> list[EdgeT]:
        return [edge for edge in self.edges if isinstance(edge, edge_type)]

    def recipe_vertex(self, recipe_id: str) -> Optional[int]:
        return self.vertex("recipe", recipe_id)

    def ingredient_vertex(self, ingredient_id: str) -> Optional[int]:
        return self.vertex("ingredient", ingredient_id)

    def __repr__(self) -> str:
        return f"FlowNetwork(vertices={len(self.vertices)}, edges={len(self.edges)})"
