"""Edmonds-Karp maximum flow over a FlowNetwork."""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional

from wasteless.network.graph import FlowNetwork
from wasteless.utils.config import config
from wasteless.utils.logger import logger as default_logger


EPSILON = 1e-9


@dataclass
class FlowResult:
    total_flow: float
    augmenting_paths: int
    path_limit_reached: bool = False


class EdmondsKarpSolver:
    """Breadth-first augmenting paths on a residual graph.

    Args:
        max_paths: Stop after this many augmentations. Reaching the limit
            leaves a valid, possibly non-maximal, flow.
        logger: Logger for solver progress.
    """

    def __init__(self, max_paths: Optional[int] = None, logger: Optional[logging.Logger] = None) -> None:
        self.max_paths = config.MAX_AUGMENTING_PATHS if max_paths is None else max_paths
        self.logger = logger or default_logger

    def solve(self, network: FlowNetwork, source: Optional[int] = None, sink: Optional[int] = None) -> FlowResult:
        """Compute a maximum flow and write it onto the network's edges.

        Args:
            network: Network to solve; edge ``flow`` fields are overwritten.
            source: Source vertex; defaults to the network's source.
            sink: Sink vertex; defaults to the network's sink.

        Returns:
            FlowResult with the total flow and the number of augmenting paths.
        """
        source = network.source if source is None else source
        sink = network.sink if sink is None else sink

        residual: dict[tuple[int, int], float] = {}
        neighbors: list[list[int]] = [[] for _ in network.vertices]
        for edge in network.edges:
            for u, v, capacity in ((edge.tail, edge.head, edge.capacity), (edge.head, edge.tail, 0.0)):
                if (u, v) not in residual:
                    residual[(u, v)] = 0.0
                    neighbors[u].append(v)
                residual[(u, v)] += capacity

        total_flow = 0.0
        paths = 0
        limit_reached = False

        while source != sink:
            parent = self._shortest_path(neighbors, residual, source, sink)
            if parent is None:
                break
            if paths >= self.max_paths:
                limit_reached = True
                self.logger.warning(f"Max-flow stopped after {paths} augmenting paths")
                break

            bottleneck = float("inf")
            v = sink
            while v != source:
                u = parent[v]
                bottleneck = min(bottleneck, residual[(u, v)])
                v = u

            v = sink
            while v != source:
                u = parent[v]
                residual[(u, v)] -= bottleneck
                residual[(v, u)] += bottleneck
                v = u

            total_flow += bottleneck
            paths += 1

        for edge in network.edges:
            remaining = residual[(edge.tail, edge.head)]
            edge.flow = min(edge.capacity, max(0.0, edge.capacity - remaining))

        self.logger.debug(f"Max flow {total_flow:.2f} after {paths} augmenting paths")
        return FlowResult(total_flow=total_flow, augmenting_paths=paths, path_limit_reached=limit_reached)

    @staticmethod
    def _shortest_path(
        neighbors: list[list[int]],
        residual: dict[tuple[int, int], float],
        source: int,
        sink: int,
    ) -> Optional[dict[int, int]]:
        """BFS for the shortest path with spare capacity; returns the parent map."""
        parent = {source: source}
        queue = deque([source])
        while queue:
            u = queue.popleft()
            for v in neighbors[u]:
                if v in parent or residual[(u, v)] <= EPSILON:
                    continue
                parent[v] = u
                if v == sink:
                    return parent
                queue.append(v)
        return None
