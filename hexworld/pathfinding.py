"""A* pathfinding over an axial hex grid.

The search knows nothing about worlds or tiles: callers plug in a
``terrain_cost(q, r)`` and an ``is_obstacle(q, r)`` callable.  A missing
path is reported as ``None`` rather than raised, whether the frontier ran
dry, an endpoint is blocked or the expansion cap was hit.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from .config import DEFAULT_CONFIG, DEFAULT_TERRAIN_COST, HexConfig
from .hexgrid import Coord, WorldPos, distance, hex_line, hex_to_world, neighbors6

logger = logging.getLogger(__name__)

TerrainCostFn = Callable[[int, int], float]
ObstacleFn = Callable[[int, int], bool]


def uniform_cost(q: int, r: int) -> float:
    return DEFAULT_TERRAIN_COST


def no_obstacles(q: int, r: int) -> bool:
    return False


@dataclass
class _Node:
    """Search state for one discovered cell; lives for a single query."""

    coord: Coord
    g: float
    h: float
    parent: Optional["_Node"] = field(default=None, repr=False)

    @property
    def f(self) -> float:
        return self.g + self.h


def reconstruct(node: _Node) -> List[Coord]:
    path = []
    current: Optional[_Node] = node
    while current is not None:
        path.append(current.coord)
        current = current.parent
    path.reverse()
    return path


class HexPathfinder:
    """A* search with pluggable terrain cost and obstacle predicates.

    Hex distance is the heuristic, so paths are optimal as long as every
    terrain cost is at least 1.
    """

    def __init__(
        self,
        terrain_cost: Optional[TerrainCostFn] = None,
        is_obstacle: Optional[ObstacleFn] = None,
        max_expansions: Optional[int] = None,
        config: HexConfig = DEFAULT_CONFIG,
    ):
        self.config = config
        self.terrain_cost = terrain_cost or uniform_cost
        self.is_obstacle = is_obstacle or no_obstacles
        self.max_expansions = config.max_expansions if max_expansions is None else max_expansions

    # -- Search ----------------------------------------------------------------
    def find_path(self, start: Coord, goal: Coord) -> Optional[List[Coord]]:
        """Return the cells from ``start`` to ``goal`` inclusive, or ``None``."""
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))
        if start == goal:
            return [start]
        if self.is_obstacle(*start) or self.is_obstacle(*goal):
            logger.debug("find_path %s -> %s: endpoint is an obstacle", start, goal)
            return None

        gq, gr = goal
        counter = itertools.count()
        start_node = _Node(start, 0.0, float(distance(start[0], start[1], gq, gr)))
        open_nodes: Dict[Coord, _Node] = {start: start_node}
        open_heap: List[Tuple[float, int, Coord]] = [(start_node.f, next(counter), start)]
        closed: Set[Coord] = set()

        while open_heap:
            f, _, coord = heapq.heappop(open_heap)
            current = open_nodes.get(coord)
            # Stale entry left behind by a relaxation
            if current is None or f > current.f:
                continue
            del open_nodes[coord]
            closed.add(coord)

            if coord == goal:
                path = reconstruct(current)
                logger.debug("find_path %s -> %s: %d steps, cost %.2f, %d expanded",
                             start, goal, len(path) - 1, current.g, len(closed))
                return path

            for nq, nr in neighbors6(*coord):
                neighbor = (nq, nr)
                if neighbor in closed or self.is_obstacle(nq, nr):
                    continue
                tentative = current.g + self.terrain_cost(nq, nr)
                node = open_nodes.get(neighbor)
                if node is None:
                    node = _Node(neighbor, tentative, float(distance(nq, nr, gq, gr)), current)
                    open_nodes[neighbor] = node
                    heapq.heappush(open_heap, (node.f, next(counter), neighbor))
                elif tentative < node.g:
                    node.g = tentative
                    node.parent = current
                    heapq.heappush(open_heap, (node.f, next(counter), neighbor))

            if len(closed) > self.max_expansions:
                logger.warning("Pathfinding aborted: exceeded maximum expansions (%d) from %s to %s",
                               self.max_expansions, start, goal)
                return None

        logger.debug("find_path %s -> %s: frontier exhausted after %d expansions",
                     start, goal, len(closed))
        return None

    def find_path_world(self, start: Coord, goal: Coord) -> Optional[List[WorldPos]]:
        """Same search as :meth:`find_path`, returned as world positions."""
        path = self.find_path(start, goal)
        if path is None:
            return None
        return [hex_to_world(q, r, self.config.hex_size) for q, r in path]

    # -- Post-processing -------------------------------------------------------
    def has_line_of_sight(self, a: Coord, b: Coord) -> bool:
        """True if no interior cell of the hex line from ``a`` to ``b`` is blocked."""
        line = hex_line(a[0], a[1], b[0], b[1])
        for q, r in line[1:-1]:
            if self.is_obstacle(q, r):
                return False
        return True

    def smooth_path(self, path: Sequence[Coord]) -> List[Coord]:
        """Drop waypoints that a straight, unobstructed hex line can skip.

        Greedy: from the current waypoint jump to the furthest later waypoint
        still in sight.  The index only moves forward, so the result is never
        longer than ``path``.
        """
        if len(path) <= 2:
            return list(path)

        smoothed = [path[0]]
        current = 0
        last = len(path) - 1
        while current < last:
            furthest = current + 1
            for i in range(current + 2, len(path)):
                if self.has_line_of_sight(path[current], path[i]):
                    furthest = i
            smoothed.append(path[furthest])
            current = furthest
        return smoothed

    def path_cost(self, path: Sequence[Coord]) -> float:
        """Total terrain cost of walking ``path`` (the start cell is free)."""
        return float(sum(self.terrain_cost(q, r) for q, r in path[1:]))


def find_path(
    start: Coord,
    goal: Coord,
    terrain_cost: Optional[TerrainCostFn] = None,
    is_obstacle: Optional[ObstacleFn] = None,
    max_expansions: Optional[int] = None,
    config: HexConfig = DEFAULT_CONFIG,
) -> Optional[List[Coord]]:
    """One-shot helper around :class:`HexPathfinder`."""
    finder = HexPathfinder(terrain_cost, is_obstacle, max_expansions, config)
    return finder.find_path(start, goal)
