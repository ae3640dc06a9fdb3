import heapq
import logging
import math

import numpy as np
import pytest

from hexworld.config import HexConfig
from hexworld.hexgrid import distance, hex_ring, hex_to_world, hexes_in_radius, neighbors6
from hexworld.pathfinding import HexPathfinder, find_path


def bounded(radius):
    """Obstacle predicate for a finite disk-shaped map."""
    def is_obstacle(q, r):
        return distance(0, 0, q, r) > radius
    return is_obstacle


def assert_connected(path, is_obstacle=None):
    for a, b in zip(path, path[1:]):
        assert distance(*a, *b) == 1
    if is_obstacle is not None:
        assert not any(is_obstacle(q, r) for q, r in path)


def test_same_start_and_goal():
    assert find_path((2, 3), (2, 3)) == [(2, 3)]
    # Even an obstacle start is returned when there is nowhere to go
    assert find_path((1, 1), (1, 1), is_obstacle=lambda q, r: True) == [(1, 1)]


@pytest.mark.parametrize("goal", [(5, 0), (-3, 4), (2, -6), (0, 1)])
def test_open_grid_path_is_shortest(goal):
    path = find_path((0, 0), goal, max_expansions=1000)
    assert path is not None
    assert path[0] == (0, 0)
    assert path[-1] == goal
    assert len(path) == distance(0, 0, *goal) + 1
    assert_connected(path)


def test_obstacle_endpoint_fails():
    walls = {(3, 0)}
    blocked = lambda q, r: (q, r) in walls
    assert find_path((0, 0), (3, 0), is_obstacle=blocked) is None
    assert find_path((3, 0), (0, 0), is_obstacle=blocked) is None


def test_enclosed_goal_exhausts_frontier():
    wall = set(hex_ring(4, 0, 1))
    outside = bounded(6)
    is_obstacle = lambda q, r: (q, r) in wall or outside(q, r)
    assert find_path((-2, 0), (4, 0), is_obstacle=is_obstacle, max_expansions=10_000) is None


def test_enclosed_goal_on_open_plane_hits_cap():
    wall = set(hex_ring(4, 0, 1))
    assert find_path((0, 0), (4, 0), is_obstacle=lambda q, r: (q, r) in wall) is None


def test_expansion_cap_aborts_with_warning(caplog):
    finder = HexPathfinder(max_expansions=5)
    with caplog.at_level(logging.WARNING, logger="hexworld.pathfinding"):
        assert finder.find_path((0, 0), (20, 0)) is None
    assert "maximum expansions" in caplog.text


def test_cap_from_config():
    finder = HexPathfinder(config=HexConfig(max_expansions=3))
    assert finder.max_expansions == 3
    assert finder.find_path((0, 0), (10, -5)) is None
    assert HexPathfinder(max_expansions=500, config=HexConfig(max_expansions=3)).max_expansions == 500


def test_routes_around_wall():
    # Vertical wall at q == 2 with a single gap at r == -3
    wall = {(2, r) for r in range(-5, 6) if r != -3}
    is_obstacle = lambda q, r: (q, r) in wall
    path = find_path((0, 0), (4, 0), is_obstacle=is_obstacle, max_expansions=1000)
    assert path is not None
    assert (2, -3) in path
    assert_connected(path, is_obstacle)


def test_prefers_cheap_detour():
    # Straight line costs 10 per cell; the row above is cheap
    expensive = {(1, 0), (2, 0), (3, 0)}
    cost = lambda q, r: 10.0 if (q, r) in expensive else 1.0
    finder = HexPathfinder(terrain_cost=cost, max_expansions=1000)
    path = finder.find_path((0, 0), (4, 0))
    assert path is not None
    assert not expensive.intersection(path)
    assert finder.path_cost(path) == pytest.approx(5.0)
    assert len(path) == 6
    assert_connected(path)


def test_search_is_deterministic():
    wall = {(1, r) for r in range(-2, 3)}
    finder = HexPathfinder(is_obstacle=lambda q, r: (q, r) in wall, max_expansions=1000)
    first = finder.find_path((-2, 0), (3, 0))
    assert first is not None
    for _ in range(3):
        assert finder.find_path((-2, 0), (3, 0)) == first


def test_find_path_world_uses_configured_size():
    finder = HexPathfinder(config=HexConfig(hex_size=10.0))
    world = finder.find_path_world((0, 0), (2, -1))
    hexes = finder.find_path((0, 0), (2, -1))
    assert world == [hex_to_world(q, r, 10.0) for q, r in hexes]
    assert HexPathfinder(is_obstacle=lambda q, r: q == 2).find_path_world((0, 0), (2, 0)) is None


def test_line_of_sight():
    finder = HexPathfinder(is_obstacle=lambda q, r: (q, r) == (2, 0))
    assert not finder.has_line_of_sight((0, 0), (4, 0))
    assert finder.has_line_of_sight((0, 0), (0, 4))
    # Endpoints are not tested
    assert finder.has_line_of_sight((2, 0), (3, 0))


def test_smooth_open_grid_collapses_to_endpoints():
    finder = HexPathfinder(max_expansions=1000)
    path = finder.find_path((0, 0), (6, -3))
    assert finder.smooth_path(path) == [(0, 0), (6, -3)]


def test_smooth_short_paths_copied():
    finder = HexPathfinder()
    assert finder.smooth_path([]) == []
    p = [(0, 0), (1, 0)]
    out = finder.smooth_path(p)
    assert out == p and out is not p


def test_smooth_path_keeps_sight_lines():
    wall = {(2, r) for r in range(-4, 3)}
    is_obstacle = lambda q, r: (q, r) in wall
    finder = HexPathfinder(is_obstacle=is_obstacle, max_expansions=2000)
    path = finder.find_path((0, 0), (4, -1))
    assert path is not None
    smoothed = finder.smooth_path(path)
    assert len(smoothed) <= len(path)
    assert smoothed[0] == path[0] and smoothed[-1] == path[-1]
    for a, b in zip(smoothed, smoothed[1:]):
        assert finder.has_line_of_sight(a, b)
    # Waypoints stay in path order
    indices = [path.index(c) for c in smoothed]
    assert indices == sorted(indices)


def dijkstra_cost(start, goal, terrain_cost, is_obstacle):
    """Reference cheapest cost by plain Dijkstra, or None if unreachable."""
    best = {start: 0.0}
    heap = [(0.0, start)]
    while heap:
        g, coord = heapq.heappop(heap)
        if coord == goal:
            return g
        if g > best[coord]:
            continue
        for n in neighbors6(*coord):
            if is_obstacle(*n):
                continue
            ng = g + terrain_cost(*n)
            if ng < best.get(n, math.inf):
                best[n] = ng
                heapq.heappush(heap, (ng, n))
    return None


@pytest.mark.parametrize("seed", range(60))
def test_cost_matches_dijkstra_on_weighted_maps(seed):
    # Mixed costs make A* discover cells through expensive parents first and
    # relax them later, so only a search that re-parents open nodes is optimal
    rng = np.random.default_rng(seed)
    cells = hexes_in_radius(0, 0, 5)
    costs = {c: float(v) for c, v in zip(cells, rng.choice([1, 2, 3, 7], size=len(cells)))}
    walls = {c for c, roll in zip(cells, rng.random(len(cells))) if roll < 0.15}
    is_obstacle = lambda q, r: (q, r) not in costs or (q, r) in walls
    terrain_cost = lambda q, r: costs[(q, r)]

    open_cells = [c for c in cells if c not in walls]
    i, j = rng.choice(len(open_cells), size=2, replace=False)
    start, goal = open_cells[i], open_cells[j]

    finder = HexPathfinder(terrain_cost, is_obstacle, max_expansions=1000)
    path = finder.find_path(start, goal)
    expected = dijkstra_cost(start, goal, terrain_cost, is_obstacle)
    if expected is None:
        assert path is None
    else:
        assert path is not None
        assert_connected(path, is_obstacle)
        assert finder.path_cost(path) == pytest.approx(expected)
