"""Coordinate system self checks.

Runs round trips and metric checks over a fixed sample of coordinates and
reports each result through logging.  Cheap enough to call at start-up when
a non-default :class:`HexConfig` is in use.
"""

from __future__ import annotations

import itertools
import logging
from typing import Callable, Dict, List, Tuple

from .config import DEFAULT_CONFIG, HexConfig
from .hexgrid import Coord, CoordinateSystem, distance, hex_ring, hexes_in_radius, neighbors6

logger = logging.getLogger(__name__)

SAMPLE_HEXES: List[Coord] = [(0, 0), (1, 0), (0, 1), (-1, 0), (0, -1), (5, -3), (-7, 4)]
SAMPLE_GRID: List[Tuple[int, int]] = [(0, 0), (1, 0), (0, 1), (-1, 0), (0, -1), (10, -5), (-8, 12)]
METRIC_HEXES: List[Coord] = [(0, 0), (3, -2), (-1, 5), (7, 0)]


def check_hex_world_roundtrip(cs: CoordinateSystem) -> bool:
    for q, r in SAMPLE_HEXES:
        x, y = cs.hex_to_world(q, r)
        back = cs.world_to_hex(x, y)
        if back != (q, r):
            logger.error("hex->world->hex failed for %s: world=(%.3f, %.3f) back=%s", (q, r), x, y, back)
            return False
    return True


def check_grid_world_roundtrip(cs: CoordinateSystem) -> bool:
    for gx, gy in SAMPLE_GRID:
        x, y = cs.grid_to_world(gx, gy)
        back = cs.world_to_grid(x, y)
        if back != (gx, gy):
            logger.error("grid->world->grid failed for %s: back=%s", (gx, gy), back)
            return False
    return True


def check_hex_grid_roundtrip(cs: CoordinateSystem) -> bool:
    # Grid quantisation is lossy; one hex of drift is allowed
    for q, r in SAMPLE_HEXES:
        grid = cs.hex_to_grid(q, r)
        back = cs.grid_to_hex(*grid)
        d = distance(q, r, back[0], back[1])
        if d > 1:
            logger.error("hex->grid->hex drifted %d hexes for %s via grid %s", d, (q, r), grid)
            return False
    return True


def check_neighbors(cs: CoordinateSystem) -> bool:
    q, r = 3, -2
    ns = neighbors6(q, r)
    if len(ns) != 6 or len(set(ns)) != 6:
        logger.error("expected 6 distinct neighbours of %s, got %s", (q, r), ns)
        return False
    for nq, nr in ns:
        if distance(q, r, nq, nr) != 1:
            logger.error("neighbour %s of %s not at distance 1", (nq, nr), (q, r))
            return False
    return True


def check_distance_metric(cs: CoordinateSystem) -> bool:
    for a, b in itertools.permutations(METRIC_HEXES, 2):
        if distance(*a, *b) != distance(*b, *a):
            logger.error("distance not symmetric between %s and %s", a, b)
            return False
    for a, b, c in itertools.permutations(METRIC_HEXES, 3):
        if distance(*a, *c) > distance(*a, *b) + distance(*b, *c):
            logger.error("triangle inequality violated for %s, %s, %s", a, b, c)
            return False
    return True


def check_rings(cs: CoordinateSystem) -> bool:
    for radius in range(1, 4):
        ring = hex_ring(0, 0, radius)
        if len(ring) != 6 * radius or len(set(ring)) != len(ring):
            logger.error("ring %d has %d cells, expected %d", radius, len(ring), 6 * radius)
            return False
        for cell in ring:
            if distance(0, 0, *cell) != radius:
                logger.error("ring %d cell %s at wrong distance", radius, cell)
                return False
    return True


def check_radius(cs: CoordinateSystem) -> bool:
    for radius in range(0, 4):
        cells = hexes_in_radius(0, 0, radius)
        expected = 1 + 3 * radius * (radius + 1)
        if len(cells) != expected or len(set(cells)) != expected:
            logger.error("radius %d has %d cells, expected %d", radius, len(cells), expected)
            return False
        if any(distance(0, 0, *cell) > radius for cell in cells):
            logger.error("radius %d contains a cell outside the radius", radius)
            return False
    return True


CHECKS: Dict[str, Callable[[CoordinateSystem], bool]] = {
    "hex_world_roundtrip": check_hex_world_roundtrip,
    "grid_world_roundtrip": check_grid_world_roundtrip,
    "hex_grid_roundtrip": check_hex_grid_roundtrip,
    "neighbors": check_neighbors,
    "distance_metric": check_distance_metric,
    "rings": check_rings,
    "radius": check_radius,
}


def run_all_checks(config: HexConfig = DEFAULT_CONFIG) -> Dict[str, bool]:
    """Run every check and return ``{name: passed}``."""
    cs = CoordinateSystem(config)
    results: Dict[str, bool] = {}
    for name, check in CHECKS.items():
        passed = check(cs)
        results[name] = passed
        logger.info("%s: %s", name, "PASSED" if passed else "FAILED")
    if all(results.values()):
        logger.info("Coordinate system verification passed (%s)", cs)
    else:
        logger.error("Coordinate system verification failed (%s)", cs)
    return results
