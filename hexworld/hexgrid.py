# hexgrid.py - Pointy-top hex axial math, world/grid conversions and area queries
from __future__ import annotations
import math
from typing import Iterable, List, Tuple

import numpy as np

from .config import DEFAULT_CONFIG, GRID_SIZE, HEX_SIZE, HexConfig

SQRT3 = math.sqrt(3.0)
Coord = Tuple[int, int]
WorldPos = Tuple[float, float]

# Canonical direction order; HexDirection in biomes.py is indexed by it.
HEX_DIRECTIONS: Tuple[Coord, ...] = (
    (+1, 0),
    (+1, -1),
    (0, -1),
    (-1, 0),
    (-1, +1),
    (0, +1),
)


def hex_to_world(q: int, r: int, hex_size: float = HEX_SIZE) -> WorldPos:
    """Axial coords -> world (x, y) for pointy-top hexes."""
    x = hex_size * (SQRT3 * q + SQRT3 / 2.0 * r)
    y = hex_size * (3.0 / 2.0 * r)
    return x, y


def world_to_hex(x: float, y: float, hex_size: float = HEX_SIZE) -> Coord:
    """Inverse of :func:`hex_to_world`, rounded to the containing hex.

    Exact for world positions produced from integer axial coordinates.
    """
    if hex_size == 0:
        raise ValueError("hex_size must be non-zero")

    r = (2.0 / 3.0 * y) / hex_size
    q = (x - SQRT3 / 2.0 * r * hex_size) / (SQRT3 * hex_size)
    return cube_round(q, r, -q - r)


def cube_round(q: float, r: float, s: float) -> Coord:
    """Round fractional cube coords to the nearest hex.

    Each component is rounded on its own, then the one with the largest
    rounding error is rebuilt from the other two so q + r + s stays 0.
    """
    rq = round(q)
    rr = round(r)
    rs = round(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs
    else:
        rs = -rq - rr

    return int(rq), int(rr)


def axial_round(q: float, r: float) -> Coord:
    """Round fractional axial coordinates to nearest hex."""
    return cube_round(q, r, -q - r)


def grid_to_world(x: int, y: int, grid_size: float = GRID_SIZE) -> WorldPos:
    """Grid cell -> world position of its top-left corner."""
    return x * grid_size, y * grid_size


def world_to_grid(x: float, y: float, grid_size: float = GRID_SIZE) -> Tuple[int, int]:
    """World position -> containing grid cell."""
    if grid_size == 0:
        raise ValueError("grid_size must be non-zero")
    return math.floor(x / grid_size), math.floor(y / grid_size)


def hex_to_grid(q: int, r: int, hex_size: float = HEX_SIZE,
                grid_size: float = GRID_SIZE) -> Tuple[int, int]:
    """Grid cell containing the centre of hex (q, r)."""
    x, y = hex_to_world(q, r, hex_size)
    return world_to_grid(x, y, grid_size)


def grid_to_hex(x: int, y: int, hex_size: float = HEX_SIZE,
                grid_size: float = GRID_SIZE) -> Coord:
    """Hex containing the corner of grid cell (x, y).

    Lossy: ``grid_to_hex(*hex_to_grid(q, r))`` lands within one hex of
    ``(q, r)`` but not necessarily on it.
    """
    wx, wy = grid_to_world(x, y, grid_size)
    return world_to_hex(wx, wy, hex_size)


def distance(q1: int, r1: int, q2: int, r2: int) -> int:
    """Return hex distance between two axial coords."""
    dq = q1 - q2
    dr = r1 - r2
    return max(abs(dq), abs(dr), abs(dq + dr))

hex_distance = distance


def neighbors6(q: int, r: int) -> List[Coord]:
    """Return the six axial neighbors of (q,r) in HEX_DIRECTIONS order."""
    return [(q + dq, r + dr) for dq, dr in HEX_DIRECTIONS]

# Readable alias used by the pathfinder and biome engine
hex_neighbors = neighbors6


def hex_neighbor(q: int, r: int, direction: int) -> Coord:
    """Neighbour of (q, r) in one of the six directions (0-5)."""
    dq, dr = HEX_DIRECTIONS[direction % 6]
    return q + dq, r + dr


def hex_ring(q: int, r: int, radius: int) -> List[Coord]:
    """Cells exactly ``radius`` steps from (q, r).

    Starts ``radius`` steps south (+r) of the centre and walks the six
    sides counter-clockwise, so the result has ``6 * radius`` cells.
    """
    if radius < 0:
        return []
    if radius == 0:
        return [(q, r)]

    results: List[Coord] = []
    cq, cr = q, r + radius
    for side in range(6):
        dq, dr = HEX_DIRECTIONS[(side + 1) % 6]
        for _ in range(radius):
            results.append((cq, cr))
            cq += dq
            cr += dr
    return results


def hexes_in_radius(q: int, r: int, radius: int) -> List[Coord]:
    """All cells within ``radius`` of (q, r), ``1 + 3*radius*(radius+1)`` of them."""
    results: List[Coord] = []
    for dq in range(-radius, radius + 1):
        r_min = max(-radius, -dq - radius)
        r_max = min(radius, -dq + radius)
        for dr in range(r_min, r_max + 1):
            results.append((q + dq, r + dr))
    return results


def hex_line(q1: int, r1: int, q2: int, r2: int) -> List[Coord]:
    """Cells on the straight line between two hexes, endpoints included.

    Samples the cube-space segment at ``N = distance`` evenly spaced points
    and rounds each with :func:`cube_round`.
    """
    n = distance(q1, r1, q2, r2)
    if n == 0:
        return [(q1, r1)]

    s1 = -q1 - r1
    s2 = -q2 - r2
    results: List[Coord] = []
    for i in range(n + 1):
        t = i / n
        fq = q1 + (q2 - q1) * t
        fr = r1 + (r2 - r1) * t
        fs = s1 + (s2 - s1) * t
        results.append(cube_round(fq, fr, fs))
    return results


def hexes_to_world(coords: Iterable[Coord], hex_size: float = HEX_SIZE) -> np.ndarray:
    """Vectorised :func:`hex_to_world`; returns an ``(n, 2)`` float array."""
    arr = np.asarray(list(coords), dtype=np.float64).reshape(-1, 2)
    q = arr[:, 0]
    r = arr[:, 1]
    out = np.empty_like(arr)
    out[:, 0] = hex_size * (SQRT3 * q + SQRT3 / 2.0 * r)
    out[:, 1] = hex_size * (1.5 * r)
    return out


def hex_polygon(q: int, r: int, hex_size: float = HEX_SIZE) -> List[WorldPos]:
    """Generate vertices of a pointy-top hex polygon centered at (q,r)."""
    cx, cy = hex_to_world(q, r, hex_size)
    points = []
    for i in range(6):
        angle = math.radians(60 * i - 30)  # pointy-top hexagon
        points.append((cx + hex_size * math.cos(angle), cy + hex_size * math.sin(angle)))
    return points


class CoordinateSystem:
    """Coordinate helpers with the scales of one :class:`HexConfig` bound."""

    def __init__(self, config: HexConfig = DEFAULT_CONFIG):
        self.config = config

    @property
    def hex_size(self) -> float:
        return self.config.hex_size

    @property
    def grid_size(self) -> float:
        return self.config.grid_size

    def hex_to_world(self, q: int, r: int) -> WorldPos:
        return hex_to_world(q, r, self.config.hex_size)

    def world_to_hex(self, x: float, y: float) -> Coord:
        return world_to_hex(x, y, self.config.hex_size)

    def grid_to_world(self, x: int, y: int) -> WorldPos:
        return grid_to_world(x, y, self.config.grid_size)

    def world_to_grid(self, x: float, y: float) -> Tuple[int, int]:
        return world_to_grid(x, y, self.config.grid_size)

    def hex_to_grid(self, q: int, r: int) -> Tuple[int, int]:
        return hex_to_grid(q, r, self.config.hex_size, self.config.grid_size)

    def grid_to_hex(self, x: int, y: int) -> Coord:
        return grid_to_hex(x, y, self.config.hex_size, self.config.grid_size)

    def hexes_to_world(self, coords: Iterable[Coord]) -> np.ndarray:
        return hexes_to_world(coords, self.config.hex_size)

    def hex_polygon(self, q: int, r: int) -> List[WorldPos]:
        return hex_polygon(q, r, self.config.hex_size)

    # Scale-free queries, exposed here so callers need only one object
    cube_round = staticmethod(cube_round)
    hex_distance = staticmethod(distance)
    hex_neighbors = staticmethod(neighbors6)
    hex_ring = staticmethod(hex_ring)
    hexes_in_radius = staticmethod(hexes_in_radius)
    hex_line = staticmethod(hex_line)

    def __repr__(self) -> str:
        return f"CoordinateSystem(hex_size={self.hex_size}, grid_size={self.grid_size})"
