# hexworld/__init__.py
# Package init for the hex grid engine: coordinates, pathfinding, biome blending

from .config import HexConfig, DEFAULT_CONFIG
from .hexgrid import (
    SQRT3, HEX_DIRECTIONS, Coord, CoordinateSystem,
    hex_to_world, world_to_hex, cube_round, axial_round,
    grid_to_world, world_to_grid, hex_to_grid, grid_to_hex,
    distance, hex_distance, neighbors6, hex_neighbors, hex_neighbor,
    hex_ring, hexes_in_radius, hex_line, hexes_to_world, hex_polygon,
)
from .pathfinding import HexPathfinder, find_path
from .biomes import (
    BiomeType, TransitionStyle, HexDirection, TransitionDefinition,
    BIOME_TRANSITIONS, get_biome_transition,
)
from .transitions import (
    BiomeInfluence, BiomeTransition, TileBiomeData, BiomeTransitionEngine, tile_hash01,
)

__version__ = "0.1.0"

__all__ = [
    "HexConfig", "DEFAULT_CONFIG",
    "SQRT3", "HEX_DIRECTIONS", "Coord", "CoordinateSystem",
    "hex_to_world", "world_to_hex", "cube_round", "axial_round",
    "grid_to_world", "world_to_grid", "hex_to_grid", "grid_to_hex",
    "distance", "hex_distance", "neighbors6", "hex_neighbors", "hex_neighbor",
    "hex_ring", "hexes_in_radius", "hex_line", "hexes_to_world", "hex_polygon",
    "HexPathfinder", "find_path",
    "BiomeType", "TransitionStyle", "HexDirection", "TransitionDefinition",
    "BIOME_TRANSITIONS", "get_biome_transition",
    "BiomeInfluence", "BiomeTransition", "TileBiomeData", "BiomeTransitionEngine", "tile_hash01",
]
