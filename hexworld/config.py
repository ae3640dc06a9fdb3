"""
Hex engine tuning knobs.
Safe to tweak without touching algorithm code.
"""

from __future__ import annotations

from dataclasses import dataclass

# Scales (world units)
HEX_SIZE: float = 64.0   # hex centre to corner
GRID_SIZE: float = 32.0  # building-grid cell edge, unrelated to HEX_SIZE

# Pathfinding
MAX_EXPANSIONS: int = 100  # closed-set size at which A* gives up
DEFAULT_TERRAIN_COST: float = 1.0

# Biome influence
NEIGHBORHOOD_SIZE: int = 7       # self + 6 neighbours
MAX_BIOME_INFLUENCES: int = 3
PRIMARY_BOUNDARY_WEIGHT: float = 0.7
SECONDARY_BOUNDARY_WEIGHT: float = 0.3
DEFAULT_COMPATIBILITY: float = 0.3

# Confluence transitions (3+ biomes meeting at a tile edge)
CONFLUENCE_TERTIARY_THRESHOLD: float = 0.15
CONFLUENCE_BLEND_BOOST: float = 1.5

# Special biome emergence
CONFLUENCE_MIN_DISTINCT: int = 4
ENERGY_NEXUS_MIN_ELEVATION: float = 0.8
ENERGY_NEXUS_MAX_MOISTURE: float = 0.3
ENERGY_NEXUS_MIN_TEMPERATURE: float = 0.6
HARMONIC_SPIRE_MIN_ELEVATION: float = 0.9
VOID_BREACH_MAX_ELEVATION: float = 0.2
VOID_BREACH_MIN_TEMPERATURE: float = 0.9
VOID_BREACH_MAX_MOISTURE: float = 0.1
VOID_BREACH_CHANCE_THRESHOLD: float = 0.99  # ~1% of tiles passing the gate


@dataclass(frozen=True)
class HexConfig:
    """Scales and limits handed to each engine component.

    Kept immutable so one instance can be shared between a pathfinder,
    a coordinate system and any number of threads.
    """

    hex_size: float = HEX_SIZE
    grid_size: float = GRID_SIZE
    max_expansions: int = MAX_EXPANSIONS

    def __post_init__(self) -> None:
        if self.hex_size <= 0:
            raise ValueError(f"hex_size must be positive, got {self.hex_size!r}")
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size!r}")
        if self.max_expansions < 0:
            raise ValueError(f"max_expansions cannot be negative, got {self.max_expansions!r}")


DEFAULT_CONFIG = HexConfig()
