from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, FrozenSet, Optional, Tuple

from .config import DEFAULT_COMPATIBILITY
from .hexgrid import HEX_DIRECTIONS, Coord


class BiomeType(str, Enum):
    # Primary biomes
    FOREST = "forest"
    MOUNTAIN = "mountain"
    DESERT = "desert"
    TUNDRA = "tundra"
    WETLAND = "wetland"
    VOLCANIC = "volcanic"
    CRYSTAL_FORMATION = "crystal_formation"

    # Special biomes
    ORIGIN_SITE = "origin_site"      # Player's starting location
    ENERGY_NEXUS = "energy_nexus"
    PRIMAL_SHARD = "primal_shard"    # Ancient crystal structures
    RUIN = "ruin"

    # Rare biomes that only emerge under specific conditions
    RESONANCE_FIELD = "resonance_field"
    VOID_BREACH = "void_breach"
    HARMONIC_SPIRE = "harmonic_spire"
    CONFLUENCE = "confluence"        # Where several biomes meet


class TransitionStyle(str, Enum):
    NONE = "none"
    GRADUAL = "gradual"
    SHARP = "sharp"
    RIVERINE = "riverine"       # Separated by a river or energy flow
    RIDGE = "ridge"
    FRACTURE = "fracture"       # Sharp crystalline boundary
    FADE = "fade"
    SCATTERED = "scattered"     # One biome's elements scatter into the other
    PLATEAU = "plateau"         # Sharp elevation change
    CORRUPTION = "corruption"
    MELD = "meld"
    DIFFUSE = "diffuse"         # Patchy, spotty transition
    CRYSTALLINE = "crystalline"
    ENERGY = "energy"
    VORTEX = "vortex"           # Swirl of several biomes


class HexDirection(IntEnum):
    """The six edges of a hex, indexed like ``HEX_DIRECTIONS``."""

    EAST = 0
    NORTHEAST = 1
    NORTHWEST = 2
    WEST = 3
    SOUTHWEST = 4
    SOUTHEAST = 5

    @property
    def offset(self) -> Coord:
        return HEX_DIRECTIONS[self.value]

    @property
    def opposite(self) -> "HexDirection":
        return HexDirection((self.value + 3) % 6)


# Biomes whose presence in a neighbourhood triggers crystal emergence rules
CRYSTAL_BIOMES: FrozenSet[BiomeType] = frozenset({BiomeType.CRYSTAL_FORMATION})


@dataclass(frozen=True)
class TransitionDefinition:
    """How two biomes meet: preferred edge style and how well they blend (0-1)."""

    source: BiomeType
    target: BiomeType
    preferred: TransitionStyle
    compatibility: float
    alternatives: Tuple[TransitionStyle, ...] = ()

    def reversed(self) -> "TransitionDefinition":
        return TransitionDefinition(self.target, self.source, self.preferred,
                                    self.compatibility, self.alternatives)


def _t(source, target, preferred, compatibility, *alternatives) -> TransitionDefinition:
    return TransitionDefinition(source, target, preferred, compatibility, tuple(alternatives))


B, S = BiomeType, TransitionStyle

BIOME_TRANSITIONS: Tuple[TransitionDefinition, ...] = (
    # Forest
    _t(B.FOREST, B.MOUNTAIN, S.GRADUAL, 0.8, S.RIDGE, S.PLATEAU),
    _t(B.FOREST, B.DESERT, S.SHARP, 0.3, S.FADE, S.SCATTERED),
    _t(B.FOREST, B.TUNDRA, S.GRADUAL, 0.6, S.FADE),
    _t(B.FOREST, B.WETLAND, S.RIVERINE, 0.7, S.GRADUAL, S.DIFFUSE),
    _t(B.FOREST, B.VOLCANIC, S.SHARP, 0.2, S.CORRUPTION),
    _t(B.FOREST, B.CRYSTAL_FORMATION, S.CRYSTALLINE, 0.5, S.FRACTURE),
    # Mountain
    _t(B.MOUNTAIN, B.DESERT, S.PLATEAU, 0.4, S.RIDGE, S.SHARP),
    _t(B.MOUNTAIN, B.TUNDRA, S.RIDGE, 0.8, S.PLATEAU),
    _t(B.MOUNTAIN, B.WETLAND, S.PLATEAU, 0.3, S.RIVERINE),
    _t(B.MOUNTAIN, B.VOLCANIC, S.MELD, 0.7, S.RIDGE, S.FRACTURE),
    _t(B.MOUNTAIN, B.CRYSTAL_FORMATION, S.CRYSTALLINE, 0.9, S.FRACTURE, S.ENERGY),
    # Desert
    _t(B.DESERT, B.TUNDRA, S.SHARP, 0.1, S.RIDGE),
    _t(B.DESERT, B.WETLAND, S.SHARP, 0.2, S.RIVERINE),
    _t(B.DESERT, B.VOLCANIC, S.MELD, 0.6, S.GRADUAL),
    _t(B.DESERT, B.CRYSTAL_FORMATION, S.CRYSTALLINE, 0.7, S.ENERGY, S.SHARP),
    # Tundra
    _t(B.TUNDRA, B.WETLAND, S.RIVERINE, 0.3, S.SHARP),
    _t(B.TUNDRA, B.VOLCANIC, S.SHARP, 0.1, S.CORRUPTION),
    _t(B.TUNDRA, B.CRYSTAL_FORMATION, S.CRYSTALLINE, 0.8, S.MELD, S.FRACTURE),
    # Wetland
    _t(B.WETLAND, B.VOLCANIC, S.RIVERINE, 0.2, S.SHARP),
    _t(B.WETLAND, B.CRYSTAL_FORMATION, S.ENERGY, 0.5, S.CRYSTALLINE, S.RIVERINE),
    # Volcanic
    _t(B.VOLCANIC, B.CRYSTAL_FORMATION, S.FRACTURE, 0.7, S.CRYSTALLINE, S.ENERGY),
    # Special
    _t(B.ORIGIN_SITE, B.FOREST, S.GRADUAL, 0.8, S.ENERGY),
    _t(B.ORIGIN_SITE, B.MOUNTAIN, S.RIDGE, 0.7, S.PLATEAU),
    _t(B.ORIGIN_SITE, B.DESERT, S.GRADUAL, 0.5, S.SHARP),
    _t(B.ENERGY_NEXUS, B.CRYSTAL_FORMATION, S.ENERGY, 0.9, S.MELD, S.CRYSTALLINE),
    _t(B.PRIMAL_SHARD, B.CRYSTAL_FORMATION, S.CRYSTALLINE, 0.9, S.ENERGY),
    _t(B.RUIN, B.DESERT, S.SCATTERED, 0.8, S.FADE),
    # Rare
    _t(B.RESONANCE_FIELD, B.ENERGY_NEXUS, S.ENERGY, 0.9, S.VORTEX),
    _t(B.VOID_BREACH, B.CRYSTAL_FORMATION, S.FRACTURE, 0.4, S.CORRUPTION),
    _t(B.HARMONIC_SPIRE, B.MOUNTAIN, S.CRYSTALLINE, 0.7, S.RIDGE),
    _t(B.CONFLUENCE, B.WETLAND, S.RIVERINE, 0.6, S.VORTEX, S.DIFFUSE),
)

del B, S

_TRANSITION_INDEX: Dict[Tuple[BiomeType, BiomeType], TransitionDefinition] = {}
for _d in BIOME_TRANSITIONS:
    _TRANSITION_INDEX[(_d.source, _d.target)] = _d
    _TRANSITION_INDEX.setdefault((_d.target, _d.source), _d.reversed())
del _d


def get_biome_transition(source: BiomeType, target: BiomeType) -> TransitionDefinition:
    """Transition definition from ``source`` to ``target``.

    The table is symmetric; pairs it does not list get a sharp,
    low-compatibility fallback.
    """
    found: Optional[TransitionDefinition] = _TRANSITION_INDEX.get((source, target))
    if found is not None:
        return found
    return TransitionDefinition(source, target, TransitionStyle.SHARP,
                                DEFAULT_COMPATIBILITY, (TransitionStyle.GRADUAL,))


def describe_biome(biome: BiomeType) -> str:
    """Return a human-readable name for ``biome``."""
    return biome.value.replace("_", " ").title()
