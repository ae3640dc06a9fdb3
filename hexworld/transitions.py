"""Multi-biome influence and boundary transitions.

Every tile is blended from up to three biomes, weighted by how often each
appears in its 7-cell neighbourhood (the tile plus its six neighbours).
Edges toward neighbours with a different dominant biome get a transition
style and a blend factor.  A few emergent "special" biomes are decided by
fixed rules over the neighbourhood and the tile's climate values.

All results are pure functions of coordinates and the caller's
``biome_at(q, r)`` lookup, so they can be memoised per coordinate for one
generation pass.  Call :meth:`BiomeTransitionEngine.clear_cache` when the
underlying biome assignments change.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

import numpy as np

from . import config as cfg
from .biomes import CRYSTAL_BIOMES, BiomeType, HexDirection, TransitionStyle, get_biome_transition
from .hexgrid import Coord, neighbors6

logger = logging.getLogger(__name__)

BiomeLookup = Callable[[int, int], BiomeType]


@dataclass(frozen=True)
class BiomeInfluence:
    biome: BiomeType
    weight: float


@dataclass(frozen=True)
class BiomeTransition:
    direction: HexDirection
    style: TransitionStyle
    neighbor_biome: BiomeType
    blend_factor: float


@dataclass
class TileBiomeData:
    """Complete blended biome record for one tile."""

    primary: BiomeType
    secondary: Optional[BiomeType] = None
    tertiary: Optional[BiomeType] = None
    influences: List[BiomeInfluence] = field(default_factory=list)
    transitions: List[BiomeTransition] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        """JSON-friendly view used by tools and debug output."""
        return {
            "primary": self.primary.value,
            "secondary": self.secondary.value if self.secondary else None,
            "tertiary": self.tertiary.value if self.tertiary else None,
            "influences": [
                {"biome": inf.biome.value, "weight": round(inf.weight, 4)}
                for inf in self.influences
            ],
            "transitions": [
                {
                    "direction": t.direction.name.lower(),
                    "style": t.style.value,
                    "neighbor_biome": t.neighbor_biome.value,
                    "blend_factor": round(t.blend_factor, 4),
                }
                for t in self.transitions
            ],
        }


def tile_hash01(q: int, r: int) -> float:
    """Deterministic pseudo-random value in [0, 1) for a tile."""
    x = math.sin(q * 12.9898 + r * 78.233) * 43758.5453
    frac = x - math.floor(x)
    # Tiny negative x can round up to exactly 1.0
    return frac if frac < 1.0 else 0.0


def _boundary_weight(influences: List[BiomeInfluence]) -> float:
    primary = influences[0].weight if influences else 0.0
    secondary = influences[1].weight if len(influences) > 1 else 0.0
    return cfg.PRIMARY_BOUNDARY_WEIGHT * primary + cfg.SECONDARY_BOUNDARY_WEIGHT * secondary


class BiomeTransitionEngine:
    """Computes influences, transitions and special biomes from ``biome_at``."""

    def __init__(self, biome_at: BiomeLookup, cache: bool = True):
        self.biome_at = biome_at
        self.cache_enabled = cache
        self.cache: Dict[Coord, List[BiomeInfluence]] = {}
        self._hits = 0
        self._misses = 0

    def clear_cache(self) -> None:
        if self.cache:
            logger.debug("Biome influence cache cleared: %d entries, %d hits, %d misses",
                         len(self.cache), self._hits, self._misses)
        self.cache.clear()
        self._hits = 0
        self._misses = 0

    # -- Neighbourhood -----------------------------------------------------------
    def neighborhood(self, q: int, r: int) -> List[BiomeType]:
        """Biomes of the tile followed by its six neighbours in direction order."""
        biomes = [self.biome_at(q, r)]
        biomes.extend(self.biome_at(nq, nr) for nq, nr in neighbors6(q, r))
        return biomes

    # -- Influences --------------------------------------------------------------
    def calculate_biome_influences(self, q: int, r: int) -> List[BiomeInfluence]:
        """Top biomes of the 7-cell neighbourhood, weights summing to 1.0."""
        key = (q, r)
        if self.cache_enabled:
            cached = self.cache.get(key)
            if cached is not None:
                self._hits += 1
                return list(cached)
            self._misses += 1

        counts = Counter(self.neighborhood(q, r))
        # sorted() is stable, so equal counts keep first-seen order (self first)
        ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
        ranked = ranked[:cfg.MAX_BIOME_INFLUENCES]
        # count/7 then renormalised over the kept entries
        total = sum(count for _, count in ranked)
        influences = [BiomeInfluence(biome, count / total) for biome, count in ranked]

        if self.cache_enabled:
            self.cache[key] = influences
        return list(influences)

    # -- Transitions -------------------------------------------------------------
    def calculate_transitions(
        self, q: int, r: int, influences: Optional[List[BiomeInfluence]] = None
    ) -> List[BiomeTransition]:
        """Transitions toward each neighbour whose dominant biome differs."""
        if influences is None:
            influences = self.calculate_biome_influences(q, r)
        if len(influences) <= 1:
            return []

        primary = influences[0].biome
        my_boundary = _boundary_weight(influences)
        confluence_here = (
            len(influences) >= 3
            and influences[2].weight > cfg.CONFLUENCE_TERTIARY_THRESHOLD
        )

        transitions: List[BiomeTransition] = []
        for direction, (nq, nr) in zip(HexDirection, neighbors6(q, r)):
            neighbor_influences = self.calculate_biome_influences(nq, nr)
            if not neighbor_influences:
                continue
            neighbor_primary = neighbor_influences[0].biome
            if neighbor_primary == primary:
                continue

            definition = get_biome_transition(primary, neighbor_primary)
            neighbor_boundary = _boundary_weight(neighbor_influences)
            blend = definition.compatibility * (1.0 - abs(my_boundary - neighbor_boundary))

            if confluence_here and len(neighbor_influences) >= 2:
                style = TransitionStyle.VORTEX
                blend = min(1.0, blend * cfg.CONFLUENCE_BLEND_BOOST)
            else:
                style = definition.preferred

            transitions.append(BiomeTransition(direction, style, neighbor_primary, blend))
        return transitions

    def get_tile_biome_data(self, q: int, r: int) -> TileBiomeData:
        influences = self.calculate_biome_influences(q, r)
        transitions = self.calculate_transitions(q, r, influences)
        return TileBiomeData(
            primary=influences[0].biome,
            secondary=influences[1].biome if len(influences) > 1 else None,
            tertiary=influences[2].biome if len(influences) > 2 else None,
            influences=influences,
            transitions=transitions,
        )

    # -- Special biomes ----------------------------------------------------------
    def determine_special_biome(
        self, q: int, r: int, elevation: float, moisture: float, temperature: float
    ) -> Optional[BiomeType]:
        """Return the emergent biome for a tile, or ``None``.

        Rules are checked in priority order and the first match wins:
        confluence, energy nexus, harmonic spire, resonance field, void breach.
        """
        distinct: Set[BiomeType] = set(self.neighborhood(q, r))
        has_crystal = not distinct.isdisjoint(CRYSTAL_BIOMES)

        if len(distinct) >= cfg.CONFLUENCE_MIN_DISTINCT:
            return BiomeType.CONFLUENCE

        if (elevation > cfg.ENERGY_NEXUS_MIN_ELEVATION
                and moisture < cfg.ENERGY_NEXUS_MAX_MOISTURE
                and temperature > cfg.ENERGY_NEXUS_MIN_TEMPERATURE):
            return BiomeType.ENERGY_NEXUS

        if elevation > cfg.HARMONIC_SPIRE_MIN_ELEVATION and has_crystal:
            return BiomeType.HARMONIC_SPIRE

        if has_crystal and BiomeType.ENERGY_NEXUS in distinct:
            return BiomeType.RESONANCE_FIELD

        if (elevation < cfg.VOID_BREACH_MAX_ELEVATION
                and temperature > cfg.VOID_BREACH_MIN_TEMPERATURE
                and moisture < cfg.VOID_BREACH_MAX_MOISTURE):
            if tile_hash01(q, r) > cfg.VOID_BREACH_CHANCE_THRESHOLD:
                return BiomeType.VOID_BREACH

        return None

    # -- Region passes -----------------------------------------------------------
    def region_biome_data(self, coords: Iterable[Coord]) -> Dict[Coord, TileBiomeData]:
        """Biome records for many tiles sharing one memoised pass."""
        out = {(q, r): self.get_tile_biome_data(q, r) for q, r in coords}
        logger.debug("Region pass: %d tiles, cache %d entries (%d hits, %d misses)",
                     len(out), len(self.cache), self._hits, self._misses)
        return out

    def influence_arrays(
        self, width: int, height: int, origin: Coord = (0, 0)
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Primary biomes and influence weights for a ``height x width`` block.

        Row ``y``, column ``x`` holds tile ``(origin_q + x, origin_r + y)``.
        Returns ``(primary, weights)`` where ``primary`` is an object array of
        :class:`BiomeType` and ``weights`` has shape ``(height, width, 3)``,
        zero-padded where a tile has fewer than three influences.
        """
        oq, orr = origin
        primary = np.empty((height, width), dtype=object)
        weights = np.zeros((height, width, cfg.MAX_BIOME_INFLUENCES), dtype=np.float64)
        for y in range(height):
            for x in range(width):
                influences = self.calculate_biome_influences(oq + x, orr + y)
                primary[y, x] = influences[0].biome
                for i, inf in enumerate(influences):
                    weights[y, x, i] = inf.weight
        return primary, weights
