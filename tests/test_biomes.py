import pytest

from hexworld.biomes import (
    BIOME_TRANSITIONS,
    BiomeType,
    HexDirection,
    TransitionStyle,
    describe_biome,
    get_biome_transition,
)
from hexworld.hexgrid import HEX_DIRECTIONS


def test_transition_table_is_symmetric():
    for d in BIOME_TRANSITIONS:
        fwd = get_biome_transition(d.source, d.target)
        back = get_biome_transition(d.target, d.source)
        assert fwd.preferred == back.preferred
        assert fwd.compatibility == back.compatibility
        assert (back.source, back.target) == (d.target, d.source)


def test_table_has_no_duplicate_pairs():
    pairs = [frozenset((d.source, d.target)) for d in BIOME_TRANSITIONS]
    assert len(pairs) == len(set(pairs))
    assert all(0.0 <= d.compatibility <= 1.0 for d in BIOME_TRANSITIONS)


def test_known_pairs():
    fm = get_biome_transition(BiomeType.MOUNTAIN, BiomeType.FOREST)
    assert fm.preferred == TransitionStyle.GRADUAL
    assert fm.compatibility == pytest.approx(0.8)
    assert TransitionStyle.RIDGE in fm.alternatives
    vc = get_biome_transition(BiomeType.VOLCANIC, BiomeType.CRYSTAL_FORMATION)
    assert vc.preferred == TransitionStyle.FRACTURE


def test_unknown_pair_fallback():
    d = get_biome_transition(BiomeType.RUIN, BiomeType.TUNDRA)
    assert d.preferred == TransitionStyle.SHARP
    assert d.compatibility == pytest.approx(0.3)
    assert d.alternatives == (TransitionStyle.GRADUAL,)
    assert (d.source, d.target) == (BiomeType.RUIN, BiomeType.TUNDRA)


def test_hex_direction_offsets_and_opposites():
    assert [d.offset for d in HexDirection] == list(HEX_DIRECTIONS)
    for d in HexDirection:
        oq, orr = d.offset
        pq, pr = d.opposite.offset
        assert (oq + pq, orr + pr) == (0, 0)
        assert d.opposite.opposite == d


def test_biome_values_are_strings():
    assert BiomeType("crystal_formation") is BiomeType.CRYSTAL_FORMATION
    assert describe_biome(BiomeType.ENERGY_NEXUS) == "Energy Nexus"
