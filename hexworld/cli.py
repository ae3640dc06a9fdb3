import argparse
import json
import logging

from .biomes import BiomeType, describe_biome
from .config import GRID_SIZE, HEX_SIZE, MAX_EXPANSIONS, HexConfig
from .hexgrid import distance, hex_to_world
from .pathfinding import HexPathfinder
from .transitions import BiomeTransitionEngine
from .verify import run_all_checks


def demo_biome_at(q: int, r: int) -> BiomeType:
    """Small fixed layout: three wedges around the origin plus a crystal ridge."""
    if q == 4 and -2 <= r <= 2:
        return BiomeType.CRYSTAL_FORMATION
    s = -q - r
    if q >= 0 and r < 0:
        return BiomeType.MOUNTAIN
    if s > 0 and q < 0:
        return BiomeType.WETLAND
    return BiomeType.FOREST


def demo_is_obstacle(q: int, r: int) -> bool:
    return demo_biome_at(q, r) == BiomeType.CRYSTAL_FORMATION


def demo_terrain_cost(q: int, r: int) -> float:
    return 3.0 if demo_biome_at(q, r) == BiomeType.MOUNTAIN else 1.0


def cmd_verify(args):
    cfg = HexConfig(hex_size=args.hex_size, grid_size=args.grid_size)
    results = run_all_checks(cfg)
    for name, passed in results.items():
        print(f"{name}: {'PASSED' if passed else 'FAILED'}")
    return 0 if all(results.values()) else 1


def cmd_path(args):
    cfg = HexConfig(hex_size=args.hex_size, grid_size=args.grid_size,
                    max_expansions=args.max_expansions)
    finder = HexPathfinder(demo_terrain_cost, demo_is_obstacle, config=cfg)
    start, goal = (args.q1, args.r1), (args.q2, args.r2)
    path = finder.find_path(start, goal)
    if path is None:
        print(f"No path from {start} to {goal}")
        return 1
    cost = finder.path_cost(path)
    if args.smooth:
        path = finder.smooth_path(path)
    print(f"Distance {distance(*start, *goal)}, cost {cost:.1f}, {len(path)} waypoints")
    if args.world:
        for q, r in path:
            x, y = hex_to_world(q, r, cfg.hex_size)
            print(f"  ({x:.2f}, {y:.2f})")
    else:
        for q, r in path:
            print(f"  ({q}, {r}) {describe_biome(demo_biome_at(q, r))}")
    return 0


def cmd_tile(args):
    engine = BiomeTransitionEngine(demo_biome_at)
    data = engine.get_tile_biome_data(args.q, args.r)
    out = data.to_dict()
    special = engine.determine_special_biome(args.q, args.r, args.elevation,
                                             args.moisture, args.temperature)
    out["special"] = special.value if special else None
    print(json.dumps(out, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hexworld", description="Hex grid engine diagnostics")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    p.add_argument("--hex-size", type=float, default=HEX_SIZE)
    p.add_argument("--grid-size", type=float, default=GRID_SIZE)
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("verify", help="Run coordinate system self checks")
    s.set_defaults(func=cmd_verify)

    s = sub.add_parser("path", help="Find a path on the demo layout")
    s.add_argument("q1", type=int)
    s.add_argument("r1", type=int)
    s.add_argument("q2", type=int)
    s.add_argument("r2", type=int)
    s.add_argument("--max-expansions", type=int, default=MAX_EXPANSIONS)
    s.add_argument("--smooth", action="store_true")
    s.add_argument("--world", action="store_true", help="print world positions")
    s.set_defaults(func=cmd_path)

    s = sub.add_parser("tile", help="Show blended biome data for a demo tile")
    s.add_argument("q", type=int)
    s.add_argument("r", type=int)
    s.add_argument("--elevation", type=float, default=0.5)
    s.add_argument("--moisture", type=float, default=0.5)
    s.add_argument("--temperature", type=float, default=0.5)
    s.set_defaults(func=cmd_tile)
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)
