import json
import logging

from hexworld.cli import build_parser, demo_biome_at, main
from hexworld.config import DEFAULT_CONFIG, GRID_SIZE, HEX_SIZE, MAX_EXPANSIONS, HexConfig
from hexworld.verify import CHECKS, run_all_checks


def test_all_checks_pass_default_config(caplog):
    with caplog.at_level(logging.INFO, logger="hexworld.verify"):
        results = run_all_checks()
    assert set(results) == set(CHECKS)
    assert all(results.values())
    assert "verification passed" in caplog.text


def test_all_checks_pass_other_scales():
    for hex_size, grid_size in [(1.0, 0.5), (10.0, 5.0), (128.0, 8.0)]:
        assert all(run_all_checks(HexConfig(hex_size=hex_size, grid_size=grid_size)).values())


def test_cli_verify(capsys):
    assert main(["verify"]) == 0
    out = capsys.readouterr().out
    assert "hex_world_roundtrip: PASSED" in out


def test_cli_path_around_ridge(capsys):
    assert main(["path", "0", "0", "6", "0", "--max-expansions", "2000"]) == 0
    out = capsys.readouterr().out
    assert "waypoints" in out
    assert "Crystal Formation" not in out


def test_cli_path_smoothed_world(capsys):
    assert main(["--hex-size", "10", "path", "0", "1", "2", "1", "--smooth", "--world"]) == 0
    out = capsys.readouterr().out
    assert "(43.30, 15.00)" in out


def test_cli_path_blocked(capsys):
    assert main(["path", "0", "0", "4", "0"]) == 1
    assert "No path" in capsys.readouterr().out


def test_cli_tile(capsys):
    assert main(["tile", "0", "0"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["primary"] == demo_biome_at(0, 0).value
    assert abs(sum(i["weight"] for i in data["influences"]) - 1.0) < 1e-3
    assert data["special"] is None


def test_cli_defaults_follow_config():
    args = build_parser().parse_args(["path", "0", "0", "1", "0"])
    assert (args.hex_size, args.grid_size, args.max_expansions) == (HEX_SIZE, GRID_SIZE, MAX_EXPANSIONS)
    cfg = HexConfig(hex_size=args.hex_size, grid_size=args.grid_size,
                    max_expansions=args.max_expansions)
    assert cfg == DEFAULT_CONFIG
