"""Tests for the command-line launcher."""

from duel_snake.cli import _build_parser, _load_config, main
from duel_snake.config import GameConfig


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_serve_defaults(self):
        args = _build_parser().parse_args(["serve"])
        assert args.command == "serve"
        assert args.host == "127.0.0.1"
        assert args.port == 8000
        assert args.config is None
        assert args.scores is None

    def test_serve_overrides(self):
        args = _build_parser().parse_args([
            "serve", "--grid-size", "16", "--tick-rate-ms", "100", "--seed", "4",
        ])
        config = _load_config(args)
        assert config.grid_size == 16
        assert config.tick_rate_ms == 100
        assert config.seed == 4


class TestCLIConfig:
    def test_write_config_then_load(self, tmp_path):
        path = tmp_path / "game.json"
        assert main(["write-config", str(path)]) == 0
        assert GameConfig.load(path) == GameConfig()

    def test_flags_override_file(self, tmp_path):
        path = tmp_path / "game.json"
        GameConfig(grid_size=24, countdown_seconds=5).save(path)
        args = _build_parser().parse_args([
            "serve", "--config", str(path), "--countdown", "2",
        ])
        config = _load_config(args)
        assert config.grid_size == 24
        assert config.countdown_seconds == 2
