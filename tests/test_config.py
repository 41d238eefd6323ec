"""Tests for GameConfig."""

import json

import pytest

from duel_snake.config import GameConfig


class TestGameConfigDefaults:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_size == 20
        assert cfg.tick_rate_ms == 150
        assert cfg.min_snake_length == 2
        assert cfg.debuff_trigger_count == 3
        assert cfg.debuff_shrink_amount == 2
        assert cfg.countdown_seconds == 3
        assert cfg.tick_interval == pytest.approx(0.15)


class TestGameConfigValidation:
    @pytest.mark.parametrize(
        ("kwargs", "field"),
        [
            ({"grid_size": 4}, "grid_size"),
            ({"tick_rate_ms": 5}, "tick_rate_ms"),
            ({"countdown_seconds": 0}, "countdown_seconds"),
            ({"countdown_interval_s": 0}, "countdown_interval_s"),
            ({"debuff_trigger_count": 0}, "debuff_trigger_count"),
            ({"min_snake_length": 3}, "initial_snake_length"),
            ({"initial_snake_length": 9, "grid_size": 20}, "initial_snake_length"),
            ({"leaderboard_size": 0}, "leaderboard_size"),
        ],
    )
    def test_invalid_values(self, kwargs, field):
        with pytest.raises(ValueError, match=field):
            GameConfig(**kwargs)


class TestGameConfigPersistence:
    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(grid_size=16, tick_rate_ms=100, seed=3)
        path = tmp_path / "cfg" / "game.json"
        cfg.save(path)
        assert GameConfig.load(path) == cfg

    def test_to_dict_serializable(self):
        assert json.loads(json.dumps(GameConfig().to_dict()))["grid_size"] == 20
