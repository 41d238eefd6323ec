"""Game configuration shared by the engine and the match controller."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Tunable rules and timings for a match.

    Supports JSON serialization so a server can be started from a file.
    """

    # Board
    grid_size: int = 20
    initial_snake_length: int = 2
    min_snake_length: int = 2

    # Pickups
    food_score: int = 10
    debuff_penalty: int = 5
    debuff_trigger_count: int = 3
    debuff_shrink_amount: int = 2

    # Timing
    tick_rate_ms: int = 150
    countdown_seconds: int = 3
    countdown_interval_s: float = 1.0

    # Leaderboard
    leaderboard_size: int = 10

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_size < 5:
            raise ValueError("grid_size must be at least 5.")
        if self.min_snake_length < 1:
            raise ValueError("min_snake_length must be at least 1.")
        if self.initial_snake_length < self.min_snake_length:
            raise ValueError(
                "initial_snake_length must be at least min_snake_length."
            )
        # The start head sits at column grid_size // 4 with the body
        # extending left, so the body must not leave the grid.
        if self.initial_snake_length > self.grid_size // 4 + 1:
            raise ValueError(
                "initial_snake_length does not fit the configured grid; "
                "increase grid_size or reduce the length."
            )
        if self.debuff_trigger_count < 1:
            raise ValueError("debuff_trigger_count must be at least 1.")
        if self.debuff_shrink_amount < 0:
            raise ValueError("debuff_shrink_amount must be >= 0.")
        if self.food_score < 0 or self.debuff_penalty < 0:
            raise ValueError("food_score and debuff_penalty must be >= 0.")
        if not 20 <= self.tick_rate_ms <= 2000:
            raise ValueError("tick_rate_ms must be between 20 and 2000.")
        if self.countdown_seconds < 1:
            raise ValueError("countdown_seconds must be at least 1.")
        if self.countdown_interval_s <= 0:
            raise ValueError("countdown_interval_s must be positive.")
        if self.leaderboard_size < 1:
            raise ValueError("leaderboard_size must be at least 1.")

    @property
    def tick_interval(self) -> float:
        """Tick period in seconds."""
        return self.tick_rate_ms / 1000.0

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
