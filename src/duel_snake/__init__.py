"""Duel Snake: two-lane multiplayer snake engine and match server."""

from duel_snake.ai import choose_move
from duel_snake.board import Board, TerminationReason
from duel_snake.config import GameConfig
from duel_snake.grid import Grid
from duel_snake.lifecycle import (
    EndReason,
    Event,
    Match,
    MatchController,
    MatchPhase,
    MatchResult,
)
from duel_snake.oracle import PositionOracle
from duel_snake.registry import AiOccupant, HumanOccupant, SlotRegistry
from duel_snake.resolver import TickOutcome, resolve_tick
from duel_snake.scores import InMemoryScoreStore, JsonScoreStore, ScoreSink
from duel_snake.snake import Direction, Snake

__all__ = [
    "AiOccupant",
    "Board",
    "Direction",
    "EndReason",
    "Event",
    "GameConfig",
    "Grid",
    "HumanOccupant",
    "InMemoryScoreStore",
    "JsonScoreStore",
    "Match",
    "MatchController",
    "MatchPhase",
    "MatchResult",
    "PositionOracle",
    "ScoreSink",
    "SlotRegistry",
    "Snake",
    "TerminationReason",
    "TickOutcome",
    "choose_move",
    "resolve_tick",
]
