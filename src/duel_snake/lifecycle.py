"""Match aggregate and the lifecycle controller that drives it.

All mutation happens on the asyncio event loop: inbound handlers and the
timer callbacks are plain synchronous methods, so they never interleave.
Timers are tasks owned by :class:`Match`; arming a new one always cancels
the previous one, and every callback also checks the round id it was
armed for.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from duel_snake.ai import choose_move
from duel_snake.board import Board, TerminationReason
from duel_snake.config import GameConfig
from duel_snake.grid import Grid
from duel_snake.oracle import PositionOracle
from duel_snake.registry import (
    AI_NAME,
    SLOTS,
    AiOccupant,
    HumanOccupant,
    Occupant,
    SlotRegistry,
    other_slot,
)
from duel_snake.resolver import TickOutcome, resolve_tick
from duel_snake.scores import ScoreSink
from duel_snake.snake import Direction

logger = logging.getLogger(__name__)

GO_SIGNAL = "GO"
DRAW = 0


class MatchPhase(str, enum.Enum):
    """Lifecycle states of the single match."""

    IDLE = "idle"
    COUNTING_DOWN = "countingDown"
    RUNNING = "running"
    OVER = "over"


class EndReason(str, enum.Enum):
    COLLISION = "collision"
    WALL_COLLISION = "wallCollision"
    SELF_COLLISION = "selfCollision"
    OPPONENT_LEFT = "opponentLeft"


_REASON_BY_TERMINATION: dict[TerminationReason, EndReason] = {
    TerminationReason.WALL_COLLISION: EndReason.WALL_COLLISION,
    TerminationReason.SELF_COLLISION: EndReason.SELF_COLLISION,
}


class Event(str, enum.Enum):
    """Outbound event names."""

    MATCH_STATE = "matchState"
    COUNTDOWN_TICK = "countdownTick"
    MATCH_OVER = "matchOver"
    WAITING = "waitingForOpponent"
    RESTART_ACKNOWLEDGED = "restartAcknowledged"
    OPPONENT_REQUESTED_RESTART = "opponentRequestedRestart"
    BOTH_READY_FOR_RESTART = "bothReadyForRestart"
    PLAYER_JOINED = "playerJoined"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a finished match. ``winner_slot`` is 0 for a draw."""

    winner_slot: int
    reason: EndReason

    def to_dict(self) -> dict:
        return {"winnerSlot": self.winner_slot, "reason": self.reason.value}


# (event, payload, target slot or None for everyone)
Emitter = Callable[[Event, Any, int | None], None]


def _discard_event(event: Event, payload: Any, slot: int | None) -> None:
    return None


@dataclass
class Match:
    """The two board slots plus lifecycle bookkeeping."""

    boards: dict[int, Board | None] = field(
        default_factory=lambda: {slot: None for slot in SLOTS},
    )
    phase: MatchPhase = MatchPhase.IDLE
    countdown_remaining: int | None = None
    restart_requests: set[int] = field(default_factory=set)
    result: MatchResult | None = None
    round_id: int = 0
    timer: asyncio.Task | None = field(default=None, repr=False)

    @property
    def countdown_display(self) -> int | str | None:
        """Value last shown to clients: 3, 2, 1, ``"GO"`` or ``None``."""
        if self.countdown_remaining is None or self.countdown_remaining < 0:
            return None
        if self.countdown_remaining == 0:
            return GO_SIGNAL
        return self.countdown_remaining

    def cancel_timer(self) -> None:
        task, self.timer = self.timer, None
        if task is not None and not task.done():
            task.cancel()

    def next_round(self) -> int:
        """Cancel the active timer and invalidate any callback still queued."""
        self.cancel_timer()
        self.round_id += 1
        return self.round_id

    def snapshot(self) -> dict:
        return {
            str(slot): board.to_dict() if board is not None else None
            for slot, board in self.boards.items()
        }


class MatchController:
    """Owns the single match and runs its lifecycle.

    idle -> countingDown -> running -> over -> (mutual restart) ->
    countingDown. A disconnect during a countdown or a running match
    forfeits it to the remaining player and returns to idle.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        emit: Emitter | None = None,
        score_sink: ScoreSink | None = None,
        registry: SlotRegistry | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.grid = Grid(self.config.grid_size)
        self.oracle = PositionOracle(
            self.grid, np.random.default_rng(self.config.seed),
        )
        self.registry = registry or SlotRegistry()
        self.score_sink = score_sink
        self.match = Match()
        self._emit: Emitter = emit or _discard_event

    @property
    def phase(self) -> MatchPhase:
        return self.match.phase

    def board(self, slot: int) -> Board | None:
        return self.match.boards[slot]

    def snapshot(self) -> dict:
        return self.match.snapshot()

    # ------------------------------------------------------------------
    # Inbound events
    # ------------------------------------------------------------------

    def join(self, occupant: Occupant, slot: int | None = None) -> int:
        """Seat *occupant*; starts the countdown once both slots are filled."""
        if self.match.phase is not MatchPhase.IDLE:
            raise ValueError("Game is full.")
        slot = self.registry.claim(occupant, slot)
        self.match.boards[slot] = self._fresh_board(slot, occupant)
        self._announce(slot, occupant)

        if self.registry.is_full:
            self._start_countdown()
        else:
            self._emit(Event.WAITING, None, slot)
            self._emit(Event.MATCH_STATE, self.snapshot(), None)
        return slot

    def request_ai_match(self, connection_id: str, name: str) -> int:
        """Seat the requester against the scripted opponent and start.

        The requester takes slot 1 (or keeps the slot it already waits in)
        and the AI fills the other one. Returns the requester's slot.
        Nothing is changed when the request is refused.
        """
        if self.match.phase is not MatchPhase.IDLE:
            raise ValueError("Game is full.")

        slot = self.registry.slot_of(connection_id)
        if slot is None and not self.registry.is_empty:
            raise ValueError("Game is full.")
        ai_slot = other_slot(slot if slot is not None else 1)
        if self.registry.occupant(ai_slot) is not None:
            raise ValueError("Game is full.")
        seated_name = self.registry.occupant(slot).name if slot is not None else name
        if seated_name.casefold() == AI_NAME.casefold():
            raise ValueError(f"Name {seated_name!r} is reserved for the AI.")

        if slot is None:
            human = HumanOccupant(connection_id, name)
            slot = self.registry.claim(human, 1)
            self.match.boards[slot] = self._fresh_board(slot, human)
            self._announce(slot, human)

        ai = AiOccupant()
        self.registry.claim(ai, ai_slot)
        self.match.boards[ai_slot] = self._fresh_board(ai_slot, ai)
        self._announce(ai_slot, ai)

        logger.info("AI match requested by %r.", seated_name)
        self._start_countdown()
        return slot

    def change_direction(self, slot: int, direction: Direction) -> bool:
        """Queue a heading change. Ignored unless the match is running."""
        if self.match.phase is not MatchPhase.RUNNING:
            return False
        board = self.match.boards.get(slot)
        if board is None or board.is_ai:
            return False
        return board.request_direction(direction)

    def request_restart(self, slot: int) -> bool:
        """Record a restart vote; restarts once every occupant agreed."""
        if self.match.phase is not MatchPhase.OVER:
            return False
        if self.registry.occupant(slot) is None:
            return False

        requests = self.match.restart_requests
        requests.add(slot)
        self._emit(Event.RESTART_ACKNOWLEDGED, None, slot)

        opp_slot = other_slot(slot)
        opponent = self.registry.occupant(opp_slot)
        if isinstance(opponent, AiOccupant):
            requests.add(opp_slot)
        elif opponent is not None:
            self._emit(Event.OPPONENT_REQUESTED_RESTART, None, opp_slot)

        if self.registry.is_full and requests.issuperset(SLOTS):
            logger.info("Both players ready; restarting.")
            self._emit(Event.BOTH_READY_FOR_RESTART, None, None)
            self._start_countdown()
        return True

    def disconnect(self, slot: int) -> None:
        """Release *slot*, forfeiting an active match to the other player."""
        occupant = self.registry.occupant(slot)
        if occupant is None:
            return

        was = self.match.phase
        self.match.next_round()
        opp_slot = other_slot(slot)
        opponent = self.registry.occupant(opp_slot)
        logger.info("Player %r left slot %d during %s.", occupant.name, slot, was.value)

        if was in (MatchPhase.COUNTING_DOWN, MatchPhase.RUNNING) and opponent is not None:
            result = MatchResult(opp_slot, EndReason.OPPONENT_LEFT)
            self.match.result = result
            self._record_scores()
            self._emit(Event.MATCH_OVER, result.to_dict(), opp_slot)

        self.registry.release(slot)
        self.match.boards[slot] = None
        if isinstance(opponent, AiOccupant):
            self.registry.release(opp_slot)
            self.match.boards[opp_slot] = None
            opponent = None

        self.match.phase = MatchPhase.IDLE
        self.match.countdown_remaining = None
        self.match.restart_requests.clear()

        if opponent is not None:
            self.match.boards[opp_slot] = self._fresh_board(opp_slot, opponent)
            self._emit(Event.WAITING, None, opp_slot)
        self._emit(Event.MATCH_STATE, self.snapshot(), None)

    # ------------------------------------------------------------------
    # Timer-driven steps
    # ------------------------------------------------------------------

    def advance_countdown(self) -> None:
        """Emit the next countdown value; after ``GO`` and the clear, run."""
        if self.match.phase is not MatchPhase.COUNTING_DOWN:
            return
        assert self.match.countdown_remaining is not None  # noqa: S101
        self.match.countdown_remaining -= 1
        if self.match.countdown_remaining >= 0:
            self._emit(Event.COUNTDOWN_TICK, self.match.countdown_display, None)
            return

        self.match.countdown_remaining = None
        self._emit(Event.COUNTDOWN_TICK, None, None)
        self._start_running()

    def tick(self) -> dict[int, TickOutcome] | None:
        """Advance both boards by one simultaneous step.

        Returns per-slot outcomes, or ``None`` when nothing ran.
        """
        if self.match.phase is not MatchPhase.RUNNING:
            return None

        boards = self.match.boards
        if not self.registry.is_full or any(boards[s] is None for s in SLOTS):
            logger.error("Tick with a missing slot; abandoning the match.")
            self._reset_to_idle()
            return None

        for slot in SLOTS:
            board = boards[slot]
            if board.is_ai and not board.terminated:
                board.request_direction(
                    choose_move(board, self.grid, boards[other_slot(slot)]),
                )

        outcomes: dict[int, TickOutcome] = {}
        for slot in SLOTS:
            board = boards[slot]
            if board.terminated:
                continue
            outcomes[slot] = resolve_tick(
                board, self.grid, self.oracle,
                boards[other_slot(slot)], self.config,
            )

        lost = [s for s in SLOTS if boards[s].terminated]
        if len(lost) == 2:
            self._finish(MatchResult(DRAW, EndReason.COLLISION))
        elif len(lost) == 1:
            loser = boards[lost[0]]
            reason = _REASON_BY_TERMINATION.get(
                loser.termination_reason, EndReason.COLLISION,
            )
            self._finish(MatchResult(other_slot(lost[0]), reason))
        else:
            self._emit(Event.MATCH_STATE, self.snapshot(), None)
        return outcomes

    async def shutdown(self) -> None:
        """Cancel any running timer and wait for it to unwind."""
        task = self.match.timer
        self.match.next_round()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _start_countdown(self) -> None:
        round_id = self.match.next_round()
        self.match.restart_requests.clear()
        self.match.result = None
        for slot in SLOTS:
            occupant = self.registry.occupant(slot)
            self.match.boards[slot] = (
                self._fresh_board(slot, occupant) if occupant is not None else None
            )
        self.match.phase = MatchPhase.COUNTING_DOWN
        self.match.countdown_remaining = self.config.countdown_seconds
        logger.info("Countdown started (round %d).", round_id)

        self._emit(Event.MATCH_STATE, self.snapshot(), None)
        self._emit(Event.COUNTDOWN_TICK, self.match.countdown_display, None)
        self._arm(self._countdown_loop(round_id))

    def _start_running(self) -> None:
        if not self.registry.is_full:
            logger.warning("Countdown finished without two players; back to idle.")
            self._reset_to_idle()
            return
        round_id = self.match.next_round()
        self.match.phase = MatchPhase.RUNNING
        logger.info("Match running (round %d).", round_id)
        self._arm(self._tick_loop(round_id))

    def _finish(self, result: MatchResult) -> None:
        self.match.next_round()
        self.match.phase = MatchPhase.OVER
        self.match.result = result
        self.match.restart_requests.clear()
        logger.info(
            "Match over: winner=%s reason=%s.",
            result.winner_slot or "draw", result.reason.value,
        )
        self._record_scores()
        self._emit(Event.MATCH_OVER, result.to_dict(), None)
        self._emit(Event.MATCH_STATE, self.snapshot(), None)

    def _reset_to_idle(self) -> None:
        self.match.next_round()
        self.match.phase = MatchPhase.IDLE
        self.match.countdown_remaining = None
        self.match.restart_requests.clear()
        for slot in SLOTS:
            occupant = self.registry.occupant(slot)
            self.match.boards[slot] = (
                self._fresh_board(slot, occupant) if occupant is not None else None
            )
        self._emit(Event.MATCH_STATE, self.snapshot(), None)
        for slot in self.registry.occupied_slots():
            self._emit(Event.WAITING, None, slot)

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _arm(self, coro) -> None:
        self.match.cancel_timer()
        self.match.timer = asyncio.get_running_loop().create_task(coro)

    async def _countdown_loop(self, round_id: int) -> None:
        interval = self.config.countdown_interval_s
        try:
            while (
                self.match.round_id == round_id
                and self.match.phase is MatchPhase.COUNTING_DOWN
            ):
                await asyncio.sleep(interval)
                if self.match.round_id != round_id:
                    break
                self.advance_countdown()
        except asyncio.CancelledError:
            logger.debug("Countdown timer cancelled (round %d).", round_id)

    async def _tick_loop(self, round_id: int) -> None:
        interval = self.config.tick_interval
        try:
            while (
                self.match.round_id == round_id
                and self.match.phase is MatchPhase.RUNNING
            ):
                await asyncio.sleep(interval)
                if self.match.round_id != round_id:
                    break
                self.tick()
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled (round %d).", round_id)
        except Exception:
            logger.exception("Tick loop error (round %d).", round_id)
            self._reset_to_idle()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fresh_board(self, slot: int, occupant: Occupant) -> Board:
        return Board.fresh(
            slot, self.grid, self.oracle, self.config,
            owner_name=occupant.name, is_ai=occupant.is_ai,
        )

    def _announce(self, slot: int, occupant: Occupant) -> None:
        self._emit(
            Event.PLAYER_JOINED,
            {"slot": slot, "name": occupant.name, "isAi": occupant.is_ai},
            None,
        )

    def _record_scores(self) -> None:
        if self.score_sink is None:
            return
        for slot in SLOTS:
            occupant = self.registry.occupant(slot)
            board = self.match.boards[slot]
            if occupant is None or board is None:
                continue
            try:
                self.score_sink.record(occupant.name, board.score)
            except Exception:
                logger.exception("Failed to record score for %r.", occupant.name)
