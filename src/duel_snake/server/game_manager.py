"""Connection hub binding websocket sessions to the match controller."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from duel_snake.config import GameConfig
from duel_snake.lifecycle import Event, MatchController, MatchPhase
from duel_snake.registry import HumanOccupant
from duel_snake.scores import InMemoryScoreStore, JsonScoreStore
from duel_snake.server.models import InboundMessage, NamePayload
from duel_snake.snake import Direction

logger = logging.getLogger(__name__)


@dataclass
class Connection:
    """One client socket and the frames waiting to be sent to it."""

    connection_id: str
    outbox: asyncio.Queue = field(default_factory=asyncio.Queue)


class GameManager:
    """Routes inbound frames to the controller and fans events out.

    The controller emits synchronously; frames are queued per connection
    and drained by the socket's writer task, which keeps per-connection
    ordering intact.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        score_store: InMemoryScoreStore | JsonScoreStore | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.score_store = score_store if score_store is not None else InMemoryScoreStore()
        self.controller = MatchController(
            self.config, emit=self._dispatch, score_sink=self.score_store,
        )
        self._connections: dict[str, Connection] = {}

    @property
    def registry(self):
        return self.controller.registry

    def connect(self) -> Connection:
        """Register a new socket and queue the current match state for it."""
        conn = Connection(connection_id=uuid.uuid4().hex)
        self._connections[conn.connection_id] = conn
        self._send(conn.connection_id, "init", {"gridSize": self.config.grid_size})
        self._send(conn.connection_id, Event.MATCH_STATE.value, self.controller.snapshot())
        logger.info("Connection %s opened.", conn.connection_id)
        return conn

    def disconnect(self, connection_id: str) -> None:
        self._connections.pop(connection_id, None)
        slot = self.registry.slot_of(connection_id)
        if slot is not None:
            self.controller.disconnect(slot)
        logger.info("Connection %s closed.", connection_id)

    def handle(self, connection_id: str, raw: dict) -> None:
        """Dispatch one decoded client frame. Malformed frames are ignored."""
        try:
            msg = InboundMessage.model_validate(raw)
        except ValidationError:
            return

        slot = self.registry.slot_of(connection_id)
        if msg.event == "join":
            if slot is None:
                self._seat(connection_id, msg.data, ai=False)
        elif msg.event == "requestAiMatch":
            self._seat(connection_id, msg.data, ai=True)
        elif msg.event == "directionChange":
            if slot is None or not isinstance(msg.data, str):
                return
            direction = Direction.parse(msg.data)
            if direction is not None:
                self.controller.change_direction(slot, direction)
        elif msg.event == "requestRestart":
            if slot is not None:
                self.controller.request_restart(slot)

    def _seat(self, connection_id: str, data: Any, *, ai: bool) -> None:
        raw = data if isinstance(data, dict) else {"name": data}
        try:
            payload = NamePayload.model_validate(raw)
        except ValidationError:
            self._send(connection_id, "joinRejected", {"detail": "Invalid name."})
            return

        try:
            if ai:
                self.controller.request_ai_match(connection_id, payload.name)
            else:
                self.controller.join(HumanOccupant(connection_id, payload.name))
        except ValueError as exc:
            full = (
                self.registry.is_full
                or self.controller.phase is not MatchPhase.IDLE
            )
            if full:
                self._send(connection_id, "gameFull", None)
            else:
                self._send(connection_id, "joinRejected", {"detail": str(exc)})

    def _dispatch(self, event: Event, payload: Any, slot: int | None) -> None:
        if event is Event.PLAYER_JOINED:
            occupant = self.registry.occupant(payload["slot"])
            if isinstance(occupant, HumanOccupant):
                self._send(occupant.connection_id, "joinAccepted", {
                    **payload, "gridSize": self.config.grid_size,
                })

        slots = self.registry.occupied_slots() if slot is None else [slot]
        for target in slots:
            occupant = self.registry.occupant(target)
            if isinstance(occupant, HumanOccupant):
                self._send(occupant.connection_id, event.value, payload)

    def _send(self, connection_id: str, event: str, payload: Any) -> None:
        conn = self._connections.get(connection_id)
        if conn is None:
            return
        conn.outbox.put_nowait({"event": event, "data": payload})

    async def cleanup(self) -> None:
        """Stop match timers and drop all connections."""
        await self.controller.shutdown()
        self._connections.clear()
        logger.info("GameManager cleanup complete.")
