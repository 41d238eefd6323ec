"""WebSocket handler for real-time play."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from duel_snake.server.game_manager import Connection, GameManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> GameManager:
    return ws.app.state.game_manager


async def _pump(websocket: WebSocket, conn: Connection) -> None:
    """Forward queued frames to the socket in order."""
    while True:
        frame = await conn.outbox.get()
        if websocket.client_state != WebSocketState.CONNECTED:
            return
        try:
            await websocket.send_text(json.dumps(frame, separators=(",", ":")))
        except Exception:
            logger.warning(
                "Failed sending to connection %s; stopping writer.",
                conn.connection_id,
            )
            return


@ws_router.websocket("/play")
async def play(websocket: WebSocket) -> None:
    """Player WebSocket: send events, receive match updates."""
    manager = _get_manager(websocket)
    await websocket.accept()
    conn = manager.connect()
    writer = asyncio.create_task(_pump(websocket, conn))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            manager.handle(conn.connection_id, msg)
    except WebSocketDisconnect:
        logger.info("Connection %s disconnected.", conn.connection_id)
    finally:
        manager.disconnect(conn.connection_id)
        writer.cancel()
        await asyncio.gather(writer, return_exceptions=True)
