"""REST endpoints for match status and the leaderboard."""

from __future__ import annotations

from fastapi import APIRouter, Query, Request

from duel_snake.server.models import LeaderboardEntry, MatchStatus

router = APIRouter(tags=["match"])


def _get_manager(request: Request):
    return request.app.state.game_manager


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/match")
async def match_status(request: Request) -> MatchStatus:
    """Current phase, countdown and board snapshot."""
    match = _get_manager(request).controller.match
    return MatchStatus(
        phase=match.phase.value,
        countdown=match.countdown_display,
        result=match.result.to_dict() if match.result is not None else None,
        boards=match.snapshot(),
    )


@router.get("/leaderboard")
async def leaderboard(
    request: Request,
    limit: int | None = Query(default=None, ge=1, le=100),
) -> list[LeaderboardEntry]:
    """Best recorded scores, highest first."""
    manager = _get_manager(request)
    count = limit if limit is not None else manager.config.leaderboard_size
    return [
        LeaderboardEntry(name=e.name, score=e.score, recorded_at=e.recorded_at)
        for e in manager.score_store.top(count)
    ]
