"""Pydantic models for wire messages and API responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

MAX_NAME_LENGTH = 16


class InboundMessage(BaseModel):
    """Envelope of every client frame: ``{"event": ..., "data": ...}``."""

    event: str
    data: Any = None


class NamePayload(BaseModel):
    """Name claimed by ``join`` and ``requestAiMatch``."""

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)

    @field_validator("name", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("name")
    @classmethod
    def _printable(cls, value: str) -> str:
        if not value.isprintable():
            raise ValueError("name must be printable")
        return value


class LeaderboardEntry(BaseModel):
    name: str
    score: int
    recorded_at: float


class MatchStatus(BaseModel):
    """Response for GET /match."""

    phase: str
    countdown: int | str | None = None
    result: dict | None = None
    boards: dict[str, dict | None]
