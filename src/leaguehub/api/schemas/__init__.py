"""Pydantic models for API I/O."""

from .league import (
    BattingResponse,
    BracketResponse,
    CategoryLeadersResponse,
    FieldingResponse,
    GameResponse,
    HeadToHeadResponse,
    LeaderboardResponse,
    LeaderEntryResponse,
    PitchingResponse,
    PlayerResponse,
    RevalidateRequest,
    RevalidateResponse,
    RoundResponse,
    Season,
    SeriesResponse,
    StandingsLineResponse,
    TeamResponse,
)

__all__ = [
    "BattingResponse",
    "BracketResponse",
    "CategoryLeadersResponse",
    "FieldingResponse",
    "GameResponse",
    "HeadToHeadResponse",
    "LeaderboardResponse",
    "LeaderEntryResponse",
    "PitchingResponse",
    "PlayerResponse",
    "RevalidateRequest",
    "RevalidateResponse",
    "RoundResponse",
    "Season",
    "SeriesResponse",
    "StandingsLineResponse",
    "TeamResponse",
]
