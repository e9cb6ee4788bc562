from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

Season = Literal["regular", "playoffs"]


class LeaderEntryResponse(BaseModel):
    rank: int
    rank_label: str
    player: str
    team: str | None
    value: str
    raw_value: float
    is_tie_summary: bool
    tied_count: int


class LeaderboardResponse(BaseModel):
    stat: str
    label: str
    entries: List[LeaderEntryResponse]


class CategoryLeadersResponse(BaseModel):
    category: str
    season: Season
    boards: List[LeaderboardResponse]


class StandingsLineResponse(BaseModel):
    rank: int
    team: str
    wins: int
    losses: int
    win_pct: str
    runs_scored: int
    runs_allowed: int
    run_differential: int
    games_behind: str
    streak: str
    h2h_note: str | None


class GameResponse(BaseModel):
    week: int | None
    code: str | None
    away_team: str
    home_team: str
    away_score: int | None
    home_score: int | None
    played: bool
    winner: str | None
    mvp: str | None
    box_score_url: str | None


class SeriesResponse(BaseModel):
    team_a: str | None
    team_b: str | None
    wins_a: int
    wins_b: int
    best_of: int | None
    winner: str | None
    games: List[GameResponse]


class RoundResponse(BaseModel):
    name: str
    best_of: int
    series: List[SeriesResponse]


class BracketResponse(BaseModel):
    rounds: List[RoundResponse]
    champion: str | None


class BattingResponse(BaseModel):
    ab: int
    h: int
    hr: int
    rbi: int
    bb: int
    k: int
    tb: int
    avg: str
    obp: str
    slg: str
    ops: str


class PitchingResponse(BaseModel):
    w: int
    l: int
    sv: int
    ip: float
    h: int
    r: int
    bb: int
    k: int
    era: str
    whip: str
    baa: str


class FieldingResponse(BaseModel):
    np: int
    e: int
    sb: int
    cs: int
    oaa: int


class PlayerResponse(BaseModel):
    name: str
    team: str | None
    games_played: int
    batting: BattingResponse
    pitching: PitchingResponse
    fielding: FieldingResponse


class TeamResponse(BaseModel):
    team: str
    captain: str | None
    games_played: int
    wins: int
    losses: int
    win_pct: str
    runs_scored: int
    runs_allowed: int
    runs_per_game: str
    batting: BattingResponse
    pitching: PitchingResponse
    fielding: FieldingResponse


class HeadToHeadResponse(BaseModel):
    team_a: str
    team_b: str
    wins_a: int
    wins_b: int
    games_played: int
    avg_runs_a: float
    avg_runs_b: float
    games: List[GameResponse]


class RevalidateRequest(BaseModel):
    secret: str | None = None
    tag: str = Field(default="sheets", min_length=1)


class RevalidateResponse(BaseModel):
    revalidated: bool
    tag: str
    evicted: int
