"""Schedule and standings records."""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from leaguehub import rates

_ROUND_CODE_PATTERN = re.compile(r"^([A-Za-z]+)")


class ScheduleGame(BaseModel):
    """A scheduled or completed game.

    Regular-season games carry ``week``; playoff games carry ``code``
    (``S1``, ``F3``...). Scores are only present once the game is played.
    """

    week: Optional[int] = None
    code: Optional[str] = None
    away_team: str = Field(..., min_length=1)
    home_team: str = Field(..., min_length=1)
    away_score: Optional[int] = Field(default=None, ge=0)
    home_score: Optional[int] = Field(default=None, ge=0)
    played: bool = False
    winner: Optional[str] = None
    mvp: Optional[str] = None
    box_score_url: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_result(self) -> "ScheduleGame":
        has_scores = self.away_score is not None and self.home_score is not None
        if self.played != has_scores:
            raise ValueError("played games need both scores and unplayed games need none")
        if self.winner is not None and self.winner not in (self.home_team, self.away_team):
            raise ValueError(f"winner {self.winner!r} did not play in this game")
        if self.winner is not None and not self.played:
            raise ValueError("unplayed games cannot have a winner")
        return self

    @property
    def round_code(self) -> Optional[str]:
        """Alphabetic prefix of a playoff code (``"S"`` for ``"S1-A"``)."""

        if not self.code:
            return None
        match = _ROUND_CODE_PATTERN.match(self.code.strip())
        return match.group(1).upper() if match else None

    @property
    def loser(self) -> Optional[str]:
        if self.winner is None:
            return None
        return self.away_team if self.winner == self.home_team else self.home_team

    def involves(self, team: str) -> bool:
        return team in (self.home_team, self.away_team)

    def score_for(self, team: str) -> Optional[int]:
        if team == self.home_team:
            return self.home_score
        if team == self.away_team:
            return self.away_score
        return None


class StandingsRow(BaseModel):
    team: str = Field(..., min_length=1)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    rank: int = Field(default=0, ge=0)
    runs_scored: int = Field(default=0, ge=0)
    runs_allowed: int = Field(default=0, ge=0)
    run_differential: int = 0
    h2h_note: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def win_pct(self) -> float:
        return rates.win_pct(self.wins, self.losses)

    @property
    def games(self) -> int:
        return self.wins + self.losses
