"""Derived views handed to the presentation layer: leaders and the playoff bracket."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from .games import ScheduleGame


class LeaderEntry(BaseModel):
    rank: int = Field(..., ge=1)
    player: str
    team: Optional[str] = None
    value: str
    raw_value: float
    is_tie_summary: bool = False
    tied_count: int = Field(default=1, ge=1)

    model_config = ConfigDict(frozen=True)

    @property
    def rank_label(self) -> str:
        return f"T-{self.rank}" if self.tied_count > 1 else str(self.rank)


class Series(BaseModel):
    """Games between one unordered pair of playoff opponents.

    ``team_a`` is the home team of the first game seen. A series with no
    teams and no games is a TBD slot in the bracket.
    """

    team_a: Optional[str] = None
    team_b: Optional[str] = None
    games: List[ScheduleGame] = Field(default_factory=list)
    wins_a: int = Field(default=0, ge=0)
    wins_b: int = Field(default=0, ge=0)
    best_of: Optional[int] = None
    winner: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_counts(self) -> "Series":
        if self.wins_a + self.wins_b > len(self.games):
            raise ValueError("series wins exceed games in the series")
        if self.winner is not None and self.winner not in (self.team_a, self.team_b):
            raise ValueError(f"winner {self.winner!r} is not in this series")
        return self

    @property
    def is_tbd(self) -> bool:
        return not self.games

    @property
    def round_code(self) -> Optional[str]:
        for game in self.games:
            if game.round_code:
                return game.round_code
        return None

    def wins_for(self, team: str) -> int:
        if team == self.team_a:
            return self.wins_a
        if team == self.team_b:
            return self.wins_b
        return 0


class Round(BaseModel):
    name: str
    best_of: int
    series: List[Series] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def is_complete(self) -> bool:
        return all(item.winner is not None for item in self.series)


class Bracket(BaseModel):
    rounds: List[Round] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def champion(self) -> Optional[str]:
        if not self.rounds:
            return None
        final = self.rounds[-1]
        if len(final.series) != 1:
            return None
        return final.series[0].winner
