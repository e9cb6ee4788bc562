"""Canonical stat records shared across ingestion, leaders and standings."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from leaguehub import rates


class BattingLine(BaseModel):
    """Hitting counting stats."""

    ab: int = Field(default=0, ge=0)
    h: int = Field(default=0, ge=0)
    hr: int = Field(default=0, ge=0)
    rbi: int = Field(default=0, ge=0)
    bb: int = Field(default=0, ge=0)
    k: int = Field(default=0, ge=0)
    rob: int = Field(default=0, ge=0)
    dp: int = Field(default=0, ge=0)
    tb: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def avg(self) -> float:
        return rates.batting_average(self.h, self.ab)

    @property
    def obp(self) -> float:
        return rates.on_base_pct(self.h, self.bb, self.ab)

    @property
    def slg(self) -> float:
        return rates.slugging(self.tb, self.ab)

    @property
    def ops(self) -> float:
        return rates.on_base_plus_slugging(self.h, self.bb, self.tb, self.ab)


class PitchingLine(BaseModel):
    """Pitching counting stats. ``h``/``hr``/``bb``/``k`` are allowed/struck out by the pitcher."""

    w: int = Field(default=0, ge=0)
    l: int = Field(default=0, ge=0)
    sv: int = Field(default=0, ge=0)
    ip: float = Field(default=0.0, ge=0.0)
    bf: int = Field(default=0, ge=0)
    h: int = Field(default=0, ge=0)
    hr: int = Field(default=0, ge=0)
    r: int = Field(default=0, ge=0)
    bb: int = Field(default=0, ge=0)
    k: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def era(self) -> float:
        return rates.earned_run_average(self.r, self.ip)

    @property
    def whip(self) -> float:
        return rates.whip(self.h, self.bb, self.ip)

    @property
    def baa(self) -> float:
        return rates.batting_average_against(self.h, self.bf)


class FieldingLine(BaseModel):
    np: int = Field(default=0, ge=0)
    e: int = Field(default=0, ge=0)
    sb: int = Field(default=0, ge=0)
    cs: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def oaa(self) -> int:
        """Outs above average: nice plays minus errors."""
        return self.np - self.e


class PlayerStat(BaseModel):
    """One player's season line. Recreated on every fetch, never mutated."""

    name: str = Field(..., min_length=1)
    team: Optional[str] = None
    games_played: int = Field(default=0, ge=0)
    batting: BattingLine = Field(default_factory=BattingLine)
    pitching: PitchingLine = Field(default_factory=PitchingLine)
    fielding: FieldingLine = Field(default_factory=FieldingLine)

    model_config = ConfigDict(frozen=True)


class TeamStat(BaseModel):
    """Team-level aggregate of the player lines plus the win/loss record."""

    team: str = Field(..., min_length=1)
    captain: Optional[str] = None
    games_played: int = Field(default=0, ge=0)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    runs_scored: int = Field(default=0, ge=0)
    batting: BattingLine = Field(default_factory=BattingLine)
    pitching: PitchingLine = Field(default_factory=PitchingLine)
    fielding: FieldingLine = Field(default_factory=FieldingLine)

    model_config = ConfigDict(frozen=True)

    @property
    def win_pct(self) -> float:
        return rates.win_pct(self.wins, self.losses)

    @property
    def runs_allowed(self) -> int:
        return self.pitching.r

    @property
    def runs_per_game(self) -> float:
        return rates.per_game(self.runs_scored, self.games_played)

    @property
    def nice_plays_per_game(self) -> float:
        return rates.per_game(self.fielding.np, self.games_played)
