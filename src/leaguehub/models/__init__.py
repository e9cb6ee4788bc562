"""Immutable records shared by every layer."""

from .derived import Bracket, LeaderEntry, Round, Series
from .games import ScheduleGame, StandingsRow
from .stats import BattingLine, FieldingLine, PitchingLine, PlayerStat, TeamStat

__all__ = [
    "BattingLine",
    "Bracket",
    "FieldingLine",
    "LeaderEntry",
    "PitchingLine",
    "PlayerStat",
    "Round",
    "ScheduleGame",
    "Series",
    "StandingsRow",
    "TeamStat",
]
