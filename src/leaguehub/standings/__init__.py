"""Standings table and season record views."""

from .records import (
    HeadToHead,
    current_week,
    filter_schedule,
    head_to_head,
    last_completed_week,
    team_streak,
)
from .table import compute_standings, format_games_behind, games_behind, standings_from_team_stats

__all__ = [
    "HeadToHead",
    "compute_standings",
    "current_week",
    "filter_schedule",
    "format_games_behind",
    "games_behind",
    "head_to_head",
    "last_completed_week",
    "standings_from_team_stats",
    "team_streak",
]
