"""Minimum-playing-time filter applied before rate-stat leaderboards."""

from __future__ import annotations

from statistics import fmean
from typing import Iterable, Sequence

from leaguehub.config import get_qualification_rule
from leaguehub.config.rules import Category
from leaguehub.models import PlayerStat, TeamStat


def average_games_played(teams: Iterable[TeamStat]) -> float:
    games = [team.games_played for team in teams]
    if not games:
        return 0.0
    return fmean(games)


def qualification_threshold(
    category: Category,
    avg_games: float,
    *,
    playoffs: bool = False,
) -> float:
    """Minimum at-bats (batting) or innings pitched (pitching) to qualify.

    Regular season scales with the league's average team games played;
    playoffs use a fixed floor because series are too short to scale.
    """

    rule = get_qualification_rule(category)
    if playoffs:
        return float(rule.playoff_minimum)
    return max(0.0, avg_games) * rule.multiplier


def _playing_time(player: PlayerStat, category: Category) -> float:
    if category == "pitching":
        return player.pitching.ip
    return float(player.batting.ab)


def filter_qualified(
    players: Sequence[PlayerStat],
    category: Category,
    avg_games: float,
    *,
    playoffs: bool = False,
) -> list[PlayerStat]:
    """Return the players meeting the threshold, in their original order.

    Players with no at-bats (batting) or no innings (pitching) never qualify,
    even when the threshold is zero early in the season.
    """

    threshold = qualification_threshold(category, avg_games, playoffs=playoffs)
    return [
        player
        for player in players
        if _playing_time(player, category) > 0 and _playing_time(player, category) >= threshold
    ]


__all__ = [
    "average_games_played",
    "filter_qualified",
    "qualification_threshold",
]
