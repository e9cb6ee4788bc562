"""Season record views built from the schedule: streaks, head-to-head, week filters."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import fmean
from typing import Literal, Optional, Sequence

from leaguehub.models import ScheduleGame

ScheduleView = Literal["all", "recent", "current", "upcoming", "team", "week", "round"]


@dataclass(frozen=True)
class HeadToHead:
    team_a: str
    team_b: str
    wins_a: int
    wins_b: int
    games: tuple[ScheduleGame, ...]
    avg_runs_a: float
    avg_runs_b: float

    @property
    def games_played(self) -> int:
        return len(self.games)

    @property
    def leader(self) -> Optional[str]:
        if self.wins_a > self.wins_b:
            return self.team_a
        if self.wins_b > self.wins_a:
            return self.team_b
        return None


def _same_team(left: str, right: str) -> bool:
    return left.strip().casefold() == right.strip().casefold()


def team_streak(team: str, games: Sequence[ScheduleGame]) -> str:
    """Current streak such as ``"W3"``; ``"-"`` before the team has a decided game."""

    results = [
        _same_team(game.winner, team)
        for game in games
        if game.played
        and game.winner is not None
        and (_same_team(game.home_team, team) or _same_team(game.away_team, team))
    ]
    if not results:
        return "-"
    latest = results[-1]
    length = 0
    for won in reversed(results):
        if won != latest:
            break
        length += 1
    return f"{'W' if latest else 'L'}{length}"


def head_to_head(team_a: str, team_b: str, games: Sequence[ScheduleGame]) -> Optional[HeadToHead]:
    """Record between two teams over their played meetings, or ``None`` if they never met."""

    meetings = [
        game
        for game in games
        if game.played
        and (
            (_same_team(game.home_team, team_a) and _same_team(game.away_team, team_b))
            or (_same_team(game.home_team, team_b) and _same_team(game.away_team, team_a))
        )
    ]
    if not meetings:
        return None

    def _runs(game: ScheduleGame, team: str) -> int:
        if _same_team(game.home_team, team):
            return game.home_score or 0
        return game.away_score or 0

    return HeadToHead(
        team_a=team_a,
        team_b=team_b,
        wins_a=sum(1 for game in meetings if game.winner and _same_team(game.winner, team_a)),
        wins_b=sum(1 for game in meetings if game.winner and _same_team(game.winner, team_b)),
        games=tuple(meetings),
        avg_runs_a=fmean(_runs(game, team_a) for game in meetings),
        avg_runs_b=fmean(_runs(game, team_b) for game in meetings),
    )


def last_completed_week(games: Sequence[ScheduleGame]) -> int:
    return max((game.week or 0 for game in games if game.played), default=0)


def current_week(games: Sequence[ScheduleGame]) -> int:
    return last_completed_week(games) + 1


def filter_schedule(
    games: Sequence[ScheduleGame],
    view: ScheduleView = "all",
    *,
    team: Optional[str] = None,
    week: Optional[int] = None,
    round_code: Optional[str] = None,
) -> list[ScheduleGame]:
    """Select a slice of the schedule.

    ``recent`` is the played games of the last completed week, ``current``
    the week after it and ``upcoming`` the one after that. ``team`` matches
    on a case-insensitive substring of either team name.
    """

    if view == "all":
        return list(games)
    if view == "recent":
        latest = last_completed_week(games)
        return [game for game in games if game.played and game.week == latest]
    if view == "current":
        target = current_week(games)
        return [game for game in games if game.week == target]
    if view == "upcoming":
        target = current_week(games) + 1
        return [game for game in games if game.week == target]
    if view == "team":
        if not team or not team.strip():
            raise ValueError("team view requires a team name")
        needle = team.strip().casefold()
        return [
            game
            for game in games
            if needle in game.home_team.casefold() or needle in game.away_team.casefold()
        ]
    if view == "week":
        if week is None:
            raise ValueError("week view requires a week number")
        return [game for game in games if game.week == week]
    if view == "round":
        if not round_code:
            raise ValueError("round view requires a round code")
        code = round_code.strip().upper()
        return [game for game in games if game.round_code == code]
    raise ValueError(f"Unknown schedule view {view!r}")


__all__ = [
    "HeadToHead",
    "ScheduleView",
    "current_week",
    "filter_schedule",
    "head_to_head",
    "last_completed_week",
    "team_streak",
]
