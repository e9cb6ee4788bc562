"""Standings ordering and games-behind math."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from leaguehub.models import StandingsRow, TeamStat


def _order_key(item: tuple[int, StandingsRow]) -> tuple[float, int, int, str, int]:
    index, row = item
    return (-row.win_pct, -row.run_differential, -row.runs_scored, row.team.casefold(), index)


def compute_standings(rows: Iterable[StandingsRow]) -> list[StandingsRow]:
    """Return rows re-ranked 1..n with run differential recomputed.

    Order is win percentage, then run differential, then runs scored, all
    descending; team name and input order settle anything left so every rank
    is unique.
    """

    normalized = [
        row.model_copy(update={"run_differential": row.runs_scored - row.runs_allowed})
        for row in rows
    ]
    ordered = sorted(enumerate(normalized), key=_order_key)
    return [
        row.model_copy(update={"rank": rank})
        for rank, (_, row) in enumerate(ordered, start=1)
    ]


def standings_from_team_stats(
    teams: Sequence[TeamStat],
    notes: Optional[dict[str, str]] = None,
) -> list[StandingsRow]:
    notes = notes or {}
    rows = [
        StandingsRow(
            team=team.team,
            wins=team.wins,
            losses=team.losses,
            runs_scored=team.runs_scored,
            runs_allowed=team.runs_allowed,
            h2h_note=notes.get(team.team),
        )
        for team in teams
    ]
    return compute_standings(rows)


def games_behind(row: StandingsRow, leader: StandingsRow) -> Optional[float]:
    """Games behind ``leader``; ``None`` for the leader itself."""

    if row.team == leader.team:
        return None
    return ((leader.wins - row.wins) + (row.losses - leader.losses)) / 2


def format_games_behind(value: Optional[float]) -> str:
    if value is None:
        return "-"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


__all__ = [
    "compute_standings",
    "format_games_behind",
    "games_behind",
    "standings_from_team_stats",
]
