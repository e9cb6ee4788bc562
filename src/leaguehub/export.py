"""CSV export helpers for derived league views."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Mapping, Sequence

from leaguehub.models import Bracket, LeaderEntry, ScheduleGame
from leaguehub.rates import format_rate
from leaguehub.service import StandingsLine
from leaguehub.standings import format_games_behind


def leaders_to_csv(boards: Mapping[str, Sequence[LeaderEntry]]) -> str:
    """One row per displayed entry, tie summaries included."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["stat", "rank", "player", "team", "value", "tied_count"])
    for stat, entries in boards.items():
        for entry in entries:
            writer.writerow([
                stat,
                entry.rank_label,
                entry.player,
                entry.team or "",
                entry.value,
                entry.tied_count,
            ])
    return buffer.getvalue()


def standings_to_csv(lines: Sequence[StandingsLine]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["rank", "team", "wins", "losses", "win_pct", "gb", "rs", "ra", "diff", "streak"])
    for line in lines:
        row = line.row
        writer.writerow([
            row.rank,
            row.team,
            row.wins,
            row.losses,
            format_rate(row.win_pct),
            format_games_behind(line.games_behind),
            row.runs_scored,
            row.runs_allowed,
            row.run_differential,
            line.streak,
        ])
    return buffer.getvalue()


def schedule_to_csv(games: Sequence[ScheduleGame]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["week", "code", "away_team", "home_team", "away_score", "home_score", "winner"])
    for game in games:
        writer.writerow([
            "" if game.week is None else game.week,
            game.code or "",
            game.away_team,
            game.home_team,
            "" if game.away_score is None else game.away_score,
            "" if game.home_score is None else game.home_score,
            game.winner or "",
        ])
    return buffer.getvalue()


def bracket_to_csv(bracket: Bracket) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["round", "best_of", "team_a", "wins_a", "team_b", "wins_b", "winner"])
    for round_ in bracket.rounds:
        for series in round_.series:
            writer.writerow([
                round_.name,
                round_.best_of,
                series.team_a or "TBD",
                series.wins_a,
                series.team_b or "TBD",
                series.wins_b,
                series.winner or "",
            ])
    return buffer.getvalue()


__all__ = [
    "bracket_to_csv",
    "leaders_to_csv",
    "schedule_to_csv",
    "standings_to_csv",
]
