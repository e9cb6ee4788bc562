"""Group a flat list of playoff games into head-to-head series."""

from __future__ import annotations

from typing import Iterable

from leaguehub.models import ScheduleGame, Series


def _pair_key(game: ScheduleGame) -> frozenset[str]:
    return frozenset((game.home_team, game.away_team))


def group_series(games: Iterable[ScheduleGame]) -> list[Series]:
    """Partition games by unordered team pair.

    Series are returned in order of their first game and keep their games in
    input order. ``team_a`` is the home team of the first game seen. Wins are
    tallied from played games only; best-of format and winner are left for the
    bracket to apply.
    """

    buckets: dict[frozenset[str], list[ScheduleGame]] = {}
    for game in games:
        buckets.setdefault(_pair_key(game), []).append(game)

    series: list[Series] = []
    for bucket in buckets.values():
        first = bucket[0]
        team_a, team_b = first.home_team, first.away_team
        series.append(
            Series(
                team_a=team_a,
                team_b=team_b,
                games=bucket,
                wins_a=sum(1 for game in bucket if game.played and game.winner == team_a),
                wins_b=sum(1 for game in bucket if game.played and game.winner == team_b),
            )
        )
    return series


__all__ = ["group_series"]
