"""Place series into playoff rounds and resolve series winners."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from leaguehub.config import DEFAULT_ROUND_POLICY, RoundSpec, clinch_threshold
from leaguehub.models import Bracket, Round, ScheduleGame, Series

from .series import group_series


logger = logging.getLogger(__name__)


def resolve_series(series: Series, best_of: int) -> Series:
    """Apply a best-of format and settle the winner.

    The winner is the first side to reach the clinch threshold walking the
    games in order; games after that point never change it.
    """

    needed = clinch_threshold(best_of)
    if series.is_tbd:
        return series.model_copy(update={"best_of": best_of, "winner": None})

    tally = {series.team_a: 0, series.team_b: 0}
    winner: Optional[str] = None
    for game in series.games:
        if not game.played or game.winner not in tally:
            continue
        tally[game.winner] += 1
        if winner is None and tally[game.winner] >= needed:
            winner = game.winner
    return series.model_copy(update={"best_of": best_of, "winner": winner})


def _round_for_code(code: Optional[str], policy: Sequence[RoundSpec]) -> Optional[int]:
    if not code:
        return None
    for index, spec in enumerate(policy):
        if code in (c.upper() for c in spec.codes):
            return index
    return None


def build_bracket(
    series: Iterable[Series],
    policy: Sequence[RoundSpec] = DEFAULT_ROUND_POLICY,
) -> Bracket:
    """Lay series out into the rounds of ``policy``.

    Series whose round code belongs to a round go there; series without a
    recognised code fill open slots in round order. Slots left open become
    TBD series. Series that do not fit are logged and left out.
    """

    slots: list[list[Series]] = [[] for _ in policy]
    unplaced: list[Series] = []

    for item in series:
        index = _round_for_code(item.round_code, policy)
        if index is None:
            unplaced.append(item)
            continue
        if len(slots[index]) < policy[index].series_count:
            slots[index].append(item)
        else:
            logger.warning(
                "Dropping series %s vs %s: round %s already has %d series",
                item.team_a,
                item.team_b,
                policy[index].name,
                policy[index].series_count,
            )

    for item in unplaced:
        for index, spec in enumerate(policy):
            if len(slots[index]) < spec.series_count:
                slots[index].append(item)
                break
        else:
            logger.warning(
                "Dropping series %s vs %s: bracket has no open slot",
                item.team_a,
                item.team_b,
            )

    rounds: list[Round] = []
    for spec, placed in zip(policy, slots):
        filled = placed + [Series() for _ in range(spec.series_count - len(placed))]
        rounds.append(
            Round(
                name=spec.name,
                best_of=spec.best_of,
                series=[resolve_series(item, spec.best_of) for item in filled],
            )
        )
    return Bracket(rounds=rounds)


def build_bracket_from_games(
    games: Iterable[ScheduleGame],
    policy: Sequence[RoundSpec] = DEFAULT_ROUND_POLICY,
) -> Bracket:
    return build_bracket(group_series(games), policy)


__all__ = ["build_bracket", "build_bracket_from_games", "resolve_series"]
