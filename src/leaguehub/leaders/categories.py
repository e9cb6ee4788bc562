"""Catalog of leaderboard stats and per-category board builders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Literal, Optional, Sequence

from leaguehub.config import LEADERS_COUNT
from leaguehub.config.rules import Category
from leaguehub.models import LeaderEntry, PlayerStat
from leaguehub.rates import format_count, format_decimal, format_rate

from .board import Direction, TiePolicy, build_leaderboard, collapse_all_ties
from .qualification import filter_qualified

BoardCategory = Literal["batting", "pitching", "fielding"]


@dataclass(frozen=True)
class StatDefinition:
    """One leaderboard: what to read, which way is better, how to show it."""

    key: str
    label: str
    category: BoardCategory
    selector: Callable[[PlayerStat], float]
    direction: Direction = "desc"
    precision: int = 0
    formatter: Callable[[float], str] = format_count
    qualification: Optional[Category] = None

    @property
    def is_rate(self) -> bool:
        return self.qualification is not None


def _rate(
    key: str,
    label: str,
    category: Category,
    selector: Callable[[PlayerStat], float],
    *,
    direction: Direction = "desc",
    places: int = 3,
) -> StatDefinition:
    formatter = format_rate if places == 3 else (lambda value: format_decimal(value, places))
    return StatDefinition(
        key=key,
        label=label,
        category=category,
        selector=selector,
        direction=direction,
        precision=places,
        formatter=formatter,
        qualification=category,
    )


def _count(
    key: str,
    label: str,
    category: BoardCategory,
    selector: Callable[[PlayerStat], float],
    *,
    precision: int = 0,
) -> StatDefinition:
    formatter = format_count if precision == 0 else (lambda value: format_decimal(value, precision))
    return StatDefinition(
        key=key,
        label=label,
        category=category,
        selector=selector,
        precision=precision,
        formatter=formatter,
    )


_STATS: Dict[str, StatDefinition] = {
    stat.key: stat
    for stat in (
        _rate("avg", "Batting Average", "batting", lambda p: p.batting.avg),
        _rate("obp", "On-Base Percentage", "batting", lambda p: p.batting.obp),
        _rate("slg", "Slugging Percentage", "batting", lambda p: p.batting.slg),
        _rate("ops", "On-Base Plus Slugging", "batting", lambda p: p.batting.ops),
        _count("hits", "Hits", "batting", lambda p: p.batting.h),
        _count("hr", "Home Runs", "batting", lambda p: p.batting.hr),
        _count("rbi", "Runs Batted In", "batting", lambda p: p.batting.rbi),
        _rate("era", "Earned Run Average", "pitching", lambda p: p.pitching.era, direction="asc", places=2),
        _rate("whip", "Walks + Hits per Inning", "pitching", lambda p: p.pitching.whip, direction="asc", places=2),
        _rate("baa", "Batting Average Against", "pitching", lambda p: p.pitching.baa, direction="asc"),
        _count("ip", "Innings Pitched", "pitching", lambda p: p.pitching.ip, precision=2),
        _count("wins", "Wins", "pitching", lambda p: p.pitching.w),
        _count("losses", "Losses", "pitching", lambda p: p.pitching.l),
        _count("saves", "Saves", "pitching", lambda p: p.pitching.sv),
        _count("nice_plays", "Nice Plays", "fielding", lambda p: p.fielding.np),
        _count("errors", "Errors", "fielding", lambda p: p.fielding.e),
        _count("stolen_bases", "Stolen Bases", "fielding", lambda p: p.fielding.sb),
    )
}


def get_stat(key: str) -> StatDefinition:
    """Fetch a stat definition, raising KeyError if missing."""

    normalized = key.strip().lower()
    if normalized not in _STATS:
        raise KeyError(f"No leaderboard stat registered for key={key!r}")
    return _STATS[normalized]


def iter_stats(category: Optional[str] = None) -> Iterator[StatDefinition]:
    for stat in _STATS.values():
        if category is None or stat.category == category:
            yield stat


def iter_categories() -> Iterator[str]:
    seen: list[str] = []
    for stat in _STATS.values():
        if stat.category not in seen:
            seen.append(stat.category)
            yield stat.category


def build_stat_leaders(
    stat: StatDefinition,
    players: Sequence[PlayerStat],
    avg_games: float,
    *,
    playoffs: bool = False,
    limit: int = LEADERS_COUNT,
    tie_policy: TiePolicy = collapse_all_ties,
) -> list[LeaderEntry]:
    """Build one board.

    Rate stats only consider qualified players; counting stats list anyone
    with a value above zero.
    """

    if stat.qualification is not None:
        eligible = filter_qualified(players, stat.qualification, avg_games, playoffs=playoffs)
    else:
        eligible = [player for player in players if stat.selector(player) > 0]
    return build_leaderboard(
        eligible,
        stat.selector,
        direction=stat.direction,
        limit=limit,
        precision=stat.precision,
        formatter=stat.formatter,
        tie_policy=tie_policy,
    )


def build_category_leaders(
    category: str,
    players: Sequence[PlayerStat],
    avg_games: float,
    *,
    playoffs: bool = False,
    limit: int = LEADERS_COUNT,
    tie_policy: TiePolicy = collapse_all_ties,
) -> dict[str, list[LeaderEntry]]:
    """Build every board in ``category``, keyed by stat key in catalog order."""

    stats = list(iter_stats(category.strip().lower()))
    if not stats:
        raise KeyError(f"Unknown leaderboard category {category!r}")
    return {
        stat.key: build_stat_leaders(
            stat,
            players,
            avg_games,
            playoffs=playoffs,
            limit=limit,
            tie_policy=tie_policy,
        )
        for stat in stats
    }


__all__ = [
    "StatDefinition",
    "build_category_leaders",
    "build_stat_leaders",
    "get_stat",
    "iter_categories",
    "iter_stats",
]
