"""Ranked leaderboards with competition ranking and pluggable tie collapsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Literal, Optional, Sequence, TypeVar

from leaguehub.config import LEADERS_COUNT
from leaguehub.models import LeaderEntry, PlayerStat
from leaguehub.rates import format_rate

T = TypeVar("T")

Direction = Literal["asc", "desc"]


@dataclass(frozen=True)
class RankGroup:
    """Records sharing one competition rank."""

    rank: int
    value: str
    raw_value: float
    entries: tuple[LeaderEntry, ...]

    @property
    def size(self) -> int:
        return len(self.entries)


TiePolicy = Callable[[Sequence[RankGroup]], list[LeaderEntry]]


@dataclass(frozen=True)
class _Scored(Generic[T]):
    record: T
    raw: float
    key: float


def _summary_entry(group: RankGroup) -> LeaderEntry:
    return LeaderEntry(
        rank=group.rank,
        player=f"{group.size} Players Tied",
        team=None,
        value=group.value,
        raw_value=group.raw_value,
        is_tie_summary=True,
        tied_count=group.size,
    )


def collapse_all_ties(groups: Sequence[RankGroup]) -> list[LeaderEntry]:
    """Every tied group becomes a single summary entry."""

    entries: list[LeaderEntry] = []
    for group in groups:
        if group.size > 1:
            entries.append(_summary_entry(group))
        else:
            entries.extend(group.entries)
    return entries


def collapse_boundary_ties(groups: Sequence[RankGroup]) -> list[LeaderEntry]:
    """Only the last displayed group collapses when it is tied."""

    entries: list[LeaderEntry] = []
    last = len(groups) - 1
    for index, group in enumerate(groups):
        if index == last and group.size > 1:
            entries.append(_summary_entry(group))
        else:
            entries.extend(group.entries)
    return entries


def collapse_never(groups: Sequence[RankGroup]) -> list[LeaderEntry]:
    return [entry for group in groups for entry in group.entries]


TIE_POLICIES: dict[str, TiePolicy] = {
    "collapse_all_ties": collapse_all_ties,
    "collapse_boundary_ties": collapse_boundary_ties,
    "collapse_never": collapse_never,
}


def get_tie_policy(name: str) -> TiePolicy:
    if name not in TIE_POLICIES:
        raise KeyError(f"Unknown tie policy {name!r}")
    return TIE_POLICIES[name]


def _player_name(record: PlayerStat) -> str:
    return record.name


def _player_team(record: PlayerStat) -> Optional[str]:
    return record.team


def rank_groups(
    records: Sequence[T],
    value_of: Callable[[T], float],
    *,
    direction: Direction = "desc",
    precision: int = 3,
    formatter: Callable[[float], str] = format_rate,
    name_of: Callable[[T], str] = _player_name,
    team_of: Callable[[T], Optional[str]] = _player_team,
) -> list[RankGroup]:
    """Sort and competition-rank ``records``, returning every rank group.

    Values are compared after rounding to ``precision`` decimals so that two
    records showing the same figure share a rank. The sort is stable: tied
    records keep their input order.
    """

    scored: list[_Scored[T]] = []
    for record in records:
        raw = float(value_of(record))
        scored.append(_Scored(record=record, raw=raw, key=round(raw, precision)))
    reverse = direction != "asc"
    scored.sort(key=lambda item: item.key, reverse=reverse)

    buckets: list[tuple[int, list[_Scored[T]]]] = []
    for index, item in enumerate(scored):
        if buckets and buckets[-1][1][0].key == item.key:
            buckets[-1][1].append(item)
        else:
            buckets.append((index + 1, [item]))

    groups: list[RankGroup] = []
    for rank, members in buckets:
        head = members[0]
        display = formatter(head.key)
        groups.append(
            RankGroup(
                rank=rank,
                value=display,
                raw_value=head.key,
                entries=tuple(
                    LeaderEntry(
                        rank=rank,
                        player=name_of(member.record),
                        team=team_of(member.record),
                        value=display,
                        raw_value=member.raw,
                        tied_count=len(members),
                    )
                    for member in members
                ),
            )
        )
    return groups


def build_leaderboard(
    records: Sequence[T],
    value_of: Callable[[T], float],
    *,
    direction: Direction = "desc",
    limit: int = LEADERS_COUNT,
    precision: int = 3,
    formatter: Callable[[float], str] = format_rate,
    tie_policy: TiePolicy = collapse_all_ties,
    name_of: Callable[[T], str] = _player_name,
    team_of: Callable[[T], Optional[str]] = _player_team,
) -> list[LeaderEntry]:
    """Rank ``records`` and keep the top ``limit`` distinct ranks.

    A tied group is never split by the cut, so the board can hold more than
    ``limit`` players when ``tie_policy`` keeps ties expanded.
    """

    if limit <= 0:
        return []
    groups = rank_groups(
        records,
        value_of,
        direction=direction,
        precision=precision,
        formatter=formatter,
        name_of=name_of,
        team_of=team_of,
    )
    return tie_policy(groups[:limit])


__all__ = [
    "Direction",
    "RankGroup",
    "TIE_POLICIES",
    "TiePolicy",
    "build_leaderboard",
    "collapse_all_ties",
    "collapse_boundary_ties",
    "collapse_never",
    "get_tie_policy",
    "rank_groups",
]
