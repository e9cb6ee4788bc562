"""League service: fetch sheets, map rows and derive leaders, standings and the bracket."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from leaguehub.cache import DEFAULT_TTL_SECONDS, Rows, TTLRowCache
from leaguehub.config import DEFAULT_ROUND_POLICY, LEADERS_COUNT, RoundSpec, SheetLayout, get_layout
from leaguehub.config_loader import LeagueProfile
from leaguehub.ingest import map_player_rows, map_schedule_rows, map_standings_rows, map_team_rows
from leaguehub.leaders import (
    average_games_played,
    build_category_leaders,
    build_stat_leaders,
    collapse_all_ties,
    get_stat,
    get_tie_policy,
)
from leaguehub.leaders.board import TiePolicy
from leaguehub.models import Bracket, LeaderEntry, PlayerStat, ScheduleGame, StandingsRow, TeamStat
from leaguehub.playoffs import build_bracket_from_games
from leaguehub.source import CachedRowSource, CsvDirectorySource, RowSource
from leaguehub.standings import (
    HeadToHead,
    compute_standings,
    filter_schedule,
    games_behind,
    head_to_head,
    team_streak,
)
from leaguehub.standings.records import ScheduleView


logger = logging.getLogger(__name__)

_DATA_DIR_ENV = "LEAGUEHUB_DATA_DIR"
_CACHE_TTL_ENV = "LEAGUEHUB_CACHE_TTL"
_LEADERS_COUNT_ENV = "LEAGUEHUB_LEADERS_COUNT"
_PROFILE_ENV = "LEAGUEHUB_PROFILE"

_DEFAULT_MAX_WORKERS = 4


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


@dataclass(frozen=True)
class StandingsLine:
    row: StandingsRow
    games_behind: Optional[float]
    streak: str


class LeagueService:
    """Facade over a row source.

    Independent sheets are fetched concurrently; everything after the fetch
    is pure mapping and derivation.
    """

    def __init__(
        self,
        source: RowSource,
        *,
        leaders_count: int = LEADERS_COUNT,
        tie_policy: TiePolicy = collapse_all_ties,
        round_policy: Sequence[RoundSpec] = DEFAULT_ROUND_POLICY,
        layouts: Optional[Mapping[str, SheetLayout]] = None,
        max_workers: int = _DEFAULT_MAX_WORKERS,
    ):
        self.source = source
        self.leaders_count = leaders_count
        self.tie_policy = tie_policy
        self.round_policy = tuple(round_policy)
        self._layouts: Dict[str, SheetLayout] = dict(layouts or {})
        self.max_workers = max(1, max_workers)

    @classmethod
    def from_profile(cls, source: RowSource, profile: LeagueProfile, **kwargs) -> "LeagueService":
        return cls(
            source,
            leaders_count=profile.leaders_count,
            tie_policy=get_tie_policy(profile.tie_policy),
            round_policy=profile.round_policy(),
            layouts=profile.layouts(),
            **kwargs,
        )

    @classmethod
    def from_env(cls, data_dir: Path | str | None = None) -> "LeagueService":
        """Build a cached CSV-backed service from ``LEAGUEHUB_*`` variables."""

        directory = data_dir or os.getenv(_DATA_DIR_ENV)
        if not directory:
            raise ValueError(f"Set {_DATA_DIR_ENV} or pass a data directory")

        profile_path = os.getenv(_PROFILE_ENV)
        profile = LeagueProfile.load(Path(profile_path)) if profile_path else LeagueProfile()

        default_ttl = profile.cache_ttl if profile.cache_ttl is not None else DEFAULT_TTL_SECONDS
        ttl = _env_float(_CACHE_TTL_ENV, default_ttl, clamp_min=0.0)
        profile.leaders_count = _env_int(_LEADERS_COUNT_ENV, profile.leaders_count, min_value=1)

        source = CachedRowSource(CsvDirectorySource(directory), TTLRowCache(ttl))
        logger.info("League data from %s (cache ttl %.0fs)", directory, ttl)
        return cls.from_profile(source, profile)

    def layout(self, kind: str) -> SheetLayout:
        return self._layouts.get(kind) or get_layout(kind)

    def _fetch(self, kind: str, playoffs: bool) -> Rows:
        layout = self.layout(kind)
        try:
            return self.source.fetch(layout, playoffs=playoffs)
        except Exception:
            logger.error("Failed to fetch %s rows (playoffs=%s)", kind, playoffs)
            raise

    def _fetch_many(self, kinds: Sequence[str], playoffs: bool) -> Dict[str, Rows]:
        if len(kinds) == 1:
            return {kinds[0]: self._fetch(kinds[0], playoffs)}
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(kinds))) as executor:
            futures = {kind: executor.submit(self._fetch, kind, playoffs) for kind in kinds}
            return {kind: future.result() for kind, future in futures.items()}

    def players(self, *, playoffs: bool = False) -> list[PlayerStat]:
        rows = self._fetch("players", playoffs)
        return map_player_rows(rows, self.layout("players"))

    def teams(self, *, playoffs: bool = False) -> list[TeamStat]:
        if playoffs:
            fetched = self._fetch_many(("teams", "schedule"), playoffs=True)
            teams = map_team_rows(fetched["teams"], self.layout("teams"))
            games = map_schedule_rows(fetched["schedule"], self.layout("schedule"), playoffs=True)
            return _with_runs_from_games(teams, games)
        fetched = self._fetch_many(("teams", "standings"), playoffs=False)
        teams = map_team_rows(fetched["teams"], self.layout("teams"))
        standings = map_standings_rows(fetched["standings"], self.layout("standings"))
        return _with_runs_from_standings(teams, standings)

    def schedule(self, *, playoffs: bool = False) -> list[ScheduleGame]:
        rows = self._fetch("schedule", playoffs)
        return map_schedule_rows(rows, self.layout("schedule"), playoffs=playoffs)

    def _players_and_average(self, playoffs: bool) -> tuple[list[PlayerStat], float]:
        fetched = self._fetch_many(("players", "teams"), playoffs)
        players = map_player_rows(fetched["players"], self.layout("players"))
        teams = map_team_rows(fetched["teams"], self.layout("teams"))
        return players, average_games_played(teams)

    def leaders(self, category: str, *, playoffs: bool = False) -> dict[str, list[LeaderEntry]]:
        players, avg_games = self._players_and_average(playoffs)
        return build_category_leaders(
            category,
            players,
            avg_games,
            playoffs=playoffs,
            limit=self.leaders_count,
            tie_policy=self.tie_policy,
        )

    def stat_leaders(self, stat_key: str, *, playoffs: bool = False) -> list[LeaderEntry]:
        stat = get_stat(stat_key)
        players, avg_games = self._players_and_average(playoffs)
        return build_stat_leaders(
            stat,
            players,
            avg_games,
            playoffs=playoffs,
            limit=self.leaders_count,
            tie_policy=self.tie_policy,
        )

    def standings(self) -> list[StandingsRow]:
        rows = self._fetch("standings", False)
        return compute_standings(map_standings_rows(rows, self.layout("standings")))

    def standings_table(self) -> list[StandingsLine]:
        fetched = self._fetch_many(("standings", "schedule"), playoffs=False)
        rows = compute_standings(map_standings_rows(fetched["standings"], self.layout("standings")))
        games = map_schedule_rows(fetched["schedule"], self.layout("schedule"))
        if not rows:
            return []
        leader = rows[0]
        return [
            StandingsLine(row=row, games_behind=games_behind(row, leader), streak=team_streak(row.team, games))
            for row in rows
        ]

    def bracket(self) -> Bracket:
        return build_bracket_from_games(self.schedule(playoffs=True), self.round_policy)

    def schedule_view(
        self,
        view: ScheduleView = "all",
        *,
        playoffs: bool = False,
        team: Optional[str] = None,
        week: Optional[int] = None,
        round_code: Optional[str] = None,
    ) -> list[ScheduleGame]:
        return filter_schedule(
            self.schedule(playoffs=playoffs),
            view,
            team=team,
            week=week,
            round_code=round_code,
        )

    def player(self, name: str, *, playoffs: bool = False) -> PlayerStat:
        wanted = name.strip().casefold()
        for player in self.players(playoffs=playoffs):
            if player.name.casefold() == wanted:
                return player
        raise KeyError(f"No player named {name!r}")

    def team(self, name: str, *, playoffs: bool = False) -> TeamStat:
        wanted = name.strip().casefold()
        for team in self.teams(playoffs=playoffs):
            if team.team.casefold() == wanted:
                return team
        raise KeyError(f"No team named {name!r}")

    def head_to_head(self, team_a: str, team_b: str, *, playoffs: bool = False) -> Optional[HeadToHead]:
        return head_to_head(team_a, team_b, self.schedule(playoffs=playoffs))

    def invalidate(self, tag: Optional[str] = None) -> int:
        invalidate = getattr(self.source, "invalidate", None)
        if invalidate is None:
            return 0
        return invalidate(tag)


def _with_runs_from_standings(teams: Sequence[TeamStat], standings: Sequence[StandingsRow]) -> list[TeamStat]:
    runs = {row.team.casefold(): row.runs_scored for row in standings}
    return [
        team.model_copy(update={"runs_scored": runs[team.team.casefold()]})
        if team.team.casefold() in runs
        else team
        for team in teams
    ]


def _with_runs_from_games(teams: Sequence[TeamStat], games: Sequence[ScheduleGame]) -> list[TeamStat]:
    totals: Dict[str, int] = {}
    for game in games:
        if not game.played:
            continue
        for name in (game.home_team, game.away_team):
            totals[name.casefold()] = totals.get(name.casefold(), 0) + (game.score_for(name) or 0)
    return [team.model_copy(update={"runs_scored": totals.get(team.team.casefold(), 0)}) for team in teams]


__all__ = ["LeagueService", "StandingsLine"]
