"""REST API for the league hub."""

from __future__ import annotations

import hmac
import logging
import os
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import Response

from leaguehub.api.schemas import (
    BattingResponse,
    BracketResponse,
    CategoryLeadersResponse,
    FieldingResponse,
    GameResponse,
    HeadToHeadResponse,
    LeaderboardResponse,
    LeaderEntryResponse,
    PitchingResponse,
    PlayerResponse,
    RevalidateRequest,
    RevalidateResponse,
    RoundResponse,
    Season,
    SeriesResponse,
    StandingsLineResponse,
    TeamResponse,
)
from leaguehub.export import leaders_to_csv, standings_to_csv
from leaguehub.leaders import StatDefinition, get_stat, iter_categories, iter_stats
from leaguehub.models import (
    BattingLine,
    Bracket,
    FieldingLine,
    LeaderEntry,
    PitchingLine,
    PlayerStat,
    ScheduleGame,
    TeamStat,
)
from leaguehub.rates import format_decimal, format_rate
from leaguehub.service import LeagueService, StandingsLine
from leaguehub.standings import format_games_behind


logger = logging.getLogger(__name__)

_REVALIDATE_SECRET_ENV = "LEAGUEHUB_REVALIDATE_SECRET"


def _entry_response(entry: LeaderEntry) -> LeaderEntryResponse:
    return LeaderEntryResponse(
        rank=entry.rank,
        rank_label=entry.rank_label,
        player=entry.player,
        team=entry.team,
        value=entry.value,
        raw_value=entry.raw_value,
        is_tie_summary=entry.is_tie_summary,
        tied_count=entry.tied_count,
    )


def _game_response(game: ScheduleGame) -> GameResponse:
    return GameResponse(**game.model_dump())


def _batting_response(line: BattingLine) -> BattingResponse:
    return BattingResponse(
        ab=line.ab,
        h=line.h,
        hr=line.hr,
        rbi=line.rbi,
        bb=line.bb,
        k=line.k,
        tb=line.tb,
        avg=format_rate(line.avg),
        obp=format_rate(line.obp),
        slg=format_rate(line.slg),
        ops=format_rate(line.ops),
    )


def _pitching_response(line: PitchingLine) -> PitchingResponse:
    return PitchingResponse(
        w=line.w,
        l=line.l,
        sv=line.sv,
        ip=line.ip,
        h=line.h,
        r=line.r,
        bb=line.bb,
        k=line.k,
        era=format_decimal(line.era),
        whip=format_decimal(line.whip),
        baa=format_rate(line.baa),
    )


def _fielding_response(line: FieldingLine) -> FieldingResponse:
    return FieldingResponse(np=line.np, e=line.e, sb=line.sb, cs=line.cs, oaa=line.oaa)


def _player_response(player: PlayerStat) -> PlayerResponse:
    return PlayerResponse(
        name=player.name,
        team=player.team,
        games_played=player.games_played,
        batting=_batting_response(player.batting),
        pitching=_pitching_response(player.pitching),
        fielding=_fielding_response(player.fielding),
    )


def _team_response(team: TeamStat) -> TeamResponse:
    return TeamResponse(
        team=team.team,
        captain=team.captain,
        games_played=team.games_played,
        wins=team.wins,
        losses=team.losses,
        win_pct=format_rate(team.win_pct),
        runs_scored=team.runs_scored,
        runs_allowed=team.runs_allowed,
        runs_per_game=format_decimal(team.runs_per_game),
        batting=_batting_response(team.batting),
        pitching=_pitching_response(team.pitching),
        fielding=_fielding_response(team.fielding),
    )


def _standings_response(line: StandingsLine) -> StandingsLineResponse:
    row = line.row
    return StandingsLineResponse(
        rank=row.rank,
        team=row.team,
        wins=row.wins,
        losses=row.losses,
        win_pct=format_rate(row.win_pct),
        runs_scored=row.runs_scored,
        runs_allowed=row.runs_allowed,
        run_differential=row.run_differential,
        games_behind=format_games_behind(line.games_behind),
        streak=line.streak,
        h2h_note=row.h2h_note,
    )


def _bracket_response(bracket: Bracket) -> BracketResponse:
    return BracketResponse(
        rounds=[
            RoundResponse(
                name=round_.name,
                best_of=round_.best_of,
                series=[
                    SeriesResponse(
                        team_a=series.team_a,
                        team_b=series.team_b,
                        wins_a=series.wins_a,
                        wins_b=series.wins_b,
                        best_of=series.best_of,
                        winner=series.winner,
                        games=[_game_response(game) for game in series.games],
                    )
                    for series in round_.series
                ],
            )
            for round_ in bracket.rounds
        ],
        champion=bracket.champion,
    )


def create_app(service: Optional[LeagueService] = None, *, revalidate_secret: Optional[str] = None) -> FastAPI:
    app = FastAPI(title="leaguehub")
    app.state.service = service

    def _service(request: Request) -> LeagueService:
        current = request.app.state.service
        if current is None:
            current = LeagueService.from_env()
            request.app.state.service = current
        return current

    def _check_category(category: str) -> str:
        normalized = category.strip().lower()
        if normalized not in set(iter_categories()):
            raise HTTPException(status_code=404, detail=f"Unknown category {category!r}")
        return normalized

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/leaders/{category}", response_model=CategoryLeadersResponse)
    def category_leaders(
        category: str,
        request: Request,
        season: Season = Query("regular"),
    ) -> CategoryLeadersResponse:
        normalized = _check_category(category)
        boards = _service(request).leaders(normalized, playoffs=season == "playoffs")
        labels = {stat.key: stat.label for stat in iter_stats(normalized)}
        return CategoryLeadersResponse(
            category=normalized,
            season=season,
            boards=[
                LeaderboardResponse(
                    stat=key,
                    label=labels[key],
                    entries=[_entry_response(entry) for entry in entries],
                )
                for key, entries in boards.items()
            ],
        )

    def _resolve_stat(category: str, stat: str) -> StatDefinition:
        normalized = _check_category(category)
        try:
            definition = get_stat(stat)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=f"Unknown stat {stat!r}") from exc
        if definition.category != normalized:
            raise HTTPException(status_code=404, detail=f"Stat {stat!r} is not in {normalized}")
        return definition

    @app.get("/leaders/{category}/{stat}", response_model=LeaderboardResponse)
    def stat_leaders(
        category: str,
        stat: str,
        request: Request,
        season: Season = Query("regular"),
    ) -> LeaderboardResponse:
        definition = _resolve_stat(category, stat)
        entries = _service(request).stat_leaders(definition.key, playoffs=season == "playoffs")
        return LeaderboardResponse(
            stat=definition.key,
            label=definition.label,
            entries=[_entry_response(entry) for entry in entries],
        )

    @app.get("/leaders/{category}/{stat}/export.csv")
    def export_stat_leaders(
        category: str,
        stat: str,
        request: Request,
        season: Season = Query("regular"),
    ) -> Response:
        definition = _resolve_stat(category, stat)
        entries = _service(request).stat_leaders(definition.key, playoffs=season == "playoffs")
        return Response(
            content=leaders_to_csv({definition.key: entries}),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={definition.key}-leaders.csv"},
        )

    @app.get("/standings", response_model=list[StandingsLineResponse])
    def standings(request: Request) -> list[StandingsLineResponse]:
        return [_standings_response(line) for line in _service(request).standings_table()]

    @app.get("/standings/export.csv")
    def export_standings(request: Request) -> Response:
        return Response(
            content=standings_to_csv(_service(request).standings_table()),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=standings.csv"},
        )

    @app.get("/bracket", response_model=BracketResponse)
    def bracket(request: Request) -> BracketResponse:
        return _bracket_response(_service(request).bracket())

    @app.get("/schedule", response_model=list[GameResponse])
    def schedule(
        request: Request,
        view: Literal["all", "recent", "current", "upcoming", "team", "week", "round"] = Query("all"),
        season: Season = Query("regular"),
        team: Optional[str] = Query(None),
        week: Optional[int] = Query(None, ge=1),
        round_code: Optional[str] = Query(None, alias="round"),
    ) -> list[GameResponse]:
        try:
            games = _service(request).schedule_view(
                view,
                playoffs=season == "playoffs",
                team=team,
                week=week,
                round_code=round_code,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return [_game_response(game) for game in games]

    @app.get("/players/{name}", response_model=PlayerResponse)
    def player(name: str, request: Request, season: Season = Query("regular")) -> PlayerResponse:
        try:
            record = _service(request).player(name, playoffs=season == "playoffs")
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="Player not found") from exc
        return _player_response(record)

    @app.get("/teams/{name}", response_model=TeamResponse)
    def team(name: str, request: Request, season: Season = Query("regular")) -> TeamResponse:
        try:
            record = _service(request).team(name, playoffs=season == "playoffs")
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="Team not found") from exc
        return _team_response(record)

    @app.get("/head-to-head", response_model=HeadToHeadResponse)
    def matchup(
        request: Request,
        team_a: str = Query(..., min_length=1),
        team_b: str = Query(..., min_length=1),
        season: Season = Query("regular"),
    ) -> HeadToHeadResponse:
        record = _service(request).head_to_head(team_a, team_b, playoffs=season == "playoffs")
        if record is None:
            raise HTTPException(status_code=404, detail="These teams have not played each other")
        return HeadToHeadResponse(
            team_a=record.team_a,
            team_b=record.team_b,
            wins_a=record.wins_a,
            wins_b=record.wins_b,
            games_played=record.games_played,
            avg_runs_a=record.avg_runs_a,
            avg_runs_b=record.avg_runs_b,
            games=[_game_response(game) for game in record.games],
        )

    @app.post("/revalidate", response_model=RevalidateResponse)
    def revalidate(payload: RevalidateRequest, request: Request) -> RevalidateResponse:
        expected = revalidate_secret or os.getenv(_REVALIDATE_SECRET_ENV)
        if not expected:
            raise HTTPException(status_code=500, detail="Revalidation secret is not configured")
        if payload.secret is None or not hmac.compare_digest(payload.secret.encode("utf-8"), expected.encode("utf-8")):
            logger.warning("Rejected revalidation request for tag %s", payload.tag)
            raise HTTPException(status_code=401, detail="Invalid secret")
        evicted = _service(request).invalidate(payload.tag)
        return RevalidateResponse(revalidated=True, tag=payload.tag, evicted=evicted)

    return app


__all__ = ["create_app"]
