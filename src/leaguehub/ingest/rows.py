"""Map raw sheet grids onto typed league records.

Cells come from human-edited spreadsheets, so numeric parsing never raises:
blank, non-numeric and non-finite cells become ``0`` and negative counts are
clamped to zero. Rows whose identity column is blank are dropped and rows
beyond the layout's ``max_rows`` are ignored.
"""

from __future__ import annotations

import csv
import logging
import math
from pathlib import Path
from typing import List, Optional, Sequence, Union

from leaguehub.config import SheetLayout, get_layout
from leaguehub.models import (
    BattingLine,
    FieldingLine,
    PitchingLine,
    PlayerStat,
    ScheduleGame,
    StandingsRow,
    TeamStat,
)


logger = logging.getLogger(__name__)

Cell = Union[str, int, float, None]
Row = Sequence[Cell]


def parse_number(value: Cell) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def parse_count(value: Cell) -> int:
    return max(0, int(round(parse_number(value))))


def parse_innings(value: Cell) -> float:
    return max(0.0, parse_number(value))


def parse_text(value: Cell) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_text(value: Cell) -> Optional[str]:
    return parse_text(value) or None


def _cell(row: Row, layout: SheetLayout, name: str) -> Cell:
    index = layout.columns.get(name)
    if index is None or index >= len(row):
        return None
    return row[index]


def _bounded(rows: Sequence[Row], layout: SheetLayout) -> Sequence[Row]:
    if len(rows) > layout.max_rows:
        logger.debug(
            "Ignoring %d rows past the %d-row cap for %s",
            len(rows) - layout.max_rows,
            layout.max_rows,
            layout.kind,
        )
    return rows[: layout.max_rows]


def _has_identity(row: Row, layout: SheetLayout) -> bool:
    return all(parse_text(_cell(row, layout, name)) for name in layout.identity_fields)


def _batting_line(row: Row, layout: SheetLayout) -> BattingLine:
    return BattingLine(
        ab=parse_count(_cell(row, layout, "ab")),
        h=parse_count(_cell(row, layout, "h")),
        hr=parse_count(_cell(row, layout, "hr")),
        rbi=parse_count(_cell(row, layout, "rbi")),
        bb=parse_count(_cell(row, layout, "bb")),
        k=parse_count(_cell(row, layout, "k")),
        rob=parse_count(_cell(row, layout, "rob")),
        dp=parse_count(_cell(row, layout, "dp")),
        tb=parse_count(_cell(row, layout, "tb")),
    )


def _pitching_line(row: Row, layout: SheetLayout) -> PitchingLine:
    return PitchingLine(
        w=parse_count(_cell(row, layout, "w")),
        l=parse_count(_cell(row, layout, "l")),
        sv=parse_count(_cell(row, layout, "sv")),
        ip=parse_innings(_cell(row, layout, "ip")),
        bf=parse_count(_cell(row, layout, "bf")),
        h=parse_count(_cell(row, layout, "h_allowed")),
        hr=parse_count(_cell(row, layout, "hr_allowed")),
        r=parse_count(_cell(row, layout, "r")),
        bb=parse_count(_cell(row, layout, "bb_allowed")),
        k=parse_count(_cell(row, layout, "k_pitched")),
    )


def _fielding_line(row: Row, layout: SheetLayout) -> FieldingLine:
    return FieldingLine(
        np=parse_count(_cell(row, layout, "np")),
        e=parse_count(_cell(row, layout, "e")),
        sb=parse_count(_cell(row, layout, "sb")),
        cs=parse_count(_cell(row, layout, "cs")),
    )


def map_player_rows(rows: Sequence[Row], layout: SheetLayout | None = None) -> List[PlayerStat]:
    layout = layout or get_layout("players")
    records: List[PlayerStat] = []
    for row in _bounded(rows, layout):
        if not _has_identity(row, layout):
            continue
        records.append(
            PlayerStat(
                name=parse_text(_cell(row, layout, "name")),
                team=_optional_text(_cell(row, layout, "team")),
                games_played=parse_count(_cell(row, layout, "gp")),
                batting=_batting_line(row, layout),
                pitching=_pitching_line(row, layout),
                fielding=_fielding_line(row, layout),
            )
        )
    return records


def map_team_rows(rows: Sequence[Row], layout: SheetLayout | None = None) -> List[TeamStat]:
    layout = layout or get_layout("teams")
    records: List[TeamStat] = []
    for row in _bounded(rows, layout):
        if not _has_identity(row, layout):
            continue
        records.append(
            TeamStat(
                team=parse_text(_cell(row, layout, "name")),
                captain=_optional_text(_cell(row, layout, "captain")),
                games_played=parse_count(_cell(row, layout, "gp")),
                wins=parse_count(_cell(row, layout, "wins")),
                losses=parse_count(_cell(row, layout, "losses")),
                batting=_batting_line(row, layout),
                pitching=_pitching_line(row, layout),
                fielding=_fielding_line(row, layout),
            )
        )
    return records


def _derive_winner(home_team: str, away_team: str, home_score: int, away_score: int) -> Optional[str]:
    if home_score > away_score:
        return home_team
    if away_score > home_score:
        return away_team
    return None


def map_schedule_rows(
    rows: Sequence[Row],
    layout: SheetLayout | None = None,
    *,
    playoffs: bool = False,
) -> List[ScheduleGame]:
    """Map schedule rows in sheet order.

    Regular-season rows must carry a positive week number; playoff rows keep
    the raw game code from the same column.
    """

    layout = layout or get_layout("schedule")
    games: List[ScheduleGame] = []
    for row in _bounded(rows, layout):
        if not _has_identity(row, layout):
            continue
        raw_week = parse_text(_cell(row, layout, "week"))
        week: Optional[int] = None
        code: Optional[str] = None
        if playoffs:
            code = raw_week
        else:
            week = parse_count(raw_week)
            if week == 0:
                continue

        home_team = parse_text(_cell(row, layout, "home_team"))
        away_team = parse_text(_cell(row, layout, "away_team"))
        raw_home = parse_text(_cell(row, layout, "home_score"))
        raw_away = parse_text(_cell(row, layout, "away_score"))
        played = bool(raw_home and raw_away)

        home_score: Optional[int] = None
        away_score: Optional[int] = None
        winner: Optional[str] = None
        if played:
            home_score = parse_count(raw_home)
            away_score = parse_count(raw_away)
            winner = _derive_winner(home_team, away_team, home_score, away_score)

        games.append(
            ScheduleGame(
                week=week,
                code=code,
                away_team=away_team,
                home_team=home_team,
                away_score=away_score,
                home_score=home_score,
                played=played,
                winner=winner,
                mvp=_optional_text(_cell(row, layout, "mvp")) if played else None,
                box_score_url=_optional_text(_cell(row, layout, "box_score_url")),
            )
        )
    return games


def map_standings_rows(rows: Sequence[Row], layout: SheetLayout | None = None) -> List[StandingsRow]:
    layout = layout or get_layout("standings")
    records: List[StandingsRow] = []
    for row in _bounded(rows, layout):
        if not _has_identity(row, layout):
            continue
        runs_scored = parse_count(_cell(row, layout, "runs_scored"))
        runs_allowed = parse_count(_cell(row, layout, "runs_allowed"))
        records.append(
            StandingsRow(
                team=parse_text(_cell(row, layout, "team")),
                wins=parse_count(_cell(row, layout, "wins")),
                losses=parse_count(_cell(row, layout, "losses")),
                rank=parse_count(_cell(row, layout, "rank")),
                runs_scored=runs_scored,
                runs_allowed=runs_allowed,
                run_differential=runs_scored - runs_allowed,
                h2h_note=_optional_text(_cell(row, layout, "h2h_note")),
            )
        )
    return records


def load_sheet_csv(path: Path, *, skip_rows: int = 0) -> List[List[str]]:
    """Read a CSV export of a sheet, dropping the title/header rows above the data."""

    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        rows = [row for row in reader]
    return rows[skip_rows:]
