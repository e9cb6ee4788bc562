"""Input adapters that turn raw sheet grids into typed records."""

from .rows import (
    load_sheet_csv,
    map_player_rows,
    map_schedule_rows,
    map_standings_rows,
    map_team_rows,
    parse_count,
    parse_number,
)

__all__ = [
    "load_sheet_csv",
    "map_player_rows",
    "map_schedule_rows",
    "map_standings_rows",
    "map_team_rows",
    "parse_count",
    "parse_number",
]
