"""Command-line interface for printing league views from sheet exports."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Sequence

from leaguehub.cache import TTLRowCache
from leaguehub.config_loader import LeagueProfile
from leaguehub.export import bracket_to_csv, leaders_to_csv, schedule_to_csv, standings_to_csv
from leaguehub.leaders import iter_categories
from leaguehub.service import LeagueService
from leaguehub.source import CachedRowSource, CsvDirectorySource
from leaguehub.standings import format_games_behind


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="League leaders, standings and playoff bracket from sheet exports")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=os.getenv("LEAGUEHUB_DATA_DIR"),
        help="Directory holding one CSV export per sheet (defaults to LEAGUEHUB_DATA_DIR)",
    )
    parser.add_argument("--profile", type=Path, default=None, help="League profile JSON")
    parser.add_argument("--format", choices=("json", "csv"), default="json", help="Output format")
    parser.add_argument("--output", type=Path, default=None, help="Write to a file instead of stdout")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    leaders = commands.add_parser("leaders", help="Category leaderboards")
    leaders.add_argument("category", choices=tuple(iter_categories()))
    leaders.add_argument("--playoffs", action="store_true", help="Use the playoff sheets")

    commands.add_parser("standings", help="Regular-season standings")
    commands.add_parser("bracket", help="Playoff bracket")

    schedule = commands.add_parser("schedule", help="Schedule views")
    schedule.add_argument(
        "--view",
        choices=("all", "recent", "current", "upcoming", "team", "week", "round"),
        default="all",
    )
    schedule.add_argument("--team", default=None)
    schedule.add_argument("--week", type=int, default=None)
    schedule.add_argument("--round", dest="round_code", default=None)
    schedule.add_argument("--playoffs", action="store_true", help="Use the playoff schedule")

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser.parse_args(argv)


def _build_service(args: argparse.Namespace) -> LeagueService:
    if args.data_dir is None:
        raise SystemExit("A data directory is required (--data-dir or LEAGUEHUB_DATA_DIR)")
    profile = LeagueProfile.load(args.profile) if args.profile else LeagueProfile()
    ttl = profile.cache_ttl if profile.cache_ttl is not None else 60.0
    source = CachedRowSource(CsvDirectorySource(args.data_dir), TTLRowCache(ttl))
    return LeagueService.from_profile(source, profile)


def _render(args: argparse.Namespace, service: LeagueService) -> str:
    as_csv = args.format == "csv"

    if args.command == "leaders":
        boards = service.leaders(args.category, playoffs=args.playoffs)
        if as_csv:
            return leaders_to_csv(boards)
        payload: Any = {
            stat: [dict(entry.model_dump(mode="json"), rank_label=entry.rank_label) for entry in entries]
            for stat, entries in boards.items()
        }
    elif args.command == "standings":
        lines = service.standings_table()
        if as_csv:
            return standings_to_csv(lines)
        payload = [
            dict(
                line.row.model_dump(mode="json"),
                games_behind=format_games_behind(line.games_behind),
                streak=line.streak,
            )
            for line in lines
        ]
    elif args.command == "bracket":
        bracket = service.bracket()
        if as_csv:
            return bracket_to_csv(bracket)
        payload = dict(bracket.model_dump(mode="json"), champion=bracket.champion)
    else:
        games = service.schedule_view(
            args.view,
            playoffs=args.playoffs,
            team=args.team,
            week=args.week,
            round_code=args.round_code,
        )
        if as_csv:
            return schedule_to_csv(games)
        payload = [game.model_dump(mode="json") for game in games]
    return json.dumps(payload, indent=2) + "\n"


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "serve":
        import uvicorn

        from leaguehub.api import create_app

        service = _build_service(args) if args.data_dir is not None else None
        uvicorn.run(create_app(service), host=args.host, port=args.port)
        return

    text = _render(args, _build_service(args))
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"Wrote {args.command} to {args.output}")
    else:
        print(text, end="")


if __name__ == "__main__":
    main()
