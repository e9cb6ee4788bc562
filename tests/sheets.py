"""Builders for raw sheet rows laid out the way the league sheets are."""

from __future__ import annotations

from leaguehub.config import get_layout


def sheet_row(kind: str, **values) -> list[str]:
    layout = get_layout(kind)
    row = [""] * (max(layout.columns.values()) + 1)
    for name, value in values.items():
        row[layout.index(name)] = "" if value is None else str(value)
    return row


def player_row(name: str, team: str | None, **stats) -> list[str]:
    return sheet_row("players", name=name, team=team, **stats)


def team_row(name: str, **stats) -> list[str]:
    return sheet_row("teams", name=name, **stats)


def game_row(week, away: str, home: str, away_score=None, home_score=None, **extra) -> list[str]:
    return sheet_row(
        "schedule",
        week=week,
        away_team=away,
        home_team=home,
        away_score=away_score,
        home_score=home_score,
        **extra,
    )


def standings_row(team: str, wins: int, losses: int, runs_scored: int, runs_allowed: int, rank: int = 0) -> list[str]:
    return sheet_row(
        "standings",
        rank=rank,
        team=team,
        wins=wins,
        losses=losses,
        runs_scored=runs_scored,
        runs_allowed=runs_allowed,
    )


def league_sheets() -> dict[str, list[list[str]]]:
    """A four-team league two weeks into the season with the semifinals under way."""

    players = [
        player_row("Mario", "Mario Sunshine", gp=10, ab=30, h=12, hr=4, rbi=10, bb=3, tb=20,
                   ip=12, bf=50, h_allowed=10, r=4, bb_allowed=2, w=2, np=3, e=1, sb=2),
        player_row("Luigi", "Mario Sunshine", gp=10, ab=25, h=10, hr=2, rbi=6, tb=14),
        player_row("Peach", "Peach Monarchs", gp=10, ab=28, h=7, hr=1, rbi=4, tb=9,
                   ip=15, bf=60, h_allowed=12, r=3, bb_allowed=1, w=3, sv=1, np=5),
        player_row("Bowser", "Bowser Monsters", gp=10, ab=20, h=15, hr=6, rbi=12, tb=33, ip=8, bf=30),
        player_row("Yoshi", "Yoshi Eggs", gp=10, ab=22, h=6, tb=7, ip=11, bf=45, h_allowed=14, r=7, sb=4),
        player_row("", "Yoshi Eggs", gp=10, ab=99, h=99),
    ]
    teams = [
        team_row("Mario Sunshine", captain="Mario", gp=10, wins=7, losses=3, ab=55, h=22, r=30),
        team_row("Peach Monarchs", captain="Peach", gp=10, wins=6, losses=4, ab=28, h=7, r=40),
        team_row("Bowser Monsters", captain="Bowser", gp=10, wins=3, losses=7, ab=20, h=15, r=49),
        team_row("Yoshi Eggs", captain="Yoshi", gp=10, wins=4, losses=6, ab=22, h=6, r=44),
    ]
    standings = [
        standings_row("Yoshi Eggs", 4, 6, 38, 44),
        standings_row("Mario Sunshine", 7, 3, 50, 30),
        standings_row("Bowser Monsters", 3, 7, 30, 49),
        standings_row("Peach Monarchs", 6, 4, 45, 40),
    ]
    schedule = [
        game_row(1, "Peach Monarchs", "Mario Sunshine", 3, 5, mvp="Mario"),
        game_row(1, "Bowser Monsters", "Yoshi Eggs", 2, 4),
        game_row(2, "Mario Sunshine", "Bowser Monsters", 6, 1),
        game_row(2, "Yoshi Eggs", "Peach Monarchs", 2, 7),
        game_row(3, "Bowser Monsters", "Peach Monarchs"),
        game_row(3, "Mario Sunshine", "Yoshi Eggs"),
        game_row(4, "Yoshi Eggs", "Bowser Monsters"),
    ]
    playoff_schedule = [
        game_row("S1", "Peach Monarchs", "Mario Sunshine", 2, 4),
        game_row("S2", "Bowser Monsters", "Yoshi Eggs", 3, 5),
        game_row("S1", "Mario Sunshine", "Peach Monarchs", 3, 5),
        game_row("S2", "Yoshi Eggs", "Bowser Monsters", 2, 4),
        game_row("S1", "Peach Monarchs", "Mario Sunshine", 1, 6),
        game_row("S2", "Bowser Monsters", "Yoshi Eggs", 0, 3),
        game_row("S1", "Mario Sunshine", "Peach Monarchs", 6, 2),
        game_row("S2", "Yoshi Eggs", "Bowser Monsters"),
    ]
    playoff_players = [
        player_row("Mario", "Mario Sunshine", gp=4, ab=12, h=6, hr=2, tb=12, ip=3, bf=12, r=1),
        player_row("Peach", "Peach Monarchs", gp=4, ab=4, h=3, hr=1, tb=6, ip=4, bf=16, r=4),
        player_row("Yoshi", "Yoshi Eggs", gp=3, ab=9, h=3, tb=4, ip=1, bf=5),
    ]
    playoff_teams = [
        team_row("Mario Sunshine", gp=4, wins=3, losses=1),
        team_row("Peach Monarchs", gp=4, wins=1, losses=3),
        team_row("Yoshi Eggs", gp=3, wins=2, losses=1),
        team_row("Bowser Monsters", gp=3, wins=1, losses=2),
    ]
    return {
        "Players": players,
        "Teams": teams,
        "Standings": standings,
        "Schedule": schedule,
        "Playoff Schedule": playoff_schedule,
        "Playoff Players": playoff_players,
        "Playoff Teams": playoff_teams,
    }
