import logging

import pytest

from leaguehub.config import RoundSpec
from leaguehub.models import ScheduleGame, Series
from leaguehub.playoffs import build_bracket, build_bracket_from_games, group_series, resolve_series


def _game(code, away, home, away_score=None, home_score=None) -> ScheduleGame:
    played = away_score is not None and home_score is not None
    winner = None
    if played and away_score != home_score:
        winner = home if home_score > away_score else away
    return ScheduleGame(
        code=code,
        away_team=away,
        home_team=home,
        away_score=away_score,
        home_score=home_score,
        played=played,
        winner=winner,
    )


def test_unplayed_game_is_grouped_but_adds_no_wins():
    first = _game("S1", "B", "A")
    second = _game("S1", "A", "B", 3, 5)

    [series] = group_series([first, second])
    assert (series.team_a, series.team_b) == ("A", "B")
    assert series.games == [first, second]
    assert (series.wins_a, series.wins_b) == (0, 1)

    resolved = resolve_series(series, best_of=3)
    assert resolved.winner is None
    assert resolved.best_of == 3


def test_grouping_is_stable_and_order_independent_of_home_away():
    games = [
        _game("S1", "Peach", "Mario", 2, 4),
        _game("S2", "Bowser", "Yoshi", 3, 5),
        _game("S1", "Mario", "Peach", 3, 5),
        _game("S2", "Yoshi", "Bowser", 2, 4),
    ]

    series = group_series(games)
    assert [(item.team_a, item.team_b) for item in series] == [("Mario", "Peach"), ("Yoshi", "Bowser")]
    assert series[0].games == [games[0], games[2]]
    assert series[1].games == [games[1], games[3]]
    for item in series:
        assert item.wins_a + item.wins_b <= len(item.games)


def test_winner_set_exactly_when_threshold_reached():
    games = [
        _game("F1", "B", "A", 1, 2),
        _game("F2", "A", "B", 1, 2),
        _game("F3", "B", "A", 0, 4),
    ]
    [series] = group_series(games)

    assert resolve_series(series, best_of=5).winner is None
    assert resolve_series(series, best_of=3).winner == "A"


def test_later_games_do_not_change_a_decided_winner():
    games = [
        _game("F1", "B", "A", 1, 2),
        _game("F2", "B", "A", 1, 2),
        _game("F3", "A", "B", 0, 4),
        _game("F4", "A", "B", 0, 4),
        _game("F5", "A", "B", 0, 4),
    ]
    [series] = group_series(games)

    resolved = resolve_series(series, best_of=3)
    assert resolved.winner == "A"
    assert (resolved.wins_a, resolved.wins_b) == (2, 3)


def test_default_bracket_places_series_by_round_code():
    games = [
        _game("F1", "Yoshi", "Mario", 1, 3),
        _game("S1", "Peach", "Mario", 2, 4),
        _game("S2", "Bowser", "Yoshi", 3, 5),
        _game("S1", "Mario", "Peach", 3, 5),
        _game("S1", "Peach", "Mario", 1, 6),
        _game("S1", "Mario", "Peach", 6, 2),
    ]

    bracket = build_bracket_from_games(games)
    semis, finals = bracket.rounds
    assert semis.name == "Semifinals"
    assert finals.name == "Finals"

    first, second = semis.series
    assert (first.team_a, first.team_b, first.wins_a, first.wins_b) == ("Mario", "Peach", 3, 1)
    assert first.winner == "Mario"
    assert first.best_of == 5
    assert (second.team_a, second.winner) == ("Yoshi", None)

    [final] = finals.series
    assert (final.team_a, final.team_b) == ("Mario", "Yoshi")
    assert final.best_of == 7
    assert bracket.champion is None


def test_empty_slots_become_tbd_series():
    bracket = build_bracket_from_games([_game("S1", "Peach", "Mario", 2, 4)])

    semis, finals = bracket.rounds
    assert len(semis.series) == 2
    assert semis.series[1].is_tbd
    assert semis.series[1].team_a is None
    assert finals.series[0].is_tbd
    assert finals.series[0].winner is None


def test_series_without_codes_fill_rounds_in_order():
    policy = (
        RoundSpec(name="Quarterfinals", series_count=2, best_of=3),
        RoundSpec(name="Finals", series_count=1, best_of=3),
    )
    games = [
        _game("G1", "B", "A", 1, 2),
        _game("G2", "D", "C", 1, 2),
        _game("G3", "C", "A", 1, 2),
    ]

    bracket = build_bracket_from_games(games, policy)
    assert [(item.team_a, item.team_b) for item in bracket.rounds[0].series] == [("A", "B"), ("C", "D")]
    assert (bracket.rounds[1].series[0].team_a, bracket.rounds[1].series[0].team_b) == ("A", "C")


def test_overflow_series_are_logged_and_dropped(caplog: pytest.LogCaptureFixture):
    games = [
        _game("F1", "B", "A", 1, 2),
        _game("F1", "D", "C", 1, 2),
    ]
    policy = (RoundSpec(name="Finals", series_count=1, best_of=1, codes=("F",)),)

    with caplog.at_level(logging.WARNING):
        bracket = build_bracket_from_games(games, policy)

    [final] = bracket.rounds[0].series
    assert final.team_a == "A"
    assert final.winner == "A"
    assert bracket.champion == "A"
    assert "Dropping series C vs D" in caplog.text


def test_round_order_follows_policy():
    policy = (
        RoundSpec(name="Finals", series_count=1, best_of=7, codes=("F",)),
        RoundSpec(name="Semifinals", series_count=2, best_of=5, codes=("S",)),
    )
    bracket = build_bracket([Series()], policy)
    assert [round_.name for round_ in bracket.rounds] == ["Finals", "Semifinals"]


def test_empty_input_gives_all_tbd_bracket():
    bracket = build_bracket_from_games([])
    assert [len(round_.series) for round_ in bracket.rounds] == [2, 1]
    assert all(series.is_tbd for round_ in bracket.rounds for series in round_.series)
