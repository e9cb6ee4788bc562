import pytest

from leaguehub.cache import TTLRowCache
from leaguehub.config_loader import LeagueProfile
from leaguehub.leaders import collapse_never
from leaguehub.service import LeagueService
from leaguehub.source import CachedRowSource, StaticRowSource
from tests.sheets import league_sheets


def _service(**kwargs) -> LeagueService:
    return LeagueService(StaticRowSource(league_sheets()), **kwargs)


class _FailingSource:
    def fetch(self, layout, *, playoffs=False):
        raise ConnectionError("sheet service unavailable")


def test_batting_leaders_exclude_unqualified_players():
    boards = _service().leaders("batting")

    avg = boards["avg"]
    assert avg[0].is_tie_summary
    assert avg[0].player == "2 Players Tied"
    assert avg[0].value == ".400"
    assert [(entry.player, entry.rank) for entry in avg[1:]] == [("Yoshi", 3), ("Peach", 4)]
    assert all(entry.player != "Bowser" for entry in avg)

    assert [entry.player for entry in boards["hr"]] == ["Bowser", "Mario", "Luigi", "Peach"]


def test_leaders_respect_injected_policy_and_count():
    avg = _service(tie_policy=collapse_never, leaders_count=2).leaders("batting")["avg"]
    assert [entry.player for entry in avg] == ["Mario", "Luigi", "Yoshi"]
    assert [entry.rank_label for entry in avg] == ["T-1", "T-1", "3"]


def test_pitching_leaders():
    era = _service().stat_leaders("era")
    assert [(entry.player, entry.value) for entry in era] == [("Peach", "1.80"), ("Mario", "3.00"), ("Yoshi", "5.73")]


def test_playoff_leaders_use_fixed_minimums():
    avg = _service().leaders("batting", playoffs=True)["avg"]
    assert [entry.player for entry in avg] == ["Mario", "Yoshi"]


def test_standings_ordering_and_table():
    service = _service()
    assert [row.team for row in service.standings()] == [
        "Mario Sunshine",
        "Peach Monarchs",
        "Yoshi Eggs",
        "Bowser Monsters",
    ]

    table = service.standings_table()
    assert table[0].games_behind is None
    assert table[1].games_behind == pytest.approx(1)
    assert table[0].streak == "W2"
    assert table[1].streak == "W1"


def test_team_lookup_fills_runs_scored():
    team = _service().team("mario sunshine")
    assert team.runs_scored == 50
    assert team.runs_allowed == 30

    playoff_team = _service().team("Mario Sunshine", playoffs=True)
    assert playoff_team.runs_scored == 4 + 3 + 6 + 6

    with pytest.raises(KeyError):
        _service().team("Koopa Troop")


def test_player_lookup():
    assert _service().player(" LUIGI ").batting.ab == 25
    with pytest.raises(KeyError):
        _service().player("Wario")


def test_bracket():
    bracket = _service().bracket()
    semis, finals = bracket.rounds
    assert semis.series[0].winner == "Mario Sunshine"
    assert (semis.series[1].team_a, semis.series[1].wins_a, semis.series[1].wins_b) == ("Yoshi Eggs", 2, 1)
    assert semis.series[1].winner is None
    assert finals.series[0].is_tbd


def test_schedule_views():
    service = _service()
    assert {game.week for game in service.schedule_view("recent")} == {2}
    assert {game.week for game in service.schedule_view("current")} == {3}
    assert {game.week for game in service.schedule_view("upcoming")} == {4}
    assert len(service.schedule_view("round", playoffs=True, round_code="S")) == 8


def test_head_to_head():
    record = _service().head_to_head("Mario Sunshine", "Peach Monarchs")
    assert record is not None
    assert record.leader == "Mario Sunshine"


def test_fetch_failure_propagates(caplog: pytest.LogCaptureFixture):
    service = LeagueService(_FailingSource())
    with pytest.raises(ConnectionError):
        service.leaders("batting")
    assert "Failed to fetch" in caplog.text


def test_invalidate_reaches_the_cache():
    source = CachedRowSource(StaticRowSource(league_sheets()), TTLRowCache())
    service = LeagueService(source)
    service.standings()
    assert service.invalidate() == 1
    assert LeagueService(StaticRowSource(league_sheets())).invalidate() == 0


def test_from_profile_applies_settings():
    profile = LeagueProfile(leaders_count=1, tie_policy="collapse_never")
    service = LeagueService.from_profile(StaticRowSource(league_sheets()), profile)
    avg = service.leaders("batting")["avg"]
    assert [entry.player for entry in avg] == ["Mario", "Luigi"]


def test_from_env_reads_variables(tmp_path, monkeypatch):
    monkeypatch.setenv("LEAGUEHUB_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LEAGUEHUB_LEADERS_COUNT", "3")
    monkeypatch.setenv("LEAGUEHUB_CACHE_TTL", "not-a-number")
    monkeypatch.delenv("LEAGUEHUB_PROFILE", raising=False)

    service = LeagueService.from_env()
    assert service.leaders_count == 3
    assert isinstance(service.source, CachedRowSource)
    assert service.source.cache.ttl == pytest.approx(60.0)


def test_from_env_requires_data_dir(monkeypatch):
    monkeypatch.delenv("LEAGUEHUB_DATA_DIR", raising=False)
    with pytest.raises(ValueError):
        LeagueService.from_env()
