import pytest
from httpx import ASGITransport, AsyncClient

from leaguehub.api import create_app
from leaguehub.cache import TTLRowCache
from leaguehub.service import LeagueService
from leaguehub.source import CachedRowSource, StaticRowSource
from tests.sheets import league_sheets


@pytest.fixture
async def client():
    source = CachedRowSource(StaticRowSource(league_sheets()), TTLRowCache())
    app = create_app(LeagueService(source), revalidate_secret="s3cret")
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_category_leaders(client: AsyncClient):
    response = await client.get("/leaders/batting")
    assert response.status_code == 200
    payload = response.json()
    assert payload["category"] == "batting"
    assert payload["season"] == "regular"

    boards = {board["stat"]: board for board in payload["boards"]}
    avg = boards["avg"]
    assert avg["label"] == "Batting Average"
    assert avg["entries"][0]["rank_label"] == "T-1"
    assert avg["entries"][0]["is_tie_summary"] is True
    assert [entry["player"] for entry in avg["entries"][1:]] == ["Yoshi", "Peach"]


@pytest.mark.anyio
async def test_single_stat_and_unknowns(client: AsyncClient):
    response = await client.get("/leaders/pitching/era")
    assert response.status_code == 200
    assert [entry["value"] for entry in response.json()["entries"]] == ["1.80", "3.00", "5.73"]

    assert (await client.get("/leaders/coaching")).status_code == 404
    assert (await client.get("/leaders/pitching/war")).status_code == 404
    assert (await client.get("/leaders/batting/era")).status_code == 404


@pytest.mark.anyio
async def test_playoff_season_param(client: AsyncClient):
    response = await client.get("/leaders/batting/avg", params={"season": "playoffs"})
    assert response.status_code == 200
    assert [entry["player"] for entry in response.json()["entries"]] == ["Mario", "Yoshi"]

    assert (await client.get("/leaders/batting", params={"season": "spring"})).status_code == 422


@pytest.mark.anyio
async def test_leaders_export_csv(client: AsyncClient):
    response = await client.get("/leaders/batting/hr/export.csv")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.strip().splitlines()
    assert lines[0] == "stat,rank,player,team,value,tied_count"
    assert lines[1].startswith("hr,1,Bowser,Bowser Monsters,6")


@pytest.mark.anyio
async def test_standings(client: AsyncClient):
    response = await client.get("/standings")
    assert response.status_code == 200
    rows = response.json()
    assert [row["team"] for row in rows] == ["Mario Sunshine", "Peach Monarchs", "Yoshi Eggs", "Bowser Monsters"]
    assert rows[0]["win_pct"] == ".700"
    assert rows[0]["games_behind"] == "-"
    assert rows[1]["games_behind"] == "1"
    assert rows[0]["run_differential"] == 20

    export = await client.get("/standings/export.csv")
    assert export.text.splitlines()[1].startswith("1,Mario Sunshine,7,3,.700,-")


@pytest.mark.anyio
async def test_bracket(client: AsyncClient):
    response = await client.get("/bracket")
    assert response.status_code == 200
    payload = response.json()
    assert [round_["name"] for round_ in payload["rounds"]] == ["Semifinals", "Finals"]
    assert payload["rounds"][0]["series"][0]["winner"] == "Mario Sunshine"
    assert payload["rounds"][1]["series"][0]["team_a"] is None
    assert payload["champion"] is None


@pytest.mark.anyio
async def test_schedule(client: AsyncClient):
    response = await client.get("/schedule", params={"view": "team", "team": "bowser"})
    assert response.status_code == 200
    assert len(response.json()) == 4

    response = await client.get("/schedule", params={"view": "round", "round": "S", "season": "playoffs"})
    assert len(response.json()) == 8

    assert (await client.get("/schedule", params={"view": "week"})).status_code == 400


@pytest.mark.anyio
async def test_player_and_team(client: AsyncClient):
    response = await client.get("/players/Mario")
    assert response.status_code == 200
    payload = response.json()
    assert payload["batting"]["avg"] == ".400"
    assert payload["pitching"]["era"] == "3.00"
    assert payload["fielding"]["oaa"] == 2

    response = await client.get("/teams/Peach Monarchs")
    assert response.status_code == 200
    assert response.json()["runs_scored"] == 45

    assert (await client.get("/players/Wario")).status_code == 404
    assert (await client.get("/teams/Koopa Troop")).status_code == 404


@pytest.mark.anyio
async def test_head_to_head(client: AsyncClient):
    response = await client.get("/head-to-head", params={"team_a": "Mario Sunshine", "team_b": "Peach Monarchs"})
    assert response.status_code == 200
    assert response.json()["wins_a"] == 1

    response = await client.get("/head-to-head", params={"team_a": "Mario Sunshine", "team_b": "Yoshi Eggs"})
    assert response.status_code == 404


@pytest.mark.anyio
async def test_revalidate(client: AsyncClient):
    await client.get("/standings")

    denied = await client.post("/revalidate", json={"secret": "wrong"})
    assert denied.status_code == 401

    response = await client.post("/revalidate", json={"secret": "s3cret"})
    assert response.status_code == 200
    assert response.json() == {"revalidated": True, "tag": "sheets", "evicted": 2}


@pytest.mark.anyio
async def test_revalidate_without_configured_secret(monkeypatch):
    monkeypatch.delenv("LEAGUEHUB_REVALIDATE_SECRET", raising=False)
    app = create_app(LeagueService(StaticRowSource(league_sheets())))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        response = await client.post("/revalidate", json={"secret": "anything"})
    assert response.status_code == 500
