import pytest
from fastapi.testclient import TestClient

import letterbox.sources
from letterbox.puzzle import PuzzleError
from letterbox.server import create_app
from letterbox.settings import settings
from letterbox.sources import LivePuzzle

WORDS = ["abcd", "dabc", "cadb", "dcbd", "abca"]


@pytest.fixture
def client():
    with TestClient(create_app(words=WORDS)) as c:
        yield c


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "words_loaded": len(WORDS)}


def test_solve_path_puzzle(client):
    resp = client.get("/solve/A-B-C-D", params={"strategy": "bounded"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["sides"] == ["a", "b", "c", "d"]
    assert ["abcd"] in body["solutions"]
    assert body["solution_count"] == len(body["solutions"])
    assert "solve" in body["stage_timings"]
    for chain in body["solutions"]:
        assert set("".join(chain)) == set("abcd")


def test_solve_respects_max_results(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_RESULTS", 1)
    body = client.get("/solve/a-b-c-d").json()
    assert len(body["solutions"]) == 1
    assert body["solution_count"] > 1


@pytest.mark.parametrize("path", ["/solve/ab-cd-ef", "/solve/ab-c-ef-gh", "/solve/a1-bc-de-fg"])
def test_solve_rejects_malformed_puzzle(client, path):
    resp = client.get(path)
    assert resp.status_code == 400


def test_solve_rejects_unknown_strategy(client):
    resp = client.get("/solve/a-b-c-d", params={"strategy": "greedy"})
    assert resp.status_code == 400
    assert "Unknown strategy" in resp.json()["detail"]


def test_today(client, monkeypatch):
    async def fake_fetch(url, timeout=10.0, transport=None):
        return LivePuzzle(sides=["a", "b", "c", "d"], words=["abcd", "dcba"])

    monkeypatch.setattr(letterbox.sources, "fetch_live_puzzle", fake_fetch)
    resp = client.get("/today", params={"strategy": "pair"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["sides"] == ["a", "b", "c", "d"]
    assert sorted(body["solutions"]) == [["abcd", "dcba"], ["dcba", "abcd"]]
    assert "fetch" in body["stage_timings"]


def test_today_unparsable_page(client, monkeypatch):
    async def fake_fetch(url, timeout=10.0, transport=None):
        raise PuzzleError("Could not find sides and dictionary in puzzle page")

    monkeypatch.setattr(letterbox.sources, "fetch_live_puzzle", fake_fetch)
    resp = client.get("/today")
    assert resp.status_code == 502


def test_settings_api(client, monkeypatch):
    monkeypatch.setattr(settings, "WORD_LIMIT", settings.WORD_LIMIT)
    resp = client.get("/api/settings")
    assert resp.status_code == 200
    assert resp.json()["field_types"]["WORD_LIMIT"] == "int"

    resp = client.post("/api/settings", json={"WORD_LIMIT": 3})
    assert resp.status_code == 200
    assert resp.json()["updated"]["WORD_LIMIT"] == 3

    resp = client.post("/api/settings", json={"PORT": 1})
    assert resp.status_code == 400
    assert "PORT" in resp.json()["errors"]
