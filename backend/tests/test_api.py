"""Integration tests for the HTTP API."""

import random
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from gapgame.main import create_app
from gapgame.store import TextStore

_SEED_PATH = Path(__file__).parent.parent / "gapgame" / "texts.json"


@pytest.fixture
def client(tmp_path):
    store = TextStore(tmp_path / "texts_store.json", _SEED_PATH)
    app = create_app(store=store, rng=random.Random(0))
    with TestClient(app) as c:
        yield c


class TestTextEndpoints:
    def test_list(self, client):
        response = client.get("/api/texts")
        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [1, 2, 3]

    def test_get(self, client):
        assert client.get("/api/texts/2").json()["title"] == "הגינה שלי"

    def test_get_missing(self, client):
        assert client.get("/api/texts/99").status_code == 404

    def test_create(self, client):
        response = client.post("/api/texts", json={"title": "חדש", "content": "תוכן חדש"})
        assert response.status_code == 201
        assert response.json() == {"id": 4, "title": "חדש", "content": "תוכן חדש"}

    def test_create_blank(self, client):
        response = client.post("/api/texts", json={"title": " ", "content": "תוכן"})
        assert response.status_code == 422

    def test_update(self, client):
        response = client.put("/api/texts/1", json={"title": "א", "content": "ב"})
        assert response.status_code == 200
        assert client.get("/api/texts/1").json()["content"] == "ב"

    def test_update_missing(self, client):
        response = client.put("/api/texts/99", json={"title": "א", "content": "ב"})
        assert response.status_code == 404

    def test_delete(self, client):
        assert client.delete("/api/texts/3").status_code == 204
        assert client.get("/api/texts/3").status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/api/texts/99").status_code == 404


class TestGameEndpoints:
    def test_round(self, client):
        response = client.post("/api/game/round")
        assert response.status_code == 200
        data = response.json()
        assert len(data["words"]) == 10
        titles = {t["title"] for t in client.get("/api/texts").json()}
        assert data["selected_text"]["title"] in titles
        assert all(2 <= len(w["word"]) <= 5 for w in data["words"])

    def test_round_for_specific_text(self, client):
        data = client.post("/api/game/round", params={"text_id": 3, "count": 4}).json()
        assert data["selected_text"]["title"] == "המתכון המשפחתי"
        assert len(data["words"]) == 4

    def test_round_rejects_zero_count(self, client):
        assert client.post("/api/game/round", params={"count": 0}).status_code == 422

    def test_round_then_gaps(self, client):
        game_round = client.post("/api/game/round").json()
        words = [w["word"] for w in game_round["words"]]
        response = client.post(
            "/api/game/gaps",
            json={"text": game_round["selected_text"], "words": words},
        )
        assert response.status_code == 200
        gaps = response.json()
        assert gaps["gap_words"] == words
        starts = [p["start"] for p in gaps["gap_positions"]]
        assert starts == sorted(starts)

    def test_gaps_scenario(self, client):
        response = client.post(
            "/api/game/gaps",
            json={"text": {"title": "t", "content": "שלום עולם שלום"}, "words": ["שלום"]},
        )
        assert response.json() == {
            "title": "t",
            "content": "____ עולם שלום",
            "gap_words": ["שלום"],
            "gap_positions": [{"start": 0, "end": 4, "word": "שלום"}],
        }

    def test_check(self, client):
        response = client.post(
            "/api/game/check",
            json={
                "gap_positions": [{"start": 0, "end": 4, "word": "שלום"}],
                "answers": ["שלום"],
            },
        )
        assert response.json()["all_correct"] is True

    def test_time_limit(self, client):
        response = client.get("/api/game/time-limit", params={"level": 4, "previous_seconds": 100})
        assert response.json() == {"level": 4, "seconds": 90}
        untimed = client.get("/api/game/time-limit", params={"level": 2}).json()
        assert untimed["seconds"] is None

    def test_time_limit_unknown_level(self, client):
        response = client.get("/api/game/time-limit", params={"level": 9})
        assert response.status_code == 422


class TestStorageUnavailable:
    def test_corrupt_store_answers_503(self, tmp_path):
        path = tmp_path / "texts_store.json"
        path.write_text("[oops", encoding="utf-8")
        app = create_app(store=TextStore(path))
        with TestClient(app) as client:
            assert client.get("/api/texts").status_code == 503
            assert client.post("/api/game/round").status_code == 503
            # Pure endpoints keep working
            response = client.post(
                "/api/game/gaps", json={"text": {"title": "t", "content": "א ב"}, "words": ["ב"]}
            )
            assert response.status_code == 200
