"""
Tests for the reveal HTTP API.

These tests drive the FastAPI app end to end: a locked roster goes in, frames,
an outcome and a replayable snapshot come out.
"""

import pytest
from fastapi.testclient import TestClient

from whiteboard.api.main import create_app
from whiteboard.match.situations import DEFAULT_SITUATION


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(create_app())


@pytest.fixture
def reveal_body(slants_vs_cover3):
    return {
        "players": [p.to_dict() for p in slants_vs_cover3],
        "situation": DEFAULT_SITUATION.to_dict(),
    }


class TestHealth:
    """Tests for the service endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "Whiteboard API"


class TestTemplates:
    """Tests for GET /api/v1/reveal/templates."""

    def test_all_templates(self, client):
        response = client.get("/api/v1/reveal/templates")
        assert response.status_code == 200
        assert {t["id"] for t in response.json()} == {
            "quick-slants", "inside-zone", "cover-3", "cover-1-blitz",
        }

    def test_filter_by_team(self, client):
        response = client.get("/api/v1/reveal/templates", params={"team": "defense"})
        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == ["cover-3", "cover-1-blitz"]

    def test_unknown_team(self, client):
        response = client.get("/api/v1/reveal/templates", params={"team": "special-teams"})
        assert response.status_code == 422


class TestReveal:
    """Tests for POST /api/v1/reveal."""

    def test_reveal(self, client, reveal_body):
        response = client.post("/api/v1/reveal", json=reveal_body)
        assert response.status_code == 200

        data = response.json()
        assert data["frames"][0]["index"] == 0
        assert data["frames"][0]["ball"]["carrier_id"] == "qb"
        assert len(data["frames"]) <= 161
        assert data["outcome"]["cause"] in {"completion", "incompletion", "sack"}
        assert data["snapshot"]["version"] == 1
        assert data["events"][0]["type"] == "snap"
        assert data["events"][-1]["type"] == "play_end"

    def test_replay_matches_reveal(self, client, reveal_body):
        first = client.post("/api/v1/reveal", json=reveal_body).json()

        response = client.post("/api/v1/reveal/replay", json={"snapshot": first["snapshot"]})
        assert response.status_code == 200

        replayed = response.json()
        assert replayed["frames"] == first["frames"]
        assert replayed["outcome"] == first["outcome"]

    def test_false_start(self, client, reveal_body):
        lt = next(p for p in reveal_body["players"] if p["id"] == "lt")
        lt["position"]["y"] = 34.0

        response = client.post("/api/v1/reveal", json=reveal_body)
        assert response.status_code == 200

        data = response.json()
        assert data["frames"] == []
        assert data["snapshot"] is None
        assert data["outcome"]["cause"] == "penalty"
        assert data["outcome"]["message"] == "False start on the offense. Ball moved back 5 yards."
        assert data["outcome"]["next_situation"]["ball_spot_yard"] == 40
        assert data["outcome"]["penalty"]["player_id"] == "lt"

    def test_wrong_side_assignment_rejected(self, client, reveal_body):
        wr1 = next(p for p in reveal_body["players"] if p["id"] == "wr1")
        wr1["assignment"] = "blitz"
        wr1["path"] = []

        response = client.post("/api/v1/reveal", json=reveal_body)
        assert response.status_code == 422
        assert "blitz" in response.json()["detail"]

    def test_dangling_man_target_rejected(self, client, reveal_body):
        db1 = next(p for p in reveal_body["players"] if p["id"] == "db1")
        db1["assignment"] = "man"
        db1["path"] = []
        db1["man_target_id"] = "ghost"

        response = client.post("/api/v1/reveal", json=reveal_body)
        assert response.status_code == 422

    def test_off_field_position_rejected(self, client, reveal_body):
        reveal_body["players"][0]["position"]["x"] = 70.0
        response = client.post("/api/v1/reveal", json=reveal_body)
        assert response.status_code == 422

    def test_empty_roster_rejected(self, client):
        response = client.post("/api/v1/reveal", json={"players": []})
        assert response.status_code == 422


class TestReplay:
    """Tests for POST /api/v1/reveal/replay."""

    def test_bad_version(self, client):
        response = client.post("/api/v1/reveal/replay", json={"snapshot": {"version": 99}})
        assert response.status_code == 422
        assert "version" in response.json()["detail"]

    def test_malformed_snapshot(self, client):
        response = client.post("/api/v1/reveal/replay", json={"snapshot": {"version": 1}})
        assert response.status_code == 422
        assert "Malformed" in response.json()["detail"]
