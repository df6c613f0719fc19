"""HTTP surface tests using FastAPI's test client."""

from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from server.api import app

TABLE = {"id": "table-1", "category": "table", "style": "modern", "price": 500, "colors": ["#FFFFFF"]}
SOFA = {"id": "sofa-1", "category": "sofa", "style": "modern", "price": 500, "colors": ["#FFFFFF"]}
BED = {"id": "bed-1", "category": "bed", "style": "bohemian", "price": 100, "colors": ["#FF4500"]}


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


def test_healthz(client: TestClient) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_analyze_empty_room(client: TestClient) -> None:
    response = client.post("/room-style/analyze", json={"items": []})
    assert response.status_code == 200
    body = response.json()
    assert body["analysis"] == {"style": "unknown", "confidence": 0.0, "style_scores": {}, "analysis": {}}
    assert body["item_count"] == 0


def test_room_suggestions(client: TestClient) -> None:
    body = client.get("/room-style/suggestions/bedroom").json()
    assert [entry["style"] for entry in body["suggestions"]][:1] == ["scandinavian"]


def test_style_palette_unknown_style(client: TestClient) -> None:
    assert client.get("/room-style/palettes/art_deco").status_code == 404
    body = client.get("/room-style/palettes/modern", params={"room_type": "kitchen"}).json()
    assert body["success"] is True


def test_item_compatibility(client: TestClient) -> None:
    body = client.post("/room-style/compatibility", json={"item1": TABLE, "item2": SOFA}).json()
    assert body["compatibility"]["style"] == 1.0
    assert body["level"] in {"Excellent", "Good", "Fair", "Poor"}


def test_find_matches_requires_selected_id(client: TestClient) -> None:
    response = client.post("/matching/find-matches", json={"selected_item": {"title": "x"}, "candidates": [SOFA]})
    assert response.status_code == 400
    assert response.json()["detail"] == "Selected item is required"


def test_find_matches_score_mode(client: TestClient) -> None:
    response = client.post(
        "/matching/find-matches",
        json={"selected_item": TABLE, "candidates": [BED, SOFA], "mode": "score"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert body["room_type"] == "living"
    assert body["matches"][0]["id"] == "sofa-1"
    assert "match_score" in body["matches"][0]


def test_find_matches_color_mode_by_default(client: TestClient) -> None:
    body = client.post("/matching/find-matches", json={"selected_item": TABLE, "candidates": [BED, SOFA]}).json()
    assert all("color_match_score" in match for match in body["matches"])


def test_find_matches_rejects_unknown_mode(client: TestClient) -> None:
    response = client.post(
        "/matching/find-matches",
        json={"selected_item": TABLE, "candidates": [SOFA], "mode": "popularity"},
    )
    assert response.status_code == 422


def test_match_score_endpoint(client: TestClient) -> None:
    body = client.post("/matching/score", json={"selected_item": TABLE, "candidate": SOFA}).json()
    assert body["match_score"]["overall"] == pytest.approx(0.94)
    assert body["match_score"]["category_score"] == 0.95


def test_color_palette_endpoint(client: TestClient) -> None:
    ok = client.post("/colors/palette", json={"primary_color": "#FF0000", "room_type": "dining"})
    assert ok.status_code == 200
    assert len(ok.json()["palette"]["accent"]) == 3
    assert client.post("/colors/palette", json={"primary_color": "zzzzzz"}).status_code == 400


def test_correlation_id_is_echoed(client: TestClient) -> None:
    response = client.get("/healthz", headers={"X-Correlation-ID": "req-123"})
    assert response.headers["X-Correlation-ID"] == "req-123"
    generated = client.get("/healthz").headers["X-Correlation-ID"]
    assert len(generated) == 32


def test_negative_dimensions_rejected_at_boundary(client: TestClient) -> None:
    response = client.post(
        "/matching/score",
        json={"selected_item": {"id": "a", "dimensions": {"width": -10, "depth": 5}}, "candidate": SOFA},
    )
    assert response.status_code == 422
