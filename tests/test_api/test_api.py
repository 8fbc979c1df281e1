"""Tests for API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from dxfscene.config import Settings
from dxfscene.dependencies import get_settings
from dxfscene.main import app
from tests.conftest import BY_BLOCK, BY_LAYER, SceneBuilder, square

client = TestClient(app)


def _scene() -> dict:
    builder = SceneBuilder().layer("walls", 0xFF0000, "Walls").layer("pale", 0xFFFFFF)
    builder.lines(square(), layer="walls", color=BY_LAYER)
    builder.chunked([(square(), [0, 1, 2])], block="B", color=BY_BLOCK)
    builder.insert("B", layer="pale", color=0xFFFFFF)
    return builder.build(origin={"x": 1.0, "y": 2.0})


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": "0.1.0"}


def test_load_scene():
    response = client.post("/api/scene", json={"scene": _scene()})
    assert response.status_code == 200
    data = response.json()
    assert data["entityCount"] == 2
    assert data["origin"] == {"x": 1.0, "y": 2.0}
    assert data["bounds"] is None
    assert data["hasMissingChars"] is False

    walls, block = data["entities"]
    assert walls["vertices"] == [
        {"x": 0.0, "y": 0.0},
        {"x": 1.0, "y": 0.0},
        {"x": 1.0, "y": 1.0},
        {"x": 0.0, "y": 1.0},
    ]
    assert walls["color"] == 0xFF0000
    assert walls["layer"] == "walls"
    assert walls["geometryType"] == 1
    assert block["color"] == 0x000000
    assert block["layer"] == "pale"
    assert block["block"] == "B"
    assert block["parentBlock"] is None

    layers = {layer["name"]: layer for layer in data["layers"]}
    assert layers["walls"]["displayName"] == "Walls"
    assert layers["pale"]["color"] == 0x000000


def test_load_scene_with_option_overrides():
    response = client.post(
        "/api/scene",
        json={
            "scene": _scene(),
            "options": {"blackWhiteInversion": False, "clearColor": 0x000000},
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["entities"][1]["color"] == 0xFFFFFF


def test_malformed_scene_rejected():
    scene = _scene()
    scene["batches"][0]["verticesOffset"] = 1_000
    response = client.post("/api/scene", json={"scene": scene})
    assert response.status_code == 422
    assert "outside buffer" in response.json()["detail"]


def test_invalid_key_color_rejected():
    scene = _scene()
    scene["batches"][0]["key"]["color"] = -7
    response = client.post("/api/scene", json={"scene": scene})
    assert response.status_code == 422


@pytest.mark.parametrize(
    "field, value",
    [("indices", [0, 70_000]), ("vertices", "AAAAAAAAAAA=")],
)
def test_invalid_buffers_rejected(field, value):
    scene = _scene()
    scene[field] = value
    response = client.post("/api/scene", json={"scene": scene})
    assert response.status_code == 422


def test_settings_provide_default_options():
    app.dependency_overrides[get_settings] = lambda: Settings(
        black_white_inversion=False, clear_color=0x000000
    )
    try:
        response = client.post("/api/scene", json={"scene": _scene()})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 200
    assert response.json()["entities"][1]["color"] == 0xFFFFFF


def test_empty_scene():
    response = client.post("/api/scene", json={"scene": {}})
    assert response.status_code == 200
    data = response.json()
    assert data["entities"] == []
    assert [layer["name"] for layer in data["layers"]] == ["0"]
