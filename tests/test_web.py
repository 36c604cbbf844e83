import pytest
from fastapi.testclient import TestClient

from guillot.web_app.server import app


@pytest.fixture
def client():
    return TestClient(app)


def test_pack_returns_pages(client):
    response = client.post("/api/pack", json={
        "page_width": 100,
        "page_height": 100,
        "items": [
            {"id": "a.png", "width": 100, "height": 60},
            {"id": "b.png", "width": 100, "height": 40},
        ],
    })

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["total_items"] == 2
    assert body["placed_items"] == 2
    assert body["pages_used"] == 1

    page = body["pages"][0]
    assert page["covered_area"] == 10000
    assert page["placements"][1] == {
        "id": "b.png", "x": 0, "y": 60, "width": 100, "height": 40, "rotated": False,
    }
    assert page["cuts"] == [{"direction": "H", "position": 60, "start": 0, "end": 100}]


def test_pack_honours_rotatable_items(client):
    response = client.post("/api/pack", json={
        "page_width": 100,
        "page_height": 50,
        "items": [{"id": "p", "width": 50, "height": 100, "rotatable": True}],
    })

    assert response.status_code == 200
    assert response.json()["pages"][0]["placements"][0]["rotated"] is True


def test_pack_rejects_items_that_do_not_fit(client):
    response = client.post("/api/pack", json={
        "page_width": 100,
        "page_height": 100,
        "items": [
            {"id": "big", "width": 200, "height": 10},
            {"id": "tall", "width": 10, "height": 200},
        ],
    })

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert len(detail) == 2
    assert "big" in detail[0]


def test_pack_rejects_empty_item_list(client):
    response = client.post("/api/pack", json={"page_width": 100, "page_height": 100, "items": []})
    assert response.status_code == 400


def test_pack_rejects_margin_that_leaves_no_room(client):
    response = client.post("/api/pack", json={
        "page_width": 100, "page_height": 100, "margin": 60,
        "items": [{"id": "a", "width": 1, "height": 1}],
    })
    assert response.status_code == 400


def test_pack_validates_request(client):
    response = client.post("/api/pack", json={
        "page_width": 100, "page_height": 100, "enough": 0.3, "items": [],
    })
    assert response.status_code == 422
