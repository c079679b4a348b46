# tests/test_api.py
"""
HTTP surface tests. The service is bound to an in-memory database and a
barn capacity of 3.
"""
import pytest
from fastapi.testclient import TestClient

from farm.api.dependencies import get_animal_service
from main import app


@pytest.fixture
def client(service):
    app.dependency_overrides[get_animal_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_index(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_add_and_list_animals(client):
    response = client.post("/api/v1/animals", json={"name": "Daisy", "favorite_color": "RED"})
    assert response.status_code == 200
    animal = response.json()
    assert animal["name"] == "Daisy"
    assert animal["barn_id"] is not None

    response = client.get("/api/v1/animals")
    assert [a["name"] for a in response.json()] == ["Daisy"]


def test_batch_add_splits_barns(client):
    payload = [{"name": f"cow{i}", "favorite_color": "RED"} for i in range(4)]
    response = client.post("/api/v1/animals/batch", json=payload)
    assert response.status_code == 200
    assert len(response.json()) == 4

    barns = client.get("/api/v1/barns", params={"color": "RED"}).json()
    assert [b["occupancy"] for b in barns] == [2, 2]


def test_barn_detail_lists_animals(client):
    animal = client.post("/api/v1/animals", json={"name": "Bess", "favorite_color": "BLUE"}).json()

    detail = client.get(f"/api/v1/barns/{animal['barn_id']}").json()
    assert detail["color"] == "BLUE"
    assert detail["occupancy"] == 1
    assert [a["id"] for a in detail["animals"]] == [animal["id"]]


def test_remove_animal(client):
    animal = client.post("/api/v1/animals", json={"name": "Bess", "favorite_color": "BLUE"}).json()

    response = client.delete(f"/api/v1/animals/{animal['id']}")
    assert response.status_code == 200
    assert client.get("/api/v1/animals").json() == []
    assert client.get("/api/v1/barns").json() == []


def test_remove_batch(client):
    animals = client.post(
        "/api/v1/animals/batch",
        json=[{"name": f"hen{i}", "favorite_color": "GREEN"} for i in range(3)],
    ).json()

    response = client.post("/api/v1/animals/remove", json={"ids": [animals[0]["id"], animals[1]["id"]]})
    assert response.status_code == 200
    assert [a["id"] for a in client.get("/api/v1/animals").json()] == [animals[2]["id"]]


def test_clear_farm(client):
    client.post("/api/v1/animals", json={"name": "Bess", "favorite_color": "BLUE"})
    assert client.delete("/api/v1/animals").status_code == 200
    assert client.get("/api/v1/barns").json() == []


def test_unknown_animal_is_404(client):
    assert client.delete("/api/v1/animals/999").status_code == 404
    assert client.get("/api/v1/animals/999").status_code == 404


def test_unknown_barn_is_404(client):
    assert client.get("/api/v1/barns/999").status_code == 404


def test_invalid_color_is_rejected(client):
    response = client.post("/api/v1/animals", json={"name": "Bess", "favorite_color": "TEAL"})
    assert response.status_code == 422
