import pytest
from fastapi.testclient import TestClient

from carbon_ledger.crud import get_db
from carbon_ledger.main import app


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_catalogue(client):
    data = client.get("/catalogue").json()
    assert data["categories"]["food"]["beef"] == "kg"


def test_log_and_list_activity(client):
    resp = client.post("/users/u1/activities", json={"category": "transportation", "type": "car_gasoline", "value": 25})
    assert resp.status_code == 200
    body = resp.json()
    assert body["co2_impact"] == 5.25
    assert body["unit"] == "km"

    listed = client.get("/users/u1/activities").json()
    assert [r["id"] for r in listed] == [body["id"]]
    assert client.get("/users/u2/activities").json() == []


def test_negative_value_is_bad_request(client):
    resp = client.post("/users/u1/activities", json={"category": "food", "type": "beef", "value": -1})
    assert resp.status_code == 400


def test_remove_activity(client):
    rec = client.post("/users/u1/activities", json={"category": "food", "type": "beef", "value": 1}).json()
    assert client.delete(f"/users/u1/activities/{rec['id']}").status_code == 204
    assert client.get("/users/u1/activities").json() == []
    assert client.delete(f"/users/u1/activities/{rec['id']}").status_code == 404


def test_positive_actions(client):
    resp = client.post("/users/u1/positive-actions", json={"action_id": "plant_tree", "value": 3})
    assert resp.status_code == 200
    assert resp.json()["co2_saved"] == 63

    rejected = client.post("/users/u1/positive-actions", json={"action_id": "renewable_energy", "value": False})
    assert rejected.status_code == 400
    unknown = client.post("/users/u1/positive-actions", json={"action_id": "moon_base", "value": 1})
    assert unknown.status_code == 400
    assert len(client.get("/users/u1/positive-actions").json()) == 1


def test_dashboard_queries(client):
    client.post("/users/u1/activities", json={"category": "food", "type": "beef", "value": 0.5})
    breakdown = client.get("/users/u1/breakdown").json()
    assert breakdown["food"] == 100

    series = client.get(
        "/users/u1/timeseries", params={"bucket": "week", "start": "2025-01-01", "end": "2025-01-29"}
    ).json()
    assert len(series) == 4

    bad = client.get("/users/u1/timeseries", params={"bucket": "year", "start": "2025-01-01", "end": "2025-02-01"})
    assert bad.status_code == 400

    assert client.get("/users/u1/streak").json()["streak"] == 1
    assert client.get("/users/u1/footprint/daily").json()["co2_kg"] == 13.5
    assert client.get("/users/u1/suggestions").json() == []
    assert client.get("/users/u1/summary").json()["today_footprint"] == 13.5


def test_compare(client):
    body = client.get("/benchmarks/compare", params={"footprint": 12.6, "region": "global"}).json()
    assert body == {"percentage_delta": 5, "status": "average", "message": "Your footprint is about average for global"}


def test_invalid_user_id(client):
    assert client.get("/users/bad$id/activities").status_code == 422


@pytest.mark.parametrize("footprint", ["nan", "inf"])
def test_compare_non_finite_is_bad_request(client, footprint):
    resp = client.get("/benchmarks/compare", params={"footprint": footprint})
    assert resp.status_code == 400


def test_compare_accepts_negative_net_footprint(client):
    assert client.get("/benchmarks/compare", params={"footprint": -6}).json()["status"] == "below"
