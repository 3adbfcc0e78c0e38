"""Bitácora de seguimiento."""

from app.shared.database.models import TrackingLog


def test_append_without_parcel_id(client, auth_headers, fetch):
    response = client.post(
        "/api/v1/tracking",
        json={"tracking_id": "ZS-1", "status": "picked_up", "message": "Picked up from sender"},
        headers=auth_headers("r@x.com"),
    )
    assert response.status_code == 201

    log = fetch(TrackingLog, id=response.json()["inserted_id"])[0]
    assert log.parcel_id is None
    assert log.updated_by == "r@x.com"


def test_append_with_parcel_id(client, auth_headers, fetch):
    response = client.post(
        "/api/v1/tracking",
        json={"tracking_id": "ZS-1", "parcel_id": "12", "status": "picked_up"},
        headers=auth_headers("r@x.com"),
    )
    assert response.status_code == 201
    assert fetch(TrackingLog, id=response.json()["inserted_id"])[0].parcel_id == 12


def test_malformed_parcel_id_returns_400(client, auth_headers, fetch):
    response = client.post(
        "/api/v1/tracking",
        json={"tracking_id": "ZS-1", "parcel_id": "not-an-id", "status": "picked_up"},
        headers=auth_headers("r@x.com"),
    )
    assert response.status_code == 400
    assert fetch(TrackingLog) == []


def test_append_requires_authentication(client):
    response = client.post("/api/v1/tracking", json={"tracking_id": "ZS-1", "status": "picked_up"})
    assert response.status_code == 401


def test_history_is_oldest_first(client, auth_headers, create_parcel):
    parcel = create_parcel("a@x.com")
    client.post(
        "/api/v1/tracking",
        json={"tracking_id": parcel["tracking_id"], "parcel_id": str(parcel["id"]), "status": "picked_up"},
        headers=auth_headers("r@x.com"),
    )

    response = client.get(f"/api/v1/tracking/{parcel['tracking_id']}")
    assert response.status_code == 200
    assert [log["status"] for log in response.json()] == ["parcel_created", "picked_up"]


def test_unknown_tracking_id_returns_404(client):
    response = client.get("/api/v1/tracking/ZS-NOPE")
    assert response.status_code == 404
