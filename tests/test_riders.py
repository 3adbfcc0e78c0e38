"""Registro y aprobación de repartidores."""

from app.shared.database.models import Rider, User


RIDER_PAYLOAD = {
    "name": "Jamal Uddin",
    "phone": "01700000000",
    "region": "Dhaka",
    "district": "Dhaka",
    "bike_brand": "Honda",
    "bike_registration": "DHA-1234",
}


def test_register_creates_pending_rider(client, auth_headers, fetch):
    response = client.post("/api/v1/riders", json=RIDER_PAYLOAD, headers=auth_headers("r@x.com"))
    assert response.status_code == 201

    rider = fetch(Rider, id=response.json()["inserted_id"])[0]
    assert rider.email == "r@x.com"
    assert rider.status == "pending"
    assert rider.work_status == "available"


def test_pending_and_active_lists(client, auth_headers, make_user, make_rider):
    make_user("admin@x.com", role="admin")
    pending = make_rider("p@x.com", status="pending")
    active = make_rider("a@x.com", status="active")

    pending_list = client.get("/api/v1/riders/pending", headers=auth_headers("admin@x.com")).json()
    active_list = client.get("/api/v1/riders/active", headers=auth_headers("admin@x.com")).json()
    assert [r["id"] for r in pending_list] == [pending]
    assert [r["id"] for r in active_list] == [active]


def test_approval_promotes_user_to_rider(client, auth_headers, make_user, make_rider, fetch):
    make_user("admin@x.com", role="admin")
    make_user("r@x.com", role="user")
    rider_id = make_rider("r@x.com", status="pending")

    response = client.patch(
        f"/api/v1/riders/{rider_id}/status",
        json={"status": "active"},
        headers=auth_headers("admin@x.com"),
    )
    assert response.status_code == 200
    assert response.json()["modified_count"] == 1
    assert fetch(Rider, id=rider_id)[0].status == "active"
    assert fetch(User, email="r@x.com")[0].role == "rider"


def test_approval_without_user_record_still_succeeds(client, auth_headers, make_user, make_rider, fetch):
    make_user("admin@x.com", role="admin")
    rider_id = make_rider("nouser@x.com", status="pending")

    response = client.patch(
        f"/api/v1/riders/{rider_id}/status",
        json={"status": "active"},
        headers=auth_headers("admin@x.com"),
    )
    assert response.status_code == 200
    assert fetch(Rider, id=rider_id)[0].status == "active"
    assert fetch(User, email="nouser@x.com") == []


def test_rejection_leaves_role_alone(client, auth_headers, make_user, make_rider, fetch):
    make_user("admin@x.com", role="admin")
    make_user("r@x.com", role="user")
    rider_id = make_rider("r@x.com", status="pending")

    client.patch(f"/api/v1/riders/{rider_id}/status", json={"status": "rejected"}, headers=auth_headers("admin@x.com"))
    assert fetch(User, email="r@x.com")[0].role == "user"


def test_approving_admin_application_keeps_admin_role(client, auth_headers, make_user, make_rider, fetch):
    make_user("admin@x.com", role="admin")
    rider_id = make_rider("admin@x.com", status="pending")

    response = client.patch(
        f"/api/v1/riders/{rider_id}/status",
        json={"status": "active"},
        headers=auth_headers("admin@x.com"),
    )
    assert response.status_code == 200
    assert fetch(Rider, id=rider_id)[0].status == "active"
    assert fetch(User, email="admin@x.com")[0].role == "admin"


def test_invalid_status_returns_400(client, auth_headers, make_user, make_rider):
    make_user("admin@x.com", role="admin")
    rider_id = make_rider("r@x.com", status="pending")

    response = client.patch(
        f"/api/v1/riders/{rider_id}/status",
        json={"status": "promoted"},
        headers=auth_headers("admin@x.com"),
    )
    assert response.status_code == 400


def test_unknown_rider_returns_404(client, auth_headers, make_user):
    make_user("admin@x.com", role="admin")
    response = client.patch("/api/v1/riders/999/status", json={"status": "active"}, headers=auth_headers("admin@x.com"))
    assert response.status_code == 404


def test_available_riders_by_district(client, auth_headers, make_user, make_rider):
    make_user("admin@x.com", role="admin")
    free = make_rider("free@x.com", district="Sylhet")
    make_rider("busy@x.com", district="Sylhet", work_status="in_delivery")
    make_rider("pending@x.com", district="Sylhet", status="pending")
    make_rider("elsewhere@x.com", district="Dhaka")

    response = client.get("/api/v1/riders/available", params={"district": "Sylhet"}, headers=auth_headers("admin@x.com"))
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [free]
