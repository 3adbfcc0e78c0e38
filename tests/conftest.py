from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import get_db, init_db
from app.core.auth.service import IdentityVerifier
from app.main import app
from app.shared.database.models import Rider, User
from app.shared.services.payment_gateway import FakeGateway

TEST_SECRET = "test-secret"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def verifier():
    return IdentityVerifier(secret_key=TEST_SECRET)


@pytest.fixture()
def gateway():
    return FakeGateway()


@pytest.fixture()
def client(session_factory, verifier, gateway):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.identity_verifier = verifier
    app.state.payment_gateway = gateway

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers(verifier):
    def _headers(email: str):
        return {"Authorization": f"Bearer {verifier.issue_token(email)}"}
    return _headers


@pytest.fixture()
def make_user(session_factory):
    def _make(email: str, role: str = "user") -> int:
        session = session_factory()
        try:
            user = User(email=email, role=role, created_at=datetime.now())
            session.add(user)
            session.commit()
            return user.id
        finally:
            session.close()
    return _make


@pytest.fixture()
def make_rider(session_factory):
    def _make(
        email: str,
        district: str = "Dhaka",
        status: str = "active",
        work_status: str = "available",
        name: str = "Rider",
    ) -> int:
        session = session_factory()
        try:
            rider = Rider(
                name=name,
                email=email,
                district=district,
                status=status,
                work_status=work_status,
                created_at=datetime.now(),
            )
            session.add(rider)
            session.commit()
            return rider.id
        finally:
            session.close()
    return _make


@pytest.fixture()
def fetch(session_factory):
    """Leer el estado persistido fuera de la petición"""
    def _fetch(model, **filters):
        session = session_factory()
        try:
            return session.query(model).filter_by(**filters).all()
        finally:
            session.close()
    return _fetch


@pytest.fixture()
def parcel_payload():
    def _payload(**overrides):
        payload = {
            "parcel_type": "non-document",
            "title": "Laptop charger",
            "weight": 1.5,
            "cost": 150,
            "sender_name": "Rahim",
            "sender_region": "Dhaka",
            "sender_district": "Dhaka",
            "sender_address": "House 12, Road 5",
            "receiver_name": "Karim",
            "receiver_region": "Chattogram",
            "receiver_district": "Cumilla",
            "receiver_address": "Kandirpar",
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture()
def create_parcel(client, auth_headers, parcel_payload):
    def _create(email: str = "a@x.com", **overrides) -> dict:
        response = client.post("/api/v1/parcels", json=parcel_payload(**overrides), headers=auth_headers(email))
        assert response.status_code == 201, response.text
        return response.json()
    return _create
