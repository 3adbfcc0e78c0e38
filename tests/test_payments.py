"""Liquidación de pagos y payment intents."""

from app.shared.database.models import Parcel, Payment


def _record(client, headers, parcel_id, transaction_id="tx1", amount=150):
    return client.post(
        "/api/v1/payments",
        json={
            "parcel_id": str(parcel_id),
            "amount": amount,
            "payment_method_id": "pm_card_visa",
            "transaction_id": transaction_id,
        },
        headers=headers,
    )


class TestSettlement:
    def test_settle_marks_parcel_paid_and_writes_ledger(self, client, auth_headers, create_parcel, fetch):
        parcel = create_parcel("a@x.com")

        response = _record(client, auth_headers("a@x.com"), parcel["id"])
        assert response.status_code == 201
        body = response.json()
        assert body["parcel_id"] == parcel["id"]
        assert body["transaction_id"] == "tx1"
        assert body["email"] == "a@x.com"

        assert fetch(Parcel, id=parcel["id"])[0].payment_status == "paid"
        payments = fetch(Payment, parcel_id=parcel["id"])
        assert [p.transaction_id for p in payments] == ["tx1"]

    def test_missing_parcel_writes_no_payment(self, client, auth_headers, fetch):
        response = _record(client, auth_headers("a@x.com"), 999)
        assert response.status_code == 404
        assert fetch(Payment) == []

    def test_malformed_parcel_id(self, client, auth_headers, fetch):
        response = _record(client, auth_headers("a@x.com"), "abc")
        assert response.status_code == 400
        assert fetch(Payment) == []

    def test_second_settlement_is_already_paid(self, client, auth_headers, create_parcel, fetch):
        parcel = create_parcel("a@x.com")
        _record(client, auth_headers("a@x.com"), parcel["id"], "tx1")

        response = _record(client, auth_headers("a@x.com"), parcel["id"], "tx2")
        assert response.status_code == 409
        assert response.json()["error_code"] == "already_paid"
        assert [p.transaction_id for p in fetch(Payment, parcel_id=parcel["id"])] == ["tx1"]
        assert fetch(Parcel, id=parcel["id"])[0].payment_status == "paid"

    def test_retry_with_same_transaction_is_idempotent(self, client, auth_headers, create_parcel, fetch):
        parcel = create_parcel("a@x.com")
        first = _record(client, auth_headers("a@x.com"), parcel["id"], "tx1")
        retry = _record(client, auth_headers("a@x.com"), parcel["id"], "tx1")

        assert retry.status_code == 201
        assert retry.json()["id"] == first.json()["id"]
        assert len(fetch(Payment, transaction_id="tx1")) == 1

    def test_transaction_reused_for_other_parcel(self, client, auth_headers, create_parcel, fetch):
        first = create_parcel("a@x.com")
        second = create_parcel("a@x.com")
        _record(client, auth_headers("a@x.com"), first["id"], "tx1")

        response = _record(client, auth_headers("a@x.com"), second["id"], "tx1")
        assert response.status_code == 409
        assert fetch(Parcel, id=second["id"])[0].payment_status == "unpaid"


class TestListPayments:
    def test_own_payments_newest_first(self, client, auth_headers, create_parcel):
        first = create_parcel("a@x.com")
        second = create_parcel("a@x.com")
        other = create_parcel("b@x.com")
        _record(client, auth_headers("a@x.com"), first["id"], "tx1")
        _record(client, auth_headers("b@x.com"), other["id"], "tx-other")
        _record(client, auth_headers("a@x.com"), second["id"], "tx2")

        response = client.get("/api/v1/payments", params={"email": "a@x.com"}, headers=auth_headers("a@x.com"))
        assert response.status_code == 200
        assert [p["transaction_id"] for p in response.json()] == ["tx2", "tx1"]

    def test_other_users_payments_are_forbidden(self, client, auth_headers):
        response = client.get("/api/v1/payments", params={"email": "b@x.com"}, headers=auth_headers("a@x.com"))
        assert response.status_code == 403


class TestPaymentIntent:
    def test_returns_client_secret(self, client, auth_headers, gateway):
        response = client.post(
            "/api/v1/payments/create-intent",
            json={"amount_in_cents": 15000},
            headers=auth_headers("a@x.com"),
        )
        assert response.status_code == 200
        assert response.json()["client_secret"].startswith("pi_fake_")
        assert gateway.calls == [{"method": "create_intent", "amount": 15000}]

    def test_gateway_failure_returns_502(self, client, auth_headers, gateway):
        gateway.configure(should_succeed=False)
        response = client.post(
            "/api/v1/payments/create-intent",
            json={"amount_in_cents": 15000},
            headers=auth_headers("a@x.com"),
        )
        assert response.status_code == 502
        assert response.json()["error_code"] == "gateway_error"

    def test_non_positive_amount_is_rejected(self, client, auth_headers):
        response = client.post(
            "/api/v1/payments/create-intent",
            json={"amount_in_cents": 0},
            headers=auth_headers("a@x.com"),
        )
        assert response.status_code == 422
