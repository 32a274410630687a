import logging

from sqlalchemy.exc import SQLAlchemyError

import services.payments
from models.parcel import Parcel
from models.payment import Payment
from utils.errors import PaymentProcessorError

OWNER = "a@example.com"


def _parcel(client, **fields):
    fields.setdefault("created_by", OWNER)
    return client.post("/parcels", json=fields).json()["insertedId"]


def _pay(client, headers, parcel_id, transaction_id="T1", email=OWNER, amount=25):
    return client.post(
        "/payments",
        json={"parcelId": parcel_id, "transactionId": transaction_id, "email": email, "amount": amount},
        headers=headers,
    )


def test_create_payment_intent(client, processor):
    res = client.post("/create-payment-intent", json={"amountInCents": 2500})
    assert res.status_code == 200
    assert res.json() == {"clientSecret": "pi_2500_secret_test"}
    assert processor.calls == [(2500, "usd")]


def test_payment_intent_rejects_bad_amount(client, processor):
    for body in ({}, {"amountInCents": 0}, {"amountInCents": -5}):
        res = client.post("/create-payment-intent", json=body)
        assert res.status_code == 400
    assert processor.calls == []


def test_payment_intent_surfaces_processor_error(client, processor):
    processor.error = PaymentProcessorError("Your card was declined.")
    res = client.post("/create-payment-intent", json={"amountInCents": 2500})
    assert res.status_code == 502
    assert res.json()["detail"] == "Your card was declined."


def test_record_payment_marks_parcel_paid(client, auth_headers, fetch):
    parcel_id = _parcel(client, trackingId="TRK-1")

    res = _pay(client, auth_headers(OWNER), parcel_id)
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["paymentId"]

    parcel = fetch(Parcel, id=parcel_id)[0]
    assert parcel.status == "Paid"
    assert parcel.payment_status == "Paid"
    assert parcel.transaction_id == "T1"

    payment = fetch(Payment, id=body["paymentId"])[0]
    assert payment.parcel_id == parcel_id
    assert payment.tracking_id == "TRK-1"
    assert payment.email == OWNER
    assert payment.amount == 25


def test_repeat_payment_conflicts(client, auth_headers, fetch):
    parcel_id = _parcel(client)
    headers = auth_headers(OWNER)
    assert _pay(client, headers, parcel_id).status_code == 200

    res = _pay(client, headers, parcel_id)
    assert res.status_code == 409
    assert res.json()["detail"] == "Parcel not found or already paid."

    # A different transaction id does not reopen a paid parcel either
    assert _pay(client, headers, parcel_id, transaction_id="T2").status_code == 409
    assert len(fetch(Payment)) == 1
    assert fetch(Parcel, id=parcel_id)[0].transaction_id == "T1"


def test_missing_parcel_conflicts(client, auth_headers, fetch):
    res = _pay(client, auth_headers(OWNER), "no-such-parcel")
    assert res.status_code == 409
    assert fetch(Payment) == []


def test_payment_without_tracking_id_snapshots_empty_string(client, auth_headers, fetch):
    parcel_id = _parcel(client)
    payment_id = _pay(client, auth_headers(OWNER), parcel_id).json()["paymentId"]
    assert fetch(Payment, id=payment_id)[0].tracking_id == ""


def test_missing_fields_rejected_before_any_write(client, auth_headers, fetch):
    parcel_id = _parcel(client)
    headers = auth_headers(OWNER)

    res = client.post("/payments", json={"parcelId": parcel_id, "email": OWNER, "amount": 25}, headers=headers)
    assert res.status_code == 400
    assert "transactionId" in res.json()["detail"]

    res = _pay(client, headers, parcel_id, amount=0)
    assert res.status_code == 400

    assert fetch(Parcel, id=parcel_id)[0].payment_status == "unpaid"
    assert fetch(Payment) == []


def test_record_payment_requires_authentication(client, fetch):
    parcel_id = _parcel(client)
    res = client.post(
        "/payments",
        json={"parcelId": parcel_id, "transactionId": "T1", "email": OWNER, "amount": 25},
    )
    assert res.status_code == 401
    assert fetch(Parcel, id=parcel_id)[0].payment_status == "unpaid"


def test_store_failure_after_parcel_update_is_critical(client, auth_headers, fetch, monkeypatch, caplog):
    parcel_id = _parcel(client)

    def broken_payment(**kwargs):
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(services.payments, "Payment", broken_payment)

    with caplog.at_level(logging.CRITICAL, logger="services.payments"):
        res = _pay(client, auth_headers(OWNER), parcel_id)

    assert res.status_code == 500
    assert "disk I/O error" in res.json()["detail"]
    assert any(r.levelno == logging.CRITICAL for r in caplog.records)
    # The parcel update was rolled back with the failed insert
    assert fetch(Parcel, id=parcel_id)[0].payment_status == "unpaid"


def test_list_own_payments_newest_first(client, auth_headers):
    headers = auth_headers(OWNER)
    first = _pay(client, headers, _parcel(client), transaction_id="T1").json()["paymentId"]
    second = _pay(client, headers, _parcel(client), transaction_id="T2").json()["paymentId"]
    _pay(client, auth_headers("b@example.com"), _parcel(client), transaction_id="T3", email="b@example.com")

    res = client.get("/payments", params={"email": OWNER}, headers=headers)
    assert res.status_code == 200
    payments = res.json()
    assert [p["id"] for p in payments] == [second, first]
    assert payments[0]["transactionId"] == "T2"


def test_cannot_list_someone_elses_payments(client, auth_headers):
    _pay(client, auth_headers(OWNER), _parcel(client))

    res = client.get("/payments", params={"email": OWNER}, headers=auth_headers("b@example.com"))
    assert res.status_code == 403

    res = client.get("/payments", headers=auth_headers("b@example.com"))
    assert res.status_code == 403


def test_list_payments_requires_authentication(client):
    assert client.get("/payments", params={"email": OWNER}).status_code == 401
