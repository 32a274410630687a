from models.parcel import Parcel
from models.payment import Payment
from models.tracking import TrackingEvent


def _create(client, **fields):
    res = client.post("/parcels", json=fields)
    assert res.status_code == 201
    return res.json()["insertedId"]


def test_create_and_get_keeps_extra_fields(client):
    parcel_id = _create(
        client,
        created_by="ann@example.com",
        trackingId="TRK-1",
        title="Books",
        weight=2.5,
    )

    res = client.get(f"/parcels/{parcel_id}")
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == parcel_id
    assert body["created_by"] == "ann@example.com"
    assert body["status"] == "pending"
    assert body["payment_status"] == "unpaid"
    assert body["trackingId"] == "TRK-1"
    assert body["title"] == "Books"
    assert body["weight"] == 2.5


def test_get_missing_parcel(client):
    res = client.get("/parcels/does-not-exist")
    assert res.status_code == 404
    assert res.json()["detail"] == "Parcel not found"


def test_list_filters_and_sorts_newest_first(client):
    old = _create(client, created_by="ann@example.com", creation_date="2025-01-01T10:00:00")
    new = _create(client, created_by="ann@example.com", creation_date="2025-03-01T10:00:00")
    _create(client, created_by="bob@example.com", creation_date="2025-02-01T10:00:00")
    _create(client, created_by="ann@example.com", status="delivered", creation_date="2025-04-01T10:00:00")

    res = client.get("/parcels", params={"email": "ann@example.com", "status": "pending"})
    assert [p["id"] for p in res.json()] == [new, old]

    assert len(client.get("/parcels").json()) == 4


def test_delete_keeps_satellite_records(client, fetch):
    parcel_id = _create(client, created_by="ann@example.com", trackingId="TRK-9")
    client.post("/tracking", json={"trackingId": "TRK-9", "parcelId": parcel_id, "status": "created"})

    res = client.delete(f"/parcels/{parcel_id}")
    assert res.json() == {"acknowledged": True, "deletedCount": 1}
    assert fetch(Parcel, id=parcel_id) == []
    assert len(fetch(TrackingEvent, parcel_id=parcel_id)) == 1

    res = client.delete(f"/parcels/{parcel_id}")
    assert res.json()["deletedCount"] == 0


def test_delete_after_payment_keeps_payment(client, fetch, auth_headers):
    parcel_id = _create(client, created_by="ann@example.com")
    client.post(
        "/payments",
        json={"parcelId": parcel_id, "transactionId": "T1", "email": "ann@example.com", "amount": 10},
        headers=auth_headers("ann@example.com"),
    )
    client.delete(f"/parcels/{parcel_id}")
    assert len(fetch(Payment, parcel_id=parcel_id)) == 1
