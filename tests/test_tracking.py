import pytest

from models.tracking import TrackingEvent


@pytest.mark.parametrize("missing", ["trackingId", "parcelId", "status"])
def test_required_fields(client, fetch, missing):
    payload = {"trackingId": "TRK-1", "parcelId": "P1", "status": "picked_up"}
    payload[missing] = ""

    res = client.post("/tracking", json=payload)
    assert res.status_code == 400
    assert res.json()["detail"] == "trackingId, parcelId, and status are required."
    assert fetch(TrackingEvent) == []


def test_missing_field_entirely(client, fetch):
    res = client.post("/tracking", json={"trackingId": "TRK-1", "status": "picked_up"})
    assert res.status_code == 400
    assert fetch(TrackingEvent) == []


def test_record_defaults_location(client, fetch):
    res = client.post("/tracking", json={"trackingId": "TRK-1", "parcelId": "P1", "status": "picked_up"})
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True

    event = fetch(TrackingEvent, id=body["insertedId"])[0]
    assert event.location == "Unknown"
    assert event.timestamp is not None


def test_history_oldest_first(client):
    for status, location in [("created", "Dhaka"), ("in_transit", "Khulna"), ("delivered", None)]:
        client.post(
            "/tracking",
            json={"trackingId": "TRK-7", "parcelId": "P7", "status": status, "location": location},
        )
    client.post("/tracking", json={"trackingId": "OTHER", "parcelId": "P8", "status": "created"})

    res = client.get("/tracking/TRK-7")
    assert res.status_code == 200
    events = res.json()
    assert [e["status"] for e in events] == ["created", "in_transit", "delivered"]
    assert events[-1]["location"] == "Unknown"
    assert events[0]["parcelId"] == "P7"
