# backend/routes/tracking.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.tracking import TrackingEvent
from schemas.tracking import TrackingCreate, TrackingEventOut, TrackingRecorded
from utils.errors import InvalidArgument

router = APIRouter(prefix="/tracking", tags=["Tracking"])


# Append a delivery event; events are never edited afterwards
@router.post("", response_model=TrackingRecorded)
def record_event(payload: TrackingCreate, db: Session = Depends(get_db)):
    if not payload.tracking_id or not payload.parcel_id or not payload.status:
        raise InvalidArgument("trackingId, parcelId, and status are required.")

    event = TrackingEvent(
        tracking_id=payload.tracking_id,
        parcel_id=payload.parcel_id,
        status=payload.status,
        location=payload.location or "Unknown",
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return TrackingRecorded(inserted_id=event.id)


# Event history for one tracking id, oldest first
@router.get("/{tracking_id}", response_model=List[TrackingEventOut])
def list_events(tracking_id: str, db: Session = Depends(get_db)):
    return (
        db.query(TrackingEvent)
        .filter(TrackingEvent.tracking_id == tracking_id)
        .order_by(TrackingEvent.timestamp.asc())
        .all()
    )
