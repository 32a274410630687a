# backend/schemas/tracking.py
from pydantic import Field
from typing import Optional
from datetime import datetime

from schemas.common import WireModel

# All fields optional here so missing ones surface as a 400, not a 422
class TrackingCreate(WireModel):
    tracking_id: Optional[str] = Field(None, alias="trackingId")
    parcel_id: Optional[str] = Field(None, alias="parcelId")
    status: Optional[str] = None
    location: Optional[str] = None

class TrackingEventOut(WireModel):
    id: str
    tracking_id: str = Field(alias="trackingId")
    parcel_id: str = Field(alias="parcelId")
    status: str
    location: str
    timestamp: datetime

class TrackingRecorded(WireModel):
    success: bool = True
    inserted_id: str = Field(alias="insertedId")
