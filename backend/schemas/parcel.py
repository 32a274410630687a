# backend/schemas/parcel.py
from pydantic import Field
from typing import Optional
from datetime import datetime

from schemas.common import WireModel

# Parcels are stored as submitted; unknown fields go to Parcel.details
class ParcelCreate(WireModel):
    created_by: Optional[str] = None
    status: Optional[str] = None
    payment_status: Optional[str] = None
    tracking_id: Optional[str] = Field(None, alias="trackingId")
    creation_date: Optional[datetime] = None

    class Config:
        extra = "allow"

class ParcelCreated(WireModel):
    message: str
    inserted_id: str = Field(alias="insertedId")
