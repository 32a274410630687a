# backend/models/tracking.py
from sqlalchemy import Column, String, DateTime
from database import Base, new_id, utcnow

# Append-only delivery event; never updated or deleted
class TrackingEvent(Base):
    __tablename__ = "tracking"

    id = Column(String(32), primary_key=True, default=new_id)
    tracking_id = Column(String, nullable=False, index=True)
    parcel_id = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False)
    location = Column(String, nullable=False, default="Unknown")
    timestamp = Column(DateTime(timezone=True), default=utcnow, index=True)
