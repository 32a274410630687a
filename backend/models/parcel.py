# backend/models/parcel.py
from sqlalchemy import Column, String, DateTime, JSON
from database import Base, new_id, utcnow

class Parcel(Base):
    __tablename__ = "parcels"

    id = Column(String(32), primary_key=True, default=new_id)
    # Owner email
    created_by = Column(String, nullable=True, index=True)

    # Free-text delivery status (pending, Paid, ...)
    status = Column(String, nullable=True, default="pending", index=True)
    payment_status = Column(String, nullable=True, default="unpaid")
    tracking_id = Column(String, nullable=True, index=True)
    transaction_id = Column(String, nullable=True)

    creation_date = Column(DateTime(timezone=True), default=utcnow, index=True)

    # Sender/receiver/etc. fields stored as submitted
    details = Column(JSON, nullable=True)
