# backend/models/payment.py
from sqlalchemy import Column, String, Float, DateTime
from database import Base, new_id, utcnow

# Settled payment for one parcel. parcel_id and tracking_id are lookups,
# not foreign keys: records outlive the parcel they paid for.
class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(32), primary_key=True, default=new_id)
    parcel_id = Column(String, nullable=False, index=True)
    # Copied from the parcel when the payment was recorded
    tracking_id = Column(String, nullable=False, default="")
    transaction_id = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    amount = Column(Float, nullable=False)
    paid_at = Column(DateTime(timezone=True), default=utcnow, index=True)
