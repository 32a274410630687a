# backend/models/rider.py
import enum
from sqlalchemy import Column, String, DateTime, JSON
from database import Base, new_id, utcnow

# Lifecycle of a courier application
class RiderStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    INACTIVE = "inactive"

# A courier ("rider") application; approval promotes the matching user
class Rider(Base):
    __tablename__ = "riders"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String, nullable=True, index=True)
    name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    status = Column(String, nullable=False, default=RiderStatus.PENDING.value, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    # Region, vehicle and other application fields
    details = Column(JSON, nullable=True)
