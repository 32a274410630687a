from sqlalchemy import Column, String, DateTime, JSON
from database import Base, new_id, utcnow

# Audit trail of admin actions and payment events
class Log(Base):
    __tablename__ = "logs"

    id = Column(String(32), primary_key=True, default=new_id)

    # Event timestamp and core action details
    ts = Column(DateTime(timezone=True), default=utcnow, index=True)
    actor = Column(String, nullable=True, index=True)
    action = Column(String(50), index=True)
    resource = Column(String(50), index=True)
    status = Column(String(20), index=True)
    ip = Column(String(64), nullable=True)

    # JSON container for flexible context data
    meta = Column(JSON, nullable=True)
