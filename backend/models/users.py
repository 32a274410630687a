# backend/models/users.py
from sqlalchemy import Column, String, DateTime, JSON
from database import Base, new_id, utcnow

# Represents a marketplace account, keyed by the identity provider's email
class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String, unique=True, nullable=False, index=True)
    # One of: user, rider, admin
    role = Column(String, nullable=False, default="user", index=True)
    name = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)

    # Any other profile fields sent on login
    profile = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    last_login = Column(DateTime(timezone=True), default=utcnow)
