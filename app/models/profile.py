from sqlalchemy import Column, String, DateTime, Integer
from app.db.session import Base
from datetime import datetime


class Profile(Base):
    __tablename__ = "profiles"

    # Same value as the identity's user id
    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)
    subscription_tier = Column(String, default="free")
    credits_remaining = Column(Integer, default=100)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
