from sqlalchemy import Column, String, DateTime, JSON, Integer, Text, ForeignKey
from app.db.session import Base
from datetime import datetime
import uuid


def generate_uuid():
    return str(uuid.uuid4())


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(String, primary_key=True, index=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("profiles.id"), index=True)
    filename = Column(String)
    file_size = Column(Integer)
    file_url = Column(String, nullable=True)
    extracted_text = Column(Text, nullable=True)
    pages_count = Column(Integer, nullable=True)
    # pending | processing | completed | failed
    processing_status = Column(String, nullable=True)
    structured_data = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
