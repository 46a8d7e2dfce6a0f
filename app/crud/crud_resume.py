from sqlalchemy.orm import Session
from app.models.resume import Resume
from typing import Dict, Any, List, Optional
from datetime import datetime


def get_resumes_for_user(db: Session, user_id: str, skip: int = 0, limit: int = 100) -> List[Resume]:
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_resume(db: Session, resume_id: str) -> Optional[Resume]:
    return db.query(Resume).filter(Resume.id == resume_id).first()


def create_resume(db: Session, resume_data: Dict[str, Any]) -> Resume:
    """
    Create a new resume in the database.
    """
    db_resume = Resume(
        user_id=resume_data.get("user_id"),
        filename=resume_data.get("filename"),
        file_size=resume_data.get("file_size"),
        file_url=resume_data.get("file_url"),
        extracted_text=resume_data.get("extracted_text"),
        pages_count=resume_data.get("pages_count"),
        processing_status=resume_data.get("processing_status") or "pending",
        structured_data=resume_data.get("structured_data"),
        created_at=resume_data.get("created_at") or datetime.utcnow(),
        updated_at=resume_data.get("updated_at") or datetime.utcnow(),
    )

    db.add(db_resume)
    db.commit()
    db.refresh(db_resume)

    return db_resume
