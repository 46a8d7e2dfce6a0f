from typing import Any, Dict, List, Optional
import asyncio
import logging

from sqlalchemy.orm import Session

from app.crud import crud_resume
from app.services.generation_client import TextGenerator
from app.services.pdf_service import extract_text_from_pdf
from app.services.resume_normalization import normalize_resume_row
from app.workflows.resume.resume_structuring import extract_structured_resume

logger = logging.getLogger(__name__)


async def create_resume_from_pdf(
    db: Session,
    *,
    user_id: str,
    filename: str,
    content: bytes,
    generator: Optional[TextGenerator] = None,
) -> Dict[str, Any]:
    """Store an uploaded PDF resume and return it in API shape.

    Text extraction failures are recorded as processing_status="failed" rather
    than raised. When a generator is given, structured data is extracted too;
    failures there leave structured_data empty.
    """
    try:
        text, pages = await asyncio.to_thread(extract_text_from_pdf, content)
    except ValueError as e:
        logger.error(f"Could not read PDF {filename}: {e}")
        text, pages = "", 0

    structured: Optional[Dict[str, Any]] = None
    if text and generator is not None:
        try:
            structured = await extract_structured_resume(text, generator)
        except Exception as e:
            logger.error(f"Structured extraction failed for {filename}: {e}")

    resume = await asyncio.to_thread(crud_resume.create_resume, db, {
        "user_id": user_id,
        "filename": filename,
        "file_size": len(content),
        "extracted_text": text,
        "pages_count": pages,
        "processing_status": "completed" if text else "failed",
        "structured_data": structured,
    })
    logger.info(f"Resume {resume.id} stored for user {user_id} ({resume.processing_status})")
    return normalize_resume_row(resume, user_id)


def list_resumes(db: Session, user_id: str, skip: int = 0, limit: int = 100) -> List[Dict[str, Any]]:
    return [normalize_resume_row(r, user_id) for r in crud_resume.get_resumes_for_user(db, user_id, skip=skip, limit=limit)]
