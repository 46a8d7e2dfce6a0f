import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.api.deps import get_app_settings, get_current_user, get_generator_factory
from app.core.config import Settings
from app.core.errors import MissingConfigurationError
from app.crud import crud_resume
from app.db.session import get_db
from app.schemas.auth import AuthUser
from app.schemas.resume import ResumeListResponse, ResumeSingleResponse
from app.services.generation_client import GeneratorFactory
from app.services.resume_normalization import normalize_resume_row
from app.services.resume_service import create_resume_from_pdf, list_resumes

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=ResumeListResponse)
def read_resumes(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    resumes = list_resumes(db, current_user.id, skip=skip, limit=limit)
    return {"status": 200, "message": "Resumes returned successfully", "data": resumes}


@router.get("/{resume_id}", response_model=ResumeSingleResponse)
def read_resume(
    resume_id: str,
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
):
    resume = crud_resume.get_resume(db, resume_id)
    if resume is None or resume.user_id != current_user.id:
        raise HTTPException(status_code=404, detail="Resume not found")
    return {"status": 200, "message": "Resume returned successfully", "data": normalize_resume_row(resume, current_user.id)}


@router.post("/upload", response_model=ResumeSingleResponse, status_code=201)
async def upload_resume(
    file: UploadFile = File(...),
    extract: bool = Form(False),
    db: Session = Depends(get_db),
    current_user: AuthUser = Depends(get_current_user),
    config: Settings = Depends(get_app_settings),
    generator_factory: GeneratorFactory = Depends(get_generator_factory),
):
    """
    Upload a PDF resume, store its text and optionally structure it with the model.

    Set `extract=true` to also run structured extraction; it needs the
    generation API key.
    """
    filename = file.filename or "resume.pdf"
    if not filename.lower().endswith(".pdf") and file.content_type != "application/pdf":
        raise HTTPException(status_code=400, detail="Only PDF files are supported")

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    generator = None
    if extract:
        try:
            generator = generator_factory(config)
        except MissingConfigurationError as e:
            raise HTTPException(status_code=e.status_code, detail=e.detail)

    resume = await create_resume_from_pdf(
        db,
        user_id=current_user.id,
        filename=filename,
        content=content,
        generator=generator,
    )
    return {"status": 201, "message": "Resume uploaded successfully", "data": resume}
