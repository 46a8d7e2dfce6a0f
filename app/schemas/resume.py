from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import datetime


class ResumeSummary(BaseModel):
    id: str
    userId: str
    filename: str
    fileSize: int
    fileUrl: str
    extractedText: str
    pagesCount: int
    processingStatus: str
    structuredData: Optional[Dict[str, Any]] = None
    downloadUrl: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class ResumeSingleResponse(BaseModel):
    status: int
    message: str
    data: ResumeSummary


class ResumeListResponse(BaseModel):
    status: int
    message: str
    data: List[ResumeSummary]
