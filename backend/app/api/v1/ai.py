"""
AI API endpoints.

Relays resume text to the completion API: two rewrite helpers and the
resume-from-text import.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id
from app.db.session import get_db
from app.services import ai_relay, resume_service
from app.services.ai_relay import AIServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


# ============== Pydantic Schemas ==============


class EnhanceRequest(BaseModel):
    userContent: Optional[str] = None


class EnhanceResponse(BaseModel):
    enhancedContent: str


class ResumeUploadRequest(BaseModel):
    resumeText: Optional[str] = None
    title: Optional[str] = None


class ResumeUploadResponse(BaseModel):
    resumeId: int


def _require(value: Optional[str], field_name: str) -> str:
    if value is None or not value.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required fields ({field_name})",
        )
    return value


# ============== API Endpoints ==============


@router.post("/enhance-pro-sum", response_model=EnhanceResponse)
async def enhance_professional_summary(
    data: EnhanceRequest,
    user_id: int = Depends(get_current_user_id),
):
    """Rewrite a professional summary with AI."""
    content = _require(data.userContent, "userContent")
    try:
        enhanced = ai_relay.enhance_professional_summary(content)
    except AIServiceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to enhance summary via AI.",
        )
    return EnhanceResponse(enhancedContent=enhanced)


@router.post("/enhance-job-desc", response_model=EnhanceResponse)
async def enhance_job_description(
    data: EnhanceRequest,
    user_id: int = Depends(get_current_user_id),
):
    """Rewrite a job description with AI."""
    content = _require(data.userContent, "userContent")
    try:
        enhanced = ai_relay.enhance_job_description(content)
    except AIServiceError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to enhance job description via AI.",
        )
    return EnhanceResponse(enhancedContent=enhanced)


@router.post("/upload-resume", response_model=ResumeUploadResponse)
async def upload_resume(
    data: ResumeUploadRequest,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Create a resume from pasted resume text.

    The model's JSON is stored as returned, without reshaping.
    """
    resume_text = _require(data.resumeText, "resumeText")
    try:
        extracted = ai_relay.extract_resume_data(resume_text)
        resume = resume_service.create_resume_from_data(db, user_id, data.title, extracted)
    except (AIServiceError, SQLAlchemyError):
        logger.exception("AI resume import failed for user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to parse and upload resume via AI.",
        )
    return ResumeUploadResponse(resumeId=resume.id)
