"""
Resume API endpoints.

Owner-scoped CRUD over resume documents, a public read path, and printable
HTML previews.
"""

import json
import logging
import os
import tempfile
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import HTMLResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id
from app.core.config import settings
from app.db.session import get_db
from app.schemas.resume import ResumeCreate, ResumeUpdate
from app.services import resume_service
from app.services.image_host import ImageHostError
from app.services.preview import render_resume

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = "Resume Not Found!"
PUBLIC_NOT_FOUND = "Resume Not Found or Not Public."


def _not_found(detail: str = NOT_FOUND) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def _parse_resume_data(resume_data: str) -> ResumeUpdate:
    """Parse the JSON-encoded resumeData form field."""
    try:
        payload = json.loads(resume_data)
    except json.JSONDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="resumeData must be valid JSON",
        )
    if not isinstance(payload, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="resumeData must be a JSON object",
        )
    try:
        return ResumeUpdate.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid resumeData: {e.errors()[0]['msg']}",
        )


async def _save_temp_image(image: UploadFile) -> str:
    """Write an uploaded image to a temporary file and return its path."""
    if not (image.content_type or "").startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only image files are accepted",
        )

    content = await image.read()
    if len(content) > settings.MAX_IMAGE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Image is too large",
        )

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    suffix = os.path.splitext(image.filename or "")[1] or ".png"
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix, dir=settings.UPLOAD_DIR) as temp_file:
        temp_file.write(content)
        return temp_file.name


# ============== API Endpoints ==============


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_resume(
    data: ResumeCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create an empty resume with default template and colors."""
    try:
        resume = resume_service.create_resume(db, user_id, data.title)
    except SQLAlchemyError:
        logger.exception("Error creating resume for user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create resume.",
        )
    return {"message": "Resume Created Successfully!", "resume": resume.to_dict()}


@router.put("/update")
async def update_resume(
    resumeId: int = Form(...),
    resumeData: str = Form(...),
    image: Optional[UploadFile] = File(None),
    removeBackground: bool = Form(False),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Save a resume.

    resumeData is a JSON object of top-level fields to overwrite. An optional
    image is uploaded to the image host and becomes personal_info.image.
    """
    patch = _parse_resume_data(resumeData)

    temp_path = None
    try:
        if image is not None and image.filename:
            temp_path = await _save_temp_image(image)

        resume = resume_service.update_resume(
            db,
            user_id,
            resumeId,
            patch,
            image_path=temp_path,
            remove_background=removeBackground,
        )
    except ImageHostError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload image.",
        )
    except SQLAlchemyError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save resume.",
        )
    finally:
        # Clean up temp file
        if temp_path and os.path.exists(temp_path):
            os.unlink(temp_path)

    if resume is None:
        raise _not_found()

    return {"message": "Saved Successfully!", "resume": resume.to_dict()}


@router.delete("/delete/{resume_id}")
async def delete_resume(
    resume_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete an owned resume."""
    if not resume_service.delete_resume(db, user_id, resume_id):
        raise _not_found()
    return {"message": "Resume Deleted Successfully!"}


@router.get("/get/{resume_id}")
async def get_resume(
    resume_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Get one of the authenticated user's resumes."""
    resume = resume_service.get_resume(db, user_id, resume_id)
    if resume is None:
        raise _not_found()
    return {"resume": resume.to_dict()}


@router.get("/public/{resume_id}")
async def get_public_resume(resume_id: int, db: Session = Depends(get_db)):
    """Get a resume that its owner made public. No authentication."""
    resume = resume_service.get_public_resume(db, resume_id)
    if resume is None:
        raise _not_found(PUBLIC_NOT_FOUND)
    return {"resume": resume.to_dict()}


@router.get("/preview/{resume_id}", response_class=HTMLResponse)
async def preview_resume(
    resume_id: int,
    template: Optional[str] = None,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Render one of the authenticated user's resumes as printable HTML."""
    resume = resume_service.get_resume(db, user_id, resume_id)
    if resume is None:
        raise _not_found()
    return HTMLResponse(render_resume(resume.to_dict(), template=template))


@router.get("/public/{resume_id}/preview", response_class=HTMLResponse)
async def preview_public_resume(
    resume_id: int,
    template: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Render a public resume as printable HTML."""
    resume = resume_service.get_public_resume(db, resume_id)
    if resume is None:
        raise _not_found(PUBLIC_NOT_FOUND)
    return HTMLResponse(render_resume(resume.to_dict(), template=template))
