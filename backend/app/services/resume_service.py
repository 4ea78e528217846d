"""
Resume CRUD Service.

Every operation is scoped to the owning user except the public read. A
resume that exists but belongs to someone else is reported exactly like a
missing one.
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import Resume
from app.models.resume import CONTENT_FIELDS, DEFAULT_TITLE, empty_personal_info
from app.schemas.resume import ResumeUpdate
from app.services import image_host

logger = logging.getLogger(__name__)


def create_resume(db: Session, owner_id: int, title: Optional[str] = None) -> Resume:
    """Create an empty resume with default metadata."""
    resume = Resume(user_id=owner_id, title=(title or "").strip() or DEFAULT_TITLE)
    db.add(resume)
    db.commit()
    db.refresh(resume)
    logger.info("Created resume %s for user %s", resume.id, owner_id)
    return resume


def create_resume_from_data(
    db: Session,
    owner_id: int,
    title: Optional[str],
    data: dict[str, Any],
) -> Resume:
    """
    Create a resume from extracted data, storing content exactly as given.

    Unknown keys are dropped; known content keys are not validated.
    """
    resume = Resume(user_id=owner_id, title=(title or "").strip() or DEFAULT_TITLE)
    for field in CONTENT_FIELDS:
        if field in data:
            setattr(resume, field, data[field])
    db.add(resume)
    db.commit()
    db.refresh(resume)
    logger.info("Created resume %s for user %s from extracted data", resume.id, owner_id)
    return resume


def get_resume(db: Session, owner_id: int, resume_id: int) -> Optional[Resume]:
    """Return the resume if it exists and belongs to owner_id."""
    return (
        db.query(Resume)
        .filter(Resume.id == resume_id, Resume.user_id == owner_id)
        .first()
    )


def get_public_resume(db: Session, resume_id: int) -> Optional[Resume]:
    """Return the resume if it exists and is public, whoever owns it."""
    return (
        db.query(Resume)
        .filter(Resume.id == resume_id, Resume.public.is_(True))
        .first()
    )


def list_resumes(db: Session, owner_id: int) -> list[Resume]:
    """Return every resume of an owner, most recently updated first."""
    return (
        db.query(Resume)
        .filter(Resume.user_id == owner_id)
        .order_by(Resume.updated_at.desc(), Resume.id.desc())
        .all()
    )


def update_resume(
    db: Session,
    owner_id: int,
    resume_id: int,
    patch: ResumeUpdate,
    image_path: Optional[str] = None,
    remove_background: bool = False,
) -> Optional[Resume]:
    """
    Overwrite the top-level fields present in the patch.

    Fields absent from the patch keep their stored values. Sub-records such
    as personal_info are replaced whole.

    With an image, the file is uploaded first and its URL is written into
    personal_info.image. If the database write then fails, the uploaded file
    is deleted from the image host and the original error is re-raised.

    Returns:
        The updated resume, or None when no owned resume has that id (no
        upload happens in that case)

    Raises:
        ImageHostError: If the upload fails (nothing is written)
        SQLAlchemyError: If the database write fails
    """
    resume = get_resume(db, owner_id, resume_id)
    if resume is None:
        return None

    fields = patch.to_fields()

    uploaded = None
    if image_path:
        uploaded = image_host.upload_image(
            image_path,
            file_name=f"resume-profile-{owner_id}.png",
            remove_background=remove_background,
        )
        personal_info = fields.get("personal_info")
        if personal_info is None:
            # imported documents are stored unchecked and may hold any shape here
            stored = resume.personal_info
            personal_info = dict(stored) if isinstance(stored, dict) else empty_personal_info()
        personal_info["image"] = uploaded.url
        fields["personal_info"] = personal_info

    for key, value in fields.items():
        setattr(resume, key, value)

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to save resume %s", resume_id)
        if uploaded is not None:
            _discard_upload(uploaded.file_id)
        raise

    db.refresh(resume)
    return resume


def _discard_upload(file_id: str) -> None:
    try:
        image_host.delete_image(file_id)
    except image_host.ImageHostError:
        logger.error("Orphaned image %s could not be removed", file_id)


def delete_resume(db: Session, owner_id: int, resume_id: int) -> bool:
    """Delete an owned resume. Returns False if there was nothing to delete."""
    resume = get_resume(db, owner_id, resume_id)
    if resume is None:
        return False
    db.delete(resume)
    db.commit()
    logger.info("Deleted resume %s of user %s", resume_id, owner_id)
    return True
