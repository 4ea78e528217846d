from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.user import _utcnow

DEFAULT_TITLE = "Untitled Resume"
DEFAULT_TEMPLATE = "classic"
TEMPLATE_CHOICES = ("classic", "modern", "minimal", "minimal-image")
DEFAULT_ACCENT_COLOR = "#3b82f6"

PERSONAL_INFO_FIELDS = (
    "image",
    "full_name",
    "profession",
    "email",
    "phone",
    "location",
    "linkedin",
    "website",
)

# Top-level keys holding resume content (everything a user or the AI fills in)
CONTENT_FIELDS = (
    "professional_summary",
    "skills",
    "personal_info",
    "experience",
    "projects",
    "education",
)


def empty_personal_info() -> dict:
    return {field: "" for field in PERSONAL_INFO_FIELDS}


class Resume(Base):
    """
    A resume document.

    Content sections are stored whole as JSON, one row per resume. List
    entries have no identity beyond their position.
    """

    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    # 1. Metadata
    title = Column(String, default=DEFAULT_TITLE, nullable=False)
    public = Column(Boolean, default=False, nullable=False)
    template = Column(String, default=DEFAULT_TEMPLATE, nullable=False)
    accent_color = Column(String, default=DEFAULT_ACCENT_COLOR, nullable=False)

    # 2. Content
    professional_summary = Column(Text, default="")
    skills = Column(JSON, default=list)
    personal_info = Column(JSON, default=empty_personal_info)
    experience = Column(JSON, default=list)
    projects = Column(JSON, default=list)
    education = Column(JSON, default=list)

    # 3. Meta
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # Relationships
    owner = relationship("User", back_populates="resumes")

    def to_dict(self) -> dict:
        """Serialize the document as stored, without reshaping content."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "public": self.public,
            "template": self.template,
            "accent_color": self.accent_color,
            "professional_summary": self.professional_summary,
            "skills": self.skills,
            "personal_info": self.personal_info,
            "experience": self.experience,
            "projects": self.projects,
            "education": self.education,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
