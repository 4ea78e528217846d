from app.schemas.resume import (
    PersonalInfo,
    ExperienceEntry,
    ProjectEntry,
    EducationEntry,
    ResumeDocument,
    ResumeUpdate,
    ResumeCreate,
)

__all__ = [
    "PersonalInfo",
    "ExperienceEntry",
    "ProjectEntry",
    "EducationEntry",
    "ResumeDocument",
    "ResumeUpdate",
    "ResumeCreate",
]
