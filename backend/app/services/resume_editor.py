"""
In-memory resume editor.

Mirrors the builder form: one resume document held in memory, edited section
by section. The list editors are pure functions that return a new container;
the editor then replaces the whole section with it. Entries are addressed by
position only.
"""

from typing import Any, Callable, Optional

from pydantic import BaseModel

from app.models.resume import TEMPLATE_CHOICES
from app.schemas.resume import (
    SECTION_ENTRY_MODELS,
    PersonalInfo,
    ResumeDocument,
)
from app.services import ai_relay


def _entry_model(section: str) -> type[BaseModel]:
    try:
        return SECTION_ENTRY_MODELS[section]
    except KeyError:
        raise KeyError(f"Unknown list section: {section}") from None


def add_entry(section: str, entries: list) -> list:
    """Append a blank entry for the section."""
    return [*entries, _entry_model(section)()]


def remove_entry(entries: list, index: int) -> list:
    """Drop the entry at index."""
    if not 0 <= index < len(entries):
        raise IndexError(f"No entry at index {index}")
    return [entry for i, entry in enumerate(entries) if i != index]


def update_entry(section: str, entries: list, index: int, field: str, value: Any) -> list:
    """Replace one field of the entry at index."""
    model = _entry_model(section)
    if field not in model.model_fields:
        raise KeyError(f"Unknown field for {section}: {field}")
    if not 0 <= index < len(entries):
        raise IndexError(f"No entry at index {index}")

    updated = list(entries)
    current = updated[index].model_dump()
    current[field] = value
    updated[index] = model.model_validate(current)
    return updated


class ResumeEditor:
    """
    Holds one resume being edited.

    Args:
        resume_id: Id of the resume being edited
        document: Stored resume data (validated into a ResumeDocument)
        listener: Optional callback, called with (section, value) after every change
    """

    def __init__(
        self,
        resume_id: int,
        document: Optional[dict] = None,
        listener: Optional[Callable[[str, Any], None]] = None,
    ):
        self.resume_id = resume_id
        self.document = ResumeDocument.model_validate(document or {})
        self.document.id = resume_id
        self.listener = listener

    def on_change(self, section: str, value: Any) -> None:
        """Replace a whole section of the held document."""
        data = self.document.model_dump()
        data[section] = value.model_dump() if isinstance(value, BaseModel) else _dump(value)
        self.document = ResumeDocument.model_validate(data)
        if self.listener is not None:
            self.listener(section, getattr(self.document, section))

    # ----- list sections -----

    def _entries(self, section: str) -> list:
        if section not in SECTION_ENTRY_MODELS:
            raise KeyError(f"Unknown list section: {section}")
        return getattr(self.document, section)

    def add(self, section: str) -> None:
        self.on_change(section, add_entry(section, self._entries(section)))

    def remove(self, section: str, index: int) -> None:
        self.on_change(section, remove_entry(self._entries(section), index))

    def update(self, section: str, index: int, field: str, value: Any) -> None:
        self.on_change(section, update_entry(section, self._entries(section), index, field, value))

    # ----- record and scalar sections -----

    def set_personal_info(self, **fields: Any) -> None:
        unknown = set(fields) - set(PersonalInfo.model_fields)
        if unknown:
            raise KeyError(f"Unknown personal info fields: {', '.join(sorted(unknown))}")
        self.on_change("personal_info", self.document.personal_info.model_copy(update=fields))

    def set_summary(self, text: str) -> None:
        self.on_change("professional_summary", text)

    def set_skills(self, skills: list[str] | str) -> None:
        self.on_change("skills", skills)

    def set_title(self, title: str) -> None:
        self.on_change("title", title)

    def set_template(self, template: str) -> None:
        if template not in TEMPLATE_CHOICES:
            raise ValueError(f"Unknown template: {template}")
        self.on_change("template", template)

    def set_accent_color(self, color: str) -> None:
        self.on_change("accent_color", color)

    def toggle_public(self) -> bool:
        self.on_change("public", not self.document.public)
        return self.document.public

    # ----- AI enhancement -----

    def enhance_summary(self) -> str:
        """Replace the summary with an AI-enhanced version of itself."""
        enhanced = ai_relay.enhance_professional_summary(self.document.professional_summary)
        self.set_summary(enhanced)
        return enhanced

    def enhance_experience(self, index: int) -> str:
        """Replace one job description with an AI-enhanced version."""
        if not 0 <= index < len(self.document.experience):
            raise IndexError(f"No entry at index {index}")
        entry = self.document.experience[index]
        enhanced = ai_relay.enhance_job_description(
            f"enhance this job description {entry.description} for the position "
            f"of {entry.position} at {entry.company}"
        )
        self.update("experience", index, "description", enhanced)
        return enhanced

    def to_patch(self) -> dict:
        """The full resumeData payload for the update endpoint."""
        return self.document.model_dump(exclude={"id"})


def _dump(value: Any) -> Any:
    if isinstance(value, list):
        return [item.model_dump() if isinstance(item, BaseModel) else item for item in value]
    return value
