"""Editing operations for the resume builder.

Every function takes a ResumeData and returns a new one; the input is never
modified. Entries are addressed by their generated ``id``. Updating or
removing an id that is not present returns an equal copy.
"""

from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

from careernavigate.domain.resume import (
    AwardEntry,
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ResumeData,
    SkillGroup,
)

SECTION_ENTRY_TYPES: Dict[str, Type[BaseModel]] = {
    "education": EducationEntry,
    "experience": ExperienceEntry,
    "projects": ProjectEntry,
    "skills": SkillGroup,
    "certifications": CertificationEntry,
    "awards": AwardEntry,
}

# Sections whose entries carry bullet points
POINT_SECTIONS = ("experience", "projects")


def _entry_type(section: str) -> Type[BaseModel]:
    try:
        return SECTION_ENTRY_TYPES[section]
    except KeyError:
        supported = ", ".join(SECTION_ENTRY_TYPES)
        raise ValueError(f"Unknown section: {section}. Supported sections: {supported}") from None


def _apply(model: BaseModel, fields: Dict[str, Any]) -> BaseModel:
    allowed = set(type(model).model_fields) - {"id"}
    bad = sorted(set(fields) - allowed)
    if bad:
        raise ValueError(f"Cannot update field(s) on {type(model).__name__}: {', '.join(bad)}")
    return type(model).model_validate({**model.model_dump(), **fields})


def update_personal(resume: ResumeData, **fields: Any) -> ResumeData:
    personal = _apply(resume.personal, fields)
    return resume.model_copy(update={"personal": personal})


def add_entry(resume: ResumeData, section: str, entry: Optional[BaseModel] = None) -> ResumeData:
    """Append ``entry`` (or a placeholder entry) to a section."""
    entry_type = _entry_type(section)
    if entry is None:
        entry = entry_type()
    elif not isinstance(entry, entry_type):
        raise TypeError(f"{section} entries must be {entry_type.__name__}")
    return resume.model_copy(update={section: getattr(resume, section) + (entry,)})


def update_entry(resume: ResumeData, section: str, entry_id: str, **fields: Any) -> ResumeData:
    _entry_type(section)
    entries = tuple(
        _apply(entry, fields) if entry.id == entry_id else entry
        for entry in getattr(resume, section)
    )
    return resume.model_copy(update={section: entries})


def remove_entry(resume: ResumeData, section: str, entry_id: str) -> ResumeData:
    _entry_type(section)
    entries = tuple(entry for entry in getattr(resume, section) if entry.id != entry_id)
    return resume.model_copy(update={section: entries})


def _edit_points(resume: ResumeData, section: str, entry_id: str, edit) -> ResumeData:
    if section not in POINT_SECTIONS:
        raise ValueError(f"Section {section} has no bullet points")
    entries = tuple(
        entry.model_copy(update={"points": edit(entry.points)}) if entry.id == entry_id else entry
        for entry in getattr(resume, section)
    )
    return resume.model_copy(update={section: entries})


def add_point(resume: ResumeData, section: str, entry_id: str, text: str = "") -> ResumeData:
    return _edit_points(resume, section, entry_id, lambda points: points + (text,))


def update_point(
    resume: ResumeData, section: str, entry_id: str, index: int, text: str
) -> ResumeData:
    return _edit_points(
        resume,
        section,
        entry_id,
        lambda points: tuple(text if i == index else p for i, p in enumerate(points)),
    )


def remove_point(resume: ResumeData, section: str, entry_id: str, index: int) -> ResumeData:
    return _edit_points(
        resume,
        section,
        entry_id,
        lambda points: tuple(p for i, p in enumerate(points) if i != index),
    )
