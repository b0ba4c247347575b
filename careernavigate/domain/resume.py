"""Resume builder data model.

The builder edits an immutable ResumeData: each edit returns a new instance
(see careernavigate.features.builder). Entry ids are generated on creation
so entries can be addressed for update and removal.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from careernavigate.utils.text import generate_id


class PersonalInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    full_name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    github: str = ""
    location: str = ""
    website: Optional[str] = None
    summary: str = ""


class EducationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    school: str = "University"
    degree: str = "Degree"
    major: str = "Major"
    graduation_date: str = "2024"
    gpa: Optional[str] = None


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    company: str = "Company"
    role: str = "Role"
    location: str = "City"
    start_date: str = "2023"
    end_date: str = "Present"
    points: Tuple[str, ...] = ("Accomplished X...",)


class ProjectEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    name: str = "Project"
    technologies: str = "Tech"
    link: Optional[str] = None
    points: Tuple[str, ...] = ("Built...",)


class SkillGroup(BaseModel):
    """A category of skills; ``items`` is free text, usually comma-separated."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    category: str = "Languages"
    items: str = "Java, Python"


class CertificationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    name: str = "Cert Name"
    issuer: str = "Issuer"
    date: str = "2024"


class AwardEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    name: str = "Award Name"
    issuer: str = "Issuer"
    date: str = "2024"


class ResumeData(BaseModel):
    """Everything the builder knows about a candidate."""

    model_config = ConfigDict(frozen=True)

    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    education: Tuple[EducationEntry, ...] = ()
    experience: Tuple[ExperienceEntry, ...] = ()
    projects: Tuple[ProjectEntry, ...] = ()
    skills: Tuple[SkillGroup, ...] = ()
    certifications: Tuple[CertificationEntry, ...] = ()
    awards: Tuple[AwardEntry, ...] = ()

    def skill_items(self) -> str:
        """All skill groups' items joined with ``", "``."""
        return ", ".join(group.items for group in self.skills)
