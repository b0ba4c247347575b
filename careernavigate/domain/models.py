"""Domain records built from AI payloads and stored resume analyses.

Each payload-backed record has a ``from_payload`` constructor that applies
field-level defaults: a field is read only when the payload has the exact
key with the right type (see careernavigate.parsing.fields). A ``None``
payload gives an all-defaults record, so callers never need to special-case
failed extraction.

Records are frozen; list fields are tuples.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote, quote_plus

from pydantic import BaseModel, ConfigDict, Field, field_validator

from careernavigate.parsing.fields import (
    pick_list,
    pick_mapping,
    pick_number,
    pick_str,
)
from careernavigate.utils.timestamps import ensure_utc

FALLBACK_JOB_TITLE = "Software Engineer"
FALLBACK_RECIPIENT = "Hiring Manager"
FALLBACK_ROLE = "Professional"
FALLBACK_SKILLS = "General Skills"

NO_MISSING_SKILLS_MESSAGE = "No missing skills identified. Great job!"
NO_SKILLS_DATA_MESSAGE = "No skills data available."
NO_JOBS_MESSAGE = "No jobs found. Try again."
NO_RESUMES_MESSAGE = "No resumes analyzed yet."

# Left unescaped in search query values, along with letters, digits and _.-~
URI_COMPONENT_SAFE = "!*'()"


class SkillGapAnalysis(BaseModel):
    """Skills the resume shows and skills the target role still needs."""

    model_config = ConfigDict(frozen=True)

    found_skills: Tuple[str, ...] = ()
    missing_skills: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "SkillGapAnalysis":
        return cls(
            found_skills=pick_list(payload, "found_skills", str),
            missing_skills=pick_list(payload, "missing_skills", str),
        )


class AtsTip(BaseModel):
    """One ATS suggestion; ``type`` is "good" or "improve" as the model reports it."""

    model_config = ConfigDict(frozen=True)

    type: str = ""
    tip: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "AtsTip":
        return cls(type=pick_str(payload, "type"), tip=pick_str(payload, "tip"))


class AtsReport(BaseModel):
    """Applicant-tracking-system score and tips from the ``ATS`` analysis section."""

    model_config = ConfigDict(frozen=True)

    score: float = 0
    tips: Tuple[AtsTip, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "AtsReport":
        # Tips without text carry nothing to show
        tips = (AtsTip.from_payload(item) for item in pick_list(payload, "tips", dict))
        return cls(
            score=pick_number(payload, "score", default=0),
            tips=tuple(tip for tip in tips if tip.tip.strip()),
        )


class ResumeFeedback(BaseModel):
    """Typed view over a stored analysis payload.

    Keys follow the analysis prompt's output format (``overallScore``,
    ``job_title``, ``ATS``, ``skill_gap``, ...).
    """

    model_config = ConfigDict(frozen=True)

    overall_score: Optional[float] = None
    job_title: str = ""
    summary: str = ""
    strengths: Tuple[str, ...] = ()
    improvements: Tuple[str, ...] = ()
    ats: AtsReport = Field(default_factory=AtsReport)
    skill_gap: SkillGapAnalysis = Field(default_factory=SkillGapAnalysis)

    @classmethod
    def from_payload(cls, payload: Any) -> "ResumeFeedback":
        return cls(
            overall_score=pick_number(payload, "overallScore"),
            job_title=pick_str(payload, "job_title"),
            summary=pick_str(payload, "summary"),
            strengths=pick_list(payload, "strengths", str),
            improvements=pick_list(payload, "improvements", str),
            ats=AtsReport.from_payload(pick_mapping(payload, "ATS")),
            skill_gap=SkillGapAnalysis.from_payload(pick_mapping(payload, "skill_gap")),
        )

    @property
    def identified_role(self) -> str:
        return self.job_title.strip() or FALLBACK_ROLE

    def top_skills(self, limit: int = 5) -> str:
        """Comma-separated leading found skills, or the generic fallback."""
        skills = self.skill_gap.found_skills[:limit]
        return ", ".join(skills) if skills else FALLBACK_SKILLS


class ResumeRecord(BaseModel):
    """An uploaded resume and its analysis, stored under ``resume:{id}``.

    ``feedback`` keeps the raw payload exactly as the model returned it; use
    ResumeFeedback.from_payload for typed access.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    resume_path: str
    image_path: Optional[str] = None
    company_name: str = ""
    job_title: str = ""
    job_description: str = ""
    feedback: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def ensure_created_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)

    @property
    def typed_feedback(self) -> ResumeFeedback:
        return ResumeFeedback.from_payload(self.feedback)

    @property
    def is_analyzed(self) -> bool:
        return self.feedback is not None


class RoadmapStep(BaseModel):
    """One month of a Pathfinder learning plan."""

    model_config = ConfigDict(frozen=True)

    month: str = ""
    title: str = ""
    topics: Tuple[str, ...] = ()
    color: str = ""
    resource_query: str = ""
    project_idea: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "RoadmapStep":
        return cls(
            month=pick_str(payload, "month"),
            title=pick_str(payload, "title"),
            topics=pick_list(payload, "topics", str),
            color=pick_str(payload, "color"),
            resource_query=pick_str(payload, "resourceQuery"),
            project_idea=pick_str(payload, "projectIdea"),
        )

    @classmethod
    def list_from_payload(cls, payload: Any) -> Tuple["RoadmapStep", ...]:
        """Build steps from an array payload; non-object items are dropped."""
        if not isinstance(payload, list):
            return ()
        return tuple(cls.from_payload(item) for item in payload if isinstance(item, dict))

    @property
    def resource_search_url(self) -> str:
        query = self.resource_query or f"{self.title} tutorial"
        return f"https://www.google.com/search?q={quote_plus(query)}"


class JobPosting(BaseModel):
    """A job or internship opening returned by the job search."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    company_name: str = ""
    location: str = ""
    link: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "JobPosting":
        return cls(
            title=pick_str(payload, "title"),
            company_name=pick_str(payload, "company_name"),
            location=pick_str(payload, "location"),
            link=pick_str(payload, "link"),
        )

    @property
    def is_remote(self) -> bool:
        return "remote" in self.title.lower() or "remote" in self.location.lower()


class LinkedInProfileContent(BaseModel):
    """Rewritten LinkedIn headline and About section."""

    model_config = ConfigDict(frozen=True)

    headline: str = ""
    about: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "LinkedInProfileContent":
        return cls(headline=pick_str(payload, "headline"), about=pick_str(payload, "about"))

    @property
    def is_empty(self) -> bool:
        return not (self.headline or self.about)


class NetworkingContent(BaseModel):
    """Recruiter connection note and the search string to find recruiters."""

    model_config = ConfigDict(frozen=True)

    message: str = ""
    search_query: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "NetworkingContent":
        return cls(
            message=pick_str(payload, "message"),
            search_query=pick_str(payload, "searchQuery"),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.message or self.search_query)

    @property
    def recruiter_search_url(self) -> str:
        query = quote(self.search_query, safe=URI_COMPONENT_SAFE)
        return f"https://www.google.com/search?q={query}"


class CoverLetterRequest(BaseModel):
    """The job a cover letter is written for."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    company: str = ""
    manager: str = ""
    description: str = ""
    address: str = ""

    @property
    def recipient(self) -> str:
        return self.manager.strip() or FALLBACK_RECIPIENT

    @property
    def is_complete(self) -> bool:
        return bool(self.title.strip() and self.company.strip())
