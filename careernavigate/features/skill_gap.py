"""Skill gap view: found skills, missing skills and where to learn them."""

from typing import Any, Mapping, Optional, Tuple
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from careernavigate.domain.models import (
    NO_MISSING_SKILLS_MESSAGE,
    NO_SKILLS_DATA_MESSAGE,
    URI_COMPONENT_SAFE,
    ResumeFeedback,
)


class LearningLinks(BaseModel):
    """Search links for learning one missing skill."""

    model_config = ConfigDict(frozen=True)

    skill: str
    coursera: str
    youtube: str
    docs: str

    @classmethod
    def for_skill(cls, skill: str) -> "LearningLinks":
        query = quote(skill, safe=URI_COMPONENT_SAFE)
        return cls(
            skill=skill,
            coursera=f"https://www.coursera.org/search?query={query}",
            youtube=f"https://www.youtube.com/results?search_query={query}+tutorial",
            docs=f"https://www.google.com/search?q={query}+documentation",
        )


class SkillGapView(BaseModel):
    """What the skill gap panel shows for one analysis."""

    model_config = ConfigDict(frozen=True)

    found_skills: Tuple[str, ...] = ()
    missing_skills: Tuple[LearningLinks, ...] = ()

    @classmethod
    def from_feedback(cls, feedback: Optional[Mapping[str, Any]]) -> "SkillGapView":
        gap = ResumeFeedback.from_payload(feedback).skill_gap
        return cls(
            found_skills=gap.found_skills,
            missing_skills=tuple(LearningLinks.for_skill(s) for s in gap.missing_skills),
        )

    @property
    def has_missing_skills(self) -> bool:
        return bool(self.missing_skills)

    @property
    def found_message(self) -> Optional[str]:
        """Empty-state text for the found list, or None when it has entries."""
        return None if self.found_skills else NO_SKILLS_DATA_MESSAGE

    @property
    def missing_message(self) -> Optional[str]:
        """Empty-state text for the missing list, or None when it has entries."""
        return None if self.missing_skills else NO_MISSING_SKILLS_MESSAGE
