"""Domain models for CareerNavigate."""

from .messages import ChatMessage, ChatResponse, ContentPart, FilePart, TextPart
from .models import (
    AtsReport,
    AtsTip,
    CoverLetterRequest,
    JobPosting,
    LinkedInProfileContent,
    NetworkingContent,
    ResumeFeedback,
    ResumeRecord,
    RoadmapStep,
    SkillGapAnalysis,
)
from .resume import ResumeData

__all__ = [
    "ChatMessage",
    "ChatResponse",
    "ContentPart",
    "TextPart",
    "FilePart",
    "AtsReport",
    "AtsTip",
    "CoverLetterRequest",
    "JobPosting",
    "LinkedInProfileContent",
    "NetworkingContent",
    "ResumeFeedback",
    "ResumeRecord",
    "RoadmapStep",
    "SkillGapAnalysis",
    "ResumeData",
]
