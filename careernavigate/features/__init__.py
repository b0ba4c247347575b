"""Feature panels built on the chat and job search adapters.

- analyzer.ResumeAnalyzer: upload and analyze a resume
- coach.create_coach: career coach chat about an analyzed resume
- pathfinder.create_pathfinder: roadmap mentor chat
- recommender.JobRecommender: job and internship recommendations
- job_search.JobSearchService: job search request handling
- linkedin.LinkedInOptimizer: LinkedIn headline, About and outreach
- cover_letter.CoverLetterGenerator: cover letter body and full letter
- builder: resume builder editing operations
- skill_gap.SkillGapView: found and missing skills with learning links
"""

from .analyzer import ResumeAnalyzer
from .coach import CoachConversation, create_coach
from .conversation import Conversation, ConversationState
from .cover_letter import CoverLetterGenerator, document_title
from .exceptions import (
    AnalysisError,
    ConversationBusyError,
    FeatureError,
    MissingInputError,
)
from .job_search import JobSearchService
from .linkedin import LinkedInOptimizer
from .pathfinder import PathfinderConversation, create_pathfinder
from .recommender import JobRecommender, RecommendationResult
from .skill_gap import LearningLinks, SkillGapView

__all__ = [
    # Panels
    "ResumeAnalyzer",
    "Conversation",
    "ConversationState",
    "CoachConversation",
    "create_coach",
    "PathfinderConversation",
    "create_pathfinder",
    "JobRecommender",
    "RecommendationResult",
    "JobSearchService",
    "LinkedInOptimizer",
    "CoverLetterGenerator",
    "document_title",
    "SkillGapView",
    "LearningLinks",
    # Exceptions
    "FeatureError",
    "MissingInputError",
    "ConversationBusyError",
    "AnalysisError",
]
