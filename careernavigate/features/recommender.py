"""Job and internship recommendations for an analyzed resume."""

import threading
from typing import Any, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from careernavigate.adapters.chat import ChatCompletionAdapter
from careernavigate.adapters.exceptions import AdapterError
from careernavigate.config.models import JobMode
from careernavigate.domain.models import FALLBACK_JOB_TITLE, NO_JOBS_MESSAGE, JobPosting
from careernavigate.logging import get_logger
from careernavigate.logging.context import log_context, new_request_id
from careernavigate.parsing.content import normalize_content
from careernavigate.parsing.extraction import extract_payload
from careernavigate.parsing.fields import pick_list, pick_str
from careernavigate.prompts import PromptRenderer

from .coach import feedback_context
from .exceptions import ConversationBusyError, MissingInputError
from .job_search import JobSearchService

logger = get_logger(__name__, component="recommender")


class RecommendationResult(BaseModel):
    """What the recommendations panel shows.

    ``status`` is ``"idle"`` when the search ran (even with no results) and
    ``"error"`` when it could not.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["idle", "error"]
    jobs: Tuple[JobPosting, ...] = ()
    title: str = FALLBACK_JOB_TITLE
    mode: JobMode = JobMode.JOB

    @property
    def message(self) -> Optional[str]:
        """Empty-state text, or None when there are postings to show."""
        if self.status == "idle" and not self.jobs:
            return NO_JOBS_MESSAGE
        return None


class JobRecommender:
    """Turns resume feedback into a generic role title and searches openings for it.

    Specific titles find nothing, so the model is asked for a two or three
    word standard title; if it does not return one, FALLBACK_JOB_TITLE is
    searched instead.
    """

    def __init__(
        self,
        adapter: ChatCompletionAdapter,
        search_service: JobSearchService,
        renderer: PromptRenderer,
        context_chars: int = 1500,
        model: Optional[str] = None,
    ):
        self.adapter = adapter
        self.search_service = search_service
        self.renderer = renderer
        self.context_chars = context_chars
        self.model = model
        self._lock = threading.Lock()

    def recommend(
        self, feedback: Optional[Mapping[str, Any]], mode: JobMode = JobMode.JOB
    ) -> RecommendationResult:
        """Extract a role title from the feedback and search openings for it.

        Raises:
            MissingInputError: If there is no feedback
            ConversationBusyError: If a recommendation is already running
        """
        if not feedback:
            raise MissingInputError("Resume feedback is required for recommendations")
        mode = JobMode(mode)

        if not self._lock.acquire(blocking=False):
            raise ConversationBusyError("Recommendations are already loading")

        try:
            with log_context(feature="recommender", request_id=new_request_id()):
                try:
                    title = self.extract_title(feedback)
                except AdapterError as e:
                    logger.warning(
                        f"Job title extraction failed: {e}",
                        extra={
                            "event": "recommender.title.failed",
                            "error_type": type(e).__name__,
                        },
                    )
                    return RecommendationResult(status="error", mode=mode)

                status_code, body = self.search_service.handle(
                    {"title": title, "mode": mode.value}
                )
                if status_code != 200:
                    logger.warning(
                        "Job search returned an error",
                        extra={
                            "event": "recommender.search.failed",
                            "status_code": status_code,
                            "error": pick_str(body, "error"),
                        },
                    )
                    return RecommendationResult(status="error", title=title, mode=mode)

                jobs = tuple(
                    JobPosting.from_payload(job) for job in pick_list(body, "jobs", dict)
                )
                logger.info(
                    "Recommendations ready",
                    extra={
                        "event": "recommender.completed",
                        "title": title,
                        "mode": mode.value,
                        "count": len(jobs),
                    },
                )
                return RecommendationResult(status="idle", jobs=jobs, title=title, mode=mode)
        finally:
            self._lock.release()

    def extract_title(self, feedback: Mapping[str, Any]) -> str:
        """Ask the model for a generic role title.

        Raises:
            AdapterError: If the chat request fails
        """
        prompt = self.renderer.render(
            "job_title.j2", resume_context=feedback_context(feedback, self.context_chars)
        )
        response = self.adapter.chat(prompt, model=self.model)
        result = extract_payload(normalize_content(response.content), mode="object")
        title = pick_str(result.payload, "title", allow_blank=False).strip()
        return title or FALLBACK_JOB_TITLE
