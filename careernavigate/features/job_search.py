"""Job search request handling.

JobSearchService answers job search requests the way an HTTP endpoint
would: it takes a request body and returns ``(status_code, response_body)``.
Callers get ``{"jobs": [...]}`` on success and ``{"error": "..."}`` otherwise.
"""

from typing import Any, Dict, Tuple

from careernavigate.adapters.exceptions import AdapterError
from careernavigate.adapters.jobs import SerpApiJobsAdapter
from careernavigate.config.models import JobMode
from careernavigate.logging import get_logger
from careernavigate.logging.context import log_context, new_request_id
from careernavigate.parsing.fields import pick_str

logger = get_logger(__name__, component="job_search")

JobSearchReply = Tuple[int, Dict[str, Any]]


class JobSearchService:
    """Validates job search requests and runs them through the jobs adapter."""

    def __init__(self, adapter: SerpApiJobsAdapter):
        self.adapter = adapter

    def handle(self, body: Any, method: str = "POST") -> JobSearchReply:
        """Run one job search request.

        Args:
            body: Request body, ``{"title": str, "mode": "job" | "intern"}``
            method: Only POST is accepted

        Returns:
            (200, {"jobs": [...]}) on success, including an empty list when
            nothing matched; (400/405/500, {"error": message}) otherwise
        """
        if method.upper() != "POST":
            return 405, {"error": "Method not allowed"}

        title = pick_str(body, "title", allow_blank=False).strip()
        if not title:
            return 400, {"error": "Missing title"}

        mode = self._parse_mode(pick_str(body, "mode"))

        if not self.adapter.is_configured:
            logger.error(
                "Job search requested without an API key",
                extra={"event": "jobs.search.unconfigured"},
            )
            return 500, {"error": "API key is not configured"}

        with log_context(feature="job_search", request_id=new_request_id()):
            try:
                postings = self.adapter.search(title, mode)
            except AdapterError as e:
                logger.error(
                    f"Job search failed: {e}",
                    extra={"event": "jobs.search.failed", "error_type": type(e).__name__},
                )
                return 500, {"error": "Failed to fetch jobs"}

            logger.info(
                "Job search completed",
                extra={
                    "event": "jobs.search.completed",
                    "title": title,
                    "mode": mode.value,
                    "count": len(postings),
                },
            )
            return 200, {"jobs": [posting.model_dump() for posting in postings]}

    @staticmethod
    def _parse_mode(raw: str) -> JobMode:
        # Anything other than "intern" searches regular jobs
        return JobMode.INTERN if raw == JobMode.INTERN.value else JobMode.JOB
