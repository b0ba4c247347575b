"""Google Jobs adapter (via SerpApi)."""

from __future__ import annotations

from typing import Any, Optional

from careernavigate.config.models import JobMode, JobSearchConfig
from careernavigate.domain.models import JobPosting
from careernavigate.logging import get_logger
from careernavigate.parsing.fields import pick_list, pick_str

from .base import DEFAULT_USER_AGENT, BaseAdapter
from .exceptions import AdapterConfigurationError, AdapterHTTPError, AdapterResponseError

logger = get_logger(__name__, component="adapter")


class SerpApiJobsAdapter(BaseAdapter):
    """Adapter for the SerpApi ``google_jobs`` engine.

    One search per call. The location is deliberately broad so remote,
    hybrid and on-site openings all come back. A provider error (including a 4xx
    reply) or a reply without ``jobs_results`` means "no openings", not a failure.

    API Details:
        Endpoint: https://serpapi.com/search
        Method: GET
        Authentication: ``api_key`` query parameter
        Response: JSON object with 'jobs_results' array
    """

    ADAPTER_NAME = "serpapi"

    def __init__(
        self,
        api_key: Optional[str],
        search_config: Optional[JobSearchConfig] = None,
        timeout: int = 90,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(timeout=timeout, user_agent=user_agent)
        self._api_key = (api_key or "").strip() or None
        self.search_config = search_config or JobSearchConfig()

    @property
    def is_configured(self) -> bool:
        return self._api_key is not None

    def build_query(self, title: str, mode: JobMode = JobMode.JOB) -> str:
        query = title.strip()
        if JobMode(mode) is JobMode.INTERN:
            query += self.search_config.internship_suffix
        return query

    def search(self, title: str, mode: JobMode = JobMode.JOB) -> list[JobPosting]:
        """Search for openings matching a role title.

        Args:
            title: Role title to search for
            mode: Full-time jobs or internships

        Returns:
            Up to ``max_results`` postings, in provider order

        Raises:
            AdapterConfigurationError: If no API key is configured
            AdapterError: On transport or HTTP failures
        """
        if not self.is_configured:
            raise AdapterConfigurationError("API key is not configured")

        config = self.search_config
        query = self.build_query(title, mode)
        params = {
            "engine": config.engine,
            "q": query,
            "location": config.location,
            "google_domain": config.google_domain,
            "hl": config.hl,
            "gl": config.gl,
            "api_key": self._api_key,
        }

        logger.info(
            "Searching Google Jobs",
            extra={
                "event": "adapter.jobs.search",
                "adapter": self.ADAPTER_NAME,
                "query": query,
                "location": config.location,
            },
        )

        try:
            data = self._make_request(config.endpoint, params=params)
        except AdapterHTTPError as e:
            # SerpApi reports bad queries and key problems as 4xx with an error body
            if 400 <= e.status_code < 500:
                logger.warning(
                    "Job search rejected by provider",
                    extra={
                        "event": "adapter.jobs.rejected",
                        "adapter": self.ADAPTER_NAME,
                        "query": query,
                        "status_code": e.status_code,
                    },
                )
                return []
            raise

        if not isinstance(data, dict):
            raise AdapterResponseError(
                f"Expected JSON object response, got {type(data).__name__}"
            )

        results = data.get("jobs_results")
        if data.get("error") or not isinstance(results, list):
            logger.info(
                "Job search returned no results",
                extra={
                    "event": "adapter.jobs.empty",
                    "adapter": self.ADAPTER_NAME,
                    "query": query,
                    "provider_error": str(data.get("error") or ""),
                },
            )
            return []

        postings = [
            self._transform_job(job)
            for job in results[: config.max_results]
            if isinstance(job, dict)
        ]

        logger.info(
            "Job search succeeded",
            extra={
                "event": "adapter.jobs.found",
                "adapter": self.ADAPTER_NAME,
                "query": query,
                "count": len(postings),
            },
        )
        return postings

    def _transform_job(self, job: dict[str, Any]) -> JobPosting:
        return JobPosting(
            title=pick_str(job, "title"),
            company_name=pick_str(job, "company_name"),
            location=pick_str(job, "location"),
            link=self._pick_link(job),
        )

    @staticmethod
    def _pick_link(job: dict[str, Any]) -> str:
        """Direct apply link, else the first related link, else the share link."""
        apply_link = pick_str(job, "apply_link")
        if apply_link:
            return apply_link

        related = pick_list(job, "related_links", dict)
        if related:
            related_link = pick_str(related[0], "link")
            if related_link:
                return related_link

        return pick_str(job, "share_link")
