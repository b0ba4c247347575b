"""Tests for job search request handling and job recommendations."""

import threading
from unittest.mock import Mock

import pytest

from careernavigate.adapters.exceptions import (
    AdapterConfigurationError,
    AdapterHTTPError,
    AdapterTimeoutError,
)
from careernavigate.adapters.jobs import SerpApiJobsAdapter
from careernavigate.config.models import JobMode
from careernavigate.domain.models import FALLBACK_JOB_TITLE, NO_JOBS_MESSAGE, JobPosting
from careernavigate.features import (
    ConversationBusyError,
    JobRecommender,
    JobSearchService,
    MissingInputError,
)
from careernavigate.prompts import PromptRenderer
from tests.helpers import ScriptedChatAdapter


POSTINGS = [
    JobPosting(title="Backend Developer", company_name="Acme", location="Remote", link="https://a"),
    JobPosting(title="API Engineer", company_name="Globex", location="Pune", link="https://b"),
]

FEEDBACK = {"overallScore": 75, "skill_gap": {"found_skills": ["Python", "SQL"]}}


@pytest.fixture
def jobs_adapter():
    """Mock jobs adapter that is configured and returns two postings."""
    adapter = Mock(spec=SerpApiJobsAdapter)
    adapter.is_configured = True
    adapter.search.return_value = list(POSTINGS)
    return adapter


@pytest.fixture
def renderer():
    return PromptRenderer()


# ============================================================================
# JobSearchService Tests
# ============================================================================


class TestJobSearchService:
    """Tests for JobSearchService.handle()."""

    def test_success(self, jobs_adapter):
        """Test a valid request returns the postings."""
        status, body = JobSearchService(jobs_adapter).handle({"title": "Backend Developer", "mode": "job"})

        assert status == 200
        assert body == {"jobs": [posting.model_dump() for posting in POSTINGS]}
        jobs_adapter.search.assert_called_once_with("Backend Developer", JobMode.JOB)

    def test_intern_mode(self, jobs_adapter):
        """Test mode 'intern' searches internships."""
        JobSearchService(jobs_adapter).handle({"title": "Data Analyst", "mode": "intern"})

        jobs_adapter.search.assert_called_once_with("Data Analyst", JobMode.INTERN)

    @pytest.mark.parametrize("mode", [None, "", "INTERN", "contract", 3])
    def test_other_modes_search_jobs(self, jobs_adapter, mode):
        """Test anything other than 'intern' searches regular jobs."""
        JobSearchService(jobs_adapter).handle({"title": "Dev", "mode": mode})

        assert jobs_adapter.search.call_args[0][1] is JobMode.JOB

    def test_empty_results(self, jobs_adapter):
        """Test no matches is a successful empty list."""
        jobs_adapter.search.return_value = []

        assert JobSearchService(jobs_adapter).handle({"title": "Dev"}) == (200, {"jobs": []})

    def test_method_not_allowed(self, jobs_adapter):
        """Test only POST is accepted."""
        assert JobSearchService(jobs_adapter).handle({"title": "Dev"}, method="GET") == (
            405,
            {"error": "Method not allowed"},
        )
        jobs_adapter.search.assert_not_called()

    @pytest.mark.parametrize("body", [{}, {"title": ""}, {"title": "   "}, {"title": 5}, None, "Dev"])
    def test_missing_title(self, jobs_adapter, body):
        """Test a missing or blank title is a 400."""
        assert JobSearchService(jobs_adapter).handle(body) == (400, {"error": "Missing title"})
        jobs_adapter.search.assert_not_called()

    def test_unconfigured_key(self, jobs_adapter):
        """Test a missing API key is reported without searching."""
        jobs_adapter.is_configured = False

        assert JobSearchService(jobs_adapter).handle({"title": "Dev"}) == (
            500,
            {"error": "API key is not configured"},
        )
        jobs_adapter.search.assert_not_called()

    @pytest.mark.parametrize(
        "error",
        [
            AdapterHTTPError("HTTP 502", status_code=502, url="https://serpapi.com/search"),
            AdapterTimeoutError("timed out", url="https://serpapi.com/search"),
            AdapterConfigurationError("API key is not configured"),
        ],
    )
    def test_adapter_failure(self, jobs_adapter, error):
        """Test adapter failures become a generic 500."""
        jobs_adapter.search.side_effect = error

        assert JobSearchService(jobs_adapter).handle({"title": "Dev"}) == (
            500,
            {"error": "Failed to fetch jobs"},
        )


# ============================================================================
# JobRecommender Tests
# ============================================================================


class TestJobRecommender:
    """Tests for JobRecommender.recommend()."""

    def test_recommend_jobs(self, jobs_adapter, renderer):
        """Test the extracted title is searched and postings returned."""
        chat = ScriptedChatAdapter(['Sure! { "title": "Data Analyst" } Hope that helps.'])
        recommender = JobRecommender(chat, JobSearchService(jobs_adapter), renderer)

        result = recommender.recommend(FEEDBACK, JobMode.JOB)

        assert result.status == "idle"
        assert result.title == "Data Analyst"
        assert result.jobs == tuple(POSTINGS)
        assert result.message is None
        jobs_adapter.search.assert_called_once_with("Data Analyst", JobMode.JOB)
        assert '"overallScore":75' in chat.last_prompt

    def test_recommend_internships(self, jobs_adapter, renderer):
        """Test internship mode is passed through to the search."""
        chat = ScriptedChatAdapter(['{"title": "Web Developer"}'])
        recommender = JobRecommender(chat, JobSearchService(jobs_adapter), renderer)

        result = recommender.recommend(FEEDBACK, "intern")

        assert result.mode is JobMode.INTERN
        jobs_adapter.search.assert_called_once_with("Web Developer", JobMode.INTERN)

    @pytest.mark.parametrize(
        "reply", ["I could not decide.", '{"title": ""}', '{"title": 42}', '{"role": "Dev"}']
    )
    def test_fallback_title(self, jobs_adapter, renderer, reply):
        """Test an unusable title falls back to the default role."""
        recommender = JobRecommender(
            ScriptedChatAdapter([reply]), JobSearchService(jobs_adapter), renderer
        )

        result = recommender.recommend(FEEDBACK)

        assert result.title == FALLBACK_JOB_TITLE
        jobs_adapter.search.assert_called_once_with(FALLBACK_JOB_TITLE, JobMode.JOB)

    def test_context_truncated(self, jobs_adapter, renderer):
        """Test only the first context_chars of feedback go into the prompt."""
        chat = ScriptedChatAdapter(['{"title": "Dev"}'])
        recommender = JobRecommender(
            chat, JobSearchService(jobs_adapter), renderer, context_chars=100
        )

        recommender.recommend({"summary": "x" * 500})

        assert "x" * 88 in chat.last_prompt
        assert "x" * 89 not in chat.last_prompt

    def test_no_results_message(self, jobs_adapter, renderer):
        """Test an empty search shows the no-jobs message."""
        jobs_adapter.search.return_value = []
        recommender = JobRecommender(
            ScriptedChatAdapter(['{"title": "Dev"}']), JobSearchService(jobs_adapter), renderer
        )

        result = recommender.recommend(FEEDBACK)

        assert result.status == "idle"
        assert result.jobs == ()
        assert result.message == NO_JOBS_MESSAGE

    def test_search_error_status(self, jobs_adapter, renderer):
        """Test a failed search yields the error status."""
        jobs_adapter.search.side_effect = AdapterHTTPError("HTTP 500", status_code=500, url="x")
        recommender = JobRecommender(
            ScriptedChatAdapter(['{"title": "Dev"}']), JobSearchService(jobs_adapter), renderer
        )

        result = recommender.recommend(FEEDBACK)

        assert result.status == "error"
        assert result.title == "Dev"
        assert result.message is None

    def test_title_step_failure_status(self, jobs_adapter, renderer):
        """Test a failed title request yields the error status without searching."""
        chat = ScriptedChatAdapter([AdapterTimeoutError("timed out", url="x")])
        recommender = JobRecommender(chat, JobSearchService(jobs_adapter), renderer)

        result = recommender.recommend(FEEDBACK)

        assert result.status == "error"
        jobs_adapter.search.assert_not_called()

    @pytest.mark.parametrize("feedback", [None, {}])
    def test_missing_feedback(self, jobs_adapter, renderer, feedback):
        """Test recommendations need an analysis."""
        recommender = JobRecommender(
            ScriptedChatAdapter([]), JobSearchService(jobs_adapter), renderer
        )

        with pytest.raises(MissingInputError):
            recommender.recommend(feedback)

    def test_concurrent_recommend_rejected(self, jobs_adapter, renderer):
        """Test a second request while one is loading is refused."""
        entered = threading.Event()
        release = threading.Event()

        class BlockingAdapter(ScriptedChatAdapter):
            def chat(self, prompt, model=None):
                entered.set()
                release.wait(timeout=5)
                return super().chat(prompt, model)

        recommender = JobRecommender(
            BlockingAdapter(['{"title": "Dev"}']), JobSearchService(jobs_adapter), renderer
        )
        worker = threading.Thread(target=recommender.recommend, args=(FEEDBACK,))
        worker.start()
        try:
            assert entered.wait(timeout=5)
            with pytest.raises(ConversationBusyError):
                recommender.recommend(FEEDBACK)
        finally:
            release.set()
            worker.join(timeout=5)

        jobs_adapter.search.assert_called_once()
