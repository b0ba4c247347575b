"""LinkedIn profile rewriting and recruiter outreach."""

from typing import Any, Mapping, Optional

from careernavigate.adapters.chat import ChatCompletionAdapter
from careernavigate.adapters.exceptions import AdapterError
from careernavigate.domain.models import (
    LinkedInProfileContent,
    NetworkingContent,
    ResumeFeedback,
)
from careernavigate.logging import get_logger
from careernavigate.logging.context import log_context, new_request_id
from careernavigate.parsing.content import normalize_content
from careernavigate.parsing.extraction import ExtractionResult, extract_payload
from careernavigate.prompts import PromptRenderer

from .exceptions import MissingInputError

logger = get_logger(__name__, component="linkedin")

HEADLINE_MAX_CHARS = 220
ABOUT_MAX_WORDS = 150
NOTE_MAX_CHARS = 300


class LinkedInOptimizer:
    """Generates LinkedIn copy from resume feedback.

    Failures never raise: a failed or unparseable request yields an empty
    record, and callers check ``is_empty`` to show a "try again" notice.
    """

    def __init__(
        self,
        adapter: ChatCompletionAdapter,
        renderer: PromptRenderer,
        model: Optional[str] = None,
    ):
        self.adapter = adapter
        self.renderer = renderer
        self.model = model

    def generate_profile(self, feedback: Optional[Mapping[str, Any]]) -> LinkedInProfileContent:
        """Headline and About section for the role the resume fits."""
        typed = ResumeFeedback.from_payload(feedback)
        prompt = self.renderer.render(
            "linkedin_profile.j2",
            role=typed.identified_role,
            skills=typed.top_skills(5),
            headline_max_chars=HEADLINE_MAX_CHARS,
            about_max_words=ABOUT_MAX_WORDS,
        )
        with log_context(feature="linkedin_profile", request_id=new_request_id()):
            result = self._ask(prompt)
            return LinkedInProfileContent.from_payload(result.payload)

    def generate_networking(self, company: str) -> NetworkingContent:
        """Connection note and Boolean search string for recruiters at ``company``.

        Raises:
            MissingInputError: If ``company`` is blank
        """
        company = (company or "").strip()
        if not company:
            raise MissingInputError("Please enter a company name")

        prompt = self.renderer.render(
            "linkedin_networking.j2", company=company, note_max_chars=NOTE_MAX_CHARS
        )
        with log_context(feature="linkedin_networking", request_id=new_request_id()):
            result = self._ask(prompt)
            return NetworkingContent.from_payload(result.payload)

    def _ask(self, prompt: str) -> ExtractionResult:
        try:
            response = self.adapter.chat(prompt, model=self.model)
        except AdapterError as e:
            logger.warning(
                f"LinkedIn generation failed: {e}",
                extra={"event": "linkedin.generate.failed", "error_type": type(e).__name__},
            )
            return ExtractionResult(preface_text="", payload=None)

        result = extract_payload(normalize_content(response.content), mode="object")
        if not result.found:
            logger.warning(
                "LinkedIn generation returned no usable JSON",
                extra={"event": "linkedin.generate.unparsed"},
            )
        return result
