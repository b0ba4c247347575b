"""Cover letter generation for the resume builder."""

from datetime import date
from typing import Literal, Optional

from careernavigate.adapters.chat import ChatCompletionAdapter
from careernavigate.adapters.exceptions import AdapterError
from careernavigate.domain.models import CoverLetterRequest
from careernavigate.domain.resume import ResumeData
from careernavigate.logging import get_logger
from careernavigate.logging.context import log_context, new_request_id
from careernavigate.parsing.content import normalize_content
from careernavigate.parsing.extraction import strip_code_fences
from careernavigate.prompts import PromptRenderer
from careernavigate.utils.text import clean_name, strip_surrounding_quotes
from careernavigate.utils.timestamps import format_letter_date

from .exceptions import MissingInputError

logger = get_logger(__name__, component="cover_letter")

DocumentType = Literal["resume", "cover_letter"]

BODY_MAX_WORDS = 300

_DOCUMENT_SUFFIXES = {"resume": "Resume", "cover_letter": "Cover_Letter"}


def clean_body(text: str) -> str:
    """Strip a wrapping quote pair and code fences from a generated body."""
    return strip_code_fences(strip_surrounding_quotes(text)).strip()


def document_title(resume: ResumeData, doc_type: DocumentType = "resume") -> str:
    """File title for a printed document, e.g. ``Jane_Doe_Cover_Letter``."""
    full_name = resume.personal.full_name
    name = clean_name(full_name) if full_name else "My"
    return f"{name}_{_DOCUMENT_SUFFIXES[doc_type]}"


class CoverLetterGenerator:
    """Writes cover letter bodies, falling back to a local template.

    The AI is asked for body paragraphs only; header, date, salutation and
    sign-off come from compose_letter. When the AI is unreachable or returns
    nothing, the body is assembled from the resume instead, so generation
    always produces a letter.
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

    def generate(self, resume: ResumeData, request: CoverLetterRequest) -> str:
        """Cover letter body for ``request``.

        Raises:
            MissingInputError: If the job title or company is missing
        """
        if not request.is_complete:
            raise MissingInputError("Please enter at least a Job Title and Company Name.")

        with log_context(feature="cover_letter", request_id=new_request_id()):
            prompt = self.renderer.render(
                "cover_letter.j2",
                candidate_name=resume.personal.full_name,
                skills=resume.skill_items(),
                job=request,
                max_words=BODY_MAX_WORDS,
            )
            try:
                response = self.adapter.chat(prompt, model=self.model)
            except AdapterError as e:
                logger.warning(
                    f"AI unavailable, using fallback template: {e}",
                    extra={"event": "cover_letter.fallback", "reason": type(e).__name__},
                )
                return self.fallback_body(resume, request)

            body = clean_body(normalize_content(response.content))
            if not body:
                logger.warning(
                    "AI returned an empty body, using fallback template",
                    extra={"event": "cover_letter.fallback", "reason": "empty_response"},
                )
                return self.fallback_body(resume, request)

            logger.info(
                "Cover letter body generated",
                extra={"event": "cover_letter.generated", "body_length": len(body)},
            )
            return body

    def fallback_body(self, resume: ResumeData, request: CoverLetterRequest) -> str:
        """Three-paragraph body built from the resume alone."""
        first_skills = resume.skills[0].items if resume.skills else ""
        first_education = resume.education[0] if resume.education else None
        recent = resume.experience[0] if resume.experience else None

        return self.renderer.render(
            "cover_letter_fallback.j2",
            job=request,
            skills=first_skills or "technical skills",
            tech=resume.skill_items(),
            major=(first_education.major if first_education else "") or "technology",
            recent_role=(recent.role if recent else "") or "recent role",
            recent_company=(recent.company if recent else "") or "previous company",
        )

    def compose_letter(
        self,
        resume: ResumeData,
        request: CoverLetterRequest,
        body: str,
        letter_date: Optional[date] = None,
    ) -> str:
        """Full plain-text letter: sender, date, recipient, subject, body, sign-off."""
        return self.renderer.render(
            "cover_letter_full.j2",
            personal=resume.personal,
            job=request,
            body=body,
            date=format_letter_date(letter_date),
        )
