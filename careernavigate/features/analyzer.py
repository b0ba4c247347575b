"""Resume upload and AI analysis."""

from typing import Callable, List, Optional

from careernavigate.adapters.chat import ChatCompletionAdapter
from careernavigate.adapters.exceptions import AdapterError
from careernavigate.domain.models import ResumeRecord
from careernavigate.logging import get_logger
from careernavigate.logging.context import log_context
from careernavigate.parsing.content import normalize_content
from careernavigate.parsing.extraction import extract_payload
from careernavigate.persistence.blobs import BlobFile, BlobStore
from careernavigate.persistence.database import get_session
from careernavigate.persistence.exceptions import PersistenceError
from careernavigate.persistence.repositories import ResumeRepository
from careernavigate.prompts import PromptRenderer
from careernavigate.utils.text import generate_id
from careernavigate.utils.timestamps import utc_now

from .exceptions import AnalysisError, MissingInputError

logger = get_logger(__name__, component="analyzer")

StatusCallback = Callable[[str], None]


class ResumeAnalyzer:
    """Stores an uploaded resume and asks the AI to review it.

    The record is saved twice: once with ``feedback=None`` right after the
    upload, and again with the parsed feedback. An analysis that fails after
    the first save leaves the unanalyzed record in place.
    """

    def __init__(
        self,
        adapter: ChatCompletionAdapter,
        renderer: PromptRenderer,
        blob_store: BlobStore,
        model: Optional[str] = None,
    ):
        self.adapter = adapter
        self.renderer = renderer
        self.blob_store = blob_store
        self.model = model

    def analyze(
        self,
        company_name: str,
        job_title: str,
        job_description: str,
        resume_text: str,
        resume_file: BlobFile,
        image_file: Optional[BlobFile] = None,
        on_status: Optional[StatusCallback] = None,
    ) -> ResumeRecord:
        """Upload, store and analyze one resume.

        Args:
            company_name: Target company (may be empty)
            job_title: Target role (may be empty)
            job_description: Target job description (may be empty)
            resume_text: Text extracted from the resume
            resume_file: The resume document
            image_file: Optional rendered first page
            on_status: Receives progress messages as the analysis advances

        Returns:
            The stored record, with feedback

        Raises:
            MissingInputError: If the resume text is empty
            AnalysisError: If storage or the AI step fails
        """
        if not resume_text or not resume_text.strip():
            raise MissingInputError("Resume text is required for analysis")

        resume_id = generate_id()

        def status(message: str) -> None:
            logger.info(message, extra={"event": "analyzer.status", "status_text": message})
            if on_status is not None:
                on_status(message)

        with log_context(feature="analyzer", request_id=resume_id):
            try:
                status("Uploading the file...")
                uploaded = self.blob_store.upload(resume_file)

                image_path = None
                if image_file is not None:
                    status("Uploading the image...")
                    image_path = self.blob_store.upload(image_file).path

                status("Preparing data...")
                record = ResumeRecord(
                    id=resume_id,
                    resume_path=uploaded.path,
                    image_path=image_path,
                    company_name=company_name,
                    job_title=job_title,
                    job_description=job_description,
                    feedback=None,
                    created_at=utc_now(),
                )
                self._save(record)
            except PersistenceError as e:
                status(f"Error: {e}")
                raise AnalysisError(f"Failed to store the resume: {e}", resume_id) from e

            status("Analyzing...")
            prompt = self.renderer.render(
                "resume_analysis.j2",
                company_name=company_name,
                job_title=job_title,
                job_description=job_description,
                resume_text=resume_text,
            )
            try:
                response = self.adapter.chat(prompt, model=self.model)
            except AdapterError as e:
                status(f"Error: {e}")
                raise AnalysisError(f"AI service request failed: {e}", resume_id) from e

            result = extract_payload(normalize_content(response.content), mode="object")
            if not result.found:
                message = "AI response did not contain valid JSON"
                status(f"Error: {message}")
                raise AnalysisError(message, resume_id)

            analyzed = record.model_copy(update={"feedback": result.payload})
            try:
                self._save(analyzed)
            except PersistenceError as e:
                status(f"Error: {e}")
                raise AnalysisError(f"Failed to store the analysis: {e}", resume_id) from e

            status("Analysis complete")
            logger.info(
                "Resume analyzed",
                extra={
                    "event": "analyzer.completed",
                    "resume_id": resume_id,
                    "overall_score": analyzed.typed_feedback.overall_score,
                },
            )
            return analyzed

    def load(self, resume_id: str) -> Optional[ResumeRecord]:
        with get_session() as session:
            return ResumeRepository(session).get(resume_id)

    def list_records(self) -> List[ResumeRecord]:
        """All stored analyses, newest first."""
        with get_session() as session:
            return ResumeRepository(session).list_all()

    def read_artifact(self, path: str) -> bytes:
        """Bytes of an uploaded resume or image."""
        return self.blob_store.read(path)

    @staticmethod
    def _save(record: ResumeRecord) -> None:
        with get_session() as session:
            ResumeRepository(session).save(record)
