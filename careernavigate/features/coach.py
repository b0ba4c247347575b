"""Career coach chatbot grounded in one analyzed resume."""

import json
from pathlib import PurePosixPath
from typing import Any, Dict, List, Mapping, Optional

from careernavigate.adapters.chat import ChatCompletionAdapter
from careernavigate.domain.messages import ChatMessage, FilePart, TextPart
from careernavigate.logging import get_logger
from careernavigate.persistence.blobs import BlobStore
from careernavigate.persistence.exceptions import PersistenceError
from careernavigate.prompts import PromptRenderer

from .conversation import Conversation

logger = get_logger(__name__, component="coach")

COACH_GREETING = "Hello! I've studied your resume. How can I help you improve it today?"
COACH_FALLBACK = (
    "I'm having trouble connecting to the network right now. Please try asking again!"
)


def feedback_context(feedback: Optional[Mapping[str, Any]], max_chars: int) -> str:
    """Compact JSON of the feedback, cut to ``max_chars`` characters."""
    encoded = json.dumps(feedback, ensure_ascii=False, separators=(",", ":"))
    return encoded[:max_chars]


class CoachConversation(Conversation):
    """Coach chat. The first question also carries the resume file itself.

    Later questions send the text history only; the provider keeps the file
    in its context.
    """

    feature = "coach"

    def __init__(
        self,
        adapter: ChatCompletionAdapter,
        system_prompt: str,
        resume_path: Optional[str] = None,
        blob_store: Optional[BlobStore] = None,
        model: Optional[str] = None,
    ):
        super().__init__(
            adapter,
            system_prompt=system_prompt,
            greeting=COACH_GREETING,
            fallback_text=COACH_FALLBACK,
            model=model,
        )
        self.resume_path = resume_path
        self.blob_store = blob_store

    def build_request(self, user_message: ChatMessage) -> List[Dict[str, Any]]:
        if not self.resume_path or self.user_turns > 0:
            return super().build_request(user_message)

        with_file = ChatMessage(
            role="user",
            content=[TextPart(text=user_message.content), self._resume_part()],
        )
        return [m.to_wire() for m in self._messages] + [with_file.to_wire()]

    def _resume_part(self) -> FilePart:
        data_url = None
        if self.blob_store is not None:
            try:
                data_url = self.blob_store.data_url(self.resume_path)
            except PersistenceError as e:
                logger.warning(
                    f"Resume file unavailable, sending reference only: {e}",
                    extra={"event": "coach.resume.unavailable", "blob_path": self.resume_path},
                )
        return FilePart(
            reference=self.resume_path,
            filename=PurePosixPath(self.resume_path).name,
            data_url=data_url,
        )


def create_coach(
    adapter: ChatCompletionAdapter,
    renderer: PromptRenderer,
    feedback: Optional[Mapping[str, Any]],
    resume_path: Optional[str] = None,
    blob_store: Optional[BlobStore] = None,
    context_chars: int = 3000,
    model: Optional[str] = None,
) -> CoachConversation:
    """Start a coach conversation about an analyzed resume.

    Args:
        adapter: Chat adapter
        renderer: Prompt renderer
        feedback: Stored analysis payload (may be None)
        resume_path: Blob path of the resume file, attached to the first question
        blob_store: Store to inline the resume file from
        context_chars: How much of the feedback JSON the system prompt embeds
        model: Model override
    """
    system_prompt = renderer.render(
        "coach_system.j2", resume_context=feedback_context(feedback, context_chars)
    )
    return CoachConversation(
        adapter,
        system_prompt=system_prompt,
        resume_path=resume_path,
        blob_store=blob_store,
        model=model,
    )
