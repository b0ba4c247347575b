"""Pathfinder: roadmap mentor for first-year students."""

from typing import Optional

from careernavigate.adapters.chat import ChatCompletionAdapter
from careernavigate.domain.messages import ChatMessage
from careernavigate.domain.models import RoadmapStep
from careernavigate.logging import get_logger
from careernavigate.parsing.extraction import extract_payload
from careernavigate.prompts import PromptRenderer

from .conversation import Conversation

logger = get_logger(__name__, component="pathfinder")

ROADMAP_MARKER = ":::ROADMAP"

PATHFINDER_GREETING = (
    "👋 Hi! I'm Pathfinder.\n\n"
    "I know college can be overwhelming. I'm here to help you navigate your career "
    "from Day 1.\n\n"
    "Tell me: **What subjects did you enjoy most in school?** (Math, Art, Computer "
    "Science?) Or just tell me what kind of technology excites you!"
)
PATHFINDER_FALLBACK = "I'm having trouble connecting. Please try again."


class PathfinderConversation(Conversation):
    """Mentor chat whose replies may carry a ``:::ROADMAP [...] :::`` block.

    The block is parsed into RoadmapStep records attached to the assistant
    message; the prose before the marker becomes the message text. When the
    block cannot be parsed the prose is still shown, with no roadmap.
    """

    feature = "pathfinder"

    def build_reply(self, text: str) -> ChatMessage:
        result = extract_payload(text, mode="array", after_marker=ROADMAP_MARKER)
        if not result.found:
            if ROADMAP_MARKER in text:
                logger.warning(
                    "Roadmap block could not be parsed",
                    extra={"event": "pathfinder.roadmap.invalid"},
                )
                text = text.partition(ROADMAP_MARKER)[0].strip()
            return ChatMessage(role="assistant", content=text)

        roadmap = RoadmapStep.list_from_payload(result.payload)
        logger.info(
            "Roadmap received",
            extra={"event": "pathfinder.roadmap.parsed", "step_count": len(roadmap)},
        )
        return ChatMessage(role="assistant", content=result.preface_text, roadmap=roadmap)


def create_pathfinder(
    adapter: ChatCompletionAdapter,
    renderer: PromptRenderer,
    model: Optional[str] = None,
) -> PathfinderConversation:
    system_prompt = renderer.render(
        "pathfinder_system.j2", marker=ROADMAP_MARKER, min_months=3, max_months=6
    )
    return PathfinderConversation(
        adapter,
        system_prompt=system_prompt,
        greeting=PATHFINDER_GREETING,
        fallback_text=PATHFINDER_FALLBACK,
        model=model,
    )
