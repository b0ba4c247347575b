"""Chat conversations with the AI (career coach and Pathfinder).

A Conversation holds the ordered message history for one chat panel and
moves through IDLE -> SENDING -> SUCCESS | FAILURE -> IDLE on every send.
Only one send may be in flight: a second submission while the first is
pending raises ConversationBusyError instead of queueing.
"""

import threading
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from careernavigate.adapters.chat import ChatCompletionAdapter
from careernavigate.adapters.exceptions import AdapterError
from careernavigate.domain.messages import ChatMessage
from careernavigate.logging import get_logger
from careernavigate.logging.context import log_context, new_request_id
from careernavigate.parsing.content import normalize_content

from .exceptions import ConversationBusyError, MissingInputError

logger = get_logger(__name__, component="conversation")


class ConversationState(str, Enum):
    """Where a conversation is in its send cycle."""

    IDLE = "idle"
    SENDING = "sending"
    SUCCESS = "success"
    FAILURE = "failure"


class Conversation:
    """Message history plus the send cycle for one chat panel.

    The history starts with a system prompt and an assistant greeting. Each
    send appends the user message and then exactly one assistant message:
    the parsed reply on success, or ``fallback_text`` when the request fails.
    Earlier messages are never modified. Failed sends are not retried.

    Subclasses customize the outgoing request (build_request) and how a
    reply becomes a message (build_reply).
    """

    feature = "chat"

    def __init__(
        self,
        adapter: ChatCompletionAdapter,
        system_prompt: str,
        greeting: str,
        fallback_text: str,
        model: Optional[str] = None,
    ):
        self.adapter = adapter
        self.model = model
        self.fallback_text = fallback_text
        self.state = ConversationState.IDLE
        self.last_outcome: Optional[ConversationState] = None

        self._messages: List[ChatMessage] = [
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="assistant", content=greeting),
        ]
        self._lock = threading.Lock()

    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        """Full history, system prompt included."""
        return tuple(self._messages)

    @property
    def visible_messages(self) -> Tuple[ChatMessage, ...]:
        """History as shown to the user (no system prompt)."""
        return tuple(m for m in self._messages if m.role != "system")

    @property
    def user_turns(self) -> int:
        return sum(1 for m in self._messages if m.role == "user")

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    def send(self, text: str) -> ChatMessage:
        """Send one user message and return the assistant message appended for it.

        Raises:
            MissingInputError: If ``text`` is empty or whitespace
            ConversationBusyError: If another send is still in flight
        """
        if not text or not text.strip():
            raise MissingInputError("Message cannot be empty")

        if not self._lock.acquire(blocking=False):
            logger.warning(
                "Message rejected: previous message still in flight",
                extra={"event": "conversation.send.rejected", "feature": self.feature},
            )
            raise ConversationBusyError("A message is already being sent")

        try:
            with log_context(feature=self.feature, request_id=new_request_id()):
                self.state = ConversationState.SENDING
                user_message = ChatMessage(role="user", content=text)
                request = self.build_request(user_message)
                self._messages.append(user_message)

                logger.info(
                    "Sending message",
                    extra={
                        "event": "conversation.send.started",
                        "turn": self.user_turns,
                        "history_length": len(request),
                    },
                )

                try:
                    response = self.adapter.chat(request, model=self.model)
                except AdapterError as e:
                    logger.warning(
                        f"Chat request failed: {e}",
                        extra={
                            "event": "conversation.send.failed",
                            "error_type": type(e).__name__,
                        },
                    )
                    reply = ChatMessage(role="assistant", content=self.fallback_text)
                    self.state = ConversationState.FAILURE
                else:
                    reply = self.build_reply(normalize_content(response.content))
                    self.state = ConversationState.SUCCESS
                    logger.info(
                        "Reply received",
                        extra={
                            "event": "conversation.send.succeeded",
                            "reply_length": len(reply.content),
                        },
                    )

                self._messages.append(reply)
                self.last_outcome = self.state
                return reply
        finally:
            self.state = ConversationState.IDLE
            self._lock.release()

    def build_request(self, user_message: ChatMessage) -> List[Dict[str, Any]]:
        """Wire-format messages for the request: history plus the new message."""
        return [m.to_wire() for m in self._messages] + [user_message.to_wire()]

    def build_reply(self, text: str) -> ChatMessage:
        return ChatMessage(role="assistant", content=text)
