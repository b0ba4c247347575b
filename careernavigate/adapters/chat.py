"""Chat completion adapter for OpenAI-compatible APIs."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

from pydantic import ValidationError

from careernavigate.domain.messages import ChatMessage, ChatResponse, parse_content_part
from careernavigate.logging import get_logger

from .base import DEFAULT_USER_AGENT, BaseAdapter
from .exceptions import AdapterConfigurationError, AdapterResponseError

logger = get_logger(__name__, component="adapter")

PromptInput = Union[str, Sequence[Union[ChatMessage, dict]]]


class ChatCompletionAdapter(BaseAdapter):
    """Adapter for a chat completion endpoint.

    Sends a conversation to ``{base_url}/chat/completions`` and returns the
    first choice as a ChatResponse. The response content is passed through
    untouched apart from converting known part shapes to TextPart/FilePart;
    it may still be a string, a list or something else entirely.

    API Details:
        Endpoint: {base_url}/chat/completions
        Method: POST
        Authentication: Bearer token
        Response: JSON object with 'choices' array
    """

    ADAPTER_NAME = "chat"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        default_model: str,
        temperature: Optional[float] = None,
        timeout: int = 90,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(timeout=timeout, user_agent=user_agent)
        if not api_key or not api_key.strip():
            raise AdapterConfigurationError("Chat API key is not configured")
        if not default_model:
            raise AdapterConfigurationError("default_model cannot be empty")

        self._api_key = api_key.strip()
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model
        self.temperature = temperature

    def chat(self, prompt: PromptInput, model: Optional[str] = None) -> ChatResponse:
        """Send a prompt or conversation and return the reply.

        Args:
            prompt: A single user prompt string, or an ordered sequence of
                ChatMessage objects (or already-wire-shaped dicts)
            model: Model override; the adapter default is used when omitted

        Returns:
            ChatResponse with the first choice's content

        Raises:
            AdapterHTTPError: On HTTP errors or connection failure
            AdapterTimeoutError: On timeout
            AdapterResponseError: When the reply has no usable choice
        """
        messages = self._build_messages(prompt)
        body: dict[str, Any] = {"model": model or self.default_model, "messages": messages}
        if self.temperature is not None:
            body["temperature"] = self.temperature

        logger.info(
            "Requesting chat completion",
            extra={
                "event": "adapter.chat.requested",
                "adapter": self.ADAPTER_NAME,
                "model": body["model"],
                "message_count": len(messages),
            },
        )

        data = self._make_request(
            f"{self.base_url}/chat/completions",
            method="POST",
            headers={"Authorization": f"Bearer {self._api_key}"},
            json_data=body,
        )
        response = self._parse_response(data)

        logger.info(
            "Chat completion received",
            extra={
                "event": "adapter.chat.completed",
                "adapter": self.ADAPTER_NAME,
                "model": response.model,
                "finish_reason": response.finish_reason,
                "content_type": type(response.content).__name__,
            },
        )
        return response

    def _build_messages(self, prompt: PromptInput) -> list[dict[str, Any]]:
        if isinstance(prompt, str):
            return [{"role": "user", "content": prompt}]

        messages = []
        for message in prompt:
            if isinstance(message, ChatMessage):
                messages.append(message.to_wire())
            elif isinstance(message, dict):
                messages.append(message)
            else:
                raise TypeError(f"Unsupported message type: {type(message).__name__}")
        if not messages:
            raise ValueError("At least one message is required")
        return messages

    def _parse_response(self, data: Any) -> ChatResponse:
        if not isinstance(data, dict):
            raise AdapterResponseError(
                f"Expected JSON object response, got {type(data).__name__}"
            )

        if data.get("error"):
            error = data["error"]
            detail = error.get("message") if isinstance(error, dict) else error
            raise AdapterResponseError(f"Chat API returned an error: {detail}")

        choices = data.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            raise AdapterResponseError("Chat API response has no choices")

        choice = choices[0]
        message = choice.get("message")
        if not isinstance(message, dict):
            raise AdapterResponseError("Chat API choice has no message")

        content = message.get("content")
        usage = data.get("usage")
        try:
            if isinstance(content, list):
                content = [parse_content_part(part) for part in content]
            return ChatResponse(
                content=content,
                model=_optional_str(data.get("model")),
                finish_reason=_optional_str(choice.get("finish_reason")),
                usage={k: v for k, v in usage.items() if isinstance(v, int)}
                if isinstance(usage, dict)
                else {},
            )
        except ValidationError as e:
            raise AdapterResponseError(f"Chat API response could not be read: {e}") from e


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None
