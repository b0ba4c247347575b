"""Collapse AI response content into a single string."""

import json
from typing import Any

from careernavigate.logging import get_logger

logger = get_logger(__name__, component="parsing")

PART_SEPARATOR = "\n"


def normalize_content(content: Any) -> str:
    """Return ``content`` as one string. Never raises.

    - ``str``: returned unchanged
    - list/tuple: each element rendered by part_to_text, joined with newlines
    - ``None``: empty string
    - anything else: ``str(content)``

    Args:
        content: The ``content`` field of a chat response

    Returns:
        The normalized text
    """
    if isinstance(content, str):
        return content
    if content is None:
        return ""

    try:
        if isinstance(content, (list, tuple)):
            return PART_SEPARATOR.join(part_to_text(part) for part in content)
        return str(content)
    except Exception as e:  # noqa: BLE001
        logger.warning(
            "Failed to normalize response content",
            extra={
                "event": "parsing.content.failed",
                "content_type": type(content).__name__,
                "error": str(e),
            },
        )
        return ""


def part_to_text(part: Any) -> str:
    """Render one content part: strings verbatim, everything else as compact JSON.

    Pydantic parts are rendered through their wire mapping so the output is
    the same whether a part arrived as a dict or was already parsed. A part
    that cannot be serialized becomes the empty string.
    """
    if isinstance(part, str):
        return part

    try:
        if hasattr(part, "to_wire"):
            part = part.to_wire()
        elif hasattr(part, "model_dump"):
            part = part.model_dump(mode="json")
        return json.dumps(part, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning(
            "Content part is not JSON serializable",
            extra={
                "event": "parsing.content.part_skipped",
                "part_type": type(part).__name__,
                "error": str(e),
            },
        )
        return ""
