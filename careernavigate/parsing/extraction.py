"""Locate a JSON object or array embedded in free-form AI text.

Models asked for JSON tend to wrap it in prose ("Sure! Here you go: ...")
or in Markdown code fences. The extractor takes the first opening and the
last closing delimiter of the requested kind and parses everything between
them. This is deliberately not a balanced-brace scanner: a reply with two
separate JSON blocks, or stray braces in the prose after the block, is not
recovered, and the caller falls back to its defaults.

Responses can also put the structured block after a marker line such as
``:::ROADMAP``; the text before the marker is returned as the preface that
the user gets to read.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Union

from careernavigate.logging import get_logger

logger = get_logger(__name__, component="extraction")

ExtractionMode = Literal["object", "array"]
Payload = Union[Dict[str, Any], List[Any]]

DELIMITERS = {
    "object": ("{", "}", dict),
    "array": ("[", "]", list),
}

# Opening or closing fence, with an optional language tag (```json, ```JSON, ```)
CODE_FENCE_PATTERN = re.compile(r"```[A-Za-z0-9_+\-]*")


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of extract_payload.

    Attributes:
        preface_text: Readable text that came before the payload (or the whole
            input when nothing was extracted)
        payload: The parsed dict/list, or None when extraction failed
    """

    preface_text: str
    payload: Optional[Payload] = None

    @property
    def found(self) -> bool:
        return self.payload is not None


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fence markers, keeping the fenced content."""
    return CODE_FENCE_PATTERN.sub("", text)


def extract_payload(
    text: str,
    mode: ExtractionMode = "object",
    after_marker: Optional[str] = None,
) -> ExtractionResult:
    """Find and parse one JSON object or array inside ``text``.

    Args:
        text: Normalized response text
        mode: ``"object"`` to look for ``{...}``, ``"array"`` for ``[...]``
        after_marker: When given and present, only the text after its first
            occurrence is searched and the text before it becomes the preface

    Returns:
        ExtractionResult with the parsed payload, or with ``payload=None`` and
        the untouched input as ``preface_text`` when nothing usable was found.
        Never raises for malformed input.

    Raises:
        ValueError: If ``mode`` is not "object" or "array"
    """
    if mode not in DELIMITERS:
        raise ValueError(f"mode must be 'object' or 'array', got: {mode!r}")

    if not isinstance(text, str):
        text = "" if text is None else str(text)

    failed = ExtractionResult(preface_text=text, payload=None)

    preface: Optional[str] = None
    window = text
    if after_marker and after_marker in text:
        before, _, window = text.partition(after_marker)
        preface = before.strip()

    window = strip_code_fences(window)
    if not window.strip():
        _log_failure("empty_window", mode, after_marker)
        return failed

    window = _unwrap_json_string(window)

    opening, closing, expected_type = DELIMITERS[mode]
    start = window.find(opening)
    end = window.rfind(closing)
    if start == -1 or end == -1 or start >= end:
        _log_failure("delimiters_not_found", mode, after_marker)
        return failed

    try:
        payload = json.loads(window[start : end + 1])
    except (ValueError, RecursionError) as e:
        _log_failure("invalid_json", mode, after_marker, error=str(e))
        return failed

    if not isinstance(payload, expected_type):
        _log_failure("unexpected_shape", mode, after_marker, payload_type=type(payload).__name__)
        return failed

    if preface is None:
        preface = window[:start].strip()

    logger.debug(
        "Extracted structured payload",
        extra={
            "event": "extraction.payload.found",
            "mode": mode,
            "marker": after_marker,
            "item_count": len(payload),
        },
    )
    return ExtractionResult(preface_text=preface, payload=payload)


def _unwrap_json_string(window: str) -> str:
    """Decode a window that is itself one JSON-encoded string.

    Some providers double-encode: the content is ``"{\\"title\\": ...}"``.
    Anything that is not exactly one JSON string literal is returned as is.
    """
    stripped = window.strip()
    if len(stripped) < 2 or not (stripped.startswith('"') and stripped.endswith('"')):
        return window
    try:
        decoded = json.loads(stripped)
    except ValueError:
        return window
    return decoded if isinstance(decoded, str) else window


def _log_failure(reason: str, mode: str, marker: Optional[str], **fields: Any) -> None:
    logger.info(
        "No structured payload extracted",
        extra={
            "event": "extraction.payload.missing",
            "reason": reason,
            "mode": mode,
            "marker": marker,
            **fields,
        },
    )
