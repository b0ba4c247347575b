"""Turning raw AI responses into strings and structured payloads.

Public API:
    - normalize_content(content) -> str
    - extract_payload(text, mode, after_marker) -> ExtractionResult
    - strip_code_fences(text) -> str
    - pick / pick_str / pick_number / pick_list / pick_mapping: typed field access
"""

from .content import normalize_content, part_to_text
from .extraction import ExtractionResult, extract_payload, strip_code_fences
from .fields import pick, pick_list, pick_mapping, pick_number, pick_str

__all__ = [
    "normalize_content",
    "part_to_text",
    "extract_payload",
    "strip_code_fences",
    "ExtractionResult",
    "pick",
    "pick_str",
    "pick_number",
    "pick_list",
    "pick_mapping",
]
