"""Small string helpers shared by features."""

import re
from uuid import uuid4

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")
_SURROUNDING_QUOTE = re.compile(r"\A[\"']|[\"']\Z")


def generate_id() -> str:
    """Random identifier for stored records and builder entries."""
    return str(uuid4())


def clean_name(value: str) -> str:
    """Replace every character that is not an ASCII letter or digit with ``_``."""
    return _NON_ALPHANUMERIC.sub("_", value)


def strip_surrounding_quotes(text: str) -> str:
    """Drop one leading and one trailing quote character, if present."""
    return _SURROUNDING_QUOTE.sub("", text)

