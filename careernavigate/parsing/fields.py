"""Type-checked field access on extracted payloads.

A payload is whatever the model produced, so every read goes through these
helpers: a value is used only when the key is present under its exact name
and the value has the declared type. Anything else counts as absent and the
caller's default applies.
"""

from collections.abc import Mapping
from typing import Any, List, Optional, Tuple, Type, TypeVar, Union

T = TypeVar("T")

_MISSING = object()

TypeSpec = Union[Type[Any], Tuple[Type[Any], ...]]


def _type_matches(value: Any, expected_type: TypeSpec) -> bool:
    # JSON true/false must not pass as numbers
    if isinstance(value, bool):
        expected = expected_type if isinstance(expected_type, tuple) else (expected_type,)
        return bool in expected
    return isinstance(value, expected_type)


def pick(payload: Any, key: str, expected_type: TypeSpec, default: T) -> Union[Any, T]:
    """Return ``payload[key]`` if it exists and has ``expected_type``, else ``default``."""
    if not isinstance(payload, Mapping):
        return default
    value = payload.get(key, _MISSING)
    if value is _MISSING or not _type_matches(value, expected_type):
        return default
    return value


def pick_str(payload: Any, key: str, default: str = "", allow_blank: bool = True) -> str:
    """String field; with ``allow_blank=False`` a whitespace-only value counts as absent."""
    value = pick(payload, key, str, default)
    if not allow_blank and not value.strip():
        return default
    return value


def pick_number(payload: Any, key: str, default: Optional[float] = None) -> Optional[float]:
    """Numeric field (int or float, never bool)."""
    return pick(payload, key, (int, float), default)


def pick_list(payload: Any, key: str, item_type: Optional[TypeSpec] = None) -> List[Any]:
    """List field, keeping only items of ``item_type`` when one is given.

    An empty list in the payload is valid data and comes back empty; so does
    a missing or mistyped field.
    """
    value = pick(payload, key, list, None)
    if value is None:
        return []
    if item_type is None:
        return list(value)
    return [item for item in value if _type_matches(item, item_type)]


def pick_mapping(payload: Any, key: str) -> Mapping[str, Any]:
    """Nested object field; an empty mapping when absent or mistyped."""
    return pick(payload, key, Mapping, {})
