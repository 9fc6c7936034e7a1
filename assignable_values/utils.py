"""
Small value helpers shared by the restriction classes.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from django.core.validators import EMPTY_VALUES

MULTI_VALUE_TYPES = (list, tuple, set, frozenset)

_ES_SUFFIX = re.compile(r"(s|x|z|ch|sh)$")
_CONSONANT_Y = re.compile(r"[^aeiou]y$")


def is_blank(value: Any) -> bool:
    """Return True for None, whitespace-only strings and empty containers.

    ``False`` and ``0`` are values, not blanks.
    """
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (*MULTI_VALUE_TYPES, Mapping)):
        return not value
    return value in EMPTY_VALUES


def flatten(value: Any) -> list[Any]:
    """Wrap a single value in a list; expand (nested) multi-value containers."""
    if not isinstance(value, MULTI_VALUE_TYPES):
        return [value]
    flat: list[Any] = []
    for item in value:
        flat.extend(flatten(item))
    return flat


def same_value(left: Any, right: Any) -> bool:
    """Equality that keeps booleans apart from the integers they equal."""
    return isinstance(left, bool) == isinstance(right, bool) and left == right


def contains(values: Iterable[Any], value: Any) -> bool:
    return any(same_value(item, value) for item in values)


def unique(values: Iterable[Any]) -> list[Any]:
    """Deduplicate while keeping first-seen order.

    Uses equality rather than hashing so unsaved model instances and lists
    can be compared. ``True`` and ``1`` stay distinct.
    """
    result: list[Any] = []
    for value in values:
        if not contains(result, value):
            result.append(value)
    return result


def pluralize(word: str) -> str:
    """English plural for attribute names (``genre`` -> ``genres``)."""
    if _CONSONANT_Y.search(word):
        return f"{word[:-1]}ies"
    if _ES_SUFFIX.search(word):
        return f"{word}es"
    return f"{word}s"
