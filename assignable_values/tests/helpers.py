from __future__ import annotations

from django.core.exceptions import ValidationError


def clean_errors(record) -> dict[str, list[str]]:
    """Messages raised by ``record.clean()``, keyed by attribute."""
    try:
        record.clean()
    except ValidationError as e:
        return e.message_dict
    return {}


def full_clean_errors(record) -> dict[str, list[str]]:
    try:
        record.full_clean()
    except ValidationError as e:
        return e.message_dict
    return {}
