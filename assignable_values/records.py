"""
Read-only queries against a record's persistence state.

Restrictions never cache per-record state; they ask these helpers whether a
record is new and what an attribute held when the record was last loaded or
saved. The saved values come from the model's ``FieldTracker``
(django-model-utils), found by scanning the model class once.
"""

from __future__ import annotations

from functools import cache
from typing import Any

from django.db import models
from model_utils import FieldTracker


@cache
def find_field_tracker(model: type[models.Model]) -> str | None:
    """Name of the FieldTracker attribute declared on ``model``, if any."""
    for klass in model.__mro__:
        for name, value in vars(klass).items():
            if isinstance(value, FieldTracker):
                return name
    return None


def is_new_record(record: models.Model) -> bool:
    """True for records built in memory and never loaded from the database.

    ``post_init`` fires before ``Model.from_db`` flips ``_state.adding``, so
    the primary key is checked as well.
    """
    return record._state.adding and record.pk is None  # noqa: SLF001


def get_persisted_value(record: models.Model, attname: str) -> Any:
    """Value of ``attname`` as last loaded or saved; None for new records."""
    if record._state.adding:  # noqa: SLF001
        return None
    tracker_name = find_field_tracker(type(record))
    if tracker_name is None:
        return None
    return getattr(record, tracker_name).previous(attname)
