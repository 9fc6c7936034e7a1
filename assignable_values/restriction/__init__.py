from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.exceptions import FieldDoesNotExist

from assignable_values.restriction.association import AssociationRestriction
from assignable_values.restriction.base import Restriction
from assignable_values.restriction.scalar import ScalarRestriction

if TYPE_CHECKING:
    from django.db import models

__all__ = [
    "AssociationRestriction",
    "Restriction",
    "ScalarRestriction",
    "restriction_class_for",
]


def restriction_class_for(
    model: type[models.Model],
    attribute: str,
) -> type[Restriction]:
    """Pick the restriction class for a model attribute.

    Forward many-to-one and one-to-one relations are associations; concrete
    fields and plain attributes are scalars.
    """
    try:
        field = model._meta.get_field(attribute)  # noqa: SLF001
    except FieldDoesNotExist:
        return ScalarRestriction
    if field.is_relation and (field.many_to_one or field.one_to_one) and field.concrete:
        return AssociationRestriction
    return ScalarRestriction
