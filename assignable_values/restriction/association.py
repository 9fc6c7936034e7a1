from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

from assignable_values.humanized import HumanizedValue
from assignable_values.records import get_persisted_value
from assignable_values.restriction.base import UNSET
from assignable_values.restriction.base import Restriction

if TYPE_CHECKING:
    from django.db import models

logger = logging.getLogger(__name__)


class AssociationRestriction(Restriction):
    """Restriction on a forward many-to-one or one-to-one relation.

    Assignable values are model instances and compare by primary key.
    """

    def __init__(self, model, property, options=None, values=None):  # noqa: A002
        super().__init__(model, property, options, values)
        self.field = model._meta.get_field(property)  # noqa: SLF001

    def foreign_key(self, record: models.Model) -> Any:
        return getattr(record, self.field.attname)

    def target_key(self, instance: models.Model) -> Any:
        return getattr(instance, self.field.target_field.attname)

    def is_stale(self, record: models.Model) -> bool:
        """True when the cached related object disagrees with the foreign key.

        Happens when the foreign key column is written without going through
        the relation descriptor.
        """
        if not self.field.is_cached(record):
            return False
        cached = self.field.get_cached_value(record)
        cached_key = None if cached is None else self.target_key(cached)
        return cached_key != self.foreign_key(record)

    def current_value(self, record: models.Model) -> Any:
        if self.is_stale(record):
            logger.debug("Reloading stale association for %r", self)
            self.field.delete_cached_value(record)
        return getattr(record, self.property)

    def previously_saved_value(self, record: models.Model) -> Any:
        """The related object as last persisted, or None.

        An unchanged foreign key reuses the current association so no extra
        query is made; a row that no longer exists yields None.
        """
        persisted_key = get_persisted_value(record, self.field.attname)
        if persisted_key is None:
            return None
        if persisted_key == self.foreign_key(record):
            return self.current_value(record)
        related_model = self.field.related_model
        return related_model._base_manager.filter(  # noqa: SLF001
            **{self.field.target_field.attname: persisted_key},
        ).first()

    def humanize(self, value: Any) -> str | None:
        if value is None:
            return None
        return str(value)

    def humanized_value(self, record: models.Model, value: Any = UNSET) -> str | None:
        if value is UNSET:
            value = self.current_value(record)
        return self.humanize(value)

    def humanized_values(self, record: models.Model) -> list[HumanizedValue]:
        return [
            HumanizedValue(instance, str(instance))
            for instance in self.assignable_values(record)
        ]
