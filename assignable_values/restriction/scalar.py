from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING
from typing import Any

from django.conf import settings
from django.core.exceptions import FieldDoesNotExist
from django.utils.text import capfirst

from assignable_values.constants import DEFAULT_TRANSLATION_NAMESPACE
from assignable_values.constants import HUMANIZED_SEPARATOR
from assignable_values.exceptions import DelegateUnavailable
from assignable_values.humanized import HumanizedValue
from assignable_values.records import get_persisted_value
from assignable_values.restriction.base import UNSET
from assignable_values.restriction.base import Restriction
from assignable_values.translation import translate
from assignable_values.utils import flatten
from assignable_values.utils import is_blank
from assignable_values.utils import same_value

if TYPE_CHECKING:
    from django.db import models


class ScalarRestriction(Restriction):
    """Restriction on a plain value: strings, numbers, booleans, lists.

    Adds humanization. Labels are translated under
    ``<namespace>.<app_label>.<model_name>.<attribute>.<value>``; a value
    source returning a mapping supplies its own labels instead.
    """

    @property
    def attname(self) -> str:
        try:
            return self.model._meta.get_field(self.property).attname  # noqa: SLF001
        except FieldDoesNotExist:
            return self.property

    def previously_saved_value(self, record: models.Model) -> Any:
        return get_persisted_value(record, self.attname)

    # ------------------------------------------------------------------
    # Humanization
    # ------------------------------------------------------------------

    def translation_key(self, segment: str) -> str:
        namespace = getattr(
            settings,
            "ASSIGNABLE_VALUES_NAMESPACE",
            DEFAULT_TRANSLATION_NAMESPACE,
        )
        opts = self.model._meta  # noqa: SLF001
        return (
            f"{namespace}.{opts.app_label}.{opts.model_name}."
            f"{self.property}.{segment}"
        )

    def humanize_string_value(self, value: str) -> str:
        default = capfirst(value.replace("_", " ").strip())
        return str(translate(self.translation_key(value), default=default))

    def humanize_boolean_value(self, value: bool) -> str:  # noqa: FBT001
        label = "true" if value else "false"
        return str(translate(self.translation_key(label), default=label))

    def humanize_single_value(
        self,
        value: Any,
        labels: Mapping[Any, Any] | None = None,
    ) -> str:
        if labels is not None:
            for key, label in labels.items():
                if same_value(key, value):
                    return str(label)
        if isinstance(value, bool):
            return self.humanize_boolean_value(value)
        if isinstance(value, str):
            return self.humanize_string_value(value)
        return str(translate(self.translation_key(str(value)), default=str(value)))

    def humanize(
        self,
        value: Any,
        labels: Mapping[Any, Any] | None = None,
    ) -> str | None:
        """Display label for ``value``; lists are joined, blanks give None."""
        if is_blank(value):
            return None
        return HUMANIZED_SEPARATOR.join(
            self.humanize_single_value(item, labels) for item in flatten(value)
        )

    def literal_labels(self, record: models.Model) -> Mapping[Any, Any] | None:
        """The label table, when the value source returned a mapping."""
        try:
            raw = self.raw_assignable_values(record)
        except DelegateUnavailable:
            return None
        return raw if isinstance(raw, Mapping) else None

    def humanized_value(self, record: models.Model, value: Any = UNSET) -> str | None:
        if value is UNSET:
            value = self.current_value(record)
        if is_blank(value):
            return None
        return self.humanize(value, self.literal_labels(record))

    def humanized_values(self, record: models.Model) -> list[HumanizedValue]:
        """Pairs of value and label, in the order of ``assignable_values``."""
        raw = self.raw_assignable_values(record)
        labels = raw if isinstance(raw, Mapping) else None
        values = self.with_persisted_value(record, self.parse_values(raw))
        return [
            HumanizedValue(value, self.humanize_single_value(value, labels))
            for value in values
        ]

    def decorate_values(
        self,
        values: list[Any],
        labels: Mapping[Any, Any] | None = None,
    ) -> list[Any]:
        return [
            HumanizedValue(value, self.humanize_single_value(value, labels))
            if isinstance(value, (str, bool))
            else value
            for value in values
        ]
