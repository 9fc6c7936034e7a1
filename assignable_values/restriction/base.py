"""
Rule evaluation shared by scalar and association restrictions.

A :class:`Restriction` is created once per model class and attribute when the
model declares ``assignable_values_for``. It holds no per-record state: every
call re-evaluates the value source (or delegate) against the record it is
given.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING
from typing import Any

from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from assignable_values.accessors import Accessor
from assignable_values.accessors import call_with_record
from assignable_values.accessors import resolve
from assignable_values.accessors import to_accessor
from assignable_values.constants import INCLUSION_ERROR_CODE
from assignable_values.constants import INCLUSION_ERROR_KEY
from assignable_values.constants import INCLUSION_ERROR_MESSAGE
from assignable_values.constants import RESTRICTION_OPTIONS
from assignable_values.exceptions import DelegateUnavailable
from assignable_values.exceptions import NoDefault
from assignable_values.exceptions import NoValuesGiven
from assignable_values.records import is_new_record
from assignable_values.translation import translate
from assignable_values.utils import contains
from assignable_values.utils import flatten
from assignable_values.utils import is_blank
from assignable_values.utils import pluralize
from assignable_values.utils import unique

if TYPE_CHECKING:
    from django.db import models

    from assignable_values.humanized import HumanizedValue

logger = logging.getLogger(__name__)

# Marks "no value passed" where None is a legitimate value.
UNSET = object()


class Restriction:
    """Restricts one attribute of one model class to its assignable values."""

    def __init__(
        self,
        model: type[models.Model],
        property: str,  # noqa: A002
        options: Mapping[str, Any] | None = None,
        values: Any = None,
    ):
        self.model = model
        self.property = property
        self.options = MappingProxyType(dict(options or {}))
        self.values = values
        self._check_options()
        self._ensure_values_given()
        self._ensure_default_given()
        self.default = self.options.get("default")
        self.secondary_default = self.options.get("secondary_default")
        self.delegate_accessor = (
            to_accessor(self.options["through"]) if self.has_delegate else None
        )
        self.if_accessor = self._accessor_option("if_")
        self.unless_accessor = self._accessor_option("unless")

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} "
            f"{self.model._meta.label}.{self.property}>"  # noqa: SLF001
        )

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    @property
    def has_default(self) -> bool:
        return "default" in self.options

    @property
    def has_secondary_default(self) -> bool:
        return "secondary_default" in self.options

    @property
    def has_delegate(self) -> bool:
        return "through" in self.options

    @property
    def allow_blank(self) -> bool:
        return bool(self.options.get("allow_blank"))

    @property
    def delegate_query_method(self) -> str:
        model_name = self.model._meta.model_name  # noqa: SLF001
        return f"assignable_{model_name}_{pluralize(self.property)}"

    def _check_options(self) -> None:
        unknown = set(self.options) - RESTRICTION_OPTIONS
        if unknown:
            msg = (
                f"Unknown option(s) for assignable values of "
                f"'{self.property}': {', '.join(sorted(unknown))}"
            )
            raise TypeError(msg)

    def _ensure_values_given(self) -> None:
        if self.values is None and not self.has_delegate:
            raise NoValuesGiven

    def _ensure_default_given(self) -> None:
        if self.has_secondary_default and not self.has_default:
            raise NoDefault

    def _accessor_option(self, name: str) -> Accessor | None:
        if self.options.get(name) is None:
            return None
        return to_accessor(self.options[name])

    # ------------------------------------------------------------------
    # Assignable values
    # ------------------------------------------------------------------

    def assignable_values(self, record: models.Model, *, decorate: bool = False):
        """List the values ``record`` may currently hold.

        The previously persisted value comes first (grandfathered even when
        the source no longer yields it), then the source's values in their
        own order, without duplicates.

        Raises:
            DelegateUnavailable: when values come from a delegate that
                resolves to nothing for this record.
        """
        raw = self.raw_assignable_values(record)
        values = self.with_persisted_value(record, self.parse_values(raw))
        if decorate:
            labels = raw if isinstance(raw, Mapping) else None
            return self.decorate_values(values, labels)
        return values

    def is_assignable(self, record: models.Model, value: Any) -> bool:
        return contains(self.assignable_values(record), value)

    def raw_assignable_values(self, record: models.Model) -> Any:
        if self.has_delegate:
            return self.assignable_values_from_delegate(record)
        if callable(self.values):
            return call_with_record(self.values, record)
        return self.values

    def parse_values(self, values: Any) -> list[Any]:
        if values is None:
            return []
        if isinstance(values, QuerySet):
            # Clone so a cached result set is never reused across calls.
            return list(values.all())
        if isinstance(values, Mapping):
            return list(values.keys())
        if isinstance(values, (str, bytes)):
            return [values]
        return list(values)

    def with_persisted_value(
        self,
        record: models.Model,
        values: list[Any],
    ) -> list[Any]:
        persisted = self.previously_saved_value(record)
        grandfathered = [] if is_blank(persisted) else flatten(persisted)
        return unique([*grandfathered, *values])

    def previously_saved_value(self, record: models.Model) -> Any:
        return None

    def decorate_values(
        self,
        values: list[Any],
        labels: Mapping[Any, Any] | None = None,
    ) -> list[Any]:
        return values

    def humanized_values(self, record: models.Model) -> list[HumanizedValue]:
        msg = f"{self.__class__.__name__} does not humanize values"
        raise NotImplementedError(msg)

    # ------------------------------------------------------------------
    # Delegation
    # ------------------------------------------------------------------

    def delegate(self, record: models.Model) -> Any:
        return resolve(self.delegate_accessor, record)

    def assignable_values_from_delegate(self, record: models.Model) -> Any:
        delegate = self.delegate(record)
        if is_blank(delegate):
            raise DelegateUnavailable(record=record)
        query = getattr(delegate, self.delegate_query_method)
        return call_with_record(query, record)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def should_validate(self, record: models.Model) -> bool:
        if self.if_accessor is not None and not resolve(self.if_accessor, record):
            return False
        return not (
            self.unless_accessor is not None
            and resolve(self.unless_accessor, record)
        )

    def current_value(self, record: models.Model) -> Any:
        return getattr(record, self.property)

    def not_included_error_message(self):
        return translate(INCLUSION_ERROR_KEY, default=INCLUSION_ERROR_MESSAGE)

    def validate_record(
        self,
        record: models.Model,
        errors: dict[str, list[ValidationError]],
    ) -> None:
        """Append an inclusion error to ``errors`` for each bad value.

        Skipped when a guard says so, when blanks are allowed and the value is
        blank, or when the delegate is unavailable for this record.
        """
        if not self.should_validate(record):
            return
        value = self.current_value(record)
        if self.allow_blank and is_blank(value):
            return
        try:
            assignable_values = self.assignable_values(record)
        except DelegateUnavailable:
            logger.debug(
                "Skipping assignable values validation of %r: "
                "delegate unavailable",
                self,
            )
            return
        for item in flatten(value):
            if not contains(assignable_values, item):
                errors.setdefault(self.property, []).append(
                    ValidationError(
                        self.not_included_error_message(),
                        code=INCLUSION_ERROR_CODE,
                        params={"value": item},
                    ),
                )

    # ------------------------------------------------------------------
    # Defaults
    # ------------------------------------------------------------------

    def evaluate_default(self, record: models.Model, value_or_callable: Any) -> Any:
        if callable(value_or_callable):
            return call_with_record(value_or_callable, record)
        return value_or_callable

    def set_default(self, record: models.Model) -> None:
        """Assign the default to a new record whose attribute is still unset.

        A secondary default replaces the primary one only when the primary is
        not assignable and the secondary is. Defaulting never fails because
        of non-assignable values.
        """
        if not self.has_default or not is_new_record(record):
            return
        if self.current_value(record) is not None:
            return
        default_value = self.evaluate_default(record, self.default)
        if self.has_secondary_default:
            try:
                if not self.is_assignable(record, default_value):
                    secondary_value = self.evaluate_default(
                        record,
                        self.secondary_default,
                    )
                    if self.is_assignable(record, secondary_value):
                        logger.debug(
                            "Using secondary default %r for %r",
                            secondary_value,
                            self,
                        )
                        default_value = secondary_value
            except DelegateUnavailable:
                logger.debug(
                    "Keeping primary default of %r: delegate unavailable",
                    self,
                )
        setattr(record, self.property, default_value)
