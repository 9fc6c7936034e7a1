"""
Declaration surface for assignable values.

Models opt in by inheriting :class:`AssignableValuesMixin` and declaring
restrictions after the class body::

    class Song(AssignableValuesMixin, models.Model):
        genre = models.CharField(max_length=50, null=True, blank=True)
        artist = models.ForeignKey(Artist, null=True, on_delete=models.SET_NULL)
        tracker = FieldTracker()

    Song.assignable_values_for("genre", ["pop", "rock"], default="pop")
    Song.assignable_values_for("artist", lambda song: Artist.objects.active())

Validation runs in ``clean()`` (and therefore ``full_clean()`` and model
forms); defaults are applied by a ``post_init`` receiver.
"""

from __future__ import annotations

from typing import Any

from django.conf import settings
from django.core import checks
from django.core.exceptions import ValidationError
from django.db import models

from assignable_values.constants import DEFAULT_AUTHORIZATION_DELEGATE
from assignable_values.exceptions import UnknownRestriction
from assignable_values.humanized import HumanizedValue
from assignable_values.records import find_field_tracker
from assignable_values.records import get_persisted_value
from assignable_values.records import is_new_record
from assignable_values.restriction import Restriction
from assignable_values.restriction import restriction_class_for
from assignable_values.restriction.base import UNSET


class AssignableValuesMixin(models.Model):
    """Abstract base adding assignable value restrictions to a model."""

    _assignable_restrictions: dict[str, Restriction] = {}

    class Meta:
        abstract = True

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    @classmethod
    def assignable_values_for(
        cls,
        attribute: str,
        values: Any = None,
        **options: Any,
    ) -> Restriction:
        """Restrict ``attribute`` to the values produced by ``values``.

        ``values`` is a callable (given the record when it takes an
        argument) or a literal list, range, mapping or queryset. Options:
        ``through``, ``default``, ``secondary_default``, ``allow_blank``,
        ``if_`` and ``unless``.
        """
        restriction_class = restriction_class_for(cls, attribute)
        restriction = restriction_class(cls, attribute, options, values)
        if "_assignable_restrictions" not in cls.__dict__:
            cls._assignable_restrictions = dict(cls._assignable_restrictions)
        cls._assignable_restrictions[attribute] = restriction
        return restriction

    @classmethod
    def authorize_values_for(cls, attribute: str, **options: Any) -> Restriction:
        """Shortcut for ``assignable_values_for`` delegating to ``power``.

        The delegate attribute is added to the model (as ``None``) when the
        model does not define it.
        """
        delegate = getattr(
            settings,
            "ASSIGNABLE_VALUES_AUTHORIZATION_DELEGATE",
            DEFAULT_AUTHORIZATION_DELEGATE,
        )
        if not hasattr(cls, delegate):
            setattr(cls, delegate, None)
        return cls.assignable_values_for(attribute, **{**options, "through": delegate})

    @classmethod
    def get_assignable_restrictions(cls) -> list[Restriction]:
        return list(cls._assignable_restrictions.values())

    @classmethod
    def get_assignable_restriction(cls, attribute: str) -> Restriction:
        try:
            return cls._assignable_restrictions[attribute]
        except KeyError:
            msg = f"{cls.__name__} declares no assignable values for '{attribute}'"
            raise UnknownRestriction(msg) from None

    @classmethod
    def check(cls, **kwargs):
        errors = super().check(**kwargs)
        errors.extend(cls._check_assignable_values_tracker())
        return errors

    @classmethod
    def _check_assignable_values_tracker(cls) -> list[checks.CheckMessage]:
        if not cls._assignable_restrictions or find_field_tracker(cls):
            return []
        return [
            checks.Warning(
                "Model declares assignable values but has no FieldTracker.",
                hint=(
                    "Add 'tracker = FieldTracker()' so previously saved values "
                    "stay assignable."
                ),
                obj=cls,
                id="assignable_values.W001",
            ),
        ]

    # ------------------------------------------------------------------
    # Host collaborator contract
    # ------------------------------------------------------------------

    def is_new_record(self) -> bool:
        return is_new_record(self)

    def get_persisted_value(self, attname: str) -> Any:
        return get_persisted_value(self, attname)

    def apply_assignable_defaults(self) -> None:
        for restriction in self.get_assignable_restrictions():
            restriction.set_default(self)

    def clean(self):
        super().clean()
        errors: dict[str, list[ValidationError]] = {}
        for restriction in self.get_assignable_restrictions():
            restriction.validate_record(self, errors)
        if errors:
            raise ValidationError(errors)

    # ------------------------------------------------------------------
    # Per-record accessors
    # ------------------------------------------------------------------

    def assignable_values(self, attribute: str, *, decorate: bool = False) -> list:
        return self.get_assignable_restriction(attribute).assignable_values(
            self,
            decorate=decorate,
        )

    def is_assignable(self, attribute: str, value: Any) -> bool:
        return self.get_assignable_restriction(attribute).is_assignable(self, value)

    def humanized_assignable_values(self, attribute: str) -> list[HumanizedValue]:
        return self.get_assignable_restriction(attribute).humanized_values(self)

    def humanized_value(self, attribute: str, value: Any = UNSET) -> str | None:
        return self.get_assignable_restriction(attribute).humanized_value(
            self,
            value,
        )

    def assignable_choices(self, attribute: str) -> list[tuple[Any, str]]:
        """``(value, label)`` pairs, ready for a form field's choices."""
        return [
            humanized.as_choice()
            for humanized in self.humanized_assignable_values(attribute)
        ]
