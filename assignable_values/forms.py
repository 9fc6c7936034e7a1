"""
Model form support for restricted attributes.

Mixing :class:`AssignableValuesFormMixin` into a ``ModelForm`` turns each
restricted scalar field into a choice field over the instance's assignable
values, labelled with their humanizations, and narrows restricted
association fields to the assignable instances. Submitted data is still
validated by the model's ``clean()`` during ``_post_clean``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django import forms
from django.core.exceptions import FieldDoesNotExist
from django.db.models import BLANK_CHOICE_DASH

from assignable_values.exceptions import DelegateUnavailable
from assignable_values.restriction import AssociationRestriction

if TYPE_CHECKING:
    from assignable_values.restriction import Restriction

logger = logging.getLogger(__name__)


class AssignableValuesFormMixin:
    """Limit ModelForm choices to the instance's assignable values."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        get_restrictions = getattr(self.instance, "get_assignable_restrictions", None)
        if get_restrictions is None:
            return
        for restriction in get_restrictions():
            if restriction.property not in self.fields:
                continue
            try:
                self.restrict_field(restriction)
            except DelegateUnavailable:
                logger.debug(
                    "Leaving form field '%s' unrestricted: delegate unavailable",
                    restriction.property,
                )

    def restrict_field(self, restriction: Restriction) -> None:
        name = restriction.property
        form_field = self.fields[name]
        if isinstance(restriction, AssociationRestriction):
            if isinstance(form_field, forms.ModelChoiceField):
                keys = [
                    instance.pk
                    for instance in restriction.assignable_values(self.instance)
                ]
                form_field.queryset = form_field.queryset.filter(pk__in=keys)
            return

        choices = [
            humanized.as_choice()
            for humanized in restriction.humanized_values(self.instance)
        ]
        try:
            model_field = self.instance._meta.get_field(name)  # noqa: SLF001
        except FieldDoesNotExist:
            return
        field_options = {
            "required": form_field.required,
            "label": form_field.label,
            "help_text": form_field.help_text,
            "initial": form_field.initial,
            "coerce": model_field.to_python,
        }
        if isinstance(form_field, forms.JSONField):
            self.fields[name] = forms.TypedMultipleChoiceField(
                choices=choices,
                **field_options,
            )
            return
        if not form_field.required or restriction.allow_blank:
            choices = [*BLANK_CHOICE_DASH, *choices]
        self.fields[name] = forms.TypedChoiceField(
            choices=choices,
            empty_value=None if model_field.null else "",
            **field_options,
        )
