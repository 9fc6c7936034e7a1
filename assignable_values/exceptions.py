"""
Exceptions raised by assignable value restrictions.

``NoValuesGiven`` and ``NoDefault`` signal a broken declaration and surface
when the model module is imported. ``DelegateUnavailable`` is a per-record
condition: listing assignable values propagates it, while validation and
defaulting treat it as "nothing to check".
"""

from __future__ import annotations


class AssignableValuesError(Exception):
    """Base exception for assignable value restrictions."""


class NoValuesGiven(AssignableValuesError):
    """Raised when a restriction has neither a value source nor a delegate."""

    def __init__(
        self,
        detail: str = (
            "You must supply the list of assignable values by either "
            "a values argument or the through option"
        ),
    ):
        self.detail = detail
        super().__init__(detail)


class NoDefault(AssignableValuesError):
    """Raised when ``secondary_default`` is declared without ``default``."""

    def __init__(
        self,
        detail: str = (
            "cannot use the secondary_default option without a default option"
        ),
    ):
        self.detail = detail
        super().__init__(detail)


class DelegateUnavailable(AssignableValuesError):
    """Raised when the delegate for a record resolves to nothing."""

    def __init__(
        self,
        detail: str = "Cannot query assignable values from a missing delegate",
        record=None,
    ):
        self.detail = detail
        self.record = record
        super().__init__(detail)


class UnknownRestriction(AssignableValuesError, LookupError):
    """Raised when asking a model for a restriction it never declared."""
