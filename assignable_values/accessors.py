"""
Resolution of options declared as "a name or a function".

``through``, ``if_`` and ``unless`` accept either an attribute/method name on
the record or a callable. Both are normalized into an :class:`Accessor`
when the restriction is declared and resolved per record through
:func:`resolve`.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def takes_single_argument(func: Callable[..., Any]) -> bool:
    """True when ``func`` declares exactly one positional parameter."""
    try:
        parameters = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return False
    return len([p for p in parameters if p.kind in POSITIONAL_KINDS]) == 1


def call_with_record(func: Callable[..., Any], record: Any) -> Any:
    """Call ``func`` with the record if it accepts one, otherwise bare."""
    if takes_single_argument(func):
        return func(record)
    return func()


@dataclass(frozen=True)
class NamedAccessor:
    """Reads an attribute of the record, calling it when it is a method."""

    name: str

    def resolve(self, record: Any) -> Any:
        value = getattr(record, self.name)
        if inspect.ismethod(value):
            return value()
        return value


@dataclass(frozen=True)
class CallableAccessor:
    """Calls a function, passing the record when it takes an argument."""

    func: Callable[..., Any]

    def resolve(self, record: Any) -> Any:
        return call_with_record(self.func, record)


Accessor = NamedAccessor | CallableAccessor


def to_accessor(definition: str | Callable[..., Any] | Accessor) -> Accessor:
    if isinstance(definition, (NamedAccessor, CallableAccessor)):
        return definition
    if isinstance(definition, str):
        return NamedAccessor(definition)
    if callable(definition):
        return CallableAccessor(definition)
    msg = f"Illegal accessor definition: {definition!r}"
    raise TypeError(msg)


def resolve(accessor: Accessor, record: Any) -> Any:
    return accessor.resolve(record)
