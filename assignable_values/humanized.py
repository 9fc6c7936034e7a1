from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class HumanizedValue:
    """An assignable value paired with its display label.

    Example:
        >>> genre = HumanizedValue("pop", "Pop music")
        >>> genre.value, genre.humanized(), str(genre)
        ('pop', 'Pop music', 'Pop music')
    """

    value: Any
    label: str

    def humanized(self) -> str:
        return self.label

    def __str__(self) -> str:
        return self.label

    def as_choice(self) -> tuple[Any, str]:
        return (self.value, self.label)
