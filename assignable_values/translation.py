"""
Translation lookup for humanized values and error messages.

Labels are looked up by dotted key, for example
``assignable_values.music.song.genre.pop``, with a caller-supplied default
returned when the key is missing. The translator is selected by the
ASSIGNABLE_VALUES_TRANSLATOR setting.

Usage:
    from assignable_values.translation import translate

    label = translate("assignable_values.music.song.genre.pop", default="Pop")

Example settings:
    ASSIGNABLE_VALUES_TRANSLATIONS = {
        "en": {
            "assignable_values": {
                "music": {"song": {"genre": {"pop": "Pop music"}}},
            },
        },
        "de": {
            "assignable_values": {
                "music": {"song": {"genre": {"pop": "Popmusik"}}},
            },
        },
    }
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any
from typing import Protocol

from django.conf import settings
from django.utils.module_loading import import_string
from django.utils.translation import get_language
from django.utils.translation import gettext

from assignable_values.constants import DEFAULT_TRANSLATOR

logger = logging.getLogger(__name__)


class Translator(Protocol):
    def translate(self, key: str, default: Any) -> Any: ...


class SettingsTranslator:
    """Looks labels up in the nested ASSIGNABLE_VALUES_TRANSLATIONS setting.

    The active language is tried first, then its base language (``de`` for
    ``de-at``), then ``LANGUAGE_CODE``. Hits are passed through ``gettext``
    so catalog translations of the configured strings still apply.
    """

    def translate(self, key: str, default: Any) -> Any:
        translations = getattr(settings, "ASSIGNABLE_VALUES_TRANSLATIONS", {})
        for language in self.candidate_languages():
            found = lookup(translations.get(language), key)
            if found is not None:
                return gettext(str(found))
        return default

    @staticmethod
    def candidate_languages() -> list[str]:
        candidates: list[str] = []
        for language in (get_language(), settings.LANGUAGE_CODE):
            if not language:
                continue
            for code in (language, language.split("-")[0]):
                if code not in candidates:
                    candidates.append(code)
        return candidates


def lookup(tree: Mapping[str, Any] | None, key: str) -> Any:
    """Walk a nested mapping by dotted key. Returns None when absent."""
    node: Any = tree
    for segment in key.split("."):
        if not isinstance(node, Mapping) or segment not in node:
            return None
        node = node[segment]
    if isinstance(node, Mapping):
        return None
    return node


@lru_cache(maxsize=1)
def get_translator() -> Translator:
    """Return the configured translator (cached singleton)."""
    translator_path = getattr(
        settings,
        "ASSIGNABLE_VALUES_TRANSLATOR",
        DEFAULT_TRANSLATOR,
    )

    logger.info("Initializing assignable values translator: %s", translator_path)

    try:
        translator_class = import_string(translator_path)
    except ImportError as e:
        msg = f"Could not import translator '{translator_path}': {e}"
        raise ImportError(msg) from e

    return translator_class()


def clear_translator_cache() -> None:
    """
    Clear the cached translator instance.

    Useful for testing or when settings change at runtime.
    """
    get_translator.cache_clear()


def translate(key: str, default: Any) -> Any:
    return get_translator().translate(key, default)
