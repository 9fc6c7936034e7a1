from __future__ import annotations

import pytest

from assignable_values.translation import clear_translator_cache
from tests.music.models import Song


@pytest.fixture(autouse=True)
def _fresh_translator():
    clear_translator_cache()
    yield
    clear_translator_cache()


@pytest.fixture
def song_class():
    """``Song`` with an empty restriction registry, restored afterwards.

    Tests declare the restrictions they need on the returned class.
    """
    saved = Song.__dict__.get("_assignable_restrictions")
    Song._assignable_restrictions = {}  # noqa: SLF001
    yield Song
    if saved is None:
        del Song._assignable_restrictions  # noqa: SLF001
    else:
        Song._assignable_restrictions = saved  # noqa: SLF001
