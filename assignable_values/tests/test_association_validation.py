"""
Tests for restricting belongs-to associations (foreign keys).
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from assignable_values.tests.helpers import clean_errors
from assignable_values.tests.helpers import full_clean_errors
from tests.music.factories import ArtistFactory
from tests.music.factories import SongFactory
from tests.music.models import Artist
from tests.music.models import Song

pytestmark = pytest.mark.django_db

NOT_INCLUDED = "is not included in the list"


@pytest.fixture
def allowed_artist():
    return ArtistFactory(name="Allowed")


@pytest.fixture
def disallowed_artist():
    return ArtistFactory(name="Disallowed")


class TestAssociationValidation:
    def test_accepts_an_assignable_association(
        self,
        song_class,
        allowed_artist,
        disallowed_artist,
    ):
        song_class.assignable_values_for("artist", lambda: [allowed_artist])

        assert full_clean_errors(Song(artist=allowed_artist)) == {}
        assert full_clean_errors(Song(artist=disallowed_artist)) == {
            "artist": [NOT_INCLUDED],
        }

    def test_compares_by_primary_key(self, song_class, allowed_artist):
        song_class.assignable_values_for("artist", lambda: [allowed_artist])
        same_row = Artist.objects.get(pk=allowed_artist.pk)

        assert clean_errors(Song(artist=same_row)) == {}

    def test_accepts_a_queryset_source(
        self,
        song_class,
        allowed_artist,
        disallowed_artist,
    ):
        song_class.assignable_values_for(
            "artist",
            Artist.objects.filter(name__startswith="Allowed"),
        )

        assert clean_errors(Song(artist=allowed_artist)) == {}
        assert clean_errors(Song(artist=disallowed_artist)) == {
            "artist": [NOT_INCLUDED],
        }

    def test_queryset_source_is_evaluated_on_every_call(
        self,
        song_class,
        allowed_artist,
    ):
        song_class.assignable_values_for(
            "artist",
            Artist.objects.filter(name__startswith="Allowed"),
        )
        song = Song()
        assert song.assignable_values("artist") == [allowed_artist]

        newcomer = ArtistFactory(name="Allowed too")

        assert song.assignable_values("artist") == [allowed_artist, newcomer]

    def test_rejects_a_missing_association(self, song_class, allowed_artist):
        song_class.assignable_values_for("artist", lambda: [allowed_artist])

        assert clean_errors(Song()) == {"artist": [NOT_INCLUDED]}

    def test_allows_a_missing_association_with_allow_blank(self, song_class):
        song_class.assignable_values_for("artist", lambda: [], allow_blank=True)
        song = Song()

        assert song.artist is None
        assert clean_errors(song) == {}


class TestPreviouslySavedAssociation:
    def test_allows_a_previously_saved_association(
        self,
        song_class,
        allowed_artist,
        disallowed_artist,
    ):
        saved = SongFactory(artist=disallowed_artist)
        song_class.assignable_values_for("artist", lambda: [allowed_artist])

        song = Song.objects.get(pk=saved.pk)

        assert clean_errors(song) == {}
        assert song.assignable_values("artist") == [
            disallowed_artist,
            allowed_artist,
        ]

    def test_rejects_switching_away_to_another_bad_association(
        self,
        song_class,
        allowed_artist,
        disallowed_artist,
    ):
        saved = SongFactory(artist=disallowed_artist)
        song_class.assignable_values_for("artist", lambda: [allowed_artist])
        song = Song.objects.get(pk=saved.pk)

        song.artist = ArtistFactory(name="Other")

        assert clean_errors(song) == {"artist": [NOT_INCLUDED]}

    def test_loads_the_previously_saved_association_when_the_key_changed(
        self,
        song_class,
        allowed_artist,
        disallowed_artist,
        django_assert_num_queries,
    ):
        saved = SongFactory(artist=disallowed_artist)
        song_class.assignable_values_for("artist", lambda: [allowed_artist])
        song = Song.objects.get(pk=saved.pk)
        song.artist = allowed_artist

        with django_assert_num_queries(1):
            values = song.assignable_values("artist")

        assert values == [disallowed_artist, allowed_artist]

    def test_does_not_load_the_saved_association_when_the_key_is_unchanged(
        self,
        song_class,
        allowed_artist,
        django_assert_num_queries,
    ):
        song_class.assignable_values_for("artist", lambda: [allowed_artist])
        song = SongFactory(artist=allowed_artist)

        with django_assert_num_queries(0):
            song.clean()

    def test_does_not_fail_when_the_saved_association_no_longer_exists(
        self,
        song_class,
        allowed_artist,
    ):
        song_class.assignable_values_for("artist", lambda: [allowed_artist])
        song = Song()

        with patch(
            "assignable_values.restriction.association.get_persisted_value",
            return_value=-1,
        ):
            assert clean_errors(song) == {"artist": [NOT_INCLUDED]}


class TestAssociationFreshness:
    def test_does_not_refetch_a_fresh_association(
        self,
        song_class,
        allowed_artist,
        django_assert_num_queries,
    ):
        song_class.assignable_values_for("artist", lambda: [allowed_artist])
        song = Song(artist=allowed_artist)

        with django_assert_num_queries(0):
            song.clean()

        assert song.artist is allowed_artist

    def test_refetches_a_stale_association_once_before_validating(
        self,
        song_class,
        allowed_artist,
        disallowed_artist,
        django_assert_num_queries,
    ):
        song_class.assignable_values_for("artist", lambda: [allowed_artist])
        song = Song(artist=disallowed_artist)
        # Write the key column without going through the descriptor so the
        # cached related object no longer matches it.
        song.__dict__["artist_id"] = allowed_artist.pk

        with django_assert_num_queries(1):
            song.clean()

        assert song.artist == allowed_artist
        assert song.artist is not disallowed_artist

    def test_stale_association_is_validated_against_the_foreign_key(
        self,
        song_class,
        allowed_artist,
        disallowed_artist,
    ):
        song_class.assignable_values_for("artist", lambda: [allowed_artist])
        song = Song(artist=allowed_artist)
        song.__dict__["artist_id"] = disallowed_artist.pk

        assert clean_errors(song) == {"artist": [NOT_INCLUDED]}


class TestAssociationHumanization:
    def test_labels_instances_with_their_string_form(
        self,
        song_class,
        allowed_artist,
        disallowed_artist,
    ):
        song_class.assignable_values_for(
            "artist",
            lambda: [allowed_artist, disallowed_artist],
        )
        song = Song(artist=allowed_artist)

        assert song.assignable_choices("artist") == [
            (allowed_artist, "Allowed"),
            (disallowed_artist, "Disallowed"),
        ]
        assert song.humanized_value("artist") == "Allowed"
        assert Song().humanized_value("artist") is None
