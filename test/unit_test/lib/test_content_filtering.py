"""Unit tests for content rating restrictions."""

import pytest

from seerr.lib.content_filtering import (
    get_movie_certification,
    get_tv_certification,
    is_movie_rating_allowed,
    is_tv_rating_allowed,
)
from seerr.providers import MediaDetails


def _movie(movie_id=1, release_dates=None, adult=False):
    return MediaDetails(
        id=movie_id, media_type="movie", title=f"Movie {movie_id}", adult=adult, release_dates=release_dates or []
    )


def _show(tv_id=1, ratings=None):
    return MediaDetails(id=tv_id, media_type="tv", title=f"Show {tv_id}", content_ratings=ratings or [])


class TestMovieCertification:
    def test_prefers_most_restrictive_us_rating(self):
        details = _movie(
            release_dates=[
                {"iso_3166_1": "US", "release_dates": [{"certification": "PG-13"}, {"certification": "R"}]},
                {"iso_3166_1": "GB", "release_dates": [{"certification": "NC-17"}]},
            ]
        )
        assert get_movie_certification(details) == "R"

    def test_ignores_nr_and_empty_us_entries(self):
        details = _movie(
            release_dates=[
                {"iso_3166_1": "US", "release_dates": [{"certification": "NR"}, {"certification": ""}]},
                {"iso_3166_1": "DE", "release_dates": [{"certification": "PG"}]},
            ]
        )
        assert get_movie_certification(details) == "PG"

    def test_unknown_foreign_ratings_are_ignored(self):
        details = _movie(release_dates=[{"iso_3166_1": "DE", "release_dates": [{"certification": "16"}]}])
        assert get_movie_certification(details) is None


class TestTvCertification:
    def test_us_rating(self):
        details = _show(ratings=[{"iso_3166_1": "GB", "rating": "15"}, {"iso_3166_1": "US", "rating": "TV-14"}])
        assert get_tv_certification(details) == "TV-14"

    def test_missing_us_rating(self):
        assert get_tv_certification(_show(ratings=[{"iso_3166_1": "GB", "rating": "15"}])) is None


class TestRatingAllowed:
    @pytest.mark.parametrize(
        "rating,max_rating,expected",
        [
            ("PG", "PG-13", True),
            ("PG-13", "PG-13", True),
            ("R", "PG-13", False),
            (None, "NR", True),
            (None, "R", False),
            ("X", "R", False),
            ("R", None, True),
        ],
    )
    def test_movie(self, rating, max_rating, expected):
        assert is_movie_rating_allowed(rating, max_rating) is expected

    @pytest.mark.parametrize(
        "rating,max_rating,expected",
        [("TV-Y7", "TV-PG", True), ("TV-MA", "TV-14", False), (None, "NR", True)],
    )
    def test_tv(self, rating, max_rating, expected):
        assert is_tv_rating_allowed(rating, max_rating) is expected
