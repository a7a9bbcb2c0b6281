"""
Content rating restrictions.

Users may have a maximum movie (MPAA) and TV (US TV Parental Guidelines)
rating. Certifications are read from provider details; unknown ratings are
blocked, unrated titles pass only when the maximum is "NR".
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from seerr.providers import MediaDetails


MOVIE_RATINGS = ("G", "PG", "PG-13", "R", "NC-17", "NR")
TV_RATINGS = ("TV-Y", "TV-Y7", "TV-G", "TV-PG", "TV-14", "TV-MA", "NR")


def _rank(rating: str, hierarchy: Sequence[str]) -> int:
    return hierarchy.index(rating) if rating in hierarchy else -1


def _most_restrictive(certifications: List[str], hierarchy: Sequence[str]) -> str:
    best = certifications[0]
    for certification in certifications[1:]:
        if _rank(certification, hierarchy) > _rank(best, hierarchy):
            best = certification
    return best


def get_movie_certification(details: MediaDetails) -> Optional[str]:
    """Most restrictive US certification, else the most restrictive known one from any country.

    "NR" and empty certifications are ignored so unrated cuts do not mask the
    theatrical rating.
    """
    us = [
        rd.certification
        for country in details.release_dates
        if country.iso_3166_1 == "US"
        for rd in country.release_dates
        if rd.certification and rd.certification != "NR"
    ]
    if us:
        return _most_restrictive(us, MOVIE_RATINGS)

    known = [
        rd.certification
        for country in details.release_dates
        for rd in country.release_dates
        if rd.certification and rd.certification != "NR" and rd.certification in MOVIE_RATINGS
    ]
    if not known:
        return None
    return _most_restrictive(known, MOVIE_RATINGS)


def get_tv_certification(details: MediaDetails) -> Optional[str]:
    for rating in details.content_ratings:
        if rating.iso_3166_1 == "US":
            return rating.rating or None
    return None


def _is_rating_allowed(rating: Optional[str], max_rating: Optional[str], hierarchy: Sequence[str]) -> bool:
    if not max_rating:
        return True
    if not rating:
        return max_rating == "NR"
    max_index = _rank(max_rating, hierarchy)
    index = _rank(rating, hierarchy)
    if max_index == -1 or index == -1:
        return False
    return index <= max_index


def is_movie_rating_allowed(rating: Optional[str], max_rating: Optional[str]) -> bool:
    return _is_rating_allowed(rating, max_rating, MOVIE_RATINGS)


def is_tv_rating_allowed(rating: Optional[str], max_rating: Optional[str]) -> bool:
    return _is_rating_allowed(rating, max_rating, TV_RATINGS)
