"""Filter discovery results by original language."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional


def parse_languages(value: Optional[str]) -> List[str]:
    """Split a ``|``-separated language setting into trimmed codes."""
    if not value:
        return []
    return [code.strip() for code in value.split("|") if code.strip()]


def filter_by_languages(
    titles: Iterable[Mapping[str, Any]],
    original_language: Optional[str],
    *,
    apply: bool = True,
) -> List[Mapping[str, Any]]:
    """Keep movie and TV results whose ``original_language`` is in the setting.

    Results of any other ``media_type`` (people, collections) always pass.
    Nothing is filtered when ``apply`` is false or no languages are configured.
    """
    titles = list(titles)
    languages = parse_languages(original_language)
    if not apply or not languages:
        return titles

    return [
        title
        for title in titles
        if title.get("media_type") not in ("movie", "tv") or title.get("original_language") in languages
    ]
