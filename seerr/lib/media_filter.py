"""
Library path filtering.

Administrators list regular expressions in ``main.ignoredPathPatterns``; media
whose files match any of them is ignored by library scans. Compiled patterns
are kept in a single-entry cache keyed by the joined pattern list, so any
change to the list replaces the whole cache.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from seerr.core.logging_config import get_logger
from seerr.core.settings import get_settings

logger = get_logger(__name__)

_PATTERN_SEPARATOR = "\x00"

_compiled_cache: Optional[Tuple[str, List["re.Pattern[str]"]]] = None


def get_plex_file_paths(media: Iterable[Dict[str, Any]]) -> List[str]:
    """Flatten the ``Part[].file`` entries of Plex media items into one list."""
    return [part["file"] for item in media for part in (item.get("Part") or [])]


def compile_patterns(patterns: Sequence[str]) -> List["re.Pattern[str]"]:
    """Compile ``patterns`` case-insensitively, reusing the cache when the list is unchanged.

    Invalid patterns are logged and skipped.
    """
    global _compiled_cache

    key = _PATTERN_SEPARATOR.join(patterns)
    if _compiled_cache is not None and _compiled_cache[0] == key:
        return _compiled_cache[1]

    compiled: List["re.Pattern[str]"] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, re.IGNORECASE))
        except re.error:
            logger.warning(f"Invalid regex pattern in ignored path patterns: {pattern}")
    _compiled_cache = (key, compiled)
    return compiled


def clear_pattern_cache() -> None:
    global _compiled_cache
    _compiled_cache = None


def is_path_ignored(file_paths: Sequence[str], patterns: Optional[Sequence[str]] = None) -> bool:
    """Return True when any path matches any ignored-path pattern.

    Args:
        file_paths: Library file paths; backslashes are treated as ``/``
        patterns: Regular expressions, defaults to the settings file value

    Returns:
        True if at least one path matches
    """
    if patterns is None:
        patterns = get_settings().main.ignored_path_patterns or []
    if not patterns or not file_paths:
        return False

    normalized = [path.replace("\\", "/") for path in file_paths]
    for regex in compile_patterns(list(patterns)):
        if any(regex.search(path) for path in normalized):
            return True
    return False
