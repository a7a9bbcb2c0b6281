"""URL validation for user-supplied settings fields."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse


def is_valid_url(value: Optional[str]) -> bool:
    """Empty values are valid (the field is optional); otherwise require an http(s) URL with a host."""
    if value is None or not value.strip():
        return True
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
