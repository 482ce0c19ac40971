"""Validation utilities for incoming shorten requests."""

import re
from typing import Any, Tuple


# Characters allowed anywhere in a URI (RFC 3986 reserved + unreserved + '%')
_ILLEGAL_URI_CHARS = re.compile(r"[^a-z0-9:/?#\[\]@!$&'()*+,;=.\-_~%]", re.IGNORECASE)
_BAD_ESCAPE = re.compile(r"%[^0-9a-f]|%[0-9a-f](?:[^0-9a-f]|$)", re.IGNORECASE)

# RFC 3986, appendix B
_URI_PARTS = re.compile(r"^(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?$")
_SCHEME = re.compile(r"[a-z][a-z0-9+\-.]*", re.IGNORECASE)

CUSTOM_CODE_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")


def is_valid_uri(url: Any) -> bool:
    """Check that ``url`` is a syntactically valid absolute URI.

    The value must carry a scheme, contain only URI characters, use
    well-formed percent escapes, and respect the authority/path rules:
    with an authority the path is empty or absolute, without one the
    path may not start with ``//``.
    """
    if not url or not isinstance(url, str):
        return False

    if _ILLEGAL_URI_CHARS.search(url) or _BAD_ESCAPE.search(url):
        return False

    match = _URI_PARTS.match(url)
    if match is None:
        return False
    scheme, authority, path = match.group(1), match.group(2), match.group(3)

    if not scheme or not _SCHEME.fullmatch(scheme):
        return False

    if authority:
        if path and not path.startswith("/"):
            return False
    elif path.startswith("//"):
        return False

    return True


def is_valid_custom_code(short_code: str, max_length: int = 64) -> Tuple[bool, str]:
    """Validate a user supplied short code.

    Args:
        short_code: The custom code to validate (non-empty)
        max_length: Maximum length for short code

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(short_code, str) or not CUSTOM_CODE_PATTERN.fullmatch(short_code):
        return False, "Custom code can only contain letters, numbers, dashes, and underscores"

    if len(short_code) > max_length:
        return False, f"Custom code must be at most {max_length} characters"

    return True, ""
