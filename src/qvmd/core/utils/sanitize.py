"""Filename sanitization for note and notebook names"""

import re


ILLEGAL_RE = re.compile(r'[/?<>\\:*|"]')
CONTROL_RE = re.compile(r'[\x00-\x1f\x80-\x9f]')
RESERVED_RE = re.compile(r'^\.+$')
WINDOWS_RESERVED_RE = re.compile(r'^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$', re.IGNORECASE)
WINDOWS_TRAILING_RE = re.compile(r'[. ]+$')
MAX_BYTES = 255


def _truncate(text: str, max_bytes: int) -> str:
    """Cut text to at most max_bytes of UTF-8 without splitting a character."""
    return text.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")


def sanitize_filename(text: str, replacement: str = "") -> str:
    """Strip characters that are unsafe in a file name on any common filesystem.

    Case and spaces are kept, so "Dev-Notes" stays "Dev-Notes". May return an
    empty string when nothing usable remains.
    """
    text = ILLEGAL_RE.sub(replacement, text)
    text = CONTROL_RE.sub(replacement, text)
    text = RESERVED_RE.sub(replacement, text)
    text = WINDOWS_RESERVED_RE.sub(replacement, text)
    text = WINDOWS_TRAILING_RE.sub(replacement, text)
    return _truncate(text, MAX_BYTES)
