"""Accent/case folding and accent-tolerant regex builders."""

from __future__ import annotations

import re
import unicodedata

# Base letter → every spelling it should match (lowercase; uppercase added at build time)
ACCENT_CLASSES = {
    "a": "aáàäâã",
    "e": "eéèëê",
    "i": "iíìïî",
    "o": "oóòöôõ",
    "u": "uúùüû",
    "n": "nñ",
    "c": "cç",
}

_WHITESPACE_RE = re.compile(r"\s+")


def strip_accents(text: str) -> str:
    return "".join(
        ch for ch in unicodedata.normalize("NFD", text)
        if not unicodedata.combining(ch)
    )


def normalize(text: str | None) -> str:
    """Fold text for comparison: no accents, lowercase, single spaces, trimmed.

    normalize(normalize(x)) == normalize(x) for every x.
    """
    if not text:
        return ""
    # lower() first: some uppercase letters lower to a base + combining mark
    folded = strip_accents(str(text).lower())
    return _WHITESPACE_RE.sub(" ", folded).strip()


def _char_pattern(ch: str) -> str:
    base = strip_accents(ch).lower()
    variants = ACCENT_CLASSES.get(base)
    if variants:
        return f"[{variants}{variants.upper()}]"
    return re.escape(ch)


def like_regex(literal: str | None) -> re.Pattern[str] | None:
    """Build a case/accent-insensitive substring pattern for ``literal``.

    Returns None for empty input; callers treat that as "no constraint".
    """
    if not literal:
        return None
    pattern = "".join(_char_pattern(ch) for ch in str(literal))
    return re.compile(pattern, re.IGNORECASE)


def exact_regex(literal: str | None) -> re.Pattern[str] | None:
    """Build an anchored case/accent/whitespace-insensitive equality pattern."""
    stripped = str(literal or "").strip()
    if not stripped:
        return None
    words = ("".join(_char_pattern(ch) for ch in word) for word in _WHITESPACE_RE.split(stripped))
    return re.compile(r"^\s*" + r"\s+".join(words) + r"\s*$", re.IGNORECASE)
