"""Structured room codes of the form ``L###``."""

from __future__ import annotations

import re

_CODE_RE = re.compile(r"\b[Ll]\s*-?\s*(\d{3})\b")

CODE_PREFIXES = ("Aula", "Salón", "Salon", "Sala")


def extract_code(text: str | None) -> str:
    """Return the normalized code ("aula l-320" → "L320"), or "" if absent."""
    match = _CODE_RE.search(str(text or ""))
    return f"L{match.group(1)}" if match else ""


def expand_variants(code: str) -> list[str]:
    """Names a record stored under ``code`` may carry."""
    if not code:
        return []
    return [*(f"{prefix} {code}" for prefix in CODE_PREFIXES), code]


def loose_code_regex(code: str) -> re.Pattern[str] | None:
    """Match the code's digits with any L/separator spelling, e.g. "l - 320"."""
    if not code:
        return None
    digits = code[1:] if code[:1] in ("L", "l") else code
    return re.compile(rf"\bL\s*-?\s*{re.escape(digits)}\b", re.IGNORECASE)
