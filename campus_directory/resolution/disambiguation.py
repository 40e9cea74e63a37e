"""Resolvers for overloaded short tokens ("sd", "tele", "tt").

These run on normalized text and take precedence over the substring scan
of the synonym index, whose short keys would otherwise swallow them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from .normalizer import normalize

# Numeral suffix: optional space/hyphen, then roman or arabic. "ii" is tried first.
_SECOND = r"[\s-]*(?:ii|2)\b"
_FIRST = r"[\s-]*(?:i|1)\b"


@dataclass(frozen=True)
class NumberedFamily:
    """A token family with a numbered "II" sense and a plain/"I" sense.

    ``tokens`` are regex fragments matched at a word boundary, e.g.
    ``("sd", r"sistemas\\s+digitales")``.
    """

    tokens: tuple[str, ...]
    second: str
    first: str
    bare: str

    def _compile(self, suffix: str) -> re.Pattern[str]:
        alternatives = "|".join(self.tokens)
        return re.compile(rf"\b(?:{alternatives}){suffix}")

    def resolve(self, normalized: str) -> str:
        if self._compile(_SECOND).search(normalized):
            return self.second
        if self._compile(_FIRST).search(normalized):
            return self.first
        if self._compile(r"\b").search(normalized):
            return self.bare
        return ""


@dataclass(frozen=True)
class CompoundRule:
    """Resolve to ``canonical`` only when every pattern matches (AND)."""

    canonical: str
    patterns: tuple[re.Pattern[str], ...]

    def resolve(self, normalized: str) -> str:
        if all(p.search(normalized) for p in self.patterns):
            return self.canonical
        return ""


SISTEMAS_DIGITALES = NumberedFamily(
    tokens=("sd", r"sistemas\s+digitales"),
    second="Laboratorio de Sistemas Digitales II",
    first="Laboratorio de Sistemas Digitales",
    bare="Laboratorio de Sistemas Digitales",
)

TELEMATICA = NumberedFamily(
    tokens=("tele", "telematica"),
    second="Laboratorio de Telemática II",
    first="Laboratorio de Telemática I",
    bare="Laboratorio de Telemática I",
)

TRABAJO_TERMINAL_TELEMATICA = CompoundRule(
    canonical="Laboratorio de Trabajo Terminal Telemática",
    patterns=(
        re.compile(r"\b(?:ttt|p\.?t\.?t|pt|tt|proy(?:ecto)?\s+terminal|trabajo\s+terminal)\b"),
        re.compile(r"\btele(?:matica)?\b"),
    ),
)

TRABAJO_TERMINAL_MECATRONICA = CompoundRule(
    canonical="Trabajo Terminal Mecatrónica",
    patterns=(
        re.compile(r"\b(?:tt|proy(?:ecto)?\s+terminal|trabajo\s+terminal)\b"),
        re.compile(r"\bmeca(?:tronica)?\b"),
    ),
)

ELECTRONICA_I = CompoundRule(
    canonical="Laboratorio de Electrónica I",
    patterns=(re.compile(r"\belectronica\s*(?:i(?!i)|1)\b"),),
)

LAB_COMPOUND_RULES: tuple[CompoundRule, ...] = (
    TRABAJO_TERMINAL_TELEMATICA,
    TRABAJO_TERMINAL_MECATRONICA,
)
LAB_NUMBERED_FAMILIES: tuple[NumberedFamily, ...] = (SISTEMAS_DIGITALES, TELEMATICA)
LAB_TRAILING_RULES: tuple[CompoundRule, ...] = (ELECTRONICA_I,)


def resolve_numbered(text: str | None, family: NumberedFamily) -> str:
    normalized = normalize(text)
    if not normalized:
        return ""
    return family.resolve(normalized)


def resolve_lab_token(
    text: str | None,
    *,
    compound_rules: Sequence[CompoundRule] = LAB_COMPOUND_RULES,
    families: Sequence[NumberedFamily] = LAB_NUMBERED_FAMILIES,
    trailing_rules: Sequence[CompoundRule] = LAB_TRAILING_RULES,
) -> str:
    """Run the lab resolvers in priority order; "" when none applies.

    Compound rules go first: "tt tele" must not be read as bare "tele".
    """
    normalized = normalize(text)
    if not normalized:
        return ""
    for rule in compound_rules:
        canonical = rule.resolve(normalized)
        if canonical:
            return canonical
    for family in families:
        canonical = family.resolve(normalized)
        if canonical:
            return canonical
    for rule in trailing_rules:
        canonical = rule.resolve(normalized)
        if canonical:
            return canonical
    return ""


# Free-text rewrites applied to lab queries with no detected canonical name.
# Order matters: later rules see the output of earlier ones.
_LAB_REWRITES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in (
        (r"\bsc\s*(\d+)\b", r"Sala de Cómputo \1"),
        (r"\bsala\s*de\s*c[oó]mputo\s*(\d+)\b", r"Sala de Cómputo \1"),
        (r"(?<!Sala de )\bc[oó]mputo\s*(\d+)\b", r"Sala de Cómputo \1"),
        (r"\brealidad\s*ext(?:endida)?\b", "Realidad Extendida"),
        (r"\bdesarrollo\s+tecnol[oó]gico\b", "Desarrollo Tecnológico"),
        (r"\bsd[\s-]*(?:ii|2)\b", "Sistemas Digitales II"),
        (r"\bsd\s*(?:i|1)\b", "Sistemas Digitales I"),
        (r"\bttt\b", "Trabajo Terminal Telemática"),
        (r"\btt\s*tele(?:m[aá]tica)?\b", "Trabajo Terminal Telemática"),
        (r"\bp\.?t\.?t\b", "Trabajo Terminal Telemática"),
        (r"\bpt\s+tele(?:m[aá]tica)?\b", "Trabajo Terminal Telemática"),
        (r"\b(?:proy(?:ecto)?|trabajo)\s+terminal\s+tele(?:m[aá]tica)?\b", "Trabajo Terminal Telemática"),
        (r"\btt\s*meca(?:tr[oó]nica)?\b", "Trabajo Terminal Mecatrónica"),
        (r"\btele(?:m[aá]tica)?\s*(?:ii|2)\b", "Laboratorio de Telemática II"),
        (r"\btele(?:m[aá]tica)?\s*(?:i|1)\b", "Laboratorio de Telemática I"),
        (r"\bcim\b", "CIM"),
        (r"\belectr[oó]nica\s*iii\b", "Electrónica 3"),
        (r"\belectr[oó]nica\s*ii\b", "Electrónica II"),
        (r"\b(?:lab(?:oratorio)?\s*de\s*)?electr[oó]nica\s*(?:i(?!i)|1)\b", "Laboratorio de Electrónica I"),
    )
)


def rewrite_lab_terms(text: str | None) -> str:
    """Rewrite informal lab fragments to their canonical spelling."""
    rewritten = str(text or "").strip()
    if not rewritten:
        return ""
    for pattern, replacement in _LAB_REWRITES:
        rewritten = pattern.sub(replacement, rewritten)
    return re.sub(r"\s{2,}", " ", rewritten).strip()
