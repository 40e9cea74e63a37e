"""Synonym index: informal spellings → canonical room/lab names."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from .normalizer import normalize

logger = logging.getLogger(__name__)


class SynonymIndex:
    """Immutable normalized-key → canonical-name index.

    ``detect`` scans keys longest first so that "sc10" is never shadowed by
    "sc1", whatever order the source table lists them in.
    """

    def __init__(self, entries: Mapping[str, str]) -> None:
        self._entries = dict(entries)
        # sorted() is stable, so equal-length keys keep insertion order
        self._scan_order = sorted(self._entries, key=len, reverse=True)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def lookup(self, key: str) -> str | None:
        return self._entries.get(normalize(key))

    def detect(self, text: str | None) -> str:
        """Return the canonical name of the longest key contained in ``text``."""
        normalized = normalize(text)
        if not normalized:
            return ""
        for key in self._scan_order:
            if key in normalized:
                return self._entries[key]
        return ""


def build_synonym_index(
    canonical_to_synonyms: Mapping[str, Sequence[str]],
    *,
    name: str = "synonyms",
) -> SynonymIndex:
    """Fold every canonical name and synonym into a single index.

    A key already bound to a different canonical name is re-bound (last
    write wins) and reported as a data-quality warning.
    """
    entries: dict[str, str] = {}
    collisions = 0

    for canonical, synonyms in canonical_to_synonyms.items():
        for raw in (canonical, *synonyms):
            key = normalize(raw)
            if not key:
                continue
            previous = entries.get(key)
            if previous is not None and previous != canonical:
                collisions += 1
                logger.warning(
                    "[Synonyms] %s: key %r maps to both %r and %r; keeping %r",
                    name, key, previous, canonical, canonical,
                )
            entries[key] = canonical

    logger.info(
        "[Synonyms] Built %s index: %s keys, %s canonical names, %s collisions",
        name, len(entries), len(canonical_to_synonyms), collisions,
    )
    return SynonymIndex(entries)


def numbered_synonyms(
    template: str,
    numbers: Iterable[int | str],
    variants: Sequence[str],
) -> dict[str, list[str]]:
    """Generate synonym families for numbered names.

    ``template`` and every entry of ``variants`` are format strings with a
    ``{n}`` placeholder, e.g. ``numbered_synonyms("Sala de Cómputo {n}",
    range(1, 21), ["sc{n}", "sc {n}", "computo {n}"])``.
    """
    table: dict[str, list[str]] = {}
    for n in numbers:
        canonical = template.format(n=n)
        table[canonical] = [variant.format(n=n) for variant in variants]
    return table
