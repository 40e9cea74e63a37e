"""Resolution cascade: raw query text → ranked, de-duplicated directory records.

Each record kind has a fixed list of strategies tried in priority order.
Every strategy only runs while the budget has room and asks the store for
the remaining slots, excluding records already collected, so a full
budget is filled whenever enough candidates exist and records found by
earlier strategies always come first. Store errors are not caught here.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Collection, Protocol, Sequence

from campus_directory.data.directory_db import FieldPatterns
from campus_directory.data.models import DirectoryRecord, RecordKind

from .codes import expand_variants, extract_code, loose_code_regex
from .disambiguation import resolve_lab_token, rewrite_lab_terms
from .normalizer import exact_regex, like_regex, normalize
from .tables import SynonymTables

logger = logging.getLogger(__name__)

DEFAULT_CHAT_BUDGET = 5

_BARE_NUMBER_RE = re.compile(r"\b(\d{2,4})\b")
_AULA_RE = re.compile(r"\baula\b", re.IGNORECASE)
_SALON_RE = re.compile(r"\bsalon\b", re.IGNORECASE)
_ROOM_CODE_FALLBACK_RE = re.compile(r"\bl\s*(\d{3})\b")


class DirectoryStore(Protocol):
    def find_by_exact_names(self, kind: RecordKind, names: Sequence[str]) -> list[DirectoryRecord]: ...

    def find_by_pattern(
        self,
        kind: RecordKind,
        field_patterns: FieldPatterns,
        limit: int | None = None,
        *,
        exclude_ids: Collection[str] = (),
    ) -> list[DirectoryRecord]: ...


class Resolver(Protocol):
    """Anything that turns query text into directory records.

    The cascade is the built-in implementation; an NLU-backed resolver can be
    plugged into the chat service behind the same call shape.
    """

    def resolve(self, kind: RecordKind, text: str | None, budget: int = DEFAULT_CHAT_BUDGET) -> list[DirectoryRecord]: ...


class MatchAccumulator:
    """Per-call ordered, de-duplicated record list bounded by a budget."""

    def __init__(self, budget: int) -> None:
        self.budget = max(budget, 0)
        self._seen: set[str] = set()
        self.records: list[DirectoryRecord] = []

    @property
    def remaining(self) -> int:
        return self.budget - len(self.records)

    @property
    def full(self) -> bool:
        return self.remaining <= 0

    @property
    def seen(self) -> frozenset[str]:
        return frozenset(self._seen)

    def add_all(self, records: Sequence[DirectoryRecord]) -> int:
        """Add unseen records in order until the budget is reached; return how many were added."""
        added = 0
        for record in records:
            if self.full:
                break
            if record.id in self._seen:
                continue
            self._seen.add(record.id)
            self.records.append(record)
            added += 1
        return added


Strategy = Callable[[str, MatchAccumulator], None]


class ResolutionCascade:
    """Resolve free-text queries against the directory store."""

    def __init__(self, store: DirectoryStore, tables: SynonymTables) -> None:
        self._store = store
        self._tables = tables
        self._strategies: dict[RecordKind, tuple[tuple[str, Strategy], ...]] = {
            RecordKind.ROOM: (
                ("canonical", self._room_canonical),
                ("code", self._room_code),
                ("number", self._room_number),
                ("fuzzy", self._room_fuzzy),
            ),
            RecordKind.LAB: (
                ("canonical", self._lab_canonical),
                ("code", self._lab_code),
                ("fuzzy", self._lab_fuzzy),
            ),
        }

    # ------------------------------------------------------------------
    # Canonical detection
    # ------------------------------------------------------------------

    def detect_canonical(self, kind: RecordKind, text: str | None) -> str:
        """Map raw text to the canonical name it refers to, or ""."""
        normalized = normalize(text)
        if not normalized:
            return ""
        if kind is RecordKind.ROOM:
            return self._detect_room(normalized)
        return self._detect_lab(normalized)

    def _detect_room(self, normalized: str) -> str:
        index = self._tables.rooms
        canonical = index.lookup(normalized) or index.detect(normalized)
        if canonical:
            return canonical
        match = _ROOM_CODE_FALLBACK_RE.search(normalized)
        return f"Aula L{match.group(1)}" if match else ""

    def _detect_lab(self, normalized: str) -> str:
        index = self._tables.labs
        # A whole-query key is unambiguous; token resolvers only arbitrate fragments
        exact = index.lookup(normalized)
        if exact:
            return exact
        return resolve_lab_token(normalized) or index.detect(normalized)

    # ------------------------------------------------------------------
    # Cascade
    # ------------------------------------------------------------------

    def resolve(
        self,
        kind: RecordKind,
        text: str | None,
        budget: int = DEFAULT_CHAT_BUDGET,
    ) -> list[DirectoryRecord]:
        query = str(text or "").strip()
        accumulator = MatchAccumulator(budget)
        if not query or accumulator.full:
            return []

        for name, strategy in self._strategies[kind]:
            if accumulator.full:
                break
            before = len(accumulator.records)
            strategy(query, accumulator)
            logger.debug(
                "[Cascade] %s/%s added %s record(s) for %r",
                kind.value, name, len(accumulator.records) - before, query,
            )
        return accumulator.records

    # Rooms -------------------------------------------------------------

    def _room_canonical(self, query: str, acc: MatchAccumulator) -> None:
        canonical = self.detect_canonical(RecordKind.ROOM, query)
        if not canonical:
            return
        acc.add_all(self._store.find_by_pattern(
            RecordKind.ROOM, {"nombre": exact_regex(canonical)}, acc.remaining, exclude_ids=acc.seen,
        ))

    def _room_code(self, query: str, acc: MatchAccumulator) -> None:
        code = extract_code(query)
        if not code:
            return
        docs = self._store.find_by_exact_names(RecordKind.ROOM, expand_variants(code))
        if not docs:
            loose = loose_code_regex(code)
            docs = self._store.find_by_pattern(
                RecordKind.ROOM, {"nombre": loose, "numero": loose}, acc.remaining, exclude_ids=acc.seen,
            )
        acc.add_all(docs)

    def _room_number(self, query: str, acc: MatchAccumulator) -> None:
        match = _BARE_NUMBER_RE.search(query)
        if not match:
            return
        number = match.group(1)
        acc.add_all(self._store.find_by_pattern(
            RecordKind.ROOM,
            {
                "numero": like_regex(number),
                "nombre": re.compile(rf"\b{re.escape(number)}\b", re.IGNORECASE),
            },
            acc.remaining, exclude_ids=acc.seen,
        ))

    def _room_fuzzy(self, query: str, acc: MatchAccumulator) -> None:
        rx_query = like_regex(query)
        salonized = _SALON_RE.sub("Salón", _AULA_RE.sub("Salón", query))
        collapsed = " ".join(query.split())
        prefix = re.compile(r"^\s*" + re.escape(collapsed), re.IGNORECASE)
        acc.add_all(self._store.find_by_pattern(
            RecordKind.ROOM,
            {
                "numero": rx_query,
                "nombre": [p for p in (rx_query, like_regex(salonized), prefix) if p is not None],
                "edificio": rx_query,
                "piso": rx_query,
            },
            acc.remaining, exclude_ids=acc.seen,
        ))

    # Labs --------------------------------------------------------------

    def _lab_canonical(self, query: str, acc: MatchAccumulator) -> None:
        canonical = self.detect_canonical(RecordKind.LAB, query) or rewrite_lab_terms(query)
        if not canonical:
            return
        rx_canonical = exact_regex(canonical)
        acc.add_all(self._store.find_by_pattern(
            RecordKind.LAB,
            {"nombre": rx_canonical, "codigo": rx_canonical},
            acc.remaining, exclude_ids=acc.seen,
        ))

    def _lab_code(self, query: str, acc: MatchAccumulator) -> None:
        code = extract_code(query)
        if not code:
            return
        loose = loose_code_regex(code)
        acc.add_all(self._store.find_by_pattern(
            RecordKind.LAB, {"codigo": loose, "nombre": loose}, acc.remaining, exclude_ids=acc.seen,
        ))

    def _lab_fuzzy(self, query: str, acc: MatchAccumulator) -> None:
        rx_query = like_regex(query)
        acc.add_all(self._store.find_by_pattern(
            RecordKind.LAB,
            {"nombre": rx_query, "codigo": rx_query, "edificio": rx_query, "piso": rx_query},
            acc.remaining, exclude_ids=acc.seen,
        ))
