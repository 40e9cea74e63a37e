"""DuckDB store for rooms and laboratories.

Exact-name lookups run in SQL with accent/case folding. Pattern lookups
take compiled Python regexes, so rows are streamed in the kind's default
order and filtered here; the directory is small enough for that.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from pathlib import Path
from typing import Any, Collection, Iterable, Mapping, Sequence, Union

import duckdb

from campus_directory.resolution.normalizer import normalize

from .config import DirectoryConfig
from .models import DirectoryRecord, RecordKind

logger = logging.getLogger(__name__)

PatternSpec = Union[re.Pattern[str], Sequence[re.Pattern[str]], None]
FieldPatterns = Mapping[str, PatternSpec]

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS salones (
    id VARCHAR PRIMARY KEY,
    numero VARCHAR NOT NULL,
    nombre VARCHAR NOT NULL,
    edificio VARCHAR NOT NULL,
    piso VARCHAR NOT NULL,
    ubicacion VARCHAR,
    mapa_url VARCHAR
);

CREATE INDEX IF NOT EXISTS idx_salones_numero ON salones(numero);
CREATE INDEX IF NOT EXISTS idx_salones_nombre ON salones(nombre);

CREATE TABLE IF NOT EXISTS laboratorios (
    id VARCHAR PRIMARY KEY,
    codigo VARCHAR NOT NULL,
    nombre VARCHAR NOT NULL,
    edificio VARCHAR NOT NULL,
    piso VARCHAR NOT NULL,
    ubicacion VARCHAR,
    mapa_url VARCHAR
);

CREATE INDEX IF NOT EXISTS idx_laboratorios_codigo ON laboratorios(codigo);
CREATE INDEX IF NOT EXISTS idx_laboratorios_nombre ON laboratorios(nombre);
"""

# Same folding as normalize(): no accents, lowercase, single spaces, trimmed.
# Collapse before trim: trim() only strips spaces, not tabs or newlines.
_FOLDED_NAME_SQL = r"trim(regexp_replace(strip_accents(lower(nombre)), '\s+', ' ', 'g'))"

REQUIRED_FIELDS = ("nombre", "edificio", "piso")


class StoreError(RuntimeError):
    """Raised when the backing database cannot answer a query."""


class DirectoryDatabase:
    """DuckDB service for the room and laboratory catalogue."""

    def __init__(self, db_path: Path | str | None = None) -> None:
        self.db_path = Path(db_path) if db_path else DirectoryConfig().db_path
        self._conn: duckdb.DuckDBPyConnection | None = None

    @staticmethod
    def _is_closed_connection_error(exc: Exception) -> bool:
        text = str(exc).lower()
        return "connection already closed" in text or ("connection error" in text and "closed" in text)

    def _open_connection(self) -> duckdb.DuckDBPyConnection:
        """Open a fresh connection and ensure schema is available."""
        if str(self.db_path) != ":memory:":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._conn = duckdb.connect(str(self.db_path))
            self._conn.execute(SCHEMA_SQL)
        except duckdb.Error as exc:
            self._conn = None
            raise StoreError(f"Cannot open directory database at {self.db_path}: {exc}") from exc
        logger.info("[DirectoryDB] Connected to %s", self.db_path)
        return self._conn

    def connect(self) -> duckdb.DuckDBPyConnection:
        """Get or create database connection."""
        if self._conn is None:
            return self._open_connection()
        try:
            self._conn.execute("SELECT 1")
        except Exception as exc:
            if not self._is_closed_connection_error(exc):
                raise StoreError(str(exc)) from exc
            logger.warning("[DirectoryDB] Reopening closed connection to %s", self.db_path)
            self._conn = None
            return self._open_connection()
        return self._conn

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            try:
                self._conn.close()
            except Exception as exc:
                logger.warning("[DirectoryDB] Ignoring close error: %s", exc)
            finally:
                self._conn = None

    def _query(self, sql: str, params: Sequence[Any] = ()) -> list[tuple[Any, ...]]:
        cursor = self.connect().cursor()
        try:
            return cursor.execute(sql, list(params)).fetchall()
        except duckdb.Error as exc:
            raise StoreError(f"Directory query failed: {exc}") from exc
        finally:
            cursor.close()

    def _select(self, kind: RecordKind, where: str = "", params: Sequence[Any] = ()) -> list[DirectoryRecord]:
        columns = ", ".join(("id", *kind.fields))
        order = ", ".join(kind.order_by)
        sql = f"SELECT {columns} FROM {kind.table}"
        if where:
            sql += f" WHERE {where}"
        sql += f" ORDER BY {order}, id"
        return [DirectoryRecord.from_row(kind, row) for row in self._query(sql, params)]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert_records(self, kind: RecordKind, records: Iterable[Mapping[str, Any]]) -> list[str]:
        """Insert records and return their ids (generated when not supplied)."""
        rows: list[list[Any]] = []
        for record in records:
            missing = [f for f in (kind.code_field, *REQUIRED_FIELDS) if not record.get(f)]
            if missing:
                raise ValueError(f"{kind.table} record missing fields: {', '.join(missing)}")
            record_id = str(record.get("_id") or record.get("id") or uuid.uuid4().hex)
            rows.append([record_id, *(record.get(f) for f in kind.fields)])

        if not rows:
            return []

        placeholders = ", ".join("?" for _ in range(len(kind.fields) + 1))
        columns = ", ".join(("id", *kind.fields))
        cursor = self.connect().cursor()
        try:
            cursor.executemany(f"INSERT INTO {kind.table} ({columns}) VALUES ({placeholders})", rows)
        except duckdb.Error as exc:
            raise StoreError(f"Insert into {kind.table} failed: {exc}") from exc
        finally:
            cursor.close()

        logger.info("[DirectoryDB] Inserted %s %s records", len(rows), kind.table)
        return [row[0] for row in rows]

    def import_json(self, path: Path | str) -> dict[str, int]:
        """Load ``{"salones": [...], "laboratorios": [...]}`` from a JSON file."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        counts: dict[str, int] = {}
        for kind in RecordKind:
            records = raw.get(kind.table) or []
            counts[kind.table] = len(self.insert_records(kind, records))
        return counts

    def seed_if_empty(self, path: Path | str) -> dict[str, int] | None:
        """Import ``path`` when both tables are empty; None when data already exists."""
        if any(self.count(kind) for kind in RecordKind):
            logger.info("[DirectoryDB] Skipping seed %s: directory already populated", path)
            return None
        counts = self.import_json(path)
        logger.info("[DirectoryDB] Seeded from %s: %s", path, counts)
        return counts

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, kind: RecordKind, record_id: str) -> DirectoryRecord | None:
        rows = self._select(kind, "id = ?", [record_id])
        return rows[0] if rows else None

    def find_by_exact_names(self, kind: RecordKind, names: Sequence[str]) -> list[DirectoryRecord]:
        """Records whose ``nombre`` equals any candidate, ignoring accents/case/spacing."""
        folded = list(dict.fromkeys(n for n in (normalize(name) for name in names) if n))
        if not folded:
            return []
        placeholders = ", ".join("?" for _ in folded)
        return self._select(kind, f"{_FOLDED_NAME_SQL} IN ({placeholders})", folded)

    def find_by_pattern(
        self,
        kind: RecordKind,
        field_patterns: FieldPatterns,
        limit: int | None = None,
        *,
        exclude_ids: Collection[str] = (),
    ) -> list[DirectoryRecord]:
        """Records where any field matches any of its patterns (OR semantics).

        Records in ``exclude_ids`` are skipped before ``limit`` is applied.
        """
        return self.search(kind, [field_patterns], limit=limit, exclude_ids=exclude_ids)

    def search(
        self,
        kind: RecordKind,
        clauses: Sequence[FieldPatterns] = (),
        *,
        skip: int = 0,
        limit: int | None = None,
        exclude_ids: Collection[str] = (),
    ) -> list[DirectoryRecord]:
        """Records matching every clause; fields inside a clause are ORed."""
        if limit is not None and limit <= 0:
            return []
        compiled = self._compile_clauses(kind, clauses)

        results: list[DirectoryRecord] = []
        skipped = 0
        for record in self._select(kind):
            if record.id in exclude_ids:
                continue
            if not all(self._matches(record, clause) for clause in compiled):
                continue
            if skipped < skip:
                skipped += 1
                continue
            results.append(record)
            if limit is not None and len(results) >= limit:
                break
        return results

    def count(self, kind: RecordKind, clauses: Sequence[FieldPatterns] = ()) -> int:
        compiled = self._compile_clauses(kind, clauses)
        if not compiled:
            return int(self._query(f"SELECT COUNT(*) FROM {kind.table}")[0][0])
        return sum(
            1 for record in self._select(kind)
            if all(self._matches(record, clause) for clause in compiled)
        )

    @staticmethod
    def _compile_clauses(
        kind: RecordKind,
        clauses: Sequence[FieldPatterns],
    ) -> list[list[tuple[str, re.Pattern[str]]]]:
        compiled: list[list[tuple[str, re.Pattern[str]]]] = []
        for clause in clauses:
            pairs: list[tuple[str, re.Pattern[str]]] = []
            for field, spec in clause.items():
                if field not in kind.fields:
                    raise ValueError(f"Unknown field for {kind.table}: {field}")
                if spec is None:
                    continue
                patterns = [spec] if isinstance(spec, re.Pattern) else list(spec)
                pairs.extend((field, p) for p in patterns if p is not None)
            # A clause whose patterns are all absent places no constraint
            if pairs:
                compiled.append(pairs)
        return compiled

    @staticmethod
    def _matches(record: DirectoryRecord, clause: list[tuple[str, re.Pattern[str]]]) -> bool:
        for field, pattern in clause:
            value = record.get(field)
            if value and pattern.search(value):
                return True
        return False
