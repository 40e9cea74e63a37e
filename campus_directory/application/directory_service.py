"""Application service for catalogue listing, lookup and mixed search."""

from __future__ import annotations

import math
import re
from typing import Any

from campus_directory.data import DirectoryDatabase, FieldPatterns, RecordKind
from campus_directory.resolution.codes import expand_variants, extract_code
from campus_directory.resolution.normalizer import like_regex

_RECORD_ID_RE = re.compile(r"[A-Za-z0-9_-]{1,64}")

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 50


class DirectoryServiceError(RuntimeError):
    """Raised for requests the directory cannot serve; carries an HTTP status."""

    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


def capped_limit(value: int | None, *, default: int, maximum: int) -> int:
    if value is None:
        return default
    return min(max(int(value), 1), maximum)


class DirectoryApplicationService:
    def __init__(self, *, db: DirectoryDatabase) -> None:
        self._db = db

    def _paginate(
        self,
        kind: RecordKind,
        clauses: list[FieldPatterns],
        page: int | None,
        limit: int | None,
    ) -> dict[str, Any]:
        limit = capped_limit(limit, default=DEFAULT_PAGE_SIZE, maximum=MAX_PAGE_SIZE)
        page = max(int(page or 1), 1)
        total = self._db.count(kind, clauses)
        data = self._db.search(kind, clauses, skip=(page - 1) * limit, limit=limit)
        return {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": math.ceil(total / limit),
            "data": [record.to_dict() for record in data],
        }

    def list_rooms(
        self,
        *,
        nombre: str | None = None,
        numero: str | None = None,
        edificio: str | None = None,
        piso: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        if nombre:
            code = extract_code(nombre)
            if code:
                data = self._db.find_by_exact_names(RecordKind.ROOM, expand_variants(code))
                return {
                    "page": 1,
                    "limit": len(data) or DEFAULT_PAGE_SIZE,
                    "total": len(data),
                    "totalPages": 1,
                    "data": [record.to_dict() for record in data],
                }

        clauses: list[FieldPatterns] = [
            {"nombre": like_regex(nombre)},
            {"numero": like_regex(numero)},
            {"edificio": like_regex(edificio)},
            {"piso": like_regex(piso)},
        ]
        return self._paginate(RecordKind.ROOM, clauses, page, limit)

    def list_labs(
        self,
        *,
        q: str | None = None,
        edificio: str | None = None,
        piso: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        term = like_regex(q)
        clauses: list[FieldPatterns] = [
            {"nombre": term, "codigo": term},
            {"edificio": like_regex(edificio)},
            {"piso": like_regex(piso)},
        ]
        return self._paginate(RecordKind.LAB, clauses, page, limit)

    def get_record(self, kind: RecordKind, record_id: str) -> dict[str, Any]:
        if not _RECORD_ID_RE.fullmatch(record_id or ""):
            raise DirectoryServiceError("ID inválido", status_code=400)
        record = self._db.get(kind, record_id)
        if record is None:
            raise DirectoryServiceError("No encontrado", status_code=404)
        return record.to_dict()

    def search_mixed(self, *, texto: str | None, limit: int | None = None) -> dict[str, Any]:
        """Containment search over both kinds, rooms first."""
        text = (texto or "").strip()
        limit = capped_limit(limit, default=DEFAULT_SEARCH_LIMIT, maximum=MAX_SEARCH_LIMIT)
        if not text:
            return {"total": 0, "data": []}

        rx = like_regex(text)
        found: list[dict[str, Any]] = []
        for kind in (RecordKind.ROOM, RecordKind.LAB):
            patterns = {field: rx for field in (kind.code_field, "nombre", "edificio", "piso")}
            found.extend(r.to_dict() for r in self._db.find_by_pattern(kind, patterns, limit))

        return {"total": len(found), "data": found[:limit]}
