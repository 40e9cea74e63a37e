"""Directory record types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence


class RecordKind(str, Enum):
    """The two stored record kinds and their per-kind store metadata."""

    ROOM = "salon"
    LAB = "laboratorio"

    @property
    def table(self) -> str:
        return "salones" if self is RecordKind.ROOM else "laboratorios"

    @property
    def code_field(self) -> str:
        return "numero" if self is RecordKind.ROOM else "codigo"

    @property
    def order_by(self) -> tuple[str, ...]:
        if self is RecordKind.ROOM:
            return ("numero", "nombre")
        return ("nombre",)

    @property
    def label(self) -> str:
        return "Salón" if self is RecordKind.ROOM else "Laboratorio"

    @property
    def fields(self) -> tuple[str, ...]:
        return (self.code_field, "nombre", "edificio", "piso", "ubicacion", "mapa_url")


@dataclass(frozen=True)
class DirectoryRecord:
    """A stored room or laboratory."""

    id: str
    kind: RecordKind
    code: str
    nombre: str
    edificio: str = ""
    piso: str = ""
    ubicacion: str | None = None
    mapa_url: str | None = None

    @classmethod
    def from_row(cls, kind: RecordKind, row: Sequence[Any]) -> "DirectoryRecord":
        record_id, code, nombre, edificio, piso, ubicacion, mapa_url = row
        return cls(
            id=str(record_id),
            kind=kind,
            code=code or "",
            nombre=nombre or "",
            edificio=edificio or "",
            piso=piso or "",
            ubicacion=ubicacion,
            mapa_url=mapa_url,
        )

    def get(self, field: str) -> str | None:
        """Read a field by its stored name (``numero``/``codigo`` map to ``code``)."""
        if field == self.kind.code_field:
            return self.code
        if field in ("nombre", "edificio", "piso", "ubicacion", "mapa_url"):
            return getattr(self, field)
        raise KeyError(field)

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "tipo": self.kind.value,
            self.kind.code_field: self.code,
            "nombre": self.nombre,
            "edificio": self.edificio,
            "piso": self.piso,
            "ubicacion": self.ubicacion,
            "mapa_url": self.mapa_url,
        }
