"""Chat reply cards for directory records."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Sequence

from campus_directory.data import DirectoryRecord
from campus_directory.resolution.normalizer import normalize

MAP_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp")

_DRIVE_SHARE_RE = re.compile(r"https://drive\.google\.com/file/d/([^/]+)", re.IGNORECASE)
_CENTRAL_RE = re.compile(r"\bcentral\b")
_PESADOS_RE = re.compile(r"\bpesados?\b")
_NUMBERED_BUILDING_RE = re.compile(r"\b(?:edificio\s*)?([1-4])\b")

MISSING_BUILDING = "Edificio s/d"
MISSING_FLOOR = "Piso s/d"
MISSING_LOCATION = "s/d"


def building_basenames(text: str | None) -> list[str]:
    """Map-image basenames a building description may refer to."""
    folded = normalize(text)
    candidates: list[str] = []
    if _CENTRAL_RE.search(folded):
        candidates.append("EdificioCentral")
    if _PESADOS_RE.search(folded):
        candidates.append("EdificioPesados")
    match = _NUMBERED_BUILDING_RE.search(folded)
    if match:
        candidates.append(f"Edificio{match.group(1)}")
    return candidates


class CardRenderer:
    """Render records as ``richContent`` blocks (image + info)."""

    def __init__(self, *, maps_dir: Path | str, public_base_url: str) -> None:
        self._maps_dir = Path(maps_dir)
        self._base_url = public_base_url.rstrip("/")

    def _map_url(self, filename: str) -> str:
        return f"{self._base_url}/mapas/{filename}"

    def first_existing_map(self, basenames: Sequence[str]) -> str:
        for base in basenames:
            for ext in MAP_EXTENSIONS:
                if (self._maps_dir / f"{base}{ext}").is_file():
                    return self._map_url(f"{base}{ext}")
        return ""

    def to_direct_image(self, url: str | None) -> str:
        """Turn a stored map reference into a URL a chat client can display."""
        if not url:
            return ""
        if url.startswith("local:"):
            return self._map_url(url[len("local:"):])
        if url.startswith("mapas/"):
            return f"{self._base_url}/{url}"
        match = _DRIVE_SHARE_RE.search(url)
        if match:
            return f"https://drive.google.com/uc?export=view&id={match.group(1)}"
        return url

    def pick_image(self, record: DirectoryRecord) -> str:
        basenames = [
            *building_basenames(record.edificio),
            *building_basenames(record.ubicacion),
            *building_basenames(record.nombre or record.code),
        ]
        local = self.first_existing_map(list(dict.fromkeys(basenames)))
        if local:
            return local
        return self.to_direct_image(record.mapa_url)

    @staticmethod
    def title(record: DirectoryRecord) -> str:
        return record.nombre or record.code or record.kind.label

    def render(self, record: DirectoryRecord) -> list[dict[str, Any]]:
        title = self.title(record)
        blocks: list[dict[str, Any]] = []
        image_url = self.pick_image(record)
        if image_url:
            blocks.append({"type": "image", "rawUrl": image_url, "accessibilityText": title})
        blocks.append({
            "type": "info",
            "title": f"Nombre: {title}",
            "subtitle": (
                f"Edificio: {record.edificio or MISSING_BUILDING}\n"
                f"Piso: {record.piso or MISSING_FLOOR}\n"
                f"Ubicación: {record.ubicacion or MISSING_LOCATION}"
            ),
        })
        return blocks

    def render_summary(self, records: Sequence[DirectoryRecord]) -> str:
        lines = [f"Encontré {len(records)} resultado(s):"]
        lines.extend(self.title(record) for record in records)
        return "\n".join(lines)
