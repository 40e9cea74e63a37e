"""Configuration for the directory store and reply rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path

_DEFAULT_DB_PATH = Path("data/directory.duckdb")
_DEFAULT_MAPS_DIR = Path("frontend/public/mapas")
DEFAULT_PUBLIC_BASE_URL = "http://localhost:3000"


def _optional_path(env_var: str) -> Path | None:
    explicit = os.getenv(env_var)
    return Path(explicit) if explicit else None


@dataclass(frozen=True)
class DirectoryConfig:
    db_path: Path = field(default_factory=lambda: Path(os.getenv("DIRECTORY_DB_PATH", str(_DEFAULT_DB_PATH))))
    maps_dir: Path = field(default_factory=lambda: Path(os.getenv("MAPAS_DIR", str(_DEFAULT_MAPS_DIR))))
    public_base_url: str = field(
        default_factory=lambda: os.getenv("PUBLIC_BASE_URL", DEFAULT_PUBLIC_BASE_URL).rstrip("/")
    )
    chat_limit: int = field(default_factory=lambda: int(os.getenv("CHAT_RESULT_LIMIT", "5")))
    synonyms_path: Path | None = field(default_factory=lambda: _optional_path("DIRECTORY_SYNONYMS_PATH"))
    seed_path: Path | None = field(default_factory=lambda: _optional_path("DIRECTORY_SEED_PATH"))
