"""Tests for the composition root."""

import json

from campus_directory.bootstrap import build_container
from campus_directory.data import DirectoryConfig, RecordKind


def _config(tmp_path, seed_path=None):
    return DirectoryConfig(
        db_path=tmp_path / "directory.duckdb",
        maps_dir=tmp_path / "mapas",
        public_base_url="http://test",
        chat_limit=5,
        synonyms_path=None,
        seed_path=seed_path,
    )


def test_build_container_seeds_empty_store(tmp_path, tables):
    seed = tmp_path / "seed.json"
    seed.write_text(
        json.dumps({
            "laboratorios": [
                {"_id": "sc5", "codigo": "SC5", "nombre": "Sala de Cómputo 5", "edificio": "Edificio 3", "piso": "1"},
            ],
        }),
        encoding="utf-8",
    )

    container = build_container(_config(tmp_path, seed), tables=tables)
    try:
        assert [r.id for r in container.cascade.resolve(RecordKind.LAB, "sc5")] == ["sc5"]
    finally:
        container.db.close()


def test_build_container_without_seed_leaves_store_untouched(tmp_path, tables):
    container = build_container(_config(tmp_path), tables=tables)
    try:
        assert container.db.count(RecordKind.LAB) == 0
    finally:
        container.db.close()
