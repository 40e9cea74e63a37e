"""Shared fixtures: a seeded temporary directory database and synonym tables."""

from __future__ import annotations

import pytest

from campus_directory.data import DirectoryDatabase, RecordKind
from campus_directory.resolution import SynonymTables

ROOMS = [
    {"_id": "r125", "numero": "125", "nombre": "Salón 125", "edificio": "Edificio 1", "piso": "1"},
    {
        "_id": "r126",
        "numero": "126",
        "nombre": "Salón 126",
        "edificio": "Edificio 1",
        "piso": "1",
        "ubicacion": "Junto a la escalera",
    },
    {"_id": "r201", "numero": "201", "nombre": "Salon 201", "edificio": "Edificio 2", "piso": "2"},
    {
        "_id": "rL320",
        "numero": "L320",
        "nombre": "Aula L320",
        "edificio": "Edificio Central",
        "piso": "3",
        "mapa_url": "https://drive.google.com/file/d/abc123/view?usp=sharing",
    },
]

LABS = [
    {
        "_id": "lTele1",
        "codigo": "LT-1",
        "nombre": "Laboratorio de Telemática I",
        "edificio": "Edificio Pesados",
        "piso": "1",
    },
    {
        "_id": "lTele2",
        "codigo": "LT-2",
        "nombre": "Laboratorio de Telemática II",
        "edificio": "Edificio Pesados",
        "piso": "2",
    },
    {"_id": "lSC5", "codigo": "SC5", "nombre": "Sala de Cómputo 5", "edificio": "Edificio 3", "piso": "1"},
    {"_id": "lSD", "codigo": "SD-1", "nombre": "Laboratorio de Sistemas Digitales", "edificio": "Edificio 4", "piso": "2"},
    {"_id": "lSD2", "codigo": "SD-2", "nombre": "Laboratorio de Sistemas Digitales II", "edificio": "Edificio 4", "piso": "2"},
    {"_id": "lL325", "codigo": "L-325", "nombre": "Laboratorio de Bioelectrónica", "edificio": "Edificio 2", "piso": "3"},
]


@pytest.fixture(scope="session")
def tables():
    return SynonymTables.default()


@pytest.fixture
def directory_db(tmp_path):
    db = DirectoryDatabase(tmp_path / "directory.duckdb")
    db.insert_records(RecordKind.ROOM, ROOMS)
    db.insert_records(RecordKind.LAB, LABS)
    yield db
    db.close()
