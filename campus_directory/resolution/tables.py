"""Synonym source tables for rooms and laboratories.

Variants only need to differ after normalization: case and accents are
folded when the index is built, so "Electrónica 3" and "electronica 3" are
the same key.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

from .synonyms import SynonymIndex, build_synonym_index, numbered_synonyms

logger = logging.getLogger(__name__)

ROOM_NUMBERS = [
    100, 102, 103, 104, 105, 106, 120, 121, 122, 123, 124, 125, 126,
    201, 202, 211, 221, 222, 223, 224, 225, 226,
    315, 322, 323, 324, 325, 326,
    422, 423, 424, 425, 426,
]

ROOM_L_CODES = ["L320", "L325"]

ROOM_NUMBER_VARIANTS = ["{n}", "salon {n}", "aula {n}", "salon{n}", "aula{n}"]

ROOM_L_CODE_VARIANTS = [
    "{n}", "aula {n}", "salon {n}", "sala {n}", "aula{n}", "salon{n}",
]

COMPUTER_ROOM_RANGE = range(1, 21)
COMPUTER_ROOM_VARIANTS = ["sala de computo {n}", "computo {n}", "sc{n}", "sc {n}"]

STAFF_ROOM_RANGE = range(1, 14)
STAFF_ROOM_VARIANTS = [
    "sala de profes {n}", "sala de profesores {n}", "profesores {n}", "profes {n}",
]

LAB_SYNONYMS: dict[str, list[str]] = {
    "Sala multimedia": ["sala de multimedia", "multimedia", "sala de multi", "multi"],
    "Biblioteca": ["la biblioteca", "biblioteca"],
    "CELEX": ["celex"],
    "Sala de alumnos de Posgrado": ["sala de alumnos de posgrado", "alumnos posgrado"],
    "Red de Género": ["red de genero", "genero"],
    "Red de Expertos Posgrado": ["red de expertos posgrado", "posgrado red de expertos"],
    "Laboratorio de Desarrollo Tecnológico": [
        "desarrollo tecnologico", "lab de desarrollo tecnologico",
        "laboratorio de desarrollo tecnologico",
    ],
    "Laboratorio de Realidad Extendida": [
        "laboratorio de realidad extendida", "lab de realidad extendida", "realidad extendida",
    ],
    "Laboratorio CIM": ["lab cim", "cim", "laboratorio cim"],
    "Laboratorio de Electrónica 3": [
        "electronica 3", "electronica iii", "lab de electronica 3", "lab de electronica iii",
    ],
    "Laboratorio de Robótica Avanzada y Televisión Interactiva": [
        "lab de robotica avanzada", "robotica avanzada", "laboratorio de robotica avanzada",
        "television interactiva",
    ],
    "Laboratorio de Síntesis Química Posgrado": [
        "lab de sintesis", "lab de sintesis quimica posgrado", "laboratorio de sintesis",
        "sintesis quimica posgrado",
    ],
    "Laboratorio de Imagen y Procesamiento de Señales": [
        "imagen y procesamiento de senales", "laboratorio de imagen", "procesamiento de senales",
        "laboratorio de imagen y procesamiento de senales",
    ],
    "Laboratorio de Fenómenos Cuánticos": [
        "fenomenos cuanticos", "lab de fenomenos cuanticos", "laboratorio de fenomenos cuanticos",
    ],
    "Laboratorio de Fototérmicas": [
        "fototermicas", "lab de fototermicas", "laboratorio de fototermicas",
    ],
    "Laboratorio de Nanomateriales y Nanotecnología": [
        "lab de nanomateriales", "nanomateriales y nanotecnologia",
        "laboratorio de nanomateriales y nanotecnologia", "lab de nanomateriales y nanotecnologia",
        "laboratorio de nanomateriales",
    ],
    "Trabajo Terminal Mecatrónica": [
        "laboratorio de trabajo terminal meca", "tt meca", "trabajo terminal mecatronica",
        "tt mecatronica", "laboratorio de trabajo terminal mecatronica",
        "laboratorio de tt mecatronica", "laboratorio de tt meca",
    ],
    "Laboratorio de Sistemas Complejos": [
        "lab de sistemas complejos", "sistemas complejos", "laboratorio de sistemas complejos",
    ],
    "Laboratorio de Química y Biología": [
        "lab de quimica", "quimica y biologia", "laboratorio de quimica y biologia",
        "lab de quimica y biologia", "laboratorio de quimica",
    ],
    "Laboratorio de Física": ["fisica", "lab de fisica", "laboratorio de fisica"],
    "Laboratorio de Cómputo Móvil": [
        "computo movil", "lab de computo movil", "laboratorio de computo movil",
    ],
    "Laboratorio de Telemática II": [
        "lab de telematica ii", "tele 2", "tele ii", "telematica 2", "telematica ii",
        "laboratorio de telematica ii",
    ],
    "Laboratorio de Telemática I": [
        "lab de telematica 1", "lab de telematica i", "tele 1", "tele i", "telematica 1",
        "telematica i", "laboratorio de telematica i",
    ],
    "Laboratorio de Electrónica II": [
        "electronica 2", "electronica ii", "lab de electronica 2", "lab de electronica ii",
    ],
    "Laboratorio de Sistemas Digitales II": [
        "laboratorio de sistemas digitales 2", "sd 2", "sd ii", "sd2", "sdii", "sd-2",
        "sd-ii", "sistemas digitales ii", "sistemas digitales 2",
        "laboratorio de sistemas digitales ii",
    ],
    "Laboratorio de Bioelectrónica": [
        "bioelectronica", "lab de bioelectronica", "laboratorio de bioelectronica",
    ],
    "Laboratorio de Robótica de Competencias y Agentes Inteligentes": [
        "agentes inteligentes", "robotica de competencias",
        "robotica de competencias y agentes inteligentes",
        "laboratorio de robotica de competencias y agentes inteligentes",
    ],
    "Laboratorio de Electrónica I": [
        "electronica 1", "electronica i", "lab de electronica 1", "lab de electronica i",
    ],
    "Laboratorio de Sistemas Digitales": [
        "laboratorio de sistemas digitales", "sd", "sistemas digitales",
    ],
    "Laboratorio de Telecomunicaciones": [
        "telecomunicaciones", "lab de telecom", "telecom", "laboratorio de telecom",
        "laboratorio de telecomunicaciones",
    ],
    "Laboratorio de Trabajo Terminal Telemática": [
        "laboratorio de trabajo terminal telematica", "lab tt tele", "lab ttt", "ttt",
        "tt tele", "tt telematica", "lab tt telematica",
        "proyecto terminal tele", "proyecto terminal telematica",
        "ptt", "p.t.t", "pt tele", "pt telematica",
        "trabajo terminal telematica", "proy terminal tele", "proy terminal telematica",
    ],
    "Laboratorio de Robótica Industrial": [
        "lab de robotica industrial", "robotica industrial", "laboratorio de robotica industrial",
    ],
    "Laboratorio de Manufactura Básica": [
        "lab de manufactura basica", "manufactura basica", "laboratorio de manufactura basica",
    ],
    "Laboratorio de Manufactura Avanzada": [
        "lab de manufactura avanzada", "manufactura avanzada", "laboratorio de manufactura avanzada",
    ],
    "Laboratorio de Meteorología": [
        "lab de meteorologia", "meteorologia", "laboratorio de meteorologia",
    ],
    "Laboratorio de Red de Expertos": [
        "lab de red de expertos", "red de expertos", "laboratorio de red de expertos",
    ],
    "Trabajo Terminal": ["laboratorio de tt", "laboratorio de trabajo terminal", "tt"],
    "Laboratorio de Manufactura Asistida por Computadora de la Red de Expertos": [
        "lab de manufactura asistida", "mac", "manufactura asistida",
        "manufactura asistida por computadora de la red de expertos",
        "laboratorio de manufactura asistida",
    ],
    "Laboratorio de Cálculo y Simulación 2": [
        "calculo y simulacion 2", "lab de calculo y simulacion 2",
        "laboratorio de calculo y simulacion 2",
    ],
    "Laboratorio de Cálculo y Simulación 1": [
        "calculo y simulacion 1", "lab de calculo y simulacion 1",
        "laboratorio de calculo y simulacion 1",
    ],
    "Laboratorio de Biomecánica": [
        "biomecanica", "lab de biomecanica", "laboratorio de biomecanica",
    ],
    "Laboratorio de Neumática y Control de Procesos": [
        "laboratorio de neumatica y control de procesos", "laboratorio de neumatica",
        "neumatica y control de procesos", "lab de neumatica y control de procesos",
    ],
    "Sala de profesores telemática": [
        "sala de profes telematica", "profesores telematica", "profes telematica",
        "sala de profesores tele", "sala de profes tele", "profesores tele", "profes tele",
    ],
}


def build_room_synonyms() -> dict[str, list[str]]:
    table = numbered_synonyms("Salón {n}", ROOM_NUMBERS, ROOM_NUMBER_VARIANTS)
    table.update(numbered_synonyms("Aula {n}", ROOM_L_CODES, ROOM_L_CODE_VARIANTS))
    return table


def build_lab_synonyms() -> dict[str, list[str]]:
    table = {canonical: list(synonyms) for canonical, synonyms in LAB_SYNONYMS.items()}
    table.update(numbered_synonyms("Sala de profesores {n}", STAFF_ROOM_RANGE, STAFF_ROOM_VARIANTS))
    table.update(numbered_synonyms("Sala de Cómputo {n}", COMPUTER_ROOM_RANGE, COMPUTER_ROOM_VARIANTS))
    return table


@dataclass(frozen=True)
class SynonymTables:
    """Per-kind synonym indexes, built once at startup and shared read-only."""

    rooms: SynonymIndex
    labs: SynonymIndex

    @classmethod
    def from_mappings(
        cls,
        *,
        rooms: Mapping[str, Sequence[str]],
        labs: Mapping[str, Sequence[str]],
    ) -> "SynonymTables":
        return cls(
            rooms=build_synonym_index(rooms, name="rooms"),
            labs=build_synonym_index(labs, name="labs"),
        )

    @classmethod
    def default(cls) -> "SynonymTables":
        return cls.from_mappings(rooms=build_room_synonyms(), labs=build_lab_synonyms())


def load_synonym_tables(path: Path | str | None = None) -> SynonymTables:
    """Build the tables, optionally replacing one or both source tables.

    The override file is JSON: ``{"rooms": {canonical: [synonyms]},
    "labs": {...}}``. A missing section keeps the built-in table.
    """
    if not path:
        return SynonymTables.default()

    override_path = Path(path)
    raw: dict[str, Any] = json.loads(override_path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Synonym override must be a JSON object: {override_path}")

    logger.info("[Synonyms] Loading overrides from %s (sections: %s)", override_path, sorted(raw))
    return SynonymTables.from_mappings(
        rooms=raw.get("rooms") or build_room_synonyms(),
        labs=raw.get("labs") or build_lab_synonyms(),
    )
