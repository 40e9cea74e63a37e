"""Tests for chat card rendering."""

import pytest

from campus_directory.application.cards import CardRenderer, building_basenames
from campus_directory.data import DirectoryRecord, RecordKind


@pytest.fixture
def renderer(tmp_path):
    maps = tmp_path / "mapas"
    maps.mkdir()
    (maps / "Edificio3.png").write_bytes(b"")
    return CardRenderer(maps_dir=maps, public_base_url="http://test/")


def _lab(**overrides):
    fields = {"id": "x", "kind": RecordKind.LAB, "code": "SC5", "nombre": "Sala de Cómputo 5"}
    fields.update(overrides)
    return DirectoryRecord(**fields)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Edificio Central", ["EdificioCentral"]),
        ("edificio de pesados", ["EdificioPesados"]),
        ("Edificio 3", ["Edificio3"]),
        ("Planta baja, junto al 2", ["Edificio2"]),
        ("Edificio 7", []),
        (None, []),
    ],
)
def test_building_basenames(text, expected):
    assert building_basenames(text) == expected


@pytest.mark.parametrize(
    "url, expected",
    [
        ("local:Edificio1.png", "http://test/mapas/Edificio1.png"),
        ("mapas/Edificio2.jpg", "http://test/mapas/Edificio2.jpg"),
        (
            "https://drive.google.com/file/d/abc123/view?usp=sharing",
            "https://drive.google.com/uc?export=view&id=abc123",
        ),
        ("https://example.org/plano.png", "https://example.org/plano.png"),
        ("", ""),
        (None, ""),
    ],
)
def test_to_direct_image(renderer, url, expected):
    assert renderer.to_direct_image(url) == expected


def test_local_map_wins_over_stored_url(renderer):
    record = _lab(edificio="Edificio 3", mapa_url="https://example.org/plano.png")
    assert renderer.pick_image(record) == "http://test/mapas/Edificio3.png"


def test_stored_url_used_when_no_local_map(renderer):
    record = _lab(edificio="Edificio Central", mapa_url="local:Central.webp")
    assert renderer.pick_image(record) == "http://test/mapas/Central.webp"


def test_render_image_and_info_blocks(renderer):
    record = _lab(edificio="Edificio 3", piso="1", ubicacion="Ala norte")

    blocks = renderer.render(record)

    assert blocks == [
        {
            "type": "image",
            "rawUrl": "http://test/mapas/Edificio3.png",
            "accessibilityText": "Sala de Cómputo 5",
        },
        {
            "type": "info",
            "title": "Nombre: Sala de Cómputo 5",
            "subtitle": "Edificio: Edificio 3\nPiso: 1\nUbicación: Ala norte",
        },
    ]


def test_render_without_image_uses_placeholders(renderer):
    blocks = renderer.render(_lab(nombre="", code=""))

    assert len(blocks) == 1
    assert blocks[0]["title"] == "Nombre: Laboratorio"
    assert blocks[0]["subtitle"] == "Edificio: Edificio s/d\nPiso: Piso s/d\nUbicación: s/d"


def test_render_summary(renderer):
    summary = renderer.render_summary([_lab(), _lab(id="y", nombre="Laboratorio CIM")])
    assert summary == "Encontré 2 resultado(s):\nSala de Cómputo 5\nLaboratorio CIM"
