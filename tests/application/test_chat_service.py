"""Tests for the chat application service."""

import pytest

from campus_directory.application import (
    CardRenderer,
    ChatRequest,
    ChatService,
    DirectoryServiceError,
    detect_kinds,
)
from campus_directory.application.chat_service import NO_MATCH_TEXT
from campus_directory.data import DirectoryRecord, RecordKind


class FakeResolver:
    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def resolve(self, kind, text, budget=5):
        self.calls.append((kind, text, budget))
        return list(self.results.get(kind, []))


def _record(kind, n):
    return DirectoryRecord(id=f"{kind.value}{n}", kind=kind, code=str(n), nombre=f"{kind.label} {n}")


@pytest.fixture
def renderer(tmp_path):
    return CardRenderer(maps_dir=tmp_path / "missing", public_base_url="http://test")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("aula 126", (RecordKind.ROOM,)),
        ("Salón de clases", (RecordKind.ROOM,)),
        ("lab de fisica", (RecordKind.LAB,)),
        ("126", (RecordKind.ROOM,)),
        ("telematica", (RecordKind.ROOM, RecordKind.LAB)),
        ("sc5", (RecordKind.ROOM, RecordKind.LAB)),
    ],
)
def test_detect_kinds(text, expected):
    assert detect_kinds(text) == expected


def test_empty_text_is_rejected(renderer):
    service = ChatService(resolver=FakeResolver(), renderer=renderer)

    with pytest.raises(DirectoryServiceError) as exc_info:
        service.reply(ChatRequest(text="   "))

    assert exc_info.value.status_code == 400


def test_no_match_reply(renderer):
    resolver = FakeResolver()
    service = ChatService(resolver=resolver, renderer=renderer, limit=5)

    reply = service.reply(ChatRequest(text="  cafeteria "))

    assert reply == {"messages": [{"role": "bot", "text": NO_MATCH_TEXT}]}
    assert resolver.calls == [
        (RecordKind.ROOM, "cafeteria", 5),
        (RecordKind.LAB, "cafeteria", 5),
    ]


def test_reply_lists_every_result_but_renders_first_five(renderer):
    resolver = FakeResolver({
        RecordKind.ROOM: [_record(RecordKind.ROOM, n) for n in range(4)],
        RecordKind.LAB: [_record(RecordKind.LAB, n) for n in range(3)],
    })
    service = ChatService(resolver=resolver, renderer=renderer)

    messages = service.reply(ChatRequest(text="edificio 1"))["messages"]

    summary = messages[0]["text"].split("\n")
    assert summary[0] == "Encontré 7 resultado(s):"
    assert summary[1:] == ["Salón 0", "Salón 1", "Salón 2", "Salón 3", "Laboratorio 0", "Laboratorio 1", "Laboratorio 2"]

    (cards,) = messages[1]["payload"]["richContent"]
    titles = [block["title"] for block in cards if block["type"] == "info"]
    assert titles == ["Nombre: Salón 0", "Nombre: Salón 1", "Nombre: Salón 2", "Nombre: Salón 3", "Nombre: Laboratorio 0"]


def test_room_hint_skips_labs(renderer):
    resolver = FakeResolver({RecordKind.ROOM: [_record(RecordKind.ROOM, 126)]})
    service = ChatService(resolver=resolver, renderer=renderer, limit=3)

    messages = service.reply(ChatRequest(text="salon 126"))["messages"]

    assert [call[0] for call in resolver.calls] == [RecordKind.ROOM]
    assert resolver.calls[0][2] == 3
    assert messages[0]["text"] == "Encontré 1 resultado(s):\nSalón 126"
