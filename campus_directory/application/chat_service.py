"""Application service for chat-style directory queries."""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import BaseModel, Field

from campus_directory.data import DirectoryRecord, RecordKind
from campus_directory.resolution.cascade import DEFAULT_CHAT_BUDGET, Resolver
from campus_directory.resolution.normalizer import normalize

from .cards import CardRenderer
from .directory_service import DirectoryServiceError

logger = logging.getLogger(__name__)

NO_MATCH_TEXT = "No encontré coincidencias para tu consulta."
MAX_CARDS = 5

_ROOM_HINT_RE = re.compile(r"\b(aula|salon|salones)\b")
_LAB_HINT_RE = re.compile(r"\b(lab|laboratorio|laboratorios)\b")
_BARE_NUMBER_QUERY_RE = re.compile(r"^\s*\d{2,4}\s*$")


class ChatRequest(BaseModel):
    """Chat request schema."""

    text: str = Field(default="", description="Free-text user query")


def detect_kinds(text: str) -> tuple[RecordKind, ...]:
    """Pick which record kinds a query is about; both when nothing hints either way."""
    folded = normalize(text)
    if _ROOM_HINT_RE.search(folded):
        return (RecordKind.ROOM,)
    if _LAB_HINT_RE.search(folded):
        return (RecordKind.LAB,)
    if _BARE_NUMBER_QUERY_RE.match(text):
        return (RecordKind.ROOM,)
    return (RecordKind.ROOM, RecordKind.LAB)


class ChatService:
    def __init__(
        self,
        *,
        resolver: Resolver,
        renderer: CardRenderer,
        limit: int = DEFAULT_CHAT_BUDGET,
    ) -> None:
        self._resolver = resolver
        self._renderer = renderer
        self._limit = limit

    def find(self, text: str) -> list[DirectoryRecord]:
        results: list[DirectoryRecord] = []
        for kind in detect_kinds(text):
            results.extend(self._resolver.resolve(kind, text, self._limit))
        return results

    def reply(self, request: ChatRequest) -> dict[str, Any]:
        query = request.text.strip()
        if not query:
            raise DirectoryServiceError('Falta "text"', status_code=400)

        results = self.find(query)
        logger.info("[Chat] %r → %s result(s)", query, len(results))
        if not results:
            return {"messages": [{"role": "bot", "text": NO_MATCH_TEXT}]}

        rich_content: list[dict[str, Any]] = []
        for record in results[:MAX_CARDS]:
            rich_content.extend(self._renderer.render(record))

        return {
            "messages": [
                {"role": "bot", "text": self._renderer.render_summary(results)},
                {"role": "bot", "payload": {"richContent": [rich_content]}},
            ]
        }
