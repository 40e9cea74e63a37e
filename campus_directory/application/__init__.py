"""Application layer services."""

from .cards import CardRenderer, building_basenames
from .chat_service import ChatRequest, ChatService, detect_kinds
from .directory_service import DirectoryApplicationService, DirectoryServiceError

__all__ = [
    "CardRenderer",
    "building_basenames",
    "ChatRequest",
    "ChatService",
    "detect_kinds",
    "DirectoryApplicationService",
    "DirectoryServiceError",
]
