from .chat import router as chat_router
from .directory import router as directory_router
from .system import router as system_router

__all__ = [
    "chat_router",
    "directory_router",
    "system_router",
]
