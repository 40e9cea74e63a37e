"""Chat endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from campus_directory.application import ChatRequest, DirectoryServiceError
from campus_directory.bootstrap import get_container
from campus_directory.data import StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat")
async def chat(request: ChatRequest | None = None) -> dict[str, Any]:
    try:
        return get_container().chat.reply(request or ChatRequest())
    except DirectoryServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    except StoreError as exc:
        logger.exception("Error in chat")
        raise HTTPException(status_code=500, detail="Internal server error") from exc
