"""System endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

router = APIRouter()

ENDPOINTS = ["/health", "/salones", "/laboratorios", "/buscar", "/chat"]


@router.get("/health")
async def health() -> dict[str, Any]:
    return {"ok": True, "ts": datetime.now(timezone.utc).isoformat()}


@router.get("/")
async def root() -> dict[str, Any]:
    return {"ok": True, "message": "API Chatbot UPIITA", "endpoints": ENDPOINTS}
