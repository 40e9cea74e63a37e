"""Room and laboratory catalogue endpoints."""

from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import APIRouter, HTTPException

from campus_directory.application import DirectoryServiceError
from campus_directory.bootstrap import get_container
from campus_directory.data import RecordKind, StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


def _serve(name: str, call: Callable[[], dict[str, Any]]) -> dict[str, Any]:
    try:
        return call()
    except DirectoryServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    except StoreError as exc:
        logger.exception("Error in %s", name)
        raise HTTPException(status_code=500, detail="Internal server error") from exc


@router.get("/salones")
async def list_rooms(
    nombre: str | None = None,
    numero: str | None = None,
    edificio: str | None = None,
    piso: str | None = None,
    page: int = 1,
    limit: int = 50,
) -> dict[str, Any]:
    return _serve("list_rooms", lambda: get_container().directory.list_rooms(
        nombre=nombre, numero=numero, edificio=edificio, piso=piso, page=page, limit=limit,
    ))


@router.get("/salones/{record_id}")
async def get_room(record_id: str) -> dict[str, Any]:
    return _serve("get_room", lambda: get_container().directory.get_record(RecordKind.ROOM, record_id))


@router.get("/laboratorios")
async def list_labs(
    q: str | None = None,
    nombre: str | None = None,
    edificio: str | None = None,
    piso: str | None = None,
    page: int = 1,
    limit: int = 50,
) -> dict[str, Any]:
    return _serve("list_labs", lambda: get_container().directory.list_labs(
        q=q or nombre, edificio=edificio, piso=piso, page=page, limit=limit,
    ))


@router.get("/laboratorios/{record_id}")
async def get_lab(record_id: str) -> dict[str, Any]:
    return _serve("get_lab", lambda: get_container().directory.get_record(RecordKind.LAB, record_id))


@router.get("/buscar")
async def search(texto: str = "", limit: int = 10) -> dict[str, Any]:
    return _serve("search", lambda: get_container().directory.search_mixed(texto=texto, limit=limit))
