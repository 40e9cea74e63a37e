"""HTTP application entrypoint (composition-only)."""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from campus_directory.bootstrap import get_container
from campus_directory.web.routers import chat_router, directory_router, system_router

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

container = get_container()

_cors_origins_raw = os.getenv("CORS_ALLOWED_ORIGINS", "*")
_cors_origins = [o.strip() for o in _cors_origins_raw.split(",") if o.strip()]

app = FastAPI(title="Campus Directory API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system_router)
app.include_router(directory_router)
app.include_router(chat_router)

if container.config.maps_dir.is_dir():
    logger.info("Serving /mapas from %s", container.config.maps_dir.resolve())
    app.mount("/mapas", StaticFiles(directory=container.config.maps_dir), name="mapas")
else:
    logger.warning("Maps directory %s not found; /mapas is disabled", container.config.maps_dir)


def run() -> None:
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "3000")),
    )


__all__ = ["app", "run"]
