"""Dependency composition root."""

from __future__ import annotations

from dataclasses import dataclass

from campus_directory.application import CardRenderer, ChatService, DirectoryApplicationService
from campus_directory.data import DirectoryConfig, DirectoryDatabase
from campus_directory.resolution import SynonymTables, load_synonym_tables
from campus_directory.resolution.cascade import ResolutionCascade


@dataclass(frozen=True)
class AppContainer:
    """Wired application dependencies."""

    config: DirectoryConfig
    db: DirectoryDatabase
    tables: SynonymTables
    cascade: ResolutionCascade
    chat: ChatService
    directory: DirectoryApplicationService


_CONTAINER: AppContainer | None = None


def build_container(
    config: DirectoryConfig | None = None,
    *,
    db: DirectoryDatabase | None = None,
    tables: SynonymTables | None = None,
) -> AppContainer:
    config = config or DirectoryConfig()
    db = db or DirectoryDatabase(config.db_path)
    if config.seed_path:
        db.seed_if_empty(config.seed_path)
    tables = tables or load_synonym_tables(config.synonyms_path)
    cascade = ResolutionCascade(db, tables)
    renderer = CardRenderer(maps_dir=config.maps_dir, public_base_url=config.public_base_url)
    return AppContainer(
        config=config,
        db=db,
        tables=tables,
        cascade=cascade,
        chat=ChatService(resolver=cascade, renderer=renderer, limit=config.chat_limit),
        directory=DirectoryApplicationService(db=db),
    )


def get_container() -> AppContainer:
    global _CONTAINER
    if _CONTAINER is not None:
        return _CONTAINER
    _CONTAINER = build_container()
    return _CONTAINER
