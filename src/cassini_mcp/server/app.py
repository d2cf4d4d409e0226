"""Wiring: repository → tools → registry → dispatcher."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from cassini_mcp.data.repository import (
    InMemoryObservationRepository,
    SqliteObservationRepository,
    load_observations,
)
from cassini_mcp.protocol.dispatcher import RequestDispatcher
from cassini_mcp.protocol.registry import ToolRegistry
from cassini_mcp.tools import register_default_tools

if TYPE_CHECKING:
    from cassini_mcp.config import Settings
    from cassini_mcp.data.repository import ObservationRepository

logger = logging.getLogger(__name__)


def build_repository(
    settings: Settings,
    *,
    db_path: Path | None = None,
    demo_file: Path | None = None,
) -> ObservationRepository:
    """Pick the observation store: demo records if given, else the SQLite file."""
    if demo_file is not None:
        return InMemoryObservationRepository(load_observations(demo_file))
    path = db_path or settings.database.path
    logger.info("Using observation database %s", path)
    return SqliteObservationRepository(path)


def build_dispatcher(settings: Settings, repository: ObservationRepository) -> RequestDispatcher:
    """Register the observation tools and return a ready dispatcher.

    The registry is fully populated here, before any request is served.
    """
    registry = ToolRegistry()
    register_default_tools(registry, repository)
    return RequestDispatcher(
        registry,
        server_name=settings.server.name,
        server_version=settings.server.version,
    )
