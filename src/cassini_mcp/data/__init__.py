"""Observation data access."""

from cassini_mcp.data.errors import RepositoryError
from cassini_mcp.data.models import Observation
from cassini_mcp.data.repository import (
    InMemoryObservationRepository,
    ObservationRepository,
    SqliteObservationRepository,
    load_observations,
)

__all__ = [
    "InMemoryObservationRepository",
    "Observation",
    "ObservationRepository",
    "RepositoryError",
    "SqliteObservationRepository",
    "load_observations",
]
