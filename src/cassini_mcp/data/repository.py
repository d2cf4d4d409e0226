"""Observation repositories.

:class:`ObservationRepository` defines the async read protocol the tools
consume.  :class:`InMemoryObservationRepository` is a list-backed
implementation for tests and demo data; :class:`SqliteObservationRepository`
reads the ``master_plan`` table of the mission database.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml
from pydantic import ValidationError

from cassini_mcp.data.errors import RepositoryError
from cassini_mcp.data.models import Observation

logger = logging.getLogger(__name__)

_COLUMNS = tuple(Observation.model_fields)


@runtime_checkable
class ObservationRepository(Protocol):
    """Async read-only access to observations."""

    async def get_all(self) -> list[Observation]:
        """Return every observation, ordered by ``id``."""
        ...

    async def get_by_id(self, observation_id: int) -> Observation | None:
        """Return the observation with *observation_id*, or ``None``."""
        ...

    async def get_by_team(self, team: str) -> list[Observation]:
        """Return observations whose team equals *team* exactly."""
        ...

    async def get_by_target(self, target: str) -> list[Observation]:
        """Return observations whose target equals *target* exactly."""
        ...

    async def get_count(self) -> int:
        """Return the total number of observations."""
        ...


class InMemoryObservationRepository:
    """List-backed :class:`ObservationRepository`.

    Matching is exact and case-sensitive, like the SQL implementation.
    """

    def __init__(self, observations: list[Observation] | None = None) -> None:
        self._observations = sorted(observations or [], key=lambda o: o.id)

    async def get_all(self) -> list[Observation]:
        return list(self._observations)

    async def get_by_id(self, observation_id: int) -> Observation | None:
        for observation in self._observations:
            if observation.id == observation_id:
                return observation
        return None

    async def get_by_team(self, team: str) -> list[Observation]:
        return [o for o in self._observations if o.team == team]

    async def get_by_target(self, target: str) -> list[Observation]:
        return [o for o in self._observations if o.target == target]

    async def get_count(self) -> int:
        return len(self._observations)


class SqliteObservationRepository:
    """Reads observations from the ``master_plan`` table of a SQLite database.

    Each query opens its own read-only connection on a worker thread, so
    concurrent requests never share a connection.
    """

    TABLE = "master_plan"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def get_all(self) -> list[Observation]:
        rows = await self._fetch(f"SELECT {self._select()} FROM {self.TABLE} ORDER BY id")
        return [self._to_observation(r) for r in rows]

    async def get_by_id(self, observation_id: int) -> Observation | None:
        rows = await self._fetch(
            f"SELECT {self._select()} FROM {self.TABLE} WHERE id = ?",
            (observation_id,),
        )
        return self._to_observation(rows[0]) if rows else None

    async def get_by_team(self, team: str) -> list[Observation]:
        rows = await self._fetch(
            f"SELECT {self._select()} FROM {self.TABLE} WHERE team = ? ORDER BY id",
            (team,),
        )
        return [self._to_observation(r) for r in rows]

    async def get_by_target(self, target: str) -> list[Observation]:
        rows = await self._fetch(
            f"SELECT {self._select()} FROM {self.TABLE} WHERE target = ? ORDER BY id",
            (target,),
        )
        return [self._to_observation(r) for r in rows]

    async def get_count(self) -> int:
        rows = await self._fetch(f"SELECT COUNT(*) AS n FROM {self.TABLE}")
        return int(rows[0]["n"])

    @staticmethod
    def _select() -> str:
        return ", ".join(_COLUMNS)

    async def _fetch(self, sql: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        return await asyncio.to_thread(self._fetch_sync, sql, params)

    def _fetch_sync(self, sql: str, params: tuple[Any, ...]) -> list[sqlite3.Row]:
        if not self.path.is_file():
            raise RepositoryError(f"Database not found: {self.path}")
        uri = f"{self.path.resolve().as_uri()}?mode=ro"
        try:
            conn = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as exc:
            raise RepositoryError(f"Cannot open {self.path}: {exc}") from exc
        try:
            conn.row_factory = sqlite3.Row
            return conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Query failed on {self.path}: {exc}") from exc
        finally:
            conn.close()

    @staticmethod
    def _to_observation(row: sqlite3.Row) -> Observation:
        return Observation(**{key: row[key] for key in row.keys()})


def load_observations(path: str | Path) -> list[Observation]:
    """Load a list of observation records from a JSON or YAML file.

    Raises:
        RepositoryError: If the file cannot be read or does not hold a list
            of valid records.
    """
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise RepositoryError(f"Cannot read {p}: {exc}") from exc

    try:
        data: Any = json.loads(raw) if p.suffix == ".json" else yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise RepositoryError(f"Cannot parse {p}: {exc}") from exc

    if not isinstance(data, list):
        raise RepositoryError(f"{p} must contain a list of observations")

    try:
        observations = [Observation.model_validate(item) for item in data]
    except ValidationError as exc:
        raise RepositoryError(str(exc)) from exc

    logger.info("Loaded %d observations from %s", len(observations), p)
    return observations
