"""Shared fixtures: a small observation dataset wired through the full stack."""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import pytest

from cassini_mcp.data.models import Observation
from cassini_mcp.data.repository import InMemoryObservationRepository
from cassini_mcp.protocol.dispatcher import RequestDispatcher
from cassini_mcp.protocol.registry import ToolRegistry
from cassini_mcp.tools import register_default_tools

_RECORDS: list[dict[str, Any]] = [
    {
        "id": 1,
        "start_time_utc": "2004-135T12:00:00",
        "duration": "000T02:00:00",
        "date": "14-May-04",
        "team": "ISS",
        "spass_type": "Non-SPASS",
        "target": "Titan",
        "request_name": "TITANMON001",
        "library_definition": "Titan monitoring sequence",
        "title": "Titan monitoring",
        "description": "Distant Titan cloud monitoring.",
    },
    {
        "id": 2,
        "start_time_utc": "2005-001T00:00:00",
        "team": "CIRS",
        "target": "Saturn",
        "title": "Saturn thermal map",
        "description": "Mid-infrared map of Saturn.",
    },
    {
        "id": 3,
        "start_time_utc": "2005-032T06:30:00",
        "team": "ISS",
        "target": "Titan",
        "title": "Titan flyby imaging",
    },
    {
        "id": 4,
        "start_time_utc": "2005-01-15T10:00:00",
        "team": "VIMS",
        "target": "Enceladus",
        "title": "Enceladus plume spectra",
    },
    {
        "id": 5,
        "start_time_utc": "not-a-time",
        "team": "UVIS",
        "target": "Titan",
        "title": "Malformed start time",
    },
    {
        "id": 6,
        "start_time_utc": "2006-100T00:00:00",
        "team": "ISS",
        "target": "rings",
        "title": "Ring plane crossing",
    },
    {
        "id": 7,
        "start_time_utc": "2005-020T00:00:00",
        "team": "iss",
        "target": "titan",
        "title": "Lower-case names",
    },
]

Rpc = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
def observations() -> list[Observation]:
    return [Observation.model_validate(r) for r in _RECORDS]


@pytest.fixture
def repository(observations: list[Observation]) -> InMemoryObservationRepository:
    return InMemoryObservationRepository(observations)


@pytest.fixture
def registry(repository: InMemoryObservationRepository) -> ToolRegistry:
    reg = ToolRegistry()
    register_default_tools(reg, repository)
    return reg


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> RequestDispatcher:
    return RequestDispatcher(registry)


@pytest.fixture
def rpc(dispatcher: RequestDispatcher) -> Rpc:
    """Send a JSON-RPC request through the dispatcher and decode the response."""

    async def _rpc(method: str, params: Any = None, request_id: Any = 1) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
        if params is not None:
            payload["params"] = params
        raw = await dispatcher.handle(json.dumps(payload))
        return json.loads(raw)  # type: ignore[no-any-return]

    return _rpc


@pytest.fixture
def resource_json() -> Callable[[dict[str, Any]], Any]:
    """Decode the JSON payload of a single-resource tool result."""

    def _decode(result: dict[str, Any]) -> Any:
        (block,) = result["content"]
        assert block["type"] == "resource"
        assert block["resource"]["mimeType"] == "application/json"
        return json.loads(block["resource"]["text"])

    return _decode


@pytest.fixture
def sqlite_db(tmp_path: Path) -> Path:
    """A ``master_plan`` database holding the sample records."""
    path = tmp_path / "master_plan.db"
    columns = list(Observation.model_fields)
    conn = sqlite3.connect(path)
    try:
        conn.execute(
            "CREATE TABLE master_plan ("
            "id INTEGER PRIMARY KEY, start_time_utc TEXT NOT NULL, duration TEXT, date TEXT, "
            "team TEXT, spass_type TEXT, target TEXT, request_name TEXT, "
            "library_definition TEXT, title TEXT, description TEXT)"
        )
        placeholders = ", ".join("?" for _ in columns)
        conn.executemany(
            f"INSERT INTO master_plan ({', '.join(columns)}) VALUES ({placeholders})",
            [tuple(r.get(c) for c in columns) for r in _RECORDS],
        )
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def demo_file(tmp_path: Path) -> Path:
    path = tmp_path / "observations.json"
    path.write_text(json.dumps(_RECORDS), encoding="utf-8")
    return path
