"""Observation records from the mission master plan."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class Observation(BaseModel):
    """One row of the ``master_plan`` table.

    Read-only: the server never creates or updates observations.
    """

    id: int
    start_time_utc: str
    duration: str | None = None
    date: str | None = None
    team: str | None = None
    spass_type: str | None = None
    target: str | None = None
    request_name: str | None = None
    library_definition: str | None = None
    title: str | None = None
    description: str | None = None

    def details(self) -> dict[str, Any]:
        """Every field, as returned by ``get_observation_details``."""
        return self.model_dump()

    def summary(self) -> dict[str, Any]:
        """The list-row projection: everything except the long-form text fields."""
        return self.model_dump(exclude={"library_definition", "description"})
