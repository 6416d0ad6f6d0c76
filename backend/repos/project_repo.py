"""
Repository for project documents.

Projects are stored whole, in the persisted document shape: `pages` plus the
legacy `sections` mirror of the home page. Every document written or returned
passes through the migration adapter, so legacy rows come back page-based.
"""

from __future__ import annotations

import copy
import logging
from typing import Any
from uuid import uuid4

import asyncpg

from backend.db import conn
from builder.kernel.migration import from_persisted, migrate_update, to_persisted
from builder.kernel.types import Settings, now_iso

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = ("id", "createdAt")


def normalize_document(data: dict[str, Any]) -> dict[str, Any]:
    """Migrate and re-serialize so the legacy mirror always matches the home page."""
    return to_persisted(from_persisted(data))


def apply_update(current: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    """
    Merge a partial update into a stored document.

    - `sections` without `pages` becomes a single home page (legacy clients)
    - `settings` merges per group; other top-level fields replace
    - `id` and `createdAt` never change; `updatedAt` is refreshed
    """
    updates = migrate_update(updates)
    merged = dict(current)
    for key, value in updates.items():
        if key in IMMUTABLE_FIELDS:
            continue
        if key == "settings":
            merged["settings"] = Settings.from_dict(current.get("settings")).merged(value or {}).to_dict()
        else:
            merged[key] = value
    merged["updatedAt"] = now_iso()
    return normalize_document(merged)


class ProjectRepo:
    """Project persistence interface."""

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError

    async def get(self, project_id: str) -> dict[str, Any] | None:
        raise NotImplementedError

    async def list(self) -> list[dict[str, Any]]:
        raise NotImplementedError

    async def update(self, project_id: str, updates: dict[str, Any]) -> dict[str, Any] | None:
        raise NotImplementedError

    async def delete(self, project_id: str) -> bool:
        raise NotImplementedError


class MemoryProjectRepo(ProjectRepo):
    """In-process storage. Used when DATABASE_URL is empty, and in tests."""

    def __init__(self) -> None:
        self._projects: dict[str, dict[str, Any]] = {}

    def clear(self) -> None:
        self._projects.clear()

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Store a new project.

        Args:
            data: Project document (persisted or legacy shape)

        Returns:
            The stored document, with id and timestamps assigned
        """
        project_id = data.get("id")
        if not project_id or project_id in self._projects:
            project_id = str(uuid4())
        now = now_iso()
        document = normalize_document({**data, "id": project_id, "createdAt": now, "updatedAt": now})
        self._projects[project_id] = document
        logger.debug("Created project %s", project_id)
        return copy.deepcopy(document)

    async def get(self, project_id: str) -> dict[str, Any] | None:
        document = self._projects.get(project_id)
        return copy.deepcopy(document) if document else None

    async def list(self) -> list[dict[str, Any]]:
        """All projects, most recently updated first."""
        documents = sorted(self._projects.values(), key=lambda d: d["updatedAt"], reverse=True)
        return copy.deepcopy(documents)

    async def update(self, project_id: str, updates: dict[str, Any]) -> dict[str, Any] | None:
        current = self._projects.get(project_id)
        if current is None:
            return None
        document = apply_update(current, updates)
        self._projects[project_id] = document
        return copy.deepcopy(document)

    async def delete(self, project_id: str) -> bool:
        return self._projects.pop(project_id, None) is not None


def _row_to_document(row: asyncpg.Record) -> dict[str, Any]:
    """Convert a database row to a persisted document."""
    document = dict(row["document"])
    document["id"] = row["id"]
    return normalize_document(document)


class PostgresProjectRepo(ProjectRepo):
    """Projects in the `projects` table, one JSONB document per row."""

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        project_id = data.get("id") or str(uuid4())
        now = now_iso()
        document = normalize_document({**data, "id": project_id, "createdAt": now, "updatedAt": now})

        async with conn() as c:
            row = await c.fetchrow(
                """
                INSERT INTO projects (id, name, document, created_at, updated_at)
                VALUES ($1, $2, $3, now(), now())
                RETURNING *
                """,
                project_id,
                document["name"],
                document,
            )
            return _row_to_document(row)

    async def get(self, project_id: str) -> dict[str, Any] | None:
        async with conn() as c:
            row = await c.fetchrow("SELECT * FROM projects WHERE id = $1", project_id)
            return _row_to_document(row) if row else None

    async def list(self) -> list[dict[str, Any]]:
        async with conn() as c:
            rows = await c.fetch("SELECT * FROM projects ORDER BY updated_at DESC")
            return [_row_to_document(row) for row in rows]

    async def update(self, project_id: str, updates: dict[str, Any]) -> dict[str, Any] | None:
        """
        Apply a partial update under a row lock.

        Returns:
            Updated document, or None if the project does not exist
        """
        async with conn() as c:
            row = await c.fetchrow("SELECT * FROM projects WHERE id = $1 FOR UPDATE", project_id)
            if row is None:
                return None

            document = apply_update(_row_to_document(row), updates)
            row = await c.fetchrow(
                """
                UPDATE projects
                SET name = $2, document = $3, updated_at = now()
                WHERE id = $1
                RETURNING *
                """,
                project_id,
                document["name"],
                document,
            )
            return _row_to_document(row)

    async def delete(self, project_id: str) -> bool:
        async with conn() as c:
            result = await c.execute("DELETE FROM projects WHERE id = $1", project_id)
            return result == "DELETE 1"
