"""Repository for logged AI generations (ai_generated_content)."""

from __future__ import annotations

from uuid import uuid4

import asyncpg

from backend.db import conn
from backend.models.ai import AIContentRecord
from builder.kernel.types import now_iso


def _row_to_record(row: asyncpg.Record) -> AIContentRecord:
    return AIContentRecord(
        id=str(row["id"]),
        project_id=row["project_id"],
        content_type=row["content_type"],
        prompt=row["prompt"],
        generated_text=row["generated_text"],
        tone=row["tone"],
        created_at=row["created_at"].isoformat(),
    )


class AIContentRepo:
    """AI content log interface."""

    async def save(
        self,
        project_id: str,
        content_type: str,
        prompt: str,
        generated_text: str,
        tone: str | None = None,
    ) -> AIContentRecord:
        raise NotImplementedError

    async def list_for_project(self, project_id: str) -> list[AIContentRecord]:
        raise NotImplementedError


class MemoryAIContentRepo(AIContentRepo):
    def __init__(self) -> None:
        self._records: list[AIContentRecord] = []

    def clear(self) -> None:
        self._records.clear()

    async def save(
        self,
        project_id: str,
        content_type: str,
        prompt: str,
        generated_text: str,
        tone: str | None = None,
    ) -> AIContentRecord:
        record = AIContentRecord(
            id=str(uuid4()),
            project_id=project_id,
            content_type=content_type,
            prompt=prompt,
            generated_text=generated_text,
            tone=tone,
            created_at=now_iso(),
        )
        self._records.append(record)
        return record

    async def list_for_project(self, project_id: str) -> list[AIContentRecord]:
        """Oldest first."""
        return [r for r in self._records if r.project_id == project_id]


class PostgresAIContentRepo(AIContentRepo):
    async def save(
        self,
        project_id: str,
        content_type: str,
        prompt: str,
        generated_text: str,
        tone: str | None = None,
    ) -> AIContentRecord:
        async with conn() as c:
            row = await c.fetchrow(
                """
                INSERT INTO ai_generated_content (id, project_id, content_type, prompt, generated_text, tone)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING *
                """,
                uuid4(),
                project_id,
                content_type,
                prompt,
                generated_text,
                tone,
            )
            return _row_to_record(row)

    async def list_for_project(self, project_id: str) -> list[AIContentRecord]:
        async with conn() as c:
            rows = await c.fetch(
                "SELECT * FROM ai_generated_content WHERE project_id = $1 ORDER BY created_at",
                project_id,
            )
            return [_row_to_record(row) for row in rows]
