"""Template catalog response model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class TemplateResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    category: str
    thumbnail: str | None = None
    sections: list[dict[str, Any]] = Field(default_factory=list)
