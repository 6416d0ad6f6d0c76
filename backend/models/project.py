"""Project models — request/response shapes for /api/projects."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CreateProjectRequest(BaseModel):
    """
    POST /api/projects body.

    Seed order: templateId, then explicit pages/sections, then a blank home page.
    Explicit pages/sections/settings override what the template provides.
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)
    template_id: str | None = None
    pages: list[dict[str, Any]] | None = None
    sections: list[dict[str, Any]] | None = None
    settings: dict[str, Any] | None = None
    is_published: bool = False

    model_config = {"extra": "forbid", "alias_generator": to_camel, "populate_by_name": True}


class UpdateProjectRequest(BaseModel):
    """
    PUT /api/projects/{id} body. Every field optional; only sent fields are applied.
    A legacy client may send `sections` without `pages`.
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)
    template_id: str | None = None
    pages: list[dict[str, Any]] | None = None
    sections: list[dict[str, Any]] | None = None
    settings: dict[str, Any] | None = None
    is_published: bool | None = None

    model_config = {"extra": "forbid", "alias_generator": to_camel, "populate_by_name": True}

    def to_updates(self) -> dict[str, Any]:
        """Sent fields only, keyed the way documents are persisted."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class ProjectResponse(BaseModel):
    """What the API returns for a project: the persisted document shape."""

    id: str
    name: str
    template_id: str | None = None
    pages: list[dict[str, Any]] = Field(default_factory=list)
    sections: list[dict[str, Any]] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict)
    is_published: bool = False
    created_at: str
    updated_at: str

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
