"""Export request/response models."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ExportRequest(BaseModel):
    """
    POST /api/export body.
    `format` is checked by the export service so unknown formats answer 400, not 422.
    """

    project_id: str = Field(min_length=1)
    format: str = Field(min_length=1)

    model_config = {"extra": "forbid", "alias_generator": to_camel, "populate_by_name": True}


class ExportResponse(BaseModel):
    success: bool = True
    download_url: str
    format: str
    message: str
    files: list[str] = Field(default_factory=list)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
