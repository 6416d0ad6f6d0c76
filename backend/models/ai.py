"""AI content and colour suggestion models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

ContentType = Literal["headline", "description", "services", "cta"]
Tone = Literal["professional", "friendly", "creative", "authoritative"]


class GenerateContentRequest(BaseModel):
    """POST /api/ai/generate-content body."""

    content_type: ContentType
    business_context: str = Field(min_length=1, max_length=2000)
    tone: Tone = "professional"
    additional_context: str | None = Field(default=None, max_length=2000)
    project_id: str | None = None

    model_config = {"extra": "forbid", "alias_generator": to_camel, "populate_by_name": True}


class GenerateContentResponse(BaseModel):
    suggestions: list[str]
    content_type: ContentType

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class GenerateColorsRequest(BaseModel):
    """POST /api/ai/generate-colors body."""

    business_context: str = Field(min_length=1, max_length=2000)

    model_config = {"extra": "forbid", "alias_generator": to_camel, "populate_by_name": True}


class ColorScheme(BaseModel):
    """Hex colour triple, shaped like the `colors` settings group."""

    primary: str
    secondary: str
    accent: str


class AIContentRecord(BaseModel):
    """A logged generation. Represents a row in the ai_generated_content table."""

    id: str
    project_id: str
    content_type: str
    prompt: str
    generated_text: str
    tone: str | None = None
    created_at: str

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
