"""
Content generator — AI suggestions for section copy and colour schemes.

Suggestions are returned to the caller only. Nothing is applied to a project
document here; applying a suggestion is an explicit store mutation.

Failure rules:
  - Content: any upstream failure or unusable output raises ContentGenerationError.
  - Colours: upstream failure yields DEFAULT_COLOR_SCHEME; each invalid hex
    value falls back to its default individually.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from backend.config import settings
from backend.models.ai import ColorScheme, GenerateContentResponse
from backend.services.ai_provider import PROVIDER_ERRORS, AIProvider, ai_provider
from builder.kernel.types import DEFAULT_COLORS

logger = logging.getLogger(__name__)

DEFAULT_COLOR_SCHEME = ColorScheme(**DEFAULT_COLORS)

HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")

CONTENT_SYSTEM_PROMPT = (
    "You are an expert copywriter for small-business websites. "
    'Always respond with a JSON object of the form {"suggestions": ["...", "...", "..."]} and nothing else.'
)

COLOR_SYSTEM_PROMPT = (
    "You are an expert brand designer. "
    'Always respond with a JSON object of the form {"primary": "#RRGGBB", "secondary": "#RRGGBB", '
    '"accent": "#RRGGBB"} and nothing else.'
)

CONTENT_PROMPTS = {
    "headline": "Write 3 compelling website headlines for {context}. Tone: {tone}. Keep each under 10 words.",
    "description": "Write 3 short business descriptions (2-3 sentences each) for {context}. Tone: {tone}.",
    "services": "List 3 key services or offerings for {context}, one short phrase each. Tone: {tone}.",
    "cta": "Write 3 call-to-action button labels for {context}. Tone: {tone}. Keep each under 5 words.",
}


class ContentGenerationError(Exception):
    """Upstream call failed or returned unusable suggestions."""


def extract_json(content: str) -> Any:
    """
    Parse a JSON value from model output, tolerating a markdown code fence.

    Raises:
        json.JSONDecodeError if no JSON can be parsed
    """
    content = content.strip()
    if "```json" in content:
        start = content.find("```json") + 7
        end = content.find("```", start)
        if end > start:
            content = content[start:end].strip()
    elif "```" in content:
        start = content.find("```") + 3
        end = content.find("```", start)
        if end > start:
            content = content[start:end].strip()
    return json.loads(content)


def parse_suggestions(content: str) -> list[str]:
    """
    Pull the non-empty string suggestions out of a model response.

    Raises:
        ContentGenerationError if the output is not {"suggestions": [str, ...]} with at least one entry
    """
    try:
        data = extract_json(content)
    except json.JSONDecodeError as e:
        raise ContentGenerationError(f"Model returned invalid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("suggestions"), list):
        raise ContentGenerationError("Model response has no suggestions list")

    suggestions = [s.strip() for s in data["suggestions"] if isinstance(s, str) and s.strip()]
    if not suggestions:
        raise ContentGenerationError("Model returned no usable suggestions")
    return suggestions


def parse_color_scheme(content: str) -> ColorScheme:
    """Colour triple from model output; each field falls back to its default on its own."""
    try:
        data = extract_json(content)
    except json.JSONDecodeError:
        logger.warning("Colour scheme response was not JSON, using defaults")
        return DEFAULT_COLOR_SCHEME.model_copy()

    if not isinstance(data, dict):
        return DEFAULT_COLOR_SCHEME.model_copy()

    values = {}
    for field, default in DEFAULT_COLOR_SCHEME.model_dump().items():
        value = data.get(field)
        if isinstance(value, str) and HEX_COLOR_RE.match(value.strip()):
            values[field] = value.strip()
        else:
            logger.debug("Invalid %s colour %r, using %s", field, value, default)
            values[field] = default
    return ColorScheme(**values)


def build_content_prompt(
    content_type: str,
    business_context: str,
    tone: str,
    additional_context: str | None = None,
) -> str:
    prompt = CONTENT_PROMPTS[content_type].format(context=business_context, tone=tone)
    if additional_context:
        prompt += f"\n\nAdditional context: {additional_context}"
    return prompt


class ContentGenerator:
    """Builds prompts, calls the AI provider once, validates the output."""

    def __init__(self, provider: AIProvider | None = None) -> None:
        self.provider = provider or ai_provider

    async def generate_content(
        self,
        content_type: str,
        business_context: str,
        tone: str,
        additional_context: str | None = None,
    ) -> GenerateContentResponse:
        """
        Suggest copy for a section field.

        Args:
            content_type: headline | description | services | cta
            business_context: What the business is
            tone: professional | friendly | creative | authoritative
            additional_context: Optional free text appended to the prompt

        Returns:
            GenerateContentResponse with one or more suggestions

        Raises:
            ContentGenerationError on upstream failure or unusable output
        """
        if content_type not in CONTENT_PROMPTS:
            raise ContentGenerationError(f"Unknown content type: {content_type}")

        prompt = build_content_prompt(content_type, business_context, tone, additional_context)
        try:
            content = await self.provider.complete(
                system=CONTENT_SYSTEM_PROMPT,
                prompt=prompt,
                model=settings.CONTENT_MODEL,
                max_tokens=settings.CONTENT_MAX_TOKENS,
                json_mode=True,
            )
        except PROVIDER_ERRORS as e:
            logger.error("Content generation failed for %s: %s", content_type, e)
            raise ContentGenerationError("Failed to generate content") from e

        suggestions = parse_suggestions(content)
        logger.info("Generated %d %s suggestions", len(suggestions), content_type)
        return GenerateContentResponse(suggestions=suggestions, content_type=content_type)

    async def generate_color_scheme(self, business_context: str) -> ColorScheme:
        """Suggest a colour triple. Never raises for upstream failure."""
        prompt = f"Suggest a professional colour scheme for {business_context}."
        try:
            content = await self.provider.complete(
                system=COLOR_SYSTEM_PROMPT,
                prompt=prompt,
                model=settings.COLOR_MODEL,
                max_tokens=settings.COLOR_MAX_TOKENS,
                json_mode=True,
            )
        except PROVIDER_ERRORS as e:
            logger.warning("Colour generation failed, using defaults: %s", e)
            return DEFAULT_COLOR_SCHEME.model_copy()

        return parse_color_scheme(content)


# Singleton instance
content_generator = ContentGenerator()
