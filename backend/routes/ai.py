"""AI suggestion routes — content copy and colour schemes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from backend.models.ai import (
    AIContentRecord,
    ColorScheme,
    GenerateColorsRequest,
    GenerateContentRequest,
    GenerateContentResponse,
)
from backend.repos import get_ai_content_repo
from backend.services.content_generator import ContentGenerationError, content_generator

router = APIRouter(prefix="/api/ai", tags=["ai"])
ai_content_repo = get_ai_content_repo()


@router.post("/generate-content", status_code=200)
async def generate_content(req: GenerateContentRequest) -> GenerateContentResponse:
    """
    Suggest copy for a section field.
    Suggestions are returned, never applied. With a projectId they are also logged.
    """
    try:
        result = await content_generator.generate_content(
            req.content_type,
            req.business_context,
            req.tone,
            req.additional_context,
        )
    except ContentGenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to generate content.") from e

    if req.project_id:
        await ai_content_repo.save(
            project_id=req.project_id,
            content_type=req.content_type,
            prompt=req.business_context,
            generated_text=", ".join(result.suggestions),
            tone=req.tone,
        )
    return result


@router.post("/generate-colors", status_code=200)
async def generate_colors(req: GenerateColorsRequest) -> ColorScheme:
    """Suggest a colour triple. Upstream failure answers with the default scheme."""
    return await content_generator.generate_color_scheme(req.business_context)


@router.get("/history/{project_id}", status_code=200)
async def list_generated_content(project_id: str) -> list[AIContentRecord]:
    """Logged generations for a project, oldest first."""
    return await ai_content_repo.list_for_project(project_id)
