"""Template catalog routes — read-only."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from backend.models.template import TemplateResponse
from builder.kernel.templates import get_template, list_templates

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", status_code=200)
async def list_all_templates() -> list[TemplateResponse]:
    """The whole starter catalog."""
    return [TemplateResponse(**t.to_dict()) for t in list_templates()]


@router.get("/category/{category}", status_code=200)
async def list_templates_by_category(category: str) -> list[TemplateResponse]:
    """Templates in one category. Unknown categories return an empty list."""
    return [TemplateResponse(**t.to_dict()) for t in list_templates(category)]


@router.get("/{template_id}", status_code=200)
async def get_single_template(template_id: str) -> TemplateResponse:
    template = get_template(template_id)
    if template is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found.")
    return TemplateResponse(**template.to_dict())
