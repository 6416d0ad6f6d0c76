"""Project CRUD routes — list, create, get, update, delete, preview."""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import HTMLResponse

from backend.models.project import CreateProjectRequest, ProjectResponse, UpdateProjectRequest
from backend.repos import get_project_repo
from builder.kernel.migration import from_persisted, to_persisted
from builder.kernel.renderer import render_page
from builder.kernel.templates import get_template, new_blank_document, new_document_from_template
from builder.kernel.types import ViewContext, clamp_zoom

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])
project_repo = get_project_repo()

DEFAULT_PROJECT_NAME = "Untitled Project"


def _initial_document(req: CreateProjectRequest) -> dict[str, Any]:
    """
    Seed document for a new project.

    A template provides pages and sections; explicit pages/sections in the
    request replace them, and explicit settings merge over the defaults.
    """
    if req.template_id is not None:
        template = get_template(req.template_id)
        if template is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found.")
        document = new_document_from_template(template, req.name)
    else:
        document = new_blank_document(req.name or DEFAULT_PROJECT_NAME)

    data = to_persisted(document)
    if req.pages is not None or req.sections is not None:
        data.pop("pages")
        data.pop("sections")
        if req.pages is not None:
            data["pages"] = req.pages
        if req.sections is not None:
            data["sections"] = req.sections
    if req.settings is not None:
        data["settings"] = document.settings.merged(req.settings).to_dict()
    data["isPublished"] = req.is_published
    return data


@router.get("", status_code=200)
async def list_projects() -> list[ProjectResponse]:
    """All projects, most recently updated first."""
    projects = await project_repo.list()
    return [ProjectResponse(**p) for p in projects]


@router.post("", status_code=201)
async def create_project(req: CreateProjectRequest) -> ProjectResponse:
    """Create a project from a template, explicit content, or blank."""
    project = await project_repo.create(_initial_document(req))
    logger.info("Created project %s (template=%s)", project["id"], req.template_id)
    return ProjectResponse(**project)


@router.get("/{project_id}", status_code=200)
async def get_project(project_id: str) -> ProjectResponse:
    project = await project_repo.get(project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")
    return ProjectResponse(**project)


@router.put("/{project_id}", status_code=200)
async def update_project(project_id: str, req: UpdateProjectRequest) -> ProjectResponse:
    """
    Partial update. Only fields present in the body change.
    Legacy clients sending `sections` without `pages` get a single home page.
    """
    project = await project_repo.update(project_id, req.to_updates())
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")
    return ProjectResponse(**project)


@router.delete("/{project_id}", status_code=200)
async def delete_project(project_id: str) -> dict[str, str]:
    deleted = await project_repo.delete(project_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")
    return {"message": "Project deleted successfully"}


@router.get("/{project_id}/preview", status_code=200, response_class=HTMLResponse)
async def preview_project(
    project_id: str,
    device: Literal["desktop", "tablet", "mobile"] = "desktop",
    zoom: int = Query(default=100),
    page: str | None = Query(default=None, description="Page id or slug; defaults to the home page"),
) -> HTMLResponse:
    """Preview fragment for one page at a device width and zoom."""
    project = await project_repo.get(project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")

    document = from_persisted(project)
    target = document.home_page
    if page is not None:
        target = next((p for p in document.pages if page in (p.id, p.slug)), None)
        if target is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found.")

    html = render_page(document, target, ViewContext(device=device, zoom=clamp_zoom(zoom)))
    return HTMLResponse(html)
