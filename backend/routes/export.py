"""Export routes — build a bundle and download it as a zip."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status

from backend.models.export import ExportRequest, ExportResponse
from backend.repos import get_project_repo
from backend.services.exporter import ExportService, ProjectNotFound, UnsupportedExportFormat

router = APIRouter(prefix="/api/export", tags=["export"])
export_service = ExportService(get_project_repo())


async def _build(project_id: str, fmt: str):
    try:
        return await export_service.export(project_id, fmt)
    except UnsupportedExportFormat as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except ProjectNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.") from e


@router.post("", status_code=200)
async def export_project(req: ExportRequest) -> ExportResponse:
    result = await _build(req.project_id, req.format)
    return ExportResponse(
        download_url=result.download_url,
        format=result.format,
        message="Export prepared successfully",
        files=sorted(result.files),
    )


@router.get("/{project_id}/{fmt}", status_code=200)
async def download_export(project_id: str, fmt: str) -> Response:
    """The bundle as a zip archive."""
    result = await _build(project_id, fmt)
    return Response(
        content=result.to_zip(),
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{project_id}-{fmt}.zip"'},
    )
