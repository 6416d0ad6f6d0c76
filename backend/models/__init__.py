"""
Pydantic models for Sitecraft.

All request/response shapes defined here. No imports from db, repos, or routes.
"""

from backend.models.ai import (
    AIContentRecord,
    ColorScheme,
    GenerateColorsRequest,
    GenerateContentRequest,
    GenerateContentResponse,
)
from backend.models.export import ExportRequest, ExportResponse
from backend.models.project import CreateProjectRequest, ProjectResponse, UpdateProjectRequest
from backend.models.template import TemplateResponse

__all__ = [
    # Project models
    "CreateProjectRequest",
    "UpdateProjectRequest",
    "ProjectResponse",
    # Template models
    "TemplateResponse",
    # AI models
    "GenerateContentRequest",
    "GenerateContentResponse",
    "GenerateColorsRequest",
    "ColorScheme",
    "AIContentRecord",
    # Export models
    "ExportRequest",
    "ExportResponse",
]
