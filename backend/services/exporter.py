"""
Export service — turns a stored project into a downloadable site bundle.

Bundle layout:
  index.html       home page
  <slug>.html      every other page
  site.json        the persisted project document
  README.txt       wordpress / react only: how to use the bundle

The service reads from the project repository only; it never touches a
DocumentStore. Bundles are built in memory on demand.
"""

from __future__ import annotations

import io
import json
import logging
import zipfile
from dataclasses import dataclass, field

from backend.config import settings
from backend.repos.project_repo import ProjectRepo
from builder.kernel.migration import from_persisted, to_persisted
from builder.kernel.renderer import page_filenames, render_document

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("static", "wordpress", "react")

README_TEXT = {
    "wordpress": (
        "{name}: WordPress export\n\n"
        "Each .html file is one page of the site. Copy the markup inside <main> into\n"
        "a page template and the <style> block into your theme stylesheet.\n"
        "site.json holds the full project for re-import.\n"
    ),
    "react": (
        "{name}: React export\n\n"
        "Each .html file is one page of the site. Wrap the markup inside <main> in a\n"
        "component per page; the CSS custom properties in <style> carry the theme.\n"
        "site.json holds the full project for re-import.\n"
    ),
}


class ProjectNotFound(Exception):
    """No project with the requested id."""


class UnsupportedExportFormat(Exception):
    """Format is not one of EXPORT_FORMATS."""


@dataclass
class ExportResult:
    """A built bundle: filename → content."""

    project_id: str
    format: str
    download_url: str
    files: dict[str, bytes] = field(default_factory=dict)

    def to_zip(self) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, content in self.files.items():
                archive.writestr(name, content)
        return buffer.getvalue()


def download_url(project_id: str, fmt: str) -> str:
    return f"{settings.EXPORT_BASE_URL}/{project_id}/{fmt}"


class ExportService:
    def __init__(self, repo: ProjectRepo) -> None:
        self.repo = repo

    async def export(self, project_id: str, fmt: str) -> ExportResult:
        """
        Build the bundle for a project.

        Raises:
            UnsupportedExportFormat: fmt is not static / wordpress / react
            ProjectNotFound: no such project
        """
        if fmt not in EXPORT_FORMATS:
            raise UnsupportedExportFormat(f"Unsupported export format: {fmt}")

        data = await self.repo.get(project_id)
        if data is None:
            raise ProjectNotFound(f"Project not found: {project_id}")

        document = from_persisted(data)
        files: dict[str, bytes] = {}
        for page, filename in zip(document.pages, page_filenames(document), strict=True):
            files[filename] = render_document(document, page).encode("utf-8")
        files["site.json"] = json.dumps(to_persisted(document), indent=2).encode("utf-8")
        if fmt in README_TEXT:
            files["README.txt"] = README_TEXT[fmt].format(name=document.name).encode("utf-8")

        logger.info("Exported project %s as %s (%d files)", project_id, fmt, len(files))
        return ExportResult(
            project_id=project_id,
            format=fmt,
            download_url=download_url(project_id, fmt),
            files=files,
        )
