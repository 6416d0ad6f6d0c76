"""Export service and /api/export route tests."""

from __future__ import annotations

import io
import json
import zipfile

import pytest

from backend.repos.project_repo import MemoryProjectRepo
from backend.services.exporter import ExportService, ProjectNotFound, UnsupportedExportFormat
from builder.kernel.migration import to_persisted
from builder.kernel.store import DocumentStore
from builder.kernel.templates import new_blank_document

pytestmark = pytest.mark.asyncio(loop_scope="session")

TWO_PAGE_PROJECT = {
    "name": "Bakery",
    "pages": [
        {
            "id": "home",
            "name": "Home",
            "slug": "home",
            "isHomePage": True,
            "sections": [{"id": "h", "type": "header", "order": 1, "config": {"title": "Crumbs"}}],
        },
        {
            "id": "menu",
            "name": "Menu",
            "slug": "menu",
            "sections": [{"id": "m", "type": "custom", "order": 1, "config": {"title": "Our Bread"}}],
        },
    ],
}


class TestExportService:
    async def test_static_bundle(self):
        repo = MemoryProjectRepo()
        project = await repo.create(TWO_PAGE_PROJECT)

        result = await ExportService(repo).export(project["id"], "static")

        assert set(result.files) == {"index.html", "menu.html", "site.json"}
        assert b"Crumbs" in result.files["index.html"]
        assert b"<title>Menu | Bakery</title>" in result.files["menu.html"]
        assert json.loads(result.files["site.json"])["name"] == "Bakery"
        assert result.download_url.endswith(f"/{project['id']}/static")

    @pytest.mark.parametrize("fmt", ["wordpress", "react"])
    async def test_readme_for_framework_targets(self, fmt):
        repo = MemoryProjectRepo()
        project = await repo.create(TWO_PAGE_PROJECT)

        result = await ExportService(repo).export(project["id"], fmt)

        assert "README.txt" in result.files
        assert result.files["README.txt"].startswith(b"Bakery: ")

    async def test_zip_contains_every_file(self):
        repo = MemoryProjectRepo()
        project = await repo.create(TWO_PAGE_PROJECT)
        result = await ExportService(repo).export(project["id"], "static")

        with zipfile.ZipFile(io.BytesIO(result.to_zip())) as archive:
            assert sorted(archive.namelist()) == sorted(result.files)

    async def test_page_slugged_index_keeps_home_page(self):
        store = DocumentStore()
        store.set_current_project(new_blank_document("Site"))
        store.add_section({"id": "hero", "type": "hero", "config": {"title": "HOME CONTENT"}})
        store.add_page({"name": "Index", "sections": [{"id": "c", "type": "custom", "config": {"title": "INDEX PAGE"}}]})
        repo = MemoryProjectRepo()
        project = await repo.create(to_persisted(store.current_project))

        result = await ExportService(repo).export(project["id"], "static")

        assert set(result.files) == {"index.html", "index-2.html", "site.json"}
        assert b"HOME CONTENT" in result.files["index.html"]
        assert b"INDEX PAGE" in result.files["index-2.html"]
        assert b'<a href="index-2.html">Index</a>' in result.files["index.html"]

    async def test_repeated_slugs_get_one_file_each(self):
        pages = [
            {"id": "home", "name": "Home", "slug": "home", "isHomePage": True, "sections": []},
            {"id": "a", "name": "Menu", "slug": "menu", "sections": []},
            {"id": "b", "name": "Menu", "slug": "menu", "sections": []},
        ]
        repo = MemoryProjectRepo()
        project = await repo.create({"name": "Dupes", "pages": pages})

        result = await ExportService(repo).export(project["id"], "static")

        assert {"index.html", "menu.html", "menu-2.html"} <= set(result.files)

    async def test_unknown_project(self):
        with pytest.raises(ProjectNotFound):
            await ExportService(MemoryProjectRepo()).export("missing", "static")

    async def test_unknown_format(self):
        with pytest.raises(UnsupportedExportFormat):
            await ExportService(MemoryProjectRepo()).export("missing", "pdf")


class TestExportRoutes:
    async def test_prepare(self, async_client, project_repo):
        project = await project_repo.create(TWO_PAGE_PROJECT)

        res = await async_client.post("/api/export", json={"projectId": project["id"], "format": "static"})

        assert res.status_code == 200
        data = res.json()
        assert data["success"] is True
        assert data["format"] == "static"
        assert data["message"] == "Export prepared successfully"
        assert data["downloadUrl"].endswith(f"/{project['id']}/static")
        assert data["files"] == ["index.html", "menu.html", "site.json"]

    async def test_prepare_unknown_format(self, async_client, project_repo):
        project = await project_repo.create(TWO_PAGE_PROJECT)

        res = await async_client.post("/api/export", json={"projectId": project["id"], "format": "pdf"})
        assert res.status_code == 400

    async def test_prepare_unknown_project(self, async_client):
        res = await async_client.post("/api/export", json={"projectId": "missing", "format": "static"})
        assert res.status_code == 404

    async def test_prepare_missing_fields(self, async_client):
        res = await async_client.post("/api/export", json={"projectId": "x"})
        assert res.status_code == 422

    async def test_download(self, async_client, project_repo):
        project = await project_repo.create(TWO_PAGE_PROJECT)

        res = await async_client.get(f"/api/export/{project['id']}/wordpress")

        assert res.status_code == 200
        assert res.headers["content-type"] == "application/zip"
        assert f'filename="{project["id"]}-wordpress.zip"' in res.headers["content-disposition"]
        with zipfile.ZipFile(io.BytesIO(res.content)) as archive:
            assert "README.txt" in archive.namelist()
            assert b"Our Bread" in archive.read("menu.html")

    async def test_download_missing(self, async_client):
        res = await async_client.get("/api/export/missing/static")
        assert res.status_code == 404
