"""
Sitecraft Kernel — Migration Adapter

Older persisted projects store a flat `sections` list. Current projects
store `pages`, each with its own sections. This module converts between
the persisted shape and the in-memory ProjectDocument.

Rules:
  - `pages` is authoritative whenever present.
  - A document without pages gets a single home page holding the legacy
    sections: same list, same ids, same order.
  - Migration is idempotent and never drops or reorders sections.
  - The legacy `sections` key is written back only as a mirror of the home
    page, for readers that predate pages.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from builder.kernel.types import (
    HOME_PAGE_ID,
    Page,
    ProjectDocument,
    Settings,
    new_id,
    now_iso,
)

logger = logging.getLogger(__name__)


def _legacy_sections(data: dict[str, Any]) -> list[Any]:
    sections = data.get("sections")
    return sections if isinstance(sections, list) else []


def needs_migration(data: dict[str, Any]) -> bool:
    """True if the persisted dict has no usable `pages`."""
    pages = data.get("pages")
    if not isinstance(pages, list):
        return True
    # An empty pages list next to legacy content is a half-written document
    return not pages and bool(_legacy_sections(data))


def make_home_page(sections: list[Any]) -> dict[str, Any]:
    return {
        "id": HOME_PAGE_ID,
        "name": "Home",
        "slug": "home",
        "sections": sections,
        "isHomePage": True,
    }


def migrate_document(data: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize a persisted project dict to the page-based shape.
    Returns a new dict; the input is not modified.
    """
    migrated = copy.deepcopy(data)
    if needs_migration(migrated):
        sections = _legacy_sections(migrated)
        logger.debug("migrating legacy project %s (%d sections)", migrated.get("id"), len(sections))
        migrated["pages"] = [make_home_page(sections)]
    migrated["pages"] = ensure_home_page(migrated["pages"])
    return migrated


def migrate_update(updates: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize a partial update before it is merged into a stored project.

    `sections` without `pages` replaces the pages with a single home page and
    the `sections` key is dropped. Updates that carry `pages` keep them.
    """
    migrated = copy.deepcopy(updates)
    if "sections" in migrated and "pages" not in migrated:
        migrated["pages"] = [make_home_page(_legacy_sections(migrated))]
        del migrated["sections"]
    if isinstance(migrated.get("pages"), list):
        migrated["pages"] = ensure_home_page(migrated["pages"])
    return migrated


def ensure_home_page(pages: list[Any]) -> list[Any]:
    """
    Exactly one page is the home page once any page exists.
    The first flagged page wins; with none flagged, the first page is home.
    Works on both dicts and Page objects, in place.
    """
    home_seen = False
    for page in pages:
        if isinstance(page, Page):
            flagged = page.is_home_page
        elif isinstance(page, dict):
            flagged = bool(page.get("isHomePage"))
        else:
            continue
        keep = flagged and not home_seen
        home_seen = home_seen or keep
        _set_home(page, keep)

    if not home_seen:
        for page in pages:
            if isinstance(page, (Page, dict)):
                _set_home(page, True)
                break
    return pages


def _suffixed(value: str, taken: set[str]) -> str:
    if value not in taken:
        return value
    suffix = 2
    while f"{value}-{suffix}" in taken:
        suffix += 1
    return f"{value}-{suffix}"


def ensure_unique_ids(pages: list[Page]) -> list[Page]:
    """
    Page ids, page slugs and section ids are unique within a document.
    The first occurrence keeps its value; repeated page ids and section ids
    are re-minted, repeated slugs get -2, -3, ... In place.
    """
    page_ids: set[str] = set()
    slugs: set[str] = set()
    section_ids: set[str] = set()
    for page in pages:
        if page.id in page_ids:
            page.id = new_id("page")
        page_ids.add(page.id)

        slug = _suffixed(page.slug, slugs)
        if slug != page.slug:
            logger.debug("page %s: slug %r taken, using %r", page.id, page.slug, slug)
            page.slug = slug
        slugs.add(slug)

        for section in page.sections:
            if section.id in section_ids:
                section.id = new_id()
            section_ids.add(section.id)
    return pages


def _set_home(page: Page | dict[str, Any], value: bool) -> None:
    if isinstance(page, Page):
        page.is_home_page = value
    else:
        page["isHomePage"] = value


def from_persisted(data: dict[str, Any]) -> ProjectDocument:
    """Build a ProjectDocument from a persisted dict, migrating if needed."""
    migrated = migrate_document(data)
    now = now_iso()
    pages = [Page.from_dict(p) for p in migrated["pages"] if isinstance(p, dict)]
    return ProjectDocument(
        id=str(migrated.get("id") or ""),
        name=str(migrated.get("name") or "Untitled"),
        pages=ensure_unique_ids(ensure_home_page(pages)),
        settings=Settings.from_dict(migrated.get("settings")),
        template_id=migrated.get("templateId"),
        is_published=bool(migrated.get("isPublished", False)),
        created_at=_timestamp(migrated.get("createdAt")) or now,
        updated_at=_timestamp(migrated.get("updatedAt")) or now,
    )


def to_persisted(doc: ProjectDocument) -> dict[str, Any]:
    """Serialize a ProjectDocument, including the legacy `sections` mirror."""
    return {
        "id": doc.id,
        "name": doc.name,
        "templateId": doc.template_id,
        "pages": [p.to_dict() for p in doc.pages],
        "sections": [s.to_dict() for s in doc.sections],
        "settings": doc.settings.to_dict(),
        "isPublished": doc.is_published,
        "createdAt": doc.created_at,
        "updatedAt": doc.updated_at,
    }


def _timestamp(value: Any) -> str | None:
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)
