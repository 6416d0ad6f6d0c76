"""
Sitecraft Kernel — Document Store

The process-local owner of the currently open ProjectDocument plus the
editor's selection state (selected section, device, zoom, sidebars, modal
and busy flags).

Mutations are plain methods: they change state in place, then call every
registered listener synchronously, in registration order. A mutation whose
target does not exist is a silent no-op and notifies nobody; stale ids are
normal in an interactive editor.

Single-threaded. No locking, no transactions: last writer wins.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any

from builder.kernel.migration import ensure_home_page, ensure_unique_ids, from_persisted
from builder.kernel.ordering import compact_order, has_order, next_order, sort_sections
from builder.kernel.renderer import render_page
from builder.kernel.types import (
    DEVICE_WIDTHS,
    LEFT_SIDEBAR_TABS,
    RIGHT_SIDEBAR_TABS,
    ZOOM_DEFAULT,
    Page,
    ProjectDocument,
    Section,
    ViewContext,
    clamp_zoom,
    new_id,
    slugify,
)

logger = logging.getLogger(__name__)

Listener = Callable[["DocumentStore"], None]


class DocumentStore:
    """State container for the builder. See module docstring."""

    def __init__(self) -> None:
        self.current_project: ProjectDocument | None = None
        self.current_page_id: str | None = None

        # Selection state (no document effect)
        self.selected_section_id: str | None = None
        self.selected_device: str = "desktop"
        self.zoom: int = ZOOM_DEFAULT
        self.left_sidebar_tab: str = "templates"
        self.right_sidebar_tab: str = "design"

        # Transient flags guarding in-flight collaborator calls
        self.ai_modal_open: bool = False
        self.export_modal_open: bool = False
        self.is_generating_content: bool = False
        self.is_exporting: bool = False

        self._listeners: list[Listener] = []

    # -- subscription --

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # -- read helpers --

    @property
    def current_page(self) -> Page | None:
        """The page the canvas targets. Falls back to the home page."""
        doc = self.current_project
        if doc is None:
            return None
        if self.current_page_id is not None:
            page = doc.get_page(self.current_page_id)
            if page is not None:
                return page
        return doc.home_page

    def find_section(self, section_id: str) -> Section | None:
        if self.current_project is None:
            return None
        found = self.current_project.find_section(section_id)
        return found[1] if found else None

    def render(self) -> str:
        """Render the current page with the store's device and zoom."""
        if self.current_project is None:
            return ""
        return render_page(
            self.current_project,
            self.current_page,
            ViewContext(device=self.selected_device, zoom=self.zoom),
        )

    # -- document --

    def set_current_project(self, doc: ProjectDocument | dict[str, Any] | None) -> None:
        """
        Replace the whole document. Persisted dicts go through the migration
        adapter, so legacy flat-section documents load as a single home page.
        """
        if isinstance(doc, dict):
            doc = from_persisted(doc)
        elif doc is not None:
            doc = copy.deepcopy(doc)
            ensure_unique_ids(ensure_home_page(doc.pages))

        self.current_project = doc
        home = doc.home_page if doc is not None else None
        self.current_page_id = home.id if home else None
        self.selected_section_id = None
        self._notify()

    def add_section(self, section: Section | dict[str, Any]) -> None:
        """
        Append a section to the active page.

        Unset or colliding `order` becomes max(existing)+1. A missing or
        already-used id is replaced by a fresh one. Orders are compacted to
        1..N afterwards.
        """
        page = self.current_page
        if page is None:
            logger.debug("add_section: no active page")
            return

        new = Section.from_dict(section) if isinstance(section, dict) else copy.deepcopy(section)
        if not new.id or new.id in self.current_project.section_ids():
            new.id = new_id()

        order = new.order
        if order is None or isinstance(order, bool) or not isinstance(order, (int, float)) or has_order(page.sections, order):
            new.order = next_order(page.sections)

        page.sections.append(new)
        page.sections[:] = compact_order(page.sections)
        self.current_project.touch()
        self._notify()

    def remove_section(self, section_id: str) -> None:
        """Remove a section from whichever page contains it."""
        if self.current_project is None:
            return
        found = self.current_project.find_section(section_id)
        if found is None:
            logger.debug("remove_section: %s not found", section_id)
            return

        page, section = found
        page.sections.remove(section)
        page.sections[:] = compact_order(page.sections)
        if self.selected_section_id == section_id:
            self.selected_section_id = None
        self.current_project.touch()
        self._notify()

    def duplicate_section(self, section_id: str) -> None:
        """
        Insert a copy immediately after the source section.
        The copy gets a fresh id and a deep copy of the config.
        """
        if self.current_project is None:
            return
        found = self.current_project.find_section(section_id)
        if found is None:
            logger.debug("duplicate_section: %s not found", section_id)
            return

        page, source = found
        duplicate = Section(
            id=new_id(),
            type=source.type,
            order=source.order,
            config=copy.deepcopy(source.config),
        )

        ordered = sort_sections(page.sections)
        ordered.insert(ordered.index(source) + 1, duplicate)
        for index, section in enumerate(ordered, start=1):
            section.order = index
        page.sections[:] = ordered
        self.current_project.touch()
        self._notify()

    def move_section(self, section_id: str, new_index: int) -> None:
        """Move a section to a new display position within its page."""
        if self.current_project is None:
            return
        found = self.current_project.find_section(section_id)
        if found is None:
            return

        page, section = found
        ordered = sort_sections(page.sections)
        ordered.remove(section)
        new_index = max(0, min(new_index, len(ordered)))
        ordered.insert(new_index, section)
        for index, s in enumerate(ordered, start=1):
            s.order = index
        page.sections[:] = ordered
        self.current_project.touch()
        self._notify()

    def update_section_config(self, section_id: str, partial: dict[str, Any]) -> None:
        """Shallow-merge fields into a section's config."""
        section = self.find_section(section_id)
        if section is None:
            return
        section.config.update(copy.deepcopy(partial))
        self.current_project.touch()
        self._notify()

    def add_page(self, page: Page | dict[str, Any]) -> None:
        """
        Append a page. The first page is always the home page; later pages
        never claim it. Slugs and ids are made unique within the project.
        """
        doc = self.current_project
        if doc is None:
            return

        new = Page.from_dict(page) if isinstance(page, dict) else copy.deepcopy(page)
        new.is_home_page = not doc.pages

        if not new.id or doc.get_page(new.id) is not None:
            new.id = new_id("page")
        new.slug = self._unique_slug(new.slug or slugify(new.name))

        taken = doc.section_ids()
        for section in new.sections:
            if not section.id or section.id in taken:
                section.id = new_id()
            taken.add(section.id)
        new.sections[:] = compact_order(new.sections)

        doc.pages.append(new)
        if new.is_home_page:
            self.current_page_id = new.id
        doc.touch()
        self._notify()

    def _unique_slug(self, slug: str) -> str:
        taken = {p.slug for p in self.current_project.pages}
        if slug not in taken:
            return slug
        suffix = 2
        while f"{slug}-{suffix}" in taken:
            suffix += 1
        return f"{slug}-{suffix}"

    def set_current_page(self, page: Page | str) -> None:
        """Point the canvas at another page. No document change."""
        if self.current_project is None:
            return
        page_id = page.id if isinstance(page, Page) else page
        if self.current_project.get_page(page_id) is None:
            return
        self.current_page_id = page_id
        self._notify()

    def update_project_settings(self, partial: dict[str, Any]) -> None:
        """Merge settings per group; unspecified fields and groups are kept."""
        if self.current_project is None:
            return
        self.current_project.settings = self.current_project.settings.merged(partial)
        self.current_project.touch()
        self._notify()

    # -- selection --

    def set_selected_device(self, device: str) -> None:
        if device not in DEVICE_WIDTHS:
            return
        self.selected_device = device
        self._notify()

    def set_zoom(self, zoom: int | float) -> None:
        self.zoom = clamp_zoom(zoom)
        self._notify()

    def set_selected_section(self, section_id: str | None) -> None:
        self.selected_section_id = section_id
        self._notify()

    def set_left_sidebar_tab(self, tab: str) -> None:
        if tab not in LEFT_SIDEBAR_TABS:
            return
        self.left_sidebar_tab = tab
        self._notify()

    def set_right_sidebar_tab(self, tab: str) -> None:
        if tab not in RIGHT_SIDEBAR_TABS:
            return
        self.right_sidebar_tab = tab
        self._notify()

    # -- transient flags --

    def open_ai_modal(self) -> None:
        self.ai_modal_open = True
        self._notify()

    def close_ai_modal(self) -> None:
        self.ai_modal_open = False
        self._notify()

    def open_export_modal(self) -> None:
        self.export_modal_open = True
        self._notify()

    def close_export_modal(self) -> None:
        self.export_modal_open = False
        self._notify()

    def set_generating_content(self, value: bool) -> None:
        self.is_generating_content = value
        self._notify()

    def set_exporting(self, value: bool) -> None:
        self.is_exporting = value
        self._notify()
