"""
Sitecraft Kernel — the pure document core.

Components:
  types      — Section, Page, Settings, ProjectDocument, Template
  sections   — typed config views per section type
  migration  — legacy flat `sections` ↔ page-based documents
  store      — DocumentStore: mutations + subscriber notification
  renderer   — (document, page, context) → HTML / text
  templates  — read-only starter catalog
"""

from builder.kernel.migration import from_persisted, migrate_document, migrate_update, to_persisted
from builder.kernel.renderer import render_document, render_page, render_section, render_text
from builder.kernel.sections import parse_config, validate_config
from builder.kernel.store import DocumentStore
from builder.kernel.templates import get_template, list_templates, new_blank_document, new_document_from_template
from builder.kernel.types import Page, ProjectDocument, Section, Settings, Template

__all__ = [
    "DocumentStore",
    "Page",
    "ProjectDocument",
    "Section",
    "Settings",
    "Template",
    "from_persisted",
    "get_template",
    "list_templates",
    "migrate_document",
    "migrate_update",
    "new_blank_document",
    "new_document_from_template",
    "parse_config",
    "render_document",
    "render_page",
    "render_section",
    "render_text",
    "to_persisted",
    "validate_config",
]
