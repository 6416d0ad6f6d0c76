"""
Sitecraft Kernel — Shared Types

Data classes used across sections, store, migration, and renderer.
These are the contracts that bind the kernel together.

Wire shape (JSON) uses camelCase keys; Python attributes are snake_case.
`pages` is the only in-memory source of truth. The legacy flat `sections`
list exists only at the persistence boundary (see migration.py).
"""

from __future__ import annotations

import copy
import re
import uuid
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

SECTION_TYPES: set[str] = {
    "header",
    "hero",
    "about",
    "services",
    "footer",
    "custom",
    "products",
    "testimonials",
}

# Viewport width (px) per preview device
DEVICE_WIDTHS: dict[str, int] = {
    "mobile": 375,
    "tablet": 768,
    "desktop": 1200,
}

ZOOM_MIN = 50
ZOOM_MAX = 200
ZOOM_DEFAULT = 100

CONTAINER_WIDTHS: set[str] = {"4xl", "5xl", "6xl", "7xl", "full"}
ANIMATION_SPEEDS: set[str] = {"slow", "normal", "fast"}

LEFT_SIDEBAR_TABS: set[str] = {"templates", "components", "pages"}
RIGHT_SIDEBAR_TABS: set[str] = {"design", "content", "settings"}

TEMPLATE_CATEGORIES: set[str] = {"business", "portfolio", "ecommerce"}

DEFAULT_COLORS: dict[str, str] = {
    "primary": "#6366F1",
    "secondary": "#8B5CF6",
    "accent": "#10B981",
}

HOME_PAGE_ID = "home"

_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]+")


# ---------------------------------------------------------------------------
# Settings groups
# ---------------------------------------------------------------------------


@dataclass
class Colors:
    primary: str = DEFAULT_COLORS["primary"]
    secondary: str = DEFAULT_COLORS["secondary"]
    accent: str = DEFAULT_COLORS["accent"]

    def to_dict(self) -> dict[str, Any]:
        return {"primary": self.primary, "secondary": self.secondary, "accent": self.accent}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Colors:
        return cls(
            primary=d.get("primary", DEFAULT_COLORS["primary"]),
            secondary=d.get("secondary", DEFAULT_COLORS["secondary"]),
            accent=d.get("accent", DEFAULT_COLORS["accent"]),
        )


@dataclass
class Typography:
    font_family: str = "inter"
    heading_size: int = 48  # UI range 24-72
    body_size: int = 16  # UI range 14-24

    def to_dict(self) -> dict[str, Any]:
        return {
            "fontFamily": self.font_family,
            "headingSize": self.heading_size,
            "bodySize": self.body_size,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Typography:
        return cls(
            font_family=d.get("fontFamily", "inter"),
            heading_size=d.get("headingSize", 48),
            body_size=d.get("bodySize", 16),
        )


@dataclass
class Layout:
    spacing: int = 16  # UI range 8-32
    container_width: str = "6xl"

    def to_dict(self) -> dict[str, Any]:
        return {"spacing": self.spacing, "containerWidth": self.container_width}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Layout:
        return cls(
            spacing=d.get("spacing", 16),
            container_width=d.get("containerWidth", "6xl"),
        )


@dataclass
class Animations:
    scroll_animations: bool = True
    hover_effects: bool = False
    speed: str = "normal"

    def to_dict(self) -> dict[str, Any]:
        return {
            "scrollAnimations": self.scroll_animations,
            "hoverEffects": self.hover_effects,
            "speed": self.speed,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Animations:
        return cls(
            scroll_animations=d.get("scrollAnimations", True),
            hover_effects=d.get("hoverEffects", False),
            speed=d.get("speed", "normal"),
        )


_SETTINGS_GROUPS = {
    "colors": Colors,
    "typography": Typography,
    "layout": Layout,
    "animations": Animations,
}


@dataclass
class Settings:
    """
    Project-level style settings.

    Numeric ranges are UI clamps only. Out-of-range values are kept as given
    and only change how the renderer presents the page.
    """

    colors: Colors = field(default_factory=Colors)
    typography: Typography = field(default_factory=Typography)
    layout: Layout = field(default_factory=Layout)
    animations: Animations = field(default_factory=Animations)

    def to_dict(self) -> dict[str, Any]:
        return {
            "colors": self.colors.to_dict(),
            "typography": self.typography.to_dict(),
            "layout": self.layout.to_dict(),
            "animations": self.animations.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> Settings:
        d = d or {}
        return cls(
            colors=Colors.from_dict(_as_dict(d.get("colors"))),
            typography=Typography.from_dict(_as_dict(d.get("typography"))),
            layout=Layout.from_dict(_as_dict(d.get("layout"))),
            animations=Animations.from_dict(_as_dict(d.get("animations"))),
        )

    def merged(self, partial: dict[str, Any]) -> Settings:
        """
        Return new Settings with `partial` merged in per group.

        Each group (colors, typography, layout, animations) merges its own
        keys independently; groups absent from `partial` are untouched.
        Unknown groups are ignored.
        """
        updates: dict[str, Any] = {}
        for group, values in partial.items():
            group_cls = _SETTINGS_GROUPS.get(group)
            if group_cls is None:
                continue
            if hasattr(values, "to_dict"):
                values = values.to_dict()
            if not isinstance(values, dict):
                continue
            updates[group] = group_cls.from_dict({**getattr(self, group).to_dict(), **values})
        return replace(self, **updates)


# ---------------------------------------------------------------------------
# Document tree
# ---------------------------------------------------------------------------


@dataclass
class Section:
    """One configurable content block. `config` is keyed by field name per `type`."""

    id: str
    type: str
    order: int | None = None
    config: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "config": copy.deepcopy(self.config),
        }
        if self.order is not None:
            d["order"] = self.order
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Section:
        config = d.get("config")
        return cls(
            id=str(d.get("id") or ""),
            type=str(d.get("type") or ""),
            order=d.get("order"),
            config=copy.deepcopy(config) if isinstance(config, dict) else {},
        )


@dataclass
class Page:
    id: str
    name: str
    slug: str
    sections: list[Section] = field(default_factory=list)
    is_home_page: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "sections": [s.to_dict() for s in self.sections],
            "isHomePage": self.is_home_page,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Page:
        name = str(d.get("name") or "Untitled")
        raw_sections = d.get("sections")
        if not isinstance(raw_sections, list):
            raw_sections = []
        return cls(
            id=str(d.get("id") or ""),
            name=name,
            slug=str(d.get("slug") or slugify(name)),
            sections=[Section.from_dict(s) for s in raw_sections if isinstance(s, dict)],
            is_home_page=bool(d.get("isHomePage", False)),
        )


@dataclass
class ProjectDocument:
    """
    The full website being edited — pages, settings, metadata.
    The root aggregate that is persisted and loaded.
    """

    id: str
    name: str
    pages: list[Page] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)
    template_id: str | None = None
    is_published: bool = False
    created_at: str = field(default_factory=lambda: now_iso())
    updated_at: str = field(default_factory=lambda: now_iso())

    @property
    def home_page(self) -> Page | None:
        for page in self.pages:
            if page.is_home_page:
                return page
        return self.pages[0] if self.pages else None

    @property
    def sections(self) -> list[Section]:
        """Legacy view: the home page's sections. Derived, never authoritative."""
        home = self.home_page
        return home.sections if home else []

    def get_page(self, page_id: str) -> Page | None:
        for page in self.pages:
            if page.id == page_id:
                return page
        return None

    def find_section(self, section_id: str) -> tuple[Page, Section] | None:
        """Locate a section by id across all pages."""
        for page in self.pages:
            for section in page.sections:
                if section.id == section_id:
                    return page, section
        return None

    def section_ids(self) -> set[str]:
        return {s.id for page in self.pages for s in page.sections}

    def touch(self) -> None:
        self.updated_at = now_iso()


@dataclass
class Template:
    """Read-only catalog entry used to seed a new ProjectDocument."""

    id: str
    name: str
    category: str
    description: str | None = None
    thumbnail: str | None = None
    sections: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "thumbnail": self.thumbnail,
            "sections": copy.deepcopy(self.sections),
        }


@dataclass
class ViewContext:
    """Viewing context for the renderer. Zoom is presentation-only."""

    device: str = "desktop"
    zoom: int = ZOOM_DEFAULT


@dataclass
class RenderOptions:
    """Options controlling what render_document includes in output."""

    include_nav: bool = True
    include_fonts: bool = True
    footer: str | None = None
    channel: str = "html"  # "html" or "text"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def new_id(prefix: str = "section") -> str:
    """Mint an opaque unique id."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def slugify(name: str) -> str:
    """
    URL-safe slug from a display name.

    Examples:
      "About Us"        → "about-us"
      "  Pricing & FAQ" → "pricing-faq"
      "!!!"             → "page"
    """
    slug = _SLUG_STRIP_RE.sub("-", name.lower()).strip("-")
    return slug or "page"


def clamp_zoom(value: int | float) -> int:
    return int(max(ZOOM_MIN, min(ZOOM_MAX, value)))


def now_iso() -> str:
    """Current UTC time as ISO 8601 string."""
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
