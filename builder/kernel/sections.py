"""
Sitecraft Kernel — Typed Section Configs

A section's `config` is stored as an open mapping so it round-trips through
JSON untouched. This module gives each section type its own dataclass view
(a tagged union keyed on `type`) so the renderer works with typed fields.

Parsing never raises. A value of the wrong type is treated as absent, and
absent optional fields mean "omit the sub-element".
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from builder.kernel.types import SECTION_TYPES

# Config keys per section type. Required fields are always rendered (empty
# when missing); optional ones are rendered only when present.
REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    "header": ("title",),
    "hero": ("title",),
    "about": ("title", "description"),
    "services": ("title", "services"),
    "footer": ("title",),
    "custom": ("title",),
    "products": ("title", "products"),
    "testimonials": ("title", "testimonials"),
}

OPTIONAL_FIELDS: dict[str, tuple[str, ...]] = {
    "header": ("navigation", "ctaButton", "backgroundImage", "style", "fixed"),
    "hero": (
        "subtitle",
        "ctaButtons",
        "backgroundImage",
        "backgroundGradient",
        "backgroundColor",
        "features",
        "layout",
    ),
    "about": ("skills", "image"),
    "services": ("subtitle", "layout"),
    "footer": ("description", "socialLinks", "copyright"),
    "custom": ("content",),
    "products": ("subtitle", "layout"),
    "testimonials": ("subtitle", "layout"),
}


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------


def _str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _str_list(raw: dict[str, Any], key: str) -> list[str] | None:
    value = raw.get(key)
    if not isinstance(value, list):
        return None
    return [str(v) for v in value if isinstance(v, (str, int, float)) and not isinstance(v, bool)]


def _dict_list(raw: dict[str, Any], key: str) -> list[dict[str, Any]] | None:
    value = raw.get(key)
    if not isinstance(value, list):
        return None
    return [v for v in value if isinstance(v, dict)]


# ---------------------------------------------------------------------------
# Item types
# ---------------------------------------------------------------------------


@dataclass
class ServiceItem:
    title: str = ""
    description: str | None = None
    icon: str | None = None
    badge: str | None = None

    @classmethod
    def parse(cls, raw: dict[str, Any]) -> ServiceItem:
        return cls(
            title=_str(raw, "title") or "",
            description=_str(raw, "description"),
            icon=_str(raw, "icon"),
            badge=_str(raw, "badge"),
        )


@dataclass
class ProductItem:
    name: str = ""
    price: str | None = None
    image: str | None = None
    badge: str | None = None

    @classmethod
    def parse(cls, raw: dict[str, Any]) -> ProductItem:
        return cls(
            name=_str(raw, "name") or "",
            price=_str(raw, "price"),
            image=_str(raw, "image"),
            badge=_str(raw, "badge"),
        )


@dataclass
class TestimonialItem:
    __test__ = False  # not a pytest class

    text: str = ""
    name: str | None = None
    company: str | None = None
    rating: int | None = None

    @classmethod
    def parse(cls, raw: dict[str, Any]) -> TestimonialItem:
        rating = raw.get("rating")
        if isinstance(rating, bool) or not isinstance(rating, (int, float)) or not math.isfinite(rating):
            rating = None
        return cls(
            text=_str(raw, "text") or "",
            name=_str(raw, "name"),
            company=_str(raw, "company"),
            rating=int(rating) if rating is not None else None,
        )


# ---------------------------------------------------------------------------
# Config variants
# ---------------------------------------------------------------------------


@dataclass
class HeaderConfig:
    title: str = ""
    navigation: list[str] | None = None
    cta_button: str | None = None
    background_image: str | None = None
    style: str | None = None
    fixed: bool = False


@dataclass
class HeroConfig:
    title: str = ""
    subtitle: str | None = None
    cta_buttons: list[str] | None = None
    background_image: str | None = None
    background_gradient: str | None = None
    background_color: str | None = None
    features: list[str] | None = None
    layout: str | None = None


@dataclass
class AboutConfig:
    title: str = ""
    description: str = ""
    skills: list[str] | None = None
    image: str | None = None


@dataclass
class ServicesConfig:
    title: str = ""
    services: list[ServiceItem] = field(default_factory=list)
    subtitle: str | None = None
    layout: str | None = None


@dataclass
class FooterConfig:
    title: str = ""
    description: str | None = None
    social_links: list[str] | None = None
    copyright: str | None = None


@dataclass
class CustomConfig:
    title: str = ""
    content: str | None = None


@dataclass
class ProductsConfig:
    title: str = ""
    products: list[ProductItem] = field(default_factory=list)
    subtitle: str | None = None
    layout: str | None = None


@dataclass
class TestimonialsConfig:
    __test__ = False  # not a pytest class

    title: str = ""
    testimonials: list[TestimonialItem] = field(default_factory=list)
    subtitle: str | None = None
    layout: str | None = None


@dataclass
class UnknownConfig:
    """Config of a section whose type this kernel does not know."""

    type: str
    raw: dict[str, Any] = field(default_factory=dict)


SectionConfig = (
    HeaderConfig
    | HeroConfig
    | AboutConfig
    | ServicesConfig
    | FooterConfig
    | CustomConfig
    | ProductsConfig
    | TestimonialsConfig
    | UnknownConfig
)


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------


def _parse_header(raw: dict[str, Any]) -> HeaderConfig:
    return HeaderConfig(
        title=_str(raw, "title") or "",
        navigation=_str_list(raw, "navigation"),
        cta_button=_str(raw, "ctaButton"),
        background_image=_str(raw, "backgroundImage"),
        style=_str(raw, "style"),
        fixed=raw.get("fixed") is True,
    )


def _parse_hero(raw: dict[str, Any]) -> HeroConfig:
    return HeroConfig(
        title=_str(raw, "title") or "",
        subtitle=_str(raw, "subtitle"),
        cta_buttons=_str_list(raw, "ctaButtons"),
        background_image=_str(raw, "backgroundImage"),
        background_gradient=_str(raw, "backgroundGradient"),
        background_color=_str(raw, "backgroundColor"),
        features=_str_list(raw, "features"),
        layout=_str(raw, "layout"),
    )


def _parse_about(raw: dict[str, Any]) -> AboutConfig:
    return AboutConfig(
        title=_str(raw, "title") or "",
        description=_str(raw, "description") or "",
        skills=_str_list(raw, "skills"),
        image=_str(raw, "image"),
    )


def _parse_services(raw: dict[str, Any]) -> ServicesConfig:
    return ServicesConfig(
        title=_str(raw, "title") or "",
        services=[ServiceItem.parse(s) for s in _dict_list(raw, "services") or []],
        subtitle=_str(raw, "subtitle"),
        layout=_str(raw, "layout"),
    )


def _parse_footer(raw: dict[str, Any]) -> FooterConfig:
    return FooterConfig(
        title=_str(raw, "title") or "",
        description=_str(raw, "description"),
        social_links=_str_list(raw, "socialLinks"),
        copyright=_str(raw, "copyright"),
    )


def _parse_custom(raw: dict[str, Any]) -> CustomConfig:
    return CustomConfig(
        title=_str(raw, "title") or "",
        content=_str(raw, "content"),
    )


def _parse_products(raw: dict[str, Any]) -> ProductsConfig:
    return ProductsConfig(
        title=_str(raw, "title") or "",
        products=[ProductItem.parse(p) for p in _dict_list(raw, "products") or []],
        subtitle=_str(raw, "subtitle"),
        layout=_str(raw, "layout"),
    )


def _parse_testimonials(raw: dict[str, Any]) -> TestimonialsConfig:
    return TestimonialsConfig(
        title=_str(raw, "title") or "",
        testimonials=[TestimonialItem.parse(t) for t in _dict_list(raw, "testimonials") or []],
        subtitle=_str(raw, "subtitle"),
        layout=_str(raw, "layout"),
    )


_PARSERS = {
    "header": _parse_header,
    "hero": _parse_hero,
    "about": _parse_about,
    "services": _parse_services,
    "footer": _parse_footer,
    "custom": _parse_custom,
    "products": _parse_products,
    "testimonials": _parse_testimonials,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_config(section_type: str, raw: Any) -> SectionConfig:
    """
    Build the typed config view for a section.
    Unknown types yield UnknownConfig. Never raises.
    """
    if not isinstance(raw, dict):
        raw = {}
    parser = _PARSERS.get(section_type)
    if parser is None:
        return UnknownConfig(type=section_type, raw=dict(raw))
    return parser(raw)


def validate_config(section_type: str, raw: Any) -> list[str]:
    """
    Check a section config against its type's field lists.
    Returns a list of warning strings. Empty list = valid.

    Informational only: the store accepts invalid configs and the renderer
    degrades gracefully.
    """
    warnings: list[str] = []

    if section_type not in SECTION_TYPES:
        warnings.append(f"Unknown section type: {section_type}")
        return warnings

    if not isinstance(raw, dict):
        warnings.append("Config must be an object")
        return warnings

    for key in REQUIRED_FIELDS[section_type]:
        if key not in raw or raw[key] is None:
            warnings.append(f"{section_type}: missing required field '{key}'")

    for key in (*REQUIRED_FIELDS[section_type], *OPTIONAL_FIELDS[section_type]):
        value = raw.get(key)
        if value is None:
            continue
        if key in ("navigation", "ctaButtons", "features", "skills", "socialLinks"):
            if not isinstance(value, list):
                warnings.append(f"{section_type}: '{key}' must be a list of strings")
        elif key in ("services", "products", "testimonials"):
            if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
                warnings.append(f"{section_type}: '{key}' must be a list of objects")
        elif key == "fixed":
            if not isinstance(value, bool):
                warnings.append(f"{section_type}: 'fixed' must be a boolean")
        elif not isinstance(value, str):
            warnings.append(f"{section_type}: '{key}' must be a string")

    return warnings
