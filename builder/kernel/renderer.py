"""
Sitecraft Kernel — Renderer

Pure functions: (document, page?, context?/options?) → HTML string (or text string)
No AI. No IO. Deterministic: same input → same output, always.

- render_page: preview fragment for the canvas (device width, zoom scale)
- render_section: one section, dispatched strictly on `type`
- render_document: complete standalone HTML file (used by export)
- render_text: plain-text outline channel for logs and terminals

Every section body is a Mustache template rendered with chevron against the
typed config view from sections.py. Required fields always appear (empty
when missing); optional fields appear only when present.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from html import escape as _html_escape
from typing import Any

import chevron

from builder.kernel.ordering import sort_sections
from builder.kernel.sections import UnknownConfig, parse_config
from builder.kernel.types import (
    DEVICE_WIDTHS,
    ZOOM_DEFAULT,
    Page,
    ProjectDocument,
    RenderOptions,
    Section,
    Settings,
    ViewContext,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_page(
    document: ProjectDocument,
    page: Page | None = None,
    context: ViewContext | None = None,
) -> str:
    """
    Render one page as a preview fragment.
    Zoom only scales the wrapper; device only picks the viewport width.
    Pure function. No side effects. No IO.
    """
    ctx = context or ViewContext()
    page = page or document.home_page

    width = DEVICE_WIDTHS.get(ctx.device, DEVICE_WIDTHS["desktop"])
    zoom = ctx.zoom if isinstance(ctx.zoom, (int, float)) else ZOOM_DEFAULT
    scale = f"{zoom / 100:g}"

    style = (
        f"max-width: {width}px; "
        f"transform: scale({scale}); "
        f"transform-origin: top center; "
        f"{_css_vars_inline(document.settings)}"
    )

    parts: list[str] = []
    parts.append(
        f'<div class="site-preview" data-device="{escape(ctx.device)}" '
        f'data-zoom="{escape(zoom)}" style="{escape(style)}">'
    )
    if page is None:
        parts.append('  <p class="site-empty">This project has no pages.</p>')
    else:
        parts.append(f'  <div class="site-page" data-page-id="{escape(page.id)}" data-page-slug="{escape(page.slug)}">')
        body = _render_sections(page.sections, document.settings)
        parts.append(body if body else '    <p class="site-empty">This page is empty.</p>')
        parts.append("  </div>")
    parts.append("</div>")
    return "\n".join(parts)


def render_section(section: Section, settings: Settings | None = None) -> str:
    """
    Render a single section. Unknown types render a visible inert stub.
    Never raises for bad config data.
    """
    settings = settings or Settings()
    handler = SECTION_HANDLERS.get(section.type)
    if handler is None:
        body = _render_stub(section)
    else:
        try:
            body = handler(section, settings)
        except (TypeError, ValueError, AttributeError, ArithmeticError):
            logger.warning("section %s (%s) failed to render", section.id, section.type, exc_info=True)
            body = _render_stub(section)

    return (
        f'<section class="site-section site-section--{escape(section.type)}" '
        f'data-section-id="{escape(section.id)}" data-section-type="{escape(section.type)}">'
        f"{body}</section>"
    )


def render_document(
    document: ProjectDocument,
    page: Page | None = None,
    options: RenderOptions | None = None,
) -> str:
    """
    Render a complete HTML file for one page of the project.
    Returns a UTF-8 HTML string, or plain text when options.channel == "text".
    """
    opts = options or RenderOptions()
    page = page or document.home_page

    if opts.channel == "text":
        return render_text(document, page)

    return _render_html(document, page, opts)


def render_text(document: ProjectDocument, page: Page | None = None) -> str:
    """
    Plain-text outline: project name, then each page with its sections in
    display order. With `page` given, only that page is listed.
    """
    parts: list[str] = []

    title = document.name or "Untitled"
    parts.append(title)
    parts.append("=" * len(title))
    parts.append("")

    pages = [page] if page is not None else document.pages
    for p in pages:
        marker = " [home]" if p.is_home_page else ""
        parts.append(f"{p.name} (/{p.slug}){marker}")
        ordered = sort_sections(p.sections)
        if not ordered:
            parts.append("  (empty)")
        for index, section in enumerate(ordered, start=1):
            parts.append(f"  {index}. {_section_text(section)}")
        parts.append("")

    return "\n".join(parts).rstrip()


def page_filename(page: Page) -> str:
    """File name of a page in a static bundle. The home page is index.html."""
    return "index.html" if page.is_home_page else f"{page.slug}.html"


def page_filenames(document: ProjectDocument) -> list[str]:
    """
    Bundle file name per page, aligned with document.pages.
    The home page claims index.html first; any other page whose name is
    already taken gets -2, -3, ... before the extension.
    """
    names: list[str | None] = [None] * len(document.pages)
    taken: set[str] = set()
    order = sorted(range(len(document.pages)), key=lambda i: not document.pages[i].is_home_page)
    for i in order:
        page = document.pages[i]
        stem = "index" if page.is_home_page else page.slug
        name = f"{stem}.html"
        suffix = 2
        while name in taken:
            name = f"{stem}-{suffix}.html"
            suffix += 1
        taken.add(name)
        names[i] = name
    return names


# ---------------------------------------------------------------------------
# HTML rendering (document channel)
# ---------------------------------------------------------------------------

BASE_CSS = """
*, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }
body {
  font-family: var(--font-family);
  font-size: var(--body-size);
  color: #1f2937;
  line-height: 1.6;
}
h1, h2, h3 { line-height: 1.2; margin-bottom: 8px; }
h1 { font-size: var(--heading-size); }
.site-container { max-width: var(--container-width); margin: 0 auto; padding: var(--spacing); }
.site-section { padding: calc(var(--spacing) * 2) var(--spacing); }
.site-nav { display: flex; gap: 16px; padding: 12px var(--spacing); border-bottom: 1px solid #e5e7eb; }
.site-nav a { color: var(--color-primary); text-decoration: none; }
.site-nav a[aria-current="page"] { font-weight: 600; }
.site-button {
  display: inline-block;
  padding: 10px 20px;
  border-radius: 6px;
  background: var(--color-primary);
  color: #fff;
  transition: opacity var(--animation-speed);
}
.site-button--secondary { background: var(--color-secondary); }
.site-badge { background: var(--color-accent); color: #fff; font-size: 12px; padding: 2px 8px; border-radius: 999px; }
.site-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(220px, 1fr)); gap: var(--spacing); }
.site-stub { border: 2px dashed #f59e0b; padding: 16px; color: #92400e; font-family: monospace; }
.site-empty { color: #888; font-style: italic; }
.site-footer-note { margin-top: 48px; font-size: 12px; color: #aaa; text-align: center; }
"""

HOVER_CSS = """
.site-section:hover { box-shadow: 0 4px 12px rgba(0,0,0,0.08); transition: box-shadow var(--animation-speed); }
"""

CONTAINER_WIDTH_CSS: dict[str, str] = {
    "4xl": "56rem",
    "5xl": "64rem",
    "6xl": "72rem",
    "7xl": "80rem",
    "full": "100%",
}

ANIMATION_SPEED_CSS: dict[str, str] = {
    "slow": "600ms",
    "normal": "300ms",
    "fast": "150ms",
}

FONT_STACKS: dict[str, str] = {
    "inter": "Inter, sans-serif",
    "roboto": "Roboto, sans-serif",
    "poppins": "Poppins, sans-serif",
    "playfair": "'Playfair Display', serif",
    "montserrat": "Montserrat, sans-serif",
}


def _render_html(document: ProjectDocument, page: Page | None, opts: RenderOptions) -> str:
    parts: list[str] = []

    parts.append("<!DOCTYPE html>")
    parts.append('<html lang="en">')
    parts.append("<head>")
    parts.append('  <meta charset="utf-8">')
    parts.append('  <meta name="viewport" content="width=device-width, initial-scale=1">')

    title = document.name or "Untitled"
    if page is not None and not page.is_home_page:
        title = f"{page.name} | {title}"
    parts.append(f"  <title>{escape(title)}</title>")

    # Fonts
    if opts.include_fonts:
        family = document.settings.typography.font_family
        if family in FONT_STACKS:
            google_name = FONT_STACKS[family].split(",")[0].strip("'").replace(" ", "+")
            parts.append('  <link rel="preconnect" href="https://fonts.googleapis.com">')
            parts.append(
                f'  <link href="https://fonts.googleapis.com/css2?family={google_name}'
                f':wght@400;600;700&display=swap" rel="stylesheet">'
            )

    # CSS
    parts.append("  <style>")
    parts.append(_render_css(document.settings))
    parts.append("  </style>")

    parts.append("</head>")
    parts.append("<body>")

    if opts.include_nav and len(document.pages) > 1:
        parts.append(_render_nav(document, page))

    parts.append('  <main class="site-container">')
    body = _render_sections(page.sections, document.settings) if page is not None else ""
    parts.append(body if body else '    <p class="site-empty">This page is empty.</p>')
    parts.append("  </main>")

    if opts.footer:
        parts.append(f'  <footer class="site-footer-note">{escape(opts.footer)}</footer>')

    parts.append("</body>")
    parts.append("</html>")

    return "\n".join(parts)


def _css_vars(settings: Settings) -> dict[str, str]:
    """Map Settings to CSS custom properties. Unknown tokens fall back to defaults."""
    colors = settings.colors
    typography = settings.typography
    layout = settings.layout
    animations = settings.animations
    return {
        "--color-primary": str(colors.primary),
        "--color-secondary": str(colors.secondary),
        "--color-accent": str(colors.accent),
        "--font-family": FONT_STACKS.get(typography.font_family, f"{typography.font_family}, sans-serif"),
        "--heading-size": f"{typography.heading_size}px",
        "--body-size": f"{typography.body_size}px",
        "--spacing": f"{layout.spacing}px",
        "--container-width": CONTAINER_WIDTH_CSS.get(layout.container_width, CONTAINER_WIDTH_CSS["6xl"]),
        "--animation-speed": ANIMATION_SPEED_CSS.get(animations.speed, ANIMATION_SPEED_CSS["normal"]),
    }


def _css_vars_inline(settings: Settings) -> str:
    return " ".join(f"{name}: {value};" for name, value in _css_vars(settings).items())


def _render_css(settings: Settings) -> str:
    body = "\n".join(f"  {name}: {value};" for name, value in _css_vars(settings).items())
    css = [f":root {{\n{body}\n}}", BASE_CSS.strip()]
    if settings.animations.hover_effects:
        css.append(HOVER_CSS.strip())
    # Style content is user-controlled; keep it from closing the tag
    return "\n".join(css).replace("</", "<\\/")


def _render_nav(document: ProjectDocument, current: Page | None) -> str:
    links = []
    for p, filename in zip(document.pages, page_filenames(document), strict=True):
        current_attr = ' aria-current="page"' if current is not None and p.id == current.id else ""
        links.append(f'<a href="{escape(filename)}"{current_attr}>{escape(p.name)}</a>')
    return f'  <nav class="site-nav">{"".join(links)}</nav>'


def _render_sections(sections: list[Section], settings: Settings) -> str:
    return "\n".join(f"    {render_section(s, settings)}" for s in sort_sections(sections))


# ---------------------------------------------------------------------------
# Section templates
# ---------------------------------------------------------------------------

HEADER_TEMPLATE = (
    '<header class="site-header{{#style}} site-header--{{.}}{{/style}}{{#fixed}} site-header--fixed{{/fixed}}"'
    '{{#background_image}} style="background-image: url(\'{{.}}\')"{{/background_image}}>'
    '<div class="site-brand">{{title}}</div>'
    '{{#has_navigation}}<nav class="site-header-nav">{{#navigation}}<a href="#">{{.}}</a>{{/navigation}}</nav>'
    "{{/has_navigation}}"
    '{{#cta_button}}<a class="site-button" href="#">{{.}}</a>{{/cta_button}}'
    "</header>"
)

HERO_TEMPLATE = (
    '<div class="site-hero{{#layout}} site-hero--{{.}}{{/layout}}"'
    '{{#background_style}} style="{{.}}"{{/background_style}}>'
    "<h1>{{title}}</h1>"
    '{{#subtitle}}<p class="site-hero-subtitle">{{.}}</p>{{/subtitle}}'
    '{{#has_cta_buttons}}<div class="site-hero-actions">{{#cta_buttons}}'
    '<a class="site-button{{^first}} site-button--secondary{{/first}}" href="#">{{label}}</a>'
    "{{/cta_buttons}}</div>{{/has_cta_buttons}}"
    '{{#has_features}}<ul class="site-hero-features">{{#features}}<li>{{.}}</li>{{/features}}</ul>{{/has_features}}'
    "</div>"
)

ABOUT_TEMPLATE = (
    '<div class="site-about">'
    "<h2>{{title}}</h2>"
    "<p>{{description}}</p>"
    '{{#image}}<img src="{{.}}" alt="" loading="lazy">{{/image}}'
    '{{#has_skills}}<ul class="site-skills">{{#skills}}<li>{{.}}</li>{{/skills}}</ul>{{/has_skills}}'
    "</div>"
)

SERVICES_TEMPLATE = (
    '<div class="site-services{{#layout}} site-services--{{.}}{{/layout}}">'
    "<h2>{{title}}</h2>"
    '{{#subtitle}}<p class="site-subtitle">{{.}}</p>{{/subtitle}}'
    '<div class="site-grid">{{#services}}<article class="site-card">'
    '{{#icon}}<span class="site-icon">{{.}}</span>{{/icon}}'
    "<h3>{{title}}</h3>"
    '{{#badge}}<span class="site-badge">{{.}}</span>{{/badge}}'
    "{{#description}}<p>{{.}}</p>{{/description}}"
    "</article>{{/services}}</div>"
    "</div>"
)

PRODUCTS_TEMPLATE = (
    '<div class="site-products{{#layout}} site-products--{{.}}{{/layout}}">'
    "<h2>{{title}}</h2>"
    '{{#subtitle}}<p class="site-subtitle">{{.}}</p>{{/subtitle}}'
    '<div class="site-grid">{{#products}}<article class="site-card">'
    '{{#image}}<img src="{{.}}" alt="{{name}}" loading="lazy">{{/image}}'
    "<h3>{{name}}</h3>"
    '{{#badge}}<span class="site-badge">{{.}}</span>{{/badge}}'
    '{{#price}}<p class="site-price">{{.}}</p>{{/price}}'
    "</article>{{/products}}</div>"
    "</div>"
)

TESTIMONIALS_TEMPLATE = (
    '<div class="site-testimonials{{#layout}} site-testimonials--{{.}}{{/layout}}">'
    "<h2>{{title}}</h2>"
    '{{#subtitle}}<p class="site-subtitle">{{.}}</p>{{/subtitle}}'
    '<div class="site-grid">{{#testimonials}}<blockquote class="site-card">'
    "<p>{{text}}</p>"
    '{{#stars}}<span class="site-rating" aria-label="{{rating}} stars">{{.}}</span>{{/stars}}'
    "{{#name}}<cite>{{.}}{{#company}}, {{.}}{{/company}}</cite>{{/name}}"
    "</blockquote>{{/testimonials}}</div>"
    "</div>"
)

FOOTER_TEMPLATE = (
    '<footer class="site-footer">'
    '<div class="site-brand">{{title}}</div>'
    "{{#description}}<p>{{.}}</p>{{/description}}"
    '{{#has_social_links}}<ul class="site-social">{{#social_links}}<li>{{.}}</li>{{/social_links}}</ul>'
    "{{/has_social_links}}"
    '{{#copyright}}<p class="site-copyright">{{.}}</p>{{/copyright}}'
    "</footer>"
)

CUSTOM_TEMPLATE = (
    '<div class="site-custom">'
    "<h2>{{title}}</h2>"
    "{{#content}}<p>{{.}}</p>{{/content}}"
    "</div>"
)


def _template_context(config: Any) -> dict[str, Any]:
    """
    Dataclass config → Mustache context. Every field is present (None when
    absent) so inner sections never resolve against an outer scope.
    List fields also get a `has_<name>` flag for wrapper elements.
    """
    context = asdict(config)
    for key, value in list(context.items()):
        if isinstance(value, list):
            context[f"has_{key}"] = bool(value)
    return context


def _render_template(template: str, context: dict[str, Any]) -> str:
    return chevron.render(template, context)


def _render_header(section: Section, settings: Settings) -> str:
    config = parse_config("header", section.config)
    return _render_template(HEADER_TEMPLATE, _template_context(config))


def _render_hero(section: Section, settings: Settings) -> str:
    config = parse_config("hero", section.config)
    context = _template_context(config)

    background = []
    if config.background_image:
        background.append(f"background-image: url('{config.background_image}')")
    elif config.background_gradient:
        background.append(f"background: {config.background_gradient}")
    if config.background_color:
        background.append(f"background-color: {config.background_color}")
    context["background_style"] = "; ".join(background) or None

    context["cta_buttons"] = [{"label": label, "first": i == 0} for i, label in enumerate(config.cta_buttons or [])]
    return _render_template(HERO_TEMPLATE, context)


def _render_about(section: Section, settings: Settings) -> str:
    config = parse_config("about", section.config)
    return _render_template(ABOUT_TEMPLATE, _template_context(config))


def _render_services(section: Section, settings: Settings) -> str:
    config = parse_config("services", section.config)
    return _render_template(SERVICES_TEMPLATE, _template_context(config))


def _render_products(section: Section, settings: Settings) -> str:
    config = parse_config("products", section.config)
    return _render_template(PRODUCTS_TEMPLATE, _template_context(config))


def _render_testimonials(section: Section, settings: Settings) -> str:
    config = parse_config("testimonials", section.config)
    context = _template_context(config)
    for item in context["testimonials"]:
        rating = item.get("rating")
        item["stars"] = "★" * max(0, min(5, rating)) if rating else None
    return _render_template(TESTIMONIALS_TEMPLATE, context)


def _render_footer(section: Section, settings: Settings) -> str:
    config = parse_config("footer", section.config)
    return _render_template(FOOTER_TEMPLATE, _template_context(config))


def _render_custom(section: Section, settings: Settings) -> str:
    config = parse_config("custom", section.config)
    return _render_template(CUSTOM_TEMPLATE, _template_context(config))


def _render_stub(section: Section) -> str:
    return f'<div class="site-stub">Unsupported section: {escape(section.type or "(untyped)")}</div>'


SECTION_HANDLERS = {
    "header": _render_header,
    "hero": _render_hero,
    "about": _render_about,
    "services": _render_services,
    "footer": _render_footer,
    "custom": _render_custom,
    "products": _render_products,
    "testimonials": _render_testimonials,
}


# ---------------------------------------------------------------------------
# Text channel
# ---------------------------------------------------------------------------


def _section_text(section: Section) -> str:
    config = parse_config(section.type, section.config)
    if isinstance(config, UnknownConfig):
        return f"{section.type or '(untyped)'} (unsupported)"
    title = getattr(config, "title", "")
    return f"{section.type}: {title}" if title else section.type


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def escape(text: Any) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)
