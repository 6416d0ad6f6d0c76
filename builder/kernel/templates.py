"""
Sitecraft Kernel — Template Catalog

Read-only starter templates. Lookups return deep copies, so a caller that
edits a template (or a document seeded from one) never changes the catalog.

Only some gallery entries ship sections; the rest are metadata-only and seed
a blank home page.
"""

from __future__ import annotations

import copy
import logging

from builder.kernel.types import (
    HOME_PAGE_ID,
    Page,
    ProjectDocument,
    Section,
    Settings,
    Template,
    new_id,
)

logger = logging.getLogger(__name__)

_UNSPLASH = "https://images.unsplash.com"

# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

_CORPORATE_SECTIONS = [
    {
        "id": "header",
        "type": "header",
        "config": {
            "title": "Your Company Name",
            "navigation": ["Home", "About", "Services", "Contact"],
            "ctaButton": "Get Started",
        },
    },
    {
        "id": "hero",
        "type": "hero",
        "config": {
            "title": "Professional Business Solutions",
            "subtitle": "We help businesses grow with our expert services and innovative solutions.",
            "ctaButtons": ["Learn More", "Contact Us"],
            "backgroundImage": f"{_UNSPLASH}/photo-1497366216548-37526070297c",
        },
    },
    {
        "id": "about",
        "type": "about",
        "config": {
            "title": "About Our Company",
            "description": (
                "With years of experience in the industry, we provide top-notch services "
                "to help your business succeed."
            ),
            "image": f"{_UNSPLASH}/photo-1507003211169-0a1dd7228f2d",
        },
    },
    {
        "id": "services",
        "type": "services",
        "config": {
            "title": "Our Services",
            "services": [
                {"title": "Consulting", "description": "Expert business consulting", "icon": "fas fa-chart-line"},
                {"title": "Development", "description": "Custom software development", "icon": "fas fa-code"},
                {"title": "Support", "description": "24/7 customer support", "icon": "fas fa-headset"},
            ],
        },
    },
    {
        "id": "footer",
        "type": "footer",
        "config": {
            "title": "Get In Touch",
            "description": "Ready to work together? Contact us today.",
            "socialLinks": ["twitter", "linkedin", "facebook"],
        },
    },
]

_DEVELOPER_SECTIONS = [
    {
        "id": "header",
        "type": "header",
        "config": {
            "title": "John Doe",
            "navigation": ["Home", "About", "Portfolio", "Contact"],
            "ctaButton": "Get in Touch",
        },
    },
    {
        "id": "hero",
        "type": "hero",
        "config": {
            "title": "Full-Stack Developer & Design Enthusiast",
            "subtitle": "I create beautiful, functional websites and applications that solve real-world problems.",
            "ctaButtons": ["View My Work", "Download Resume"],
            "backgroundGradient": "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
        },
    },
    {
        "id": "about",
        "type": "about",
        "config": {
            "title": "About Me",
            "description": (
                "With over 5 years of experience in web development, I specialize in creating "
                "modern, responsive websites using the latest technologies."
            ),
            "skills": ["React", "Node.js", "TypeScript", "Python"],
            "image": f"{_UNSPLASH}/photo-1507003211169-0a1dd7228f2d",
        },
    },
    {
        "id": "services",
        "type": "services",
        "config": {
            "title": "What I Do",
            "services": [
                {
                    "title": "Frontend Development",
                    "description": "Creating responsive, interactive user interfaces",
                    "icon": "fas fa-code",
                },
                {
                    "title": "Backend Development",
                    "description": "Building robust APIs and server-side applications",
                    "icon": "fas fa-server",
                },
                {
                    "title": "Mobile Development",
                    "description": "Developing cross-platform mobile applications",
                    "icon": "fas fa-mobile-alt",
                },
            ],
        },
    },
    {
        "id": "footer",
        "type": "footer",
        "config": {
            "title": "Let's Work Together",
            "description": "Ready to bring your ideas to life? I'm here to help you create something amazing.",
            "socialLinks": ["twitter", "linkedin", "github", "dribbble"],
        },
    },
]

_BOOTSTRAP_CORPORATE_SECTIONS = [
    {
        "id": "navbar",
        "type": "header",
        "config": {
            "title": "BootCorp",
            "navigation": ["Home", "About", "Services", "Portfolio", "Contact"],
            "ctaButton": "Get Quote",
            "style": "bootstrap-navbar",
            "fixed": True,
        },
    },
    {
        "id": "hero-jumbotron",
        "type": "hero",
        "config": {
            "title": "Professional Business Solutions",
            "subtitle": (
                "Bootstrap-powered corporate website with modern components and responsive "
                "design for your business growth."
            ),
            "ctaButtons": ["Learn More", "Contact Sales"],
            "backgroundImage": f"{_UNSPLASH}/photo-1553877522-43269d4ea984",
            "layout": "jumbotron",
            "overlay": True,
        },
    },
    {
        "id": "features-cards",
        "type": "services",
        "config": {
            "title": "Why Choose Us",
            "subtitle": "Professional services with Bootstrap card components",
            "layout": "card-deck",
            "services": [
                {
                    "title": "Strategic Planning",
                    "description": "Comprehensive business strategy development",
                    "icon": "fas fa-chart-line",
                    "badge": "Popular",
                },
                {
                    "title": "Digital Transformation",
                    "description": "Modern technology implementation",
                    "icon": "fas fa-digital-tachograph",
                    "badge": "New",
                },
                {
                    "title": "24/7 Support",
                    "description": "Round-the-clock customer assistance",
                    "icon": "fas fa-headset",
                    "badge": "Premium",
                },
            ],
        },
    },
    {
        "id": "testimonials-carousel",
        "type": "testimonials",
        "config": {
            "title": "Client Success Stories",
            "layout": "carousel",
            "testimonials": [
                {
                    "name": "Sarah Johnson",
                    "company": "Tech Startup",
                    "text": "Amazing results with their Bootstrap implementation",
                    "rating": 5,
                },
                {
                    "name": "Mike Chen",
                    "company": "E-commerce",
                    "text": "Professional service and great communication",
                    "rating": 5,
                },
            ],
        },
    },
]

_SAAS_SECTIONS = [
    {
        "id": "saas-header",
        "type": "header",
        "config": {
            "title": "SaaSPro",
            "navigation": ["Features", "Pricing", "About", "Blog"],
            "ctaButton": "Start Free Trial",
            "style": "minimal",
            "transparent": True,
        },
    },
    {
        "id": "hero-gradient",
        "type": "hero",
        "config": {
            "title": "Scale Your Business with AI-Powered SaaS",
            "subtitle": "Join 10,000+ companies using our platform to streamline operations and boost productivity.",
            "ctaButtons": ["Start Free Trial", "Watch Demo"],
            "backgroundGradient": "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
            "features": ["✓ 14-day free trial", "✓ No credit card required", "✓ Cancel anytime"],
        },
    },
    {
        "id": "feature-grid",
        "type": "services",
        "config": {
            "title": "Powerful Features",
            "subtitle": "Everything you need to manage and grow your business",
            "layout": "grid-3",
            "services": [
                {"title": "Analytics Dashboard", "description": "Real-time insights and reporting", "icon": "fas fa-chart-bar"},
                {"title": "Team Collaboration", "description": "Work together seamlessly", "icon": "fas fa-users"},
                {"title": "API Integration", "description": "Connect with your favorite tools", "icon": "fas fa-plug"},
                {"title": "Advanced Security", "description": "Enterprise-grade protection", "icon": "fas fa-shield-alt"},
                {"title": "Custom Workflows", "description": "Automate your processes", "icon": "fas fa-cogs"},
                {"title": "24/7 Support", "description": "Get help when you need it", "icon": "fas fa-life-ring"},
            ],
        },
    },
]

_FASHION_SECTIONS = [
    {
        "id": "fashion-nav",
        "type": "header",
        "config": {
            "title": "StyleHub",
            "navigation": ["Women", "Men", "Kids", "Sale", "Brands"],
            "ctaButton": "Search",
            "style": "ecommerce",
            "searchBar": True,
            "cartIcon": True,
        },
    },
    {
        "id": "fashion-hero",
        "type": "hero",
        "config": {
            "title": "New Spring Collection",
            "subtitle": "Discover the latest trends and timeless pieces for your wardrobe.",
            "ctaButtons": ["Shop Women", "Shop Men"],
            "backgroundImage": f"{_UNSPLASH}/photo-1441986300917-64674bd600d8",
            "layout": "split",
            "productHighlight": True,
        },
    },
    {
        "id": "product-grid",
        "type": "products",
        "config": {
            "title": "Featured Products",
            "layout": "grid-4",
            "products": [
                {
                    "name": "Designer Dress",
                    "price": "$299",
                    "image": f"{_UNSPLASH}/photo-1595777457583-95e059d581b8",
                    "badge": "New",
                },
                {
                    "name": "Casual Sneakers",
                    "price": "$129",
                    "image": f"{_UNSPLASH}/photo-1549298916-b41d501d3772",
                    "badge": "Sale",
                },
                {"name": "Classic Handbag", "price": "$199", "image": f"{_UNSPLASH}/photo-1553062407-98eeb64c6a62"},
                {"name": "Summer Jacket", "price": "$159", "image": f"{_UNSPLASH}/photo-1551028719-00167b16eac5"},
            ],
        },
    },
]

# (id, name, category, thumbnail photo, description, sections)
_CATALOG_ROWS = [
    ("business-1", "Corporate", "business", "photo-1497366216548-37526070297c",
     "Professional business template", _CORPORATE_SECTIONS),
    ("portfolio-3", "Developer", "portfolio", "photo-1461749280684-dccba630e2f6",
     "Minimal developer portfolio", _DEVELOPER_SECTIONS),
    ("business-2", "Bootstrap Corporate", "business", "photo-1553877522-43269d4ea984",
     "Professional Bootstrap-based corporate website", _BOOTSTRAP_CORPORATE_SECTIONS),
    ("business-3", "SaaS Landing", "business", "photo-1507003211169-0a1dd7228f2d",
     "Modern SaaS product landing page", _SAAS_SECTIONS),
    ("business-4", "Digital Agency", "business", "photo-1551836022-deb4988cc6c0",
     "Creative agency portfolio with services", []),
    ("business-5", "Startup MVP", "business", "photo-1559136555-9303baea8ebd",
     "Clean startup landing with call-to-action", []),
    ("business-6", "Professional Services", "business", "photo-1486406146926-c627a92ad1ab",
     "Law firm, consulting, professional services", []),
    ("portfolio-1", "Creative Portfolio", "portfolio", "photo-1586717791821-3f44a563fa4c",
     "Designer and artist portfolio showcase", []),
    ("portfolio-2", "Photography Studio", "portfolio", "photo-1542038784456-1ea8e935640e",
     "Professional photography portfolio", []),
    ("portfolio-4", "Architecture Firm", "portfolio", "photo-1503387762-592deb58ef4e",
     "Architectural projects showcase", []),
    ("portfolio-5", "Personal Blog", "portfolio", "photo-1486312338219-ce68e2c6c725",
     "Personal brand and blog template", []),
    ("portfolio-6", "Music Artist", "portfolio", "photo-1493225457124-a3eb161ffa5f",
     "Musician and artist portfolio", []),
    ("ecommerce-1", "Fashion Store", "ecommerce", "photo-1441986300917-64674bd600d8",
     "Modern fashion e-commerce storefront", _FASHION_SECTIONS),
    ("ecommerce-2", "Tech Electronics", "ecommerce", "photo-1560472354-b33ff0c44a43",
     "Electronics store with product catalog", []),
    ("ecommerce-3", "Handmade Crafts", "ecommerce", "photo-1452860606245-08befc0ff44b",
     "Artisan crafts and handmade products", []),
    ("ecommerce-4", "Beauty & Wellness", "ecommerce", "photo-1556228453-efd6c1ff04f6",
     "Beauty products and wellness store", []),
    ("ecommerce-5", "Food & Restaurant", "ecommerce", "photo-1414235077428-838989a212a2d",
     "Restaurant menu and online ordering", []),
]  # fmt: skip

_CATALOG: dict[str, Template] = {
    row[0]: Template(
        id=row[0],
        name=row[1],
        category=row[2],
        thumbnail=f"{_UNSPLASH}/{row[3]}",
        description=row[4],
        sections=row[5],
    )
    for row in _CATALOG_ROWS
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def list_templates(category: str | None = None) -> list[Template]:
    """All templates in catalog order, optionally filtered by category."""
    return [copy.deepcopy(t) for t in _CATALOG.values() if category is None or t.category == category]


def get_template(template_id: str) -> Template | None:
    template = _CATALOG.get(template_id)
    return copy.deepcopy(template) if template is not None else None


def new_document_from_template(template: Template, name: str | None = None) -> ProjectDocument:
    """
    Seed a project from a template: one home page holding the template's
    sections, default settings. Sections without an order get index+1.
    """
    sections = []
    for index, raw in enumerate(template.sections):
        section = Section.from_dict(raw)
        if not section.id:
            section.id = new_id()
        if section.order is None:
            section.order = index + 1
        sections.append(section)

    logger.debug("seeding project from template %s (%d sections)", template.id, len(sections))
    return ProjectDocument(
        id=new_id("project"),
        name=name or template.name,
        template_id=template.id,
        pages=[Page(id=HOME_PAGE_ID, name="Home", slug="home", sections=sections, is_home_page=True)],
        settings=Settings(),
    )


def new_blank_document(name: str) -> ProjectDocument:
    """A project with one empty home page."""
    return ProjectDocument(
        id=new_id("project"),
        name=name,
        pages=[Page(id=HOME_PAGE_ID, name="Home", slug="home", is_home_page=True)],
        settings=Settings(),
    )
