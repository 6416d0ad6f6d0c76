"""
Sitecraft Renderer -- Section Type Rendering Tests

One class per section type. Feed a single section, verify the HTML.

  - every section is wrapped in a selectable <section data-section-id=...>
  - required fields always render (empty when missing)
  - optional fields absent from config omit their sub-element entirely
  - unknown types render a visible, inert stub and never raise
  - user content is HTML-escaped
"""

from builder.kernel.renderer import render_section
from builder.kernel.templates import get_template
from builder.kernel.types import Section

# ============================================================================
# Helpers
# ============================================================================


def make_section(section_type, config=None, section_id="s1"):
    return Section(id=section_id, type=section_type, order=1, config=config if config is not None else {})


def template_section(template_id, section_id):
    for raw in get_template(template_id).sections:
        if raw["id"] == section_id:
            return Section.from_dict(raw)
    raise KeyError(section_id)


def assert_contains(html, *fragments):
    """Assert that the HTML output contains all given fragments."""
    for fragment in fragments:
        assert fragment in html, (
            f"Expected to find {fragment!r} in rendered HTML.\nGot (first 2000 chars):\n{html[:2000]}"
        )


def assert_not_contains(html, *fragments):
    """Assert that the HTML output does NOT contain any of the given fragments."""
    for fragment in fragments:
        assert fragment not in html, f"Did NOT expect to find {fragment!r} in rendered HTML."


# ============================================================================
# Wrapper
# ============================================================================


class TestSectionWrapper:
    def test_wrapper_carries_id_and_type(self):
        html = render_section(make_section("custom", {"title": "Hello"}, section_id="section-42"))

        assert_contains(
            html,
            '<section class="site-section site-section--custom"',
            'data-section-id="section-42"',
            'data-section-type="custom"',
            "</section>",
        )


# ============================================================================
# header
# ============================================================================


class TestHeaderSection:
    def test_full_header(self):
        html = render_section(template_section("portfolio-3", "header"))

        assert_contains(
            html,
            '<div class="site-brand">John Doe</div>',
            '<a href="#">Home</a>',
            '<a href="#">Contact</a>',
            '<a class="site-button" href="#">Get in Touch</a>',
        )

    def test_style_and_fixed(self):
        html = render_section(template_section("business-2", "navbar"))
        assert_contains(html, "site-header--bootstrap-navbar", "site-header--fixed")

    def test_optional_fields_omitted(self):
        html = render_section(make_section("header", {"title": "Brand"}))

        assert_contains(html, "Brand")
        assert_not_contains(html, "site-header-nav", "site-button", "background-image", "site-header--fixed")

    def test_missing_title_renders_empty(self):
        html = render_section(make_section("header", {}))
        assert_contains(html, '<div class="site-brand"></div>')


# ============================================================================
# hero
# ============================================================================


class TestHeroSection:
    def test_full_hero(self):
        html = render_section(template_section("portfolio-3", "hero"))

        assert_contains(
            html,
            "<h1>Full-Stack Developer &amp; Design Enthusiast</h1>",
            '<p class="site-hero-subtitle">',
            '<a class="site-button" href="#">View My Work</a>',
            '<a class="site-button site-button--secondary" href="#">Download Resume</a>',
            "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
        )

    def test_features_list(self):
        html = render_section(template_section("business-3", "hero-gradient"))
        assert_contains(html, '<ul class="site-hero-features">', "<li>✓ No credit card required</li>")

    def test_background_image(self):
        html = render_section(template_section("business-1", "hero"))
        assert_contains(html, "background-image: url(")

    def test_minimal_hero(self):
        html = render_section(make_section("hero", {}))

        assert_contains(html, "<h1></h1>")
        assert_not_contains(html, "site-hero-subtitle", "site-hero-actions", "site-hero-features", "style=")

    def test_wrong_typed_values_are_absent(self):
        html = render_section(make_section("hero", {"title": 42, "subtitle": ["not", "a", "string"]}))

        assert_contains(html, "<h1>42</h1>")
        assert_not_contains(html, "site-hero-subtitle")

    def test_title_is_escaped(self):
        html = render_section(make_section("hero", {"title": '<script>alert("xss")</script>'}))

        assert_not_contains(html, "<script>")
        assert_contains(html, "&lt;script&gt;")


# ============================================================================
# about
# ============================================================================


class TestAboutSection:
    def test_full_about(self):
        html = render_section(template_section("portfolio-3", "about"))

        assert_contains(html, "<h2>About Me</h2>", "<li>TypeScript</li>", '<img src="https://images.unsplash.com/')

    def test_required_description_renders_empty(self):
        html = render_section(make_section("about", {"title": "About"}))

        assert_contains(html, "<h2>About</h2>", "<p></p>")
        assert_not_contains(html, "<img", "site-skills")


# ============================================================================
# services
# ============================================================================


class TestServicesSection:
    def test_cards(self):
        html = render_section(template_section("business-2", "features-cards"))

        assert_contains(
            html,
            "<h2>Why Choose Us</h2>",
            '<p class="site-subtitle">',
            "site-services--card-deck",
            "<h3>Strategic Planning</h3>",
            '<span class="site-badge">Popular</span>',
            '<span class="site-icon">fas fa-chart-line</span>',
        )
        assert html.count('<article class="site-card">') == 3

    def test_item_optional_fields_omitted(self):
        html = render_section(make_section("services", {"title": "Services", "services": [{"title": "Only"}]}))

        assert_contains(html, "<h3>Only</h3>")
        assert_not_contains(html, "site-icon", "site-badge", "<p>", "site-subtitle")

    def test_missing_services_renders_empty_grid(self):
        html = render_section(make_section("services", {"title": "Services"}))
        assert_contains(html, '<div class="site-grid"></div>')


# ============================================================================
# products / testimonials
# ============================================================================


class TestProductsSection:
    def test_products(self):
        html = render_section(template_section("ecommerce-1", "product-grid"))

        assert_contains(html, "<h3>Designer Dress</h3>", '<p class="site-price">$299</p>', 'alt="Designer Dress"')
        assert html.count('<span class="site-badge">') == 2


class TestTestimonialsSection:
    def test_testimonials(self):
        html = render_section(template_section("business-2", "testimonials-carousel"))

        assert_contains(
            html,
            "<p>Amazing results with their Bootstrap implementation</p>",
            "<cite>Sarah Johnson, Tech Startup</cite>",
            "★★★★★",
        )

    def test_no_rating_no_stars(self):
        html = render_section(
            make_section("testimonials", {"title": "Kind words", "testimonials": [{"text": "Great"}]})
        )
        assert_not_contains(html, "site-rating", "<cite>")

    def test_infinite_rating_renders_without_stars(self):
        testimonials = [{"text": "Great", "rating": float("inf")}]
        html = render_section(make_section("testimonials", {"title": "Kind words", "testimonials": testimonials}))
        assert_contains(html, "<p>Great</p>")
        assert_not_contains(html, "site-rating", "site-stub")


# ============================================================================
# footer / custom
# ============================================================================


class TestFooterSection:
    def test_footer(self):
        html = render_section(template_section("business-1", "footer"))
        assert_contains(html, "<footer", "Get In Touch", "<li>linkedin</li>")

    def test_optional_fields_omitted(self):
        html = render_section(make_section("footer", {"title": "Bye"}))
        assert_not_contains(html, "site-social", "site-copyright", "<p>")


class TestCustomSection:
    def test_custom(self):
        html = render_section(make_section("custom", {"title": "New Section", "content": "Add your content here"}))
        assert_contains(html, "<h2>New Section</h2>", "<p>Add your content here</p>")

    def test_without_content(self):
        html = render_section(make_section("custom", {"title": "New Section"}))
        assert_not_contains(html, "<p>")


# ============================================================================
# Unknown types / malformed config
# ============================================================================


class TestUnknownSection:
    def test_unknown_type_renders_stub(self):
        html = render_section(make_section("unknown-widget", {"foo": "bar"}, section_id="w1"))

        assert_contains(
            html,
            'data-section-id="w1"',
            'class="site-stub"',
            "Unsupported section: unknown-widget",
        )
        assert_not_contains(html, "bar")

    def test_unknown_type_is_escaped(self):
        html = render_section(make_section("<b>x</b>"))
        assert_not_contains(html, "<b>x</b>")

    def test_non_dict_config(self):
        html = render_section(Section(id="s", type="hero", order=1, config=None))
        assert_contains(html, "<h1></h1>")
