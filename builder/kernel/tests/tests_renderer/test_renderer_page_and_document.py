"""
Sitecraft Renderer -- Preview, Document and Text Channel Tests

  - sections render ascending by order; ties keep list position
  - device picks the viewport width, zoom only scales the wrapper
  - render_document produces a standalone file with settings-derived CSS
  - render_text produces a page/section outline
"""

from builder.kernel.renderer import page_filename, page_filenames, render_document, render_page, render_text
from builder.kernel.templates import get_template, new_blank_document, new_document_from_template
from builder.kernel.types import Page, RenderOptions, Section, Settings, ViewContext

# ============================================================================
# Helpers
# ============================================================================


def doc_with_sections(*sections):
    doc = new_blank_document("Ordering")
    doc.home_page.sections.extend(sections)
    return doc


def custom(section_id, order):
    return Section(id=section_id, type="custom", order=order, config={"title": section_id})


def positions(html, *ids):
    return [html.index(f'data-section-id="{i}"') for i in ids]


# ============================================================================
# Ordering
# ============================================================================


class TestRenderOrder:
    def test_sorted_by_order(self):
        html = render_page(doc_with_sections(custom("a", 3), custom("b", 1), custom("c", 2)))

        pb, pc, pa = positions(html, "b", "c", "a")
        assert pb < pc < pa

    def test_ties_keep_list_position(self):
        html = render_page(doc_with_sections(custom("x", 1), custom("y", 1), custom("z", 0)))

        pz, px, py = positions(html, "z", "x", "y")
        assert pz < px < py

    def test_render_does_not_reorder_document(self):
        doc = doc_with_sections(custom("a", 3), custom("b", 1))
        render_page(doc)
        assert [s.id for s in doc.home_page.sections] == ["a", "b"]

    def test_unordered_sections_sink_to_end(self):
        html = render_page(doc_with_sections(custom("none", None), custom("one", 1)))

        pone, pnone = positions(html, "one", "none")
        assert pone < pnone


# ============================================================================
# Preview wrapper
# ============================================================================


class TestPreviewWrapper:
    def test_device_widths(self):
        doc = new_blank_document("Site")
        assert "max-width: 375px" in render_page(doc, context=ViewContext(device="mobile"))
        assert "max-width: 768px" in render_page(doc, context=ViewContext(device="tablet"))
        assert "max-width: 1200px" in render_page(doc, context=ViewContext(device="desktop"))

    def test_unknown_device_falls_back_to_desktop(self):
        html = render_page(new_blank_document("Site"), context=ViewContext(device="watch"))
        assert "max-width: 1200px" in html

    def test_zoom_scale(self):
        doc = new_blank_document("Site")
        assert "transform: scale(1);" in render_page(doc)
        assert "transform: scale(0.5);" in render_page(doc, context=ViewContext(zoom=50))
        assert "transform-origin: top center" in render_page(doc)

    def test_zoom_does_not_change_section_markup(self):
        doc = new_document_from_template(get_template("portfolio-3"))

        small = render_page(doc, context=ViewContext(zoom=50)).split("\n")
        large = render_page(doc, context=ViewContext(zoom=200)).split("\n")

        assert small[0] != large[0]
        assert small[1:] == large[1:]

    def test_settings_become_css_vars(self):
        doc = new_blank_document("Site")
        doc.settings = Settings().merged({"colors": {"primary": "#123456"}})

        html = render_page(doc)

        assert "--color-primary: #123456;" in html
        assert "--color-accent: #10B981;" in html

    def test_empty_page(self):
        html = render_page(new_blank_document("Site"))
        assert "This page is empty." in html

    def test_specific_page(self):
        doc = new_document_from_template(get_template("portfolio-3"))
        contact = Page(id="contact", name="Contact", slug="contact", sections=[custom("c1", 1)])
        doc.pages.append(contact)

        html = render_page(doc, contact)

        assert 'data-section-id="c1"' in html
        assert 'data-section-id="hero"' not in html

    def test_unknown_section_in_page_does_not_break_others(self):
        doc = doc_with_sections(custom("a", 1), Section(id="w", type="unknown-widget", order=2, config={}))
        html = render_page(doc)

        assert "Unsupported section: unknown-widget" in html
        assert 'data-section-id="a"' in html


# ============================================================================
# Standalone document
# ============================================================================


class TestRenderDocument:
    def test_file_structure(self):
        doc = new_document_from_template(get_template("portfolio-3"), name="Jane's Site")
        html = render_document(doc)

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Jane&#x27;s Site</title>" in html
        assert ":root {" in html
        assert 'data-section-id="footer"' in html
        assert html.rstrip().endswith("</html>")

    def test_nav_only_with_multiple_pages(self):
        doc = new_document_from_template(get_template("portfolio-3"))
        assert '<nav class="site-nav">' not in render_document(doc)

        doc.pages.append(Page(id="about", name="About", slug="about"))
        html = render_document(doc)

        assert '<nav class="site-nav">' in html
        assert '<a href="index.html" aria-current="page">Home</a>' in html
        assert '<a href="about.html">About</a>' in html

    def test_nav_can_be_disabled(self):
        doc = new_document_from_template(get_template("portfolio-3"))
        doc.pages.append(Page(id="about", name="About", slug="about"))

        html = render_document(doc, options=RenderOptions(include_nav=False))

        assert '<nav class="site-nav">' not in html

    def test_sub_page_title(self):
        doc = new_blank_document("Site")
        about = Page(id="about", name="About", slug="about")
        doc.pages.append(about)

        assert "<title>About | Site</title>" in render_document(doc, about)

    def test_fonts(self):
        doc = new_blank_document("Site")
        assert "fonts.googleapis.com/css2?family=Inter" in render_document(doc)
        assert "fonts.googleapis.com" not in render_document(doc, options=RenderOptions(include_fonts=False))

    def test_unknown_tokens_fall_back(self):
        doc = new_blank_document("Site")
        doc.settings = Settings().merged({"layout": {"containerWidth": "9xl"}, "animations": {"speed": "warp"}})

        html = render_document(doc)

        assert "--container-width: 72rem;" in html
        assert "--animation-speed: 300ms;" in html

    def test_known_tokens(self):
        doc = new_blank_document("Site")
        doc.settings = Settings().merged({"layout": {"containerWidth": "full"}, "animations": {"speed": "fast"}})

        html = render_document(doc)

        assert "--container-width: 100%;" in html
        assert "--animation-speed: 150ms;" in html

    def test_hover_effects(self):
        doc = new_blank_document("Site")
        assert ".site-section:hover" not in render_document(doc)

        doc.settings = Settings().merged({"animations": {"hoverEffects": True}})
        assert ".site-section:hover" in render_document(doc)

    def test_footer_option(self):
        html = render_document(new_blank_document("Site"), options=RenderOptions(footer="Made with Sitecraft"))
        assert '<footer class="site-footer-note">Made with Sitecraft</footer>' in html

    def test_text_channel(self):
        doc = new_document_from_template(get_template("portfolio-3"))
        text = render_document(doc, options=RenderOptions(channel="text"))
        assert "<html" not in text
        assert "1. header: John Doe" in text

    def test_page_filename(self):
        assert page_filename(Page(id="home", name="Home", slug="home", is_home_page=True)) == "index.html"
        assert page_filename(Page(id="a", name="About", slug="about")) == "about.html"

    def test_page_filenames_never_collide(self):
        doc = new_blank_document("Site")
        doc.pages.append(Page(id="idx", name="Index", slug="index"))
        doc.pages.append(Page(id="a1", name="About", slug="about"))
        doc.pages.append(Page(id="a2", name="About again", slug="about"))

        assert page_filenames(doc) == ["index.html", "index-2.html", "about.html", "about-2.html"]

    def test_nav_links_use_bundle_names(self):
        doc = new_blank_document("Site")
        doc.pages.append(Page(id="idx", name="Index", slug="index"))

        html = render_document(doc)
        assert '<a href="index.html" aria-current="page">Home</a>' in html
        assert '<a href="index-2.html">Index</a>' in html


# ============================================================================
# Text outline
# ============================================================================


class TestRenderText:
    def test_outline(self):
        doc = new_document_from_template(get_template("portfolio-3"), name="Dev Site")
        text = render_text(doc)

        lines = text.split("\n")
        assert lines[0] == "Dev Site"
        assert lines[1] == "========"
        assert "Home (/home) [home]" in lines
        assert "  1. header: John Doe" in lines
        assert "  5. footer: Let's Work Together" in lines

    def test_unknown_and_empty(self):
        doc = doc_with_sections(Section(id="w", type="unknown-widget", order=1, config={}))
        doc.pages.append(Page(id="about", name="About", slug="about"))

        text = render_text(doc)

        assert "  1. unknown-widget (unsupported)" in text
        assert "  (empty)" in text
