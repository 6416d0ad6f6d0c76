"""
Typed section config tests: parse_config never raises, validate_config warns.
"""

import pytest

from builder.kernel.sections import (
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    CustomConfig,
    HeaderConfig,
    HeroConfig,
    ServiceItem,
    ServicesConfig,
    TestimonialsConfig,
    UnknownConfig,
    parse_config,
    validate_config,
)
from builder.kernel.templates import list_templates
from builder.kernel.types import SECTION_TYPES


class TestParseConfig:
    def test_header(self):
        config = parse_config("header", {"title": "Brand", "navigation": ["Home", 2], "ctaButton": "Go", "fixed": True})

        assert isinstance(config, HeaderConfig)
        assert config.navigation == ["Home", "2"]
        assert config.cta_button == "Go"
        assert config.fixed is True

    def test_hero_wrong_types_are_absent(self):
        config = parse_config("hero", {"title": None, "subtitle": {"x": 1}, "ctaButtons": "Learn More"})

        assert isinstance(config, HeroConfig)
        assert config.title == ""
        assert config.subtitle is None
        assert config.cta_buttons is None

    def test_services_items(self):
        config = parse_config("services", {"title": "S", "services": [{"title": "A", "icon": "i"}, "junk"]})

        assert isinstance(config, ServicesConfig)
        assert config.services == [ServiceItem(title="A", icon="i")]

    def test_testimonial_rating(self):
        config = parse_config("testimonials", {"testimonials": [{"text": "t", "rating": 4.0}, {"text": "u", "rating": "5"}]})

        assert isinstance(config, TestimonialsConfig)
        assert [t.rating for t in config.testimonials] == [4, None]

    @pytest.mark.parametrize("rating", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_rating_is_absent(self, rating):
        config = parse_config("testimonials", {"testimonials": [{"text": "t", "rating": rating}]})
        assert config.testimonials[0].rating is None

    def test_unknown_type(self):
        config = parse_config("unknown-widget", {"foo": "bar"})

        assert isinstance(config, UnknownConfig)
        assert config.type == "unknown-widget"
        assert config.raw == {"foo": "bar"}

    @pytest.mark.parametrize("raw", [None, "text", 42, ["a"]])
    def test_non_dict_config(self, raw):
        assert parse_config("custom", raw) == CustomConfig()


class TestValidateConfig:
    def test_valid(self):
        assert validate_config("custom", {"title": "New Section", "content": "Add your content here"}) == []

    def test_missing_required(self):
        warnings = validate_config("about", {"title": "About"})
        assert warnings == ["about: missing required field 'description'"]

    def test_wrong_types(self):
        warnings = validate_config("header", {"title": "x", "navigation": "Home", "fixed": "yes"})

        assert "header: 'navigation' must be a list of strings" in warnings
        assert "header: 'fixed' must be a boolean" in warnings

    def test_item_lists(self):
        warnings = validate_config("services", {"title": "x", "services": ["a"]})
        assert warnings == ["services: 'services' must be a list of objects"]

    def test_unknown_type(self):
        assert validate_config("unknown-widget", {}) == ["Unknown section type: unknown-widget"]

    def test_non_dict(self):
        assert validate_config("hero", None) == ["Config must be an object"]

    def test_every_type_has_field_lists(self):
        assert set(REQUIRED_FIELDS) == SECTION_TYPES
        assert set(OPTIONAL_FIELDS) == SECTION_TYPES

    def test_catalog_templates_are_valid(self):
        for template in list_templates():
            for section in template.sections:
                assert validate_config(section["type"], section["config"]) == [], (template.id, section["id"])
