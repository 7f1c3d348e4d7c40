"""Unit tests for rwd_images.services.registry."""

import logging

import pytest

from rwd_images.models import BreakpointOption, SizeValidationError, parse_size
from rwd_images.services.registry import SizeRegistry


class TestRegisterSize:
    def test_size_is_stored(self):
        registry = SizeRegistry()
        size = registry.register_size("hero", "1600x900")
        assert registry.get_size("hero") == size

    def test_magnifications_are_registered(self):
        registry = SizeRegistry()
        registry.register_size("hero", [800, 600, True], {"2x": 2, "3x": 3})
        assert registry.get_size("hero @2x").width == 1600
        assert registry.get_size("hero @3x").height == 1800
        assert registry.get_size("hero @3x").crop is True

    def test_invalid_params_propagate(self):
        registry = SizeRegistry()
        with pytest.raises(SizeValidationError):
            registry.register_size("hero", [800])
        assert registry.get_size("hero") is None

    def test_last_registration_wins(self):
        registry = SizeRegistry()
        registry.register_size("hero", "800x600")
        registry.register_size("hero", "1024x768")
        assert registry.get_size("hero").width == 1024

    def test_registration_is_logged_with_dimensions(self, caplog):
        registry = SizeRegistry()
        with caplog.at_level(logging.DEBUG, logger="rwd_images.services.registry"):
            registry.register_size("hero", [1600, 900])
        assert "'hero' (1600x900 crop=False)" in caplog.text

    def test_core_sizes_are_mirrored(self):
        registry = SizeRegistry()
        registry.register_size("thumbnail", [150, 150, True])
        registry.register_size("hero", "1600x900")
        assert set(registry.core_sizes) == {"thumbnail"}
        assert registry.core_sizes["thumbnail"].crop is True


class TestRegisterBreakpoint:
    def test_register_stores_option_and_size(self):
        registry = SizeRegistry()
        option = registry.register("mobile", [400, 300], {"picture": "<img>", "bg": "{selector}{}"})
        assert registry.options["mobile"] is option
        assert registry.get_size("mobile").width == 400
        assert option.picture == "<img>"
        assert option.background == "{selector}{}"
        assert option.srcset is None

    def test_unknown_template_names_are_ignored(self):
        option = BreakpointOption.from_templates("m", parse_size("m", "1x1"), {"media": "x"})
        assert option.picture is None

    def test_option_last_registration_wins(self):
        registry = SizeRegistry()
        registry.register("mobile", [400, 300], {"picture": "first"})
        registry.register("mobile", [480, 320], {"picture": "second"})
        assert registry.options["mobile"].picture == "second"
        assert registry.options["mobile"].size.width == 480

    def test_breakpoints_keep_registration_order(self, registry):
        assert registry.find_set("hero").breakpoint_keys == ["mobile", "desktop"]

    def test_reregistering_breakpoint_keeps_its_position(self, registry):
        registry.register_breakpoint("hero", "mobile", [480, 360])
        rwd_set = registry.find_set("hero")
        assert rwd_set.breakpoint_keys == ["mobile", "desktop"]
        assert rwd_set.options["mobile"].size.width == 480

    def test_breakpoint_magnifications(self):
        registry = SizeRegistry()
        registry.register_breakpoint("hero", "mobile", [400, 300], magnifications={"2x": 2})
        assert registry.get_size("mobile @2x").width == 800

    def test_set_membership(self, registry):
        rwd_set = registry.find_set("hero")
        assert "mobile" in rwd_set
        assert "thumb" not in rwd_set
        assert len(rwd_set) == 2


class TestRegisterSet:
    def test_register_set_overwrites(self, registry):
        mobile = registry.options["mobile"]
        registry.register_set("hero", [mobile])
        assert registry.find_set("hero").breakpoint_keys == ["mobile"]

    def test_empty_set(self):
        registry = SizeRegistry()
        rwd_set = registry.register_set("empty", [])
        assert len(rwd_set) == 0
        assert registry.find_set("empty") is rwd_set

    def test_unknown_set_is_none(self, registry):
        assert registry.find_set("missing") is None
