"""Tests for the category catalog helpers."""

import pytest

from job_discovery.core.categories import (
    AVAILABLE_CATEGORIES,
    category_display_name,
    category_value,
)


class TestCategoryValue:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Plumbing", "plumbing"),
            ("General Maintenance", "general_maintenance"),
            ("Pest  Control", "pest_control"),
            ("HVAC", "hvac"),
        ],
    )
    def test_values(self, name: str, expected: str) -> None:
        assert category_value(name) == expected

    def test_catalog_values_unique(self) -> None:
        values = [category_value(c) for c in AVAILABLE_CATEGORIES]
        assert len(values) == len(set(values))


class TestCategoryDisplayName:
    def test_all(self) -> None:
        assert category_display_name("all") == "All Categories"

    def test_catalog_round_trip(self) -> None:
        for name in AVAILABLE_CATEGORIES:
            assert category_display_name(category_value(name)) == name

    def test_unknown_value_title_cased(self) -> None:
        assert category_display_name("snow_removal") == "Snow Removal"

    def test_general_default(self) -> None:
        assert category_display_name("general") == "General"
