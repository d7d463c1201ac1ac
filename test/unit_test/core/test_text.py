"""Unit tests for slug and read-time helpers."""

import pytest

from constituency_hub.core.text import calculate_read_time, is_valid_slug, slugify, truncate


class TestSlugify:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Hello World", "hello-world"),
            ("  Road   Repair -- Ward 5 ", "road-repair-ward-5"),
            ("New bridge opened!", "new-bridge-opened"),
            ("snake_case_title", "snake-case-title"),
            ("নতুন সেতু", ""),
        ],
    )
    def test_slugify(self, text, expected):
        assert slugify(text) == expected

    def test_slugify_output_is_valid(self):
        assert is_valid_slug(slugify("Health Camp 2024"))

    @pytest.mark.parametrize("slug", ["Upper", "double--dash", "-lead", "trail-", "space here", ""])
    def test_invalid_slugs(self, slug):
        assert is_valid_slug(slug) is False


class TestReadTime:
    @pytest.mark.parametrize(
        "words,minutes",
        [(0, 1), (1, 1), (200, 1), (201, 2), (1000, 5)],
    )
    def test_read_time(self, words, minutes):
        assert calculate_read_time(" ".join(["word"] * words)) == minutes


def test_truncate():
    assert truncate("short", 10) == "short"
    assert truncate("a long sentence", 6) == "a long..."
