"""Unit tests for slug and username generation."""

import re

import pytest

from topten.util.slug import (
    generate_unique_slug,
    generate_unique_username,
    generate_username_from_google,
    is_canonical_username,
    slugify,
)


class TestSlugify:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Best Movies!! Of 2024", "best-movies-of-2024"),
            ("  Top   Ten  ", "top-ten"),
            ("--already-slugged--", "already-slugged"),
            ("Rock & Roll", "rock-roll"),
            ("!!!", ""),
        ],
    )
    def test_slugify(self, text, expected):
        assert slugify(text) == expected


class TestGenerateUniqueSlug:
    def test_appends_six_character_suffix(self):
        slug = generate_unique_slug("Best Films")
        assert re.fullmatch(r"best-films-[0-9a-z]{6}", slug)

    def test_suffixes_differ(self):
        assert generate_unique_slug("Same") != generate_unique_slug("Same")


class TestGoogleUsername:
    def test_uses_display_name(self):
        assert generate_username_from_google("Ada Lovelace", "a@x.io") == "ada-lovelace"

    def test_falls_back_to_email_local_part(self):
        assert generate_username_from_google(None, "Grace.Hopper@x.io") == "gracehopper"

    def test_pads_short_names(self):
        assert generate_username_from_google("Al", "al@x.io") == "al0"

    def test_truncates_long_names(self):
        username = generate_username_from_google("x" * 50, "x@x.io")
        assert len(username) == 30

    def test_unique_username_suffix(self):
        assert re.fullmatch(r"ada-[0-9a-z]{6}", generate_unique_username("ada"))


class TestIsCanonicalUsername:
    @pytest.mark.parametrize(
        "candidate, expected",
        [
            ("ada-lovelace", True),
            ("ab", False),
            ("a" * 31, False),
            ("Ada", False),
            ("ada--l", False),
        ],
    )
    def test_is_canonical(self, candidate, expected):
        assert is_canonical_username(candidate) is expected
