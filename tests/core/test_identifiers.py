"""Tests for provcode.core.identifiers — allocation, slugs and titles."""

from __future__ import annotations

import pytest

from provcode.core.identifiers import (
    format_identifier,
    next_identifier,
    parse_sequence,
    slugify,
    split_identifier,
    title_from_slug,
)


class TestNextIdentifier:
    """Allocation is max(parsed) + 1, zero-padded."""

    def test_empty_listing_starts_at_one(self):
        """An empty directory yields 001."""
        assert next_identifier(set()) == "001"

    def test_gaps_are_not_filled(self):
        """Numbering continues after the highest, not the first gap."""
        assert next_identifier({"001-a", "002-b", "007-c"}) == "008"

    def test_ignores_template_and_unnumbered_names(self):
        """Names without a numeric prefix do not count."""
        names = {"TEMPLATE", "notes", "003-x", "README.md"}
        assert next_identifier(names) == "004"

    def test_ignores_number_without_hyphen(self):
        assert next_identifier({"042", "001-a"}) == "002"

    @pytest.mark.parametrize(
        "names",
        [
            {"001-a"},
            {"010-a", "002-b"},
            {"099-a", "100-b"},
            {"5-a", "0004-b"},
        ],
    )
    def test_result_exceeds_every_parsed_number(self, names):
        """The next number is greater than any existing one."""
        result = next_identifier(names)
        assert len(result) >= 3
        assert all(int(result) > parse_sequence(n) for n in names)

    def test_width_overflow_is_not_truncated(self):
        """Past 999 the identifier grows instead of wrapping."""
        assert next_identifier({"999-last"}) == "1000"

    def test_custom_width(self):
        assert next_identifier({"0001-a"}, width=4) == "0002"

    def test_accepts_any_iterable(self):
        assert next_identifier(iter(["001-a", "002-b"])) == "003"


class TestParsing:
    """Prefix parsing and formatting."""

    def test_parse_sequence(self):
        assert parse_sequence("012-use-redis") == 12
        assert parse_sequence("TEMPLATE") is None
        assert parse_sequence("-12-x") is None

    def test_split_identifier(self):
        assert split_identifier("007-use-redis") == (7, "use-redis")
        assert split_identifier("use-redis") is None

    def test_format_identifier(self):
        assert format_identifier("001", "use-postgresql") == "001-use-postgresql"


class TestSlugify:
    """Name to slug conversion."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Use Postgresql", "use-postgresql"),
            ("use-postgresql", "use-postgresql"),
            ("JWT  Authentication", "jwt-authentication"),
            ("Migrate to Micro-services!", "migrate-to-micro-services"),
            ("  padded name  ", "padded-name"),
            ("a -- b", "a-b"),
            ("Café au lait", "caf-au-lait"),
        ],
    )
    def test_slugify(self, name, expected):
        assert slugify(name) == expected

    def test_nothing_usable_gives_empty_slug(self):
        """Punctuation-only names produce an empty slug."""
        assert slugify("!!! ???") == ""


class TestTitleFromSlug:
    """Slug to display title."""

    def test_capitalizes_each_word(self):
        """Each hyphen-separated word is capitalised."""
        assert title_from_slug("use-postgresql") == "Use Postgresql"

    def test_keeps_rest_of_word(self):
        assert title_from_slug("migrate-to-k8s") == "Migrate To K8s"

    def test_skips_empty_parts(self):
        assert title_from_slug("a--b") == "A B"
