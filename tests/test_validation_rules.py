"""Tests for the individual checks and sanitizers."""

from datetime import date, datetime

import pytest

from catalog.validation import rules


class TestParseIsoDate:
    """Tests for parse_iso_date."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("1970-01-31", date(1970, 1, 31)),
            (" 1970-01-31 ", date(1970, 1, 31)),
            ("1970-01-31T10:20:30", date(1970, 1, 31)),
            (date(2000, 2, 29), date(2000, 2, 29)),
            (datetime(2000, 2, 29, 12, 0), date(2000, 2, 29)),
        ],
    )
    def test_valid_values(self, value, expected):
        assert rules.parse_iso_date(value) == expected

    @pytest.mark.parametrize(
        "value", ["1970-13-40", "2001-02-29", "yesterday", "", "   ", None, 1970]
    )
    def test_invalid_values(self, value):
        assert rules.parse_iso_date(value) is None


class TestChecks:
    """Tests for check factories."""

    def test_required_counts_trimmed_length(self):
        check = rules.required("required", min_length=2)

        assert check.test(" ab ")
        assert not check.test(" a ")
        assert not check.test(None)
        assert check.message == "required"

    def test_max_length_is_inclusive(self):
        check = rules.max_length("too long", 3)

        assert check.test("abc")
        assert check.test("  abc  ")
        assert not check.test("abcd")

    @pytest.mark.parametrize("value", ["Doe123", "  John  ", "X"])
    def test_alphanumeric_accepts(self, value):
        assert rules.alphanumeric("bad").test(value)

    @pytest.mark.parametrize("value", ["Jean-Luc", "O'Brien", "Anne Marie", "Zoë", ""])
    def test_alphanumeric_rejects(self, value):
        assert not rules.alphanumeric("bad").test(value)

    def test_iso_date_check(self):
        check = rules.iso_date("Invalid date")

        assert check.test("1999-12-31")
        assert not check.test("1999-12-32")


class TestSanitizers:
    """Tests for sanitizers."""

    def test_trim_converts_scalars_to_text(self):
        assert rules.trim("  x ") == "x"
        assert rules.trim(None) is None
        assert rules.trim(5) == "5"
        assert rules.trim(True) == "True"

    def test_escape_html_characters(self):
        escaped = rules.escape("<a href=\"/x\">it's</a>")

        assert escaped == (
            "&lt;a href=&quot;&#x2F;x&quot;&gt;it&#x27;s&lt;&#x2F;a&gt;"
        )

    def test_escape_does_not_double_escape(self):
        assert rules.escape("&amp; &#96; &#x2F;") == "&amp; &#96; &#x2F;"
        assert rules.escape("AT&T") == "AT&amp;T"

    def test_escape_leaves_non_strings(self):
        assert rules.escape(None) is None

    def test_to_date(self):
        assert rules.to_date("2020-05-17") == date(2020, 5, 17)
        assert rules.to_date("not a date") is None
        assert rules.to_date(None) is None
