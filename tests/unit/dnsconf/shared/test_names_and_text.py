import pytest

from dnsconf.shared import (
    fqdn,
    is_name,
    iter_lines,
    normalize_text,
    parse_u8,
    random_item,
    trim_fqdn,
)


class TestNames:
    def test_valid_names(self):
        assert is_name("example.com")
        assert is_name("example.com.")
        assert is_name("localhost")

    def test_invalid_names(self):
        assert is_name("") is False
        assert is_name("bad..name") is False
        assert is_name("a" * 64 + ".com") is False
        assert is_name(".".join(["abcdefghij"] * 30)) is False

    def test_fqdn(self):
        assert fqdn("example.com") == "example.com."
        assert fqdn("example.com.") == "example.com."
        assert trim_fqdn("example.com.") == "example.com"
        assert trim_fqdn(".") == "."

    def test_random_item_picks_member(self):
        items = ["a", "b", "c"]
        for _ in range(10):
            assert random_item(items) in items


class TestParseU8:
    def test_accepts_range(self):
        assert parse_u8("0") == 0
        assert parse_u8("255") == 255

    @pytest.mark.parametrize("text", ["", "256", "-1", "1.5", "x", "+3"])
    def test_rejects(self, text: str):
        with pytest.raises(ValueError):
            parse_u8(text)


class TestNormalizeText:
    def test_bom_tabs_and_line_endings(self):
        text = "\ufeffa\tb\r\nc\rd\n"
        assert normalize_text(text) == "a b\nc\nd\n"

    def test_continuation(self):
        assert normalize_text("search a.com \\\nb.com\n") == "search a.com b.com\n"

    def test_iter_lines_skips_comments_and_blanks(self):
        text = "# comment\n\n  ; other\n  first line \nsecond\n"
        assert list(iter_lines(text)) == [(4, "first line"), (5, "second")]
