"""Tests for query string encoding."""

from src.eansearch.encoding import build_query, urlencode
from src.eansearch.schemas import Language


class TestUrlencode:
    """Tests for RFC 3986 percent-encoding."""

    def test_plain_word_unchanged(self):
        assert urlencode("Bananaboat") == "Bananaboat"

    def test_unreserved_characters_unchanged(self):
        assert urlencode("AZaz09-_.~") == "AZaz09-_.~"

    def test_space_becomes_percent_20(self):
        assert urlencode("iPhone Max whatever") == "iPhone%20Max%20whatever"

    def test_reserved_characters_escaped(self):
        assert urlencode("a&b=c/d?e+f") == "a%26b%3Dc%2Fd%3Fe%2Bf"

    def test_percent_escaped(self):
        assert urlencode("100%") == "100%25"

    def test_utf8_bytes_escaped(self):
        assert urlencode("Käse") == "K%C3%A4se"

    def test_digits_unchanged(self):
        assert urlencode("5099750442227") == "5099750442227"

    def test_empty(self):
        assert urlencode("") == ""

    def test_undecodable_bytes_kept(self):
        """Lone surrogates from non-UTF-8 argv map back to their raw bytes."""
        assert urlencode("caf\udce9") == "caf%E9"

    def test_other_lone_surrogate_does_not_raise(self):
        assert urlencode("\ud800") == "%ED%A0%80"


class TestUrlencodeLegacy:
    """Tests for the whitespace-to-plus mode."""

    def test_space_becomes_plus(self):
        assert urlencode("iPhone Max", plus_spaces=True) == "iPhone+Max"

    def test_tabs_and_newlines(self):
        assert urlencode("a\tb\nc", plus_spaces=True) == "a+b+c"

    def test_other_characters_untouched(self):
        assert urlencode("Tom&Jerry", plus_spaces=True) == "Tom&Jerry"


class TestBuildQuery:
    """Tests for joining query pairs."""

    def test_join_pairs(self):
        assert build_query([("op", "product-search"), ("name", "Abba")]) == "op=product-search&name=Abba"

    def test_ints_converted(self):
        assert build_query([("page", 0), ("width", 102)]) == "page=0&width=102"

    def test_enum_written_as_value(self):
        assert build_query([("language", Language.ANY)]) == "language=99"

    def test_preserves_order(self):
        query = build_query([("b", 1), ("a", 2), ("c", 3)])
        assert query == "b=1&a=2&c=3"

    def test_empty(self):
        assert build_query([]) == ""
