"""
Tests for the Cookie header parser and Set-Cookie serializer.

Tests cover:
- Name and value character classes
- Quote stripping and percent-decoding
- Attribute order and rendering
- parse/serialize round trips
"""
import pytest
from datetime import datetime, timedelta, timezone

from navigator_cookies.options import CookieOptions
from navigator_cookies.parser import (
    encode_value,
    format_expires,
    parse,
    serialize,
    serialize_attributes,
)


# --- Test parse() ---

class TestParse:
    """Tests for parse()."""

    def test_empty_header(self):
        """Test that an empty header gives an empty dict."""
        assert parse("") == {}

    def test_multiple_cookies(self):
        """Test parsing several pairs."""
        assert parse("yummy_cookie=choco; tasty_cookie=strawberry") == {
            "yummy_cookie": "choco",
            "tasty_cookie": "strawberry",
        }

    def test_whitespace_is_trimmed(self):
        """Test that names and values are trimmed."""
        assert parse("  a = 1 ;  b = 2  ") == {"a": "1", "b": "2"}

    def test_value_split_at_first_equals(self):
        """Test that '=' inside a value is kept."""
        assert parse("token=abc=def=") == {"token": "abc=def="}

    def test_empty_value(self):
        """Test that an empty value is kept as an empty string."""
        assert parse("yummy_cookie=") == {"yummy_cookie": ""}

    def test_pair_without_equals_dropped(self):
        """Test that pairs without '=' are skipped."""
        assert parse("a=1; broken; b=2") == {"a": "1", "b": "2"}

    def test_trailing_semicolon(self):
        """Test that a trailing ';' is ignored."""
        assert parse("a=1;") == {"a": "1"}

    def test_last_occurrence_wins(self):
        """Test that repeated names keep the last value."""
        assert parse("a=1; a=2") == {"a": "2"}

    def test_name_filter(self):
        """Test that a name filter keeps only the matching pair."""
        assert parse("a=1; b=2", "b") == {"b": "2"}
        assert parse("a=1; b=2", "c") == {}

    @pytest.mark.parametrize("name", ["a b", "a,b", "a@b", "a(b", "ñame", ""])
    def test_invalid_name_dropped(self, name):
        """Test that names outside the token class are dropped."""
        assert parse(f"{name}=1; ok=2") == {"ok": "2"}

    def test_special_token_characters_allowed(self):
        """Test the punctuation allowed in names."""
        name = "a_!#$%&'*.^`|~+-Z9"
        assert parse(f"{name}=v") == {name: "v"}

    def test_quoted_value(self):
        """Test that a value wrapped in double quotes is unquoted."""
        assert parse('a="hello"') == {"a": "hello"}

    def test_lone_quote_dropped(self):
        """Test that a single '"' is not treated as a quoted value."""
        assert parse('a="; b=2') == {"b": "2"}

    def test_quoted_empty_value(self):
        """Test that a pair of quotes is an empty value, unlike a lone quote."""
        assert parse('a=""; b=2') == {"a": "", "b": "2"}

    @pytest.mark.parametrize("value", ['a"b', "a\\b", "café", "a\tb"])
    def test_invalid_value_dropped(self, value):
        """Test that values outside the value class are dropped."""
        assert parse(f"a={value}; b=2") == {"b": "2"}

    def test_space_and_comma_allowed(self):
        """Test that space and comma are accepted inside values."""
        assert parse("a=x y,z") == {"a": "x y,z"}

    def test_percent_decoding(self):
        """Test that values are percent-decoded."""
        assert parse("a=hello%20world%3B%E6%97%A5") == {"a": "hello world;日"}

    def test_plus_is_not_a_space(self):
        """Test that '+' is kept literally."""
        assert parse("a=1+2") == {"a": "1+2"}

    def test_invalid_utf8_dropped(self):
        """Test that escapes that are not UTF-8 drop the pair."""
        assert parse("a=%FF; b=2") == {"b": "2"}


# --- Test serialize() ---

class TestSerialize:
    """Tests for serialize() and serialize_attributes()."""

    def test_plain(self):
        """Test a cookie without options."""
        assert serialize("delicious_cookie", "macha") == "delicious_cookie=macha"

    def test_value_is_percent_encoded(self):
        """Test that reserved characters are escaped."""
        assert serialize("a", "x=y/z; w") == "a=x%3Dy%2Fz%3B%20w"

    def test_unreserved_characters_kept(self):
        """Test the characters left alone, as encodeURIComponent does."""
        assert encode_value("AZaz09-_.!~*'()") == "AZaz09-_.!~*'()"

    def test_complex_pattern(self):
        """Test every common attribute in order."""
        options = CookieOptions(
            path="/",
            secure=True,
            domain="example.com",
            http_only=True,
            max_age=1000,
            expires=datetime(2000, 12, 24, 10, 30, 59, 900000, tzinfo=timezone.utc),
            same_site="Strict",
        )
        assert serialize("great_cookie", "banana", options) == (
            "great_cookie=banana; Max-Age=1000; Domain=example.com; Path=/; "
            "Expires=Sun, 24 Dec 2000 10:30:59 GMT; HttpOnly; Secure; "
            "SameSite=Strict"
        )

    def test_partitioned_is_last(self):
        """Test that Partitioned comes after SameSite."""
        options = CookieOptions(secure=True, same_site="None", partitioned=True)
        assert serialize_attributes(options) == (
            "; Secure; SameSite=None; Partitioned"
        )

    def test_max_age_floored(self):
        """Test that fractional Max-Age values are floored."""
        assert serialize_attributes(CookieOptions(max_age=10.9)) == "; Max-Age=10"

    def test_max_age_zero(self):
        """Test that Max-Age=0 is rendered."""
        assert serialize_attributes(CookieOptions(max_age=0)) == "; Max-Age=0"

    def test_negative_max_age_omitted(self):
        """Test that negative Max-Age values are not rendered."""
        assert serialize_attributes(CookieOptions(max_age=-1)) == ""

    def test_no_options(self):
        """Test that None renders no attributes."""
        assert serialize_attributes(None) == ""

    def test_expires_naive_is_utc(self):
        """Test that naive datetimes are taken as UTC."""
        assert format_expires(datetime(2000, 12, 24, 10, 30, 59)) == (
            "Sun, 24 Dec 2000 10:30:59 GMT"
        )

    def test_expires_converted_to_utc(self):
        """Test that aware datetimes are converted to GMT."""
        tz = timezone(timedelta(hours=2))
        assert format_expires(datetime(2000, 12, 24, 12, 30, 59, tzinfo=tz)) == (
            "Sun, 24 Dec 2000 10:30:59 GMT"
        )


# --- Test round trips ---

class TestRoundTrip:
    """parse(serialize(name, value)) gives back the value."""

    @pytest.mark.parametrize("value", [
        "simple",
        "",
        "with space",
        'quote"and;semicolon\\backslash',
        "日本語",
        "emoji \U0001f36a",
        "a=b&c=d",
    ])
    def test_round_trip(self, value):
        """Test that serialized values parse back unchanged."""
        assert parse(serialize("c", value))["c"] == value
