"""
Cookie Parser — ``Cookie`` header parsing and Set-Cookie serialization.

Read side: ``parse()`` turns a ``Cookie`` header into a name-value dict,
dropping anything outside the RFC 6265 name/value character classes.
Write side: ``serialize()`` percent-encodes a value and appends the
attributes of a ``CookieOptions`` in a fixed order.

Malformed pairs are never an error: they are left out of the result.
"""
import re
import math
import logging
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional
from urllib.parse import quote, unquote

from .options import CookieOptions

logger = logging.getLogger("navigator.cookies")

# alphanumerics and _!#$%&'*.^`|~+- (RFC 6265 section 4.1.1 token)
_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_!#$%&'*.^`|~+-]+$")

# ASCII 0x20-0x7E except '"', ';' and '\'. The RFC also excludes space
# and comma, both are accepted here since browsers send them.
_VALUE_PATTERN = re.compile(r'^[ !#-:<-\[\]-~]*$')

# encodeURIComponent leaves these unescaped on top of quote()'s defaults.
_SAFE_CHARS = "!~*'()"


def is_valid_name(name: str) -> bool:
    return bool(_NAME_PATTERN.match(name))


def is_valid_value(value: str) -> bool:
    return bool(_VALUE_PATTERN.match(value))


def encode_value(value: str) -> str:
    """Percent-encode a cookie value (UTF-8)."""
    return quote(value, safe=_SAFE_CHARS)


def decode_value(value: str) -> Optional[str]:
    """Percent-decode a cookie value, None when it is not valid UTF-8."""
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return None


def parse(header: str, name: Optional[str] = None) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Args:
        header: Raw ``Cookie`` header value.
        name: When given, only pairs with exactly this name are kept.

    Returns:
        Mapping of cookie name to decoded value. Later pairs with the
        same name win.
    """
    cookies: dict[str, str] = {}
    if not header:
        return cookies
    for pair in header.strip().split(";"):
        pair = pair.strip()
        if "=" not in pair:
            continue
        cookie_name, _, value = pair.partition("=")
        cookie_name = cookie_name.strip()
        if name and name != cookie_name:
            continue
        if not is_valid_name(cookie_name):
            logger.debug("Dropping cookie with invalid name")
            continue
        value = value.strip()
        # a lone '"' is not a quoted empty value: it fails the value class
        # and the pair is dropped
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        if not is_valid_value(value):
            logger.debug("Dropping cookie %s: invalid value", cookie_name)
            continue
        decoded = decode_value(value)
        if decoded is None:
            logger.debug("Dropping cookie %s: undecodable value", cookie_name)
            continue
        cookies[cookie_name] = decoded
    return cookies


def format_expires(expires: datetime) -> str:
    """Render ``expires`` as an RFC 1123 date in GMT."""
    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=timezone.utc)
    expires = expires.astimezone(timezone.utc).replace(microsecond=0)
    return format_datetime(expires, usegmt=True)


def serialize_attributes(options: Optional[CookieOptions]) -> str:
    """Render the Set-Cookie attributes of ``options``.

    The order (Max-Age, Domain, Path, Expires, HttpOnly, Secure, SameSite,
    Partitioned) is fixed; only attributes that are present are emitted.
    """
    if options is None:
        return ""
    parts: list[str] = []
    max_age = options.max_age
    if max_age is not None and not isinstance(max_age, bool) and max_age >= 0:
        parts.append(f"; Max-Age={math.floor(max_age)}")
    if options.domain:
        parts.append(f"; Domain={options.domain}")
    if options.path:
        parts.append(f"; Path={options.path}")
    if options.expires:
        parts.append(f"; Expires={format_expires(options.expires)}")
    if options.http_only:
        parts.append("; HttpOnly")
    if options.secure:
        parts.append("; Secure")
    if options.same_site:
        parts.append(f"; SameSite={options.same_site}")
    if options.partitioned:
        parts.append("; Partitioned")
    return "".join(parts)


def serialize_raw(
    name: str, value: str, options: Optional[CookieOptions] = None
) -> str:
    """Build a Set-Cookie value from an already encoded ``value``."""
    return f"{name}={value}{serialize_attributes(options)}"


def serialize(
    name: str, value: str, options: Optional[CookieOptions] = None
) -> str:
    """Build a Set-Cookie header value, percent-encoding ``value``.

    Args:
        name: Physical cookie name (prefix already applied).
        value: Raw cookie value.
        options: Attributes to render after ``name=value``.

    Returns:
        The Set-Cookie header value.
    """
    return serialize_raw(name, encode_value(value), options)
