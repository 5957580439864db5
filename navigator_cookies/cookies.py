"""
Cookies — get/set/delete helpers over a header container.

Provides the public API for reading and writing cookies:
- ``get_cookie`` / ``get_cookies`` — plain values
- ``get_signed_cookie`` / ``get_signed_cookies`` — HMAC-verified values
- ``get_sealed_cookie`` / ``get_sealed_cookies`` — iron-sealed values
- ``set_cookie`` / ``set_signed_cookie`` / ``set_sealed_cookie``
- ``delete_cookie``

The header container only needs ``get(name)`` and ``add(name, value)``,
e.g. ``multidict.CIMultiDict`` or aiohttp's response headers. Every
``set_*`` call adds its own ``Set-Cookie`` entry, in call order.

Security Note:
    Never log cookie values, secrets or passwords. Only log cookie names.
"""
import logging
from collections.abc import Mapping
from typing import Optional, Protocol, Union

from .iron.crypto import Password
from .options import CookieOptions, CookiePrefix, coerce_options, with_default_path
from .parser import parse, serialize
from .prefix import apply_prefix, prefixed_name
from .sealing import parse_sealed, serialize_sealed
from .signing import MaybeCookie, Secret, parse_signed, serialize_signed

logger = logging.getLogger("navigator.cookies")

Options = Union[CookieOptions, Mapping, None]


class Headers(Protocol):
    """Header container with ordered multi-value semantics."""

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        ...

    def add(self, key: str, value: str) -> None:
        ...


def _prepare(name: str, options: Options) -> tuple[str, CookieOptions]:
    """Default the path to ``/`` and apply the name prefix policy."""
    return apply_prefix(name, with_default_path(coerce_options(options)))


def _append(headers: Headers, name: str, cookie: str) -> None:
    headers.add("Set-Cookie", cookie)
    logger.debug("Set-Cookie added for %s", name)


# ---------------------------------------------------------------------------
# Plain cookies
# ---------------------------------------------------------------------------

def get_cookie(
    headers: Headers, name: str, prefix: Optional[CookiePrefix] = None
) -> Optional[str]:
    """Return the value of cookie ``name``, or None if absent or invalid."""
    header = headers.get("Cookie")
    if not header:
        return None
    key = prefixed_name(name, prefix)
    return parse(header, key).get(key)


def get_cookies(headers: Headers) -> dict[str, str]:
    """Return every valid cookie of the ``Cookie`` header."""
    header = headers.get("Cookie")
    if not header:
        return {}
    return parse(header)


def set_cookie(
    headers: Headers, name: str, value: str, options: Options = None
) -> None:
    """Add a ``Set-Cookie`` entry for ``name``.

    Args:
        headers: Response header container.
        name: Logical cookie name (``options.prefix`` is prepended).
        value: Cookie value; percent-encoded on the wire.
        options: CookieOptions or a mapping of its fields. Path defaults
            to ``/`` unless given.
    """
    cookie_name, opts = _prepare(name, options)
    _append(headers, cookie_name, serialize(cookie_name, value, opts))


def delete_cookie(headers: Headers, name: str, options: Options = None) -> None:
    """Expire cookie ``name`` by setting an empty value with Max-Age=0."""
    opts = coerce_options(options).model_copy(update={"max_age": 0})
    set_cookie(headers, name, "", opts)


# ---------------------------------------------------------------------------
# Signed cookies
# ---------------------------------------------------------------------------

def get_signed_cookie(
    headers: Headers,
    secret: Secret,
    name: str,
    prefix: Optional[CookiePrefix] = None,
) -> Optional[MaybeCookie]:
    """Return the verified value of signed cookie ``name``.

    Returns:
        The payload, False when the signature does not verify, or None
        when the cookie is missing or not a signed value.
    """
    header = headers.get("Cookie")
    if not header:
        return None
    key = prefixed_name(name, prefix)
    return parse_signed(header, secret, key).get(key)


def get_signed_cookies(headers: Headers, secret: Secret) -> dict[str, MaybeCookie]:
    """Return every signed cookie, verified payload or False."""
    header = headers.get("Cookie")
    if not header:
        return {}
    return parse_signed(header, secret)


def set_signed_cookie(
    headers: Headers,
    name: str,
    value: str,
    secret: Secret,
    options: Options = None,
) -> None:
    """Sign ``value`` with ``secret`` and add a ``Set-Cookie`` entry."""
    cookie_name, opts = _prepare(name, options)
    _append(
        headers, cookie_name, serialize_signed(cookie_name, value, secret, opts)
    )


# ---------------------------------------------------------------------------
# Sealed cookies
# ---------------------------------------------------------------------------

def get_sealed_cookie(
    headers: Headers,
    password: Password,
    name: str,
    prefix: Optional[CookiePrefix] = None,
) -> Optional[MaybeCookie]:
    """Return the unsealed value of cookie ``name``.

    Returns:
        The plaintext, False when unsealing fails, or None when the
        cookie is missing or not a sealed value.
    """
    header = headers.get("Cookie")
    if not header:
        return None
    key = prefixed_name(name, prefix)
    return parse_sealed(header, password, key).get(key)


def get_sealed_cookies(
    headers: Headers, password: Password
) -> dict[str, MaybeCookie]:
    """Return every sealed cookie, plaintext or False."""
    header = headers.get("Cookie")
    if not header:
        return {}
    return parse_sealed(header, password)


def set_sealed_cookie(
    headers: Headers,
    name: str,
    value: str,
    password: Password,
    options: Options = None,
) -> None:
    """Seal ``value`` with ``password`` and add a ``Set-Cookie`` entry."""
    cookie_name, opts = _prepare(name, options)
    _append(
        headers, cookie_name, serialize_sealed(cookie_name, value, password, opts)
    )
