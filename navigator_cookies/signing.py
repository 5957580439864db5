"""
Signed Cookies — HMAC-SHA256 signatures over readable values.

A signed value is ``<value>.<signature>`` where the signature is the
standard base64 encoding of HMAC-SHA256(secret, value): always 44
characters ending in ``=``.

Reading distinguishes two failures:
- a value that does not look signed is dropped (absent from the result);
- a value that looks signed but fails verification maps to ``False``.

Security Note:
    Never log secrets or signed values. Verification goes through
    ``cryptography``'s constant-time ``HMAC.verify``.
"""
import base64
import binascii
import logging
from typing import Literal, Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac

from .options import CookieOptions
from .parser import parse, serialize

logger = logging.getLogger("navigator.cookies")

SIGNATURE_LENGTH = 44  # base64 of a 32-byte digest

Secret = Union[str, bytes]
MaybeCookie = Union[str, Literal[False]]


def _secret_bytes(secret: Secret) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return bytes(secret)


def _hmac(secret: Secret) -> hmac.HMAC:
    return hmac.HMAC(_secret_bytes(secret), hashes.SHA256())


def make_signature(value: str, secret: Secret) -> str:
    """Return the base64 HMAC-SHA256 signature of ``value``."""
    h = _hmac(secret)
    h.update(value.encode("utf-8"))
    return base64.b64encode(h.finalize()).decode("ascii")


def format_signed(value: str, secret: Secret) -> str:
    """Return ``value.signature``."""
    return f"{value}.{make_signature(value, secret)}"


def verify_signature(signature: str, value: str, secret: Secret) -> bool:
    """Check ``signature`` against ``value`` in constant time.

    Args:
        signature: Candidate base64 signature.
        value: Signed payload.
        secret: Shared signing secret.

    Returns:
        True when the signature matches; False otherwise, including
        signatures that are not valid base64.
    """
    try:
        digest = base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError):
        return False
    h = _hmac(secret)
    h.update(value.encode("utf-8"))
    try:
        h.verify(digest)
    except InvalidSignature:
        return False
    return True


def parse_signed_value(
    stored: str, secret: Secret
) -> Optional[MaybeCookie]:
    """Split and verify a stored ``value.signature`` string.

    Returns:
        The payload when verified, False when the signature does not
        match, or None when ``stored`` is not a signed value at all.
    """
    pos = stored.rfind(".")
    if pos < 1:
        return None
    payload = stored[:pos]
    signature = stored[pos + 1:]
    if len(signature) != SIGNATURE_LENGTH or not signature.endswith("="):
        return None
    if verify_signature(signature, payload, secret):
        return payload
    return False


def parse_signed(
    header: str, secret: Secret, name: Optional[str] = None
) -> dict[str, MaybeCookie]:
    """Parse a ``Cookie`` header and verify every signed value in it.

    Args:
        header: Raw ``Cookie`` header value.
        secret: Shared signing secret.
        name: Optional cookie name filter.

    Returns:
        Mapping of cookie name to verified payload or False. Values that
        are not signed are left out.
    """
    result: dict[str, MaybeCookie] = {}
    for key, value in parse(header, name).items():
        parsed = parse_signed_value(value, secret)
        if parsed is None:
            logger.debug("Dropping cookie %s: not a signed value", key)
            continue
        if parsed is False:
            logger.debug("Cookie %s failed signature verification", key)
        result[key] = parsed
    return result


def serialize_signed(
    name: str,
    value: str,
    secret: Secret,
    options: Optional[CookieOptions] = None,
) -> str:
    """Sign ``value`` and build a Set-Cookie header value."""
    return serialize(name, format_signed(value, secret), options)
