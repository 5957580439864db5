"""
Sealed Cookies — Reading and writing iron-sealed cookie values.

Values without a ``*`` are not sealed and are dropped. Values that look
sealed but fail to unseal (bad field count, bad digest, wrong password,
undecryptable data) map to ``False``.
"""
import logging
from typing import Optional

from .errors import SealError
from .iron import seal, unseal
from .iron.crypto import Password
from .options import CookieOptions
from .parser import parse, serialize
from .signing import MaybeCookie

logger = logging.getLogger("navigator.cookies")


def parse_sealed(
    header: str, password: Password, name: Optional[str] = None
) -> dict[str, MaybeCookie]:
    """Parse a ``Cookie`` header and unseal every sealed value in it.

    Args:
        header: Raw ``Cookie`` header value.
        password: Seal password.
        name: Optional cookie name filter.

    Returns:
        Mapping of cookie name to plaintext or False.
    """
    result: dict[str, MaybeCookie] = {}
    for key, value in parse(header, name).items():
        if "*" not in value:
            logger.debug("Dropping cookie %s: not a sealed value", key)
            continue
        try:
            result[key] = unseal(value, password)
        except SealError as err:
            logger.debug("Cookie %s failed to unseal: %s", key, err)
            result[key] = False
    return result


def serialize_sealed(
    name: str,
    value: str,
    password: Password,
    options: Optional[CookieOptions] = None,
) -> str:
    """Seal ``value`` and build a Set-Cookie header value."""
    return serialize(name, seal(value, password), options)
