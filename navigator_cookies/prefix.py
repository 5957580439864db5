"""
Cookie Prefixes — ``__Secure-`` and ``__Host-`` name rules.

``__Secure-`` cookies must carry the Secure attribute. ``__Host-``
cookies must be Secure, use ``Path=/`` and have no Domain. These
attributes are forced regardless of what the caller asked for.
"""
from typing import Optional

from .options import CookieOptions, CookiePrefix

SECURE_PREFIX = "__Secure-"
HOST_PREFIX = "__Host-"


def prefixed_name(name: str, prefix: Optional[CookiePrefix]) -> str:
    """Return the physical cookie name for ``name`` under ``prefix``."""
    if prefix == "secure":
        return SECURE_PREFIX + name
    if prefix == "host":
        return HOST_PREFIX + name
    return name


def apply_prefix(
    name: str, options: CookieOptions
) -> tuple[str, CookieOptions]:
    """Apply the prefix selected in ``options`` to a cookie being written.

    Args:
        name: Logical cookie name.
        options: Caller options; ``options.prefix`` selects the policy.

    Returns:
        Tuple of (physical_name, effective_options).
    """
    if options.prefix == "secure":
        options = options.model_copy(update={"secure": True})
    elif options.prefix == "host":
        options = options.model_copy(
            update={"secure": True, "path": "/", "domain": None}
        )
    return prefixed_name(name, options.prefix), options
