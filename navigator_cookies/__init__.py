"""Navigator Cookies.

Plain, signed (HMAC-SHA256) and sealed (iron) HTTP cookies.
"""
from .version import __version__
from .conf import CookieConfig, generate_secret
from .cookies import (
    delete_cookie,
    get_cookie,
    get_cookies,
    get_sealed_cookie,
    get_sealed_cookies,
    get_signed_cookie,
    get_signed_cookies,
    set_cookie,
    set_sealed_cookie,
    set_signed_cookie,
)
from .errors import (
    ConfigurationError,
    CookieError,
    DecryptionError,
    IntegrityError,
    MalformedSealError,
    SealError,
)
from .options import CookieOptions

__all__ = [
    "__version__",
    "CookieConfig",
    "CookieOptions",
    "generate_secret",
    "get_cookie",
    "get_cookies",
    "get_signed_cookie",
    "get_signed_cookies",
    "get_sealed_cookie",
    "get_sealed_cookies",
    "set_cookie",
    "set_signed_cookie",
    "set_sealed_cookie",
    "delete_cookie",
    "CookieError",
    "ConfigurationError",
    "SealError",
    "MalformedSealError",
    "IntegrityError",
    "DecryptionError",
]
