"""Navigator Cookies exception hierarchy.

Malformed cookie input is never reported through these types by the read
helpers: it is dropped or turned into ``False``. They surface from the
low-level iron functions and from configuration.
"""


class CookieError(Exception):
    """Base for all navigator_cookies errors."""


class ConfigurationError(CookieError, RuntimeError):
    """Raised when cookie settings cannot be loaded from the environment."""


class SealError(CookieError, ValueError):
    """A sealed value could not be unsealed."""


class MalformedSealError(SealError):
    """The sealed string does not have exactly five ``*`` components."""


class IntegrityError(SealError):
    """The HMAC digest did not match (tampered value or wrong password)."""


class DecryptionError(SealError):
    """The ciphertext, IV or plaintext could not be decoded."""
