"""Iron — Password-based sealing (AES-256-CBC + HMAC-SHA256).

Security Note (Threat Model):
    Keys are derived with a single PBKDF2 iteration. This is part of the
    sealed format and is only as strong as the password; use long random
    passwords (see ``navigator_cookies.conf.generate_secret``).
"""

from .config import ALGORITHMS, ENCRYPTION, INTEGRITY, SealOptions
from .crypto import fixed_time_comparison, generate_key, random_bits
from .seal import seal, unseal, seal_object, unseal_object

__all__ = [
    "ALGORITHMS",
    "ENCRYPTION",
    "INTEGRITY",
    "SealOptions",
    "fixed_time_comparison",
    "generate_key",
    "random_bits",
    "seal",
    "unseal",
    "seal_object",
    "unseal_object",
]
