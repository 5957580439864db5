"""
Iron Seal — Encrypt-then-MAC sealing of string values.

Format (five ``*``-separated fields)::

    <encryption salt>*<iv>*<ciphertext>*<hmac salt>*<hmac digest>

Salts are hex, the other fields are unpadded base64url. The HMAC covers
the first three fields joined with ``*``.

Security Note:
    Never log passwords, plaintext or sealed strings. The digest check
    runs before any decryption is attempted.
"""
import base64
import binascii
from typing import Any

import orjson

from ..errors import DecryptionError, IntegrityError, MalformedSealError
from .config import ENCRYPTION, INTEGRITY
from .crypto import (
    Password,
    base64url_decode,
    base64url_encode,
    decrypt,
    encrypt,
    fixed_time_comparison,
    hmac_with_password,
)

SEAL_COMPONENTS = 5
_BYTES_WRAPPER_KEY = "__iron_bytes_b64__"


def seal(value: str, password: Password) -> str:
    """Encrypt and sign ``value`` into an iron string.

    Args:
        value: Plaintext to seal.
        password: Seal password.

    Returns:
        The sealed string. Sealing the same value twice gives different
        results (fresh salts and IV on each call).
    """
    encrypted, key = encrypt(password, ENCRYPTION, value)
    iv = base64url_encode(key.iv)
    mac_base = f"{key.salt}*{iv}*{base64url_encode(encrypted)}"
    mac = hmac_with_password(password, INTEGRITY, mac_base)
    return f"{mac_base}*{mac.salt}*{mac.digest}"


def unseal(sealed: str, password: Password) -> str:
    """Verify and decrypt an iron string produced by ``seal``.

    Args:
        sealed: The sealed string.
        password: Seal password.

    Returns:
        The original plaintext.

    Raises:
        MalformedSealError: If ``sealed`` does not have five components.
        IntegrityError: If the HMAC digest does not match.
        DecryptionError: If the IV or ciphertext cannot be decrypted.
    """
    parts = sealed.split("*")
    if len(parts) != SEAL_COMPONENTS:
        raise MalformedSealError("Incorrect number of sealed components")

    encryption_salt, encryption_iv, encrypted_b64, hmac_salt, digest = parts
    mac_base = f"{encryption_salt}*{encryption_iv}*{encrypted_b64}"

    mac = hmac_with_password(password, INTEGRITY, mac_base, salt=hmac_salt)
    if not fixed_time_comparison(mac.digest, digest):
        raise IntegrityError("Bad hmac value")

    try:
        iv = base64url_decode(encryption_iv)
        encrypted = base64url_decode(encrypted_b64)
        return decrypt(
            password, ENCRYPTION, encrypted, salt=encryption_salt, iv=iv,
        )
    except (binascii.Error, ValueError) as err:
        raise DecryptionError("Unable to decrypt sealed value") from err


# ---------------------------------------------------------------------------
# Structured values
# ---------------------------------------------------------------------------

def seal_object(value: Any, password: Password) -> str:
    """Serialize ``value`` with orjson and seal it.

    Supports: str, int, float, dict, list, bytes, bool, None.
    bytes values are wrapped as base64 for a safe JSON round-trip.
    """
    if isinstance(value, bytes):
        value = {_BYTES_WRAPPER_KEY: base64.b64encode(value).decode("ascii")}
    return seal(orjson.dumps(value).decode("utf-8"), password)


def unseal_object(sealed: str, password: Password) -> Any:
    """Unseal a string produced by ``seal_object`` and deserialize it.

    Raises:
        SealError: As ``unseal``; a payload that is not JSON raises
            DecryptionError.
    """
    payload = unseal(sealed, password)
    try:
        parsed = orjson.loads(payload)
    except orjson.JSONDecodeError as err:
        raise DecryptionError("Sealed payload is not JSON") from err
    if isinstance(parsed, dict) and _BYTES_WRAPPER_KEY in parsed and len(parsed) == 1:
        return base64.b64decode(parsed[_BYTES_WRAPPER_KEY])
    return parsed
