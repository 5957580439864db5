"""
Iron Crypto Core — Key derivation, AES-CBC, HMAC and encoding helpers.

Every key is derived with PBKDF2-HMAC-SHA1 from the password and a salt.
The salt is the hex string of random bytes and is fed to PBKDF2 as its
UTF-8 text, not as the raw bytes.

Security Note:
    Never log passwords, derived keys, plaintext or ciphertext values.
    Salts and IVs come from ``os.urandom`` and are drawn per call.
"""
import os
import math
import base64
from dataclasses import dataclass
from typing import Optional, Union

from cryptography.hazmat.primitives import hashes, hmac as crypto_hmac, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .config import SealOptions

Password = Union[str, bytes]

BLOCK_SIZE = 128  # AES block size in bits


@dataclass(frozen=True)
class Key:
    """A derived key with the salt (and IV) it was built from."""

    key: bytes
    salt: str
    iv: Optional[bytes] = None


@dataclass(frozen=True)
class HmacResult:
    """Base64url HMAC digest and the salt of the key that produced it."""

    digest: str
    salt: str


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def base64url_encode(data: bytes) -> str:
    """Base64url without ``=`` padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(data: str) -> bytes:
    """Decode unpadded base64url text.

    Raises:
        binascii.Error: If ``data`` is not valid base64url.
    """
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def _to_bytes(value: Password) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


# ---------------------------------------------------------------------------
# Randomness and key derivation
# ---------------------------------------------------------------------------

def random_bits(bits: int) -> bytes:
    """Return ``ceil(bits / 8)`` cryptographically strong random bytes.

    Raises:
        ValueError: If ``bits`` is smaller than 1.
    """
    if bits < 1:
        raise ValueError("Invalid random bits count")
    return os.urandom(math.ceil(bits / 8))


def pbkdf2(password: Password, salt: str, iterations: int, key_length: int) -> bytes:
    """Derive ``key_length`` bytes with PBKDF2-HMAC-SHA1."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA1(),
        length=key_length,
        salt=salt.encode("utf-8"),
        iterations=iterations,
    )
    return kdf.derive(_to_bytes(password))


def generate_key(
    password: Password,
    options: SealOptions,
    salt: Optional[str] = None,
    iv: Optional[bytes] = None,
    hmac: bool = False,
) -> Key:
    """Derive a key from the password.

    Args:
        password: Seal password.
        options: Algorithm, iteration count and salt size.
        salt: Hex salt to reuse; a fresh one is drawn when omitted.
        iv: IV to reuse; a fresh one is drawn for ciphers when omitted.
        hmac: True when the key is used for the integrity HMAC (no IV).

    Returns:
        The derived Key.

    Raises:
        ValueError: If neither ``salt`` nor ``options.salt_bits`` is set.
    """
    spec = options.spec
    if not salt:
        if not options.salt_bits:
            raise ValueError("Missing salt and saltBits options")
        salt = random_bits(options.salt_bits).hex()

    derived = pbkdf2(password, salt, options.iterations, spec.key_bits // 8)

    if iv is None and not hmac and spec.iv_bits:
        iv = random_bits(spec.iv_bits)
    return Key(key=derived, salt=salt, iv=iv)


# ---------------------------------------------------------------------------
# Encryption
# ---------------------------------------------------------------------------

def encrypt(password: Password, options: SealOptions, data: str) -> tuple[bytes, Key]:
    """Encrypt ``data`` with AES-256-CBC (PKCS#7 padded) under a fresh key.

    Returns:
        Tuple of (ciphertext, key) where key carries the salt and IV.
    """
    key = generate_key(password, options)
    padder = padding.PKCS7(BLOCK_SIZE).padder()
    padded = padder.update(data.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key.key), modes.CBC(key.iv)).encryptor()
    return encryptor.update(padded) + encryptor.finalize(), key


def decrypt(
    password: Password,
    options: SealOptions,
    data: bytes,
    salt: str,
    iv: bytes,
) -> str:
    """Decrypt AES-256-CBC ciphertext produced by ``encrypt``.

    Raises:
        ValueError: On a bad IV length, a partial block, bad padding or
            plaintext that is not UTF-8.
    """
    key = generate_key(password, options, salt=salt, iv=iv)
    decryptor = Cipher(algorithms.AES(key.key), modes.CBC(key.iv)).decryptor()
    padded = decryptor.update(data) + decryptor.finalize()
    unpadder = padding.PKCS7(BLOCK_SIZE).unpadder()
    plaintext = unpadder.update(padded) + unpadder.finalize()
    return plaintext.decode("utf-8")


# ---------------------------------------------------------------------------
# Integrity
# ---------------------------------------------------------------------------

def hmac_with_password(
    password: Password,
    options: SealOptions,
    data: str,
    salt: Optional[str] = None,
) -> HmacResult:
    """HMAC-SHA256 of ``data`` under a password-derived key."""
    key = generate_key(password, options, salt=salt, hmac=True)
    h = crypto_hmac.HMAC(key.key, hashes.SHA256())
    h.update(data.encode("utf-8"))
    return HmacResult(digest=base64url_encode(h.finalize()), salt=key.salt)


def fixed_time_comparison(a: str, b: str) -> bool:
    """Compare two strings without leaking where they differ.

    Running time depends only on ``len(a)``: on a length mismatch ``a``
    is compared against itself and the mismatch is kept.
    """
    mismatch = 0 if len(a) == len(b) else 1
    if mismatch:
        b = a
    for x, y in zip(a, b):
        mismatch |= ord(x) ^ ord(y)
    return mismatch == 0
