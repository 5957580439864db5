"""
Cookie Configuration — Secrets and default options from the environment.

Reads:
    COOKIE_SIGNING_SECRET = <secret for signed cookies>
    COOKIE_SEAL_PASSWORD = <password for sealed cookies, >= 32 chars>
    COOKIE_DOMAIN = <default Domain attribute>
    COOKIE_SECURE = <true/false, default Secure attribute>
    COOKIE_SAMESITE = <Strict|Lax|None>

Security Note:
    Never log secret material. Only log which settings were loaded.
"""
import os
import logging
import secrets
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigurationError
from .options import CookieOptions, coerce_options

logger = logging.getLogger("navigator.cookies")

MIN_SEAL_PASSWORD_LENGTH = 32

_TRUE_VALUES = {"1", "true", "yes", "on"}


def generate_secret(nbytes: int = 32) -> str:
    """Generate a random urlsafe secret for signing or sealing.

    This is a utility for operators to generate new secrets.

    Returns:
        Urlsafe text of ``nbytes`` random bytes (43 chars for 32 bytes).
    """
    return secrets.token_urlsafe(nbytes)


class CookieConfig(BaseModel):
    """Validated cookie settings."""

    model_config = ConfigDict(frozen=True)

    signing_secret: Optional[str] = None
    seal_password: Optional[str] = None
    default_options: CookieOptions = Field(default_factory=CookieOptions)

    @field_validator("seal_password")
    @classmethod
    def validate_seal_password(cls, v: Optional[str]) -> Optional[str]:
        """Seal passwords must be at least 32 characters."""
        if v is not None and len(v) < MIN_SEAL_PASSWORD_LENGTH:
            raise ValueError(
                f"seal_password must be at least {MIN_SEAL_PASSWORD_LENGTH} "
                f"characters, got {len(v)}"
            )
        return v

    def options(self, overrides=None) -> CookieOptions:
        """Merge caller options over ``default_options``.

        Only fields the caller set replace the defaults, so an unset
        ``path`` still gets the ``/`` default when the cookie is written.

        Args:
            overrides: CookieOptions or a mapping of its fields.

        Returns:
            A validated CookieOptions instance.
        """
        data = self.default_options.model_dump(exclude_unset=True)
        data.update(coerce_options(overrides).model_dump(exclude_unset=True))
        return CookieOptions.model_validate(data)

    @classmethod
    def from_env(cls) -> "CookieConfig":
        """Create CookieConfig by loading values from environment.

        Returns:
            Populated CookieConfig instance.

        Raises:
            ConfigurationError: If neither COOKIE_SIGNING_SECRET nor
                COOKIE_SEAL_PASSWORD is set.
        """
        signing_secret = os.environ.get("COOKIE_SIGNING_SECRET") or None
        seal_password = os.environ.get("COOKIE_SEAL_PASSWORD") or None
        if signing_secret is None and seal_password is None:
            raise ConfigurationError(
                "No cookie secrets found in environment. "
                "Set COOKIE_SIGNING_SECRET and/or COOKIE_SEAL_PASSWORD"
            )
        defaults: dict = {}
        domain = os.environ.get("COOKIE_DOMAIN")
        if domain:
            defaults["domain"] = domain
        secure = os.environ.get("COOKIE_SECURE")
        if secure:
            defaults["secure"] = secure.strip().lower() in _TRUE_VALUES
        same_site = os.environ.get("COOKIE_SAMESITE")
        if same_site:
            defaults["same_site"] = same_site
        logger.debug(
            "Loaded cookie config: signing=%s sealing=%s defaults=%s",
            signing_secret is not None,
            seal_password is not None,
            sorted(defaults),
        )
        return cls(
            signing_secret=signing_secret,
            seal_password=seal_password,
            default_options=CookieOptions(**defaults),
        )
