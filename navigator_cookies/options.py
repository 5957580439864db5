"""
Cookie Options — Validated, immutable Set-Cookie attributes.

``CookieOptions`` is built once per call and never mutated; the prefix
policy and the facade derive new instances with ``model_copy``.
"""
from datetime import datetime
from typing import Literal, Optional, Union
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

SameSite = Literal["Strict", "Lax", "None"]
CookiePrefix = Literal["secure", "host"]

_SAMESITE_VALUES = {"strict": "Strict", "lax": "Lax", "none": "None"}


class CookieOptions(BaseModel):
    """Attributes rendered after ``name=value`` in a Set-Cookie header."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    domain: Optional[str] = None
    path: Optional[str] = None
    expires: Optional[datetime] = None
    max_age: Optional[Union[int, float]] = None
    http_only: bool = False
    secure: bool = False
    same_site: Optional[SameSite] = None
    partitioned: bool = False
    prefix: Optional[CookiePrefix] = None

    @field_validator("same_site", mode="before")
    @classmethod
    def normalize_same_site(cls, v):
        """Accept ``lax``/``LAX`` and friends, store the canonical spelling."""
        if isinstance(v, str):
            return _SAMESITE_VALUES.get(v.lower(), v)
        return v

    @model_validator(mode="after")
    def validate_partitioned(self) -> "CookieOptions":
        """Partitioned cookies must be Secure (a prefix forces Secure)."""
        if self.partitioned and not self.secure and self.prefix is None:
            raise ValueError(
                "partitioned cookies require secure=True"
            )
        return self


def coerce_options(
    options: Union[CookieOptions, Mapping, None]
) -> CookieOptions:
    """Return ``options`` as a CookieOptions instance.

    Mappings are validated, so only the keys they carry count as set
    (see ``with_default_path``).
    """
    if options is None:
        return CookieOptions()
    if isinstance(options, CookieOptions):
        return options
    return CookieOptions.model_validate(dict(options))


def with_default_path(options: CookieOptions, path: str = "/") -> CookieOptions:
    """Fill in ``path`` unless the caller set it, even to ``None``."""
    if "path" in options.model_fields_set:
        return options
    return options.model_copy(update={"path": path})
