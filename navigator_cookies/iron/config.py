"""
Iron Configuration — Fixed algorithm parameter sets for sealing.

The values below are part of the sealed wire format. In particular the
single PBKDF2 iteration is weak, but changing it makes every previously
sealed cookie unreadable.
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Algorithm = Literal["aes-256-cbc", "sha256"]


class AlgorithmSpec(BaseModel):
    """Key and IV sizes of a supported algorithm."""

    model_config = ConfigDict(frozen=True)

    key_bits: int
    iv_bits: Optional[int] = None


ALGORITHMS: dict[str, AlgorithmSpec] = {
    "aes-256-cbc": AlgorithmSpec(key_bits=256, iv_bits=128),
    "sha256": AlgorithmSpec(key_bits=256),
}


class SealOptions(BaseModel):
    """Key derivation settings for one half of the seal."""

    model_config = ConfigDict(frozen=True)

    salt_bits: Optional[int] = Field(default=256, ge=1)
    algorithm: Algorithm
    iterations: int = Field(default=1, ge=1)

    @property
    def spec(self) -> AlgorithmSpec:
        return ALGORITHMS[self.algorithm]


ENCRYPTION = SealOptions(salt_bits=256, algorithm="aes-256-cbc", iterations=1)
INTEGRITY = SealOptions(salt_bits=256, algorithm="sha256", iterations=1)
