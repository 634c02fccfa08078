"""Configuration system for winrandom.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (WINRANDOM_*) -> .env file -> field defaults.

The provider list is an ordered, comma-separated string of registered
provider names. The first provider that can be acquired serves the call;
the rest are fallbacks.
"""

from __future__ import annotations

import struct
import sys

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS: frozenset[str] = frozenset({"none", "summary", "full"})


def _default_providers() -> str:
    """Return the platform's default provider order.

    Windows prefers the AES CryptoAPI provider and falls back to the
    general-purpose RSA provider. Elsewhere ``getrandom()`` is preferred
    over ``os.urandom()``.
    """
    if sys.platform == "win32":
        return "rsa_aes,rsa_full"
    return "getrandom,urandom"


class WinRandomConfig(BaseSettings):
    """Configuration for winrandom.

    Resolution order: init kwargs -> env vars (WINRANDOM_*) -> .env file -> defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="WINRANDOM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Entropy providers ---

    providers: str = Field(
        default_factory=_default_providers,
        description="Comma-separated provider names, tried in order",
    )
    mock_seed: int | None = Field(
        default=None,
        description="Seed for the 'mock' provider (None = unseeded)",
    )

    # --- Request limits ---

    native_width_bytes: int = Field(
        default=struct.calcsize("L"),
        gt=0,
        description="Width in bytes of the integer returned by long()",
    )
    max_byte_count: int = Field(
        default=0xFFFFFFFF,
        ge=0,
        description="Largest byte count accepted by bytes(n)",
    )

    # --- Range sampling ---

    continuous_test_min_bits: int = Field(
        default=16,
        gt=0,
        description="Candidate width (bits) at which the continuous test runs",
    )
    legacy_bit_width: bool = Field(
        default=False,
        description="Size range candidates with ceil(log2(max - 1)) instead of bit_length",
    )

    # --- Logging ---

    log_level: str = Field(
        default="summary",
        description="Logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Store all draw records in memory for analysis",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}"
            )
        return value

    @property
    def provider_names(self) -> list[str]:
        """The configured provider names, in order, blanks removed."""
        return [name.strip() for name in self.providers.split(",") if name.strip()]
