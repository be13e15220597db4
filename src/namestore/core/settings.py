"""Settings for namestore collections.

Stores are normally built directly with constructor arguments. Applications
that want the comparer and capacity hint driven by the environment build
them through ``NameValueStore.from_settings()`` instead, which reads
``NameStoreSettings``.

Features:
    - **NameStoreSettings:** comparer, initial_capacity, log_level, log_json
    - **env_prefix:** ``NAMESTORE_`` environment variable namespacing
    - **.env file support:** Automatic loading via pydantic-settings
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> import os
    >>> os.environ["NAMESTORE_COMPARER"] = "ordinal"
    >>> NameStoreSettings().comparer
    'ordinal'

Tags:
    settings, configuration, pydantic, environment, namestore
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NameStoreSettings(BaseSettings):
    """Environment-driven defaults for new stores.

    Fields
    ──────
    comparer          : Key comparison, ``ignore_case`` or ``ordinal``
    initial_capacity  : Optional capacity hint for new stores
    log_level         : Structlog log level
    log_json          : JSON logs (True), console (False), auto (None)
    """

    model_config = SettingsConfigDict(
        env_prefix="NAMESTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Collection ───────────────────────────────────────────────
    comparer: Literal["ignore_case", "ordinal"] = "ignore_case"
    initial_capacity: int | None = Field(
        default=None,
        ge=0,
        description="Capacity hint for new stores",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None


_settings: NameStoreSettings | None = None


def get_settings() -> NameStoreSettings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = NameStoreSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
