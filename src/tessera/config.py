"""Environment-driven service settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

_DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: tuple[str, ...]) -> list[str]:
    raw = os.environ.get(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Service settings.

    `authority` is the principal bound at startup by the deploying collaborator.
    Leave it unset to bind later through `POST /api/authority`.
    """

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    authority: str | None = None
    cors_origins: list[str] = field(default_factory=lambda: list(_DEFAULT_CORS_ORIGINS))
    allow_reset: bool = False
    url: str | None = None

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        port_raw = os.environ.get("TESSERA_PORT", "8000")
        try:
            port = int(port_raw)
        except ValueError as ex:
            raise ValueError(f"TESSERA_PORT must be an integer, got {port_raw!r}") from ex

        authority = os.environ.get("TESSERA_AUTHORITY", "").strip() or None
        url = os.environ.get("TESSERA_URL", "").strip() or None

        return cls(
            host=os.environ.get("TESSERA_HOST", "127.0.0.1"),
            port=port,
            log_level=os.environ.get("TESSERA_LOG_LEVEL", "INFO").upper(),
            authority=authority,
            cors_origins=_env_list("TESSERA_CORS_ORIGINS", _DEFAULT_CORS_ORIGINS),
            allow_reset=_env_bool("TESSERA_ALLOW_RESET", False),
            url=url,
        )
