from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from ..api import create_api_app
from ..config import Settings
from ..core.registry import TicketRegistry
from ..logging_config import set_log_level

_app: FastAPI | None = None


def create_app(registry: TicketRegistry | None = None, settings: Settings | None = None) -> FastAPI:
    """Create the service app and apply process-level settings (log level)."""

    cfg = settings if settings is not None else Settings.from_environment()
    set_log_level(cfg.log_level)
    return create_api_app(registry=registry, settings=cfg)


def __getattr__(name: str) -> Any:
    # Convenience for uvicorn: `uvicorn tessera.runtime.app:app`.
    # Built on first access so importing tessera never binds the shared registry.
    global _app
    if name == "app":
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
