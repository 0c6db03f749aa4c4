from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..config import Settings
from ..core.registry import REGISTRY, TicketRegistry
from ..logging_config import get_logger
from .routes import PRINCIPAL_HEADER, mount_tickets_api

logger = get_logger(__name__)


def create_api_app(registry: TicketRegistry | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the HTTP surface around one registry instance.

    Falls back to the process-wide `REGISTRY` and to environment settings.
    """

    reg = registry if registry is not None else REGISTRY
    cfg = settings if settings is not None else Settings.from_environment()

    if cfg.authority and reg.authority() is None:
        res = reg.set_authority(cfg.authority)
        if not res.ok:
            raise ValueError(f"Cannot bind configured authority {cfg.authority!r}: {res.error.name}")
    elif cfg.authority and reg.authority() != cfg.authority:
        logger.warning(
            "configured authority ignored, registry already bound",
            extra={"configured": cfg.authority, "bound": reg.authority()},
        )

    app = FastAPI(title="tessera", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*", PRINCIPAL_HEADER],
    )

    mount_tickets_api(app, reg)

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/revision")
    def revision() -> dict[str, int]:
        # Minimal polling endpoint.
        return {"revision": reg.revision()}

    @app.get("/api/registry")
    def registry_info() -> dict:
        return {
            "nextTicketId": reg.next_ticket_id(),
            "authority": reg.authority(),
            "ticketCount": reg.ticket_count(),
            "revision": reg.revision(),
        }

    @app.post("/api/reset")
    def reset_registry() -> dict[str, bool]:
        if not cfg.allow_reset:
            raise HTTPException(status_code=403, detail="Reset is disabled")
        reg.reset()
        return {"ok": True}

    return app


__all__ = ["create_api_app", "mount_tickets_api", "PRINCIPAL_HEADER"]
