from __future__ import annotations

import contextlib
import socket
import threading
import time
from dataclasses import dataclass

import httpx
import uvicorn

from ..config import Settings
from ..core.registry import REGISTRY, TicketRegistry
from ..logging_config import get_logger
from ..sdk.client import TesseraClient
from .app import create_app

logger = get_logger(__name__)


@dataclass(frozen=True)
class TesseraServer:
    host: str
    port: int
    url: str
    registry: TicketRegistry

    def client(self, *, timeout_s: float = 10.0) -> TesseraClient:
        """Return an HTTP client pointed at this server."""
        return TesseraClient(self.url.rstrip("/"), timeout_s=timeout_s)


def _find_free_port(host: str) -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _normalize_base_url(url: str) -> str:
    url = url.strip()
    if not url:
        return ""
    # Allow passing just host:port.
    if "://" not in url:
        url = "http://" + url
    return url.rstrip("/")


def _is_server_alive(base_url: str, *, timeout_s: float = 0.2) -> bool:
    """Best-effort check that a tessera server is reachable."""

    try:
        with httpx.Client(base_url=base_url, timeout=timeout_s) as client:
            r = client.get("/healthz")
            if r.status_code != 200:
                return False
            data = r.json()
            return bool(data.get("ok"))
    except (httpx.HTTPError, ValueError):
        return False


def run(
    *,
    host: str | None = None,
    port: int | None = None,
    authority: str | None = None,
    registry: TicketRegistry | None = None,
    log_level: str | None = None,
    access_log: bool = False,
    new_server: bool = False,
    connect_timeout_s: float = 0.2,
) -> TesseraServer | TesseraClient:
    """Start the registry service, or attach to one that is already running.

    Behavior:
    - If TESSERA_URL is set, we *attach* to that server (client mode) unless
      `new_server=True`.
    - Otherwise, if `port != 0` and a server is already reachable at http://{host}:{port},
      we attach to it unless `new_server=True`.
    - Otherwise we start uvicorn in a daemon thread and return a `TesseraServer`.

    Arguments left as None fall back to the environment settings. `port=0` picks a free port.
    """

    settings = Settings.from_environment()
    host = host if host is not None else settings.host
    port = int(port) if port is not None else settings.port
    if authority is not None:
        settings.authority = authority
    if log_level is not None:
        settings.log_level = log_level.upper()

    env_url = _normalize_base_url(settings.url or "")

    # 1) Try attaching to an explicitly provided server.
    if env_url and not new_server:
        if _is_server_alive(env_url, timeout_s=connect_timeout_s):
            logger.info("attached to running registry", extra={"url": env_url})
            return TesseraClient(env_url)

    # 2) Try attaching to host/port if they are explicitly chosen.
    if port != 0 and not new_server:
        default_url = _normalize_base_url(f"http://{host}:{port}")
        if _is_server_alive(default_url, timeout_s=connect_timeout_s):
            logger.info("attached to running registry", extra={"url": default_url})
            return TesseraClient(default_url)

    # 3) Start a fresh server.
    if port == 0:
        port = _find_free_port(host)

    reg = registry if registry is not None else REGISTRY
    app = create_app(registry=reg, settings=settings)

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
        access_log=access_log,
    )
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    url = f"http://{host}:{port}/"
    # Wait for the socket so a subsequent client call doesn't race with startup.
    deadline = time.monotonic() + 5.0
    while not server.started and time.monotonic() < deadline:
        time.sleep(0.01)

    logger.info("registry service started", extra={"url": url})
    return TesseraServer(host=host, port=port, url=url, registry=reg)
