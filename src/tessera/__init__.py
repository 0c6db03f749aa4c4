from __future__ import annotations

from .core.authority import BURN_PRINCIPAL
from .core.errors import Result, TicketErrorKind, TicketRegistryError
from .core.registry import REGISTRY, TicketRegistry
from .core.tickets import Ticket, TicketMetadata
from .runtime.server import TesseraServer, run
from .sdk.client import TesseraClient

__all__ = [
    "run",
    "TesseraServer",
    "TesseraClient",
    "TicketRegistry",
    "REGISTRY",
    "Ticket",
    "TicketMetadata",
    "Result",
    "TicketErrorKind",
    "TicketRegistryError",
    "BURN_PRINCIPAL",
]
