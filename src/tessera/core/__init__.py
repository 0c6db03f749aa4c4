from __future__ import annotations

from .authority import BURN_PRINCIPAL, UNBOUND, AuthorityBinding, Bound, Unbound
from .errors import Result, TicketErrorKind, TicketRegistryError, result_from_dict, result_to_dict
from .registry import REGISTRY, TicketRegistry
from .tickets import (
    Ticket,
    TicketMetadata,
    ticket_from_dict,
    ticket_metadata_from_dict,
    ticket_metadata_to_dict,
    ticket_to_dict,
)

__all__ = [
    "BURN_PRINCIPAL",
    "UNBOUND",
    "AuthorityBinding",
    "Bound",
    "Unbound",
    "Result",
    "TicketErrorKind",
    "TicketRegistryError",
    "result_to_dict",
    "result_from_dict",
    "TicketRegistry",
    "REGISTRY",
    "Ticket",
    "TicketMetadata",
    "ticket_to_dict",
    "ticket_from_dict",
    "ticket_metadata_to_dict",
    "ticket_metadata_from_dict",
]
