from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Ticket:
    """Ownership record for a single ticket id.

    Notes:
    - Only `owner` ever changes after creation (via transfer).
    - `purchased_at` is the caller-supplied block height at assignment time.
    """

    event_id: int
    owner: str
    is_transferable: bool
    purchased_at: int
    price: int | float


@dataclass(frozen=True)
class TicketMetadata:
    event_name: str
    ticket_type: str
    seat_info: str


def ticket_to_dict(ticket: Ticket) -> dict[str, Any]:
    return {
        "eventId": int(ticket.event_id),
        "owner": ticket.owner,
        "isTransferable": bool(ticket.is_transferable),
        "purchasedAt": int(ticket.purchased_at),
        "price": ticket.price,
    }


def ticket_from_dict(data: dict[str, Any]) -> Ticket:
    return Ticket(
        event_id=int(data["eventId"]),
        owner=str(data["owner"]),
        is_transferable=bool(data["isTransferable"]),
        purchased_at=int(data["purchasedAt"]),
        price=data["price"],
    )


def ticket_metadata_to_dict(meta: TicketMetadata) -> dict[str, Any]:
    return {
        "eventName": meta.event_name,
        "ticketType": meta.ticket_type,
        "seatInfo": meta.seat_info,
    }


def ticket_metadata_from_dict(data: dict[str, Any]) -> TicketMetadata:
    return TicketMetadata(
        event_name=str(data["eventName"]),
        ticket_type=str(data["ticketType"]),
        seat_info=str(data["seatInfo"]),
    )
