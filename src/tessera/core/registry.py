from __future__ import annotations

import threading
from dataclasses import replace

from ..logging_config import get_logger
from .authority import UNBOUND, AuthorityBinding, Bound, bound_principal, is_valid_authority_principal
from .errors import Result, TicketErrorKind
from .tickets import Ticket, TicketMetadata

logger = get_logger(__name__)


class TicketRegistry:
    """In-memory ticket ownership registry.

    Every public method takes the registry lock, so each call is atomic with
    respect to both stores. Precondition violations are returned as failed
    `Result`s and leave the registry untouched.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tickets: dict[int, Ticket] = {}
        self._ticket_metadata: dict[int, TicketMetadata] = {}
        self._next_ticket_id = 0
        self._authority: AuthorityBinding = UNBOUND
        self._revision = 0

    def reset(self) -> None:
        with self._lock:
            self._tickets.clear()
            self._ticket_metadata.clear()
            self._next_ticket_id = 0
            self._authority = UNBOUND
            self._revision += 1
        logger.info("registry reset")

    def revision(self) -> int:
        with self._lock:
            return self._revision

    def next_ticket_id(self) -> int:
        with self._lock:
            return self._next_ticket_id

    def authority(self) -> str | None:
        with self._lock:
            return bound_principal(self._authority)

    def _reject(self, kind: TicketErrorKind, op: str, **fields: object) -> Result:
        logger.warning("%s rejected", op, extra={"op": op, "error": kind.name, **fields})
        return Result.failure(kind)

    def set_authority(self, principal: str) -> Result:
        with self._lock:
            if not is_valid_authority_principal(principal):
                return self._reject(TicketErrorKind.INVALID_AUTHORITY, "set_authority", principal=principal)
            if isinstance(self._authority, Bound):
                return self._reject(TicketErrorKind.AUTHORITY_ALREADY_SET, "set_authority", principal=principal)
            self._authority = Bound(principal=principal)
            self._revision += 1
        logger.info("authority bound", extra={"op": "set_authority", "principal": principal})
        return Result.success(True)

    def assign_ticket(
        self,
        ticket_id: int,
        event_id: int,
        owner: str,
        is_transferable: bool,
        price: int | float,
        event_name: str,
        ticket_type: str,
        seat_info: str,
        *,
        block_height: int,
    ) -> Result:
        tid = int(ticket_id)
        with self._lock:
            if tid in self._tickets:
                return self._reject(TicketErrorKind.TICKET_EXISTS, "assign_ticket", ticket_id=tid)
            if int(event_id) < 0:
                return self._reject(TicketErrorKind.INVALID_EVENT, "assign_ticket", ticket_id=tid, event_id=event_id)
            if int(block_height) < 0:
                return self._reject(
                    TicketErrorKind.INVALID_TIMESTAMP, "assign_ticket", ticket_id=tid, block_height=block_height
                )
            if not isinstance(self._authority, Bound):
                return self._reject(TicketErrorKind.AUTHORITY_NOT_VERIFIED, "assign_ticket", ticket_id=tid)

            self._tickets[tid] = Ticket(
                event_id=int(event_id),
                owner=str(owner),
                is_transferable=bool(is_transferable),
                purchased_at=int(block_height),
                price=price,
            )
            self._ticket_metadata[tid] = TicketMetadata(
                event_name=str(event_name),
                ticket_type=str(ticket_type),
                seat_info=str(seat_info),
            )
            # Clamped so out-of-order or re-used ids never move the counter back.
            self._next_ticket_id = max(self._next_ticket_id, tid + 1)
            self._revision += 1

        logger.info(
            "ticket assigned",
            extra={"op": "assign_ticket", "ticket_id": tid, "event_id": int(event_id), "owner": owner},
        )
        return Result.success(True)

    def transfer_ticket(self, ticket_id: int, new_owner: str, *, caller: str) -> Result:
        tid = int(ticket_id)
        with self._lock:
            ticket = self._tickets.get(tid)
            if ticket is None:
                return self._reject(TicketErrorKind.TICKET_NOT_FOUND, "transfer_ticket", ticket_id=tid, caller=caller)
            if ticket.owner != caller:
                return self._reject(TicketErrorKind.NOT_OWNER, "transfer_ticket", ticket_id=tid, caller=caller)
            if not ticket.is_transferable:
                return self._reject(TicketErrorKind.NOT_TRANSFERABLE, "transfer_ticket", ticket_id=tid, caller=caller)
            if tid >= self._next_ticket_id:
                return self._reject(TicketErrorKind.INVALID_TICKET_ID, "transfer_ticket", ticket_id=tid, caller=caller)

            self._tickets[tid] = replace(ticket, owner=str(new_owner))
            self._revision += 1

        logger.info(
            "ticket transferred",
            extra={"op": "transfer_ticket", "ticket_id": tid, "caller": caller, "new_owner": new_owner},
        )
        return Result.success(True)

    def verify_ticket(self, ticket_id: int, candidate_owner: str) -> Result:
        with self._lock:
            ticket = self._tickets.get(int(ticket_id))
            if ticket is None:
                return Result.failure(TicketErrorKind.TICKET_NOT_FOUND)
            return Result.success(ticket.owner == candidate_owner)

    def burn_ticket(self, ticket_id: int, *, caller: str) -> Result:
        tid = int(ticket_id)
        with self._lock:
            ticket = self._tickets.get(tid)
            if ticket is None:
                return self._reject(TicketErrorKind.TICKET_NOT_FOUND, "burn_ticket", ticket_id=tid, caller=caller)
            if ticket.owner != caller:
                return self._reject(TicketErrorKind.NOT_OWNER, "burn_ticket", ticket_id=tid, caller=caller)

            del self._tickets[tid]
            del self._ticket_metadata[tid]
            self._revision += 1

        logger.info("ticket burned", extra={"op": "burn_ticket", "ticket_id": tid, "caller": caller})
        return Result.success(True)

    def get_ticket_details(self, ticket_id: int) -> Ticket | None:
        with self._lock:
            return self._tickets.get(int(ticket_id))

    def get_ticket_metadata(self, ticket_id: int) -> TicketMetadata | None:
        with self._lock:
            return self._ticket_metadata.get(int(ticket_id))

    def is_ticket_valid(self, ticket_id: int) -> Result:
        with self._lock:
            return Result.success(int(ticket_id) in self._tickets)

    def ticket_count(self) -> int:
        with self._lock:
            return len(self._tickets)

    def list_tickets(self) -> list[tuple[int, Ticket, TicketMetadata]]:
        with self._lock:
            return [(tid, self._tickets[tid], self._ticket_metadata[tid]) for tid in sorted(self._tickets)]


REGISTRY = TicketRegistry()
