from __future__ import annotations

import threading

from tessera.core.errors import TicketErrorKind
from tessera.core.registry import TicketRegistry


def test_concurrent_assignments_keep_stores_consistent() -> None:
    reg = TicketRegistry()
    reg.set_authority("ST2TEST")
    outcomes: list[bool] = []
    outcomes_lock = threading.Lock()

    def worker(offset: int) -> None:
        # Every worker races on the same ids; exactly one assignment per id may win.
        for tid in range(50):
            res = reg.assign_ticket(tid, 1, f"OWNER{offset}", True, 10, "Concert", "GA", f"S{tid}", block_height=0)
            with outcomes_lock:
                outcomes.append(res.ok)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count(True) == 50
    assert reg.ticket_count() == 50
    assert reg.next_ticket_id() == 50
    for tid, ticket, meta in reg.list_tickets():
        assert meta.seat_info == f"S{tid}"
        assert ticket.owner.startswith("OWNER")


def test_concurrent_transfers_respect_ownership_gate() -> None:
    reg = TicketRegistry()
    reg.set_authority("ST2TEST")
    reg.assign_ticket(0, 1, "A", True, 10, "Concert", "GA", "S0", block_height=0)
    errors: list[TicketErrorKind | None] = []
    errors_lock = threading.Lock()

    def grab(new_owner: str) -> None:
        # All callers claim to be "A"; only the first transfer can pass the gate.
        res = reg.transfer_ticket(0, new_owner, caller="A")
        with errors_lock:
            errors.append(res.error)

    threads = [threading.Thread(target=grab, args=(f"B{i}",)) for i in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors.count(None) == 1
    assert errors.count(TicketErrorKind.NOT_OWNER) == 9
    ticket = reg.get_ticket_details(0)
    assert ticket is not None
    assert ticket.owner.startswith("B")
