from __future__ import annotations

import pytest

from tessera.config import Settings
from tessera.core.errors import Result, TicketErrorKind
from tessera.core.registry import TicketRegistry
from tessera.core.tickets import Ticket, TicketMetadata
from tessera.sdk.client import TesseraClient


@pytest.fixture
def registry() -> TicketRegistry:
    return TicketRegistry()


@pytest.fixture
def client(registry: TicketRegistry) -> TesseraClient:
    from fastapi.testclient import TestClient

    from tessera.api import create_api_app

    http = TestClient(create_api_app(registry=registry, settings=Settings()))
    return TesseraClient("http://testserver", http=http)


def test_client_round_trips_registry_operations(client: TesseraClient, registry: TicketRegistry) -> None:
    assert client.assign_ticket(0, 1, "ST1TEST", True, 100, "Concert", "VIP", "A1") == Result.failure(
        TicketErrorKind.AUTHORITY_NOT_VERIFIED
    )
    assert client.set_authority("ST2TEST") == Result.success(True)
    assert client.set_authority("ST2TEST").error is TicketErrorKind.AUTHORITY_ALREADY_SET

    assert client.assign_ticket(0, 1, "ST1TEST", True, 100, "Concert", "VIP", "A1", block_height=12).ok
    assert client.get_ticket_details(0) == Ticket(
        event_id=1, owner="ST1TEST", is_transferable=True, purchased_at=12, price=100
    )
    assert client.get_ticket_metadata(0) == TicketMetadata(event_name="Concert", ticket_type="VIP", seat_info="A1")
    assert registry.get_ticket_details(0) == client.get_ticket_details(0)

    assert client.transfer_ticket(0, "ST3TEST", caller="ST4TEST").error is TicketErrorKind.NOT_OWNER
    assert client.transfer_ticket(0, "ST3TEST", caller="ST1TEST").ok
    assert client.verify_ticket(0, "ST3TEST") == Result.success(True)

    assert client.burn_ticket(0, caller="ST1TEST").error is TicketErrorKind.NOT_OWNER
    assert client.burn_ticket(0, caller="ST3TEST").ok
    assert client.is_ticket_valid(0) == Result.success(False)
    assert client.get_ticket_details(0) is None
    assert client.get_ticket_metadata(0) is None


def test_client_lists_tickets_and_registry_info(client: TesseraClient, registry: TicketRegistry) -> None:
    registry.set_authority("ST2TEST")
    registry.assign_ticket(3, 1, "ST1TEST", False, 9.5, "Concert", "GA", "C3", block_height=1)
    registry.assign_ticket(1, 1, "ST1TEST", True, 20, "Concert", "GA", "C1", block_height=1)

    listed = client.list_tickets()

    assert [tid for tid, _, _ in listed] == [1, 3]
    assert listed[1][1].price == 9.5
    assert listed[1][2].seat_info == "C3"
    info = client.registry_info()
    assert info["nextTicketId"] == 4
    assert info["ticketCount"] == 2


def test_client_raises_on_non_domain_errors(client: TesseraClient) -> None:
    with pytest.raises(RuntimeError):
        client.transfer_ticket(0, "", caller="ST1TEST")


def test_client_raises_when_server_unreachable() -> None:
    # Port 9 (discard) on localhost is not expected to run an HTTP server.
    dead = TesseraClient("http://127.0.0.1:9", timeout_s=0.2)
    with pytest.raises(RuntimeError):
        dead.is_ticket_valid(0)
