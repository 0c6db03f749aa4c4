from __future__ import annotations

import contextlib
from typing import Any, Iterator

import httpx

from ..api.routes import PRINCIPAL_HEADER
from ..core.errors import Result, result_from_dict
from ..core.tickets import Ticket, TicketMetadata, ticket_from_dict, ticket_metadata_from_dict


class TesseraClient:
    """HTTP client for a running tessera registry service.

    Domain outcomes (ownership checks, duplicate ids, ...) come back as `Result`
    values exactly as the in-process registry returns them. Anything else the
    server answers with (bad request, 5xx, unreachable host) raises RuntimeError.

    `http` lets callers supply their own `httpx.Client`, e.g. FastAPI's TestClient.
    It is used as-is and never closed by this class.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        *,
        http: httpx.Client | None = None,
        timeout_s: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = float(timeout_s)
        self._http = http

    @contextlib.contextmanager
    def _client(self) -> Iterator[httpx.Client]:
        if self._http is not None:
            yield self._http
            return
        with httpx.Client(base_url=self.base_url, timeout=self.timeout_s) as client:
            yield client

    @staticmethod
    def _principal_headers(caller: str) -> dict[str, str]:
        return {PRINCIPAL_HEADER: str(caller)}

    def _send(self, method: str, path: str, *, what: str, **kwargs: Any) -> httpx.Response:
        try:
            with self._client() as client:
                return client.request(method, path, **kwargs)
        except httpx.HTTPError as ex:
            raise RuntimeError(f"Failed to {what}: {ex}") from ex

    def _result(self, res: httpx.Response, *, what: str) -> Result:
        # Domain failures carry a result body; anything else is a transport/usage error.
        try:
            data = res.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and "ok" in data and (res.status_code < 400 or "error" in data):
            return result_from_dict(data)
        raise RuntimeError(f"Failed to {what}: {res.status_code} {res.text}")

    def set_authority(self, principal: str) -> Result:
        res = self._send("POST", "/api/authority", what="set authority", json={"principal": principal})
        return self._result(res, what="set authority")

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
        block_height: int = 0,
    ) -> Result:
        body = {
            "eventId": int(event_id),
            "owner": owner,
            "isTransferable": bool(is_transferable),
            "price": price,
            "eventName": event_name,
            "ticketType": ticket_type,
            "seatInfo": seat_info,
            "blockHeight": int(block_height),
        }
        res = self._send("PUT", f"/api/tickets/{int(ticket_id)}", what="assign ticket", json=body)
        return self._result(res, what="assign ticket")

    def transfer_ticket(self, ticket_id: int, new_owner: str, *, caller: str) -> Result:
        res = self._send(
            "POST",
            f"/api/tickets/{int(ticket_id)}/transfer",
            what="transfer ticket",
            json={"newOwner": new_owner},
            headers=self._principal_headers(caller),
        )
        return self._result(res, what="transfer ticket")

    def verify_ticket(self, ticket_id: int, candidate_owner: str) -> Result:
        res = self._send(
            "GET",
            f"/api/tickets/{int(ticket_id)}/verify",
            what="verify ticket",
            params={"owner": candidate_owner},
        )
        return self._result(res, what="verify ticket")

    def burn_ticket(self, ticket_id: int, *, caller: str) -> Result:
        res = self._send(
            "DELETE",
            f"/api/tickets/{int(ticket_id)}",
            what="burn ticket",
            headers=self._principal_headers(caller),
        )
        return self._result(res, what="burn ticket")

    def is_ticket_valid(self, ticket_id: int) -> Result:
        res = self._send("GET", f"/api/tickets/{int(ticket_id)}/valid", what="check ticket validity")
        return self._result(res, what="check ticket validity")

    def get_ticket_details(self, ticket_id: int) -> Ticket | None:
        res = self._send("GET", f"/api/tickets/{int(ticket_id)}", what="get ticket details")
        if res.status_code == 404:
            return None
        if res.status_code >= 400:
            raise RuntimeError(f"Failed to get ticket details: {res.status_code} {res.text}")
        return ticket_from_dict(res.json())

    def get_ticket_metadata(self, ticket_id: int) -> TicketMetadata | None:
        res = self._send("GET", f"/api/tickets/{int(ticket_id)}/metadata", what="get ticket metadata")
        if res.status_code == 404:
            return None
        if res.status_code >= 400:
            raise RuntimeError(f"Failed to get ticket metadata: {res.status_code} {res.text}")
        return ticket_metadata_from_dict(res.json())

    def list_tickets(self) -> list[tuple[int, Ticket, TicketMetadata]]:
        res = self._send("GET", "/api/tickets", what="list tickets")
        if res.status_code >= 400:
            raise RuntimeError(f"Failed to list tickets: {res.status_code} {res.text}")
        out: list[tuple[int, Ticket, TicketMetadata]] = []
        for item in res.json():
            out.append((int(item["id"]), ticket_from_dict(item), ticket_metadata_from_dict(item["metadata"])))
        return out

    def registry_info(self) -> dict[str, Any]:
        res = self._send("GET", "/api/registry", what="get registry info")
        if res.status_code >= 400:
            raise RuntimeError(f"Failed to get registry info: {res.status_code} {res.text}")
        return res.json()
