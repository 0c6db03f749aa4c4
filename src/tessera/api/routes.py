from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Header, HTTPException
from starlette.responses import JSONResponse

from ..core.errors import Result, TicketErrorKind, result_to_dict
from ..core.registry import TicketRegistry
from ..core.tickets import Ticket, TicketMetadata, ticket_metadata_to_dict, ticket_to_dict
from .parsing import parse_assign_body, parse_int, parse_principal

PRINCIPAL_HEADER = "X-Tessera-Principal"

_STATUS_BY_ERROR: dict[TicketErrorKind, int] = {
    TicketErrorKind.TICKET_NOT_FOUND: 404,
    TicketErrorKind.NOT_OWNER: 403,
    TicketErrorKind.NOT_AUTHORIZED: 403,
    TicketErrorKind.TICKET_EXISTS: 409,
    TicketErrorKind.NOT_TRANSFERABLE: 409,
    TicketErrorKind.AUTHORITY_ALREADY_SET: 409,
    TicketErrorKind.AUTHORITY_NOT_VERIFIED: 409,
}


def status_for_result(result: Result) -> int:
    if result.error is None:
        return 200
    return _STATUS_BY_ERROR.get(result.error, 422)


def result_response(result: Result) -> JSONResponse:
    return JSONResponse(content=result_to_dict(result), status_code=status_for_result(result))


def _ticket_id(raw: str) -> int:
    try:
        return parse_int(raw, field="ticket id")
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))


def _caller(raw: str | None) -> str:
    try:
        return parse_principal(raw, field=f"{PRINCIPAL_HEADER} header")
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))


def ticket_to_list_item(ticket_id: int, ticket: Ticket, meta: TicketMetadata) -> dict[str, Any]:
    return {
        "id": int(ticket_id),
        **ticket_to_dict(ticket),
        "metadata": ticket_metadata_to_dict(meta),
    }


def mount_tickets_api(app: FastAPI, registry: TicketRegistry) -> None:
    """Mount ticket endpoints backed by `registry`.

    Domain failures come back as result bodies with a matching status code;
    malformed input is a plain 400.
    """

    @app.post("/api/authority")
    def set_authority(body: dict) -> JSONResponse:
        principal = str(body.get("principal", "")).strip()
        if not principal:
            raise HTTPException(status_code=400, detail="principal is required")
        return result_response(registry.set_authority(principal))

    @app.get("/api/tickets")
    def list_tickets() -> list[dict[str, Any]]:
        return [ticket_to_list_item(tid, t, m) for tid, t, m in registry.list_tickets()]

    @app.put("/api/tickets/{ticket_id}")
    def assign_ticket(ticket_id: str, body: dict) -> JSONResponse:
        tid = _ticket_id(ticket_id)
        try:
            kwargs = parse_assign_body(body)
        except ValueError as ex:
            raise HTTPException(status_code=400, detail=str(ex))
        return result_response(registry.assign_ticket(tid, **kwargs))

    @app.get("/api/tickets/{ticket_id}")
    def get_ticket_details(ticket_id: str) -> dict[str, Any]:
        ticket = registry.get_ticket_details(_ticket_id(ticket_id))
        if ticket is None:
            raise HTTPException(status_code=404, detail="Unknown ticket")
        return ticket_to_dict(ticket)

    @app.get("/api/tickets/{ticket_id}/metadata")
    def get_ticket_metadata(ticket_id: str) -> dict[str, Any]:
        meta = registry.get_ticket_metadata(_ticket_id(ticket_id))
        if meta is None:
            raise HTTPException(status_code=404, detail="Unknown ticket")
        return ticket_metadata_to_dict(meta)

    @app.post("/api/tickets/{ticket_id}/transfer")
    def transfer_ticket(
        ticket_id: str,
        body: dict,
        x_tessera_principal: str | None = Header(default=None),
    ) -> JSONResponse:
        tid = _ticket_id(ticket_id)
        caller = _caller(x_tessera_principal)
        try:
            new_owner = parse_principal(body.get("newOwner"), field="newOwner")
        except ValueError as ex:
            raise HTTPException(status_code=400, detail=str(ex))
        return result_response(registry.transfer_ticket(tid, new_owner, caller=caller))

    @app.get("/api/tickets/{ticket_id}/verify")
    def verify_ticket(ticket_id: str, owner: str | None = None) -> JSONResponse:
        tid = _ticket_id(ticket_id)
        if owner is None:
            raise HTTPException(status_code=400, detail="owner query parameter is required")
        return result_response(registry.verify_ticket(tid, owner))

    @app.get("/api/tickets/{ticket_id}/valid")
    def is_ticket_valid(ticket_id: str) -> JSONResponse:
        return result_response(registry.is_ticket_valid(_ticket_id(ticket_id)))

    @app.delete("/api/tickets/{ticket_id}")
    def burn_ticket(ticket_id: str, x_tessera_principal: str | None = Header(default=None)) -> JSONResponse:
        tid = _ticket_id(ticket_id)
        caller = _caller(x_tessera_principal)
        return result_response(registry.burn_ticket(tid, caller=caller))
