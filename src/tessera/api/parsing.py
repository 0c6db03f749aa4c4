from __future__ import annotations

import math
from typing import Any


def parse_bool(value: Any, *, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        raise ValueError(f"Missing {field}")
    s = str(value).strip().lower()
    if s in {"1", "true", "yes", "on"}:
        return True
    if s in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid {field}")


def parse_int(value: Any, *, field: str) -> int:
    if value is None:
        raise ValueError(f"Missing {field}")
    if isinstance(value, bool):
        raise ValueError(f"Invalid {field}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Invalid {field}")
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError as ex:
        raise ValueError(f"Invalid {field}") from ex


def parse_price(value: Any) -> int | float:
    if value is None:
        raise ValueError("Missing price")
    if isinstance(value, bool):
        raise ValueError("Invalid price")
    if isinstance(value, int):
        return value
    try:
        f = float(value)
    except (TypeError, ValueError) as ex:
        raise ValueError("Invalid price") from ex
    if not math.isfinite(f):
        raise ValueError("Invalid price")
    return int(f) if f.is_integer() else f


def parse_text(value: Any, *, field: str) -> str:
    if value is None:
        raise ValueError(f"Missing {field}")
    return str(value)


def parse_principal(value: Any, *, field: str) -> str:
    p = str(value if value is not None else "").strip()
    if not p:
        raise ValueError(f"Missing {field}")
    return p


def parse_assign_body(body: dict[str, Any]) -> dict[str, Any]:
    """Validate a ticket assignment body and return registry keyword arguments.

    `blockHeight` defaults to 0 when the caller does not track a clock.
    """

    return {
        "event_id": parse_int(body.get("eventId"), field="eventId"),
        "owner": parse_principal(body.get("owner"), field="owner"),
        "is_transferable": parse_bool(body.get("isTransferable"), field="isTransferable"),
        "price": parse_price(body.get("price")),
        "event_name": parse_text(body.get("eventName"), field="eventName"),
        "ticket_type": parse_text(body.get("ticketType"), field="ticketType"),
        "seat_info": parse_text(body.get("seatInfo"), field="seatInfo"),
        "block_height": parse_int(body.get("blockHeight", 0), field="blockHeight"),
    }
