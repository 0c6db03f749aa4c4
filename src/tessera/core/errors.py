from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class TicketErrorKind(IntEnum):
    """Closed set of registry failure kinds.

    The numeric codes are stable and travel over the wire next to the name.
    `NOT_AUTHORIZED` and `PRICE_VIOLATION` are reserved: no current operation
    produces them.
    """

    NOT_AUTHORIZED = 100
    TICKET_EXISTS = 101
    INVALID_EVENT = 102
    TICKET_NOT_FOUND = 103
    NOT_OWNER = 104
    NOT_TRANSFERABLE = 105
    PRICE_VIOLATION = 106
    INVALID_TIMESTAMP = 107
    AUTHORITY_NOT_VERIFIED = 108
    INVALID_TICKET_ID = 109
    INVALID_AUTHORITY = 110
    AUTHORITY_ALREADY_SET = 111

    @classmethod
    def from_any(cls, value: Any) -> "TicketErrorKind":
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        name = str(value).strip().upper().replace("-", "_")
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown ticket error kind: {value!r}") from None


class TicketRegistryError(Exception):
    """Raised by `Result.unwrap()` for callers that prefer exceptions."""

    def __init__(self, kind: TicketErrorKind) -> None:
        super().__init__(f"{kind.name} ({int(kind)})")
        self.kind = kind


@dataclass(frozen=True)
class Result:
    """Tagged outcome of a registry operation.

    Exactly one of `value` (on success) or `error` (on failure) is meaningful.
    """

    ok: bool
    value: bool = False
    error: TicketErrorKind | None = None

    @classmethod
    def success(cls, value: bool = True) -> "Result":
        return cls(ok=True, value=bool(value))

    @classmethod
    def failure(cls, kind: TicketErrorKind) -> "Result":
        return cls(ok=False, error=kind)

    def unwrap(self) -> bool:
        if self.error is not None:
            raise TicketRegistryError(self.error)
        return self.value


def result_to_dict(result: Result) -> dict[str, Any]:
    if result.error is None:
        return {"ok": True, "value": bool(result.value)}
    return {"ok": False, "error": result.error.name, "code": int(result.error)}


def result_from_dict(data: dict[str, Any]) -> Result:
    if bool(data.get("ok")):
        return Result.success(bool(data.get("value")))
    raw = data.get("code", data.get("error"))
    if raw is None:
        raise ValueError(f"Result payload has no error: {data}")
    return Result.failure(TicketErrorKind.from_any(raw))
