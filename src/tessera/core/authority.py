from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# Reserved "no one" principal. It can never own the authority binding.
BURN_PRINCIPAL = "SP000000000000000000002Q6VF78"


@dataclass(frozen=True)
class Unbound:
    """No authority has been bound yet; ticket assignment is refused."""


@dataclass(frozen=True)
class Bound:
    principal: str


AuthorityBinding = Union[Unbound, Bound]

UNBOUND = Unbound()


def is_valid_authority_principal(principal: str) -> bool:
    p = str(principal).strip()
    return bool(p) and p != BURN_PRINCIPAL


def bound_principal(binding: AuthorityBinding) -> str | None:
    if isinstance(binding, Bound):
        return binding.principal
    return None
