"""
token_ledger.access — the single-role access guard consulted for minting.

The ledger core never owns role state; it only asks a `RoleGuard` whether the
caller of a privileged operation is the current role holder. The answer is
read on every call, so a holder change between calls takes effect immediately.

`OwnerGuard` is the stock single-owner implementation:
- `owner()` returns the current owner (zero address once renounced)
- `is_authorized(caller)` is True only for the current owner
- `transfer_ownership(caller, new_owner)` owner-only; new owner must be non-zero
- `renounce_ownership(caller)` owner-only; leaves the guard without an owner

Ownership changes emit `OwnershipTransferred{previous, new}` to the attached
event sink, if any. A guard handed to `TokenLedger` without a sink is attached
to the ledger's sink.

Typical usage
-------------
    guard = OwnerGuard(admin)
    ledger = TokenLedger(guard=guard)
    guard.transfer_ownership(admin, new_admin)
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

from .config import DEFAULT_ADDRESS_BYTES
from .errors import InvalidAccount, Unauthorized
from .runtime.event_sink import EventSink
from .types.address import AddressLike, require_account, to_address, to_hex, zero_address
from .types.events import OwnershipTransferred

log = logging.getLogger(__name__)


@runtime_checkable
class RoleGuard(Protocol):
    def is_authorized(self, caller: AddressLike) -> bool: ...


class OwnerGuard:
    def __init__(
        self,
        owner: AddressLike,
        *,
        address_bytes: int = DEFAULT_ADDRESS_BYTES,
        sink: Optional[EventSink] = None,
    ) -> None:
        self._width = address_bytes
        self._owner: Optional[bytes] = require_account(owner, address_bytes, role="owner")
        self._sink = sink

    @property
    def sink(self) -> Optional[EventSink]:
        return self._sink

    def attach(self, sink: EventSink) -> None:
        """Route OwnershipTransferred events to `sink`."""
        self._sink = sink

    def owner(self) -> bytes:
        return self._owner if self._owner is not None else zero_address(self._width)

    def is_authorized(self, caller: AddressLike) -> bool:
        if self._owner is None:
            return False
        try:
            return to_address(caller, self._width) == self._owner
        except InvalidAccount:
            return False

    def require_owner(self, caller: AddressLike) -> None:
        if not self.is_authorized(caller):
            raise Unauthorized(caller)

    def transfer_ownership(self, caller: AddressLike, new_owner: AddressLike) -> None:
        self.require_owner(caller)
        new = require_account(new_owner, self._width, role="new_owner")
        self._set_owner(new)

    def renounce_ownership(self, caller: AddressLike) -> None:
        self.require_owner(caller)
        self._set_owner(None)

    def _set_owner(self, new: Optional[bytes]) -> None:
        previous = self.owner()
        self._owner = new
        current = self.owner()
        log.info("ownership transferred previous=%s new=%s", to_hex(previous), to_hex(current))
        if self._sink is not None:
            self._sink.emit(OwnershipTransferred(previous=previous, new=current))


__all__ = ["RoleGuard", "OwnerGuard"]
