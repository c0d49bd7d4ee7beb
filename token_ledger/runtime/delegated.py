"""
token_ledger.runtime.delegated — approvals and spender-initiated transfers.

The DelegatedTransferEngine composes the AllowanceStore with the
TransferEngine:

  approve(owner, spender, v)              -> Approval(owner, spender, v)
  increase_allowance(owner, spender, +d)  -> Approval(owner, spender, new)
  decrease_allowance(owner, spender, -d)  -> Approval(owner, spender, new)
  transfer_from(spender, owner, to, v)    -> Transfer(owner, to, v)

`transfer_from` stages the allowance spend first and the balance transfer
second; both are validated before either is committed. A balance failure
therefore leaves the allowance untouched. An allowance equal to the maximum
amount is infinite: it is neither checked nor decremented.
"""

from __future__ import annotations

import logging

from ..config import LedgerConfig
from ..errors import InsufficientAllowance
from ..state.allowances import AllowanceStore
from ..types.address import AddressLike, require_account, to_hex
from ..types.amount import checked_add, checked_sub, require_amount
from ..types.events import Approval
from .event_sink import EventSink
from .transfers import TransferEngine

log = logging.getLogger(__name__)


class DelegatedTransferEngine:
    def __init__(
        self,
        allowances: AllowanceStore,
        transfers: TransferEngine,
        sink: EventSink,
        config: LedgerConfig,
    ) -> None:
        self._allowances = allowances
        self._transfers = transfers
        self._sink = sink
        self._width = config.address_bytes
        self._max = config.max_amount

    def _set(self, owner: bytes, spender: bytes, amount: int) -> None:
        self._allowances.commit(self._allowances.plan_approve(owner, spender, amount))
        self._sink.emit(Approval(owner=owner, spender=spender, value=amount))
        log.debug("approval owner=%s spender=%s value=%d", to_hex(owner), to_hex(spender), amount)

    def approve(self, owner: AddressLike, spender: AddressLike, amount: int) -> None:
        own = require_account(owner, self._width, role="owner")
        spd = require_account(spender, self._width, role="spender")
        require_amount(amount, self._max)
        self._set(own, spd, amount)

    def increase_allowance(self, owner: AddressLike, spender: AddressLike, added: int) -> int:
        own = require_account(owner, self._width, role="owner")
        spd = require_account(spender, self._width, role="spender")
        require_amount(added, self._max)
        new = checked_add(
            self._allowances.allowance_of(own, spd), added, self._max, op="increase_allowance"
        )
        self._set(own, spd, new)
        return new

    def decrease_allowance(
        self, owner: AddressLike, spender: AddressLike, subtracted: int
    ) -> int:
        own = require_account(owner, self._width, role="owner")
        spd = require_account(spender, self._width, role="spender")
        require_amount(subtracted, self._max)
        cur = self._allowances.allowance_of(own, spd)
        new = checked_sub(cur, subtracted)
        if new is None:
            raise InsufficientAllowance(own, spd, cur, subtracted)
        self._set(own, spd, new)
        return new

    def transfer_from(
        self, spender: AddressLike, owner: AddressLike, recipient: AddressLike, amount: int
    ) -> None:
        spd = require_account(spender, self._width, role="spender")
        own = require_account(owner, self._width, role="owner")
        require_account(recipient, self._width, role="recipient")
        allowance_writes = self._allowances.plan_spend(own, spd, amount)
        staged = self._transfers.prepare_transfer(own, recipient, amount)
        staged.allowances = allowance_writes
        self._transfers.finish(staged)


__all__ = ["DelegatedTransferEngine"]
