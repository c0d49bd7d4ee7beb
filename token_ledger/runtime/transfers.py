"""
token_ledger.runtime.transfers — transfer, mint, burn and burn_from.

The TransferEngine composes BalanceStore primitives into the value-moving
operations and emits one `Transfer` event per successful call:

  transfer(from, to, v)         -> Transfer(from, to, v)
  mint(caller, to, v)           -> Transfer(ZERO, to, v)     role holder only
  burn(from, v)                 -> Transfer(from, ZERO, v)
  burn_from(owner, spender, v)  -> Transfer(owner, ZERO, v)  consumes allowance

Each operation runs in two steps: `prepare_*` validates every precondition and
stages the writes (raising a LedgerError without touching state), then
`finish` commits the staged writes and emits the event. Commit cannot fail, so
a call either applies completely or not at all. The delegated engine uses the
same two steps to stage an allowance spend next to a transfer.

Zero amounts are valid and still emit their event. A self-transfer checks that
the balance covers the amount and leaves it unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ..config import LedgerConfig
from ..errors import Unauthorized
from ..state.allowances import AllowanceStore, AllowanceWrites
from ..state.balances import BalanceStore, BalanceWrites
from ..types.address import AddressLike, require_account, to_address, to_hex
from ..types.events import Transfer
from .event_sink import EventSink

if TYPE_CHECKING:
    from ..access import RoleGuard

log = logging.getLogger(__name__)


@dataclass
class StagedTransfer:
    """Validated, not yet committed, balance (and optional allowance) writes."""

    event: Transfer
    balances: BalanceWrites
    allowances: Optional[AllowanceWrites] = field(default=None)


class TransferEngine:
    def __init__(
        self,
        balances: BalanceStore,
        allowances: AllowanceStore,
        guard: "RoleGuard",
        sink: EventSink,
        config: LedgerConfig,
    ) -> None:
        self._balances = balances
        self._allowances = allowances
        self._guard = guard
        self._sink = sink
        self._width = config.address_bytes
        self._zero = config.zero_address

    # ------------------------------ staging ----------------------------------

    def prepare_transfer(
        self, sender: AddressLike, recipient: AddressLike, amount: int
    ) -> StagedTransfer:
        frm = require_account(sender, self._width, role="sender")
        to = require_account(recipient, self._width, role="recipient")
        writes = self._balances.plan_transfer(frm, to, amount)
        return StagedTransfer(Transfer(from_=frm, to=to, value=amount), writes)

    def prepare_mint(self, caller: AddressLike, recipient: AddressLike, amount: int) -> StagedTransfer:
        who = to_address(caller, self._width, role="caller")
        # authorization comes before any state read
        if not self._guard.is_authorized(who):
            raise Unauthorized(who)
        to = require_account(recipient, self._width, role="recipient")
        writes = self._balances.plan_mint(to, amount)
        return StagedTransfer(Transfer(from_=self._zero, to=to, value=amount), writes)

    def prepare_burn(self, account: AddressLike, amount: int) -> StagedTransfer:
        frm = require_account(account, self._width, role="sender")
        writes = self._balances.plan_burn(frm, amount)
        return StagedTransfer(Transfer(from_=frm, to=self._zero, value=amount), writes)

    def prepare_burn_from(
        self, owner: AddressLike, spender: AddressLike, amount: int
    ) -> StagedTransfer:
        own = require_account(owner, self._width, role="owner")
        spd = require_account(spender, self._width, role="spender")
        allowance_writes = self._allowances.plan_spend(own, spd, amount)
        staged = self.prepare_burn(own, amount)
        staged.allowances = allowance_writes
        return staged

    def finish(self, staged: StagedTransfer) -> None:
        """Commit staged writes and emit the Transfer event."""
        if staged.allowances is not None:
            self._allowances.commit(staged.allowances)
        self._balances.commit(staged.balances)
        ev = staged.event
        self._sink.emit(ev)
        log.debug("transfer from=%s to=%s value=%d", to_hex(ev.from_), to_hex(ev.to), ev.value)

    # ---------------------------- operations ---------------------------------

    def transfer(self, sender: AddressLike, recipient: AddressLike, amount: int) -> None:
        self.finish(self.prepare_transfer(sender, recipient, amount))

    def mint(self, caller: AddressLike, recipient: AddressLike, amount: int) -> None:
        self.finish(self.prepare_mint(caller, recipient, amount))

    def burn(self, account: AddressLike, amount: int) -> None:
        self.finish(self.prepare_burn(account, amount))

    def burn_from(self, owner: AddressLike, spender: AddressLike, amount: int) -> None:
        self.finish(self.prepare_burn_from(owner, spender, amount))


__all__ = ["StagedTransfer", "TransferEngine"]
