"""
token_ledger.state.balances — account balances and total supply.

The BalanceStore exclusively owns the account→amount mapping and the total
supply counter. Every mutation is split in two phases:

    writes = store.plan_transfer(a, b, 10)   # validate; may raise, never mutates
    store.commit(writes)                     # apply; cannot fail

`plan_*` methods accept an optional running `BalanceWrites` so several steps
can be staged together and read each other's effects (a self-transfer reads
its own staged debit before crediting). Nothing becomes visible until
`commit`, which makes multi-field updates (balance + supply, debit + credit)
all-or-nothing.

Invariant: total_supply() == sum of all balances, as long as mutation goes
through mint/burn/transfer. `credit`/`debit` alone are low-level primitives
that the engines only use in balanced pairs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Protocol, Tuple

from ..errors import InsufficientBalance
from ..types.amount import U256_MAX, checked_add, checked_sub, require_amount


class BalanceLedger(Protocol):
    def balance_of(self, account: bytes) -> int: ...
    def total_supply(self) -> int: ...
    def credit(self, account: bytes, amount: int) -> None: ...
    def debit(self, account: bytes, amount: int) -> None: ...
    def mint(self, account: bytes, amount: int) -> None: ...
    def burn(self, account: bytes, amount: int) -> None: ...


@dataclass
class BalanceWrites:
    """
    Staged balance changes. `balances` holds post-values; `total` is the new
    supply or None when the supply is untouched.
    """

    balances: Dict[bytes, int] = field(default_factory=dict)
    total: Optional[int] = None

    def __bool__(self) -> bool:
        return bool(self.balances) or self.total is not None


class BalanceStore:
    def __init__(self, max_amount: int = U256_MAX) -> None:
        self._max = max_amount
        self._balances: Dict[bytes, int] = {}
        self._total = 0

    @property
    def max_amount(self) -> int:
        return self._max

    # ------------------------------ reads ------------------------------------

    def balance_of(self, account: bytes) -> int:
        """Current balance of `account` (0 if unknown)."""
        return self._balances.get(bytes(account), 0)

    def total_supply(self) -> int:
        return self._total

    def _read(self, writes: BalanceWrites, account: bytes) -> int:
        if account in writes.balances:
            return writes.balances[account]
        return self._balances.get(account, 0)

    def _read_total(self, writes: BalanceWrites) -> int:
        return self._total if writes.total is None else writes.total

    # ----------------------------- planning ----------------------------------

    def plan_credit(
        self,
        account: bytes,
        amount: int,
        writes: Optional[BalanceWrites] = None,
        *,
        op: str = "credit",
    ) -> BalanceWrites:
        w = BalanceWrites() if writes is None else writes
        require_amount(amount, self._max)
        acct = bytes(account)
        w.balances[acct] = checked_add(self._read(w, acct), amount, self._max, op=op)
        return w

    def plan_debit(
        self, account: bytes, amount: int, writes: Optional[BalanceWrites] = None
    ) -> BalanceWrites:
        w = BalanceWrites() if writes is None else writes
        require_amount(amount, self._max)
        acct = bytes(account)
        cur = self._read(w, acct)
        new = checked_sub(cur, amount)
        if new is None:
            raise InsufficientBalance(acct, cur, amount)
        w.balances[acct] = new
        return w

    def plan_transfer(
        self,
        sender: bytes,
        recipient: bytes,
        amount: int,
        writes: Optional[BalanceWrites] = None,
    ) -> BalanceWrites:
        w = self.plan_debit(sender, amount, writes)
        return self.plan_credit(recipient, amount, w, op="transfer")

    def plan_mint(
        self, account: bytes, amount: int, writes: Optional[BalanceWrites] = None
    ) -> BalanceWrites:
        w = BalanceWrites() if writes is None else writes
        require_amount(amount, self._max)
        total = checked_add(self._read_total(w), amount, self._max, op="mint_supply")
        self.plan_credit(account, amount, w, op="mint_balance")
        w.total = total
        return w

    def plan_burn(
        self, account: bytes, amount: int, writes: Optional[BalanceWrites] = None
    ) -> BalanceWrites:
        w = self.plan_debit(account, amount, writes)
        # supply >= any single balance, so this cannot go negative
        w.total = self._read_total(w) - amount
        return w

    # ------------------------------ commit -----------------------------------

    def commit(self, writes: BalanceWrites) -> None:
        """Apply staged writes. Zero balances are dropped from the mapping."""
        for acct, value in writes.balances.items():
            if value:
                self._balances[acct] = value
            else:
                self._balances.pop(acct, None)
        if writes.total is not None:
            self._total = writes.total

    # ------------------------ one-shot primitives ----------------------------

    def credit(self, account: bytes, amount: int) -> None:
        self.commit(self.plan_credit(account, amount))

    def debit(self, account: bytes, amount: int) -> None:
        self.commit(self.plan_debit(account, amount))

    def transfer(self, sender: bytes, recipient: bytes, amount: int) -> None:
        self.commit(self.plan_transfer(sender, recipient, amount))

    def mint(self, account: bytes, amount: int) -> None:
        self.commit(self.plan_mint(account, amount))

    def burn(self, account: bytes, amount: int) -> None:
        self.commit(self.plan_burn(account, amount))

    # ---------------------------- inspection ---------------------------------

    def holders(self) -> Iterator[Tuple[bytes, int]]:
        """(account, balance) pairs with non-zero balance, sorted by account."""
        for acct in sorted(self._balances):
            yield acct, self._balances[acct]

    def snapshot(self) -> Dict[bytes, int]:
        return dict(self._balances)

    def verify_supply(self) -> bool:
        """Conservation check: total supply equals the sum of balances."""
        return sum(self._balances.values()) == self._total

    def __len__(self) -> int:
        return len(self._balances)


__all__ = ["BalanceLedger", "BalanceWrites", "BalanceStore"]
