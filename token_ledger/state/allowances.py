"""
token_ledger.state.allowances — (owner, spender) delegation limits.

The AllowanceStore exclusively owns the allowance mapping. Like the balance
store it separates validation from mutation:

    writes = store.plan_spend(owner, spender, 5)   # may raise, never mutates
    store.commit(writes)

The maximum representable amount is the infinite-allowance sentinel: spending
against it neither checks nor decrements, so `plan_spend` returns an empty
write set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Protocol, Tuple

from ..errors import InsufficientAllowance, InvalidAccount
from ..types.address import is_zero
from ..types.amount import U256_MAX, checked_sub, require_amount

AllowanceKey = Tuple[bytes, bytes]


class AllowanceLedger(Protocol):
    def allowance_of(self, owner: bytes, spender: bytes) -> int: ...
    def approve(self, owner: bytes, spender: bytes, amount: int) -> None: ...
    def spend(self, owner: bytes, spender: bytes, amount: int) -> None: ...


@dataclass
class AllowanceWrites:
    allowances: Dict[AllowanceKey, int] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.allowances)


class AllowanceStore:
    def __init__(self, max_amount: int = U256_MAX) -> None:
        self._max = max_amount
        self._allowances: Dict[AllowanceKey, int] = {}

    @property
    def infinite(self) -> int:
        """Sentinel value meaning 'no limit'."""
        return self._max

    def allowance_of(self, owner: bytes, spender: bytes) -> int:
        return self._allowances.get((bytes(owner), bytes(spender)), 0)

    def _read(self, writes: AllowanceWrites, key: AllowanceKey) -> int:
        if key in writes.allowances:
            return writes.allowances[key]
        return self._allowances.get(key, 0)

    # ----------------------------- planning ----------------------------------

    def plan_approve(
        self,
        owner: bytes,
        spender: bytes,
        amount: int,
        writes: Optional[AllowanceWrites] = None,
    ) -> AllowanceWrites:
        """Stage an overwrite (not additive) of the allowance."""
        w = AllowanceWrites() if writes is None else writes
        if is_zero(owner):
            raise InvalidAccount(bytes(owner), "owner")
        if is_zero(spender):
            raise InvalidAccount(bytes(spender), "spender")
        require_amount(amount, self._max)
        w.allowances[(bytes(owner), bytes(spender))] = amount
        return w

    def plan_spend(
        self,
        owner: bytes,
        spender: bytes,
        amount: int,
        writes: Optional[AllowanceWrites] = None,
    ) -> AllowanceWrites:
        w = AllowanceWrites() if writes is None else writes
        require_amount(amount, self._max)
        key = (bytes(owner), bytes(spender))
        cur = self._read(w, key)
        if cur == self._max:
            return w
        new = checked_sub(cur, amount)
        if new is None:
            raise InsufficientAllowance(key[0], key[1], cur, amount)
        w.allowances[key] = new
        return w

    # ------------------------------ commit -----------------------------------

    def commit(self, writes: AllowanceWrites) -> None:
        for key, value in writes.allowances.items():
            if value:
                self._allowances[key] = value
            else:
                self._allowances.pop(key, None)

    # ------------------------ one-shot primitives ----------------------------

    def approve(self, owner: bytes, spender: bytes, amount: int) -> None:
        self.commit(self.plan_approve(owner, spender, amount))

    def spend(self, owner: bytes, spender: bytes, amount: int) -> None:
        self.commit(self.plan_spend(owner, spender, amount))

    # ---------------------------- inspection ---------------------------------

    def entries(self) -> Iterator[Tuple[AllowanceKey, int]]:
        for key in sorted(self._allowances):
            yield key, self._allowances[key]

    def snapshot(self) -> Dict[AllowanceKey, int]:
        return dict(self._allowances)


__all__ = ["AllowanceKey", "AllowanceLedger", "AllowanceWrites", "AllowanceStore"]
