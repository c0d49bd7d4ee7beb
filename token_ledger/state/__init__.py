"""
token_ledger.state — the two stores that own all ledger state.

- balances:   account -> amount, plus total supply
- allowances: (owner, spender) -> amount

Both stores stage changes with `plan_*` and apply them with `commit`, so a
call that touches several fields validates everything before writing anything.
"""

from .allowances import AllowanceKey, AllowanceLedger, AllowanceStore, AllowanceWrites
from .balances import BalanceLedger, BalanceStore, BalanceWrites

__all__ = [
    "AllowanceKey",
    "AllowanceLedger",
    "AllowanceStore",
    "AllowanceWrites",
    "BalanceLedger",
    "BalanceStore",
    "BalanceWrites",
]
