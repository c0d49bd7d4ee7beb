"""
token_ledger.errors — ledger exceptions.

Every fallible ledger operation signals failure by raising one of these typed
exceptions. They are converted into `CallResult` values and structured error
payloads at the facade layer (`TokenLedger.apply`). All of them are immediate
and terminal for the call: state is never mutated when one is raised.

Hierarchy
---------
LedgerError (base)
 ├─ InsufficientBalance   : debit/burn/transfer larger than the balance
 ├─ InsufficientAllowance : delegated spend larger than the allowance
 ├─ ArithmeticOverflow    : credit/mint/increase would exceed the max amount
 ├─ Unauthorized          : privileged call by a non-role-holder
 ├─ InvalidAccount        : zero/malformed identifier where an account is required
 └─ InvalidAmount         : amount is not an int in [0, max]

Structured fields are exposed both as attributes (raw values, addresses as
bytes) and in `data` (JSON-safe, addresses as 0x-hex).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def _hex(addr: Any) -> Any:
    if isinstance(addr, (bytes, bytearray, memoryview)):
        return "0x" + bytes(addr).hex()
    return addr


@dataclass
class LedgerError(Exception):
    """
    Base ledger error.

    Attributes:
        message: Human-readable explanation.
        code:    Stable machine code string (e.g. 'INSUFFICIENT_BALANCE').
        data:    Optional structured details (kept JSON-serializable).
    """
    message: str = "ledger error"
    code: str = "LEDGER_ERROR"
    data: Optional[Dict[str, Any]] = field(default=None)

    def __str__(self) -> str:
        if self.data:
            return f"{self.code}: {self.message} ({self.data})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dict for results/logs."""
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


class InsufficientBalance(LedgerError):
    """`needed` exceeds the `balance` of `account`."""

    def __init__(self, account: bytes, balance: int, needed: int):
        self.account = account
        self.balance = balance
        self.needed = needed
        super().__init__(
            message="insufficient balance",
            code="INSUFFICIENT_BALANCE",
            data={"account": _hex(account), "balance": balance, "needed": needed},
        )


class InsufficientAllowance(LedgerError):
    """`needed` exceeds what `owner` allowed `spender` to move."""

    def __init__(self, owner: bytes, spender: bytes, allowance: int, needed: int):
        self.owner = owner
        self.spender = spender
        self.allowance = allowance
        self.needed = needed
        super().__init__(
            message="insufficient allowance",
            code="INSUFFICIENT_ALLOWANCE",
            data={
                "owner": _hex(owner),
                "spender": _hex(spender),
                "allowance": allowance,
                "needed": needed,
            },
        )


class ArithmeticOverflow(LedgerError):
    def __init__(self, op: str = "add", *, data: Optional[Dict[str, Any]] = None):
        self.op = op
        d: Dict[str, Any] = {"op": op}
        if data:
            d.update(data)
        super().__init__(message="arithmetic overflow", code="ARITHMETIC_OVERFLOW", data=d)


class Unauthorized(LedgerError):
    def __init__(self, caller: Any):
        self.caller = caller
        super().__init__(
            message="caller is not the role holder",
            code="UNAUTHORIZED",
            data={"caller": _hex(caller)},
        )


class InvalidAccount(LedgerError):
    """
    A zero, empty or malformed identifier was used where a real account is
    required. `role` names the offending argument (e.g. 'recipient').
    """

    def __init__(self, account: Any, role: str = "account", *, reason: str = "zero address"):
        self.account = account
        self.role = role
        super().__init__(
            message=f"invalid {role}: {reason}",
            code="INVALID_ACCOUNT",
            data={"account": _hex(account) if account is not None else None, "role": role},
        )


class InvalidAmount(LedgerError):
    def __init__(self, amount: Any, *, reason: str = "out of range"):
        self.amount = amount
        super().__init__(
            message=f"invalid amount: {reason}",
            code="INVALID_AMOUNT",
            data={"amount": amount if isinstance(amount, int) else repr(amount)},
        )


# -------- helper utilities ---------------------------------------------------


def error_to_result_fields(err: LedgerError) -> Dict[str, Any]:
    """
    Map a LedgerError to canonical result fields:

        {"status": "revert", "error": {code, message, data?}}
    """
    return {"status": "revert", "error": err.to_dict()}


__all__ = [
    "LedgerError",
    "InsufficientBalance",
    "InsufficientAllowance",
    "ArithmeticOverflow",
    "Unauthorized",
    "InvalidAccount",
    "InvalidAmount",
    "error_to_result_fields",
]
