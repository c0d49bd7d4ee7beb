"""
token_ledger.types.amount — unsigned amount domain and checked arithmetic.

Amounts are Python ints in the closed interval [0, max_amount], where
`max_amount = 2**bits - 1` (u256 by default). Python ints are unbounded, so
the cap is enforced explicitly: overflow is an error, never wraparound, and
never saturation.

Exports
-------
* Constants: `U256_MAX`
* Checks:    `is_uint(n, max_amount)`, `require_amount(n, max_amount)`
* Checked:   `checked_add(a, b, max_amount)` -> ArithmeticOverflow on cap breach
             `checked_sub(a, b)`             -> None when b > a (caller decides the error)
"""

from __future__ import annotations

from typing import Optional

from ..errors import ArithmeticOverflow, InvalidAmount

U256_MAX: int = (1 << 256) - 1
"""Maximum 256-bit unsigned integer."""


def is_uint(n: object, max_amount: int = U256_MAX) -> bool:
    """Return True iff `n` is an int (not bool) with 0 <= n <= max_amount."""
    return isinstance(n, int) and not isinstance(n, bool) and 0 <= n <= max_amount


def require_amount(n: object, max_amount: int = U256_MAX) -> int:
    """Return `n` unchanged if it is a valid amount, else raise InvalidAmount."""
    if not isinstance(n, int) or isinstance(n, bool):
        raise InvalidAmount(n, reason="not an integer")
    if n < 0:
        raise InvalidAmount(n, reason="negative")
    if n > max_amount:
        raise InvalidAmount(n, reason="exceeds maximum")
    return n


def checked_add(a: int, b: int, max_amount: int = U256_MAX, *, op: str = "add") -> int:
    """a + b, raising ArithmeticOverflow if the sum exceeds `max_amount`."""
    res = a + b
    if res > max_amount:
        raise ArithmeticOverflow(op, data={"lhs": a, "rhs": b})
    return res


def checked_sub(a: int, b: int) -> Optional[int]:
    """a - b, or None when the subtraction would go below zero."""
    if b > a:
        return None
    return a - b


__all__ = ["U256_MAX", "is_uint", "require_amount", "checked_add", "checked_sub"]
