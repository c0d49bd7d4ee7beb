"""
token_ledger — accounting core of a fungible token ledger.

Balances, allowances, total supply and a single privileged minter, with the
invariants that make a token trustworthy: supply conservation, overflow-checked
u256 arithmetic, all-or-nothing multi-field updates and exact Transfer/Approval
events.

Entry point:
    from token_ledger import TokenLedger
"""

from .version import __version__
from .access import OwnerGuard, RoleGuard
from .config import LedgerConfig, get_config, load_config
from .errors import (
    ArithmeticOverflow,
    InsufficientAllowance,
    InsufficientBalance,
    InvalidAccount,
    InvalidAmount,
    LedgerError,
    Unauthorized,
)
from .ledger import TokenLedger
from .types import Approval, CallResult, CallStatus, OwnershipTransferred, Transfer, U256_MAX

__all__ = [
    "__version__",
    "OwnerGuard",
    "RoleGuard",
    "LedgerConfig",
    "get_config",
    "load_config",
    "LedgerError",
    "ArithmeticOverflow",
    "InsufficientAllowance",
    "InsufficientBalance",
    "InvalidAccount",
    "InvalidAmount",
    "Unauthorized",
    "TokenLedger",
    "Approval",
    "Transfer",
    "OwnershipTransferred",
    "CallResult",
    "CallStatus",
    "U256_MAX",
]
