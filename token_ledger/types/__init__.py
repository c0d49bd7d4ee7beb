"""
token_ledger.types — value types shared across the ledger.

Submodules:
- amount:  u256 domain, checked add/sub
- address: account identifiers and the zero-address sentinel
- events:  Transfer / Approval / OwnershipTransferred records
- status:  CallStatus enum
- result:  CallResult container
"""

from .address import Address, is_zero, require_account, to_address, to_hex, zero_address
from .amount import U256_MAX, checked_add, checked_sub, is_uint, require_amount
from .events import Approval, LedgerEvent, OwnershipTransferred, Transfer
from .result import CallResult
from .status import CallStatus

__all__ = [
    "Address",
    "is_zero",
    "require_account",
    "to_address",
    "to_hex",
    "zero_address",
    "U256_MAX",
    "checked_add",
    "checked_sub",
    "is_uint",
    "require_amount",
    "LedgerEvent",
    "Transfer",
    "Approval",
    "OwnershipTransferred",
    "CallResult",
    "CallStatus",
]
