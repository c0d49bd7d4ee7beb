"""
token_ledger.types.address — account identifiers.

Accounts are raw fixed-width `bytes` (20 bytes by default). Hex strings with
or without a 0x prefix are accepted at the edges and normalized to bytes.
The all-zero identifier is reserved: it is the `from` of mint events and the
`to` of burn events, and is never accepted where a real account is required.
"""

from __future__ import annotations

from typing import NewType, Union

from ..errors import InvalidAccount

Address = NewType("Address", bytes)
AddressLike = Union[str, bytes, bytearray, memoryview]


def _hex_to_bytes(v: str) -> bytes:
    s = v.strip()
    if s.startswith(("0x", "0X")):
        s = s[2:]
    if len(s) % 2:
        s = "0" + s
    return bytes.fromhex(s)


def to_address(value: AddressLike, width: int, *, role: str = "account") -> Address:
    """
    Normalize `value` to a `width`-byte Address.

    Raises:
        InvalidAccount if the value has the wrong type, is malformed hex or has
        the wrong length. The zero address is accepted here; use
        `require_account` where a real account is required.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
    elif isinstance(value, str):
        try:
            raw = _hex_to_bytes(value)
        except ValueError:
            raise InvalidAccount(value, role, reason="malformed hex") from None
    else:
        raise InvalidAccount(None, role, reason=f"unsupported type {type(value).__name__}")
    if len(raw) != width:
        raise InvalidAccount(raw, role, reason=f"expected {width} bytes, got {len(raw)}")
    return Address(raw)


def zero_address(width: int) -> Address:
    return Address(b"\x00" * width)


def is_zero(addr: bytes) -> bool:
    return not any(addr)


def require_account(value: AddressLike, width: int, *, role: str = "account") -> Address:
    """Normalize `value` and reject the zero identifier."""
    addr = to_address(value, width, role=role)
    if is_zero(addr):
        raise InvalidAccount(addr, role)
    return addr


def to_hex(addr: bytes) -> str:
    return "0x" + bytes(addr).hex()


__all__ = [
    "Address",
    "AddressLike",
    "to_address",
    "zero_address",
    "is_zero",
    "require_account",
    "to_hex",
]
