"""
token_ledger.types.events — event records emitted by the ledger.

Observers rely on exact field order, so each record declares it explicitly:

* Transfer(from, to, value)
* Approval(owner, spender, value)
* OwnershipTransferred(previous, new)   (emitted by the owner guard)

Mint-originated transfers use the zero address as `from`; burn-originated
transfers use it as `to`.

Helpers
-------
* `.args()`    -> ordered (field, value) pairs using the wire field names
* `.to_dict()` -> JSON-friendly mapping with 0x-hex addresses
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Tuple, Union


def _bytes_to_hex(b: bytes) -> str:
    return "0x" + b.hex()


@dataclass(frozen=True)
class LedgerEvent:
    NAME: ClassVar[str] = ""
    # wire field name -> attribute name, in emission order
    FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = ()

    def args(self) -> Tuple[Tuple[str, Union[bytes, int]], ...]:
        return tuple((wire, getattr(self, attr)) for wire, attr in self.FIELDS)

    def values(self) -> Tuple[Union[bytes, int], ...]:
        return tuple(v for _, v in self.args())

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"event": self.NAME}
        for k, v in self.args():
            out[k] = _bytes_to_hex(v) if isinstance(v, bytes) else v
        return out


@dataclass(frozen=True)
class Transfer(LedgerEvent):
    NAME: ClassVar[str] = "Transfer"
    FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("from", "from_"),
        ("to", "to"),
        ("value", "value"),
    )

    from_: bytes
    to: bytes
    value: int


@dataclass(frozen=True)
class Approval(LedgerEvent):
    NAME: ClassVar[str] = "Approval"
    FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("owner", "owner"),
        ("spender", "spender"),
        ("value", "value"),
    )

    owner: bytes
    spender: bytes
    value: int


@dataclass(frozen=True)
class OwnershipTransferred(LedgerEvent):
    NAME: ClassVar[str] = "OwnershipTransferred"
    FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("previous", "previous"),
        ("new", "new"),
    )

    previous: bytes
    new: bytes


__all__ = ["LedgerEvent", "Transfer", "Approval", "OwnershipTransferred"]
