"""
token_ledger.runtime.event_sink — ordered event log and its digest.

The sink records ledger events in emission order. Events are only emitted after
a call has committed, so the log never contains events of reverted calls.

Canonical encoding
------------------
Each event encodes as canonical CBOR of

    [name, [value_0, value_1, ...]]

with values in the event's declared field order (maps would re-sort keys and
lose that order). Addresses are CBOR byte strings, amounts CBOR integers
(bignums above 2**64).

Events root
-----------
Binary Merkle tree over leaf hashes, SHA3-256 with domain separation:

    leaf  = H("token_ledger:events:leaf" || 0x00 || cbor(event))
    node  = H("token_ledger:events:node" || 0x00 || left || right)
    empty = H("token_ledger:events:empty" || 0x00)

Odd levels duplicate their last node.
"""

from __future__ import annotations

import hashlib
from typing import Iterable, List, Sequence, Tuple

import cbor2

from ..types.events import LedgerEvent

_D_LEAF = b"token_ledger:events:leaf"
_D_NODE = b"token_ledger:events:node"
_D_EMPTY = b"token_ledger:events:empty"


def _h(domain: bytes, *parts: bytes) -> bytes:
    return hashlib.sha3_256(domain + b"\x00" + b"".join(parts)).digest()


def encode_event(ev: LedgerEvent) -> bytes:
    """Canonical CBOR encoding of one event."""
    return cbor2.dumps([ev.NAME, list(ev.values())], canonical=True)


def event_leaf(ev: LedgerEvent) -> bytes:
    return _h(_D_LEAF, encode_event(ev))


def events_root(events: Iterable[LedgerEvent]) -> bytes:
    level = [event_leaf(ev) for ev in events]
    if not level:
        return _h(_D_EMPTY)
    while len(level) > 1:
        nxt: List[bytes] = []
        it = iter(level)
        for left in it:
            right = next(it, left)
            nxt.append(_h(_D_NODE, left, right))
        level = nxt
    return level[0]


class EventSink:
    """Append-only, in-memory event log."""

    def __init__(self) -> None:
        self._events: List[LedgerEvent] = []

    def emit(self, event: LedgerEvent) -> None:
        if not isinstance(event, LedgerEvent):
            raise TypeError(f"expected LedgerEvent, got {type(event).__name__}")
        self._events.append(event)

    def mark(self) -> int:
        """Position marker; pass to `since` to read events emitted afterwards."""
        return len(self._events)

    def since(self, marker: int) -> Tuple[LedgerEvent, ...]:
        return tuple(self._events[marker:])

    def events(self) -> Tuple[LedgerEvent, ...]:
        return tuple(self._events)

    def root(self) -> bytes:
        return events_root(self._events)

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self):
        return iter(tuple(self._events))


def decode_event(data: bytes) -> Tuple[str, Sequence[object]]:
    """Inverse of `encode_event` at the wire level: (name, values)."""
    obj = cbor2.loads(data)
    if not isinstance(obj, list) or len(obj) != 2 or not isinstance(obj[0], str):
        raise ValueError("malformed event encoding")
    return obj[0], tuple(obj[1])


__all__ = [
    "EventSink",
    "encode_event",
    "decode_event",
    "event_leaf",
    "events_root",
]
