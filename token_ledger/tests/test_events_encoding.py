# -*- coding: utf-8 -*-
"""
Event records, canonical CBOR encoding and the events root.
"""
from __future__ import annotations

import cbor2
import pytest

from token_ledger import Approval, OwnershipTransferred, Transfer, U256_MAX
from token_ledger.runtime.event_sink import (
    EventSink,
    decode_event,
    encode_event,
    event_leaf,
    events_root,
)

A = b"\xaa" * 20
B = b"\xbb" * 20
ZERO = b"\x00" * 20


def test_field_order_is_declared_order() -> None:
    ev = Transfer(from_=A, to=B, value=5)
    assert [k for k, _ in ev.args()] == ["from", "to", "value"]
    assert ev.values() == (A, B, 5)
    ap = Approval(owner=A, spender=B, value=1)
    assert [k for k, _ in ap.args()] == ["owner", "spender", "value"]
    ot = OwnershipTransferred(previous=A, new=ZERO)
    assert [k for k, _ in ot.args()] == ["previous", "new"]


def test_to_dict_uses_hex_addresses() -> None:
    assert Transfer(from_=ZERO, to=B, value=7).to_dict() == {
        "event": "Transfer",
        "from": "0x" + "00" * 20,
        "to": "0x" + "bb" * 20,
        "value": 7,
    }


def test_encoding_is_deterministic_and_decodable() -> None:
    ev = Transfer(from_=A, to=B, value=U256_MAX)
    enc = encode_event(ev)
    assert enc == encode_event(Transfer(from_=A, to=B, value=U256_MAX))
    assert cbor2.loads(enc) == ["Transfer", [A, B, U256_MAX]]
    name, values = decode_event(enc)
    assert name == "Transfer"
    assert values == ev.values()


def test_decode_rejects_malformed() -> None:
    with pytest.raises(ValueError):
        decode_event(cbor2.dumps({"name": "Transfer"}))
    with pytest.raises(ValueError):
        decode_event(cbor2.dumps([1, []]))


def test_distinct_events_have_distinct_leaves() -> None:
    t = Transfer(from_=A, to=B, value=1)
    a = Approval(owner=A, spender=B, value=1)
    assert event_leaf(t) != event_leaf(a)
    assert len(event_leaf(t)) == 32


def test_events_root_empty_and_order_sensitive() -> None:
    e1 = Transfer(from_=ZERO, to=A, value=10)
    e2 = Transfer(from_=A, to=B, value=3)
    e3 = Approval(owner=A, spender=B, value=2)
    empty = events_root([])
    assert len(empty) == 32
    assert events_root([e1, e2, e3]) == events_root([e1, e2, e3])
    assert events_root([e1, e2, e3]) != events_root([e2, e1, e3])
    assert events_root([e1]) != empty


def test_sink_records_in_order_and_marks() -> None:
    sink = EventSink()
    e1 = Transfer(from_=ZERO, to=A, value=1)
    e2 = Approval(owner=A, spender=B, value=1)
    sink.emit(e1)
    m = sink.mark()
    sink.emit(e2)
    assert sink.events() == (e1, e2)
    assert sink.since(m) == (e2,)
    assert list(sink) == [e1, e2]
    assert sink.root() == events_root([e1, e2])
    sink.clear()
    assert len(sink) == 0
    assert sink.root() == events_root([])


def test_sink_rejects_non_events() -> None:
    with pytest.raises(TypeError):
        EventSink().emit({"event": "Transfer"})  # type: ignore[arg-type]


def test_ledger_events_root_tracks_calls(ledger, admin, alice, bob) -> None:
    r0 = ledger.sink.root()
    ledger.mint(admin, alice, 5)
    r1 = ledger.sink.root()
    ledger.transfer(alice, bob, 2)
    assert len({r0, r1, ledger.sink.root()}) == 3
