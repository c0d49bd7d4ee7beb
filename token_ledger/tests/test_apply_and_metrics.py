# -*- coding: utf-8 -*-
"""
CallResult outcomes from TokenLedger.apply and the Prometheus counters.
"""
from __future__ import annotations

import pytest

from token_ledger import (
    CallStatus,
    InsufficientBalance,
    LedgerConfig,
    TokenLedger,
    Transfer,
    metrics,
)
from token_ledger.errors import error_to_result_fields

ZERO = b"\x00" * 20


def test_apply_success_carries_value_and_events(ledger, fund, alice, bob) -> None:
    fund(alice, 10)
    res = ledger.apply(alice, "transfer", bob, 4)
    assert res.status is CallStatus.SUCCESS
    assert res.is_success
    assert res.value is True
    assert res.events == (Transfer(from_=alice, to=bob, value=4),)
    assert res.error is None and res.error_code is None
    assert res.unwrap() is True


def test_apply_revert_returns_error_value(ledger, fund, alice, bob) -> None:
    fund(alice, 1)
    res = ledger.apply(alice, "transfer", bob, 2)
    assert res.status is CallStatus.REVERT
    assert not res.is_success
    assert res.error_code == "INSUFFICIENT_BALANCE"
    assert res.events == ()
    assert isinstance(res.error, InsufficientBalance)
    with pytest.raises(InsufficientBalance):
        res.unwrap()
    assert ledger.balance_of(alice) == 1


def test_apply_views_ignore_caller(ledger, fund, alice, bob) -> None:
    fund(alice, 3)
    assert ledger.apply(None, "balance_of", alice).value == 3
    assert ledger.apply(bob, "total_supply").value == 3
    assert ledger.apply(None, "allowance", alice, bob).value == 0
    assert ledger.apply(None, "owner").value == ledger.owner()


def test_apply_unknown_method(ledger, alice) -> None:
    with pytest.raises(ValueError):
        ledger.apply(alice, "set_balance", alice, 1)
    with pytest.raises(ValueError):
        ledger.apply(alice, "_observe", "x")


def test_result_to_dict(ledger, admin, alice) -> None:
    d = ledger.apply(admin, "mint", alice, 5).to_dict()
    assert d["method"] == "mint"
    assert d["status"] == "success"
    assert d["value"] is None
    assert d["events"] == [
        {"event": "Transfer", "from": "0x" + ZERO.hex(), "to": "0x" + alice.hex(), "value": 5}
    ]
    assert d["error"] is None

    bad = ledger.apply(alice, "mint", alice, 5).to_dict()
    assert bad["status"] == "revert"
    assert bad["error"]["code"] == "UNAUTHORIZED"
    assert bad["error"]["data"] == {"caller": "0x" + alice.hex()}


def test_error_to_result_fields(ledger, alice, bob) -> None:
    res = ledger.apply(alice, "transfer", bob, 1)
    fields = error_to_result_fields(res.error)
    assert fields["status"] == "revert"
    assert fields["error"]["code"] == "INSUFFICIENT_BALANCE"
    assert fields["error"]["data"]["needed"] == 1


def test_call_counters(fresh_registry, ledger, fund, alice, bob) -> None:
    fund(alice, 10)
    ledger.transfer(alice, bob, 1)
    ledger.apply(alice, "transfer", bob, 100)
    with pytest.raises(InsufficientBalance):
        ledger.transfer(bob, alice, 5)

    def calls(method: str, result: str) -> float:
        v = fresh_registry.get_sample_value(
            "token_ledger_calls_total", {"method": method, "result": result}
        )
        return v or 0.0

    assert calls("mint", "success") == 1.0
    assert calls("transfer", "success") == 1.0
    assert calls("transfer", "revert") == 2.0
    assert fresh_registry.get_sample_value("token_ledger_events_total", {"event": "Transfer"}) == 2.0
    assert fresh_registry.get_sample_value("token_ledger_total_supply") == 10.0


def test_metrics_disabled_records_nothing(fresh_registry, admin, alice) -> None:
    ledger = TokenLedger(owner=admin, config=LedgerConfig(metrics_enabled=False))
    ledger.mint(admin, alice, 3)
    assert (
        fresh_registry.get_sample_value(
            "token_ledger_calls_total", {"method": "mint", "result": "success"}
        )
        is None
    )


def test_exposition_text(ledger, fund, alice) -> None:
    fund(alice, 2)
    text = metrics.generate_latest_text().decode("utf-8")
    assert "token_ledger_calls_total" in text
    assert "token_ledger_total_supply 2.0" in text


def test_apply_view_with_malformed_account_reverts(ledger, alice) -> None:
    res = ledger.apply(None, "balance_of", "0xzz")
    assert res.status is CallStatus.REVERT
    assert res.error_code == "INVALID_ACCOUNT"
    assert res.value is None and res.events == ()

    res = ledger.apply(None, "allowance", alice, b"\x01" * 3)
    assert res.error_code == "INVALID_ACCOUNT"
    assert res.error.role == "spender"


def test_total_supply_gauge_help_mentions_float_precision(fresh_registry) -> None:
    metrics.set_total_supply(1)
    text = metrics.generate_latest_text().decode("utf-8")
    assert "# HELP token_ledger_total_supply Current total supply (float; exact only up to 2**53)." in text
