# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from token_ledger import InvalidAccount, TokenLedger, U256_MAX
from token_ledger.config import LedgerConfig, get_config, load_config, summary

from conftest import det_address


def test_defaults() -> None:
    cfg = load_config({})
    assert cfg == LedgerConfig()
    assert cfg.address_bytes == 20
    assert cfg.max_amount == U256_MAX
    assert cfg.zero_address == b"\x00" * 20
    assert cfg.metrics_enabled is True


def test_env_overrides_and_clamping() -> None:
    cfg = load_config(
        {
            "TOKEN_LEDGER_ADDRESS_BYTES": "32",
            "TOKEN_LEDGER_UINT_BITS": "1000",
            "TOKEN_LEDGER_METRICS": "off",
        }
    )
    assert cfg.address_bytes == 32
    assert cfg.uint_bits == 256
    assert cfg.metrics_enabled is False

    low = load_config({"TOKEN_LEDGER_ADDRESS_BYTES": "0", "TOKEN_LEDGER_UINT_BITS": "3"})
    assert low.address_bytes == 1
    assert low.uint_bits == 8


def test_bits_round_down_to_whole_bytes() -> None:
    assert load_config({"TOKEN_LEDGER_UINT_BITS": "70"}).uint_bits == 64
    assert load_config({"TOKEN_LEDGER_UINT_BITS": "0x80"}).uint_bits == 128


def test_garbage_values_fall_back_to_defaults() -> None:
    cfg = load_config({"TOKEN_LEDGER_UINT_BITS": "lots", "TOKEN_LEDGER_METRICS": "maybe"})
    assert cfg.uint_bits == 256
    assert cfg.metrics_enabled is True


@pytest.mark.parametrize(
    "kwargs",
    [{"address_bytes": 0}, {"address_bytes": 65}, {"uint_bits": 12}, {"uint_bits": 264}],
)
def test_invalid_explicit_config(kwargs) -> None:
    with pytest.raises(ValueError):
        LedgerConfig(**kwargs)


def test_get_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("TOKEN_LEDGER_UINT_BITS", "64")
    get_config.cache_clear()
    try:
        assert get_config().max_amount == 2**64 - 1
    finally:
        get_config.cache_clear()


def test_summary() -> None:
    assert summary(LedgerConfig(uint_bits=64)) == "ledger{addr=20B, uint=64bit, metrics=1}"


def test_ledger_with_32_byte_accounts() -> None:
    cfg = LedgerConfig(address_bytes=32, metrics_enabled=False)
    admin, alice = det_address("admin", 32), det_address("alice", 32)
    ledger = TokenLedger(owner=admin, config=cfg)
    ledger.mint(admin, alice, 9)
    assert ledger.balance_of(alice) == 9
    assert ledger.owner() == admin
    with pytest.raises(InvalidAccount):
        ledger.transfer(alice, b"\x00" * 32, 1)
    # a 20-byte identifier is malformed under this width
    with pytest.raises(InvalidAccount):
        ledger.transfer(alice, det_address("bob"), 1)
