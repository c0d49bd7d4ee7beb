# -*- coding: utf-8 -*-
"""
Pytest fixtures for the token ledger.

- Stable 20-byte account addresses derived from tags via SHA3 (no randomness).
- A fresh Prometheus registry per test so counters start at zero.
- A ledger owned by `admin`, plus a helper to fund accounts through mint.
"""
from __future__ import annotations

import hashlib
from typing import Callable

import pytest
from prometheus_client import CollectorRegistry

from token_ledger import metrics
from token_ledger.config import LedgerConfig
from token_ledger.ledger import TokenLedger


def det_address(tag: str, width: int = 20) -> bytes:
    """Stable `width`-byte address from a tag."""
    return hashlib.sha3_256(tag.encode("utf-8")).digest()[:width]


ZERO = b"\x00" * 20


@pytest.fixture(autouse=True)
def fresh_registry() -> CollectorRegistry:
    reg = CollectorRegistry()
    metrics.set_registry(reg)
    return reg


@pytest.fixture
def admin() -> bytes:
    return det_address("admin")


@pytest.fixture
def alice() -> bytes:
    return det_address("alice")


@pytest.fixture
def bob() -> bytes:
    return det_address("bob")


@pytest.fixture
def carol() -> bytes:
    return det_address("carol")


@pytest.fixture
def config() -> LedgerConfig:
    return LedgerConfig()


@pytest.fixture
def ledger(admin: bytes, config: LedgerConfig) -> TokenLedger:
    return TokenLedger(owner=admin, config=config)


@pytest.fixture
def fund(ledger: TokenLedger, admin: bytes) -> Callable[[bytes, int], None]:
    def _fund(account: bytes, amount: int) -> None:
        ledger.mint(admin, account, amount)

    return _fund
