"""
token_ledger.config — numeric width, address width and feature flags.

Configuration precedence:
  1) Explicit `LedgerConfig(...)` passed to `TokenLedger`
  2) Environment variables (TOKEN_LEDGER_*)
  3) Hardcoded defaults below

Environment variables (all optional):
  TOKEN_LEDGER_ADDRESS_BYTES  (int)   default: 20    clamped to [1, 64]
  TOKEN_LEDGER_UINT_BITS      (int)   default: 256   clamped to [8, 256], multiple of 8
  TOKEN_LEDGER_METRICS        (bool)  default: true

The defaults reproduce the host environment the ledger was designed for
(20-byte addresses, u256 amounts). A host with a different native width
substitutes its own values; the ledger invariants do not change.

Usage:
    from token_ledger.config import load_config
    cfg = load_config()
    cfg.max_amount  # 2**256 - 1
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional

# ----------------------------- helpers -------------------------------------

_BOOL_TRUE = {"1", "true", "t", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "f", "no", "n", "off"}


def _bool_env(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    v = value.strip().lower()
    if v in _BOOL_TRUE:
        return True
    if v in _BOOL_FALSE:
        return False
    return default


def _int_env(value: Optional[str], default: int, *, min_v: int, max_v: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        v = int(value.strip(), 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


# ------------------------------- config ------------------------------------

DEFAULT_ADDRESS_BYTES = 20
DEFAULT_UINT_BITS = 256


@dataclass(frozen=True)
class LedgerConfig:
    address_bytes: int = DEFAULT_ADDRESS_BYTES
    uint_bits: int = DEFAULT_UINT_BITS
    metrics_enabled: bool = True

    def __post_init__(self) -> None:
        if not 1 <= self.address_bytes <= 64:
            raise ValueError("address_bytes must be in [1, 64]")
        if self.uint_bits < 8 or self.uint_bits > 256 or self.uint_bits % 8:
            raise ValueError("uint_bits must be a multiple of 8 in [8, 256]")

    @property
    def max_amount(self) -> int:
        """Largest representable amount; doubles as the infinite-allowance sentinel."""
        return (1 << self.uint_bits) - 1

    @property
    def zero_address(self) -> bytes:
        return b"\x00" * self.address_bytes

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(env: Optional[Mapping[str, str]] = None) -> LedgerConfig:
    """
    Build a LedgerConfig from `env` (default: os.environ).
    """
    env = os.environ if env is None else env
    bits = _int_env(env.get("TOKEN_LEDGER_UINT_BITS"), DEFAULT_UINT_BITS, min_v=8, max_v=256)
    return LedgerConfig(
        address_bytes=_int_env(
            env.get("TOKEN_LEDGER_ADDRESS_BYTES"), DEFAULT_ADDRESS_BYTES, min_v=1, max_v=64
        ),
        uint_bits=bits - bits % 8,
        metrics_enabled=_bool_env(env.get("TOKEN_LEDGER_METRICS"), True),
    )


@lru_cache(maxsize=1)
def get_config() -> LedgerConfig:
    """
    Cached process-wide config. Tests that patch the environment should call
    `get_config.cache_clear()`.
    """
    return load_config()


def summary(cfg: Optional[LedgerConfig] = None) -> str:
    cfg = cfg or get_config()
    return (
        "ledger{"
        f"addr={cfg.address_bytes}B, uint={cfg.uint_bits}bit, "
        f"metrics={int(cfg.metrics_enabled)}"
        "}"
    )


__all__ = [
    "DEFAULT_ADDRESS_BYTES",
    "DEFAULT_UINT_BITS",
    "LedgerConfig",
    "load_config",
    "get_config",
    "summary",
]
