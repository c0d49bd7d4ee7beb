"""
token_ledger.types.status — outcome of a single ledger call.

  - SUCCESS : the call committed
  - REVERT  : the call raised a LedgerError; nothing was mutated

String forms:
  - str(CallStatus.SUCCESS) -> "success"   (logs/metrics labels)
  - CallStatus.SUCCESS.code -> "SUCCESS"
"""

from __future__ import annotations

from enum import Enum


class CallStatus(str, Enum):
    SUCCESS = "success"
    REVERT = "revert"

    @property
    def code(self) -> str:
        return self.value.upper()

    @property
    def is_success(self) -> bool:
        return self is CallStatus.SUCCESS

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


__all__ = ["CallStatus"]
