"""
token_ledger.types.result — CallResult container for one ledger call.

`CallResult` is what `TokenLedger.apply` returns instead of letting a
LedgerError propagate: the error kind travels as a value the host must look
at, next to the events the call emitted.

Fields
------
* method : str                       — entry point name
* status : CallStatus                — SUCCESS / REVERT
* value  : Any                       — entry point return value (None on revert)
* events : tuple[LedgerEvent, ...]   — events emitted by this call, in order
* error  : Optional[LedgerError]     — the error on revert
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..errors import LedgerError
from .events import LedgerEvent
from .status import CallStatus


@dataclass(frozen=True)
class CallResult:
    method: str
    status: CallStatus
    value: Any = None
    events: Tuple[LedgerEvent, ...] = ()
    error: Optional[LedgerError] = None

    @property
    def is_success(self) -> bool:
        return self.status.is_success

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error is not None else None

    def unwrap(self) -> Any:
        """Return `value` on success; re-raise the stored error on revert."""
        if self.error is not None:
            raise self.error
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        value = self.value
        if isinstance(value, bytes):
            value = "0x" + value.hex()
        return {
            "method": self.method,
            "status": str(self.status),
            "value": value,
            "events": [ev.to_dict() for ev in self.events],
            "error": self.error.to_dict() if self.error is not None else None,
        }


__all__ = ["CallResult"]
