"""
token_ledger.ledger — the TokenLedger facade.

One TokenLedger object owns all state for one token: the balance store, the
allowance store, the event sink and a reference to the access guard. It is
constructed once and every operation goes through it; there are no module
globals holding ledger state.

Public interface
----------------
# views
total_supply() -> int
balance_of(account) -> int
allowance(owner, spender) -> int
owner() -> bytes

# state-changing (explicit caller)
transfer(caller, to, amount) -> bool
approve(caller, spender, amount) -> bool
transfer_from(caller, owner, to, amount) -> bool
increase_allowance(caller, spender, added) -> bool
decrease_allowance(caller, spender, subtracted) -> bool
mint(caller, to, amount) -> None          # role holder only
burn(caller, amount) -> None
burn_from(caller, account, amount) -> None

State-changing methods raise a LedgerError subclass on failure, leaving state
and the event log untouched. `apply(caller, method, *args)` runs the same
entry points but returns a CallResult instead of raising.

Example
-------
    ledger = TokenLedger(owner=admin)
    ledger.mint(admin, alice, 1_000)
    ledger.transfer(alice, bob, 250)
    res = ledger.apply(bob, "transfer", alice, 10_000)
    res.error_code  # "INSUFFICIENT_BALANCE"
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from . import metrics
from .access import OwnerGuard, RoleGuard
from .config import LedgerConfig, get_config
from .errors import LedgerError
from .runtime.delegated import DelegatedTransferEngine
from .runtime.event_sink import EventSink
from .runtime.transfers import TransferEngine
from .state.allowances import AllowanceStore
from .state.balances import BalanceStore
from .types.address import AddressLike, to_address, to_hex
from .types.events import LedgerEvent
from .types.result import CallResult
from .types.status import CallStatus

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Entry points reachable through `apply`. Views take no caller.
VIEW_METHODS = frozenset({"total_supply", "balance_of", "allowance", "owner"})
CALL_METHODS = frozenset(
    {
        "transfer",
        "approve",
        "transfer_from",
        "increase_allowance",
        "decrease_allowance",
        "mint",
        "burn",
        "burn_from",
    }
)


def _entrypoint(fn: F) -> F:
    """Record metrics for a state-changing entry point."""
    name = fn.__name__

    @functools.wraps(fn)
    def wrapper(self: "TokenLedger", *args: Any, **kwargs: Any) -> Any:
        marker = self.sink.mark()
        try:
            out = fn(self, *args, **kwargs)
        except LedgerError:
            self._observe(name, CallStatus.REVERT, ())
            raise
        self._observe(name, CallStatus.SUCCESS, self.sink.since(marker))
        return out

    return wrapper  # type: ignore[return-value]


class TokenLedger:
    def __init__(
        self,
        owner: Optional[AddressLike] = None,
        *,
        guard: Optional[RoleGuard] = None,
        config: Optional[LedgerConfig] = None,
        sink: Optional[EventSink] = None,
    ) -> None:
        if (owner is None) == (guard is None):
            raise ValueError("pass exactly one of `owner` or `guard`")
        self.config = config or get_config()
        self.sink = sink if sink is not None else EventSink()
        if guard is None:
            guard = OwnerGuard(owner, address_bytes=self.config.address_bytes, sink=self.sink)  # type: ignore[arg-type]
        elif getattr(guard, "sink", None) is None and hasattr(guard, "attach"):
            # ownership events from an external guard land in this ledger's log
            guard.attach(self.sink)  # type: ignore[attr-defined]
        self.guard: RoleGuard = guard

        self.balances = BalanceStore(self.config.max_amount)
        self.allowances = AllowanceStore(self.config.max_amount)
        self.transfers = TransferEngine(
            self.balances, self.allowances, self.guard, self.sink, self.config
        )
        self.delegated = DelegatedTransferEngine(
            self.allowances, self.transfers, self.sink, self.config
        )

    # ------------------------------ views ------------------------------------

    def total_supply(self) -> int:
        return self.balances.total_supply()

    def balance_of(self, account: AddressLike) -> int:
        return self.balances.balance_of(to_address(account, self.config.address_bytes))

    def allowance(self, owner: AddressLike, spender: AddressLike) -> int:
        width = self.config.address_bytes
        return self.allowances.allowance_of(
            to_address(owner, width, role="owner"), to_address(spender, width, role="spender")
        )

    def owner(self) -> bytes:
        """Current role holder, or the zero address if the guard has none."""
        getter = getattr(self.guard, "owner", None)
        if getter is None:
            return self.config.zero_address
        return getter()

    @property
    def events(self) -> Tuple[LedgerEvent, ...]:
        return self.sink.events()

    # ------------------------- state-changing --------------------------------

    @_entrypoint
    def transfer(self, caller: AddressLike, to: AddressLike, amount: int) -> bool:
        self.transfers.transfer(caller, to, amount)
        return True

    @_entrypoint
    def approve(self, caller: AddressLike, spender: AddressLike, amount: int) -> bool:
        self.delegated.approve(caller, spender, amount)
        return True

    @_entrypoint
    def transfer_from(
        self, caller: AddressLike, owner: AddressLike, to: AddressLike, amount: int
    ) -> bool:
        self.delegated.transfer_from(caller, owner, to, amount)
        return True

    @_entrypoint
    def increase_allowance(self, caller: AddressLike, spender: AddressLike, added: int) -> bool:
        self.delegated.increase_allowance(caller, spender, added)
        return True

    @_entrypoint
    def decrease_allowance(
        self, caller: AddressLike, spender: AddressLike, subtracted: int
    ) -> bool:
        self.delegated.decrease_allowance(caller, spender, subtracted)
        return True

    @_entrypoint
    def mint(self, caller: AddressLike, to: AddressLike, amount: int) -> None:
        self.transfers.mint(caller, to, amount)

    @_entrypoint
    def burn(self, caller: AddressLike, amount: int) -> None:
        self.transfers.burn(caller, amount)

    @_entrypoint
    def burn_from(self, caller: AddressLike, account: AddressLike, amount: int) -> None:
        self.transfers.burn_from(account, caller, amount)

    # ------------------------------ apply ------------------------------------

    def apply(self, caller: Optional[AddressLike], method: str, *args: Any) -> CallResult:
        """
        Run one entry point and return its outcome as a CallResult.

        Views ignore `caller`. LedgerErrors become REVERT results; any other
        exception propagates (it signals a bug, not a ledger revert).

        Raises:
            ValueError if `method` is not a ledger entry point.
        """
        if method in VIEW_METHODS:
            call_args: Tuple[Any, ...] = args
        elif method in CALL_METHODS:
            call_args = (caller, *args)
        else:
            raise ValueError(f"unknown ledger method: {method!r}")

        marker = self.sink.mark()
        try:
            value = getattr(self, method)(*call_args)
        except LedgerError as err:
            log.info("call reverted method=%s code=%s", method, err.code)
            return CallResult(method, CallStatus.REVERT, error=err)
        return CallResult(method, CallStatus.SUCCESS, value=value, events=self.sink.since(marker))

    # --------------------------- inspection ----------------------------------

    def verify_supply(self) -> bool:
        return self.balances.verify_supply()

    def snapshot(self) -> Dict[str, Any]:
        """JSON-friendly view of the whole ledger state."""
        return {
            "total_supply": self.total_supply(),
            "owner": to_hex(self.owner()),
            "balances": {to_hex(a): v for a, v in self.balances.holders()},
            "allowances": {
                f"{to_hex(o)}:{to_hex(s)}": v for (o, s), v in self.allowances.entries()
            },
        }

    def _observe(self, method: str, status: CallStatus, events: Tuple[LedgerEvent, ...]) -> None:
        if not self.config.metrics_enabled:
            return
        metrics.observe_call(method=method, result=str(status), events=events)
        if status.is_success:
            metrics.set_total_supply(self.total_supply())


__all__ = ["TokenLedger", "VIEW_METHODS", "CALL_METHODS"]
