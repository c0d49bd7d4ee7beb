"""
token_ledger.metrics — Prometheus counters & gauge for the ledger.

Exposed metrics (names are prefixed with `token_ledger_`):
  - calls_total{method,result}   : Counter — entry-point calls by outcome
  - events_total{event}          : Counter — events emitted
  - total_supply                 : Gauge   — current total supply (as float, so
                                             values above 2**53 are rounded)

Labels:
  - result ∈ {success, revert}
  - event  ∈ {Transfer, Approval, OwnershipTransferred}

Consumers expose the registry with `generate_latest_text()`; tests may inject
a fresh registry with `set_registry(CollectorRegistry())`.
"""

from __future__ import annotations

from typing import Iterable, Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

from .types.events import LedgerEvent

_PREFIX = "token_ledger_"

_registry: Optional[CollectorRegistry] = None

# Metric singletons (bound during _build_metrics)
CALLS_TOTAL: Counter
EVENTS_TOTAL: Counter
TOTAL_SUPPLY: Gauge


def _build_metrics(reg: CollectorRegistry) -> None:
    global CALLS_TOTAL, EVENTS_TOTAL, TOTAL_SUPPLY

    CALLS_TOTAL = Counter(
        _PREFIX + "calls_total",
        "Ledger entry-point calls (by method and result).",
        labelnames=("method", "result"),
        registry=reg,
    )
    EVENTS_TOTAL = Counter(
        _PREFIX + "events_total",
        "Ledger events emitted (by event name).",
        labelnames=("event",),
        registry=reg,
    )
    TOTAL_SUPPLY = Gauge(
        _PREFIX + "total_supply",
        "Current total supply (float; exact only up to 2**53).",
        registry=reg,
    )


def set_registry(registry: CollectorRegistry) -> None:
    """Bind all metrics to `registry`, replacing any previous binding."""
    global _registry
    _registry = registry
    _build_metrics(registry)


def get_registry() -> CollectorRegistry:
    """Return the metrics registry, creating one on first use."""
    if _registry is None:
        set_registry(CollectorRegistry())
    assert _registry is not None
    return _registry


def observe_call(*, method: str, result: str, events: Iterable[LedgerEvent] = ()) -> None:
    get_registry()
    CALLS_TOTAL.labels(method=method, result=result).inc()
    for ev in events:
        EVENTS_TOTAL.labels(event=ev.NAME).inc()


def set_total_supply(value: int) -> None:
    get_registry()
    TOTAL_SUPPLY.set(float(value))


def generate_latest_text() -> bytes:
    """Prometheus exposition format for the current registry."""
    return generate_latest(get_registry())


__all__ = [
    "CONTENT_TYPE_LATEST",
    "get_registry",
    "set_registry",
    "observe_call",
    "set_total_supply",
    "generate_latest_text",
]
