"""
token_ledger.runtime — engines that turn store primitives into ledger calls.

Submodules:
- event_sink: ordered event log, canonical CBOR encoding, events root
- transfers:  transfer / mint / burn / burn_from
- delegated:  approve / increase / decrease allowance, transfer_from
"""

from .event_sink import EventSink, decode_event, encode_event, event_leaf, events_root
from .transfers import StagedTransfer, TransferEngine
from .delegated import DelegatedTransferEngine

__all__ = [
    "EventSink",
    "decode_event",
    "encode_event",
    "event_leaf",
    "events_root",
    "StagedTransfer",
    "TransferEngine",
    "DelegatedTransferEngine",
]
