"""
API Dependencies

Process-wide parser components handed to routes via FastAPI Depends.
"""

from sms_parser import (
    InMemoryTransactionStore,
    MerchantResolutionEngine,
    TransactionAssembler,
    TransactionCapture,
)

_store: InMemoryTransactionStore | None = None
_assembler: TransactionAssembler | None = None
_capture: TransactionCapture | None = None
_merchant_engine: MerchantResolutionEngine | None = None


def get_store() -> InMemoryTransactionStore:
    """Get the shared transaction store."""
    global _store
    if _store is None:
        _store = InMemoryTransactionStore()
    return _store


def get_assembler() -> TransactionAssembler:
    """Get the shared transaction assembler."""
    global _assembler
    if _assembler is None:
        _assembler = TransactionAssembler()
    return _assembler


def get_capture() -> TransactionCapture:
    """Get the capture worker bound to the shared store."""
    global _capture
    if _capture is None:
        _capture = TransactionCapture(get_store(), assembler=get_assembler())
    return _capture


def get_merchant_engine() -> MerchantResolutionEngine:
    """Get the merchant resolver backed by the shared store."""
    global _merchant_engine
    if _merchant_engine is None:
        _merchant_engine = MerchantResolutionEngine(history=get_store())
    return _merchant_engine


def reset() -> None:
    """Drop all shared components (used by tests)."""
    global _store, _assembler, _capture, _merchant_engine
    _store = None
    _assembler = None
    _capture = None
    _merchant_engine = None
