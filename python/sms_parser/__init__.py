"""
SMS Transaction Parser

Turns bank and wallet SMS alerts into structured transactions with a
calibrated confidence, rejecting OTPs, promotions and other noise.
"""

from .models import (
    ConfidenceWeights,
    EntryType,
    ParsedTransaction,
    ParsingContext,
    PaymentChannel,
    SourceType,
    Transaction,
    TransactionDirection,
    TransactionStatus,
)
from .validation_gate import should_accept, rejection_reason
from .pipeline import SMSPipeline
from .sender_trust import SenderTrustModel
from .confidence_decay import decay_factor, effective_confidence, is_confidence_valid
from .merchant_resolution import MerchantResolutionEngine
from .assembler import TransactionAssembler, normalize_for_hash, hash_for_duplicate_check
from .store import InMemoryTransactionStore, MerchantHistory, TransactionStore
from .capture import TransactionCapture, CaptureOutcome, CaptureResult
from .integrity import ValidationResult, validate_transaction, validate_transactions
from .settings import ParserSettings, get_settings

__all__ = [
    # Models
    "ConfidenceWeights",
    "EntryType",
    "ParsedTransaction",
    "ParsingContext",
    "PaymentChannel",
    "SourceType",
    "Transaction",
    "TransactionDirection",
    "TransactionStatus",
    # Validation Gate
    "should_accept",
    "rejection_reason",
    # Pipeline
    "SMSPipeline",
    # Confidence
    "SenderTrustModel",
    "decay_factor",
    "effective_confidence",
    "is_confidence_valid",
    # Merchants
    "MerchantResolutionEngine",
    # Assembly
    "TransactionAssembler",
    "normalize_for_hash",
    "hash_for_duplicate_check",
    # Storage
    "InMemoryTransactionStore",
    "MerchantHistory",
    "TransactionStore",
    # Capture
    "TransactionCapture",
    "CaptureOutcome",
    "CaptureResult",
    # Integrity
    "ValidationResult",
    "validate_transaction",
    "validate_transactions",
    # Settings
    "ParserSettings",
    "get_settings",
]
