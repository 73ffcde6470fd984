"""
Parser Data Model

Enums and dataclasses shared by the parsing pipeline, the assembler and
the capture worker.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class TransactionDirection(Enum):
    """Direction of money movement."""
    DEBIT = "debit"
    CREDIT = "credit"


class PaymentChannel(Enum):
    """Rail the payment travelled over."""
    CASH = "cash"
    UPI = "upi"
    CARD = "card"
    BANK = "bank"


class SourceType(Enum):
    """Where a transaction came from."""
    SMS = "sms"
    NOTIFICATION = "notification"
    MANUAL = "manual"
    EMAIL = "email"


class EntryType(Enum):
    """Who created the transaction."""
    AUTO_CAPTURED = "auto_captured"
    USER_ENTERED = "user_entered"
    USER_MODIFIED = "user_modified"


class TransactionStatus(Enum):
    """Review lifecycle of a transaction."""
    DETECTED = "detected"  # Auto-captured, not reviewed
    CONFIRMED = "confirmed"  # User accepted
    MODIFIED = "modified"  # User edited
    IGNORED = "ignored"  # Hidden from totals


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a value into [low, high]."""
    return max(low, min(high, value))


@dataclass(frozen=True)
class ConfidenceWeights:
    """Weights used to combine per-field confidences."""

    amount: float = 0.4
    merchant: float = 0.3
    direction: float = 0.2
    channel: float = 0.1

    def combine(self, stage_confidences: dict[str, float]) -> float:
        """Weighted sum of the stage confidences, clamped to [0, 1].

        The sender stage is deliberately absent from the weights; it is
        reported but only contributes through the sender trust blend.
        """
        if not stage_confidences:
            return 0.0

        total = (
            stage_confidences.get("amount", 0.0) * self.amount
            + stage_confidences.get("merchant", 0.0) * self.merchant
            + stage_confidences.get("direction", 0.0) * self.direction
            + stage_confidences.get("channel", 0.0) * self.channel
        )
        return clamp(total)


DEFAULT_WEIGHTS = ConfidenceWeights()


@dataclass
class ParsingContext:
    """Mutable state threaded through the stages of one parse call."""

    raw_text: str
    sender_id: str | None = None
    amount: Decimal | None = None
    merchant: str | None = None
    account_type: str | None = None
    direction: TransactionDirection | None = None
    channel: PaymentChannel | None = None
    stage_confidences: dict[str, float] = field(default_factory=dict)

    def record(self, stage: str, confidence: float) -> float:
        """Store a stage confidence, clamped to [0, 1], and return it."""
        confidence = clamp(float(confidence))
        self.stage_confidences[stage] = confidence
        return confidence

    def overall_confidence(self, weights: ConfidenceWeights = DEFAULT_WEIGHTS) -> float:
        return weights.combine(self.stage_confidences)


@dataclass(frozen=True)
class ParsedTransaction:
    """Fields extracted from one message by the pipeline."""

    amount: Decimal | None
    merchant: str | None
    account_type: str | None
    direction: TransactionDirection | None
    channel: PaymentChannel | None
    confidence: float
    stage_confidences: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Transaction:
    """A transaction record ready to hand to storage."""

    timestamp: int  # epoch milliseconds the message was received
    amount: Decimal
    merchant: str
    direction: TransactionDirection
    channel: PaymentChannel
    source: SourceType
    entry_type: EntryType
    confidence_score: float
    created_at: datetime
    updated_at: datetime
    status: TransactionStatus = TransactionStatus.DETECTED
    is_approved: bool = False
    account_type: str | None = None
    category: str | None = None
    notes: str | None = None
    raw_text_hash: str | None = None
    sender_id: str | None = None
    sender_trust_score: float | None = None
    final_confidence: float | None = None
    schema_version: int = 1
    parser_version: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "amount": float(self.amount),
            "merchant": self.merchant,
            "direction": self.direction.value,
            "channel": self.channel.value,
            "source": self.source.value,
            "entry_type": self.entry_type.value,
            "confidence_score": self.confidence_score,
            "status": self.status.value,
            "is_approved": self.is_approved,
            "account_type": self.account_type,
            "category": self.category,
            "notes": self.notes,
            "raw_text_hash": self.raw_text_hash,
            "sender_id": self.sender_id,
            "sender_trust_score": self.sender_trust_score,
            "final_confidence": self.final_confidence,
            "schema_version": self.schema_version,
            "parser_version": self.parser_version,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
