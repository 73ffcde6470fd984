"""
Transaction Assembler

Top-level entry point: turns an SMS body into a Transaction, or None when
the message is not a transaction or the parse is not confident enough.
Also builds transactions from manually entered fields.
"""

import hashlib
import logging
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from . import validation_gate
from .models import (
    EntryType,
    PaymentChannel,
    SourceType,
    Transaction,
    TransactionDirection,
    TransactionStatus,
)
from .pipeline import UNKNOWN_MERCHANT, SMSPipeline
from .sender_trust import SenderTrustModel
from .settings import ParserSettings, get_settings

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_for_hash(text: str) -> str:
    """Normalize message text so multipart and re-sent copies hash the same."""
    return _WHITESPACE.sub(" ", text.strip())


def hash_for_duplicate_check(normalized_text: str) -> str:
    """SHA-256 hex digest of normalized text; empty string for blank text."""
    if not normalized_text.strip():
        return ""
    return hashlib.sha256(normalized_text.encode("utf-8")).hexdigest()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TransactionAssembler:
    """Builds Transaction records from SMS text or manual input."""

    def __init__(
        self,
        pipeline: SMSPipeline | None = None,
        trust_model: SenderTrustModel | None = None,
        settings: ParserSettings | None = None
    ):
        """Initialize the assembler.

        Args:
            pipeline: Parsing pipeline to use
            trust_model: Sender trust model for the final confidence blend
            settings: Parser settings (minimum confidence)
        """
        self.settings = settings or get_settings()
        self.pipeline = pipeline or SMSPipeline()
        self.trust_model = trust_model or SenderTrustModel(self.settings)

    def parse_message(
        self,
        text: str,
        timestamp: int,
        sender_id: str | None = None
    ) -> Transaction | None:
        """Parse an SMS into a pending transaction.

        Args:
            text: Raw SMS body
            timestamp: Time the message was received, epoch milliseconds
            sender_id: Sender ID from the SMS header, if known

        Returns:
            Transaction with status DETECTED, or None if the message is
            rejected
        """
        if not text or not text.strip() or timestamp <= 0:
            return None

        if not validation_gate.should_accept(text):
            return None

        parsed = self.pipeline.parse(text, sender_id)

        if parsed.amount is None or not parsed.amount.is_finite() or parsed.amount <= 0:
            logger.debug("No amount found, discarding message")
            return None

        if parsed.confidence < self.settings.min_confidence:
            logger.debug(f"Confidence {parsed.confidence:.2f} below threshold, discarding message")
            return None

        raw_text_hash = hash_for_duplicate_check(normalize_for_hash(text))
        merchant = (parsed.merchant or "").strip() or UNKNOWN_MERCHANT
        now = _utcnow()

        return Transaction(
            timestamp=timestamp,
            amount=parsed.amount,
            merchant=merchant,
            direction=parsed.direction or TransactionDirection.DEBIT,
            channel=parsed.channel or PaymentChannel.UPI,
            source=SourceType.SMS,
            entry_type=EntryType.AUTO_CAPTURED,
            confidence_score=parsed.confidence,
            created_at=now,
            updated_at=now,
            status=TransactionStatus.DETECTED,
            is_approved=False,
            account_type=parsed.account_type,
            raw_text_hash=raw_text_hash,
            sender_id=sender_id,
            sender_trust_score=self.trust_model.trust_score(sender_id),
            final_confidence=self.trust_model.final_confidence(parsed.confidence, sender_id),
        )

    def build_manual_transaction(
        self,
        amount: Decimal | float | str,
        merchant: str,
        channel: PaymentChannel,
        timestamp: int,
        category: str | None = None,
        notes: str | None = None,
        direction: TransactionDirection = TransactionDirection.DEBIT
    ) -> Transaction:
        """Build a transaction from user-entered fields.

        Entries with a category are confirmed and approved straight away;
        without one they wait for review like captured transactions.

        Raises:
            ValueError: If the amount is not a positive number
        """
        try:
            amount = Decimal(str(amount))
        except InvalidOperation:
            raise ValueError(f"Manual amount is not a number: {amount}")

        if not amount.is_finite() or amount <= 0:
            raise ValueError(f"Manual amount must be positive: {amount}")

        has_category = bool(category and category.strip())
        now = _utcnow()

        return Transaction(
            timestamp=timestamp,
            amount=amount,
            merchant=merchant.strip(),
            direction=direction,
            channel=channel,
            source=SourceType.MANUAL,
            entry_type=EntryType.USER_ENTERED,
            confidence_score=1.0,
            created_at=now,
            updated_at=now,
            status=TransactionStatus.CONFIRMED if has_category else TransactionStatus.DETECTED,
            is_approved=has_category,
            category=category if has_category else None,
            notes=notes,
        )
