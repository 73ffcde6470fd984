"""
Transaction Capture Module

Background ingestion path: parse an incoming SMS, drop duplicates by
content hash and route the result to the main ledger or to the review
quarantine depending on its final confidence.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .assembler import TransactionAssembler
from .models import Transaction
from .settings import ParserSettings, get_settings
from .store import TransactionStore

logger = logging.getLogger(__name__)


class CaptureOutcome(Enum):
    """What happened to a captured message."""
    SAVED = "saved"
    QUARANTINED = "quarantined"
    DUPLICATE = "duplicate"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass
class CaptureResult:
    """Result of capturing one message."""

    outcome: CaptureOutcome
    transaction: Transaction | None = None
    record_id: int | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "record_id": self.record_id,
            "transaction": self.transaction.to_dict() if self.transaction else None,
            "error": self.error,
        }


class TransactionCapture:
    """Parses messages and hands the results to a TransactionStore."""

    def __init__(
        self,
        store: TransactionStore,
        assembler: TransactionAssembler | None = None,
        settings: ParserSettings | None = None
    ):
        """Initialize the capture worker.

        Args:
            store: Storage collaborator
            assembler: Assembler used to parse messages
            settings: Parser settings (quarantine threshold)
        """
        self.store = store
        self.settings = settings or get_settings()
        self.assembler = assembler or TransactionAssembler(settings=self.settings)

    def process(
        self,
        text: str,
        timestamp: int,
        sender_id: str | None = None
    ) -> CaptureResult:
        """Capture a single SMS.

        Args:
            text: Raw SMS body
            timestamp: Receive time in epoch milliseconds
            sender_id: Sender ID from the SMS header

        Returns:
            CaptureResult describing where the message went
        """
        logger.debug(f"Capturing message, length={len(text or '')}")
        transaction = self.assembler.parse_message(text, timestamp, sender_id)

        if transaction is None:
            return CaptureResult(outcome=CaptureOutcome.REJECTED)

        try:
            if transaction.raw_text_hash and self.store.is_duplicate(transaction.raw_text_hash):
                logger.info("Duplicate message detected, skipping")
                return CaptureResult(outcome=CaptureOutcome.DUPLICATE, transaction=transaction)

            confidence = transaction.final_confidence
            if confidence is None:
                confidence = transaction.confidence_score

            if confidence < self.settings.quarantine_threshold:
                record_id = self.store.insert_unverified(transaction)
                logger.info(
                    f"Low-confidence transaction quarantined "
                    f"(id={record_id}, confidence={confidence:.2f})"
                )
                return CaptureResult(
                    outcome=CaptureOutcome.QUARANTINED,
                    transaction=transaction,
                    record_id=record_id,
                )

            record_id = self.store.insert_transaction(transaction)
            logger.info(f"Transaction saved (id={record_id}, confidence={confidence:.2f})")
            return CaptureResult(
                outcome=CaptureOutcome.SAVED,
                transaction=transaction,
                record_id=record_id,
            )

        except Exception as e:
            logger.error(f"Failed to store captured transaction: {e}")
            return CaptureResult(
                outcome=CaptureOutcome.FAILED,
                transaction=transaction,
                error=str(e),
            )
