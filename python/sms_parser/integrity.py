"""
Ledger Integrity Checker

Validates transaction records against the ledger invariants so that
corrupt states are caught instead of silently stored.
"""

import logging
import time
from dataclasses import dataclass, field

from .models import EntryType, SourceType, Transaction, TransactionStatus

logger = logging.getLogger(__name__)

HOUR_MILLIS = 60 * 60 * 1000
TEN_YEARS_MILLIS = 10 * 365 * 24 * HOUR_MILLIS


@dataclass
class ValidationResult:
    """Outcome of an integrity check."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_transaction(transaction: Transaction, now: int | None = None) -> ValidationResult:
    """Check one transaction against every invariant.

    Args:
        transaction: Transaction to check
        now: Reference time in epoch milliseconds

    Returns:
        ValidationResult with errors and warnings
    """
    now = int(time.time() * 1000) if now is None else now
    errors = []
    warnings = []

    if not transaction.amount.is_finite():
        errors.append(f"Amount is not finite: {transaction.amount}")
    elif transaction.amount <= 0:
        errors.append(f"Amount is not positive: {transaction.amount}")

    if transaction.timestamp <= 0:
        errors.append(f"Invalid timestamp: {transaction.timestamp}")
    else:
        if transaction.timestamp > now + HOUR_MILLIS:
            warnings.append("Timestamp is more than 1 hour in the future")
        if transaction.timestamp < now - TEN_YEARS_MILLIS:
            warnings.append("Timestamp is more than 10 years old")

    if not 0.0 <= transaction.confidence_score <= 1.0:
        errors.append(f"Confidence score out of range [0, 1]: {transaction.confidence_score}")

    if transaction.final_confidence is not None and not 0.0 <= transaction.final_confidence <= 1.0:
        errors.append(f"Final confidence out of range [0, 1]: {transaction.final_confidence}")

    if transaction.sender_trust_score is not None and not 0.0 <= transaction.sender_trust_score <= 1.0:
        errors.append(f"Sender trust score out of range [0, 1]: {transaction.sender_trust_score}")

    if not transaction.is_approved and transaction.status == TransactionStatus.CONFIRMED:
        errors.append("Transaction cannot be unapproved and confirmed at the same time")

    if transaction.source == SourceType.SMS and not transaction.raw_text_hash:
        errors.append("SMS transaction has no content hash")

    if (
        transaction.entry_type == EntryType.AUTO_CAPTURED
        and transaction.status == TransactionStatus.DETECTED
        and transaction.is_approved
    ):
        errors.append("Auto-captured transaction approved without review")

    if not transaction.merchant.strip() and transaction.status != TransactionStatus.IGNORED:
        warnings.append("Empty merchant name on a transaction that is not ignored")

    if transaction.is_approved and not (transaction.category and transaction.category.strip()):
        warnings.append("Approved transaction has no category")

    if transaction.schema_version < 1:
        errors.append(f"Invalid schema version: {transaction.schema_version}")
    if transaction.parser_version < 1:
        errors.append(f"Invalid parser version: {transaction.parser_version}")

    if transaction.created_at > transaction.updated_at:
        errors.append("created_at is after updated_at")

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)


def validate_transactions(
    transactions: list[Transaction],
    context: str = "unknown",
    now: int | None = None
) -> ValidationResult:
    """Check a batch of transactions and log a summary.

    Args:
        transactions: Transactions to check
        context: Label for the log (e.g. 'import', 'migration')
        now: Reference time in epoch milliseconds

    Returns:
        Aggregate ValidationResult; messages are prefixed with the list index
    """
    all_errors = []
    all_warnings = []
    invalid_count = 0

    for index, transaction in enumerate(transactions):
        result = validate_transaction(transaction, now)
        if not result.is_valid:
            invalid_count += 1
            all_errors.extend(f"Transaction #{index}: {e}" for e in result.errors)
        all_warnings.extend(f"Transaction #{index}: {w}" for w in result.warnings)

    if invalid_count:
        all_errors.insert(
            0, f"Found {invalid_count} invalid transactions out of {len(transactions)} total"
        )
        logger.error(f"Integrity check failed for {context}: {invalid_count} invalid transactions")
    elif all_warnings:
        logger.warning(f"Integrity check passed for {context} with {len(all_warnings)} warnings")
    else:
        logger.info(f"Integrity check passed for {context}: {len(transactions)} transactions")

    return ValidationResult(
        is_valid=invalid_count == 0,
        errors=all_errors,
        warnings=all_warnings,
    )
