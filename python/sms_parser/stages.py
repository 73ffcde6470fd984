"""
Extraction Stages

Each stage reads the shared ParsingContext, fills in the field it is
responsible for and returns its confidence. Stages run in a fixed order
and never depend on each other except through the context.
"""

import logging
from decimal import Decimal, InvalidOperation

from . import patterns
from .models import ParsingContext, PaymentChannel, TransactionDirection

logger = logging.getLogger(__name__)


def parse_amount(amount_str: str | None) -> Decimal | None:
    """Parse a captured amount string, stripping thousands separators.

    Returns None for anything that is not a finite positive number.
    """
    if not amount_str:
        return None

    cleaned = amount_str.replace(",", "").rstrip(".")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None

    if not amount.is_finite() or amount <= 0:
        return None
    return amount


def _extract_account_hint(text: str) -> str | None:
    for pattern in patterns.ACCOUNT_HINT_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()

    match = patterns.BANK_NAME_PATTERN.search(text)
    if match:
        return match.group(1).upper()

    return None


def classify_sender(context: ParsingContext) -> float:
    """Score the sender against known bank and wallet codes.

    Uses the SMS header sender ID when present, otherwise scans the body.
    Also records an account hint (masked number, account kind or bank).
    """
    context.account_type = _extract_account_hint(context.raw_text)

    haystack = (context.sender_id or context.raw_text).upper()
    for code, confidence in patterns.SENDER_CLASSIFICATION.items():
        if code in haystack:
            return context.record("sender", confidence)

    return context.record("sender", patterns.UNKNOWN_SENDER_CONFIDENCE)


def extract_amount(context: ParsingContext) -> float:
    """Find the transaction amount: bank families first, then generic patterns."""
    candidates = [
        p for family in patterns.BANK_AMOUNT_PATTERNS.values() for p in family
    ] + patterns.GENERIC_AMOUNT_PATTERNS

    for pattern in candidates:
        match = pattern.search(context.raw_text)
        if not match:
            continue
        amount = parse_amount(match.group(1))
        if amount is not None:
            context.amount = amount
            return context.record("amount", 1.0)

    return context.record("amount", 0.0)


def detect_direction(context: ParsingContext) -> float:
    """Decide debit vs credit by counting keyword hits."""
    lower = context.raw_text.lower()
    debit_count = sum(1 for keyword in patterns.DEBIT_KEYWORDS if keyword in lower)
    credit_count = sum(1 for keyword in patterns.CREDIT_KEYWORDS if keyword in lower)

    if debit_count > credit_count:
        context.direction = TransactionDirection.DEBIT
        return context.record("direction", 0.9)

    if credit_count > debit_count:
        context.direction = TransactionDirection.CREDIT
        return context.record("direction", 0.9)

    if debit_count > 0:
        # Tie: lean to debit, but flag it as ambiguous
        context.direction = TransactionDirection.DEBIT
        return context.record("direction", 0.6)

    return context.record("direction", 0.0)


def resolve_merchant(context: ParsingContext) -> float:
    """Quick positional guess at the merchant name."""
    for pattern in patterns.MERCHANT_PATTERNS:
        match = pattern.search(context.raw_text)
        if match and match.group(1).strip():
            context.merchant = " ".join(match.group(1).split())
            return context.record("merchant", 0.8)

    match = patterns.UPI_MERCHANT_PATTERN.search(context.raw_text)
    if match and match.group(1).strip():
        context.merchant = " ".join(match.group(1).split())
        return context.record("merchant", 0.7)

    return context.record("merchant", 0.0)


def detect_channel(context: ParsingContext) -> float:
    """Detect the payment channel; UPI is assumed when nothing matches."""
    lower = context.raw_text.lower()

    for channel, keywords in (
        (PaymentChannel.UPI, patterns.UPI_KEYWORDS),
        (PaymentChannel.CARD, patterns.CARD_KEYWORDS),
        (PaymentChannel.BANK, patterns.BANK_KEYWORDS),
    ):
        if any(keyword in lower for keyword in keywords):
            context.channel = channel
            return context.record("channel", 0.9)

    context.channel = PaymentChannel.UPI
    return context.record("channel", 0.5)


# Execution order of the pipeline
STAGES = (
    ("sender", classify_sender),
    ("amount", extract_amount),
    ("direction", detect_direction),
    ("merchant", resolve_merchant),
    ("channel", detect_channel),
)
