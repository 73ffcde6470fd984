"""
SMS Validation Gate

Rejects messages that are clearly not a single money movement (OTPs,
promotions, failed payments, statement alerts, balance pings) before any
extracted field is trusted.
"""

import logging

from . import patterns

logger = logging.getLogger(__name__)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def _matches_any(text: str, regexes: list) -> bool:
    return any(regex.search(text) for regex in regexes)


def rejection_reason(raw_text: str | None) -> str | None:
    """Return why a message is rejected, or None if it is accepted.

    Rules are evaluated in a fixed order and the first failing rule wins.

    Args:
        raw_text: Message body

    Returns:
        One of 'blank', 'no_money_movement', 'otp', 'failed', 'promotional',
        'account_alert', 'balance_only', or None
    """
    if raw_text is None or not raw_text.strip():
        return "blank"

    lower = raw_text.lower().strip()

    has_verb = _contains_any(lower, patterns.TRANSACTION_VERBS)
    has_rail = patterns.RAIL_KEYWORD_PATTERN.search(lower) is not None
    if not (has_verb or has_rail):
        return "no_money_movement"

    if _matches_any(lower, patterns.OTP_PATTERNS):
        return "otp"

    if _matches_any(lower, patterns.FAILED_PATTERNS):
        return "failed"

    if _matches_any(lower, patterns.PROMO_PATTERNS):
        return "promotional"

    if _matches_any(lower, patterns.ACCOUNT_ALERT_PATTERNS):
        return "account_alert"

    # A balance mention only counts when money actually moved
    if _matches_any(lower, patterns.BALANCE_PATTERNS) and not _contains_any(
        lower, patterns.STRONG_TRANSACTION_VERBS
    ):
        return "balance_only"

    return None


def should_accept(raw_text: str | None) -> bool:
    """Check whether a message looks like a single transaction."""
    reason = rejection_reason(raw_text)
    if reason is not None:
        logger.debug(f"Gate rejected message ({reason}), length={len(raw_text or '')}")
        return False
    return True
