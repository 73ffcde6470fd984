"""
Sender Trust Module

Scores how likely a sender ID is to be a legitimate bank or wallet, and
blends that score with the content confidence of a parse.
"""

import logging

from .models import clamp
from .settings import ParserSettings, get_settings

logger = logging.getLogger(__name__)

# Lookup order matters for substring matches: first hit wins
TRUSTED_SENDERS: dict[str, float] = {
    # HDFC Bank
    "HDFCBK": 0.95,
    "HDFCB": 0.95,
    "HDFC": 0.95,
    # ICICI Bank
    "ICICIB": 0.95,
    "ICICIBK": 0.95,
    "ICICI": 0.95,
    # SBI
    "SBIIN": 0.95,
    "SBINB": 0.95,
    "SBI": 0.95,
    # Axis Bank
    "AXISBK": 0.95,
    "AXIS": 0.95,
    # Kotak Bank
    "KOTAKB": 0.95,
    "KOTAK": 0.95,
    # PNB
    "PNB": 0.95,
    "PNBIN": 0.95,
    # BOI
    "BOI": 0.95,
    "BOIIN": 0.95,
    # UPI providers
    "UPI": 0.90,
    "PAYTM": 0.90,
    "GPAY": 0.90,
    "PHONEPE": 0.90,
    # E-commerce
    "AMZNIN": 0.80,
    "FLIPKART": 0.80,
    "ZOMATO": 0.80,
    "SWIGGY": 0.80,
    # Test senders
    "VK-TEST": 0.10,
    "TEST": 0.10,
    "DEMO": 0.10,
}

HIGH_TRUST_THRESHOLD = 0.9


class SenderTrustModel:
    """Maps sender IDs to trust scores."""

    def __init__(
        self,
        settings: ParserSettings | None = None,
        trusted_senders: dict[str, float] | None = None
    ):
        """Initialize the trust model.

        Args:
            settings: Parser settings (default trust and content weight)
            trusted_senders: Override for the sender table
        """
        self.settings = settings or get_settings()
        self.trusted_senders = trusted_senders if trusted_senders is not None else TRUSTED_SENDERS

    def trust_score(self, sender_id: str | None) -> float:
        """Get the trust score for a sender ID.

        Args:
            sender_id: Sender ID from the SMS header

        Returns:
            Trust score between 0.0 and 1.0
        """
        if sender_id is None:
            return self.settings.default_trust_score

        normalized = sender_id.upper().strip()

        if normalized in self.trusted_senders:
            return self.trusted_senders[normalized]

        for key, score in self.trusted_senders.items():
            if key in normalized:
                return score

        return self.settings.default_trust_score

    def final_confidence(self, content_score: float, sender_id: str | None) -> float:
        """Blend content confidence with sender trust.

        Args:
            content_score: Aggregate confidence from the parsing pipeline
            sender_id: Sender ID from the SMS header

        Returns:
            Final confidence between 0.0 and 1.0
        """
        weight = self.settings.content_weight
        blended = content_score * weight + self.trust_score(sender_id) * (1.0 - weight)
        return clamp(blended)

    def is_highly_trusted(self, sender_id: str | None) -> bool:
        return self.trust_score(sender_id) >= HIGH_TRUST_THRESHOLD
