"""
Merchant Resolution Engine

Canonicalizes raw merchant strings before display and storage, trying
progressively looser strategies:

1. Normalization (uppercase, drop *#@, collapse whitespace)
2. Exact match against merchants already stored
3. Known payment-aggregator aliases
4. Keyword overlap with a stored merchant
5. Last-seen heuristic (not implemented yet, always misses)
6. Fallback to the normalized string

When the history collaborator fails, strategies 2-4 are skipped.
"""

import json
import logging
import re
from pathlib import Path

from .settings import default_config_dir
from .store import MerchantHistory

logger = logging.getLogger(__name__)

UNKNOWN_MERCHANT = "Unknown"

# Gateway prefixes to brand names, checked in order with substring matching
KNOWN_ALIASES: dict[str, str] = {
    "ZMT": "Zomato",
    "ZMT*ORDER": "Zomato",
    "AMZNIN": "Amazon",
    "AMAZON PAY": "Amazon",
    "SWIGGY": "Swiggy",
    "UBER": "Uber",
    "OYO": "Oyo",
}

MIN_KEYWORD_LENGTH = 3
MIN_SHARED_KEYWORDS = 2

_STRIP_CHARS = re.compile(r"[*#@]")
_WHITESPACE = re.compile(r"\s+")
_KEYWORD_SPLIT = re.compile(r"[\s*#@&]+")


def normalize(merchant: str) -> str:
    """Uppercase, remove *#@ and collapse whitespace."""
    cleaned = _STRIP_CHARS.sub("", merchant.upper())
    return _WHITESPACE.sub(" ", cleaned).strip()


def extract_keywords(merchant: str) -> set[str]:
    """Tokens of at least three characters."""
    return {
        token for token in _KEYWORD_SPLIT.split(merchant.upper())
        if len(token) >= MIN_KEYWORD_LENGTH
    }


class MerchantResolutionEngine:
    """Resolves raw merchant strings to canonical names."""

    def __init__(
        self,
        history: MerchantHistory | None = None,
        config_dir: Path | str | None = None
    ):
        """Initialize the engine.

        Args:
            history: Storage collaborator listing merchants seen before
            config_dir: Directory holding merchant_aliases.json
        """
        self.history = history
        self.config_dir = Path(config_dir) if config_dir else default_config_dir()
        self._aliases: dict[str, str] = {
            normalize(alias): name for alias, name in KNOWN_ALIASES.items()
        }
        self._alias_hints: dict[str, str] = {}
        self._load_aliases()

    def _load_aliases(self) -> None:
        """Append aliases from merchant_aliases.json to the built-in table."""
        aliases_file = self.config_dir / "merchant_aliases.json"

        if not aliases_file.exists():
            logger.warning(f"Merchant aliases file not found: {aliases_file}")
            return

        try:
            with open(aliases_file) as f:
                data = json.load(f)

            added = 0
            for alias, name in data.get("aliases", {}).items():
                key = normalize(alias)
                if key and key not in self._aliases:
                    self._aliases[key] = name
                    added += 1

            logger.info(f"Loaded {added} merchant aliases from {aliases_file}")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load merchant aliases: {e}")

    @property
    def alias_hints(self) -> dict[str, str]:
        """Corrections learned during this process."""
        return dict(self._alias_hints)

    def resolve(self, raw_merchant: str | None) -> str:
        """Resolve a raw merchant string.

        Args:
            raw_merchant: Merchant text as extracted from a message

        Returns:
            Canonical merchant name, the normalized input, or "Unknown"
        """
        if raw_merchant is None or not raw_merchant.strip():
            return UNKNOWN_MERCHANT

        normalized = normalize(raw_merchant)
        if not normalized:
            return UNKNOWN_MERCHANT

        try:
            known = self._known_merchants()
        except Exception as e:
            logger.warning(f"Merchant history unavailable, skipping to fallback: {e}")
            return self._find_last_seen_merchant(normalized) or normalized

        exact = self._find_exact_match(normalized, known)
        if exact is not None:
            return exact

        alias = self._find_alias_match(normalized)
        if alias is not None:
            return alias

        similar = self._find_similar_merchant(normalized, known)
        if similar is not None:
            return similar

        last_seen = self._find_last_seen_merchant(normalized)
        if last_seen is not None:
            return last_seen

        return normalized

    def learn_alias(self, raw_merchant: str, corrected_merchant: str) -> None:
        """Remember a user correction for the rest of this process.

        Durable aliases belong to the merchant store; this is only a hint.
        """
        key = normalize(raw_merchant)
        corrected = corrected_merchant.strip()
        if not key or not corrected:
            return
        self._alias_hints[key] = corrected
        logger.debug(f"Learned alias: '{key}' -> '{corrected}'")

    def _known_merchants(self) -> list[str] | None:
        """Merchants from storage, or None when no history is configured."""
        if self.history is None:
            return None
        return list(self.history.get_all_unique_merchants())

    def _find_exact_match(self, normalized: str, known: list[str] | None) -> str | None:
        if not known:
            return None
        for merchant in known:
            if normalize(merchant) == normalized:
                return merchant
        return None

    def _find_alias_match(self, normalized: str) -> str | None:
        if normalized in self._alias_hints:
            return self._alias_hints[normalized]

        for alias, name in self._aliases.items():
            if alias in normalized:
                return name
        return None

    def _find_similar_merchant(self, normalized: str, known: list[str] | None) -> str | None:
        if not known:
            return None
        keywords = extract_keywords(normalized)
        if len(keywords) < MIN_SHARED_KEYWORDS:
            return None
        for merchant in known:
            if len(keywords & extract_keywords(merchant)) >= MIN_SHARED_KEYWORDS:
                return merchant
        return None

    def _find_last_seen_merchant(self, normalized: str) -> str | None:
        # Extension point: would match against recently captured merchants
        return None
