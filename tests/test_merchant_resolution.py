"""
Merchant Resolution Tests

Tests for merchant normalization and the resolution strategy chain.
"""

import json
from unittest.mock import Mock

import pytest

from sms_parser.merchant_resolution import (
    MerchantResolutionEngine,
    extract_keywords,
    normalize,
)


class FakeHistory:
    """Merchant history backed by a plain list."""

    def __init__(self, merchants):
        self.merchants = merchants
        self.calls = 0

    def get_all_unique_merchants(self):
        self.calls += 1
        return self.merchants


class TestNormalization:
    """Tests for the normalization helpers."""

    def test_normalize(self):
        """Test uppercase, symbol stripping and whitespace collapse."""
        assert normalize("  zmt*order  ") == "ZMTORDER"
        assert normalize("Cafe   Coffee\tDay") == "CAFE COFFEE DAY"
        assert normalize("pay@#merchant") == "PAYMERCHANT"

    def test_normalize_symbols_only(self):
        """Test a string of stripped symbols normalizes to empty."""
        assert normalize("*#@") == ""

    def test_extract_keywords(self):
        """Test short tokens are dropped."""
        assert extract_keywords("Big Bazaar & Co Mumbai") == {"BIG", "BAZAAR", "MUMBAI"}


class TestMerchantResolutionEngine:
    """Tests for MerchantResolutionEngine."""

    @pytest.fixture
    def engine(self, config_dir):
        return MerchantResolutionEngine(config_dir=config_dir)

    @pytest.mark.parametrize("raw", [None, "", "   ", "*#@"])
    def test_blank_input(self, engine, raw):
        """Test blank or symbol-only input resolves to Unknown."""
        assert engine.resolve(raw) == "Unknown"

    def test_builtin_alias(self, engine):
        """Test gateway prefixes map to brand names."""
        assert engine.resolve("zmt*order") == "Zomato"
        assert engine.resolve("ZMT*ORDER 12345") == "Zomato"
        assert engine.resolve("AMAZON PAY INDIA") == "Amazon"
        assert engine.resolve("UBER TRIP") == "Uber"

    def test_configured_alias(self, engine):
        """Test aliases loaded from merchant_aliases.json."""
        assert engine.resolve("OLACABS MUMBAI") == "Ola"
        assert engine.resolve("grofers") == "Blinkit"

    def test_fallback_to_normalized(self, engine):
        """Test unmatched merchants come back normalized."""
        assert engine.resolve("XY2*RANDOM99") == "XY2RANDOM99"

    def test_exact_match_from_history(self, config_dir):
        """Test an exact normalized match returns the stored spelling."""
        history = FakeHistory(["Cafe Coffee Day"])
        engine = MerchantResolutionEngine(history=history, config_dir=config_dir)

        assert engine.resolve("cafe  coffee day") == "Cafe Coffee Day"

    def test_exact_match_beats_alias(self, config_dir):
        """Test stored merchants win over the alias table."""
        history = FakeHistory(["Swiggy Instamart"])
        engine = MerchantResolutionEngine(history=history, config_dir=config_dir)

        assert engine.resolve("SWIGGY INSTAMART") == "Swiggy Instamart"
        assert engine.resolve("SWIGGY") == "Swiggy"

    def test_similarity_match(self, config_dir):
        """Test two shared keywords select a stored merchant."""
        history = FakeHistory(["Big Bazaar Mumbai"])
        engine = MerchantResolutionEngine(history=history, config_dir=config_dir)

        assert engine.resolve("BIG BAZAAR MUMBAI 02") == "Big Bazaar Mumbai"

    def test_one_shared_keyword_is_not_enough(self, config_dir):
        """Test a single shared keyword does not match."""
        history = FakeHistory(["Big Bazaar Mumbai"])
        engine = MerchantResolutionEngine(history=history, config_dir=config_dir)

        assert engine.resolve("BIG TOYS") == "BIG TOYS"

    def test_history_fetched_once(self, config_dir):
        """Test history is queried once per resolution."""
        history = FakeHistory(["Big Bazaar Mumbai"])
        engine = MerchantResolutionEngine(history=history, config_dir=config_dir)

        engine.resolve("SOMETHING ELSE ENTIRELY")
        assert history.calls == 1

    def test_history_failure(self, config_dir):
        """Test a failing history source falls through to the normalized name."""
        history = Mock()
        history.get_all_unique_merchants.side_effect = RuntimeError("db locked")
        engine = MerchantResolutionEngine(history=history, config_dir=config_dir)

        assert engine.resolve("zmt*order") == "ZMTORDER"
        assert engine.resolve("Local Kirana") == "LOCAL KIRANA"

    def test_learn_alias(self, engine):
        """Test learned corrections take precedence over the alias table."""
        engine.learn_alias("ubr*ride", "Uber")
        engine.learn_alias("swiggy", "Swiggy Genie")

        assert engine.resolve("UBR*RIDE") == "Uber"
        assert engine.resolve("swiggy") == "Swiggy Genie"
        assert engine.alias_hints == {"UBRRIDE": "Uber", "SWIGGY": "Swiggy Genie"}

    def test_learn_alias_ignores_blank(self, engine):
        """Test blank corrections are ignored."""
        engine.learn_alias("  ", "Uber")
        engine.learn_alias("ubr", "   ")
        assert engine.alias_hints == {}

    def test_missing_aliases_file(self, tmp_path):
        """Test a missing aliases file falls back to built-in aliases."""
        engine = MerchantResolutionEngine(config_dir=tmp_path)

        assert engine.resolve("zmt*order") == "Zomato"
        assert engine.resolve("OLACABS") == "OLACABS"

    def test_custom_aliases_file(self, tmp_path):
        """Test aliases are read from the configured directory."""
        (tmp_path / "merchant_aliases.json").write_text(
            json.dumps({"aliases": {"DMART": "DMart", "ZMT": "Not Zomato"}})
        )
        engine = MerchantResolutionEngine(config_dir=tmp_path)

        assert engine.resolve("DMART THANE") == "DMart"
        # built-in aliases are not overridden
        assert engine.resolve("ZMT") == "Zomato"

    def test_malformed_aliases_file(self, tmp_path):
        """Test a malformed aliases file is logged and skipped."""
        (tmp_path / "merchant_aliases.json").write_text("{not json")
        engine = MerchantResolutionEngine(config_dir=tmp_path)

        assert engine.resolve("uber") == "Uber"

    def test_no_history_still_uses_aliases(self, config_dir):
        """Test an empty history does not disable the alias table."""
        engine = MerchantResolutionEngine(history=FakeHistory([]), config_dir=config_dir)
        assert engine.resolve("zmt*order") == "Zomato"
