"""
Pytest configuration and fixtures for SMS parser tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

sys.path.insert(0, str(PROJECT_ROOT / "python"))
os.environ.setdefault("SMS_PARSER_CONFIG_DIR", str(PROJECT_ROOT / "config"))

# Fixed reference time: 2023-11-14T22:13:20Z
NOW_MILLIS = 1_700_000_000_000
DAY_MILLIS = 24 * 60 * 60 * 1000


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def config_dir() -> Path:
    """Return the config directory path."""
    return PROJECT_ROOT / "config"


@pytest.fixture
def now_millis() -> int:
    """Return the fixed reference time in epoch milliseconds."""
    return NOW_MILLIS


@pytest.fixture
def swiggy_sms() -> str:
    """A plain UPI debit alert."""
    return "Rs.250 debited from A/c XX1234 to SWIGGY via UPI"


@pytest.fixture
def zomato_sms() -> str:
    """A UPI debit alert with a gateway-coded merchant."""
    return "Rs.500.00 debited from A/c XX1234 on 01-01-24 via UPI to ZMT*ORDER"


@pytest.fixture
def otp_sms() -> str:
    """A one-time-password message."""
    return "Your OTP is 482910, valid for 10 minutes"


@pytest.fixture
def promo_sms() -> str:
    """A marketing message."""
    return "Flat 20% cashback on your next order, click here!"


@pytest.fixture
def noise_messages() -> list[str]:
    """Messages that must never become transactions."""
    return [
        "Your OTP is 482910, valid for 10 minutes",
        "Flat 20% cashback on your next order, click here!",
        "OTP 482910 for your transaction on HDFC card. Valid for 10 minutes",
        "Transaction failed: Rs.500 could not be debited from A/c XX1234",
        "UPI payment of Rs.500 to SWIGGY failed",
        "Your card transaction of Rs 500 at AMAZON was declined",
        "Rs.500 debit from A/c XX1234 to ZOMATO failed due to technical error",
        "Available balance in your A/c XX1234 is Rs 10,500.00 as on 01-Jan",
        "Your credit limit has been increased to Rs 2,00,000 on card XX5678",
        "",
        "   ",
    ]
