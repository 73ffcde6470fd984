"""
Pattern Library

Compiled regular expressions and keyword tables used by the validation gate
and the extraction stages. Everything here is built once at import time and
only ever read afterwards.
"""

import re

# Amount capture: a leading digit, then digits with thousands separators and
# an optional decimal part.
_NUMBER = r"(\d[\d,]*(?:\.\d{1,2})?)"
_LOOSE_NUMBER = r"(\d[\d,.]*)"
_CURRENCY = r"(?:\bRs\.?|\bINR|₹)"

# Digits that are not the tail of a masked account number or a decimal part
_STANDALONE = r"(?<![\w,])(?<!\d\.)"


def _bank_family(bank: str) -> list[re.Pattern]:
    """Amount patterns anchored on a bank name appearing earlier in the text."""
    return [
        re.compile(
            rf"{bank}.*?{_STANDALONE}{_NUMBER}\s*(?:is\s+|has\s+been\s+)?(?:debited|credited)",
            re.IGNORECASE | re.DOTALL,
        ),
        re.compile(
            rf"{bank}.*?(?:debited|credited)\s+(?:for|with|by)\s+{_CURRENCY}\s*{_NUMBER}",
            re.IGNORECASE | re.DOTALL,
        ),
    ]


# Bank-specific families are tried before the generic patterns
BANK_AMOUNT_PATTERNS: dict[str, list[re.Pattern]] = {
    "HDFC": _bank_family("HDFC"),
    "ICICI": _bank_family("ICICI"),
    "SBI": _bank_family(r"\bSBI"),
    "AXIS": _bank_family("AXIS"),
}

GENERIC_AMOUNT_PATTERNS: list[re.Pattern] = [
    # Rs. 500, Rs 500, Rs.500
    re.compile(rf"\bRs\.?\s?{_LOOSE_NUMBER}", re.IGNORECASE),
    # INR 500, INR500
    re.compile(rf"\bINR\s?{_LOOSE_NUMBER}", re.IGNORECASE),
    # ₹ 500, ₹500
    re.compile(rf"₹\s?{_LOOSE_NUMBER}"),
    # 500 Rs, 500 INR
    re.compile(rf"{_LOOSE_NUMBER}\s*(?:Rs\.?|INR|₹)", re.IGNORECASE),
    # debited Rs 500, paid 500
    re.compile(
        rf"(?:debited|credited|paid|spent)\s*(?:{_CURRENCY})?\s*{_LOOSE_NUMBER}",
        re.IGNORECASE,
    ),
    # 500 debited
    re.compile(rf"{_LOOSE_NUMBER}\s*(?:debited|credited|paid|spent)", re.IGNORECASE),
    # Strict two-decimal fallbacks
    re.compile(rf"{_CURRENCY}\s*([\d,]+(?:\.\d{{2}})?)", re.IGNORECASE),
    re.compile(r"([\d,]+(?:\.\d{2})?)\s*(?:Rs\.?|INR|₹)", re.IGNORECASE),
]

# Direction keywords, matched as plain substrings of the lowercased text
DEBIT_KEYWORDS = (
    "debited", "spent", "paid", "withdrawn", "deducted", "charged", "purchase",
)
CREDIT_KEYWORDS = (
    "credited", "received", "deposited", "refunded", "reversed", "salary",
)

# Payment channel keywords, checked in priority order UPI > CARD > BANK
UPI_KEYWORDS = ("upi", "gpay", "phonepe", "paytm", "bhim", "google pay")
CARD_KEYWORDS = ("card", "visa", "mastercard", "rupay", "debit card", "credit card")
BANK_KEYWORDS = ("neft", "imps", "rtgs", "transfer", "bank", "ach")

# Merchant capture
_NAME = r"([A-Z][A-Z\s&]+)"
MERCHANT_PATTERNS: list[re.Pattern] = [
    re.compile(rf"\b(?:at|from|to|via)\s+{_NAME}", re.IGNORECASE),
    re.compile(rf"\b(?:merchant|vendor|payee):\s*{_NAME}", re.IGNORECASE),
]
UPI_MERCHANT_PATTERN = re.compile(rf"\bUPI\s+{_NAME}", re.IGNORECASE)

# Sender codes seen in SMS headers, in lookup order
SENDER_CLASSIFICATION: dict[str, float] = {
    "HDFCBK": 0.95,
    "ICICIB": 0.95,
    "SBIBMS": 0.95,
    "AXISBK": 0.95,
    "KOTAKB": 0.95,
    "PNB": 0.90,
    "BOI": 0.90,
    "AMZNIN": 0.80,  # Amazon Pay
    "PAYTM": 0.85,
    "PHONEPE": 0.85,
    "GPAY": 0.85,
}
UNKNOWN_SENDER_CONFIDENCE = 0.30

ACCOUNT_HINT_PATTERNS: list[re.Pattern] = [
    re.compile(r"\b(?:A/c|Acct|Account)\s*(?:No\.?\s*)?[*Xx]*(\d{3,})", re.IGNORECASE),
    re.compile(r"\b(Savings|Current|Credit)\s+(?:A/c|Account)", re.IGNORECASE),
]
BANK_NAME_PATTERN = re.compile(r"\b(HDFC|ICICI|SBI|AXIS|KOTAK|PNB|BOI)\b", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Validation gate
# ---------------------------------------------------------------------------

TRANSACTION_VERBS = (
    "credited", "debited", "paid", "received", "spent", "refunded",
    "transferred", "transfer", "withdrawn", "deducted", "deposited",
    "reversed", "charged", "purchase", "swiped",
    # wallets
    "gpay", "google pay", "phonepe", "paytm", "bhim", "amazon pay",
)

RAIL_KEYWORD_PATTERN = re.compile(
    r"\b(?:upi|imps|neft|rtgs|ach|pos|atm|card|wallet|account|a/c)\b",
    re.IGNORECASE,
)

STRONG_TRANSACTION_VERBS = (
    "credited", "debited", "paid", "received", "spent", "charged",
    "withdrawn", "deducted", "deposited", "transferred", "refunded",
    "purchase",
)

OTP_PATTERNS: list[re.Pattern] = [
    re.compile(r"\b(?:otp|verification code|one time password)\s*[.:]?\s*\d{4,8}\b", re.IGNORECASE),
    re.compile(r"\b(?:otp|code)\s+(?:is|:)\s*\d{4,8}\b", re.IGNORECASE),
    re.compile(r"\b\d{4,8}\s*(?:is|as)\s*(?:your|the)\s*(?:otp|code)\b", re.IGNORECASE),
    re.compile(r"\b(?:use|enter)\s*(?:otp|code)\s*\d{4,8}\b", re.IGNORECASE),
    re.compile(r"\bvalid\s*(?:for|only)\s*\d+\s*(?:min|mins|minutes)\b", re.IGNORECASE),
]

FAILED_PATTERNS: list[re.Pattern] = [
    re.compile(r"\b(?:transaction|payment|transfer|txn)\s*(?:has\s+)?(?:failed|declined|unsuccessful|could not)\b", re.IGNORECASE),
    re.compile(r"\b(?:failed|declined|unsuccessful)\s*(?:transaction|payment|txn)\b", re.IGNORECASE),
    re.compile(r"\b(?:transaction|payment|transfer|txn)\s+(?:\w+\s+){0,2}reversed\b", re.IGNORECASE),
    # Status word after the amount and payee: "payment of Rs 500 to X failed"
    re.compile(
        r"\b(?:transaction|payment|transfer|txn|debit)\b.{0,60}?"
        r"\b(?:failed|declined|unsuccessful|could not be processed|was not successful)\b",
        re.IGNORECASE | re.DOTALL,
    ),
    re.compile(r"\b(?:insufficient|not enough)\s*(?:balance|funds)\b", re.IGNORECASE),
    re.compile(r"\b(?:invalid|incorrect)\s*(?:otp|pin|password|cvv)\b", re.IGNORECASE),
]

PROMO_PATTERNS: list[re.Pattern] = [
    re.compile(r"\b(?:offer|discount|promo|cashback|reward)s?\s*(?:on|for|get)\b", re.IGNORECASE),
    re.compile(r"\b(?:click here|register now|act now|limited time|apply now)\b", re.IGNORECASE),
    re.compile(r"\b(?:unsubscribe|stop|reply)\s*(?:to\s*)?(?:opt\s*out|stop)\b", re.IGNORECASE),
]

ACCOUNT_ALERT_PATTERNS: list[re.Pattern] = [
    re.compile(r"\b(?:credit\s*)?limit\s*(?:has\s+been\s+)?(?:increased|decreased|revised|enhanced|alert)\b", re.IGNORECASE),
    re.compile(r"\b(?:spend|usage)\s*(?:limit|alert)\b", re.IGNORECASE),
    re.compile(r"\bstatement\s+(?:is\s+|has\s+been\s+)?(?:ready|generated|available|sent)\b", re.IGNORECASE),
    re.compile(r"\b(?:monthly|quarterly|periodic|e-?)\s*statement\b", re.IGNORECASE),
]

BALANCE_PATTERNS: list[re.Pattern] = [
    re.compile(r"\b(?:avl|avail|available|total|current|closing|ledger)?\.?\s*bal(?:ance)?\b", re.IGNORECASE),
]
