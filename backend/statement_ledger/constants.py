"""Regexes and fixed vocabularies shared by the parser modules."""

import re

MONTH_NUMBERS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}
FULL_MONTHS = (
    "January|February|March|April|May|June|July|August|September|October|"
    "November|December"
)

# Full date tokens, tried in this order.
DAY_MONTH_YEAR_RX = re.compile(
    r"(?P<day>\d{1,2})\s+(?P<month>[A-Za-z]{3,9})\s+(?P<year>\d{4})"
)
DMY_SLASH_RX = re.compile(r"(?P<day>\d{1,2})/(?P<month>\d{1,2})/(?P<year>\d{4})")
ISO_DATE_RX = re.compile(r"(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})")

# Partial tokens resolved against the current month header.
DAY_MONTH_RX = re.compile(r"(?P<day>\d{1,2})\s+(?P<month>[A-Za-z]{3,9})")
DAY_ONLY_RX = re.compile(r"(?P<day>\d{1,2})")

TIME_PART = r"\d{1,2}:\d{2}(?::\d{2})?"
_ANCHOR_TAIL = rf"(?:\s+{TIME_PART})?(?:\s+(?P<rest>.+))?$"

DATE_ANCHOR_RXS = (
    re.compile(rf"^(?P<date>\d{{1,2}}\s+[A-Za-z]{{3,9}}\s+\d{{4}}){_ANCHOR_TAIL}"),
    re.compile(rf"^(?P<date>\d{{1,2}}/\d{{1,2}}/\d{{4}}){_ANCHOR_TAIL}"),
    re.compile(rf"^(?P<date>\d{{4}}-\d{{1,2}}-\d{{1,2}}){_ANCHOR_TAIL}"),
)
PARTIAL_ANCHOR_RXS = (
    re.compile(
        rf"^(?P<date>\d{{1,2}}\s+[A-Za-z]{{3,9}})(?!\s+\d{{4}}\b){_ANCHOR_TAIL}"
    ),
    re.compile(rf"^(?P<date>\d{{1,2}})\s+{TIME_PART}(?:\s+(?P<rest>.+))?$"),
)

MONTH_HEADER_RX = re.compile(
    rf"^(?P<month>{FULL_MONTHS})\s+(?P<year>\d{{4}})$", re.IGNORECASE
)

CURRENCY_PREFIX_RX = re.compile(r"^(?:Rp\.?|IDR|USD|EUR|\$|€|£)\s*", re.IGNORECASE)
NUMBER_BODY_RX = re.compile(r"\d(?:[\d.,]*\d)?")
MONEY_HINT_RX = re.compile(r"[+\-(),.$€£]|^(?:Rp|IDR)", re.IGNORECASE)
SIGN_PREFIXED_TOKEN_RX = re.compile(r"^[+-]\S*$")

# Column titles and page boilerplate that never carry transaction data.
HEADER_NOISE_RX = [
    re.compile(r"^date\s*(?:&|and)\s*time\b", re.IGNORECASE),
    re.compile(r"^source\s*/\s*destination\b", re.IGNORECASE),
    re.compile(r"^transaction\s+details?$", re.IGNORECASE),
    re.compile(
        r"^(?:date|time|notes?|amount|balance|description|details)$", re.IGNORECASE
    ),
    re.compile(r"^date\s+description\b.*\b(?:amount|balance)$", re.IGNORECASE),
    re.compile(r"^page\s+\d+(?:\s*(?:of|/)\s*\d+)?$", re.IGNORECASE),
    re.compile(r"^(?:account\s+statement|statement\s+period|printed\s+on)\b", re.IGNORECASE),
    re.compile(r"^(?:this|the)\s+(?:document|statement)\s+is\b", re.IGNORECASE),
]

BALANCE_MARKER_RX = re.compile(
    r"^(?:(?:beginning|opening|ending|closing)\s+balance|balance\s+forward)\b",
    re.IGNORECASE,
)

# Detail-line vocabulary used by content sniffing.
DETAIL_VOCAB_RX = re.compile(
    r"\b(?:transfers?|payments?|deposits?|withdrawals?|interest|tax)\b", re.IGNORECASE
)
TIME_ONLY_RX = re.compile(rf"^{TIME_PART}(?:\s*(?:AM|PM|WIB|UTC))?$", re.IGNORECASE)
