"""
status_codes.py
---------------
Matching of HTTP status codes against comma-separated patterns such as
"200,201" or "4xx,5xx". Each entry is a literal three-digit code or an
`Nxx` class wildcard.
"""
from typing import List

DEFAULT_STATUS_CODE_COMPLETION = "1xx,2xx"
DEFAULT_STATUS_CODE_FAILURE = "3xx,4xx,5xx"


def parse_pattern(pattern: str) -> List[str]:
    return [entry.strip().lower() for entry in pattern.split(",") if entry.strip()]


def matches_entry(status_code: int, entry: str) -> bool:
    code = str(status_code)
    if len(entry) == 3 and entry.endswith("xx"):
        return code[:1] == entry[:1]
    return code == entry


def matches(status_code: int, pattern: str) -> bool:
    return any(matches_entry(status_code, entry) for entry in parse_pattern(pattern))
