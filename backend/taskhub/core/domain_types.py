"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RecordId is a positive int no larger than MAX_RECORD_ID; 0 and negatives never address a record
    - All configurable modes encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: pydantic-settings coerces env values into them directly
"""

import re
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", int)


# ─── Enums ───────────────────────────────────────────────────────

class IdStrategy(str, Enum):
    """How a collection maps identifiers to stored records."""
    KEYED = "keyed"            # counter + mapping, ids survive deletes
    POSITIONAL = "positional"  # id == 1-based position, deletes re-index


class AuthBackend(str, Enum):
    """Which external authority resolves bearer credentials."""
    JWT = "jwt"
    USERINFO = "userinfo"


# ─── Parsing ─────────────────────────────────────────────────────

_ID_PATTERN = re.compile(r"([+-]?)([0-9]+)")
MAX_RECORD_ID = 2**63 - 1
_MAX_ID_DIGITS = len(str(MAX_RECORD_ID))


def parse_record_id(raw: str) -> RecordId | None:
    """Parse a path segment into a RecordId.

    Returns None for anything that is not an optionally signed run of ASCII
    digits, or whose value is below 1 or above MAX_RECORD_ID (a signed 64-bit
    integer). Callers turn None into a not-found error.
    """
    match = _ID_PATTERN.fullmatch(raw)
    if match is None:
        return None
    sign, digits = match.group(1), match.group(2).lstrip("0")
    if sign == "-" or not digits or len(digits) > _MAX_ID_DIGITS:
        return None
    value = int(digits)
    if value > MAX_RECORD_ID:
        return None
    return RecordId(value)
