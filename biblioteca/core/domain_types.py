"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - BookId, RentalId, UserId wrap UUIDs — never use bare UUID in domain logic
    - Rental status is encoded as an Enum — no raw string matching
    - Copy counts never exceed MAX_COPIES (the INTEGER column limit)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and store in String columns without converters
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

BookId = NewType("BookId", UUID)
RentalId = NewType("RentalId", UUID)
UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class RentalStatus(str, Enum):
    """Rental lifecycle states — maps to DB `status` column.

    The only transition is BORROWED -> RETURNED.
    """
    BORROWED = "borrowed"
    RETURNED = "returned"


# ─── Limits ──────────────────────────────────────────────────────

# Upper bound of the INTEGER copy-count columns
MAX_COPIES = 2_147_483_647
