"""Subcategory Enforcement — positional edits on a category's subcategory list.

Invariants:
    - All functions are PURE: they return a new list, the input is never mutated
    - Index-based edits require 0 <= index < len(subcategories), else OutOfRangeError
    - Negative indexes are rejected (no Python-style counting from the end)

Design Decisions:
    - Returning a fresh list lets the shell assign it to a JSON column, which
      SQLAlchemy only flags as dirty on reassignment
"""

from biblioteca.core.errors import OutOfRangeError


def check_index_in_range(subcategories: list[str], index: int) -> None:
    """Raise OutOfRangeError unless index addresses an existing entry."""
    if index < 0 or index >= len(subcategories):
        raise OutOfRangeError(index, len(subcategories))


def append_subcategory(subcategories: list[str] | None, name: str) -> list[str]:
    return [*(subcategories or []), name]


def replace_subcategory(
    subcategories: list[str], index: int, name: str,
) -> list[str]:
    """Return a copy with the entry at index replaced by name."""
    check_index_in_range(subcategories, index)
    updated = list(subcategories)
    updated[index] = name
    return updated


def remove_subcategory(subcategories: list[str], index: int) -> list[str]:
    """Return a copy without the entry at index."""
    check_index_in_range(subcategories, index)
    return subcategories[:index] + subcategories[index + 1:]
