"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Book is the aggregate root for Rental; Category, Author and User stand alone

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from biblioteca.models.book import Book  # noqa: F401
from biblioteca.models.rental import Rental  # noqa: F401
from biblioteca.models.category import Category  # noqa: F401
from biblioteca.models.author import Author  # noqa: F401
from biblioteca.models.user import User  # noqa: F401
