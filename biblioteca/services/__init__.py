"""Services Layer — imperative shell around core rules and the database.

Invariants:
    - Each service owns one AsyncSession for the duration of a request
    - Services raise core/errors.py types; routes never translate errors themselves
"""
