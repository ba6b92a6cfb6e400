"""Rental Enforcement — pure rules of the borrowed -> returned state machine.

Invariants:
    - A rental starts BORROWED and moves to RETURNED exactly once
    - Stock rules (quantity <= available copies) are NOT checked here: the shell
      applies them as a conditional UPDATE so they hold under concurrency
"""

from biblioteca.core.domain_types import RentalStatus
from biblioteca.core.errors import AlreadyReturnedError


INITIAL_STATUS: RentalStatus = RentalStatus.BORROWED


def check_returnable(status: str, rental_id: str) -> None:
    """Raise AlreadyReturnedError if the rental has left the BORROWED state."""
    if RentalStatus(status) is RentalStatus.RETURNED:
        raise AlreadyReturnedError(rental_id)


def is_outstanding(status: str) -> bool:
    return RentalStatus(status) is RentalStatus.BORROWED
