"""Exceptions raised by the domain services."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from homestock.services.reconciliation import ReconciliationResult


class ReconciliationError(Exception):
    """Base class for reconciliation failures."""


class PersistenceFailure(ReconciliationError):
    """The store rejected a read or write during reconciliation.

    Deductions applied before the failure stay applied; they are available
    on `partial_result`.
    """

    def __init__(self, message: str, partial_result: "ReconciliationResult"):
        super().__init__(message)
        self.partial_result = partial_result
