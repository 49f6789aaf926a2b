"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from decimal import Decimal


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed, negative or empty input. Never retried."""


class InvalidQuantityError(ValidationError):
    """A movement quantity was zero, negative or not a number."""


class DuplicateSKUError(ValidationError):
    """An item with the same normalized SKU already exists at the location."""


class OpeningAlreadyRecordedError(ValidationError):
    """An OPENING movement was attempted on an item that already has history."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ItemNotFoundError(EntityNotFoundError):
    """The referenced item does not exist."""


class ItemArchivedError(DomainException):
    """The referenced item exists but has been archived."""


class InsufficientStockError(DomainException):
    """An outbound movement asked for more than is on hand.

    ``available`` is the on-hand quantity the check was evaluated against,
    so callers can offer a corrected amount.
    """

    def __init__(self, item_name: str, requested: Decimal, available: Decimal) -> None:
        self.item_name = item_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {item_name} "
            f"(need {requested}, have {available} available)"
        )


class ConcurrencyConflictError(DomainException):
    """The item's history changed between read and append. Safe to retry."""


class LedgerIntegrityError(DomainException):
    """A movement history violates the ledger invariants on replay."""
