"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from turfledger.domain.exceptions import InvalidQuantityError, ValidationError

ZERO = Decimal("0")


def to_decimal(value: str | float | int | Decimal, field_name: str) -> Decimal:
    """Coerce user input to a finite Decimal or raise ValidationError."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid {field_name}: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    return result


def format_quantity(value: Decimal) -> str:
    """Render a quantity without exponent or trailing zeros (``12.50`` -> ``12.5``)."""
    if value == value.to_integral_value():
        return str(value.quantize(Decimal("1")))
    return format(value.normalize(), "f")


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount in the venue's currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in valuation.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < ZERO:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: Decimal | int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (Decimal, int)):
            raise TypeError(
                f"Can only multiply Money by Decimal or int, got {type(factor).__name__}"
            )
        return Money(self.amount * factor)

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        return self.amount <= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(ZERO)

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        return Money(to_decimal(amount, "money amount"))


@dataclass(frozen=True)
class Quantity:
    """A strictly positive decimal quantity of stock.

    Enforces the invariant that no movement can carry zero or negative units.
    Units are free-form (pcs, kg, liters) so fractional values are allowed.
    """

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise InvalidQuantityError(
                f"Quantity must be a Decimal, got {type(self.value).__name__}"
            )
        if not self.value.is_finite() or self.value <= ZERO:
            raise InvalidQuantityError("Quantity must be greater than zero")

    def __str__(self) -> str:
        return format_quantity(self.value)

    @staticmethod
    def of(value: str | float | int | Decimal) -> Quantity:
        try:
            return Quantity(to_decimal(value, "quantity"))
        except InvalidQuantityError:
            raise
        except ValidationError as exc:
            raise InvalidQuantityError(str(exc)) from exc
