"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from ordercore.domain.exceptions import (
    CurrencyMismatch,
    InvalidQuantity,
    InvalidWeight,
    ValidationError,
)

DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True, order=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Ordering compares
    ``(amount, currency)``; arithmetic requires matching currencies.

    The amount itself may be negative (e.g. a bad delivery cost coming
    from a caller).  Where a sign matters, the use site enforces it.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if not isinstance(self.currency, str) or len(self.currency) != 3:
            raise ValidationError(
                f"Currency must be a 3-letter code, got {self.currency!r}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        if self.currency == "USD":
            return f"${self.amount:.2f}"
        return f"{self.amount:.2f} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatch(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidQuantity(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise InvalidQuantity(f"Quantity must be at least 1, got {self.value}")

    def __add__(self, other: Quantity) -> Quantity:
        return Quantity(self.value + other.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class Weight:
    """A non-negative weight in kilograms."""

    kilograms: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.kilograms, Decimal) or not self.kilograms.is_finite():
            raise InvalidWeight(f"Weight must be a finite Decimal, got {self.kilograms!r}")
        if self.kilograms < 0:
            raise InvalidWeight(f"Weight cannot be negative, got {self.kilograms}")

    def __add__(self, other: Weight) -> Weight:
        return Weight(self.kilograms + other.kilograms)

    def __mul__(self, factor: int) -> Weight:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Weight by int, got {type(factor).__name__}")
        return Weight(self.kilograms * factor)

    def __str__(self) -> str:
        return f"{self.kilograms} kg"

    @staticmethod
    def of(kilograms: str | float | int | Decimal) -> Weight:
        try:
            return Weight(Decimal(str(kilograms)))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidWeight(f"Invalid weight: {kilograms!r}") from exc

    @staticmethod
    def zero() -> Weight:
        return Weight(Decimal("0"))
