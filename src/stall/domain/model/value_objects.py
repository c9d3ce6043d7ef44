"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from stall.domain.exceptions import ValidationError

_SYMBOLS = {"JPY": "¥", "USD": "$"}


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Stall prices are whole yen, but the amount is still a Decimal so
    totals never pick up floating-point noise.
    """

    amount: Decimal
    currency: str = "JPY"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    def __add__(self, other: Money) -> Money:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )
        return Money(self.amount + other.amount, self.currency)

    def __str__(self) -> str:
        symbol = _SYMBOLS.get(self.currency, f"{self.currency} ")
        if self.currency == "JPY":
            return f"{symbol}{self.amount:.0f}"
        return f"{symbol}{self.amount:.2f}"

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "JPY") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = "JPY") -> Money:
        return Money(Decimal("0"), currency)
