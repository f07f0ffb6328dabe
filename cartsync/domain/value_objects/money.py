"""
Money value object

Represents monetary amounts with currency handling.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class Money:
    """
    Money value object that handles currency amounts properly

    Amounts are always quantized to two decimal places so that totals
    computed from line items compare exactly.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        """Validate money object on creation"""
        if isinstance(self.amount, bool):
            raise TypeError("Money amount cannot be a boolean")
        if not isinstance(self.amount, Decimal):
            # Convert to Decimal for precise currency calculations
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        if not self.amount.is_finite():
            raise ValueError("Money amount must be a finite number")

        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

        if not self.currency or len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter code")

        rounded_amount = self.amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
        object.__setattr__(self, 'amount', rounded_amount)
        object.__setattr__(self, 'currency', self.currency.upper())

    @classmethod
    def of(cls, amount: Union[int, float, str, Decimal], currency: str = DEFAULT_CURRENCY) -> 'Money':
        """Create Money from any numeric representation"""
        return cls(Decimal(str(amount)), currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> 'Money':
        """Create zero money amount"""
        return cls(Decimal('0'), currency)

    @classmethod
    def sum(cls, amounts: Iterable['Money'], currency: str = DEFAULT_CURRENCY) -> 'Money':
        """Sum money amounts, zero for an empty iterable"""
        total = cls.zero(currency)
        for amount in amounts:
            total = total.add(amount)
        return total

    def add(self, other: 'Money') -> 'Money':
        """Add two money amounts"""
        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def multiply(self, factor: Union[int, Decimal]) -> 'Money':
        """Multiply money by a factor"""
        if not isinstance(factor, Decimal):
            factor = Decimal(str(factor))
        if factor < 0:
            raise ValueError("Cannot multiply money by negative factor")
        return Money(self.amount * factor, self.currency)

    def is_zero(self) -> bool:
        """Check if amount is zero"""
        return self.amount == Decimal('0')

    def to_string(self) -> str:
        """Plain decimal string used for persistence"""
        return format(self.amount, 'f')

    def format_display(self) -> str:
        """Format for display to users"""
        return f"{self.amount:.2f} {self.currency}"

    def __str__(self) -> str:
        return self.format_display()

    def __repr__(self) -> str:
        return f"Money(amount={self.amount}, currency='{self.currency}')"

    def __lt__(self, other: 'Money') -> bool:
        if self.currency != other.currency:
            raise ValueError(f"Cannot compare different currencies: {self.currency} and {other.currency}")
        return self.amount < other.amount

    def __gt__(self, other: 'Money') -> bool:
        if self.currency != other.currency:
            raise ValueError(f"Cannot compare different currencies: {self.currency} and {other.currency}")
        return self.amount > other.amount

    def __add__(self, other: 'Money') -> 'Money':
        """Add two money amounts using + operator"""
        return self.add(other)

    def __mul__(self, factor: Union[int, Decimal]) -> 'Money':
        """Multiply money by a factor using * operator"""
        return self.multiply(factor)

    def __rmul__(self, factor: Union[int, Decimal]) -> 'Money':
        """Reverse multiply for factor * money"""
        return self.multiply(factor)
