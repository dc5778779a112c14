"""Money and Currency value types.

``Money`` pairs a ``Decimal`` amount with a ``Currency``; the two are never
separated. Arithmetic between amounts of different currencies is rejected,
and any decimal overflow or invalid operation is reported to the caller
instead of being silently saturated.
"""

import decimal
from contextlib import contextmanager
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Union

from pydantic import field_validator

from clinvoice_schema.exceptions import CurrencyMismatchError, MonetaryArithmeticError
from clinvoice_schema.models.base import BaseDataModel

if TYPE_CHECKING:
    from clinvoice_schema.exchange.rates import ExchangeRates

CANONICAL_SCALE = 2
"""Number of fractional digits every returned total is rescaled to."""


class Currency(str, Enum):
    """ISO 4217 codes of the currencies quoted by the ECB reference rates."""

    AUD = "AUD"
    BGN = "BGN"
    BRL = "BRL"
    CAD = "CAD"
    CHF = "CHF"
    CNY = "CNY"
    CZK = "CZK"
    DKK = "DKK"
    EUR = "EUR"
    GBP = "GBP"
    HKD = "HKD"
    HRK = "HRK"
    HUF = "HUF"
    IDR = "IDR"
    ILS = "ILS"
    INR = "INR"
    ISK = "ISK"
    JPY = "JPY"
    KRW = "KRW"
    MXN = "MXN"
    MYR = "MYR"
    NOK = "NOK"
    NZD = "NZD"
    PHP = "PHP"
    PLN = "PLN"
    RON = "RON"
    RUB = "RUB"
    SEK = "SEK"
    SGD = "SGD"
    THB = "THB"
    TRY = "TRY"
    USD = "USD"
    ZAR = "ZAR"

    def __str__(self) -> str:
        return self.value


@contextmanager
def guarded_arithmetic() -> Iterator[None]:
    """Turn decimal signals (overflow, invalid operation) into schema errors."""
    try:
        yield
    except decimal.DecimalException as e:
        raise MonetaryArithmeticError(
            f"Monetary value cannot be represented: {type(e).__name__}"
        ) from e


class Money(BaseDataModel):
    """An amount of some currency.

    Attributes:
        amount: Arbitrary-precision decimal amount
        currency: Currency the amount is denominated in

    Example:
        >>> price = Money(amount="20.00", currency=Currency.USD)
        >>> str(price + Money(amount="5", currency=Currency.USD))
        '25.00 USD'
        >>> str((price * Decimal("0.5")).rescale())
        '10.00 USD'
    """

    amount: Decimal
    currency: Currency

    @field_validator("amount", mode="before")
    @classmethod
    def convert_to_decimal(cls, v: Union[str, int, float, Decimal]) -> Decimal:
        """Convert numeric values to Decimal for precision.

        Floats are converted through ``str`` so that binary representation
        noise never enters an amount.

        Raises:
            ValueError: If the value cannot be converted or is not finite
        """
        if isinstance(v, float):
            v = str(v)
        try:
            amount = v if isinstance(v, Decimal) else Decimal(v)
        except (decimal.InvalidOperation, ValueError, TypeError) as e:
            raise ValueError(f"Cannot convert {v!r} to Decimal: {e}")
        if not amount.is_finite():
            raise ValueError(f"Amount must be finite, got {amount}")
        return amount

    @classmethod
    def zero(cls, currency: Currency) -> "Money":
        """Create a zero amount in the given currency."""
        return cls(amount=Decimal(0), currency=currency)

    @classmethod
    def parse(cls, text: str) -> "Money":
        """Parse the ``"<amount> <CODE>"`` form produced by ``str(Money)``.

        Example:
            >>> Money.parse("20.00 USD").amount
            Decimal('20.00')
        """
        parts = text.split()
        if len(parts) != 2:
            raise ValueError(f"Expected '<amount> <currency>', got {text!r}")
        return cls(amount=parts[0], currency=Currency(parts[1].upper()))

    def _check_currency(self, other: "Money") -> None:
        if other.currency != self.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        with guarded_arithmetic():
            return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        with guarded_arithmetic():
            return Money(amount=self.amount - other.amount, currency=self.currency)

    def __mul__(self, factor: Union[Decimal, int]) -> "Money":
        if not isinstance(factor, (Decimal, int)) or isinstance(factor, bool):
            return NotImplemented
        with guarded_arithmetic():
            return Money(amount=self.amount * factor, currency=self.currency)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"{self.amount} {self.currency.value}"

    def rescale(self, places: int = CANONICAL_SCALE) -> "Money":
        """Round the amount to exactly ``places`` fractional digits (half up)."""
        with guarded_arithmetic():
            amount = self.amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
        return Money(amount=amount, currency=self.currency)

    def exchange(self, currency: Currency, rates: "ExchangeRates") -> "Money":
        """Convert this amount into ``currency`` using ``rates``.

        An amount already in ``currency`` is returned unchanged. No rescale is
        applied; callers rescale final totals.

        Raises:
            UnresolvableRateError: If ``rates`` has no rate for either currency
            MonetaryArithmeticError: If the converted amount cannot be represented
        """
        if self.currency == currency:
            return self
        factor = rates.factor(self.currency, currency)
        with guarded_arithmetic():
            return Money(amount=self.amount * factor, currency=currency)
