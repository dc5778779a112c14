"""Exchange rate tables.

An ``ExchangeRates`` table maps each currency to the number of units of that
currency which one unit of the ``base`` currency buys. Conversion factors
between any two quoted currencies are derived from it.

Tables are plain values: parsing the European Central Bank reference-rate CSV
layout is supported, fetching it is left to the caller.
"""

import bisect
import csv
import datetime as dt
import io
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Tuple, Union

from pydantic import Field, field_validator, model_validator

from clinvoice_schema.exceptions import (
    CurrencyError,
    ExchangeRateParseError,
    UnresolvableRateError,
)
from clinvoice_schema.models.base import BaseDataModel
from clinvoice_schema.models.money import Currency, guarded_arithmetic

logger = logging.getLogger(__name__)

ECB_DATE_FORMATS = ("%d %B %Y", "%Y-%m-%d")
ECB_MISSING_VALUES = {"", "N/A"}


class ExchangeRates(BaseDataModel):
    """Conversion rates relative to a base currency, as of some date.

    Attributes:
        base: The currency every rate is quoted against
        date: The date the rates were published, if known
        rates: Units of each currency per one unit of ``base``

    Example:
        >>> rates = ExchangeRates(rates={Currency.USD: "1.10", Currency.GBP: "0.88"})
        >>> rates.factor(Currency.EUR, Currency.USD)
        Decimal('1.10')
        >>> rates.factor(Currency.USD, Currency.GBP)
        Decimal('0.8')
    """

    base: Currency = Field(Currency.EUR, description="Currency rates are quoted against")
    date: Optional[dt.date] = Field(None, description="Publication date of the rates")
    rates: Dict[Currency, Decimal] = Field(default_factory=dict)

    @field_validator("rates")
    @classmethod
    def validate_positive(cls, v: Dict[Currency, Decimal]) -> Dict[Currency, Decimal]:
        for currency, rate in v.items():
            if not rate.is_finite() or rate <= 0:
                raise ValueError(f"Rate for {currency} must be positive, got {rate}")
        return v

    @model_validator(mode="after")
    def validate_base_rate(self) -> "ExchangeRates":
        base_rate = self.rates.get(self.base)
        if base_rate is not None and base_rate != 1:
            raise ValueError(f"Rate for base currency {self.base} must be 1, got {base_rate}")
        return self

    def __contains__(self, currency: object) -> bool:
        return currency == self.base or currency in self.rates

    def __hash__(self) -> int:
        return hash((self.base, self.date, frozenset(self.rates.items())))

    def rate(self, currency: Currency) -> Decimal:
        """Get the units of ``currency`` per one unit of the base currency.

        Raises:
            UnresolvableRateError: If ``currency`` is not quoted in this table
        """
        if currency == self.base:
            return Decimal(1)
        try:
            return self.rates[currency]
        except KeyError:
            raise UnresolvableRateError(self.base, currency, self.date) from None

    def factor(self, from_currency: Currency, to_currency: Currency) -> Decimal:
        """Get the multiplier which converts ``from_currency`` into ``to_currency``.

        Raises:
            UnresolvableRateError: If either currency is not quoted in this table
        """
        if from_currency == to_currency:
            return Decimal(1)
        if from_currency not in self or to_currency not in self:
            logger.error(
                f"No exchange rate for {from_currency}/{to_currency} "
                f"in table dated {self.date}"
            )
            raise UnresolvableRateError(from_currency, to_currency, self.date)
        with guarded_arithmetic():
            return self.rate(to_currency) / self.rate(from_currency)

    @classmethod
    def from_ecb_csv(cls, text: str) -> "ExchangeRates":
        """Parse the most recent table from ECB reference-rate CSV text.

        Example:
            >>> rates = ExchangeRates.from_ecb_csv(
            ...     "Date, USD, JPY, \\n17 October 2026, 1.0812, 161.23, \\n"
            ... )
            >>> rates.rate(Currency.JPY)
            Decimal('161.23')

        Raises:
            ExchangeRateParseError: If the text is not in the ECB layout
        """
        tables = parse_ecb_csv(text)
        return max(tables, key=lambda table: table.date)


def _parse_ecb_date(value: str) -> dt.date:
    for date_format in ECB_DATE_FORMATS:
        try:
            return dt.datetime.strptime(value.strip(), date_format).date()
        except ValueError:
            continue
    raise ExchangeRateParseError(f"Unrecognized date in exchange rate data: {value!r}")


def parse_ecb_csv(text: str) -> List[ExchangeRates]:
    """Parse every row of ECB reference-rate CSV text into dated tables.

    Both the daily file (one row, dates like "17 October 2026") and the
    historical file (many rows, ISO dates) are accepted. Columns for
    currencies which are not known, and "N/A" cells, are skipped.

    Args:
        text: Contents of an ECB ``eurofxref`` CSV file

    Returns:
        One EUR-based table per data row, in file order

    Raises:
        ExchangeRateParseError: If the text is empty or malformed
    """
    reader = csv.reader(io.StringIO(text.strip()), skipinitialspace=True)
    rows = [row for row in reader if any(cell.strip() for cell in row)]
    if len(rows) < 2:
        raise ExchangeRateParseError(
            "Exchange rate data must contain a header row and at least one data row"
        )

    header = [cell.strip() for cell in rows[0]]
    if not header or header[0].lower() != "date":
        raise ExchangeRateParseError(
            f"Exchange rate data must start with a 'Date' column, got {header[:1]}"
        )

    columns: Dict[int, Currency] = {}
    for index, code in enumerate(header[1:], start=1):
        if not code:
            continue
        try:
            columns[index] = Currency(code.upper())
        except ValueError:
            logger.debug(f"Skipping unknown currency column: {code}")

    tables = []
    for row in rows[1:]:
        rates: Dict[Currency, Decimal] = {}
        for index, currency in columns.items():
            cell = row[index].strip() if index < len(row) else ""
            if cell in ECB_MISSING_VALUES:
                continue
            try:
                rates[currency] = Decimal(cell)
            except InvalidOperation:
                raise ExchangeRateParseError(
                    f"Invalid rate for {currency}: {cell!r}"
                ) from None
        tables.append(
            ExchangeRates(base=Currency.EUR, date=_parse_ecb_date(row[0]), rates=rates)
        )

    logger.debug(f"Parsed {len(tables)} exchange rate table(s) for {len(columns)} currencies")
    return tables


class ExchangeRateHistory(BaseDataModel):
    """Dated exchange rate tables, used to find the rates for a point in time.

    Example:
        >>> history = ExchangeRateHistory(tables=[older, newer])
        >>> history.at(dt.date(2023, 6, 15)) == older
        True
    """

    tables: Tuple[ExchangeRates, ...] = ()

    @field_validator("tables")
    @classmethod
    def validate_dated_and_sorted(
        cls, v: Tuple[ExchangeRates, ...]
    ) -> Tuple[ExchangeRates, ...]:
        """Require every table to be dated, and keep them ordered by date."""
        for table in v:
            if table.date is None:
                raise ValueError("Every table in an exchange rate history must have a date")
        dates = [table.date for table in v]
        if len(set(dates)) != len(dates):
            raise ValueError("An exchange rate history cannot contain two tables for one date")
        return tuple(sorted(v, key=lambda table: table.date))

    @classmethod
    def from_ecb_csv(cls, text: str) -> "ExchangeRateHistory":
        """Parse ECB historical reference-rate CSV text. See ``parse_ecb_csv``."""
        return cls(tables=parse_ecb_csv(text))

    def add(self, table: ExchangeRates) -> "ExchangeRateHistory":
        """Return a new history which also contains ``table``.

        A table with the same date as an existing one replaces it.
        """
        if table.date is None:
            raise ValueError("Cannot add a table without a date to an exchange rate history")
        kept = [existing for existing in self.tables if existing.date != table.date]
        return ExchangeRateHistory(tables=(*kept, table))

    def at(self, when: Union[dt.date, dt.datetime]) -> ExchangeRates:
        """Get the latest table published on or before ``when``.

        Raises:
            CurrencyError: If no table was published on or before ``when``
        """
        if isinstance(when, dt.datetime):
            when = when.date()
        dates = [table.date for table in self.tables]
        index = bisect.bisect_right(dates, when)
        if index == 0:
            raise CurrencyError(
                f"No exchange rates available on or before {when.isoformat()}",
                recovery_hint="Add a table published on or before that date",
            )
        return self.tables[index - 1]

    def latest(self) -> ExchangeRates:
        """Get the most recently published table.

        Raises:
            CurrencyError: If the history is empty
        """
        if not self.tables:
            raise CurrencyError("No exchange rates available")
        return self.tables[-1]
