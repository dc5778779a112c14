"""Exceptions raised by the billing schema.

Every error carries a user-facing message and an optional recovery hint.
Nothing here is retried internally: errors propagate to the immediate caller.
"""

import datetime as dt
from typing import Optional


class ClinvoiceSchemaError(Exception):
    """Base exception for schema errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize schema error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class CurrencyError(ClinvoiceSchemaError):
    """Error related to currencies or exchange rates."""

    pass


class UnresolvableRateError(CurrencyError):
    """No exchange rate exists between two currencies."""

    def __init__(self, from_currency, to_currency, as_of: Optional[dt.date] = None):
        self.from_currency = from_currency
        self.to_currency = to_currency
        self.as_of = as_of
        when = f" as of {as_of.isoformat()}" if as_of else ""
        super().__init__(
            f"No exchange rate found for {from_currency}/{to_currency}{when}",
            recovery_hint="Refresh the exchange rate table and retry the exchange",
        )


class CurrencyMismatchError(CurrencyError):
    """Attempted an operation on amounts of different currencies."""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Currency mismatch: expected {expected}, got {actual}",
            recovery_hint="Exchange every amount into one currency before combining them",
        )


class ExchangeRateParseError(CurrencyError):
    """Exchange rate data could not be parsed."""

    pass


class MonetaryArithmeticError(ClinvoiceSchemaError):
    """A monetary value could not be represented (overflow, invalid operation)."""

    pass


class NegativeDurationError(ClinvoiceSchemaError):
    """A timesheet ends before it begins."""

    def __init__(self, timesheet_id, time_begin: dt.datetime, time_end: dt.datetime):
        self.timesheet_id = timesheet_id
        self.time_begin = time_begin
        self.time_end = time_end
        super().__init__(
            f"Timesheet {timesheet_id} ends ({time_end.isoformat()}) "
            f"before it begins ({time_begin.isoformat()})"
        )


class RestoreError(ClinvoiceSchemaError):
    """A deserialized value does not have the same shape as its original."""

    pass
