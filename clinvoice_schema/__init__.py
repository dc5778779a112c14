"""Definitions for the information managed by CLInvoice.

The data is represented as it would be after all ``JOIN``s are performed on a
database: an ``Organization`` holds its ``Location`` by value rather than
referencing it by ``Id``. On top of these records the package provides
currency exchange which cascades through nested records, and totaling of the
money owed for work recorded on timesheets.
"""

from clinvoice_schema.calculators import total_all, total_for_job
from clinvoice_schema.exceptions import (
    ClinvoiceSchemaError,
    CurrencyError,
    CurrencyMismatchError,
    ExchangeRateParseError,
    MonetaryArithmeticError,
    NegativeDurationError,
    RestoreError,
    UnresolvableRateError,
)
from clinvoice_schema.exchange import (
    Exchangeable,
    ExchangeRateHistory,
    ExchangeRates,
    convert,
    exchange_all,
)
from clinvoice_schema.models import (
    NIL_ID,
    Address,
    Closed,
    Contact,
    ContactKind,
    Currency,
    Email,
    Employee,
    Expense,
    Id,
    Invoice,
    InvoiceDate,
    Job,
    Location,
    Money,
    Ongoing,
    Organization,
    Phone,
    Timesheet,
)

__version__ = "0.1.0"

__all__ = [
    "NIL_ID",
    "Address",
    "Closed",
    "Contact",
    "ContactKind",
    "Currency",
    "Email",
    "Employee",
    "Expense",
    "Id",
    "Invoice",
    "InvoiceDate",
    "Job",
    "Location",
    "Money",
    "Ongoing",
    "Organization",
    "Phone",
    "Timesheet",
    "Exchangeable",
    "ExchangeRateHistory",
    "ExchangeRates",
    "convert",
    "exchange_all",
    "total_all",
    "total_for_job",
    "ClinvoiceSchemaError",
    "CurrencyError",
    "CurrencyMismatchError",
    "ExchangeRateParseError",
    "MonetaryArithmeticError",
    "NegativeDurationError",
    "RestoreError",
    "UnresolvableRateError",
]
