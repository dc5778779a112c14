"""Currency exchange for the billing schema.

This package provides the exchange rate tables and the ``Exchangeable``
capability which cascades a conversion through nested records.
"""

from clinvoice_schema.exchange.exchangeable import Exchangeable, convert, exchange_all
from clinvoice_schema.exchange.rates import (
    ExchangeRateHistory,
    ExchangeRates,
    parse_ecb_csv,
)

__all__ = [
    "Exchangeable",
    "convert",
    "exchange_all",
    "ExchangeRateHistory",
    "ExchangeRates",
    "parse_ecb_csv",
]
