"""The ``Exchangeable`` capability.

Every entity which carries monetary data (directly or through the entities it
owns) implements ``exchange``, delegating to the ``exchange`` of each of its
monetary fields. The helpers here apply that capability to single entities and
to sequences of them.
"""

import logging
from typing import Iterable, List, Optional, Protocol, TypeVar, runtime_checkable

from clinvoice_schema.exchange.rates import ExchangeRates
from clinvoice_schema.models.money import Currency
from clinvoice_schema.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Exchangeable")


@runtime_checkable
class Exchangeable(Protocol):
    """A value whose monetary fields can be converted into another currency.

    ``exchange`` must return a new value of the same type in which every
    reachable monetary amount is denominated in ``currency``, and every
    other field is unchanged.
    """

    def exchange(self: T, currency: Currency, rates: ExchangeRates) -> T:
        ...


@log_function_call
def exchange_all(items: Iterable[T], currency: Currency, rates: ExchangeRates) -> List[T]:
    """Exchange each of ``items`` into ``currency``, preserving order.

    Either every item is exchanged or, when a rate is missing, the
    ``UnresolvableRateError`` propagates and nothing is returned.

    Example:
        >>> exchanged = exchange_all(timesheets, Currency.EUR, rates)
        >>> all(e.cost.currency == Currency.EUR for t in exchanged for e in t.expenses)
        True
    """
    exchanged = [item.exchange(currency, rates) for item in items]
    logger.debug(f"Exchanged {len(exchanged)} value(s) into {currency}")
    return exchanged


@log_function_call
def convert(entity: T, rates: ExchangeRates, currency: Optional[Currency] = None) -> T:
    """Exchange ``entity`` into ``currency``, or into the configured default currency.

    Args:
        entity: Any exchangeable value (Money, Expense, Invoice, Job, Timesheet, ...)
        rates: Rate table to convert with
        currency: Target currency; ``default_currency`` from the settings if omitted

    Returns:
        The exchanged value

    Raises:
        UnresolvableRateError: If ``rates`` cannot convert one of the amounts
    """
    if currency is None:
        from clinvoice_schema.config.settings import get_config

        currency = get_config().default_currency
    logger.debug(f"Exchanging {type(entity).__name__} into {currency}")
    return entity.exchange(currency, rates)
