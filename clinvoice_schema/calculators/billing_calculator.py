"""Billing calculator for timesheet totals.

This module implements the amount owed for work recorded on timesheets:
- Labor cost (elapsed hours × hourly rate) for each closed timesheet
- Itemized expense costs for each closed timesheet
- Totals across many timesheets, rescaled to the canonical precision

Ongoing timesheets (no end time) are not billable: neither their labor nor
their expenses contribute. No currency exchange happens here; timesheets must
be exchanged into the hourly rate's currency beforehand.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from clinvoice_schema.calculators.time_utils import (
    elapsed_seconds,
    seconds_to_decimal_hours,
)
from clinvoice_schema.exceptions import CurrencyMismatchError, NegativeDurationError
from clinvoice_schema.models.base import Id
from clinvoice_schema.models.job import Job
from clinvoice_schema.models.money import CANONICAL_SCALE, Money
from clinvoice_schema.models.timesheet import Closed, Timesheet
from clinvoice_schema.utils.logging_utils import (
    LogContext,
    generate_correlation_id,
    get_correlation_id,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimesheetCharge:
    """Unrounded amount owed for one closed timesheet.

    Attributes:
        timesheet_id: The timesheet this charge is for
        hours: Elapsed hours (time_end - time_begin)
        labor: Hourly rate × hours
        expenses: Sum of the timesheet's expense costs

    Example:
        >>> charge = calculate_timesheet_charge(timesheet, Money(amount="20.00", currency="USD"))
        >>> charge.hours
        Decimal('0.5')
        >>> str(charge.total)
        '10.000 USD'
    """

    timesheet_id: Id
    hours: Decimal
    labor: Money
    expenses: Money

    @property
    def total(self) -> Money:
        return self.labor + self.expenses


def calculate_timesheet_charge(
    timesheet: Timesheet, hourly_rate: Money
) -> Optional[TimesheetCharge]:
    """Calculate the unrounded charge for a single timesheet.

    Args:
        timesheet: Timesheet to bill
        hourly_rate: Rate charged per hour; expenses must share its currency

    Returns:
        The charge, or None if the timesheet is still ongoing

    Raises:
        NegativeDurationError: If the timesheet ends before it begins
        CurrencyMismatchError: If an expense is not in ``hourly_rate``'s currency
    """
    period = timesheet.period
    if not isinstance(period, Closed):
        logger.debug(f"Skipping ongoing timesheet {timesheet.id}")
        return None

    if period.end < timesheet.time_begin:
        logger.error(
            f"Timesheet {timesheet.id} has a negative duration of "
            f"{period.end - timesheet.time_begin}"
        )
        raise NegativeDurationError(timesheet.id, timesheet.time_begin, period.end)
    seconds = elapsed_seconds(timesheet.time_begin, period.end)

    expenses = Money.zero(hourly_rate.currency)
    for expense in timesheet.expenses:
        if expense.cost.currency != hourly_rate.currency:
            logger.error(
                f"Expense {expense.id} on timesheet {timesheet.id} is in "
                f"{expense.cost.currency}, hourly rate is in {hourly_rate.currency}"
            )
            raise CurrencyMismatchError(hourly_rate.currency, expense.cost.currency)
        expenses = expenses + expense.cost

    hours = seconds_to_decimal_hours(seconds)
    return TimesheetCharge(
        timesheet_id=timesheet.id,
        hours=hours,
        labor=hourly_rate * hours,
        expenses=expenses,
    )


def total_all(timesheets: Sequence[Timesheet], hourly_rate: Money) -> Money:
    """Get the amount of money owed for work done on ``timesheets``.

    Each closed timesheet contributes ``hourly_rate × elapsed hours`` plus the
    cost of each of its expenses. Ongoing timesheets contribute nothing. The
    sum is rescaled to exactly two decimal places once, at the end.

    Args:
        timesheets: Timesheets to total, already in ``hourly_rate``'s currency
        hourly_rate: Rate charged per hour of work

    Returns:
        Total owed, in ``hourly_rate``'s currency, with two decimal places

    Raises:
        NegativeDurationError: If a timesheet ends before it begins
        CurrencyMismatchError: If an expense is not in ``hourly_rate``'s currency
        MonetaryArithmeticError: If the total cannot be represented

    Example:
        >>> str(total_all(
        ...     [half_hour_with_twenty_dollar_expense, half_hour],
        ...     Money(amount="20.00", currency="USD"),
        ... ))
        '40.00 USD'
    """
    total = Money.zero(hourly_rate.currency)
    billed = 0

    correlation_id = get_correlation_id() or generate_correlation_id()
    with LogContext(correlation_id=correlation_id, hourly_rate=str(hourly_rate)):
        for timesheet in timesheets:
            charge = calculate_timesheet_charge(timesheet, hourly_rate)
            if charge is None:
                continue
            total = total + charge.total
            billed += 1

        result = total.rescale(CANONICAL_SCALE)
        logger.debug(
            f"Totaled {billed} of {len(timesheets)} timesheet(s) at {hourly_rate}: {result}"
        )

    return result


def total_for_job(timesheets: Sequence[Timesheet], job: Job) -> Money:
    """Get the amount owed for ``job``, using its invoice's hourly rate.

    Only the timesheets recorded against ``job`` (matched by ID) are counted.

    Raises:
        CurrencyMismatchError: If an expense is not in the invoice's currency
        NegativeDurationError: If a timesheet ends before it begins
    """
    matching = [timesheet for timesheet in timesheets if timesheet.job.id == job.id]
    return total_all(matching, job.invoice.hourly_rate)
