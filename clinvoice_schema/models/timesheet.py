"""Timesheet data model for billing system.

This module defines the Timesheet model, which represents one continuous
period of work by one employee on one job, along with the expenses incurred
during that period.
"""

import datetime as dt
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

from pydantic import Field, field_validator, model_validator

from clinvoice_schema.models.base import Id, ensure_utc, id_field
from clinvoice_schema.models.expense import Expense
from clinvoice_schema.models.job import Job
from clinvoice_schema.models.money import Currency, Money
from clinvoice_schema.models.organization import Employee
from clinvoice_schema.models.restorable import RestorableModel

if TYPE_CHECKING:
    from clinvoice_schema.exchange.rates import ExchangeRates


@dataclass(frozen=True)
class Ongoing:
    """A period of work which has not ended yet. It is not billable."""


@dataclass(frozen=True)
class Closed:
    """A period of work which ended at ``end``."""

    end: dt.datetime


WorkPeriod = Union[Ongoing, Closed]


class Timesheet(RestorableModel):
    """Represents a continuous period of work on a job.

    A job may have many timesheets, with different and/or duplicate
    employees. If several employees collaborate, each records their own
    timesheet.

    Attributes:
        employee: Who performed the work
        expenses: Business costs incurred during this time, in order
        job: The job which was worked on
        time_begin: When this period of work began
        time_end: When this period of work ended, or None if ongoing
        work_notes: Summary of the work performed

    Example:
        >>> timesheet = Timesheet(
        ...     employee=employee,
        ...     job=job,
        ...     time_begin=dt.datetime(2023, 6, 15, 2, 0),
        ...     time_end=dt.datetime(2023, 6, 15, 2, 30),
        ... )
        >>> timesheet.period
        Closed(end=datetime.datetime(2023, 6, 15, 2, 30, tzinfo=datetime.timezone.utc))
    """

    id: Id = id_field()
    employee: Employee
    expenses: Tuple[Expense, ...] = ()
    job: Job
    time_begin: dt.datetime = Field(..., description="When work began")
    time_end: Optional[dt.datetime] = Field(None, description="When work ended")
    work_notes: str = ""

    @field_validator("time_begin", "time_end", mode="before")
    @classmethod
    def normalize_timezone(cls, v):
        return ensure_utc(v)

    @model_validator(mode="after")
    def validate_time_logic(self) -> "Timesheet":
        """Validate that a period of work does not end before it begins.

        Raises:
            ValueError: If ``time_end`` precedes ``time_begin``
        """
        if self.time_end is not None and self.time_end < self.time_begin:
            raise ValueError(
                f"time_end ({self.time_end.isoformat()}) must not be before "
                f"time_begin ({self.time_begin.isoformat()})"
            )
        return self

    @property
    def period(self) -> WorkPeriod:
        """Whether this period of work is still ongoing, or when it closed."""
        if self.time_end is None:
            return Ongoing()
        return Closed(end=self.time_end)

    def exchange(self, currency: Currency, rates: "ExchangeRates") -> "Timesheet":
        """Exchange every expense and the ``job`` of this timesheet into ``currency``."""
        return self.model_copy(
            update={
                "expenses": tuple(expense.exchange(currency, rates) for expense in self.expenses),
                "job": self.job.exchange(currency, rates),
            }
        )

    def total(self, hourly_rate: Money) -> Money:
        """Get the amount owed for this timesheet alone. See ``total_all``."""
        return Timesheet.total_all([self], hourly_rate)

    @staticmethod
    def total_all(timesheets: Sequence["Timesheet"], hourly_rate: Money) -> Money:
        """Get the amount owed by the client for work done on ``timesheets``.

        Every expense must already be in the currency of ``hourly_rate``;
        exchange the timesheets first if they are not.

        Raises:
            CurrencyMismatchError: If an expense is not in ``hourly_rate``'s currency
            NegativeDurationError: If a timesheet ends before it begins
        """
        from clinvoice_schema.calculators.billing_calculator import total_all

        return total_all(timesheets, hourly_rate)
