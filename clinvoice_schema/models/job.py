"""Job data model."""

import datetime as dt
from typing import TYPE_CHECKING, Optional

from pydantic import Field, field_validator, model_validator

from clinvoice_schema.models.base import Id, ensure_utc, id_field
from clinvoice_schema.models.invoice import Invoice
from clinvoice_schema.models.money import Currency
from clinvoice_schema.models.organization import Organization
from clinvoice_schema.models.restorable import RestorableModel

if TYPE_CHECKING:
    from clinvoice_schema.exchange.rates import ExchangeRates


class Job(RestorableModel):
    """A request to complete some ``objectives`` for some ``client``.

    Work done for a job is tracked by ``Timesheet``s. The organization doing
    the work is assumed to be the one using the system, so it is not stored
    here.

    Attributes:
        client: The organization the work is being performed for
        date_close: When work on the job stopped, or None if still open
        date_open: When the client's request was received
        increment: Granularity which recorded work periods are rounded to
        invoice: How the job will be paid for
        notes: Things to know about the work that has been performed
        objectives: Desired outcomes of completing the job
    """

    id: Id = id_field()
    client: Organization
    date_close: Optional[dt.datetime] = Field(None, description="When work stopped")
    date_open: dt.datetime = Field(..., description="When the request was received")
    increment: dt.timedelta = Field(
        dt.timedelta(minutes=15), description="Rounding increment for work periods"
    )
    invoice: Invoice
    notes: str = ""
    objectives: str = ""

    @field_validator("date_open", "date_close", mode="before")
    @classmethod
    def normalize_timezone(cls, v):
        return ensure_utc(v)

    @field_validator("increment")
    @classmethod
    def validate_increment(cls, v: dt.timedelta) -> dt.timedelta:
        if v < dt.timedelta(0):
            raise ValueError(f"increment must not be negative, got {v}")
        return v

    @model_validator(mode="after")
    def validate_dates(self) -> "Job":
        """Validate that a job is not closed before it was opened.

        Raises:
            ValueError: If ``date_close`` precedes ``date_open``
        """
        if self.date_close is not None and self.date_close < self.date_open:
            raise ValueError(
                f"date_close ({self.date_close.isoformat()}) must not be before "
                f"date_open ({self.date_open.isoformat()})"
            )
        return self

    def round_time(self, when: dt.datetime) -> dt.datetime:
        """Round ``when`` to the nearest multiple of this job's ``increment``.

        Example:
            >>> job.increment
            datetime.timedelta(seconds=900)
            >>> job.round_time(dt.datetime(2023, 6, 15, 11, 14)).time()
            datetime.time(11, 15)
            >>> job.round_time(dt.datetime(2023, 6, 15, 13, 34)).time()
            datetime.time(13, 30)
        """
        from clinvoice_schema.calculators.time_utils import round_to_increment

        return round_to_increment(ensure_utc(when), self.increment)

    def exchange(self, currency: Currency, rates: "ExchangeRates") -> "Job":
        """Exchange the ``invoice`` of this job into ``currency``."""
        return self.model_copy(update={"invoice": self.invoice.exchange(currency, rates)})
