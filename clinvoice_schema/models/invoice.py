"""Invoice data models."""

import datetime as dt
from typing import TYPE_CHECKING, Optional

from pydantic import Field, field_validator, model_validator

from clinvoice_schema.models.base import BaseDataModel, ensure_utc
from clinvoice_schema.models.money import Currency, Money

if TYPE_CHECKING:
    from clinvoice_schema.exchange.rates import ExchangeRates


class InvoiceDate(BaseDataModel):
    """When an invoice was issued, and when (if ever) it was paid.

    Attributes:
        issued: When the invoice was sent to the client
        paid: When the client paid, or None if still outstanding
    """

    issued: dt.datetime = Field(..., description="Date the invoice was issued")
    paid: Optional[dt.datetime] = Field(None, description="Date the invoice was paid")

    @field_validator("issued", "paid", mode="before")
    @classmethod
    def normalize_timezone(cls, v):
        return ensure_utc(v)

    @model_validator(mode="after")
    def validate_paid_after_issued(self) -> "InvoiceDate":
        """Validate that an invoice is not paid before it is issued.

        Raises:
            ValueError: If ``paid`` precedes ``issued``
        """
        if self.paid is not None and self.paid < self.issued:
            raise ValueError(
                f"paid ({self.paid.isoformat()}) must not be before "
                f"issued ({self.issued.isoformat()})"
            )
        return self

    @property
    def is_paid(self) -> bool:
        return self.paid is not None


class Invoice(BaseDataModel):
    """How a job will be paid for.

    Attributes:
        date: Issue/payment dates, or None if the invoice has not been sent
        hourly_rate: Amount charged per hour of work

    Example:
        >>> invoice = Invoice(hourly_rate=Money(amount="20.00", currency="USD"))
        >>> invoice.date is None
        True
    """

    date: Optional[InvoiceDate] = Field(None, description="Issue and payment dates")
    hourly_rate: Money = Field(..., description="Rate charged per hour of work")

    def exchange(self, currency: Currency, rates: "ExchangeRates") -> "Invoice":
        """Exchange the ``hourly_rate`` of this invoice into ``currency``."""
        return self.model_copy(
            update={"hourly_rate": self.hourly_rate.exchange(currency, rates)}
        )
