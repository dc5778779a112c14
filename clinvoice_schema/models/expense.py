"""Expense data model."""

from typing import TYPE_CHECKING

from pydantic import Field

from clinvoice_schema.models.base import Id, id_field
from clinvoice_schema.models.money import Currency, Money
from clinvoice_schema.models.restorable import RestorableModel

if TYPE_CHECKING:
    from clinvoice_schema.exchange.rates import ExchangeRates


class Expense(RestorableModel):
    """A business cost incurred while working, billed on top of the hourly rate.

    Attributes:
        category: Kind of expense (e.g. "Food", "Travel")
        cost: How much was spent
        description: What the expense was for

    Example:
        >>> lunch = Expense(
        ...     category="Food",
        ...     cost=Money(amount="20.00", currency=Currency.USD),
        ...     description="Lunch with client",
        ... )
        >>> str(lunch.cost)
        '20.00 USD'
    """

    id: Id = id_field()
    category: str = Field(..., description="Category of the expense")
    cost: Money = Field(..., description="Amount spent")
    description: str = Field("", description="What the expense was for")

    def exchange(self, currency: Currency, rates: "ExchangeRates") -> "Expense":
        """Exchange the ``cost`` of this expense into ``currency``."""
        return self.model_copy(update={"cost": self.cost.exchange(currency, rates)})
