"""Organization and Employee data models."""

from typing import TYPE_CHECKING

from pydantic import Field, field_validator

from clinvoice_schema.models.base import Id, id_field
from clinvoice_schema.models.location import Location
from clinvoice_schema.models.restorable import RestorableModel

if TYPE_CHECKING:
    from clinvoice_schema.exchange.rates import ExchangeRates
    from clinvoice_schema.models.money import Currency


class Organization(RestorableModel):
    """A business, either a client or the one doing the work.

    Example:
        >>> org = Organization(name="Big Old Test", location=Location(name="Earth"))
        >>> org.name
        'Big Old Test'
    """

    id: Id = id_field()
    location: Location = Field(..., description="Where the organization is based")
    name: str = Field(..., min_length=1, description="Name of the organization")

    @field_validator("name")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name cannot be empty or whitespace")
        return v.strip()

    def exchange(self, currency: "Currency", rates: "ExchangeRates") -> "Organization":
        """Organizations carry no monetary data, so exchanging yields an equal value."""
        return self


class Employee(RestorableModel):
    """A person who performs work for the organization using the system.

    Attributes:
        name: Full name of the employee
        status: Employment status (e.g. "Employed", "Contractor")
        title: Job title (e.g. "Hal Mechanic")
    """

    id: Id = id_field()
    name: str = Field(..., min_length=1, description="Employee's name")
    status: str = Field(..., description="Employment status")
    title: str = Field(..., description="Job title")
