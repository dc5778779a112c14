"""Contact data models.

A ``Contact`` is a labelled way of reaching an organization: a physical
address, an email address, or a phone number.
"""

from typing import Annotated, Literal, Union

from pydantic import Field

from clinvoice_schema.models.location import Location
from clinvoice_schema.models.restorable import RestorableModel


class Address(RestorableModel):
    """A physical address."""

    type: Literal["address"] = "address"
    location: Location

    def __str__(self) -> str:
        return str(self.location)


class Email(RestorableModel):
    """An email address."""

    type: Literal["email"] = "email"
    email: str = Field(..., min_length=1)

    def __str__(self) -> str:
        return self.email


class Phone(RestorableModel):
    """A phone number."""

    type: Literal["phone"] = "phone"
    phone: str = Field(..., min_length=1)

    def __str__(self) -> str:
        return self.phone


ContactKind = Annotated[Union[Address, Email, Phone], Field(discriminator="type")]


class Contact(RestorableModel):
    """A labelled piece of contact information.

    Attributes:
        label: What this contact is for (e.g. "Office", "Cellphone")
        kind: The address, email, or phone number itself

    Example:
        >>> str(Contact(label="Email", kind=Email(email="foo@bar.io")))
        'Email: foo@bar.io'
    """

    label: str = Field(..., min_length=1, description="Label of this contact")
    kind: ContactKind

    def __str__(self) -> str:
        return f"{self.label}: {self.kind}"
