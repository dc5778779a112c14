"""Data models for the billing schema.

This package contains Pydantic models for all business entities, represented
as they are after every relational lookup has been resolved:
- BaseDataModel: Base class with common configuration
- Money, Currency: Monetary values
- Location, Contact: Where and how to reach an organization
- Organization, Employee: Who the work is done for, and by
- Expense, Invoice, InvoiceDate: What is billed
- Job, Timesheet: The work itself
"""

from clinvoice_schema.models.base import NIL_ID, BaseDataModel, Id
from clinvoice_schema.models.contact import Address, Contact, ContactKind, Email, Phone
from clinvoice_schema.models.expense import Expense
from clinvoice_schema.models.invoice import Invoice, InvoiceDate
from clinvoice_schema.models.job import Job
from clinvoice_schema.models.location import Location
from clinvoice_schema.models.money import CANONICAL_SCALE, Currency, Money
from clinvoice_schema.models.organization import Employee, Organization
from clinvoice_schema.models.restorable import RestorableModel
from clinvoice_schema.models.timesheet import Closed, Ongoing, Timesheet, WorkPeriod

__all__ = [
    "BaseDataModel",
    "Id",
    "NIL_ID",
    "RestorableModel",
    "CANONICAL_SCALE",
    "Currency",
    "Money",
    "Location",
    "Address",
    "Contact",
    "ContactKind",
    "Email",
    "Phone",
    "Employee",
    "Organization",
    "Expense",
    "Invoice",
    "InvoiceDate",
    "Job",
    "Closed",
    "Ongoing",
    "Timesheet",
    "WorkPeriod",
]
