"""Base model for all records in the billing schema.

This module provides a base Pydantic model with common configuration
shared by every entity, plus the ``Id`` type and the helpers used to
keep identifiers out of serialized output.
"""

import datetime as dt
import functools
import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Id = uuid.UUID
"""Reference number of an entity, assigned by the persistence layer."""

NIL_ID: Id = uuid.UUID(int=0)


def id_field() -> Any:
    """Declare an ``id`` field which is never serialized.

    IDs are generated downstream (e.g. by a database) and must not be
    round-tripped through a request representation of an entity.
    """
    return Field(default=NIL_ID, exclude=True, description="Unique reference number")


def ensure_utc(value: Any) -> Any:
    """Interpret naive datetimes as UTC and convert aware ones to UTC.

    Example:
        >>> ensure_utc(dt.datetime(2023, 6, 15, 9, 0))
        datetime.datetime(2023, 6, 15, 9, 0, tzinfo=datetime.timezone.utc)
    """
    if isinstance(value, dt.datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value.astimezone(dt.timezone.utc)
    return value


def _sort_key(value: Any) -> Any:
    """Build a comparable key for a field value.

    ``None`` sorts before any present value; nested models, sequences and
    mappings compare element-wise.
    """
    if value is None:
        return (0,)
    if isinstance(value, BaseDataModel):
        value = value.sort_key()
    elif isinstance(value, (list, tuple)):
        value = tuple(_sort_key(item) for item in value)
    elif isinstance(value, dict):
        value = tuple((_sort_key(k), _sort_key(v)) for k, v in sorted(value.items()))
    return (1, value)


@functools.total_ordering
class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with type checking
    - Serialization to/from dictionaries
    - Immutability (frozen models) and hashing
    - Ordering by field values, in declaration order
    - Arbitrary types support for dates, durations, decimals

    Example:
        >>> class Tag(BaseDataModel):
        ...     name: str
        >>> tag = Tag(name="billable")
        >>> tag.model_dump()
        {'name': 'billable'}
        >>> sorted([Tag(name="travel"), tag])[0] == tag
        True
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal, datetime, timedelta
        arbitrary_types_allowed=True,
        # Use lax type coercion (e.g. "20.00" -> Decimal)
        strict=False,
        # Reject unknown fields
        extra="forbid",
        # Entities are values: never mutated after creation
        frozen=True,
    )

    def sort_key(self) -> tuple:
        """Field values in declaration order, as compared by ``<``."""
        return tuple(_sort_key(getattr(self, name)) for name in type(self).model_fields)

    def __lt__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.sort_key() < other.sort_key()
