"""Location data model.

A ``Location`` owns an optional chain of ``outer`` locations, e.g.
"1337 Some Street" inside "Phoenix" inside "Arizona". The chain is owned by
value, so it is always finite and acyclic.
"""

from typing import Iterator, Optional

from pydantic import Field

from clinvoice_schema.models.base import Id, id_field
from clinvoice_schema.models.restorable import RestorableModel


class Location(RestorableModel):
    """A place, optionally contained in a larger place.

    Example:
        >>> earth = Location(name="Earth")
        >>> usa = Location(name="USA", outer=earth)
        >>> str(Location(name="Arizona", outer=usa))
        'Arizona, USA, Earth'
    """

    id: Id = id_field()
    name: str = Field(..., description="Name of this place")
    outer: Optional["Location"] = Field(
        None, description="The location which contains this one, if any"
    )

    def chain(self) -> Iterator["Location"]:
        """Iterate from this location outward through every ancestor."""
        current: Optional[Location] = self
        while current is not None:
            yield current
            current = current.outer

    def __str__(self) -> str:
        return ", ".join(location.name for location in self.chain())
