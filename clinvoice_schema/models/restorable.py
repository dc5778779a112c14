"""Restoring values which were deserialized without their IDs.

IDs are never serialized, so an entity which has been round-tripped through
JSON comes back with nil IDs. ``RestorableModel.restore`` copies the IDs of
the original value (recursively, through every nested entity) back onto the
deserialized one.
"""

from typing import Any

from clinvoice_schema.exceptions import RestoreError
from clinvoice_schema.models.base import BaseDataModel


def _restore_value(value: Any, original: Any, field_name: str) -> Any:
    if isinstance(value, RestorableModel) or isinstance(original, RestorableModel):
        if value is None or original is None:
            raise RestoreError(
                f"Cannot restore '{field_name}': only one of the values is present"
            )
        return value.restore(original)

    if isinstance(value, (list, tuple)) and any(
        isinstance(item, RestorableModel) for item in (*value, *original)
    ):
        if len(value) != len(original):
            raise RestoreError(
                f"Cannot restore '{field_name}': expected {len(original)} items, "
                f"got {len(value)}"
            )
        return type(value)(
            _restore_value(item, original_item, field_name)
            for item, original_item in zip(value, original)
        )

    return value


class RestorableModel(BaseDataModel):
    """Base class for entities whose IDs can be restored after deserialization.

    Example:
        >>> import uuid
        >>> from clinvoice_schema.models.location import Location
        >>> stored = Location(id=uuid.uuid4(), name="Earth")
        >>> loaded = Location.model_validate_json(stored.model_dump_json())
        >>> loaded.restore(stored) == stored
        True
    """

    def restore(self, original: "RestorableModel") -> "RestorableModel":
        """Return a copy of this value with the IDs of ``original``.

        Args:
            original: The value this one was deserialized from

        Returns:
            A new value, equal to this one except for its IDs

        Raises:
            RestoreError: If the two values do not have the same shape
        """
        if type(original) is not type(self):
            raise RestoreError(
                f"Cannot restore a {type(self).__name__} from a {type(original).__name__}"
            )

        updates = {
            name: _restore_value(getattr(self, name), getattr(original, name), name)
            for name in type(self).model_fields
            if name != "id"
        }
        if "id" in type(self).model_fields:
            updates["id"] = getattr(original, "id")

        return self.model_copy(update=updates)
