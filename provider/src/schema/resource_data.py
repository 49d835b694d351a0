"""
Configuration record for a single resource instance.
"""

import copy
from typing import Any, Dict, Optional

from provider.src.schema.types import FieldSchema, ResourceSchema

class ResourceData:
    """
    Holds the id and schema-typed attributes of one resource instance.

    Absent attributes read back as their zero value, so callers never have
    to distinguish "unset" from "empty". An empty id means the resource no
    longer exists.
    """

    def __init__(
        self,
        schema: ResourceSchema,
        attributes: Optional[Dict[str, Any]] = None,
        id: str = "",
    ):
        self.schema = schema
        self._id = id or ""
        self._attributes: Dict[str, Any] = {}

        for key, value in (attributes or {}).items():
            self.set(key, value)

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: Optional[str]):
        self._id = value or ""

    def get(self, key: str) -> Any:
        field = self._field(key)
        value = self._attributes.get(key)
        return normalize(field, value)

    def set(self, key: str, value: Any):
        field = self._field(key)
        try:
            self._attributes[key] = normalize(field, value)
        except TypeError as e:
            raise TypeError(f"Attribute '{key}' {e}") from None

    def state(self) -> Dict[str, Any]:
        """All attributes, absent ones filled with zero values."""
        return {key: self.get(key) for key in self.schema.fields}

    def _field(self, key: str) -> FieldSchema:
        try:
            return self.schema.fields[key]
        except KeyError:
            raise KeyError(f"Unknown attribute '{key}'") from None

    def __repr__(self) -> str:
        return f"ResourceData(id={self._id!r}, attributes={self._attributes!r})"

def normalize(field: FieldSchema, value: Any) -> Any:
    """Return a detached copy of value, or the field's zero value if None."""
    if value is None:
        return field.zero_value()

    if field.block is not None:
        if not isinstance(value, list) or not all(
            item is None or isinstance(item, dict) for item in value
        ):
            raise TypeError("must be a list of blocks")
        return [
            {
                key: normalize(nested, (item or {}).get(key))
                for key, nested in field.block.fields.items()
            }
            for item in value
        ]

    return copy.deepcopy(value)
