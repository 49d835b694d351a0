"""
Resource schema contract: field name -> type/required/optional/computed.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel

class FieldType(str, Enum):
    STRING = "string"
    INT = "int"
    BOOL = "bool"
    MAP = "map"
    LIST = "list"

ZERO_VALUES = {
    FieldType.STRING: "",
    FieldType.INT: 0,
    FieldType.BOOL: False,
}

class FieldSchema(BaseModel):
    type: FieldType
    required: bool = False
    optional: bool = False
    computed: bool = False
    # Element type for maps and scalar lists
    elem: Optional[FieldType] = None
    # Nested block schema for lists of records
    block: Optional["ResourceSchema"] = None

    def zero_value(self) -> Any:
        if self.type == FieldType.MAP:
            return {}
        if self.type == FieldType.LIST:
            return []
        return ZERO_VALUES[self.type]

    @property
    def settable(self) -> bool:
        """Whether configuration may supply a value for this field."""
        return self.required or self.optional

class ResourceSchema(BaseModel):
    fields: Dict[str, FieldSchema]

    def describe(self) -> Dict[str, Any]:
        """Plain dict form of the schema, as handed to the host."""
        return self.model_dump(mode="json", exclude_none=True)

FieldSchema.model_rebuild()
ResourceSchema.model_rebuild()
