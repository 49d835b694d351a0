from provider.src.schema.types import FieldType, FieldSchema, ResourceSchema
from provider.src.schema.resource_data import ResourceData

__all__ = [
    "FieldType",
    "FieldSchema",
    "ResourceSchema",
    "ResourceData",
]
