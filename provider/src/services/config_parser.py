"""
Resource configuration parser and validator.
"""

import yaml
from typing import Any, Dict, Optional

from provider.src.schema import FieldSchema, FieldType, ResourceSchema

class PipelineConfigError(Exception):
    """Raised when resource configuration is invalid."""
    pass

TYPE_CHECKS = {
    FieldType.STRING: lambda v: isinstance(v, str),
    FieldType.INT: lambda v: isinstance(v, int) and not isinstance(v, bool),
    FieldType.BOOL: lambda v: isinstance(v, bool),
    FieldType.MAP: lambda v: isinstance(v, dict),
    FieldType.LIST: lambda v: isinstance(v, list),
}

def load_yaml_block(yaml_content: str, block: str) -> Dict[str, Any]:
    """Parse a YAML document and return its top-level `block` mapping."""
    try:
        document = yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise PipelineConfigError(f"Invalid YAML: {e}")

    if not document:
        raise PipelineConfigError(f"Empty {block} configuration")

    if not isinstance(document, dict) or block not in document:
        raise PipelineConfigError(f"Document must have a '{block}' block")

    config = document[block]
    if not config:
        raise PipelineConfigError(f"Empty {block} configuration")

    return config

def validate_config(
    schema: ResourceSchema,
    config: Optional[Dict[str, Any]],
    label: str,
    allow_computed: bool = False,
) -> Dict[str, Any]:
    """
    Validate configuration against a resource schema.
    Returns the configuration with null values dropped.
    """
    if not isinstance(config, dict):
        raise PipelineConfigError(f"{label} configuration must be a dictionary")

    for key in config:
        field = schema.fields.get(key)
        if field is None:
            raise PipelineConfigError(f"{label} has unknown attribute '{key}'")
        if not field.settable and not allow_computed:
            raise PipelineConfigError(f"{label} attribute '{key}' is computed and cannot be set")

    for key, field in schema.fields.items():
        if field.required and config.get(key) is None:
            raise PipelineConfigError(f"{label} missing '{key}'")

    validated = {}
    for key, value in config.items():
        if value is None:
            continue
        validated[key] = validate_value(schema.fields[key], key, value, label, allow_computed)

    return validated

def validate_value(
    field: FieldSchema,
    key: str,
    value: Any,
    label: str,
    allow_computed: bool = False,
) -> Any:
    """Validate a single attribute value."""
    if not TYPE_CHECKS[field.type](value):
        raise PipelineConfigError(f"{label} '{key}' must be a {field.type.value}")

    if field.type == FieldType.MAP:
        for k, v in value.items():
            if not isinstance(k, str):
                raise PipelineConfigError(f"{label} '{key}' keys must be strings")
            if field.elem and not TYPE_CHECKS[field.elem](v):
                raise PipelineConfigError(
                    f"{label} '{key}' value for '{k}' must be a {field.elem.value}"
                )
        return dict(value)

    if field.type == FieldType.LIST:
        if field.required and len(value) == 0:
            raise PipelineConfigError(f"{label} must have at least one '{key}'")

        if field.block is not None:
            return [
                validate_config(field.block, item, f"{key.capitalize()} {i}", allow_computed)
                for i, item in enumerate(value)
            ]

        for j, item in enumerate(value):
            if field.elem and not TYPE_CHECKS[field.elem](item):
                raise PipelineConfigError(f"{label} '{key}' item {j} must be a {field.elem.value}")
        return list(value)

    return value
