from provider.src.services.buildkite import (
    BuildkiteClient,
    BuildkiteAPIError,
    NotFoundError,
    build_client,
    get_buildkite_client,
)
from provider.src.services.config_parser import (
    load_yaml_block,
    validate_config,
    PipelineConfigError,
)

__all__ = [
    "BuildkiteClient",
    "BuildkiteAPIError",
    "NotFoundError",
    "build_client",
    "get_buildkite_client",
    "load_yaml_block",
    "validate_config",
    "PipelineConfigError",
]
