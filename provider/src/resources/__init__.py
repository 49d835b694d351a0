from provider.src.resources.pipeline import (
    PIPELINE_SCHEMA,
    STEP_SCHEMA,
    new_pipeline_data,
    parse_pipeline_config,
    parse_pipeline_dict,
    create_pipeline,
    read_pipeline,
    update_pipeline,
    delete_pipeline,
    import_pipeline,
    prepare_pipeline_request_payload,
    update_pipeline_from_api,
)

__all__ = [
    "PIPELINE_SCHEMA",
    "STEP_SCHEMA",
    "new_pipeline_data",
    "parse_pipeline_config",
    "parse_pipeline_dict",
    "create_pipeline",
    "read_pipeline",
    "update_pipeline",
    "delete_pipeline",
    "import_pipeline",
    "prepare_pipeline_request_payload",
    "update_pipeline_from_api",
]
