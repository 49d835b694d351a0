"""
Buildkite pipeline resource: schema, payload mapping and lifecycle operations.
"""

import logging
from typing import Any, Dict, List, Optional

from provider.src.models.pipeline import Pipeline, Step
from provider.src.schema import FieldSchema, FieldType, ResourceData, ResourceSchema
from provider.src.services.buildkite import BuildkiteClient, NotFoundError
from provider.src.services.config_parser import load_yaml_block, validate_config

logger = logging.getLogger(__name__)

PIPELINE_BADGE_URL = "badge_url"
PIPELINE_BRANCH_CONFIGURATION = "branch_configuration"
PIPELINE_BUILDS_URL = "builds_url"
PIPELINE_CREATED_AT = "created_at"
PIPELINE_DEFAULT_BRANCH = "default_branch"
PIPELINE_DESCRIPTION = "description"
PIPELINE_ENV = "env"
PIPELINE_ID = "id"
PIPELINE_NAME = "name"
PIPELINE_PROVIDER_SETTINGS = "provider_settings"
PIPELINE_REPOSITORY = "repository"
PIPELINE_SLUG = "slug"
PIPELINE_STEPS = "step"
PIPELINE_URL = "url"
PIPELINE_WEB_URL = "web_url"
PIPELINE_WEBHOOK_URL = "webhook_url"

STEP_AGENT_QUERY_RULES = "agent_query_rules"
STEP_ARTIFACT_PATHS = "artifact_paths"
STEP_BRANCH_CONFIGURATION = "branch_configuration"
STEP_COMMAND = "command"
STEP_CONCURRENCY = "concurrency"
STEP_ENV = "env"
STEP_NAME = "name"
STEP_PARALLELISM = "parallelism"
STEP_TIMEOUT_IN_MINUTES = "timeout_in_minutes"
STEP_TYPE = "type"

STEP_SCHEMA = ResourceSchema(fields={
    STEP_TYPE: FieldSchema(type=FieldType.STRING, required=True),
    STEP_NAME: FieldSchema(type=FieldType.STRING, optional=True),
    STEP_COMMAND: FieldSchema(type=FieldType.STRING, optional=True),
    STEP_ENV: FieldSchema(type=FieldType.MAP, optional=True, elem=FieldType.STRING),
    STEP_TIMEOUT_IN_MINUTES: FieldSchema(type=FieldType.INT, optional=True),
    STEP_AGENT_QUERY_RULES: FieldSchema(type=FieldType.LIST, optional=True, elem=FieldType.STRING),
    STEP_ARTIFACT_PATHS: FieldSchema(type=FieldType.STRING, optional=True),
    STEP_BRANCH_CONFIGURATION: FieldSchema(type=FieldType.STRING, optional=True),
    STEP_CONCURRENCY: FieldSchema(type=FieldType.INT, optional=True),
    STEP_PARALLELISM: FieldSchema(type=FieldType.INT, optional=True),
})

PIPELINE_SCHEMA = ResourceSchema(fields={
    PIPELINE_ID: FieldSchema(type=FieldType.STRING, computed=True),
    PIPELINE_SLUG: FieldSchema(type=FieldType.STRING, optional=True, computed=True),
    PIPELINE_WEB_URL: FieldSchema(type=FieldType.STRING, computed=True),
    PIPELINE_BUILDS_URL: FieldSchema(type=FieldType.STRING, computed=True),
    PIPELINE_CREATED_AT: FieldSchema(type=FieldType.STRING, computed=True),
    PIPELINE_URL: FieldSchema(type=FieldType.STRING, computed=True),
    PIPELINE_BADGE_URL: FieldSchema(type=FieldType.STRING, computed=True),
    PIPELINE_NAME: FieldSchema(type=FieldType.STRING, required=True),
    PIPELINE_DESCRIPTION: FieldSchema(type=FieldType.STRING, optional=True),
    PIPELINE_REPOSITORY: FieldSchema(type=FieldType.STRING, required=True),
    PIPELINE_BRANCH_CONFIGURATION: FieldSchema(type=FieldType.STRING, optional=True),
    PIPELINE_DEFAULT_BRANCH: FieldSchema(type=FieldType.STRING, optional=True),
    PIPELINE_ENV: FieldSchema(type=FieldType.MAP, optional=True, elem=FieldType.STRING),
    PIPELINE_PROVIDER_SETTINGS: FieldSchema(type=FieldType.MAP, optional=True, elem=FieldType.BOOL),
    PIPELINE_WEBHOOK_URL: FieldSchema(type=FieldType.STRING, computed=True),
    PIPELINE_STEPS: FieldSchema(type=FieldType.LIST, required=True, block=STEP_SCHEMA),
})

def new_pipeline_data(attributes: Optional[Dict[str, Any]] = None, id: str = "") -> ResourceData:
    return ResourceData(PIPELINE_SCHEMA, attributes, id=id)

def parse_pipeline_dict(config: Dict[str, Any], allow_computed: bool = False) -> ResourceData:
    """Validate a pipeline configuration dict and wrap it in a record."""
    return new_pipeline_data(
        validate_config(PIPELINE_SCHEMA, config, "Pipeline", allow_computed=allow_computed)
    )

def parse_pipeline_config(yaml_content: str) -> ResourceData:
    """Parse a YAML document holding a `pipeline` block."""
    return parse_pipeline_dict(load_yaml_block(yaml_content, "pipeline"))

def create_pipeline(d: ResourceData, client: BuildkiteClient):
    logger.debug("CreatePipeline")

    req = prepare_pipeline_request_payload(d)
    res = client.post(["pipelines"], req.to_payload())

    update_pipeline_from_api(d, Pipeline.model_validate(res))
    logger.info(f"Created pipeline {d.id}")

def read_pipeline(d: ResourceData, client: BuildkiteClient):
    logger.debug("ReadPipeline")

    slug = d.id

    try:
        res = client.get(["pipelines", slug])
    except NotFoundError:
        logger.warning(f"Pipeline {slug} not found, removing from state")
        d.set_id("")
        return

    update_pipeline_from_api(d, Pipeline.model_validate(res))

def update_pipeline(d: ResourceData, client: BuildkiteClient):
    logger.debug("UpdatePipeline")

    slug = d.id

    req = prepare_pipeline_request_payload(d)
    res = client.patch(["pipelines", slug], req.to_payload())

    update_pipeline_from_api(d, Pipeline.model_validate(res))
    logger.info(f"Updated pipeline {slug}")

def delete_pipeline(d: ResourceData, client: BuildkiteClient):
    logger.debug("DeletePipeline")

    slug = d.id

    client.delete(["pipelines", slug])
    logger.info(f"Deleted pipeline {slug}")

def import_pipeline(d: ResourceData) -> List[ResourceData]:
    """Pass-through import: the id is the slug, a later read fills the rest."""
    logger.debug(f"ImportPipeline {d.id}")
    return [d]

def update_pipeline_from_api(d: ResourceData, p: Pipeline):
    d.set_id(p.slug)

    if p.provider is not None:
        provider_settings = {
            k: v for k, v in p.provider.settings.items() if isinstance(v, bool)
        }
        webhook_url = p.provider.webhook_url
    else:
        provider_settings = p.provider_settings
        webhook_url = ""

    d.set(PIPELINE_BADGE_URL, p.badge_url)
    d.set(PIPELINE_BUILDS_URL, p.builds_url)
    d.set(PIPELINE_BRANCH_CONFIGURATION, p.branch_configuration)
    d.set(PIPELINE_CREATED_AT, p.created_at)
    d.set(PIPELINE_DEFAULT_BRANCH, p.default_branch)
    d.set(PIPELINE_DESCRIPTION, p.description)
    d.set(PIPELINE_ENV, p.env)
    d.set(PIPELINE_ID, p.id)
    d.set(PIPELINE_NAME, p.name)
    d.set(PIPELINE_PROVIDER_SETTINGS, provider_settings)
    d.set(PIPELINE_REPOSITORY, p.repository)
    d.set(PIPELINE_SLUG, p.slug)
    d.set(PIPELINE_URL, p.url)
    d.set(PIPELINE_WEBHOOK_URL, webhook_url)
    d.set(PIPELINE_WEB_URL, p.web_url)

    d.set(PIPELINE_STEPS, [
        {
            STEP_AGENT_QUERY_RULES: list(step.agent_query_rules),
            STEP_ARTIFACT_PATHS: step.artifact_paths,
            STEP_BRANCH_CONFIGURATION: step.branch_configuration,
            STEP_COMMAND: step.command,
            STEP_CONCURRENCY: step.concurrency,
            STEP_ENV: dict(step.env),
            STEP_NAME: step.name,
            STEP_PARALLELISM: step.parallelism,
            STEP_TIMEOUT_IN_MINUTES: step.timeout_in_minutes,
            STEP_TYPE: step.type,
        }
        for step in p.steps
    ])

def prepare_pipeline_request_payload(d: ResourceData) -> Pipeline:
    steps = [
        Step(
            agent_query_rules=[rule for rule in step[STEP_AGENT_QUERY_RULES]],
            artifact_paths=step[STEP_ARTIFACT_PATHS],
            branch_configuration=step[STEP_BRANCH_CONFIGURATION],
            command=step[STEP_COMMAND],
            concurrency=step[STEP_CONCURRENCY],
            env={k: v for k, v in step[STEP_ENV].items()},
            name=step[STEP_NAME],
            parallelism=step[STEP_PARALLELISM],
            timeout_in_minutes=step[STEP_TIMEOUT_IN_MINUTES],
            type=step[STEP_TYPE],
        )
        for step in d.get(PIPELINE_STEPS)
    ]

    return Pipeline(
        branch_configuration=d.get(PIPELINE_BRANCH_CONFIGURATION),
        default_branch=d.get(PIPELINE_DEFAULT_BRANCH),
        description=d.get(PIPELINE_DESCRIPTION),
        env={k: v for k, v in d.get(PIPELINE_ENV).items()},
        name=d.get(PIPELINE_NAME),
        provider_settings={k: v for k, v in d.get(PIPELINE_PROVIDER_SETTINGS).items()},
        repository=d.get(PIPELINE_REPOSITORY),
        slug=d.get(PIPELINE_SLUG),
        steps=steps,
    )
