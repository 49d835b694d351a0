"""
Pipeline resource lifecycle endpoints called by the host.
"""

import logging
from typing import Callable

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from provider.src.models.resource import ResourceRequest, ResourceResponse
from provider.src.resources.pipeline import (
    create_pipeline,
    delete_pipeline,
    import_pipeline,
    new_pipeline_data,
    parse_pipeline_config,
    parse_pipeline_dict,
    read_pipeline,
    update_pipeline,
)
from provider.src.schema import ResourceData
from provider.src.services.buildkite import (
    BuildkiteAPIError,
    BuildkiteClient,
    get_buildkite_client,
)
from provider.src.services.config_parser import PipelineConfigError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resources/pipeline", tags=["pipeline"])

def require_id(request: ResourceRequest):
    if not request.id:
        raise HTTPException(status_code=422, detail="Resource id (pipeline slug) is required")

def load_config(request: ResourceRequest, allow_computed: bool = False) -> ResourceData:
    """Validate the request configuration into a pipeline record."""
    try:
        d = parse_pipeline_dict(request.config, allow_computed=allow_computed)
    except PipelineConfigError as e:
        raise HTTPException(status_code=422, detail=str(e))
    d.set_id(request.id)
    return d

def load_state(request: ResourceRequest) -> ResourceData:
    """Wrap previously stored state without validating it."""
    try:
        return new_pipeline_data(request.config, id=request.id)
    except (KeyError, TypeError) as e:
        raise HTTPException(status_code=422, detail=str(e))

def run_operation(
    operation: Callable[[ResourceData, BuildkiteClient], None],
    d: ResourceData,
    client: BuildkiteClient,
):
    """Run a lifecycle operation, surfacing remote failures to the host."""
    try:
        operation(d, client)
    except BuildkiteAPIError as e:
        logger.error(f"{operation.__name__} failed: {e}")
        raise HTTPException(
            status_code=502,
            detail={"status_code": e.status_code, "message": e.message},
        )
    except (httpx.HTTPError, ValidationError) as e:
        logger.error(f"{operation.__name__} failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

@router.post("/create", response_model=ResourceResponse)
def create(request: ResourceRequest, client: BuildkiteClient = Depends(get_buildkite_client)):
    """Create a pipeline from configuration."""
    d = load_config(request)
    run_operation(create_pipeline, d, client)
    return ResourceResponse(id=d.id, state=d.state())

@router.post("/read", response_model=ResourceResponse)
def read(request: ResourceRequest, client: BuildkiteClient = Depends(get_buildkite_client)):
    """
    Refresh a pipeline's state.
    An empty id in the response means the pipeline no longer exists.
    """
    require_id(request)
    d = load_state(request)
    run_operation(read_pipeline, d, client)

    if not d.id:
        return ResourceResponse(id="")
    return ResourceResponse(id=d.id, state=d.state())

@router.post("/update", response_model=ResourceResponse)
def update(request: ResourceRequest, client: BuildkiteClient = Depends(get_buildkite_client)):
    """Replace a pipeline's settings and full step list."""
    require_id(request)
    d = load_config(request, allow_computed=True)
    run_operation(update_pipeline, d, client)
    return ResourceResponse(id=d.id, state=d.state())

@router.post("/delete", response_model=ResourceResponse)
def delete(request: ResourceRequest, client: BuildkiteClient = Depends(get_buildkite_client)):
    """Destroy a pipeline."""
    require_id(request)
    d = new_pipeline_data(id=request.id)
    run_operation(delete_pipeline, d, client)
    return ResourceResponse(id="")

@router.post("/import", response_model=ResourceResponse)
def import_(request: ResourceRequest, client: BuildkiteClient = Depends(get_buildkite_client)):
    """Import an existing pipeline by slug."""
    require_id(request)
    d = import_pipeline(new_pipeline_data(id=request.id))[0]
    run_operation(read_pipeline, d, client)

    if not d.id:
        raise HTTPException(
            status_code=404,
            detail=f"Cannot import non-existent pipeline '{request.id}'",
        )
    return ResourceResponse(id=d.id, state=d.state())

@router.post("/validate", response_model=ResourceResponse)
async def validate(request: Request):
    """
    Validate a YAML document holding a `pipeline` block.
    Returns the normalized configuration without calling Buildkite.
    """
    body = await request.body()

    try:
        d = parse_pipeline_config(body.decode("utf-8"))
    except UnicodeDecodeError:
        raise HTTPException(status_code=422, detail="Configuration must be UTF-8 text")
    except PipelineConfigError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ResourceResponse(id="", state=d.state())
