import httpx
from fastapi import APIRouter, Depends

from provider.src.services.buildkite import (
    BuildkiteAPIError,
    BuildkiteClient,
    get_buildkite_client,
)

router = APIRouter(tags=["health"])

@router.get("/health")
def health_check():
    return {"status": "healthy", "service": "buildkite-pipeline-provider"}

@router.get("/health/buildkite")
def buildkite_health_check(client: BuildkiteClient = Depends(get_buildkite_client)):
    try:
        client.get(["pipelines"], params={"per_page": 1})
        return {
            "status": "healthy",
            "buildkite": "connected",
            "organization": client.organization,
        }
    except (BuildkiteAPIError, httpx.HTTPError) as e:
        return {"status": "unhealthy", "buildkite": str(e)}
