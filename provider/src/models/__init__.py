from provider.src.models.pipeline import Pipeline, Step, BuildkiteProvider
from provider.src.models.resource import ResourceRequest, ResourceResponse

__all__ = [
    "Pipeline",
    "Step",
    "BuildkiteProvider",
    "ResourceRequest",
    "ResourceResponse",
]
