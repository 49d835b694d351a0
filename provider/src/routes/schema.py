from fastapi import APIRouter

from provider.src.resources.pipeline import PIPELINE_SCHEMA

router = APIRouter(tags=["schema"])

@router.get("/schema")
def get_schema():
    """Resource schemas exposed to the host."""
    return {
        "resources": {
            "pipeline": PIPELINE_SCHEMA.describe(),
        }
    }
