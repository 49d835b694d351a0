"""
Buildkite pipeline JSON payload models.
"""

from pydantic import BaseModel, model_validator
from typing import Any, Dict, List, Optional

def compact(data: Dict[str, Any], keep: frozenset = frozenset()) -> Dict[str, Any]:
    """Drop empty scalars and lists. Maps are always kept."""
    return {
        key: value
        for key, value in data.items()
        if key in keep or isinstance(value, dict) or value not in ("", 0, None, [])
    }

class BuildkiteModel(BaseModel):
    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # The API returns null for unset fields; fall back to field defaults
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

class Step(BuildkiteModel):
    type: str
    name: str = ""
    command: str = ""
    env: Dict[str, str] = {}
    timeout_in_minutes: int = 0
    agent_query_rules: List[str] = []
    artifact_paths: str = ""
    branch_configuration: str = ""
    concurrency: int = 0
    parallelism: int = 0

    def to_payload(self) -> Dict[str, Any]:
        return compact(self.model_dump(), keep=frozenset({"type"}))

class BuildkiteProvider(BuildkiteModel):
    id: str = ""
    settings: Dict[str, Any] = {}
    webhook_url: str = ""

class Pipeline(BuildkiteModel):
    id: str = ""
    slug: str = ""
    name: str = ""
    repository: str = ""
    description: str = ""
    default_branch: str = ""
    branch_configuration: str = ""
    env: Dict[str, str] = {}
    provider: Optional[BuildkiteProvider] = None
    provider_settings: Dict[str, bool] = {}
    steps: List[Step] = []
    url: str = ""
    web_url: str = ""
    builds_url: str = ""
    badge_url: str = ""
    created_at: str = ""

    def to_payload(self) -> Dict[str, Any]:
        """Request body; the step list is always present."""
        data = compact(self.model_dump(exclude={"steps", "provider"}))
        if self.provider is not None:
            data["provider"] = self.provider.model_dump()
        data["steps"] = [step.to_payload() for step in self.steps]
        return data
