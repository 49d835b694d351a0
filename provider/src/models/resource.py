from pydantic import BaseModel
from typing import Any, Dict

class ResourceRequest(BaseModel):
    id: str = ""
    config: Dict[str, Any] = {}

class ResourceResponse(BaseModel):
    id: str
    state: Dict[str, Any] = {}
