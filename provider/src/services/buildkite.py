"""
Buildkite REST API client.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from provider.src.config import get_settings

logger = logging.getLogger(__name__)

class BuildkiteAPIError(Exception):
    """Raised for any non-2xx response from the Buildkite API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Buildkite API error {status_code}: {message}")

class NotFoundError(BuildkiteAPIError):
    """Raised when the API responds with 404."""
    pass

def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text

class BuildkiteClient:
    """
    Authenticated client scoped to one organization.
    Paths are lists of segments relative to the organization, e.g.
    ["pipelines", slug].
    """

    def __init__(
        self,
        organization: str,
        api_token: str,
        base_url: str = "https://api.buildkite.com/v2",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.organization = organization
        self._http = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/organizations/{quote(organization, safe='')}/",
            headers={
                "Authorization": f"Bearer {api_token}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def get(self, path: List[str], params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: List[str], body: Dict[str, Any]) -> Any:
        return self._request("POST", path, body=body)

    def patch(self, path: List[str], body: Dict[str, Any]) -> Any:
        return self._request("PATCH", path, body=body)

    def delete(self, path: List[str]):
        self._request("DELETE", path)

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(
        self,
        method: str,
        path: List[str],
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = "/".join(quote(segment, safe="") for segment in path)
        logger.debug(f"{method} {url}")

        response = self._http.request(method, url, json=body, params=params)

        if response.status_code == 404:
            raise NotFoundError(404, _error_message(response))
        if response.is_error:
            raise BuildkiteAPIError(response.status_code, _error_message(response))

        if not response.content:
            return None
        return response.json()

def build_client() -> BuildkiteClient:
    """Create a client from application settings."""
    settings = get_settings()
    return BuildkiteClient(
        organization=settings.buildkite_organization,
        api_token=settings.buildkite_api_token,
        base_url=settings.buildkite_api_url,
        timeout=settings.request_timeout,
    )

def get_buildkite_client():
    client = build_client()
    try:
        yield client
    finally:
        client.close()
