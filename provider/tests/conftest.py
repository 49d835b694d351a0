"""Shared pytest fixtures."""

import json

import httpx
import pytest

from provider.src.services.buildkite import BuildkiteClient

class RecordingAPI:
    """Stub Buildkite API that records requests and replays queued responses."""

    def __init__(self):
        self.requests = []
        self.responses = []

    def respond(self, status_code=200, body=None):
        self.responses.append((status_code, body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.responses.pop(0)
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    def last_json(self):
        return json.loads(self.requests[-1].content)

@pytest.fixture
def api():
    return RecordingAPI()

@pytest.fixture
def client(api):
    with BuildkiteClient(
        organization="acme",
        api_token="test-token",
        transport=httpx.MockTransport(api.handler),
    ) as c:
        yield c

@pytest.fixture
def pipeline_response():
    return {
        "id": "849411f9-9e6d-4739-a0d8-e247088e9b52",
        "url": "https://api.buildkite.com/v2/organizations/acme/pipelines/my-pipeline",
        "web_url": "https://buildkite.com/acme/my-pipeline",
        "name": "My Pipeline",
        "description": "Builds the app",
        "slug": "my-pipeline",
        "repository": "git@github.com:acme/app.git",
        "branch_configuration": "main feature/*",
        "default_branch": "main",
        "provider": {
            "id": "github",
            "webhook_url": "https://webhook.buildkite.com/deliver/abc123",
            "settings": {
                "trigger_mode": "code",
                "build_pull_requests": True,
                "publish_commit_status": False,
            },
        },
        "builds_url": "https://api.buildkite.com/v2/organizations/acme/pipelines/my-pipeline/builds",
        "badge_url": "https://badge.buildkite.com/abc.svg",
        "created_at": "2024-03-01T10:00:00.000Z",
        "env": {"DEPLOY_ENV": "staging"},
        "steps": [
            {
                "type": "script",
                "name": "Build",
                "command": "make build",
                "env": {"GOOS": "linux"},
                "timeout_in_minutes": 10,
                "agent_query_rules": ["queue=default", "os=linux"],
                "artifact_paths": "dist/*",
                "branch_configuration": None,
                "concurrency": None,
                "parallelism": None,
            },
            {"type": "waiter"},
            {
                "type": "script",
                "name": "Deploy",
                "command": "make deploy",
                "agent_query_rules": ["queue=deploy"],
                "concurrency": 1,
                "parallelism": 2,
            },
        ],
    }

@pytest.fixture
def pipeline_config():
    return {
        "name": "My Pipeline",
        "description": "Builds the app",
        "repository": "git@github.com:acme/app.git",
        "branch_configuration": "main feature/*",
        "default_branch": "main",
        "env": {"DEPLOY_ENV": "staging"},
        "provider_settings": {"build_pull_requests": True, "publish_commit_status": False},
        "step": [
            {
                "type": "script",
                "name": "Build",
                "command": "make build",
                "env": {"GOOS": "linux"},
                "timeout_in_minutes": 10,
                "agent_query_rules": ["queue=default", "os=linux"],
                "artifact_paths": "dist/*",
            },
            {"type": "waiter"},
            {
                "type": "script",
                "name": "Deploy",
                "command": "make deploy",
                "agent_query_rules": ["queue=deploy"],
                "concurrency": 1,
                "parallelism": 2,
            },
        ],
    }
