"""Tests for pipeline configuration parsing."""

import pytest
from provider.src.resources.pipeline import parse_pipeline_config, parse_pipeline_dict
from provider.src.services.config_parser import PipelineConfigError

def test_valid_pipeline():
    config = """
pipeline:
  name: Test Pipeline
  repository: git@github.com:acme/app.git
  env:
    CI: "true"
  step:
    - type: script
      name: Build
      command: make build
      agent_query_rules:
        - queue=default
    - type: waiter
    - type: script
      name: Test
      command: make test
      parallelism: 4
"""
    d = parse_pipeline_config(config)
    assert d.get("name") == "Test Pipeline"
    assert d.get("env") == {"CI": "true"}
    steps = d.get("step")
    assert len(steps) == 3
    assert steps[0]["agent_query_rules"] == ["queue=default"]
    assert steps[1]["type"] == "waiter"
    assert steps[1]["command"] == ""
    assert steps[2]["parallelism"] == 4

def test_missing_steps():
    config = """
pipeline:
  name: Bad Pipeline
  repository: git@github.com:acme/app.git
"""
    with pytest.raises(PipelineConfigError, match="missing 'step'"):
        parse_pipeline_config(config)

def test_empty_step_list():
    with pytest.raises(PipelineConfigError, match="at least one 'step'"):
        parse_pipeline_dict({"name": "p", "repository": "r", "step": []})

def test_missing_repository():
    with pytest.raises(PipelineConfigError, match="missing 'repository'"):
        parse_pipeline_dict({"name": "p", "step": [{"type": "script"}]})

def test_missing_step_type():
    config = """
pipeline:
  name: Bad Pipeline
  repository: git@github.com:acme/app.git
  step:
    - type: script
    - name: Build
      command: make
"""
    with pytest.raises(PipelineConfigError, match="Step 1 missing 'type'"):
        parse_pipeline_config(config)

def test_wrong_step_field_type():
    config = {
        "name": "p",
        "repository": "r",
        "step": [{"type": "script", "timeout_in_minutes": "ten"}],
    }
    with pytest.raises(PipelineConfigError, match="'timeout_in_minutes' must be a int"):
        parse_pipeline_dict(config)

def test_provider_settings_must_be_bool():
    config = {
        "name": "p",
        "repository": "r",
        "provider_settings": {"build_tags": "yes"},
        "step": [{"type": "script"}],
    }
    with pytest.raises(PipelineConfigError, match="value for 'build_tags' must be a bool"):
        parse_pipeline_dict(config)

def test_unknown_attribute():
    config = {"name": "p", "repository": "r", "colour": "red", "step": [{"type": "script"}]}
    with pytest.raises(PipelineConfigError, match="unknown attribute 'colour'"):
        parse_pipeline_dict(config)

def test_computed_attribute_rejected():
    config = {"name": "p", "repository": "r", "web_url": "x", "step": [{"type": "script"}]}
    with pytest.raises(PipelineConfigError, match="'web_url' is computed"):
        parse_pipeline_dict(config)

def test_computed_attribute_allowed_for_state():
    config = {"name": "p", "repository": "r", "web_url": "x", "step": [{"type": "script"}]}
    d = parse_pipeline_dict(config, allow_computed=True)
    assert d.get("web_url") == "x"

def test_slug_is_settable():
    d = parse_pipeline_dict({"name": "p", "repository": "r", "slug": "p", "step": [{"type": "script"}]})
    assert d.get("slug") == "p"

def test_empty_config():
    with pytest.raises(PipelineConfigError, match="Empty"):
        parse_pipeline_config("")

def test_missing_pipeline_block():
    with pytest.raises(PipelineConfigError, match="'pipeline' block"):
        parse_pipeline_config("name: Loose Pipeline\n")

def test_invalid_yaml():
    with pytest.raises(PipelineConfigError, match="Invalid YAML"):
        parse_pipeline_config("pipeline: [unclosed")

def test_dict_parsing():
    config = {
        "name": "Dict Pipeline",
        "repository": "https://github.com/acme/app.git",
        "description": None,
        "step": [
            {"type": "script", "command": "echo hello"}
        ]
    }
    d = parse_pipeline_dict(config)
    assert d.get("name") == "Dict Pipeline"
    assert d.get("description") == ""
    assert len(d.get("step")) == 1
