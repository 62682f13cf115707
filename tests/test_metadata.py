"""Tests for connector.json and README generation."""
import json
from datetime import datetime, timezone

import pytest

from connector_generator.extractors import GMAIL_SEND_EMAIL, SLACK_SEND_MESSAGE, extract_n8n_node_schema
from connector_generator.generators import (
    classify_quality_tier,
    generate_metadata,
    generate_multi_operation_metadata,
    generate_multi_operation_readme,
    generate_readme,
    metadata_to_json,
)
from connector_generator.generators.metadata import isoformat_utc
from connector_generator.models.schema import OperationParameter

MOMENT = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _with_types(schema, *types):
    params = [
        OperationParameter(
            name=f"p{i}",
            display_name=f"P{i}",
            type=param_type,
            options=[{"name": "A", "value": "a"}] if param_type == "options" else None,
        )
        for i, param_type in enumerate(types)
    ]
    return schema.model_copy(update={"parameters": params, "credentials": []})


# =========================================================================
# Single-operation metadata
# =========================================================================

class TestMetadata:

    @pytest.fixture
    def metadata(self):
        return json.loads(metadata_to_json(generate_metadata(SLACK_SEND_MESSAGE, created_at=MOMENT)))

    def test_identity(self, metadata):
        assert metadata["id"] == "slack-send-message"
        assert metadata["name"] == "Slack - Send Message"
        assert metadata["version"] == "1.0.0"
        assert metadata["type"] == "integration"
        assert metadata["category"] == "communication"
        assert metadata["subcategory"] == "messaging"

    def test_presentation(self, metadata):
        assert metadata["icon"] == "icons/slack.svg"
        assert metadata["color"] == "#4A154B"
        assert metadata["authentication"] == "api-key"
        assert metadata["featured"] is False

    def test_source_and_quality(self, metadata):
        assert metadata["source"] == {
            "type": "n8n",
            "node": "slack",
            "resource": "message",
            "operation": "send",
            "version": "1.0",
        }
        assert metadata["quality"] == {"tier": 1, "generated": True, "reviewed": False, "tested": False}

    def test_created_at(self, metadata):
        assert metadata["createdAt"] == "2024-01-01T12:00:00.000Z"

    def test_files(self, metadata):
        assert metadata["files"] == {
            "readme": "README.md",
            "n8nWorkflow": "slack-send-message.n8n.json",
            "elementTemplate": "slack-send-message.element.json",
            "exampleBpmn": "slack-send-message.bpmn",
        }

    def test_single_operation_has_no_multi_fields(self, metadata):
        assert "multiOperation" not in metadata
        assert "operationCount" not in metadata

    def test_version_is_passed_through(self):
        assert generate_metadata(GMAIL_SEND_EMAIL, version="1.2.4").version == "1.2.4"


# =========================================================================
# Quality tiers
# =========================================================================

class TestQualityTier:

    @pytest.mark.parametrize(
        "types,tier",
        [
            ((), 1),
            (("string", "number", "boolean"), 1),
            (("options", "options"), 1),
            (("options", "json"), 2),
            (("collection", "collection"), 3),
        ],
    )
    def test_weights(self, types, tier):
        assert classify_quality_tier(_with_types(SLACK_SEND_MESSAGE, *types)) == tier

    def test_multiple_credentials_add_weight(self):
        single = _with_types(SLACK_SEND_MESSAGE, "options", "options")
        multiple = single.model_copy(update={"credentials": ["a", "b"]})

        assert classify_quality_tier(single) == 1
        assert classify_quality_tier(multiple) == 2

    def test_is_deterministic(self):
        schema = _with_types(SLACK_SEND_MESSAGE, "fixedCollection", "options")
        assert classify_quality_tier(schema) == classify_quality_tier(schema.model_copy())


# =========================================================================
# Multi-operation metadata
# =========================================================================

class TestMultiOperationMetadata:

    @pytest.fixture
    def metadata(self):
        schema = extract_n8n_node_schema("gmail").filter_by_tier(2)
        return generate_multi_operation_metadata(schema, created_at=MOMENT).to_dict()

    def test_identity(self, metadata):
        assert metadata["id"] == "gmail"
        assert metadata["version"] == "2.0.0"
        assert metadata["source"] == {"type": "n8n", "node": "gmail", "version": "1.0"}

    def test_multi_fields(self, metadata):
        assert metadata["multiOperation"] is True
        assert metadata["operationCount"] == 11
        assert metadata["resources"] == ["Message", "Label"]
        assert metadata["credentials"] == ["gmailOAuth2"]

    def test_quality_tier_is_highest_operation_tier(self, metadata):
        assert metadata["quality"]["tier"] == 2

    def test_files(self, metadata):
        assert metadata["files"]["n8nWorkflow"] == "gmail-template.n8n.json"
        assert metadata["files"]["exampleBpmn"] == "gmail-example.bpmn"
        assert metadata["files"]["setupBpmn"] == "gmail-setup.bpmn"


# =========================================================================
# Timestamps
# =========================================================================

class TestTimestamps:

    def test_naive_datetimes_are_utc(self):
        assert isoformat_utc(datetime(2024, 5, 6, 7, 8, 9, 123456)) == "2024-05-06T07:08:09.123Z"

    def test_now(self):
        assert isoformat_utc().endswith("Z")


# =========================================================================
# README
# =========================================================================

class TestReadme:

    def test_single_operation(self):
        readme = generate_readme(SLACK_SEND_MESSAGE)

        assert readme.startswith("# Slack - Send Message\n")
        assert "| Connector ID | `slack-send-message` |" in readme
        assert "| `channel` | Channel | string | Yes |" in readme
        assert "Select `slack-send-message.n8n.json`" in readme
        assert "configure credentials (slackApi, slackOAuth2Api)" in readme
        assert '"channel": "${channel}"' in readme
        assert "Generated with Catalyst Connector Generator" in readme

    def test_pipes_are_escaped(self, acme_schema):
        acme_schema.parameters[0].description = "a | b"

        assert "a \\| b" in generate_readme(acme_schema)

    def test_no_parameters(self, acme_schema):
        readme = generate_readme(acme_schema.model_copy(update={"parameters": []}))

        assert "This operation takes no parameters." in readme

    def test_multi_operation(self):
        readme = generate_multi_operation_readme(extract_n8n_node_schema("gmail"))

        assert readme.startswith("# Gmail Connector\n")
        assert "**Resources**: Message, Label" in readme
        assert "**Total Operations**: 12" in readme
        assert "gmail-template.n8n.json" in readme
