"""Tests for n8n workflow generation."""
import json

import pytest

from connector_generator.extractors import GMAIL_SEND_EMAIL, SLACK_SEND_MESSAGE, extract_n8n_node_schema, get_node_operation
from connector_generator.generators import generate_multi_operation_workflow, generate_n8n_workflow, n8n_workflow_to_json
from connector_generator.generators.n8n_workflow import (
    ERROR_NODE_NAME,
    RESPOND_NODE_NAME,
    WEBHOOK_NODE_NAME,
    extract_webhook_path,
    validate_workflow,
)


# =========================================================================
# Single-operation workflows
# =========================================================================

class TestSingleOperationWorkflow:

    @pytest.fixture
    def workflow(self):
        return json.loads(n8n_workflow_to_json(generate_n8n_workflow(SLACK_SEND_MESSAGE)))

    def test_nodes(self, workflow):
        assert [n["name"] for n in workflow["nodes"]] == [
            WEBHOOK_NODE_NAME,
            "Send Message",
            ERROR_NODE_NAME,
            RESPOND_NODE_NAME,
        ]
        assert workflow["name"] == "Slack - Send Message"
        assert workflow["active"] is True
        assert workflow["settings"] == {"executionOrder": "v1"}

    def test_webhook(self, workflow):
        webhook = workflow["nodes"][0]

        assert webhook["type"] == "n8n-nodes-base.webhook"
        assert webhook["parameters"]["path"] == "catalyst-slack-send-message"
        assert webhook["parameters"]["httpMethod"] == "POST"
        assert webhook["parameters"]["responseMode"] == "responseNode"
        assert webhook["webhookId"] == "catalyst-slack-send-message"
        assert extract_webhook_path(workflow) == "catalyst-slack-send-message"

    def test_slack_parameters(self, workflow):
        service = workflow["nodes"][1]

        assert service["type"] == "n8n-nodes-base.slack"
        assert service["typeVersion"] == 2.2
        assert service["id"] == "slack-1"
        assert service["parameters"]["select"] == "channel"
        assert service["parameters"]["channelId"] == {
            "__rl": True,
            "value": "={{ $json.body.channel }}",
            "mode": "id",
        }
        assert service["parameters"]["text"] == "={{ $json.body.text }}"
        assert "credentials" not in service

    def test_connections_include_error_edge(self, workflow):
        connections = workflow["connections"]

        assert connections[WEBHOOK_NODE_NAME]["main"][0][0]["node"] == "Send Message"
        assert connections["Send Message"]["main"][0][0]["node"] == RESPOND_NODE_NAME
        assert connections["Send Message"]["error"][0][0]["node"] == ERROR_NODE_NAME
        assert connections[ERROR_NODE_NAME]["main"][0][0]["node"] == RESPOND_NODE_NAME

    def test_error_envelope(self, workflow):
        error_node = workflow["nodes"][2]
        respond_node = workflow["nodes"][3]

        assert "success: false" in error_node["parameters"]["jsCode"]
        assert "statusCode: 500" in error_node["parameters"]["jsCode"]
        assert "success: true" in respond_node["parameters"]["responseBody"]

    def test_is_valid(self, workflow):
        assert validate_workflow(workflow) == []

    def test_gmail_send_parameters(self):
        params = generate_n8n_workflow(GMAIL_SEND_EMAIL).nodes[1].parameters

        assert params["sendTo"] == "={{ $json.body.to }}"
        assert params["emailType"] == "text"
        assert params["options"] == {
            "ccList": "={{ $json.body.cc }}",
            "bccList": "={{ $json.body.bcc }}",
        }

    def test_gmail_other_operations_use_generic_parameters(self):
        schema = get_node_operation("gmail", "get")
        params = generate_n8n_workflow(schema).nodes[1].parameters

        assert params["resource"] == "message"
        assert params["operation"] == "get"
        assert params["messageId"] == "={{ $json.body.messageId }}"

    def test_unknown_service_defaults(self, acme_schema):
        workflow = generate_n8n_workflow(acme_schema)
        service = workflow.get_node("Create Ticket")

        assert service.type_version == 1
        assert service.parameters == {
            "resource": "ticket",
            "operation": "create",
            "title": "={{ $json.body.title }}",
            "urgent": "={{ $json.body.urgent }}",
            "priority": "={{ $json.body.priority }}",
        }


# =========================================================================
# Multi-operation templates
# =========================================================================

class TestMultiOperationWorkflow:

    @pytest.fixture
    def workflow(self):
        schema = extract_n8n_node_schema("gmail").filter_by_tier(2)
        return generate_multi_operation_workflow(schema).to_dict()

    def test_template_shape(self, workflow):
        assert workflow["name"] == "Catalyst Gmail Connector Template"
        assert workflow["active"] is False
        assert [n["name"] for n in workflow["nodes"]] == [
            WEBHOOK_NODE_NAME,
            "Gmail",
            ERROR_NODE_NAME,
            RESPOND_NODE_NAME,
        ]
        assert workflow["nodes"][0]["parameters"]["path"] == "catalyst-gmail"
        assert validate_workflow(workflow) == []

    def test_every_parameter_is_mapped(self, workflow):
        params = workflow["nodes"][1]["parameters"]

        assert list(params) == sorted(params)
        assert params["sendTo"] == "={{ $json.body.sendTo }}"
        assert params["labelId"] == "={{ $json.body.labelId }}"
        assert "resource" not in params

    def test_error_code_lists_resources(self, workflow):
        code = workflow["nodes"][2]["parameters"]["jsCode"]

        assert "Open the Gmail node in n8n" in code
        assert "Select a Resource (Message, Label)" in code
        assert "{node_name}" not in code
        assert "`Connector not configured." in code

    def test_description_counts(self, workflow):
        assert "Supports 2 resources with 11 operations." in workflow["meta"]["description"]


# =========================================================================
# Workflow validation
# =========================================================================

class TestValidateWorkflow:

    def test_reports_missing_fields(self):
        errors = validate_workflow({"nodes": []})

        assert "Missing workflow name" in errors
        assert "Workflow has no nodes" in errors
        assert "Missing connections object" in errors

    def test_reports_dangling_connections(self):
        workflow = {
            "name": "x",
            "nodes": [{"id": "1", "name": "A", "type": "t", "position": [0, 0]}],
            "connections": {
                "A": {"main": [[{"node": "B"}]], "error": [[{"node": "C"}]]},
                "Ghost": {"main": []},
            },
        }

        errors = validate_workflow(workflow)

        assert "Connection target not found: B" in errors
        assert "Connection target not found: C" in errors
        assert "Connection source not found: Ghost" in errors

    def test_reports_duplicate_names(self):
        node = {"id": "1", "name": "A", "type": "t", "position": [0, 0]}
        errors = validate_workflow({"name": "x", "nodes": [node, dict(node, id="2")], "connections": {}})

        assert errors == ["Duplicate node name: A"]

    def test_reports_malformed_entries(self):
        workflow = {
            "name": "x",
            "nodes": [{"id": "1", "name": "A", "type": "t", "position": [0, 0]}, "oops"],
            "connections": {"A": {"main": [[None, {"node": "A"}]]}, "B": []},
        }

        errors = validate_workflow(workflow)

        assert errors == [
            "Node #1 is not an object",
            "Connection target not found: None",
            "Connection source not found: B",
            "Connections of B must be an object",
        ]

    def test_reports_wrong_container_types(self):
        errors = validate_workflow({"name": "x", "nodes": {}, "connections": []})

        assert errors == ["Nodes must be an array", "Connections must be an object"]

    def test_webhook_path_without_webhook(self):
        assert extract_webhook_path({"nodes": []}) is None
