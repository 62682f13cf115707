"""Tests for the text summaries used by preview and compare."""
from connector_generator.extractors import SLACK_SEND_MESSAGE
from connector_generator.generators import (
    element_template_to_json,
    generate_element_template,
    generate_multi_operation_element_template,
    generate_n8n_workflow,
    n8n_workflow_to_json,
)
from connector_generator.utils.workflow_printer import print_element_template, print_workflow


# =========================================================================
# Workflow printing
# =========================================================================

class TestPrintWorkflow:

    def test_summary(self):
        text = print_workflow(n8n_workflow_to_json(generate_n8n_workflow(SLACK_SEND_MESSAGE)))

        assert "WORKFLOW: Slack - Send Message" in text
        assert "Active: ✓ Yes" in text
        assert "[2] Send Message" in text
        assert "Type: slack (v2.2)" in text
        assert "Webhook ──→ Send Message" in text
        assert "Send Message ──✗→ Format Error Response" in text
        assert "Method: POST" in text
        assert "Path: /catalyst-slack-send-message" in text

    def test_parameters(self):
        text = print_workflow(generate_n8n_workflow(SLACK_SEND_MESSAGE).to_dict(), include_params=True)

        assert '• text: "={{ $json.body.text }}"' in text
        assert "• channelId: {...} (3 keys)" in text

    def test_empty_workflow(self):
        text = print_workflow({"name": "Empty"})

        assert "(No connections defined)" in text
        assert "WEBHOOK:" not in text


# =========================================================================
# Element template printing
# =========================================================================

class TestPrintElementTemplate:

    def test_groups_and_required_markers(self):
        text = print_element_template(element_template_to_json(generate_element_template(SLACK_SEND_MESSAGE)))

        assert "ELEMENT TEMPLATE: Catalyst - Slack - Send Message" in text
        assert "  INPUT:" in text
        assert "* Channel [String] → channel" in text

    def test_conditions(self, send_reply_schema):
        template = generate_multi_operation_element_template(send_reply_schema).to_dict()

        text = print_element_template(template)

        assert "when: operation = message:send" in text
        assert "when: operation in message:send, message:reply" in text
