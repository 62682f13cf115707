"""Tests for identifier derivation."""
import pytest

from connector_generator.utils.naming import (
    generate_connector_id,
    generate_display_name,
    generate_process_id,
    generate_template_id,
    generate_webhook_path,
    generate_webhook_url,
    sanitize_filename,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_title_case,
)


# =========================================================================
# Case conversion
# =========================================================================

class TestCaseConversion:

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("SendMessage", "send-message"),
            ("send_message", "send-message"),
            ("postMessage", "post-message"),
            ("send message", "send-message"),
            ("send", "send"),
        ],
    )
    def test_kebab_case(self, text, expected):
        assert to_kebab_case(text) == expected

    def test_pascal_and_camel_case(self):
        assert to_pascal_case("send-message") == "SendMessage"
        assert to_camel_case("send-message") == "sendMessage"
        assert to_camel_case("send_message") == "sendMessage"

    def test_title_case(self):
        assert to_title_case("send-message") == "Send Message"
        assert to_title_case("message") == "Message"

    def test_sanitize_filename(self):
        assert sanitize_filename("Hello World!") == "hello-world-"
        assert sanitize_filename("a/b\\c") == "a-b-c"


# =========================================================================
# Connector ids
# =========================================================================

class TestConnectorIds:

    def test_slack_send_message(self):
        assert generate_connector_id("slack", "message", "send") == "slack-send-message"

    def test_camel_case_operation(self):
        assert generate_connector_id("gmail", "message", "addLabels") == "gmail-add-labels-message"

    @pytest.mark.parametrize(
        "node_id,resource,operation",
        [
            ("slack", "message", "send"),
            ("my/node", "res ource", "op..x"),
            ("Google Sheets", "Sheet", "appendOrUpdate"),
            ("../etc", "passwd", "read"),
        ],
    )
    def test_ids_are_stable_path_segments(self, node_id, resource, operation):
        first = generate_connector_id(node_id, resource, operation)
        second = generate_connector_id(node_id, resource, operation)

        assert first == second
        assert "/" not in first and "\\" not in first
        assert "." not in first and " " not in first
        assert first == first.lower()

    def test_display_name(self):
        assert generate_display_name("Slack", "Message", "Send") == "Slack - Send Message"


# =========================================================================
# Derived names
# =========================================================================

class TestDerivedNames:

    def test_template_id(self):
        assert generate_template_id("slack-send-message") == "io.catalyst.template.slack-send-message"

    def test_webhook_path_and_url(self):
        assert generate_webhook_path("slack-send-message") == "catalyst-slack-send-message"
        assert (
            generate_webhook_url("slack-send-message")
            == "http://catalyst-n8n:5678/webhook/catalyst-slack-send-message"
        )

    def test_process_id(self):
        assert generate_process_id("slack-send-message") == "slack-send-message-example"
