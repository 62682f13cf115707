"""Naming utilities for consistent connector identifiers.

Every generator derives its ids, paths and URLs through these functions,
so they must stay pure: the same input always yields the same output.
"""
import re

from connector_generator.config import get_settings


def _words(text: str) -> list[str]:
    return [word for word in re.split(r"[-_\s]+", text) if word]


def to_kebab_case(text: str) -> str:
    """Convert to kebab-case.

    "SendMessage" -> "send-message", "send_message" -> "send-message"
    """
    text = re.sub(r"([a-z])([A-Z])", r"\1-\2", text)
    text = re.sub(r"[_\s]+", "-", text)
    return text.lower()


def to_pascal_case(text: str) -> str:
    """"send-message" -> "SendMessage"."""
    return "".join(word[0].upper() + word[1:].lower() for word in _words(text))


def to_camel_case(text: str) -> str:
    """"send-message" -> "sendMessage"."""
    pascal = to_pascal_case(text)
    return pascal[:1].lower() + pascal[1:]


def to_title_case(text: str) -> str:
    """"send-message" -> "Send Message"."""
    return " ".join(word[0].upper() + word[1:].lower() for word in _words(text))


def sanitize_filename(text: str) -> str:
    """Replace anything outside [a-zA-Z0-9-_] with a hyphen and lowercase."""
    return re.sub(r"[^a-zA-Z0-9\-_]", "-", text).lower()


def generate_connector_id(node_id: str, resource: str, operation: str) -> str:
    """"slack", "message", "send" -> "slack-send-message".

    Parts are joined in the fixed order node-operation-resource.
    """
    parts = [
        sanitize_filename(to_kebab_case(node_id)),
        sanitize_filename(to_kebab_case(operation)),
        sanitize_filename(to_kebab_case(resource)),
    ]
    return "-".join(parts)


def generate_display_name(node_name: str, resource_name: str, operation_name: str) -> str:
    """"Slack", "Message", "Send" -> "Slack - Send Message"."""
    return f"{node_name} - {operation_name} {resource_name}"


def generate_template_id(connector_id: str) -> str:
    """"slack-send-message" -> "io.catalyst.template.slack-send-message"."""
    return f"{get_settings().template_namespace}.{connector_id}"


def generate_webhook_path(connector_id: str) -> str:
    """"slack-send-message" -> "catalyst-slack-send-message"."""
    return f"{get_settings().webhook_path_prefix}-{connector_id}"


def generate_webhook_url(connector_id: str) -> str:
    base_url = get_settings().n8n_webhook_base_url.rstrip("/")
    return f"{base_url}/{generate_webhook_path(connector_id)}"


def generate_process_id(connector_id: str) -> str:
    """"slack-send-message" -> "slack-send-message-example"."""
    return f"{connector_id}-example"
