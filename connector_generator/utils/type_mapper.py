"""Type mapping utilities: generic parameter types -> output formats.

Also holds the small JSON fragments (payload template, output mapping)
that every artifact must agree on.
"""
import json
from typing import Optional

import structlog

from connector_generator.models.documents import (
    Binding,
    Choice,
    Constraints,
    ElementTemplateProperty,
    FieldKind,
)
from connector_generator.models.results import GenerationWarning
from connector_generator.models.schema import OperationParameter

logger = structlog.get_logger()


FIELD_KIND_MAP: dict[str, FieldKind] = {
    "string": "String",
    "number": "String",  # Camunda passes numbers as strings
    "boolean": "Dropdown",  # true/false choices
    "options": "Dropdown",
    "multiOptions": "Dropdown",
    "dateTime": "String",  # ISO format
    "json": "Text",
    "fixedCollection": "Text",  # complex -> JSON string
    "collection": "Text",
}

BOOLEAN_CHOICES = [
    Choice(name="True", value="true"),
    Choice(name="False", value="false"),
]

# Every connector answers with the same envelope, so a single bridge
# implementation can interpret any connector's result.
OUTPUT_MAPPING = {
    "success": "$.success",
    "statusCode": "$.statusCode",
    "error": "$.error",
}


def map_type_to_field_kind(generic_type: str) -> FieldKind:
    """Map a generic parameter type to an element template field kind.

    Unknown types degrade to "String" rather than raising.
    """
    return FIELD_KIND_MAP.get(generic_type, "String")


def map_type_with_warning(
    generic_type: str,
    parameter_name: Optional[str] = None,
) -> tuple[FieldKind, Optional[GenerationWarning]]:
    """Like map_type_to_field_kind, but reports the fallback."""
    if generic_type in FIELD_KIND_MAP:
        return FIELD_KIND_MAP[generic_type], None

    warning = GenerationWarning(
        code="unknown_parameter_type",
        message=f"Unknown parameter type '{generic_type}', rendered as String",
        context={"type": generic_type, "parameter": parameter_name},
    )
    logger.warning(
        "unknown_parameter_type",
        parameter_type=generic_type,
        parameter=parameter_name,
    )
    return "String", warning


def collect_type_warnings(parameters: list[OperationParameter]) -> list[GenerationWarning]:
    """Warnings for every parameter whose type falls back to String."""
    warnings = []
    for param in parameters:
        _, warning = map_type_with_warning(param.type, param.name)
        if warning:
            warnings.append(warning)
    return warnings


def variable_expression(name: str) -> str:
    """Camunda expression referencing a process variable: ${name}."""
    return "${" + name + "}"


def convert_to_element_property(
    param: OperationParameter,
    group: str = "input",
) -> ElementTemplateProperty:
    """Convert an operation parameter to an element template property."""
    prop = ElementTemplateProperty(
        label=param.display_name,
        type=map_type_to_field_kind(param.type),
        value=variable_expression(param.name),
        binding=Binding(type="camunda:inputParameter", name=param.name),
        group=group,
    )

    if param.description:
        prop.description = param.description

    if param.required:
        prop.constraints = Constraints(not_empty=True)

    if param.type == "boolean":
        prop.choices = list(BOOLEAN_CHOICES)
        prop.value = str(param.default).lower() if param.default is not None else "false"

    elif param.is_choice and param.options:
        prop.choices = [Choice(name=opt.name, value=opt.value) for opt in param.options]
        if param.default is not None and not isinstance(param.default, (list, dict)):
            prop.value = str(param.default)
        else:
            prop.value = param.options[0].value

    return prop


def generate_payload_template(parameters: list[OperationParameter]) -> str:
    """JSON object mapping each parameter name to ${name}, order preserved."""
    payload = {param.name: variable_expression(param.name) for param in parameters}
    return json.dumps(payload, indent=2)


def generate_output_mapping() -> str:
    return json.dumps(OUTPUT_MAPPING, indent=2)


def format_default_value(param: OperationParameter) -> str:
    """Render a parameter default as a form field default value."""
    default = param.default
    if default is None:
        return param.placeholder or ""
    if isinstance(default, bool):
        return str(default).lower()
    if isinstance(default, (dict, list)):
        return json.dumps(default, separators=(",", ":")) if default else ""
    return str(default)


# =============================================================================
# CLASSIFIERS
# =============================================================================

# Ordered: the first bucket whose keyword occurs in the service name wins.
CATEGORY_KEYWORDS: list[tuple[str, list[str]]] = [
    ("communication", ["slack", "discord", "telegram", "teams", "whatsapp", "twilio", "mattermost"]),
    ("communication", ["email", "gmail", "outlook", "sendgrid", "mailchimp", "smtp"]),
    ("productivity", ["sheets", "drive", "notion", "airtable", "trello", "asana", "monday"]),
    ("business", ["salesforce", "hubspot", "pipedrive", "zoho"]),
    ("developer-tools", ["github", "gitlab", "jira", "linear", "http", "webhook", "api"]),
    ("data", ["postgres", "mysql", "mongodb", "supabase", "redis"]),
    ("ai", ["openai", "anthropic", "ai", "gpt", "claude"]),
]
DEFAULT_CATEGORY = "integrations"

SERVICE_COLORS: dict[str, str] = {
    "slack": "#4A154B",
    "discord": "#5865F2",
    "telegram": "#0088cc",
    "github": "#24292e",
    "gitlab": "#FC6D26",
    "notion": "#000000",
    "airtable": "#18BFFF",
    "trello": "#0079BF",
    "salesforce": "#00A1E0",
    "hubspot": "#FF7A59",
    "jira": "#0052CC",
    "google": "#4285F4",
    "microsoft": "#00A4EF",
    "stripe": "#635BFF",
    "shopify": "#96BF48",
    "openai": "#10a37f",
    "anthropic": "#d97757",
}
DEFAULT_COLOR = "#6366f1"


def determine_category(node_name: str) -> str:
    """Classify a service into a catalog category by keyword."""
    name = node_name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def get_service_color(node_name: str) -> str:
    name = node_name.lower()
    for service, color in SERVICE_COLORS.items():
        if service in name:
            return color
    return DEFAULT_COLOR


def generate_tags(node_name: str, resource: str = "", operation: str = "") -> list[str]:
    """Ordered unique tags: node, resource, operation, category."""
    tags: list[str] = []
    for tag in (node_name.lower(), resource.lower(), operation.lower(), determine_category(node_name)):
        if tag and tag not in tags:
            tags.append(tag)
    return tags

