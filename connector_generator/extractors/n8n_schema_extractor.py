"""Build multi-operation schemas from n8n-style node descriptions.

Node descriptions are registered explicitly with register_node_description().
A description mirrors the tables of an n8n node: per resource, the raw
operation option list and the raw field list, where each field declares the
resource/operation pairs it is shown for in ``displayOptions.show``.
"""
from functools import lru_cache
from typing import Any, Optional

import structlog
from pydantic import Field, ValidationError

from connector_generator.errors import ExtractionError
from connector_generator.models.schema import (
    CHOICE_TYPES,
    CamelModel,
    MultiOperationSchema,
    OperationParameter,
    ParameterOption,
    ParameterType,
    ResourceDefinition,
    ResourceOperation,
)
from connector_generator.utils.type_mapper import determine_category, get_service_color

logger = structlog.get_logger()


GENERIC_TYPES = {t.value for t in ParameterType}

# n8n field types outside the generic vocabulary that still carry a value
RAW_TYPE_ALIASES = {
    "resourceLocator": ParameterType.STRING.value,
    "hidden": ParameterType.STRING.value,
    "color": ParameterType.STRING.value,
}

# Display-only fields
SKIPPED_TYPES = {"notice", "button", "callout"}


class ResourceDescription(CamelModel):
    """One resource of a node description, in raw n8n shape."""

    value: str
    name: str
    operations: list[dict[str, Any]] = Field(default_factory=list)
    fields: list[dict[str, Any]] = Field(default_factory=list)


class NodeDescription(CamelModel):
    """Registered description of one n8n node."""

    display_name: str
    description: str = ""
    icon: Optional[str] = None
    color: Optional[str] = None
    credentials: list[str] = Field(default_factory=list)
    category: Optional[str] = None
    subcategory: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    resources: list[ResourceDescription] = Field(default_factory=list)


class DescriptionRegistry:
    """Service id -> NodeDescription."""

    def __init__(self):
        self._descriptions: dict[str, NodeDescription] = {}

    def register(self, node_id: str, description: NodeDescription) -> None:
        self._descriptions[node_id.lower()] = description
        logger.debug("node_description_registered", node_id=node_id.lower())

    def get(self, node_id: str) -> Optional[NodeDescription]:
        return self._descriptions.get(node_id.lower())

    def exists(self, node_id: str) -> bool:
        return node_id.lower() in self._descriptions

    def list_nodes(self) -> list[str]:
        return list(self._descriptions)


@lru_cache
def get_description_registry() -> DescriptionRegistry:
    """Process-wide description registry, seeded with the built-in Gmail node."""
    from connector_generator.extractors.gmail_description import GMAIL_DESCRIPTION

    registry = DescriptionRegistry()
    registry.register("gmail", GMAIL_DESCRIPTION)
    return registry


def register_node_description(node_id: str, description: NodeDescription) -> None:
    """Make a node available to extract_n8n_node_schema()."""
    get_description_registry().register(node_id, description)


# =============================================================================
# EXTRACTION
# =============================================================================

def extract_n8n_node_schema(
    node_id: str,
    registry: Optional[DescriptionRegistry] = None,
) -> MultiOperationSchema:
    """
    Extract the complete multi-operation schema of a node.

    Args:
        node_id: Service id, e.g. "gmail"
        registry: Description registry to read from (default: process-wide)

    Returns:
        Schema with every resource and operation. Services without a
        registered description get a single message/send stub.
    """
    registry = registry or get_description_registry()
    description = registry.get(node_id)
    node_name = _capitalize(node_id)

    if description is None:
        logger.warning("node_description_missing", node_id=node_id, fallback="message:send")
        return MultiOperationSchema(
            node_id=node_id,
            node_name=node_name,
            display_name=f"{node_name} Connector",
            description=f"{node_name} integration connector",
            color=get_service_color(node_id),
            category=determine_category(node_id),
            tags=[node_id.lower(), "integration", "automation"],
            resources=[_stub_resource()],
        )

    logger.info("extracting_node_schema", node_id=node_id, resources=len(description.resources))

    resources = [_parse_resource(node_id, resource) for resource in description.resources]
    resources = [resource for resource in resources if resource.operations]

    try:
        schema = MultiOperationSchema(
            node_id=node_id,
            node_name=description.display_name or node_name,
            display_name=f"{description.display_name or node_name} Connector",
            description=description.description or f"{node_name} integration connector",
            icon=description.icon,
            color=description.color or get_service_color(node_id),
            credentials=list(description.credentials),
            category=description.category or determine_category(node_id),
            subcategory=description.subcategory,
            tags=list(description.tags) or [node_id.lower(), "integration", "automation"],
            resources=resources,
        )
    except ValidationError as exc:
        raise ExtractionError(f"Description of '{node_id}' is invalid: {exc}") from exc

    logger.info(
        "node_schema_extracted",
        node_id=node_id,
        resources=len(schema.resources),
        operations=schema.total_operations(),
    )
    return schema


def _stub_resource() -> ResourceDefinition:
    return ResourceDefinition(
        value="message",
        name="Message",
        operations=[
            ResourceOperation(
                value="send",
                name="Send",
                description="Send a message",
                parameters=[],
                tier=1,
            )
        ],
    )


def _parse_resource(node_id: str, resource: ResourceDescription) -> ResourceDefinition:
    operations = []
    for raw_operation in resource.operations:
        value = raw_operation.get("value")
        if not value:
            raise ExtractionError(
                f"Operation without a value in resource '{resource.value}' of '{node_id}'"
            )
        name = raw_operation.get("name") or _capitalize(value)
        fields = filter_fields_for_operation(resource.fields, resource.value, value)
        parameters = [_to_parameter(node_id, field) for field in fields]
        parameters = [param for param in parameters if param is not None]

        operations.append(
            ResourceOperation(
                value=value,
                name=name,
                description=(
                    raw_operation.get("action")
                    or raw_operation.get("description")
                    or f"{name} operation"
                ),
                parameters=parameters,
                tier=classify_operation_tier(parameters),
            )
        )

    return ResourceDefinition(value=resource.value, name=resource.name, operations=operations)


def is_field_visible(field: dict, resource: str, operation: str) -> bool:
    """Whether a raw field is shown for the resource/operation pair.

    A field without displayOptions.show is never shown; a show block that
    omits the resource or operation key matches any value for it.
    """
    show = (field.get("displayOptions") or {}).get("show")
    if not show:
        return False
    if "resource" in show and resource not in show["resource"]:
        return False
    if "operation" in show and operation not in show["operation"]:
        return False
    return True


def filter_fields_for_operation(fields: list[dict], resource: str, operation: str) -> list[dict]:
    """Visible fields of one operation, deduplicated by name (first wins)."""
    kept: dict[str, dict] = {}
    for field in fields:
        if not is_field_visible(field, resource, operation):
            continue
        name = field.get("name")
        if name in kept:
            logger.debug(
                "duplicate_field_dropped",
                field=name,
                resource=resource,
                operation=operation,
            )
            continue
        kept[name] = field
    return list(kept.values())


def map_raw_type(raw_type: Optional[str]) -> str:
    """Map an n8n field type to the generic vocabulary; unknown -> string."""
    if raw_type in GENERIC_TYPES:
        return raw_type
    if raw_type in RAW_TYPE_ALIASES:
        return RAW_TYPE_ALIASES[raw_type]
    logger.debug("raw_type_defaulted", raw_type=raw_type)
    return ParameterType.STRING.value


def _to_parameter(node_id: str, field: dict) -> Optional[OperationParameter]:
    if field.get("type") in SKIPPED_TYPES:
        return None

    generic_type = map_raw_type(field.get("type"))
    options = None
    if generic_type in CHOICE_TYPES:
        options = [
            ParameterOption(name=str(opt.get("name", opt["value"])), value=str(opt["value"]))
            for opt in field.get("options") or []
            if "value" in opt
        ]
        if not options:
            # Options loaded at runtime (loadOptionsMethod): enter ids as text
            generic_type = ParameterType.STRING.value
            options = None

    default = field.get("default")
    if default == "" or (generic_type in {"fixedCollection", "collection"} and default == {}):
        default = None

    try:
        return OperationParameter(
            name=field.get("name", ""),
            display_name=field.get("displayName") or field.get("name", ""),
            type=generic_type,
            required=bool(field.get("required", False)),
            default=default,
            description=field.get("description"),
            placeholder=field.get("placeholder"),
            options=options,
        )
    except ValidationError as exc:
        raise ExtractionError(
            f"Field '{field.get('name')}' of '{node_id}' cannot be converted: {exc}"
        ) from exc


def classify_operation_tier(parameters: list[OperationParameter]) -> int:
    """
    Coarse complexity tier of an operation.

    3: any nested collection type, or a binary-looking parameter
    2: any options parameter, or a description mentioning "display"
    1: otherwise
    """
    if any(p.is_nested or "binary" in p.name for p in parameters):
        return 3

    if any(p.type == "options" or "display" in (p.description or "") for p in parameters):
        return 2

    return 1


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]
