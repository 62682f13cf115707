"""connector.json generator."""
import json
from datetime import datetime, timezone
from typing import Optional

from connector_generator.models.documents import ConnectorMetadata, MetadataSource, QualityRecord
from connector_generator.models.schema import MultiOperationSchema, OperationSchema
from connector_generator.utils.icon_mapper import get_service_icon
from connector_generator.utils.naming import generate_connector_id
from connector_generator.utils.type_mapper import determine_category, get_service_color


MULTI_OPERATION_BASE_VERSION = "2.0.0"

# Complexity weights per parameter type; primitives weigh nothing
TYPE_WEIGHTS = {
    "options": 1,
    "fixedCollection": 3,
    "collection": 3,
    "json": 3,
}
MULTIPLE_CREDENTIALS_WEIGHT = 2


def isoformat_utc(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T12:00:00.000Z."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def classify_quality_tier(schema: OperationSchema) -> int:
    """
    Classify how much human attention a generated connector needs.

    1: fully automated, 2: needs review, 3: manual work required.
    """
    score = sum(TYPE_WEIGHTS.get(param.type, 0) for param in schema.parameters)
    if len(schema.credentials) > 1:
        score += MULTIPLE_CREDENTIALS_WEIGHT

    if score <= 2:
        return 1
    elif score <= 5:
        return 2
    return 3


def _authentication(credentials: list[str]) -> Optional[str]:
    return "api-key" if credentials else None


def generate_metadata(
    schema: OperationSchema,
    version: str = "1.0.0",
    created_at: Optional[datetime] = None,
) -> ConnectorMetadata:
    """Generate connector.json of a single-operation connector."""
    connector_id = generate_connector_id(schema.node_id, schema.resource, schema.operation)

    return ConnectorMetadata(
        id=connector_id,
        name=schema.display_name,
        description=schema.description,
        version=version,
        type="integration",
        category=schema.category or determine_category(schema.node_name),
        subcategory=schema.subcategory,
        icon=get_service_icon(schema.node_id),
        color=schema.color or get_service_color(schema.node_name),
        tags=list(schema.tags),
        source=MetadataSource(
            node=schema.node_id,
            resource=schema.resource,
            operation=schema.operation,
        ),
        quality=QualityRecord(tier=classify_quality_tier(schema)),
        authentication=_authentication(schema.credentials),
        created_at=isoformat_utc(created_at),
        files={
            "readme": "README.md",
            "n8nWorkflow": f"{connector_id}.n8n.json",
            "elementTemplate": f"{connector_id}.element.json",
            "exampleBpmn": f"{connector_id}.bpmn",
        },
    )


def generate_multi_operation_metadata(
    schema: MultiOperationSchema,
    version: str = MULTI_OPERATION_BASE_VERSION,
    created_at: Optional[datetime] = None,
) -> ConnectorMetadata:
    """Generate connector.json of a multi-operation connector.

    The quality tier is the highest tier among the included operations.
    """
    node_id = schema.node_id
    tiers = [operation.tier for _, operation in schema.iter_operations()]

    return ConnectorMetadata(
        id=node_id,
        name=schema.display_name,
        description=schema.description,
        version=version,
        type="integration",
        category=schema.category or determine_category(schema.node_name),
        subcategory=schema.subcategory,
        icon=get_service_icon(node_id),
        color=schema.color or get_service_color(schema.node_name),
        tags=list(schema.tags),
        source=MetadataSource(node=node_id),
        quality=QualityRecord(tier=max(tiers) if tiers else 1),
        authentication=_authentication(schema.credentials),
        created_at=isoformat_utc(created_at),
        files={
            "readme": "README.md",
            "elementTemplate": f"{node_id}.element.json",
            "n8nWorkflow": f"{node_id}-template.n8n.json",
            "exampleBpmn": f"{node_id}-example.bpmn",
            "setupBpmn": f"{node_id}-setup.bpmn",
        },
        multi_operation=True,
        operation_count=schema.total_operations(),
        resources=[resource.name for resource in schema.resources],
        credentials=list(schema.credentials),
    )


def metadata_to_json(metadata: ConnectorMetadata) -> str:
    return json.dumps(metadata.to_dict(), indent=2)
