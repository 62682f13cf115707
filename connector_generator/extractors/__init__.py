"""Schema extraction: static catalogs and n8n node descriptions."""
from connector_generator.extractors.registry import (
    NodeProvider,
    NodeRegistry,
    get_node_operation,
    get_node_operations,
    get_registry,
    list_available_nodes,
    list_node_operations,
    node_exists,
)
from connector_generator.extractors.n8n_schema_extractor import (
    DescriptionRegistry,
    NodeDescription,
    ResourceDescription,
    classify_operation_tier,
    extract_n8n_node_schema,
    register_node_description,
)
from connector_generator.extractors.slack_schema import SLACK_SEND_MESSAGE
from connector_generator.extractors.gmail_schema import GMAIL_SEND_EMAIL

__all__ = [
    "NodeProvider",
    "NodeRegistry",
    "get_registry",
    "get_node_operation",
    "get_node_operations",
    "list_available_nodes",
    "list_node_operations",
    "node_exists",
    "DescriptionRegistry",
    "NodeDescription",
    "ResourceDescription",
    "classify_operation_tier",
    "extract_n8n_node_schema",
    "register_node_description",
    "SLACK_SEND_MESSAGE",
    "GMAIL_SEND_EMAIL",
]
