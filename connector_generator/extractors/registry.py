"""Registry of services and the operation schemas they provide.

Lookups are case-insensitive. Unknown services and operations raise
NotFound errors carrying the valid alternatives.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional

import structlog

from connector_generator.errors import NodeNotFoundError, OperationNotFoundError
from connector_generator.extractors.gmail_schema import get_all_gmail_operations, get_gmail_operation
from connector_generator.extractors.slack_schema import get_all_slack_operations, get_slack_operation
from connector_generator.models.schema import OperationSchema

logger = structlog.get_logger()


@dataclass
class NodeProvider:
    """Accessors for the operations of one service."""

    get_all: Callable[[], list[OperationSchema]]
    get: Callable[[str], Optional[OperationSchema]]

    @classmethod
    def from_schemas(cls, schemas: list[OperationSchema]) -> "NodeProvider":
        """Provider over a fixed list, matching on operation code or name."""
        def find(operation: str) -> Optional[OperationSchema]:
            wanted = operation.lower()
            for schema in schemas:
                if schema.operation.lower() == wanted or schema.operation_name.lower() == wanted:
                    return schema
            return None

        return cls(get_all=lambda: list(schemas), get=find)


class NodeRegistry:
    """Service id -> NodeProvider."""

    def __init__(self):
        self._providers: dict[str, NodeProvider] = {}

    def register(self, node_id: str, provider: NodeProvider) -> None:
        key = node_id.lower()
        if key in self._providers:
            logger.info("node_provider_replaced", node_id=key)
        self._providers[key] = provider

    def list_nodes(self) -> list[str]:
        return list(self._providers)

    def exists(self, node_id: str) -> bool:
        return node_id.lower() in self._providers

    def _provider(self, node_id: str) -> NodeProvider:
        provider = self._providers.get(node_id.lower())
        if provider is None:
            raise NodeNotFoundError(node_id, self.list_nodes())
        return provider

    def get_operations(self, node_id: str) -> list[OperationSchema]:
        return self._provider(node_id).get_all()

    def list_operations(self, node_id: str) -> list[str]:
        return [schema.operation for schema in self.get_operations(node_id)]

    def get_operation(self, node_id: str, operation: str) -> OperationSchema:
        provider = self._provider(node_id)
        schema = provider.get(operation)
        if schema is None:
            available = [op.operation for op in provider.get_all()]
            raise OperationNotFoundError(node_id, operation, available)
        return schema


def build_default_registry() -> NodeRegistry:
    """Registry with the built-in Slack and Gmail catalogs."""
    registry = NodeRegistry()
    registry.register("slack", NodeProvider(get_all=get_all_slack_operations, get=get_slack_operation))
    registry.register("gmail", NodeProvider(get_all=get_all_gmail_operations, get=get_gmail_operation))
    return registry


@lru_cache
def get_registry() -> NodeRegistry:
    """Get the process-wide registry."""
    return build_default_registry()


def list_available_nodes() -> list[str]:
    return get_registry().list_nodes()


def node_exists(node_id: str) -> bool:
    return get_registry().exists(node_id)


def list_node_operations(node_id: str) -> list[str]:
    return get_registry().list_operations(node_id)


def get_node_operations(node_id: str) -> list[OperationSchema]:
    return get_registry().get_operations(node_id)


def get_node_operation(node_id: str, operation: str) -> OperationSchema:
    return get_registry().get_operation(node_id, operation)
