"""Exceptions raised by the connector generator."""
from typing import Optional


class ConnectorGeneratorError(Exception):
    """Base class for all generator errors."""


class NotFoundError(ConnectorGeneratorError):
    """A requested service or operation is not registered.

    ``available`` lists the valid alternatives so callers can show them
    to the user instead of a bare error.
    """

    def __init__(self, message: str, available: Optional[list[str]] = None):
        super().__init__(message)
        self.available: list[str] = list(available or [])


class NodeNotFoundError(NotFoundError):
    """Unknown service ("node") id."""

    def __init__(self, node_id: str, available: list[str]):
        super().__init__(
            f"Node '{node_id}' not found. Available nodes: {', '.join(available)}",
            available,
        )
        self.node_id = node_id


class OperationNotFoundError(NotFoundError):
    """Service exists but does not offer the requested operation."""

    def __init__(self, node_id: str, operation: str, available: list[str]):
        super().__init__(
            f"Operation '{operation}' not found for node '{node_id}'. "
            f"Available operations: {', '.join(available)}",
            available,
        )
        self.node_id = node_id
        self.operation = operation


class ExtractionError(ConnectorGeneratorError):
    """A registered node description could not be turned into a schema."""


class ConnectorWriteError(ConnectorGeneratorError):
    """Committing a connector directory to disk failed."""

    def __init__(self, connector_id: str, directory: str, reason: str):
        super().__init__(f"Failed to write connector '{connector_id}' to {directory}: {reason}")
        self.connector_id = connector_id
        self.directory = directory


class ValidationFailure(ConnectorGeneratorError):
    """An audited document has error-severity issues."""

    def __init__(self, issues: list):
        self.issues = issues
        summary = "; ".join(issue.message for issue in issues[:5])
        more = f" (+{len(issues) - 5} more)" if len(issues) > 5 else ""
        super().__init__(f"{len(issues)} validation error(s): {summary}{more}")
