"""Catalyst connector generator: Camunda element templates, n8n workflows and BPMN examples from n8n node schemas."""

__version__ = "1.0.0"

from connector_generator.connector_generator import (  # noqa: E402
    ConnectorGenerator,
    GeneratorOptions,
    generate_connector,
    generate_connectors,
    generate_multi_operation_connector,
    preview_connector,
)
from connector_generator.errors import (  # noqa: E402
    ConnectorGeneratorError,
    ConnectorWriteError,
    ExtractionError,
    NodeNotFoundError,
    NotFoundError,
    OperationNotFoundError,
    ValidationFailure,
)

__all__ = [
    "__version__",
    "ConnectorGenerator",
    "GeneratorOptions",
    "generate_connector",
    "generate_connectors",
    "generate_multi_operation_connector",
    "preview_connector",
    "ConnectorGeneratorError",
    "ConnectorWriteError",
    "ExtractionError",
    "NodeNotFoundError",
    "NotFoundError",
    "OperationNotFoundError",
    "ValidationFailure",
]
