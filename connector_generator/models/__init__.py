"""Pydantic models for the connector generator."""
from connector_generator.models.schema import (
    ParameterType,
    ParameterOption,
    OperationParameter,
    OperationSchema,
    ResourceOperation,
    ResourceDefinition,
    MultiOperationSchema,
    operation_selector,
)
from connector_generator.models.documents import (
    ElementTemplate,
    ElementTemplateProperty,
    SimpleCondition,
    OneOfCondition,
    N8nWorkflow,
    N8nWorkflowNode,
    ConnectorMetadata,
)
from connector_generator.models.results import (
    GenerationWarning,
    GeneratedFiles,
    ConnectorPreview,
    BatchFailure,
    BatchResult,
)

__all__ = [
    "ParameterType",
    "ParameterOption",
    "OperationParameter",
    "OperationSchema",
    "ResourceOperation",
    "ResourceDefinition",
    "MultiOperationSchema",
    "operation_selector",
    "ElementTemplate",
    "ElementTemplateProperty",
    "SimpleCondition",
    "OneOfCondition",
    "N8nWorkflow",
    "N8nWorkflowNode",
    "ConnectorMetadata",
    "GenerationWarning",
    "GeneratedFiles",
    "ConnectorPreview",
    "BatchFailure",
    "BatchResult",
]
