"""Models for the documents a connector is made of.

These mirror the JSON formats consumed downstream:
- Camunda element templates (the form shown in the modeler)
- n8n workflow exports
- connector.json metadata read by the control panel
"""
from typing import Literal, Optional, Union

from pydantic import Field

from connector_generator.models.schema import CamelModel


FieldKind = Literal["String", "Text", "Dropdown", "Boolean", "Hidden"]


# =============================================================================
# ELEMENT TEMPLATE
# =============================================================================

class Binding(CamelModel):
    """How a property value maps into the runtime's parameter space."""

    type: Literal["property", "camunda:inputParameter", "camunda:outputParameter"]
    name: str


class Constraints(CamelModel):
    not_empty: Optional[bool] = None


class Choice(CamelModel):
    name: str
    value: str


class SimpleCondition(CamelModel):
    """Visible when another property equals a single value."""

    type: Literal["simple"] = "simple"
    property: str
    equals: str


class OneOfCondition(CamelModel):
    """Visible when another property equals any of several values."""

    type: Literal["oneOf"] = "oneOf"
    property: str
    one_of: list[str]


Condition = Union[SimpleCondition, OneOfCondition]


class ElementTemplateProperty(CamelModel):
    """A single field of an element template."""

    id: Optional[str] = None
    label: str
    type: FieldKind
    value: Optional[str] = None
    description: Optional[str] = None
    binding: Binding
    group: Optional[str] = None
    constraints: Optional[Constraints] = None
    choices: Optional[list[Choice]] = None
    condition: Optional[Condition] = None


class TemplateGroup(CamelModel):
    id: str
    label: str


class TemplateIcon(CamelModel):
    contents: str


class ElementTemplate(CamelModel):
    """Camunda 7 element template document."""

    schema_url: str = Field(..., alias="$schema")
    name: str
    id: str
    description: str
    version: int = 1
    applies_to: list[str] = Field(default_factory=lambda: ["bpmn:ServiceTask"])
    icon: Optional[TemplateIcon] = None
    groups: list[TemplateGroup] = Field(default_factory=list)
    properties: list[ElementTemplateProperty] = Field(default_factory=list)

    def find_property(self, binding_name: str) -> Optional[ElementTemplateProperty]:
        """Look up a property by the name it binds to."""
        for prop in self.properties:
            if prop.binding.name == binding_name:
                return prop
        return None


# =============================================================================
# N8N WORKFLOW
# =============================================================================

class ConnectionTarget(CamelModel):
    node: str
    type: str = "main"
    index: int = 0


class NodeConnections(CamelModel):
    main: list[list[ConnectionTarget]] = Field(default_factory=list)
    error: Optional[list[list[ConnectionTarget]]] = None


class N8nWorkflowNode(CamelModel):
    parameters: dict = Field(default_factory=dict)
    type: str
    type_version: Union[int, float]
    position: list[int]
    id: str
    name: str
    webhook_id: Optional[str] = None


class WorkflowSettings(CamelModel):
    execution_order: str = "v1"


class WorkflowMeta(CamelModel):
    description: str


class N8nWorkflow(CamelModel):
    """n8n workflow export document."""

    name: str
    nodes: list[N8nWorkflowNode]
    connections: dict[str, NodeConnections]
    active: bool = True
    settings: WorkflowSettings = Field(default_factory=WorkflowSettings)
    meta: Optional[WorkflowMeta] = None

    def node_names(self) -> list[str]:
        return [node.name for node in self.nodes]

    def get_node(self, name: str) -> Optional[N8nWorkflowNode]:
        for node in self.nodes:
            if node.name == name:
                return node
        return None


# =============================================================================
# CONNECTOR METADATA
# =============================================================================

class MetadataSource(CamelModel):
    type: Literal["n8n"] = "n8n"
    node: str
    resource: Optional[str] = None
    operation: Optional[str] = None
    version: str = "1.0"


class QualityRecord(CamelModel):
    tier: int = Field(..., ge=1, le=3)
    generated: bool = True
    reviewed: bool = False
    tested: bool = False


class ConnectorMetadata(CamelModel):
    """connector.json - identity, versioning and quality of one connector."""

    id: str
    name: str
    description: str
    version: str = "1.0.0"
    type: Literal["integration", "template"] = "integration"
    category: str
    subcategory: Optional[str] = None
    icon: Optional[str] = None
    color: str
    tags: list[str] = Field(default_factory=list)
    source: MetadataSource
    quality: QualityRecord
    authentication: Optional[str] = None
    featured: bool = False
    created_at: str
    files: dict[str, str]

    # Multi-operation connectors only
    multi_operation: Optional[bool] = None
    operation_count: Optional[int] = None
    resources: Optional[list[str]] = None
    credentials: Optional[list[str]] = None
