"""Operation schemas - the canonical input of every generator.

An operation schema describes one n8n operation (or, in the multi-operation
variant, every operation of one service) in a shape that is independent of
the output formats. Everything the generators emit is derived from these
models, which is what keeps the artifacts consistent with each other.
"""
import re
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from connector_generator.utils.naming import generate_connector_id


PARAMETER_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Input parameters every generated service task already binds
RESERVED_PARAMETER_NAMES = frozenset({"webhookUrl", "timeout", "payload", "outputMapping", "operation"})


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        """Dump using wire names, dropping unset optional keys."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ParameterType(str, Enum):
    """Generic parameter type vocabulary shared by all generators."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OPTIONS = "options"
    MULTI_OPTIONS = "multiOptions"
    DATE_TIME = "dateTime"
    JSON = "json"
    FIXED_COLLECTION = "fixedCollection"
    COLLECTION = "collection"


CHOICE_TYPES = {ParameterType.OPTIONS.value, ParameterType.MULTI_OPTIONS.value}
NESTED_TYPES = {ParameterType.FIXED_COLLECTION.value, ParameterType.COLLECTION.value}


def _assert_unique_names(parameters: list["OperationParameter"]) -> None:
    seen: set[str] = set()
    for param in parameters:
        if param.name in seen:
            raise ValueError(f"Duplicate parameter name: {param.name}")
        seen.add(param.name)


class ParameterOption(CamelModel):
    """One choice of an options/multiOptions parameter."""

    name: str
    value: str


class OperationParameter(CamelModel):
    """One input field of an operation."""

    name: str = Field(..., description="Variable name and JSON key")
    display_name: str = Field(..., description="Human label")
    # Kept as a plain string so unknown n8n types reach the type mapper,
    # which degrades them to a text field instead of rejecting the schema.
    type: str = Field(ParameterType.STRING.value, description="Generic parameter type")
    required: bool = False
    default: Optional[Any] = None
    description: Optional[str] = None
    placeholder: Optional[str] = None
    options: Optional[list[ParameterOption]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not PARAMETER_NAME_PATTERN.match(v):
            raise ValueError(f"Parameter name '{v}' is not a valid identifier")
        if v in RESERVED_PARAMETER_NAMES:
            raise ValueError(f"Parameter name '{v}' is reserved for the connector's own bindings")
        return v

    @field_validator("type", mode="before")
    @classmethod
    def unwrap_enum(cls, v: Any) -> Any:
        if isinstance(v, ParameterType):
            return v.value
        return v

    @model_validator(mode="after")
    def validate_options(self) -> "OperationParameter":
        if self.type in CHOICE_TYPES:
            if not self.options:
                raise ValueError(f"Parameter '{self.name}' of type {self.type} needs options")
            values = [opt.value for opt in self.options]
            if len(values) != len(set(values)):
                raise ValueError(f"Parameter '{self.name}' has duplicate option values")
        elif self.options is not None:
            raise ValueError(f"Parameter '{self.name}' of type {self.type} cannot declare options")
        return self

    @property
    def is_choice(self) -> bool:
        return self.type in CHOICE_TYPES

    @property
    def is_nested(self) -> bool:
        return self.type in NESTED_TYPES


class OperationSchema(CamelModel):
    """One operation of one service - the unit of single-operation generation."""

    node_id: str = Field(..., description="Service id, e.g. 'slack'")
    node_name: str = Field(..., description="Service name, e.g. 'Slack'")
    resource: str = Field(..., description="Resource code, e.g. 'message'")
    resource_name: str
    operation: str = Field(..., description="Operation code, e.g. 'send'")
    operation_name: str
    display_name: str
    description: str
    icon: Optional[str] = None
    icon_svg: Optional[str] = None
    color: Optional[str] = None
    credentials: list[str] = Field(default_factory=list)
    parameters: list[OperationParameter] = Field(default_factory=list)
    category: str = "integrations"
    subcategory: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_parameters(self) -> "OperationSchema":
        _assert_unique_names(self.parameters)
        return self

    @property
    def connector_id(self) -> str:
        """Stable on-disk key derived from (node, resource, operation)."""
        return generate_connector_id(self.node_id, self.resource, self.operation)


class ResourceOperation(CamelModel):
    """An operation entry inside a multi-operation schema."""

    value: str
    name: str
    description: str = ""
    parameters: list[OperationParameter] = Field(default_factory=list)
    tier: int = Field(1, ge=1, le=3)

    @model_validator(mode="after")
    def validate_parameters(self) -> "ResourceOperation":
        _assert_unique_names(self.parameters)
        return self


class ResourceDefinition(CamelModel):
    """A resource with the operations it supports."""

    value: str
    name: str
    operations: list[ResourceOperation] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_operations(self) -> "ResourceDefinition":
        values = [op.value for op in self.operations]
        if len(values) != len(set(values)):
            raise ValueError(f"Resource '{self.value}' has duplicate operation values")
        return self


class MultiOperationSchema(CamelModel):
    """A whole service with every resource and operation."""

    node_id: str
    node_name: str
    display_name: str
    description: str
    icon: Optional[str] = None
    icon_svg: Optional[str] = None
    color: Optional[str] = None
    credentials: list[str] = Field(default_factory=list)
    category: str = "integrations"
    subcategory: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    resources: list[ResourceDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_selectors(self) -> "MultiOperationSchema":
        selectors = self.operation_selectors()
        if len(selectors) != len(set(selectors)):
            raise ValueError("Duplicate resource:operation pair in schema")
        return self

    def total_operations(self) -> int:
        return sum(len(resource.operations) for resource in self.resources)

    def operation_selectors(self) -> list[str]:
        """Ordered "<resource>:<operation>" values for the operation dropdown."""
        return [
            operation_selector(resource.value, operation.value)
            for resource in self.resources
            for operation in resource.operations
        ]

    def iter_operations(self):
        """Yield (resource, operation) pairs in declaration order."""
        for resource in self.resources:
            for operation in resource.operations:
                yield resource, operation

    def filter_by_tier(self, max_tier: int) -> "MultiOperationSchema":
        """Copy keeping operations with tier <= max_tier; empty resources are dropped."""
        resources = []
        for resource in self.resources:
            operations = [op for op in resource.operations if op.tier <= max_tier]
            if operations:
                resources.append(resource.model_copy(update={"operations": operations}))
        return self.model_copy(update={"resources": resources})


def operation_selector(resource: str, operation: str) -> str:
    """Combined operation selector value, e.g. "message:send"."""
    return f"{resource}:{operation}"
