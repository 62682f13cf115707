"""Element template generator: the Camunda modeler form of a connector."""
import json
from typing import Optional

from connector_generator.config import get_settings
from connector_generator.models.documents import (
    Binding,
    Choice,
    Constraints,
    ElementTemplate,
    ElementTemplateProperty,
    OneOfCondition,
    SimpleCondition,
    TemplateGroup,
    TemplateIcon,
)
from connector_generator.models.schema import (
    MultiOperationSchema,
    OperationParameter,
    OperationSchema,
    operation_selector,
)
from connector_generator.utils.naming import (
    generate_connector_id,
    generate_template_id,
    generate_webhook_url,
)
from connector_generator.utils.type_mapper import (
    convert_to_element_property,
    generate_output_mapping,
    generate_payload_template,
)


# Layers icon
DEFAULT_ICON = (
    "data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' width='18' height='18' "
    "viewBox='0 0 24 24' fill='none' stroke='%2306b6d4' stroke-width='2'%3E"
    "%3Cpath d='M12 2L2 7l10 5 10-5-10-5z'/%3E%3Cpath d='M2 17l10 5 10-5'/%3E"
    "%3Cpath d='M2 12l10 5 10-5'/%3E%3C/svg%3E"
)

OPERATION_PROPERTY_ID = "operation"


def _implementation_property() -> ElementTemplateProperty:
    return ElementTemplateProperty(
        label="Implementation",
        type="Hidden",
        value=get_settings().bridge_class,
        binding=Binding(type="property", name="camunda:class"),
    )


def _connection_properties(webhook_url: str) -> list[ElementTemplateProperty]:
    return [
        ElementTemplateProperty(
            label="n8n Webhook URL",
            type="String",
            value=webhook_url,
            binding=Binding(type="camunda:inputParameter", name="webhookUrl"),
            group="connection",
            constraints=Constraints(not_empty=True),
        ),
        ElementTemplateProperty(
            label="Timeout (seconds)",
            type="String",
            value=str(get_settings().default_timeout_seconds),
            binding=Binding(type="camunda:inputParameter", name="timeout"),
            group="connection",
        ),
    ]


def _payload_property(parameters: list[OperationParameter]) -> ElementTemplateProperty:
    return ElementTemplateProperty(
        label="Payload",
        type="Text",
        value=generate_payload_template(parameters),
        description="JSON body posted to the n8n webhook",
        binding=Binding(type="camunda:inputParameter", name="payload"),
        group="input",
    )


def _output_mapping_property() -> ElementTemplateProperty:
    return ElementTemplateProperty(
        label="Output Mapping",
        type="Text",
        value=generate_output_mapping(),
        description="Maps the webhook response into process variables",
        binding=Binding(type="camunda:inputParameter", name="outputMapping"),
        group="output",
    )


def _icon(icon_svg: Optional[str]) -> TemplateIcon:
    return TemplateIcon(contents=icon_svg or DEFAULT_ICON)


def generate_element_template(schema: OperationSchema) -> ElementTemplate:
    """Generate the element template of a single-operation connector."""
    connector_id = generate_connector_id(schema.node_id, schema.resource, schema.operation)

    properties = [_implementation_property()]
    properties.extend(_connection_properties(generate_webhook_url(connector_id)))
    properties.extend(convert_to_element_property(param) for param in schema.parameters)
    properties.append(_payload_property(schema.parameters))
    properties.append(_output_mapping_property())

    return ElementTemplate(
        schema_url=get_settings().element_template_schema_url,
        name=f"Catalyst - {schema.display_name}",
        id=generate_template_id(connector_id),
        description=schema.description,
        icon=_icon(schema.icon_svg),
        groups=[
            TemplateGroup(id="connection", label="Connection"),
            TemplateGroup(id="input", label="Input"),
            TemplateGroup(id="output", label="Output"),
        ],
        properties=properties,
    )


def collect_unique_parameters(
    schema: MultiOperationSchema,
) -> list[tuple[OperationParameter, list[str], bool]]:
    """
    Group the parameters of every operation by name.

    Returns one entry per unique parameter name, in first-seen order:
    (parameter as first declared, selectors of every operation using it,
    whether every one of those operations requires it).
    """
    entries: dict[str, list] = {}
    for resource, operation in schema.iter_operations():
        selector = operation_selector(resource.value, operation.value)
        for param in operation.parameters:
            if param.name not in entries:
                entries[param.name] = [param, [], True]
            entry = entries[param.name]
            entry[1].append(selector)
            entry[2] = entry[2] and param.required
    return [(param, selectors, required) for param, selectors, required in entries.values()]


def generate_multi_operation_element_template(schema: MultiOperationSchema) -> ElementTemplate:
    """
    Generate one element template covering every operation of a service.

    A single "Operation" dropdown selects "<resource>:<operation>". Each
    unique parameter name gets one shared field, shown for exactly the
    operations that declare it: a simple condition when one operation uses
    the name, a oneOf condition when several do.
    """
    webhook_url = generate_webhook_url(schema.node_id)

    properties = [_implementation_property()]
    properties.extend(_connection_properties(webhook_url))

    choices = [
        Choice(name=f"{resource.name} - {operation.name}", value=operation_selector(resource.value, operation.value))
        for resource, operation in schema.iter_operations()
    ]
    properties.append(
        ElementTemplateProperty(
            id=OPERATION_PROPERTY_ID,
            label="Operation",
            type="Dropdown",
            value=choices[0].value if choices else None,
            description="Select the resource and operation to run",
            binding=Binding(type="camunda:inputParameter", name="operation"),
            group="operation",
            choices=choices,
            constraints=Constraints(not_empty=True),
        )
    )

    unique = collect_unique_parameters(schema)
    for param, selectors, required_everywhere in unique:
        prop = convert_to_element_property(param)
        prop.id = f"param_{param.name}"
        if not required_everywhere:
            prop.constraints = None
        if len(selectors) == 1:
            prop.condition = SimpleCondition(property=OPERATION_PROPERTY_ID, equals=selectors[0])
        else:
            prop.condition = OneOfCondition(property=OPERATION_PROPERTY_ID, one_of=selectors)
        properties.append(prop)

    properties.append(_payload_property([param for param, _, _ in unique]))
    properties.append(_output_mapping_property())

    return ElementTemplate(
        schema_url=get_settings().element_template_schema_url,
        name=f"Catalyst - {schema.display_name}",
        id=generate_template_id(schema.node_id),
        description=schema.description,
        icon=_icon(schema.icon_svg),
        groups=[
            TemplateGroup(id="connection", label="Connection"),
            TemplateGroup(id="operation", label="Operation"),
            TemplateGroup(id="input", label="Input"),
            TemplateGroup(id="output", label="Output"),
        ],
        properties=properties,
    )


def element_template_to_json(template: ElementTemplate) -> str:
    return json.dumps(template.to_dict(), indent=2)
