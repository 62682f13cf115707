"""Example BPMN process generator.

The example is a runnable process: a form that collects the parameters,
the connector service task, and a results task. It must stay consistent
with the element template (same template id, bindings and payload).
"""
from connector_generator.config import get_settings
from connector_generator.generators.rendering import render
from connector_generator.models.schema import MultiOperationSchema, OperationParameter, OperationSchema, operation_selector
from connector_generator.utils.naming import (
    generate_connector_id,
    generate_process_id,
    generate_template_id,
    generate_webhook_url,
    to_title_case,
)
from connector_generator.utils.type_mapper import (
    format_default_value,
    generate_output_mapping,
    generate_payload_template,
    variable_expression,
)


MAX_EXAMPLE_FIELDS = 5


def default_field_description(name: str, display_name: str, param_type: str) -> str:
    """Describe a form field that has no description of its own."""
    lower = name.lower()

    if "messageid" in lower:
        return "The unique identifier of the message"
    if "draftid" in lower:
        return "The unique identifier of the draft"
    if "threadid" in lower:
        return "The unique identifier of the thread"
    if "labelid" in lower:
        return "The unique identifier of the label"

    if "subject" in lower:
        return "The subject line of the email"
    if "message" in lower and "id" not in lower:
        return "The content/body of the email message"
    if "emailtype" in lower or "email_type" in lower:
        return "Whether to send as plain text or HTML formatted email"

    if param_type == "collection" and "option" in lower:
        return "Additional options for this operation"
    if param_type == "collection" and "filter" in lower:
        return "Filters to narrow down results"

    if "notice" in lower or len(display_name) > 50:
        return "Informational text to guide the user"

    if param_type in ("options", "multiOptions"):
        return f"Select {display_name.lower()} from available options"
    if param_type == "boolean":
        return f"Enable or disable {display_name.lower()}"
    if param_type == "number":
        return f"Numeric value for {display_name.lower()}"

    return f"Specify {display_name.lower()} for this operation"


def build_form_field(param: OperationParameter) -> dict:
    """Form field of the "Enter Input" task."""
    description = param.description or default_field_description(param.name, param.display_name, param.type)
    return {
        "id": param.name,
        "label": f"{param.display_name} - {description}",
        "default": format_default_value(param),
        "description": description,
    }


def _input_parameters(parameters: list[OperationParameter]) -> list[dict]:
    return [{"name": param.name, "value": variable_expression(param.name)} for param in parameters]


def generate_bpmn_example(schema: OperationSchema) -> str:
    """Generate the example process of a single-operation connector."""
    settings = get_settings()
    connector_id = generate_connector_id(schema.node_id, schema.resource, schema.operation)

    return render(
        "example.bpmn",
        definitions_id=f"Definitions_{connector_id}",
        exporter_version="1.0.0",
        process_id=generate_process_id(connector_id),
        process_name=f"{schema.display_name} Example",
        documentation=None,
        input_documentation=None,
        form_fields=[build_form_field(param) for param in schema.parameters],
        task_name=(
            f"{to_title_case(schema.node_name)} {to_title_case(schema.operation)} "
            f"{to_title_case(schema.resource)}"
        ),
        task_documentation=None,
        template_id=generate_template_id(connector_id),
        template_version=1,
        bridge_class=settings.bridge_class,
        timeout=settings.default_timeout_seconds,
        selector_parameters=[],
        input_parameters=_input_parameters(schema.parameters),
        payload=generate_payload_template(schema.parameters),
        output_mapping=generate_output_mapping(),
        webhook_url=generate_webhook_url(connector_id),
        results_documentation=None,
        view_x=540,
        end_x=682,
    )


def generate_multi_operation_bpmn_example(schema: MultiOperationSchema) -> str:
    """
    Generate the example process of a multi-operation connector.

    The example runs the first operation of the first resource, with at
    most five form fields; the documentation explains how to switch.
    """
    if not schema.resources or not schema.resources[0].operations:
        raise ValueError(f"Schema '{schema.node_id}' has no operations to show")

    settings = get_settings()
    resource = schema.resources[0]
    operation = resource.operations[0]
    sample_params = operation.parameters[:MAX_EXAMPLE_FIELDS]
    label = f"{resource.name} - {operation.name}"

    documentation = (
        f"Example process showing how to use the {schema.display_name}.\n\n"
        f'This example demonstrates the "{label}" operation.\n'
        f"The connector supports {len(schema.resources)} resources with "
        f"{schema.total_operations()} total operations.\n\n"
        "To use a different operation:\n"
        "1. Select the Service Task\n"
        "2. In Properties Panel, choose a different Operation\n"
        "3. Configure the parameters that appear\n\n"
        f"Resources available: {', '.join(r.name for r in schema.resources)}"
    )
    task_documentation = (
        f"Executes {label} operation.\n\n"
        "To change the operation:\n"
        "1. Select this task\n"
        "2. In Properties Panel, open the Operation section\n"
        f"3. Choose an entry such as \"{label}\"\n"
        "4. Configure parameters (fields change based on operation)"
    )

    return render(
        "example.bpmn",
        definitions_id=f"Definitions_{schema.node_id}",
        exporter_version="2.0.0",
        process_id=f"Process_{schema.node_id}_example",
        process_name=f"{schema.display_name} - Example Usage",
        documentation=documentation,
        input_documentation=f"Enter the parameters for {label}",
        form_fields=[build_form_field(param) for param in sample_params],
        task_name=schema.display_name,
        task_documentation=task_documentation,
        template_id=generate_template_id(schema.node_id),
        template_version=2,
        bridge_class=settings.bridge_class,
        timeout=settings.default_timeout_seconds,
        selector_parameters=[
            {"name": "operation", "value": operation_selector(resource.value, operation.value)},
        ],
        input_parameters=_input_parameters(sample_params),
        payload=generate_payload_template(sample_params),
        output_mapping=generate_output_mapping(),
        webhook_url=generate_webhook_url(schema.node_id),
        results_documentation=f"Review the results from {schema.display_name}.",
        view_x=560,
        end_x=712,
    )
