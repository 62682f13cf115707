"""README generator."""
from connector_generator.generators.rendering import render
from connector_generator.models.schema import MultiOperationSchema, OperationSchema
from connector_generator.utils.naming import (
    generate_connector_id,
    generate_template_id,
    generate_webhook_url,
    to_title_case,
)
from connector_generator.utils.type_mapper import generate_output_mapping, generate_payload_template


def _table_cell(text: str) -> str:
    return (text or "").replace("|", "\\|").replace("\n", " ")


def generate_readme(schema: OperationSchema) -> str:
    """Generate README.md of a single-operation connector."""
    connector_id = generate_connector_id(schema.node_id, schema.resource, schema.operation)

    return render(
        "readme.md",
        display_name=schema.display_name,
        description=schema.description,
        connector_id=connector_id,
        node_id=schema.node_id,
        node_name=schema.node_name,
        resource=schema.resource,
        resource_name=schema.resource_name,
        operation=schema.operation,
        operation_name=schema.operation_name,
        category=schema.category,
        template_id=generate_template_id(connector_id),
        webhook_url=generate_webhook_url(connector_id),
        service_node_name=f"{to_title_case(schema.operation)} {to_title_case(schema.resource)}",
        credentials=schema.credentials,
        parameters=[
            {
                "name": param.name,
                "label": _table_cell(param.display_name),
                "type": param.type,
                "required": param.required,
                "description": _table_cell(param.description or ""),
            }
            for param in schema.parameters
        ],
        payload=generate_payload_template(schema.parameters),
        output_mapping=generate_output_mapping(),
        files={
            "elementTemplate": f"{connector_id}.element.json",
            "n8nWorkflow": f"{connector_id}.n8n.json",
            "exampleBpmn": f"{connector_id}.bpmn",
            "metadata": "connector.json",
        },
    )


def generate_multi_operation_readme(schema: MultiOperationSchema) -> str:
    """Generate README.md of a multi-operation connector."""
    return render(
        "multi_readme.md",
        display_name=schema.display_name,
        description=schema.description,
        node_id=schema.node_id,
        node_name=schema.node_name,
        resources=schema.resources,
        total_operations=schema.total_operations(),
        mapping_example="{{ $json.body.paramName }}",
    )
