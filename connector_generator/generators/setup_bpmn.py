"""Setup guide generator: a BPMN process of user tasks walking through setup."""
from connector_generator.generators.rendering import render
from connector_generator.models.schema import MultiOperationSchema


SETUP_TASK_IDS = [
    "Task_Import_Template",
    "Task_Import_Workflow",
    "Task_Configure_Node",
    "Task_Test_Connection",
    "Task_Setup_Complete",
]

MAX_LISTED_OPERATIONS = 5


def generate_setup_bpmn(schema: MultiOperationSchema) -> str:
    """Generate the interactive setup process of a multi-operation connector."""
    if not schema.resources or not schema.resources[0].operations:
        raise ValueError(f"Schema '{schema.node_id}' has no operations to set up")

    first_resource = schema.resources[0]
    first_operation = first_resource.operations[0]

    if schema.credentials:
        credentials_hint = " or ".join(f"the {cred} credential type" for cred in schema.credentials)
    else:
        credentials_hint = "the appropriate credential type"

    return render(
        "setup.bpmn",
        node_id=schema.node_id,
        node_name=schema.node_name,
        display_name=schema.display_name,
        process_id=f"Process_{schema.node_id}_setup",
        process_name=f"{schema.display_name} - Setup Guide",
        resources=schema.resources,
        total_operations=schema.total_operations(),
        element_file=f"{schema.node_id}.element.json",
        workflow_file=f"{schema.node_id}-template.n8n.json",
        mapping_example="{{ $json.body.paramName }}",
        credentials_hint=credentials_hint,
        first_operation_label=f"{first_resource.name} - {first_operation.name}",
        max_listed=MAX_LISTED_OPERATIONS,
        task_ids=SETUP_TASK_IDS,
    )
