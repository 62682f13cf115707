"""n8n workflow generator.

Every connector workflow has the same four-node shape:

    Webhook -> <service node> -> Respond to Webhook
                     \\-(error)-> Format Error Response -> Respond to Webhook

so a single bridge implementation can call any connector and read the
same success/error envelope back.
"""
import json
from typing import Any, Optional

from connector_generator.models.documents import (
    ConnectionTarget,
    N8nWorkflow,
    N8nWorkflowNode,
    NodeConnections,
    WorkflowMeta,
)
from connector_generator.models.schema import MultiOperationSchema, OperationSchema
from connector_generator.utils.naming import generate_connector_id, generate_webhook_path, to_title_case


WEBHOOK_NODE_NAME = "Webhook"
ERROR_NODE_NAME = "Format Error Response"
RESPOND_NODE_NAME = "Respond to Webhook"

# Supported typeVersion per n8n node
NODE_TYPE_VERSIONS: dict[str, float] = {
    "slack": 2.2,
    "gmail": 2.1,
    "googleSheets": 4.5,
    "notion": 2.2,
    "airtable": 2.1,
    "discord": 2.1,
    "telegram": 1.2,
}
DEFAULT_TYPE_VERSION = 1

SUCCESS_RESPONSE_BODY = "={{ { success: true, statusCode: 200, responseBody: $json, error: null } }}"

ERROR_FORMAT_CODE = """// Format error response for connector failure
const error = $input.item.json.error || $input.item.json;

let errorMessage = 'Configuration needed. Please check node settings in n8n.';
if (error.message) {
  errorMessage = error.message;
}

return {
  json: {
    success: false,
    statusCode: 500,
    error: errorMessage,
    responseBody: null
  }
};"""

MULTI_ERROR_FORMAT_CODE = """// Format error response
const error = $input.item.json.error || $input.item.json;

let errorMessage = `Connector not configured. Please:
1. Open the {node_name} node in n8n
2. Select a Resource ({resources})
3. Select an Operation
4. Configure OAuth credentials
5. Save and activate workflow`;

if (error.message) {
  errorMessage = error.message;
}

return {
  json: {
    success: false,
    statusCode: 500,
    error: errorMessage,
    responseBody: null
  }
};"""


def get_node_type_version(node_id: str):
    return NODE_TYPE_VERSIONS.get(node_id, DEFAULT_TYPE_VERSION)


def body_expression(name: str) -> str:
    """n8n expression reading a field of the webhook body."""
    return f"={{{{ $json.body.{name} }}}}"


# =============================================================================
# SERVICE PARAMETER BUILDERS
# =============================================================================

def _build_gmail_params(schema: OperationSchema) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if schema.operation == "send":
        params["sendTo"] = body_expression("to")
        params["subject"] = body_expression("subject")
        params["emailType"] = "text"
        params["message"] = body_expression("message")
        params["options"] = {
            "ccList": body_expression("cc"),
            "bccList": body_expression("bcc"),
        }
    else:
        params = _build_generic_params(schema)
    return params


def _build_slack_params(schema: OperationSchema) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if schema.operation == "send":
        params["select"] = "channel"
        params["channelId"] = {
            "__rl": True,
            "value": body_expression("channel"),
            "mode": "id",
        }
        params["text"] = body_expression("text")
        params["otherOptions"] = {}
    else:
        params = _build_generic_params(schema)
    return params


def _build_generic_params(schema: OperationSchema) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if schema.resource:
        params["resource"] = schema.resource
    if schema.operation:
        params["operation"] = schema.operation
    for param in schema.parameters:
        params[param.name] = body_expression(param.name)
    return params


SERVICE_PARAM_BUILDERS = {
    "gmail": _build_gmail_params,
    "slack": _build_slack_params,
}


def build_service_params(schema: OperationSchema) -> dict[str, Any]:
    """Service node parameters, using the service's conventions where known."""
    builder = SERVICE_PARAM_BUILDERS.get(schema.node_id, _build_generic_params)
    return builder(schema)


# =============================================================================
# WORKFLOW ASSEMBLY
# =============================================================================

def _webhook_node(webhook_path: str) -> N8nWorkflowNode:
    return N8nWorkflowNode(
        parameters={
            "httpMethod": "POST",
            "path": webhook_path,
            "responseMode": "responseNode",
            "options": {},
        },
        type="n8n-nodes-base.webhook",
        type_version=2.1,
        position=[0, 0],
        id="webhook-1",
        name=WEBHOOK_NODE_NAME,
        webhook_id=webhook_path,
    )


def _error_node(code: str, x: int) -> N8nWorkflowNode:
    return N8nWorkflowNode(
        parameters={"jsCode": code},
        type="n8n-nodes-base.code",
        type_version=2,
        position=[x, 100],
        id="error-format-1",
        name=ERROR_NODE_NAME,
    )


def _respond_node(x: int) -> N8nWorkflowNode:
    return N8nWorkflowNode(
        parameters={
            "respondWith": "json",
            "responseBody": SUCCESS_RESPONSE_BODY,
        },
        type="n8n-nodes-base.respondToWebhook",
        type_version=1.1,
        position=[x, 0],
        id="respond-1",
        name=RESPOND_NODE_NAME,
    )


def _connections(service_node_name: str) -> dict[str, NodeConnections]:
    return {
        WEBHOOK_NODE_NAME: NodeConnections(main=[[ConnectionTarget(node=service_node_name)]]),
        service_node_name: NodeConnections(
            main=[[ConnectionTarget(node=RESPOND_NODE_NAME)]],
            error=[[ConnectionTarget(node=ERROR_NODE_NAME)]],
        ),
        ERROR_NODE_NAME: NodeConnections(main=[[ConnectionTarget(node=RESPOND_NODE_NAME)]]),
    }


def generate_n8n_workflow(schema: OperationSchema) -> N8nWorkflow:
    """Generate the webhook workflow of a single-operation connector."""
    connector_id = generate_connector_id(schema.node_id, schema.resource, schema.operation)
    webhook_path = generate_webhook_path(connector_id)
    service_node_name = f"{to_title_case(schema.operation)} {to_title_case(schema.resource)}"

    # Credentials are left out: they are configured in n8n after import
    service_node = N8nWorkflowNode(
        parameters=build_service_params(schema),
        type=f"n8n-nodes-base.{schema.node_id}",
        type_version=get_node_type_version(schema.node_id),
        position=[220, 0],
        id=f"{schema.node_id}-1",
        name=service_node_name,
    )

    return N8nWorkflow(
        name=schema.display_name,
        nodes=[
            _webhook_node(webhook_path),
            service_node,
            _error_node(ERROR_FORMAT_CODE, 440),
            _respond_node(660),
        ],
        connections=_connections(service_node_name),
        active=True,
        meta=WorkflowMeta(
            description=(
                f"Catalyst connector webhook for {schema.display_name}. "
                "Configure credentials in n8n after importing."
            )
        ),
    )


def generate_multi_operation_workflow(schema: MultiOperationSchema) -> N8nWorkflow:
    """
    Generate the template workflow of a multi-operation connector.

    The service node is left unconfigured (resource, operation and
    credentials are chosen in n8n) but every parameter name of every
    operation is pre-mapped to the webhook body, so whatever n8n shows after
    the selection is already wired. The workflow starts inactive.
    """
    webhook_path = generate_webhook_path(schema.node_id)

    all_parameters = {
        param.name
        for _, operation in schema.iter_operations()
        for param in operation.parameters
    }
    service_params = {name: body_expression(name) for name in sorted(all_parameters)}

    service_node = N8nWorkflowNode(
        parameters=service_params,
        type=f"n8n-nodes-base.{schema.node_id}",
        type_version=get_node_type_version(schema.node_id),
        position=[300, 0],
        id=f"{schema.node_id}-1",
        name=schema.node_name,
    )

    error_code = (
        MULTI_ERROR_FORMAT_CODE
        .replace("{node_name}", schema.node_name)
        .replace("{resources}", ", ".join(resource.name for resource in schema.resources))
    )

    return N8nWorkflow(
        name=f"Catalyst {schema.display_name} Template",
        nodes=[
            _webhook_node(webhook_path),
            service_node,
            _error_node(error_code, 520),
            _respond_node(740),
        ],
        connections=_connections(schema.node_name),
        active=False,
        meta=WorkflowMeta(
            description=(
                f"Catalyst {schema.display_name} Template - Configure resource, operation, "
                f"and credentials in n8n after importing. Supports {len(schema.resources)} "
                f"resources with {schema.total_operations()} operations."
            )
        ),
    )


def n8n_workflow_to_json(workflow: N8nWorkflow) -> str:
    return json.dumps(workflow.to_dict(), indent=2)


# =============================================================================
# INSPECTION
# =============================================================================

def validate_workflow(workflow: dict) -> list[str]:
    """Validate workflow JSON.

    Returns list of validation errors (empty if valid).
    """
    errors = []

    if "name" not in workflow:
        errors.append("Missing workflow name")

    nodes = workflow.get("nodes")
    if "nodes" not in workflow:
        errors.append("Missing nodes array")
    elif not isinstance(nodes, list):
        errors.append("Nodes must be an array")
        nodes = []
    elif not nodes:
        errors.append("Workflow has no nodes")

    connections = workflow.get("connections")
    if "connections" not in workflow:
        errors.append("Missing connections object")
    elif not isinstance(connections, dict):
        errors.append("Connections must be an object")
        connections = {}

    node_names = set()
    for index, node in enumerate(nodes or []):
        if not isinstance(node, dict):
            errors.append(f"Node #{index} is not an object")
            continue
        if "id" not in node:
            errors.append(f"Node missing id: {node.get('name', 'unknown')}")
        if not isinstance(node.get("name"), str):
            errors.append(f"Node missing name: {node.get('id', 'unknown')}")
        elif node["name"] in node_names:
            errors.append(f"Duplicate node name: {node['name']}")
        else:
            node_names.add(node["name"])
        if "type" not in node:
            errors.append(f"Node missing type: {node.get('name', 'unknown')}")
        if "position" not in node:
            errors.append(f"Node missing position: {node.get('name', 'unknown')}")

    for source_name, outputs in (connections or {}).items():
        if source_name not in node_names:
            errors.append(f"Connection source not found: {source_name}")
        if not isinstance(outputs, dict):
            errors.append(f"Connections of {source_name} must be an object")
            continue

        for kind in ("main", "error"):
            kind_outputs = outputs.get(kind)
            for output_connections in kind_outputs if isinstance(kind_outputs, list) else []:
                for conn in output_connections if isinstance(output_connections, list) else [output_connections]:
                    target = conn.get("node") if isinstance(conn, dict) else None
                    if not isinstance(target, str) or target not in node_names:
                        errors.append(f"Connection target not found: {target}")

    return errors


def extract_webhook_path(workflow: dict) -> Optional[str]:
    """Webhook path of a workflow, or None without a webhook trigger."""
    for node in workflow.get("nodes", []):
        if node.get("type") == "n8n-nodes-base.webhook":
            return node.get("parameters", {}).get("path")
    return None
