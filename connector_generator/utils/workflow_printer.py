"""Render generated documents as compact text for previews and comparisons."""

import json
from typing import Union

from connector_generator.generators.n8n_workflow import extract_webhook_path


def print_workflow(workflow: Union[str, dict], include_params: bool = False) -> str:
    """
    Convert a generated n8n workflow to a text summary.

    Args:
        workflow: n8n workflow JSON string or dict
        include_params: Include node parameters in output (default: False)

    Returns:
        Formatted string representation of the workflow
    """
    if isinstance(workflow, str):
        workflow = json.loads(workflow)

    lines = []

    name = workflow.get("name", "Unnamed Workflow")
    lines.append("=" * 60)
    lines.append(f"  WORKFLOW: {name}")
    lines.append("=" * 60)

    active = workflow.get("active", False)
    lines.append(f"  Active: {'✓ Yes' if active else '✗ No'}")
    lines.append("")

    nodes = workflow.get("nodes", [])
    connections = workflow.get("connections", {})

    lines.append("  NODES:")
    lines.append("  " + "-" * 56)

    for i, node in enumerate(nodes, 1):
        node_name = node.get("name", f"Node {i}")
        node_type = node.get("type", "unknown")
        short_type = node_type.replace("n8n-nodes-base.", "")
        pos = node.get("position", [0, 0])

        lines.append(f"  {_get_node_icon(node_type)} [{i}] {node_name}")
        lines.append(f"       Type: {short_type} (v{node.get('typeVersion', 1)})")
        lines.append(f"       Position: ({pos[0]}, {pos[1]})")

        if include_params:
            params = node.get("parameters", {})
            if params:
                lines.append("       Parameters:")
                for key, value in params.items():
                    lines.append(f"         • {key}: {_format_param_value(value)}")

        lines.append("")

    lines.append("  FLOW:")
    lines.append("  " + "-" * 56)
    if connections:
        for line in _build_flow_lines(connections):
            lines.append(f"  {line}")
    else:
        lines.append("  (No connections defined)")
    lines.append("")

    webhook_path = extract_webhook_path(workflow)
    if webhook_path:
        webhook = next(node for node in nodes if node.get("type") == "n8n-nodes-base.webhook")
        lines.append("  WEBHOOK:")
        lines.append("  " + "-" * 56)
        lines.append(f"  Method: {webhook.get('parameters', {}).get('httpMethod', 'POST')}")
        lines.append(f"  Path: /{webhook_path}")
        lines.append("")

    lines.append("=" * 60)
    return "\n".join(lines)


def print_element_template(template: Union[str, dict]) -> str:
    """
    Summarize an element template: groups, properties and their conditions.

    Args:
        template: element template JSON string or dict

    Returns:
        Formatted string representation
    """
    if isinstance(template, str):
        template = json.loads(template)

    lines = []
    lines.append("=" * 60)
    lines.append(f"  ELEMENT TEMPLATE: {template.get('name', 'Unnamed')}")
    lines.append("=" * 60)
    lines.append(f"  ID: {template.get('id', 'N/A')}")
    lines.append(f"  Version: {template.get('version', 'N/A')}")
    lines.append("")

    properties = template.get("properties", [])
    groups = [g.get("id") for g in template.get("groups", [])]

    for group in [None] + groups:
        members = [p for p in properties if p.get("group") == group]
        if not members:
            continue
        lines.append(f"  {(group or 'ungrouped').upper()}:")
        lines.append("  " + "-" * 56)
        for prop in members:
            marker = "*" if prop.get("constraints", {}).get("notEmpty") else " "
            binding = prop.get("binding", {}).get("name", "?")
            lines.append(f"  {marker} {prop.get('label', '?')} [{prop.get('type', '?')}] → {binding}")
            condition = prop.get("condition")
            if condition:
                lines.append(f"       when: {_format_condition(condition)}")
        lines.append("")

    lines.append(f"  Total properties: {len(properties)}")
    lines.append("=" * 60)
    return "\n".join(lines)


def _format_condition(condition: dict) -> str:
    if condition.get("type") == "oneOf":
        return f"{condition.get('property')} in {', '.join(condition.get('oneOf', []))}"
    return f"{condition.get('property')} = {condition.get('equals')}"


def _get_node_icon(node_type: str) -> str:
    """Get an icon for a node type."""
    type_lower = node_type.lower()

    if "webhook" in type_lower and "respond" not in type_lower:
        return "🔗"
    elif "respond" in type_lower:
        return "📤"
    elif "code" in type_lower:
        return "🧩"
    elif "slack" in type_lower:
        return "💬"
    elif "email" in type_lower or "gmail" in type_lower:
        return "📧"
    else:
        return "⚙️"


def _format_param_value(value, max_len: int = 50) -> str:
    """Format a parameter value for display."""
    if isinstance(value, str):
        value = value.replace("\n", " ")
        if len(value) > max_len:
            return f'"{value[:max_len]}..."'
        return f'"{value}"'
    elif isinstance(value, dict):
        return f"{{...}} ({len(value)} keys)"
    elif isinstance(value, list):
        return f"[...] ({len(value)} items)"
    else:
        return str(value)


def _build_flow_lines(connections: dict) -> list:
    """One line per edge, error edges marked."""
    lines = []
    for source_name, conn_data in connections.items():
        for kind in ("main", "error"):
            for targets in conn_data.get(kind) or []:
                for target in targets:
                    arrow = "──✗→" if kind == "error" else "──→"
                    lines.append(f"{source_name} {arrow} {target.get('node')}")
    return lines if lines else ["(No flow connections)"]
