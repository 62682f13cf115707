"""
Audit of generated connectors.

Checks element templates for the structural mistakes the modeler would
otherwise surface only at design time (dangling conditions, duplicate
ids, unbound properties) and workflow templates for broken graphs.
Issues are reported, never repaired.
"""
import json
from pathlib import Path
from typing import Any, Literal, Optional

import structlog
from pydantic import BaseModel, Field

from connector_generator.errors import ValidationFailure
from connector_generator.generators.n8n_workflow import validate_workflow

logger = structlog.get_logger()


ELEMENT_TEMPLATE_GLOB = "*.element.json"
WORKFLOW_GLOB = "*.n8n.json"
OPERATION_GROUP_PREFIX = "group-"


class AuditIssue(BaseModel):
    """One finding about one document."""

    severity: Literal["error", "warning"]
    code: str
    message: str
    property_id: Optional[str] = None


class ConnectorAudit(BaseModel):
    """Findings for one connector directory."""

    connector_dir: str
    files: list[str] = Field(default_factory=list)
    issues: list[AuditIssue] = Field(default_factory=list)

    @property
    def errors(self) -> list[AuditIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[AuditIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]


class AuditReport(BaseModel):
    connectors: list[ConnectorAudit] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(connector.errors for connector in self.connectors)

    @property
    def error_count(self) -> int:
        return sum(len(connector.errors) for connector in self.connectors)

    @property
    def warning_count(self) -> int:
        return sum(len(connector.warnings) for connector in self.connectors)


def _error(code: str, message: str, property_id: Optional[str] = None) -> AuditIssue:
    return AuditIssue(severity="error", code=code, message=message, property_id=property_id)


def _warning(code: str, message: str, property_id: Optional[str] = None) -> AuditIssue:
    return AuditIssue(severity="warning", code=code, message=message, property_id=property_id)


def _property_id(prop: dict[str, Any]) -> Optional[str]:
    prop_id = prop.get("id")
    return prop_id if isinstance(prop_id, str) and prop_id else None


def _describe(prop: dict[str, Any], index: int) -> str:
    return _property_id(prop) or str(prop.get("label") or f"#{index}")


def _check_condition(prop: dict[str, Any], label: str, known_ids: set[str]) -> list[AuditIssue]:
    condition = prop["condition"]
    prop_id = _property_id(prop)
    target = condition.get("property") if isinstance(condition, dict) else None

    if not isinstance(target, str) or not target:
        return [_error("condition_without_property", f"Property '{label}' has a condition without a property", prop_id)]

    issues = []
    if target not in known_ids:
        issues.append(
            _error(
                "condition_unknown_property",
                f"Property '{label}' has a condition on unknown property '{target}'",
                prop_id,
            )
        )

    condition_type = condition.get("type", "simple")
    if condition_type == "simple" and "equals" not in condition:
        issues.append(_error("condition_missing_equals", f"Simple condition of '{label}' has no 'equals'", prop_id))
    elif condition_type == "oneOf":
        one_of = condition.get("oneOf")
        if not isinstance(one_of, list) or not one_of:
            issues.append(_error("condition_empty_one_of", f"oneOf condition of '{label}' needs a non-empty list", prop_id))
    elif condition_type not in ("simple", "oneOf"):
        issues.append(_error("condition_unknown_type", f"Condition of '{label}' has unknown type '{condition_type}'", prop_id))

    return issues


def validate_element_template(template: dict[str, Any]) -> list[AuditIssue]:
    """Return every issue found in one element template document."""
    issues: list[AuditIssue] = []
    properties = template.get("properties")
    if not isinstance(properties, list):
        return [_error("missing_properties", "Template has no properties list")]

    for key in ("name", "id", "appliesTo"):
        if not template.get(key):
            issues.append(_error("missing_template_field", f"Template is missing '{key}'"))

    seen_ids: set[str] = set()
    for prop in properties:
        if not isinstance(prop, dict):
            continue
        prop_id = _property_id(prop)
        if not prop_id:
            continue
        if prop_id in seen_ids:
            issues.append(_error("duplicate_id", f"Duplicate property id '{prop_id}'", prop_id))
        seen_ids.add(prop_id)

    for index, prop in enumerate(properties):
        if not isinstance(prop, dict):
            issues.append(_error("invalid_property", f"Property #{index} is not an object"))
            continue
        label = _describe(prop, index)
        prop_id = _property_id(prop)

        for key in ("label", "type", "binding"):
            if not prop.get(key):
                issues.append(_error(f"missing_{key}", f"Property '{label}' has no {key}", prop_id))

        if prop.get("condition") is not None:
            issues.extend(_check_condition(prop, label, seen_ids))
        elif str(prop.get("group", "")).startswith(OPERATION_GROUP_PREFIX):
            issues.append(
                _error(
                    "operation_group_without_condition",
                    f"Property '{label}' in operation group '{prop['group']}' has no condition",
                    prop_id,
                )
            )

        # Hidden properties carry implementation details, not user input
        if prop.get("group") == "input" and prop.get("type") != "Hidden" and not prop.get("description"):
            issues.append(_warning("missing_description", f"Input property '{label}' has no description", prop_id))

    return issues


def assert_valid_element_template(template: dict[str, Any]) -> None:
    """Raise ValidationFailure if the template has any error-severity issue."""
    errors = [issue for issue in validate_element_template(template) if issue.severity == "error"]
    if errors:
        raise ValidationFailure(errors)


def visible_properties(template: dict[str, Any], selector: str) -> list[dict[str, Any]]:
    """Properties the modeler shows when the operation dropdown is set to selector."""
    visible = []
    for prop in template.get("properties", []):
        if not isinstance(prop, dict):
            continue
        condition = prop.get("condition")
        if not isinstance(condition, dict) or not condition:
            visible.append(prop)
        elif condition.get("type") == "oneOf":
            if selector in condition.get("oneOf", []):
                visible.append(prop)
        elif condition.get("equals") == selector:
            visible.append(prop)
    return visible


def _load_json(path: Path) -> tuple[Optional[dict], Optional[AuditIssue]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        return None, _error("unreadable_file", f"{path.name}: {e}")
    if not isinstance(data, dict):
        return None, _error("unreadable_file", f"{path.name}: top-level value is not an object")
    return data, None


def audit_connector(connector_dir: str | Path) -> ConnectorAudit:
    """Audit every element template and workflow template in one directory."""
    connector_dir = Path(connector_dir)
    audit = ConnectorAudit(connector_dir=str(connector_dir))

    for path in sorted(connector_dir.glob(ELEMENT_TEMPLATE_GLOB)):
        audit.files.append(path.name)
        template, load_issue = _load_json(path)
        if load_issue:
            audit.issues.append(load_issue)
            continue
        audit.issues.extend(validate_element_template(template))

    for path in sorted(connector_dir.glob(WORKFLOW_GLOB)):
        audit.files.append(path.name)
        workflow, load_issue = _load_json(path)
        if load_issue:
            audit.issues.append(load_issue)
            continue
        for message in validate_workflow(workflow):
            audit.issues.append(_error("invalid_workflow", f"{path.name}: {message}"))

    logger.debug(
        "connector_audited",
        connector_dir=str(connector_dir),
        errors=len(audit.errors),
        warnings=len(audit.warnings),
    )
    return audit


def audit_directory(root: str | Path) -> AuditReport:
    """Audit every connector directory below root (root itself included)."""
    root = Path(root)
    directories = sorted({path.parent for path in root.rglob(ELEMENT_TEMPLATE_GLOB)})
    report = AuditReport(connectors=[audit_connector(directory) for directory in directories])

    logger.info(
        "audit_complete",
        root=str(root),
        connectors=len(report.connectors),
        errors=report.error_count,
        warnings=report.warning_count,
    )
    return report
