"""Artifact generators. All are pure: schema in, document out."""
from connector_generator.generators.element_template import (
    element_template_to_json,
    generate_element_template,
    generate_multi_operation_element_template,
)
from connector_generator.generators.n8n_workflow import (
    generate_multi_operation_workflow,
    generate_n8n_workflow,
    n8n_workflow_to_json,
)
from connector_generator.generators.bpmn_example import (
    default_field_description,
    generate_bpmn_example,
    generate_multi_operation_bpmn_example,
)
from connector_generator.generators.setup_bpmn import generate_setup_bpmn
from connector_generator.generators.metadata import (
    classify_quality_tier,
    generate_metadata,
    generate_multi_operation_metadata,
    metadata_to_json,
)
from connector_generator.generators.readme import generate_multi_operation_readme, generate_readme

__all__ = [
    "element_template_to_json",
    "generate_element_template",
    "generate_multi_operation_element_template",
    "generate_multi_operation_workflow",
    "generate_n8n_workflow",
    "n8n_workflow_to_json",
    "default_field_description",
    "generate_bpmn_example",
    "generate_multi_operation_bpmn_example",
    "generate_setup_bpmn",
    "classify_quality_tier",
    "generate_metadata",
    "generate_multi_operation_metadata",
    "metadata_to_json",
    "generate_multi_operation_readme",
    "generate_readme",
]
