"""Result objects returned by the orchestrator."""
from typing import Any

from pydantic import Field

from connector_generator.models.schema import CamelModel


class GenerationWarning(CamelModel):
    """A fail-open fallback that was taken during generation.

    Generation never aborts for these; the warning travels back to the
    caller next to the fallback value so it can be reported or asserted on.
    """

    code: str
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


class GeneratedFiles(CamelModel):
    """Manifest of one generated connector (same shape in dry-run mode)."""

    connector_id: str
    directory: str
    files: dict[str, str]
    version: str = "1.0.0"
    dry_run: bool = False
    backups: list[str] = Field(default_factory=list)
    warnings: list[GenerationWarning] = Field(default_factory=list)


class ConnectorPreview(CamelModel):
    """Rendered documents of one connector, without touching the disk."""

    connector_id: str
    element_template: str
    n8n_workflow: str
    bpmn: str
    readme: str
    metadata: str

    def get(self, file_key: str) -> str:
        """Return one document by its CLI key (element, workflow, bpmn, readme, metadata)."""
        mapping = {
            "element": self.element_template,
            "workflow": self.n8n_workflow,
            "bpmn": self.bpmn,
            "readme": self.readme,
            "metadata": self.metadata,
        }
        if file_key not in mapping:
            raise KeyError(f"Unknown file '{file_key}'. Choose from: {', '.join(mapping)}")
        return mapping[file_key]


class BatchFailure(CamelModel):
    """One schema of a batch that could not be generated."""

    node_id: str
    operation: str
    error: str


class BatchResult(CamelModel):
    """Per-item outcome of generate_connectors."""

    succeeded: list[GeneratedFiles] = Field(default_factory=list)
    failed: list[BatchFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed
