"""Connector generator: renders every artifact of a connector and writes them.

Layout on disk:

    <output_dir>/<category>/<connector_id>/
        <connector_id>.element.json
        <connector_id>.n8n.json
        <connector_id>.bpmn
        README.md
        connector.json

Regenerating an existing connector bumps the patch version of its
connector.json and, unless forced, keeps a timestamped backup of the
workflow and BPMN files, which are the ones users tend to hand-edit.
"""
import json
import os
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

import structlog
from pydantic import BaseModel

from connector_generator.config import get_settings
from connector_generator.errors import ConnectorGeneratorError, ConnectorWriteError
from connector_generator.generators import (
    element_template_to_json,
    generate_bpmn_example,
    generate_element_template,
    generate_metadata,
    generate_multi_operation_bpmn_example,
    generate_multi_operation_element_template,
    generate_multi_operation_metadata,
    generate_multi_operation_readme,
    generate_multi_operation_workflow,
    generate_n8n_workflow,
    generate_readme,
    generate_setup_bpmn,
    metadata_to_json,
    n8n_workflow_to_json,
)
from connector_generator.generators.metadata import MULTI_OPERATION_BASE_VERSION, isoformat_utc
from connector_generator.models.results import (
    BatchFailure,
    BatchResult,
    ConnectorPreview,
    GeneratedFiles,
    GenerationWarning,
)
from connector_generator.models.schema import MultiOperationSchema, OperationSchema
from connector_generator.utils.type_mapper import collect_type_warnings

logger = structlog.get_logger()


METADATA_FILE = "connector.json"
README_FILE = "README.md"
DEFAULT_VERSION = "1.0.0"
BACKUP_SUFFIXES = (".bpmn", ".n8n.json")


class GeneratorOptions(BaseModel):
    """Options of the module-level generation functions."""

    output_dir: Optional[str] = None
    dry_run: bool = False
    force: bool = False
    verbose: bool = False


def bump_patch_version(version: str) -> str:
    """"1.2.3" -> "1.2.4". Raises ValueError on anything but MAJOR.MINOR.PATCH."""
    parts = version.split(".")
    if len(parts) != 3:
        raise ValueError(f"Not a semantic version: {version!r}")
    major, minor, patch = (int(part) for part in parts)
    return f"{major}.{minor}.{patch + 1}"


def backup_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp usable in file names (':' and '.' become '-')."""
    return isoformat_utc(moment).replace(":", "-").replace(".", "-")


class ConnectorGenerator:
    """Generates connectors into an output directory."""

    def __init__(
        self,
        output_dir: Optional[str] = None,
        dry_run: bool = False,
        force: bool = False,
        verbose: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize generator.

        Args:
            output_dir: Root of the connector tree (default: settings.output_dir)
            dry_run: Render everything but write nothing
            force: Overwrite without keeping backups
            verbose: Log version bumps and backups at info level
            clock: Returns the current time; injectable for tests
        """
        self.output_dir = Path(output_dir or get_settings().output_dir)
        self.dry_run = dry_run
        self.force = force
        self.verbose = verbose
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def _detail(self, event: str, **kwargs) -> None:
        if self.verbose:
            logger.info(event, **kwargs)
        else:
            logger.debug(event, **kwargs)

    # =========================================================================
    # SINGLE OPERATION
    # =========================================================================

    def render_connector(self, schema: OperationSchema, version: str = DEFAULT_VERSION) -> dict[str, str]:
        """Render every document of a connector, keyed by file name."""
        connector_id = schema.connector_id
        metadata = generate_metadata(schema, version=version, created_at=self.clock())

        return {
            f"{connector_id}.element.json": element_template_to_json(generate_element_template(schema)),
            f"{connector_id}.n8n.json": n8n_workflow_to_json(generate_n8n_workflow(schema)),
            f"{connector_id}.bpmn": generate_bpmn_example(schema),
            README_FILE: generate_readme(schema),
            METADATA_FILE: metadata_to_json(metadata),
        }

    def preview_connector(self, schema: OperationSchema) -> ConnectorPreview:
        """Render a connector without touching the disk."""
        connector_id = schema.connector_id
        documents = self.render_connector(schema)
        return ConnectorPreview(
            connector_id=connector_id,
            element_template=documents[f"{connector_id}.element.json"],
            n8n_workflow=documents[f"{connector_id}.n8n.json"],
            bpmn=documents[f"{connector_id}.bpmn"],
            readme=documents[README_FILE],
            metadata=documents[METADATA_FILE],
        )

    def generate_connector(self, schema: OperationSchema) -> GeneratedFiles:
        """Generate one connector; the result has the same shape in dry-run mode."""
        connector_id = schema.connector_id
        directory = self.output_dir / schema.category / connector_id

        warnings = collect_type_warnings(schema.parameters)
        version, version_warning = self.resolve_version(directory / METADATA_FILE, DEFAULT_VERSION)
        if version_warning:
            warnings.append(version_warning)

        documents = self.render_connector(schema, version=version)
        backups = self._write(connector_id, directory, documents)

        files = {
            "elementTemplate": f"{connector_id}.element.json",
            "n8nWorkflow": f"{connector_id}.n8n.json",
            "bpmn": f"{connector_id}.bpmn",
            "readme": README_FILE,
            "metadata": METADATA_FILE,
        }

        logger.info(
            "connector_generated",
            connector_id=connector_id,
            version=version,
            directory=str(directory),
            dry_run=self.dry_run,
        )
        return GeneratedFiles(
            connector_id=connector_id,
            directory=str(directory),
            files=files,
            version=version,
            dry_run=self.dry_run,
            backups=backups,
            warnings=warnings,
        )

    def generate_connectors(self, schemas: list[OperationSchema]) -> BatchResult:
        """Generate connectors one by one; a failure does not stop the batch."""
        result = BatchResult()
        for schema in schemas:
            try:
                result.succeeded.append(self.generate_connector(schema))
            except (ConnectorGeneratorError, OSError, ValueError) as e:
                logger.error(
                    "connector_generation_failed",
                    node_id=schema.node_id,
                    operation=schema.operation,
                    error=str(e),
                )
                result.failed.append(
                    BatchFailure(node_id=schema.node_id, operation=schema.operation, error=str(e))
                )

        logger.info(
            "batch_generation_complete",
            succeeded=len(result.succeeded),
            failed=len(result.failed),
        )
        return result

    # =========================================================================
    # MULTI OPERATION
    # =========================================================================

    def render_multi_operation_connector(
        self,
        schema: MultiOperationSchema,
        version: str = MULTI_OPERATION_BASE_VERSION,
    ) -> dict[str, str]:
        node_id = schema.node_id
        metadata = generate_multi_operation_metadata(schema, version=version, created_at=self.clock())

        return {
            f"{node_id}.element.json": element_template_to_json(generate_multi_operation_element_template(schema)),
            f"{node_id}-template.n8n.json": n8n_workflow_to_json(generate_multi_operation_workflow(schema)),
            f"{node_id}-example.bpmn": generate_multi_operation_bpmn_example(schema),
            f"{node_id}-setup.bpmn": generate_setup_bpmn(schema),
            README_FILE: generate_multi_operation_readme(schema),
            METADATA_FILE: metadata_to_json(metadata),
        }

    def generate_multi_operation_connector(
        self,
        schema: MultiOperationSchema,
        max_tier: Optional[int] = None,
    ) -> GeneratedFiles:
        """Generate one connector covering every operation up to max_tier."""
        if max_tier is None:
            max_tier = get_settings().default_max_tier
        total = schema.total_operations()
        filtered = schema.filter_by_tier(max_tier)
        kept = filtered.total_operations()

        if kept == 0:
            raise ConnectorGeneratorError(
                f"No operations of '{schema.node_id}' are at or below tier {max_tier}"
            )
        if kept < total:
            logger.warning(
                "operations_filtered_by_tier",
                node_id=schema.node_id,
                max_tier=max_tier,
                kept=kept,
                excluded=total - kept,
            )

        node_id = schema.node_id
        directory = self.output_dir / filtered.category / node_id

        unique_params = {}
        for _, operation in filtered.iter_operations():
            for param in operation.parameters:
                unique_params.setdefault(param.name, param)
        warnings = collect_type_warnings(list(unique_params.values()))

        version, version_warning = self.resolve_version(directory / METADATA_FILE, MULTI_OPERATION_BASE_VERSION)
        if version_warning:
            warnings.append(version_warning)

        documents = self.render_multi_operation_connector(filtered, version=version)
        backups = self._write(node_id, directory, documents)

        files = {
            "elementTemplate": f"{node_id}.element.json",
            "n8nWorkflow": f"{node_id}-template.n8n.json",
            "bpmn": f"{node_id}-example.bpmn",
            "setupBpmn": f"{node_id}-setup.bpmn",
            "readme": README_FILE,
            "metadata": METADATA_FILE,
        }

        logger.info(
            "multi_operation_connector_generated",
            connector_id=node_id,
            version=version,
            operations=kept,
            directory=str(directory),
            dry_run=self.dry_run,
        )
        return GeneratedFiles(
            connector_id=node_id,
            directory=str(directory),
            files=files,
            version=version,
            dry_run=self.dry_run,
            backups=backups,
            warnings=warnings,
        )

    # =========================================================================
    # FILESYSTEM
    # =========================================================================

    def resolve_version(
        self,
        metadata_path: Path,
        default: str,
    ) -> tuple[str, Optional[GenerationWarning]]:
        """Version of the next generation: patch bump of the existing metadata.

        Unreadable metadata falls back to the default with a warning.
        """
        if not metadata_path.exists():
            return default, None

        try:
            existing = json.loads(metadata_path.read_text(encoding="utf-8"))
            previous = existing["version"]
            version = bump_patch_version(previous)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(
                "malformed_metadata",
                path=str(metadata_path),
                error=str(e),
                fallback_version=DEFAULT_VERSION,
            )
            return DEFAULT_VERSION, GenerationWarning(
                code="malformed_metadata",
                message=f"Could not read existing metadata, using default version {DEFAULT_VERSION}",
                context={"path": str(metadata_path), "error": str(e)},
            )

        self._detail("version_bumped", previous=previous, version=version)
        return version, None

    def _write(self, connector_id: str, directory: Path, documents: dict[str, str]) -> list[str]:
        """Back up and commit the documents; returns backup file names."""
        if self.dry_run:
            return []

        try:
            directory.mkdir(parents=True, exist_ok=True)
            backups = [] if self.force else self._backup(directory, list(documents))
            self._commit(directory, documents)
        except OSError as e:
            raise ConnectorWriteError(connector_id, str(directory), str(e)) from e
        return backups

    def _backup(self, directory: Path, filenames: list[str]) -> list[str]:
        """Copy hand-editable files aside before they are overwritten."""
        if not (directory / METADATA_FILE).exists():
            return []

        timestamp = backup_timestamp(self.clock())
        backups = []
        for filename in filenames:
            source = directory / filename
            if not filename.endswith(BACKUP_SUFFIXES) or not source.exists():
                continue
            backup_name = f"{filename}.backup-{timestamp}"
            shutil.copy2(source, directory / backup_name)
            backups.append(backup_name)
            self._detail("backup_created", file=backup_name)
        return backups

    def _commit(self, directory: Path, documents: dict[str, str]) -> None:
        """Write all documents to a staging directory, then move them into place."""
        staging = Path(tempfile.mkdtemp(prefix=".staging-", dir=directory))
        try:
            for filename, content in documents.items():
                (staging / filename).write_text(content, encoding="utf-8")
            for filename in documents:
                os.replace(staging / filename, directory / filename)
        finally:
            shutil.rmtree(staging, ignore_errors=True)


# =============================================================================
# FUNCTIONAL API
# =============================================================================

def _generator(options: Optional[GeneratorOptions]) -> ConnectorGenerator:
    options = options or GeneratorOptions()
    return ConnectorGenerator(
        output_dir=options.output_dir,
        dry_run=options.dry_run,
        force=options.force,
        verbose=options.verbose,
    )


def generate_connector(schema: OperationSchema, options: Optional[GeneratorOptions] = None) -> GeneratedFiles:
    return _generator(options).generate_connector(schema)


def generate_connectors(
    schemas: list[OperationSchema],
    options: Optional[GeneratorOptions] = None,
) -> BatchResult:
    return _generator(options).generate_connectors(schemas)


def generate_multi_operation_connector(
    schema: MultiOperationSchema,
    options: Optional[GeneratorOptions] = None,
    max_tier: Optional[int] = None,
) -> GeneratedFiles:
    return _generator(options).generate_multi_operation_connector(schema, max_tier=max_tier)


def preview_connector(schema: OperationSchema) -> ConnectorPreview:
    return ConnectorGenerator(dry_run=True).preview_connector(schema)
