"""
Catalyst connector generator CLI.

    catalyst-connector generate slack --operation send
    catalyst-connector generate-multi gmail --tier 2
    catalyst-connector audit connectors/generated
"""
import json
from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from connector_generator import __version__
from connector_generator.audit import audit_directory
from connector_generator.config import get_settings
from connector_generator.connector_generator import ConnectorGenerator
from connector_generator.errors import ConnectorGeneratorError, NodeNotFoundError, NotFoundError
from connector_generator.extractors import (
    extract_n8n_node_schema,
    get_node_operation,
    get_node_operations,
    list_available_nodes,
    node_exists,
)
from connector_generator.extractors.n8n_schema_extractor import get_description_registry
from connector_generator.logging_config import configure_logging
from connector_generator.manifest import write_manifest
from connector_generator.models.results import GeneratedFiles
from connector_generator.models.schema import operation_selector
from connector_generator.utils.workflow_printer import print_element_template, print_workflow

console = Console()
err_console = Console(stderr=True)

PREVIEW_FILES = ["element", "workflow", "bpmn", "readme", "metadata"]
PREVIEW_TITLES = {
    "element": "Element Template (.element.json)",
    "workflow": "n8n Workflow (.n8n.json)",
    "bpmn": "BPMN Example (.bpmn)",
    "readme": "README.md",
    "metadata": "Connector Metadata (connector.json)",
}


def _setup_logging(verbose: bool) -> None:
    settings = get_settings()
    configure_logging(level="DEBUG" if verbose else settings.log_level, json_output=settings.log_json)


def _fail(error: Exception) -> NoReturn:
    """Print the error (and any valid alternatives), then exit 1."""
    err_console.print(f"[red]Error: {escape(str(error))}[/red]", soft_wrap=True)
    if isinstance(error, NotFoundError) and error.available:
        err_console.print(f"Available: {escape(', '.join(error.available))}", soft_wrap=True)
    raise SystemExit(1)


def _known_services() -> list[str]:
    """Services known to the catalog or the description registry."""
    services = list_available_nodes()
    for node_id in get_description_registry().list_nodes():
        if node_id not in services:
            services.append(node_id)
    return services


def _print_generated(generated: GeneratedFiles) -> None:
    verb = "Would generate" if generated.dry_run else "Generated"
    console.print(f"[green]✓ {verb}: {generated.connector_id}[/green] [dim](v{generated.version})[/dim]")
    console.print(f"  [dim]Directory: {escape(generated.directory)}[/dim]", soft_wrap=True)
    console.print(f"  [dim]Files: {', '.join(generated.files.values())}[/dim]", soft_wrap=True)
    for backup in generated.backups:
        console.print(f"  [dim]Backup: {backup}[/dim]")
    for warning in generated.warnings:
        console.print(f"  [yellow]⚠ {escape(warning.message)}[/yellow]", soft_wrap=True)


@click.group(name="catalyst-connector")
@click.version_option(__version__, prog_name="catalyst-connector")
def cli() -> None:
    """Generate Camunda + n8n connectors from n8n node schemas."""


# =============================================================================
# GENERATION
# =============================================================================


@cli.command("generate")
@click.argument("service")
@click.option("-o", "--operation", default=None, help="Generate only this operation")
@click.option("-d", "--output-dir", default=None, help="Output directory (default: CATALYST_OUTPUT_DIR)")
@click.option("--dry-run", is_flag=True, help="Render everything without writing files")
@click.option("--force", is_flag=True, help="Overwrite without keeping backups")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
def generate_cmd(
    service: str,
    operation: Optional[str],
    output_dir: Optional[str],
    dry_run: bool,
    force: bool,
    verbose: bool,
) -> None:
    """Generate single-operation connectors for SERVICE."""
    _setup_logging(verbose)

    try:
        schemas = [get_node_operation(service, operation)] if operation else get_node_operations(service)
    except ConnectorGeneratorError as e:
        _fail(e)

    generator = ConnectorGenerator(output_dir=output_dir, dry_run=dry_run, force=force, verbose=verbose)
    console.print(f"[blue]Generating {len(schemas)} connector(s) for {escape(service)}...[/blue]")

    result = generator.generate_connectors(schemas)
    for generated in result.succeeded:
        _print_generated(generated)
    for failure in result.failed:
        err_console.print(f"[red]✗ {failure.node_id}/{failure.operation}: {escape(failure.error)}[/red]", soft_wrap=True)

    if not result.ok:
        err_console.print(f"[red]Error: {len(result.failed)} of {len(schemas)} connector(s) failed[/red]")
        raise SystemExit(1)
    console.print(f"[blue]Done! Generated {len(result.succeeded)} connector(s).[/blue]")


@cli.command("generate-multi")
@click.argument("service")
@click.option("-t", "--tier", type=click.IntRange(1, 3), default=None, help="Highest operation tier to include")
@click.option("-d", "--output-dir", default=None, help="Output directory (default: CATALYST_OUTPUT_DIR)")
@click.option("--dry-run", is_flag=True, help="Render everything without writing files")
@click.option("--force", is_flag=True, help="Overwrite without keeping backups")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
def generate_multi_cmd(
    service: str,
    tier: Optional[int],
    output_dir: Optional[str],
    dry_run: bool,
    force: bool,
    verbose: bool,
) -> None:
    """Generate one connector covering every operation of SERVICE."""
    _setup_logging(verbose)
    if tier is None:
        tier = get_settings().default_max_tier

    try:
        known = _known_services()
        if service.lower() not in known:
            raise NodeNotFoundError(service, known)

        schema = extract_n8n_node_schema(service)
        console.print(
            f"[blue]Generating multi-operation connector for {escape(service)} "
            f"({schema.total_operations()} operations, tier <= {tier})...[/blue]"
        )
        generator = ConnectorGenerator(output_dir=output_dir, dry_run=dry_run, force=force, verbose=verbose)
        generated = generator.generate_multi_operation_connector(schema, max_tier=tier)
    except ConnectorGeneratorError as e:
        _fail(e)

    _print_generated(generated)


# =============================================================================
# DISCOVERY
# =============================================================================


@cli.command("list-nodes")
def list_nodes_cmd() -> None:
    """List services available for generation."""
    _setup_logging(False)
    descriptions = get_description_registry()

    table = Table(title="Available n8n nodes")
    table.add_column("Node", style="cyan")
    table.add_column("Operations", justify="right")
    table.add_column("Multi-operation")

    for node_id in _known_services():
        count = len(get_node_operations(node_id)) if node_exists(node_id) else 0
        table.add_row(node_id, str(count), "yes" if descriptions.exists(node_id) else "stub")

    console.print(table)


@cli.command("list-operations")
@click.argument("service")
def list_operations_cmd(service: str) -> None:
    """List the operations of SERVICE."""
    _setup_logging(False)
    description_registry = get_description_registry()

    if not node_exists(service) and not description_registry.exists(service):
        _fail(NodeNotFoundError(service, _known_services()))

    if node_exists(service):
        table = Table(title=f"Operations for {service}")
        table.add_column("Operation", style="cyan")
        table.add_column("Name")
        table.add_column("Resource")
        table.add_column("Parameters", justify="right")
        for schema in get_node_operations(service):
            table.add_row(schema.operation, schema.operation_name, schema.resource, str(len(schema.parameters)))
        console.print(table)

    if description_registry.exists(service):
        try:
            multi = extract_n8n_node_schema(service)
        except ConnectorGeneratorError as e:
            _fail(e)
        table = Table(title=f"Multi-operation selectors for {service}")
        table.add_column("Selector", style="cyan")
        table.add_column("Name")
        table.add_column("Tier", justify="right")
        for resource, op in multi.iter_operations():
            table.add_row(operation_selector(resource.value, op.value), f"{resource.name} - {op.name}", str(op.tier))
        console.print(table)


# =============================================================================
# INSPECTION
# =============================================================================


@cli.command("preview")
@click.argument("service")
@click.option("-o", "--operation", default="send", show_default=True, help="Operation to preview")
@click.option("-f", "--file", "file_key", type=click.Choice(PREVIEW_FILES), default=None, help="Show only one file")
@click.option("--summary", is_flag=True, help="Print a readable summary instead of raw documents")
def preview_cmd(service: str, operation: str, file_key: Optional[str], summary: bool) -> None:
    """Render a connector of SERVICE without writing anything."""
    _setup_logging(False)

    try:
        schema = get_node_operation(service, operation)
        preview = ConnectorGenerator(dry_run=True).preview_connector(schema)
    except ConnectorGeneratorError as e:
        _fail(e)

    console.print(f"[blue]Preview: {preview.connector_id}[/blue]")

    if summary:
        click.echo(print_element_template(preview.element_template))
        click.echo(print_workflow(preview.n8n_workflow))
        return

    for key in [file_key] if file_key else PREVIEW_FILES:
        console.print(f"\n[cyan]{PREVIEW_TITLES[key]}:[/cyan]")
        click.echo(preview.get(key))


@cli.command("compare")
@click.argument("service")
@click.option("-o", "--operation", default="send", show_default=True, help="Operation to compare")
@click.option(
    "-e",
    "--existing",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory of an existing connector",
)
def compare_cmd(service: str, operation: str, existing: Path) -> None:
    """Compare a generated connector with an existing one on disk."""
    _setup_logging(False)

    try:
        schema = get_node_operation(service, operation)
        preview = ConnectorGenerator(dry_run=True).preview_connector(schema)
    except ConnectorGeneratorError as e:
        _fail(e)

    console.print(f"[blue]Comparing: {preview.connector_id}[/blue]")

    element_path = existing / f"{preview.connector_id}.element.json"
    workflow_path = existing / f"{preview.connector_id}.n8n.json"
    if not element_path.exists() and not workflow_path.exists():
        console.print(f"[yellow]No {preview.connector_id} element template or workflow in {escape(str(existing))}[/yellow]")
        return

    table = Table(title="Generated vs existing")
    table.add_column("Document", style="cyan")
    table.add_column("Count")
    table.add_column("Generated", justify="right")
    table.add_column("Existing", justify="right")

    generated_labels: set[str] = set()
    existing_labels: set[str] = set()
    try:
        if element_path.exists():
            generated_props = json.loads(preview.element_template)["properties"]
            existing_props = json.loads(element_path.read_text(encoding="utf-8")).get("properties", [])
            table.add_row("Element template", "properties", str(len(generated_props)), str(len(existing_props)))
            generated_labels = {prop.get("label", "") for prop in generated_props}
            existing_labels = {prop.get("label", "") for prop in existing_props}

        if workflow_path.exists():
            generated_nodes = json.loads(preview.n8n_workflow)["nodes"]
            existing_nodes = json.loads(workflow_path.read_text(encoding="utf-8")).get("nodes", [])
            table.add_row("n8n workflow", "nodes", str(len(generated_nodes)), str(len(existing_nodes)))
    except (OSError, ValueError) as e:
        _fail(e)

    console.print(table)
    for label in sorted(generated_labels - existing_labels):
        console.print(f"  [green]+ {escape(label)}[/green]")
    for label in sorted(existing_labels - generated_labels):
        console.print(f"  [red]- {escape(label)}[/red]")


@cli.command("audit")
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=Path))
def audit_cmd(path: Path) -> None:
    """Audit every connector below PATH."""
    _setup_logging(False)
    report = audit_directory(path)

    if not report.connectors:
        console.print(f"[yellow]No connectors found in {escape(str(path))}[/yellow]")
        return

    for connector in report.connectors:
        if not connector.issues:
            console.print(f"[green]✓ {escape(connector.connector_dir)}[/green]", soft_wrap=True)
            continue
        console.print(f"[bold]{escape(connector.connector_dir)}[/bold]", soft_wrap=True)
        for issue in connector.issues:
            color = "red" if issue.severity == "error" else "yellow"
            console.print(f"  [{color}]{issue.severity}[/{color}] {issue.code}: {escape(issue.message)}", soft_wrap=True)

    console.print(
        f"\n[bold]Summary: {len(report.connectors)} connector(s), "
        f"{report.error_count} error(s), {report.warning_count} warning(s)[/bold]"
    )
    raise SystemExit(1 if report.has_errors else 0)


@cli.command("manifest")
@click.argument("connectors_root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Manifest file (default: <connectors-root>/connectors-manifest.json)",
)
def manifest_cmd(connectors_root: Path, output: Optional[Path]) -> None:
    """Index every connector.json below CONNECTORS_ROOT."""
    _setup_logging(False)
    output = output or connectors_root / "connectors-manifest.json"

    try:
        manifest = write_manifest(connectors_root, output)
    except OSError as e:
        _fail(e)

    stats = manifest["stats"]
    console.print(f"[green]✓ Generated manifest with {stats['totalConnectors']} connectors[/green]")
    console.print(f"  - {stats['integrations']} integrations")
    console.print(f"  - {stats['templates']} templates")
    console.print(f"  - {stats['generated']} generated")
    console.print(f"  → {escape(str(output))}", soft_wrap=True)


def main() -> None:
    cli(prog_name="catalyst-connector")


if __name__ == "__main__":
    main()
