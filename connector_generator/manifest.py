"""Connector manifest: one JSON index of every connector on disk.

The connectors root is expected to contain up to three trees, each laid
out as <tree>/<category>/<connector>/connector.json:

    integrations/  hand-written integrations
    templates/     process templates
    generated/     output of the generator
"""
import json
from pathlib import Path
from typing import Any, Optional

import structlog

from connector_generator.generators.metadata import isoformat_utc

logger = structlog.get_logger()


MANIFEST_VERSION = "1.0.0"
REQUIRED_FIELDS = ("id", "name", "description")

# (directory, connector type)
CONNECTOR_TREES = [
    ("integrations", "integration"),
    ("templates", "template"),
    ("generated", "integration"),
]


def _subdirectories(path: Path) -> list[Path]:
    return sorted(child for child in path.iterdir() if child.is_dir() and not child.name.startswith("."))


def _load_metadata(metadata_path: Path) -> Optional[dict[str, Any]]:
    try:
        metadata = json.loads(metadata_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("connector_metadata_unreadable", path=str(metadata_path), error=str(e))
        return None

    if not isinstance(metadata, dict) or not all(metadata.get(field) for field in REQUIRED_FIELDS):
        logger.warning(
            "connector_metadata_invalid",
            path=str(metadata_path),
            required=list(REQUIRED_FIELDS),
        )
        return None
    return metadata


def scan_tree(connectors_root: Path, tree: str, connector_type: str) -> list[dict[str, Any]]:
    """Load every valid connector.json of one tree."""
    tree_path = connectors_root / tree
    if not tree_path.is_dir():
        logger.warning("connector_tree_missing", path=str(tree_path))
        return []

    connectors = []
    for category_dir in _subdirectories(tree_path):
        for connector_dir in _subdirectories(category_dir):
            metadata_path = connector_dir / "connector.json"
            if not metadata_path.exists():
                logger.warning("connector_metadata_missing", connector_dir=str(connector_dir))
                continue

            metadata = _load_metadata(metadata_path)
            if metadata is None:
                continue

            metadata["path"] = f"{connectors_root.name}/{tree}/{category_dir.name}/{connector_dir.name}"
            metadata["type"] = connector_type
            # The folder is authoritative for the category
            metadata["category"] = category_dir.name
            connectors.append(metadata)
            logger.debug("connector_indexed", name=metadata["name"], category=category_dir.name)

    return connectors


def build_manifest(connectors_root: str | Path) -> dict[str, Any]:
    """Build the manifest document of a connectors root."""
    connectors_root = Path(connectors_root)
    trees = {tree: scan_tree(connectors_root, tree, connector_type) for tree, connector_type in CONNECTOR_TREES}

    return {
        "version": MANIFEST_VERSION,
        "generatedAt": isoformat_utc(),
        "stats": {
            "totalConnectors": sum(len(connectors) for connectors in trees.values()),
            "integrations": len(trees["integrations"]),
            "templates": len(trees["templates"]),
            "generated": len(trees["generated"]),
        },
        "connectors": trees,
    }


def write_manifest(connectors_root: str | Path, output_file: str | Path) -> dict[str, Any]:
    """Build the manifest and write it to output_file; returns the manifest."""
    manifest = build_manifest(connectors_root)
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(json.dumps(manifest, indent=2), encoding="utf-8")

    logger.info(
        "manifest_written",
        output_file=str(output_file),
        total=manifest["stats"]["totalConnectors"],
    )
    return manifest
