"""Tests for the catalyst-connector CLI."""
import json

import pytest
from click.testing import CliRunner

from connector_generator import cli as cli_module
from connector_generator.cli import cli


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    # Handlers bound to the runner's streams would outlive each invocation
    monkeypatch.setattr(cli_module, "_setup_logging", lambda verbose: None)


@pytest.fixture
def runner():
    return CliRunner()


# =========================================================================
# generate
# =========================================================================

class TestGenerate:

    def test_generates_one_operation(self, runner, tmp_path):
        result = runner.invoke(cli, ["generate", "slack", "-o", "send", "-d", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "✓ Generated: slack-send-message" in result.output
        assert "Done! Generated 1 connector(s)." in result.output
        assert (tmp_path / "communication" / "slack-send-message" / "connector.json").exists()

    def test_generates_every_operation(self, runner, tmp_path):
        result = runner.invoke(cli, ["generate", "gmail", "-d", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Done! Generated 4 connector(s)." in result.output

    def test_dry_run(self, runner, tmp_path):
        result = runner.invoke(cli, ["generate", "slack", "-d", str(tmp_path), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Would generate: slack-send-message" in result.output
        assert list(tmp_path.iterdir()) == []

    def test_regeneration_reports_backups(self, runner, tmp_path):
        runner.invoke(cli, ["generate", "slack", "-d", str(tmp_path)])
        result = runner.invoke(cli, ["generate", "slack", "-d", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "(v1.0.1)" in result.output
        assert "Backup: slack-send-message.n8n.json.backup-" in result.output

    def test_unknown_operation_lists_alternatives(self, runner, tmp_path):
        result = runner.invoke(cli, ["generate", "slack", "-o", "nonexistent", "-d", str(tmp_path)])

        assert result.exit_code == 1
        assert "Error: Operation 'nonexistent' not found" in result.output
        assert "Available: send" in result.output
        assert list(tmp_path.iterdir()) == []

    def test_unknown_service(self, runner):
        result = runner.invoke(cli, ["generate", "teams"])

        assert result.exit_code == 1
        assert "Available: slack, gmail" in result.output


# =========================================================================
# generate-multi
# =========================================================================

class TestGenerateMulti:

    def test_generates_gmail(self, runner, tmp_path):
        result = runner.invoke(cli, ["generate-multi", "gmail", "-t", "2", "-d", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "✓ Generated: gmail" in result.output
        assert "(v2.0.0)" in result.output
        assert (tmp_path / "communication" / "gmail" / "gmail-setup.bpmn").exists()

    @pytest.mark.parametrize("tier", ["0", "5"])
    def test_tier_is_range_checked(self, runner, tier):
        result = runner.invoke(cli, ["generate-multi", "gmail", "-t", tier])

        assert result.exit_code == 2

    def test_unknown_service(self, runner, tmp_path):
        result = runner.invoke(cli, ["generate-multi", "teams", "-d", str(tmp_path)])

        assert result.exit_code == 1
        assert "Node 'teams' not found" in result.output


# =========================================================================
# Node and operation listings
# =========================================================================

class TestDiscovery:

    def test_list_nodes(self, runner):
        result = runner.invoke(cli, ["list-nodes"])

        assert result.exit_code == 0, result.output
        assert "slack" in result.output
        assert "gmail" in result.output

    def test_list_operations(self, runner):
        result = runner.invoke(cli, ["list-operations", "gmail"])

        assert result.exit_code == 0, result.output
        assert "addLabel" in result.output
        assert "message:addLabels" in result.output

    def test_list_operations_unknown_service(self, runner):
        result = runner.invoke(cli, ["list-operations", "teams"])

        assert result.exit_code == 1
        assert "Available: slack, gmail" in result.output


# =========================================================================
# Previews
# =========================================================================

class TestPreview:

    def test_single_file(self, runner):
        result = runner.invoke(cli, ["preview", "slack", "-f", "metadata"])

        assert result.exit_code == 0, result.output
        assert "Preview: slack-send-message" in result.output
        assert '"id": "slack-send-message"' in result.output
        assert "<?xml" not in result.output

    def test_summary(self, runner):
        result = runner.invoke(cli, ["preview", "slack", "--summary"])

        assert result.exit_code == 0, result.output
        assert "ELEMENT TEMPLATE: Catalyst - Slack - Send Message" in result.output
        assert "Path: /catalyst-slack-send-message" in result.output

    def test_unknown_file(self, runner):
        result = runner.invoke(cli, ["preview", "slack", "-f", "diagram"])

        assert result.exit_code == 2


# =========================================================================
# compare
# =========================================================================

class TestCompare:

    def test_against_generated_connector(self, runner, tmp_path):
        runner.invoke(cli, ["generate", "slack", "-d", str(tmp_path)])
        existing = tmp_path / "communication" / "slack-send-message"
        template_path = existing / "slack-send-message.element.json"
        template = json.loads(template_path.read_text())
        template["properties"][1]["label"] = "Renamed"
        template_path.write_text(json.dumps(template))

        result = runner.invoke(cli, ["compare", "slack", "--existing", str(existing)])

        assert result.exit_code == 0, result.output
        assert "Generated vs existing" in result.output
        assert "- Renamed" in result.output

    def test_no_existing_files(self, runner, tmp_path):
        result = runner.invoke(cli, ["compare", "slack", "--existing", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "No slack-send-message element template or workflow" in result.output

    def test_existing_is_required(self, runner):
        result = runner.invoke(cli, ["compare", "slack"])

        assert result.exit_code == 2


# =========================================================================
# audit and manifest
# =========================================================================

class TestAuditAndManifest:

    def test_audit_clean_tree(self, runner, tmp_path):
        runner.invoke(cli, ["generate", "slack", "-d", str(tmp_path)])

        result = runner.invoke(cli, ["audit", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "1 connector(s), 0 error(s)" in result.output

    def test_audit_reports_errors(self, runner, tmp_path):
        (tmp_path / "broken.element.json").write_text("{")

        result = runner.invoke(cli, ["audit", str(tmp_path)])

        assert result.exit_code == 1
        assert "unreadable_file" in result.output

    def test_audit_empty_tree(self, runner, tmp_path):
        result = runner.invoke(cli, ["audit", str(tmp_path)])

        assert result.exit_code == 0
        assert "No connectors found" in result.output

    def test_manifest(self, runner, tmp_path):
        runner.invoke(cli, ["generate", "slack", "-d", str(tmp_path / "generated")])

        result = runner.invoke(cli, ["manifest", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "✓ Generated manifest with 1 connectors" in result.output
        manifest = json.loads((tmp_path / "connectors-manifest.json").read_text())
        assert manifest["stats"]["generated"] == 1


# =========================================================================
# Version
# =========================================================================

class TestVersion:

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output
