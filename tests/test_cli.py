#!/usr/bin/env python3
"""Tests for the zb-migrate command line interface."""

import json
from unittest.mock import patch

import pytest

from conftest import FakeBrewClient, FakeInstaller, make_package
from zb_migrate.cli import create_parser, main, split_package_names
from zb_migrate.exceptions import PackageManagerError
from zb_migrate.migrator import HomebrewMigrator
from zb_migrate.models import MigrationState


@pytest.fixture
def migrator(sample_formulae, state_store):
    client = FakeBrewClient(sample_formulae, casks=[make_package("firefox", version="121.0", is_cask=True)])
    return HomebrewMigrator(client, FakeInstaller(), state_store, deny_list={"openssl@3"}, echo=print)


@pytest.fixture
def run_cli(migrator):
    """Run main() with collaborators replaced and prerequisites satisfied."""
    def run(*argv: str) -> int:
        with patch("zb_migrate.cli.get_default_config_path", return_value=None), \
                patch("zb_migrate.cli.build_migrator", return_value=migrator), \
                patch("zb_migrate.cli.PrerequisiteChecker.check_command", return_value=(True, [])):
            return main(list(argv))

    return run


class TestParser:
    """Test argument parsing."""

    def test_global_flags(self) -> None:
        """Test global options precede the command."""
        args = create_parser().parse_args(["-v", "--no-color", "analyze", "--json"])

        assert args.verbose is True
        assert args.no_color is True
        assert args.command == "analyze"
        assert args.json is True

    def test_migrate_options(self) -> None:
        """Test migrate flags."""
        args = create_parser().parse_args(["migrate", "--dry-run", "-p", "jq,git", "-p", "wget"])

        assert args.dry_run is True
        assert split_package_names(args.packages) == ["jq", "git", "wget"]

    def test_split_package_names_ignores_blanks(self) -> None:
        """Test empty items are dropped."""
        assert split_package_names([" jq , ,git "]) == ["jq", "git"]
        assert split_package_names(None) == []


class TestCommands:
    """Test command dispatch."""

    def test_no_command_prints_help(self, capsys) -> None:
        """Test running without a command fails with usage."""
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_analyze_json(self, run_cli, capsys) -> None:
        """Test analyze --json prints the structured report."""
        assert run_cli("analyze", "--json") == 0

        data = json.loads(capsys.readouterr().out)
        assert [p["name"] for p in data["should_keep_in_source"]] == ["openssl@3"]
        assert data["summary"]["risky"] == 2

    def test_analyze_text(self, run_cli, capsys) -> None:
        """Test the default text report."""
        assert run_cli("--no-color", "analyze") == 0

        out = capsys.readouterr().out
        assert "=== Package Migration Analysis ===" in out
        assert "[X] openssl@3 @ 3.2.0" in out

    def test_analyze_markdown_to_file(self, run_cli, tmp_path, capsys) -> None:
        """Test writing a markdown report to a file."""
        path = tmp_path / "report.md"

        assert run_cli("analyze", "--format", "markdown", "-o", str(path)) == 0

        assert path.read_text(encoding="utf-8").startswith("# Package Migration Analysis")
        assert str(path) in capsys.readouterr().out

    def test_analyze_excel_needs_output(self, run_cli) -> None:
        """Test excel output to stdout is rejected."""
        assert run_cli("analyze", "--format", "excel") == 1

    def test_list_json(self, run_cli, capsys) -> None:
        """Test list --json with casks."""
        assert run_cli("list", "--json", "--casks") == 0

        data = json.loads(capsys.readouterr().out)
        assert [p["name"] for p in data][-1] == "firefox"
        assert data[-1]["is_cask"] is True

    def test_list_text(self, run_cli, capsys) -> None:
        """Test the plain listing leaves casks out by default."""
        assert run_cli("list") == 0

        out = capsys.readouterr().out
        assert "Homebrew Formulae (4)" in out
        assert "firefox" not in out

    def test_export(self, run_cli, tmp_path) -> None:
        """Test export writes a Brewfile."""
        path = tmp_path / "Brewfile"

        assert run_cli("export", "-o", str(path)) == 0

        content = path.read_text(encoding="utf-8")
        assert 'brew "jq"' in content
        assert 'cask "firefox"' in content

    def test_export_writes_taps(self, run_cli, migrator, tmp_path) -> None:
        """Test export uses the detailed listing so taps are written."""
        path = tmp_path / "Brewfile"
        migrator.client.formulae = [make_package("terraform", tap="hashicorp/tap"), make_package("jq")]
        migrator.client.list_formulae = lambda: [make_package("terraform"), make_package("jq")]

        assert run_cli("export", "-o", str(path)) == 0

        content = path.read_text(encoding="utf-8")
        assert 'tap "hashicorp/tap"' in content
        assert 'brew "terraform"' in content

    def test_export_to_missing_directory(self, run_cli, tmp_path) -> None:
        """Test an unwritable export path is an error, not a traceback."""
        path = tmp_path / "missing" / "Brewfile"

        assert run_cli("export", "-o", str(path)) == 1
        assert not path.exists()

    def test_migrate_dry_run(self, run_cli, migrator, capsys) -> None:
        """Test dry run lists without installing."""
        assert run_cli("migrate", "--dry-run") == 0

        assert migrator.installer.installed == []
        assert "DRY RUN" in capsys.readouterr().out

    def test_migrate_all(self, run_cli, migrator, capsys) -> None:
        """Test a full migration prints the summary."""
        assert run_cli("migrate") == 0

        assert migrator.installer.installed[0] == "openssl@3"
        out = capsys.readouterr().out
        assert "=== Migration Summary ===" in out
        assert "firefox - Casks not yet supported" in out

    def test_migrate_failure_exit_status(self, run_cli, migrator) -> None:
        """Test a failed package makes the command fail."""
        migrator.installer.failures = {"jq": "no bottle"}

        assert run_cli("migrate", "--packages", "jq") == 1

    def test_migrate_unknown_package(self, run_cli, capsys) -> None:
        """Test unknown names are reported."""
        assert run_cli("migrate", "-p", "nope") == 0

        assert "Package not found: nope" in capsys.readouterr().out

    def test_status(self, run_cli, state_store, capsys) -> None:
        """Test status shows migrated and failed packages."""
        state_store.save(MigrationState(migrated_packages={"jq": make_package("jq", version="1.7.1")},
                                        failed_packages=["git"]))

        assert run_cli("status") == 0

        out = capsys.readouterr().out
        assert "Migration Status" in out
        assert "jq" in out
        assert "git" in out

    def test_cleanup_without_force(self, run_cli, migrator, state_store, capsys) -> None:
        """Test cleanup only warns without --force."""
        state_store.save(MigrationState(migrated_packages={"jq": make_package("jq")}))

        assert run_cli("cleanup") == 0

        assert migrator.client.uninstalled == []
        assert "--force" in capsys.readouterr().out

    @pytest.mark.parametrize("command, expected", [
        ("outdated", "brew outdated"),
        ("upgrade", "brew upgrade"),
    ])
    def test_guidance_commands(self, command: str, expected: str, capsys) -> None:
        """Test outdated and upgrade only print guidance."""
        with patch("zb_migrate.cli.get_default_config_path", return_value=None), \
                patch("zb_migrate.cli.build_migrator") as build:
            assert main([command]) == 0

        build.assert_not_called()
        assert expected in capsys.readouterr().out

    def test_missing_prerequisites(self, capsys) -> None:
        """Test missing tools abort with installation instructions."""
        with patch("zb_migrate.cli.get_default_config_path", return_value=None), \
                patch("zb_migrate.prerequisites.PrerequisiteChecker._check_tool", return_value=False):
            assert main(["migrate"]) == 1

        err = capsys.readouterr().err
        assert "brew: Install Homebrew from https://brew.sh" in err

    def test_errors_become_exit_status(self, run_cli, migrator) -> None:
        """Test ZbMigrateError is reported as a failed exit status."""
        def broken():
            raise PackageManagerError("Failed to list Homebrew formulae.", command="brew list")

        migrator.client.list_formulae = broken

        assert run_cli("list") == 1

    def test_invalid_config(self, tmp_path, capsys) -> None:
        """Test an invalid configuration file fails early."""
        path = tmp_path / "bad.yaml"
        path.write_text("output:\n  default_format: pdf\n", encoding="utf-8")

        assert main(["--config", str(path), "status"]) == 1
        assert "pdf" in capsys.readouterr().err
