#!/usr/bin/env python3
"""
Command line interface for migrating from Homebrew to Zerobrew.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import SUPPORTED_FORMATS, Config, build_deny_list, get_default_config_path, load_config
from .exceptions import ConfigurationError, ZbMigrateError
from .homebrew import BrewClient, ZerobrewInstaller
from .logging_config import setup_logging
from .migrator import HomebrewMigrator
from .prerequisites import PrerequisiteChecker
from .reporting import create_reporter, render_migration_summary
from .reporting.text_reporter import supports_color
from .state import StateStore
from .version import get_full_name_with_version

logger = logging.getLogger(__name__)

RULE = "-" * 50


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="zb-migrate",
        description="Migrate from Homebrew to Zerobrew",
    )
    parser.add_argument('--version', action='version', version=get_full_name_with_version())
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose output (show commands, output, and timing)')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')
    parser.add_argument('--config', help='Path to a YAML configuration file')
    parser.add_argument('--log-file', help='Also write a debug log to this file')

    subparsers = parser.add_subparsers(dest='command', metavar='<command>')

    list_parser = subparsers.add_parser('list', help='List all installed Homebrew packages')
    list_parser.add_argument('--casks', action='store_true', help='Include casks in the listing')
    list_parser.add_argument('--json', action='store_true', help='Output as JSON')

    export_parser = subparsers.add_parser('export', help='Export Homebrew packages to a Brewfile')
    export_parser.add_argument('-o', '--output', default='Brewfile',
                               help='Output file path (default: ./Brewfile)')

    migrate_parser = subparsers.add_parser('migrate', help='Migrate packages from Homebrew to Zerobrew')
    migrate_parser.add_argument('--dry-run', action='store_true',
                                help='Show what would be migrated without making changes')
    migrate_parser.add_argument('-p', '--packages', action='append',
                                help='Migrate only specific packages (comma separated, repeatable)')
    migrate_parser.add_argument('-i', '--interactive', action='store_true',
                                help='Prompt before each package migration')

    subparsers.add_parser('outdated', help='Check for available updates')
    subparsers.add_parser('upgrade', help='Update all packages via Zerobrew')

    cleanup_parser = subparsers.add_parser('cleanup', help='Cleanup Homebrew after successful migration')
    cleanup_parser.add_argument('--force', action='store_true', help='Force cleanup without confirmation')

    subparsers.add_parser('status', help='Show migration status')

    analyze_parser = subparsers.add_parser('analyze', help='Analyze packages and categorize by migration risk')
    analyze_parser.add_argument('--json', action='store_true',
                                help='Output as JSON instead of formatted text')
    analyze_parser.add_argument('--format', choices=SUPPORTED_FORMATS,
                                help='Report format (default from configuration)')
    analyze_parser.add_argument('-o', '--output', help='Write the report to this file')

    return parser


def build_migrator(config: Config) -> HomebrewMigrator:
    """Wire the collaborators described by ``config`` into a migrator."""
    migration = config.migration
    return HomebrewMigrator(
        client=BrewClient(migration.brew_command, timeout=migration.command_timeout),
        installer=ZerobrewInstaller(migration.installer_command, timeout=migration.command_timeout),
        state_store=StateStore(migration.state_file),
        deny_list=build_deny_list(config),
    )


def split_package_names(values: Optional[List[str]]) -> List[str]:
    """Flatten repeated and comma separated --packages values."""
    names = []
    for value in values or []:
        names.extend(name.strip() for name in value.split(',') if name.strip())
    return names


def cmd_list(args, config: Config, migrator: HomebrewMigrator) -> int:
    formulae = migrator.client.list_formulae()
    include_casks = args.casks or config.migration.include_casks
    casks = migrator.client.list_casks() if include_casks else []

    if args.json:
        print(json.dumps([p.to_dict() for p in formulae + casks], indent=2))
        return 0

    print(f"📦 Homebrew Formulae ({len(formulae)})")
    print(RULE)
    for pkg in formulae:
        tap = f" ({pkg.tap})" if pkg.tap else ""
        pinned = " [pinned]" if pkg.pinned else ""
        print(f"  {pkg.name:<28} {pkg.version}{tap}{pinned}")

    if include_casks:
        print(f"\n🖥️  Homebrew Casks ({len(casks)})")
        print(RULE)
        for pkg in casks:
            print(f"  {pkg.name:<28} {pkg.version}")

    return 0


def cmd_export(args, config: Config, migrator: HomebrewMigrator) -> int:
    from .brewfile import write_brewfile

    print(f"→ Exporting to {args.output}...")
    write_brewfile(args.output, migrator.client.list_formulae_detailed(), migrator.client.list_casks())
    print(f"✅ Brewfile created at {args.output}")
    return 0


def cmd_migrate(args, config: Config, migrator: HomebrewMigrator) -> int:
    names = split_package_names(args.packages)

    if names:
        report = migrator.migrate_packages(names, dry_run=args.dry_run)
        for name, reason in report.skipped:
            print(f"❌ {reason}: {name}")
        for name in report.successful:
            print(f"✅ {name} migrated successfully")
        for name, reason in report.failed:
            print(f"❌ {name} failed: {reason}")
        return 1 if report.failed else 0

    if args.interactive and not args.dry_run:
        report = migrator.migrate_interactive()
    else:
        report = migrator.migrate_all(dry_run=args.dry_run)
        if args.dry_run:
            return 0

    print(render_migration_summary(report))
    return 1 if report.failed else 0


def cmd_outdated(args, config: Config, migrator: Optional[HomebrewMigrator] = None) -> int:
    print("ℹ Zerobrew does not currently support checking for updates.\n")
    print("To check for updates on packages still in Homebrew:")
    print("  brew outdated")
    print("\nTo update a Zerobrew package, reinstall it:")
    print("  zb uninstall <package>")
    print("  zb install <package>")
    return 0


def cmd_upgrade(args, config: Config, migrator: Optional[HomebrewMigrator] = None) -> int:
    print("ℹ Zerobrew does not currently support bulk upgrades.\n")
    print("To upgrade packages still in Homebrew:")
    print("  brew upgrade")
    print("\nTo upgrade a Zerobrew package, reinstall it:")
    print("  zb uninstall <package>")
    print("  zb install <package>")
    print("\nTo list installed Zerobrew packages:")
    print("  zb list")
    return 0


def cmd_cleanup(args, config: Config, migrator: HomebrewMigrator) -> int:
    migrator.cleanup(force=args.force)
    return 0


def cmd_status(args, config: Config, migrator: HomebrewMigrator) -> int:
    state = migrator.load_state()

    print("╭─ Migration Status ─────────────────────╮")
    print(f"│  ✓ Migrated:  {len(state.migrated_packages):<5} packages              │")
    print(f"│  ✗ Failed:    {len(state.failed_packages):<5} packages              │")
    print("╰────────────────────────────────────────╯")

    if state.migrated_packages:
        print("\nMigrated:")
        for name, pkg in sorted(state.migrated_packages.items()):
            print(f"  {name:<28} {pkg.version}")

    if state.failed_packages:
        print("\nFailed:")
        for name in state.failed_packages:
            print(f"  {name}")

    return 0


def cmd_analyze(args, config: Config, migrator: HomebrewMigrator) -> int:
    format_name = "json" if args.json else (args.format or config.output.default_format)
    if format_name == "excel" and not args.output:
        raise ConfigurationError("The excel format needs --output")

    use_colors = False if (args.no_color or args.output) else config.output.use_colors
    reporter = create_reporter(
        format_name,
        use_colors=use_colors,
        safe_preview_count=config.output.safe_preview_count,
    ) if format_name == "text" else create_reporter(format_name)

    report = migrator.analyze()
    content = reporter.generate_report(report, output_path=args.output)

    if args.output:
        print(f"✅ {reporter.get_format_name()} report written to {args.output}")
    else:
        print(content)
    return 0


COMMANDS = {
    'list': cmd_list,
    'export': cmd_export,
    'migrate': cmd_migrate,
    'outdated': cmd_outdated,
    'upgrade': cmd_upgrade,
    'cleanup': cmd_cleanup,
    'status': cmd_status,
    'analyze': cmd_analyze,
}

# Commands that only print guidance and never touch a package manager
STATIC_COMMANDS = {'outdated', 'upgrade'}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name, sys.argv when None

    Returns:
        Process exit status
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config or get_default_config_path())
    except ConfigurationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    use_colors = not args.no_color and supports_color(sys.stderr)
    setup_logging(
        level=config.logging.level,
        log_file=args.log_file or config.logging.log_file,
        verbose=args.verbose or config.logging.verbose,
        use_colors=use_colors,
    )

    handler = COMMANDS[args.command]
    try:
        if args.command in STATIC_COMMANDS:
            return handler(args, config)

        checker = PrerequisiteChecker(config.migration.brew_command, config.migration.installer_command)
        ok, missing = checker.check_command(args.command)
        if not ok:
            print(checker.get_installation_instructions(missing), file=sys.stderr)
            return 1

        return handler(args, config, build_migrator(config))
    except ZbMigrateError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


if __name__ == '__main__':
    sys.exit(main())
