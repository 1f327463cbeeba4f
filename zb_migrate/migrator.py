"""
Orchestration of Homebrew to Zerobrew migration flows.
"""

import logging
import sys
from typing import Callable, List, Optional, Sequence

from .analysis import classify_packages, order_packages
from .deny_list import DenyList
from .homebrew import BrewClient, ZerobrewInstaller
from .models import AnalysisReport, MigrationReport, MigrationState, Package
from .state import StateStore

logger = logging.getLogger(__name__)

CASKS_UNSUPPORTED = "Casks not yet supported"

INTERACTIVE_CHOICES = {
    "y": "yes",
    "yes": "yes",
    "n": "no",
    "no": "no",
    "a": "all",
    "all": "all",
    "q": "quit",
    "quit": "quit",
}


class HomebrewMigrator:
    """
    Moves Homebrew formulae into Zerobrew.

    The migrator ties the collaborators together: it enumerates packages
    through the Homebrew client, orders and classifies them with the
    analysis engine, installs through Zerobrew and records the outcome.
    """

    def __init__(self, client: BrewClient, installer: ZerobrewInstaller,
                 state_store: StateStore, deny_list: Optional[DenyList] = None,
                 echo: Callable[[str], None] = print):
        """
        Initialize the migrator.

        Args:
            client: Homebrew query interface
            installer: Zerobrew installer
            state_store: Migration state persistence
            deny_list: Deny list used for analysis, built-in when None
            echo: Callable receiving user-facing output lines
        """
        self.client = client
        self.installer = installer
        self.state_store = state_store
        self.deny_list = deny_list if deny_list is not None else DenyList.builtin()
        self.echo = echo
        self._homebrew_prefix: Optional[str] = None

    @property
    def homebrew_prefix(self) -> str:
        if self._homebrew_prefix is None:
            self._homebrew_prefix = self.client.detect_prefix()
        return self._homebrew_prefix

    def analyze(self) -> AnalysisReport:
        """Classify every installed formula by migration risk."""
        logger.info("Analyzing installed packages...")
        packages = self.client.list_formulae_detailed()
        return classify_packages(packages, self.deny_list)

    def migrate_all(self, dry_run: bool = False) -> MigrationReport:
        """
        Migrate every installed formula in dependency order.

        Args:
            dry_run: Only report what would be migrated

        Returns:
            MigrationReport for the run
        """
        casks = self.client.list_casks()
        # Dependencies are only needed to order a real migration
        formulae = self.client.list_formulae() if dry_run else self.client.list_formulae_detailed()

        report = MigrationReport(total_formulae=len(formulae), total_casks=len(casks))

        if dry_run:
            self.echo("\n=== DRY RUN - No changes will be made ===\n")
            self.echo(f"Found {len(formulae)} formulae and {len(casks)} casks to migrate:\n")
            for package in formulae:
                self.echo(f"  [formula] {package.name} @ {package.version}")
            for package in casks:
                self.echo(f"  [cask] {package.name} @ {package.version}")
            return report

        for package in order_packages(formulae):
            report.add_result(self.installer.install(package))

        self._skip_casks(report, casks)
        self.state_store.record(report, formulae, self.homebrew_prefix)
        return report

    def migrate_packages(self, names: Sequence[str], dry_run: bool = False) -> MigrationReport:
        """
        Migrate selected formulae in the order given.

        Args:
            names: Formula names to migrate
            dry_run: Only report what would be migrated

        Returns:
            MigrationReport; unknown names are listed as skipped
        """
        formulae = self.client.list_formulae()
        by_name = {package.name: package for package in formulae}
        report = MigrationReport(total_formulae=len(names))
        selected: List[Package] = []

        for name in names:
            package = by_name.get(name)
            if package is None:
                report.skipped.append((name, "Package not found"))
                continue

            if dry_run:
                self.echo(f"[DRY RUN] Would migrate: {package.name} {package.version}")
                continue

            selected.append(package)
            report.add_result(self.installer.install(package))

        if selected:
            self.state_store.record(report, selected, self.homebrew_prefix)
        return report

    def migrate_interactive(self, prompt: Callable[[str], str] = input,
                            is_tty: Optional[bool] = None) -> MigrationReport:
        """
        Ask before migrating each formula.

        Falls back to migrating everything when stdin is not a terminal.

        Args:
            prompt: Callable asking the user and returning their answer
            is_tty: Override terminal detection

        Returns:
            MigrationReport for the run
        """
        if is_tty is None:
            is_tty = sys.stdin.isatty()
        if not is_tty:
            self.echo("Non-interactive environment detected. Falling back to non-interactive mode.")
            return self.migrate_all(dry_run=False)

        casks = self.client.list_casks()
        formulae = self.client.list_formulae_detailed()
        report = MigrationReport(total_formulae=len(formulae), total_casks=len(casks))

        self.echo("\n=== Interactive Migration Mode ===\n")
        self.echo(f"Found {len(formulae)} formulae to migrate.\n")
        self.echo("Options for each package:")
        self.echo("  (y)es     - Migrate this package")
        self.echo("  (n)o      - Skip this package")
        self.echo("  (a)ll yes - Migrate all remaining packages")
        self.echo("  (q)uit    - Stop migration\n")

        ordered = order_packages(formulae)
        migrate_remaining = False

        for index, package in enumerate(ordered, 1):
            self._describe_package(package, index, len(ordered))

            if migrate_remaining:
                self.echo("  Auto-migrating (all yes mode)...")
            else:
                choice = self._ask(prompt)
                if choice == "quit":
                    self.echo("\nMigration stopped by user.")
                    break
                if choice == "no":
                    report.skipped.append((package.name, "User skipped"))
                    self.echo("  -> Skipped\n")
                    continue
                if choice == "all":
                    migrate_remaining = True

            result = self.installer.install(package)
            report.add_result(result)
            if result.success:
                self.echo(f"  OK Migrated: {result.name} @ {result.version}\n")
            else:
                self.echo(f"  X Failed: {result.name} - {result.reason}\n")

        self._skip_casks(report, casks)
        self.state_store.record(report, formulae, self.homebrew_prefix)
        return report

    def cleanup(self, force: bool = False) -> List[str]:
        """
        Uninstall migrated packages from Homebrew.

        Args:
            force: Actually uninstall; without it only a warning is shown

        Returns:
            Names that were removed from Homebrew
        """
        state = self.load_state()
        names = list(state.migrated_packages)
        if not names:
            self.echo("No migrated packages to clean up.")
            return []

        if not force:
            self.echo("WARNING: This will uninstall packages from Homebrew.")
            self.echo("Make sure zerobrew has successfully installed them first.")
            self.echo("Run with --force to proceed.")
            return []

        removed = []
        for name in names:
            self.echo(f"Removing from Homebrew: {name}")
            if self.client.uninstall(name):
                removed.append(name)
        return removed

    def load_state(self) -> MigrationState:
        return self.state_store.load()

    def _describe_package(self, package: Package, index: int, total: int) -> None:
        self.echo(f"--- Package {index}/{total} ---")
        self.echo(f"  Name:    {package.name}")
        self.echo(f"  Version: {package.version}")
        if package.tap:
            self.echo(f"  Tap:     {package.tap}")
        if package.dependencies:
            self.echo(f"  Deps:    {', '.join(package.dependencies)}")
        if package.pinned:
            self.echo("  Status:  [pinned]")
        self.echo("")

    def _ask(self, prompt: Callable[[str], str]) -> str:
        """Prompt until a recognised answer; end of input means quit."""
        while True:
            try:
                answer = prompt("What would you like to do? [y/n/a/q] ")
            except (EOFError, KeyboardInterrupt):
                return "quit"
            choice = INTERACTIVE_CHOICES.get(answer.strip().lower() or "y")
            if choice:
                return choice
            self.echo("  Please answer y, n, a or q.")

    @staticmethod
    def _skip_casks(report: MigrationReport, casks: Sequence[Package]) -> None:
        for package in casks:
            report.skipped.append((package.name, CASKS_UNSUPPORTED))
