"""
Prerequisites checker for zb-migrate commands.
"""

import logging
import subprocess
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)


class PrerequisiteChecker:
    """Check that the external tools a command needs are installed."""

    # Prerequisites mapping for each command, by role
    PREREQUISITES = {
        'list': ['source'],
        'export': ['source'],
        'migrate': ['source', 'installer'],
        'cleanup': ['source'],
        'analyze': ['source'],
        'status': [],
        'outdated': [],
        'upgrade': [],
    }

    # Keyed by the default command names
    INSTRUCTIONS = {
        'brew': 'Install Homebrew from https://brew.sh',
        'zb': 'Install Zerobrew and make sure the zb command is on your PATH',
    }

    def __init__(self, brew_command: str = "brew", installer_command: str = "zb"):
        self.tools = {'source': brew_command, 'installer': installer_command}

    def check_command(self, command: str) -> Tuple[bool, List[str]]:
        """
        Check prerequisites for a CLI command.

        Args:
            command: CLI command name

        Returns:
            Tuple of (all present, missing tool names)
        """
        missing_tools = []
        for role in self.PREREQUISITES.get(command, []):
            tool = self.tools[role]
            if not self._check_tool(tool):
                missing_tools.append(tool)
                logger.error(f"'{command}' requires {tool}")

        return len(missing_tools) == 0, missing_tools

    def _check_tool(self, tool: str) -> bool:
        """Check if a tool is available; any exit status counts as installed."""
        try:
            subprocess.run([tool, '--version'], capture_output=True, timeout=10)
            return True
        except (FileNotFoundError, PermissionError, subprocess.TimeoutExpired):
            return False

    def get_installation_instructions(self, missing_tools: List[str]) -> str:
        """Get installation instructions for missing tools."""
        instructions: Dict[str, str] = {
            self.tools['source']: self.INSTRUCTIONS['brew'],
            self.tools['installer']: self.INSTRUCTIONS['zb'],
        }

        result = "Missing prerequisites installation instructions:\n"
        for tool in missing_tools:
            result += f"  {tool}: {instructions.get(tool, f'Please install {tool}')}\n"

        return result
