"""
Zerobrew Migration Tool

A Python tool for moving installed Homebrew formulae into Zerobrew while
flagging packages whose migration is risky because of shared system-level
dependencies.
"""

__version__ = "0.1.0"
__author__ = "Zerobrew Migration Team"

# Make version easily importable
def get_version():
    """Get the current version of the Zerobrew migration tool."""
    return __version__


def main(argv=None):
    """Run the command line interface."""
    from .cli import main as cli_main
    return cli_main(argv)


__all__ = ['get_version', 'main']
