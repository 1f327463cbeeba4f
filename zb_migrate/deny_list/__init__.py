"""
Deny list functionality for packages that should stay with the source package manager.
"""

from .defaults import DEFAULT_RATIONALE, KNOWN_PROBLEMATIC_PACKAGES, RATIONALE_RULES
from .loader import DenyList, DenyListLoader, lookup_rationale
from .models import DenyListEntry, RationaleRule

__all__ = [
    'DenyList',
    'DenyListLoader',
    'DenyListEntry',
    'RationaleRule',
    'KNOWN_PROBLEMATIC_PACKAGES',
    'RATIONALE_RULES',
    'DEFAULT_RATIONALE',
    'lookup_rationale',
]
