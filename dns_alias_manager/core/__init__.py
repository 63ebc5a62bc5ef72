"""
Core alias management functionality.

This package contains the directory lookups, alias mutations and change
synchronization logic.
"""

from .change_tracker import ChangeTracker
from .directory import DirectoryClient
from .dns_manager import AliasManager, CommandResult, CreateParams, RemoveParams
from .record_manager import AliasMutator
from .waiter import ConvergenceWaiter

__all__ = [
    "AliasManager",
    "AliasMutator",
    "ChangeTracker",
    "CommandResult",
    "ConvergenceWaiter",
    "CreateParams",
    "DirectoryClient",
    "RemoveParams",
]
