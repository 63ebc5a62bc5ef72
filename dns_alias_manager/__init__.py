"""
DNS Alias Manager - Route53 aliases for load balancers

Creates, updates and removes DNS alias records that point a hostname at a
load balancer, and waits for the change to reach every authoritative server.
"""

__version__ = "1.0.0"
__author__ = "DNS Alias Manager Team"
__description__ = "Manage Route53 alias records for load balancers"

from .core.dns_manager import AliasManager
from .core.directory import DirectoryClient
from .core.record_manager import AliasMutator
from .core.change_tracker import ChangeTracker
from .core.waiter import ConvergenceWaiter
from .providers.dns_client import DNSClient

__all__ = [
    "AliasManager",
    "AliasMutator",
    "ChangeTracker",
    "ConvergenceWaiter",
    "DirectoryClient",
    "DNSClient",
]
