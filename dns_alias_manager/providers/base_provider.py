"""
Base provider interfaces.

This module defines the abstract base classes the alias engine depends on.
Listing interfaces yield pages lazily; each call starts a fresh iteration
and nothing is cached between calls.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional

from ..core.models import (
    AliasRecord,
    ChangeAction,
    ChangeStatus,
    LoadBalancerTarget,
    Zone,
)


class ZoneDirectory(ABC):
    """Pages through hosted zones."""

    @abstractmethod
    def iter_zone_pages(self) -> Iterator[List[Zone]]:
        """Yield pages of hosted zones until the last page."""
        pass


class RecordDirectory(ABC):
    """Pages through the alias record sets of a zone."""

    @abstractmethod
    def iter_record_pages(self, zone_id: str) -> Iterator[List[AliasRecord]]:
        """Yield pages of alias records in a zone until the last page."""
        pass


class RecordMutator(ABC):
    """Submits record set changes."""

    @abstractmethod
    def change_alias_record(
        self,
        zone_id: str,
        action: ChangeAction,
        record: AliasRecord,
        comment: Optional[str] = None,
    ) -> ChangeStatus:
        """Submit a single upsert or delete and return its initial status."""
        pass


class ChangeStatusSource(ABC):
    """Answers status queries for submitted changes."""

    @abstractmethod
    def get_change(self, change_id: str) -> ChangeStatus:
        """Return the current status of a change or raise ChangeNotFound."""
        pass


class LoadBalancerDirectory(ABC):
    """Pages through load balancers."""

    @abstractmethod
    def iter_load_balancer_pages(self) -> Iterator[List[LoadBalancerTarget]]:
        """Yield pages of load balancers until the last page."""
        pass


class DNSProvider(ZoneDirectory, RecordDirectory, RecordMutator, ChangeStatusSource):
    """A DNS service exposing zones, records, mutations and change status."""
