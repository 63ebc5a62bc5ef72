"""
Mock DNS provider for testing and demonstration.

This module provides a mock provider that keeps zones, load balancers, alias
records and changes in memory, pages its listings like the real services and
lets changes reach INSYNC after a configurable number of status polls.
"""

import itertools
import logging
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional

from .base_provider import DNSProvider, LoadBalancerDirectory
from ..core.models import (
    AliasRecord,
    ChangeAction,
    ChangeState,
    ChangeStatus,
    LoadBalancerTarget,
    Zone,
)
from ..errors import ChangeNotFound, TransportError
from ..utils.names import names_equal, normalize_zone_name

logger = logging.getLogger(__name__)


class MockDNSProvider(DNSProvider, LoadBalancerDirectory):
    """Mock DNS and load balancer provider for testing and demonstration purposes."""

    def __init__(self, config: Dict = None):
        """Initialize mock provider."""
        config = config or {}
        self.page_size = max(1, int(config.get("page_size", 100)))
        self.polls_until_insync = int(config.get("polls_until_insync", 1))
        self.zones: List[Zone] = [
            Zone(id=z["id"], name=normalize_zone_name(z["name"]))
            for z in config.get("zones", [])
        ]
        self.load_balancers: List[LoadBalancerTarget] = [
            LoadBalancerTarget(dns_name=lb["dns_name"], hosted_zone_id=lb["hosted_zone_id"])
            for lb in config.get("load_balancers", [])
        ]
        self.records: Dict[str, List[AliasRecord]] = {}
        for r in config.get("records", []):
            self.records.setdefault(r["zone_id"], []).append(
                AliasRecord(
                    name=normalize_zone_name(r["name"]),
                    target_dns_name=r["target_dns_name"],
                    target_hosted_zone_id=r["target_hosted_zone_id"],
                    evaluate_target_health=r.get("evaluate_target_health", True),
                )
            )
        self.changes: Dict[str, ChangeStatus] = {}
        self.polls: Dict[str, int] = {}
        self.calls: List[str] = []
        self._change_ids = itertools.count(1)
        logger.info("Mock DNS provider initialized")

    def _pages(self, items: List) -> Iterator[List]:
        for start in range(0, len(items), self.page_size):
            yield list(items[start : start + self.page_size])

    def iter_zone_pages(self) -> Iterator[List[Zone]]:
        self.calls.append("list_zones")
        yield from self._pages(self.zones)

    def iter_load_balancer_pages(self) -> Iterator[List[LoadBalancerTarget]]:
        self.calls.append("list_load_balancers")
        yield from self._pages(self.load_balancers)

    def iter_record_pages(self, zone_id: str) -> Iterator[List[AliasRecord]]:
        self.calls.append("list_records")
        yield from self._pages(self.records.get(zone_id, []))

    def change_alias_record(
        self,
        zone_id: str,
        action: ChangeAction,
        record: AliasRecord,
        comment: Optional[str] = None,
    ) -> ChangeStatus:
        """Apply an upsert or delete to the in-memory zone."""
        self.calls.append(f"change:{action.value}")
        records = self.records.setdefault(zone_id, [])
        index = next(
            (i for i, r in enumerate(records) if names_equal(r.name, record.name)),
            None,
        )

        if action == ChangeAction.UPSERT:
            if index is None:
                records.append(record)
                logger.info(f"Mock: Created alias {record.name} -> {record.target_dns_name}")
            else:
                records[index] = record
                logger.info(f"Mock: Updated alias {record.name} -> {record.target_dns_name}")
        elif action == ChangeAction.DELETE:
            # Deletes must match the stored record exactly
            if index is None or records[index] != record:
                raise TransportError(
                    "ChangeResourceRecordSets",
                    ValueError(f"Tried to delete resource record set {record.name} but it was not found"),
                )
            del records[index]
            logger.info(f"Mock: Deleted alias {record.name}")

        change_id = f"/change/C{next(self._change_ids):012d}"
        state = ChangeState.INSYNC if self.polls_until_insync <= 0 else ChangeState.PENDING
        status = ChangeStatus(
            id=change_id,
            state=state,
            submitted_at=datetime.now(timezone.utc),
            comment=comment,
        )
        self.changes[change_id] = status
        self.polls[change_id] = 0
        return status

    def get_change(self, change_id: str) -> ChangeStatus:
        """Return the change status, reaching INSYNC after the configured polls."""
        self.calls.append(f"get_change:{change_id}")
        if change_id not in self.changes:
            raise ChangeNotFound(change_id)

        self.polls[change_id] += 1
        status = self.changes[change_id]
        if not status.is_in_sync and self.polls[change_id] >= self.polls_until_insync:
            status = ChangeStatus(
                id=status.id,
                state=ChangeState.INSYNC,
                submitted_at=status.submitted_at,
                comment=status.comment,
            )
            self.changes[change_id] = status
            logger.info(f"Mock: Change {change_id} is in sync")
        return status
