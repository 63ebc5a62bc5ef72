"""
Record Manager - Alias record mutations

This module builds and submits the single record set change that points an
alias at a load balancer, or removes it again. Every call performs exactly
one state-changing request and never retries.
"""

import logging
from typing import Optional

from .directory import DirectoryClient
from .models import AliasRecord, ChangeAction, ChangeStatus, Zone
from ..utils.names import qualify_alias_name

logger = logging.getLogger(__name__)


class AliasMutator:
    """Creates, updates and removes alias records."""

    def __init__(self, directory: DirectoryClient, mutator):
        """Initialize with a directory client and a RecordMutator."""
        self.directory = directory
        self.mutator = mutator

    def set_alias(
        self,
        zone: Zone,
        target_hosted_zone_id: str,
        target_dns_name: str,
        alias: str,
        comment: Optional[str] = None,
    ) -> ChangeStatus:
        """
        Create or update an alias record pointing at a load balancer.

        Args:
            zone: Zone to write the alias into
            target_hosted_zone_id: Hosted zone id of the load balancer
            target_dns_name: DNS name of the load balancer
            alias: Bare label, partially or fully qualified alias name
            comment: Optional comment attached to the change

        Returns:
            Status of the submitted change
        """
        record = AliasRecord(
            name=qualify_alias_name(alias, zone.name),
            target_dns_name=target_dns_name,
            target_hosted_zone_id=target_hosted_zone_id,
            evaluate_target_health=True,
        )
        logger.info(f"Upserting alias {record.name} -> {target_dns_name} in zone {zone.name}")
        return self.mutator.change_alias_record(zone.id, ChangeAction.UPSERT, record, comment)

    def remove_alias(
        self, zone: Zone, alias: str, comment: Optional[str] = None
    ) -> ChangeStatus:
        """
        Remove an alias record.

        The existing record is read back first: a delete is only accepted when
        it repeats every field of the stored record.

        Raises:
            RecordNotFound: If the alias does not exist; no change is submitted
        """
        existing = self.directory.find_record(zone, alias)
        record = AliasRecord(
            name=existing.name,
            target_dns_name=existing.target_dns_name,
            target_hosted_zone_id=existing.target_hosted_zone_id,
            evaluate_target_health=existing.evaluate_target_health,
        )
        logger.info(f"Deleting alias {record.name} -> {record.target_dns_name} in zone {zone.name}")
        return self.mutator.change_alias_record(zone.id, ChangeAction.DELETE, record, comment)
