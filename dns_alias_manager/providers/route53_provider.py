"""
Route53 DNS provider.

This module implements the zone, record, mutation and change status
interfaces on top of the boto3 Route53 client.
"""

import logging
from typing import Dict, Iterator, List, Optional

from .aws_client import create_client, translate_aws_errors
from .base_provider import DNSProvider
from ..core.models import AliasRecord, ChangeAction, ChangeState, ChangeStatus, Zone
from ..utils.names import decode_escaped_name

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class Route53Provider(DNSProvider):
    """AWS Route53 provider implementation using boto3."""

    def __init__(self, config: Dict = None, client=None):
        """Initialize Route53 provider."""
        self.config = config or {}
        self.page_size = int(self.config.get("page_size", PAGE_SIZE))
        self.client = client or create_client("route53", self.config)
        logger.info("Route53 provider initialized")

    def iter_zone_pages(self) -> Iterator[List[Zone]]:
        """Yield pages of hosted zones."""
        with translate_aws_errors("ListHostedZones"):
            paginator = self.client.get_paginator("list_hosted_zones")
            pages = paginator.paginate(PaginationConfig={"PageSize": self.page_size})
            for page in pages:
                yield [
                    Zone(id=hz["Id"], name=decode_escaped_name(hz["Name"]))
                    for hz in page.get("HostedZones", [])
                ]

    def iter_record_pages(self, zone_id: str) -> Iterator[List[AliasRecord]]:
        """Yield pages of alias A records in a hosted zone."""
        with translate_aws_errors("ListResourceRecordSets", zone_id):
            paginator = self.client.get_paginator("list_resource_record_sets")
            pages = paginator.paginate(
                HostedZoneId=zone_id,
                PaginationConfig={"PageSize": self.page_size},
            )
            for page in pages:
                records = []
                for rrs in page.get("ResourceRecordSets", []):
                    # Only alias A records can point at a load balancer
                    target = rrs.get("AliasTarget")
                    if rrs.get("Type") != "A" or not target:
                        continue
                    records.append(
                        AliasRecord(
                            name=decode_escaped_name(rrs["Name"]),
                            target_dns_name=target.get("DNSName", ""),
                            target_hosted_zone_id=target.get("HostedZoneId", ""),
                            evaluate_target_health=bool(
                                target.get("EvaluateTargetHealth", False)
                            ),
                        )
                    )
                yield records

    def change_alias_record(
        self,
        zone_id: str,
        action: ChangeAction,
        record: AliasRecord,
        comment: Optional[str] = None,
    ) -> ChangeStatus:
        """Submit a single alias record change."""
        change_batch = {
            "Changes": [
                {
                    "Action": action.value,
                    "ResourceRecordSet": {
                        "Name": record.name,
                        "Type": "A",
                        "AliasTarget": {
                            "HostedZoneId": record.target_hosted_zone_id,
                            "DNSName": record.target_dns_name,
                            "EvaluateTargetHealth": record.evaluate_target_health,
                        },
                    },
                }
            ]
        }
        if comment:
            change_batch["Comment"] = comment

        with translate_aws_errors("ChangeResourceRecordSets", zone_id):
            response = self.client.change_resource_record_sets(
                HostedZoneId=zone_id, ChangeBatch=change_batch
            )

        status = change_info_to_status(response["ChangeInfo"])
        logger.info(f"Submitted {action.value} for {record.name} (change {status.id})")
        return status

    def get_change(self, change_id: str) -> ChangeStatus:
        """Get the current status of a change."""
        with translate_aws_errors("GetChange", change_id):
            response = self.client.get_change(Id=change_id)
        return change_info_to_status(response["ChangeInfo"])


def change_info_to_status(change_info: Dict) -> ChangeStatus:
    """Convert a Route53 ChangeInfo structure into a ChangeStatus."""
    return ChangeStatus(
        id=change_info.get("Id", ""),
        state=ChangeState(change_info.get("Status", ChangeState.PENDING.value)),
        submitted_at=change_info.get("SubmittedAt"),
        comment=change_info.get("Comment"),
    )
