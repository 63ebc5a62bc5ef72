"""
Classic ELB load balancer provider.

Lists load balancers through the boto3 "elb" client so an alias can be
pointed at one by DNS name.
"""

import logging
from typing import Dict, Iterator, List

from .aws_client import create_client, translate_aws_errors
from .base_provider import LoadBalancerDirectory
from ..core.models import LoadBalancerTarget

logger = logging.getLogger(__name__)

PAGE_SIZE = 400


class ELBProvider(LoadBalancerDirectory):
    """Elastic Load Balancing (classic) directory."""

    def __init__(self, config: Dict = None, client=None):
        self.config = config or {}
        self.page_size = int(self.config.get("elb_page_size", PAGE_SIZE))
        self.client = client or create_client("elb", self.config)
        logger.info("ELB provider initialized")

    def iter_load_balancer_pages(self) -> Iterator[List[LoadBalancerTarget]]:
        """Yield pages of load balancers."""
        with translate_aws_errors("DescribeLoadBalancers"):
            paginator = self.client.get_paginator("describe_load_balancers")
            pages = paginator.paginate(PaginationConfig={"PageSize": self.page_size})
            for page in pages:
                yield [
                    LoadBalancerTarget(
                        dns_name=lbd.get("DNSName", ""),
                        hosted_zone_id=lbd.get("CanonicalHostedZoneNameID", ""),
                    )
                    for lbd in page.get("LoadBalancerDescriptions", [])
                ]
