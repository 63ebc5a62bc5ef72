"""
DNS and load balancer provider implementations.

This package contains the provider interfaces used by the alias engine and
their implementations for AWS Route53, classic ELB and an in-memory mock.
"""

from .base_provider import (
    ChangeStatusSource,
    DNSProvider,
    LoadBalancerDirectory,
    RecordDirectory,
    RecordMutator,
    ZoneDirectory,
)
from .dns_client import DNSClient
from .elb_provider import ELBProvider
from .mock_provider import MockDNSProvider
from .route53_provider import Route53Provider

__all__ = [
    "ChangeStatusSource",
    "DNSClient",
    "DNSProvider",
    "ELBProvider",
    "LoadBalancerDirectory",
    "MockDNSProvider",
    "RecordDirectory",
    "RecordMutator",
    "Route53Provider",
    "ZoneDirectory",
]
