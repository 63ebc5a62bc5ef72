"""
DNS Client - Provider selection for the alias engine

This module builds the DNS provider and the load balancer provider named in
the configuration, currently supporting AWS (Route53 + classic ELB) and an
in-memory mock.
"""

import logging
from typing import Dict, Tuple

from ..errors import ConfigError
from .base_provider import DNSProvider, LoadBalancerDirectory
from .elb_provider import ELBProvider
from .mock_provider import MockDNSProvider
from .route53_provider import Route53Provider

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("aws", "mock")


class DNSClient:
    """Holds the DNS and load balancer providers selected by configuration."""

    def __init__(self, config: Dict):
        """Initialize DNS client with configuration."""
        self.config = config
        self.provider_name = self.config.get("default_provider", "aws")
        self.dns_provider, self.lb_provider = self._get_providers()

    def _get_providers(self) -> Tuple[DNSProvider, LoadBalancerDirectory]:
        """Get DNS and load balancer providers based on configuration."""
        provider_config = self.config.get("dns_providers", {}).get(self.provider_name) or {}

        if self.provider_name == "aws":
            return Route53Provider(provider_config), ELBProvider(provider_config)
        elif self.provider_name == "mock":
            provider = MockDNSProvider(provider_config)
            return provider, provider

        raise ConfigError(
            f"Unknown provider '{self.provider_name}', expected one of: "
            f"{', '.join(SUPPORTED_PROVIDERS)}"
        )
