"""
Directory Client - Resolve user-supplied names to zones, load balancers and records

Listings are always read to the last page. Lookups match names
case-insensitively and only report "not found" once every page has been
consumed.
"""

import logging
from typing import Iterator, List

from .models import AliasRecord, LoadBalancerTarget, Zone
from ..errors import LoadBalancerNotFound, RecordNotFound, ZoneNotFound
from ..utils.names import names_equal, normalize_zone_name, qualify_alias_name

logger = logging.getLogger(__name__)


class DirectoryClient:
    """Resolves zones, load balancers and alias records by name."""

    def __init__(self, zones, records, load_balancers=None):
        """
        Initialize the directory client.

        Args:
            zones: ZoneDirectory used for hosted zone listings
            records: RecordDirectory used for record set listings
            load_balancers: LoadBalancerDirectory, only needed for alias creation
        """
        self.zones = zones
        self.records = records
        self.load_balancers = load_balancers

    def iter_zones(self) -> Iterator[Zone]:
        for page in self.zones.iter_zone_pages():
            yield from page

    def list_zones(self) -> List[Zone]:
        """Get every hosted zone visible to the credentials."""
        zones = list(self.iter_zones())
        logger.debug(f"Listed {len(zones)} hosted zones")
        return zones

    def find_zone(self, name: str) -> Zone:
        """Find a hosted zone by name, with or without a trailing dot."""
        zone_name = normalize_zone_name(name)
        for zone in self.iter_zones():
            if names_equal(zone.name, zone_name):
                logger.debug(f"Found zone {zone.name} ({zone.id})")
                return zone
        raise ZoneNotFound(zone_name)

    def iter_load_balancers(self) -> Iterator[LoadBalancerTarget]:
        if self.load_balancers is None:
            raise ValueError("No load balancer directory configured")
        for page in self.load_balancers.iter_load_balancer_pages():
            yield from page

    def list_load_balancers(self) -> List[LoadBalancerTarget]:
        """Get every load balancer visible to the credentials."""
        load_balancers = list(self.iter_load_balancers())
        logger.debug(f"Listed {len(load_balancers)} load balancers")
        return load_balancers

    def find_load_balancer(self, dns_name: str) -> LoadBalancerTarget:
        """Find a load balancer by its DNS name."""
        for lb in self.iter_load_balancers():
            if names_equal(lb.dns_name, dns_name):
                logger.debug(f"Found load balancer {lb.dns_name} ({lb.hosted_zone_id})")
                return lb
        raise LoadBalancerNotFound(dns_name)

    def find_record(self, zone: Zone, alias: str) -> AliasRecord:
        """
        Find the alias record for an alias in a zone.

        Args:
            zone: Zone the alias lives in
            alias: Bare label, partially or fully qualified alias name

        Returns:
            The first matching record in page order

        Raises:
            RecordNotFound: If no page contains the alias
        """
        alias_name = qualify_alias_name(alias, zone.name)
        for page in self.records.iter_record_pages(zone.id):
            for record in page:
                if names_equal(record.name, alias_name):
                    logger.debug(f"Found record {record.name} -> {record.target_dns_name}")
                    return record
        raise RecordNotFound(alias_name)
