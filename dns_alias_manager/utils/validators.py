"""
Validators - Input validation for DNS names

This module provides validation functions for zone names, alias names and
load balancer DNS names given on the command line, so malformed input is
rejected before any remote call is made.
"""

import logging
import re

logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"^[a-zA-Z0-9_]([a-zA-Z0-9_-]*[a-zA-Z0-9_])?$")


def validate_dns_name(name: str, min_labels: int = 1) -> bool:
    """
    Validate a DNS name, with or without a trailing dot.

    Args:
        name: The name to validate
        min_labels: Minimum number of labels required

    Returns:
        True if valid, False otherwise
    """
    if not name or not isinstance(name, str):
        return False

    stripped = name[:-1] if name.endswith(".") else name

    if len(stripped) > 253:
        logger.warning(f"DNS name too long: {name}")
        return False

    labels = stripped.split(".")

    if len(labels) < min_labels:
        logger.warning(f"DNS name must have at least {min_labels} labels: {name}")
        return False

    # Consecutive dots or a leading dot
    if any(label == "" for label in labels):
        logger.warning(f"DNS name contains empty labels: {name}")
        return False

    for label in labels:
        if not _validate_label(label):
            logger.warning(f"Invalid label '{label}' in DNS name: {name}")
            return False

    return True


def _validate_label(label: str) -> bool:
    """Validate a single domain label."""
    if len(label) == 0 or len(label) > 63:
        return False

    # A wildcard is only meaningful as a whole label
    if label == "*":
        return True

    return bool(_LABEL_RE.match(label))


def validate_alias(alias: str) -> bool:
    """Validate an alias given as a bare label or a (partially) qualified name."""
    return validate_dns_name(alias, min_labels=1)


def validate_zone_name(zone: str) -> bool:
    """Validate a hosted zone name, including single-label private zones."""
    return validate_dns_name(zone, min_labels=1)


def validate_load_balancer_name(dns_name: str) -> bool:
    """Validate a load balancer DNS name."""
    if dns_name and "*" in dns_name:
        return False
    return validate_dns_name(dns_name, min_labels=2)
