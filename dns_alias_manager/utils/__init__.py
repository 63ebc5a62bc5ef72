"""
Utility functions and helpers.

This package contains name normalization and input validation helpers.
"""

from .names import (
    decode_escaped_name,
    names_equal,
    normalize_zone_name,
    qualify_alias_name,
)
from .validators import (
    validate_alias,
    validate_dns_name,
    validate_load_balancer_name,
    validate_zone_name,
)

__all__ = [
    "decode_escaped_name",
    "names_equal",
    "normalize_zone_name",
    "qualify_alias_name",
    "validate_alias",
    "validate_dns_name",
    "validate_load_balancer_name",
    "validate_zone_name",
]
