"""
Name helpers - Normalization and comparison of DNS names.

DNS names are case-insensitive and zone names are kept dot-terminated, so
every comparison in this package goes through these helpers.
"""

import re

import dns.name

_OCTAL_ESCAPE_RE = re.compile(r"\\([0-7]{3})")


def normalize_zone_name(name: str) -> str:
    """Ensure a zone name ends with a trailing dot."""
    name = name.strip()
    return name if name.endswith(".") else f"{name}."


def names_equal(left: str, right: str) -> bool:
    """Case-insensitive comparison of two DNS names."""
    if not left or not right:
        return left == right
    return dns.name.from_text(left) == dns.name.from_text(right)


def qualify_alias_name(alias: str, zone_name: str) -> str:
    """
    Compute the fully-qualified name of an alias within a zone.

    A bare label ("test"), a partially qualified name ("test.example.com")
    and a fully qualified name ("test.example.com.") all yield
    "test.example.com." for the zone "example.com.".

    Args:
        alias: Alias as given by the user
        zone_name: Name of the zone the alias lives in

    Returns:
        Dot-terminated alias name ending with the zone name exactly once
    """
    alias_name = normalize_zone_name(alias)
    zone_name = normalize_zone_name(zone_name)

    # Label-based: "myexample.com" is not inside "example.com." and gets qualified
    if dns.name.from_text(alias_name).is_subdomain(dns.name.from_text(zone_name)):
        return alias_name

    return f"{alias_name}{zone_name}"


def decode_escaped_name(name: str) -> str:
    r"""
    Decode the three-digit octal escapes Route53 uses in listed names.

    Route53 returns "*.example.com." as "\052.example.com.", while dnspython
    reads "\DDD" as a decimal escape. Characters that must stay escaped are
    re-escaped in decimal form.
    """

    def _decode(match):
        char = chr(int(match.group(1), 8))
        if char.isalnum() or char in "*-_":
            return char
        return f"\\{ord(char):03d}"

    return _OCTAL_ESCAPE_RE.sub(_decode, name)
