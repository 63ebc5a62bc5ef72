"""
Errors - Domain error taxonomy for DNS alias management

Every failure raised by this package derives from DNSAliasError, so callers
can catch one type. Provider-specific exceptions are translated into these
classes at the provider boundary and never leak past it.
"""

from typing import Optional


class DNSAliasError(Exception):
    """Base exception for all dns-alias-manager errors."""


class AuthError(DNSAliasError):
    """The credential chain is absent or was rejected by the provider."""

    def __init__(self, operation: str = "", cause: Optional[Exception] = None):
        self.operation = operation
        self.cause = cause
        message = (
            "Invalid AWS credentials. See "
            "https://boto3.amazonaws.com/v1/documentation/api/latest/guide/credentials.html"
        )
        if operation:
            message = f"{message} (operation: {operation})"
        super().__init__(message)


class TransportError(DNSAliasError):
    """A network or service failure prevented the request from completing.

    Attributes:
        operation: Provider operation that failed.
        cause: The underlying exception.
    """

    def __init__(self, operation: str, cause: Optional[Exception] = None):
        self.operation = operation
        self.cause = cause
        detail = f"{cause.__class__.__name__}: {cause}" if cause else "unknown"
        super().__init__(f"{operation} failed: {detail}")


class NotFoundError(DNSAliasError):
    """An entity does not exist after an exhaustive search."""

    entity = "Entity"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{self.entity} does not exist: {name}")


class ZoneNotFound(NotFoundError):
    entity = "Zone"


class LoadBalancerNotFound(NotFoundError):
    entity = "Load balancer"


class RecordNotFound(NotFoundError):
    entity = "Record"


class ChangeNotFound(NotFoundError):
    entity = "Change"


class ConvergenceTimeout(DNSAliasError):
    """A submitted change was not confirmed in sync before the deadline.

    The mutation itself succeeded; only confirmation of propagation to every
    authoritative server timed out.
    """

    def __init__(self, change_id: str, timeout: float):
        self.change_id = change_id
        self.timeout = timeout
        super().__init__(
            f"Change {change_id} was not in sync after {timeout:g} seconds"
        )


class ConfigError(DNSAliasError):
    """Invalid configuration file contents or command-line input."""
