"""
AWS client - boto3 session setup and error translation

This module builds the boto3 clients used by the Route53 and ELB providers
and owns the single place where botocore exceptions are classified into the
package's error taxonomy.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
    ProfileNotFound,
)

from ..errors import AuthError, ChangeNotFound, TransportError

logger = logging.getLogger(__name__)

# Client error codes returned when the credentials were sent but rejected
AUTH_ERROR_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "ExpiredToken",
    "ExpiredTokenException",
    "InvalidAccessKeyId",
    "InvalidClientTokenId",
    "MissingAuthenticationToken",
    "SignatureDoesNotMatch",
    "UnrecognizedClientException",
}


def error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


def classify_aws_error(
    operation: str, exc: Exception, subject: Optional[str] = None
) -> Exception:
    """
    Translate a botocore exception into the domain error taxonomy.

    Args:
        operation: Name of the API operation that failed
        exc: The exception raised by botocore
        subject: Identifier the call was about, used in not-found errors

    Returns:
        The domain exception to raise in its place
    """
    if isinstance(exc, (NoCredentialsError, PartialCredentialsError, ProfileNotFound)):
        return AuthError(operation, exc)

    if isinstance(exc, ClientError):
        code = error_code(exc)
        logger.debug(f"error.aws operation={operation} code={code} error={exc}")
        if code in AUTH_ERROR_CODES:
            return AuthError(operation, exc)
        if code == "NoSuchChange":
            return ChangeNotFound(subject or exc.response.get("Error", {}).get("Message", ""))
        return TransportError(operation, exc)

    return TransportError(operation, exc)


@contextmanager
def translate_aws_errors(operation: str, subject: Optional[str] = None) -> Iterator[None]:
    """Run a block of boto3 calls, re-raising botocore errors as domain errors."""
    try:
        yield
    except (BotoCoreError, ClientError) as e:
        raise classify_aws_error(operation, e, subject) from e


def _log_request(params=None, model=None, context=None, **kwargs):
    """Log every outgoing AWS API call at debug level."""
    operation = getattr(model, "name", "unknown")
    service = getattr(getattr(model, "service_model", None), "service_name", "")
    http = getattr(model, "http", {}) or {}
    logger.debug(
        f"request.aws service={service} op={operation} "
        f"method={http.get('method', '')} path={http.get('requestUri', '')} "
        f"params={params}"
    )


def create_client(service: str, config: Optional[Dict] = None, session=None):
    """
    Create a boto3 client for a service from provider configuration.

    Args:
        service: boto3 service name, e.g. "route53" or "elb"
        config: The "aws" provider section of the configuration
        session: Optional pre-built boto3 session

    Returns:
        A boto3 client with request logging attached
    """
    config = config or {}
    if session is None:
        with translate_aws_errors("create_session"):
            session = boto3.Session(
                profile_name=config.get("profile"),
                region_name=config.get("region", "us-east-1"),
            )

    client_config = Config(
        retries={"mode": "standard", "max_attempts": int(config.get("max_attempts", 1))},
        connect_timeout=config.get("connect_timeout", 10),
        read_timeout=config.get("read_timeout", 30),
    )
    client = session.client(service, config=client_config)
    client.meta.events.register("before-call", _log_request)
    logger.debug(f"Created AWS {service} client in region {session.region_name}")
    return client
