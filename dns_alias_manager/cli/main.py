#!/usr/bin/env python3
"""
DNS Alias Manager - Command Line Interface

Main entry point for the DNS Alias Manager CLI.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

import structlog
import yaml

from ..core.dns_manager import AliasManager, CreateParams, RemoveParams
from ..errors import ConfigError, DNSAliasError
from ..utils.validators import (
    validate_alias,
    validate_load_balancer_name,
    validate_zone_name,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.dns-alias-manager.yaml"
CONFIG_ENV_VAR = "DNS_ALIAS_MANAGER_CONFIG"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dns-alias-manager",
        description="DNS Alias Manager - Route53 alias records for load balancers",
    )

    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help=f"Configuration file path (default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--provider",
        choices=["aws", "mock"],
        help="DNS provider to use (overrides default_provider)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument(
        "--log-format",
        "-f",
        choices=["text", "json"],
        help="Log format (default: text)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser(
        "create", help="Create or update a Route53 alias for an ELB"
    )
    create.add_argument("alias", help="Alias name, e.g. www or www.example.com")
    create.add_argument("zone", help="Hosted zone name, e.g. example.com")
    create.add_argument("elb_dns_name", help="DNS name of the load balancer")
    create.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for the change to sync (default: 60)",
    )
    create.add_argument(
        "--poll-interval",
        type=float,
        help="Seconds between change status checks (default: 2)",
    )
    create.add_argument(
        "--no-wait",
        action="store_true",
        help="Do not wait for the change to sync",
    )
    create.add_argument("--comment", help="Comment attached to the change")

    remove = subparsers.add_parser("remove", help="Remove a Route53 alias for an ELB")
    remove.add_argument("alias", help="Alias name, e.g. www or www.example.com")
    remove.add_argument("zone", help="Hosted zone name, e.g. example.com")
    remove.add_argument("--comment", help="Comment attached to the change")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(resolve_config_path(args.config))
        apply_overrides(config, args)
        config_logger(config)
        validate_args(args)

        alias_manager = AliasManager(config)

        if args.command == "create":
            result = alias_manager.create(
                CreateParams(
                    alias=args.alias,
                    zone_name=args.zone,
                    elb_dns_name=args.elb_dns_name,
                    timeout=args.timeout,
                    wait=not args.no_wait,
                    comment=args.comment,
                )
            )
        else:
            result = alias_manager.remove(
                RemoveParams(alias=args.alias, zone_name=args.zone, comment=args.comment)
            )

    except ConfigError as e:
        print(f"Error: {e}")
        return 1
    except DNSAliasError as e:
        print(f"Error: {e.__class__.__name__}: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    return 0 if result.success else 1


def validate_args(args: argparse.Namespace):
    """Reject malformed names before any remote call."""
    if not validate_alias(args.alias):
        raise ConfigError(f"Invalid alias: '{args.alias}'")
    if not validate_zone_name(args.zone):
        raise ConfigError(f"Invalid zone name: '{args.zone}'")
    if args.command == "create" and not validate_load_balancer_name(args.elb_dns_name):
        raise ConfigError(f"Invalid load balancer DNS name: '{args.elb_dns_name}'")

    poll_interval = getattr(args, "poll_interval", None)
    if poll_interval is not None and poll_interval <= 0:
        raise ConfigError(f"Poll interval must be positive: {poll_interval}")
    timeout = getattr(args, "timeout", None)
    if timeout is not None and timeout < 0:
        raise ConfigError(f"Timeout must not be negative: {timeout}")


def resolve_config_path(config_path: Optional[str]) -> Path:
    """Pick the configuration file from the flag, the environment or the default."""
    path = config_path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def load_config(config_path: Path) -> Dict:
    """Load configuration from YAML file."""
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
    except FileNotFoundError:
        logger.warning(f"Config file {config_path} not found, using defaults")
        return get_default_config()
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing config file {config_path}: {e}")

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    defaults = get_default_config()
    for key, value in defaults.items():
        if isinstance(value, dict):
            merged = dict(value)
            merged.update(config.get(key) or {})
            config[key] = merged
        else:
            config.setdefault(key, value)
    return config


def get_default_config() -> Dict:
    """Return default configuration."""
    return {
        "dns_providers": {
            "aws": {"region": "us-east-1", "profile": None, "max_attempts": 1},
        },
        "default_provider": "aws",
        "sync": {"poll_interval": 2, "timeout": 60},
        "logging": {"level": "WARNING", "format": "text", "file": None},
    }


def apply_overrides(config: Dict, args: argparse.Namespace):
    """Apply command-line flags on top of the configuration file."""
    if args.provider:
        config["default_provider"] = args.provider
    if args.verbose:
        config["logging"]["level"] = "DEBUG"
    if args.log_format:
        config["logging"]["format"] = args.log_format
    if getattr(args, "poll_interval", None) is not None:
        config["sync"]["poll_interval"] = args.poll_interval


def config_logger(config: Dict):
    """Configure logging."""
    logging_config = config.get("logging") or {}
    log_level = str(logging_config.get("level", "WARNING")).upper()
    log_file = logging_config.get("file")

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    render_processors = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if logging_config.get("format") == "json":
        render_processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        render_processors.append(structlog.dev.ConsoleRenderer(colors=False))
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors, processors=render_processors
    )

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)
    logger.debug("debug on")


if __name__ == "__main__":
    sys.exit(main())
