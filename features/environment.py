"""
Behave environment configuration for DNS Alias Manager scenarios.
"""

import io
import logging

from rich.console import Console

import dns_alias_manager.core.dns_manager as dns_manager

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.lb_dns_name = "lb-1234.us-east-1.elb.amazonaws.com"
    context.lb_hosted_zone_id = "Z35SXDOTRQ7X7K"
    context.base_mock_config = {
        "page_size": 1,
        "polls_until_insync": 2,
        "zones": [
            {"id": "/hostedzone/Z1", "name": "example1.com."},
            {"id": "/hostedzone/Z2", "name": "example2.com."},
        ],
        "load_balancers": [
            {"dns_name": context.lb_dns_name, "hosted_zone_id": context.lb_hosted_zone_id},
        ],
    }
    context.original_console = dns_manager.console

    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.mock_config = dict(context.base_mock_config)
    context.mock_config["records"] = []
    context.sync_config = {"poll_interval": 0.01, "timeout": 5}
    context.result = None
    context.timeout = None

    context.output = io.StringIO()
    dns_manager.console = Console(file=context.output, width=200)

    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    dns_manager.console = context.original_console
    logger.info(f"Completed scenario: {scenario.name}")
