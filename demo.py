#!/usr/bin/env python3
"""
DNS Alias Manager - Demo Script

This script demonstrates the create and remove workflows of the DNS Alias
Manager using the mock provider, so no AWS account is touched.
"""

import os

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dns_alias_manager.cli.main import config_logger, load_config
from dns_alias_manager.core.dns_manager import AliasManager, CreateParams, RemoveParams

console = Console()

ZONE = "example2.com"
LB_DNS_NAME = "lb-1234.us-east-1.elb.amazonaws.com"


def create_demo_config():
    """Create a demo configuration file."""
    config = {
        "dns_providers": {
            "mock": {
                "page_size": 2,
                "polls_until_insync": 2,
                "zones": [
                    {"id": "/hostedzone/Z1", "name": "example1.com."},
                    {"id": "/hostedzone/Z2", "name": "example2.com."},
                    {"id": "/hostedzone/Z3", "name": "example3.com."},
                ],
                "load_balancers": [
                    {"dns_name": LB_DNS_NAME, "hosted_zone_id": "Z35SXDOTRQ7X7K"},
                ],
            }
        },
        "default_provider": "mock",
        "sync": {"poll_interval": 0.5, "timeout": 10},
        "logging": {"level": "INFO", "file": "demo.log"},
    }

    config_file = "demo_config.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config, f)

    return config_file


def display_demo_header():
    """Display the demo header."""
    console.print(
        Panel.fit(
            "[bold blue]DNS Alias Manager - Demo[/bold blue]\n"
            f"[cyan]Route53 aliases for load balancers in {ZONE}[/cyan]",
            border_style="blue",
        )
    )
    console.print()


def display_zone_state(alias_manager, title):
    """Display the alias records of the demo zone."""
    console.print(f"[bold]{title}:[/bold]")

    zone = alias_manager.directory.find_zone(ZONE)
    records = [r for page in alias_manager.directory.records.iter_record_pages(zone.id) for r in page]
    if not records:
        console.print("[yellow]No alias records found in zone[/yellow]")
        console.print()
        return

    table = Table(title=f"Alias Records in {zone.name}")
    table.add_column("Name", style="cyan")
    table.add_column("Target", style="magenta")
    table.add_column("Target Zone", style="green")
    table.add_column("Evaluate Health", style="yellow")

    for record in records:
        table.add_row(
            record.name,
            record.target_dns_name,
            record.target_hosted_zone_id,
            str(record.evaluate_target_health),
        )

    console.print(table)
    console.print()


def cleanup_demo_files(config_file):
    """Clean up demo files."""
    if os.path.exists(config_file):
        os.remove(config_file)
    console.print("[blue]Demo files cleaned up[/blue]")


def main():
    """Main demo function."""
    display_demo_header()
    config_file = create_demo_config()

    try:
        config = load_config(config_file)
        config_logger(config)

        console.print("[blue]Initializing Alias Manager...[/blue]")
        alias_manager = AliasManager(config)
        console.print("[green]✓ Alias Manager initialized successfully[/green]")
        console.print()

        display_zone_state(alias_manager, "Initial Zone State")

        console.print("[bold]Creating alias www -> load balancer...[/bold]")
        created = alias_manager.create(CreateParams(alias="www", zone_name=ZONE, elb_dns_name=LB_DNS_NAME))
        console.print()

        display_zone_state(alias_manager, "Zone State After Create")

        console.print("[bold]Removing alias www...[/bold]")
        removed = alias_manager.remove(RemoveParams(alias="www", zone_name=ZONE))
        console.print()

        display_zone_state(alias_manager, "Zone State After Remove")

        console.print(
            Panel.fit(
                "[bold green]Demo Summary[/bold green]\n"
                f"{'✓' if created.success else '✗'} Alias created and synced\n"
                f"{'✓' if removed.success else '✗'} Alias removed\n"
                "✓ Mock provider used (no real DNS changes)",
                border_style="green",
            )
        )

    finally:
        cleanup_demo_files(config_file)

        console.print()
        console.print("[bold blue]Demo completed![/bold blue]")
        console.print("[cyan]Check demo.log for detailed information[/cyan]")


if __name__ == "__main__":
    main()
