"""
DNS Alias Manager - Create and remove load balancer aliases

This module wires the directory client, alias mutator, change tracker and
convergence waiter together into the "create" and "remove" workflows and
reports their progress on the console.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Optional

import structlog
from rich.console import Console
from rich.table import Table

from ..errors import ConfigError, DNSAliasError
from ..providers.dns_client import DNSClient
from .change_tracker import ChangeTracker
from .directory import DirectoryClient
from .models import ChangeStatus, WaitResult
from .record_manager import AliasMutator
from .waiter import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT, ConvergenceWaiter

console = Console()
log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CreateParams:
    """Arguments of a create command."""

    alias: str
    zone_name: str
    elb_dns_name: str
    timeout: Optional[float] = None
    wait: bool = True
    comment: Optional[str] = None

    def log_fields(self) -> Dict:
        return {
            "op": "create",
            "zone": self.zone_name,
            "alias": self.alias,
            "elbDnsName": self.elb_dns_name,
        }


@dataclass(frozen=True)
class RemoveParams:
    """Arguments of a remove command."""

    alias: str
    zone_name: str
    comment: Optional[str] = None

    def log_fields(self) -> Dict:
        return {"op": "remove", "zone": self.zone_name, "alias": self.alias}


@dataclass
class CommandResult:
    """Outcome of a create or remove command."""

    success: bool
    change: Optional[ChangeStatus] = None
    wait_result: Optional[WaitResult] = None
    hosted_zone_id: Optional[str] = None
    error: Optional[DNSAliasError] = None


class AliasManager:
    """Main alias management class that orchestrates the create and remove commands."""

    def __init__(self, config: Dict, dns_client: Optional[DNSClient] = None):
        """Initialize the alias manager with configuration."""
        self.config = config or {}
        self.dns_client = dns_client or DNSClient(self.config)

        dns_provider = self.dns_client.dns_provider
        self.directory = DirectoryClient(
            dns_provider, dns_provider, self.dns_client.lb_provider
        )
        self.mutator = AliasMutator(self.directory, dns_provider)
        self.tracker = ChangeTracker(dns_provider)

        sync_config = self.config.get("sync", {}) or {}
        try:
            self.waiter = ConvergenceWaiter(
                self.tracker,
                poll_interval=float(sync_config.get("poll_interval", DEFAULT_POLL_INTERVAL)),
                timeout=float(sync_config.get("timeout", DEFAULT_TIMEOUT)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid sync settings: {e}")

    def create(self, params: CreateParams) -> CommandResult:
        """Create or update an alias for a load balancer and wait for it to sync."""
        fields = params.log_fields()
        stage = "finding zone"
        try:
            zone = self.directory.find_zone(params.zone_name)

            stage = "finding load balancer"
            lb = self.directory.find_load_balancer(params.elb_dns_name)
            fields["hostedZoneID"] = lb.hosted_zone_id

            stage = "setting alias"
            change = self.mutator.set_alias(
                zone, lb.hosted_zone_id, lb.dns_name, params.alias, params.comment
            )
        except DNSAliasError as e:
            return self._fail(stage, e, fields)

        log.bind(**fields).info("Alias submitted", change=change.id)
        self._display_change_summary("Alias Created", fields, change)

        result = CommandResult(success=True, change=change, hosted_zone_id=lb.hosted_zone_id)
        if not params.wait:
            return result

        try:
            with console.status("Pending...", spinner="dots"):
                wait_result = self.waiter.wait(change, timeout=params.timeout)
        except DNSAliasError as e:
            return self._fail("checking status", e, fields, change)

        result.wait_result = wait_result
        if wait_result.converged:
            console.print(f"[green]{wait_result.message}[/green]")
        else:
            console.print(f"[yellow]{wait_result.message}[/yellow]")
        return result

    def remove(self, params: RemoveParams) -> CommandResult:
        """Remove an alias and report the status of the change without waiting."""
        fields = params.log_fields()
        stage = "finding zone"
        try:
            zone = self.directory.find_zone(params.zone_name)

            stage = "removing alias"
            change = self.mutator.remove_alias(zone, params.alias, params.comment)
        except DNSAliasError as e:
            return self._fail(stage, e, fields)

        log.bind(**fields).info("Alias removal submitted", change=change.id)
        console.print(f"change status: {change.state.value}")
        return CommandResult(success=True, change=change)

    def _fail(
        self,
        stage: str,
        error: DNSAliasError,
        fields: Dict,
        change: Optional[ChangeStatus] = None,
    ) -> CommandResult:
        log.bind(**fields).error(f"Error {stage}", error=str(error))
        console.print(f"[red]Error {stage}: {error}[/red]")
        return CommandResult(success=False, change=change, error=error)

    def _display_change_summary(self, title: str, fields: Dict, change: ChangeStatus):
        """Display the submitted change."""
        table = Table(title=title)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")

        for key, value in fields.items():
            if key != "op" and value:
                table.add_row(key, str(value))

        for key, value in asdict(change).items():
            if value is None:
                continue
            table.add_row(f"change.{key}", getattr(value, "value", str(value)))

        console.print(table)
