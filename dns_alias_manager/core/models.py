"""
Models - Value types shared by the directory, mutation and sync layers.

All models are immutable. A refreshed change status is a new ChangeStatus
instance, never an update of an existing one.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ChangeState(str, Enum):
    """Propagation state of a submitted change."""

    PENDING = "PENDING"
    INSYNC = "INSYNC"


class ChangeAction(str, Enum):
    """Record set mutation actions."""

    UPSERT = "UPSERT"
    DELETE = "DELETE"


class WaitOutcome(str, Enum):
    CONVERGED = "CONVERGED"
    TIMED_OUT = "TIMED_OUT"


@dataclass(frozen=True)
class Zone:
    """Hosted zone. The name is always dot-terminated."""

    id: str
    name: str


@dataclass(frozen=True)
class LoadBalancerTarget:
    """Load balancer endpoint an alias can point at."""

    dns_name: str
    hosted_zone_id: str


@dataclass(frozen=True)
class AliasRecord:
    """Alias A record as currently persisted in a zone."""

    name: str
    target_dns_name: str
    target_hosted_zone_id: str
    evaluate_target_health: bool = True


@dataclass(frozen=True)
class ChangeStatus:
    """Point-in-time propagation status of a submitted change."""

    id: str
    state: ChangeState
    submitted_at: Optional[datetime] = None
    comment: Optional[str] = None

    @property
    def is_in_sync(self) -> bool:
        return self.state == ChangeState.INSYNC


@dataclass(frozen=True)
class WaitResult:
    """Result of waiting for a change to converge."""

    outcome: WaitOutcome
    change_id: str
    status: Optional[ChangeStatus] = None
    elapsed: float = 0.0
    polls: int = field(default=0)

    @property
    def converged(self) -> bool:
        return self.outcome == WaitOutcome.CONVERGED

    @property
    def message(self) -> str:
        if self.converged:
            return "Done."
        return (
            "It is taking longer than expected to synchronize the change to all "
            "Route53 DNS servers. You can check the status with the AWS CLI.\n\n"
            f"aws route53 get-change --id {self.change_id}\n"
        )
