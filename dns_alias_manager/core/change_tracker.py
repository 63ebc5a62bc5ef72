"""
Change Tracker - Status queries for submitted changes.
"""

import logging

from .models import ChangeStatus

logger = logging.getLogger(__name__)


class ChangeTracker:
    """Reads the propagation status of submitted changes."""

    def __init__(self, source):
        """Initialize with a ChangeStatusSource."""
        self.source = source

    def get_change_status(self, change_id: str) -> ChangeStatus:
        """Query the current status of a change. Safe to call repeatedly."""
        status = self.source.get_change(change_id)
        logger.debug(f"Change {change_id} status: {status.state.value}")
        return status

    def refresh(self, status: ChangeStatus) -> ChangeStatus:
        """Return a fresh status for a previously returned one."""
        return self.get_change_status(status.id)
