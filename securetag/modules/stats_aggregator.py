"""
Stats Aggregator Module - SecureTag Verification Service

Derives system statistics from the registry and the audit log.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from securetag.modules.audit_log import AuditLog
from securetag.modules.models import utcnow
from securetag.modules.tag_store import TagRegistry


def format_success_rate(successful: int, total: int) -> str:
    """Percentage string with two decimals, '0%' for an empty window."""
    if total == 0:
        return '0%'
    return f"{successful / total * 100:.2f}%"


class StatsAggregator:
    """Counts registry size and recent verification outcomes."""

    def __init__(self, registry: TagRegistry, audit_log: AuditLog,
                 window_hours: int = 24, clock: Callable[[], datetime] = utcnow):
        self.registry = registry
        self.audit_log = audit_log
        self.window = timedelta(hours=window_hours)
        self.clock = clock
        self.logger = logging.getLogger(__name__)

    def stats(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Build the statistics summary.

        The recent window is measured on the wall clock: an entry counts when
        its timestamp is strictly after now minus the window length.

        Args:
            now (datetime): Evaluation time, defaults to the current time

        Returns:
            Dict[str, Any]: Registry totals and recent scan counts
        """
        now = now or self.clock()
        cutoff = now - self.window
        entries = self.audit_log.entries()

        recent = [entry for entry in entries if entry.timestamp > cutoff]
        successful = sum(1 for entry in recent if entry.verified)
        failed = len(recent) - successful

        return {
            'totalQRCodes': len(self.registry.qr_codes),
            'totalNFCTags': len(self.registry.nfc_tags),
            'totalScans': len(entries),
            'last24Hours': {
                'total': len(recent),
                'successful': successful,
                'failed': failed,
                'successRate': format_success_rate(successful, len(recent))
            }
        }
