"""
Audit Log Module - SecureTag Verification Service

Append-only, size-bounded record of verification attempts. Once the log is
full the oldest entry is dropped on every append (FIFO).
"""

import logging
import threading
from collections import deque
from typing import List, Optional

from securetag.modules.models import AuditEntry, ValidationError


class AuditLog:
    """
    Fixed-capacity ring buffer of AuditEntry objects.

    Eviction is FIFO via deque(maxlen=...).
    """

    def __init__(self, capacity: int = 1000):
        """
        Initialize an empty audit log.

        Args:
            capacity (int): Maximum number of entries retained
        """
        if capacity <= 0:
            raise ValueError("Audit log capacity must be positive")
        self._capacity = capacity
        self._entries = deque(maxlen=capacity)
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    @property
    def capacity(self) -> int:
        return self._capacity

    def record(self, entry: AuditEntry) -> None:
        """Append an entry, evicting the oldest one when the log is full."""
        with self._lock:
            self._entries.append(entry)

        self.logger.info(
            f"{entry.entry_type}: {'VERIFIED' if entry.verified else 'FAILED'} - {entry.tag_id}"
        )

    def query(self, entry_type: Optional[str] = None, verified: Optional[bool] = None,
              limit: int = 50) -> List[AuditEntry]:
        """
        Return the most recent entries, newest first.

        Args:
            entry_type (str): Only return entries of this type (e.g. QR_VERIFICATION)
            verified (bool): Only return successful (True) or failed (False) attempts
            limit (int): Maximum number of entries to return

        Returns:
            List[AuditEntry]: Matching entries, most recent first
        """
        if limit <= 0:
            raise ValidationError("limit must be a positive integer")

        results = []
        for entry in reversed(self.entries()):
            if entry_type and entry.entry_type != entry_type:
                continue
            if verified is not None and entry.verified != verified:
                continue
            results.append(entry)
            if len(results) >= limit:
                break
        return results

    def entries(self) -> List[AuditEntry]:
        """Snapshot of all entries in insertion order."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
