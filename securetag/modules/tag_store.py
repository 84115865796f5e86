"""
Tag Store Module - SecureTag Verification Service

This module holds the tag registry. Records live behind a small storage
interface (get/put/scan) so the in-memory store used by the demo can be
replaced with a persistent backend without touching verification logic.

Features:
- Abstract TagStore interface
- Thread-safe in-memory implementation
- Separate QR code and NFC tag stores
- Demo registry seeding
"""

import logging
import secrets
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterator, List, Optional

from securetag.modules.models import TagRecord, ValidationError, QR_KIND, NFC_KIND, utcnow


class TagStore(ABC):
    """Storage interface for tag records keyed by identifier."""

    @abstractmethod
    def get(self, identifier: str) -> Optional[TagRecord]:
        """Return the record for identifier, or None if it is not registered."""

    @abstractmethod
    def put(self, record: TagRecord) -> None:
        """Store a record under its identifier."""

    @abstractmethod
    def scan(self) -> Iterator[TagRecord]:
        """Iterate over every stored record."""

    def add(self, record: TagRecord) -> bool:
        """Store a record only if its identifier is free; False if it was taken."""
        if record.identifier in self:
            return False
        self.put(record)
        return True

    def __len__(self) -> int:
        return sum(1 for _ in self.scan())

    def __contains__(self, identifier: str) -> bool:
        return self.get(identifier) is not None


class InMemoryTagStore(TagStore):
    """
    Dictionary-backed tag store.

    All access goes through one re-entrant lock; Flask may serve requests from
    several threads.
    """

    def __init__(self, records: Optional[List[TagRecord]] = None):
        self._records: Dict[str, TagRecord] = {}
        self._lock = threading.RLock()
        for record in records or []:
            self.put(record)

    def get(self, identifier: str) -> Optional[TagRecord]:
        with self._lock:
            return self._records.get(identifier)

    def put(self, record: TagRecord) -> None:
        with self._lock:
            self._records[record.identifier] = record

    def add(self, record: TagRecord) -> bool:
        """
        Store a record only if its identifier is free.

        Args:
            record (TagRecord): Record to insert

        Returns:
            bool: False if the identifier was already taken
        """
        with self._lock:
            if record.identifier in self._records:
                return False
            self._records[record.identifier] = record
            return True

    def scan(self) -> Iterator[TagRecord]:
        with self._lock:
            snapshot = list(self._records.values())
        return iter(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class TagRegistry:
    """Registry of known tags, one store per tag kind."""

    def __init__(self, qr_codes: Optional[TagStore] = None, nfc_tags: Optional[TagStore] = None):
        self.qr_codes = qr_codes if qr_codes is not None else InMemoryTagStore()
        self.nfc_tags = nfc_tags if nfc_tags is not None else InMemoryTagStore()
        self.logger = logging.getLogger(__name__)

    def store_for(self, kind: str) -> TagStore:
        if kind == QR_KIND:
            return self.qr_codes
        if kind == NFC_KIND:
            return self.nfc_tags
        raise ValidationError(f"Unknown tag kind: {kind}")

    def lookup(self, kind: str, identifier: str) -> Optional[TagRecord]:
        return self.store_for(kind).get(identifier)


def _utc_date(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def seed_demo_registry(registry: TagRegistry, now: Optional[datetime] = None,
                       token_bytes: int = 32) -> TagRegistry:
    """
    Load the demo badges used by the front-end and the health endpoint.

    Args:
        registry (TagRegistry): Registry to populate
        now (datetime): Reference time for relative validity windows
        token_bytes (int): Size of generated secure tokens in bytes

    Returns:
        TagRegistry: The populated registry
    """
    now = now or utcnow()
    one_year = now + timedelta(days=365)

    def token():
        return secrets.token_hex(token_bytes)

    qr_records = [
        TagRecord('EMP001-SECURE-2024', 'John Doe', 'Engineering', 'Level 3',
                  _utc_date(2024, 12, 31), token(), now),
        TagRecord('EMP002-SECURE-2024', 'Jane Smith', 'Security', 'Level 5',
                  _utc_date(2024, 12, 31), token(), now),
        TagRecord('VISITOR-TEMP-001', 'Mike Johnson', 'Visitor', 'Level 1',
                  now + timedelta(hours=24), token(), now),
        TagRecord('https://example.com/secure', 'External Link', 'Web Access', 'Level 2',
                  one_year, token(), now),
        TagRecord('VERIFIED001', 'John Employee', 'Engineering', 'Level 3',
                  one_year, token(), now),
        TagRecord('VERIFIED002', 'Jane Manager', 'Operations', 'Level 4',
                  one_year, token(), now),
        TagRecord('INVALID001', 'Revoked Badge', 'Visitor', 'Level 1',
                  now - timedelta(days=1), token(), now - timedelta(days=30)),
    ]
    nfc_records = [
        TagRecord('04:A3:B2:C1:D4:E5:F6', 'Sarah Wilson', 'HR', 'Level 2',
                  one_year, None, now, tag_type='NTAG213', content='Employee Access Card'),
    ]

    for record in qr_records:
        registry.qr_codes.put(record)
    for record in nfc_records:
        registry.nfc_tags.put(record)

    registry.logger.info(
        f"Demo registry seeded with {len(qr_records)} QR codes and {len(nfc_records)} NFC tags"
    )
    return registry
