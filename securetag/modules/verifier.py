"""
Verifier Module - SecureTag Verification Service

This module checks presented QR codes and NFC tag identifiers against the tag
registry and records every attempt in the audit log.

A tag that is unknown or expired is not an error: the verifier returns a
normal result with verified=False. Only missing or malformed input raises
ValidationError.

Features:
- QR code verification
- NFC tag verification
- Expiry checking against the record's validity window
- Audit logging of every attempt
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from securetag.modules.audit_log import AuditLog
from securetag.modules.models import (
    AuditEntry, TagRecord, ValidationError, VerificationResult,
    QR_KIND, NFC_KIND, AUDIT_TYPES, utcnow
)
from securetag.modules.tag_store import TagRegistry

# Display labels used in messages, per tag kind
LABELS = {
    QR_KIND: ('QR Code', 'QR code'),
    NFC_KIND: ('NFC Tag', 'NFC tag')
}


class TagVerifier:
    """
    Verifies tags against the registry.

    Each call to verify() appends exactly one audit entry, whatever the outcome.
    """

    def __init__(self, registry: TagRegistry, audit_log: AuditLog,
                 clock: Callable[[], datetime] = utcnow):
        """
        Initialize the verifier.

        Args:
            registry (TagRegistry): Registry of known tags
            audit_log (AuditLog): Log that receives one entry per attempt
            clock (Callable): Returns the current aware datetime
        """
        self.registry = registry
        self.audit_log = audit_log
        self.clock = clock
        self.logger = logging.getLogger(__name__)

    def verify_qr(self, qr_code: Any, ip: Optional[str] = None) -> VerificationResult:
        return self.verify(QR_KIND, qr_code, ip)

    def verify_nfc(self, tag_id: Any, tag_data: Optional[Dict[str, Any]] = None,
                   ip: Optional[str] = None) -> VerificationResult:
        if tag_data:
            self.logger.debug(f"NFC tag {tag_id} presented with payload: {tag_data}")
        return self.verify(NFC_KIND, tag_id, ip)

    def verify(self, kind: str, identifier: Any, ip: Optional[str] = None) -> VerificationResult:
        """
        Verify a tag identifier of the given kind.

        Args:
            kind (str): 'qr' or 'nfc'
            identifier (str): Identifier presented by the client
            ip (str): Client address recorded in the audit log

        Returns:
            VerificationResult: Verdict for the presented identifier

        Raises:
            ValidationError: If the identifier is missing or not a string
        """
        title, noun = LABELS[kind]
        if not isinstance(identifier, str) or not identifier.strip():
            raise ValidationError(f"{noun} {'data' if kind == QR_KIND else 'ID'} is required")

        now = self.clock()
        record = self.registry.lookup(kind, identifier)

        if record is None:
            result = VerificationResult(
                verified=False,
                message=f"Unknown {title}",
                description=f"This {noun} is not registered in our system",
                tag_kind=kind,
                identifier=identifier
            )
        elif not record.is_valid(now):
            expired_on = self._format_date(record)
            result = VerificationResult(
                verified=False,
                message=f"{title} expired on {expired_on}",
                description=f"This {noun} expired on {expired_on}",
                tag_kind=kind,
                identifier=identifier
            )
        else:
            result = VerificationResult(
                verified=True,
                message=f"{title} Verified Successfully",
                tag_kind=kind,
                identifier=identifier,
                record=record,
                verified_at=now
            )

        self.audit_log.record(AuditEntry(
            timestamp=now,
            entry_type=AUDIT_TYPES[kind],
            tag_id=identifier,
            verified=result.verified,
            message=result.message,
            ip=ip or 'unknown'
        ))
        return result

    @staticmethod
    def _format_date(record: TagRecord) -> str:
        return record.valid_until.astimezone(timezone.utc).date().isoformat()
