"""
Data Models Module - SecureTag Verification Service

This module defines the data structures shared by the verification service:
registry records for QR codes and NFC tags, audit log entries, and the
per-request verification result returned to clients.

All timestamps are timezone-aware UTC datetimes and are serialised as ISO 8601
strings in the JSON shapes returned by the API.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, Optional

QR_KIND = 'qr'
NFC_KIND = 'nfc'

AUDIT_TYPES = {
    QR_KIND: 'QR_VERIFICATION',
    NFC_KIND: 'NFC_VERIFICATION'
}


class ValidationError(ValueError):
    """Raised when a request is missing required input or carries bad values."""


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def isoformat(value: datetime) -> str:
    """Serialise a datetime the way the API returns it (UTC, millisecond precision, Z suffix)."""
    return value.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass(frozen=True)
class TagRecord:
    """Registry record for a QR code or NFC tag."""
    identifier: str
    name: str
    department: str
    access_level: str
    valid_until: datetime
    secure_token: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    tag_type: Optional[str] = None
    content: Optional[str] = None

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """
        Check whether the record is still inside its validity window.

        Args:
            now (datetime): Evaluation time, defaults to the current time

        Returns:
            bool: True while now is at or before valid_until
        """
        now = now or utcnow()
        return now <= self.valid_until

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'name': self.name,
            'department': self.department,
            'accessLevel': self.access_level,
            'validUntil': isoformat(self.valid_until),
            'secureToken': self.secure_token,
            'createdAt': isoformat(self.created_at)
        }
        if self.tag_type is not None:
            data['tagType'] = self.tag_type
        if self.content is not None:
            data['content'] = self.content
        return data


@dataclass(frozen=True)
class AuditEntry:
    """One recorded verification attempt."""
    timestamp: datetime
    entry_type: str
    tag_id: str
    verified: bool
    message: str
    ip: str = 'unknown'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': isoformat(self.timestamp),
            'type': self.entry_type,
            'tagId': self.tag_id,
            'verified': self.verified,
            'message': self.message,
            'ip': self.ip
        }


@dataclass
class VerificationResult:
    """
    Outcome of a single verification request.

    Not persisted; the audit log keeps a summary of it as an AuditEntry.
    """
    verified: bool
    message: str
    tag_kind: str
    identifier: str
    description: Optional[str] = None
    record: Optional[TagRecord] = None
    verified_at: Optional[datetime] = None

    @property
    def identifier_key(self) -> str:
        return 'qrCode' if self.tag_kind == QR_KIND else 'tagId'

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'verified': self.verified,
            'message': self.message,
            self.identifier_key: self.identifier
        }
        if self.description:
            result['description'] = self.description
        if self.verified and self.record is not None:
            data = self.record.to_dict()
            data['verifiedAt'] = isoformat(self.verified_at or utcnow())
            result['data'] = data
        return result
