"""
Tag Issuer Module - SecureTag Verification Service

This module mints new QR code badges for the registry and renders them as PNG
images so an administrator can print or display the issued code.

Features:
- Department-prefixed identifier generation
- Random secure token generation
- Collision check with bounded retries
- QR code image rendering (base64 PNG)
"""

import base64
import io
import logging
import secrets
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

import qrcode

from securetag.modules.models import TagRecord, ValidationError, utcnow
from securetag.modules.tag_store import TagRegistry


class TagIssueError(RuntimeError):
    """Raised when no free identifier could be generated."""


class TagIssuer:
    """
    Issues new QR code records into the registry.
    """

    def __init__(self, registry: TagRegistry, settings: Optional[Dict[str, Any]] = None,
                 clock: Callable[[], datetime] = utcnow):
        """
        Initialize the issuer.

        Args:
            registry (TagRegistry): Registry that receives issued records
            settings (dict): Overrides for the default issue settings
            clock (Callable): Returns the current aware datetime
        """
        self.registry = registry
        self.clock = clock
        self.logger = logging.getLogger(__name__)

        self.settings = {
            'default_valid_days': 30,
            'max_attempts': 5,
            'token_bytes': 32,
            'id_random_bytes': 8,
            'box_size': 10,
            'border': 4,
            'fill_color': 'black',
            'back_color': 'white'
        }
        if settings:
            self.settings.update(settings)

    def _generate_identifier(self, department: str) -> str:
        suffix = secrets.token_hex(self.settings['id_random_bytes']).upper()
        return f"{department.upper()}-{suffix}"

    def _generate_secure_token(self) -> str:
        return secrets.token_hex(self.settings['token_bytes'])

    def _parse_valid_days(self, valid_days: Any) -> int:
        if valid_days is None or valid_days == '':
            return self.settings['default_valid_days']
        if isinstance(valid_days, bool):
            raise ValidationError("validDays must be a positive integer")
        try:
            days = int(valid_days)
        except (TypeError, ValueError, OverflowError):
            raise ValidationError("validDays must be a positive integer")
        if days != valid_days and not isinstance(valid_days, str):
            # reject fractional numbers such as 1.5
            raise ValidationError("validDays must be a positive integer")
        if days <= 0:
            raise ValidationError("validDays must be a positive integer")
        return days

    def issue(self, name: Any, department: Any, access_level: Any,
              valid_days: Any = None) -> TagRecord:
        """
        Create and register a new QR code record.

        Args:
            name (str): Badge holder name
            department (str): Department, also used as the identifier prefix
            access_level (str): Access level label
            valid_days (int): Days until the code expires

        Returns:
            TagRecord: The issued record

        Raises:
            ValidationError: If a required field is missing or validDays is invalid
            TagIssueError: If every generated identifier collided
        """
        fields = {'name': name, 'department': department, 'accessLevel': access_level}
        missing = [key for key, value in fields.items()
                   if not isinstance(value, str) or not value.strip()]
        if missing:
            raise ValidationError(
                "Missing required fields: name, department, accessLevel"
            )

        days = self._parse_valid_days(valid_days)
        now = self.clock()
        try:
            valid_until = now + timedelta(days=days)
        except OverflowError:
            raise ValidationError("validDays is too large")
        store = self.registry.qr_codes

        for attempt in range(self.settings['max_attempts']):
            record = TagRecord(
                identifier=self._generate_identifier(department.strip()),
                name=name.strip(),
                department=department.strip(),
                access_level=access_level.strip(),
                valid_until=valid_until,
                secure_token=self._generate_secure_token(),
                created_at=now
            )
            if store.add(record):
                self.logger.info(f"Issued QR code {record.identifier} for {record.name} ({days} days)")
                return record
            self.logger.warning(f"Identifier collision on {record.identifier}, retrying")

        raise TagIssueError(
            f"Could not generate a unique identifier after {self.settings['max_attempts']} attempts"
        )

    def render_qr_image(self, identifier: str) -> str:
        """
        Render an identifier as a QR code PNG.

        Args:
            identifier (str): Data to encode

        Returns:
            str: Base64 encoded PNG image
        """
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=self.settings['box_size'],
            border=self.settings['border']
        )
        qr.add_data(identifier)
        qr.make(fit=True)

        img = qr.make_image(
            fill_color=self.settings['fill_color'],
            back_color=self.settings['back_color']
        )

        buffer = io.BytesIO()
        img.save(buffer, format='PNG')
        return base64.b64encode(buffer.getvalue()).decode()
