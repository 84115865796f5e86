"""
Service container for the SecureTag verification service.

Bundles the registry, audit log and the components that operate on them so a
single instance can be attached to a Flask application and shared by its
request handlers.
"""

import logging
import time
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from securetag.modules.audit_log import AuditLog
from securetag.modules.models import utcnow
from securetag.modules.stats_aggregator import StatsAggregator
from securetag.modules.tag_issuer import TagIssuer
from securetag.modules.tag_store import TagRegistry, seed_demo_registry
from securetag.modules.verifier import TagVerifier

logger = logging.getLogger(__name__)


class TagService:
    """Process-wide verification state and the components built around it."""

    def __init__(self, registry: Optional[TagRegistry] = None, audit_log: Optional[AuditLog] = None,
                 window_hours: int = 24, issuer_settings: Optional[dict] = None,
                 clock: Callable[[], datetime] = utcnow):
        self.registry = registry if registry is not None else TagRegistry()
        self.audit_log = audit_log if audit_log is not None else AuditLog()
        self.clock = clock
        self.started_at = time.monotonic()

        self.verifier = TagVerifier(self.registry, self.audit_log, clock=clock)
        self.stats = StatsAggregator(self.registry, self.audit_log,
                                     window_hours=window_hours, clock=clock)
        self.issuer = TagIssuer(self.registry, issuer_settings, clock=clock)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'TagService':
        """
        Build a service from a Flask config mapping.

        Args:
            config (Mapping): Application configuration

        Returns:
            TagService: Service with an empty or demo-seeded registry
        """
        service = cls(
            audit_log=AuditLog(capacity=config['AUDIT_LOG_CAPACITY']),
            window_hours=config['STATS_WINDOW_HOURS'],
            issuer_settings={
                'default_valid_days': config['ISSUE_DEFAULT_VALID_DAYS'],
                'max_attempts': config['ISSUE_MAX_ATTEMPTS'],
                'token_bytes': config['SECURE_TOKEN_BYTES'],
                'id_random_bytes': config['TAG_ID_RANDOM_BYTES'],
                'box_size': config['QR_CODE_BOX_SIZE'],
                'border': config['QR_CODE_BORDER']
            }
        )
        if config['SEED_DEMO_TAGS']:
            seed_demo_registry(service.registry, service.clock(),
                               token_bytes=config['SECURE_TOKEN_BYTES'])
        logger.info(f"Tag service ready (audit capacity {service.audit_log.capacity})")
        return service

    @property
    def uptime(self) -> float:
        """Seconds since the service was created."""
        return time.monotonic() - self.started_at
