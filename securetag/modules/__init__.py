# SecureTag - Modules Package
"""
Core verification modules for the SecureTag service: tag registry, verifier,
audit log, statistics and badge issuing.
"""

from securetag.modules.audit_log import AuditLog
from securetag.modules.models import AuditEntry, TagRecord, ValidationError, VerificationResult
from securetag.modules.stats_aggregator import StatsAggregator
from securetag.modules.tag_issuer import TagIssuer, TagIssueError
from securetag.modules.tag_store import InMemoryTagStore, TagRegistry, TagStore, seed_demo_registry
from securetag.modules.verifier import TagVerifier

__all__ = [
    'AuditEntry',
    'AuditLog',
    'InMemoryTagStore',
    'StatsAggregator',
    'TagIssueError',
    'TagIssuer',
    'TagRecord',
    'TagRegistry',
    'TagStore',
    'TagVerifier',
    'ValidationError',
    'VerificationResult',
    'seed_demo_registry'
]
