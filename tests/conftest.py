"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from securetag import create_app
from securetag.modules.audit_log import AuditLog
from securetag.modules.tag_store import TagRegistry, seed_demo_registry
from securetag.service import TagService

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def registry():
    return seed_demo_registry(TagRegistry(), NOW)


@pytest.fixture
def audit_log():
    return AuditLog(capacity=100)


@pytest.fixture
def service(registry, audit_log):
    return TagService(registry=registry, audit_log=audit_log, clock=lambda: NOW)


@pytest.fixture
def app(service):
    return create_app('testing', service=service)


@pytest.fixture
def client(app):
    return app.test_client()
