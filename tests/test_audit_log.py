import threading
from datetime import timedelta

import pytest

from securetag.modules.audit_log import AuditLog
from securetag.modules.models import AuditEntry, ValidationError


def entry(now, tag_id, verified=True, entry_type='QR_VERIFICATION', minutes=0):
    return AuditEntry(now + timedelta(minutes=minutes), entry_type, tag_id, verified, 'msg')


def test_capacity_keeps_most_recent_in_order(now):
    log = AuditLog(capacity=5)
    for i in range(12):
        log.record(entry(now, f"TAG{i}", minutes=i))

    assert len(log) == 5
    assert [e.tag_id for e in log.entries()] == ['TAG7', 'TAG8', 'TAG9', 'TAG10', 'TAG11']


def test_query_newest_first_with_limit(now):
    log = AuditLog(capacity=10)
    for i in range(4):
        log.record(entry(now, f"TAG{i}", minutes=i))

    assert [e.tag_id for e in log.query(limit=2)] == ['TAG3', 'TAG2']


def test_query_filters(now):
    log = AuditLog()
    log.record(entry(now, 'Q1', verified=True))
    log.record(entry(now, 'N1', verified=False, entry_type='NFC_VERIFICATION'))
    log.record(entry(now, 'Q2', verified=False))

    assert [e.tag_id for e in log.query(entry_type='NFC_VERIFICATION')] == ['N1']
    assert [e.tag_id for e in log.query(verified=False)] == ['Q2', 'N1']
    assert [e.tag_id for e in log.query(entry_type='QR_VERIFICATION', verified=True)] == ['Q1']


def test_query_rejects_non_positive_limit():
    with pytest.raises(ValidationError):
        AuditLog().query(limit=0)


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        AuditLog(capacity=0)


def test_entry_serialisation(now):
    data = entry(now, 'Q1').to_dict()

    assert data == {
        'timestamp': '2026-01-15T12:00:00.000Z',
        'type': 'QR_VERIFICATION',
        'tagId': 'Q1',
        'verified': True,
        'message': 'msg',
        'ip': 'unknown'
    }


def test_concurrent_appends_respect_capacity(now):
    log = AuditLog(capacity=50)
    per_thread = 40
    workers = 10

    def worker(n):
        for i in range(per_thread):
            log.record(entry(now, f"T{n}-{i}"))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    kept = [e.tag_id for e in log.entries()]
    assert len(log) == min(per_thread * workers, log.capacity)
    assert len(set(kept)) == len(kept)

    # each thread's surviving entries are its most recent ones, in order
    for n in range(workers):
        indices = [int(tag.split('-')[1]) for tag in kept if tag.startswith(f"T{n}-")]
        assert indices == list(range(per_thread - len(indices), per_thread))


def test_capacity_holds_at_every_append(now):
    log = AuditLog(capacity=3)
    for i in range(10):
        log.record(entry(now, f"TAG{i}"))
        assert len(log) <= 3
