from datetime import timedelta

import pytest

from securetag.modules.models import TagRecord, ValidationError
from securetag.modules.tag_store import InMemoryTagStore, TagRegistry, TagStore


def make_record(identifier, now, days=1):
    return TagRecord(identifier, 'Test User', 'QA', 'Level 1', now + timedelta(days=days), 'tok', now)


def test_put_get_and_scan(now):
    store = InMemoryTagStore()
    store.put(make_record('A', now))
    store.put(make_record('B', now))

    assert store.get('A').identifier == 'A'
    assert store.get('missing') is None
    assert sorted(r.identifier for r in store.scan()) == ['A', 'B']
    assert len(store) == 2
    assert 'B' in store


def test_add_refuses_taken_identifier(now):
    store = InMemoryTagStore([make_record('A', now)])

    assert store.add(make_record('A', now, days=5)) is False
    assert store.get('A').valid_until == now + timedelta(days=1)
    assert store.add(make_record('C', now)) is True


def test_registry_routes_by_kind(registry):
    assert registry.lookup('qr', 'VERIFIED001').name == 'John Employee'
    assert registry.lookup('nfc', '04:A3:B2:C1:D4:E5:F6').tag_type == 'NTAG213'
    assert registry.lookup('nfc', 'VERIFIED001') is None

    with pytest.raises(ValidationError):
        registry.store_for('barcode')


def test_demo_seed_validity(registry, now):
    assert registry.lookup('qr', 'VERIFIED001').is_valid(now)
    assert registry.lookup('qr', 'VISITOR-TEMP-001').is_valid(now)
    assert not registry.lookup('qr', 'INVALID001').is_valid(now)
    assert not registry.lookup('qr', 'EMP001-SECURE-2024').is_valid(now)


def test_record_valid_up_to_and_including_end(now):
    record = make_record('A', now, days=0)

    assert record.is_valid(now)
    assert not record.is_valid(now + timedelta(microseconds=1))


def test_record_to_dict_shape(registry):
    data = registry.lookup('nfc', '04:A3:B2:C1:D4:E5:F6').to_dict()

    assert data['accessLevel'] == 'Level 2'
    assert data['tagType'] == 'NTAG213'
    assert data['content'] == 'Employee Access Card'
    assert data['validUntil'].endswith('Z')

    qr_data = registry.lookup('qr', 'VERIFIED001').to_dict()
    assert 'tagType' not in qr_data
    assert len(qr_data['secureToken']) == 64


def test_custom_store_plugs_into_registry(now):
    store = InMemoryTagStore([make_record('X', now)])
    registry = TagRegistry(qr_codes=store)

    assert registry.qr_codes is store
    assert registry.lookup('qr', 'X') is not None
    assert len(registry.nfc_tags) == 0


class DictTagStore(TagStore):
    """Store relying on the interface's default add()."""

    def __init__(self):
        self.records = {}

    def get(self, identifier):
        return self.records.get(identifier)

    def put(self, record):
        self.records[record.identifier] = record

    def scan(self):
        return iter(list(self.records.values()))


def test_default_add_on_interface(now):
    store = DictTagStore()

    assert store.add(make_record('A', now)) is True
    assert store.add(make_record('A', now, days=5)) is False
    assert store.get('A').valid_until == now + timedelta(days=1)
    assert len(store) == 1


def test_issuer_works_with_any_store(now):
    from securetag.modules.tag_issuer import TagIssuer

    registry = TagRegistry(qr_codes=DictTagStore())
    record = TagIssuer(registry, clock=lambda: now).issue('Ada', 'Research', 'Level 1')

    assert registry.lookup('qr', record.identifier) is record
