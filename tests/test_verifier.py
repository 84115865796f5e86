from datetime import datetime, timedelta, timezone

import pytest

from securetag.modules.models import TagRecord, ValidationError


def test_verified_tag_echoes_record(service, registry, now):
    result = service.verifier.verify_qr('VERIFIED001', ip='10.0.0.1')
    stored = registry.lookup('qr', 'VERIFIED001')

    assert result.verified is True
    assert result.message == 'QR Code Verified Successfully'
    assert result.record is stored
    assert result.verified_at == now

    payload = result.to_dict()
    assert payload['qrCode'] == 'VERIFIED001'
    assert payload['data']['name'] == 'John Employee'
    assert payload['data']['secureToken'] == stored.secure_token
    assert 'verifiedAt' in payload['data']


def test_unknown_tag(service):
    result = service.verifier.verify_qr('NOPE')

    assert result.verified is False
    assert result.message == 'Unknown QR Code'
    assert 'data' not in result.to_dict()
    assert len(service.audit_log) == 1


def test_expired_tag_mentions_expiry_date(service):
    result = service.verifier.verify_qr('EMP001-SECURE-2024')

    assert result.verified is False
    assert 'expired' in result.message.lower()
    assert '2024-12-31' in result.message


def test_invalid_demo_code_is_rejected(service):
    assert service.verifier.verify_qr('INVALID001').verified is False


def test_nfc_verification(service):
    result = service.verifier.verify_nfc('04:A3:B2:C1:D4:E5:F6', tag_data={'records': []})

    assert result.verified is True
    assert result.message == 'NFC Tag Verified Successfully'
    assert result.to_dict()['tagId'] == '04:A3:B2:C1:D4:E5:F6'

    unknown = service.verifier.verify_nfc('00:00')
    assert unknown.message == 'Unknown NFC Tag'


def test_every_attempt_is_audited(service):
    service.verifier.verify_qr('VERIFIED001', ip='10.0.0.1')
    service.verifier.verify_qr('NOPE')
    service.verifier.verify_nfc('04:A3:B2:C1:D4:E5:F6')

    entries = service.audit_log.entries()
    assert [e.tag_id for e in entries] == ['VERIFIED001', 'NOPE', '04:A3:B2:C1:D4:E5:F6']
    assert [e.verified for e in entries] == [True, False, True]
    assert entries[0].ip == '10.0.0.1'
    assert entries[1].ip == 'unknown'
    assert entries[2].entry_type == 'NFC_VERIFICATION'


@pytest.mark.parametrize('identifier', ['', '   ', None, 42])
def test_missing_identifier_is_client_error(service, identifier):
    with pytest.raises(ValidationError):
        service.verifier.verify_qr(identifier)

    assert len(service.audit_log) == 0


def test_expiry_date_is_reported_in_utc(service, registry, now):
    local = timezone(timedelta(hours=10))
    registry.qr_codes.put(TagRecord(
        'LOCAL-TZ', 'Ada', 'Research', 'Level 1',
        datetime(2025, 1, 1, 5, 0, tzinfo=local), 'tok', now
    ))

    result = service.verifier.verify_qr('LOCAL-TZ')

    assert result.message == 'QR Code expired on 2024-12-31'
