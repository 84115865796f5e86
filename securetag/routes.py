"""
API Routes - SecureTag Verification Service

JSON endpoints for tag verification, badge issuing, audit log access and
statistics. Handlers pull their collaborators from the TagService attached to
the current application.
"""

from flask import Blueprint, current_app, jsonify, request

from securetag.modules.models import ValidationError, isoformat, utcnow

api_bp = Blueprint('api', __name__, url_prefix='/api')

ENDPOINTS = {
    'POST /api/verify-qr': 'Verify QR codes',
    'POST /api/verify-nfc': 'Verify NFC tags',
    'POST /api/admin/generate-qr': 'Generate new QR codes',
    'GET /api/admin/audit-logs': 'View audit logs',
    'GET /api/admin/stats': 'System statistics'
}


def get_service():
    """The TagService bound to the running application."""
    return current_app.extensions['securetag']


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _parse_limit(raw):
    if raw is None or raw == '':
        return current_app.config['AUDIT_LOG_DEFAULT_LIMIT']
    try:
        limit = int(raw)
    except ValueError:
        raise ValidationError("limit must be a positive integer")
    if limit <= 0:
        raise ValidationError("limit must be a positive integer")
    return limit


def _parse_verified(raw):
    if raw is None or raw == '':
        return None
    value = raw.lower()
    if value in ['true', '1', 'success']:
        return True
    if value in ['false', '0', 'failed']:
        return False
    raise ValidationError("verified must be true or false")


@api_bp.route('/health', methods=['GET'])
def health():
    """Service health check"""
    service = get_service()
    payload = {
        'status': 'healthy',
        'timestamp': isoformat(utcnow()),
        'uptime': round(service.uptime, 3),
        'version': current_app.config['VERSION'],
        'endpoints': ENDPOINTS
    }
    if current_app.config['EXPOSE_TEST_CODES']:
        payload['testQRCodes'] = current_app.config['TEST_QR_CODES']
    return jsonify(payload)


@api_bp.route('/config', methods=['GET'])
def client_config():
    """Configuration consumed by the browser client"""
    cfg = current_app.config
    payload = {
        'apiBaseUrl': cfg['API_BASE_URL'],
        'appName': cfg['APP_NAME'],
        'version': cfg['VERSION']
    }
    if cfg['EXPOSE_TEST_CODES']:
        payload['testQRCodes'] = cfg['TEST_QR_CODES']
    return jsonify(payload)


@api_bp.route('/verify-qr', methods=['POST'])
def verify_qr():
    """Verify a scanned QR code"""
    data = _json_body()
    if not data.get('qrCode'):
        raise ValidationError("QR code data is required")

    result = get_service().verifier.verify_qr(data['qrCode'], ip=request.remote_addr)
    return jsonify(result.to_dict())


@api_bp.route('/verify-nfc', methods=['POST'])
def verify_nfc():
    """Verify a scanned NFC tag"""
    data = _json_body()
    if not data.get('tagId'):
        raise ValidationError("NFC tag ID is required")

    result = get_service().verifier.verify_nfc(
        data['tagId'], tag_data=data.get('tagData'), ip=request.remote_addr
    )
    return jsonify(result.to_dict())


@api_bp.route('/admin/generate-qr', methods=['POST'])
def generate_qr():
    """Issue a new QR code badge"""
    data = _json_body()
    issuer = get_service().issuer

    record = issuer.issue(
        data.get('name'),
        data.get('department'),
        data.get('accessLevel'),
        data.get('validDays')
    )

    return jsonify({
        'success': True,
        'qrCode': record.identifier,
        'data': record.to_dict(),
        'qrImage': issuer.render_qr_image(record.identifier),
        'message': 'QR code generated successfully'
    })


@api_bp.route('/admin/audit-logs', methods=['GET'])
def audit_logs():
    """Most recent verification attempts"""
    audit_log = get_service().audit_log
    limit = _parse_limit(request.args.get('limit'))
    verified = _parse_verified(request.args.get('verified'))

    logs = audit_log.query(
        entry_type=request.args.get('type') or None,
        verified=verified,
        limit=limit
    )

    return jsonify({
        'success': True,
        'logs': [entry.to_dict() for entry in logs],
        'total': len(audit_log)
    })


@api_bp.route('/admin/stats', methods=['GET'])
@api_bp.route('/stats', methods=['GET'])
def stats():
    """Registry and verification statistics"""
    return jsonify({
        'success': True,
        'stats': get_service().stats.stats()
    })
