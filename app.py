"""
SecureTag Verification Service - Main Application

Entry point for the SecureTag badge verification service. Clients present a
QR code string or NFC tag identifier and receive a verification verdict with
the badge holder's details.

Features:
- QR code and NFC tag verification
- Bounded audit log of verification attempts
- Verification statistics
- Admin badge issuing with QR code images
"""

import logging
import os

from securetag import create_app

app = create_app(os.environ.get('FLASK_ENV'))
logger = logging.getLogger(__name__)

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 3000))
    registry = app.extensions['securetag'].registry

    logger.info(f"SecureTag server running on port {port}")
    logger.info(f"Health check: http://localhost:{port}/api/health")
    for record in registry.qr_codes.scan():
        logger.info(f"Sample QR code: {record.identifier} ({record.name})")

    # Run the application
    app.run(debug=app.config['DEBUG'], host='0.0.0.0', port=port)
