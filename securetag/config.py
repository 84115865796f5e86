# SecureTag Verification Service Configuration

import os
import logging
from pathlib import Path

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ['true', 'on', '1']


class Config:
    """Base configuration class"""

    # Flask Configuration
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'securetag-secret-key-change-this-in-production'
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1MB max request body

    # Application Identity
    APP_NAME = 'SecureTag'
    VERSION = '1.0.0'
    API_BASE_URL = os.environ.get('API_BASE_URL') or 'http://localhost:3000/api'

    # Audit Log Configuration
    AUDIT_LOG_CAPACITY = int(os.environ.get('AUDIT_LOG_CAPACITY') or 1000)
    AUDIT_LOG_DEFAULT_LIMIT = 50

    # Statistics Configuration
    STATS_WINDOW_HOURS = 24

    # Tag Issue Configuration
    ISSUE_DEFAULT_VALID_DAYS = 30
    ISSUE_MAX_ATTEMPTS = 5
    SECURE_TOKEN_BYTES = 32
    TAG_ID_RANDOM_BYTES = 8

    # QR Code Configuration
    QR_CODE_BOX_SIZE = 10
    QR_CODE_BORDER = 4

    # Demo Data Configuration
    SEED_DEMO_TAGS = _env_flag('SEED_DEMO_TAGS', 'true')
    EXPOSE_TEST_CODES = _env_flag('EXPOSE_TEST_CODES', 'true')
    TEST_QR_CODES = {
        'verified': ['VERIFIED001', 'VERIFIED002'],
        'invalid': ['INVALID001']
    }

    # Logging Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_FORMAT = '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
    LOG_FILE = BASE_DIR / 'logs' / 'securetag.log'
    LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT = 5

    # Development Configuration
    DEBUG = _env_flag('DEBUG', 'False')
    TESTING = False

    @classmethod
    def init_app(cls, app):
        """Initialize application logging"""
        logging.basicConfig(level=cls.LOG_LEVEL, format=cls.LOG_FORMAT)
        app.logger.setLevel(cls.LOG_LEVEL)


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False

    # More verbose logging
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    DEBUG = False

    # Small log so eviction is easy to exercise
    AUDIT_LOG_CAPACITY = 100

    SEED_DEMO_TAGS = True
    EXPOSE_TEST_CODES = True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    # Production logging
    LOG_LEVEL = 'WARNING'

    # Do not advertise demo codes
    EXPOSE_TEST_CODES = False

    @classmethod
    def init_app(cls, app):
        super().init_app(app)

        from logging.handlers import RotatingFileHandler

        # Setup file logging
        if not app.debug:
            cls.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                cls.LOG_FILE,
                maxBytes=cls.LOG_MAX_BYTES,
                backupCount=cls.LOG_BACKUP_COUNT
            )
            file_handler.setFormatter(logging.Formatter(cls.LOG_FORMAT))
            file_handler.setLevel(logging.INFO)
            app.logger.addHandler(file_handler)

            app.logger.setLevel(logging.INFO)
            app.logger.info('SecureTag startup')


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration class by name, falling back to FLASK_ENV"""
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'default')
    return config.get(config_name, DevelopmentConfig)
