import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

class Config:
    """Base settings shared by every environment"""
    SECRET_KEY = os.environ.get('SECRET_KEY')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # DATABASE_URL wins; otherwise a local SQLite file
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        f"sqlite:///{os.path.join(BASE_DIR, 'carelink.db')}"
    )
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # whole request body

    # ── RFQ intake ──
    RFQ_INTEREST_CHOICES = [
        'Imaging & Radiology',
        'Laboratory & Diagnostics',
        'Surgical & OR',
        'Patient Monitoring',
        'Dental',
        'Hospital Furniture',
        'General',
    ]
    RFQ_DEFAULT_INTEREST = 'Imaging & Radiology'
    RFQ_RATE_LIMIT = '5 per minute'

    # ── Catalog ──
    PORTFOLIO_HOME_LIMIT = 6
    PRODUCT_IMAGE_MAX_SIZE = 5 * 1024 * 1024
    PRODUCT_IMAGE_EXTENSIONS = {'jpg', 'jpeg', 'png', 'webp'}

    # ── Admin login ──
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')  # bcrypt hash or plain text
    LOGIN_RATE_LIMIT = '5 per 5 minutes'  # failed attempts per client address

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 1800  # seconds

    @staticmethod
    def get_logging_config(log_dir):
        return {
            'version': 1,
            'formatters': {
                'default': {
                    'format': '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
                }
            },
            'handlers': {
                'file': {
                    'class': 'logging.handlers.RotatingFileHandler',
                    'filename': os.path.join(log_dir, 'carelink.log'),
                    'maxBytes': 1024 * 1024 * 10,  # 10MB
                    'backupCount': 5,
                    'formatter': 'default',
                    'encoding': 'utf-8'
                },
                'console': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'default'
                }
            },
            'root': {
                'level': 'INFO',
                'handlers': ['file', 'console']
            }
        }

class DevelopmentConfig(Config):
    """Development settings"""
    DEBUG = True
    SESSION_COOKIE_SECURE = False  # plain HTTP locally

class ProductionConfig(Config):
    """Production settings"""
    DEBUG = False
    SESSION_COOKIE_SECURE = True

    def __init__(self):
        if not self.SECRET_KEY:
            raise RuntimeError("SECRET_KEY environment variable is not set")
        if not os.environ.get('ADMIN_PASSWORD'):
            raise RuntimeError("ADMIN_PASSWORD environment variable is not set")

        # optional: RFQ notification mail
        self.SMTP_USER = os.environ.get('SMTP_USER')
        self.SMTP_PASS = os.environ.get('SMTP_PASS')
        self.ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL')

config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
