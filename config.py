"""Flask application configuration."""
import os


def _env_flag(name, default='false'):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


class Config:
    """Base configuration."""
    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # API
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    API_HOST = os.environ.get('API_HOST', '0.0.0.0')
    API_PORT = int(os.environ.get('API_PORT', 3000))
    MAX_BATCH_SIZE = int(os.environ.get('MAX_BATCH_SIZE', 500))

    # Core test: snap the diameter to the nominal core size for Fg lookup
    FG_SNAP_TO_NOMINAL_DIAMETER = _env_flag('FG_SNAP_TO_NOMINAL_DIAMETER')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    FG_SNAP_TO_NOMINAL_DIAMETER = False
    MAX_BATCH_SIZE = 50


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
