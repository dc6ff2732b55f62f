# blog_api/core/config.py

import os  # environment variables (.env is loaded by the package before this import)
from datetime import timedelta

class Config:
    """Settings shared by every environment."""
    # Signs and verifies every access token.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    # Issued credentials stay valid for one day.
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=1)

    # Thumbnails and avatars are written here. Relative paths are resolved against the working directory.
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

class DevelopmentConfig(Config):
    """Local development: debug mode with the development Firebase project."""
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')

class TestingConfig(Config):
    """Test runs. Collections are injected, so Firebase credentials are optional."""
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'testing-secret-key-with-at-least-32-bytes')
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')

class ProductionConfig(Config):
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

# Maps FLASK_ENV values to config classes; create_app picks one from here.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
