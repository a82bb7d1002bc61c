# quizgame/config.py
import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///quizgame.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    # Session settings
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = False
    PERMANENT_SESSION_LIFETIME = int(os.environ.get("RANDOMPLAY_SESSION_TTL", "3600"))

    RATELIMIT_DEFAULT = "200 per hour; 50 per minute"
    RATELIMIT_ENABLED = True

    # Random play
    RANDOMPLAY_ALLOWED_TIME = int(os.environ.get("RANDOMPLAY_ALLOWED_TIME", "10"))  # countdown ticks
    RANDOMPLAY_MAX_CREDITS = int(os.environ.get("RANDOMPLAY_MAX_CREDITS", "3"))
    RANDOMPLAY_SESSION_TTL = int(os.environ.get("RANDOMPLAY_SESSION_TTL", "3600"))  # seconds idle
    RANDOMPLAY_SEED = None
    RANDOMPLAY_CHECK_LIMIT = "60 per minute"

    QUIZZES_PER_PAGE = 10


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_ECHO = True  # Log SQL queries


class ProductionConfig(Config):
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    RATELIMIT_ENABLED = False
    RANDOMPLAY_SEED = 1234
