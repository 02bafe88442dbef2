import os


def _env_flag(name, default="false"):
    return os.environ.get(name, default).lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///autotag.db")
    REDIS_URL = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SHOPIFY_API_VERSION = os.environ.get("SHOPIFY_API_VERSION", "2024-10")
    SHOPIFY_HTTP_TIMEOUT = float(os.environ.get("SHOPIFY_HTTP_TIMEOUT", 10))
    # Run the webhook task in the request instead of handing it to Celery
    PROCESS_WEBHOOKS_INLINE = _env_flag("PROCESS_WEBHOOKS_INLINE")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    WEBHOOK_RATE_LIMIT = os.environ.get("WEBHOOK_RATE_LIMIT", "120/minute")
    RATELIMIT_ENABLED = True

class DevelopmentConfig(BaseConfig):
    DEBUG = True

class ProductionConfig(BaseConfig):
    DEBUG = False

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    PROCESS_WEBHOOKS_INLINE = True
    RATELIMIT_ENABLED = False
    LOG_LEVEL = "DEBUG"

def get_config(name=None):
    if name is None:
        name = os.environ.get("FLASK_ENV", "development").lower()
    if name.startswith("prod"):
        return ProductionConfig
    if name.startswith("test"):
        return TestingConfig
    return DevelopmentConfig
