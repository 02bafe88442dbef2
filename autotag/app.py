import logging
from flask import Flask, has_app_context
from .extensions import db, migrate, limiter, celery_app
from .config import get_config


def configure_logging(app):
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    app.logger.setLevel(app.config["LOG_LEVEL"])
    # Each Shopify call would otherwise log a connection line
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def create_app(config_name=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(get_config(config_name))
    configure_logging(app)

    # Configure Celery
    celery_app.conf.update(
        broker_url=app.config["REDIS_URL"],
        result_backend=app.config["REDIS_URL"],
    )
    # Add Flask app context to Celery tasks, reusing the caller's when run inline
    class ContextTask(celery_app.Task):
        def __call__(self, *args, **kwargs):
            if has_app_context():
                return self.run(*args, **kwargs)
            with app.app_context():
                return self.run(*args, **kwargs)
    celery_app.Task = ContextTask

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # Ensure models are imported so Alembic sees them during 'flask db migrate'
    with app.app_context():
        from . import models  # noqa: F401

    # Blueprints
    from .blueprints.webhooks import webhooks_bp
    from .blueprints.rules import rules_bp

    app.register_blueprint(webhooks_bp)
    app.register_blueprint(rules_bp)

    @app.route("/health")
    def health():
        return {"status": "ok"}

    return app

# For flask run:
# export FLASK_APP="autotag.app:create_app"
# flask run --debug
