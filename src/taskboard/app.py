from flask import Flask

from taskboard.api.validation import register_error_handlers
from taskboard.config import config
from taskboard.logs import configure_logging


def create_app() -> Flask:
    """Application factory."""
    configure_logging(config.log_level)
    app = Flask(__name__)

    register_error_handlers(app)

    # Register blueprints
    from taskboard.api.projects import bp as projects_bp

    app.register_blueprint(projects_bp, url_prefix="/api/project")

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    return app


# For flask run command
app = create_app()
