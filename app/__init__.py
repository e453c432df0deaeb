# app/__init__.py
from flask import Flask
from config import get_config
from app.extensions import feed
from app.filters import register_template_utils
import atexit
import logging, sys


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or get_config())

    # Initialize extensions
    task = feed.init_app(app)

    # Register filters/globals
    register_template_utils(app)

    # Blueprints
    from .routes import bp as main_bp
    app.register_blueprint(main_bp)

    from app.leaderboard import bp as leaderboard_bp
    app.register_blueprint(leaderboard_bp)

    from app.api.routes import bp as api_bp
    app.register_blueprint(api_bp)

    from app.cli import register_cli
    register_cli(app)

    # ---------------- Logging & health ----------------

    if not app.debug and not app.testing:  # only tweak for production
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.INFO)
        app.logger.setLevel(logging.INFO)
        app.logger.addHandler(handler)

    @app.get("/healthz")
    def healthz():
        return "ok", 200

    # ---------------- Background refresh ----------------

    if not app.testing and task.start():
        atexit.register(task.stop)

    return app
