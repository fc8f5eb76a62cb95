from flask import Flask, jsonify
from sqlalchemy.pool import StaticPool

from config import Config

from . import models  # ensure models are registered with SQLAlchemy
from .cli import register_cli
from .extensions import db
from .routes import dashboard, errors, items, locations, reports, scanner
from .seed import seed_demo_data
from .utils.logging import configure_logging


def create_app(config_override=None):
    app = Flask(__name__)

    # load configuration from environment variables
    app.config.from_object(Config)
    if config_override:
        app.config.update(config_override)

    database_uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if database_uri.startswith("sqlite:///:memory:") or database_uri == "sqlite://":
        # One shared connection so every session sees the same in-memory store.
        engine_options = app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", {})
        connect_args = engine_options.setdefault("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine_options.setdefault("poolclass", StaticPool)

    configure_logging(app)
    db.init_app(app)

    with app.app_context():
        db.create_all()
        if app.config.get("SEED_DEMO_DATA"):
            seed_demo_data()

    app.register_blueprint(errors.bp)
    app.register_blueprint(locations.bp)
    app.register_blueprint(items.bp)
    app.register_blueprint(scanner.bp)
    app.register_blueprint(reports.bp)
    app.register_blueprint(dashboard.bp)
    register_cli(app)

    @app.get("/")
    def home():
        return jsonify(
            {
                "name": "Stockroom",
                "endpoints": sorted(
                    rule.rule for rule in app.url_map.iter_rules() if rule.endpoint != "static"
                ),
            }
        )

    return app
