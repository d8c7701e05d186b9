"""
Book Catalog: server-rendered library catalog (Flask + SQLAlchemy).

- Authors / Books / Genres / Book copies CRUD under /catalog/
- Server-side validation with WTForms, CSRF protection (Flask-WTF)
- Authors and genres can't be deleted while books still reference them
- Security headers via Flask-Talisman
"""

import logging
import os
from collections.abc import Mapping

from flask import Flask, redirect, render_template, request, url_for
from flask_talisman import Talisman
from sqlalchemy.exc import SQLAlchemyError

from .cli import init_db_command
from .config import Config
from .extensions import csrf, db
from .store import CatalogStore

logger = logging.getLogger(__name__)


def create_app(config=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if isinstance(config, Mapping):
        app.config.from_mapping(config)
    elif config is not None:
        app.config.from_object(config)
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        os.makedirs(app.instance_path, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///" + os.path.join(app.instance_path, "bookcatalog.db")

    logging.basicConfig(level=app.config["LOG_LEVEL"],
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    csrf.init_app(app)
    Talisman(
        app,
        force_https=app.config["FORCE_HTTPS"],
        session_cookie_secure=app.config["FORCE_HTTPS"],
        content_security_policy={
            "default-src": ["'self'"],
            "style-src": ["'self'", "'unsafe-inline'"],
        },
    )
    app.extensions["catalog_store"] = CatalogStore(db.session)

    from .views import authors, bookinstances, books, genres
    for module in (authors, books, genres, bookinstances):
        app.register_blueprint(module.bp)

    @app.route("/")
    @app.route("/catalog/")
    def home():
        return redirect(url_for("books.index"))

    register_error_handlers(app)
    app.cli.add_command(init_db_command)
    connect_database(app)
    return app


def connect_database(app):
    """Create missing tables, logging whether the database was reachable."""
    with app.app_context():
        url = db.engine.url.render_as_string(hide_password=True)
        try:
            db.create_all()
        except SQLAlchemyError:
            logger.exception("Failed to connect to database %s", url)
        else:
            logger.info("Connected to database %s", url)


def register_error_handlers(app):
    def render_error(error):
        return render_template("error.html", title=error.name, status=error.code,
                               message=error.description), error.code

    for code in (400, 404, 405):
        app.register_error_handler(code, render_error)

    @app.errorhandler(500)
    def server_error(error):
        original = getattr(error, "original_exception", None)
        logger.error("Unhandled error on %s %s", request.method, request.path,
                     exc_info=original or error)
        return render_error(error)
