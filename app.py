import logging

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config.config import Config
from extensions import db, migrate
from services.errors import ServiceError

# Route Imports
from routes.mark_routes import mark_bp
from routes.student_routes import student_bp

# Model Imports (registers the tables with SQLAlchemy)
from models.student import Student
from models.mark import Mark

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(level_name):
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def handle_service_error(exc):
        return jsonify({"error": exc.message}), exc.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(exc):
        db.session.rollback()
        logger.exception("Unhandled database error")
        return jsonify({"error": f"Database error: {exc}"}), 500

    # Unknown routes, 405s and malformed requests
    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        db.session.rollback()
        logger.exception("Unhandled error")
        return jsonify({"error": f"Internal server error: {exc}"}), 500


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    setup_logging(app.config["LOG_LEVEL"])

    # Initialize Extensions
    db.init_app(app)
    migrate.init_app(app, db)

    register_error_handlers(app)

    # Register Blueprints
    app.register_blueprint(student_bp)
    app.register_blueprint(mark_bp)

    @app.cli.command("seed-students")
    def seed_students_command():
        """Insert the demo students."""
        from utils.seed_data import run_seed
        run_seed()

    return app

if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=True)
