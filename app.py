import os
from datetime import datetime

from flask import Flask

from auth import load_current_user
from config import Config
from logging_setup import configure_logging
from mailer import mail
from model import db
from oauth import google_bp
from views import bp as main_bp


def create_app(test_config=None):
    # Flask setup
    app = Flask(__name__, instance_relative_config=True, static_folder='static', template_folder='templates')
    app.config.from_object(Config)
    if test_config is not None:
        app.config.update(test_config)

    if not app.config.get("SECRET_KEY"):
        raise RuntimeError("FLASK_SECRET_KEY not set in .env")

    configure_logging(app)

    # SQLite in the instance folder unless a database is configured
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        os.makedirs(app.instance_path, exist_ok=True)
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///' + os.path.join(app.instance_path, 'tasks.db')

    db.init_app(app)
    mail.init_app(app)

    app.before_request(load_current_user)
    app.register_blueprint(main_bp)
    app.register_blueprint(google_bp, url_prefix="/auth")

    @app.context_processor
    def inject_datetime():
        return {'datetime': datetime}

    @app.cli.command("init-db")
    def init_db():
        """Create the users and tasks tables."""
        db.create_all()
        app.logger.info("Database tables created")

    return app


if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        db.create_all()
    app.run(port=app.config["PORT"], debug=app.config.get("DEBUG", False))
