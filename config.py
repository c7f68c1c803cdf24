import os

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Load environment variables
load_dotenv()


def _env_bool(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _database_url():
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    host = os.getenv("DB_HOST")
    if not host:
        return None  # SQLite in the instance folder, see create_app
    port = os.getenv("DB_PORT")
    url = URL.create(
        "mysql+pymysql",
        username=os.getenv("DB_USER") or None,
        password=os.getenv("DB_PASS") or None,
        host=host,
        port=int(port) if port else None,
        database=os.getenv("DB_NAME") or None,
    )
    # Credentials are escaped here, not by the caller.
    return url.render_as_string(hide_password=False)


class Config:
    SECRET_KEY = os.getenv("FLASK_SECRET_KEY")
    SESSION_COOKIE_SECURE = _env_bool("SESSION_COOKIE_SECURE", True)

    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Google OAuth, read by Flask-Dance
    GOOGLE_OAUTH_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
    GOOGLE_OAUTH_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET")

    # Mail config
    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.getenv("MAIL_PORT") or 25)
    MAIL_USE_TLS = _env_bool("MAIL_USE_TLS", False)
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER") or MAIL_USERNAME

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    PORT = int(os.getenv("PORT") or 3000)
