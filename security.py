"""Password hashing and password-reset tokens."""

import hashlib
import hmac

from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

# Werkzeug's scrypt: salted, memory-hard, fixed cost.
HASH_METHOD = "scrypt"
RESET_SALT = "password-reset-salt"
RESET_MAX_AGE = 3600


def hash_password(password):
    return generate_password_hash(password, method=HASH_METHOD)


def verify_password(password, digest):
    """Check ``password`` against a stored digest.

    Accounts created through Google have no digest and never verify.
    """
    if not digest:
        return False
    return check_password_hash(digest, password)


def password_fingerprint(digest):
    return hashlib.sha256((digest or "").encode()).hexdigest()[:16]


def _serializer():
    return URLSafeTimedSerializer(current_app.secret_key)


def make_reset_token(user):
    # Bound to the current password: once it changes the token is dead.
    payload = [user.email, password_fingerprint(user.password)]
    return _serializer().dumps(payload, salt=RESET_SALT)


def load_reset_token(token, max_age=RESET_MAX_AGE):
    """Return ``(email, fingerprint)`` from a reset token, or None."""
    try:
        email, fingerprint = _serializer().loads(token, salt=RESET_SALT, max_age=max_age)
    except SignatureExpired:
        current_app.logger.info("Expired password reset token")
        return None
    except BadSignature:
        current_app.logger.warning("Invalid password reset token")
        return None
    except (TypeError, ValueError):
        current_app.logger.warning("Malformed password reset token")
        return None
    return email, fingerprint


def reset_token_matches(user, fingerprint):
    return hmac.compare_digest(str(fingerprint), password_fingerprint(user.password))
