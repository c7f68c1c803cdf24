"""User lookups and account creation."""

from flask import current_app
from sqlalchemy.exc import IntegrityError

from model import User, db, new_session_token


class DuplicateEmail(Exception):
    def __init__(self, email):
        super().__init__(f"email already registered: {email}")
        self.email = email


def find_by_email(email):
    return User.query.filter_by(email=email).first()


def get_by_id(user_id):
    return db.session.get(User, user_id)


def create_local(name, email, digest):
    user = User(name=name, email=email, password=digest)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateEmail(email)
    return user


def find_or_create_oauth(email, name):
    """Return the user for ``email``, creating a password-less one if needed.

    Two first-time callbacks for the same email can both miss the lookup;
    the unique constraint on ``users.email`` lets exactly one insert win and
    the loser re-reads that row.
    """
    user = find_by_email(email)
    if user:
        return user

    user = User(name=name or email, email=email, password=None)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        user = find_by_email(email)
        if user is None:
            raise
        return user

    current_app.logger.info("Created OAuth user %s (id=%s)", email, user.id)
    return user


def set_password(user, digest):
    user.password = digest
    user.session_token = new_session_token()
    db.session.commit()


def rotate_session_token(user):
    """Invalidate every session cookie issued for ``user`` so far."""
    user.session_token = new_session_token()
    db.session.commit()
