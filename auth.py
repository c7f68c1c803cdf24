"""Session identity: who is logged in for the current request."""

from functools import wraps

from flask import g, redirect, session, url_for

from users import get_by_id, rotate_session_token

SESSION_KEY = "user_id"
TOKEN_KEY = "session_token"


def login_session(user):
    session.clear()
    session[SESSION_KEY] = user.id
    session[TOKEN_KEY] = user.session_token


def logout_session(user=None):
    """End the session.

    The signed cookie lives on the client, so clearing it is not enough: the
    user's session token is rotated and any saved copy stops matching.
    The cookie is cleared even if the rotation fails.
    """
    try:
        if user is not None:
            rotate_session_token(user)
    finally:
        session.clear()


def load_current_user():
    """Resolve ``g.user`` from the session cookie.

    Only the id and session token live in the session; the row is read
    fresh on every request so profile and password changes apply
    immediately.
    """
    g.user = None
    user_id = session.get(SESSION_KEY)
    if user_id is None:
        return

    user = get_by_id(user_id)
    if user is None or session.get(TOKEN_KEY) != user.session_token:
        session.clear()
        return
    g.user = user


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if g.get("user") is None:
            return redirect(url_for("main.login"))
        return view(*args, **kwargs)

    return wrapped
