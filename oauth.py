"""Google sign-in through Flask-Dance.

``/auth/google`` sends the browser to Google and Google returns it to
``/auth/google/callback``. Flask-Dance exchanges the code for a token and
fires ``oauth_authorized``; the handler below turns the Google profile into
a local session. Client id and secret come from ``GOOGLE_OAUTH_CLIENT_ID``
and ``GOOGLE_OAUTH_CLIENT_SECRET`` in the app config.
"""

from flask import current_app, flash, redirect, url_for
from flask_dance.consumer import oauth_authorized, oauth_error
from flask_dance.contrib.google import make_google_blueprint
from sqlalchemy.exc import SQLAlchemyError

from auth import login_session
from model import db
from users import find_or_create_oauth

google_bp = make_google_blueprint(
    # Full scope names: Google echoes these back, so oauthlib sees no scope change.
    scope=[
        "openid",
        "https://www.googleapis.com/auth/userinfo.email",
        "https://www.googleapis.com/auth/userinfo.profile",
    ],
    login_url="/google",
    authorized_url="/google/callback",
    redirect_to="main.login",
)


def _fail(message):
    flash(message)
    return redirect(url_for("main.login"))


@oauth_authorized.connect_via(google_bp)
def google_logged_in(blueprint, token):
    if not token:
        return _fail("Google sign-in failed.")

    resp = blueprint.session.get("/oauth2/v2/userinfo")
    if not resp.ok:
        current_app.logger.warning("Google userinfo error: %s", resp.text)
        return _fail("Failed to get user info from Google.")

    info = resp.json()
    email = info.get("email")
    if not email:
        return _fail("Email not returned from Google.")

    try:
        user = find_or_create_oauth(email, info.get("name"))
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Google sign-in failed for %s", email)
        return _fail("Google sign-in failed.")

    login_session(user)
    current_app.logger.info("User %s logged in with Google", user.id)
    # Returning a response stops Flask-Dance from storing the token;
    # nothing here calls Google again after login.
    return redirect(url_for("main.dashboard"))


@oauth_error.connect_via(google_bp)
def google_error(blueprint, **kwargs):
    current_app.logger.warning("Google OAuth error: %s", kwargs)
    flash("Google sign-in failed.")
