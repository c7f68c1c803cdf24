from flask import current_app
from flask_mail import Mail, Message

mail = Mail()


def send_password_reset(email, reset_url):
    msg = Message("Password Reset", recipients=[email])
    msg.body = f"Click to reset your password: {reset_url}"
    mail.send(msg)
    current_app.logger.info("Password reset link sent to %s", email)
