from flask import (Blueprint, current_app, flash, g, redirect, render_template,
                   request, url_for)
from sqlalchemy.exc import SQLAlchemyError

import tasks
from auth import login_required, login_session, logout_session
from mailer import send_password_reset
from model import db
from security import (hash_password, load_reset_token, make_reset_token,
                      reset_token_matches, verify_password)
from users import DuplicateEmail, create_local, find_by_email, set_password

bp = Blueprint("main", __name__)


def _database_error(message):
    db.session.rollback()
    current_app.logger.exception(message)
    return message


def _task_id(raw):
    # Anything but a plain number cannot name a task.
    if not raw.isdecimal() or len(raw) > 18:
        raise tasks.TaskNotFound()
    return int(raw)


# Signup / login

@bp.route('/')
def index():
    return render_template('signup.html')


@bp.route('/signup', methods=['POST'])
def signup():
    name = request.form.get('name', '').strip()
    email = request.form.get('email', '').strip()
    password = request.form.get('password', '')
    if not name or not email or not password:
        return "Name, email and password are required."

    try:
        user = create_local(name, email, hash_password(password))
    except DuplicateEmail:
        current_app.logger.warning("Signup with existing email %s", email)
        return "Something went wrong during signup."
    except SQLAlchemyError:
        return _database_error("Something went wrong during signup.")

    current_app.logger.info("New user %s signed up (id=%s)", email, user.id)
    return redirect(url_for('main.login'))


@bp.route('/login', methods=['GET', 'POST'])
def login():
    if request.method == 'GET':
        return render_template('login.html')

    email = request.form.get('email', '').strip()
    password = request.form.get('password', '')
    try:
        user = find_by_email(email)
    except SQLAlchemyError:
        return _database_error("User not found or error occurred.")
    if user is None:
        current_app.logger.warning("Login for unknown email %s", email)
        return "User not found or error occurred."

    if not verify_password(password, user.password):
        current_app.logger.warning("Bad password for user %s", user.id)
        return "Incorrect password."

    login_session(user)
    current_app.logger.info("User %s logged in", user.id)
    return redirect(url_for('main.dashboard'))


@bp.route('/logout')
@login_required
def logout():
    user_id = g.user.id
    try:
        logout_session(g.user)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Could not rotate session token for user %s", user_id)
    current_app.logger.info("User %s logged out", user_id)
    return redirect(url_for('main.login'))


# Password reset

@bp.route('/forgot-password', methods=['GET', 'POST'])
def forgot_password():
    if request.method == 'POST':
        email = request.form.get('email', '').strip()
        user = find_by_email(email) if email else None
        if user:
            token = make_reset_token(user)
            reset_url = url_for('main.reset_password_token', token=token, _external=True)
            send_password_reset(email, reset_url)
            flash("Password reset link sent to your email.")
            return redirect(url_for('main.login'))
        flash("No account found with that email.")
    return render_template('forgot_password.html')


@bp.route('/reset-password/<token>', methods=['GET', 'POST'])
def reset_password_token(token):
    loaded = load_reset_token(token)
    if loaded is None:
        flash("Invalid or expired token.")
        return redirect(url_for('main.login'))

    email, fingerprint = loaded
    user = find_by_email(email)
    if not user:
        flash("No user found.")
        return redirect(url_for('main.login'))
    if not reset_token_matches(user, fingerprint):
        flash("Invalid or expired token.")
        return redirect(url_for('main.login'))

    if request.method == 'POST':
        new_password = request.form.get('new_password', '')
        if not new_password:
            flash("Password cannot be empty.")
            return render_template('reset_password_token.html', email=email, token=token)
        set_password(user, hash_password(new_password))
        current_app.logger.info("User %s reset their password", user.id)
        flash("Password reset successful.")
        return redirect(url_for('main.login'))

    return render_template('reset_password_token.html', email=email, token=token)


# Tasks

@bp.route('/dashboard')
@login_required
def dashboard():
    try:
        user_tasks = tasks.list_for_user(g.user.id)
    except SQLAlchemyError:
        return _database_error("Error fetching tasks.")
    return render_template('dashboard.html', user=g.user, tasks=user_tasks)


@bp.route('/task', methods=['POST'])
@login_required
def add_task():
    try:
        task = tasks.create(g.user.id, request.form.get('task'))
    except tasks.TaskError as e:
        return e.message
    except SQLAlchemyError:
        return _database_error("Something went wrong while adding the task.")

    current_app.logger.info("User %s added task %s", g.user.id, task.id)
    return redirect(url_for('main.dashboard'))


@bp.route('/edit/<id>', methods=['GET', 'POST'])
@login_required
def edit_task(id):
    if request.method == 'GET':
        try:
            task = tasks.get_for_user(_task_id(id), g.user.id)
        except tasks.TaskError as e:
            return e.message
        except SQLAlchemyError:
            return _database_error("Task not found.")
        return render_template('edit_task.html', task=task)

    try:
        tasks.update(_task_id(id), g.user.id, request.form.get('task'))
    except tasks.TaskError as e:
        return e.message
    except SQLAlchemyError:
        return _database_error("Something went wrong while updating the task.")

    current_app.logger.info("User %s updated task %s", g.user.id, id)
    return redirect(url_for('main.dashboard'))


@bp.route('/delete/<id>', methods=['GET', 'POST'])
@login_required
def delete_task(id):
    try:
        tasks.delete(_task_id(id), g.user.id)
    except tasks.TaskError as e:
        return e.message
    except SQLAlchemyError:
        return _database_error("Something went wrong while deleting the task.")

    current_app.logger.info("User %s deleted task %s", g.user.id, id)
    return redirect(url_for('main.dashboard'))
