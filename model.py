import secrets

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

def new_session_token():
    return secrets.token_hex(16)

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255))  # None for Google-only accounts
    # Copied into the session cookie; rotating it logs out every cookie issued before.
    session_token = db.Column(db.String(64), nullable=False, default=new_session_token)
    tasks = db.relationship('Task', backref='user', lazy=True)

    def __repr__(self):
        return f"<User {self.email}>"

class Task(db.Model):
    __tablename__ = "tasks"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    text = db.Column('task', db.Text, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    def __repr__(self):
        return f"<Task {self.id} user={self.user_id}>"
