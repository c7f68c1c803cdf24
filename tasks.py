"""Task storage, always scoped to the owning user."""

from model import Task, db


class TaskError(Exception):
    message = "Something went wrong."

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(TaskError):
    message = "Task cannot be empty."


class TaskNotFound(TaskError):
    message = "Task not found."


def _clean(text):
    if not text or not text.strip():
        raise ValidationError()
    return text.strip()


def list_for_user(user_id):
    return Task.query.filter_by(user_id=user_id).order_by(Task.id.desc()).all()


def get_for_user(task_id, user_id):
    # Another user's task is reported exactly like a missing one.
    task = Task.query.filter_by(id=task_id, user_id=user_id).first()
    if task is None:
        raise TaskNotFound()
    return task


def create(user_id, text):
    task = Task(user_id=user_id, text=_clean(text))
    db.session.add(task)
    db.session.commit()
    return task


def update(task_id, user_id, text):
    text = _clean(text)
    task = get_for_user(task_id, user_id)
    task.text = text
    db.session.commit()
    return task


def delete(task_id, user_id):
    deleted = Task.query.filter_by(id=task_id, user_id=user_id).delete()
    if not deleted:
        db.session.rollback()
        raise TaskNotFound()
    db.session.commit()
