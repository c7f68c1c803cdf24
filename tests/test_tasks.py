import pytest

import tasks
from model import Task
from users import create_local


@pytest.fixture()
def owners(ctx):
    ann = create_local("Ann", "ann@x.com", None)
    bob = create_local("Bob", "bob@x.com", None)
    return ann.id, bob.id


def test_list_is_newest_first_and_per_user(owners):
    ann, bob = owners
    first = tasks.create(ann, "first")
    tasks.create(bob, "bob's")
    second = tasks.create(ann, "second")

    listed = tasks.list_for_user(ann)
    assert [t.id for t in listed] == [second.id, first.id]
    assert [t.text for t in tasks.list_for_user(bob)] == ["bob's"]


def test_create_sets_created_at(owners):
    ann, _ = owners
    task = tasks.create(ann, "Buy milk")
    assert tasks.get_for_user(task.id, ann).created_at is not None


def test_create_strips_text(owners):
    ann, _ = owners
    assert tasks.create(ann, "  Buy milk  ").text == "Buy milk"


@pytest.mark.parametrize("text", [None, "", "   ", "\n\t"])
def test_create_rejects_empty_text(owners, text):
    ann, _ = owners
    with pytest.raises(tasks.ValidationError) as exc:
        tasks.create(ann, text)
    assert exc.value.message == "Task cannot be empty."
    assert tasks.list_for_user(ann) == []


def test_get_for_user_hides_other_users_tasks(owners):
    ann, bob = owners
    task = tasks.create(ann, "private")
    with pytest.raises(tasks.TaskNotFound):
        tasks.get_for_user(task.id, bob)
    with pytest.raises(tasks.TaskNotFound):
        tasks.get_for_user(9999, ann)


def test_update(owners):
    ann, _ = owners
    task = tasks.create(ann, "old")
    tasks.update(task.id, ann, "new")
    assert tasks.get_for_user(task.id, ann).text == "new"


def test_update_validates_before_lookup(owners):
    ann, _ = owners
    with pytest.raises(tasks.ValidationError):
        tasks.update(9999, ann, " ")


def test_update_other_users_task_is_not_found(owners):
    ann, bob = owners
    task = tasks.create(ann, "mine")
    with pytest.raises(tasks.TaskNotFound):
        tasks.update(task.id, bob, "hijacked")
    assert tasks.get_for_user(task.id, ann).text == "mine"


def test_delete(owners):
    ann, _ = owners
    keep = tasks.create(ann, "keep")
    gone = tasks.create(ann, "gone")
    tasks.delete(gone.id, ann)
    assert [t.id for t in tasks.list_for_user(ann)] == [keep.id]


def test_delete_other_users_task_is_not_found(owners):
    ann, bob = owners
    task = tasks.create(ann, "mine")
    with pytest.raises(tasks.TaskNotFound):
        tasks.delete(task.id, bob)
    assert Task.query.count() == 1
