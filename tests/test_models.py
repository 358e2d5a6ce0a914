"""Tests for tasktrack/models.py — Task serialization."""

from tasktrack.models import Task


def test_task_defaults():
    t = Task()
    assert t.id == 0
    assert t.title == ""
    assert t.completed is False
    assert t.is_new


def test_task_from_dict():
    t = Task.from_dict({"id": 3, "title": "Water plants", "completed": True})
    assert t == Task(id=3, title="Water plants", completed=True)
    assert not t.is_new


def test_task_from_dict_ignores_unknown_keys():
    t = Task.from_dict({"userId": 1, "id": 7, "title": "delectus aut autem", "completed": False})
    assert t.to_dict() == {"id": 7, "title": "delectus aut autem", "completed": False}


def test_task_from_dict_missing_keys():
    t = Task.from_dict({"title": "Only a title"})
    assert t.id == 0
    assert t.completed is False


def test_task_to_dict_key_order():
    assert list(Task(id=1, title="abc").to_dict()) == ["id", "title", "completed"]


def test_task_from_dict_keeps_values_as_stored():
    t = Task.from_dict({"id": 2, "title": None, "completed": "false"})
    assert t.title is None
    assert t.completed == "false"
