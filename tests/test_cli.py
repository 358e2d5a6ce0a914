"""Tests for tasktrack_cli/cli.py — command dispatch through click."""

import json

import httpx
import pytest
from click.testing import CliRunner

import tasktrack_cli.cli as cli_module
from tasktrack.tasks import get_all_tasks, get_task_by_id
from tasktrack_cli.cli import cli
from tasktrack_cli.form import FormResult


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _run(runner, *args, **kwargs):
    return runner.invoke(cli, list(args), obj={}, catch_exceptions=False, **kwargs)


def test_no_command_lists_commands(runner, db_file):
    result = _run(runner)
    assert result.exit_code == 1
    assert "you must enter a command" in result.output
    for name in ("list", "add", "delete-all", "download"):
        assert name in result.output


def test_missing_db_file(runner):
    result = _run(runner, "list")
    assert result.exit_code == 1
    assert "DB_FILE is not defined" in result.output


def test_db_file_option(runner, tmp_path):
    path = tmp_path / "other.json"
    result = _run(runner, "--db-file", str(path), "add", "Option task")
    assert result.exit_code == 0
    assert json.loads(path.read_text(encoding="utf-8"))[0]["title"] == "Option task"


def test_list(runner, store):
    result = _run(runner, "list")
    assert result.exit_code == 0
    assert "Write report" in result.output
    assert "Buy groceries" in result.output


def test_list_empty(runner, db_file):
    result = _run(runner, "list")
    assert result.exit_code == 0
    assert "there is not any task" in result.output


def test_list_json(runner, store):
    result = _run(runner, "list", "--json")
    assert json.loads(result.output)[2] == {"id": 5, "title": "Call the bank", "completed": False}


def test_list_corrupt_store(runner, db_file):
    db_file.parent.mkdir(parents=True)
    db_file.write_text("nope", encoding="utf-8")
    result = _run(runner, "list")
    assert result.exit_code == 1
    assert "Syntax error in DB file" in result.output


def test_add_inline(runner, store):
    result = _run(runner, "add", "Plan", "the", "trip", "--completed")
    assert result.exit_code == 0
    assert "new task saved successfully" in result.output
    assert get_task_by_id(6).title == "Plan the trip"
    assert get_task_by_id(6).completed is True


def test_add_short_title(runner, db_file):
    result = _run(runner, "add", "ab")
    assert result.exit_code == 1
    assert "at least 3 characters" in result.output
    assert get_all_tasks() == []


def test_add_duplicate(runner, store):
    result = _run(runner, "add", "Write report")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_add_uses_form_without_title(runner, db_file, monkeypatch):
    calls = []

    def fake_prompt(heading, title="", completed=False):
        calls.append((heading, title, completed))
        return FormResult(title="From the form", completed=True)

    monkeypatch.setattr(cli_module, "prompt_task", fake_prompt)
    result = _run(runner, "add")
    assert result.exit_code == 0
    assert calls == [("New task", "", False)]
    assert get_task_by_id(1).title == "From the form"


def test_add_form_cancelled(runner, db_file, monkeypatch):
    monkeypatch.setattr(cli_module, "prompt_task", lambda *a, **k: None)
    result = _run(runner, "add")
    assert result.exit_code == 0
    assert "cancelled" in result.output
    assert get_all_tasks() == []


def test_delete(runner, store):
    result = _run(runner, "delete", "2")
    assert result.exit_code == 0
    assert get_task_by_id(2) is None


def test_delete_not_found(runner, store):
    before = store.read_text(encoding="utf-8")
    result = _run(runner, "delete", "42")
    assert result.exit_code == 1
    assert "task 42 not found" in result.output
    assert store.read_text(encoding="utf-8") == before


@pytest.mark.parametrize("bad_id", ["abc", "0", "-1"])
def test_delete_malformed_id(runner, store, bad_id):
    result = runner.invoke(cli, ["delete", "--", bad_id], obj={})
    assert result.exit_code == 2


def test_delete_all_confirmed(runner, store):
    result = _run(runner, "delete-all", input="y\n")
    assert result.exit_code == 0
    assert "3 task(s) deleted" in result.output
    assert get_all_tasks() == []


def test_delete_all_declined(runner, store):
    result = runner.invoke(cli, ["delete-all"], obj={}, input="n\n")
    assert result.exit_code == 1
    assert len(get_all_tasks()) == 3


def test_delete_all_yes(runner, store):
    result = _run(runner, "delete-all", "--yes")
    assert result.exit_code == 0
    assert get_all_tasks() == []


def test_edit_with_options(runner, store):
    result = _run(runner, "edit", "1", "--title", "Write final report", "--completed")
    assert result.exit_code == 0
    assert "task 1 updated" in result.output
    task = get_task_by_id(1)
    assert (task.title, task.completed) == ("Write final report", True)


def test_edit_strips_title(runner, store):
    result = _run(runner, "edit", "1", "--title", "  ab  ")
    assert result.exit_code == 1
    assert get_task_by_id(1).title == "Write report"

    _run(runner, "edit", "1", "--title", "  Write summary  ")
    assert get_task_by_id(1).title == "Write summary"


def test_edit_pending(runner, store):
    _run(runner, "edit", "2", "--pending")
    assert get_task_by_id(2).completed is False
    assert get_task_by_id(2).title == "Buy groceries"


def test_edit_not_found(runner, store):
    result = _run(runner, "edit", "9", "--title", "Whatever")
    assert result.exit_code == 1
    assert "Task not found: 9" in result.output


def test_edit_form_prefilled(runner, store, monkeypatch):
    calls = []

    def fake_prompt(heading, title="", completed=False):
        calls.append((heading, title, completed))
        return FormResult(title="Groceries and wine", completed=False)

    monkeypatch.setattr(cli_module, "prompt_task", fake_prompt)
    result = _run(runner, "edit", "2")
    assert result.exit_code == 0
    assert calls == [("Edit task 2", "Buy groceries", True)]
    assert get_task_by_id(2).title == "Groceries and wine"


def test_edit_form_missing_task(runner, store, monkeypatch):
    monkeypatch.setattr(cli_module, "prompt_task", lambda *a, **k: pytest.fail("form opened"))
    result = _run(runner, "edit", "77")
    assert result.exit_code == 1
    assert "task 77 not found" in result.output


def test_export_and_import(runner, store, tmp_path, monkeypatch):
    dest = tmp_path / "backup.csv"
    result = _run(runner, "export", str(dest))
    assert result.exit_code == 0
    assert "3 task(s) exported" in result.output

    fresh = tmp_path / "fresh.json"
    monkeypatch.setenv("DB_FILE", str(fresh))
    result = _run(runner, "import", str(dest))
    assert result.exit_code == 0
    assert "3 task(s) imported" in result.output
    assert [t.title for t in get_all_tasks()] == ["Write report", "Buy groceries", "Call the bank"]


def test_import_reports_skipped(runner, store, tmp_path):
    src = tmp_path / "in.json"
    src.write_text(json.dumps([{"title": "Write report"}]), encoding="utf-8")
    result = _run(runner, "import", str(src))
    assert result.exit_code == 0
    assert "no new task imported" in result.output
    assert "skipped 'Write report'" in result.output


def test_export_bad_format(runner, store, tmp_path):
    result = _run(runner, "export", str(tmp_path / "out.txt"))
    assert result.exit_code == 1
    assert "Cannot tell the format" in result.output


def test_download(runner, db_file, monkeypatch):
    todos = [{"userId": 1, "id": 1, "title": "delectus aut autem", "completed": False}]
    real_client = httpx.Client

    def fake_client(*args, **kwargs):
        kwargs.pop("follow_redirects", None)
        kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(200, json=todos))
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", fake_client)
    result = _run(runner, "download", "https://example.test/todos", "--limit", "5")
    assert result.exit_code == 0
    assert "1 task(s) imported" in result.output
    assert get_task_by_id(1).title == "delectus aut autem"


def test_download_failure(runner, db_file, monkeypatch):
    real_client = httpx.Client

    def fake_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(404))
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", fake_client)
    result = _run(runner, "download", "https://example.test/todos")
    assert result.exit_code == 1
    assert "HTTP 404" in result.output
