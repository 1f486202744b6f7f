"""
CLI smoke tests through typer's CliRunner.

Every test gets its own database and session directory via environment
variables, exactly as a user would configure the installed command.
"""

import pytest
from typer.testing import CliRunner

from wellness_chat import __version__
from wellness_chat.adapters.cli.main import app
from wellness_chat.adapters.cli.session import Session, load_session, save_session

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path):
    monkeypatch.setenv("WELLNESS_DB_PATH", str(tmp_path / "cli.db"))
    monkeypatch.setenv("WELLNESS_SESSION_DIR", str(tmp_path / "session"))
    monkeypatch.setenv("WELLNESS_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("COLUMNS", "200")
    return tmp_path


def register(name="Ana", email="ana@example.com", *extra):
    return runner.invoke(app, ["register", "--name", name, "--email", email, *extra])


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_is_repeatable():
    assert runner.invoke(app, ["init"]).exit_code == 0
    assert runner.invoke(app, ["init"]).exit_code == 0


def test_register_selects_user(cli_env):
    result = register()

    assert result.exit_code == 0, result.output
    assert "Profile created" in result.output
    assert load_session(cli_env / "session") == Session(user_id=1, name="Ana")
    assert "user_id=1" in runner.invoke(app, ["whoami"]).output


def test_duplicate_registration_fails():
    register()
    result = register("Other")

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_say_records_and_replies():
    register()
    result = runner.invoke(app, ["say", "I ran for 30 minutes and drank 500ml of water"])

    assert result.exit_code == 0, result.output
    assert "running for 30 minutes" in result.output
    assert "500ml of water" in result.output

    today = runner.invoke(app, ["history"])
    assert "running, 30 min" in today.output
    assert "500ml water" in today.output


def test_say_requires_a_selected_user():
    result = runner.invoke(app, ["say", "I ran for 30 minutes"])

    assert result.exit_code == 1
    assert "No user selected" in result.output


def test_use_unknown_user():
    result = runner.invoke(app, ["use", "42"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_use_switches_user(cli_env):
    register()
    register("Bo", "bo@example.com")

    result = runner.invoke(app, ["use", "1"])

    assert result.exit_code == 0
    assert load_session(cli_env / "session").user_id == 1


def test_recommend_then_mark_read():
    register()
    assert runner.invoke(app, ["recommend"]).exit_code == 0

    listed = runner.invoke(app, ["recommendations", "--unread"])
    assert "Exercise" in listed.output

    marked = runner.invoke(app, ["mark-read", "1"])
    assert marked.exit_code == 0
    assert "Start Regular Exercise" in marked.output
    assert "No recommendations" in runner.invoke(app, ["recommendations", "--unread"]).output


def test_mark_read_unknown():
    register()
    result = runner.invoke(app, ["mark-read", "99"])

    assert result.exit_code == 1


def test_profile_update():
    register()
    result = runner.invoke(app, ["profile", "--goals", "Run a 5k", "--complete-onboarding"])

    assert result.exit_code == 0, result.output
    assert "Run a 5k" in result.output
    assert "complete" in result.output


def test_profile_rejects_bad_activity_level():
    register()
    result = runner.invoke(app, ["profile", "--activity-level", "couch"])

    assert result.exit_code == 1
    assert "Invalid input" in result.output


def test_messages_shows_both_sides():
    register()
    runner.invoke(app, ["say", "I slept for 8 hours"])

    result = runner.invoke(app, ["messages", "-n", "5"])

    assert "I slept for 8 hours" in result.output
    assert "system" in result.output


def test_history_rejects_bad_date():
    register()
    result = runner.invoke(app, ["history", "--date", "10/03/2024"])

    assert result.exit_code == 2


def test_history_for_empty_day():
    register()
    result = runner.invoke(app, ["history", "--date", "2020-01-01"])

    assert result.exit_code == 0
    assert "Nothing recorded on 2020-01-01" in result.output


def test_session_file_roundtrip(tmp_path):
    save_session(tmp_path / "s", Session(user_id=3, name="Cy"))

    assert load_session(tmp_path / "s") == Session(user_id=3, name="Cy")
    assert load_session(tmp_path / "elsewhere") is None
    (tmp_path / "s" / "session.json").write_text("{broken", encoding="utf-8")
    assert load_session(tmp_path / "s") is None
