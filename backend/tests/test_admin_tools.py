import json

import pytest

from proctor_app import admin_tools
from proctor_app.core import database


@pytest.fixture(autouse=True)
def test_database(monkeypatch, engine, session_factory):
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(database, "SessionLocal", session_factory)


@pytest.fixture
def started(service):
    session = service.start_session("user-1", "quiz-1")
    service.log_violation(session.id, "tabSwitch")
    service.log_violation(session.id, "tabSwitch")
    return session.id


def test_init_db(capsys):
    assert admin_tools.main(["init-db"]) == 0
    assert "created" in capsys.readouterr().out


def test_no_active_sessions(capsys):
    assert admin_tools.main(["active"]) == 0
    assert "No active" in capsys.readouterr().out


def test_active_sessions(started, capsys):
    assert admin_tools.main(["active"]) == 0
    out = capsys.readouterr().out
    assert started in out
    assert "LOCKED" in out


def test_report(started, capsys):
    assert admin_tools.main(["report", "--session-id", started]) == 0
    out = capsys.readouterr().out
    assert "tabSwitch: 2" in out
    assert "Quiz was locked" in out


def test_report_json(started, capsys):
    assert admin_tools.main(["report", "--session-id", started, "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["session"]["id"] == started
    assert data["riskLevel"] == "high"


def test_report_unknown_session(capsys):
    assert admin_tools.main(["report", "--session-id", "nope"]) == 1
    assert "not found" in capsys.readouterr().out


def test_sweep(started, capsys):
    # FakeClock sits in the past, so every active session is older than an hour
    assert admin_tools.main(["sweep", "--max-age-minutes", "60"]) == 0
    out = capsys.readouterr().out
    assert "Terminated 1" in out
    assert started in out


def test_no_command(capsys):
    assert admin_tools.main([]) == 0
    assert "usage" in capsys.readouterr().out
