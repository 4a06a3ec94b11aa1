import io

import pytest

from student_manager.cli import console_main


@pytest.fixture
def env_file(tmp_path, monkeypatch):
    for key in ("DATABASE_URL", "DATABASE_USERNAME", "DATABASE_PASSWORD", "DATABASE_DRIVER", "DEBUG", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    path = tmp_path / "app.env"
    monkeypatch.setenv("STUDENT_MANAGER_ENV_FILE", str(path))
    return path


def test_console_stops_when_tables_cannot_be_created(env_file, capsys):
    env_file.write_text("APP_NAME=Registry\n", encoding="utf-8")

    assert console_main() == 1
    assert "Could not reach the database" in capsys.readouterr().out


def test_console_starts_against_configured_database(env_file, tmp_path, monkeypatch, capsys):
    database = (tmp_path / "students.db").as_posix()
    env_file.write_text(f"DATABASE_URL=sqlite:///{database}\n", encoding="utf-8")

    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    assert console_main() == 0
    assert "Goodbye!" in capsys.readouterr().out
