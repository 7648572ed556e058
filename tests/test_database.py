import pytest

from app.config import DBSettings, Settings
from app.database import StorageError, build_url, init_db, ping
from app.main import run

DB = DBSettings(host="db.internal", port=5433, name="tasks", user="svc", password="p@ss")


def test_build_url():
    url = build_url(DB)
    assert url.drivername == "postgresql+psycopg2"
    assert url.host == "db.internal"
    assert url.port == 5433
    assert url.database == "tasks"
    assert url.username == "svc"
    assert url.password == "p@ss"
    assert "p@ss" not in repr(url)


def test_ping(engine):
    ping(engine)


def test_init_db_unreachable():
    with pytest.raises(StorageError, match="pinging"):
        init_db(DBSettings(host="127.0.0.1", port=1, name="tasks", user="svc", password="x"))


def test_run_exits_without_config(monkeypatch):
    for name in ("DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    with pytest.raises(SystemExit) as info:
        run()
    assert info.value.code == 1


def test_run_exits_when_database_unreachable(monkeypatch):
    env = {"DB_HOST": "127.0.0.1", "DB_PORT": "1", "DB_NAME": "tasks", "DB_USER": "svc", "DB_PASSWORD": "x"}
    for k, v in env.items():
        monkeypatch.setenv(k, v)
    assert Settings.from_env().db.port == 1
    with pytest.raises(SystemExit) as info:
        run()
    assert info.value.code == 1
