"""
Tests for settings resolution.
"""
import json

from core.config import CONFIG_FILE_NAME, ENV_DATA_DIR, load_settings


def test_session_dir_wins(tmp_path, monkeypatch):
    monkeypatch.setenv(ENV_DATA_DIR, str(tmp_path / "env"))
    s = load_settings(str(tmp_path / "session"))
    assert s.data_dir == (tmp_path / "session").resolve()
    assert s.db_path == s.data_dir / "app.db"
    assert s.log_dir == s.data_dir / "logs"


def test_env_dir_used(tmp_path, monkeypatch):
    monkeypatch.setenv(ENV_DATA_DIR, str(tmp_path / "env"))
    s = load_settings()
    assert s.data_dir == (tmp_path / "env").resolve()
    assert s.data_dir.is_dir()


def test_persisted_settings_used(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_DATA_DIR, raising=False)
    monkeypatch.setattr("core.config._default_data_dir", lambda: tmp_path)
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps({"data_dir": str(tmp_path / "moved")}), encoding="utf-8")

    assert load_settings().data_dir == (tmp_path / "moved").resolve()


def test_corrupt_settings_fall_back_to_default(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_DATA_DIR, raising=False)
    monkeypatch.setattr("core.config._default_data_dir", lambda: tmp_path)
    (tmp_path / CONFIG_FILE_NAME).write_text("{broken", encoding="utf-8")

    assert load_settings().data_dir == tmp_path.resolve()
