import pytest

from mkvtranscode.app import main, start_transcoding_app
from mkvtranscode.config import load_config


def test_start_transcoding_app_config_parsing():
    cfg = load_config({"WATCH_DIR": "/tmp/test-dir", "IS_SMB": "true", "THREADS": "3"})
    assert cfg.watch_dir == "/tmp/test-dir"
    assert cfg.is_smb is True
    assert cfg.threads == 3


def test_start_transcoding_app_reports_settings_and_missing_dir(tmp_path, capsys):
    missing = str(tmp_path / "absent")
    with pytest.raises(FileNotFoundError):
        start_transcoding_app({"WATCH_DIR": missing, "IS_SMB": "false", "THREADS": "2"})
    out = capsys.readouterr().out
    assert f"🎯 Watching directory: {missing}" in out
    assert "📡 SMB mode: false" in out
    assert "🧵 Using 2 threads" in out


def test_main_reads_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("WATCH_DIR", str(tmp_path / "absent"))
    monkeypatch.setenv("IS_SMB", "FALSE")
    monkeypatch.setenv("THREADS", "1")
    with pytest.raises(FileNotFoundError):
        main([])