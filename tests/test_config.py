import os

import pytest

from mkvtranscode.config import DEFAULT_WATCH_DIR, AppConfig, load_config


def test_load_config_defaults():
    cfg = load_config({})
    assert cfg.watch_dir == DEFAULT_WATCH_DIR
    assert cfg.watch_dir == "/mnt/smb/Test-transcoding"
    assert cfg.is_smb is False
    assert cfg.threads >= 1


def test_load_config_with_env_vars():
    cfg = load_config({"WATCH_DIR": "/custom/dir", "IS_SMB": "true", "THREADS": "4"})
    assert cfg == AppConfig(watch_dir="/custom/dir", is_smb=True, threads=4)


def test_app_config_parsing():
    cfg = load_config({"WATCH_DIR": "/tmp/test-dir", "IS_SMB": "true", "THREADS": "3"})
    assert cfg.watch_dir == "/tmp/test-dir"
    assert cfg.is_smb is True
    assert cfg.threads == 3


def test_threads_fallback_on_invalid_value():
    cfg = load_config({"THREADS": "not_a_number"})
    assert cfg.threads >= 1


@pytest.mark.parametrize("value", ["not_a_number", "-2", "", "3.5", " 4"])
def test_threads_fallback_uses_half_cpu_count(monkeypatch, value):
    monkeypatch.setattr(os, "cpu_count", lambda: 8)
    assert load_config({"THREADS": value}).threads == 4


def test_threads_fallback_never_below_one(monkeypatch):
    monkeypatch.setattr(os, "cpu_count", lambda: 1)
    assert load_config({}).threads == 1


def test_threads_accepts_plus_sign():
    assert load_config({"THREADS": "+6"}).threads == 6


def test_is_smb_case_insensitive():
    assert load_config({"IS_SMB": "TrUe"}).is_smb is True
    assert load_config({"IS_SMB": "FALSE"}).is_smb is False
    assert load_config({"IS_SMB": "yes"}).is_smb is False


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("WATCH_DIR", "/from/env")
    monkeypatch.setenv("IS_SMB", "true")
    monkeypatch.setenv("THREADS", "2")
    cfg = load_config()
    assert cfg == AppConfig(watch_dir="/from/env", is_smb=True, threads=2)