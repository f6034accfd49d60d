"""Application settings read from the environment."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_WATCH_DIR = "/mnt/smb/Test-transcoding"

_UNSIGNED = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class AppConfig:
    """Where to look for videos, how to watch, and how many workers to use."""

    watch_dir: str
    is_smb: bool
    threads: int


def _default_threads() -> int:
    return max(1, (os.cpu_count() or 1) // 2)


def _parse_threads(value: str | None) -> int | None:
    if value is None or not _UNSIGNED.fullmatch(value):
        return None
    return int(value)


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """Build an AppConfig from WATCH_DIR, IS_SMB and THREADS.

    Missing or unparsable values fall back to their defaults; THREADS
    defaults to half the CPU count, at least one.
    """
    env = os.environ if environ is None else environ
    watch_dir = env.get("WATCH_DIR", DEFAULT_WATCH_DIR)
    is_smb = env.get("IS_SMB", "false").lower() == "true"
    threads = _parse_threads(env.get("THREADS"))
    if threads is None:
        threads = _default_threads()
    return AppConfig(watch_dir=watch_dir, is_smb=is_smb, threads=threads)