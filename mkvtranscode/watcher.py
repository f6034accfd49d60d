"""Watching a directory and converting new videos as they appear."""

from __future__ import annotations

import errno
import os
import threading
import time

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_MODIFIED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .processing import process_directory


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, watch_dir: str, threads: int | None) -> None:
        super().__init__()
        self._watch_dir = watch_dir
        self._threads = threads

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type in (EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED):
            threading.Thread(
                target=process_directory,
                args=(self._watch_dir, self._threads),
                daemon=True,
            ).start()


def start_watch(watch_dir: str, threads: int | None = None) -> None:
    """Process watch_dir whenever something under it is created or modified.

    Runs until interrupted.
    """
    print(f"🕵️ Starting watcher on: {watch_dir}")
    if not os.path.isdir(watch_dir):
        raise FileNotFoundError(errno.ENOENT, "Failed to watch directory", watch_dir)

    observer = Observer()
    observer.schedule(_ChangeHandler(watch_dir, threads), watch_dir, recursive=True)
    observer.start()
    try:
        while observer.is_alive():
            observer.join(1)
    finally:
        observer.stop()
        observer.join()


def start_watch_with_fallback(
    watch_dir: str,
    threads: int | None = None,
    interval: float = 30,
    max_iterations: int | None = None,
) -> int:
    """Process watch_dir, then sleep interval seconds, repeatedly.

    Runs forever unless max_iterations is given; returns the number of passes.
    """
    print(f"🔁 SMB mode detected — using polling fallback every {interval:g} seconds")
    passes = 0
    while True:
        process_directory(watch_dir, threads)
        passes += 1
        if max_iterations is not None and passes >= max_iterations:
            return passes
        time.sleep(interval)