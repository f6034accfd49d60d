"""Entry point: read the settings and start watching for videos."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .config import load_config
from .watcher import start_watch, start_watch_with_fallback


def start_transcoding_app(environ: Mapping[str, str] | None = None) -> None:
    """Load the configuration and run the matching watcher."""
    cfg = load_config(environ)

    print(f"🎯 Watching directory: {cfg.watch_dir}")
    print(f"📡 SMB mode: {str(cfg.is_smb).lower()}")
    print(f"🧵 Using {cfg.threads} threads")

    if cfg.is_smb:
        start_watch_with_fallback(cfg.watch_dir, cfg.threads)
    else:
        start_watch(cfg.watch_dir, cfg.threads)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the transcoder; settings come from the environment, not argv."""
    try:
        start_transcoding_app()
    except KeyboardInterrupt:
        return 130
    return 0