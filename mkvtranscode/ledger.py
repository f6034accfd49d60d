"""A plain-text record of the videos that have already been converted."""

from __future__ import annotations

from collections.abc import Iterable

LEDGER_PATH = "/var/tmp/converted_ledger.txt"


def _split_lines(data: bytes) -> Iterable[bytes]:
    lines = data.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    for line in lines:
        yield line[:-1] if line.endswith(b"\r") else line


def load_ledger(path: str = LEDGER_PATH) -> set[str]:
    """Return the entries in the ledger; an unreadable ledger is empty."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError:
        return set()
    entries = set()
    for line in _split_lines(data):
        try:
            entries.add(line.decode("utf-8"))
        except UnicodeDecodeError:
            continue
    return entries


def append_to_ledger(entry: str, path: str = LEDGER_PATH) -> None:
    """Add one entry to the ledger, creating it if needed."""
    try:
        with open(path, "a", encoding="utf-8", newline="\n") as handle:
            handle.write(f"{entry}\n")
    except OSError:
        pass


def save_ledger(ledger: Iterable[str], path: str = LEDGER_PATH) -> None:
    """Replace the ledger with the given entries."""
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as handle:
            handle.writelines(f"{entry}\n" for entry in ledger)
    except OSError:
        pass


def remove_from_ledger(entry: str, path: str = LEDGER_PATH) -> None:
    """Drop an entry from the ledger if it is there."""
    ledger = load_ledger(path)
    if entry in ledger:
        ledger.remove(entry)
        save_ledger(ledger, path)