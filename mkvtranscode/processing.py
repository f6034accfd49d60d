"""Conversion of MKV files in a directory tree to MP4 with ffmpeg."""

from __future__ import annotations

import os
import shutil
import subprocess
import time
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path

from .gpu import NVENC, VAAPI, detect_gpu_from_devices
from .ledger import LEDGER_PATH, append_to_ledger, load_ledger

TEMP_DIR = "/tmp/video_convert_work"
VAAPI_DEVICE = "/dev/dri/renderD128"


def _walk_files(root: Path) -> Iterator[Path]:
    if root.is_file():
        yield root
        return
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            path = Path(dirpath) / name
            if path.is_file():
                yield path


def collect_files(watch_dir: str | os.PathLike[str]) -> tuple[dict[str, Path], dict[str, Path]]:
    """Map file stems to the .mkv and .srt files found under watch_dir."""
    mkv_files: dict[str, Path] = {}
    srt_files: dict[str, Path] = {}
    for path in _walk_files(Path(watch_dir)):
        if path.suffix == ".mkv":
            mkv_files[path.stem] = path
        elif path.suffix == ".srt":
            srt_files[path.stem] = path
    return mkv_files, srt_files


def build_ffmpeg_command(
    gpu_type: str,
    temp_input: str | os.PathLike[str],
    output_file: str | os.PathLike[str],
    temp_srt: str | os.PathLike[str] | None = None,
) -> list[str]:
    """Return the ffmpeg argument list for one conversion."""
    command = ["ffmpeg", "-y"]

    if gpu_type == NVENC:
        command += ["-hwaccel", "cuda"]
    elif gpu_type == VAAPI:
        command += ["-hwaccel", "vaapi", "-vaapi_device", VAAPI_DEVICE]
    command += ["-i", os.fspath(temp_input)]

    if temp_srt is not None:
        command += ["-f", "srt", "-i", os.fspath(temp_srt)]

    command += ["-map", "0:v:0", "-map", "0:a?"]
    if temp_srt is not None:
        command += ["-map", "1:s:0"]

    if gpu_type == NVENC:
        command += ["-c:v", "h264_nvenc"]
    elif gpu_type == VAAPI:
        command += ["-vf", "format=nv12,hwupload", "-c:v", "h264_vaapi"]
    else:
        command += ["-c:v", "libx264"]

    if temp_srt is not None:
        command += ["-c:s", "mov_text", "-metadata:s:s:0", "language=eng"]

    command += [
        "-c:a", "aac",
        "-b:a", "128k",
        "-profile:v", "main",
        "-level:v", "4.0",
        "-movflags", "+faststart",
        os.fspath(output_file),
    ]
    return command


def _convert(
    base: str,
    input_file: Path,
    srt_file: Path | None,
    gpu_type: str,
    ledger: set[str],
    ledger_path: str,
    temp_dir: Path,
) -> None:
    if base in ledger:
        print(f"✅ Skipped (already converted): {base}")
        return

    temp_input = temp_dir / input_file.name
    try:
        shutil.copyfile(input_file, temp_input)
    except OSError as exc:
        print(f"❌ Failed to copy to temp: {exc}")
        return

    output_file = input_file.with_suffix(".mp4")
    if output_file.exists():
        print(f"🟡 Already exists: {str(output_file)!r}")
        append_to_ledger(base, ledger_path)
        return

    log_file = output_file.with_suffix(".log")
    stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"\n[{stamp}] 🎬 Converting: {str(input_file)!r}")
    start = time.monotonic()

    if gpu_type not in (NVENC, VAAPI):
        print("⚠️ GPU not available or unsupported, falling back to CPU encoding.")

    temp_srt = None
    if srt_file is not None:
        temp_srt = temp_dir / srt_file.name
        try:
            shutil.copyfile(srt_file, temp_srt)
        except OSError as exc:
            print(f"❌ Failed to copy subtitle to temp: {exc}")
            return
        print(f"💬 Subtitle copied to temp: {str(temp_srt)!r}")
    else:
        print(f"🕳️ No subtitle found for: {str(input_file)!r}")

    command = build_ffmpeg_command(gpu_type, temp_input, output_file, temp_srt)
    print(f"🛠️ Running ffmpeg command: {' '.join(command)}")

    try:
        process = subprocess.Popen(command)
    except OSError as exc:
        print(f"💥 Failed to spawn ffmpeg: {exc}")
        return

    print(f"🚀 PID: {process.pid}")
    try:
        status = process.wait()
    except OSError as exc:
        print(f"💥 Failed to wait on ffmpeg: {exc}")
        return
    if status != 0:
        print(f"💥 ffmpeg exited with error: exit status {status}")
        print(f"📄 Check log file: {log_file}")
        return

    print(f"🏁 Done {base} in {time.monotonic() - start:.2f}s")

    converted = input_file.with_name(f"{input_file.stem}.converted.mp4")
    try:
        shutil.copyfile(output_file, converted)
    except OSError as exc:
        print(f"⚠️ Failed to copy converted.mp4: {exc}")
    else:
        print(f"📝 Copied from {output_file} to {converted}")

    append_to_ledger(base, ledger_path)


def process_directory(
    watch_dir: str | os.PathLike[str],
    threads: int | None = None,
    ledger_path: str = LEDGER_PATH,
    temp_dir: str | os.PathLike[str] = TEMP_DIR,
) -> None:
    """Convert every MKV under watch_dir that the ledger does not list yet."""
    mkv_files, srt_files = collect_files(watch_dir)
    ledger = load_ledger(ledger_path)
    gpu_type = detect_gpu_from_devices()

    work_dir = Path(temp_dir)
    try:
        work_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass

    def job(item: tuple[str, Path]) -> None:
        base, input_file = item
        _convert(base, input_file, srt_files.get(base), gpu_type, ledger, ledger_path, work_dir)

    with ThreadPoolExecutor(max_workers=threads or None) as pool:
        list(pool.map(job, mkv_files.items()))